"""HTTP Headers constants."""

from typing import Final

from multidict import istr

CONTENT_DISPOSITION: Final[str] = istr("Content-Disposition")
CONTENT_TYPE: Final[str] = istr("Content-Type")

MULTIPART_FORM_DATA: Final[str] = "multipart/form-data"
FORM_DATA: Final[str] = "form-data"
