__version__ = "1.0.0"

from . import hdrs
from .formdata import FormDataBuilder
from .helpers import (
    CRLF,
    choose_boundary,
    content_disposition_header,
    guess_content_type,
    read_file_bytes,
)

__all__ = (
    "hdrs",
    # formdata
    "FormDataBuilder",
    # helpers
    "CRLF",
    "choose_boundary",
    "content_disposition_header",
    "guess_content_type",
    "read_file_bytes",
)
