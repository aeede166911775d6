"""Various helper functions"""

import mimetypes
import re
import sys
import uuid
from pathlib import Path
from typing import Dict, Final, Optional

from .log import internal_logger
from .typedefs import PathLike

__all__ = (
    "CRLF",
    "choose_boundary",
    "content_disposition_header",
    "guess_content_type",
    "read_file_bytes",
)

CRLF: Final[str] = "\r\n"
WIRE_ENCODING: Final[str] = "latin-1"
DEFAULT_CONTENT_TYPE: Final[str] = "application/octet-stream"

CHAR = {chr(i) for i in range(0, 128)}
CTL = {chr(i) for i in range(0, 32)} | {
    chr(127),
}
SEPARATORS = {
    "(",
    ")",
    "<",
    ">",
    "@",
    ",",
    ";",
    ":",
    "\\",
    '"',
    "/",
    "[",
    "]",
    "?",
    "=",
    "{",
    "}",
    " ",
    chr(9),
}
TOKEN = CHAR ^ CTL ^ SEPARATORS

# RFC 2046, section 5.1.1
_BOUNDARY_RE: Final[re.Pattern[str]] = re.compile(
    r"\A[0-9A-Za-z'()+_,\-./:=? ]{0,69}[0-9A-Za-z'()+_,\-./:=?]\Z"
)
_HEADER_BREAK_RE: Final[re.Pattern[str]] = re.compile(r"[\r\n]")

# HTML form submission escaping of name and filename parameters.
_PARAM_ESCAPES: Final[Dict[int, str]] = {
    ord('"'): "%22",
    ord("\r"): "%0D",
    ord("\n"): "%0A",
}


def choose_boundary() -> str:
    """Return a random 128-bit boundary token."""
    return uuid.uuid4().hex


def validate_boundary(boundary: str) -> str:
    """Check a caller supplied boundary and return it unchanged.

    A boundary is 1 to 70 ASCII characters taken from the RFC 2046
    ``bchars`` set and must not end with a space.
    """
    if not isinstance(boundary, str):
        raise TypeError(
            "boundary must be an instance of str. Got: %r" % (boundary,)
        )
    try:
        boundary.encode("ascii")
    except UnicodeEncodeError:
        raise ValueError("boundary should contain ASCII only chars") from None
    if _BOUNDARY_RE.match(boundary) is None:
        raise ValueError("boundary value contains invalid characters")
    return boundary


def to_wire(text: str, charset: str = "utf-8") -> str:
    """Encode text and map the octets one to one onto characters.

    The result only holds U+0000..U+00FF, so it can be joined with file
    content carried the same way and encoded back with latin-1 losslessly.
    """
    return text.encode(charset).decode(WIRE_ENCODING)


def has_header_break(value: str) -> bool:
    return _HEADER_BREAK_RE.search(value) is not None


def escape_param(value: str) -> str:
    return value.translate(_PARAM_ESCAPES)


def content_disposition_header(
    disptype: str,
    quote_fields: bool = True,
    params: Optional[Dict[str, str]] = None,
) -> str:
    """Render a ``Content-Disposition`` header value.

    disptype is a disposition type: inline, attachment, form-data.
    Should be valid extension token (see RFC 2183)

    quote_fields escapes quote, CR and LF in parameter values the way
    browsers do for form submissions. Otherwise values are inserted as is.

    params is a dict with disposition params.
    """
    if not disptype or not (TOKEN > set(disptype)):
        raise ValueError(f"bad content disposition type {disptype!r}")

    value = disptype
    if params:
        lparams = []
        for key, val in params.items():
            if not key or not (TOKEN > set(key)):
                raise ValueError(
                    f"bad content disposition parameter {key!r}={val!r}"
                )
            qval = escape_param(val) if quote_fields else val
            lparams.append((key, '"%s"' % qval))
        sparams = "; ".join("=".join(pair) for pair in lparams)
        value = "; ".join((value, sparams))
    return value


def guess_filename(path: PathLike) -> str:
    """Return the final segment of path."""
    return Path(path).name


def guess_content_type(filename: str) -> str:
    """Resolve a MIME type from a filename, never failing."""
    if sys.version_info >= (3, 13):
        guesser = mimetypes.guess_file_type
    else:
        guesser = mimetypes.guess_type
    content_type = guesser(filename)[0]
    if content_type is None:
        internal_logger.debug(
            "No content type known for %r, using %s", filename, DEFAULT_CONTENT_TYPE
        )
        content_type = DEFAULT_CONTENT_TYPE
    return content_type


def read_file_bytes(path: PathLike) -> bytes:
    """Read a whole file. OSError propagates to the caller."""
    return Path(path).read_bytes()
