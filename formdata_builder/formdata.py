from typing import Any, Iterator, List, Optional, Union

from multidict import CIMultiDict, CIMultiDictProxy

from . import hdrs
from .helpers import (
    CRLF,
    WIRE_ENCODING,
    choose_boundary,
    content_disposition_header,
    guess_content_type,
    guess_filename,
    has_header_break,
    read_file_bytes,
    to_wire,
    validate_boundary,
)
from .log import builder_logger
from .typedefs import (
    DEFAULT_JSON_ENCODER,
    Byteish,
    FileReader,
    JSONEncoder,
    MimeResolver,
    PathLike,
)

__all__ = ("FormDataBuilder",)


class FormDataBuilder:
    """Helper class for multipart/form-data body generation.

    Parts are rendered as they are added and kept in insertion order.
    The body is a wire string: every character stands for one octet, so
    binary file content survives the text assembly and
    get_body_bytes() returns the exact octets to send.

    An instance must not be mutated from several threads at once.
    """

    def __init__(
        self,
        *,
        boundary: Optional[str] = None,
        charset: str = "utf-8",
        quote_fields: bool = True,
        json_serializer: JSONEncoder = DEFAULT_JSON_ENCODER,
        mime_resolver: MimeResolver = guess_content_type,
        file_reader: FileReader = read_file_bytes,
    ) -> None:
        if boundary is None:
            boundary = choose_boundary()
        else:
            boundary = validate_boundary(boundary)
        self._boundary = boundary
        self._parts: List[str] = []
        self._crlf = CRLF
        self._charset = charset
        self._quote_fields = quote_fields
        self._json_serializer = json_serializer
        self._mime_resolver = mime_resolver
        self._file_reader = file_reader
        builder_logger.debug("Created form data builder, boundary=%s", boundary)

    @classmethod
    def from_file(
        cls, file_path: Optional[PathLike], **kwargs: Any
    ) -> "FormDataBuilder":
        """Create a builder holding a single file part read from file_path."""
        return cls(**kwargs).add_file_from_path(file_path)

    def __iter__(self) -> Iterator[str]:
        return iter(self._parts)

    def __len__(self) -> int:
        return len(self._parts)

    def __repr__(self) -> str:
        name = self.__class__.__name__
        return f"<{name} boundary={self._boundary!r} parts={len(self)}>"

    @property
    def boundary(self) -> str:
        return self._boundary

    @property
    def content_type(self) -> str:
        return f"{hdrs.MULTIPART_FORM_DATA}; boundary={self._boundary}"

    @property
    def headers(self) -> "CIMultiDictProxy[str]":
        return CIMultiDictProxy(CIMultiDict({hdrs.CONTENT_TYPE: self.content_type}))

    @property
    def size(self) -> int:
        """Size of the rendered body in octets."""
        # Wire characters are single octets.
        return len(self.get_body())

    def _render_part(self, headers: "CIMultiDict[str]", content: str) -> str:
        lines = [f"--{self._boundary}"]
        lines.extend(f"{k}: {v}" for k, v in headers.items())
        lines.append("")
        lines.append(content)
        return self._crlf.join(lines)

    def _disposition(self, **params: str) -> str:
        value = content_disposition_header(
            hdrs.FORM_DATA, quote_fields=self._quote_fields, params=params
        )
        return to_wire(value, self._charset)

    def add_field(
        self, name: str, value: Union[str, Byteish, None]
    ) -> "FormDataBuilder":
        """Add a text part.

        Empty or missing values are skipped without adding a part.
        """
        if not isinstance(name, str):
            raise TypeError("name must be an instance of str. Got: %r" % (name,))
        if not value:
            builder_logger.debug("Skipping field %r with empty value", name)
            return self

        if isinstance(value, str):
            content = to_wire(value, self._charset)
        elif isinstance(value, (bytes, bytearray, memoryview)):
            content = bytes(value).decode(WIRE_ENCODING)
        else:
            raise TypeError(
                "value must be an instance of str or bytes. Got: %r" % (value,)
            )

        headers: CIMultiDict[str] = CIMultiDict()
        headers[hdrs.CONTENT_DISPOSITION] = self._disposition(name=name)
        self._parts.append(self._render_part(headers, content))
        return self

    def add_file(
        self, name: str, filename: str, mime: str, content: Union[str, Byteish]
    ) -> "FormDataBuilder":
        """Add a file part.

        The part is always added, even for empty content. Binary content
        is carried octet for octet; str content must already be a wire
        string (characters U+0000..U+00FF).
        """
        for arg_name, arg in (("name", name), ("filename", filename), ("mime", mime)):
            if not isinstance(arg, str):
                raise TypeError(
                    "%s must be an instance of str. Got: %r" % (arg_name, arg)
                )
        if has_header_break(mime):
            raise ValueError(f"mime must not contain CR or LF: {mime!r}")
        if not mime.isascii():
            raise ValueError(f"mime must contain ASCII only chars: {mime!r}")

        if isinstance(content, (bytes, bytearray, memoryview)):
            wire_content = bytes(content).decode(WIRE_ENCODING)
        elif isinstance(content, str):
            try:
                content.encode(WIRE_ENCODING)
            except UnicodeEncodeError:
                raise ValueError(
                    "str file content must only hold characters U+0000..U+00FF, "
                    "pass bytes instead"
                ) from None
            wire_content = content
        else:
            raise TypeError(
                "content must be an instance of bytes or str. Got: %r"
                % (type(content),)
            )

        headers: CIMultiDict[str] = CIMultiDict()
        headers[hdrs.CONTENT_DISPOSITION] = self._disposition(
            name=name, filename=filename
        )
        headers[hdrs.CONTENT_TYPE] = mime
        self._parts.append(self._render_part(headers, wire_content))
        builder_logger.debug(
            "Added file %r as field %r (%s, %d octets)",
            filename,
            name,
            mime,
            len(wire_content),
        )
        return self

    def add_file_from_path(self, file_path: Optional[PathLike]) -> "FormDataBuilder":
        """Add the file at file_path under the field name "file".

        Errors from reading the file propagate unchanged.
        """
        if not file_path:
            builder_logger.debug("Skipping file with empty path")
            return self

        raw = self._file_reader(file_path)
        filename = guess_filename(file_path)
        mime = self._mime_resolver(filename)
        return self.add_file("file", filename, mime, raw.decode(WIRE_ENCODING))

    def add_object(self, name: str, obj: Any) -> "FormDataBuilder":
        """Add obj serialized as compact JSON text, skipping None."""
        if obj is None:
            builder_logger.debug("Skipping object field %r with None value", name)
            return self

        try:
            text = self._json_serializer(obj)
        except Exception as exc:
            raise TypeError(
                "Can not serialize value type: %r\n value: %r" % (type(obj), obj)
            ) from exc
        return self.add_field(name, text)

    def get_body(self) -> str:
        """Render the accumulated parts.

        Returns an empty string when no part was added.
        """
        if not self._parts:
            return ""
        crlf = self._crlf
        return "".join(
            (crlf.join(self._parts), crlf, "--", self._boundary, "--", crlf)
        )

    def get_body_bytes(self) -> bytes:
        return self.get_body().encode(WIRE_ENCODING)

    def get_boundary(self) -> str:
        return self._boundary
