import functools
import json
import os
from typing import Any, Callable, Union

DEFAULT_JSON_ENCODER = functools.partial(json.dumps, separators=(",", ":"))

PathLike = Union[str, os.PathLike[str]]
Byteish = Union[bytes, bytearray, memoryview]

JSONEncoder = Callable[[Any], str]
MimeResolver = Callable[[str], str]
FileReader = Callable[[PathLike], bytes]
