import json
from typing import Any

from rulemap.core.models.context import Formatting
from rulemap.core.ports.codec import Codec


class JsonCodec(Codec):
    """
    JSON implementation of the Codec interface.

    - pretty output is indented, compact output has no whitespace
    - NaN and Infinity are rejected, they have no JSON representation
    - accepts str or UTF-8 bytes on decode
    """
    errors = (TypeError, ValueError, RecursionError)

    def __init__(self, indent: int = 4, ensure_ascii: bool = True) -> None:
        self._indent = indent
        self._ensure_ascii = ensure_ascii

    def encode(self, value: Any, formatting: Formatting) -> str:
        if formatting == Formatting.compact:
            return json.dumps(
                value,
                separators=(",", ":"),
                ensure_ascii=self._ensure_ascii,
                allow_nan=False,
            )
        return json.dumps(
            value,
            indent=self._indent,
            ensure_ascii=self._ensure_ascii,
            allow_nan=False,
        )

    def decode(self, data: str | bytes) -> Any:
        return json.loads(data)
