import msgpack
from msgpack.exceptions import UnpackException
from typing import Any

from rulemap.core.models.context import Formatting
from rulemap.core.ports.codec import Codec


class MsgPackCodec(Codec):
    """
    MsgPack-based implementation of the Codec interface.

    - compact binary documents, formatting is ignored
    - same value tree as JSON: timestamps stay strings
    """
    errors = (TypeError, ValueError, OverflowError, UnpackException)

    def encode(self, value: Any, formatting: Formatting) -> bytes:
        return msgpack.packb(value, use_bin_type=True)

    def decode(self, data: str | bytes) -> Any:
        if isinstance(data, str):
            raise TypeError("MsgPack documents must be bytes")
        return msgpack.unpackb(data, raw=False)
