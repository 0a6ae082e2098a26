from typing import Protocol, Any

from rulemap.core.models.context import Formatting


class Codec(Protocol):
    """
    Defines the interface for turning a generic value tree into a wire
    document and back.

    Implementations must be:
    - deterministic
    - pure (no side effects)
    - explicit about failures: every low-level exception they may raise
      is listed in `errors`, so callers can translate it
    """

    errors: tuple[type[Exception], ...]

    def encode(self, value: Any, formatting: Formatting) -> str | bytes:
        """Encode a value tree made of dicts, lists and scalars."""

    def decode(self, data: str | bytes) -> Any:
        """Decode a wire document into a value tree."""
