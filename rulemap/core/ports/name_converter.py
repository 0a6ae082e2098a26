from typing import Protocol


class NameConverter(Protocol):
    """
    Maps property names between the domain model and the wire format.

    Implementations must be:
    - pure and deterministic
    - self-inverse on names that follow their convention, that is
      `denormalize(normalize(name)) == name`
    """

    def normalize(self, name: str) -> str:
        """Domain property name -> wire name."""

    def denormalize(self, name: str) -> str:
        """Wire name -> domain property name."""
