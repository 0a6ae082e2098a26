from dataclasses import dataclass, field, replace
from enum import StrEnum


class Formatting(StrEnum):
    pretty = "pretty"
    compact = "compact"


@dataclass(frozen=True, slots=True)
class Context:
    """
    Per-call configuration threaded through a serialize/deserialize call.
    """
    formatting: Formatting = Formatting.pretty
    """
    Output layout used when the document is encoded.
    """

    exclude: frozenset[str] = field(default_factory=frozenset)
    """
    Domain property names skipped at the current nesting level only.
    """

    def __post_init__(self) -> None:
        # accept any iterable of names, e.g. a list from the CLI
        if isinstance(self.exclude, str):
            object.__setattr__(self, "exclude", frozenset({self.exclude}))
        elif not isinstance(self.exclude, frozenset):
            object.__setattr__(self, "exclude", frozenset(self.exclude))

    def is_excluded(self, name: str) -> bool:
        return name in self.exclude

    def nested(self) -> "Context":
        """Context for a nested entity: same formatting, no exclusions."""
        return replace(self, exclude=frozenset())
