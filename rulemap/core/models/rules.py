from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from functools import lru_cache
from types import MappingProxyType
from typing import Any

from rulemap.core.errors import SerializerError


class PrimitiveKind(StrEnum):
    int = "int"
    bool = "bool"
    string = "string"
    float = "float"
    array = "array"


EntityTarget = type | str
"""
A nested entity is referenced either by its class or by a name that the
registry resolves at use time (registered name or dotted import path).
"""


@dataclass(frozen=True, slots=True)
class Primitive:
    kind: PrimitiveKind


@dataclass(frozen=True, slots=True)
class DateTime:
    pass


@dataclass(frozen=True, slots=True)
class NestedObject:
    target: EntityTarget


@dataclass(frozen=True, slots=True)
class CollectionOf:
    target: EntityTarget


TypeDescriptor = Primitive | DateTime | NestedObject | CollectionOf


_BUILTIN_KINDS: dict[type, PrimitiveKind] = {
    int: PrimitiveKind.int,
    bool: PrimitiveKind.bool,
    str: PrimitiveKind.string,
    float: PrimitiveKind.float,
    list: PrimitiveKind.array,
    dict: PrimitiveKind.array,
}


def _parse_target(raw: Any, owner: str) -> EntityTarget:
    if isinstance(raw, (type, str)):
        return raw
    raise SerializerError(f"Invalid entity reference {raw!r} in rules of '{owner}'")


def parse_rule(raw: Any, owner: str = "?") -> TypeDescriptor:
    """
    Turn one declared rule into its TypeDescriptor.

    Accepted spellings:
        PrimitiveKind / "int" / int ...       -> Primitive
        datetime / "datetime"                 -> DateTime
        SomeEntity / "SomeEntity"             -> NestedObject
        [SomeEntity] / ["SomeEntity"]         -> CollectionOf
    """
    if isinstance(raw, (Primitive, DateTime, NestedObject, CollectionOf)):
        return raw

    if isinstance(raw, PrimitiveKind):
        return Primitive(raw)

    if isinstance(raw, str):
        if raw in PrimitiveKind.__members__:
            return Primitive(PrimitiveKind(raw))
        if raw == "datetime":
            return DateTime()
        return NestedObject(raw)

    if isinstance(raw, type):
        if raw in _BUILTIN_KINDS:
            return Primitive(_BUILTIN_KINDS[raw])
        if issubclass(raw, datetime):
            return DateTime()
        return NestedObject(raw)

    if isinstance(raw, (list, tuple)) and len(raw) == 1:
        return CollectionOf(_parse_target(raw[0], owner))

    raise SerializerError(f"Invalid rule {raw!r} in rules of '{owner}'")


@lru_cache(maxsize=None)
def rules_of(cls: type) -> Mapping[str, TypeDescriptor]:
    """
    Parsed, read-only schema of an entity class, in declaration order.

    The declaration is parsed once per class; later calls share the
    same immutable mapping.
    """
    declared = cls.rules()
    return MappingProxyType({
        name: parse_rule(raw, cls.__qualname__)
        for name, raw in declared.items()
    })
