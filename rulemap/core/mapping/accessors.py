import inspect
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable

from rulemap.core.errors import MethodNotFoundError
from rulemap.core.models.rules import rules_of


Getter = Callable[[Any], Any]
Setter = Callable[[Any, Any], None]


@dataclass(frozen=True, slots=True)
class PropertyAccessor:
    """
    Read/write entry points for one declared property, bound to a class.
    `None` means the class does not offer that accessor.
    """
    getter: Getter | None
    setter: Setter | None
    adder: Setter | None


def _method(cls: type, name: str) -> Callable | None:
    attr = inspect.getattr_static(cls, name, None)
    if attr is None or isinstance(attr, property):
        return None
    return getattr(cls, name) if callable(getattr(cls, name)) else None


def _resolve_getter(cls: type, name: str) -> Getter | None:
    getter = _method(cls, f"get_{name}")
    if getter is not None:
        return lambda obj: getattr(obj, f"get_{name}")()

    # e.g. `is_ready()` declared under its own name
    attr = inspect.getattr_static(cls, name, None)
    if isinstance(attr, property) and attr.fget is not None:
        return lambda obj: getattr(obj, name)
    if _method(cls, name) is not None:
        return lambda obj: getattr(obj, name)()

    return None


def _resolve_setter(cls: type, name: str) -> Setter | None:
    if _method(cls, f"set_{name}") is not None:
        return lambda obj, value: getattr(obj, f"set_{name}")(value)

    attr = inspect.getattr_static(cls, name, None)
    if isinstance(attr, property) and attr.fset is not None:
        return lambda obj, value: setattr(obj, name, value)

    return None


def _resolve_adder(cls: type, name: str) -> Setter | None:
    if _method(cls, f"add_{name}") is not None:
        return lambda obj, value: getattr(obj, f"add_{name}")(value)
    return None


class AccessorTable:
    """
    Accessors of every declared property of one entity class.

    Method names are derived from the property names once, when the table
    is built; reads and writes afterwards are plain dictionary lookups.
    """

    def __init__(self, cls: type) -> None:
        self._cls = cls
        self._accessors: dict[str, PropertyAccessor] = {
            name: PropertyAccessor(
                getter=_resolve_getter(cls, name),
                setter=_resolve_setter(cls, name),
                adder=_resolve_adder(cls, name),
            )
            for name in rules_of(cls)
        }

    def get(self, obj: Any, name: str) -> Any:
        accessor = self._accessors.get(name)
        if accessor is None or accessor.getter is None:
            raise MethodNotFoundError(
                f"Method 'get_{name}' not found in class '{self._cls.__qualname__}'"
            )
        return accessor.getter(obj)

    def set(self, obj: Any, name: str, value: Any) -> None:
        accessor = self._accessors.get(name)
        if accessor is None or accessor.setter is None:
            raise MethodNotFoundError(
                f"Method 'set_{name}' not found in class '{self._cls.__qualname__}'"
            )
        accessor.setter(obj, value)

    def can_add(self, name: str) -> bool:
        accessor = self._accessors.get(name)
        return accessor is not None and accessor.adder is not None

    def add(self, obj: Any, name: str, item: Any) -> None:
        accessor = self._accessors.get(name)
        if accessor is None or accessor.adder is None:
            raise MethodNotFoundError(
                f"Method 'add_{name}' not found in class '{self._cls.__qualname__}'"
            )
        accessor.adder(obj, item)


@lru_cache(maxsize=None)
def accessors_for(cls: type) -> AccessorTable:
    return AccessorTable(cls)
