import importlib
import logging
from typing import Callable, TypeVar

from rulemap.core.models.rules import EntityTarget


T = TypeVar("T", bound=type)


class EntityRegistry:
    """
    Maps type identifiers to entity classes.

    Rules may reference nested entities by name instead of by class, which
    lets two modules declare entities that point at each other without
    import cycles. Names are resolved lazily, when a document actually
    needs them.

    A name is resolved in this order:
    - a name registered with `entity()` / `register()`
    - a dotted import path, e.g. "shop.models.Product"

    Registering the same name twice raises a RuntimeError.
    """

    def __init__(self) -> None:
        self._entities: dict[str, type] = {}
        self._logger = logging.getLogger("core.mapping.registry")

    def register(self, cls: type, name: str | None = None) -> type:
        key = name or cls.__name__
        if key in self._entities:
            raise RuntimeError(f"Entity already registered for '{key}'")

        self._entities[key] = cls
        return cls

    def entity(self, name: str | None = None) -> Callable[[T], T]:
        def decorator(cls: T) -> T:
            self.register(cls, name)
            return cls

        return decorator

    def resolve(self, target: EntityTarget) -> type | None:
        if isinstance(target, type):
            return target

        if target in self._entities:
            return self._entities[target]

        return self._import(target)

    def entities(self) -> dict[str, type]:
        return dict(self._entities)

    def _import(self, path: str) -> type | None:
        module_name, _, attr = path.rpartition(".")
        if not module_name or not attr or module_name.startswith("."):
            return None

        try:
            module = importlib.import_module(module_name)
        except (ImportError, TypeError, ValueError):
            self._logger.debug(f"Module '{module_name}' cannot be imported")
            return None

        found = getattr(module, attr, None)
        return found if isinstance(found, type) else None
