import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from rulemap.core.errors import ClassNotFoundError, ConversionError, SerializerError
from rulemap.core.mapping.accessors import AccessorTable, accessors_for
from rulemap.core.mapping.coercion import coerce, parse_date
from rulemap.core.mapping.registry import EntityRegistry
from rulemap.core.models.context import Context
from rulemap.core.models.entity import Serializable
from rulemap.core.models.rules import (
    CollectionOf,
    DateTime,
    EntityTarget,
    NestedObject,
    Primitive,
    rules_of,
)
from rulemap.core.ports.name_converter import NameConverter


VALID_BASES: tuple[type, ...] = (Serializable, datetime)


class Denormalizer:
    """
    Generic value tree -> entity.

    A fresh instance of the target class is created, then every key of
    the input mapping is visited in input order. Keys that are unknown to
    the target's rules, or excluded by the context, are dropped without
    error so that additive wire changes do not break older readers.

    The first failure aborts the whole call; the partially populated
    instance is discarded.
    """

    def __init__(self, name_converter: NameConverter, registry: EntityRegistry) -> None:
        self._names = name_converter
        self._registry = registry
        self._logger = logging.getLogger("core.mapping.denormalizer")

    def denormalize(self, data: Mapping[str, Any], cls: type, context: Context) -> Serializable:
        self._validate_class(cls)
        if not isinstance(data, Mapping):
            raise ConversionError(
                f"Class '{cls.__qualname__}' expects a mapping, got '{type(data).__name__}'"
            )

        obj = self._instantiate(cls)
        rules = rules_of(cls)
        accessors = accessors_for(cls)

        for key, value in data.items():
            name = self._names.denormalize(key)
            rule = rules.get(name)
            if rule is None:
                self._logger.debug(f"Dropping unknown key '{key}' for {cls.__name__}")
                continue
            if context.is_excluded(name):
                self._logger.debug(f"Skipping excluded property {cls.__name__}.{name}")
                continue

            if isinstance(rule, CollectionOf):
                self._collection(obj, accessors, name, rule, value, context)
                continue

            if value is not None:
                if isinstance(rule, Primitive):
                    value = coerce(value, rule.kind)
                elif isinstance(rule, DateTime):
                    value = parse_date(value)
                elif isinstance(rule, NestedObject):
                    value = self._nested(name, rule, value, context)

            accessors.set(obj, name, value)

        return obj

    def _nested(self, name: str, rule: NestedObject, value: Any, context: Context) -> Serializable:
        if not isinstance(value, Mapping):
            raise ConversionError(
                f"The '{name}' property is declared as '{_label(rule.target)}', "
                f"but value is '{type(value).__name__}'"
            )
        target = self._resolve(rule.target)
        return self.denormalize(value, target, context.nested())

    def _collection(
        self,
        obj: Serializable,
        accessors: AccessorTable,
        name: str,
        rule: CollectionOf,
        value: Any,
        context: Context
    ) -> None:
        if not isinstance(value, (list, tuple)):
            raise ConversionError(
                f"The '{name}' property is declared as array of '{_label(rule.target)}', "
                f"but value is '{type(value).__name__}'"
            )

        target = self._resolve(rule.target)
        items = [
            self.denormalize(item, target, context.nested()) if isinstance(item, Mapping) else item
            for item in value
        ]

        if accessors.can_add(name):
            self._logger.debug(f"Appending {len(items)} item(s) to {type(obj).__name__}.{name}")
            for item in items:
                accessors.add(obj, name, item)
        else:
            accessors.set(obj, name, items)

    def _resolve(self, target: EntityTarget) -> type:
        cls = self._registry.resolve(target)
        if cls is None:
            raise ClassNotFoundError(f"Class '{target}' not found")
        return cls

    @staticmethod
    def _validate_class(cls: Any) -> None:
        if not isinstance(cls, type) or not issubclass(cls, VALID_BASES):
            names = ", ".join(base.__name__ for base in VALID_BASES)
            raise SerializerError(f"Class '{_label(cls)}' must derive from any of '{names}'")

        if not issubclass(cls, Serializable):
            raise SerializerError(
                f"Class '{cls.__qualname__}' must derive from '{Serializable.__name__}'"
            )

    @staticmethod
    def _instantiate(cls: type) -> Serializable:
        try:
            return cls()
        except TypeError as ex:
            raise SerializerError(
                f"Class '{cls.__qualname__}' cannot be instantiated without arguments"
            ) from ex


def _label(target: Any) -> str:
    return target.__qualname__ if isinstance(target, type) else str(target)
