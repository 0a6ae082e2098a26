import logging
from datetime import datetime
from typing import Any

from rulemap.core.mapping.accessors import accessors_for
from rulemap.core.mapping.coercion import coerce, format_date
from rulemap.core.models.context import Context
from rulemap.core.models.entity import Serializable
from rulemap.core.models.rules import CollectionOf, Primitive, TypeDescriptor, rules_of
from rulemap.core.ports.name_converter import NameConverter


_SCALARS = (str, int, float, bool, list, tuple, dict)


class Normalizer:
    """
    Entity -> generic value tree.

    Walks the rules of an entity in declaration order and reads every
    property through its getter. The produced mapping keeps the same key
    order, with keys renamed by the NameConverter:

    - scalar value with a primitive rule    -> coerced to the declared kind
    - datetime                              -> wire timestamp string
    - nested entity                         -> nested mapping
    - list under a collection rule          -> list of converted items
    - anything else, including None         -> None
    """

    def __init__(self, name_converter: NameConverter) -> None:
        self._names = name_converter
        self._logger = logging.getLogger("core.mapping.normalizer")

    def normalize(self, obj: Serializable, context: Context) -> dict[str, Any]:
        cls = type(obj)
        accessors = accessors_for(cls)
        result: dict[str, Any] = {}

        for name, rule in rules_of(cls).items():
            if context.is_excluded(name):
                self._logger.debug(f"Skipping excluded property {cls.__name__}.{name}")
                continue

            value = accessors.get(obj, name)
            result[self._names.normalize(name)] = self._value(value, rule, context)

        return result

    def _value(self, value: Any, rule: TypeDescriptor, context: Context) -> Any:
        if value is not None and isinstance(value, _SCALARS) and isinstance(rule, Primitive):
            return coerce(value, rule.kind)

        if isinstance(value, datetime):
            return format_date(value)

        if isinstance(value, Serializable):
            return self.normalize(value, context.nested())

        if isinstance(value, (list, tuple)) and isinstance(rule, CollectionOf):
            return [self._item(item, context) for item in value]

        return None

    def _item(self, item: Any, context: Context) -> Any:
        if isinstance(item, Serializable):
            return self.normalize(item, context.nested())
        if isinstance(item, datetime):
            return format_date(item)
        return item
