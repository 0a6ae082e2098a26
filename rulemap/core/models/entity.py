from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any


class Serializable(ABC):
    """
    Capability shared by every domain entity the mapper can convert.

    An entity declares its wire schema through `rules()`: an ordered
    mapping from property name to rule. Values are read and written
    through accessors named after the property:

        get_<name>()       read the value (falls back to `<name>` itself,
                           either a method such as `is_ready()` or a property)
        set_<name>(value)  write the value (falls back to a property setter)
        add_<name>(item)   optional, appends one item of a collection

    Instances are created with no arguments during deserialization, so
    every constructor parameter must have a default.
    """

    @classmethod
    @abstractmethod
    def rules(cls) -> Mapping[str, Any]:
        ...
