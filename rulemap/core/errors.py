class RulemapError(RuntimeError):
    """Base class for every failure raised while mapping objects to wire documents."""


class SerializerError(RulemapError):
    """
    General contract violation: the object given to `serialize` is not
    serializable, or the target class of a deserialization is not one of
    the accepted base capabilities.
    """


class ClassNotFoundError(RulemapError):
    """A class referenced by name could not be resolved."""


class MethodNotFoundError(RulemapError):
    """A required getter, setter or appender is missing on an entity class."""


class ConversionError(RulemapError):
    """
    Raised when encoding or decoding fails, when a date cannot be
    formatted or parsed, or when a value does not have the shape its
    rule declares.
    """
