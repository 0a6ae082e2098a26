import logging
from typing import Any

from rulemap.core.errors import ClassNotFoundError, ConversionError, SerializerError
from rulemap.core.mapping.denormalizer import Denormalizer
from rulemap.core.mapping.normalizer import Normalizer
from rulemap.core.mapping.registry import EntityRegistry
from rulemap.core.models.context import Context
from rulemap.core.models.entity import Serializable
from rulemap.core.models.rules import EntityTarget
from rulemap.core.ports.codec import Codec
from rulemap.core.ports.name_converter import NameConverter
from rulemap.infra.json_codec import JsonCodec


class Serializer:
    """
    Entry point of the mapper: entity <-> wire document.

        serialize(entity)            -> document
        deserialize(document)        -> generic value tree
        deserialize(document, cls)   -> populated entity

    The codec turns value trees into documents (JSON by default); every
    low-level codec failure surfaces as a ConversionError.
    """

    def __init__(
        self,
        name_converter: NameConverter,
        registry: EntityRegistry | None = None,
        codec: Codec | None = None,
    ) -> None:
        self.registry = registry if registry is not None else EntityRegistry()
        self.codec = codec if codec is not None else JsonCodec()
        self._normalizer = Normalizer(name_converter)
        self._denormalizer = Denormalizer(name_converter, self.registry)
        self._logger = logging.getLogger("core.facade")

    def serialize(self, obj: Any, context: Context | None = None) -> str | bytes:
        if not isinstance(obj, Serializable):
            raise SerializerError(
                f"Class '{type(obj).__qualname__}' must derive from '{Serializable.__name__}'"
            )

        context = context or Context()
        tree = self._normalizer.normalize(obj, context)
        self._logger.debug(f"Encoding {type(obj).__name__} ({context.formatting})")
        return self.encode(tree, context)

    def encode(self, tree: Any, context: Context | None = None) -> str | bytes:
        """Encode a value tree that is already normalized."""
        context = context or Context()
        try:
            return self.codec.encode(tree, context.formatting)
        except self.codec.errors as ex:
            raise ConversionError(f"Unable to encode given data. Error is {ex}") from ex

    def deserialize(
        self,
        data: str | bytes,
        target: EntityTarget | None = None,
        context: Context | None = None
    ) -> Any:
        try:
            tree = self.codec.decode(data)
        except self.codec.errors as ex:
            raise ConversionError(f"Unable to decode given value. Error is {ex}") from ex

        if target is None:
            return tree

        cls = self.registry.resolve(target)
        if cls is None:
            raise ClassNotFoundError(f"Class '{target}' not found")

        return self._denormalizer.denormalize(tree, cls, context or Context())

    def normalize(self, obj: Serializable, context: Context | None = None) -> dict[str, Any]:
        """Value tree of an entity, without encoding it."""
        if not isinstance(obj, Serializable):
            raise SerializerError(
                f"Class '{type(obj).__qualname__}' must derive from '{Serializable.__name__}'"
            )
        return self._normalizer.normalize(obj, context or Context())

    def denormalize(
        self,
        tree: Any,
        target: EntityTarget,
        context: Context | None = None
    ) -> Serializable:
        """Entity built from an already decoded value tree."""
        cls = self.registry.resolve(target)
        if cls is None:
            raise ClassNotFoundError(f"Class '{target}' not found")
        return self._denormalizer.denormalize(tree, cls, context or Context())
