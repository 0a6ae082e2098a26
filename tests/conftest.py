import pytest

from rulemap.core.facade import Serializer
from rulemap.core.mapping.denormalizer import Denormalizer
from rulemap.core.mapping.normalizer import Normalizer
from rulemap.core.mapping.registry import EntityRegistry
from rulemap.core.naming.converters import IdentityConverter
from tests.fake.entities import Author, Photo


@pytest.fixture
def registry() -> EntityRegistry:
    registry = EntityRegistry()
    registry.register(Author)
    registry.register(Photo)
    return registry


@pytest.fixture
def normalizer() -> Normalizer:
    return Normalizer(IdentityConverter())


@pytest.fixture
def denormalizer(registry) -> Denormalizer:
    return Denormalizer(IdentityConverter(), registry)


@pytest.fixture
def serializer(registry) -> Serializer:
    return Serializer(IdentityConverter(), registry=registry)
