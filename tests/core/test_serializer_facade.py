import json
import math
from datetime import datetime, timezone

import pytest

from rulemap.core.errors import ClassNotFoundError, ConversionError, SerializerError
from rulemap.core.facade import Serializer
from rulemap.core.models.context import Context, Formatting
from rulemap.core.naming.converters import IdentityConverter, SnakeCaseConverter
from rulemap.infra.msgpack_codec import MsgPackCodec
from tests.fake.entities import Album, Author, Gallery, Photo, Plain, Point, UploadedFile


@pytest.fixture
def album() -> Album:
    created = datetime(2024, 5, 1, 12, 30, 0, 250, tzinfo=timezone.utc)
    return Album(
        title="Holidays",
        created_at=created,
        author=Author("ada", verified=True),
        cover=Photo(url="https://cdn/cover.jpg", width=800, taken_at=created),
        photos=[Photo(url="https://cdn/1.jpg", width=640)],
        tags=["sea"],
    )


def test_serialize_point(serializer):
    text = serializer.serialize(Point(1, 2))

    assert json.loads(text) == {"x": 1.0, "y": 2.0}


def test_pretty_output_by_default(serializer):
    assert serializer.serialize(Point(1, 2)) == '{\n    "x": 1.0,\n    "y": 2.0\n}'


def test_compact_output(serializer):
    text = serializer.serialize(Point(1, 2), Context(formatting=Formatting.compact))

    assert text == '{"x":1.0,"y":2.0}'


def test_round_trip(serializer, album):
    text = serializer.serialize(album)

    assert serializer.deserialize(text, Album) == album


def test_round_trip_with_snake_case_names(registry):
    serializer = Serializer(SnakeCaseConverter(), registry=registry)
    file = UploadedFile(
        uuid="3f2a",
        size=10,
        image=False,
        uploaded=datetime(2021, 3, 4, 5, 6, 7, tzinfo=timezone.utc),
    )

    text = serializer.serialize(file)

    assert '"datetime_uploaded": "2021-03-04T05:06:07.000000Z"' in text
    assert serializer.deserialize(text, UploadedFile) == file


def test_serialize_requires_serializable(serializer):
    with pytest.raises(SerializerError):
        serializer.serialize(Plain())


def test_unencodable_value(serializer):
    with pytest.raises(ConversionError):
        serializer.serialize(Point(math.nan, 0))


def test_schemaless_deserialize(serializer):
    assert serializer.deserialize('{"a": [1, 2], "b": null}') == {"a": [1, 2], "b": None}


def test_deserialize_bytes(serializer):
    assert serializer.deserialize(b'{"x": 3, "y": 4}', Point) == Point(3.0, 4.0)


def test_deserialize_invalid_json(serializer):
    with pytest.raises(ConversionError):
        serializer.deserialize("{not json", Point)


def test_deserialize_unknown_class(serializer):
    with pytest.raises(ClassNotFoundError):
        serializer.deserialize('{"x": 1}', "NotAClass")


def test_deserialize_class_without_capability(serializer):
    with pytest.raises(SerializerError):
        serializer.deserialize('"text"', "builtins.str")


def test_deserialize_registered_name(serializer):
    assert serializer.deserialize('{"name": "ada"}', "Author") == Author("ada")


def test_deserialize_non_mapping_document(serializer):
    with pytest.raises(ConversionError):
        serializer.deserialize("[1, 2]", Point)


def test_collection_type_mismatch(serializer):
    with pytest.raises(ConversionError):
        serializer.deserialize('{"items": "not-an-array"}', Gallery)


def test_exclusion_both_ways(serializer, album):
    context = Context(exclude={"tags"})

    assert "tags" not in json.loads(serializer.serialize(album, context))
    restored = serializer.deserialize(serializer.serialize(album), Album, context)
    assert restored.tags == []


def test_normalize_and_denormalize(serializer):
    tree = serializer.normalize(Point(5, 6))

    assert tree == {"x": 5.0, "y": 6.0}
    assert serializer.denormalize(tree, Point) == Point(5, 6)


def test_denormalize_unknown_class(serializer):
    with pytest.raises(ClassNotFoundError):
        serializer.denormalize({}, "NotAClass")


def test_encode_tree(serializer):
    assert serializer.encode({"a": 1}, Context(formatting=Formatting.compact)) == '{"a":1}'


def test_msgpack_codec_round_trip(registry, album):
    serializer = Serializer(IdentityConverter(), registry=registry, codec=MsgPackCodec())

    data = serializer.serialize(album)

    assert isinstance(data, bytes)
    assert serializer.deserialize(data, Album) == album


def test_msgpack_codec_invalid_data(registry):
    serializer = Serializer(IdentityConverter(), registry=registry, codec=MsgPackCodec())

    with pytest.raises(ConversionError):
        serializer.deserialize(b"\xc1", Point)


def test_round_trip_early_year(serializer):
    photo = Photo(url="u", taken_at=datetime(5, 1, 1, tzinfo=timezone.utc))

    text = serializer.serialize(photo)

    assert '"taken_at": "0005-01-01T00:00:00.000000Z"' in text
    assert serializer.deserialize(text, Photo) == photo


def test_float_overflow(serializer):
    with pytest.raises(ConversionError):
        serializer.deserialize('{"x": 1' + '0' * 400 + ', "y": 0}', Point)


def test_relative_class_name(serializer):
    with pytest.raises(ClassNotFoundError):
        serializer.deserialize('{"x": 1}', "..Point")
