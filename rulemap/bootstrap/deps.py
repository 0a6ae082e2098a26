import json
from functools import lru_cache
from pydantic import ValidationError

from rulemap.bootstrap.config.loader import get_configfile
from rulemap.bootstrap.config.settings import CodecName, NamingStrategy, RulemapSettings
from rulemap.core.facade import Serializer
from rulemap.core.mapping.registry import EntityRegistry
from rulemap.core.naming.converters import CamelCaseConverter, IdentityConverter, SnakeCaseConverter
from rulemap.core.ports.codec import Codec
from rulemap.core.ports.name_converter import NameConverter
from rulemap.infra.json_codec import JsonCodec
from rulemap.infra.msgpack_codec import MsgPackCodec


NAME_CONVERTERS: dict[NamingStrategy, type[NameConverter]] = {
    NamingStrategy.identity: IdentityConverter,
    NamingStrategy.snake_case: SnakeCaseConverter,
    NamingStrategy.camel_case: CamelCaseConverter,
}


@lru_cache
def get_registry() -> EntityRegistry:
    return EntityRegistry()


@lru_cache
def get_settings(config: str | None = None) -> RulemapSettings:
    file = get_configfile(config)
    try:
        return RulemapSettings.with_file(file)()
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}")
        raise SystemExit("\n".join(msg))


def build_codec(settings: RulemapSettings) -> Codec:
    if settings.codec == CodecName.msgpack:
        return MsgPackCodec()
    return JsonCodec(indent=settings.indent, ensure_ascii=settings.ensure_ascii)


def build_serializer(settings: RulemapSettings, registry: EntityRegistry | None = None) -> Serializer:
    return Serializer(
        name_converter=NAME_CONVERTERS[settings.naming](),
        registry=registry if registry is not None else get_registry(),
        codec=build_codec(settings),
    )


@lru_cache
def get_serializer() -> Serializer:
    return build_serializer(get_settings())
