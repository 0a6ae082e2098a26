from enum import StrEnum
from pathlib import Path
from typing import Annotated, ClassVar

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, YamlConfigSettingsSource

from rulemap.core.models.context import Formatting


class NamingStrategy(StrEnum):
    identity = "identity"
    snake_case = "snake_case"
    camel_case = "camel_case"


class CodecName(StrEnum):
    json = "json"
    msgpack = "msgpack"


class RulemapSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="RULEMAP_",
        extra="ignore"
    )

    config_file: ClassVar[Path | None] = None
    """
    YAML file read in addition to the environment, see `with_file`.
    """

    naming: Annotated[
        NamingStrategy,
        Field(
            description=(
                "Convention used between domain property names and wire names.\n"
                "identity   → names are copied as is.\n"
                "snake_case → camelCase properties, snake_case wire keys.\n"
                "camel_case → snake_case properties, camelCase wire keys."
            ),
            default=NamingStrategy.identity
        )
    ]

    codec: Annotated[
        CodecName,
        Field(
            description="Wire encoding of documents.",
            default=CodecName.json
        )
    ]

    formatting: Annotated[
        Formatting,
        Field(
            description="Default layout of encoded documents (JSON only).",
            default=Formatting.pretty
        )
    ]

    indent: Annotated[
        int,
        Field(
            description="Indentation width of pretty JSON documents.",
            default=4,
            ge=0
        )
    ]

    ensure_ascii: Annotated[
        bool,
        Field(
            description="Escape every non-ASCII character in JSON documents.",
            default=True
        )
    ]

    @classmethod
    def with_file(cls, file: Path | None) -> type["RulemapSettings"]:
        """Settings class bound to a YAML file."""
        class FileSettings(cls):
            config_file: ClassVar[Path | None] = file

        return FileSettings

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: tuple[PydanticBaseSettingsSource, ...] = (init_settings, env_settings)
        if cls.config_file is not None:
            sources += (YamlConfigSettingsSource(settings_cls, yaml_file=cls.config_file),)
        return sources
