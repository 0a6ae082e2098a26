import re

from rulemap.core.ports.name_converter import NameConverter


_UPPER = re.compile(r"[A-Z]")
_UNDERSCORED = re.compile(r"_([a-z0-9])")


def camel_to_snake(name: str) -> str:
    if not name:
        return name
    name = name[0].lower() + name[1:]
    return _UPPER.sub(lambda m: "_" + m.group(0).lower(), name)


def snake_to_camel(name: str) -> str:
    return _UNDERSCORED.sub(lambda m: m.group(1).upper(), name)


class IdentityConverter(NameConverter):
    """Wire names are the domain names."""

    def normalize(self, name: str) -> str:
        return name

    def denormalize(self, name: str) -> str:
        return name


class SnakeCaseConverter(NameConverter):
    """
    camelCase domain names <-> snake_case wire names.

        fileId      -> file_id
        isImage     -> is_image
        file_id     -> fileId
    """

    def normalize(self, name: str) -> str:
        return camel_to_snake(name)

    def denormalize(self, name: str) -> str:
        return snake_to_camel(name)


class CamelCaseConverter(NameConverter):
    """
    snake_case domain names <-> camelCase wire names, the usual pairing
    for Python entities talking to a camelCase API.
    """

    def normalize(self, name: str) -> str:
        return snake_to_camel(name)

    def denormalize(self, name: str) -> str:
        return camel_to_snake(name)
