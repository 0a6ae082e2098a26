from dataclasses import dataclass, field
from datetime import datetime

from rulemap.core.models.entity import Serializable
from rulemap.core.models.rules import CollectionOf, NestedObject


@dataclass
class Point(Serializable):
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def rules(cls):
        return {"x": float, "y": float}

    def get_x(self) -> float:
        return self.x

    def set_x(self, value: float) -> None:
        self.x = value

    def get_y(self) -> float:
        return self.y

    def set_y(self, value: float) -> None:
        self.y = value


class Author(Serializable):
    """Uses a boolean-style getter named after the property itself."""

    def __init__(self, name: str = "", verified: bool = False) -> None:
        self._name = name
        self._verified = verified

    @classmethod
    def rules(cls):
        return {"name": "string", "is_verified": "bool"}

    def get_name(self) -> str:
        return self._name

    def set_name(self, value: str) -> None:
        self._name = value

    def is_verified(self) -> bool:
        return self._verified

    def set_is_verified(self, value: bool) -> None:
        self._verified = value

    def __eq__(self, other):
        if not isinstance(other, Author):
            return NotImplemented
        return (self._name, self._verified) == (other._name, other._verified)


@dataclass
class Photo(Serializable):
    url: str = ""
    width: int = 0
    taken_at: datetime | None = None

    @classmethod
    def rules(cls):
        return {"url": str, "width": int, "taken_at": datetime}

    def get_url(self):
        return self.url

    def set_url(self, value):
        self.url = value

    def get_width(self):
        return self.width

    def set_width(self, value):
        self.width = value

    def get_taken_at(self):
        return self.taken_at

    def set_taken_at(self, value):
        self.taken_at = value


@dataclass
class Album(Serializable):
    """Collection with an appender: items are added one by one."""
    title: str = ""
    created_at: datetime | None = None
    author: Author | None = None
    cover: Photo | None = None
    photos: list[Photo] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    add_calls: int = field(default=0, compare=False)

    @classmethod
    def rules(cls):
        return {
            "title": str,
            "created_at": datetime,
            "author": Author,
            "cover": NestedObject(Photo),
            "photos": [Photo],
            "tags": list,
        }

    def get_title(self):
        return self.title

    def set_title(self, value):
        self.title = value

    def get_created_at(self):
        return self.created_at

    def set_created_at(self, value):
        self.created_at = value

    def get_author(self):
        return self.author

    def set_author(self, value):
        self.author = value

    def get_cover(self):
        return self.cover

    def set_cover(self, value):
        self.cover = value

    def get_photos(self):
        return self.photos

    def add_photos(self, photo):
        self.add_calls += 1
        self.photos.append(photo)

    def get_tags(self):
        return self.tags

    def set_tags(self, value):
        self.tags = value


@dataclass
class Gallery(Serializable):
    """Collection without an appender: the whole list is set at once."""
    items: list = field(default_factory=list)
    set_calls: int = field(default=0, compare=False)

    @classmethod
    def rules(cls):
        return {"items": CollectionOf(Photo)}

    def get_items(self):
        return self.items

    def set_items(self, value):
        self.set_calls += 1
        self.items = value


@dataclass
class Playlist(Serializable):
    """References its nested entities by name."""
    owner: Author | None = None
    tracks: list = field(default_factory=list)

    @classmethod
    def rules(cls):
        return {"owner": "Author", "tracks": ["tests.fake.entities.Point"]}

    def get_owner(self):
        return self.owner

    def set_owner(self, value):
        self.owner = value

    def get_tracks(self):
        return self.tracks

    def set_tracks(self, value):
        self.tracks = value


class Badge(Serializable):
    """Exposes its property through a Python property."""

    def __init__(self, label: str = "") -> None:
        self._label = label

    @classmethod
    def rules(cls):
        return {"label": str}

    @property
    def label(self) -> str:
        return self._label

    @label.setter
    def label(self, value: str) -> None:
        self._label = value


@dataclass
class UploadedFile(Serializable):
    """camelCase properties, meant for the snake_case wire convention."""
    uuid: str = ""
    size: int = 0
    image: bool = False
    uploaded: datetime | None = None

    @classmethod
    def rules(cls):
        return {"fileId": str, "size": int, "isImage": bool, "datetimeUploaded": datetime}

    def get_fileId(self):
        return self.uuid

    def set_fileId(self, value):
        self.uuid = value

    def get_size(self):
        return self.size

    def set_size(self, value):
        self.size = value

    def isImage(self):
        return self.image

    def set_isImage(self, value):
        self.image = value

    def get_datetimeUploaded(self):
        return self.uploaded

    def set_datetimeUploaded(self, value):
        self.uploaded = value


class ReadOnly(Serializable):
    @classmethod
    def rules(cls):
        return {"value": int}

    def get_value(self):
        return 1


class WriteOnly(Serializable):
    @classmethod
    def rules(cls):
        return {"value": int}

    def set_value(self, value):
        self.value = value


class NeedsArguments(Serializable):
    def __init__(self, required):
        self.required = required

    @classmethod
    def rules(cls):
        return {}


@dataclass
class Broken(Serializable):
    """Points at a class that does not exist."""
    ref: object = None

    @classmethod
    def rules(cls):
        return {"ref": "missing.module.Nothing", "refs": ["Nothing"]}

    def get_ref(self):
        return self.ref

    def set_ref(self, value):
        self.ref = value

    def get_refs(self):
        return None

    def set_refs(self, value):
        pass


class Stamp(datetime):
    pass


class Plain:
    pass
