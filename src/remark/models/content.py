"""Value types derived from a converted document."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MediaKind(str, Enum):
    """Kinds of media detected in a section."""

    NONE = "none"
    IMAGE = "image"
    VIDEO = "video"


@dataclass(frozen=True)
class Media:
    """
    First media reference found in a section.

    Attributes:
        kind: none, image or video
        url: Media URL (empty for none)
        alt: Image alt text (empty unless kind is image)
    """

    kind: MediaKind = MediaKind.NONE
    url: str = ""
    alt: str = ""

    @classmethod
    def none(cls) -> Media:
        return cls()

    @classmethod
    def image(cls, url: str, alt: str) -> Media:
        return cls(MediaKind.IMAGE, url, alt)

    @classmethod
    def video(cls, url: str) -> Media:
        return cls(MediaKind.VIDEO, url)

    @property
    def is_none(self) -> bool:
        return self.kind is MediaKind.NONE


@dataclass(frozen=True)
class Section:
    """A heading and the Markdown content under it."""

    content: str
    media: Media = Media()


@dataclass(frozen=True)
class Link:
    """A link with its display text."""

    url: str
    text: str

    @property
    def markdown(self) -> str:
        """The link in Markdown form."""
        return f"[{self.text}]({self.url})"
