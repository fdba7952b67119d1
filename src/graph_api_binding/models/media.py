"""Comment and video entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from ..core.registry import EntityMapping, entities, entity, flag, integer, number, text, timestamp
from .common import Reference, picture_url


@dataclass(slots=True, frozen=True)
class Comment:
    id: str = ""
    message: str = ""
    from_: Optional[Reference] = None
    created_time: Optional[datetime] = None
    like_count: int = 0
    user_likes: bool = False
    can_remove: bool = False


@dataclass(slots=True, frozen=True)
class VideoFormat:
    """One encoding of a video, as listed in the video's inner ``format`` array."""

    filter: str = ""
    embed_html: str = ""
    width: int = 0
    height: int = 0
    picture: str = ""


@dataclass(slots=True, frozen=True)
class Video:
    id: str = ""
    from_: Optional[Reference] = None
    name: str = ""
    description: str = ""
    picture: str = ""
    embed_html: str = ""
    icon: str = ""
    source: str = ""
    length: float = 0.0
    created_time: Optional[datetime] = None
    updated_time: Optional[datetime] = None
    tags: Tuple[Reference, ...] = ()
    formats: Tuple[VideoFormat, ...] = ()


COMMENT_MAPPING = EntityMapping(
    Comment,
    (
        text("id"),
        text("message"),
        entity("from_", Reference, wire="from"),
        timestamp("created_time"),
        integer("like_count"),
        flag("user_likes"),
        flag("can_remove"),
    ),
)

VIDEO_FORMAT_MAPPING = EntityMapping(
    VideoFormat,
    (
        text("filter"),
        text("embed_html"),
        integer("width"),
        integer("height"),
        text("picture"),
    ),
)

VIDEO_MAPPING = EntityMapping(
    Video,
    (
        text("id"),
        entity("from_", Reference, wire="from"),
        text("name"),
        text("description"),
        text("picture", coerce=picture_url),
        text("embed_html"),
        text("icon"),
        text("source"),
        number("length"),
        timestamp("created_time"),
        timestamp("updated_time"),
        entities("tags", Reference),
        entities("formats", VideoFormat, wire="format"),
    ),
)

MAPPINGS = (COMMENT_MAPPING, VIDEO_FORMAT_MAPPING, VIDEO_MAPPING)
