"""Small value types embedded by many Graph API objects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..adapters.base import DecodeError
from ..core.registry import EntityMapping, integer, number, text


class ImageType(str, Enum):
    """Picture variants accepted by the ``picture`` connection's ``type`` parameter."""

    SQUARE = "square"
    SMALL = "small"
    NORMAL = "normal"
    LARGE = "large"


@dataclass(slots=True, frozen=True)
class Reference:
    """Lightweight pointer to another object: its ID and display name."""

    id: str = ""
    name: str = ""


@dataclass(slots=True, frozen=True)
class Location:
    """Street address and coordinates of a place."""

    street: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    zip: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    description: str = ""


@dataclass(slots=True, frozen=True)
class CoverPhoto:
    id: str = ""
    source: str = ""
    offset_x: int = 0
    offset_y: int = 0


def picture_url(value: Any) -> str:
    """
    Normalise a ``picture`` field.

    Older API versions return the URL directly; newer ones wrap it as
    ``{"data": {"url": ..., "is_silhouette": ...}}``.
    """

    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        data = value.get("data")
        if isinstance(data, dict) and isinstance(data.get("url"), str):
            return data["url"]
    raise DecodeError(f"Expected a picture URL or picture object, got {type(value).__name__}")


REFERENCE_MAPPING = EntityMapping(Reference, (text("id"), text("name")))

LOCATION_MAPPING = EntityMapping(
    Location,
    (
        text("street"),
        text("city"),
        text("state"),
        text("country"),
        text("zip"),
        number("latitude"),
        number("longitude"),
        text("description"),
    ),
)

COVER_PHOTO_MAPPING = EntityMapping(
    CoverPhoto,
    (
        text("id"),
        text("source"),
        integer("offset_x"),
        integer("offset_y"),
    ),
)

MAPPINGS = (REFERENCE_MAPPING, LOCATION_MAPPING, COVER_PHOTO_MAPPING)
