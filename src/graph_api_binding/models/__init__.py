"""
Typed Graph API entities and their field mappings.

Each submodule declares frozen dataclasses plus one :class:`~graph_api_binding.core.registry.EntityMapping`
per type. :data:`ALL_MAPPINGS` feeds :func:`~graph_api_binding.core.registry.default_registry`.
"""

from . import common, media, page
from .common import CoverPhoto, ImageType, Location, Reference
from .media import Comment, Video, VideoFormat
from .page import (
    Account,
    Metadata,
    MetadataField,
    Page,
    ParkingInfo,
    PriceRange,
    RestaurantServices,
    RestaurantSpecialties,
)

ALL_MAPPINGS = (*common.MAPPINGS, *page.MAPPINGS, *media.MAPPINGS)

__all__ = [
    "ALL_MAPPINGS",
    "Account",
    "Comment",
    "CoverPhoto",
    "ImageType",
    "Location",
    "Metadata",
    "MetadataField",
    "Page",
    "ParkingInfo",
    "PriceRange",
    "Reference",
    "RestaurantServices",
    "RestaurantSpecialties",
    "Video",
    "VideoFormat",
]
