"""
Page and account entities.

A page can represent a business, a public figure, a place, a product, and so
on. Which fields the API populates depends on the page's category and on what
its administrators filled in, so nearly every attribute has an empty default.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Tuple

from ..core.registry import EntityMapping, entities, entity, enum, flag, integer, raw, text, texts
from .common import CoverPhoto, Location, Reference, picture_url


class PriceRange(str, Enum):
    """Price range of a restaurant or venue page; wire values are the dollar-sign strings."""

    INEXPENSIVE = "$"
    MODERATE = "$$"
    EXPENSIVE = "$$$"
    VERY_EXPENSIVE = "$$$$"
    UNSPECIFIED = "Unspecified"


@dataclass(slots=True, frozen=True)
class ParkingInfo:
    lot: bool = False
    street: bool = False
    valet: bool = False


@dataclass(slots=True, frozen=True)
class RestaurantServices:
    catering: bool = False
    delivery: bool = False
    groups: bool = False
    kids: bool = False
    outdoor: bool = False
    reserve: bool = False
    takeout: bool = False
    waiter: bool = False
    walkins: bool = False


@dataclass(slots=True, frozen=True)
class RestaurantSpecialties:
    breakfast: bool = False
    coffee: bool = False
    dinner: bool = False
    drinks: bool = False
    lunch: bool = False


@dataclass(slots=True, frozen=True)
class MetadataField:
    name: str = ""
    description: str = ""


@dataclass(slots=True, frozen=True)
class Metadata:
    """Introspection block returned when an object is requested with ``metadata=1``."""

    type: str = ""
    connections: Optional[Mapping[str, str]] = None
    fields: Tuple[MetadataField, ...] = ()


@dataclass(slots=True, frozen=True)
class Page:
    """A Graph API page."""

    id: str = ""
    name: str = ""
    link: str = ""
    category: str = ""
    description: str = ""
    about: str = ""
    location: Optional[Location] = None
    website: str = ""
    picture: str = ""
    cover: Optional[CoverPhoto] = None
    phone: str = ""
    affiliation: str = ""
    company_overview: str = ""
    likes: int = 0
    talking_about_count: int = 0
    checkins: int = 0
    were_here_count: int = 0
    can_post: bool = False
    is_published: bool = False
    is_community_page: bool = False
    is_permanently_closed: bool = False
    is_unclaimed: bool = False
    has_added_app: bool = False
    hours: Optional[Mapping[str, str]] = None
    attire: str = ""
    band_members: str = ""
    best_page: Optional["Page"] = None
    birthday: str = ""
    booking_agent: str = ""
    category_list: Tuple[Reference, ...] = ()
    current_location: str = ""
    directed_by: str = ""
    founded: str = ""
    general_info: str = ""
    general_manager: str = ""
    global_brand_page_name: str = ""
    hometown: str = ""
    mission: str = ""
    parking: Optional[ParkingInfo] = None
    price_range: Optional[PriceRange] = None
    press_contact: str = ""
    products: str = ""
    restaurant_services: Optional[RestaurantServices] = None
    restaurant_specialties: Optional[RestaurantSpecialties] = None
    metadata: Optional[Metadata] = None


@dataclass(slots=True, frozen=True)
class Account:
    """A page the authenticated user administers, with the page-scoped access token."""

    id: str = ""
    name: str = ""
    category: str = ""
    access_token: str = ""
    permissions: Tuple[str, ...] = ()


PARKING_INFO_MAPPING = EntityMapping(ParkingInfo, (flag("lot"), flag("street"), flag("valet")))

RESTAURANT_SERVICES_MAPPING = EntityMapping(
    RestaurantServices,
    tuple(flag(name) for name in ("catering", "delivery", "groups", "kids", "outdoor", "reserve", "takeout", "waiter", "walkins")),
)

RESTAURANT_SPECIALTIES_MAPPING = EntityMapping(
    RestaurantSpecialties,
    tuple(flag(name) for name in ("breakfast", "coffee", "dinner", "drinks", "lunch")),
)

METADATA_FIELD_MAPPING = EntityMapping(MetadataField, (text("name"), text("description")))

METADATA_MAPPING = EntityMapping(
    Metadata,
    (
        text("type"),
        raw("connections"),
        entities("fields", MetadataField),
    ),
)

PAGE_MAPPING = EntityMapping(
    Page,
    (
        text("id"),
        text("name"),
        text("link"),
        text("category"),
        text("description"),
        text("about"),
        entity("location", Location),
        text("website"),
        text("picture", coerce=picture_url),
        entity("cover", CoverPhoto),
        text("phone"),
        text("affiliation"),
        text("company_overview"),
        integer("likes"),
        integer("talking_about_count"),
        integer("checkins"),
        integer("were_here_count"),
        flag("can_post"),
        flag("is_published"),
        flag("is_community_page"),
        flag("is_permanently_closed"),
        flag("is_unclaimed"),
        flag("has_added_app"),
        raw("hours"),
        text("attire"),
        text("band_members"),
        entity("best_page", Page),
        text("birthday"),
        text("booking_agent"),
        entities("category_list", Reference),
        text("current_location"),
        text("directed_by"),
        text("founded"),
        text("general_info"),
        text("general_manager"),
        text("global_brand_page_name"),
        text("hometown"),
        text("mission"),
        entity("parking", ParkingInfo),
        enum("price_range", PriceRange, fallback=PriceRange.UNSPECIFIED),
        text("press_contact"),
        text("products"),
        entity("restaurant_services", RestaurantServices),
        entity("restaurant_specialties", RestaurantSpecialties),
        entity("metadata", Metadata),
    ),
)

ACCOUNT_MAPPING = EntityMapping(
    Account,
    (
        text("id"),
        text("name"),
        text("category"),
        text("access_token"),
        texts("permissions", wire="perms"),
    ),
)

MAPPINGS = (
    PARKING_INFO_MAPPING,
    RESTAURANT_SERVICES_MAPPING,
    RESTAURANT_SPECIALTIES_MAPPING,
    METADATA_FIELD_MAPPING,
    METADATA_MAPPING,
    PAGE_MAPPING,
    ACCOUNT_MAPPING,
)
