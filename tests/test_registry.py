from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

import pytest

from graph_api_binding.adapters.base import RegistryError
from graph_api_binding.core.registry import EntityMapping, FieldKind, MappingRegistry, default_registry, entity, enum, integer, text
from graph_api_binding.models import Account, Comment, Location, Page, Reference, Video


@dataclass(slots=True, frozen=True)
class _Owner:
    id: str = ""
    name: str = ""


@dataclass(slots=True, frozen=True)
class _Thing:
    id: str = ""
    owner: Optional[_Owner] = None


class _Colour(str, Enum):
    RED = "red"
    BLUE = "blue"


def test_default_registry_is_frozen_and_complete():
    registry = default_registry()

    assert registry.frozen
    for entity_type in (Page, Account, Location, Reference, Comment, Video):
        assert entity_type in registry
    assert registry is default_registry()


def test_field_helpers_default_wire_name_to_attribute():
    spec = text("name")
    renamed = entity("from_", _Owner, wire="from")

    assert spec.wire_name == "name"
    assert spec.kind is FieldKind.TEXT
    assert renamed.wire_name == "from"
    assert renamed.target is _Owner


def test_register_rejects_duplicate_types():
    registry = MappingRegistry([EntityMapping(_Owner, (text("id"), text("name")))])

    with pytest.raises(RegistryError, match="already registered"):
        registry.register(EntityMapping(_Owner, (text("id"),)))


def test_register_rejects_duplicate_attributes():
    registry = MappingRegistry()

    with pytest.raises(RegistryError, match="mapped more than once"):
        registry.register(EntityMapping(_Owner, (text("id"), integer("id"))))


def test_freeze_blocks_further_registration():
    registry = MappingRegistry([EntityMapping(_Owner, (text("id"),))]).freeze()

    with pytest.raises(RegistryError, match="frozen"):
        registry.register(EntityMapping(_Thing, (text("id"),)))


def test_freeze_requires_nested_types_to_be_registered():
    registry = MappingRegistry([EntityMapping(_Thing, (text("id"), entity("owner", _Owner)))])

    with pytest.raises(RegistryError, match="_Owner"):
        registry.freeze()

    registry.register(EntityMapping(_Owner, (text("id"), text("name"))))
    assert registry.freeze().frozen


def test_enum_fallback_must_belong_to_target():
    registry = MappingRegistry()

    with pytest.raises(RegistryError, match="Fallback"):
        registry.register(EntityMapping(_Thing, (enum("id", _Colour, fallback=FieldKind.TEXT),)))


def test_require_reports_unknown_type():
    registry = MappingRegistry().freeze()

    with pytest.raises(RegistryError, match="_Thing"):
        registry.require(_Thing)
    assert registry.get(_Thing) is None


def test_as_mapping_is_read_only():
    registry = MappingRegistry([EntityMapping(_Owner, (text("id"),))]).freeze()
    view = registry.as_mapping()

    assert list(view) == [_Owner]
    with pytest.raises(TypeError):
        view[_Thing] = None  # type: ignore[index]
