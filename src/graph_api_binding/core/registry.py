"""
Field-mapping declarations for Graph API entity types.

Each entity type is described by an :class:`EntityMapping`: an ordered table of
:class:`FieldSpec` entries naming the wire field, the attribute it populates,
the attribute kind, and any nested entity or enumeration type involved. The
:class:`MappingRegistry` collects mappings keyed by entity type and is frozen
once populated, after which it is read-only and safe to share across threads.

Mappings are declared next to their entity types in :mod:`graph_api_binding.models`
using the small helper constructors defined here::

    PAGE_MAPPING = EntityMapping(
        Page,
        (
            text("id"),
            integer("likes"),
            entity("location", Location),
            enum("price_range", PriceRange, fallback=PriceRange.UNSPECIFIED),
            raw("hours"),
        ),
    )
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Iterator, Mapping, Optional, Sequence

from ..adapters.base import RegistryError

Coercion = Callable[[Any], Any]


class FieldKind(str, Enum):
    """How a wire value is turned into an attribute value."""

    TEXT = "text"
    INTEGER = "integer"
    NUMBER = "number"
    FLAG = "flag"
    TEXT_LIST = "text_list"
    ENTITY = "entity"
    ENTITY_LIST = "entity_list"
    ENUM = "enum"
    TIMESTAMP = "timestamp"
    RAW = "raw"


_NESTED_KINDS = frozenset({FieldKind.ENTITY, FieldKind.ENTITY_LIST})


@dataclass(slots=True, frozen=True)
class FieldSpec:
    """
    Mapping of a single wire field onto an entity attribute.

    Parameters
    ----------
    attribute:
        Attribute name on the entity type.
    wire_name:
        Key of the field in the JSON object.
    kind:
        Attribute kind driving coercion and the default used when the field is absent.
    target:
        Nested entity type for ``ENTITY``/``ENTITY_LIST`` fields, enumeration type
        for ``ENUM`` fields.
    fallback:
        Enumeration member used when an ``ENUM`` wire value is not recognised.
    coerce:
        Optional callable replacing the kind's built-in coercion.
    """

    attribute: str
    wire_name: str
    kind: FieldKind
    target: Optional[type] = None
    fallback: Optional[Enum] = None
    coerce: Optional[Coercion] = None

    def validate(self, owner: type) -> None:
        label = f"{owner.__name__}.{self.attribute}"
        if not self.attribute.isidentifier():
            raise RegistryError(f"Attribute name '{label}' is not a valid identifier.")
        if not self.wire_name:
            raise RegistryError(f"Field '{label}' has an empty wire name.")
        if self.kind in _NESTED_KINDS and self.target is None and self.coerce is None:
            raise RegistryError(f"Field '{label}' is nested but declares no target type.")
        if self.kind is FieldKind.ENUM:
            if self.target is None or not issubclass(self.target, Enum):
                raise RegistryError(f"Field '{label}' must declare an Enum target.")
            if self.fallback is not None and not isinstance(self.fallback, self.target):
                raise RegistryError(f"Fallback for '{label}' is not a member of {self.target.__name__}.")


def _spec(kind: FieldKind, attribute: str, wire: Optional[str], **options: Any) -> FieldSpec:
    return FieldSpec(attribute=attribute, wire_name=wire or attribute, kind=kind, **options)


def text(attribute: str, *, wire: Optional[str] = None, coerce: Optional[Coercion] = None) -> FieldSpec:
    return _spec(FieldKind.TEXT, attribute, wire, coerce=coerce)


def integer(attribute: str, *, wire: Optional[str] = None) -> FieldSpec:
    return _spec(FieldKind.INTEGER, attribute, wire)


def number(attribute: str, *, wire: Optional[str] = None) -> FieldSpec:
    return _spec(FieldKind.NUMBER, attribute, wire)


def flag(attribute: str, *, wire: Optional[str] = None) -> FieldSpec:
    return _spec(FieldKind.FLAG, attribute, wire)


def texts(attribute: str, *, wire: Optional[str] = None) -> FieldSpec:
    return _spec(FieldKind.TEXT_LIST, attribute, wire)


def entity(attribute: str, target: type, *, wire: Optional[str] = None) -> FieldSpec:
    return _spec(FieldKind.ENTITY, attribute, wire, target=target)


def entities(attribute: str, target: type, *, wire: Optional[str] = None) -> FieldSpec:
    return _spec(FieldKind.ENTITY_LIST, attribute, wire, target=target)


def enum(attribute: str, target: type, *, wire: Optional[str] = None, fallback: Optional[Enum] = None) -> FieldSpec:
    return _spec(FieldKind.ENUM, attribute, wire, target=target, fallback=fallback)


def timestamp(attribute: str, *, wire: Optional[str] = None) -> FieldSpec:
    return _spec(FieldKind.TIMESTAMP, attribute, wire)


def raw(attribute: str, *, wire: Optional[str] = None) -> FieldSpec:
    """Free-form JSON object passed through without transformation."""

    return _spec(FieldKind.RAW, attribute, wire)


@dataclass(slots=True, frozen=True)
class EntityMapping:
    """Ordered field table for a single entity type."""

    entity_type: type
    fields: Sequence[FieldSpec]

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))

    @property
    def name(self) -> str:
        return self.entity_type.__name__

    def validate(self) -> None:
        seen: set[str] = set()
        for spec in self.fields:
            spec.validate(self.entity_type)
            if spec.attribute in seen:
                raise RegistryError(f"Attribute '{self.name}.{spec.attribute}' is mapped more than once.")
            seen.add(spec.attribute)

    def nested_types(self) -> Iterator[type]:
        for spec in self.fields:
            if spec.kind in _NESTED_KINDS and spec.target is not None:
                yield spec.target


class MappingRegistry:
    """Catalogue of :class:`EntityMapping` entries keyed by entity type."""

    def __init__(self, mappings: Iterable[EntityMapping] = ()) -> None:
        self._entries: Dict[type, EntityMapping] = {}
        self._frozen = False
        for mapping in mappings:
            self.register(mapping)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, mapping: EntityMapping) -> None:
        """Register a mapping. Fails once the registry is frozen or if the type is already mapped."""

        if self._frozen:
            raise RegistryError(f"Cannot register '{mapping.name}': the registry is frozen.")
        if mapping.entity_type in self._entries:
            raise RegistryError(f"Entity type '{mapping.name}' is already registered.")
        mapping.validate()
        self._entries[mapping.entity_type] = mapping

    def freeze(self) -> "MappingRegistry":
        """Check nested references and make the registry read-only."""

        if self._frozen:
            return self
        for mapping in self._entries.values():
            for target in mapping.nested_types():
                if target not in self._entries:
                    raise RegistryError(f"'{mapping.name}' references unregistered entity type '{target.__name__}'.")
        self._entries = MappingProxyType(dict(self._entries))  # type: ignore[assignment]
        self._frozen = True
        return self

    def get(self, entity_type: type) -> Optional[EntityMapping]:
        return self._entries.get(entity_type)

    def require(self, entity_type: type) -> EntityMapping:
        """Retrieve a mapping or raise an informative error."""

        mapping = self._entries.get(entity_type)
        if mapping is None:
            name = getattr(entity_type, "__name__", repr(entity_type))
            raise RegistryError(f"No field mapping registered for entity type '{name}'.")
        return mapping

    def __contains__(self, entity_type: object) -> bool:
        return entity_type in self._entries

    def __iter__(self) -> Iterator[EntityMapping]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def as_mapping(self) -> Mapping[type, EntityMapping]:
        return MappingProxyType(dict(self._entries))


@lru_cache(maxsize=1)
def default_registry() -> MappingRegistry:
    """Return the process-wide registry holding every mapping in :mod:`graph_api_binding.models`."""

    from ..models import ALL_MAPPINGS

    return MappingRegistry(ALL_MAPPINGS).freeze()
