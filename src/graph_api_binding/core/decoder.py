"""
Decode raw Graph API JSON into typed entities.

The decoder walks the :class:`~graph_api_binding.core.registry.EntityMapping`
of the requested type: absent or ``null`` wire fields take the kind's default,
present ones are coerced by kind (or by the field's own coercion callable), and
nested entities are decoded recursively through the same registry. Wire fields
without a mapping are ignored so new remote fields never break decoding.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Type, TypeVar

from ..adapters.base import DecodeError
from .registry import EntityMapping, FieldKind, FieldSpec, MappingRegistry

T = TypeVar("T")

_GRAPH_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

_DEFAULTS: Mapping[FieldKind, Any] = {
    FieldKind.TEXT: "",
    FieldKind.INTEGER: 0,
    FieldKind.NUMBER: 0.0,
    FieldKind.FLAG: False,
    FieldKind.TEXT_LIST: (),
    FieldKind.ENTITY_LIST: (),
    FieldKind.ENTITY: None,
    FieldKind.ENUM: None,
    FieldKind.TIMESTAMP: None,
    FieldKind.RAW: None,
}


def default_for(spec: FieldSpec) -> Any:
    """Value assigned when the wire field is absent or ``null``."""

    return _DEFAULTS[spec.kind]


@dataclass(slots=True, frozen=True)
class EntityDecoder:
    """Stateless decoder bound to a (frozen) mapping registry."""

    registry: MappingRegistry

    def decode(self, raw: Any, entity_type: Type[T]) -> T:
        """Decode one JSON object into ``entity_type``."""

        mapping = self.registry.require(entity_type)
        return self._decode_object(raw, mapping, mapping.name)

    def decode_list(self, raw: Any, entity_type: Type[T]) -> List[T]:
        """Decode a JSON array element-wise. Any failing element fails the whole list."""

        mapping = self.registry.require(entity_type)
        if not isinstance(raw, list):
            raise DecodeError(f"Expected a JSON array of {mapping.name} objects, got {_json_type(raw)}", path=mapping.name)
        return [self._decode_object(item, mapping, f"{mapping.name}[{index}]") for index, item in enumerate(raw)]

    # ------------------------------------------------------------------ internals

    def _decode_object(self, raw: Any, mapping: EntityMapping, path: str) -> Any:
        if not isinstance(raw, dict):
            raise DecodeError(f"Expected a JSON object for {mapping.name}, got {_json_type(raw)}", path=path)

        values: Dict[str, Any] = {}
        for spec in mapping.fields:
            field_path = f"{path}.{spec.attribute}"
            wire_value = raw.get(spec.wire_name)
            if wire_value is None:
                values[spec.attribute] = default_for(spec)
                continue
            try:
                values[spec.attribute] = self._coerce(spec, wire_value, field_path)
            except DecodeError as exc:
                if exc.path is not None:
                    raise
                raise DecodeError(exc.reason, path=field_path) from exc

        try:
            return mapping.entity_type(**values)
        except TypeError as exc:
            raise DecodeError(f"Field mapping does not match {mapping.name}: {exc}", path=path) from exc

    def _coerce(self, spec: FieldSpec, value: Any, path: str) -> Any:
        if spec.coerce is not None:
            return spec.coerce(value)

        kind = spec.kind
        if kind is FieldKind.TEXT:
            return _coerce_text(value)
        if kind is FieldKind.INTEGER:
            return _coerce_integer(value)
        if kind is FieldKind.NUMBER:
            return _coerce_number(value)
        if kind is FieldKind.FLAG:
            return _coerce_flag(value)
        if kind is FieldKind.TEXT_LIST:
            if not isinstance(value, list):
                raise DecodeError(f"Expected a JSON array of strings, got {_json_type(value)}")
            return tuple(_coerce_text(item) for item in value)
        if kind is FieldKind.TIMESTAMP:
            return parse_timestamp(value)
        if kind is FieldKind.ENUM:
            return _coerce_enum(spec, value)
        if kind is FieldKind.RAW:
            if not isinstance(value, dict):
                raise DecodeError(f"Expected a JSON object, got {_json_type(value)}")
            return value
        if kind is FieldKind.ENTITY:
            return self._decode_object(value, self.registry.require(spec.target), path)
        if kind is FieldKind.ENTITY_LIST:
            mapping = self.registry.require(spec.target)
            items = _unwrap_inline_connection(value)
            return tuple(self._decode_object(item, mapping, f"{path}[{index}]") for index, item in enumerate(items))
        raise DecodeError(f"Unsupported field kind {kind!r}")  # pragma: no cover - exhaustive


def _json_type(value: Any) -> str:
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    return type(value).__name__


def _coerce_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    # IDs and counts sometimes arrive as bare numbers where strings are documented.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise DecodeError(f"Expected a string, got {_json_type(value)}")


def _coerce_integer(value: Any) -> int:
    if isinstance(value, bool):
        raise DecodeError("Expected an integer, got boolean")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise DecodeError(f"Expected an integer, got {_json_type(value)} {value!r}")


def _coerce_number(value: Any) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            pass
    raise DecodeError(f"Expected a number, got {_json_type(value)} {value!r}")


def _coerce_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    # Restaurant and parking flags are reported as 0/1.
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise DecodeError(f"Expected a boolean, got {_json_type(value)} {value!r}")


def _coerce_enum(spec: FieldSpec, value: Any) -> Enum:
    enum_type = spec.target
    try:
        return enum_type(value)
    except ValueError:
        if isinstance(value, str):
            for member in enum_type:
                if str(member.value).lower() == value.lower():
                    return member
        if spec.fallback is not None:
            return spec.fallback
    raise DecodeError(f"{value!r} is not a valid {enum_type.__name__}")


def _unwrap_inline_connection(value: Any) -> list:
    """Accept a bare array or an embedded connection (``{"data": [...]}``)."""

    if isinstance(value, list):
        return value
    if isinstance(value, dict) and isinstance(value.get("data"), list):
        return value["data"]
    raise DecodeError(f"Expected a JSON array, got {_json_type(value)}")


def parse_timestamp(value: Any) -> datetime:
    """
    Parse a Graph API timestamp.

    Accepts the API's ``2014-10-30T21:13:18+0000`` form, general ISO-8601, and
    bare ``YYYY-MM-DD`` dates (returned at midnight UTC).
    """

    if not isinstance(value, str):
        raise DecodeError(f"Expected a timestamp string, got {_json_type(value)}")
    text = value.strip()
    try:
        return datetime.strptime(text, _GRAPH_TIMESTAMP_FORMAT)
    except ValueError:
        pass
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise DecodeError(f"Unrecognised timestamp {value!r}") from None
    if len(text) == 10:
        return datetime.combine(date.fromisoformat(text), datetime.min.time(), tzinfo=timezone.utc)
    return parsed
