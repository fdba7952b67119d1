"""
Settings for the Graph API binding.

Settings are read from the ``[graph]`` table of a TOML secrets file. The lookup
order is:

1. Explicit ``GRAPH_API_SECRETS_PATH`` environment variable.
2. ``.secrets/secret.toml`` then ``.secrets/secrets.toml`` under the current
   working directory.
3. The same two files under the project root (the first parent holding a
   ``pyproject.toml``).

``GRAPH_API_ACCESS_TOKEN``, ``GRAPH_API_VERSION`` and ``GRAPH_API_TIMEOUT``
override whatever the file provides. Call :func:`load_settings` to obtain a
:class:`GraphSettings` instance.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional

GRAPH_API_HOST = "https://graph.facebook.com"
DEFAULT_API_VERSION = "v2.2"
DEFAULT_TIMEOUT = 20.0

_ENV_SECRETS_PATH = "GRAPH_API_SECRETS_PATH"
_ENV_ACCESS_TOKEN = "GRAPH_API_ACCESS_TOKEN"
_ENV_VERSION = "GRAPH_API_VERSION"
_ENV_TIMEOUT = "GRAPH_API_TIMEOUT"


@dataclass(slots=True, frozen=True)
class GraphSettings:
    """Credential and endpoint information for Graph API calls."""

    access_token: Optional[str] = None
    api_version: str = DEFAULT_API_VERSION
    app_id: Optional[str] = None
    app_namespace: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    follow_redirects: bool = False
    source_path: Optional[Path] = None

    @property
    def base_url(self) -> str:
        """Versioned API root, always ending with a slash."""

        version = self.api_version.strip("/")
        return f"{GRAPH_API_HOST}/{version}/" if version else f"{GRAPH_API_HOST}/"


def _discover_project_root() -> Optional[Path]:
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / "pyproject.toml").is_file():
            return parent
    return None


def _candidate_paths() -> Iterable[Path]:
    env_override = os.getenv(_ENV_SECRETS_PATH)
    if env_override:
        yield Path(env_override).expanduser()

    roots = [Path.cwd()]
    project_root = _discover_project_root()
    if project_root and project_root not in roots:
        roots.append(project_root)
    for root in roots:
        for filename in ("secret.toml", "secrets.toml"):
            yield root / ".secrets" / filename


def _load_toml(path: Path) -> Dict[str, Any]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _section(raw: Mapping[str, Any]) -> Mapping[str, Any]:
    section = raw.get("graph", {}) if isinstance(raw, Mapping) else {}
    return section if isinstance(section, Mapping) else {}


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _coerce_timeout(value: Any, default: float) -> float:
    if value is None or value == "":
        return default
    try:
        timeout = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid Graph API timeout {value!r}; expected a number of seconds.") from exc
    if timeout <= 0:
        raise ValueError(f"Graph API timeout must be positive, got {timeout}.")
    return timeout


def settings_from_mapping(raw: Mapping[str, Any], *, source_path: Optional[Path] = None) -> GraphSettings:
    """Build settings from a parsed TOML document, then apply environment overrides."""

    section = _section(raw)
    timeout = _coerce_timeout(section.get("timeout"), DEFAULT_TIMEOUT)
    return GraphSettings(
        access_token=_optional_str(os.getenv(_ENV_ACCESS_TOKEN)) or _optional_str(section.get("access_token")),
        api_version=_optional_str(os.getenv(_ENV_VERSION)) or _optional_str(section.get("api_version")) or DEFAULT_API_VERSION,
        app_id=_optional_str(section.get("app_id")),
        app_namespace=_optional_str(section.get("app_namespace")),
        timeout=_coerce_timeout(os.getenv(_ENV_TIMEOUT), timeout),
        follow_redirects=bool(section.get("follow_redirects", False)),
        source_path=source_path,
    )


def load_settings(strict: bool = False) -> GraphSettings:
    """
    Load settings from the first secrets file found.

    Parameters
    ----------
    strict:
        When ``True`` raise ``FileNotFoundError`` if no secrets file exists.
        Otherwise fall back to defaults plus environment overrides.
    """

    for path in _candidate_paths():
        if path.is_file():
            return settings_from_mapping(_load_toml(path), source_path=path)

    if strict:
        raise FileNotFoundError(f"No secrets file found. Configure {_ENV_SECRETS_PATH} or .secrets/secret.toml.")

    return settings_from_mapping({})
