"""
Runtime configuration.

Settings use kebab-case keys, as in a YAML settings file:

    sprest:
      base-url: https://contoso.sharepoint.com/sites/dev
      timeout: 30
      retries: 1
      headers:
        Accept: application/json;odata=verbose

`setup()` merges into the current settings (headers merge key by key).
Locators built from a bare url, without an explicit transport, ask
`runtime_config.transport()` for one when they first send a request.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import yaml

from sprest.sprest_http import HttpTransport

DEFAULTS: Dict[str, Any] = {
    "base-url": None,
    "timeout": 30.0,
    "retries": 0,
    "backoff": 0.2,
    "headers": {
        "Accept": "application/json;odata=verbose",
    },
}

_TRANSPORT_KEYS = ("timeout", "retries", "backoff", "headers")


def load_settings(path: str | Path) -> Dict[str, Any]:
    """Read a YAML settings file; returns its `sprest:` section when present."""
    p = Path(path)
    with open(p, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file must hold a mapping: {p}")
    section = data.get("sprest", data)
    if not isinstance(section, dict):
        raise ValueError(f"'sprest' section must be a mapping: {p}")
    return section


class RuntimeConfig:
    def __init__(self):
        self._settings: Dict[str, Any] = copy.deepcopy(DEFAULTS)
        self._transport_factory: Optional[Callable[[], Any]] = None

    def setup(self, config: Optional[Dict[str, Any]] = None, *,
              transport_factory: Optional[Callable[[], Any]] = None) -> None:
        for key, value in (config or {}).items():
            if key == "headers":
                self._settings["headers"] = {**self._settings.get("headers", {}), **dict(value or {})}
            else:
                self._settings[key] = value
        if transport_factory is not None:
            self._transport_factory = transport_factory

    def load(self, path: str | Path) -> None:
        self.setup(load_settings(path))

    def reset(self) -> None:
        self.__init__()

    def get(self, key: str, default: Any = None) -> Any:
        return self._settings.get(key, default)

    @property
    def base_url(self) -> Optional[str]:
        return self._settings.get("base-url")

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self._settings.get("headers", {}))

    def transport_config(self) -> Dict[str, Any]:
        return {k: copy.deepcopy(self._settings[k]) for k in _TRANSPORT_KEYS if k in self._settings}

    def transport(self):
        if self._transport_factory is not None:
            return self._transport_factory()
        return HttpTransport(self.base_url, config=self.transport_config())


runtime_config = RuntimeConfig()


def setup(config: Optional[Dict[str, Any]] = None, *,
          transport_factory: Optional[Callable[[], Any]] = None) -> None:
    runtime_config.setup(config, transport_factory=transport_factory)


__all__ = ["DEFAULTS", "RuntimeConfig", "runtime_config", "setup", "load_settings"]
