"""Plugin descriptor loader.

Each plugin is described by a TOML file::

    [plugin]
    id       = "flashcards-from-table"
    name     = "Flashcards From Table"
    version  = "0.1.0"
    entry    = "flashtable.view"       # Python module that implements the plugin
    hooks    = ["on_load", "on_file_open"]
    commands = ["init-flashcards-table"]
    settings = "flashcards.yaml"       # relative to the descriptor

Plugins are loaded by :func:`load_all_plugins` which scans a ``plugins/``
directory for ``*.toml`` files.
"""

from __future__ import annotations

import importlib
import sys
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from flashtable.settings import FlashcardSettings
from flashtable.store import DocumentStore

_KNOWN_KEYS = {"id", "name", "version", "entry", "hooks", "commands", "settings"}


# ---------------------------------------------------------------------------
# Descriptor
# ---------------------------------------------------------------------------


@dataclass
class PluginDescriptor:
    id: str
    name: str
    version: str
    entry: str  # dotted Python module path
    hooks: list[str] = field(default_factory=list)
    commands: list[str] = field(default_factory=list)
    settings: str | None = None
    #: Directory holding the descriptor; relative paths resolve against it
    base_dir: Path | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any], base_dir: Path | None = None) -> "PluginDescriptor":
        plugin = data.get("plugin", data)
        return cls(
            id=plugin["id"],
            name=plugin["name"],
            version=plugin.get("version", "0.1.0"),
            entry=plugin["entry"],
            hooks=plugin.get("hooks", []),
            commands=plugin.get("commands", []),
            settings=plugin.get("settings"),
            base_dir=base_dir,
            meta={k: v for k, v in plugin.items() if k not in _KNOWN_KEYS},
        )

    @property
    def settings_path(self) -> Path | None:
        if self.settings is None:
            return None
        path = Path(self.settings)
        return path if path.is_absolute() or self.base_dir is None else self.base_dir / path


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class HostPlugin(Protocol):
    descriptor: PluginDescriptor

    def on_load(self, store: DocumentStore, settings: FlashcardSettings) -> None: ...
    def on_file_open(self, path: str) -> Any: ...
    def run_command(self, command: str, **kwargs: Any) -> Any: ...


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


def load_plugin(descriptor_path: Path) -> HostPlugin:
    """Load a single plugin from a ``.toml`` descriptor file."""
    descriptor_path = Path(descriptor_path)
    with open(descriptor_path, "rb") as fh:
        data = tomllib.load(fh)

    desc = PluginDescriptor.from_dict(data, base_dir=descriptor_path.parent)
    module = importlib.import_module(desc.entry)

    if not hasattr(module, "create_plugin"):
        raise AttributeError(f"Plugin module '{desc.entry}' must expose a 'create_plugin(descriptor)' factory.")

    plugin: HostPlugin = module.create_plugin(desc)
    return plugin


def load_all_plugins(plugins_dir: Path) -> list[HostPlugin]:
    """Load every ``*.toml`` plugin descriptor found in *plugins_dir*."""
    plugins_dir = Path(plugins_dir)
    plugins: list[HostPlugin] = []
    for toml_path in sorted(plugins_dir.glob("*.toml")):
        try:
            plugins.append(load_plugin(toml_path))
        except Exception as exc:  # noqa: BLE001
            # Log but don't hard-crash so remaining plugins still load
            print(f"[warn] Failed to load plugin {toml_path.name}: {exc}", file=sys.stderr)
    return plugins


def fire_hook(plugins: list[HostPlugin], hook: str, **kwargs: Any) -> list[Any]:
    """Call *hook* on every plugin that declares it; return their results."""
    results: list[Any] = []
    for plugin in plugins:
        if hook in plugin.descriptor.hooks and hasattr(plugin, hook):
            results.append(getattr(plugin, hook)(**kwargs))
    return results
