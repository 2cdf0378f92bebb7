"""Type-name registry shared by the alert filter and classifier factories.

A spec is a flat ``dict[str, str]``.  Its ``type`` key names the plugin
class; every other key is handed to the class's ``from_params``.  An empty
spec, or one without ``type``, selects the factory's default plugin.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Generic, Protocol, TypeVar

from issueclass.errors import InvalidSpecError

TYPE_KEY = "type"


class _Buildable(Protocol):
    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> object:
        ...


PluginT = TypeVar("PluginT")


class SpecFactory(Generic[PluginT]):
    """Builds plugin instances from specs via a registry of plugin classes."""

    kind: str = "plugin"

    def __init__(self, default_type: str, plugins: Mapping[str, type[PluginT]] | None = None) -> None:
        self._registry: dict[str, type[PluginT]] = dict(plugins or {})
        if default_type not in self._registry:
            raise InvalidSpecError(f"Default {self.kind} type '{default_type}' is not registered")
        self._default_type = default_type

    def register(self, type_name: str, plugin_cls: type[PluginT]) -> None:
        if not type_name:
            raise InvalidSpecError(f"{self.kind} type name must not be empty")
        self._registry[type_name] = plugin_cls

    @property
    def types(self) -> tuple[str, ...]:
        return tuple(sorted(self._registry))

    def from_spec(self, spec: Mapping[str, str] | None) -> PluginT:
        spec = spec or {}
        type_name = (spec.get(TYPE_KEY) or self._default_type).strip()
        plugin_cls = self._registry.get(type_name)
        if plugin_cls is None:
            raise InvalidSpecError(
                f"Unknown {self.kind} type '{type_name}'; registered types: {', '.join(self.types)}"
            )
        params = {key: value for key, value in spec.items() if key != TYPE_KEY}
        builder: _Buildable = plugin_cls  # type: ignore[assignment]
        return builder.from_params(params)  # type: ignore[return-value]
