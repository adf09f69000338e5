"""Capability-checked plugins and the manager that loads them."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod


class Capability(enum.Enum):
    """Permissions a plugin may ask for."""

    FILE_READ = "file_read"
    FILE_WRITE = "file_write"
    NETWORK = "network"
    EXECUTE = "execute"
    ENVIRONMENT = "environment"
    CUSTOM_WIDGETS = "custom_widgets"
    REGISTER_COMMANDS = "register_commands"
    STATE_ACCESS = "state_access"


_DENIED_BY_DEFAULT = frozenset({Capability.EXECUTE, Capability.FILE_WRITE})


class PluginError(Exception):
    """A plugin could not be loaded or run."""


class CapabilityDenied(PluginError):
    """A plugin asked for a capability the policy does not grant."""

    def __init__(self, capability: Capability) -> None:
        super().__init__(f"Capability {capability.name} not allowed")
        self.capability = capability


class Plugin(ABC):
    """Base class for plugins."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique plugin name."""

    @property
    @abstractmethod
    def version(self) -> str:
        """Plugin version string."""

    @property
    @abstractmethod
    def required_capabilities(self) -> list[Capability]:
        """Capabilities the plugin needs."""

    @abstractmethod
    def init(self) -> None:
        """Prepare the plugin for use."""

    @abstractmethod
    def cleanup(self) -> None:
        """Release what the plugin holds before it is unloaded."""


class PluginManager:
    """Registers plugins after checking their capabilities and drives their lifecycle."""

    def __init__(self) -> None:
        self._plugins: dict[str, Plugin] = {}
        self._capabilities: dict[str, list[Capability]] = {}

    @staticmethod
    def _is_allowed(capability: Capability) -> bool:
        return capability not in _DENIED_BY_DEFAULT

    def register(self, plugin: Plugin) -> None:
        """Add a plugin; raises CapabilityDenied if it asks for too much."""
        if not isinstance(plugin, Plugin):
            raise TypeError("plugin must be a Plugin")
        capabilities = list(plugin.required_capabilities)
        for capability in capabilities:
            if not self._is_allowed(capability):
                raise CapabilityDenied(capability)
        self._capabilities[plugin.name] = capabilities
        self._plugins[plugin.name] = plugin

    def init_all(self) -> None:
        """Initialise every plugin; the first failure propagates."""
        for plugin in self._plugins.values():
            plugin.init()

    def cleanup_all(self) -> None:
        """Clean up every plugin; the first failure propagates."""
        for plugin in self._plugins.values():
            plugin.cleanup()

    def get(self, name: str) -> Plugin | None:
        return self._plugins.get(name)

    def list_plugins(self) -> list[str]:
        return list(self._plugins)


class ExamplePlugin(Plugin):
    """A minimal plugin that only records whether it is initialised."""

    def __init__(self, name: str) -> None:
        self._name = name
        self.initialized = False

    @property
    def name(self) -> str:
        return self._name

    @property
    def version(self) -> str:
        return "0.1.0"

    @property
    def required_capabilities(self) -> list[Capability]:
        return [Capability.CUSTOM_WIDGETS]

    def init(self) -> None:
        self.initialized = True

    def cleanup(self) -> None:
        self.initialized = False