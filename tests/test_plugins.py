import pytest

from rsdrav.plugins import (
    Capability,
    CapabilityDenied,
    ExamplePlugin,
    Plugin,
    PluginError,
    PluginManager,
)


class _NeedyPlugin(Plugin):
    def __init__(self, name, capabilities):
        self._name = name
        self._capabilities = capabilities

    @property
    def name(self):
        return self._name

    @property
    def version(self):
        return "1.0.0"

    @property
    def required_capabilities(self):
        return self._capabilities

    def init(self):
        raise PluginError("cannot start")

    def cleanup(self):
        pass


def test_plugin_manager_creation():
    assert PluginManager().list_plugins() == []


def test_plugin_registration():
    manager = PluginManager()
    manager.register(ExamplePlugin("test"))
    assert manager.list_plugins() == ["test"]


def test_plugin_init():
    manager = PluginManager()
    plugin = ExamplePlugin("test")
    manager.register(plugin)
    manager.init_all()
    assert plugin.initialized is True


def test_plugin_cleanup():
    manager = PluginManager()
    plugin = ExamplePlugin("test")
    manager.register(plugin)
    manager.init_all()
    manager.cleanup_all()
    assert plugin.initialized is False


def test_example_plugin_metadata():
    plugin = ExamplePlugin("demo")
    assert plugin.name == "demo"
    assert plugin.version == "0.1.0"
    assert plugin.required_capabilities == [Capability.CUSTOM_WIDGETS]


def test_get_plugin():
    manager = PluginManager()
    plugin = ExamplePlugin("a")
    manager.register(plugin)
    assert manager.get("a") is plugin
    assert manager.get("missing") is None


@pytest.mark.parametrize("capability", [Capability.EXECUTE, Capability.FILE_WRITE])
def test_denied_capabilities(capability):
    manager = PluginManager()
    with pytest.raises(CapabilityDenied) as info:
        manager.register(_NeedyPlugin("bad", [Capability.NETWORK, capability]))
    assert info.value.capability is capability
    assert manager.list_plugins() == []


def test_allowed_capabilities():
    manager = PluginManager()
    manager.register(
        _NeedyPlugin("ok", [Capability.FILE_READ, Capability.NETWORK, Capability.STATE_ACCESS])
    )
    assert manager.list_plugins() == ["ok"]


def test_init_failure_propagates():
    manager = PluginManager()
    manager.register(_NeedyPlugin("broken", []))
    with pytest.raises(PluginError, match="cannot start"):
        manager.init_all()


def test_reregister_same_name_replaces():
    manager = PluginManager()
    first = ExamplePlugin("same")
    second = ExamplePlugin("same")
    manager.register(first)
    manager.register(second)
    assert manager.list_plugins() == ["same"]
    assert manager.get("same") is second


def test_register_rejects_non_plugin():
    with pytest.raises(TypeError):
        PluginManager().register(object())