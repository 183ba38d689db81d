import pytest
from pydantic import ValidationError

from routeconf import Router
from routeconf.plugins._base_plugin import BasePlugin
from routeconf.plugins.logging import LoggingPlugin


class DummyLogger:
    def __init__(self):
        self.records = []

    def hasHandlers(self):
        return True

    def info(self, message):
        self.records.append(message)


class RecordingHost:
    def __init__(self):
        self.context = {}
        self.handlers = {}

    def register(self, verb, pattern, handler):
        self.handlers[pattern] = handler

    def mount_static(self, pattern, directory):  # pragma: no cover - unused here
        raise AssertionError("no static routes expected")


class CountingPlugin(BasePlugin):
    plugin_code = "counting"
    plugin_description = "Counts entries and calls"

    def __init__(self, router, **config):
        self.entries = []
        self.calls = []
        super().__init__(router, **config)

    def configure(self, enabled: bool = True, label: str = "counting"):
        """Options are stored by the wrapper."""

    def on_entry(self, router, entry):
        self.entries.append(entry)

    def wrap_handler(self, router, entry, call_next):
        label = self.configuration(entry.action).get("label", "counting")

        def counted(*args, **kwargs):
            self.calls.append((label, entry.action))
            return call_next(*args, **kwargs)

        return counted


class OuterPlugin(CountingPlugin):
    plugin_code = "outer"


Router.register_plugin(CountingPlugin)
Router.register_plugin(OuterPlugin)


def _bound_handlers(router):
    host = RecordingHost()
    router.bind_routes(host)
    return host.handlers


def test_logging_plugin_is_registered():
    assert Router.available_plugins()["logging"] is LoggingPlugin


def test_logging_plugin_logs_start_and_end(router):
    logger = DummyLogger()
    router.plug("logging", logger=logger)
    handlers = _bound_handlers(router)
    assert handlers["/"](None) == "home"
    assert logger.records[0] == "app.index start"
    assert logger.records[1].startswith("app.index end (")
    assert logger.records[1].endswith(" ms)")


def test_logging_plugin_prints_when_requested(router, capsys):
    router.plug("logging", print=True)
    _bound_handlers(router)["/users/login"](None)
    out = capsys.readouterr().out
    assert "users.login start" in out
    assert "users.login end" in out


def test_logging_plugin_falls_back_to_print_without_handlers(router, capsys, monkeypatch):
    plugin = router.plug("logging").logging
    monkeypatch.setattr(plugin._logger, "hasHandlers", lambda: False)
    _bound_handlers(router)["/"](None)
    assert "app.index start" in capsys.readouterr().out


def test_logging_respects_flags(router):
    logger = DummyLogger()
    router.plug("logging", logger=logger, flags="before:off")
    _bound_handlers(router)["/"](None)
    assert len(logger.records) == 1
    assert logger.records[0].startswith("app.index end")
    assert router.get_config("logging")["before"] is False


def test_configure_by_action_pattern(router):
    logger = DummyLogger()
    router.plug("logging", logger=logger)
    router.logging.configure(_target="demos.*", enabled=False)
    handlers = _bound_handlers(router)
    handlers["/demos"](None)
    assert logger.records == []
    handlers["/"](None)
    assert logger.records[0] == "app.index start"
    assert router.get_config("logging", "demos.index")["enabled"] is False
    assert router.get_config("logging", "app.index")["enabled"] is True


def test_configure_multiple_targets(router):
    logger = DummyLogger()
    router.plug("logging", logger=logger)
    router.logging.configure(_target="app.index, users.login", after=False)
    assert router.get_config("logging", "app.index")["after"] is False
    assert router.get_config("logging", "users.login")["after"] is False
    assert "after" not in router.get_config("logging", "demos.index")


def test_configure_is_validated(router):
    router.plug("logging")
    with pytest.raises(ValidationError):
        router.logging.configure(enabled="maybe")
    with pytest.raises(ValidationError):
        router.logging.configure(colour=True)


def test_runtime_switch_disables_a_layer(router):
    logger = DummyLogger()
    router.plug("logging", logger=logger)
    handlers = _bound_handlers(router)
    router.set_plugin_enabled("app.index", "logging", False)
    assert router.is_plugin_enabled("app.index", "logging") is False
    assert router.is_plugin_enabled("demos.index", "logging") is True
    assert handlers["/"](None) == "home"
    assert logger.records == []
    router.set_plugin_enabled("app.index", "logging", True)
    handlers["/"](None)
    assert len(logger.records) == 2


def test_wrapped_handlers_keep_metadata(router):
    router.plug("logging", logger=DummyLogger())
    handler = _bound_handlers(router)["/"]
    assert handler.__name__ == "index"


def test_unknown_plugin(router):
    with pytest.raises(ValueError) as excinfo:
        router.plug("nope")
    assert "logging" in str(excinfo.value)


def test_plugins_are_referenced_by_name(router):
    with pytest.raises(TypeError):
        router.plug(LoggingPlugin)


def test_plugin_cannot_be_attached_twice(router):
    router.plug("logging")
    with pytest.raises(ValueError):
        router.plug("logging")


def test_missing_plugin_attribute(router):
    with pytest.raises(AttributeError):
        router.logging
    with pytest.raises(AttributeError):
        router.get_config("logging")
    with pytest.raises(AttributeError):
        router.set_plugin_enabled("app.index", "logging", False)


def test_register_plugin_validation():
    with pytest.raises(TypeError):
        Router.register_plugin(object)

    class NoCode(BasePlugin):
        pass

    with pytest.raises(ValueError):
        Router.register_plugin(NoCode)

    class Impostor(BasePlugin):
        plugin_code = "logging"

    with pytest.raises(ValueError):
        Router.register_plugin(Impostor)


def test_on_entry_sees_every_entry_once(router):
    router.plug("counting")
    routes = router.get_routes()
    router.get_routes()
    assert router.counting.entries == list(routes)


def test_on_entry_runs_for_late_plugins(router):
    routes = router.get_routes()
    router.plug("counting")
    assert router.counting.entries == list(routes)


def test_first_plugin_is_outermost(router):
    router.plug("outer", label="outer").plug("counting", label="inner")
    calls = []
    router.outer.calls = calls
    router.counting.calls = calls
    _bound_handlers(router)["/demos"](None)
    assert calls == [("outer", "demos.index"), ("inner", "demos.index")]
    assert [plugin.name for plugin in router.iter_plugins()] == ["outer", "counting"]


def test_members_lists_plugins(router):
    router.plug("logging", logger=DummyLogger())
    tree = router.members()
    assert tree["plugins"]["logging"]["description"] == LoggingPlugin.plugin_description
    assert tree["plugins"]["logging"]["config"]["enabled"] is True
    assert len(tree["routes"]) == 7
