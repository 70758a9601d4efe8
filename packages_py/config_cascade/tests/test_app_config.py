import textwrap
import pytest

from config_cascade import AppConfig, ConcatCascadeStrategy, ConfigLoader, YamlConfigReader
from config_tree import ConfigAlreadyExistsError, MapConfig


@pytest.fixture
def app(tmp_path):
    (tmp_path / "app.yaml").write_text("db:\n  host: base\n  pool: 5\n")
    (tmp_path / "app-prod.yaml").write_text("db:\n  host: prod\n")
    (tmp_path / "lib.yaml").write_text(textwrap.dedent("""
        db:
          pool: 1
          timeout: 30
    """))
    loader = ConfigLoader([YamlConfigReader([str(tmp_path)])], ConcatCascadeStrategy(["${env}"]))
    return AppConfig(loader=loader, environ={"env": "prod", "HOME": "/home/app"})


def test_layer_order(app):
    assert app.config_names() == ["runtime", "remote", "application", "library", "environment", "defaults"]


def test_cascade_uses_tree_values(app):
    app.load_application("app")
    app.load_library("lib")
    assert app.get("db.host") == "prod"
    assert app.get("db.pool") == 5
    assert app.get("db.timeout") == 30


def test_runtime_beats_everything(app):
    app.load_application("app")
    app.set_property("db.host", "runtime")
    assert app.get("db.host") == "runtime"
    app.clear_property("db.host")
    assert app.get("db.host") == "prod"


def test_defaults_are_last(app):
    app.set_default("HOME", "/default")
    app.set_default("missing.key", "fallback")
    assert app.get("HOME") == "/home/app"
    assert app.get("missing.key") == "fallback"


def test_remote_beats_application(app):
    app.load_application("app")
    app.add_remote_config("remote-1", MapConfig(properties={"db.host": "remote"}))
    assert app.get("db.host") == "remote"
    assert app.resolve_source("db.host").path == "remote/remote-1"


def test_names_unique_per_layer(app):
    app.add_library_config("lib", MapConfig())
    with pytest.raises(ConfigAlreadyExistsError):
        app.add_library_config("lib", MapConfig())
    app.add_application_config("lib", MapConfig())
