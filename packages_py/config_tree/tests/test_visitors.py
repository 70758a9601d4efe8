import io
import logging

import pytest

from config_tree import (
    CompositeConfig,
    FlattenedNamesVisitor,
    LoggingVisitor,
    MapConfig,
    PrintVisitor,
    PropertyOverrideVisitor,
)
from config_tree.visitors import _IndentingVisitor


def build_tree():
    application = CompositeConfig("application")
    application.add_first("app", MapConfig(properties={"db.host": "base-db"}))
    application.add_first("app-prod", MapConfig(properties={"db.host": "prod-db", "db.password": "s3cret"}))
    root = CompositeConfig("root")
    root.add_last("application", application)
    root.add_last("defaults", MapConfig(properties={"db.host": "localhost", "db.port": 5432}))
    return root


def test_property_override_visitor():
    result = build_tree().accept(PropertyOverrideVisitor("db.host"))
    assert list(result.items()) == [
        ("application/app-prod", "prod-db"),
        ("application/app", "base-db"),
        ("defaults", "localhost"),
    ]


def test_flattened_names_visitor():
    visitor = FlattenedNamesVisitor()
    build_tree().accept(visitor)
    assert visitor.names == {"db.host", "db.password", "db.port"}


def test_print_visitor_masks_secrets():
    stream = io.StringIO()
    build_tree().accept(PrintVisitor(stream))
    lines = stream.getvalue().splitlines()
    assert lines[0] == "application"
    assert lines[1] == "  app-prod"
    assert "    db.password = [REDACTED]" in lines
    assert "  db.port = 5432" in lines
    assert "s3cret" not in stream.getvalue()


def test_logging_visitor(caplog):
    logger = logging.getLogger("config_tree.tests.visitor")
    with caplog.at_level(logging.INFO, logger=logger.name):
        build_tree().accept(LoggingVisitor(logger))
    assert "defaults" in caplog.messages
    assert "  db.host = localhost" in caplog.messages


def test_indenting_visitor_requires_emit():
    with pytest.raises(TypeError):
        _IndentingVisitor()
