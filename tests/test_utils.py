"""Tests for hanlint.utils."""

import logging

from hanlint.utils import get_logger


class TestGetLogger:
    """Logger namespacing."""

    def test_prefix_added(self) -> None:
        assert get_logger("ignored").name == "hanlint.ignored"

    def test_module_names_unchanged(self) -> None:
        assert get_logger("hanlint.pipeline").name == "hanlint.pipeline"
        assert get_logger("hanlint").name == "hanlint"

    def test_returns_stdlib_logger(self) -> None:
        assert get_logger("x") is logging.getLogger("hanlint.x")
