"""Tests for ContextVar-based lint configuration.

Validates option normalization, dict loading, thread isolation and
context manager behavior.
"""

from threading import Thread

import pytest

from hanlint import IgnorePolicy, LintConfig, Linter
from hanlint.config import (
    DEFAULT_ABBREVIATIONS,
    get_lint_config,
    lint_config_context,
    reset_lint_config,
    set_lint_config,
)


class TestLintConfigDataclass:
    """Test LintConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        """Default config selects everything and filters nothing."""
        config = LintConfig()
        assert config.rules is None
        assert config.hyper_parse is None
        assert config.ignored_cases == ()
        assert config.strict is False
        assert config.ignore_policy is IgnorePolicy.EXCLUDE
        assert config.preserve_ignored is False
        assert "Mr." in config.abbreviations
        assert config.raw_compounds == ("AC/DC",)

    def test_immutability(self) -> None:
        """Config is frozen and cannot be modified."""
        config = LintConfig()
        with pytest.raises(AttributeError):
            config.strict = True  # type: ignore[misc]

    def test_lists_become_tuples(self) -> None:
        config = LintConfig(rules=["space-quotes"], hyper_parse=[], abbreviations=["Mr."])
        assert config.rules == ("space-quotes",)
        assert config.hyper_parse == ()
        assert config.abbreviations == ("Mr.",)
        hash(config)

    def test_policy_from_string(self) -> None:
        assert LintConfig(ignore_policy="only").ignore_policy is IgnorePolicy.ONLY

    def test_invalid_policy(self) -> None:
        with pytest.raises(ValueError):
            LintConfig(ignore_policy="sometimes")


class TestFromDict:
    """Loading options from plain dictionaries."""

    def test_snake_case_keys(self) -> None:
        config = LintConfig.from_dict({"rules": ["mark-raw"], "strict": True})
        assert config.rules == ("mark-raw",)
        assert config.strict is True

    def test_camel_case_keys(self) -> None:
        config = LintConfig.from_dict(
            {
                "hyperParse": ["markdown"],
                "ignoredCases": ["english"],
                "ignorePolicy": "only",
                "preserveIgnored": True,
                "rawCompounds": ["C/C++"],
            }
        )
        assert config.hyper_parse == ("markdown",)
        assert config.ignored_cases == ("english",)
        assert config.ignore_policy is IgnorePolicy.ONLY
        assert config.preserve_ignored is True
        assert config.raw_compounds == ("C/C++",)

    def test_unknown_keys_ignored(self) -> None:
        assert LintConfig.from_dict({"colour": "red"}) == LintConfig()


class TestContextVarFunctions:
    """Test get/set/reset functions."""

    def teardown_method(self) -> None:
        """Reset config after each test."""
        reset_lint_config()

    def test_default_config(self) -> None:
        """Default config is returned when not explicitly set."""
        config = get_lint_config()
        assert config.abbreviations == DEFAULT_ABBREVIATIONS
        assert config.strict is False

    def test_set_and_get(self) -> None:
        """set_lint_config() changes the current config."""
        set_lint_config(LintConfig(abbreviations=("Fig.",)))
        assert get_lint_config().abbreviations == ("Fig.",)

    def test_reset_restores_default(self) -> None:
        set_lint_config(LintConfig(strict=True))
        reset_lint_config()
        assert get_lint_config().strict is False


class TestLintConfigContext:
    """Test lint_config_context context manager."""

    def test_context_sets_config(self) -> None:
        with lint_config_context(LintConfig(strict=True)):
            assert get_lint_config().strict is True
        assert get_lint_config().strict is False

    def test_nested_contexts(self) -> None:
        """Inner contexts replace the whole config, then restore the outer one."""
        with lint_config_context(LintConfig(strict=True)):
            with lint_config_context(LintConfig(preserve_ignored=True)):
                assert get_lint_config().preserve_ignored is True
                assert get_lint_config().strict is False
            assert get_lint_config().strict is True
            assert get_lint_config().preserve_ignored is False

    def test_context_restores_on_exception(self) -> None:
        with pytest.raises(ValueError, match="test"):
            with lint_config_context(LintConfig(strict=True)):
                raise ValueError("test")
        assert get_lint_config().strict is False

    def test_linter_sets_config_during_run(self) -> None:
        """Rules see the linter's config; it is restored afterwards."""
        seen: list[LintConfig] = []

        def capture(tokens, marks):
            seen.append(get_lint_config())

        config = LintConfig(rules=(capture,), hyper_parse=())
        Linter(config)("x")
        assert seen == [config]
        assert get_lint_config() is not config


class TestThreadIsolation:
    """Test thread-local configuration isolation."""

    def test_thread_isolation(self) -> None:
        """Each thread sees its own config."""
        results: dict[int, tuple[str, ...]] = {}

        def worker(thread_id: int, config: LintConfig) -> None:
            set_lint_config(config)
            results[thread_id] = get_lint_config().abbreviations

        configs = [LintConfig(abbreviations=(f"A{i}.",)) for i in range(4)]
        threads = [Thread(target=worker, args=(i, c)) for i, c in enumerate(configs)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results == {i: (f"A{i}.",) for i in range(4)}
        assert get_lint_config().abbreviations == DEFAULT_ABBREVIATIONS

    def test_concurrent_linters(self) -> None:
        """Linters with different configs run side by side."""
        results: dict[int, str] = {}
        source = "中文english"

        def worker(thread_id: int, rules: tuple[str, ...]) -> None:
            results[thread_id] = Linter(LintConfig(rules=rules, hyper_parse=()))(source).result

        threads = [
            Thread(target=worker, args=(0, ("space-full-width-content",))),
            Thread(target=worker, args=(1, ())),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results == {0: "中文 english", 1: "中文english"}
