"""End-to-end tests for the lint pipeline."""

import logging
import re
from dataclasses import replace

import pytest

from hanlint import IgnorePolicy, IgnoredCase, Linter, LintConfig, run
from hanlint.errors import ConfigurationError, SegmentationError
from hanlint.nodes import Block, DocumentState, IgnoredMark
from hanlint.pipeline import check_blocks, filter_validations
from hanlint.validation import ValidationIssue


class TestScenarios:
    """Representative documents through the default configuration."""

    def test_mixed_content(self) -> None:
        result = run("中文english混排")
        assert result.result == "中文 english 混排"
        assert [v.name for v in result.validations] == ["space-full-width-content"] * 2
        assert [v.index for v in result.validations] == [2, 9]

    def test_version_suffix_unchanged(self) -> None:
        result = run("Chrome 53+")
        assert result.result == "Chrome 53+"
        assert result.validations == ()
        assert not result.changed

    def test_quote_after_colon(self) -> None:
        assert run('他说:"hello"很好').result == '他说: "hello" 很好'

    def test_inline_code_spaced_outside_only(self) -> None:
        assert run("使用`a  +  b`计算").result == "使用 `a  +  b` 计算"

    def test_multiple_blocks(self) -> None:
        text = "# 标题title\n\n正文text，结束。\n\n```\n代码code\n```\n"
        assert run(text).result == "# 标题 title\n\n正文 text，结束。\n\n```\n代码code\n```\n"

    def test_validations_sorted(self) -> None:
        result = run("中文english\n\n混排mixed")
        indexes = [v.index for v in result.validations]
        assert indexes == sorted(indexes)
        assert len(indexes) == 2


class TestDisabled:
    """The document-level disabled comment."""

    @pytest.mark.parametrize("keyword", ["hanlint", "zhlint"])
    def test_disabled_document(self, keyword: str) -> None:
        text = f"<!-- {keyword} disabled -->\n中文english"
        result = run(text)
        assert result.disabled
        assert result.result == text
        assert result.validations == ()

    def test_disable_comment_is_not_document_disable(self) -> None:
        result = run("<!-- hanlint disable -->\n中文english")
        assert not result.disabled


class TestIgnorePolicy:
    """Filtering validations by ignored marks."""

    def test_exclude_is_default(self) -> None:
        result = run("中文english", ignored_cases=("english",))
        assert result.result == "中文 english"
        assert result.validations == ()

    def test_only_keeps_ignored(self) -> None:
        result = run("中文english，混排mixed", ignored_cases=("english",), ignore_policy=IgnorePolicy.ONLY)
        assert [v.index for v in result.validations] == [2]

    def test_only_without_matches_keeps_all(self) -> None:
        result = run("中文english", ignored_cases=("xyz",), ignore_policy="only")
        assert len(result.validations) == 1

    def test_preserve_ignored_leaves_text(self) -> None:
        result = run("中文english混排", ignored_cases=("中文english",), preserve_ignored=True)
        assert result.result == "中文english 混排"
        assert result.validations == ()

    def test_regex_and_structured_cases(self) -> None:
        result = run(
            "中文english，混排mixed",
            ignored_cases=(re.compile(r"e\w+h"), IgnoredCase("mixed", prefix="混排")),
        )
        assert result.validations == ()

    def test_unmatched_case_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="hanlint"):
            run("中文english", ignored_cases=("xyz",))
        assert "Ignored case xyz matched nothing" in caplog.text

    def test_custom_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = logging.getLogger("tests.hanlint")
        with caplog.at_level(logging.WARNING, logger="tests.hanlint"):
            run("中文english", ignored_cases=("xyz",), logger=logger)
        assert [r.name for r in caplog.records] == ["tests.hanlint"]

    def test_filter_validations(self) -> None:
        issues = [ValidationIssue(1, "a", ""), ValidationIssue(5, "b", "")]
        ignored = [IgnoredMark(4, 6)]
        assert [i.name for i in filter_validations(issues, ignored, IgnorePolicy.EXCLUDE)] == ["a"]
        assert [i.name for i in filter_validations(issues, ignored, IgnorePolicy.ONLY)] == ["b"]
        assert filter_validations(issues, [], IgnorePolicy.ONLY) == issues


class TestSelection:
    """Resolving rule and segmenter selections."""

    def test_unknown_rule_dropped(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="hanlint"):
            result = run("中文english", rules=("no-such-rule",))
        assert result.result == "中文english"
        assert "no-such-rule" in caplog.text

    def test_unknown_rule_strict(self) -> None:
        with pytest.raises(ConfigurationError, match="no-such-rule"):
            run("中文english", rules=("no-such-rule",), strict=True)

    def test_unknown_segmenter_strict(self) -> None:
        with pytest.raises(ConfigurationError):
            Linter(LintConfig(hyper_parse=("asciidoc",), strict=True))

    def test_rule_order_follows_selection(self) -> None:
        linter = Linter(LintConfig(rules=("space-quotes", "mark-raw")))
        assert [r.name for r in linter.rules] == ["space-quotes", "mark-raw"]

    def test_default_selection(self) -> None:
        linter = Linter()
        assert len(linter.rules) == 17
        assert [s.name for s in linter.segmenters] == ["ignore", "hexo", "vuepress", "markdown"]

    def test_custom_segmenter(self) -> None:
        def first_line_only(state: DocumentState) -> DocumentState:
            end = state.content.find("\n")
            return replace(state, blocks=(Block(state.content[:end], 0, end),))

        result = run("中文english\n中文english", hyper_parse=(first_line_only,))
        assert result.result == "中文 english\n中文english"

    def test_overlapping_blocks_raise(self) -> None:
        def overlapping(state: DocumentState) -> DocumentState:
            return replace(state, blocks=(Block("ab", 0, 2), Block("b", 1, 2)))

        with pytest.raises(SegmentationError):
            run("ab", hyper_parse=(overlapping,))

    def test_check_blocks_value_mismatch(self) -> None:
        state = DocumentState("abc", (Block("xy", 0, 2),))
        with pytest.raises(SegmentationError):
            check_blocks(state)


class TestRunOptions:
    """Options passed to run()."""

    def test_dict_config(self) -> None:
        result = run("中文english", {"rules": [], "hyperParse": []})
        assert result.result == "中文english"

    def test_overrides_replace_config(self) -> None:
        config = LintConfig(rules=())
        assert run("中文english", config, rules=None).result == "中文 english"

    def test_unknown_override(self) -> None:
        with pytest.raises(TypeError, match="colour"):
            run("中文", colour=True)

    def test_linter_reuse(self) -> None:
        linter = Linter(LintConfig(rules=("space-full-width-content",)))
        assert linter("中文english").result == "中文 english"
        assert linter.lint("english中文").result == "english 中文"
        assert linter.config.rules == ("space-full-width-content",)
