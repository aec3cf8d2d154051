"""Tests for the hexo, vuepress and ignore segmenters."""

import logging

import pytest

from hanlint import IgnoredCase, run
from hanlint.errors import ConfigurationError
from hanlint.nodes import DocumentState
from hanlint.segmenters.hexo import find_front_matter, parse_hexo, scan_tags
from hanlint.segmenters.ignore import find_disabled_regions, parse_ignore
from hanlint.segmenters.vuepress import scan_containers


def lint(text: str, *segmenters: str) -> str:
    return run(text, hyper_parse=segmenters).result


class TestHexo:
    """Front matter and tag plugins."""

    def test_front_matter_dropped(self) -> None:
        text = "---\ntitle: 中文english\n---\n中文english"
        assert lint(text, "hexo") == "---\ntitle: 中文english\n---\n中文 english"

    def test_json_front_matter(self) -> None:
        assert find_front_matter(';;;\n"a": 1\n;;;\nbody') == 15

    def test_unterminated_front_matter_is_content(self) -> None:
        assert find_front_matter("---\n中文english") is None
        assert lint("---\n中文english", "hexo") == "---\n中文 english"

    def test_raw_body_tag_dropped(self) -> None:
        text = "{% codeblock %}\n中文english\n{% endcodeblock %}\n中文english"
        result = run(text, hyper_parse=("hexo",))
        assert result.result == "{% codeblock %}\n中文english\n{% endcodeblock %}\n中文 english"
        assert [span.reason for span in result.ignored_by_parsers] == ["tag:codeblock"]

    def test_unterminated_raw_tag_runs_to_end(self) -> None:
        text = "中文english{% raw %}中文english"
        assert lint(text, "hexo") == "中文 english{% raw %}中文english"

    def test_inline_tags_are_raw(self) -> None:
        drop, marks = scan_tags("看{% link 文档 url %}和{{ 变量 }}{# 注释 #}")
        assert drop == []
        assert [m.meta for m in marks] == ["tag", "interpolation", "comment"]

    def test_tag_text_untouched(self) -> None:
        assert lint("{{ 中文english }}", "hexo") == "{{ 中文english }}"

    def test_plain_text_unchanged(self) -> None:
        state = DocumentState.initial("text")
        assert parse_hexo(state).blocks == state.blocks


class TestVuepress:
    """Custom containers and template syntax."""

    def test_container_title_and_body(self) -> None:
        text = "::: tip 中文english\n中文english\n:::"
        result = run(text, hyper_parse=("vuepress",))
        assert result.result == "::: tip 中文 english\n中文 english\n:::"
        assert {span.reason for span in result.ignored_by_parsers} == {"container"}

    def test_unterminated_container(self) -> None:
        assert lint("::: warning\n中文english", "vuepress") == "::: warning\n中文 english"

    def test_nested_containers(self) -> None:
        drop, _ = scan_containers(":::: outer\n::: inner\n正文\n:::\n::::")
        assert len(drop) == 4

    def test_containers_in_code_fence_ignored(self) -> None:
        drop, lines = scan_containers("```\n::: tip\n```")
        assert drop == []
        assert lines == []

    def test_template_syntax_untouched(self) -> None:
        text = "中文{{ $page.title }}\n[[toc]]"
        assert lint(text, "vuepress") == text


class TestIgnore:
    """Disabled regions and inline ignore cases."""

    def test_disabled_region(self) -> None:
        text = "中文english\n<!-- hanlint disable -->\n中文english\n<!-- hanlint enable -->\n中文english"
        result = run(text, hyper_parse=("ignore",))
        assert result.result == (
            "中文 english\n<!-- hanlint disable -->\n中文english\n<!-- hanlint enable -->\n中文 english"
        )
        assert [span.reason for span in result.ignored_by_parsers] == ["disabled"]

    def test_unterminated_disable(self) -> None:
        text = "中文english\n<!-- zhlint disable -->\n中文english"
        assert lint(text, "ignore") == "中文 english\n<!-- zhlint disable -->\n中文english"

    def test_find_disabled_regions(self) -> None:
        text = "a<!-- hanlint disable -->b<!-- hanlint enable -->c"
        assert find_disabled_regions(text) == [(1, 49, "disabled")]

    def test_ignore_comment_adds_case(self) -> None:
        state = parse_ignore(DocumentState.initial("<!-- hanlint ignore: 中文-,english -->\n中文english"))
        assert state.ignored_by_rules == (IgnoredCase("english", prefix="中文"),)

    def test_ignore_comment_filters_validations(self) -> None:
        result = run("<!-- hanlint ignore: 中文-,english -->\n中文english", hyper_parse=("ignore",))
        assert result.result.endswith("中文 english")
        assert result.validations == ()

    def test_invalid_ignore_comment_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="hanlint"):
            result = run("<!-- hanlint ignore: ,, -->\n中文english", hyper_parse=("ignore",))
        assert result.result.endswith("中文 english")
        assert "Skipping invalid ignore comment" in caplog.text

    def test_invalid_ignore_comment_strict(self) -> None:
        with pytest.raises(ConfigurationError):
            run("<!-- hanlint ignore: ,, -->", hyper_parse=("ignore",), strict=True)


class TestSegmenterChain:
    """All dialects together."""

    def test_default_chain(self) -> None:
        text = (
            "---\ntitle: 标题\n---\n"
            "::: tip 提示tip\n"
            "正文text，`code`结尾\n"
            ":::\n"
            "<!-- hanlint disable -->\n混排mixed\n<!-- hanlint enable -->\n"
        )
        assert run(text).result == (
            "---\ntitle: 标题\n---\n"
            "::: tip 提示 tip\n"
            "正文 text，`code` 结尾\n"
            ":::\n"
            "<!-- hanlint disable -->\n混排mixed\n<!-- hanlint enable -->\n"
        )
