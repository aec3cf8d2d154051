"""Tests for block reconstruction and validation remapping."""

from hanlint.join import join, replace_blocks
from hanlint.nodes import Block, IgnoredMark
from hanlint.tokenizer import tokenize
from hanlint.validation import ValidationTarget, note_issue, space_issue


class TestJoin:
    """Rendering tokens and keeping the validations that still apply."""

    def test_untouched_tokens_render_original(self) -> None:
        text = "  中文 english，\n混排"
        assert join(tokenize(text), [], 0) == (text, [])

    def test_changed_gap_reported_at_absolute_index(self) -> None:
        tokens = tokenize("中文english")
        tokens[0].space_after = " "
        output, issues = join(tokens, [space_issue(tokens[0], "rule", "message")], 10)
        assert output == "中文 english"
        assert [(i.index, i.name, i.target) for i in issues] == [(12, "rule", ValidationTarget.SPACE_AFTER)]

    def test_reverted_change_drops_validation(self) -> None:
        tokens = tokenize("中文english")
        tokens[0].space_after = " "
        pending = [space_issue(tokens[0], "rule", "message")]
        tokens[0].space_after = ""
        assert join(tokens, pending, 0) == ("中文english", [])

    def test_last_validation_per_gap_wins(self) -> None:
        tokens = tokenize("中文english")
        tokens[0].space_after = " "
        pending = [space_issue(tokens[0], "first", ""), space_issue(tokens[0], "second", "")]
        _, issues = join(tokens, pending, 0)
        assert [i.name for i in issues] == ["second"]

    def test_notes_always_kept(self) -> None:
        tokens = tokenize('"a')
        pending = [note_issue(tokens[0], "quotes", ""), note_issue(tokens[0], "quotes", "")]
        _, issues = join(tokens, pending, 0)
        assert len(issues) == 2

    def test_preserve_ignored(self) -> None:
        tokens = tokenize("中文english混排")
        tokens[0].space_after = " "
        tokens[1].space_after = " "
        pending = [space_issue(tokens[0], "rule", ""), space_issue(tokens[1], "rule", "")]
        output, issues = join(tokens, pending, 0, [IgnoredMark(0, 9)], preserve_ignored=True)
        assert output == "中文english 混排"
        assert [i.index for i in issues] == [9]


class TestReplaceBlocks:
    """Splicing rendered blocks into the document."""

    def test_splice(self) -> None:
        content = "# a\n\nb c"
        rendered = [(Block("a", 2, 3), "A"), (Block("b c", 5, 8), "B  C")]
        assert replace_blocks(content, rendered) == "# A\n\nB  C"

    def test_no_blocks(self) -> None:
        assert replace_blocks("abc", []) == "abc"
