"""Tests for ghostmail.markdown.format."""

from ghostmail.markdown.format import bold, code, to_plain_text


def test_bold_escapes_content():
    assert bold("a.b") == "*a\\.b*"


def test_code_escapes_backtick_and_backslash():
    assert code("x`y\\z") == "`x\\`y\\\\z`"


class TestToPlainText:
    def test_markers_removed_and_unescaped(self):
        assert to_plain_text("*Bold* \\. `code`") == "Bold . code"

    def test_escaped_markers_kept_as_literals(self):
        assert to_plain_text("2 \\* 3 \\= 6") == "2 * 3 = 6"

    def test_non_ascii_dropped(self):
        assert to_plain_text("📬 *Inbox for a@b\\.com*") == "Inbox for a@b.com"

    def test_newlines_and_tabs_kept(self):
        assert to_plain_text("a\n\tb") == "a\n\tb"

    def test_empty(self):
        assert to_plain_text("") == ""
