"""
Тесты сканера директив шаблона.
"""

from jtpl.template.scanner import TemplateScanner


class TestReadText:

    def test_text_before_marker(self):
        s = TemplateScanner("Hello <? echo x ?>")
        text, found = s.read_text()
        assert text == "Hello "
        assert found is True
        # Маркер потреблен
        assert s.peek() == " "

    def test_empty_text_before_marker(self):
        s = TemplateScanner("<?= x ?>")
        text, found = s.read_text()
        assert text == ""
        assert found is True

    def test_end_of_input_is_distinct_from_empty_text(self):
        s = TemplateScanner("plain text")
        assert s.read_text() == ("plain text", False)
        assert s.at_end()

        s = TemplateScanner("")
        assert s.read_text() == ("", False)

    def test_marker_location(self):
        s = TemplateScanner("a\nbc<? if x ?>")
        s.read_text()
        assert (s.marker_line, s.marker_column) == (2, 3)
        assert s.location() == (2, 5)


class TestReadCommand:

    def test_command_keyword(self):
        s = TemplateScanner("<?   for item items ?>")
        s.read_text()
        assert s.read_command() == "for"
        assert s.peek() == " "

    def test_stops_at_close_marker(self):
        s = TemplateScanner("<? else?>")
        s.read_text()
        assert s.read_command() == "else"
        assert s.consume_close_marker() is True

    def test_echo_shorthand(self):
        s = TemplateScanner("<?=name?>")
        s.read_text()
        assert s.read_command() == "echo"
        assert s.read_query() == "name"

    def test_echo_shorthand_with_spaces(self):
        s = TemplateScanner("<?= name ?>")
        s.read_text()
        assert s.read_command() == "echo"

    def test_empty_command(self):
        s = TemplateScanner("<? ?>rest")
        s.read_text()
        assert s.read_command() == ""


class TestTokens:

    def test_read_word_leaves_whitespace(self):
        s = TemplateScanner("item  items")
        assert s.read_word() == "item"
        assert s.peek() == " "

    def test_read_word_stops_at_close_marker(self):
        s = TemplateScanner("?>")
        assert s.read_word() == ""

    def test_read_query_consumes_terminating_whitespace(self):
        s = TemplateScanner("user.name ?>")
        assert s.read_query() == "user.name"
        assert s.peek() == "?"

    def test_read_query_leaves_close_marker(self):
        s = TemplateScanner("a[0].b?>")
        assert s.read_query() == "a[0].b"
        assert s.consume_close_marker() is True
        assert s.at_end()

    def test_read_quoted_string(self):
        s = TemplateScanner('"parts/header.tpl" ?>')
        assert s.read_quoted_string() == "parts/header.tpl"
        assert s.peek() == " "

    def test_read_quoted_string_requires_quote(self):
        s = TemplateScanner("header.tpl ?>")
        assert s.read_quoted_string() == ""
        # Ничего не потреблено
        assert s.position == 0

    def test_skip_whitespace(self):
        s = TemplateScanner(" \t\n\r x")
        s.skip_whitespace()
        assert s.peek() == "x"
        assert s.line == 2

    def test_consume_line_break(self):
        for text in ("\r\nX", "\nX", "\rX", "X"):
            s = TemplateScanner(text)
            s.consume_line_break()
            assert s.peek() == "X"

    def test_consume_line_break_takes_only_one(self):
        s = TemplateScanner("\n\nX")
        s.consume_line_break()
        assert s.peek() == "\n"

    def test_consume_close_marker_absent(self):
        s = TemplateScanner("x ?>")
        assert s.consume_close_marker() is False
        assert s.position == 0
