"""
Тесты парсера шаблонов.
"""

from pathlib import Path

import pytest

from jtpl.template import (
    ALWAYS,
    Branch,
    ConditionalNode,
    ExistsGuard,
    FrameKind,
    IncludeNode,
    InterpolationNode,
    LoopNode,
    ParseErrorKind,
    SequenceNode,
    TemplateParseError,
    TemplateParser,
    TextNode,
    TruthyGuard,
    iter_nodes,
    parse_template,
)
from tests.infrastructure.file_utils import write


class TestTemplateParser:

    def test_text_and_interpolation(self):
        root = parse_template("Hello <?= name ?>!")
        assert root == SequenceNode((
            TextNode("Hello "),
            InterpolationNode("name"),
            TextNode("!"),
        ))

    def test_echo_keyword_equals_shorthand(self):
        assert parse_template("<? echo user.name ?>") == parse_template("<?=user.name?>")

    def test_plain_text(self):
        assert parse_template("no directives\n") == SequenceNode((TextNode("no directives\n"),))
        assert parse_template("") == SequenceNode(())

    def test_loop(self):
        root = parse_template("<? for item items ?>\n<?= item ?>\n<? endfor ?>\n")
        assert root == SequenceNode((
            LoopNode(
                variable="item",
                source="items",
                body=SequenceNode((InterpolationNode("item"), TextNode("\n"))),
            ),
        ))

    def test_conditional_branches(self):
        root = parse_template("<? if a ?>A<? elsif b ?>B<? elif c ?>C<? else ?>D<? endif ?>")
        assert root == SequenceNode((
            ConditionalNode((
                Branch(TruthyGuard("a"), SequenceNode((TextNode("A"),))),
                Branch(TruthyGuard("b"), SequenceNode((TextNode("B"),))),
                Branch(TruthyGuard("c"), SequenceNode((TextNode("C"),))),
                Branch(ALWAYS, SequenceNode((TextNode("D"),))),
            )),
        ))

    def test_ifexist_uses_exists_guard(self):
        root = parse_template("<? ifexist user.email ?>yes<? endif ?>")
        cond = root.children[0]
        assert isinstance(cond, ConditionalNode)
        assert cond.branches[0].guard == ExistsGuard("user.email")

    def test_nested_blocks_keep_document_order(self):
        root = parse_template(
            "A<? for x xs ?>B<? if x ?>C<? endif ?>D<? endfor ?>E"
        )
        kinds = [type(n).__name__ for n in iter_nodes(root)]
        assert kinds == [
            "SequenceNode", "TextNode", "LoopNode", "SequenceNode", "TextNode",
            "ConditionalNode", "SequenceNode", "TextNode", "TextNode", "TextNode",
        ]
        texts = [n.text for n in iter_nodes(root) if isinstance(n, TextNode)]
        assert texts == ["A", "B", "C", "D", "E"]

    def test_deep_nesting(self):
        depth = 40
        text = "<? if a ?>" * depth + "X" + "<? endif ?>" * depth
        root = parse_template(text)
        conditionals = [n for n in iter_nodes(root) if isinstance(n, ConditionalNode)]
        assert len(conditionals) == depth

    def test_include_without_template_path(self):
        root = parse_template('<? include "parts/header.tpl" ?>')
        assert root == SequenceNode((IncludeNode(Path("parts/header.tpl")),))

    def test_empty_directive_stops_parsing(self):
        root = parse_template("before<? ?>after <? bogus ?>")
        assert root == SequenceNode((TextNode("before"),))


class TestLineBreaks:

    def test_directive_lines_leave_no_blank_lines(self):
        root = parse_template("<? if a ?>\nA\n<? endif ?>\nB")
        assert root == SequenceNode((
            ConditionalNode((Branch(TruthyGuard("a"), SequenceNode((TextNode("A\n"),))),)),
            TextNode("B"),
        ))

    def test_crlf_is_consumed(self):
        root = parse_template("<? for x xs ?>\r\n<?= x ?><? endfor ?>\r\nZ")
        loop = root.children[0]
        assert isinstance(loop, LoopNode)
        assert loop.body == SequenceNode((InterpolationNode("x"),))
        assert root.children[1] == TextNode("Z")

    def test_only_one_line_break_consumed(self):
        root = parse_template("<? include \"x.tpl\" ?>\n\nZ")
        assert root.children[1] == TextNode("\nZ")

    def test_echo_keeps_line_break(self):
        root = parse_template("<?= a ?>\nB")
        assert root == SequenceNode((InterpolationNode("a"), TextNode("\nB")))


class TestParseErrors:

    @pytest.mark.parametrize("text, kind", [
        ("<? echo ?>", ParseErrorKind.MISSING_QUERY),
        ("<?= ?>", ParseErrorKind.MISSING_QUERY),
        ("<? if ?>", ParseErrorKind.MISSING_QUERY),
        ("<? for x ?>", ParseErrorKind.MISSING_QUERY),
        ("<? if a ?><? elsif ?>", ParseErrorKind.MISSING_QUERY),
        ("<? for ?>", ParseErrorKind.MISSING_LOOP_VARIABLE),
        ("<? include header.tpl ?>", ParseErrorKind.MISSING_FILENAME),
        ("<? include ?>", ParseErrorKind.MISSING_FILENAME),
        ("<? echo a b ?>", ParseErrorKind.MISSING_CLOSE_MARKER),
        ("<?= a", ParseErrorKind.MISSING_CLOSE_MARKER),
        ("<? else junk ?>", ParseErrorKind.UNEXPECTED_ELSE),
        ("<? while x ?>", ParseErrorKind.UNKNOWN_COMMAND),
        ("<? else ?>", ParseErrorKind.UNEXPECTED_ELSE),
        ("<? elsif a ?>", ParseErrorKind.UNEXPECTED_ELSIF),
        ("<? elif a ?>", ParseErrorKind.UNEXPECTED_ELSIF),
        ("<? endfor ?>", ParseErrorKind.UNMATCHED_ENDFOR),
        ("<? endif ?>", ParseErrorKind.UNMATCHED_ENDIF),
        ("<? if a ?>x", ParseErrorKind.UNCLOSED_BLOCK),
        ("<? for x xs ?>x", ParseErrorKind.UNCLOSED_BLOCK),
    ])
    def test_error_kinds(self, text, kind):
        with pytest.raises(TemplateParseError) as exc_info:
            parse_template(text)
        assert exc_info.value.kind is kind

    def test_unknown_command_message(self):
        with pytest.raises(TemplateParseError) as exc_info:
            parse_template("<? while x ?>")
        assert exc_info.value.message == "Unknown command while"

    def test_mismatched_block_ends(self):
        with pytest.raises(TemplateParseError) as exc_info:
            parse_template("<? if a ?><? endfor ?>")
        assert exc_info.value.kind is ParseErrorKind.UNMATCHED_ENDFOR
        assert exc_info.value.open_frame is FrameKind.CONDITIONAL

        with pytest.raises(TemplateParseError) as exc_info:
            parse_template("<? for x xs ?><? endif ?>")
        assert exc_info.value.kind is ParseErrorKind.UNMATCHED_ENDIF
        assert exc_info.value.open_frame is FrameKind.LOOP

    def test_else_inside_loop(self):
        with pytest.raises(TemplateParseError) as exc_info:
            parse_template("<? for x xs ?><? else ?><? endfor ?>")
        assert exc_info.value.kind is ParseErrorKind.UNEXPECTED_ELSE
        assert exc_info.value.open_frame is FrameKind.LOOP

    def test_error_location(self):
        with pytest.raises(TemplateParseError) as exc_info:
            parse_template("line one\n  <? bogus ?>")
        err = exc_info.value
        assert (err.line, err.column) == (2, 3)
        assert err.open_frame is None
        assert str(err) == "Unknown command bogus at 2:3"

    def test_error_message_includes_template_path(self, tmp_path):
        path = tmp_path / "page.tpl"
        with pytest.raises(TemplateParseError) as exc_info:
            parse_template("<? endif ?>", template_path=path)
        assert str(exc_info.value) == f"Unexpected <? endif ?> found at {path}:1:1"

    def test_unclosed_block_reports_opening_directive(self):
        with pytest.raises(TemplateParseError) as exc_info:
            parse_template("text\n<? for x xs ?>\n<? if x ?>body")
        err = exc_info.value
        assert err.open_frame is FrameKind.CONDITIONAL
        assert "Unclosed <? if ?> opened at 3:1" in err.message
        assert "expected <? endif ?>" in err.message


class TestPermissiveBlocks:

    def test_unclosed_blocks_closed_at_end(self):
        root = parse_template("<? for x xs ?><? if x ?><?= x ?>", strict_blocks=False)
        assert root == SequenceNode((
            LoopNode(
                variable="x",
                source="xs",
                body=SequenceNode((
                    ConditionalNode((
                        Branch(TruthyGuard("x"), SequenceNode((InterpolationNode("x"),))),
                    )),
                )),
            ),
        ))

    def test_mismatched_ends_still_fail(self):
        with pytest.raises(TemplateParseError) as exc_info:
            parse_template("<? endif ?>", strict_blocks=False)
        assert exc_info.value.kind is ParseErrorKind.UNMATCHED_ENDIF


class TestIncludeResolution:

    def test_relative_to_including_template(self, tmp_path):
        write(tmp_path / "parts" / "header.tpl", "H")
        parser = TemplateParser('<? include "parts/header.tpl" ?>', template_path=tmp_path / "page.tpl")
        root = parser.parse()
        assert root.children == (IncludeNode(tmp_path / "parts" / "header.tpl"),)

    def test_missing_relative_file_kept_as_written(self, tmp_path):
        root = parse_template('<? include "nowhere.tpl" ?>', template_path=tmp_path / "page.tpl")
        assert root.children == (IncludeNode(Path("nowhere.tpl")),)

    def test_absolute_path_unchanged(self, tmp_path):
        target = tmp_path / "abs.tpl"
        root = parse_template(f'<? include "{target.as_posix()}" ?>', template_path=tmp_path / "dir" / "page.tpl")
        assert root.children == (IncludeNode(Path(target.as_posix())),)
