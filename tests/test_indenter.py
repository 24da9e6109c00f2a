import pytest

from asmode.core.actions import DeleteRange, MoveCursorToColumn, apply_actions
from asmode.core.models import Classification, CommentConfig, CommentStyle, LineKind, TabStops
from asmode.editing.classifier import LineClassifier
from asmode.editing.indenter import compute_indent, indent_line, layout_line

SEMI = CommentConfig.for_style(CommentStyle.LINE_SEMICOLON)
STOPS = TabStops(stops=(16, 24))
COMMENT_COLUMN = 40


def indent_of(line, config=SEMI, continuation=False):
    c = LineClassifier(config).classify(line, continuation)
    return compute_indent(c, config, STOPS, COMMENT_COLUMN)


def layout_of(line, config=SEMI):
    c = LineClassifier(config).classify(line)
    return layout_line(c, config, STOPS, COMMENT_COLUMN)


@pytest.mark.parametrize("line,expected", [
    ("loop: mov r0, r1", 0),
    ("    mov r0, r1 ; copy", 16),
    (";;; Section header", 0),
    (".word 10", 0),
])
def test_scenario_indentation(line, expected):
    assert indent_of(line) == expected


@pytest.mark.parametrize("line", [".data", "  .text", "\t.globl main", "    .byte 1, 2"])
def test_directives_flush_left(line):
    assert indent_of(line) == 0


@pytest.mark.parametrize("style", list(CommentStyle))
def test_labels_flush_left_in_every_style(style):
    config = CommentConfig.for_style(style)
    c = LineClassifier(config).classify("label:")
    assert c.kind is LineKind.LABEL
    assert compute_indent(c, config, STOPS, COMMENT_COLUMN) == 0


@pytest.mark.parametrize("style", [CommentStyle.LINE_SEMICOLON, CommentStyle.LINE_HASH,
                                   CommentStyle.LINE_STAR, CommentStyle.LINE_AT])
def test_single_char_comment_rules(style):
    config = CommentConfig.for_style(style)
    delimiter = config.start
    assert indent_of(delimiter * 3 + " doc", config) == 0
    assert indent_of(delimiter * 4 + " doc", config) == 0
    assert indent_of(delimiter + " note", config) == COMMENT_COLUMN
    assert indent_of("    " + delimiter + " note", config) == COMMENT_COLUMN
    assert indent_of(delimiter * 2 + " code level", config) == 16


def test_multi_char_styles_use_tab_stop():
    block = CommentConfig.for_style(CommentStyle.BLOCK_SLASH_STAR)
    assert indent_of("/* note */", block) == 16
    assert indent_of("   body text", block, continuation=True) == 16
    slashes = CommentConfig.for_style(CommentStyle.BLOCK_SLASH_SLASH)
    assert indent_of("// note", slashes) == 16
    assert indent_of("/// doc", slashes) == 0


@pytest.mark.parametrize("line", ["", "+++", "    nop", "(p1) bra out"])
def test_everything_else_goes_to_first_tab_stop(line):
    assert indent_of(line) == 16


def test_uniform_width_when_no_stops():
    c = LineClassifier().classify("    nop")
    assert compute_indent(c, SEMI, TabStops(), COMMENT_COLUMN) == 8
    assert compute_indent(c, SEMI, TabStops(width=4), COMMENT_COLUMN) == 4


def test_next_stop_past_configured_columns():
    assert STOPS.next_stop(0) == 16
    assert STOPS.next_stop(16) == 24
    assert STOPS.next_stop(24) == 32
    assert STOPS.next_stop(30) == 32


def test_faults_degrade_to_column_zero():
    """FAULT CONTRACT: evaluation errors never escape, indentation becomes 0."""
    comment = LineClassifier().classify("; note")
    operation = LineClassifier().classify("    nop")

    assert compute_indent(None, SEMI, STOPS, COMMENT_COLUMN) == 0
    assert compute_indent(comment, None, STOPS, COMMENT_COLUMN) == 0
    assert compute_indent(comment, SEMI, STOPS, "forty") == 0
    assert compute_indent(operation, SEMI, None, COMMENT_COLUMN) == 0


def test_malformed_line_indents_to_zero():
    degraded = LineClassifier().classify(None)
    assert degraded.kind is LineKind.UNKNOWN
    assert compute_indent(degraded, SEMI, STOPS, COMMENT_COLUMN) == 0
    # A regular UNKNOWN line still follows the default rule
    assert compute_indent(Classification(kind=LineKind.UNKNOWN), SEMI, STOPS, COMMENT_COLUMN) == 16


def test_indent_line_actions():
    actions = indent_line("  nop", 16)
    assert actions == [MoveCursorToColumn(0), DeleteRange(0, 2), MoveCursorToColumn(16)]
    assert apply_actions("  nop", 5, actions) == (" " * 16 + "nop", 16)
    assert indent_line(" " * 16 + "nop", 16) == []
    assert indent_line("\t\tnop", 2) != []


def test_layout_of_label_line_puts_operation_on_tab_stop():
    laid_out = layout_of("loop: mov r0, r1")
    assert laid_out == "loop:" + " " * 11 + "mov r0, r1"
    assert LineClassifier().classify(laid_out).operation_span.start == 16


def test_layout_of_operation_with_comment():
    laid_out = layout_of("    mov r0, r1 ; copy")
    assert laid_out == (" " * 16 + "mov r0, r1").ljust(40) + "; copy"


@pytest.mark.parametrize("line,expected", [
    (".word 10", ".word 10"),
    ("   .word   10", ".word 10"),
    ("(p0) add r1, r2", "(p0)".ljust(16) + "add r1, r2"),
    ("a_very_long_label_name: nop", "a_very_long_label_name:".ljust(24) + "nop"),
    ("done:", "done:"),
    ("   ", ""),
    ("  ;;; Section", ";;; Section"),
    ("; note", " " * 40 + "; note"),
])
def test_layout_lines(line, expected):
    assert layout_of(line) == expected


def test_layout_keeps_code_after_inline_block_comment():
    block = CommentConfig.for_style(CommentStyle.BLOCK_SLASH_STAR)
    assert layout_of("    mov /* x */ r0", block) == " " * 16 + "mov /* x */ r0"
    body = LineClassifier(block).classify("  * keep me  ", continuation=True)
    assert layout_line(body, block, STOPS, COMMENT_COLUMN) == "  * keep me"
