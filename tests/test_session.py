import pytest

from asmode.core.config import DEFAULT_TAB_STOPS, SessionConfig
from asmode.core.errors import ConfigurationFault
from asmode.core.models import CommentStyle, LineKind, Span
from asmode.editing.session import EditSession

SOURCE = "\n".join([
    ";;; Section header",
    "loop: mov r0, r1",
    "    mov r0, r1 ; copy",
    ".word 10",
    "; note",
])


@pytest.fixture
def session():
    return EditSession(SessionConfig(comment_style="lineSemicolon", tab_stops=[16, 24],
                                     comment_column=40))


def test_scenario_end_to_end(session):
    """SCENARIO: the reference buffer classifies and indents as expected."""
    reports = session.report(SOURCE)
    assert [r.classification.kind for r in reports] == [
        LineKind.COMMENT_ONLY, LineKind.LABEL, LineKind.OPERATION,
        LineKind.DIRECTIVE, LineKind.COMMENT_ONLY,
    ]
    assert [r.indent for r in reports] == [0, 0, 16, 0, 40]
    assert reports[0].classification.is_doc_comment is True
    assert reports[1].classification.label_span == Span(0, 5)
    assert reports[2].current_indent == 4


def test_is_inside_comment_reads_last_pass(session):
    session.classify_buffer(SOURCE)
    third_line = SOURCE.index("    mov r0, r1 ; copy")
    semicolon = third_line + 15

    assert session.is_inside_comment(semicolon) is False
    assert session.is_inside_comment(semicolon + 1) is True
    assert session.is_inside_comment(third_line + 5) is False
    assert session.is_inside_comment(-1) is False


def test_layout_of_buffer(session):
    laid_out = session.layout(SOURCE).split("\n")
    assert laid_out[0] == ";;; Section header"
    assert laid_out[1] == "loop:" + " " * 11 + "mov r0, r1"
    assert laid_out[2] == (" " * 16 + "mov r0, r1").ljust(40) + "; copy"
    assert laid_out[3] == ".word 10"
    assert laid_out[4] == " " * 40 + "; note"
    # Already laid out text is left as-is
    assert session.layout("\n".join(laid_out)) == "\n".join(laid_out)


def test_block_comments_thread_through_buffer(session):
    session.activate_comment_style(CommentStyle.BLOCK_SLASH_STAR)
    kinds = [c.kind for c in session.classify_buffer("/* a\n   mov r0\n*/\n    nop")]
    assert kinds == [LineKind.COMMENT_ONLY, LineKind.COMMENT_ONLY,
                     LineKind.COMMENT_ONLY, LineKind.OPERATION]


def test_style_switch_applies_to_next_classification(session):
    before = session.classify("# heading")
    config = session.activate_comment_style("lineHash")
    assert config.start == "#"
    assert session.settings.comment_style is CommentStyle.LINE_HASH
    assert session.classify("# heading").kind is LineKind.COMMENT_ONLY
    # Earlier results are not rewritten
    assert before.kind is LineKind.UNKNOWN


def test_rejected_style_keeps_previous(session):
    with pytest.raises(ConfigurationFault):
        session.activate_comment_style("lineBang")
    assert session.comment_config.style is CommentStyle.LINE_SEMICOLON
    assert session.settings.comment_style is CommentStyle.LINE_SEMICOLON


def test_configure_is_all_or_nothing(session):
    with pytest.raises(ConfigurationFault):
        session.configure(commentColumn=20, tabStops=[24, 16])
    assert session.settings.comment_column == 40
    assert session.settings.tab_stops == (16, 24)

    with pytest.raises(ConfigurationFault):
        session.configure(fillColumn=70)

    session.configure(commentColumn=32, commentStyle="lineAt")
    assert session.settings.comment_column == 32
    assert session.comment_config.start == "@"


def test_indent_for_handles_bad_input(session):
    assert session.indent_for(None) == 0
    assert session.indent_for("    nop") == 16
    assert session.indent_line("nop  ", continuation=False) == []


def test_sessions_are_independent():
    first = EditSession()
    second = EditSession()
    second.activate_comment_style(CommentStyle.LINE_HASH)
    assert first.comment_config.style is CommentStyle.LINE_SEMICOLON
    assert first.tab_stops.stops == DEFAULT_TAB_STOPS
    assert first.tab_stops.first == 8


def test_comment_after_prime_register_is_found(session):
    line = "    ex af, af' ; swap banks"
    session.classify_buffer(line)
    assert session.is_inside_comment(len(line)) is True
    assert session.indent_for("loop:mov r0, r1") == 0
    assert session.layout(line) == (" " * 16 + "ex af, af'").ljust(40) + "; swap banks"
