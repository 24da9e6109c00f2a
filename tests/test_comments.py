import pytest

from asmode.core.errors import ConfigurationFault
from asmode.core.models import CommentStyle, Span
from asmode.editing.classifier import LineClassifier
from asmode.editing.comments import CommentStyleResolver


@pytest.fixture
def resolver():
    return CommentStyleResolver(CommentStyle.LINE_SEMICOLON)


def test_activation_is_idempotent(resolver):
    """IDEMPOTENCY: re-activating the active style changes nothing."""
    classifier = LineClassifier()
    first = resolver.activate(CommentStyle.LINE_SEMICOLON)
    before = classifier.classify("    nop ; x", comment_config=first)
    version = resolver.version

    second = resolver.activate(CommentStyle.LINE_SEMICOLON)
    assert second is first
    assert resolver.version == version
    assert classifier.classify("    nop ; x", comment_config=second) == before


def test_switching_style_bumps_version(resolver):
    version = resolver.version
    config = resolver.activate(CommentStyle.LINE_HASH)
    assert (config.start, config.end, config.is_single_repeatable_char) == ("#", "", True)
    assert resolver.version == version + 1
    assert resolver.style is CommentStyle.LINE_HASH


@pytest.mark.parametrize("name,style", [
    ("lineHash", CommentStyle.LINE_HASH),
    ("LINE_AT", CommentStyle.LINE_AT),
    ("block-slash-star", CommentStyle.BLOCK_SLASH_STAR),
])
def test_activation_by_name(resolver, name, style):
    assert resolver.activate(name).style is style


def test_block_style_triple(resolver):
    config = resolver.activate(CommentStyle.BLOCK_SLASH_STAR)
    assert (config.start, config.end, config.is_single_repeatable_char) == ("/*", "*/", False)
    assert config.is_block is True


def test_unknown_style_is_rejected(resolver):
    with pytest.raises(ConfigurationFault):
        resolver.activate("lineBang")
    assert resolver.style is CommentStyle.LINE_SEMICOLON


def test_inside_comment_within_one_line(resolver):
    classification = LineClassifier().classify("    mov r0, r1 ; copy")
    lines = [classification]

    for position in range(16, 22):
        assert resolver.is_inside_comment(position, lines) is True
    assert resolver.is_inside_comment(15, lines) is False
    assert resolver.is_inside_comment(5, lines) is False


def test_boundary_positions_are_not_inside(resolver):
    resolver.remember([LineClassifier().classify("; all comment")])
    assert resolver.is_inside_comment(0) is False
    assert resolver.is_inside_comment(-3) is False
    assert resolver.is_inside_comment(500) is False
    assert resolver.is_inside_comment(1) is True


def test_inside_comment_across_lines(resolver):
    classifier = LineClassifier()
    resolver.remember(classifier.classify_lines(["; a", "    nop ; b"]))

    assert resolver.is_inside_comment(1) is True
    # Offset 3 is the newline between the two lines
    assert resolver.is_inside_comment(4) is False
    assert resolver.is_inside_comment(4 + 9) is True
    assert resolver.is_inside_comment(4 + 5) is False


def test_comment_bounds_and_fill_prefix(resolver):
    classifier = LineClassifier()

    doc = classifier.classify(";;; Section header")
    assert resolver.comment_bounds(doc) == Span(4, 18)
    assert resolver.fill_prefix(doc) == ";;; "

    trailing = classifier.classify("    mov r0 ; hi")
    assert resolver.comment_bounds(trailing) == Span(13, 15)
    assert resolver.fill_prefix(trailing) is None

    assert resolver.fill_prefix(classifier.classify("    ; note")) == "    ; "
    assert resolver.comment_bounds(classifier.classify("    nop")) is None


def test_block_comment_bounds(resolver):
    config = resolver.activate(CommentStyle.BLOCK_SLASH_STAR)
    classifier = LineClassifier(config)

    closed = classifier.classify("/* hello */")
    assert resolver.comment_bounds(closed) == Span(3, 8)
    assert resolver.fill_prefix(closed) == "/* "

    body = classifier.classify("   more", continuation=True)
    assert resolver.fill_prefix(body) == "   "
