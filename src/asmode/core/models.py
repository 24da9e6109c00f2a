#!/usr/bin/env python3
"""
ASMODE CORE MODELS
------------------
Defines the fundamental data structures shared by the classifier, the
comment-style resolver and the indentation engine.
These models represent a single line of assembly source and the session
settings that shape how it is read.

Author: Asmode Team
Date: 2026-10-18
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True)
class Span:
    """Half-open [start, end) character range inside one line."""
    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid span [{self.start}, {self.end})")

    def __contains__(self, offset: int) -> bool:
        return self.start <= offset < self.end

    def __len__(self) -> int:
        return self.end - self.start

    def slice(self, text: str) -> str:
        return text[self.start:self.end]


class LineKind(str, Enum):
    """Primary syntactic category of a line."""
    LABEL = "label"
    DIRECTIVE = "directive"
    OPERATION = "operation"
    COMMENT_ONLY = "comment"
    BLANK = "blank"
    UNKNOWN = "unknown"


class CommentStyle(Enum):
    """
    The comment conventions a session can switch between.
    Each value maps to (start delimiter, end delimiter, single repeatable char).
    """
    LINE_SEMICOLON = (";", "", True)
    LINE_HASH = ("#", "", True)
    LINE_STAR = ("*", "", True)
    LINE_AT = ("@", "", True)
    BLOCK_SLASH_SLASH = ("//", "", False)
    BLOCK_SLASH_STAR = ("/*", "*/", False)

    @property
    def config_name(self) -> str:
        """camelCase name used in configuration files (e.g. 'lineSemicolon')."""
        head, *tail = self.name.lower().split("_")
        return head + "".join(part.capitalize() for part in tail)

    @classmethod
    def lookup(cls, name: str) -> Optional["CommentStyle"]:
        """Resolves 'lineSemicolon', 'LINE_SEMICOLON' or 'line-semicolon'."""
        key = str(name).replace("_", "").replace("-", "").lower()
        for style in cls:
            if style.name.replace("_", "").lower() == key:
                return style
        return None


@dataclass(frozen=True)
class CommentConfig:
    """
    The active comment convention as seen by the classifier and the
    indentation engine. Hashable so it can key classification caches.
    """
    style: CommentStyle
    start: str
    end: str = ""
    is_single_repeatable_char: bool = False

    @classmethod
    def for_style(cls, style: CommentStyle) -> "CommentConfig":
        start, end, repeatable = style.value
        return cls(style=style, start=start, end=end, is_single_repeatable_char=repeatable)

    @property
    def is_block(self) -> bool:
        return bool(self.end) and self.end != self.start

    @property
    def repeat_char(self) -> Optional[str]:
        """The character a doc-comment run repeats ('/' for '//'), if any."""
        if self.start and len(set(self.start)) == 1:
            return self.start[0]
        return None


@dataclass(frozen=True)
class TabStops:
    """
    Ordered indentation columns. Past the last configured stop (or when no
    stops are configured) columns advance in multiples of `width`.
    """
    stops: Tuple[int, ...] = ()
    width: int = 8

    def next_stop(self, column: int) -> int:
        for stop in self.stops:
            if stop > column:
                return stop
        return (column // self.width + 1) * self.width

    @property
    def first(self) -> int:
        return self.next_stop(0)


@dataclass(frozen=True)
class Classification:
    """
    The result of classifying one line.

    Exactly one `kind` is selected by rule precedence; the sub-spans locate
    the pieces the rule recognised. `comment_spans` is the per-character
    comment categorisation used by the resolver, and `ends_in_block_comment`
    is the flag the caller threads into the next line's classification.
    `degraded` marks an UNKNOWN produced by a classification fault.
    """
    kind: LineKind
    text: str = ""
    label_span: Optional[Span] = None
    directive_span: Optional[Span] = None
    operation_span: Optional[Span] = None
    operand_span: Optional[Span] = None
    prefix_span: Optional[Span] = None
    comment_spans: Tuple[Span, ...] = ()
    variable_spans: Tuple[Span, ...] = ()
    is_doc_comment: bool = False
    comment_depth: int = 0
    ends_in_block_comment: bool = False
    degraded: bool = False

    @property
    def label_name(self) -> Optional[str]:
        if self.label_span is None:
            return None
        return self.label_span.slice(self.text).rstrip(":")

    @property
    def code_spans(self) -> Tuple[Tuple[str, Span], ...]:
        """Non-comment sub-spans in left-to-right order, tagged by category."""
        tagged = [
            ("label", self.label_span),
            ("prefix", self.prefix_span),
            ("directive", self.directive_span),
            ("operation", self.operation_span),
            ("operand", self.operand_span),
        ]
        return tuple(sorted(((name, span) for name, span in tagged if span is not None),
                            key=lambda item: item[1].start))

    @property
    def comment_start(self) -> Optional[int]:
        return self.comment_spans[0].start if self.comment_spans else None

    def is_comment_at(self, offset: int) -> bool:
        return any(offset in span for span in self.comment_spans)

    def category_at(self, offset: int) -> Optional[str]:
        """Category of the character at `offset` ('comment', 'label', ...)."""
        if self.is_comment_at(offset):
            return "comment"
        if any(offset in span for span in self.variable_spans):
            return "variable"
        for name, span in self.code_spans:
            if offset in span:
                return name
        return None


@dataclass
class LineReport:
    """A classified line together with the indentation computed for it."""
    line_no: int
    classification: Classification
    indent: int
    current_indent: int = 0
