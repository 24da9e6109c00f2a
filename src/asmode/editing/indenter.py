#!/usr/bin/env python3
"""
ASMODE INDENTER - The Architect
-------------------------------
Turns a line's Classification into a target column, and a whole line into
its canonical column layout:

    loop:           mov     r0, r1          ; copy
    ^ labels/directives at 0
                    ^ operations at the first tab stop
                                            ^ trailing comments at the comment column

Author: Asmode Team
Date: 2026-10-18
"""

import logging
from typing import List

from asmode.core.actions import DeleteRange, EditAction, MoveCursorToColumn
from asmode.core.models import Classification, CommentConfig, LineKind, TabStops

logger = logging.getLogger("asmode.indenter")


def compute_indent(classification: Classification, comment_config: CommentConfig,
                   tab_stops: TabStops, comment_column: int) -> int:
    """
    Target column for a classified line. Any fault while deciding yields 0,
    the column that is always safe to render.
    """
    try:
        if classification.degraded:
            return 0
        kind = classification.kind

        # a. Labels and directives sit flush left
        if kind in (LineKind.LABEL, LineKind.DIRECTIVE):
            return 0

        if kind is LineKind.COMMENT_ONLY:
            # b. Doc comments (';;;') are flush left too
            if classification.is_doc_comment:
                return 0
            # c. A lone single-char delimiter aligns with trailing comments
            if comment_config.is_single_repeatable_char and classification.comment_depth == 1:
                return int(comment_column)

        # d. Everything else goes to the first tab stop
        return tab_stops.first
    except Exception as e:
        logger.warning(f"Indentation fault suppressed, using column 0: {e}")
        return 0


def current_indent(line: str) -> int:
    """Width of the leading whitespace (tabs count as one column each)."""
    return len(line) - len(line.lstrip(" \t"))


def indent_line(line: str, target: int) -> List[EditAction]:
    """Edit actions that replace the line's leading whitespace with `target` spaces."""
    leading = current_indent(line)
    if leading == target and "\t" not in line[:leading]:
        return []
    return [MoveCursorToColumn(0), DeleteRange(0, leading), MoveCursorToColumn(target)]


def _pad_to(text: str, column: int) -> str:
    if len(text) < column:
        return text.ljust(column)
    return f"{text} " if text else text


def layout_line(classification: Classification, comment_config: CommentConfig,
                tab_stops: TabStops, comment_column: int) -> str:
    """
    Rebuilds a line in canonical columns. Lines whose pieces cannot be moved
    independently (code after an inline block comment) only get re-indented.
    """
    text = classification.text
    kind = classification.kind
    indent = compute_indent(classification, comment_config, tab_stops, comment_column)

    if kind is LineKind.BLANK:
        return ""

    if kind is LineKind.COMMENT_ONLY:
        # Body lines of block comments keep their own shape
        if not text.lstrip().startswith(comment_config.start):
            return text.rstrip()
        return " " * indent + text.strip()

    comment_at = classification.comment_start
    code_spans = classification.code_spans
    if kind is LineKind.UNKNOWN or not code_spans or (
            comment_at is not None and comment_at < code_spans[-1][1].end):
        return (" " * indent + text.strip()).rstrip()

    out = ""
    if classification.label_span is not None:
        out = classification.label_span.slice(text)
        head_column = tab_stops.next_stop(len(out))
    elif kind is LineKind.OPERATION:
        operation = classification.operation_span
        # '(cond)' prefix stays at column 0
        out = text[:operation.start].strip()
        head_column = tab_stops.next_stop(len(out)) if out else indent
    else:
        head_column = indent

    head = classification.directive_span or classification.operation_span
    if head is not None:
        out = out.ljust(head_column) + head.slice(text)
        if classification.operand_span is not None:
            out = f"{out} {classification.operand_span.slice(text)}"

    if comment_at is not None:
        out = _pad_to(out, comment_column) + text[comment_at:].rstrip()
    return out.rstrip()
