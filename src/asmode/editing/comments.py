#!/usr/bin/env python3
"""
ASMODE COMMENT RESOLVER - The Curator
-------------------------------------
Owns the active comment convention of an editing session and answers
"is this position inside a comment?" from the most recent classification
pass. Also exposes the comment boundaries paragraph-fill works within.

Author: Asmode Team
Date: 2026-10-18
"""

import logging
from typing import List, Optional, Sequence, Union

from asmode.core.errors import ConfigurationFault
from asmode.core.models import Classification, CommentConfig, CommentStyle, LineKind, Span

logger = logging.getLogger("asmode.comments")


class CommentStyleResolver:
    """
    The single source of truth for the session's CommentConfig.
    `version` increases every time the style actually changes, so hosts can
    tell when a full re-render is due.
    """

    def __init__(self, style: Union[CommentStyle, str] = CommentStyle.LINE_SEMICOLON):
        self.config: Optional[CommentConfig] = None
        self.version = 0
        self._last_pass: List[Classification] = []
        self.activate(style)

    def activate(self, style: Union[CommentStyle, str]) -> CommentConfig:
        """
        Switches the active comment style. Re-activating the current style is
        a no-op; an unknown style raises ConfigurationFault and keeps the
        previous one.
        """
        resolved = style if isinstance(style, CommentStyle) else CommentStyle.lookup(style)
        if resolved is None:
            raise ConfigurationFault("commentStyle", style, "unknown comment style")

        if self.config is not None and self.config.style is resolved:
            return self.config

        previous = self.config.style.config_name if self.config else None
        self.config = CommentConfig.for_style(resolved)
        self.version += 1
        logger.info(f"Comment style {previous} -> {resolved.config_name} (v{self.version})")
        return self.config

    @property
    def style(self) -> CommentStyle:
        return self.config.style

    def remember(self, classifications: Sequence[Classification]):
        """Records a buffer's classification pass for later position queries."""
        self._last_pass = list(classifications)

    def is_inside_comment(self, position: int,
                          classifications: Optional[Sequence[Classification]] = None) -> bool:
        """
        True iff the character just before `position` (an absolute offset,
        lines joined by one newline) was classified as comment text.
        Positions before the document start are simply "not inside".
        """
        lines = self._last_pass if classifications is None else classifications
        if position <= 0:
            if position < 0:
                logger.debug(f"Position {position} precedes the document start")
            return False

        offset = position - 1
        for classification in lines:
            length = len(classification.text)
            if offset < length:
                return classification.is_comment_at(offset)
            # Step over the line and its newline separator
            offset -= length + 1
            if offset < 0:
                return False
        logger.debug(f"Position {position} lies past the end of the classified text")
        return False

    def comment_bounds(self, classification: Classification) -> Optional[Span]:
        """
        The refillable body of a line's first comment: after the delimiter run
        and its following blanks, up to (not including) a closing delimiter.
        """
        if not classification.comment_spans:
            return None
        span = classification.comment_spans[0]
        text = classification.text
        config = self.config

        start = span.start
        if text.startswith(config.start, start):
            if config.repeat_char:
                while start < span.end and text[start] == config.repeat_char:
                    start += 1
            else:
                start += len(config.start)
        end = span.end
        if config.is_block and text[start:end].endswith(config.end):
            end -= len(config.end)
        while start < end and text[start] in " \t":
            start += 1
        while end > start and text[end - 1] in " \t":
            end -= 1
        return Span(start, end)

    def fill_prefix(self, classification: Classification) -> Optional[str]:
        """
        Text every refilled line of a comment-only paragraph starts with:
        indentation, delimiter run and one space.
        """
        if classification.kind is not LineKind.COMMENT_ONLY or not classification.comment_spans:
            return None
        text = classification.text
        opening = classification.comment_spans[0].start
        bounds = self.comment_bounds(classification)
        if not text.startswith(self.config.start, opening):
            # Body line of a block comment: keep its indentation only
            return text[:bounds.start]
        run = text[opening:bounds.start].rstrip()
        return f"{text[:opening]}{run} "
