#!/usr/bin/env python3
"""
ASMODE EDIT SESSION - The Coordinator
-------------------------------------
One EditSession exists per open buffer. It owns the session-scoped settings
(comment style, tab stops, comment column, command toggles) and runs the
classifier, the comment resolver and the indentation engine against them in
a fixed order:

    classify -> resolve comment predicates -> compute indentation

Every core call receives this session explicitly; nothing is global.

Author: Asmode Team
Date: 2026-10-18
"""

import logging
from typing import Any, List, Optional, Union

from asmode.core.actions import EditAction
from asmode.core.config import OPTION_FIELDS, SessionConfig
from asmode.core.errors import ConfigurationFault
from asmode.core.models import Classification, CommentConfig, CommentStyle, LineReport, TabStops
from asmode.editing import commands
from asmode.editing.classifier import LineClassifier
from asmode.editing.comments import CommentStyleResolver
from asmode.editing.indenter import compute_indent, current_indent, indent_line, layout_line

logger = logging.getLogger("asmode.session")


class EditSession:
    """
    Session context handed to every classification, indentation and
    interactive-command call for one buffer.
    """

    def __init__(self, settings: Optional[SessionConfig] = None):
        self.settings = settings or SessionConfig()
        self.resolver = CommentStyleResolver(self.settings.comment_style)
        self.classifier = LineClassifier(self.resolver.config)

    # --- Configuration ---

    @property
    def comment_config(self) -> CommentConfig:
        return self.resolver.config

    @property
    def tab_stops(self) -> TabStops:
        return self.settings.tab_stop_set

    def activate_comment_style(self, style: Union[CommentStyle, str]) -> CommentConfig:
        """
        Switches comment style; takes effect on the next classification.
        Raises ConfigurationFault and keeps the old style on unknown input.
        """
        config = self.resolver.activate(style)
        if config.style is not self.settings.comment_style:
            self.settings = self.settings.updated(comment_style=config.style)
        self.classifier.comment_config = config
        return config

    def configure(self, **options: Any) -> SessionConfig:
        """
        Applies camelCase options (tabStops=[16, 24], commentColumn=40 ...).
        The change is all-or-nothing: a rejected option leaves every setting
        as it was.
        """
        unknown = [key for key in options if key not in OPTION_FIELDS]
        if unknown:
            raise ConfigurationFault(unknown[0], options[unknown[0]], "unrecognised option")

        changes = {OPTION_FIELDS[key]: value for key, value in options.items()}
        updated = self.settings.updated(**changes)
        self.activate_comment_style(updated.comment_style)
        self.settings = updated
        logger.debug(f"Session settings now {self.settings.to_mapping()}")
        return self.settings

    # --- Classification & comments ---

    def classify(self, line: str, continuation: bool = False) -> Classification:
        return self.classifier.classify(line, continuation, self.comment_config)

    def classify_buffer(self, text: str) -> List[Classification]:
        """
        Classifies every line of `text`, threading the block-comment flag,
        and records the pass for later `is_inside_comment` queries.
        """
        classifications = self.classifier.classify_lines(text.split("\n"),
                                                         comment_config=self.comment_config)
        self.resolver.remember(classifications)
        return classifications

    def is_inside_comment(self, position: int) -> bool:
        return self.resolver.is_inside_comment(position)

    # --- Indentation ---

    def compute_indent(self, classification: Classification) -> int:
        return compute_indent(classification, self.comment_config, self.tab_stops,
                              self.settings.comment_column)

    def indent_for(self, line: str, continuation: bool = False) -> int:
        """Target column of a raw line."""
        try:
            return self.compute_indent(self.classify(line, continuation))
        except Exception as e:
            logger.warning(f"Indentation fault suppressed, using column 0: {e}")
            return 0

    def indent_line(self, line: str, continuation: bool = False) -> List[EditAction]:
        return indent_line(line, self.indent_for(line, continuation))

    def layout(self, text: str) -> str:
        """Rewrites a whole buffer in canonical columns."""
        rebuilt = [
            layout_line(c, self.comment_config, self.tab_stops, self.settings.comment_column)
            for c in self.classify_buffer(text)
        ]
        return "\n".join(rebuilt)

    def report(self, text: str) -> List[LineReport]:
        """Per-line classification and indentation for display or checking."""
        return [
            LineReport(
                line_no=i,
                classification=c,
                indent=self.compute_indent(c),
                current_indent=current_indent(c.text),
            )
            for i, c in enumerate(self.classify_buffer(text), 1)
        ]

    # --- Interactive commands ---

    def space(self, line: str, cursor: int, continuation: bool = False) -> List[EditAction]:
        return commands.space_action(self, line, cursor, continuation)

    def colon(self, line: str, cursor: int, continuation: bool = False) -> List[EditAction]:
        return commands.colon_action(self, line, cursor, continuation)

    def hash_mark(self, line: str, cursor: int) -> List[EditAction]:
        return commands.hash_action(self, line, cursor)

    def comment(self, line: str, cursor: int, previous: Optional[Classification] = None,
                continuation: bool = False) -> List[EditAction]:
        return commands.comment_action(self, line, cursor, previous, continuation)

    def newline(self) -> List[EditAction]:
        return commands.newline_action(self)
