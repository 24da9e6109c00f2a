#!/usr/bin/env python3
"""
ASMODE INTERACTIVE COMMANDS
---------------------------
Decision logic behind the keys an assembly buffer rebinds: space, colon,
hash, the comment delimiter and newline. Each command reads the line and
the cursor offset and returns the edit actions the host should apply; none
of them touches a buffer.

Author: Asmode Team
Date: 2026-10-18
"""

import logging
import re
from typing import List, Optional

from asmode.core.actions import (
    DelegateToHost,
    DeleteRange,
    EditAction,
    InsertChar,
    InsertNewline,
    InsertString,
    MoveCursorToColumn,
    describe,
)
from asmode.core.errors import ConfigurationFault
from asmode.core.models import Classification, LineKind

logger = logging.getLogger("asmode.commands")

LABEL_TOKEN = re.compile(r'[\w.$]+$')


def _log(command: str, actions: List[EditAction]) -> List[EditAction]:
    logger.debug(f"{command}: {', '.join(describe(actions))}")
    return actions


def _clamp(line: str, cursor: int) -> int:
    return max(0, min(cursor, len(line)))


def _inside_comment(session, line: str, cursor: int, continuation: bool) -> bool:
    classification = session.classify(line, continuation)
    return session.resolver.is_inside_comment(cursor, [classification])


def space_action(session, line: str, cursor: int, continuation: bool = False) -> List[EditAction]:
    """Tab-to-stop at line start or inside the first field, literal space elsewhere."""
    cursor = _clamp(line, cursor)
    stops = session.tab_stops
    if cursor == 0:
        return _log("space", [MoveCursorToColumn(stops.next_stop(0))])

    if (cursor < stops.first and session.settings.tab_after_operation
            and not _inside_comment(session, line, cursor, continuation)):
        return _log("space", [MoveCursorToColumn(stops.next_stop(cursor))])

    return _log("space", [InsertChar(" ")])


def colon_action(session, line: str, cursor: int, continuation: bool = False) -> List[EditAction]:
    """
    Completes a bare column-0 word into a label: whitespace around the word
    is removed, the colon inserted (when enabled) and the cursor sent to the
    operation field.
    """
    cursor = _clamp(line, cursor)
    settings = session.settings
    stops = session.tab_stops
    trimmed = line[:cursor].rstrip()
    match = LABEL_TOKEN.search(trimmed)

    is_label = (match is not None and not trimmed[:match.start()].strip()
                and not _inside_comment(session, line, cursor, continuation))
    if not is_label:
        return _log("colon", [InsertChar(":")] if settings.colon_after_label else [])

    lead, token_end = match.start(), match.end()
    actions: List[EditAction] = []
    if cursor > token_end:
        actions.append(DeleteRange(token_end, cursor))
    if lead:
        actions.append(DeleteRange(0, lead))

    column = token_end - lead
    if settings.colon_after_label:
        actions.append(InsertChar(":"))
        column += 1

    if settings.newline_after_label:
        actions.extend([InsertNewline(), MoveCursorToColumn(stops.first)])
    else:
        actions.append(MoveCursorToColumn(stops.next_stop(column)))
    return _log("colon", actions)


def hash_action(session, line: str, cursor: int) -> List[EditAction]:
    """'#' typed after leading whitespace only is pulled to column 0."""
    cursor = _clamp(line, cursor)
    if cursor > 0 and not line[:cursor].strip():
        return _log("hash", [DeleteRange(0, cursor), InsertChar("#")])
    return _log("hash", [InsertChar("#")])


def _opening_run(classification: Classification, delimiter: str) -> str:
    text = classification.text
    start = classification.comment_spans[0].start
    end = start
    while end < len(text) and text[end] == delimiter:
        end += 1
    return text[start:end] or delimiter


def comment_action(session, line: str, cursor: int, previous: Optional[Classification] = None,
                   continuation: bool = False) -> List[EditAction]:
    """
    Handles the comment delimiter key. Only bound for single-character
    delimiters; `previous` is the classification of the line above.
    """
    cursor = _clamp(line, cursor)
    config = session.comment_config
    if len(config.start) != 1:
        raise ConfigurationFault("commentStyle", config.style.config_name,
                                 "comment key needs a single-character delimiter")
    delimiter = config.start
    classification = session.classify(line, continuation)

    def inside(position: int) -> bool:
        return session.resolver.is_inside_comment(position, [classification])

    # 1. Right after the run that opens a comment: continue it on a new line
    run_start = cursor
    while run_start > 0 and line[run_start - 1] == delimiter:
        run_start -= 1
    if run_start < cursor and classification.is_comment_at(run_start) and not inside(run_start):
        run = line[run_start:cursor] if config.is_single_repeatable_char else delimiter
        return _log("comment", [InsertNewline(), MoveCursorToColumn(run_start),
                                InsertString(f"{run} ")])

    # 2. Leading whitespace of a line continuing a comment block above
    if (cursor > 0 and not line[:cursor].strip() and previous is not None
            and previous.kind is LineKind.COMMENT_ONLY and previous.comment_spans
            and not classification.is_comment_at(cursor)):
        column = previous.comment_spans[0].start
        run = _opening_run(previous, delimiter) if config.is_single_repeatable_char else delimiter
        return _log("comment", [DeleteRange(0, cursor), MoveCursorToColumn(column),
                                InsertString(f"{run} ")])

    # 3. Plain character inside comment text
    if inside(cursor):
        return _log("comment", [InsertChar(delimiter)])

    # 4. Generic comment insertion/toggling is the host's business
    return _log("comment", [DelegateToHost("comment-dwim")])


def newline_action(session) -> List[EditAction]:
    """Newline followed by a jump to the operation field."""
    return _log("newline", [InsertNewline(), MoveCursorToColumn(session.tab_stops.first)])
