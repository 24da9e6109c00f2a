#!/usr/bin/env python3
"""
ASMODE EDIT ACTIONS
-------------------
Primitive edit descriptors produced by the interactive commands.
The host editor applies them in order; `apply_actions` is the reference
behaviour used by the CLI and the test-suite.

Cursor semantics:
  - inserts happen at the cursor and advance it
  - DeleteRange removes [start, end) of the cursor's line; a cursor past
    the range shifts left with the text, one inside it lands on `start`
  - MoveCursorToColumn pads with spaces when the column lies past the
    cursor, otherwise it only moves the cursor

Author: Asmode Team
Date: 2026-10-18
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple, Union


@dataclass(frozen=True)
class InsertChar:
    char: str


@dataclass(frozen=True)
class InsertString:
    text: str


@dataclass(frozen=True)
class DeleteRange:
    start: int
    end: int


@dataclass(frozen=True)
class MoveCursorToColumn:
    column: int


@dataclass(frozen=True)
class InsertNewline:
    pass


@dataclass(frozen=True)
class DelegateToHost:
    """Hands the keystroke back to a generic host command (e.g. comment-dwim)."""
    command: str


EditAction = Union[InsertChar, InsertString, DeleteRange, MoveCursorToColumn,
                   InsertNewline, DelegateToHost]


def apply_actions(text: str, cursor: int, actions: Sequence[EditAction]) -> Tuple[str, int]:
    """
    Applies actions to a single-line (or multi-line) string and returns the
    new text with the final cursor offset. Columns are measured from the
    start of the line holding the cursor.
    """
    for action in actions:
        if isinstance(action, InsertChar):
            text = text[:cursor] + action.char + text[cursor:]
            cursor += len(action.char)
        elif isinstance(action, InsertString):
            text = text[:cursor] + action.text + text[cursor:]
            cursor += len(action.text)
        elif isinstance(action, InsertNewline):
            text = text[:cursor] + "\n" + text[cursor:]
            cursor += 1
        elif isinstance(action, DeleteRange):
            line_start = text.rfind("\n", 0, cursor) + 1
            start, end = line_start + action.start, line_start + action.end
            text = text[:start] + text[end:]
            if cursor >= end:
                cursor -= end - start
            elif cursor > start:
                cursor = start
        elif isinstance(action, MoveCursorToColumn):
            line_start = text.rfind("\n", 0, cursor) + 1
            line_end = text.find("\n", cursor)
            line_end = len(text) if line_end == -1 else line_end
            column = cursor - line_start
            if action.column > column:
                # Existing spaces after the cursor are reused before padding
                tail = text[cursor:line_end]
                gap = action.column - column
                reuse = min(gap, len(tail) - len(tail.lstrip(" ")))
                text = text[:cursor + reuse] + " " * (gap - reuse) + text[cursor + reuse:]
                cursor += gap
            else:
                cursor = line_start + action.column
        # DelegateToHost has no effect on the text itself
    return text, cursor


def describe(actions: Sequence[EditAction]) -> List[str]:
    """Compact human-readable rendering, used by CLI output and logs."""
    rendered = []
    for action in actions:
        if isinstance(action, InsertChar):
            rendered.append(f"insert {action.char!r}")
        elif isinstance(action, InsertString):
            rendered.append(f"insert {action.text!r}")
        elif isinstance(action, DeleteRange):
            rendered.append(f"delete [{action.start}, {action.end})")
        elif isinstance(action, MoveCursorToColumn):
            rendered.append(f"column {action.column}")
        elif isinstance(action, InsertNewline):
            rendered.append("newline")
        elif isinstance(action, DelegateToHost):
            rendered.append(f"host {action.command}")
    return rendered
