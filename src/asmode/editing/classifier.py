#!/usr/bin/env python3
"""
ASMODE CLASSIFIER - Line Sharder
--------------------------------
Decomposes one line of assembly source into a Classification: label,
directive, operation, comment-only, blank or unknown, plus the sub-spans
each rule recognised.

There is no grammar. Rules are patterns tried in a fixed precedence and the
first match wins. The only left-context is the "inside a block comment" flag
the caller threads from the previous line.

Author: Asmode Team
Date: 2026-10-18
"""

import logging
import re
from typing import Dict, List, Optional, Tuple

from asmode.core.errors import MalformedInputFault
from asmode.core.models import Classification, CommentConfig, CommentStyle, LineKind, Span

logger = logging.getLogger("asmode.classifier")

DEFAULT_COMMENT_CONFIG = CommentConfig.for_style(CommentStyle.LINE_SEMICOLON)


class LineClassifier:
    """
    Applies the classification rules to single lines.
    Results are cached per (line, continuation flag, comment config), so a
    change of text or of comment style never sees a stale entry.
    """

    # Group 1: Indent, Group 2: Directive token
    DIRECTIVE_PATTERN = re.compile(r'^(\s*)(\.\w+)(?![\w:])')
    # Group 1: Label token (with colon), Group 2: Secondary token
    LABEL_PATTERN = re.compile(r'^([\w.$]+(?::|(?=\s|$)))(?:[ \t]*(\S+))?')
    # Group 1: Condition/register prefix, Group 2: Operation token
    OPERATION_PATTERN = re.compile(r'^(?:\((\w+)\)?)?\s+(\w+)')
    VARIABLE_PATTERN = re.compile(r'%\w+')

    MAX_CACHE_ENTRIES = 4096

    def __init__(self, comment_config: Optional[CommentConfig] = None):
        self.comment_config = comment_config or DEFAULT_COMMENT_CONFIG
        self._cache: Dict[Tuple[str, bool, CommentConfig], Classification] = {}

    def classify(self, line: str, continuation: bool = False,
                 comment_config: Optional[CommentConfig] = None) -> Classification:
        """
        Classifies a line. Never raises: malformed input degrades to UNKNOWN.
        """
        config = comment_config or self.comment_config
        continuation = bool(continuation)
        try:
            if not isinstance(line, str):
                raise MalformedInputFault(f"Expected a line of text, got {type(line).__name__}")
            key = (line, continuation, config)
            cached = self._cache.get(key)
            if cached is not None:
                return cached
            result = self._classify(line, continuation, config)
        except (MalformedInputFault, TypeError, ValueError, AttributeError, re.error) as e:
            logger.debug(f"Line degraded to UNKNOWN: {e}")
            return Classification(
                kind=LineKind.UNKNOWN,
                text=line if isinstance(line, str) else "",
                ends_in_block_comment=continuation,
                degraded=True,
            )

        if len(self._cache) >= self.MAX_CACHE_ENTRIES:
            self._cache.clear()
        self._cache[key] = result
        return result

    def classify_lines(self, lines: List[str], continuation: bool = False,
                       comment_config: Optional[CommentConfig] = None) -> List[Classification]:
        """Classifies consecutive lines, threading the block-comment flag."""
        results = []
        for line in lines:
            classification = self.classify(line, continuation, comment_config)
            continuation = classification.ends_in_block_comment
            results.append(classification)
        return results

    def _find_comments(self, text: str, continuation: bool,
                       config: CommentConfig) -> Tuple[Tuple[Span, ...], bool]:
        """
        Locates comment regions, protecting delimiters inside quotes.
        Returns the regions and whether a block comment is still open at EOL.
        """
        start, end = config.start, config.end
        block = config.is_block
        spans = []
        inside = continuation and block
        region_start = 0
        in_double = in_single = escaped = False
        i, n = 0, len(text)

        while i < n:
            if inside:
                close = text.find(end, i)
                if close == -1:
                    spans.append(Span(region_start, n))
                    return tuple(spans), True
                spans.append(Span(region_start, close + len(end)))
                inside = False
                i = close + len(end)
                continue

            char = text[i]
            if escaped:
                escaped = False
            elif char == '\\':
                escaped = True
            elif char == '"' and not in_single:
                in_double = not in_double
            elif char == "'" and not in_double:
                # A quote right after a word char is a prime (af'), not a literal
                if in_single:
                    in_single = False
                elif (i == 0 or not (text[i - 1].isalnum() or text[i - 1] == "_")) \
                        and text.find("'", i + 1) != -1:
                    in_single = True
            elif not in_double and not in_single and text.startswith(start, i):
                # '*' doubles as multiplication: only a comment at BOL or after blank
                if config.style is CommentStyle.LINE_STAR and i > 0 and not text[i - 1].isspace():
                    i += 1
                    continue
                if not block:
                    spans.append(Span(i, n))
                    return tuple(spans), False
                inside = True
                region_start = i
                i += len(start)
                continue
            i += 1

        if inside and region_start < n:
            spans.append(Span(region_start, n))
        return tuple(spans), inside

    def _operand_after(self, code: str, position: int) -> Optional[Span]:
        end = len(code.rstrip())
        rest = code[position:]
        start = position + len(rest) - len(rest.lstrip())
        if start >= end:
            return None
        return Span(start, end)

    def _comment_depth(self, text: str, lead: int, config: CommentConfig) -> int:
        """Length of the delimiter run opening a comment-only line."""
        if not text.startswith(config.start, lead):
            return 0
        if config.repeat_char is None:
            return 1
        run = lead
        while run < len(text) and text[run] == config.repeat_char:
            run += 1
        return run - lead

    def _classify(self, text: str, continuation: bool, config: CommentConfig) -> Classification:
        comments, ends_open = self._find_comments(text, continuation, config)
        variables = tuple(Span(m.start(), m.end()) for m in self.VARIABLE_PATTERN.finditer(text))
        common = dict(
            text=text,
            comment_spans=comments,
            variable_spans=variables,
            ends_in_block_comment=ends_open,
        )

        # 1. Body of a block comment opened on an earlier line
        if continuation and config.is_block and config.end not in text:
            return Classification(kind=LineKind.COMMENT_ONLY, **common)

        # Rules 2-7 only see code: comment regions are blanked, offsets kept
        code_chars = list(text)
        for span in comments:
            code_chars[span.start:span.end] = " " * len(span)
        code = "".join(code_chars)

        # 2. Comment-only lines (doc comments are runs of 3+ delimiter chars)
        if comments and not code.strip():
            lead = len(text) - len(text.lstrip())
            depth = self._comment_depth(text, lead, config)
            is_doc = config.repeat_char is not None and depth >= 3
            return Classification(kind=LineKind.COMMENT_ONLY, is_doc_comment=is_doc,
                                  comment_depth=depth, **common)

        # 3. Directive: '.word', '.section' ... never a '.local:' label
        match = self.DIRECTIVE_PATTERN.match(code)
        if match:
            token = Span(match.start(2), match.end(2))
            return Classification(kind=LineKind.DIRECTIVE, directive_span=token,
                                  operand_span=self._operand_after(code, token.end), **common)

        # 4. Column-0 label, optionally followed by an operation or directive
        match = self.LABEL_PATTERN.match(code)
        if match:
            label = Span(match.start(1), match.end(1))
            spans = {"label_span": label}
            if match.group(2):
                token = Span(match.start(2), match.end(2))
                if match.group(2).startswith("."):
                    spans["directive_span"] = token
                else:
                    spans["operation_span"] = token
                spans["operand_span"] = self._operand_after(code, token.end)
            return Classification(kind=LineKind.LABEL, **spans, **common)

        # 5. Indented operation with an optional '(cond)' prefix
        match = self.OPERATION_PATTERN.match(code)
        if match:
            prefix = Span(match.start(1), match.end(1)) if match.group(1) else None
            token = Span(match.start(2), match.end(2))
            return Classification(kind=LineKind.OPERATION, prefix_span=prefix, operation_span=token,
                                  operand_span=self._operand_after(code, token.end), **common)

        # 6. Whitespace only
        if not text.strip():
            return Classification(kind=LineKind.BLANK, **common)

        # 7. Rendered as-is, default indentation
        return Classification(kind=LineKind.UNKNOWN, **common)


def classify(line: str, block_comment_continuation: bool = False,
             comment_config: Optional[CommentConfig] = None) -> Classification:
    """Stateless convenience wrapper around a fresh LineClassifier."""
    return LineClassifier(comment_config).classify(line, block_comment_continuation)
