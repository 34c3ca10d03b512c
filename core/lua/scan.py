# -*- coding: utf-8 -*-
"""Low-level Lua scanning: character classification and lexing helpers.

`scan_source()` walks a script once, left to right, and classifies every
character as code, line comment, block comment or string. The result is a
`SourceView` holding two same-length projections of the text:

- `code`   : comments replaced by spaces (line breaks kept)
- `masked` : comments and string bodies replaced (quotes/brackets kept)

Offsets are identical across all three texts, so a match found in `masked`
can be sliced out of `code` or the original without translation.
"""

from __future__ import annotations

import bisect
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

__all__ = [
    "Region",
    "Segment",
    "SourceView",
    "scan_source",
    "_is_ident_start",
    "_is_ident_char",
    "_long_bracket_level",
    "_skip_long_bracket",
    "_skip_short_string",
    "_skip_comment",
    "_skip_string_or_long_string",
]

MASK_CHAR = "_"


class Region(str, Enum):
    CODE = "code"
    LINE_COMMENT = "line_comment"
    BLOCK_COMMENT = "block_comment"
    STRING = "string"


@dataclass(frozen=True)
class Segment:
    region: Region
    start: int
    end: int
    line: int


@dataclass
class SourceView:
    text: str
    code: str
    masked: str
    segments: List[Segment] = field(default_factory=list)
    line_starts: List[int] = field(default_factory=lambda: [0])
    segment_starts: List[int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.segment_starts = [s.start for s in self.segments]

    def line_of(self, pos: int) -> int:
        """0-based line of offset `pos`."""
        return bisect.bisect_right(self.line_starts, pos) - 1

    def line_end(self, pos: int) -> int:
        """Offset of the line break ending the line that holds `pos` (or len(text))."""
        nl = self.text.find("\n", pos)
        return len(self.text) if nl == -1 else nl

    def region_at(self, pos: int) -> Region:
        if not self.segments or pos >= len(self.text):
            return Region.CODE
        idx = bisect.bisect_right(self.segment_starts, pos) - 1
        return self.segments[max(idx, 0)].region


def _is_ident_start(ch: str) -> bool:
    return ch == "_" or ("A" <= ch <= "Z") or ("a" <= ch <= "z")


def _is_ident_char(ch: str) -> bool:
    return _is_ident_start(ch) or ("0" <= ch <= "9")


def _long_bracket_level(text: str, i: int) -> Optional[int]:
    """
    If text[i:] starts a Lua long-bracket opener: [=*[ , return '=' count; else None.
    Examples: [[ -> 0, [=[ -> 1, [==[ -> 2
    """
    n = len(text)
    if i >= n or text[i] != "[":
        return None
    j = i + 1
    while j < n and text[j] == "=":
        j += 1
    if j < n and text[j] == "[":
        return j - i - 1
    return None


def _skip_long_bracket(text: str, i: int, level: int) -> int:
    """Skip Lua long-bracket string/comment starting at i. Return next index."""
    close_pat = "]" + ("=" * level) + "]"
    end = text.find(close_pat, i + 2 + level)
    if end == -1:
        return len(text)
    return end + len(close_pat)


def _skip_short_string(text: str, i: int, quote: str) -> int:
    """Skip '...' or "...", supporting backslash escapes. Return next index."""
    n = len(text)
    i += 1
    while i < n:
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return i + 1
        i += 1
    return n


def _skip_comment(text: str, i: int) -> int:
    """i points at '--'. Skip a line or block comment. Return next index."""
    n = len(text)
    if not text.startswith("--", i):
        return i

    # Block comment: --[=*[ ... ]=*]
    level = _long_bracket_level(text, i + 2)
    if level is not None:
        return _skip_long_bracket(text, i + 2, level)

    # Line comment (the line break is code)
    nl = text.find("\n", i + 2)
    return n if nl == -1 else nl


def _skip_string_or_long_string(text: str, i: int) -> Optional[int]:
    """If position i starts a string/long-string, return next index; else None."""
    if i >= len(text):
        return None
    ch = text[i]
    if ch in ("'", '"'):
        return _skip_short_string(text, i, ch)
    if ch == "[":
        level = _long_bracket_level(text, i)
        if level is not None:
            return _skip_long_bracket(text, i, level)
    return None


def _blank(chunk: str, fill: str) -> str:
    return "".join(c if c == "\n" else fill for c in chunk)


def scan_source(text: str) -> SourceView:
    """
    Classify `text` in a single pass.

    The loop is a state machine over `Region`; each state only looks ahead to
    decide its own exit, so the pass never backtracks across a boundary.
    """
    text = text or ""
    n = len(text)
    segments: List[Segment] = []
    line_starts: List[int] = [0]
    code: List[str] = []
    masked: List[str] = []

    state = Region.CODE
    seg_start = 0
    seg_line = 0
    line = 0
    closer = ""  # long-bracket closer or quote char of the open string
    body_start = 0  # first masked char of the open string
    i = 0

    def _emit(end: int, closed: bool = False) -> None:
        nonlocal seg_start, seg_line
        if end <= seg_start:
            return
        chunk = text[seg_start:end]
        segments.append(Segment(state, seg_start, end, seg_line))
        if state is Region.CODE:
            code.append(chunk)
            masked.append(chunk)
        elif state is Region.STRING:
            code.append(chunk)
            head = min(body_start - seg_start, len(chunk))
            tail = len(closer) if closed else 0
            body = chunk[head : len(chunk) - tail]
            masked.append(chunk[:head] + _blank(body, MASK_CHAR) + chunk[len(chunk) - tail :])
        else:
            blanked = _blank(chunk, " ")
            code.append(blanked)
            masked.append(blanked)
        seg_start = end
        seg_line = line

    while i < n:
        ch = text[i]

        if state is Region.CODE:
            if ch == "-" and text.startswith("--", i):
                _emit(i)
                level = _long_bracket_level(text, i + 2)
                if level is not None:
                    state = Region.BLOCK_COMMENT
                    closer = "]" + "=" * level + "]"
                    i += 4 + level
                else:
                    state = Region.LINE_COMMENT
                    i += 2
                continue
            if ch in ("'", '"'):
                _emit(i)
                state = Region.STRING
                closer = ch
                body_start = i + 1
                i += 1
                continue
            if ch == "[":
                level = _long_bracket_level(text, i)
                if level is not None:
                    _emit(i)
                    state = Region.STRING
                    closer = "]" + "=" * level + "]"
                    body_start = i + 2 + level
                    i = body_start
                    continue

        elif state is Region.LINE_COMMENT:
            if ch == "\n":
                _emit(i)
                state = Region.CODE
                continue

        elif state is Region.BLOCK_COMMENT or (state is Region.STRING and len(closer) > 1):
            if ch == "]" and text.startswith(closer, i):
                i += len(closer)
                _emit(i, closed=True)
                state = Region.CODE
                continue

        else:  # short string
            if ch == "\\" and i + 1 < n:
                if text[i + 1] == "\n":
                    line += 1
                    line_starts.append(i + 2)
                i += 2
                continue
            if ch == closer:
                i += 1
                _emit(i, closed=True)
                state = Region.CODE
                continue

        if ch == "\n":
            line += 1
            line_starts.append(i + 1)
        i += 1

    _emit(n)
    return SourceView(
        text=text,
        code="".join(code),
        masked="".join(masked),
        segments=segments,
        line_starts=line_starts,
    )

