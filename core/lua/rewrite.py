# -*- coding: utf-8 -*-
"""Delete recognized statements from a script, leaving every other byte alone."""

from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

from core.lua.call_extractor import LuaCall
from core.lua.scan import Region, SourceView

__all__ = [
    "statement_span",
    "strip_statements",
]

logger = logging.getLogger(__name__)

_INLINE_WS = " \t\r\f\v"


def statement_span(view: SourceView, call: LuaCall) -> Tuple[int, int]:
    """
    Widen a call span to the statement that holds it.

    - leading indentation is included when nothing else precedes the call
    - trailing blanks and an optional `;` are included
    - when the call opened the line and only blanks or a line comment follow,
      the rest of the line and its line break are included too
    """
    text = view.text
    n = len(text)
    line_start = view.line_starts[view.line_of(call.start)]

    start = call.start
    whole_line = not text[line_start : call.start].strip(_INLINE_WS)
    if whole_line:
        start = line_start

    end = call.end
    while end < n and text[end] in _INLINE_WS:
        end += 1
    if end < n and text[end] == ";":
        end += 1

    if not whole_line:
        logger.warning(
            "line %d: %s does not start its line; the code before it may now read the next statement",
            view.line_of(call.start),
            call.full_name,
        )
        return start, end

    eol = view.line_end(end)
    rest = view.code[end:eol]
    if rest.strip() or view.region_at(eol) is not Region.CODE:
        # more code follows, or a block comment/string runs past the line break
        while end > call.end and text[end - 1] in _INLINE_WS:
            end -= 1
        return start, end
    return start, min(eol + 1, n)


def strip_statements(view: SourceView, calls: Iterable[LuaCall]) -> str:
    """Return `view.text` with the statement of every call in `calls` deleted."""
    spans = sorted(statement_span(view, call) for call in calls)
    text = view.text
    out: List[str] = []
    pos = 0
    for start, end in spans:
        if start < pos:
            start = pos
        out.append(text[pos:start])
        pos = max(pos, end)
    out.append(text[pos:])
    return "".join(out)
