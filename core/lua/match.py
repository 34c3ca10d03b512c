# -*- coding: utf-8 -*-
"""Bracket matching helpers for Lua."""

from __future__ import annotations

from typing import List, Optional

from core.lua.scan import _skip_comment, _skip_string_or_long_string

__all__ = [
    "find_matching",
]

_OPENERS = {")": "(", "}": "{", "]": "["}


def find_matching(text: str, open_idx: int, open_ch: str = "(", close_ch: str = ")") -> Optional[int]:
    """
    Index of the bracket closing `open_ch` at `open_idx`, or None when unbalanced.

    Strings, comments and long brackets are skipped, so this works on the raw
    text as well as on the comment-free or masked projections of it.
    """
    n = len(text)
    if open_idx >= n or text[open_idx] != open_ch:
        return None

    stack: List[str] = [open_ch]
    i = open_idx + 1
    while i < n:
        if text.startswith("--", i):
            i = _skip_comment(text, i)
            continue
        nxt = _skip_string_or_long_string(text, i)
        if nxt is not None:
            i = nxt
            continue

        ch = text[i]
        if ch in "({[":
            stack.append(ch)
        elif ch in ")}]":
            if stack[-1] == _OPENERS[ch]:
                stack.pop()
                if not stack:
                    return i if ch == close_ch else None
        i += 1
    return None

