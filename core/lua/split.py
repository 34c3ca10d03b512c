# -*- coding: utf-8 -*-
"""Balanced splitting helpers for Lua."""

from __future__ import annotations

from typing import List, Tuple

from core.lua.scan import _is_ident_char, _is_ident_start, _skip_comment, _skip_string_or_long_string

__all__ = [
    "split_top_level",
]

_OPENERS = {")": "(", "}": "{", "]": "["}


class _BlockTracker:
    """Keeps track of `function/if/for/while/repeat/do ... end/until` nesting."""

    def __init__(self) -> None:
        self.stack: List[Tuple[str, bool]] = []  # (kind, awaiting_do)

    def __bool__(self) -> bool:
        return bool(self.stack)

    def feed(self, word: str) -> None:
        if word in ("function", "if", "repeat"):
            self.stack.append((word, False))
        elif word in ("for", "while"):
            self.stack.append((word, True))
        elif word == "do":
            if self.stack and self.stack[-1][1]:
                self.stack[-1] = (self.stack[-1][0], False)
            else:
                self.stack.append(("do", False))
        elif word == "end":
            if self.stack:
                self.stack.pop()
        elif word == "until":
            for idx in range(len(self.stack) - 1, -1, -1):
                if self.stack[idx][0] == "repeat":
                    del self.stack[idx:]
                    return


def split_top_level(text: str, sep: str = ",") -> List[str]:
    """
    Split `text` on `sep` outside of brackets, strings, comments and Lua blocks.

    Pieces are stripped. Empty pieces between separators are kept so callers
    can count arguments; an empty or blank input yields [].
    """
    if not text or not text.strip():
        return []

    n = len(text)
    parts: List[str] = []
    brackets: List[str] = []
    blocks = _BlockTracker()
    start = 0
    i = 0

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
            brackets.append(ch)
        elif ch in ")}]":
            if brackets and brackets[-1] == _OPENERS[ch]:
                brackets.pop()
        elif _is_ident_start(ch):
            j = i + 1
            while j < n and _is_ident_char(text[j]):
                j += 1
            blocks.feed(text[i:j])
            i = j
            continue
        elif ch == sep and not brackets and not blocks:
            parts.append(text[start:i].strip())
            start = i + 1

        i += 1

    parts.append(text[start:].strip())
    return parts
