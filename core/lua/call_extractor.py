# -*- coding: utf-8 -*-
"""Lua function call extraction helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Union

from core.lua.expr import parse_quoted
from core.lua.match import find_matching
from core.lua.scan import (
    SourceView,
    _is_ident_char,
    _is_ident_start,
    _skip_short_string,
    _skip_string_or_long_string,
    scan_source,
)
from core.lua.split import split_top_level

__all__ = [
    "LuaCall",
    "LuaCallExtractor",
    "PROPERTY_CALL",
    "REQUIRE_CALL",
]

REQUIRE_CALL = "require"
PROPERTY_CALL = "go.property"

_LUA_KEYWORDS = {
    "and",
    "break",
    "do",
    "else",
    "elseif",
    "end",
    "false",
    "for",
    "function",
    "goto",
    "if",
    "in",
    "local",
    "nil",
    "not",
    "or",
    "repeat",
    "return",
    "then",
    "true",
    "until",
    "while",
}


@dataclass(frozen=True)
class LuaCall:
    """
    One recognized call. `start`/`end` delimit the call in the original text
    (end exclusive); `line` is 0-based. For `f "str"` calls there are no
    parentheses and `open_paren` is None.
    """

    name: str
    full_name: str
    start: int
    end: int
    open_paren: Optional[int]
    args: str
    arg_list: List[str]
    line: int
    col: int

    @property
    def parenthesized(self) -> bool:
        return self.open_paren is not None


class LuaCallExtractor:
    """
    Extract Lua function calls from the code regions of a script.

    Matching runs over the masked projection of the source (see
    `core.lua.scan.scan_source`), so names inside comments and strings are
    never seen. Argument text is sliced from the comment-free projection.

    Supports:
    - NAME(...)
    - obj.NAME(...)
    - obj:NAME(...)
    - NAME "str" / NAME 'str' (with `allow_string_arg=True`)
    """

    def __init__(self, content: Union[str, SourceView]):
        self.view = content if isinstance(content, SourceView) else scan_source(content)

    def iter_calls(
        self,
        names: Union[str, Sequence[str]],
        *,
        allow_string_arg: bool = False,
    ) -> Iterator[LuaCall]:
        if isinstance(names, str):
            targets = {names}
        else:
            targets = set(names)

        text = self.view.masked
        n = len(text)
        i = 0

        while i < n:
            nxt = _skip_string_or_long_string(text, i)
            if nxt is not None:
                i = nxt
                continue

            ch = text[i]

            if not _is_ident_start(ch):
                i += 1
                continue

            # first ident
            j = i + 1
            while j < n and _is_ident_char(text[j]):
                j += 1
            first = text[i:j]
            if first in _LUA_KEYWORDS:
                i = j
                continue

            full = first
            last = first
            k = j

            # ".ident" / ":ident" chain
            while True:
                kk = self._skip_ws(text, k)
                if kk < n and text[kk] in ".:" and not text.startswith("..", kk):
                    sep = text[kk]
                    kk = self._skip_ws(text, kk + 1)
                    if kk < n and _is_ident_start(text[kk]):
                        jj = kk + 1
                        while jj < n and _is_ident_char(text[jj]):
                            jj += 1
                        seg = text[kk:jj]
                        full = full + sep + seg
                        last = seg
                        k = jj
                        continue
                break

            if full in targets:
                call = self._call_at(i, full, last, k, allow_string_arg)
                if call is not None:
                    yield call
                    i = call.end
                    continue

            i = k

    def extract_calls(self, names: Union[str, Sequence[str]], **kwargs: object) -> List[LuaCall]:
        return list(self.iter_calls(names, **kwargs))

    def extract_requires(self, name: str = REQUIRE_CALL) -> List[LuaCall]:
        """Require calls whose single argument is a quoted string literal."""
        out: List[LuaCall] = []
        for call in self.iter_calls(name, allow_string_arg=True):
            if len(call.arg_list) == 1 and parse_quoted(call.arg_list[0]) is not None:
                out.append(call)
        return out

    def extract_properties(self, name: str = PROPERTY_CALL) -> List[LuaCall]:
        return self.extract_calls(name)

    def split_args(self, args: str) -> List[str]:
        return split_top_level(args, ",")

    @staticmethod
    def _skip_ws(text: str, i: int) -> int:
        n = len(text)
        while i < n and text[i].isspace():
            i += 1
        return i

    def _call_at(self, start: int, full: str, last: str, k: int, allow_string_arg: bool) -> Optional[LuaCall]:
        masked = self.view.masked
        code = self.view.code
        kk = self._skip_ws(masked, k)
        if kk >= len(masked):
            return None

        if masked[kk] == "(":
            close = find_matching(masked, kk, "(", ")")
            if close is None:
                return None
            args = code[kk + 1 : close]
            open_paren: Optional[int] = kk
            end = close + 1
        elif allow_string_arg and masked[kk] in ("'", '"'):
            # string bodies are masked, so the first matching quote closes it
            quote = masked[kk]
            end = _skip_short_string(masked, kk, quote)
            if end - 1 <= kk or masked[end - 1] != quote:
                return None
            args = code[kk:end]
            open_paren = None
        else:
            return None

        line = self.view.line_of(start)
        return LuaCall(
            name=last,
            full_name=full,
            start=start,
            end=end,
            open_paren=open_paren,
            args=args,
            arg_list=self.split_args(args),
            line=line,
            col=start - self.view.line_starts[line],
        )
