"""Glob patterns for ``applyTo`` scopes.

Patterns are matched against POSIX-style relative paths:

- ``*`` matches any run of characters inside one path segment
- ``?`` matches one character other than ``/``
- ``[abc]``, ``[a-z]``, ``[!abc]`` match one character from a class
- ``{a,b}`` matches either alternative (alternatives may nest)
- ``**`` as a whole segment matches zero or more segments

A pattern without ``/`` therefore only matches top-level paths. Malformed
patterns raise :class:`PatternError` when compiled.
"""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass

from guideline_corpus.errors import PatternError
from guideline_corpus.utils import normalize_path


@dataclass(frozen=True)
class GlobPattern:
    pattern: str
    regex: re.Pattern[str]

    def matches(self, path: str) -> bool:
        return self.regex.match(normalize_path(path)) is not None


def split_patterns(value: str) -> list[str]:
    """Split a comma separated ``applyTo`` value, ignoring commas inside braces."""
    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for char in value:
        if char == "{":
            depth += 1
        elif char == "}" and depth > 0:
            depth -= 1
        if char == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return [part.strip() for part in parts if part.strip()]


@functools.lru_cache(maxsize=512)
def compile_glob(pattern: str) -> GlobPattern:
    text = pattern.strip()
    if not text:
        raise PatternError(pattern, "empty pattern")
    body = _translate(text)
    try:
        regex = re.compile(rf"\A(?:{body})\Z")
    except re.error as exc:
        raise PatternError(pattern, str(exc)) from exc
    return GlobPattern(pattern=text, regex=regex)


def compile_patterns(value: str) -> tuple[GlobPattern, ...]:
    patterns = split_patterns(value)
    if not patterns:
        raise PatternError(value, "empty pattern")
    return tuple(compile_glob(item) for item in patterns)


def glob_match(path: str, pattern: str) -> bool:
    return compile_glob(pattern).matches(path)


def _translate(pattern: str) -> str:
    out: list[str] = []
    depth = 0
    index = 0
    length = len(pattern)

    while index < length:
        char = pattern[index]

        if char == "*" and pattern.startswith("**", index):
            end = index + 2
            if end < length and pattern[end] == "*":
                raise PatternError(pattern, "more than two consecutive '*'")
            if not _segment_start(pattern, index, depth) or not _segment_end(
                pattern, end, depth
            ):
                raise PatternError(pattern, "'**' must be a whole path segment")
            if end < length and pattern[end] == "/":
                out.append("(?:[^/]+/)*")
                index = end + 1
            else:
                out.append(".*")
                index = end
            continue

        if char == "*":
            out.append("[^/]*")
        elif char == "?":
            out.append("[^/]")
        elif char == "[":
            klass, index = _translate_class(pattern, index)
            out.append(klass)
            continue
        elif char == "{":
            depth += 1
            out.append("(?:")
        elif char == "}":
            if depth == 0:
                raise PatternError(pattern, "unmatched '}'")
            depth -= 1
            out.append(")")
        elif char == "," and depth > 0:
            out.append("|")
        elif char == "\\":
            if index + 1 >= length:
                raise PatternError(pattern, "dangling escape")
            out.append(re.escape(pattern[index + 1]))
            index += 2
            continue
        else:
            out.append(re.escape(char))
        index += 1

    if depth:
        raise PatternError(pattern, "unclosed '{'")
    return "".join(out)


def _segment_start(pattern: str, index: int, depth: int) -> bool:
    if index == 0:
        return True
    previous = pattern[index - 1]
    return previous == "/" or (depth > 0 and previous in "{,")


def _segment_end(pattern: str, index: int, depth: int) -> bool:
    if index == len(pattern):
        return True
    following = pattern[index]
    return following == "/" or (depth > 0 and following in ",}")


def _translate_class(pattern: str, start: int) -> tuple[str, int]:
    index = start + 1
    negate = index < len(pattern) and pattern[index] in "!^"
    if negate:
        index += 1

    body_start = index
    # a leading ']' is a literal member of the class
    if index < len(pattern) and pattern[index] == "]":
        index += 1
    while index < len(pattern) and pattern[index] != "]":
        index += 1
    if index >= len(pattern):
        raise PatternError(pattern, "unclosed character class")

    members = "".join(
        "-" if char == "-" else re.escape(char) for char in pattern[body_start:index]
    )
    if "/" in pattern[body_start:index]:
        raise PatternError(pattern, "'/' inside character class")
    prefix = "[^/" if negate else "["
    return f"{prefix}{members}]", index + 1
