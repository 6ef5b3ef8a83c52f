"""Stepping forwards and backwards through the runs a rule matched."""

from __future__ import annotations

import bisect
from dataclasses import dataclass
from typing import Collection, Iterator, Optional, Sequence

from .output_line import OutputLine, OutputSubLine

_KEYS = ("filter_id", "search_id")


@dataclass(frozen=True)
class Match:
    """A matched run: its output line and its character span within that line."""

    line_index: int
    start: int
    end: int


def _check_key(key: str) -> None:
    if key not in _KEYS:
        raise ValueError(f"key must be one of {_KEYS}, not {key!r}")


def _forward(line: OutputLine) -> Iterator[tuple[int, OutputSubLine]]:
    pos = 0
    for sub in line.sub_lines:
        yield pos, sub
        pos += len(sub.content)


def _backward(line: OutputLine) -> Iterator[tuple[int, OutputSubLine]]:
    pos = sum(len(sub.content) for sub in line.sub_lines)
    for sub in reversed(line.sub_lines):
        pos -= len(sub.content)
        yield pos, sub


def _make(line_index: int, pos: int, sub: OutputSubLine) -> Match:
    return Match(line_index, pos, pos + len(sub.content))


def next_match(
    lines: Sequence[OutputLine],
    line_set: Collection[int],
    key: str,
    rule_id: int,
    line_index: int,
    char_index: int,
) -> Optional[Match]:
    """Find the first run matched by ``rule_id`` at or after the given position.

    ``line_set`` holds the indices of the lines in ``lines`` that the rule
    matched; ``key`` names the id attribute to compare (``filter_id`` or
    ``search_id``). The search wraps to the first matched line after the last.
    """
    _check_key(key)
    indices = sorted(line_set)
    if not indices:
        return None

    if line_index in line_set:
        for pos, sub in _forward(lines[line_index]):
            if pos < char_index:
                continue
            if getattr(sub, key) == rule_id:
                return _make(line_index, pos, sub)

    after = bisect.bisect_right(indices, line_index)
    target = indices[after] if after < len(indices) else indices[0]
    for pos, sub in _forward(lines[target]):
        if getattr(sub, key) == rule_id:
            return _make(target, pos, sub)
    return None


def previous_match(
    lines: Sequence[OutputLine],
    line_set: Collection[int],
    key: str,
    rule_id: int,
    line_index: int,
    char_index: int,
) -> Optional[Match]:
    """Find the last run matched by ``rule_id`` that starts before the given position.

    Arguments are as for :func:`next_match`. The search wraps to the last
    matched line before the first.
    """
    _check_key(key)
    indices = sorted(line_set)
    if not indices:
        return None

    if line_index in line_set:
        for pos, sub in _backward(lines[line_index]):
            if pos >= char_index:
                continue
            if getattr(sub, key) == rule_id:
                return _make(line_index, pos, sub)

    before = bisect.bisect_left(indices, line_index)
    target = indices[before - 1] if before > 0 else indices[-1]
    for pos, sub in _backward(lines[target]):
        if getattr(sub, key) == rule_id:
            return _make(target, pos, sub)
    return None