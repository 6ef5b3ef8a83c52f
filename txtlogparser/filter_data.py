"""A text rule that splits a line into matched and unmatched runs."""

from __future__ import annotations

import re
import string
from dataclasses import dataclass
from typing import Any, Mapping

from .logger import get_logger
from .output_line import OutputSubLine

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def _is_word_char(char: str) -> bool:
    return char.isascii() and char.isalnum()


@dataclass
class FilterData:
    """A pattern with matching options and a highlight colour."""

    filter_id: int = -1
    row: int = -1
    pattern: str = ""
    case_sensitive: bool = False
    whole_word: bool = False
    regex: bool = False
    enabled: bool = True
    color: str = ""

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.filter_id,
            "row": self.row,
            "pattern": self.pattern,
            "caseSensitive": self.case_sensitive,
            "wholeWord": self.whole_word,
            "regex": self.regex,
            "enabled": self.enabled,
            "color": self.color,
        }

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "FilterData":
        return cls(
            filter_id=data.get("id", -1),
            row=data.get("row", -1),
            pattern=data.get("pattern", ""),
            case_sensitive=data.get("caseSensitive", False),
            whole_word=data.get("wholeWord", False),
            regex=data.get("regex", False),
            enabled=data.get("enabled", True),
            color=data.get("color", ""),
        )

    def update(self, other: "FilterData") -> bool:
        """Copy pattern, options and colour from ``other``; True if anything changed.

        Raises ValueError if ``other`` describes a different rule.
        """
        if other.filter_id != self.filter_id:
            raise ValueError(
                f"cannot update rule {self.filter_id} from rule {other.filter_id}"
            )
        changed = False
        for name in ("pattern", "case_sensitive", "whole_word", "regex", "enabled", "color"):
            value = getattr(other, name)
            if getattr(self, name) != value:
                setattr(self, name, value)
                changed = True
        return changed

    def apply(self, content: str, offset: int = 0) -> list[OutputSubLine]:
        """Split ``content`` into runs; nothing is returned when the rule is disabled.

        ``offset`` is the position of ``content`` within its line and is added
        to the start of every run.
        """
        if not self.enabled:
            return []
        if self.regex:
            return self.apply_regex(content, offset)
        return self.apply_non_regex(content, offset)

    def apply_non_regex(self, content: str, offset: int = 0) -> list[OutputSubLine]:
        """Plain substring matching; unmatched text is kept as untagged runs."""
        pattern = self.pattern
        haystack = content
        if not self.case_sensitive:
            pattern = pattern.translate(_ASCII_LOWER)
            haystack = haystack.translate(_ASCII_LOWER)
        if not pattern:
            return [OutputSubLine(content, offset)] if content else []

        length = len(pattern)
        sub_lines: list[OutputSubLine] = []
        pos = 0
        last = 0
        while (pos := haystack.find(pattern, pos)) != -1:
            end = pos + length
            if self._is_whole_word_match(haystack, pos, end):
                if pos > last:
                    sub_lines.append(OutputSubLine(content[last:pos], offset + last))
                sub_lines.append(self._matched(content[pos:end], offset + pos))
                last = end
            pos = end
        if last < len(content):
            sub_lines.append(OutputSubLine(content[last:], offset + last))
        return sub_lines

    def apply_regex(self, content: str, offset: int = 0) -> list[OutputSubLine]:
        """Regular-expression matching.

        Returns nothing when the expression does not match or is invalid;
        an invalid expression is reported to the logger.
        """
        pattern = rf"\b{self.pattern}\b" if self.whole_word else self.pattern
        flags = re.ASCII if self.case_sensitive else re.ASCII | re.IGNORECASE
        try:
            compiled = re.compile(pattern, flags)
        except re.error as exc:
            get_logger().error(f"Invalid regex pattern: {self.pattern}, error: {exc}")
            return []

        sub_lines: list[OutputSubLine] = []
        last = 0
        for match in compiled.finditer(content):
            start, end = match.span()
            if start > last:
                sub_lines.append(OutputSubLine(content[last:start], offset + last))
            sub_lines.append(self._matched(match.group(), offset + start))
            last = end
        if sub_lines and last < len(content):
            sub_lines.append(OutputSubLine(content[last:], offset + last))
        return sub_lines

    def _is_whole_word_match(self, haystack: str, start: int, end: int) -> bool:
        if not self.whole_word:
            return True
        left = start == 0 or not _is_word_char(haystack[start - 1])
        right = end == len(haystack) or not _is_word_char(haystack[end])
        return left and right

    def _matched(self, content: str, start: int) -> OutputSubLine:
        return OutputSubLine(
            content,
            start,
            color=self.color,
            filter_id=self.filter_id,
            filter_row=self.row,
        )