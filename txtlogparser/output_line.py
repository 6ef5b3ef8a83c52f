"""Pieces of a displayed line and the window of lines that is visible."""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_VISIBLE_LINE_COUNT = 50000


@dataclass
class OutputSubLine:
    """A run of text within one line, tagged with the filter or search that matched it.

    ``start`` is the position of ``content`` within the full line text.
    An id of -1 means the run was not matched.
    """

    content: str = ""
    start: int = 0
    color: str = ""
    file_id: int = -1
    filter_id: int = -1
    filter_row: int = -1
    search_id: int = -1
    search_row: int = -1

    @property
    def end(self) -> int:
        """Position just past the last character of ``content``."""
        return self.start + len(self.content)


@dataclass
class OutputLine:
    """One output line: where it came from and the runs it is made of."""

    file_id: int = -1
    file_row: int = -1
    line_index: int = -1
    sub_lines: list[OutputSubLine] = field(default_factory=list)

    def add_sub_line(self, sub_line: OutputSubLine) -> None:
        self.sub_lines.append(sub_line)

    @property
    def text(self) -> str:
        """The line's runs joined together."""
        return "".join(sub.content for sub in self.sub_lines)


class OutputWindow:
    """Tracks which range of output lines is visible."""

    def __init__(self, visible_line_count: int = DEFAULT_VISIBLE_LINE_COUNT) -> None:
        if visible_line_count <= 0:
            raise ValueError("visible_line_count must be positive")
        self._visible_line_count = visible_line_count
        self._reset()

    def _reset(self) -> None:
        self._total_lines = 0
        self._current_line = -1
        self._visible_top = -1
        self._visible_bottom = -1

    @property
    def visible_line_count(self) -> int:
        return self._visible_line_count

    @property
    def total_lines(self) -> int:
        return self._total_lines

    @property
    def visible_top(self) -> int:
        return self._visible_top

    @property
    def visible_bottom(self) -> int:
        return self._visible_bottom

    @property
    def current_line(self) -> int:
        return self._current_line

    def set_lines_count(self, line_count: int) -> None:
        """Resize the window to ``line_count`` lines, keeping the top where possible."""
        if line_count <= 0:
            self._reset()
            return
        self._total_lines = line_count
        if self._current_line < 0:
            self._current_line = 0
        if self._visible_top < 0:
            self._visible_top = 0
        self._visible_bottom = self._visible_top + self._visible_line_count - 1
        if self._visible_bottom >= self._total_lines:
            self._visible_bottom = self._total_lines - 1
            self._visible_top = max(0, self._visible_bottom - self._visible_line_count + 1)

    def clear_all_lines(self) -> None:
        self._reset()