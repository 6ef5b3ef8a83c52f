"""The output view of a workspace: file lines after filters, with searches highlighted."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Optional

from .file_data import FileData
from .filter_data import FilterData
from .logger import get_logger
from .matches import Match, next_match, previous_match
from .output_line import OutputLine, OutputSubLine, OutputWindow


@dataclass
class FileLineInfo:
    """One line read from a file."""

    file_id: int
    file_row: int
    line_index: int
    content: str
    color: str = ""


def _read_lines(path: str) -> list[str]:
    """Lines of a text file without their terminators; stray CRs become spaces."""
    try:
        with open(path, encoding="utf-8", errors="replace", newline="") as handle:
            text = handle.read()
    except OSError:
        return []
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [(line[:-1] if line.endswith("\r") else line).replace("\r", " ") for line in lines]


def _apply_search(search: FilterData, content: str, offset: int) -> list[OutputSubLine]:
    """Run a search rule and tag its matched runs as search matches."""
    result = []
    for sub in search.apply(content, offset):
        if sub.filter_id != -1:
            sub = dataclasses.replace(
                sub,
                search_id=sub.filter_id,
                search_row=sub.filter_row,
                filter_id=-1,
                filter_row=-1,
            )
        result.append(sub)
    return result


def _overlay(base: list[OutputSubLine], searched: OutputSubLine) -> list[OutputSubLine]:
    """Cut ``searched`` into the runs of ``base`` that it overlaps."""
    s_first, s_last = searched.start, searched.end - 1
    result: list[OutputSubLine] = []
    for sub in base:
        c_first, c_last = sub.start, sub.end - 1
        if s_first > c_last or s_last < c_first:
            result.append(sub)
            continue
        total = len(sub.content)
        left = s_first - c_first if c_first < s_first else 0
        right = c_last - s_last if c_last > s_last else 0
        middle = total - left - right
        if left > 0:
            result.append(dataclasses.replace(sub, content=sub.content[:left]))
        if middle > 0:
            result.append(
                dataclasses.replace(
                    searched,
                    content=sub.content[left:left + middle],
                    start=c_first + left,
                )
            )
        if right > 0:
            result.append(
                dataclasses.replace(
                    sub,
                    content=sub.content[left + middle:],
                    start=c_first + left + middle,
                )
            )
    return result


class OutputData:
    """Holds a workspace's files, filters and searches and builds the output lines.

    Filters decide which lines are shown; searches only highlight within
    them. Search rules are :class:`FilterData` objects whose matches are
    tagged with ``search_id`` instead of ``filter_id``.
    """

    def __init__(self, window: Optional[OutputWindow] = None) -> None:
        self._active = False
        self._all_files: dict[int, FileData] = {}
        self._loaded_files: dict[int, FileData] = {}
        self._line_infos: dict[int, list[FileLineInfo]] = {}

        self._after_filters: list[OutputLine] = []
        self._filters: dict[int, FilterData] = {}
        self._enabled_filters: dict[int, FilterData] = {}
        self._filter_match_count: dict[int, int] = {}
        self._filter_line_map: dict[int, set[int]] = {}

        self._after_searches: list[OutputLine] = []
        self._searches: dict[int, FilterData] = {}
        self._enabled_searches: dict[int, FilterData] = {}
        self._search_match_count: dict[int, int] = {}
        self._search_line_map: dict[int, set[int]] = {}

        self._output_lines: list[OutputLine] = []
        self._window = window if window is not None else OutputWindow()
        self._refresh_paused = False
        self._pending_recreate = False

    @property
    def active(self) -> bool:
        return self._active

    @property
    def window(self) -> OutputWindow:
        return self._window

    def set_active(self, active: bool) -> None:
        """Activate or deactivate; activating loads every file not yet loaded."""
        self._active = active
        if active:
            self.pause_refresh()
            for file_id in sorted(self._all_files):
                self._load_file(self._all_files[file_id])
            self.resume_refresh()
            self.refresh()

    # Files

    def add_file(self, file: FileData) -> None:
        self._all_files[file.file_id] = file
        if self._active:
            self._load_file(file)

    def remove_file(self, file_id: int) -> None:
        if file_id not in self._all_files:
            return
        self._loaded_files.pop(file_id, None)
        if self._line_infos.pop(file_id, None) is not None:
            self._recreate_output_lines()
        del self._all_files[file_id]

    def update_file_row(self, file_id: int, row: int) -> None:
        file = self._all_files.get(file_id)
        if file is not None:
            file.file_row = row
        self._recreate_output_lines()

    def _load_file(self, file: FileData) -> None:
        if file.file_id in self._loaded_files:
            return
        self._loaded_files[file.file_id] = file
        infos = [
            FileLineInfo(file.file_id, file.file_row, index, line)
            for index, line in enumerate(_read_lines(file.file_path))
        ]
        self._line_infos[file.file_id] = infos
        if infos:
            self._recreate_output_lines()

    # Filters

    def add_filter(self, filter_data: FilterData) -> None:
        self._filters[filter_data.filter_id] = filter_data
        if filter_data.enabled:
            self._enabled_filters[filter_data.row] = filter_data
            self._recreate_output_lines()

    def remove_filter(self, filter_id: int) -> None:
        filter_data = self._filters.get(filter_id)
        if filter_data is None:
            return
        if self._enabled_filters.pop(filter_data.row, None) is not None:
            self._recreate_output_lines()
        del self._filters[filter_id]

    def update_filter_row(self, filter_id: int, row: int) -> None:
        """Place a filter at ``row`` in the application order; KeyError if unknown."""
        self._enabled_filters[row] = self._filters[filter_id]
        self._recreate_output_lines()

    def clear_filters(self) -> None:
        self._filters.clear()
        if self._enabled_filters:
            self._enabled_filters.clear()
            self._recreate_output_lines()

    def update_filter(self, filter_data: FilterData) -> None:
        existing = self._filters.get(filter_data.filter_id)
        if existing is None:
            return
        existing.update(filter_data)
        if filter_data.enabled:
            self._enabled_filters[filter_data.row] = existing
        else:
            self._enabled_filters.pop(filter_data.row, None)
        self._recreate_output_lines()

    def filter_match_counts(self) -> dict[int, int]:
        return dict(sorted(self._filter_match_count.items()))

    # Searches

    def add_search(self, search: FilterData) -> None:
        self._searches[search.filter_id] = search
        if search.enabled:
            self._enabled_searches[search.row] = search
            self._recreate_output_lines()

    def remove_search(self, search_id: int) -> None:
        search = self._searches.get(search_id)
        if search is None:
            return
        if self._enabled_searches.pop(search.row, None) is not None:
            self._recreate_output_lines()
        del self._searches[search_id]

    def update_search_row(self, search_id: int, row: int) -> None:
        """Place a search at ``row`` in the application order; KeyError if unknown."""
        self._enabled_searches[row] = self._searches[search_id]
        self._recreate_output_lines()

    def clear_searches(self) -> None:
        self._searches.clear()
        if self._enabled_searches:
            self._enabled_searches.clear()
            self._recreate_output_lines()

    def update_search(self, search: FilterData) -> None:
        existing = self._searches.get(search.filter_id)
        if existing is None:
            return
        existing.update(search)
        if search.enabled:
            self._enabled_searches[search.row] = existing
        else:
            self._enabled_searches.pop(search.row, None)
        self._recreate_output_lines()

    def search_match_counts(self) -> dict[int, int]:
        return dict(sorted(self._search_match_count.items()))

    # Display

    def pause_refresh(self) -> None:
        self._refresh_paused = True

    def resume_refresh(self) -> None:
        self._refresh_paused = False

    def refresh(self) -> None:
        """Rebuild the output if a rebuild was deferred while paused."""
        if self._refresh_paused:
            return
        if self._pending_recreate:
            self._recreate_output_lines()

    def output_lines(self) -> list[OutputLine]:
        """The output lines inside the visible window."""
        if self._window.total_lines == 0:
            return []
        top, bottom = self._window.visible_top, self._window.visible_bottom
        if top < 0 or bottom < 0 or top > bottom:
            return []
        if top >= len(self._output_lines) or bottom >= len(self._output_lines):
            return []
        return self._output_lines[top:bottom + 1]

    def _recreate_output_lines(self) -> None:
        if self._refresh_paused:
            self._pending_recreate = True
            return
        self._pending_recreate = False
        self._filter_match_count = {}
        self._filter_line_map = {}
        self._search_match_count = {}
        self._search_line_map = {}
        self._after_filters = self._apply_enabled_filters()
        self._after_searches = self._apply_enabled_searches()
        self._output_lines = self._combine()
        self._window.set_lines_count(len(self._output_lines))
        get_logger().info(f"Recreating output lines, total lines: {len(self._output_lines)}")

    def _apply_enabled_filters(self) -> list[OutputLine]:
        row_to_id = {self._all_files[file_id].file_row: file_id for file_id in self._line_infos}
        filters = [self._enabled_filters[row] for row in sorted(self._enabled_filters)]
        result: list[OutputLine] = []
        for file_row in sorted(row_to_id):
            file_id = row_to_id[file_row]
            for info in self._line_infos[file_id]:
                sub_lines = [OutputSubLine(info.content, 0)]
                for rule in filters:
                    next_subs: list[OutputSubLine] = []
                    for sub in sub_lines:
                        if sub.filter_id != -1:
                            next_subs.append(sub)
                        else:
                            next_subs.extend(rule.apply(sub.content, sub.start))
                    sub_lines = next_subs
                line = OutputLine(file_id, file_row, info.line_index, list(sub_lines))
                if not filters:
                    result.append(line)
                    continue
                matched = False
                for sub in sub_lines:
                    if sub.filter_id != -1:
                        matched = True
                        counts = self._filter_match_count
                        counts[sub.filter_id] = counts.get(sub.filter_id, 0) + 1
                        self._filter_line_map.setdefault(sub.filter_id, set()).add(len(result))
                if matched:
                    result.append(line)
        return result

    def _apply_enabled_searches(self) -> list[OutputLine]:
        searches = [self._enabled_searches[row] for row in sorted(self._enabled_searches)]
        result: list[OutputLine] = []
        for filtered in self._after_filters:
            info = self._line_infos[filtered.file_id][filtered.line_index]
            sub_lines = [OutputSubLine(info.content, 0)]
            for rule in searches:
                next_subs: list[OutputSubLine] = []
                for sub in sub_lines:
                    if sub.search_id != -1:
                        next_subs.append(sub)
                    else:
                        next_subs.extend(_apply_search(rule, sub.content, sub.start))
                sub_lines = next_subs
            for sub in sub_lines:
                if sub.search_id != -1:
                    counts = self._search_match_count
                    counts[sub.search_id] = counts.get(sub.search_id, 0) + 1
                    self._search_line_map.setdefault(sub.search_id, set()).add(len(result))
            result.append(
                OutputLine(filtered.file_id, filtered.file_row, filtered.line_index, sub_lines)
            )
        return result

    def _combine(self) -> list[OutputLine]:
        result: list[OutputLine] = []
        for filtered, searched in zip(self._after_filters, self._after_searches):
            if not searched.sub_lines:
                sub_lines = list(filtered.sub_lines)
            elif not filtered.sub_lines:
                sub_lines = list(searched.sub_lines)
            else:
                sub_lines = list(filtered.sub_lines)
                for search_sub in searched.sub_lines:
                    if search_sub.search_id != -1:
                        sub_lines = _overlay(sub_lines, search_sub)
            result.append(
                OutputLine(filtered.file_id, filtered.file_row, filtered.line_index, sub_lines)
            )
        return result

    # Navigation

    def next_match_by_filter(self, filter_id: int, line_index: int, char_index: int) -> Optional[Match]:
        return next_match(
            self._after_filters,
            self._filter_line_map.get(filter_id, set()),
            "filter_id",
            filter_id,
            line_index,
            char_index,
        )

    def previous_match_by_filter(
        self, filter_id: int, line_index: int, char_index: int
    ) -> Optional[Match]:
        return previous_match(
            self._after_filters,
            self._filter_line_map.get(filter_id, set()),
            "filter_id",
            filter_id,
            line_index,
            char_index,
        )

    def next_match_by_search(self, search_id: int, line_index: int, char_index: int) -> Optional[Match]:
        return next_match(
            self._after_searches,
            self._search_line_map.get(search_id, set()),
            "search_id",
            search_id,
            line_index,
            char_index,
        )

    def previous_match_by_search(
        self, search_id: int, line_index: int, char_index: int
    ) -> Optional[Match]:
        return previous_match(
            self._after_searches,
            self._search_line_map.get(search_id, set()),
            "search_id",
            search_id,
            line_index,
            char_index,
        )