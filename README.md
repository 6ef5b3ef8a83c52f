# txtlogparser

An engine for a plain-text log viewer. It reads log files and keeps only the
lines that match a set of ordered filters. Within those lines it highlights
search hits. It can also step to the next or previous match of any filter or
search. The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Example

```python
from txtlogparser.file_data import FileData
from txtlogparser.filter_data import FilterData
from txtlogparser.output_data import OutputData

output = OutputData()
output.add_file(FileData.from_path(1, 0, "app.log"))
output.add_filter(FilterData(filter_id=1, row=0, pattern="error", color="#F44336"))
output.add_search(FilterData(filter_id=7, row=0, pattern="timeout", color="#2195F3"))
output.set_active(True)

for line in output.output_lines():
    print(line.line_index, line.text)

print(output.filter_match_counts())   # {filter_id: number of matched runs}
match = output.next_match_by_filter(1, 0, 0)
if match is not None:
    print(match.line_index, match.start, match.end)
```

## Modules

### `txtlogparser.file_data`

`FileData` is a dataclass that describes one file: `file_id`, `file_row`,
`file_path`, `file_name`, `modified_time`, `file_size`, `selected` and `exists`.

- `FileData.from_path(file_id, file_row, path)` reads the file's size and
  modification time from disk and marks it as selected. It raises `OSError`
  if the file cannot be read.
- `to_json()` returns a dict that `FileData.from_json(data)` can read back.
  `from_json` raises `ValueError` if the entry has no id.
- `display_name()` returns the stored name, or the last part of the path if
  no name is stored.

### `txtlogparser.filter_data`

`FilterData` is one rule. It is used both for filters and for searches. Its
fields are `filter_id`, `row`, `pattern`, `case_sensitive`, `whole_word`,
`regex`, `enabled` and `color`.

- `apply(content, offset=0)` splits a piece of text into `OutputSubLine` runs.
  A matched run carries the rule's id, row and colour. An unmatched run has an
  id of -1. A disabled rule returns an empty list.
- Plain matching (`apply_non_regex`) keeps the unmatched text. Case-insensitive
  matching and whole-word checks use ASCII letters and digits only.
- Regex matching (`apply_regex`) returns an empty list when the expression
  does not match the text. An invalid expression is reported to the logger and
  also gives an empty list.
- `update(other)` copies the pattern, the options and the colour from another
  rule with the same id. It returns `True` if anything changed. A rule with a
  different id raises `ValueError`.
- `to_json()` and `FilterData.from_json(data)` convert the rule to and from a dict.

### `txtlogparser.output_line`

- `OutputSubLine` is a run of text. It holds its `start` position within the
  line (with an `end` property), a colour, and its filter or search id and row.
- `OutputLine` holds the source file id and row, the line index, and its
  `sub_lines`. The `text` property joins the runs.
- `OutputWindow` tracks the visible range: `total_lines`, `visible_top`,
  `visible_bottom` and `current_line`. The range is 50000 lines unless you
  give another size. `set_lines_count(n)` resizes the window and
  `clear_all_lines()` resets it.

### `txtlogparser.output_data`

`OutputData` holds the files, filters and searches of one view.

- Files are read only while the view is active. `set_active(True)` loads
  every file that was added and is not loaded yet. Lines are read as UTF-8,
  and line endings are removed. A stray carriage return inside a line becomes
  a space.
- Enabled filters run in the order of their row. A line is kept only if some
  filter matches it. With no enabled filters, every line is kept. Files are
  ordered by their row.
- Searches run on the kept lines. They do not remove lines; they only tag
  runs with `search_id`. The final lines overlay the search runs on the
  filter runs.
- Files are managed with `add_file`, `remove_file` and `update_file_row`.
  Filters use `add_filter`, `remove_filter`, `update_filter_row`,
  `update_filter` and `clear_filters`. Searches use the matching
  `*_search` methods.
- `filter_match_counts()` and `search_match_counts()` return the number of
  matched runs for each rule id.
- `pause_refresh()` defers rebuilds. After `resume_refresh()`, `refresh()`
  runs any rebuild that was deferred. Each rebuild logs the line count
  through the application logger.
- `output_lines()` returns the lines inside the visible window.
- `next_match_by_filter`, `previous_match_by_filter`, `next_match_by_search`
  and `previous_match_by_search` take `(rule_id, line_index, char_index)`.
  Each returns a `Match`, or `None` if there is no match. The search wraps
  around the ends of the output.

### `txtlogparser.matches`

`next_match(lines, line_set, key, rule_id, line_index, char_index)` and
`previous_match(...)` step through matched runs in any list of `OutputLine`.
Here `key` is `"filter_id"` or `"search_id"`. They return a frozen `Match`
with `line_index`, `start` and `end`.

### `txtlogparser.colors`

- `rgb_to_hex(r, g, b)` returns `#rrggbb` in lower case.
- `hex_to_rgb(hex_str)` returns an `(r, g, b)` tuple, or raises `ValueError`
  if the text is not a hex colour.
- `calculate_luminance(r, g, b)` returns the WCAG 2.0 relative luminance.
  `is_color_valid(hex_str)` accepts well-formed colours whose luminance is
  between 0.2 and 0.8.
- `ColorData` is an ordered RGB value. It provides `from_hex`,
  `luminance()` (0.299R + 0.587G + 0.114B), `contrast_ratio(background)` and
  `to_hex()`.
- `predefined_colors()` returns the 20-colour highlight palette.
- `FilterSearchColorManager` tracks colours in use. `next_color()` suggests a
  colour but does not reserve it. It prefers released custom colours, then the
  palette in order, and gives `#000000` when every colour is taken.
  `pop_color(color)` marks a colour as taken and `push_color(color)` releases it.

### `txtlogparser.logger` and `txtlogparser.logger_bridge`

- `get_logger()` returns a process-wide `Logger`. It writes timestamped lines
  to stdout and, after `set_log_file(path)`, appends them to that file. A
  function set with `set_log_callback` receives each `(LogLevel, message)`.
- `get_logger_bridge()` returns a process-wide `LoggerBridge`. It does nothing
  until `initialize(log_file_path, troubleshooting_log_path, console_output=True,
  min_level=LogLevel.INFO)` is called.
  - `initialize` empties the application log and appends to the
    troubleshooting log.
  - A background thread writes the queued messages. The queue holds 1000
    messages and drops the oldest first.
  - A file is rotated once it grows past 10 MB.
  - `troubleshooting_log(category, operation, message)` writes to the
    troubleshooting log.
  - `shutdown()` flushes the queue and closes the files.

### `txtlogparser.app_paths`

`logs_dir()`, `app_support_dir()`, `application_log_path()`,
`troubleshooting_log_path()` and `workspaces_file_path()` return the
platform-specific locations as `Path` objects. They create the directories
if these do not exist.

## What this package does not do

It is a library only. It has no command-line program and no graphical viewer.
It does not manage workspaces. `workspaces_file_path()` only names a location;
nothing in the package reads or writes that file. You must save files,
filters and searches yourself, for example with their `to_json()` and
`from_json()` methods.