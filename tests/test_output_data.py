import pytest

from txtlogparser.file_data import FileData
from txtlogparser.filter_data import FilterData
from txtlogparser.output_data import OutputData

LINES = ["INFO start", "ERROR disk full", "INFO ok", "ERROR net down"]


def _write(tmp_path, name, lines):
    path = tmp_path / name
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


def _texts(data):
    return [line.text for line in data.output_lines()]


@pytest.fixture
def data(tmp_path):
    output = OutputData()
    output.add_file(FileData.from_path(1, 0, _write(tmp_path, "a.log", LINES)))
    output.set_active(True)
    return output


def _error_filter(**kwargs):
    return FilterData(filter_id=7, row=0, pattern="error", color="#F44336", **kwargs)


def test_inactive_data_loads_nothing(tmp_path):
    output = OutputData()
    output.add_file(FileData.from_path(1, 0, _write(tmp_path, "a.log", LINES)))
    assert output.output_lines() == []
    assert output.active is False


def test_activation_loads_all_lines(data):
    assert _texts(data) == LINES
    assert [line.line_index for line in data.output_lines()] == list(range(len(LINES)))
    assert data.window.total_lines == len(LINES)


def test_carriage_returns_are_handled(tmp_path):
    path = tmp_path / "crlf.log"
    path.write_bytes(b"a\r\nb\rc\n")
    output = OutputData()
    output.add_file(FileData.from_path(1, 0, path))
    output.set_active(True)
    assert _texts(output) == ["a", "b c"]


def test_missing_file_gives_no_lines(tmp_path):
    output = OutputData()
    output.add_file(FileData(file_id=1, file_row=0, file_path=str(tmp_path / "none.log")))
    output.set_active(True)
    assert output.output_lines() == []


def test_filter_keeps_matching_lines(data):
    data.add_filter(_error_filter())
    expected = [line for line in LINES if "ERROR" in line]
    assert _texts(data) == expected
    assert data.filter_match_counts() == {7: len(expected)}
    for line in data.output_lines():
        matched = [sub for sub in line.sub_lines if sub.filter_id == 7]
        assert [sub.content for sub in matched] == ["ERROR"]
        assert matched[0].color == "#F44336"


def test_search_keeps_all_lines(data):
    data.add_search(FilterData(filter_id=3, row=0, pattern="disk", color="#2195F3"))
    assert _texts(data) == LINES
    assert data.search_match_counts() == {3: 1}
    tagged = [sub for line in data.output_lines() for sub in line.sub_lines if sub.search_id == 3]
    assert [sub.content for sub in tagged] == ["disk"]
    assert tagged[0].filter_id == -1


def test_search_is_cut_into_filter_runs(data):
    data.add_filter(FilterData(filter_id=7, row=0, pattern="ERROR disk"))
    data.add_search(FilterData(filter_id=3, row=0, pattern="disk"))
    lines = data.output_lines()
    assert [line.text for line in lines] == ["ERROR disk full"]
    subs = lines[0].sub_lines
    assert [sub.content for sub in subs] == ["ERROR ", "disk", " full"]
    assert subs[0].filter_id == 7
    assert subs[1].search_id == 3
    assert all(line.text[sub.start:sub.end] == sub.content for line in lines for sub in line.sub_lines)


def test_remove_and_clear_filters_restore_lines(data):
    data.add_filter(_error_filter())
    data.remove_filter(7)
    assert _texts(data) == LINES
    data.add_filter(_error_filter())
    data.clear_filters()
    assert _texts(data) == LINES
    assert data.filter_match_counts() == {}


def test_update_filter_disable_and_change(data):
    data.add_filter(_error_filter())
    data.update_filter(_error_filter(enabled=False))
    assert _texts(data) == LINES
    data.update_filter(FilterData(filter_id=7, row=0, pattern="INFO"))
    assert _texts(data) == [line for line in LINES if "INFO" in line]


def test_update_filter_row_unknown_raises(data):
    with pytest.raises(KeyError):
        data.update_filter_row(99, 0)


def test_clear_searches_removes_highlights(data):
    data.add_search(FilterData(filter_id=3, row=0, pattern="disk"))
    data.clear_searches()
    assert data.search_match_counts() == {}
    assert all(sub.search_id == -1 for line in data.output_lines() for sub in line.sub_lines)


def test_paused_refresh_defers_rebuild(data):
    data.pause_refresh()
    data.add_filter(_error_filter())
    assert _texts(data) == LINES
    data.resume_refresh()
    data.refresh()
    assert _texts(data) == [line for line in LINES if "ERROR" in line]


def test_remove_file(data):
    data.remove_file(1)
    assert data.output_lines() == []
    assert data.window.total_lines == 0


def test_files_are_ordered_by_row(tmp_path):
    first = ["from first"]
    second = ["from second"]
    output = OutputData()
    output.add_file(FileData.from_path(1, 1, _write(tmp_path, "a.log", first)))
    output.add_file(FileData.from_path(2, 0, _write(tmp_path, "b.log", second)))
    output.set_active(True)
    assert _texts(output) == second + first
    output.update_file_row(1, -1)
    assert _texts(output) == first + second


def test_filter_navigation_wraps(data):
    data.add_filter(_error_filter())
    lines = data.output_lines()
    first = data.next_match_by_filter(7, 0, 0)
    assert first.line_index == 0
    assert lines[first.line_index].text[first.start:first.end] == "ERROR"
    second = data.next_match_by_filter(7, 0, 1)
    assert second.line_index == 1
    wrapped = data.next_match_by_filter(7, 1, 1)
    assert wrapped.line_index == 0
    back = data.previous_match_by_filter(7, 0, 0)
    assert back.line_index == len(lines) - 1
    assert data.next_match_by_filter(99, 0, 0) is None


def test_search_navigation(data):
    data.add_search(FilterData(filter_id=3, row=0, pattern="error"))
    lines = data.output_lines()
    found = data.next_match_by_search(3, 0, 0)
    assert lines[found.line_index].text[found.start:found.end] == "ERROR"
    assert "ERROR" in LINES[found.line_index]
    back = data.previous_match_by_search(3, found.line_index, 0)
    assert back.line_index != found.line_index
    assert lines[back.line_index].text[back.start:back.end] == "ERROR"
    assert data.previous_match_by_search(99, 0, 0) is None