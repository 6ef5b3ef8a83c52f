import os

import pytest

from txtlogparser.file_data import FileData


@pytest.fixture
def log_file(tmp_path):
    path = tmp_path / "app.log"
    path.write_bytes(b"first line\nsecond line\n")
    return path


def test_from_path_reads_file_details(log_file):
    data = FileData.from_path(3, 1, log_file)
    assert data.file_id == 3
    assert data.file_row == 1
    assert data.file_path == str(log_file)
    assert data.file_name == "app.log"
    assert data.file_size == len(log_file.read_bytes())
    assert data.modified_time == int(os.stat(log_file).st_mtime)
    assert data.selected is True
    assert data.exists is True


def test_from_path_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        FileData.from_path(1, 0, tmp_path / "missing.log")


def test_json_uses_source_keys(log_file):
    data = FileData.from_path(2, 0, log_file)
    assert set(data.to_json()) == {
        "id",
        "fileRow",
        "name",
        "path",
        "modifiedTime",
        "fileSize",
        "selected",
    }


def test_json_round_trip(log_file):
    data = FileData.from_path(2, 4, log_file)
    data.selected = False
    restored = FileData.from_json(data.to_json())
    assert restored == data


def test_from_json_without_id_raises():
    with pytest.raises(ValueError):
        FileData.from_json({"path": "x.log"})


def test_from_json_with_id_minus_one_raises():
    with pytest.raises(ValueError):
        FileData.from_json({"id": -1, "path": "x.log"})


def test_from_json_defaults_and_missing_path(tmp_path):
    restored = FileData.from_json({"id": 7, "path": str(tmp_path / "gone.log")})
    assert restored.file_row == -1
    assert restored.file_name == ""
    assert restored.modified_time == 0
    assert restored.file_size == 0
    assert restored.selected is False
    assert restored.exists is False


def test_display_name_falls_back_to_path():
    data = FileData(file_path=os.path.join("logs", "server.log"))
    assert data.display_name() == "server.log"


def test_display_name_prefers_stored_name():
    data = FileData(file_path=os.path.join("logs", "server.log"), file_name="custom")
    assert data.display_name() == "custom"


def test_display_name_empty_without_path():
    assert FileData().display_name() == ""