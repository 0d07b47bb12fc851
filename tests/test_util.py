import os
import threading

import pytest

from robogenius import util


def test_thread_id_matches_native_id():
    assert util.get_thread_id() == threading.get_native_id()


def test_clock_units_agree():
    ms = util.get_current_ms()
    us = util.get_current_us()
    assert abs(us // 1000 - ms) < 1000
    assert util.get_current_ms() >= ms


@pytest.mark.parametrize(
    "path, expected",
    [("", "."), ("/a", "/"), ("a", "."), ("a/b/c", "a/b"), ("/x/y", "/x")],
)
def test_dirname(path, expected):
    assert util.dirname(path) == expected


@pytest.mark.parametrize(
    "path, expected",
    [("", ""), ("a", "a"), ("a/b/c", "c"), ("/x/", "")],
)
def test_basename(path, expected):
    assert util.basename(path) == expected


def test_list_all_file_recursive_with_suffix(tmp_path):
    root = str(tmp_path)
    os.makedirs(f"{root}/sub/deeper")
    for name in ("a.yml", "b.txt", "sub/c.yml", "sub/deeper/d.yml", "sub/e.yaml"):
        with open(f"{root}/{name}", "w") as handle:
            handle.write("x")
    found = sorted(util.list_all_file(root, ".yml"))
    assert found == sorted(
        [f"{root}/a.yml", f"{root}/sub/c.yml", f"{root}/sub/deeper/d.yml"]
    )
    assert len(util.list_all_file(root, "")) == 5


def test_list_all_file_missing_dir(tmp_path):
    assert util.list_all_file(str(tmp_path / "nope"), ".yml") == []


def test_mkdir_nested(tmp_path):
    target = str(tmp_path / "a" / "b" / "c")
    assert util.mkdir(target) is True
    assert os.path.isdir(target)
    assert util.mkdir(target) is True


def test_is_running_pid_file(tmp_path):
    live = tmp_path / "live.pid"
    live.write_text(f"{os.getpid()}\n")
    assert util.is_running_pid_file(str(live)) is True

    init = tmp_path / "init.pid"
    init.write_text("1\n")
    assert util.is_running_pid_file(str(init)) is False

    empty = tmp_path / "empty.pid"
    empty.write_text("")
    assert util.is_running_pid_file(str(empty)) is False

    assert util.is_running_pid_file(str(tmp_path / "missing.pid")) is False


def test_unlink(tmp_path):
    missing = str(tmp_path / "missing")
    assert util.unlink(missing) is True
    assert util.unlink(missing, exist=True) is False
    present = tmp_path / "present"
    present.write_text("x")
    assert util.unlink(str(present)) is True
    assert not present.exists()


def test_rm_tree(tmp_path):
    root = tmp_path / "tree"
    (root / "x" / "y").mkdir(parents=True)
    (root / "x" / "y" / "f").write_text("1")
    (root / "g").write_text("2")
    assert util.rm(str(root)) is True
    assert not root.exists()
    assert util.rm(str(root)) is True


def test_mv_replaces_destination(tmp_path):
    src = tmp_path / "src"
    dst = tmp_path / "dst"
    src.write_text("new")
    dst.mkdir()
    (dst / "old").write_text("old")
    assert util.mv(str(src), str(dst)) is True
    assert dst.read_text() == "new"
    assert not src.exists()


def test_symlink_and_realpath(tmp_path):
    target = tmp_path / "target"
    target.write_text("data")
    link = tmp_path / "link"
    link.write_text("occupied")
    assert util.symlink(str(target), str(link)) is True
    assert os.path.islink(link)
    assert util.realpath(str(link)) == os.path.realpath(str(target))
    assert util.realpath(str(tmp_path / "absent")) is None


def test_open_for_write_creates_directory(tmp_path):
    path = str(tmp_path / "new" / "dir" / "file.txt")
    with util.open_for_write(path) as handle:
        handle.write("hello")
    with util.open_for_read(path) as handle:
        assert handle.read() == "hello"


def test_open_for_read_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        util.open_for_read(str(tmp_path / "absent.txt"))