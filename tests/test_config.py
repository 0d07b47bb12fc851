import os

import pytest

from robogenius.config import Config, ConfigVar


@pytest.fixture(autouse=True)
def clean_registry():
    Config.reset()
    yield
    Config.reset()


def test_name_is_lowercased():
    var = ConfigVar("System.Port", 8080, "listening port")
    assert var.name == "system.port"
    assert var.description == "listening port"
    assert var.value == 8080


def test_lookup_creates_once():
    first = Config.lookup("system.port", 8080)
    second = Config.lookup("system.port", 9090)
    assert first is second
    assert second.value == 8080


def test_lookup_type_mismatch_returns_none():
    Config.lookup("system.port", 8080)
    assert Config.lookup("system.port", "8080") is None


@pytest.mark.parametrize("name", ["bad-name", "Upper", "with space"])
def test_lookup_invalid_name_raises(name):
    with pytest.raises(ValueError):
        Config.lookup(name, 1)


def test_find_and_lookup_base():
    var = Config.lookup("a.b", 1.5)
    assert Config.find("a.b") is var
    assert Config.find("a.b", float) is var
    assert Config.find("a.b", int) is None
    assert Config.find("missing") is None
    assert Config.lookup_base("a.b") is var
    assert Config.lookup_base("missing") is None


def test_scalar_round_trips():
    int_var = ConfigVar("i", 3)
    assert int_var.from_string("42") is True
    assert int_var.value == 42
    assert int_var.to_string() == "42"

    float_var = ConfigVar("f", 1.5)
    assert float_var.to_string() == "1.5"
    assert float_var.from_string("2.25")
    assert float_var.value == 2.25

    str_var = ConfigVar("s", "abc")
    assert str_var.from_string("123")
    assert str_var.value == "123"


def test_bool_round_trip():
    var = ConfigVar("flag", False)
    assert var.from_string(var.to_string())
    assert var.value is False
    assert var.from_string("1")
    assert var.value is True
    assert var.from_string(var.to_string())
    assert var.value is True


def test_bad_conversion_leaves_value():
    var = ConfigVar("i", 7)
    assert var.from_string("seven") is False
    assert var.value == 7
    assert var.from_string("1.5") is False
    assert var.value == 7


def test_list_of_int_from_string():
    var = ConfigVar("ids", [0])
    assert var.from_string("[1, 2, 3]")
    assert var.value == [1, 2, 3]


def test_container_round_trips():
    for default, updated in [
        ([1, 2], [4, 5, 6]),
        ({1, 2}, {7, 8}),
        ({"a": 1}, {"x": 10, "y": 20}),
        ([1.5], [0.25, 3.5]),
    ]:
        source = ConfigVar("src", updated)
        target = ConfigVar("dst", default)
        assert target.from_string(source.to_string())
        assert target.value == updated


def test_mapping_text_into_list_fails():
    var = ConfigVar("ids", [1])
    assert var.from_string("a: 1") is False
    assert var.value == [1]


def test_listeners():
    var = ConfigVar("v", 1)
    calls = []
    key = var.add_listener(lambda old, new: calls.append((old, new)))
    assert var.get_listener(key) is not None

    var.value = 5
    assert calls == [(1, 5)]

    var.value = 5
    assert calls == [(1, 5)]

    var.del_listener(key)
    assert var.get_listener(key) is None
    var.value = 6
    assert calls == [(1, 5)]
    assert var.value == 6


def test_listener_ids_are_unique_and_clear():
    var = ConfigVar("v", 1)
    first = var.add_listener(lambda old, new: None)
    second = var.add_listener(lambda old, new: None)
    assert first != second
    var.clear_listener()
    assert var.get_listener(first) is None
    assert var.get_listener(second) is None


def test_load_from_yaml_nested():
    port = Config.lookup("system.port", 8080)
    name = Config.lookup("system.name", "none")
    ids = Config.lookup("system.ids", [0])
    Config.load_from_yaml(
        {"system": {"port": 9000, "name": "robot", "ids": [4, 5]}, "other": 1}
    )
    assert port.value == 9000
    assert name.value == "robot"
    assert ids.value == [4, 5]


def test_load_from_yaml_skips_invalid_keys():
    var = Config.lookup("system.port", 8080)
    Config.load_from_yaml({"System": {"port": 9000}})
    assert var.value == 8080


def test_visit_sees_all_variables():
    Config.lookup("a", 1)
    Config.lookup("b", "x")
    names = []
    Config.visit(lambda var: names.append(var.name))
    assert sorted(names) == ["a", "b"]


def test_load_from_conf_dir(tmp_path):
    var = Config.lookup("system.port", 8080)
    conf = tmp_path / "sub" / "app.yml"
    conf.parent.mkdir()
    conf.write_text("system:\n  port: 9000\n", encoding="utf-8")
    (tmp_path / "ignored.txt").write_text("system:\n  port: 1\n", encoding="utf-8")

    Config.load_from_conf_dir(str(tmp_path))
    assert var.value == 9000

    stat = os.stat(conf)
    conf.write_text("system:\n  port: 9100\n", encoding="utf-8")
    os.utime(conf, ns=(stat.st_atime_ns, stat.st_mtime_ns))

    Config.load_from_conf_dir(str(tmp_path))
    assert var.value == 9000

    Config.load_from_conf_dir(str(tmp_path), force=True)
    assert var.value == 9100


def test_load_from_conf_dir_survives_bad_file(tmp_path):
    var = Config.lookup("system.port", 8080)
    (tmp_path / "broken.yml").write_text("system: [unclosed\n", encoding="utf-8")
    (tmp_path / "good.yml").write_text("system:\n  port: 9000\n", encoding="utf-8")
    Config.load_from_conf_dir(str(tmp_path))
    assert var.value == 9000