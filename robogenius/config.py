"""Named, typed configuration variables loaded from YAML."""

from __future__ import annotations

import copy
import itertools
import logging
import os
import re
import threading
from typing import Any, Callable, Iterable

import yaml

from robogenius.util import list_all_file

_log = logging.getLogger(__name__)

# Characters accepted in variable names and YAML key paths.
_VALID_NAME_CHARS = frozenset("abcdefghikjlmnopqrstuvwxyz._012345678")
_INT_PATTERN = re.compile(r"[+-]?\d+")
_TRUE_TEXT = ("1", "true")
_FALSE_TEXT = ("0", "false")
_SEQUENCE_TYPES = (list, tuple, set, frozenset)

_listener_ids = itertools.count(1)

OnChange = Callable[[Any, Any], None]


def _is_valid_name(name: str) -> bool:
    return all(ch in _VALID_NAME_CHARS for ch in name)


def _scalar_text(value: Any) -> str:
    """Return the YAML spelling of a scalar; strings are returned unchanged."""
    if isinstance(value, str):
        return value
    text = yaml.safe_dump(value, default_flow_style=True)
    if text.endswith("...\n"):
        text = text[:-4]
    return text.strip()


def _node_text(node: Any) -> str:
    if isinstance(node, (dict, list)):
        return yaml.safe_dump(node, default_flow_style=True, sort_keys=False).strip()
    return _scalar_text(node)


def _parse_scalar(text: str, template: Any) -> Any:
    if isinstance(template, str):
        return text
    if isinstance(template, bool):
        lowered = text.strip().lower()
        if lowered in _TRUE_TEXT:
            return True
        if lowered in _FALSE_TEXT:
            return False
        raise ValueError(f"cannot convert {text!r} to bool")
    if isinstance(template, int):
        if not _INT_PATTERN.fullmatch(text):
            raise ValueError(f"cannot convert {text!r} to int")
        return int(text)
    if isinstance(template, float):
        return float(text)
    return type(template)(text)


def _first(items: Iterable[Any]) -> Any:
    return next(iter(items), None)


def _parse(text: str, template: Any) -> Any:
    """Convert YAML text to a value shaped like ``template``."""
    if isinstance(template, _SEQUENCE_TYPES):
        node = yaml.safe_load(text)
        if isinstance(node, dict):
            raise TypeError("expected a sequence, got a mapping")
        items = node if isinstance(node, list) else []
        element = _first(template)
        if element is None:
            return type(template)(items)
        return type(template)(_parse(_node_text(item), element) for item in items)
    if isinstance(template, dict):
        node = yaml.safe_load(text)
        if isinstance(node, list):
            raise TypeError("expected a mapping, got a sequence")
        items = node if isinstance(node, dict) else {}
        element = _first(template.values())
        return type(template)(
            (
                _scalar_text(key),
                value if element is None else _parse(_node_text(value), element),
            )
            for key, value in items.items()
        )
    return _parse_scalar(text, template)


def _to_node(value: Any) -> Any:
    if isinstance(value, dict):
        return {_scalar_text(key): _to_node(item) for key, item in value.items()}
    if isinstance(value, (set, frozenset)):
        try:
            ordered = sorted(value)
        except TypeError:
            ordered = list(value)
        return [_to_node(item) for item in ordered]
    if isinstance(value, (list, tuple)):
        return [_to_node(item) for item in value]
    return value


def _format(value: Any) -> str:
    if isinstance(value, (dict, *_SEQUENCE_TYPES)):
        return yaml.safe_dump(
            _to_node(value), default_flow_style=False, sort_keys=False
        ).rstrip("\n")
    return _scalar_text(value)


class ConfigVar:
    """A configuration value with a fixed type and change listeners."""

    def __init__(self, name: str, default_value: Any, description: str = "") -> None:
        self.name = name.lower()
        self.description = description
        self.value_type = type(default_value)
        self._template = copy.deepcopy(default_value)
        self._value = default_value
        self._listeners: dict[int, OnChange] = {}
        self._lock = threading.RLock()

    @property
    def type_name(self) -> str:
        return self.value_type.__name__

    @property
    def value(self) -> Any:
        with self._lock:
            return self._value

    @value.setter
    def value(self, new_value: Any) -> None:
        """Store ``new_value``, notifying listeners first if it differs."""
        with self._lock:
            old_value = self._value
            if new_value == old_value:
                return
            for callback in list(self._listeners.values()):
                callback(old_value, new_value)
            self._value = new_value

    def to_string(self) -> str:
        """Return the value as YAML text, or an empty string if it cannot be written."""
        try:
            return _format(self.value)
        except Exception as exc:  # noqa: BLE001 - reported, not propagated
            _log.error(
                "ConfigVar.to_string failed: %s convert: %s to string name=%s",
                exc,
                self.type_name,
                self.name,
            )
            return ""

    def from_string(self, val: str) -> bool:
        """Set the value from YAML text; False (value unchanged) if it does not convert."""
        try:
            self.value = _parse(val, self._template)
        except Exception as exc:  # noqa: BLE001 - reported, not propagated
            _log.error(
                "ConfigVar.from_string failed: %s convert: string to %s name=%s - %s",
                exc,
                self.type_name,
                self.name,
                val,
            )
            return False
        return True

    def add_listener(self, cb: OnChange) -> int:
        """Register ``cb(old, new)`` and return its id."""
        with self._lock:
            key = next(_listener_ids)
            self._listeners[key] = cb
            return key

    def del_listener(self, key: int) -> None:
        with self._lock:
            self._listeners.pop(key, None)

    def get_listener(self, key: int) -> OnChange | None:
        with self._lock:
            return self._listeners.get(key)

    def clear_listener(self) -> None:
        with self._lock:
            self._listeners.clear()


class Config:
    """Process-wide registry of configuration variables."""

    _datas: dict[str, ConfigVar] = {}
    _lock = threading.RLock()
    _file_mtimes: dict[str, int] = {}
    _file_lock = threading.Lock()

    @classmethod
    def lookup(
        cls, name: str, default_value: Any, description: str = ""
    ) -> ConfigVar | None:
        """Return the variable ``name``, creating it with ``default_value`` if absent.

        Returns None when the name exists with another type; raises
        ValueError when the name holds characters outside ``[a-z0-8._]``.
        """
        with cls._lock:
            existing = cls._datas.get(name)
            if existing is not None:
                if existing.value_type is type(default_value):
                    _log.info("Lookup name=%s exists", name)
                    return existing
                _log.error(
                    "Lookup name=%s exists but type not %s real_type=%s %s",
                    name,
                    type(default_value).__name__,
                    existing.type_name,
                    existing.to_string(),
                )
                return None
            if not _is_valid_name(name):
                _log.error("Lookup name invalid %s", name)
                raise ValueError(name)
            var = ConfigVar(name, default_value, description)
            cls._datas[name] = var
            return var

    @classmethod
    def find(cls, name: str, value_type: type | None = None) -> ConfigVar | None:
        """Return the variable ``name`` if it exists and, when given, has ``value_type``."""
        with cls._lock:
            var = cls._datas.get(name)
        if var is None:
            return None
        if value_type is not None and var.value_type is not value_type:
            return None
        return var

    @classmethod
    def lookup_base(cls, name: str) -> ConfigVar | None:
        with cls._lock:
            return cls._datas.get(name)

    @classmethod
    def load_from_yaml(cls, root: Any) -> None:
        """Apply a parsed YAML document to the registered variables.

        Nested mapping keys are joined with dots; subtrees whose key path
        holds invalid characters are skipped.
        """
        for key, node in _list_all_members("", root):
            if not key:
                continue
            var = cls.lookup_base(key.lower())
            if var is None:
                continue
            if isinstance(node, (dict, list)):
                var.from_string(
                    yaml.safe_dump(node, default_flow_style=False, sort_keys=False)
                )
            else:
                var.from_string(_scalar_text(node))

    @classmethod
    def load_from_conf_dir(cls, path: str, force: bool = False) -> None:
        """Load every ``.yml`` file under ``path`` whose mtime changed, or all if ``force``."""
        for filename in list_all_file(path, ".yml"):
            try:
                mtime = int(os.lstat(filename).st_mtime)
            except OSError:
                mtime = 0
            with cls._file_lock:
                if not force and cls._file_mtimes.get(filename) == mtime:
                    continue
                cls._file_mtimes[filename] = mtime
            try:
                with open(filename, encoding="utf-8") as handle:
                    root = yaml.safe_load(handle)
                cls.load_from_yaml(root)
            except Exception:  # noqa: BLE001 - a bad file must not stop the others
                _log.error("LoadConfFile file=%s failed", filename)
            else:
                _log.info("LoadConfFile file=%s ok", filename)

    @classmethod
    def visit(cls, cb: Callable[[ConfigVar], None]) -> None:
        """Call ``cb`` with every registered variable."""
        with cls._lock:
            variables = list(cls._datas.values())
        for var in variables:
            cb(var)

    @classmethod
    def reset(cls) -> None:
        """Forget all variables and remembered file times."""
        with cls._lock:
            cls._datas.clear()
        with cls._file_lock:
            cls._file_mtimes.clear()


def _list_all_members(prefix: str, node: Any) -> list[tuple[str, Any]]:
    if not _is_valid_name(prefix):
        _log.error("Config invalid name: %s : %s", prefix, node)
        return []
    members = [(prefix, node)]
    if isinstance(node, dict):
        for key, child in node.items():
            text = _scalar_text(key)
            members.extend(
                _list_all_members(text if not prefix else f"{prefix}.{text}", child)
            )
    return members