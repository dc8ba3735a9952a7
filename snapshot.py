import json
import math


class LoadError(Exception):
    """The snapshot file could not be read or is not a JSON object."""

    def __init__(self, path, cause):
        super().__init__(f"failed to read metrics file {path}: {cause}")
        self.path = path
        self.cause = cause


_MISSING = object()


def to_float(value) -> float:
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return 0.0
    return 0.0


def to_int(value) -> int:
    number = to_float(value)
    if math.isnan(number) or math.isinf(number):
        return 0
    return int(number)


def to_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false")
    if isinstance(value, (dict, list)):
        return len(value) > 0
    return False


def to_str(value) -> str:
    if isinstance(value, str):
        return value
    if value is None or isinstance(value, (dict, list)):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class Snapshot:
    """
    Read-only view over one parsed metrics.json tree.

    Every accessor is total: a path that runs into a missing key, a scalar,
    or an out-of-range list index yields the zero value for the requested type.
    Lists are addressed by decimal index strings ("0", "1", ...).
    """

    def __init__(self, tree):
        self._tree = tree

    def get(self, *path):
        node = self._tree
        for key in path:
            node = _child(node, key)
            if node is _MISSING:
                return None
        return node

    def sub(self, *path):
        """Snapshot rooted at path; empty when the path is missing."""
        return Snapshot(self.get(*path))

    def keys(self, *path):
        node = self.get(*path)
        if isinstance(node, dict):
            return list(node.keys())
        if isinstance(node, list):
            return [str(i) for i in range(len(node))]
        return []

    def number(self, *path) -> float:
        return to_float(self.get(*path))

    def integer(self, *path) -> int:
        return to_int(self.get(*path))

    def boolean(self, *path) -> bool:
        return to_bool(self.get(*path))

    def string(self, *path) -> str:
        return to_str(self.get(*path))


def _child(node, key):
    if isinstance(node, dict):
        return node.get(key, _MISSING)
    if isinstance(node, list):
        try:
            index = int(key)
        except (TypeError, ValueError):
            return _MISSING
        if 0 <= index < len(node):
            return node[index]
    return _MISSING


def _reject_constant(name):
    raise ValueError(f"non-JSON constant {name}")


def load_snapshot(path) -> Snapshot:
    """
    Read the whole file and parse it in one go.
    Raises LoadError on I/O failure, bad UTF-8, bad JSON or a non-object root.
    NaN/Infinity literals, over-long integers and too deep nesting count as bad JSON.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f, parse_constant=_reject_constant)
    # ValueError covers JSONDecodeError, UnicodeDecodeError and the int digit limit
    except (OSError, ValueError, RecursionError) as e:
        raise LoadError(path, e) from e

    if not isinstance(data, dict):
        raise LoadError(path, f"expected a JSON object, got {type(data).__name__}")

    return Snapshot(data)


class SnapshotStore:
    """Holds the last successfully loaded snapshot. Callers do the locking."""

    def __init__(self):
        self._current = Snapshot({})
        self.last_error = None

    def replace(self, snapshot):
        self._current = snapshot
        self.last_error = None

    def record_error(self, error):
        # keeps the previous snapshot in place
        self.last_error = error

    def current(self):
        return self._current
