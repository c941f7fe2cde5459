"""
Field masks over key-value resource trees.

A field mask is the set of dotted paths an update is allowed to write. The
helpers here are pure functions over plain dictionaries so that they work for
any resource once it has been converted with ``to_dict()``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from ..core.exceptions import AmbiguousUpdateError, TypeMismatchError

PATH_SEPARATOR = "."


@dataclass
class FieldMask:
    """Ordered set of dotted field paths."""
    paths: List[str] = field(default_factory=list)

    def __post_init__(self):
        paths, self.paths = self.paths, []
        for path in paths:
            self.add(path)

    def add(self, path: str) -> None:
        if path not in self.paths:
            self.paths.append(path)

    def __contains__(self, path: object) -> bool:
        return path in self.paths

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths)

    def __len__(self) -> int:
        return len(self.paths)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, FieldMask):
            return set(self.paths) == set(other.paths)
        if isinstance(other, (set, frozenset, list, tuple)):
            return set(self.paths) == set(other)
        return NotImplemented

    def to_string(self) -> str:
        """Comma-joined form used on the wire."""
        return ",".join(self.paths)


def _join(prefix: str, key: str) -> str:
    return f"{prefix}{PATH_SEPARATOR}{key}" if prefix else key


def flatten_update_paths(updates: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
    """
    Flatten nested update mappings into dotted paths.

    ``{"a": {"b": 1}}`` and ``{"a.b": 1}`` flatten to the same result.
    Empty mappings are kept as leaf values.

    Raises:
        AmbiguousUpdateError: If the same path is given more than once
    """
    result: Dict[str, Any] = {}
    for key, value in updates.items():
        path = _join(prefix, str(key))
        if isinstance(value, Mapping) and value:
            flat = flatten_update_paths(value, path)
        else:
            flat = {path: value}
        for flat_path, flat_value in flat.items():
            if flat_path in result:
                raise AmbiguousUpdateError(f"Update path given more than once: {flat_path!r}")
            result[flat_path] = flat_value
    return result


def get_path(tree: Mapping[str, Any], path: str, default: Any = None) -> Any:
    """Get a value by dotted path, or ``default`` when any segment is missing."""
    current: Any = tree
    for key in path.split(PATH_SEPARATOR):
        if isinstance(current, Mapping) and key in current:
            current = current[key]
        else:
            return default
    return current


def apply_update(tree: Dict[str, Any], path: str, value: Any) -> None:
    """
    Assign ``value`` at ``path``, creating missing intermediate mappings.

    Raises:
        TypeMismatchError: If an intermediate segment holds a non-mapping value
    """
    keys = path.split(PATH_SEPARATOR)
    current = tree
    walked: List[str] = []

    for key in keys[:-1]:
        walked.append(key)
        if key not in current or current[key] is None:
            current[key] = {}
        elif not isinstance(current[key], dict):
            raise TypeMismatchError(
                f"Cannot apply update {path!r}: "
                f"{PATH_SEPARATOR.join(walked)!r} holds a {type(current[key]).__name__}, not a mapping"
            )
        current = current[key]

    current[keys[-1]] = value


def apply_updates(tree: Dict[str, Any], updates: Mapping[str, Any]) -> None:
    """Apply already-flattened updates in order."""
    for path, value in updates.items():
        apply_update(tree, path, value)


def field_mask(before: Mapping[str, Any], after: Mapping[str, Any],
               prefix: str = "", mask: Optional[FieldMask] = None) -> FieldMask:
    """
    Compute the paths whose values differ between two trees.

    Nested mappings present on both sides are compared recursively and
    contribute their differing leaves. Anything else, lists included, is
    compared as a whole. Keys present on only one side contribute their own
    path.
    """
    mask = mask if mask is not None else FieldMask()

    for key, new_value in after.items():
        path = _join(prefix, key)
        if key not in before:
            mask.add(path)
            continue
        old_value = before[key]
        if old_value == new_value:
            continue
        if isinstance(old_value, Mapping) and isinstance(new_value, Mapping):
            field_mask(old_value, new_value, path, mask)
        else:
            mask.add(path)

    for key in before:
        if key not in after:
            mask.add(_join(prefix, key))

    return mask


def mask_from_paths(paths: Iterable[str]) -> FieldMask:
    """Build a mask from an iterable of paths."""
    return FieldMask(list(paths))
