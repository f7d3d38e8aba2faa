"""
Path addressing for nested plain data.

A path mixes dot-separated object keys and bracketed list positions:

    name
    shipping.street
    items[0].name
    matrix[1][2]

Paths are parsed once into a tuple of typed segments (``ObjectKey`` or
``ArrayIndex``) and cached. Reads walk the segments and fall back to a default
on any missing step. Writes are copy-on-write: only the containers along the
written chain are copied, every other branch is returned by reference, so
consumers can use identity checks on untouched subtrees.

Intermediate containers are created on demand: a list when the next segment is
an index, a dict otherwise. Writing past the end of a list pads it with
``None`` holes.
"""

from dataclasses import dataclass
from functools import lru_cache
import re
from typing import Any, Dict, Mapping, Sequence, Tuple, Union

from formstate.exceptions import PathSyntaxError


class _Sentinel:
    """Named singleton marker, falsy and picklable by module attribute name."""
    __slots__ = ('_name',)

    def __init__(self, name: str):
        self._name = name

    def __repr__(self) -> str:
        return self._name

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return self._name


# Returned by reads that fall through a missing segment
MISSING = _Sentinel('MISSING')

# Passed as the value to write()/set_in() to remove the leaf key
DELETE = _Sentinel('DELETE')


@dataclass(frozen=True)
class ObjectKey:
    """Mapping key segment."""
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ArrayIndex:
    """List position segment."""
    position: int

    def __str__(self) -> str:
        return f'[{self.position}]'


Segment = Union[ObjectKey, ArrayIndex]

_HEAD_RE = re.compile(r'[^.\[\]]+')
_TAIL_RE = re.compile(r'\.([^.\[\]]+)|\[(\d+)\]')


def parse_path(path: str) -> Tuple[Segment, ...]:
    """Parse a dot/bracket path into typed segments.

    Args:
        path: Path string, e.g. ``'items[0].name'``

    Returns:
        Tuple of segments, e.g. ``(ObjectKey('items'), ArrayIndex(0), ObjectKey('name'))``

    Raises:
        PathSyntaxError: If the path is empty, not a string, or malformed
    """
    if not isinstance(path, str) or not path:
        raise PathSyntaxError(path, "path must be a non-empty string")
    return _parse_path_cached(path)


@lru_cache(maxsize=2048)
def _parse_path_cached(path: str) -> Tuple[Segment, ...]:
    head = _HEAD_RE.match(path)
    if head is None:
        raise PathSyntaxError(path, "path must start with a key")

    segments = [ObjectKey(head.group(0))]
    pos = head.end()
    while pos < len(path):
        match = _TAIL_RE.match(path, pos)
        if match is None:
            raise PathSyntaxError(path, f"unexpected {path[pos]!r} at position {pos}")
        key, index = match.groups()
        segments.append(ObjectKey(key) if key is not None else ArrayIndex(int(index)))
        pos = match.end()
    return tuple(segments)


def _child(node: Any, segment: Segment) -> Any:
    if isinstance(segment, ArrayIndex):
        if isinstance(node, list) and segment.position < len(node):
            return node[segment.position]
        return MISSING
    if isinstance(node, Mapping):
        return node.get(segment.name, MISSING)
    return MISSING


def get_in(root: Any, segments: Sequence[Segment], default: Any = MISSING) -> Any:
    """Read the value at pre-parsed segments, or default if any step is missing."""
    node = root
    for segment in segments:
        node = _child(node, segment)
        if node is MISSING:
            return default
    return node


def set_in(root: Any, segments: Sequence[Segment], value: Any) -> Any:
    """Copy-on-write assignment at pre-parsed segments.

    Args:
        root: Container to write into (may be None to start from nothing)
        segments: Non-empty segment sequence
        value: Value to store, or ``DELETE`` to remove the leaf key

    Returns:
        New root sharing every branch off the written chain with ``root``.
        ``root`` itself when nothing changed (identical leaf, or deleting an
        absent key).
    """
    if not segments:
        raise PathSyntaxError(segments, "cannot write at an empty path")
    if value is DELETE and get_in(root, segments) is MISSING:
        return root
    return _assoc(root, tuple(segments), value)


def _assoc(node: Any, segments: Tuple[Segment, ...], value: Any) -> Any:
    segment, rest = segments[0], segments[1:]
    current = _child(node, segment)

    if rest:
        child = _assoc(None if current is MISSING else current, rest, value)
    else:
        child = value

    if child is current:
        return node

    if isinstance(segment, ArrayIndex):
        items = list(node) if isinstance(node, list) else []
        if child is DELETE:
            # Lists keep their length; the slot becomes a hole
            items[segment.position] = None
            return items
        if segment.position >= len(items):
            items.extend([None] * (segment.position + 1 - len(items)))
        items[segment.position] = child
        return items

    fields = dict(node) if isinstance(node, Mapping) else {}
    if child is DELETE:
        del fields[segment.name]
    else:
        fields[segment.name] = child
    return fields


def read(root: Any, path: str, default: Any = None) -> Any:
    """Read the value at ``path``; ``default`` when any segment is missing."""
    return get_in(root, parse_path(path), default)


def write(root: Any, path: str, value: Any) -> Any:
    """Copy-on-write assignment at ``path`` (``DELETE`` removes the leaf)."""
    return set_in(root, parse_path(path), value)


def flatten(tree: Any) -> Dict[str, Any]:
    """Flatten a nested value tree into ``{path: leaf}``.

    Dict keys join with ``.``, list positions use ``[i]``. Any value that is
    not a dict or list is a leaf. Empty containers contribute no entries.

    Example:
        >>> flatten({'name': 'Meck', 'items': [{'name': 'Lego'}]})
        {'name': 'Meck', 'items[0].name': 'Lego'}
    """
    flat: Dict[str, Any] = {}
    _flatten_into(flat, tree, '')
    return flat


def _flatten_into(flat: Dict[str, Any], node: Any, prefix: str) -> None:
    if isinstance(node, Mapping):
        for key, child in node.items():
            _flatten_into(flat, child, f'{prefix}.{key}' if prefix else str(key))
    elif isinstance(node, list) and prefix:
        for position, child in enumerate(node):
            _flatten_into(flat, child, f'{prefix}[{position}]')
    elif prefix:
        flat[prefix] = node


def is_descendant(parent: str, child: str) -> bool:
    """True when ``child`` is strictly nested under ``parent``.

    ``a.b`` and ``a[0]`` are descendants of ``a``; ``ab`` is not.
    """
    parent_segments = parse_path(parent)
    child_segments = parse_path(child)
    return (
        len(child_segments) > len(parent_segments)
        and child_segments[:len(parent_segments)] == parent_segments
    )
