"""
Ordered-map ("emap") encoding.

The virtual-world client cannot rely on key order of nested JSON objects,
so responses are flattened depth-first into indexed triples::

    {"length": 3,
     "k0": "name",             "t0": "string", "v0": "Town square",
     "k1": "entries.length",   "t1": "number", "v1": 1,
     "k2": "entries[0].name",  "t2": "string", "v2": "alice",
     ...}

Paths use ``.`` for object keys and ``[i]`` for list items. Lists also
emit a ``<path>.length`` entry ahead of their items. Index order follows
dict insertion order, which is what the client renders.
"""

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

EmapLeaf = tuple[str, str, Any]


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    raise TypeError(f"Cannot encode {type(value).__name__} into an emap")


def _join(prefix: str, key: str) -> str:
    return f"{prefix}.{key}" if prefix else key


def flatten(value: Any, path: str = "") -> Iterator[EmapLeaf]:
    """Yield (path, type, value) leaves in depth-first, insertion order"""
    if isinstance(value, Mapping):
        for key, item in value.items():
            yield from flatten(item, _join(path, str(key)))
    elif isinstance(value, Sequence) and not isinstance(value, str):
        yield _join(path, "length"), "number", len(value)
        for index, item in enumerate(value):
            yield from flatten(item, f"{path}[{index}]")
    else:
        yield path, _type_name(value), value


def to_emap(value: Mapping[str, Any]) -> dict[str, Any]:
    """Encode a JSON-compatible mapping as an ordered emap object"""
    leaves = list(flatten(value))
    encoded: dict[str, Any] = {"length": len(leaves)}
    for index, (key, type_name, leaf) in enumerate(leaves):
        encoded[f"k{index}"] = key
        encoded[f"t{index}"] = type_name
        encoded[f"v{index}"] = leaf
    return encoded
