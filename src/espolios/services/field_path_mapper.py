"""Rebuild nested documents from flat, dot-separated form field names.

A form posting ``catalogacao.autor=Ana`` and ``catalogacao.data=1901`` produces::

    {"catalogacao": {"autor": "Ana", "data": "1901"}}

Leaves listed in the array-field policy accumulate every submitted value, in
arrival order, instead of keeping only the last one::

    materiais=wood, materiais=metal  ->  {"materiais": ["wood", "metal"]}
"""

from __future__ import annotations

from typing import Any, AbstractSet, Iterable, Mapping, MutableMapping

from ..domain.errors import InvalidFieldPathError
from ..domain.models import DocumentValue


def split_field_path(path: str) -> list[str]:
    """Split a field path into segments, rejecting empty ones."""
    segments = path.split(".")
    if any(not segment for segment in segments):
        raise InvalidFieldPathError(path)
    return segments


def leaf_name(path: str) -> str:
    return split_field_path(path)[-1]


def apply_field(
    document: MutableMapping[str, Any],
    path: str,
    value: DocumentValue,
    is_array: bool = False,
) -> MutableMapping[str, Any]:
    """Write ``value`` at ``path`` inside ``document`` (in place).

    Intermediate segments that are missing, or that hold anything other than
    a mapping, are replaced by a fresh empty mapping. At the leaf, array fields
    get ``value`` appended to a list; other fields are overwritten.

    Returns:
        The same ``document``, for chaining.
    """
    *parents, leaf = split_field_path(path)

    node = document
    for segment in parents:
        child = node.get(segment)
        if not isinstance(child, MutableMapping):
            child = {}
            node[segment] = child
        node = child

    if is_array:
        existing = node.get(leaf)
        if not isinstance(existing, list):
            existing = []
            node[leaf] = existing
        existing.append(value)
    else:
        node[leaf] = value
    return document


def build_document(
    fields: Iterable[tuple[str, DocumentValue]],
    array_fields: AbstractSet[str],
    document: MutableMapping[str, Any] | None = None,
) -> MutableMapping[str, Any]:
    """Apply ``(path, value)`` pairs in order, starting from ``document`` or ``{}``."""
    target = document if document is not None else {}
    for path, value in fields:
        apply_field(target, path, value, is_array=leaf_name(path) in array_fields)
    return target


def flatten_document(document: Mapping[str, Any], prefix: str = "") -> dict[str, Any]:
    """Turn nested mappings into dotted keys; lists and scalars are leaves.

    >>> flatten_document({"a": {"b": 1, "c": [2]}})
    {'a.b': 1, 'a.c': [2]}
    """
    flat: dict[str, Any] = {}
    for key, value in document.items():
        path = f"{prefix}.{key}" if prefix else key
        if isinstance(value, Mapping) and value:
            flat.update(flatten_document(value, path))
        else:
            flat[path] = value
    return flat
