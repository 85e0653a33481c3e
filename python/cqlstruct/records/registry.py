"""Process-wide cache of record shape metadata.

This module maintains a global dict mapping record classes to their
ShapeMetadata. Entries are built lazily the first time a shape is seen by
the translator and are never evicted: the cache is bounded by the number
of record classes in the process.

Locking:
    Lookups take the read lock only, so any number of threads translate
    already-known shapes concurrently. A miss builds the metadata outside
    any lock and then stores it under the write lock. Two threads racing on
    the same new shape both build it; the second store simply replaces an
    equal value.

Functions:
    get_shape_metadata(shape, describe=describe_shape) -> ShapeMetadata:
        Return cached metadata, building and storing it on first access.
        Raises ShapeError for duplicate keys, NotARecordError for non-records.

    is_cached(shape) -> bool:
        Whether metadata for the shape has been built.

    cached_shapes() -> tuple[type, ...]:
        Snapshot of the cached shapes.

    clear_registry():
        Remove all entries (used in tests for cleanup).
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from cqlstruct.core.locks import RWLock
from cqlstruct.records.shape import (
    FieldSpec,
    ShapeMetadata,
    build_metadata,
    describe_shape,
)

logger = logging.getLogger(__name__)

_SHAPES: dict[type, ShapeMetadata] = {}
_SHAPES_LOCK = RWLock()


def get_shape_metadata(
    shape: type,
    describe: Callable[[type], tuple[FieldSpec, ...]] = describe_shape,
) -> ShapeMetadata:
    """Return the metadata for a record shape, building it on first access."""
    with _SHAPES_LOCK.read():
        metadata = _SHAPES.get(shape)
    if metadata is not None:
        return metadata

    metadata = build_metadata(shape, describe(shape))
    with _SHAPES_LOCK.write():
        _SHAPES[shape] = metadata
    logger.debug(
        "Cached shape %s.%s with keys %s",
        shape.__module__,
        shape.__qualname__,
        ", ".join(metadata.keys),
    )
    return metadata


def is_cached(shape: type) -> bool:
    """Return True if metadata for ``shape`` is cached."""
    with _SHAPES_LOCK.read():
        return shape in _SHAPES


def cached_shapes() -> tuple[type, ...]:
    """Return tuple of cached record classes."""
    with _SHAPES_LOCK.read():
        return tuple(_SHAPES)


def clear_registry() -> None:
    """Reset the cache (intended for tests)."""
    with _SHAPES_LOCK.write():
        _SHAPES.clear()


__all__ = [
    "get_shape_metadata",
    "is_cached",
    "cached_shapes",
    "clear_registry",
]
