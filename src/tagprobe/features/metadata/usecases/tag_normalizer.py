"""Tag classification and extras formatting.

Where: src/tagprobe/features/metadata/usecases/tag_normalizer.py
What: Sort tag entries into canonical fields or the ordered extras list.
Why: Keep precedence rules declarative and testable without any I/O.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Final

from tagprobe.platform.logging import logger

from ..domain.models import CanonicalField, CanonicalFields, TagScope
from .ports import TagEntry

__all__ = [
    "CANONICAL_KEYS",
    "TagAccumulator",
    "TagNormalization",
    "classify_key",
    "format_extra",
    "normalize_tags",
]

# Lower-cased tag key -> canonical slot. Aliases share one slot.
CANONICAL_KEYS: Final[MappingProxyType[str, CanonicalField]] = MappingProxyType(
    {
        "title": CanonicalField.TITLE,
        "artist": CanonicalField.ARTIST,
        "artists": CanonicalField.ARTIST,
        "album": CanonicalField.ALBUM,
        "genre": CanonicalField.GENRE,
    }
)


def classify_key(key: str) -> CanonicalField | None:
    """Return the canonical field a tag key feeds, or None for extras."""
    return CANONICAL_KEYS.get(key.lower())


def format_extra(key: str, value: str) -> str:
    return f"{key}: {value}"


@dataclass(slots=True)
class TagNormalization:
    """Partial result of normalizing one tag dictionary."""

    fields: dict[CanonicalField, str] = field(default_factory=dict)
    extras: list[str] = field(default_factory=list)


def normalize_tags(entries: Iterable[TagEntry], scope: TagScope) -> TagNormalization:
    """Normalize one tag dictionary.

    Container-scope entries are matched against the canonical keys; the
    first entry for a field sets it and later ones are dropped. Stream-scope
    entries are never classified and always become extras.

    Args:
        entries: Key/value pairs in dictionary order.
        scope: Which dictionary the entries come from.

    Returns:
        TagNormalization: Canonical values found and extras in order.
    """
    result = TagNormalization()
    for key, value in entries:
        canonical = classify_key(key) if scope is TagScope.CONTAINER else None
        if canonical is None:
            result.extras.append(format_extra(key, value))
            continue
        if canonical in result.fields:
            logger.debug("Ignoring later %s tag %r=%r", canonical.value, key, value)
            continue
        result.fields[canonical] = value
    return result


class TagAccumulator:
    """Merge normalizations from several dictionaries into one result."""

    def __init__(self) -> None:
        self._fields: dict[CanonicalField, str] = {}
        self._extras: list[str] = []

    def add(self, normalization: TagNormalization) -> None:
        for canonical, value in normalization.fields.items():
            _ = self._fields.setdefault(canonical, value)
        self._extras.extend(normalization.extras)

    def feed(self, entries: Iterable[TagEntry], scope: TagScope) -> None:
        """Normalize ``entries`` and merge them in."""
        self.add(normalize_tags(entries, scope))

    @property
    def fields(self) -> CanonicalFields:
        return CanonicalFields(
            title=self._fields.get(CanonicalField.TITLE),
            artist=self._fields.get(CanonicalField.ARTIST),
            album=self._fields.get(CanonicalField.ALBUM),
            genre=self._fields.get(CanonicalField.GENRE),
        )

    @property
    def extras(self) -> tuple[str, ...]:
        return tuple(self._extras)
