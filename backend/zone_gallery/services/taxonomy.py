"""
Zone Gallery — Path Taxonomy Resolver
======================================

What:  Decodes flat asset identifiers into levels of the fixed taxonomy
       zone → supervisor → category → ward → date → leaf images.
How:   Pure functions over "/"-separated identifier strings. Segment 0 is
       the root label ("Zones"), segment 1 the zone, ..., segment 5 the date.
Who:   Called by GalleryService after each search call.

    "Zones/Zone1/Nandhu/Attendence/3/2025-08-20/img123"
       0     1      2        3      4      5        6
     root  zone supervisor category ward  date    name

Segment contents are not validated: any value found at a depth is a valid
segment at that depth, and matching is case-sensitive.
"""

from enum import IntEnum
from typing import Iterable, List, Sequence, Set

from zone_gallery.exceptions import InvalidArgumentError
from zone_gallery.schemas.gallery import ImageRecord, SearchHit

SEPARATOR = "/"
DEFAULT_ROOT_LABEL = "Zones"


class TaxonomyLevel(IntEnum):
    """Position of a segment in the fixed folder hierarchy."""

    ZONE = 1
    SUPERVISOR = 2
    CATEGORY = 3
    WARD = 4
    DATE = 5


def split_identifier(identifier: str) -> List[str]:
    """Splits an identifier into its ordered segments."""
    return identifier.split(SEPARATOR)


def _check_prefix(prefix: Sequence[str], level: int) -> List[str]:
    if isinstance(level, bool) or not isinstance(level, int):
        raise InvalidArgumentError(
            f"level must be an integer, got {type(level).__name__}",
            context={"level": level},
        )
    if not TaxonomyLevel.ZONE <= level <= TaxonomyLevel.DATE:
        raise InvalidArgumentError(
            f"level must be between {int(TaxonomyLevel.ZONE)} and {int(TaxonomyLevel.DATE)}, got {level}",
            context={"level": level},
        )
    prefix = list(prefix)
    if len(prefix) != level - 1:
        raise InvalidArgumentError(
            f"prefix for level {level} must have {level - 1} segment(s), got {len(prefix)}",
            context={"level": level, "prefix": prefix},
        )
    return prefix


def resolve_level(
    identifiers: Iterable[str],
    prefix: Sequence[str],
    level: int,
    root_label: str = DEFAULT_ROOT_LABEL,
) -> Set[str]:
    """
    Collect the distinct segment values at `level` under `prefix`.

    Args:
        identifiers: Asset identifiers, possibly empty.
        prefix:      Concrete values for levels 1..level-1, in order.
        level:       Target level, 1 (zone) to 5 (date).
        root_label:  Label of segment 0; never returned as a value.

    Returns:
        The set of values found. Empty when nothing matches; that means the
        folder has no children yet, not that something failed.

    Raises:
        InvalidArgumentError: `len(prefix) != level - 1` or level out of range.

    Identifiers too short to carry a segment at `level` are skipped, as are
    empty segment values.
    """
    expected = _check_prefix(prefix, level)

    resolved: Set[str] = set()
    for identifier in identifiers:
        segments = split_identifier(identifier)
        if len(segments) <= level:
            continue
        if segments[1:level] != expected:
            continue
        value = segments[level]
        if value and value != root_label:
            resolved.add(value)
    return resolved


def resolve_leaf_images(
    hits: Iterable[SearchHit],
    full_prefix: Sequence[str],
) -> List[ImageRecord]:
    """
    List the images stored under a complete zone..date path.

    Keeps hits whose segments 1..5 equal `full_prefix`, sorts them ascending
    by full identifier and maps each to an ImageRecord named after its last
    segment. An empty list is a valid answer.

    Raises:
        InvalidArgumentError: `full_prefix` does not have exactly 5 values.
    """
    expected = list(full_prefix)
    if len(expected) != len(TaxonomyLevel):
        raise InvalidArgumentError(
            f"full prefix must have {len(TaxonomyLevel)} segments, got {len(expected)}",
            context={"prefix": expected},
        )

    depth = len(TaxonomyLevel) + 1
    matching = []
    for hit in hits:
        segments = split_identifier(hit.identifier)
        if len(segments) < depth or segments[1:depth] != expected:
            continue
        matching.append((hit.identifier, segments[-1], hit.secure_url))

    matching.sort(key=lambda item: item[0])
    return [ImageRecord(url=url, name=name) for _, name, url in matching]
