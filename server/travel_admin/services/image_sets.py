"""
Image-set reconciliation shared by every entity that owns images.

An image set is the ordered list of stored image URLs attached to one owner:
a package's thumbnail, its gallery, one itinerary activity, a hotel gallery,
a visa image or a flight logo. Create and update both go through
``reconcile``; only the capacity and the way the retained list is declared
differ per entity.
"""

import logging
from dataclasses import dataclass, field
from typing import Generic, Hashable, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
Ref = TypeVar("Ref", bound=Hashable)


@dataclass(frozen=True)
class ImageSetChange(Generic[Ref]):
    """Result of reconciling one image set."""

    images: list[Ref]
    orphaned: list[Ref]
    # Refs cut off by the capacity limit; still stored remotely, no longer referenced
    dropped: list[Ref] = field(default_factory=list)


def reconcile(
    existing: Sequence[Ref],
    retained: Sequence[Ref],
    uploaded: Sequence[Ref],
    capacity: Optional[int] = None,
) -> ImageSetChange[Ref]:
    """
    Compute the new image set and the refs that fell out of it.

    The new set is ``retained`` followed by ``uploaded``, cut to ``capacity``
    when one is given. ``retained`` is trusted as declared: entries unknown to
    ``existing`` are kept, duplicates are kept. Orphans are every distinct ref
    of ``existing`` not named in ``retained``, in their original order.

    Args:
        existing: Image set currently persisted (empty on create)
        retained: Refs the caller keeps, in display order
        uploaded: Refs of freshly stored assets, in upload order
        capacity: Optional maximum length of the new set

    Returns:
        ImageSetChange with the new set, its orphans and any capacity overflow
    """
    merged = [*retained, *uploaded]
    dropped: list[Ref] = []
    if capacity is not None and len(merged) > capacity:
        merged, dropped = merged[:capacity], merged[capacity:]

    keep = set(retained)
    orphaned: list[Ref] = []
    seen: set[Ref] = set()
    for ref in existing:
        if ref in keep or ref in seen:
            continue
        seen.add(ref)
        orphaned.append(ref)

    return ImageSetChange(images=merged, orphaned=orphaned, dropped=dropped)


def single_slot_retained(
    existing: Optional[str],
    declared: Optional[str],
    has_upload: bool,
) -> list[str]:
    """
    Retained list for a one-image set (thumbnail, visa image, flight logo).

    A new upload always replaces the stored image. Without one, an explicitly
    declared value wins ("" clears the slot) and otherwise the stored image stays.
    """
    if has_upload:
        return []
    if declared is not None:
        return [declared] if declared else []
    return [existing] if existing else []


def first_or_none(images: Sequence[str]) -> Optional[str]:
    return images[0] if images else None


def slice_uploads(counts: Sequence[Optional[int]], batch: Sequence[T]) -> tuple[list[list[T]], list[T]]:
    """
    Split one flat upload batch into consecutive per-owner slices.

    Owners are served in order; each takes ``counts[i]`` items from the front
    of what remains, defaulting to 1 when its count is undeclared. Owners past
    the end of the batch get empty slices.

    Returns:
        Tuple of (one slice per owner, items left over after the last owner)
    """
    slices: list[list[T]] = []
    offset = 0
    for count in counts:
        take = 1 if count is None else max(count, 0)
        slices.append(list(batch[offset:offset + take]))
        offset += take
    return slices, list(batch[offset:])
