"""Merge per-source results into one snapshot."""

from datetime import datetime
from typing import List, Union

import pendulum

from ..models import Item, Snapshot, SourceResult, SourceStatus
from .normalize import format_instant


def item_timestamp(item: Item) -> float:
    """Sort key of an item; undated items count as the epoch."""
    if not item.iso_date:
        return 0.0
    try:
        return pendulum.parse(item.iso_date).timestamp()
    except (ValueError, TypeError):
        return 0.0


def merge_items(results: List[SourceResult]) -> List[Item]:
    """All linked items, newest first; ties keep per-source order."""
    items = [item for result in results for item in result.items if item.link]
    return sorted(items, key=item_timestamp, reverse=True)


def aggregate(results: List[SourceResult], generated_at: Union[datetime, str]) -> Snapshot:
    """Build the snapshot of one run."""
    if isinstance(generated_at, datetime):
        generated_at = format_instant(generated_at)

    return Snapshot(
        generated_at=generated_at,
        sources=[SourceStatus.from_result(result) for result in results],
        items=merge_items(results),
    )
