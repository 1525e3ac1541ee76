"""Data models for feedsnap."""

from .item import MAX_IMAGES, UNTITLED, Item
from .snapshot import Snapshot, SourceResult, SourceStatus

__all__ = ["Item", "Snapshot", "SourceResult", "SourceStatus", "MAX_IMAGES", "UNTITLED"]
