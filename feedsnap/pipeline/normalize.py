"""Item normalization: text, dates, images and stable identity."""

import re
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Iterable, List, Optional, Union

import pendulum

from ..config import SourceConfig
from ..ingestion.models import RawEntry
from ..models import MAX_IMAGES, UNTITLED, Item

ISO_FORMAT = "YYYY-MM-DD[T]HH:mm:ss.SSS[Z]"

_WHITESPACE = re.compile(r"\s+")
_DIGIT = re.compile(r"\d")


def normalize_text(value: Optional[str]) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    if not value:
        return ""
    return _WHITESPACE.sub(" ", str(value)).strip()


def format_instant(value: datetime) -> str:
    """Render an instant as UTC ISO-8601 with milliseconds, e.g. 2025-12-26T10:00:00.000Z."""
    return pendulum.instance(value, tz="UTC").in_timezone("UTC").format(ISO_FORMAT)


def _parse_date_text(text: str) -> Optional[datetime]:
    try:
        parsed = parsedate_to_datetime(text)
    except (TypeError, ValueError, IndexError):
        parsed = None
    if parsed is not None:
        return parsed

    # Relative words such as "now" or "today" would resolve against the clock.
    if not _DIGIT.search(text):
        return None

    try:
        parsed = pendulum.parse(text, strict=False)
    except (ValueError, OverflowError, TypeError):
        return None
    return parsed if isinstance(parsed, datetime) else None


def to_iso_date(value: Optional[Union[datetime, str]]) -> Optional[str]:
    """Canonical ISO instant of an adapter-native date, or None if unparseable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed: Optional[datetime] = value
    else:
        text = str(value).strip()
        if not text:
            return None
        parsed = _parse_date_text(text)

    if parsed is None:
        return None
    try:
        return format_instant(parsed)
    except (ValueError, OverflowError):
        return None


def stable_id(source_id: str, link: Optional[str], iso_date: Optional[str], title: Optional[str]) -> str:
    """Deterministic item id: ``<source_id>:<hex hash>``.

    The hash is ``h = (h * 31 + unit) mod 2**32`` over the UTF-16 code units
    of ``source_id|link|iso_date|title``, seeded at 0.
    """
    base = "|".join([source_id, link or "", iso_date or "", title or ""])
    data = base.encode("utf-16-le", "surrogatepass")
    value = 0
    for i in range(0, len(data), 2):
        value = (value * 31 + (data[i] | data[i + 1] << 8)) & 0xFFFFFFFF
    return f"{source_id}:{value:x}"


def unique_images(images: Iterable[str], limit: int = MAX_IMAGES) -> List[str]:
    """Strip, dedupe preserving order and cap."""
    cleaned = (str(url).strip() for url in images if url)
    return list(dict.fromkeys(url for url in cleaned if url))[:limit]


def normalize_entry(entry: RawEntry, source: SourceConfig, images: Iterable[str] = ()) -> Item:
    """Turn a raw entry of ``source`` into an Item."""
    title = normalize_text(entry.title) or UNTITLED
    link = (entry.link or "").strip()
    iso_date = to_iso_date(entry.published)

    return Item(
        id=stable_id(source.id, link, iso_date, title),
        source_id=source.id,
        source_title=source.title,
        company=source.company,
        company_group=source.company_group,
        type=source.type,
        page_url=source.page_url,
        title=title,
        link=link,
        iso_date=iso_date,
        snippet=normalize_text(entry.snippet),
        content=(entry.content or "").strip(),
        images=unique_images(images),
    )
