"""
Listing & filter pipeline

A ``ListingStore`` keeps the last full snapshot of one role's collection.
The rendered sequence is always recomputed from the snapshot, the selected
district and the sort toggle; it holds no state of its own.
"""

import logging
from typing import Iterable, List, Optional, Protocol, Sequence

from tutorhub.models.listing import ListingRecord, Role

logger = logging.getLogger(__name__)


class CollectionReader(Protocol):
    async def fetch_all(self, role: Role) -> List[ListingRecord]:
        ...


def matches_district(record: ListingRecord, district: Optional[str]) -> bool:
    """Exact, case-sensitive district match; an unset district matches all"""
    if not district:
        return True
    return record.district == district


def sort_newest_first(records: Iterable[ListingRecord]) -> List[ListingRecord]:
    # sorted() is stable with reverse=True, so ties keep their fetch order
    return sorted(records, key=lambda r: r.created_at_seconds, reverse=True)


def derive_view(
    records: Sequence[ListingRecord],
    district: Optional[str] = "",
    sort_newest: bool = False,
) -> List[ListingRecord]:
    """Filter by district, then optionally sort newest first"""
    view = [r for r in records if matches_district(r, district)]
    if sort_newest:
        view = sort_newest_first(view)
    return view


def distinct_districts(records: Iterable[ListingRecord]) -> List[str]:
    seen = []
    for record in records:
        if record.district and record.district not in seen:
            seen.append(record.district)
    return seen


class ListingStore:
    """Snapshot of one role's listings plus the filter/sort state over it"""

    def __init__(self, reader: CollectionReader, role: Role):
        self.reader = reader
        self.role = Role(role)
        self.records: tuple = ()
        self.available_districts: List[str] = []
        self.district = ""
        self.sort_newest = False
        self.loading = False
        self.refreshing = False
        self.loaded = False
        self.error: Optional[str] = None
        self.active = True

    async def load(self) -> None:
        self.loading = True
        self.refreshing = False
        await self._fetch()

    async def refresh(self) -> None:
        self.refreshing = True
        self.loading = False
        await self._fetch()

    async def _fetch(self) -> None:
        try:
            records = await self.reader.fetch_all(self.role)
            error = None
        except Exception as e:
            logger.error(f"Failed to fetch {self.role.value} listings: {e}")
            records = []
            error = str(e) or e.__class__.__name__

        if not self.active:
            logger.debug(
                f"Discarding {self.role.value} listings fetched after close")
            return

        self.records = tuple(records)
        self.available_districts = distinct_districts(self.records)
        self.error = error
        self.loaded = True
        self.loading = False
        self.refreshing = False
        logger.info(
            f"Loaded {len(self.records)} {self.role.value} listings")

    def close(self) -> None:
        """Stop accepting fetch results; the owner has gone away"""
        self.active = False

    def select_district(self, district: Optional[str]) -> None:
        self.district = district or ""

    def clear_district(self) -> None:
        self.district = ""

    def set_sort_newest(self, sort_newest: bool) -> None:
        self.sort_newest = bool(sort_newest)

    def toggle_sort(self) -> None:
        self.sort_newest = not self.sort_newest

    @property
    def view(self) -> List[ListingRecord]:
        return derive_view(self.records, self.district, self.sort_newest)

    @property
    def is_empty(self) -> bool:
        return not self.view
