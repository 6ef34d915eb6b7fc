"""
Activity Cache - In-memory id-indexed activity store.

Used for incremental syncs: newly fetched activities are merged into the
cached set, and an id already present keeps its cached copy.
"""
from typing import Dict, Iterable, List, Optional

from sportyear.core.logging import get_logger
from sportyear.models.activity import Activity

logger = get_logger(__name__)


class ActivityCache:
    """
    Id-indexed activity store.

    Pipeline functions never read from it implicitly; callers pass
    cache.activities() explicitly.
    """

    def __init__(self, activities: Optional[Iterable[Activity]] = None):
        self._by_id: Dict[str, Activity] = {}
        if activities:
            self.merge(activities)

    def merge(self, new_activities: Iterable[Activity]) -> List[Activity]:
        """
        Merge fetched activities into the cache.

        Args:
            new_activities: Activities from the latest fetch

        Returns:
            The activities that were actually added (ids not seen before)
        """
        added: List[Activity] = []
        skipped = 0
        for activity in new_activities:
            if activity.id in self._by_id:
                skipped += 1
                continue
            self._by_id[activity.id] = activity
            added.append(activity)

        logger.debug(
            "Merged activities into cache",
            added_count=len(added),
            duplicate_count=skipped,
            cache_size=len(self._by_id),
        )
        return added

    def get(self, activity_id: str) -> Optional[Activity]:
        return self._by_id.get(str(activity_id))

    def activities(self, year: Optional[int] = None) -> List[Activity]:
        """Cached activities newest first, optionally limited to one year."""
        items = self._by_id.values()
        if year is not None:
            items = [a for a in items if a.date.year == year]
        return sorted(items, key=lambda a: (a.date, a.id), reverse=True)

    def __contains__(self, activity_id: object) -> bool:
        return str(activity_id) in self._by_id

    def __len__(self) -> int:
        return len(self._by_id)
