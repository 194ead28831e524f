"""Shared builders and an in-memory RecordStore for pipeline tests."""

import uuid
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional, Set

from activity_pipeline.core.exceptions import StoreUnavailableError
from activity_pipeline.models.activity import Activity
from activity_pipeline.models.follow_up import ActivityFollowUp
from activity_pipeline.services.record_store import RecordStore

BASE_DATE = datetime(2026, 1, 5, 9, 0, 0, tzinfo=timezone.utc)


def activity_id(name: str) -> uuid.UUID:
    """Stable id for a named test activity."""
    return uuid.uuid5(uuid.NAMESPACE_URL, f"activity/{name}")


def make_activity(
    name: str,
    day: int,
    parent: Optional[str] = None,
    stage: Optional[str] = None,
    activity_type: str = "visit",
) -> Activity:
    return Activity(
        id=activity_id(name),
        activity_date=BASE_DATE + timedelta(days=day),
        activity_type=activity_type,
        parent_activity_id=activity_id(parent) if parent else None,
        customer_name="Acme Foods",
        notes=name,
        pipeline_stage=stage,
    )


def make_follow_up(
    name: str,
    owner: str,
    day: int,
    priority: Optional[str] = "medium",
    is_done: bool = False,
) -> ActivityFollowUp:
    return ActivityFollowUp(
        id=uuid.uuid5(uuid.NAMESPACE_URL, f"follow-up/{name}"),
        activity_id=activity_id(owner),
        follow_up_note=name,
        follow_up_date=BASE_DATE + timedelta(days=day),
        priority=priority,
        is_done=is_done,
        created_at=BASE_DATE,
    )


def names(activities: Iterable) -> List[str]:
    """Notes double as names for test activities."""
    return [a.notes for a in activities]


class InMemoryRecordStore(RecordStore):
    """RecordStore over plain lists, with call counting and failure injection."""

    def __init__(
        self,
        activities: Iterable[Activity] = (),
        follow_ups: Iterable[ActivityFollowUp] = (),
    ):
        self.activities = list(activities)
        self.follow_ups = list(follow_ups)
        self.calls: Counter = Counter()
        self.fail_on: Set[str] = set()

    def _record(self, operation: str) -> None:
        self.calls[operation] += 1
        if operation in self.fail_on:
            raise StoreUnavailableError("In-memory store", f"{operation} failed")

    async def fetch_all_activities(self) -> List[Activity]:
        self._record("fetch_all_activities")
        return list(self.activities)

    async def fetch_follow_ups(self, activity_ids: Set[uuid.UUID]) -> List[ActivityFollowUp]:
        if not activity_ids:
            return []
        self._record("fetch_follow_ups")
        matching = [f for f in self.follow_ups if f.activity_id in activity_ids]
        return sorted(matching, key=lambda f: f.follow_up_date)

    async def fetch_activity_by_id(self, activity_id: uuid.UUID) -> Optional[Activity]:
        self._record("fetch_activity_by_id")
        return next((a for a in self.activities if a.id == activity_id), None)

    async def fetch_children_of(self, activity_id: uuid.UUID) -> List[Activity]:
        self._record("fetch_children_of")
        children = [a for a in self.activities if a.parent_activity_id == activity_id]
        return sorted(children, key=lambda a: a.activity_date)
