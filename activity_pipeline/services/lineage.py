"""
Lineage resolution - ancestors and descendants of an activity.

Two strategies share the same semantics:
- OptimizedLineageStrategy loads every activity once and walks in memory.
- OriginalLineageStrategy issues one read per ancestor and one children
  read per descendant.
Both return the pipeline sorted by (activity_date, id).
"""
import uuid
from abc import ABC, abstractmethod
from collections import defaultdict, deque
from typing import Dict, Iterable, List, Optional

from activity_pipeline.core.dates import as_utc
from activity_pipeline.core.exceptions import NotFoundError
from activity_pipeline.models.activity import Activity
from activity_pipeline.services.record_store import RecordStore


def sort_chronologically(activities: Iterable[Activity]) -> List[Activity]:
    """Oldest first; ties broken by id so every strategy agrees."""
    return sorted(activities, key=lambda a: (as_utc(a.activity_date), str(a.id)))


def find_root(start_id: uuid.UUID, activities: Iterable[Activity]) -> Optional[uuid.UUID]:
    """Highest ancestor of start_id reachable inside the given activities."""
    by_id = {a.id: a for a in activities}
    if start_id not in by_id:
        return None
    
    visited = set()
    current = by_id[start_id]
    while True:
        visited.add(current.id)
        parent = by_id.get(current.parent_activity_id)
        if parent is None or parent.id in visited:
            return current.id
        current = parent


def resolve_lineage(start_id: uuid.UUID, activities: Iterable[Activity]) -> List[Activity]:
    """
    Resolve the full pipeline of start_id from an in-memory activity set.
    
    Args:
        start_id: Activity whose pipeline is requested
        activities: Every activity that may belong to the pipeline
    
    Returns:
        Ancestors, start activity and descendants, each exactly once,
        in chronological order
    
    Raises:
        NotFoundError: start_id is not in activities
    """
    by_id: Dict[uuid.UUID, Activity] = {}
    children: Dict[uuid.UUID, List[Activity]] = defaultdict(list)
    for activity in activities:
        by_id[activity.id] = activity
        if activity.parent_activity_id is not None:
            children[activity.parent_activity_id].append(activity)
    
    if start_id not in by_id:
        raise NotFoundError("Activity", str(start_id))
    
    visited = set()
    
    # Walk up to the root; stop on a missing parent or a cycle
    path_to_root: deque = deque()
    current = by_id[start_id]
    while current is not None and current.id not in visited:
        visited.add(current.id)
        path_to_root.appendleft(current)
        current = by_id.get(current.parent_activity_id)
    
    pipeline = list(path_to_root)
    
    # Breadth-first over follow-up activities
    queue = deque([start_id])
    while queue:
        for child in children.get(queue.popleft(), []):
            if child.id not in visited:
                visited.add(child.id)
                pipeline.append(child)
                queue.append(child.id)
    
    return sort_chronologically(pipeline)


class LineageStrategy(ABC):
    """A way of resolving an activity's pipeline from a RecordStore."""
    
    name: str = "base"
    
    def __init__(self, store: RecordStore):
        self.store = store
    
    @abstractmethod
    async def resolve(self, start_id: uuid.UUID) -> List[Activity]:
        """Return the chronologically ordered pipeline of start_id."""
        pass


class OptimizedLineageStrategy(LineageStrategy):
    """Single bulk read, then in-memory traversal."""
    
    name = "optimized"
    
    async def resolve(self, start_id: uuid.UUID) -> List[Activity]:
        activities = await self.store.fetch_all_activities()
        return resolve_lineage(start_id, activities)


class OriginalLineageStrategy(LineageStrategy):
    """Per-node reads: one lookup per ancestor, one children query per descendant."""
    
    name = "original"
    
    async def resolve(self, start_id: uuid.UUID) -> List[Activity]:
        start = await self.store.fetch_activity_by_id(start_id)
        if start is None:
            raise NotFoundError("Activity", str(start_id))
        
        visited = set()
        
        path_to_root: deque = deque()
        current = start
        while current is not None and current.id not in visited:
            visited.add(current.id)
            path_to_root.appendleft(current)
            if current.parent_activity_id is None:
                break
            current = await self.store.fetch_activity_by_id(current.parent_activity_id)
        
        pipeline = list(path_to_root)
        
        # Depth-first, pre-order, with an explicit stack of child iterators
        stack = [iter(await self.store.fetch_children_of(start_id))]
        while stack:
            child = next(stack[-1], None)
            if child is None:
                stack.pop()
                continue
            if child.id in visited:
                continue
            visited.add(child.id)
            pipeline.append(child)
            stack.append(iter(await self.store.fetch_children_of(child.id)))
        
        return sort_chronologically(pipeline)
