"""Tests for FollowUpAnnotator."""

import pytest

from activity_pipeline.core.exceptions import AnnotationError
from activity_pipeline.services.annotator import FollowUpAnnotator
from activity_pipeline.services.lineage import resolve_lineage

from .fixtures import InMemoryRecordStore, activity_id, make_activity, make_follow_up, names

pytestmark = pytest.mark.anyio


def _by_name(annotated):
    return {a.notes: a for a in annotated}


async def test_groups_follow_ups_by_activity(chain_store: InMemoryRecordStore) -> None:
    pipeline = resolve_lineage(activity_id("a"), chain_store.activities)
    annotated = await FollowUpAnnotator(chain_store).annotate(pipeline)

    by_name = _by_name(annotated)
    assert [f.follow_up_note for f in by_name["a"].follow_ups] == ["send samples", "call back"]
    assert [f.follow_up_note for f in by_name["c"].follow_ups] == ["quote"]
    assert by_name["root"].follow_ups == []
    assert by_name["b"].follow_ups == []


async def test_preserves_pipeline_order(chain_store: InMemoryRecordStore) -> None:
    pipeline = resolve_lineage(activity_id("root"), chain_store.activities)
    annotated = await FollowUpAnnotator(chain_store).annotate(pipeline)
    assert names(annotated) == names(pipeline)
    assert [a.id for a in annotated] == [a.id for a in pipeline]


async def test_issues_single_bulk_read(chain_store: InMemoryRecordStore) -> None:
    pipeline = resolve_lineage(activity_id("root"), chain_store.activities)
    await FollowUpAnnotator(chain_store).annotate(pipeline)
    assert chain_store.calls["fetch_follow_ups"] == 1


async def test_excludes_follow_ups_outside_pipeline(chain_store: InMemoryRecordStore) -> None:
    pipeline = resolve_lineage(activity_id("c"), chain_store.activities)
    annotated = await FollowUpAnnotator(chain_store).annotate(pipeline)
    notes = [f.follow_up_note for a in annotated for f in a.follow_ups]
    assert "unrelated" not in notes


async def test_normalizes_priority(chain_store: InMemoryRecordStore) -> None:
    pipeline = resolve_lineage(activity_id("c"), chain_store.activities)
    annotated = await FollowUpAnnotator(chain_store).annotate(pipeline)

    by_name = _by_name(annotated)
    priorities = {f.follow_up_note: f.priority for f in by_name["a"].follow_ups}
    assert priorities == {"send samples": "medium", "call back": "high"}
    assert by_name["c"].follow_ups[0].priority == "medium"


async def test_does_not_mutate_source_activities(chain_store: InMemoryRecordStore) -> None:
    pipeline = resolve_lineage(activity_id("a"), chain_store.activities)
    await FollowUpAnnotator(chain_store).annotate(pipeline)
    assert not any(hasattr(a, "follow_ups") for a in pipeline)


async def test_empty_pipeline_skips_read() -> None:
    store = InMemoryRecordStore()
    annotated = await FollowUpAnnotator(store).annotate([])
    assert annotated == []
    assert store.calls["fetch_follow_ups"] == 0


async def test_read_failure_returns_empty_follow_ups(chain_store: InMemoryRecordStore) -> None:
    chain_store.fail_on = {"fetch_follow_ups"}
    pipeline = resolve_lineage(activity_id("a"), chain_store.activities)
    annotator = FollowUpAnnotator(chain_store)

    annotated = await annotator.annotate(pipeline)

    assert names(annotated) == ["root", "a", "b", "c"]
    assert all(a.follow_ups == [] for a in annotated)
    assert isinstance(annotator.last_error, AnnotationError)
    assert "fetch_follow_ups failed" in annotator.last_error.message


async def test_error_cleared_on_next_success(chain_store: InMemoryRecordStore) -> None:
    pipeline = resolve_lineage(activity_id("a"), chain_store.activities)
    annotator = FollowUpAnnotator(chain_store)

    chain_store.fail_on = {"fetch_follow_ups"}
    await annotator.annotate(pipeline)
    chain_store.fail_on = set()
    await annotator.annotate(pipeline)

    assert annotator.last_error is None


async def test_annotation_grouping_for_two_activities() -> None:
    store = InMemoryRecordStore(
        [make_activity("x", 1), make_activity("y", 2, parent="x")],
        [
            make_follow_up("f2", "x", 5),
            make_follow_up("f1", "x", 3),
            make_follow_up("f3", "y", 4),
        ],
    )
    pipeline = resolve_lineage(activity_id("x"), store.activities)
    annotated = _by_name(await FollowUpAnnotator(store).annotate(pipeline))

    assert [f.follow_up_note for f in annotated["x"].follow_ups] == ["f1", "f2"]
    assert [f.follow_up_note for f in annotated["y"].follow_ups] == ["f3"]


async def test_malformed_follow_up_row_is_not_fatal(chain_store: InMemoryRecordStore) -> None:
    broken = make_follow_up("broken", "b", 5)
    broken.follow_up_note = None
    chain_store.follow_ups.append(broken)
    pipeline = resolve_lineage(activity_id("a"), chain_store.activities)
    annotator = FollowUpAnnotator(chain_store)

    annotated = await annotator.annotate(pipeline)

    assert names(annotated) == ["root", "a", "b", "c"]
    assert all(a.follow_ups == [] for a in annotated)
    assert isinstance(annotator.last_error, AnnotationError)
