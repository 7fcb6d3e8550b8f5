# tests/test_task_ops.py

from __future__ import annotations

from datetime import timedelta

import pytest

from task_tracker.core.errors import InvalidFilter, InvalidInput, NotFound
from task_tracker.tasks import task_ops
from task_tracker.tasks.task_models import TaskStatus

from .fakes import T0, ticks


def _seed(*descriptions: str):
    clock = ticks()
    tasks = []
    for d in descriptions:
        tasks, _ = task_ops.add_task(tasks, d, now=next(clock))
    return tasks


def test_add_assigns_sequential_ids_in_creation_order() -> None:
    tasks = _seed("a", "b", "c", "d")
    assert [t.id for t in tasks] == [1, 2, 3, 4]
    assert [t.description for t in tasks] == ["a", "b", "c", "d"]


def test_add_sets_todo_and_equal_timestamps() -> None:
    tasks, task = task_ops.add_task([], "  buy milk  ", now=T0)
    assert tasks == [task]
    assert task.description == "buy milk"
    assert task.status is TaskStatus.TODO
    assert task.created_at == task.updated_at == T0


@pytest.mark.parametrize("description", ["", "   ", None, "caf\udce9"])
def test_add_rejects_empty_description(description) -> None:
    with pytest.raises(InvalidInput):
        task_ops.add_task([], description)


def test_ids_come_from_max_not_count() -> None:
    tasks = _seed("a", "b", "c")
    tasks = task_ops.delete_task(tasks, 1)
    tasks, task = task_ops.add_task(tasks, "d")
    # len() would give 3 and collide with the surviving task 3.
    assert task.id == 4
    assert len({t.id for t in tasks}) == len(tasks)


def test_next_task_id_empty_is_one() -> None:
    assert task_ops.next_task_id([]) == 1


def test_add_does_not_mutate_input() -> None:
    tasks = _seed("a")
    before = list(tasks)
    task_ops.add_task(tasks, "b")
    assert tasks == before


def test_update_replaces_description_and_bumps_updated_at() -> None:
    tasks = _seed("a", "b")
    original = tasks[1]
    later = original.created_at + timedelta(hours=1)

    new_tasks, updated = task_ops.update_task(tasks, 2, "b2", now=later)

    assert updated.description == "b2"
    assert updated.updated_at == later
    assert updated.created_at == original.created_at
    assert new_tasks[1] == updated
    assert new_tasks[0] == tasks[0]
    assert tasks[1] == original


def test_update_missing_id_is_not_found() -> None:
    tasks = _seed("a")
    with pytest.raises(NotFound) as exc:
        task_ops.update_task(tasks, 9, "x")
    assert exc.value.task_id == 9


def test_update_empty_description_is_invalid() -> None:
    tasks = _seed("a")
    with pytest.raises(InvalidInput):
        task_ops.update_task(tasks, 1, "  ")


def test_delete_preserves_order_of_survivors() -> None:
    tasks = _seed("a", "b", "c", "d")
    remaining = task_ops.delete_task(tasks, 2)
    assert [t.id for t in remaining] == [1, 3, 4]


def test_delete_missing_id_leaves_input_unchanged() -> None:
    tasks = _seed("a", "b")
    before = list(tasks)
    with pytest.raises(NotFound):
        task_ops.delete_task(tasks, 3)
    assert tasks == before


@pytest.mark.parametrize("status", [TaskStatus.IN_PROGRESS, TaskStatus.DONE])
def test_mark_status_sets_status_and_bumps_updated_at(status) -> None:
    tasks = _seed("a")
    later = T0 + timedelta(days=1)

    new_tasks, task = task_ops.mark_status(tasks, 1, status, now=later)

    assert task.status is status
    assert task.updated_at == later
    assert task.created_at == T0
    assert new_tasks == [task]


def test_mark_status_transitions_are_unconstrained() -> None:
    tasks = _seed("a")
    tasks, _ = task_ops.mark_status(tasks, 1, TaskStatus.DONE)
    tasks, task = task_ops.mark_status(tasks, 1, TaskStatus.IN_PROGRESS)
    assert task.status is TaskStatus.IN_PROGRESS


def test_mark_status_accepts_plain_string() -> None:
    tasks = _seed("a")
    _, task = task_ops.mark_status(tasks, 1, "done")
    assert task.status is TaskStatus.DONE


@pytest.mark.parametrize("status", [TaskStatus.TODO, "todo", "finished"])
def test_mark_status_rejects_todo_and_unknown(status) -> None:
    tasks = _seed("a")
    with pytest.raises(InvalidInput):
        task_ops.mark_status(tasks, 1, status)


def test_mark_status_missing_id_is_not_found() -> None:
    with pytest.raises(NotFound):
        task_ops.mark_status(_seed("a"), 2, TaskStatus.DONE)


def test_updated_at_never_precedes_created_at() -> None:
    tasks = _seed("a")
    earlier = T0 - timedelta(hours=5)
    _, task = task_ops.mark_status(tasks, 1, TaskStatus.DONE, now=earlier)
    assert task.updated_at == task.created_at


def test_list_without_filter_returns_full_sequence() -> None:
    tasks = _seed("a", "b", "c")
    listed = task_ops.list_tasks(tasks)
    assert listed == tasks
    assert listed is not tasks


def test_list_with_filter_keeps_relative_order() -> None:
    tasks = _seed("a", "b", "c", "d")
    tasks, _ = task_ops.mark_status(tasks, 4, TaskStatus.DONE)
    tasks, _ = task_ops.mark_status(tasks, 2, TaskStatus.DONE)
    tasks, _ = task_ops.mark_status(tasks, 3, TaskStatus.IN_PROGRESS)

    done = task_ops.list_tasks(tasks, TaskStatus.DONE)
    assert [t.id for t in done] == [2, 4]
    assert all(t.status is TaskStatus.DONE for t in done)
    assert [t.id for t in task_ops.list_tasks(tasks, TaskStatus.TODO)] == [1]


def test_list_with_no_match_is_empty() -> None:
    assert task_ops.list_tasks(_seed("a"), TaskStatus.DONE) == []


@pytest.mark.parametrize(("raw", "expected"), [("1", 1), (" 42 ", 42), ("007", 7)])
def test_parse_task_id_accepts_positive_integers(raw, expected) -> None:
    assert task_ops.parse_task_id(raw) == expected


@pytest.mark.parametrize("raw", [None, "", "0", "-1", "abc", "1.5", "²"])
def test_parse_task_id_rejects_everything_else(raw) -> None:
    with pytest.raises(InvalidInput):
        task_ops.parse_task_id(raw)


def test_parse_status_filter() -> None:
    assert task_ops.parse_status_filter(None) is None
    assert task_ops.parse_status_filter("in-progress") is TaskStatus.IN_PROGRESS
    with pytest.raises(InvalidFilter) as exc:
        task_ops.parse_status_filter("DONE")
    assert exc.value.value == "DONE"


def test_buy_milk_scenario() -> None:
    clock = ticks()

    tasks, task = task_ops.add_task([], "buy milk", now=next(clock))
    assert (task.id, task.status) == (1, TaskStatus.TODO)

    tasks, done = task_ops.mark_status(tasks, 1, TaskStatus.DONE, now=next(clock))
    assert done.status is TaskStatus.DONE
    assert done.updated_at > task.updated_at

    assert task_ops.list_tasks(tasks, TaskStatus.DONE) == [done]

    tasks = task_ops.delete_task(tasks, 1)
    assert tasks == []

    with pytest.raises(NotFound):
        task_ops.delete_task(tasks, 1)
