"""Dependency-then-priority processing order for tasks."""

import heapq
from collections.abc import Sequence

from releaseflow.models import Task


def schedule_order(tasks: Sequence[Task]) -> list[Task]:
    """Order tasks so every task follows its in-release blockers.

    Kahn's algorithm where the ready set is a priority queue keyed on
    ``(priority, position)``. Blocker ids that name no task in ``tasks`` are
    not graph edges here; the scheduler reports them later.

    Tasks left over because of a cycle (cycle members and everything behind
    them) are appended in priority order so each still gets an outcome.
    """
    position = {task.id: idx for idx, task in enumerate(tasks)}
    in_degree = dict.fromkeys(position, 0)
    dependents: dict[str, list[str]] = {task_id: [] for task_id in position}

    for task in tasks:
        # A task that lists the same blocker twice still waits on it only once
        for blocker_id in dict.fromkeys(task.blocker_task_ids):
            if blocker_id in position:
                in_degree[task.id] += 1
                dependents[blocker_id].append(task.id)

    ready: list[tuple[int, int, str]] = [
        (tasks[idx].priority, idx, task_id)
        for task_id, idx in position.items()
        if in_degree[task_id] == 0
    ]
    heapq.heapify(ready)

    order: list[Task] = []
    while ready:
        _, idx, task_id = heapq.heappop(ready)
        order.append(tasks[idx])
        for dependent_id in dependents[task_id]:
            in_degree[dependent_id] -= 1
            if in_degree[dependent_id] == 0:
                dep_idx = position[dependent_id]
                heapq.heappush(ready, (tasks[dep_idx].priority, dep_idx, dependent_id))

    if len(order) < len(position):
        placed = {task.id for task in order}
        remainder = [task for task in tasks if task.id not in placed]
        order.extend(sorted(remainder, key=lambda t: (t.priority, position[t.id])))

    return order
