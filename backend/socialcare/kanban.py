"""
Kanban board state as plain data.

A board maps each task status to the list of tasks in that column. Tasks
are dicts with at least ``id`` and ``status`` keys (the JSON shape served by
``/api/tasks``). Every function returns a new board and leaves its input
untouched, so a client can apply a drag-and-drop move optimistically and
fall back to the previous board if the server rejects the update.
"""

from typing import Any, Iterable, Mapping, Optional

TASK_STATUSES = ("Backlog", "In Progress", "Blocked", "Complete")

Board = dict[str, list[dict[str, Any]]]


def empty_board() -> Board:
    return {status: [] for status in TASK_STATUSES}


def _copy(board: Mapping[str, list]) -> Board:
    copied = empty_board()
    for status, tasks in board.items():
        copied[status] = list(tasks)
    return copied


def build_board(tasks: Iterable[Mapping[str, Any]]) -> Board:
    """Group tasks into columns. Tasks with an unknown status are dropped."""
    board = empty_board()
    for task in tasks:
        status = task.get("status")
        if status in board:
            board[status].append(dict(task))
    return board


def find_task(board: Mapping[str, list], task_id) -> Optional[tuple[str, int]]:
    for status, tasks in board.items():
        for index, task in enumerate(tasks):
            if task.get("id") == task_id:
                return status, index
    return None


def move_task(board: Mapping[str, list], task_id, target_status: str) -> Board:
    """Move a task to ``target_status``, appending it to the end of that column.

    Any status can follow any other. Moving an unknown task, or dropping a
    task back onto its own column, returns an unchanged copy.
    """
    if target_status not in TASK_STATUSES:
        raise ValueError(f"Unknown task status: {target_status!r}")

    new_board = _copy(board)
    location = find_task(new_board, task_id)
    if location is None:
        return new_board

    source_status, index = location
    if source_status == target_status:
        return new_board

    task = new_board[source_status].pop(index)
    new_board[target_status].append({**task, "status": target_status})
    return new_board


def remove_task(board: Mapping[str, list], task_id) -> Board:
    new_board = _copy(board)
    for status in new_board:
        new_board[status] = [t for t in new_board[status] if t.get("id") != task_id]
    return new_board


def upsert_task(board: Mapping[str, list], task: Mapping[str, Any]) -> Board:
    """Insert a new task or replace an existing one in the column its status names."""
    status = task.get("status")
    if status not in TASK_STATUSES:
        raise ValueError(f"Unknown task status: {status!r}")

    new_board = _copy(board)
    location = find_task(new_board, task.get("id"))
    if location is not None and location[0] == status:
        new_board[status][location[1]] = dict(task)
        return new_board

    new_board = remove_task(new_board, task.get("id"))
    new_board[status].append(dict(task))
    return new_board


def column_counts(board: Mapping[str, list]) -> dict[str, int]:
    return {status: len(board.get(status, [])) for status in TASK_STATUSES}
