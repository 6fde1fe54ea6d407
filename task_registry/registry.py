"""
Task Registry - Registry.

============================================================
AUTHORITATIVE IN-MEMORY TASK STORE
============================================================

Owns every Task in the process:
- Identity generation (UUID4)
- Create / read / update / delete
- Listing in creation order

Tasks live until explicitly deleted. Nothing is persisted.

============================================================
THREAD SAFETY
============================================================

Every operation runs under a single lock acquisition, so
concurrent requests never observe a half-applied mutation.

============================================================
"""

import logging
import threading
from dataclasses import replace
from typing import Dict, List, Optional
from uuid import uuid4

from core.clock import ClockProtocol, SystemClock

from .models import Task


logger = logging.getLogger(__name__)


class TaskRegistry:
    """
    In-memory registry of tasks keyed by id.

    Listing order is insertion order. Updates replace the stored
    record in place and do not move it.

    ```python
    registry = TaskRegistry()
    task = registry.create("Buy milk")
    registry.update(task.id, completed=True)
    registry.delete(task.id)
    ```
    """

    def __init__(self, clock: Optional[ClockProtocol] = None) -> None:
        """
        Initialize task registry.

        Args:
            clock: Source of creation timestamps
        """
        self._clock = clock or SystemClock()
        self._tasks: Dict[str, Task] = {}
        self._lock = threading.RLock()

        logger.info("TaskRegistry initialized")

    # =========================================================
    # WRITES
    # =========================================================

    def create(self, title: str) -> Task:
        """
        Create and store a new task.

        The caller validates the title; it is stored trimmed.

        Returns:
            The new task, not completed
        """
        with self._lock:
            task = Task(
                id=self._new_id(),
                title=title.strip(),
                created_at=self._clock.now(),
            )
            self._tasks[task.id] = task

        logger.info(f"Task created: {task.id}")
        return task

    def update(
        self,
        task_id: str,
        title: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> Optional[Task]:
        """
        Merge the supplied fields into an existing task.

        Fields left as None are not touched. id and created_at
        never change.

        Returns:
            The updated task, or None if task_id is unknown
        """
        changes = {}
        if title is not None:
            changes["title"] = title.strip()
        if completed is not None:
            changes["completed"] = completed

        with self._lock:
            task = self._tasks.get(task_id)
            if task is None:
                logger.warning(f"Task not found for update: {task_id}")
                return None

            updated = replace(task, **changes) if changes else task
            self._tasks[task_id] = updated

        logger.info(f"Task updated: {task_id}")
        return updated

    def delete(self, task_id: str) -> bool:
        """
        Remove a task.

        Returns:
            True if a task was removed
        """
        with self._lock:
            removed = self._tasks.pop(task_id, None) is not None

        if removed:
            logger.info(f"Task deleted: {task_id}")
        else:
            logger.warning(f"Task not found for deletion: {task_id}")
        return removed

    # =========================================================
    # READS
    # =========================================================

    def get_all(self) -> List[Task]:
        """Get every task in creation order."""
        with self._lock:
            return list(self._tasks.values())

    def get_by_id(self, task_id: str) -> Optional[Task]:
        """Get a task by id, or None."""
        with self._lock:
            return self._tasks.get(task_id)

    def count(self) -> int:
        """Get the number of stored tasks."""
        with self._lock:
            return len(self._tasks)

    # =========================================================
    # HELPERS
    # =========================================================

    def _new_id(self) -> str:
        # Caller holds the lock.
        task_id = str(uuid4())
        while task_id in self._tasks:
            task_id = str(uuid4())
        return task_id
