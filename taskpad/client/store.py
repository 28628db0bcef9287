"""Liste de tâches locale avec mises à jour optimistes"""

import copy
import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import httpx

from taskpad.client.api import ApiError, TaskpadClient
from taskpad.services.ordering import sort_tasks

logger = logging.getLogger(__name__)

TEMP_ID_PREFIX = "temp-"


def sort_task_dicts(tasks: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return sort_tasks(tasks, completed_key="completed", status_key="status", created_key="createdAt")


class TaskStore:
    def __init__(self, api: TaskpadClient):
        self.api = api
        self.tasks: List[Dict[str, Any]] = []
        self.error: Optional[str] = None
        self.loading = False

    def find(self, task_id) -> Optional[Dict[str, Any]]:
        return next((t for t in self.tasks if t["id"] == task_id), None)

    @contextmanager
    def _optimistic(self, failure_message: str):
        # échec -> retour exact à l'état d'avant la mutation
        snapshot = copy.deepcopy(self.tasks)
        try:
            yield
        except (ApiError, httpx.HTTPError) as exc:
            logger.warning("%s: %s, rolling back", failure_message, exc)
            self.tasks = snapshot
            self.error = failure_message
            raise
        self.error = None

    def _replace(self, task_id, server_task: Dict[str, Any]) -> None:
        self.tasks = sort_task_dicts(
            [server_task if t["id"] == task_id else t for t in self.tasks]
        )

    def load(self) -> List[Dict[str, Any]]:
        self.loading = True
        try:
            self.tasks = sort_task_dicts(self.api.list_tasks())
            self.error = None
        except (ApiError, httpx.HTTPError):
            self.error = "Failed to load tasks"
            raise
        finally:
            self.loading = False
        return self.tasks

    def add(self, title: str, content: str = "", **fields) -> Dict[str, Any]:
        title = title.strip()
        if not title:
            raise ValueError("Title required")

        temp_id = f"{TEMP_ID_PREFIX}{int(time.time() * 1000)}"
        with self._optimistic("Failed to create task"):
            self.tasks = [self._placeholder(temp_id, title, content)] + self.tasks
            created = self.api.create_task(title, content, **fields)
            self._replace(temp_id, created)
        return created

    def toggle_complete(self, task_id) -> Dict[str, Any]:
        task = self.find(task_id)
        if task is None:
            raise KeyError(task_id)

        completed = not task["completed"]
        with self._optimistic("Failed to update task"):
            self._set_local(task_id, {"completed": completed})
            updated = self.api.patch_task(task_id, completed=completed)
            self._replace(task_id, updated)
        return updated

    def update(self, task_id, **fields) -> Dict[str, Any]:
        """PATCH with camelCase field names, e.g. ``repetitionFrequency="3"``."""
        if self.find(task_id) is None:
            raise KeyError(task_id)

        with self._optimistic("Failed to update task"):
            self._set_local(task_id, fields)
            updated = self.api.patch_task(task_id, **fields)
            self._replace(task_id, updated)
        return updated

    def delete(self, task_id) -> None:
        if self.find(task_id) is None:
            raise KeyError(task_id)

        with self._optimistic("Failed to delete task"):
            self.tasks = [t for t in self.tasks if t["id"] != task_id]
            self.api.delete_task(task_id)

    def commit_time(self, task_id, seconds: int) -> Dict[str, Any]:
        """Add a finished pomodoro session to the task. Usable as on_commit."""
        task = self.find(task_id)
        if task is None:
            raise KeyError(task_id)

        with self._optimistic("Failed to update task time"):
            self._set_local(task_id, {"totalTimeSpent": task.get("totalTimeSpent", 0) + seconds})
            updated = self.api.add_time(task_id, seconds)
            self._replace(task_id, updated)
        return updated

    def _set_local(self, task_id, changes: Dict[str, Any]) -> None:
        self.tasks = [dict(t, **changes) if t["id"] == task_id else t for t in self.tasks]

    @staticmethod
    def _placeholder(temp_id: str, title: str, content: str) -> Dict[str, Any]:
        return {
            "id": temp_id,
            "title": title,
            "content": content,
            "completed": False,
            "status": "todo",
            "totalTimeSpent": 0,
            "createdAt": time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime()),
        }
