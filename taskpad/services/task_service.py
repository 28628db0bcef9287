"""Task service"""

import logging
from typing import List, Optional

from sqlalchemy import case
from sqlalchemy.orm import Query, Session

from taskpad.core import errors
from taskpad.models.enums import STATUS_RANK
from taskpad.models.task import Task
from taskpad.services.repeat_service import InvalidRepetitionFrequency, normalize_repetition

logger = logging.getLogger(__name__)

# Champs modifiables via PUT/PATCH (total_time_spent passe par add_time_spent)
EDITABLE_FIELDS = (
    "title",
    "content",
    "goal",
    "completed",
    "priority",
    "status",
    "estimate",
    "due_date",
)
REQUIRED_FIELDS = {"title", "content", "completed", "priority", "status"}


def ordered_tasks(query: Query) -> Query:
    # non terminées d'abord, puis statut, puis les plus récentes ; id en dernier recours
    status_rank = case(STATUS_RANK, value=Task.status, else_=len(STATUS_RANK))
    return query.order_by(
        Task.completed.asc(),
        status_rank.asc(),
        Task.created_at.desc(),
        Task.id.asc(),
    )


def list_user_tasks(
    db: Session,
    user_id: int,
    status: Optional[str] = None,
    priority: Optional[str] = None,
    completed: Optional[bool] = None,
) -> List[Task]:
    query = db.query(Task).filter(Task.user_id == user_id)

    if status is not None:
        query = query.filter(Task.status == status)
    if priority is not None:
        query = query.filter(Task.priority == priority)
    if completed is not None:
        query = query.filter(Task.completed == completed)

    return ordered_tasks(query).all()


def get_user_task(db: Session, user_id: int, task_id: int) -> Task:
    # la tâche d'un autre utilisateur est traitée comme inexistante
    task = db.query(Task).filter(
        Task.id == task_id,
        Task.user_id == user_id
    ).first()

    if not task:
        raise errors.not_found("Task not found")
    return task


def _repeat_fields(frequency) -> dict:
    try:
        repeat_type, repeat_interval = normalize_repetition(frequency)
    except InvalidRepetitionFrequency as exc:
        raise errors.validation_error(str(exc), details={"field": "repetitionFrequency"})
    return {"repeat_type": repeat_type.value, "repeat_interval": repeat_interval}


def create_task(db: Session, user_id: int, data: dict) -> Task:
    fields = {k: v for k, v in data.items() if k in EDITABLE_FIELDS}
    fields.update(_repeat_fields(data.get("repetition_frequency")))

    task = Task(user_id=user_id, **fields)
    db.add(task)
    db.commit()
    db.refresh(task)
    logger.info("Task %s created for user %s", task.id, user_id)
    return task


def apply_update(task: Task, data: dict, replace_repeat: bool) -> Task:
    """Copy the provided fields onto the task.

    With replace_repeat (PUT) the repeat fields are always recomputed and a
    missing frequency means no repetition. Otherwise (PATCH) they only change
    when a frequency was sent.
    """
    for field in EDITABLE_FIELDS:
        if field not in data:
            continue
        if data[field] is None and field in REQUIRED_FIELDS:
            raise errors.validation_error(f"{field} cannot be null", details={"field": field})
        setattr(task, field, data[field])

    if replace_repeat or "repetition_frequency" in data:
        for field, value in _repeat_fields(data.get("repetition_frequency")).items():
            setattr(task, field, value)
    return task


def update_task(db: Session, task: Task, data: dict, replace_repeat: bool) -> Task:
    apply_update(task, data, replace_repeat)
    db.commit()
    db.refresh(task)
    logger.info("Task %s updated (%s)", task.id, ", ".join(sorted(data)) or "no fields")
    return task


def add_time_spent(db: Session, task: Task, seconds: int) -> Task:
    if seconds <= 0:
        raise errors.validation_error("Time spent increment must be positive")

    # incrément côté SQL : pas de perte si deux sessions se terminent en même temps
    task.total_time_spent = Task.total_time_spent + seconds
    db.commit()
    db.refresh(task)
    logger.info("Task %s: +%ss (total %ss)", task.id, seconds, task.total_time_spent)
    return task


def delete_task(db: Session, task: Task) -> None:
    task_id = task.id
    db.delete(task)
    db.commit()
    logger.info("Task %s deleted", task_id)
