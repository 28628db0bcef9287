from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from taskpad.core.database import get_db
from taskpad.core.deps import get_current_user
from taskpad.models.enums import Priority, Status
from taskpad.models.user import User
from taskpad.schemas.task import TaskCreate, TaskUpdate, TaskTimeUpdate, TaskResponse, DeleteResponse
from taskpad.services import task_service

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


@router.get("", response_model=List[TaskResponse])
def list_tasks(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    status_filter: Optional[Status] = Query(None, alias="status"),
    priority_filter: Optional[Priority] = Query(None, alias="priority"),
    completed: Optional[bool] = Query(None),
):
    return task_service.list_user_tasks(
        db,
        current_user.id,
        status=status_filter.value if status_filter else None,
        priority=priority_filter.value if priority_filter else None,
        completed=completed,
    )


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return task_service.create_task(db, current_user.id, task_data.model_dump())


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return task_service.get_user_task(db, current_user.id, task_id)


@router.put("/{task_id}", response_model=TaskResponse)
def replace_task(
    task_id: int,
    task_data: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """PUT : la répétition est toujours recalculée (absente = aucune)"""
    task = task_service.get_user_task(db, current_user.id, task_id)
    return task_service.update_task(
        db, task, task_data.model_dump(exclude_unset=True), replace_repeat=True
    )


@router.patch("/{task_id}", response_model=TaskResponse)
def patch_task(
    task_id: int,
    task_data: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """PATCH : seuls les champs envoyés changent"""
    task = task_service.get_user_task(db, current_user.id, task_id)
    return task_service.update_task(
        db, task, task_data.model_dump(exclude_unset=True), replace_repeat=False
    )


@router.delete("/{task_id}", response_model=DeleteResponse)
def delete_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    task = task_service.get_user_task(db, current_user.id, task_id)
    task_service.delete_task(db, task)
    return {"success": True}


@router.post("/{task_id}/time", response_model=TaskResponse)
def add_time(
    task_id: int,
    body: TaskTimeUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Ajoute la durée d'une session pomodoro au temps passé"""
    task = task_service.get_user_task(db, current_user.id, task_id)
    return task_service.add_time_spent(db, task, body.seconds)
