from typing import List

from fastapi import APIRouter, Depends, status

from ..dependencies import get_task_service, translate_task_errors
from ..models import User
from ..schemas.task import Task as TaskSchema, TaskCreate, TaskUpdate
from ..service import TaskService
from .auth import get_current_user

router = APIRouter()


@router.get("/tasks", response_model=List[TaskSchema])
def list_tasks(
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """List the current user's tasks, incomplete first and newest first."""
    return service.list_tasks(current_user.id)


@router.post("/tasks", response_model=List[TaskSchema], status_code=status.HTTP_201_CREATED)
def create_task(
    task: TaskCreate,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Create a task and return the refreshed list."""
    with translate_task_errors():
        return service.create_task(current_user.id, task.description)


@router.get("/tasks/{task_id}", response_model=TaskSchema)
def get_task(
    task_id: int,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    with translate_task_errors():
        return service.get_task(current_user.id, task_id)


@router.patch("/tasks/{task_id}", response_model=List[TaskSchema])
def update_task(
    task_id: int,
    task_update: TaskUpdate,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Apply a partial update and return the refreshed list."""
    with translate_task_errors():
        return service.update_task(current_user.id, task_id, task_update.to_patch())


@router.delete("/tasks/{task_id}", response_model=List[TaskSchema])
def delete_task(
    task_id: int,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
):
    """Delete a task and return the refreshed list."""
    with translate_task_errors():
        return service.delete_task(current_user.id, task_id)
