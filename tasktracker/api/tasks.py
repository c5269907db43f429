from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from ..crud import TaskStorage
from ..db.session import get_session
from ..dependencies.auth import AuthenticatedRoute, get_current_user_id
from ..errors import NotFoundError
from ..models import TaskPriority, TaskStatus
from ..schemas.task import MessageResponse, TaskCreate, TaskRead, TaskUpdate

router = APIRouter(route_class=AuthenticatedRoute)


def get_storage(session: Session = Depends(get_session)) -> TaskStorage:
    return TaskStorage(session)


@router.get("", response_model=List[TaskRead])
def get_tasks(
    status: Optional[TaskStatus] = None,
    priority: Optional[TaskPriority] = None,
    user_id: int = Depends(get_current_user_id),
    storage: TaskStorage = Depends(get_storage),
):
    return storage.list_tasks(user_id, status=status, priority=priority)


@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(
    task: TaskCreate,
    user_id: int = Depends(get_current_user_id),
    storage: TaskStorage = Depends(get_storage),
):
    return storage.add_task(user_id, **task.model_dump())


@router.get("/{task_id}", response_model=TaskRead)
def get_task(
    task_id: int,
    user_id: int = Depends(get_current_user_id),
    storage: TaskStorage = Depends(get_storage),
):
    task = storage.get_task(user_id, task_id)
    if not task:
        raise NotFoundError("Task not found")
    return task


@router.put("/{task_id}", response_model=TaskRead)
def update_task(
    task_id: int,
    task_update: TaskUpdate,
    user_id: int = Depends(get_current_user_id),
    storage: TaskStorage = Depends(get_storage),
):
    updated_task = storage.update_task(
        user_id,
        task_id,
        **task_update.model_dump(exclude_unset=True)
    )
    if not updated_task:
        raise NotFoundError("Task not found")
    return updated_task


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: int,
    user_id: int = Depends(get_current_user_id),
    storage: TaskStorage = Depends(get_storage),
):
    if not storage.delete_task(user_id, task_id):
        raise NotFoundError("Task not found")
    return MessageResponse(message="Task deleted successfully")
