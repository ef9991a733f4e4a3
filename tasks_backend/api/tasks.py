from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from ..schemas import ErrorOut, TaskCreate, TaskDeleted, TaskOut, TaskUpdate
from ..services import TaskService
from .deps import get_current_user, get_task_service

# every route is authenticated before its handler runs
router = APIRouter(
    prefix="/tasks",
    tags=["Tasks"],
    dependencies=[Depends(get_current_user)],
    responses={401: {"model": ErrorOut}},
)


# PUBLIC_INTERFACE
@router.get("", response_model=List[TaskOut], summary="List the user's tasks")
def list_tasks(
    status_filter: Optional[str] = Query(None, alias="status", description="'pending' or 'completed'"),
    service: TaskService = Depends(get_task_service),
):
    """
    Get all tasks for the authenticated user, newest first.
    Any status value other than pending/completed is ignored.
    """
    return service.list(status_filter)


# PUBLIC_INTERFACE
@router.get("/{task_id}", response_model=TaskOut, summary="Get a single task", responses={404: {"model": ErrorOut}})
def get_task(task_id: int, service: TaskService = Depends(get_task_service)):
    return service.get(task_id)


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TaskOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create a task",
    responses={400: {"model": ErrorOut}},
)
def create_task(body: TaskCreate, service: TaskService = Depends(get_task_service)):
    """
    Create a new pending task for the authenticated user.
    """
    return service.create(body.title, body.description)


# PUBLIC_INTERFACE
@router.put(
    "/{task_id}",
    response_model=TaskOut,
    summary="Update a task",
    responses={400: {"model": ErrorOut}, 404: {"model": ErrorOut}},
)
def update_task(task_id: int, body: TaskUpdate, service: TaskService = Depends(get_task_service)):
    """
    Partially update a task. Omitted fields keep their current value.
    """
    return service.update(task_id, title=body.title, description=body.description, status=body.status)


# PUBLIC_INTERFACE
@router.delete("/{task_id}", response_model=TaskDeleted, summary="Delete a task", responses={404: {"model": ErrorOut}})
def delete_task(task_id: int, service: TaskService = Depends(get_task_service)):
    task = service.delete(task_id)
    return {"message": "Task deleted successfully", "task": task}


# PUBLIC_INTERFACE
@router.patch(
    "/{task_id}/toggle",
    response_model=TaskOut,
    summary="Flip a task between pending and completed",
    responses={404: {"model": ErrorOut}},
)
def toggle_task(task_id: int, service: TaskService = Depends(get_task_service)):
    return service.toggle(task_id)
