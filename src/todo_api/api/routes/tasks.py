"""Task routes."""
from fastapi import APIRouter, Response, status

from todo_api.api.deps import CurrentIdentity, DatabaseSession
from todo_api.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from todo_api.services.task_service import create_task, delete_task, list_tasks, update_task

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("", response_model=list[TaskResponse])
def list_all_tasks(identity: CurrentIdentity, db: DatabaseSession):
    """
    List all tasks owned by the current user.

    Args:
        identity: Current user identity
        db: Database session

    Returns:
        List of tasks
    """
    return list_tasks(db, identity)


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_new_task(
    task_data: TaskCreate,
    identity: CurrentIdentity,
    db: DatabaseSession,
    response: Response,
):
    """
    Create a new task owned by the current user.

    Args:
        task_data: Task creation data
        identity: Current user identity
        db: Database session
        response: Outgoing response, used for the Location header

    Returns:
        Created task
    """
    task = create_task(db, identity, name=task_data.name, is_complete=task_data.is_complete)
    response.headers["Location"] = f"/tasks/{task.id}"
    return task


@router.put("/{task_id}", response_model=TaskResponse)
def update_existing_task(
    task_id: int,
    task_data: TaskUpdate,
    identity: CurrentIdentity,
    db: DatabaseSession,
):
    """Replace a task's name and completion flag."""
    return update_task(
        db, identity, task_id, name=task_data.name, is_complete=task_data.is_complete
    )


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_existing_task(task_id: int, identity: CurrentIdentity, db: DatabaseSession):
    """Delete a task."""
    delete_task(db, identity, task_id)
