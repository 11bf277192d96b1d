"""Task service for ownership-scoped CRUD operations.

Every lookup filters on the task id and the caller's user id in one query.
A task owned by someone else is indistinguishable from one that does not
exist: both raise 404.
"""
import logging

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from todo_api.core.identity import Identity
from todo_api.models import Task

logger = logging.getLogger(__name__)


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Task not found",
    )


def list_tasks(db: Session, identity: Identity) -> list[Task]:
    """
    List all tasks owned by the caller.

    Args:
        db: Database session
        identity: Caller identity

    Returns:
        List of tasks
    """
    stmt = select(Task).where(Task.user_id == identity.user_id).order_by(Task.id)
    return list(db.execute(stmt).scalars().all())


def get_owned_task(
    db: Session, identity: Identity, task_id: int, for_update: bool = False
) -> Task | None:
    """
    Get a task by ID only if the caller owns it.

    Args:
        db: Database session
        identity: Caller identity
        task_id: Task ID
        for_update: Lock the row until the transaction ends

    Returns:
        Task if found and owned, None otherwise
    """
    stmt = select(Task).where(Task.id == task_id, Task.user_id == identity.user_id)
    if for_update:
        stmt = stmt.with_for_update()
    return db.execute(stmt).scalar_one_or_none()


def create_task(db: Session, identity: Identity, name: str, is_complete: bool = False) -> Task:
    """
    Create a new task owned by the caller.

    Args:
        db: Database session
        identity: Caller identity
        name: Task name
        is_complete: Completion flag

    Returns:
        Created task
    """
    task = Task(user_id=identity.user_id, name=name, is_complete=is_complete)
    db.add(task)
    db.commit()
    db.refresh(task)

    logger.debug(
        "Created task", extra={"user_id": identity.user_id, "task_id": task.id}
    )
    return task


def update_task(
    db: Session, identity: Identity, task_id: int, name: str, is_complete: bool
) -> Task:
    """
    Overwrite a task's name and completion flag.

    The owner is never changed.

    Args:
        db: Database session
        identity: Caller identity
        task_id: Task ID
        name: New name
        is_complete: New completion flag

    Returns:
        Updated task

    Raises:
        HTTPException: If the task is not found or not owned by the caller
    """
    task = get_owned_task(db, identity, task_id, for_update=True)
    if not task:
        raise _not_found()

    task.name = name
    task.is_complete = is_complete
    db.commit()
    db.refresh(task)

    return task


def delete_task(db: Session, identity: Identity, task_id: int) -> None:
    """
    Delete a task.

    Args:
        db: Database session
        identity: Caller identity
        task_id: Task ID

    Raises:
        HTTPException: If the task is not found or not owned by the caller
    """
    task = get_owned_task(db, identity, task_id, for_update=True)
    if not task:
        raise _not_found()

    db.delete(task)
    db.commit()

    logger.debug("Deleted task", extra={"user_id": identity.user_id, "task_id": task_id})
