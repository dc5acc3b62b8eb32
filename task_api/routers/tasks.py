import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ..database import get_db
from ..models import Task as TaskModel
from ..schemas.task import (
    ErrorResponse,
    MessageResponse,
    Task as TaskSchema,
    TaskCreate,
    TaskUpdate,
    ValidationErrorResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

TASK_NOT_FOUND = "Task not found"

_VALIDATION_ERROR = {"model": ValidationErrorResponse, "description": "Validation error"}
_NOT_FOUND = {"model": ErrorResponse, "description": TASK_NOT_FOUND}
_SERVER_ERROR = {"model": ErrorResponse, "description": "Internal server error"}


def _server_error(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


def _get_update_data(task_update: Optional[TaskUpdate]) -> dict:
    if task_update is None:
        return {}
    return task_update.model_dump(exclude_unset=True)


@router.post(
    "/tasks",
    response_model=TaskSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new task",
    responses={400: _VALIDATION_ERROR, 500: _SERVER_ERROR},
)
def create_task(task: TaskCreate, db: Session = Depends(get_db)):
    """Create a new task. New tasks always start out pending."""
    try:
        db_task = TaskModel(title=task.title, description=task.description)
        db.add(db_task)
        db.commit()
        db.refresh(db_task)
    except SQLAlchemyError:
        logger.exception("Failed to create task")
        raise _server_error("An error occurred while creating the task")

    logger.info("Created task %s", db_task.id)
    return db_task


@router.get(
    "/tasks",
    response_model=List[TaskSchema],
    summary="Get all tasks",
    responses={500: _SERVER_ERROR},
)
def get_tasks(
    status_filter: Optional[str] = Query(
        default=None,
        alias="status",
        description="Filter tasks by completion status: `completed` or `pending`. "
        "Any other value returns every task.",
    ),
    db: Session = Depends(get_db),
):
    """List tasks in storage order, optionally filtered by completion status.

    The order is whatever the store returns and is not guaranteed.
    """
    query = select(TaskModel)
    if status_filter == "completed":
        query = query.where(TaskModel.completed == True)  # noqa: E712
    elif status_filter == "pending":
        query = query.where(TaskModel.completed == False)  # noqa: E712

    try:
        return db.exec(query).all()
    except SQLAlchemyError:
        logger.exception("Failed to list tasks")
        raise _server_error("An error occurred while fetching tasks")


@router.get(
    "/tasks/{task_id}",
    response_model=TaskSchema,
    summary="Get a task by specific ID",
    responses={404: _NOT_FOUND, 500: _SERVER_ERROR},
)
def get_task(task_id: str, db: Session = Depends(get_db)):
    """Get a specific task by ID."""
    try:
        task = db.get(TaskModel, task_id)
    except SQLAlchemyError:
        logger.exception("Failed to fetch task %s", task_id)
        raise _server_error("An error occurred while fetching the task")

    if not task:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TASK_NOT_FOUND)
    return task


@router.put(
    "/tasks/{task_id}",
    response_model=TaskSchema,
    summary="Update an existing task",
    responses={400: _VALIDATION_ERROR, 404: _NOT_FOUND, 500: _SERVER_ERROR},
)
def update_task(
    task_id: str,
    task_update: Optional[TaskUpdate] = None,
    db: Session = Depends(get_db),
):
    """Update a specific task.

    Only the fields present in the body are changed; an empty or missing
    body leaves the task as it was.
    """
    try:
        task = db.get(TaskModel, task_id)
        if not task:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TASK_NOT_FOUND)

        for field, value in _get_update_data(task_update).items():
            setattr(task, field, value)

        db.commit()
        db.refresh(task)
    except SQLAlchemyError:
        logger.exception("Failed to update task %s", task_id)
        raise _server_error("An error occurred while updating the task")
    return task


@router.delete(
    "/tasks/{task_id}",
    response_model=MessageResponse,
    summary="Delete a task",
    responses={404: _NOT_FOUND, 500: _SERVER_ERROR},
)
def delete_task(task_id: str, db: Session = Depends(get_db)):
    """Delete a specific task permanently."""
    try:
        task = db.get(TaskModel, task_id)
        if not task:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=TASK_NOT_FOUND)

        db.delete(task)
        db.commit()
    except SQLAlchemyError:
        logger.exception("Failed to delete task %s", task_id)
        raise _server_error("An error occurred while deleting the task")

    logger.info("Deleted task %s", task_id)
    return {"message": "Task deleted successfully"}
