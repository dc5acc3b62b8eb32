from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500

# (field, pydantic error type) -> message returned to the client
FIELD_ERROR_MESSAGES = {
    ("title", "missing"): "Title is required",
    ("title", "string_too_short"): "Title is required",
    ("title", "string_too_long"): "Title must not be more than 100 characters long",
    ("title", "string_type"): "Title must be a string",
    ("description", "string_too_long"): "Description must not be more than 500 characters long",
    ("description", "string_type"): "Description must be a string",
    ("completed", "bool_type"): "Completed must be a boolean value",
    ("completed", "bool_parsing"): "Completed must be a boolean value",
    ("body", "missing"): "Request body is required",
    ("body", "json_invalid"): "Request body must be valid JSON",
    ("body", "model_attributes_type"): "Request body must be a JSON object",
    ("body", "model_type"): "Request body must be a JSON object",
    ("body", "dict_type"): "Request body must be a JSON object",
}

_NULL_MESSAGES = {
    "title": "Title must not be null",
    "completed": "Completed must be a boolean value",
}


class TaskBase(BaseModel):
    """Base task schema with common fields."""
    title: str = Field(
        min_length=1,
        max_length=TITLE_MAX_LENGTH,
        description="The title of the task",
        examples=["Buy groceries"],
    )
    description: Optional[str] = Field(
        default=None,
        max_length=DESCRIPTION_MAX_LENGTH,
        description="Optional description of the task",
        examples=["Remember to buy milk and bread"],
    )


class TaskCreate(TaskBase):
    """Schema for creating new tasks.

    Only ``title`` and ``description`` are read; anything else in the body,
    including ``completed``, ``id`` or ``createdAt``, is ignored.
    """
    pass


class TaskUpdate(BaseModel):
    """Schema for updating existing tasks. Every field is optional."""
    title: Optional[str] = Field(
        default=None,
        min_length=1,
        max_length=TITLE_MAX_LENGTH,
        description="The title of the task",
        examples=["Buy groceries"],
    )
    description: Optional[str] = Field(
        default=None,
        max_length=DESCRIPTION_MAX_LENGTH,
        description="The description of the task; null clears it",
        examples=["Buy milk and bread"],
    )
    completed: Optional[bool] = Field(
        default=None,
        description="Completion status of the task",
        examples=[True],
    )

    @field_validator("title", "completed")
    @classmethod
    def _reject_null(cls, value, info: ValidationInfo):
        # Only runs for fields present in the body
        if value is None:
            raise PydanticCustomError("null_value", _NULL_MESSAGES[info.field_name])
        return value


class Task(TaskBase):
    """Complete task schema with all fields."""
    id: str = Field(description="The task's unique identifier")
    completed: bool = Field(description="Whether the task is completed", examples=[False])
    created_at: datetime = Field(
        serialization_alias="createdAt",
        description="Date when the task was created",
    )

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: str = Field(examples=["Task deleted successfully"])


class ErrorResponse(BaseModel):
    error: str = Field(examples=["Task not found"])


class FieldError(BaseModel):
    field: str = Field(examples=["title"])
    message: str = Field(examples=["Title is required"])


class ValidationErrorResponse(BaseModel):
    errors: List[FieldError]
