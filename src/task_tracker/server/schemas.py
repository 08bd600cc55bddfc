"""Pydantic schemas for the FastAPI server."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str


class ErrorResponse(BaseModel):
    """Body returned with every 4xx/5xx response."""

    error: str


class TaskResponse(BaseModel):
    """Serialized task, same shape as the persisted record."""

    id: int
    title: str
    priority: str
    dueDate: Optional[str] = None
    completed: bool


class TaskCreateRequest(BaseModel):
    """Request body for creating a task.

    Title presence is checked by the store so that a missing and a blank
    title produce the same error message.
    """

    title: Optional[str] = Field(default=None)
    priority: Optional[str] = Field(default=None, description="Low, Medium or High")
    dueDate: Optional[str] = Field(default=None, description="ISO date (YYYY-MM-DD)")
