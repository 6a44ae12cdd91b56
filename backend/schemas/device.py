"""Pydantic schemas for device endpoints."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from models.device import Brand, State


def validate_device_name(name: str) -> str:
    if not name or not name.strip():
        raise ValueError("Device name is required")
    if len(name) > 255:
        raise ValueError("Device name must be at most 255 characters long")
    return name


class DeviceRequest(BaseModel):
    """Body for creating a device or replacing all of its fields."""

    name: str
    brand: Brand
    state: State

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return validate_device_name(v)


class DevicePatchRequest(BaseModel):
    """Body for a partial update; omitted or blank fields are left unchanged."""

    name: Optional[str] = None
    brand: Optional[Brand] = None
    state: Optional[State] = None

    @field_validator("name")
    @classmethod
    def validate_name_length(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and len(v) > 255:
            raise ValueError("Device name must be at most 255 characters long")
        return v


class DeviceResponse(BaseModel):
    id: UUID
    name: str
    brand: Brand
    state: State
    creation_time: datetime

    class Config:
        from_attributes = True


class ErrorDetail(BaseModel):
    error: str
    message: str


class ErrorResponse(BaseModel):
    detail: ErrorDetail
