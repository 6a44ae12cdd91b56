"""Device registry endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from database import get_db
from models.device import Device, parse_brand, parse_state
from schemas.device import (
    DevicePatchRequest,
    DeviceRequest,
    DeviceResponse,
    ErrorResponse,
)
from services.device_lifecycle import Decision, DevicePatch, Rejected, RejectionReason
from services.device_service import DeviceService
from services.exceptions import DeviceNameConflictError


router = APIRouter()

NOT_FOUND = {"model": ErrorResponse, "description": "Device not found"}
CONFLICT = {"model": ErrorResponse, "description": "Device in use or name taken"}
BAD_REQUEST = {"model": ErrorResponse, "description": "Invalid request"}

_REJECTION_STATUS = {
    RejectionReason.NOT_FOUND: (status.HTTP_404_NOT_FOUND, "device_not_found"),
    RejectionReason.CONFLICT: (status.HTTP_409_CONFLICT, "device_in_use"),
}


def _raise_for_rejection(decision: Decision) -> None:
    if isinstance(decision, Rejected):
        status_code, error = _REJECTION_STATUS[decision.reason]
        raise HTTPException(
            status_code=status_code,
            detail={"error": error, "message": decision.message},
        )


def _name_taken(e: DeviceNameConflictError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail={"error": "device_name_taken", "message": str(e)},
    )


def _invalid_enum(kind: str, value: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"error": "invalid_enum_value", "message": f"Unknown {kind} '{value}'"},
    )


@router.post(
    "",
    response_model=DeviceResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: BAD_REQUEST, 409: CONFLICT},
)
def create_device(payload: DeviceRequest, db: Session = Depends(get_db)):
    """Register a new device; the server assigns its id and creation time."""
    service = DeviceService(db)
    try:
        device = service.create_device(payload.name, payload.brand, payload.state)
    except DeviceNameConflictError as e:
        raise _name_taken(e)
    return DeviceResponse.model_validate(device)


@router.get("", response_model=list[DeviceResponse])
def list_devices(db: Session = Depends(get_db)):
    service = DeviceService(db)
    return [DeviceResponse.model_validate(d) for d in service.list_devices()]


@router.get(
    "/brand/{brand}",
    response_model=list[DeviceResponse],
    responses={400: BAD_REQUEST},
)
def list_devices_by_brand(brand: str, db: Session = Depends(get_db)):
    """List devices of one brand; the brand name is case-insensitive."""
    brand_value = parse_brand(brand)
    if brand_value is None:
        raise _invalid_enum("brand", brand)

    service = DeviceService(db)
    return [DeviceResponse.model_validate(d) for d in service.list_devices_by_brand(brand_value)]


@router.get(
    "/state/{state}",
    response_model=list[DeviceResponse],
    responses={400: BAD_REQUEST},
)
def list_devices_by_state(state: str, db: Session = Depends(get_db)):
    """List devices in one state; the state name is case-insensitive."""
    state_value = parse_state(state)
    if state_value is None:
        raise _invalid_enum("state", state)

    service = DeviceService(db)
    return [DeviceResponse.model_validate(d) for d in service.list_devices_by_state(state_value)]


@router.get(
    "/{device_id}",
    response_model=DeviceResponse,
    responses={400: BAD_REQUEST, 404: NOT_FOUND},
)
def get_device(device_id: UUID, db: Session = Depends(get_db)):
    service = DeviceService(db)
    device = service.get_device(device_id)
    if device is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "error": "device_not_found",
                "message": f"Device with id '{device_id}' not found",
            },
        )
    return DeviceResponse.model_validate(device)


@router.put(
    "/{device_id}",
    response_model=DeviceResponse,
    responses={400: BAD_REQUEST, 404: NOT_FOUND, 409: CONFLICT},
)
def update_device(
    device_id: UUID,
    payload: DeviceRequest,
    db: Session = Depends(get_db),
):
    """Replace name, brand and state of a device.

    Name and brand cannot change while the device is in use. The creation
    time is always kept.
    """
    service = DeviceService(db)
    proposed = Device.create_new(payload.name, payload.brand, payload.state)
    try:
        decision = service.update_device(device_id, proposed)
    except DeviceNameConflictError as e:
        raise _name_taken(e)

    _raise_for_rejection(decision)
    return DeviceResponse.model_validate(decision.device)


@router.patch(
    "/{device_id}",
    response_model=DeviceResponse,
    responses={400: BAD_REQUEST, 404: NOT_FOUND, 409: CONFLICT},
)
def patch_device(
    device_id: UUID,
    payload: DevicePatchRequest,
    db: Session = Depends(get_db),
):
    """Change only the supplied fields of a device."""
    service = DeviceService(db)
    partial = DevicePatch(name=payload.name, brand=payload.brand, state=payload.state)
    try:
        decision = service.patch_device(device_id, partial)
    except DeviceNameConflictError as e:
        raise _name_taken(e)

    _raise_for_rejection(decision)
    return DeviceResponse.model_validate(decision.device)


@router.delete(
    "/{device_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: NOT_FOUND, 409: CONFLICT},
)
def delete_device(device_id: UUID, db: Session = Depends(get_db)):
    """Remove a device that is not in use."""
    service = DeviceService(db)
    decision = service.delete_device(device_id)
    _raise_for_rejection(decision)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
