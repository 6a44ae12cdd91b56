"""Lifecycle rules for mutating a registered device.

A device in ``IN_USE`` state is protected: its name and brand are frozen and
it cannot be deleted. The functions here only decide; they never touch the
database. Callers load the existing device, ask for a decision, and persist
``Approved.device`` (or remove it) when the change is allowed.
"""

import enum
import uuid
from dataclasses import dataclass
from typing import Optional, Union

from models.device import Brand, Device, State


class RejectionReason(str, enum.Enum):
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"


@dataclass(frozen=True)
class DevicePatch:
    """Partial device input; unset fields keep the stored value."""

    name: Optional[str] = None
    brand: Optional[Brand] = None
    state: Optional[State] = None


@dataclass(frozen=True)
class Approved:
    device: Device


@dataclass(frozen=True)
class Rejected:
    reason: RejectionReason
    message: str


Decision = Union[Approved, Rejected]


def is_protected(device) -> bool:
    return device.state == State.IN_USE


def identity_changed(proposed, existing: Device) -> bool:
    return proposed.name != existing.name or proposed.brand != existing.brand


def _not_found(device_id: uuid.UUID) -> Rejected:
    return Rejected(RejectionReason.NOT_FOUND, f"Device with id '{device_id}' not found")


def _check_frozen_identity(device_id: uuid.UUID, proposed, existing: Device) -> Optional[Rejected]:
    # Protection is evaluated on the proposed state, not the stored one
    if is_protected(proposed) and identity_changed(proposed, existing):
        return Rejected(
            RejectionReason.CONFLICT,
            f"Device with id '{device_id}' is still in use so name and brand cannot be updated",
        )
    return None


def decide_update(
    device_id: uuid.UUID, proposed: Device, existing: Optional[Device]
) -> Decision:
    """Decide a full replacement of name, brand and state."""
    if existing is None:
        return _not_found(device_id)

    rejected = _check_frozen_identity(device_id, proposed, existing)
    if rejected:
        return rejected

    return Approved(
        Device.create_with_identity(
            existing.id,
            proposed.name,
            proposed.brand,
            proposed.state,
            existing.creation_time,
        )
    )


def decide_patch(
    device_id: uuid.UUID, partial: DevicePatch, existing: Optional[Device]
) -> Decision:
    """Decide a partial update.

    The frozen-identity check runs against the raw partial input, before any
    field is resolved from the stored device. Blank names and unset enums fall
    back to the stored values.
    """
    if existing is None:
        return _not_found(device_id)

    rejected = _check_frozen_identity(device_id, partial, existing)
    if rejected:
        return rejected

    name = partial.name if partial.name and partial.name.strip() else existing.name
    brand = partial.brand if partial.brand is not None else existing.brand
    state = partial.state if partial.state is not None else existing.state

    return Approved(
        Device.create_with_identity(existing.id, name, brand, state, existing.creation_time)
    )


def decide_delete(device_id: uuid.UUID, existing: Optional[Device]) -> Decision:
    """Decide removal; the approved device is the one to delete."""
    if existing is None:
        return _not_found(device_id)

    if is_protected(existing):
        return Rejected(
            RejectionReason.CONFLICT,
            f"Device with id '{device_id}' is still in use and cannot be deleted",
        )

    return Approved(existing)
