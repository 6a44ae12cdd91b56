"""Device service coordinating lookups, lifecycle decisions and persistence."""

import logging
import uuid
from typing import Optional

from sqlalchemy.orm import Session

from models.device import Brand, Device, State
from services.device_lifecycle import (
    Approved,
    Decision,
    DevicePatch,
    Rejected,
    decide_delete,
    decide_patch,
    decide_update,
)
from services.device_repository import DeviceRepository


logger = logging.getLogger(__name__)


class DeviceService:
    """Service for registering and maintaining devices."""

    def __init__(self, db: Session, repository: Optional[DeviceRepository] = None):
        self.repository = repository or DeviceRepository(db)

    def create_device(self, name: str, brand: Brand, state: State) -> Device:
        device = self.repository.save(Device.create_new(name, brand, state))
        logger.info("Device created", extra={"device_id": str(device.id)})
        return device

    def get_device(self, device_id: uuid.UUID) -> Optional[Device]:
        return self.repository.find_by_id(device_id)

    def list_devices(self) -> list[Device]:
        return self.repository.find_all()

    def list_devices_by_brand(self, brand: Brand) -> list[Device]:
        return self.repository.find_by_brand(brand)

    def list_devices_by_state(self, state: State) -> list[Device]:
        return self.repository.find_by_state(state)

    def update_device(self, device_id: uuid.UUID, proposed: Device) -> Decision:
        """Replace name, brand and state of a stored device.

        Returns the lifecycle decision; on approval it carries the device as
        persisted.
        """
        existing = self.repository.find_by_id(device_id)
        decision = decide_update(device_id, proposed, existing)
        return self._persist(device_id, decision)

    def patch_device(self, device_id: uuid.UUID, partial: DevicePatch) -> Decision:
        """Change only the fields set on ``partial``."""
        existing = self.repository.find_by_id(device_id)
        decision = decide_patch(device_id, partial, existing)
        return self._persist(device_id, decision)

    def delete_device(self, device_id: uuid.UUID) -> Decision:
        existing = self.repository.find_by_id(device_id)
        decision = decide_delete(device_id, existing)
        if isinstance(decision, Rejected):
            self._log_rejection(device_id, decision)
            return decision

        self.repository.delete_by_id(device_id)
        logger.info("Device deleted", extra={"device_id": str(device_id)})
        return decision

    def _persist(self, device_id: uuid.UUID, decision: Decision) -> Decision:
        if isinstance(decision, Rejected):
            self._log_rejection(device_id, decision)
            return decision

        saved = self.repository.save(decision.device)
        logger.info("Device updated", extra={"device_id": str(device_id)})
        return Approved(saved)

    def _log_rejection(self, device_id: uuid.UUID, decision: Rejected) -> None:
        logger.info(
            "Device change rejected: %s",
            decision.message,
            extra={"device_id": str(device_id), "reason": decision.reason.value},
        )
