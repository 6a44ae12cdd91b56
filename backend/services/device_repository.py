"""SQLAlchemy powered repository for device persistence."""

import logging
import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.device import Brand, Device, DeviceRecord, State
from services.exceptions import DeviceNameConflictError


logger = logging.getLogger(__name__)


class DeviceRepository:
    """Loads and stores ``Device`` aggregates in the ``devices`` table."""

    def __init__(self, db: Session):
        self.db = db

    def save(self, device: Device) -> Device:
        """Insert a new device or overwrite an existing one.

        Devices without an id are inserted and receive a generated UUID.

        Raises:
            DeviceNameConflictError: another device already uses the name
        """
        record = self.db.get(DeviceRecord, device.id) if device.id is not None else None
        if record is None:
            record = DeviceRecord.from_domain(device)
            self.db.add(record)
        else:
            record.name = device.name
            record.brand = device.brand
            record.state = device.state
            record.creation_time = device.creation_time

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning("Duplicate device name rejected by store: %s", device.name)
            raise DeviceNameConflictError(device.name)

        self.db.refresh(record)
        return record.to_domain()

    def find_by_id(self, device_id: uuid.UUID) -> Optional[Device]:
        record = self.db.get(DeviceRecord, device_id)
        return record.to_domain() if record else None

    def find_all(self) -> list[Device]:
        return self._list(select(DeviceRecord))

    def find_by_brand(self, brand: Brand) -> list[Device]:
        return self._list(select(DeviceRecord).where(DeviceRecord.brand == brand))

    def find_by_state(self, state: State) -> list[Device]:
        return self._list(select(DeviceRecord).where(DeviceRecord.state == state))

    def delete_by_id(self, device_id: uuid.UUID) -> None:
        record = self.db.get(DeviceRecord, device_id)
        if record is None:
            return
        self.db.delete(record)
        self.db.commit()

    def exists_by_id(self, device_id: uuid.UUID) -> bool:
        return self.db.get(DeviceRecord, device_id) is not None

    def _list(self, stmt) -> list[Device]:
        stmt = stmt.order_by(DeviceRecord.creation_time, DeviceRecord.name)
        return [record.to_domain() for record in self.db.scalars(stmt)]
