"""Device aggregate and its relational mapping."""

import enum
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Column, DateTime, Enum, String, UniqueConstraint, Uuid

from database import Base


class Brand(str, enum.Enum):
    APPLE = "APPLE"
    SAMSUNG = "SAMSUNG"
    GOOGLE = "GOOGLE"
    XIAOMI = "XIAOMI"
    HUAWEI = "HUAWEI"
    MOTOROLA = "MOTOROLA"
    ONEPLUS = "ONEPLUS"
    SONY = "SONY"


class State(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    IN_USE = "IN_USE"
    INACTIVE = "INACTIVE"


def parse_brand(value: Optional[str]) -> Optional[Brand]:
    """Case-insensitive lookup of a brand name; None when there is no match."""
    if not value:
        return None
    return Brand.__members__.get(value.upper())


def parse_state(value: Optional[str]) -> Optional[State]:
    """Case-insensitive lookup of a state name; None when there is no match."""
    if not value:
        return None
    return State.__members__.get(value.upper())


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, matching the stored column."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True)
class Device:
    """One version of a registered device.

    Instances are never mutated; updates produce a new version through
    ``create_with_identity``.
    """

    id: Optional[uuid.UUID]
    name: str
    brand: Brand
    state: State
    creation_time: datetime

    @classmethod
    def create_new(cls, name: str, brand: Brand, state: State) -> "Device":
        """Build a device that has not been persisted yet."""
        return cls(None, name, brand, state, utcnow())

    @classmethod
    def create_with_identity(
        cls,
        id: uuid.UUID,
        name: str,
        brand: Brand,
        state: State,
        creation_time: datetime,
    ) -> "Device":
        """Build a device from fully known fields."""
        return cls(id, name, brand, state, creation_time)


class DeviceRecord(Base):
    """Row in the ``devices`` table."""

    __tablename__ = "devices"
    __table_args__ = (UniqueConstraint("name", name="uq_devices_name"),)

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    brand = Column(Enum(Brand, native_enum=False, length=20), nullable=False, index=True)
    state = Column(Enum(State, native_enum=False, length=20), nullable=False, index=True)
    creation_time = Column(DateTime, default=utcnow, nullable=False)

    @classmethod
    def from_domain(cls, device: Device) -> "DeviceRecord":
        return cls(
            id=device.id,
            name=device.name,
            brand=device.brand,
            state=device.state,
            creation_time=device.creation_time,
        )

    def to_domain(self) -> Device:
        return Device.create_with_identity(
            self.id, self.name, self.brand, self.state, self.creation_time
        )
