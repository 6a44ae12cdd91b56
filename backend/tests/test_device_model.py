"""Unit tests for the Device aggregate and enum parsing."""

import dataclasses
import uuid
from datetime import datetime

import pytest

from models.device import Brand, Device, State, parse_brand, parse_state, utcnow


@pytest.mark.unit
class TestDeviceFactories:
    """Test Device.create_new and Device.create_with_identity."""

    def test_create_new_has_no_id_and_current_time(self):
        before = utcnow()
        device = Device.create_new("Pixel 8", Brand.GOOGLE, State.AVAILABLE)
        after = utcnow()

        assert device.id is None
        assert device.name == "Pixel 8"
        assert device.brand == Brand.GOOGLE
        assert device.state == State.AVAILABLE
        assert before <= device.creation_time <= after

    def test_create_with_identity_keeps_every_field(self):
        device_id = uuid.uuid4()
        created = datetime(2024, 6, 1, 12, 0, 0)

        device = Device.create_with_identity(
            device_id, "Galaxy S24", Brand.SAMSUNG, State.INACTIVE, created
        )

        assert (device.id, device.name, device.brand, device.state, device.creation_time) == (
            device_id,
            "Galaxy S24",
            Brand.SAMSUNG,
            State.INACTIVE,
            created,
        )

    def test_device_is_immutable(self, available_device: Device):
        with pytest.raises(dataclasses.FrozenInstanceError):
            available_device.name = "Renamed"


@pytest.mark.unit
class TestEnumParsing:
    """Test parse_brand and parse_state."""

    @pytest.mark.parametrize("value", ["APPLE", "apple", "Apple"])
    def test_parse_brand_is_case_insensitive(self, value: str):
        assert parse_brand(value) is Brand.APPLE

    @pytest.mark.parametrize("value", ["nokia", "", None, "IN_USE", " apple "])
    def test_parse_brand_unknown_returns_none(self, value):
        assert parse_brand(value) is None

    def test_parse_state_accepts_underscored_names(self):
        assert parse_state("in_use") is State.IN_USE
        assert parse_state("AVAILABLE") is State.AVAILABLE

    @pytest.mark.parametrize("value", ["busy", "", None, "APPLE"])
    def test_parse_state_unknown_returns_none(self, value):
        assert parse_state(value) is None
