from models.device import (
    Brand,
    Device,
    DeviceRecord,
    State,
    parse_brand,
    parse_state,
)

__all__ = [
    "Brand",
    "Device",
    "DeviceRecord",
    "State",
    "parse_brand",
    "parse_state",
]
