"""Device domain specific exceptions."""


class DeviceError(Exception):
    """Base class for device related domain errors."""


class DeviceNameConflictError(DeviceError):
    """Raised when a device name is already taken by another device."""

    def __init__(self, name: str):
        super().__init__(f"Device with name '{name}' already exists")
        self.name = name
