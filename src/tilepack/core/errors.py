"""Exceptions raised by the packer, the layout orchestrator and config loading."""


class PackingError(Exception):
    """Base class for all tilepack errors."""


class InvalidCanvasError(PackingError):
    """Canvas has a negative or NaN extent, or its center lies outside it."""


class UnplaceableItemError(PackingError):
    """An item cannot be placed, even after growing the canvas."""

    def __init__(self, item, reason: str = "") -> None:
        self.item = item
        self.reason = reason
        message = (
            f"Cannot place item {getattr(item, 'id', item)!r} "
            f"({item.width:g}x{item.height:g})"
        )
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ConfigError(PackingError):
    """A configuration file could not be read or failed validation."""
