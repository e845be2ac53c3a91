"""Exceptions raised by shipyard operations."""


class ShipyardError(Exception):
    """Raised when a deploy or bootstrap run cannot proceed."""
    pass


class BootstrapAborted(ShipyardError):
    """Raised when the user declines the bootstrap confirmation."""
    pass
