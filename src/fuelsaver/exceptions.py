class FuelSaverError(Exception):
    """Base exception for trip planning errors."""


class ExternalServiceError(FuelSaverError):
    """Raised when an upstream API call fails."""


class InvalidLocationError(FuelSaverError):
    """Raised when an input location cannot be resolved."""


class NoRouteFoundError(FuelSaverError):
    """Raised when a drivable route cannot be generated."""


class InvalidInputError(FuelSaverError):
    """Raised when route or plan parameters are out of range."""


class ReferenceDataError(FuelSaverError):
    """Raised when the state price or station tables are not loaded."""


class SimulationError(InvalidInputError):
    """Raised when a journey simulation cannot be started."""
