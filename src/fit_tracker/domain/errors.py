"""Domain errors for the fit tracker."""


class FitTrackerError(Exception):
    """Base class for fit tracker errors."""


class InvalidArgumentError(FitTrackerError, ValueError):
    """Raised when an operation receives an out-of-range argument."""


class InvalidPortionError(InvalidArgumentError):
    """Raised when a portion multiplier is not strictly positive."""


class InvalidXpGrantError(InvalidArgumentError):
    """Raised when an XP grant would decrease experience."""


class InvalidGoalError(InvalidArgumentError):
    """Raised when a nutrition goal or body metric is not positive."""


class EmptyMealError(InvalidArgumentError):
    """Raised when a custom meal has no name or no items."""


class StaleSnapshotError(FitTrackerError):
    """Raised when awards are evaluated against an outdated totals snapshot."""


class NotFoundError(FitTrackerError, LookupError):
    """Raised when a food, custom meal or profile does not exist."""


class NoFoodDetectedError(FitTrackerError):
    """Raised when a food scan reports that the image contains no food."""


class ScanResultError(FitTrackerError):
    """Raised when a scan result cannot be parsed or validated."""
