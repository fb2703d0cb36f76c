"""Error taxonomy for the plan generation pipeline.

Every error carries a short ``title`` used as the heading of the user
notice; ``str(error)`` is the detail text.
"""


class WellnessError(Exception):
    """Base class for expected, user-facing failures."""

    title = "Error"


class Unauthenticated(WellnessError):
    """No valid session for the caller."""

    title = "Authentication Required"

    def __init__(self, message: str = "Please sign in to continue."):
        super().__init__(message)


class ProviderUnavailable(WellnessError):
    """No generation client configured (demo mode)."""

    title = "Using Demo Mode"

    def __init__(self, message: str = "Generation provider not configured. Provide an API key."):
        super().__init__(message)


class GenerationFailed(WellnessError):
    """The provider call errored or returned nothing."""

    title = "Generation Failed"


class ShapeInvalid(WellnessError):
    """Provider output does not match the required plan shape."""

    title = "Invalid Plan"


class PersistenceFailed(WellnessError):
    """A write to the store failed."""

    title = "Save Failed"


class BatchPersistenceFailed(PersistenceFailed):
    """A write failed partway through a multi-item batch.

    Items written before the failure stay committed.
    """

    def __init__(self, message: str, committed: list, failed_index: int):
        super().__init__(message)
        self.committed = committed
        self.failed_index = failed_index
