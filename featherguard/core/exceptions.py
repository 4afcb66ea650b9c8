"""
FeatherGuard - Exceptions
Errors raised at the boundaries to external services and by the workflow.
"""


class FeatherGuardError(Exception):
    """Base class for all application errors."""


class StorageError(FeatherGuardError):
    """Object store or record store failure."""


class UploadError(StorageError):
    """Photo upload to the object store failed."""


class RecordStoreError(StorageError):
    """Reading or writing reports failed."""


class ClassificationError(FeatherGuardError):
    """Species classification service failed or replied with garbage."""


class GeolocationError(FeatherGuardError):
    """Position could not be determined."""


class WorkflowError(FeatherGuardError):
    """Submission workflow misuse."""


class InvalidTransitionError(WorkflowError):
    """Operation called from a state that does not allow it."""
