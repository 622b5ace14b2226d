# core/errors.py


class EmptySceneError(ValueError):
    """Raised when an acceleration structure is requested for no objects."""


class DegenerateCameraError(ValueError):
    """Raised when the camera cannot build an orthonormal view basis."""
