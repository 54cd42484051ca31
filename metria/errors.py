class MetriaError(Exception):
    """Base class for user-facing domain errors."""
