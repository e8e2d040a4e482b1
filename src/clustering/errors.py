"""Exceptions raised by the clustering entry points."""


class ConfigurationError(ValueError):
    """Invalid clustering parameters (negative minimum points, bad epsilon)."""


class MissingIndexError(RuntimeError):
    """The indexed entry point was called without a built spatial index."""
