"""
Exception and warning types raised by gardenbuild.
"""


class ConfigurationError(ValueError):
    """A building configuration could not be loaded or failed validation."""


class CatalogError(ValueError):
    """A component/cladding catalog file is malformed."""


class DrawingWarning(UserWarning):
    """An entity was skipped or degraded while composing a drawing."""
