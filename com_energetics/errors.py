"""Exception types raised by the COM energetics pipeline."""


class EnergeticsError(Exception):
    """Base class for all pipeline input errors."""


class MissingInputError(EnergeticsError):
    """A required input (subject mass, kinematics, angle, force or buffers) is absent."""


class MalformedInputError(EnergeticsError):
    """An input is present but unusable (length mismatch, bad time base, degenerate cycle)."""
