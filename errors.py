"""
Error types raised by the simulation core.

Every failure is raised synchronously where it is detected; callers
(CLI, HTTP bridge) decide whether to abort or report.
"""


class SimulationError(Exception):
    """Base class for every error raised by the simulation."""


class InvalidConfig(SimulationError):
    """A configuration parameter is out of range or unknown."""


class ShapeMismatch(SimulationError):
    """A gene buffer does not match the network's parameter count."""


class EmptyPopulation(SimulationError):
    """Evolution or statistics were requested for zero individuals."""
