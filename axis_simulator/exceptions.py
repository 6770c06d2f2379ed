# axis_simulator/exceptions.py


class AxisSimulatorError(Exception):
    """Base class for errors raised by the axis simulator."""


class InvalidMeasurementError(AxisSimulatorError, ValueError):
    """QRS measurements fall outside the physiological ranges we accept."""


class ConfigurationError(AxisSimulatorError):
    """An environment setting could not be parsed or is out of range."""
