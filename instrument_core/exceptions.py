"""Exceptions raised by instrument_core."""


class InstrumentCoreError(Exception):
    """Base class for instrument_core errors."""


class ConfigError(InstrumentCoreError):
    """Configuration file is missing or malformed."""
