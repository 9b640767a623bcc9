from __future__ import annotations


class PipelineError(Exception):
    """Base class for fatal pipeline failures."""


class SchemaError(PipelineError, ValueError):
    """Input or encoded columns do not match what the pipeline expects."""


class ConfigurationError(PipelineError, ValueError):
    """The run cannot proceed with the data or settings it was given."""
