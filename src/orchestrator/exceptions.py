"""Custom exceptions for pipeline failures."""
from __future__ import annotations


class PipelineError(RuntimeError):
    """Base class for failures that abort a pipeline run."""


class ModelCallError(PipelineError):
    """Raised when the language model request itself fails (network, auth, timeout)."""


class SchemaValidationError(PipelineError):
    """Raised when a model response is not JSON or does not match the declared schema."""

    def __init__(self, schema_name: str, detail: str):
        super().__init__(f"{schema_name} response failed validation: {detail}")
        self.schema_name = schema_name
        self.detail = detail
