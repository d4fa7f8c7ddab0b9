"""
Error taxonomy.
Validation errors are raised before the generator is ever invoked and are
always correctable by resubmitting; generation failures are never retried.
"""
from typing import Dict, Optional


class BoltGeneratorError(Exception):
    """Base class for all bolt-generator errors."""


class UnknownSchemaVersion(BoltGeneratorError, KeyError):
    def __init__(self, version):
        super().__init__(version)
        self.version = version

    def __str__(self) -> str:
        return f"Unknown schema version: {self.version!r}"


class ValidationError(BoltGeneratorError):
    """
    Request rejected by the normalizer.
    `fields` maps each offending wire name to the violated rule.
    """
    default_message = "Invalid parameters"

    def __init__(self, fields: Dict[str, str], message: Optional[str] = None):
        self.fields = dict(fields)
        self.message = message or f"{self.default_message}: {', '.join(self.fields)}"
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message, "fields": self.fields}


class MissingRequiredField(ValidationError):
    default_message = "Missing required fields"


class InvalidFeatureSelection(ValidationError):
    default_message = "Selected feature is missing its sizing fields"


class GenerationFailure(BoltGeneratorError):
    """External generator exited non-zero, timed out, or left no artifacts."""

    def __init__(
        self,
        message: str,
        returncode: Optional[int] = None,
        stdout: str = "",
        stderr: str = "",
    ):
        super().__init__(message)
        self.message = message
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


class ArtifactNotFound(BoltGeneratorError):
    def __init__(self, name: str):
        super().__init__(f"Artifact not found: {name}")
        self.name = name
