"""Scan configuration.

``ScanConfig`` is a pydantic settings class: every field can be overridden
by a ``FILESET_SCANNER_*`` environment variable, and the CLI layers its own
flags on top with ``with_overrides``.
"""

from enum import Enum
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError

ENV_PREFIX = "FILESET_SCANNER_"


class SubmitFailurePolicy(str, Enum):
    """What the scanner does when the sink rejects a descriptor.

    In every case the fileset's files stay claimed for the rest of the run.
    """

    CONTINUE = "continue"  # log and keep scanning
    ABORT = "abort"  # stop the run with SubmissionAborted
    RETRY = "retry"  # retry with backoff, then behave like CONTINUE


class OutOfRootPolicy(str, Enum):
    """How member files outside the scan root are handled."""

    KEEP = "keep"  # embed as relative paths with ".." segments
    WARN = "warn"  # same as KEEP, plus a warning
    REJECT = "reject"  # do not submit the fileset


class ScanConfig(BaseSettings):
    """Settings for one scanner.

    Attributes:
        on_submit_failure: Policy applied when the sink fails
        submit_attempts: Total attempts per descriptor under the retry policy
        retry_wait_max: Upper bound in seconds for the backoff between attempts
        out_of_root: Policy for member files outside the scan root
        include_hidden: Whether dot-files and dot-directories are visited
        follow_symlinks: Whether symlinked files and directories are visited
        validate_documents: Validate wire documents against the JSON schema
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    on_submit_failure: SubmitFailurePolicy = Field(default=SubmitFailurePolicy.CONTINUE)
    submit_attempts: int = Field(default=3, ge=1)
    retry_wait_max: float = Field(default=10.0, ge=0)
    out_of_root: OutOfRootPolicy = Field(default=OutOfRootPolicy.KEEP)
    include_hidden: bool = Field(default=True)
    follow_symlinks: bool = Field(default=False)
    validate_documents: bool = Field(default=True)

    def __init__(self, **values: Any) -> None:
        try:
            super().__init__(**values)
        except ValidationError as e:
            raise ConfigurationError(_describe(e)) from e

    @field_validator("on_submit_failure", "out_of_root", mode="before")
    @classmethod
    def _lowercase_policy(cls, value: Any) -> Any:
        if isinstance(value, str) and not isinstance(value, Enum):
            return value.strip().lower()
        return value

    @classmethod
    def from_env(cls) -> "ScanConfig":
        """Build a config from ``FILESET_SCANNER_*`` environment variables.

        Unset variables keep their defaults.

        Raises:
            ConfigurationError: If a variable has an invalid value
        """
        return cls()

    def with_overrides(self, **overrides: Any) -> "ScanConfig":
        """Return a copy with the given non-None fields replaced."""
        values = self.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return type(self)(**values)


def _describe(error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        name = ".".join(str(part) for part in item["loc"])
        problems.append(f"{name} ({ENV_PREFIX}{name.upper()}): {item['msg']}")
    return "Invalid scan settings: " + "; ".join(problems)
