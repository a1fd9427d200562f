"""env-at-startup exceptions."""

from typing import List, Optional
from dataclasses import dataclass


class SubstitutionError(Exception):
    """Raised when a file cannot be substituted.

    Failing a single reference fails the whole file: nothing is written.
    """

    def __init__(self, message: str, variable: str, path: Optional[str] = None):
        self.variable = variable
        self.path = path
        super().__init__(message)


class VariableNotSetError(SubstitutionError):
    """An allowed variable has no (or an empty) value and missing values are not allowed."""

    def __init__(self, variable: str, path: Optional[str] = None):
        super().__init__(f"'{variable}' is not set.", variable, path)


class VariableNotAllowedError(SubstitutionError):
    """A referenced variable is outside the configured allow-list."""

    def __init__(self, reference: str, variable: str, path: Optional[str] = None):
        self.reference = reference
        super().__init__(f"'{reference}' missing in --vars", variable, path)


@dataclass
class ValidationError:
    """Single configuration validation error."""
    message: str
    path: str = ""
    exit_code: int = 2


class ConfigValidationError(Exception):
    """Raised when a configuration file fails validation.

    All problems found in the file are collected first so that the CLI can
    report them together and map them to exit code 2.
    """

    def __init__(self, errors: List[ValidationError]):
        self.errors = errors
        self.exit_code = 2

        messages = []
        for error in errors:
            if error.path:
                messages.append(f"Validation error at '{error.path}': {error.message}")
            else:
                messages.append(f"Validation error: {error.message}")

        super().__init__("\n".join(messages))
