"""Central application exception hierarchy.

This module defines the base application exception ``AppError`` and the
specialized subclasses used throughout the codebase to represent common
failure modes (configuration, data validation, user input, storage and
template syntax). Using a centralized hierarchy makes error handling and
testing consistent.
"""

from __future__ import annotations

from typing import Any, Mapping


class AppError(Exception):
    """Base exception for all application-level errors.

    Parameters
    ----------
    code : str
        Machine-readable error code (e.g., ``'DATA_VALIDATION_ERROR'``).
    message : str
        Human-readable message describing the error.
    context : Mapping[str, Any] | None, optional
        Optional structured context for logging.
    transient : bool, optional
        Whether the error is temporary and may be retried.

    Attributes
    ----------
    code : str
        Stable machine-readable error code.
    message : str
        Human-readable message.
    context : dict
        Structured, non-sensitive context for logging.
    transient : bool
        True if the error is transient.

    Examples
    --------
    >>> e = AppError('CODE', 'message', context={'k': 'v'}, transient=True)
    >>> e.code
    'CODE'
    """

    __slots__ = ("code", "message", "context", "transient")

    def __init__(
        self,
        code: str,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.context = dict(context or {})
        self.transient = bool(transient)

    def __str__(self) -> str:
        """Return a compact string representation of the error."""
        return f"{self.code}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Return a log-safe dictionary representation of the error."""
        return {
            "error_code": self.code,
            "message": self.message,
            "context": self.context,
            "is_transient": self.transient,
        }


class ConfigurationError(AppError):
    """Raised for invalid or missing configuration."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            "CONFIGURATION_ERROR", message, context=context, transient=False
        )


class DataValidationError(AppError):
    """Raised for stored data that fails schema or content validation."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            "DATA_VALIDATION_ERROR", message, context=context, transient=False
        )


class UserInputError(AppError):
    """Raised when user input (names, format selectors) is invalid."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__("USER_INPUT_ERROR", message, context=context, transient=False)


class StorageError(AppError):
    """Raised when the snippet library cannot be read or written."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__("STORAGE_ERROR", message, context=context, transient=True)


class TemplateSyntaxError(AppError):
    """Raised when template block markers are unbalanced or mismatched.

    Parameters
    ----------
    message : str
        Human-readable description of the nesting problem.
    marker : str
        The offending marker text, e.g. ``'{% endfor %}'``.
    position : int
        Character offset of the marker within the template.
    """

    def __init__(self, message: str, *, marker: str, position: int) -> None:
        super().__init__(
            "TEMPLATE_SYNTAX_ERROR",
            message,
            context={"marker": marker, "position": position},
            transient=False,
        )

    @property
    def marker(self) -> str:
        """Return the marker text that triggered the error."""
        return str(self.context["marker"])

    @property
    def position(self) -> int:
        """Return the character offset of the offending marker."""
        return int(self.context["position"])
