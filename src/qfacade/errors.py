# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qfacade

"""
Public exception hierarchy.

All exceptions raised by qfacade itself inherit from :class:`QFacadeError`,
allowing a single catch-all handler for facade errors. Failures raised by
the wrapped SDK are either re-raised as :class:`QiskitOperationError`
(when recognised as Qiskit errors) or propagated unchanged.

Hierarchy
---------
::

    QFacadeError
    ├── InitializationError
    ├── ValidationError
    │   ├── InvalidQubitCountError
    │   └── InvalidQubitIndexError
    ├── ParameterBindingError
    ├── BackendUnavailableError
    ├── ConversionError
    └── QiskitOperationError

Examples
--------
>>> from qfacade.errors import QFacadeError, InvalidQubitIndexError
>>> try:
...     circuit.h(qc, 7)
... except InvalidQubitIndexError as exc:
...     print(f"bad index {exc.index} (bound {exc.bound})")
... except QFacadeError:
...     print("other facade error")
"""

from __future__ import annotations

from typing import Any


__all__ = [
    "QFacadeError",
    "InitializationError",
    "ValidationError",
    "InvalidQubitCountError",
    "InvalidQubitIndexError",
    "ParameterBindingError",
    "BackendUnavailableError",
    "ConversionError",
    "QiskitOperationError",
]


class QFacadeError(Exception):
    """
    Base exception for all qfacade operations.

    Every exception raised by the facade layer is a subclass of this
    type, so ``except QFacadeError`` intercepts any error originating
    from qfacade rather than from the wrapped SDK.
    """


class InitializationError(QFacadeError):
    """
    Raised when the wrapped SDK cannot be imported.

    Parameters
    ----------
    message : str
        Human-readable description.
    original_error : str
        Text of the underlying import failure.
    recommendation : str, optional
        Suggested remediation.
    """

    def __init__(
        self,
        message: str,
        *,
        original_error: str,
        recommendation: str | None = None,
    ) -> None:
        self.original_error = original_error
        self.recommendation = recommendation
        super().__init__(message)


class ValidationError(QFacadeError, ValueError):
    """Base exception for rejected inputs detected before delegation."""


class InvalidQubitCountError(ValidationError):
    """
    Raised when a qubit count is not a positive integer.

    Parameters
    ----------
    provided : Any
        The rejected value.
    """

    def __init__(self, provided: Any) -> None:
        self.provided = provided
        super().__init__(f"Qubit count must be a positive integer, got {provided!r}")


class InvalidQubitIndexError(ValidationError):
    """
    Raised when a qubit index lies outside ``[0, bound)``.

    Parameters
    ----------
    index : Any
        The rejected index.
    bound : int
        Exclusive upper bound (the register size).
    """

    def __init__(self, index: Any, bound: int, message: str | None = None) -> None:
        self.index = index
        self.bound = bound
        super().__init__(
            message or f"Qubit index {index!r} out of range [0, {bound})"
        )


class ParameterBindingError(QFacadeError):
    """Raised when parameter values cannot be matched to circuit parameters."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(
            f"Unknown circuit parameter {name!r}; available: {', '.join(available) or '(none)'}"
        )


class BackendUnavailableError(QFacadeError):
    """
    Raised when an optional backend package is not installed.

    Parameters
    ----------
    backend : str
        Requested backend or provider name.
    install_hint : str
        Pip command that provides it.
    original_error : str, optional
        Text of the underlying import failure.
    """

    def __init__(
        self,
        backend: str,
        install_hint: str,
        original_error: str | None = None,
    ) -> None:
        self.backend = backend
        self.install_hint = install_hint
        self.original_error = original_error
        super().__init__(f"{backend} not available. Install with: {install_hint}")


class ConversionError(QFacadeError):
    """Raised when an SDK value cannot be converted to plain Python data."""

    def __init__(self, obj: Any, original_error: str) -> None:
        self.object_repr = repr(obj)[:200]
        self.original_error = original_error
        super().__init__(f"Failed to convert {type(obj).__name__}: {original_error}")


class QiskitOperationError(QFacadeError):
    """
    A failure raised by the wrapped SDK, with call context attached.

    The original exception is always available as ``__cause__``.

    Parameters
    ----------
    message : str
        Short description of the failed operation.
    function : str
        Qualified name of the facade function that delegated the call.
    arguments : dict
        Bound call arguments (sensitive names redacted).
    original_error : str
        Text of the SDK exception.
    """

    def __init__(
        self,
        message: str,
        *,
        function: str,
        arguments: dict[str, Any],
        original_error: str,
    ) -> None:
        self.function = function
        self.arguments = arguments
        self.original_error = original_error
        super().__init__(f"{message}: {original_error}")

    @property
    def context(self) -> dict[str, Any]:
        """Diagnostic context as a plain dict."""
        return {
            "type": "qiskit-error",
            "function": self.function,
            "arguments": self.arguments,
            "original_error": self.original_error,
        }
