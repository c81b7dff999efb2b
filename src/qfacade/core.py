# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qfacade

"""
Runtime initialization, validation and error translation.

This module is the foundation every other qfacade module builds on:

- One-time import of the wrapped SDK (Qiskit, optionally Qiskit Aer),
  guarded by a process-wide "already initialized" flag.
- Input validation for qubit counts and indices.
- Classification of SDK failures and re-raising them as
  :class:`~qfacade.errors.QiskitOperationError` with call context.
- Conversion of SDK return values (numpy arrays, numpy scalars, count
  mappings) into plain Python data.

Example
-------
>>> from qfacade import core
>>> info = core.initialize()
>>> info.qiskit_version
'2.1.0'
>>> core.validate_qubit_index(1, 2)
1
"""

from __future__ import annotations

import functools
import importlib
import inspect
import logging
import platform
import threading
from collections.abc import Iterable, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator, TypeVar

import numpy as np

from qfacade.config import get_config
from qfacade.errors import (
    ConversionError,
    InitializationError,
    InvalidQubitCountError,
    InvalidQubitIndexError,
    QFacadeError,
    QiskitOperationError,
)
from qfacade.utils.common import utc_now_iso


logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

# Text markers identifying an exception as raised by the wrapped SDK
_SDK_ERROR_MARKERS: tuple[str, ...] = ("qiskit",)

# Indirection so tests can observe SDK imports
_import = importlib.import_module


@dataclass(frozen=True)
class RuntimeInfo:
    """
    Versions captured when the wrapped SDK was first imported.

    Attributes
    ----------
    qiskit_version : str
        Installed Qiskit version.
    aer_version : str or None
        Installed Qiskit Aer version, None when Aer is missing.
    python_version : str
        Interpreter version.
    initialized_at : str
        ISO 8601 UTC timestamp of initialization.
    """

    qiskit_version: str
    aer_version: str | None
    python_version: str
    initialized_at: str

    @property
    def has_aer(self) -> bool:
        return self.aer_version is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "qiskit_version": self.qiskit_version,
            "aer_version": self.aer_version,
            "python_version": self.python_version,
            "initialized_at": self.initialized_at,
        }


# Process-wide initialization guard. The SDK is never torn down.
_runtime: RuntimeInfo | None = None
_init_lock = threading.Lock()


# =============================================================================
# Initialization
# =============================================================================


def initialize(*, require_aer: bool | None = None) -> RuntimeInfo:
    """
    Import the wrapped SDK once for this process.

    Subsequent calls are no-ops returning the same :class:`RuntimeInfo`.

    Parameters
    ----------
    require_aer : bool or None, optional
        Fail when ``qiskit_aer`` cannot be imported. Defaults to
        ``Config.require_aer``.

    Returns
    -------
    RuntimeInfo
        Versions of the imported SDK packages.

    Raises
    ------
    InitializationError
        If Qiskit (or Aer, when required) cannot be imported.
    """
    global _runtime

    with _init_lock:
        if _runtime is not None:
            logger.debug("Qiskit runtime already initialized, skipping")
            return _runtime

        if require_aer is None:
            require_aer = get_config().require_aer

        try:
            qiskit = _import("qiskit")
        except Exception as exc:
            raise InitializationError(
                "Failed to import the Qiskit SDK",
                original_error=str(exc),
                recommendation="Install with: pip install qiskit",
            ) from exc

        aer_version: str | None = None
        try:
            qiskit_aer = _import("qiskit_aer")
            aer_version = str(getattr(qiskit_aer, "__version__", "unknown"))
        except Exception as exc:
            if require_aer:
                raise InitializationError(
                    "Qiskit Aer is required but could not be imported",
                    original_error=str(exc),
                    recommendation="Install with: pip install qiskit-aer",
                ) from exc
            logger.warning("qiskit-aer not installed, Aer simulators unavailable: %s", exc)

        _runtime = RuntimeInfo(
            qiskit_version=str(qiskit.__version__),
            aer_version=aer_version,
            python_version=platform.python_version(),
            initialized_at=utc_now_iso(),
        )
        logger.info(
            "Qiskit runtime initialized (qiskit=%s, aer=%s)",
            _runtime.qiskit_version,
            _runtime.aer_version,
        )
        return _runtime


def ensure_initialized() -> RuntimeInfo:
    """Initialize the SDK if that has not happened yet."""
    if _runtime is not None:
        return _runtime
    return initialize()


def is_initialized() -> bool:
    return _runtime is not None


def runtime_info() -> RuntimeInfo:
    """Return the cached runtime info, initializing on first use."""
    return ensure_initialized()


def reset_runtime() -> None:
    """
    Clear the initialization guard.

    Imported SDK modules stay loaded; only the cached
    :class:`RuntimeInfo` is dropped. Intended for tests.
    """
    global _runtime
    with _init_lock:
        _runtime = None


# =============================================================================
# Error translation
# =============================================================================


def is_qiskit_error(exc: BaseException) -> bool:
    """
    Check whether an exception originates from the wrapped SDK.

    The check is textual: the exception's qualified type name and message
    are searched for known SDK markers. Facade-owned errors never match.

    Parameters
    ----------
    exc : BaseException
        Exception to classify.

    Returns
    -------
    bool
        True if the failure should be re-raised as a QiskitOperationError.
    """
    if isinstance(exc, QFacadeError):
        return False
    text = f"{type(exc).__module__}.{type(exc).__name__}: {exc}".lower()
    return any(marker in text for marker in _SDK_ERROR_MARKERS)


def _describe_value(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    text = repr(value)
    return text if len(text) <= 200 else text[:197] + "..."


def _describe_arguments(arguments: Mapping[str, Any]) -> dict[str, Any]:
    redaction = get_config().redaction
    described = {k: _describe_value(v) for k, v in arguments.items()}
    return redaction.redact_mapping(described)


def _wrap_sdk_error(
    exc: BaseException,
    function: str,
    arguments: Mapping[str, Any],
) -> QiskitOperationError:
    logger.debug("Qiskit failure in %s: %s: %s", function, type(exc).__name__, exc)
    return QiskitOperationError(
        "Qiskit operation failed",
        function=function,
        arguments=_describe_arguments(arguments),
        original_error=str(exc),
    )


@contextmanager
def qiskit_errors(
    function: str,
    arguments: Mapping[str, Any] | None = None,
) -> Iterator[None]:
    """
    Re-raise SDK failures inside the block with call context.

    Failures recognised by :func:`is_qiskit_error` become
    :class:`QiskitOperationError` chained from the original; all other
    exceptions propagate unchanged.

    Parameters
    ----------
    function : str
        Name recorded as the failing operation.
    arguments : mapping, optional
        Call arguments recorded on the error.

    Examples
    --------
    >>> with qiskit_errors("my_transpile", {"level": 3}):
    ...     qiskit.transpile(qc, optimization_level=3)
    """
    try:
        yield
    except Exception as exc:
        if not is_qiskit_error(exc):
            raise
        raise _wrap_sdk_error(exc, function, arguments or {}) from exc


def _bind_arguments(
    sig: inspect.Signature,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> dict[str, Any]:
    try:
        bound = sig.bind_partial(*args, **kwargs)
    except TypeError:
        return {"args": args, **kwargs}
    return dict(bound.arguments)


def translate_errors(func: F) -> F:
    """
    Decorate a delegating function with SDK error translation.

    Arguments are bound against the function signature only when a
    failure occurs.
    """
    sig = inspect.signature(func)
    name = f"{func.__module__}.{func.__qualname__}"

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except Exception as exc:
            if not is_qiskit_error(exc):
                raise
            raise _wrap_sdk_error(exc, name, _bind_arguments(sig, args, kwargs)) from exc

    return wrapper  # type: ignore[return-value]


def with_qiskit(func: F) -> F:
    """Ensure the SDK is initialized, then delegate with error translation."""
    translated = translate_errors(func)

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        ensure_initialized()
        return translated(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


# =============================================================================
# Validation
# =============================================================================


def _is_int(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


def validate_qubit_count(n: Any) -> int:
    """
    Validate that ``n`` is a positive integer.

    Parameters
    ----------
    n : Any
        Claimed number of qubits.

    Returns
    -------
    int
        ``n`` unchanged.

    Raises
    ------
    InvalidQubitCountError
        If ``n`` is not an integer (booleans included) or ``n <= 0``.
    """
    if not _is_int(n) or n <= 0:
        raise InvalidQubitCountError(n)
    return n


def validate_qubit_index(index: Any, bound: int) -> int:
    """
    Validate that ``index`` lies within ``[0, bound)``.

    Raises
    ------
    InvalidQubitIndexError
        If ``index`` is not an integer or is out of range.
    """
    if not _is_int(index) or not 0 <= index < bound:
        raise InvalidQubitIndexError(index, bound)
    return index


def as_qubit_list(qubits: Any) -> list[Any]:
    """Normalise a single index or an iterable of indices to a list."""
    if isinstance(qubits, Iterable) and not isinstance(qubits, (str, bytes)):
        return list(qubits)
    return [qubits]


def validate_qubits(qubits: Any, bound: int) -> list[int]:
    """Validate one index or several against ``bound`` and return them as a list."""
    return [validate_qubit_index(q, bound) for q in as_qubit_list(qubits)]


# =============================================================================
# Conversion
# =============================================================================


def to_python(obj: Any) -> Any:
    """
    Convert an SDK value into plain Python data.

    numpy arrays become (nested) lists, numpy scalars become Python
    scalars, mappings and sequences are converted recursively. Objects
    with no plain representation are returned as-is.

    Raises
    ------
    ConversionError
        If an array-like object fails to convert.
    """
    if obj is None or isinstance(obj, (bool, int, float, complex, str)):
        return obj
    if isinstance(obj, np.generic):
        return obj.item()
    if isinstance(obj, Mapping):
        return {to_python(k): to_python(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set, frozenset)):
        return [to_python(v) for v in obj]
    if isinstance(obj, np.ndarray) or hasattr(obj, "tolist"):
        try:
            return obj.tolist()
        except Exception as exc:
            raise ConversionError(obj, str(exc)) from exc
    return obj


def format_complex(z: Any) -> str:
    """Format a complex amplitude for display; other values use ``str``."""
    if isinstance(z, (complex, np.complexfloating)):
        return f"{z.real:.6g}{z.imag:+.6g}j"
    return str(z)


# =============================================================================
# SDK queries
# =============================================================================


def qiskit_version() -> str:
    """Return the version of the wrapped Qiskit SDK."""
    return runtime_info().qiskit_version


@with_qiskit
def list_available_backends() -> list[str]:
    """
    List the local Aer simulator backends.

    Returns
    -------
    list of str
        Backend names; empty when Aer is not installed.
    """
    if not runtime_info().has_aer:
        return []
    aer = _import("qiskit_aer")
    return [str(b.name) for b in aer.AerProvider().backends()]
