# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qfacade

"""Tests for qfacade.core: initialization, validation, error translation, conversion."""

from __future__ import annotations

import types

import numpy as np
import pytest
from qfacade import core
from qfacade.errors import (
    InitializationError,
    InvalidQubitCountError,
    InvalidQubitIndexError,
    QFacadeError,
    QiskitOperationError,
    ValidationError,
)


def _fake_sdk(monkeypatch, *, aer: bool = True) -> list[str]:
    """Replace SDK imports with stand-in modules and record each import."""
    imported: list[str] = []

    def fake_import(name: str):
        imported.append(name)
        if name == "qiskit":
            return types.SimpleNamespace(__version__="9.9.9")
        if name == "qiskit_aer" and aer:
            return types.SimpleNamespace(__version__="1.2.3")
        raise ImportError(f"No module named {name!r}")

    monkeypatch.setattr(core, "_import", fake_import)
    return imported


# =============================================================================
# Initialization
# =============================================================================


class TestInitialize:
    """Runtime initialization guard."""

    def test_records_versions(self, monkeypatch, clean_env):
        _fake_sdk(monkeypatch)

        info = core.initialize()

        assert info.qiskit_version == "9.9.9"
        assert info.aer_version == "1.2.3"
        assert info.has_aer
        assert core.is_initialized()

    def test_second_call_is_noop(self, monkeypatch, clean_env):
        """Repeated initialization imports nothing and returns the same info."""
        imported = _fake_sdk(monkeypatch)

        first = core.initialize()
        count = len(imported)
        second = core.initialize()
        core.ensure_initialized()

        assert second is first
        assert len(imported) == count

    def test_missing_aer_is_optional_by_default(self, monkeypatch, clean_env, caplog):
        _fake_sdk(monkeypatch, aer=False)

        with caplog.at_level("WARNING", logger="qfacade.core"):
            info = core.initialize()

        assert info.aer_version is None
        assert not info.has_aer
        assert "qiskit-aer not installed" in caplog.text

    def test_missing_aer_fails_when_required(self, monkeypatch, clean_env):
        _fake_sdk(monkeypatch, aer=False)

        with pytest.raises(InitializationError) as exc_info:
            core.initialize(require_aer=True)

        assert "qiskit-aer" in exc_info.value.recommendation
        assert not core.is_initialized()

    def test_require_aer_from_environment(self, monkeypatch, clean_env):
        _fake_sdk(monkeypatch, aer=False)
        clean_env.setenv("QFACADE_REQUIRE_AER", "1")

        with pytest.raises(InitializationError):
            core.initialize()

    def test_missing_qiskit(self, monkeypatch, clean_env):
        monkeypatch.setattr(core, "_import", lambda name: (_ for _ in ()).throw(ImportError(name)))

        with pytest.raises(InitializationError) as exc_info:
            core.initialize()

        assert "pip install qiskit" in exc_info.value.recommendation
        assert exc_info.value.original_error == "qiskit"

    def test_broken_qiskit_install(self, monkeypatch, clean_env):
        """Any failure while importing the SDK becomes an InitializationError."""

        def broken_import(name):
            raise RuntimeError("corrupted extension module")

        monkeypatch.setattr(core, "_import", broken_import)

        with pytest.raises(InitializationError) as exc_info:
            core.initialize()

        assert exc_info.value.original_error == "corrupted extension module"
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert not core.is_initialized()

    def test_broken_aer_install_is_optional(self, monkeypatch, clean_env):
        def partly_broken_import(name):
            if name == "qiskit":
                return types.SimpleNamespace(__version__="9.9.9")
            raise OSError("libomp not found")

        monkeypatch.setattr(core, "_import", partly_broken_import)

        assert core.initialize().aer_version is None

    def test_reset_runtime_allows_reinitialization(self, monkeypatch, clean_env):
        imported = _fake_sdk(monkeypatch)

        core.initialize()
        core.reset_runtime()
        assert not core.is_initialized()
        core.initialize()

        assert imported.count("qiskit") == 2

    def test_runtime_info_to_dict(self, monkeypatch, clean_env):
        _fake_sdk(monkeypatch)

        data = core.runtime_info().to_dict()

        assert data["qiskit_version"] == "9.9.9"
        assert set(data) == {"qiskit_version", "aer_version", "python_version", "initialized_at"}


# =============================================================================
# Validation
# =============================================================================


class TestValidateQubitCount:
    @pytest.mark.parametrize("n", [1, 2, 30, np.int64(5)])
    def test_accepts_positive_integers(self, n):
        assert core.validate_qubit_count(n) == n

    @pytest.mark.parametrize("n", [0, -1, -100])
    def test_rejects_non_positive(self, n):
        with pytest.raises(InvalidQubitCountError) as exc_info:
            core.validate_qubit_count(n)
        assert exc_info.value.provided == n

    @pytest.mark.parametrize("n", [1.0, "2", None, True, [2]])
    def test_rejects_non_integers(self, n):
        with pytest.raises(InvalidQubitCountError):
            core.validate_qubit_count(n)

    def test_is_value_error(self):
        """Validation errors can be caught as plain ValueError."""
        with pytest.raises(ValueError):
            core.validate_qubit_count(0)


class TestValidateQubitIndex:
    def test_boundaries(self):
        """0 and bound-1 pass; -1 and bound fail."""
        assert core.validate_qubit_index(0, 3) == 0
        assert core.validate_qubit_index(2, 3) == 2

        for bad in (-1, 3):
            with pytest.raises(InvalidQubitIndexError) as exc_info:
                core.validate_qubit_index(bad, 3)
            assert exc_info.value.index == bad
            assert exc_info.value.bound == 3

    def test_message_names_range(self):
        with pytest.raises(InvalidQubitIndexError, match=r"\[0, 2\)"):
            core.validate_qubit_index(5, 2)

    @pytest.mark.parametrize("index", [0.0, "0", None, False])
    def test_rejects_non_integers(self, index):
        with pytest.raises(InvalidQubitIndexError):
            core.validate_qubit_index(index, 4)

    def test_validate_qubits_list(self):
        assert core.validate_qubits([0, 1], 2) == [0, 1]
        assert core.validate_qubits(1, 2) == [1]
        assert core.validate_qubits(range(3), 3) == [0, 1, 2]

    def test_validate_qubits_reports_first_bad_index(self):
        with pytest.raises(InvalidQubitIndexError) as exc_info:
            core.validate_qubits([0, 4, 9], 2)
        assert exc_info.value.index == 4

    def test_hierarchy(self):
        assert issubclass(InvalidQubitIndexError, ValidationError)
        assert issubclass(ValidationError, QFacadeError)


# =============================================================================
# Error translation
# =============================================================================


class FakeSDKError(Exception):
    """Stand-in for an SDK exception class."""


FakeSDKError.__module__ = "qiskit.transpiler.exceptions"


class TestIsQiskitError:
    def test_matches_sdk_module(self):
        assert core.is_qiskit_error(FakeSDKError("layout failed"))

    def test_matches_message_marker(self):
        assert core.is_qiskit_error(RuntimeError("QiskitError: 'bad circuit'"))

    def test_plain_errors_do_not_match(self):
        assert not core.is_qiskit_error(KeyError("shots"))
        assert not core.is_qiskit_error(ValueError("negative"))

    def test_facade_errors_never_match(self):
        exc = QiskitOperationError(
            "failed", function="f", arguments={}, original_error="qiskit boom"
        )
        assert not core.is_qiskit_error(exc)

    def test_real_qiskit_error(self):
        exceptions = pytest.importorskip("qiskit.exceptions")
        assert core.is_qiskit_error(exceptions.QiskitError("boom"))


class TestTranslateErrors:
    """Decorated functions re-raise SDK failures with context."""

    def test_wraps_sdk_error_with_context(self):
        @core.translate_errors
        def delegate(circuit, shots=100):
            raise FakeSDKError("transpile failed")

        with pytest.raises(QiskitOperationError) as exc_info:
            delegate("qc", shots=5)

        err = exc_info.value
        assert err.original_error == "transpile failed"
        assert "transpile failed" in str(err)
        assert err.function.endswith("delegate")
        assert err.arguments == {"circuit": "qc", "shots": 5}
        assert isinstance(err.__cause__, FakeSDKError)
        assert err.context["type"] == "qiskit-error"

    def test_non_sdk_errors_propagate_unchanged(self):
        original = KeyError("missing")

        @core.translate_errors
        def delegate():
            raise original

        with pytest.raises(KeyError) as exc_info:
            delegate()

        assert exc_info.value is original

    def test_facade_errors_propagate_unchanged(self):
        @core.translate_errors
        def delegate(n):
            core.validate_qubit_count(n)

        with pytest.raises(InvalidQubitCountError):
            delegate(0)

    def test_nested_calls_keep_innermost_context(self):
        @core.translate_errors
        def inner(x):
            raise FakeSDKError("deep")

        @core.translate_errors
        def outer(y):
            return inner(y + 1)

        with pytest.raises(QiskitOperationError) as exc_info:
            outer(1)

        assert exc_info.value.function.endswith("inner")
        assert exc_info.value.arguments == {"x": 2}

    def test_secret_arguments_redacted(self, clean_env):
        @core.translate_errors
        def connect(token, instance):
            raise FakeSDKError("auth failed")

        with pytest.raises(QiskitOperationError) as exc_info:
            connect("abc123", "hub/group/project")

        assert exc_info.value.arguments["token"] == "[REDACTED]"
        assert exc_info.value.arguments["instance"] == "hub/group/project"

    def test_custom_patterns_keep_token_redacted(self, clean_env):
        clean_env.setenv("QFACADE_REDACT_PATTERNS", "^instance$")

        @core.translate_errors
        def connect(token, instance):
            raise FakeSDKError("auth failed")

        with pytest.raises(QiskitOperationError) as exc_info:
            connect("abc123", "hub/group/project")

        assert exc_info.value.arguments == {"token": "[REDACTED]", "instance": "[REDACTED]"}

    def test_redaction_can_be_disabled(self, clean_env):
        clean_env.setenv("QFACADE_REDACT_DISABLE", "true")

        @core.translate_errors
        def connect(token):
            raise FakeSDKError("auth failed")

        with pytest.raises(QiskitOperationError) as exc_info:
            connect("abc123")

        assert exc_info.value.arguments["token"] == "abc123"

    def test_long_argument_reprs_truncated(self):
        @core.translate_errors
        def delegate(data):
            raise FakeSDKError("boom")

        with pytest.raises(QiskitOperationError) as exc_info:
            delegate(list(range(1000)))

        assert len(exc_info.value.arguments["data"]) == 200

    def test_context_manager(self):
        with pytest.raises(QiskitOperationError) as exc_info:
            with core.qiskit_errors("run_block", {"level": 3}):
                raise FakeSDKError("inside")

        assert exc_info.value.function == "run_block"
        assert exc_info.value.arguments == {"level": 3}

    def test_with_qiskit_initializes_first(self, monkeypatch, clean_env):
        _fake_sdk(monkeypatch)

        @core.with_qiskit
        def delegate():
            return core.is_initialized()

        assert delegate() is True


# =============================================================================
# Conversion
# =============================================================================


class TestToPython:
    def test_numpy_values(self):
        assert core.to_python(np.int64(3)) == 3
        assert type(core.to_python(np.float64(0.5))) is float
        assert core.to_python(np.array([[1, 0], [0, 1]])) == [[1, 0], [0, 1]]

    def test_nested_structures(self):
        data = {"counts": {"00": np.int64(5)}, "values": (np.float32(1.0), 2)}
        assert core.to_python(data) == {"counts": {"00": 5}, "values": [1.0, 2]}

    def test_complex_array(self):
        assert core.to_python(np.array([1 + 0j, 0.5j])) == [1 + 0j, 0.5j]

    def test_opaque_objects_returned_as_is(self):
        obj = object()
        assert core.to_python(obj) is obj


class TestFormatComplex:
    def test_complex(self):
        assert core.format_complex(0.5 - 0.25j) == "0.5-0.25j"
        assert core.format_complex(np.complex128(1 + 0j)) == "1+0j"

    def test_other_values(self):
        assert core.format_complex(3) == "3"
