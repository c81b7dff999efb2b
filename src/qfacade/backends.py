# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qfacade

"""
Backend management, transpilation and execution.

Backends are Qiskit ``BackendV2`` objects: Aer simulators, the
pure-Python ``BasicSimulator``, fake hardware models from
``qiskit-ibm-runtime`` and real IBM Quantum devices. Optional packages
are imported on demand; a missing package raises
:class:`~qfacade.errors.BackendUnavailableError` naming the pip command
that provides it.

Example
-------
>>> from qfacade import backends, circuit as qc
>>> bell = qc.measure_all(qc.cx(qc.h(qc.quantum_circuit(2), 0), 0, 1))
>>> backends.execute_circuit(bell, shots=1000)
{'00': 507, '11': 493}
"""

from __future__ import annotations

import logging
import warnings
from typing import TYPE_CHECKING, Any, Sequence

from qfacade.circuit import materialize_circuits
from qfacade.config import get_config
from qfacade.core import (
    _import,
    as_qubit_list,
    to_python,
    translate_errors,
    validate_qubit_count,
    with_qiskit,
)
from qfacade.errors import BackendUnavailableError, ValidationError


if TYPE_CHECKING:
    from qiskit import QuantumCircuit
    from qiskit.quantum_info import Statevector
    from qiskit.transpiler import PassManager


logger = logging.getLogger(__name__)

_AER_HINT = "pip install qiskit-aer"
_IBM_HINT = "pip install qiskit-ibm-runtime"


def _optional_module(module: str, backend: str, install_hint: str) -> Any:
    try:
        return _import(module)
    except ImportError as exc:
        raise BackendUnavailableError(backend, install_hint, original_error=str(exc)) from exc


# =============================================================================
# Construction
# =============================================================================


@with_qiskit
def aer_simulator(
    method: str | None = None,
    device: str | None = None,
    shots: int | None = None,
    max_parallel_threads: int | None = None,
    noise_model: Any = None,
    **options: Any,
) -> Any:
    """
    Create an Aer simulator.

    Options left as ``None`` are not passed, so Aer's own defaults
    apply unless configuration supplies ``simulation_method`` or
    ``device``.

    Parameters
    ----------
    method : str, optional
        Simulation method, e.g. ``"statevector"``, ``"density_matrix"``,
        ``"matrix_product_state"``.
    device : str, optional
        ``"CPU"`` or ``"GPU"``.
    shots : int, optional
        Default shots for jobs run on this simulator.
    max_parallel_threads : int, optional
        Thread cap for the simulator.
    noise_model : NoiseModel, optional
        Noise model applied to every run.
    **options
        Further Aer options, forwarded verbatim.

    Returns
    -------
    AerSimulator
        Configured simulator.

    Raises
    ------
    BackendUnavailableError
        If ``qiskit-aer`` is not installed.
    """
    aer = _optional_module("qiskit_aer", "Qiskit Aer", _AER_HINT)
    cfg = get_config()

    resolved = {
        "method": method if method is not None else cfg.simulation_method,
        "device": device if device is not None else cfg.device,
        "shots": shots,
        "max_parallel_threads": max_parallel_threads,
        "noise_model": noise_model,
    }
    kwargs = {k: v for k, v in resolved.items() if v is not None}
    kwargs.update(options)

    logger.debug("Creating AerSimulator with options %s", sorted(kwargs))
    return aer.AerSimulator(**kwargs)


@with_qiskit
def basic_simulator() -> Any:
    """Pure-Python reference simulator shipped with Qiskit."""
    from qiskit.providers.basic_provider import BasicSimulator

    return BasicSimulator()


def _fake_class_names(name: str) -> list[str]:
    stem = name.strip()
    if stem.lower().startswith("fake"):
        stem = stem[4:]
    words = [w for w in stem.replace("-", "_").split("_") if w]
    base = "Fake" + "".join(w[:1].upper() + w[1:] for w in words)
    if base.endswith("V2"):
        return [base]
    return [f"{base}V2", base]


@with_qiskit
def fake_backend(name: str) -> Any:
    """
    Instantiate a fake hardware backend by name.

    Parameters
    ----------
    name : str
        Backend name such as ``"fake_manila"``, ``"manila"`` or
        ``"FakeManilaV2"``.

    Returns
    -------
    BackendV2
        Fake backend modelling the device's coupling map and noise.

    Raises
    ------
    BackendUnavailableError
        If ``qiskit-ibm-runtime`` is not installed.
    ValidationError
        If no fake backend matches ``name``.
    """
    provider = _optional_module(
        "qiskit_ibm_runtime.fake_provider", f"Fake backend {name!r}", _IBM_HINT
    )
    candidates = [name] if name.startswith("Fake") else []
    candidates += _fake_class_names(name)
    for class_name in candidates:
        cls = getattr(provider, class_name, None)
        if cls is not None:
            logger.debug("Resolved fake backend %r to %s", name, class_name)
            return cls()
    raise ValidationError(
        f"Unknown fake backend {name!r} (tried {', '.join(candidates)})"
    )


@with_qiskit
def generic_backend(num_qubits: int, seed: int | None = None) -> Any:
    """Synthetic backend with a generated coupling map and noise."""
    from qiskit.providers.fake_provider import GenericBackendV2

    validate_qubit_count(num_qubits)
    return GenericBackendV2(num_qubits=num_qubits, seed=seed)


@with_qiskit
def ibm_quantum_service(
    token: str | None = None,
    instance: str | None = None,
    channel: str | None = None,
) -> Any:
    """
    Connect to IBM Quantum.

    Unset arguments fall back to the account saved with
    ``QiskitRuntimeService.save_account``.
    """
    runtime = _optional_module("qiskit_ibm_runtime", "IBM Quantum", _IBM_HINT)
    kwargs = {
        k: v
        for k, v in (("token", token), ("instance", instance), ("channel", channel))
        if v is not None
    }
    logger.info("Connecting to IBM Quantum (channel=%s, instance=%s)", channel, instance)
    return runtime.QiskitRuntimeService(**kwargs)


@translate_errors
def list_ibm_backends(service: Any = None, operational_only: bool = True) -> list[str]:
    """Names of the IBM backends visible to ``service``."""
    if service is None:
        service = ibm_quantum_service()
    found = service.backends(operational=True) if operational_only else service.backends()
    return [backend_name(b) for b in found]


@translate_errors
def get_ibm_backend(service: Any, name: str) -> Any:
    return service.backend(name)


# =============================================================================
# Inspection
# =============================================================================


def backend_name(backend: Any) -> str:
    """Backend name for V2 (attribute) and legacy (method) backends."""
    name = getattr(backend, "name", None)
    if callable(name):
        name = name()
    return str(name) if name else type(backend).__name__


def backend_version(backend: Any) -> str | None:
    version = getattr(backend, "backend_version", None)
    if version is None:
        version = getattr(backend, "version", None)
    return str(version) if version is not None else None


def backend_num_qubits(backend: Any) -> int | None:
    return getattr(backend, "num_qubits", None)


def coupling_map(backend: Any) -> list[list[int]] | None:
    """Directed edges of the coupling map, or None for all-to-all."""
    cmap = getattr(backend, "coupling_map", None)
    if cmap is None:
        return None
    return [[int(a), int(b)] for a, b in cmap.get_edges()]


def basis_gates(backend: Any) -> list[str]:
    """Operation names supported by the backend's target."""
    names = getattr(backend, "operation_names", None)
    if names is None:
        return []
    return sorted(str(n) for n in names)


def _legacy_call(backend: Any, method: str) -> Any:
    func = getattr(backend, method, None)
    if not callable(func):
        return None
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", DeprecationWarning)
        return func()


def _legacy_configuration(backend: Any) -> Any:
    return _legacy_call(backend, "configuration")


def _as_dict(model: Any) -> Any:
    if model is None:
        return None
    if hasattr(model, "to_dict"):
        return to_python(model.to_dict())
    return to_python(model)


def max_shots(backend: Any) -> int | None:
    """Maximum shots per job, or None when the backend does not say."""
    config = _legacy_configuration(backend)
    value = getattr(config, "max_shots", None) if config is not None else None
    return int(value) if value else None


def detect_provider(backend: Any) -> str:
    """
    Physical provider of a backend.

    Returns
    -------
    str
        ``"fake"``, ``"aer"``, ``"ibm_quantum"`` or ``"local"``.
    """
    module_name = type(backend).__module__.lower()
    name = backend_name(backend).lower()

    if "fake" in module_name or name.startswith("fake"):
        return "fake"
    if "qiskit_aer" in module_name:
        return "aer"
    if "ibm" in module_name or name.startswith("ibm_"):
        return "ibm_quantum"
    return "local"


def is_simulator(backend: Any) -> bool:
    """
    True for software simulators.

    Fake backends model hardware and report False.
    """
    config = _legacy_configuration(backend)
    if config is not None and hasattr(config, "simulator"):
        return bool(config.simulator)
    if detect_provider(backend) == "aer":
        return True
    return "simulator" in backend_name(backend).lower()


def describe_backend(backend: Any) -> dict[str, Any]:
    """Summary of a backend as a plain dict."""
    return {
        "name": backend_name(backend),
        "version": backend_version(backend),
        "provider": detect_provider(backend),
        "num_qubits": backend_num_qubits(backend),
        "basis_gates": basis_gates(backend),
        "coupling_map": coupling_map(backend),
        "max_shots": max_shots(backend),
        "simulator": is_simulator(backend),
    }


@translate_errors
def backend_status(backend: Any) -> dict[str, Any]:
    """
    Operational status of a backend.

    Backends that report no status (``BasicSimulator``,
    ``GenericBackendV2``) are treated as operational with an empty queue.

    Returns
    -------
    dict
        At least ``backend_name``, ``operational`` and ``pending_jobs``.
    """
    status = _as_dict(_legacy_call(backend, "status"))
    if status is not None:
        return status
    return {
        "backend_name": backend_name(backend),
        "backend_version": backend_version(backend),
        "operational": True,
        "pending_jobs": 0,
        "status_msg": "active",
    }


@translate_errors
def backend_configuration(backend: Any) -> dict[str, Any]:
    """
    Static configuration of a backend.

    Uses the backend's own configuration model when it has one, otherwise
    one built from its target using the same key names.
    """
    config = _as_dict(_legacy_configuration(backend))
    if config is not None:
        return config
    return {
        "backend_name": backend_name(backend),
        "backend_version": backend_version(backend),
        "n_qubits": backend_num_qubits(backend),
        "basis_gates": basis_gates(backend),
        "coupling_map": coupling_map(backend),
        "simulator": is_simulator(backend),
        "max_shots": max_shots(backend),
    }


@translate_errors
def backend_properties(backend: Any) -> dict[str, Any] | None:
    """Calibration properties of a hardware backend; None for simulators."""
    return _as_dict(_legacy_call(backend, "properties"))


# =============================================================================
# Transpilation
# =============================================================================


@with_qiskit
def transpile(
    circuits: Any,
    backend: Any = None,
    optimization_level: int | None = None,
    initial_layout: Sequence[int] | None = None,
    seed_transpiler: int | None = None,
) -> Any:
    """
    Transpile circuits for a backend.

    Parameters
    ----------
    circuits : QuantumCircuit or list of QuantumCircuit
        Input circuit(s).
    backend : BackendV2, optional
        Target backend; without one only basis-free optimization runs.
    optimization_level : int, optional
        0-3. Defaults to ``Config.optimization_level``, then Qiskit's
        own default.
    initial_layout : list of int, optional
        Physical qubit for each virtual qubit.
    seed_transpiler : int, optional
        Seed for stochastic passes. Defaults to
        ``Config.seed_transpiler``.

    Returns
    -------
    QuantumCircuit or list of QuantumCircuit
        A single circuit for a single input, else a list.
    """
    from qiskit import transpile as qiskit_transpile

    circuit_list, was_single = materialize_circuits(circuits)
    cfg = get_config()

    resolved = {
        "optimization_level": (
            optimization_level if optimization_level is not None else cfg.optimization_level
        ),
        "initial_layout": list(initial_layout) if initial_layout is not None else None,
        "seed_transpiler": (
            seed_transpiler if seed_transpiler is not None else cfg.seed_transpiler
        ),
    }
    kwargs = {k: v for k, v in resolved.items() if v is not None}

    logger.debug(
        "Transpiling %d circuit(s) for %s with %s",
        len(circuit_list),
        backend_name(backend) if backend is not None else "no backend",
        kwargs,
    )
    transpiled = qiskit_transpile(circuit_list, backend=backend, **kwargs)
    return transpiled[0] if was_single else list(transpiled)


@with_qiskit
def create_pass_manager(passes: Sequence[Any] = ()) -> PassManager:
    from qiskit.transpiler import PassManager

    return PassManager(list(passes))


@translate_errors
def transpile_with_pass_manager(circuits: Any, pass_manager: Any) -> Any:
    """Run ``pass_manager`` over one circuit or a list of circuits."""
    circuit_list, was_single = materialize_circuits(circuits)
    result = pass_manager.run(circuit_list)
    return result[0] if was_single else list(result)


@with_qiskit
def preset_pass_manager(
    backend: Any = None,
    optimization_level: int = 1,
    seed_transpiler: int | None = None,
) -> Any:
    """Qiskit's preset staged pass manager for ``backend``."""
    from qiskit.transpiler import generate_preset_pass_manager

    if seed_transpiler is None:
        seed_transpiler = get_config().seed_transpiler
    return generate_preset_pass_manager(
        optimization_level=optimization_level,
        backend=backend,
        seed_transpiler=seed_transpiler,
    )


# =============================================================================
# Execution
# =============================================================================


@with_qiskit
def run_circuit(
    backend: Any,
    circuits: Any,
    shots: int | None = None,
    memory: bool | None = None,
) -> Any:
    """
    Submit circuit(s) to ``backend`` and return the job.

    Circuits must already match the backend's target; see
    :func:`transpile`.
    """
    circuit_list, _ = materialize_circuits(circuits)
    kwargs: dict[str, Any] = {}
    if shots is not None:
        kwargs["shots"] = shots
    if memory is not None:
        kwargs["memory"] = memory

    logger.debug("Running %d circuit(s) on %s %s", len(circuit_list), backend_name(backend), kwargs)
    return backend.run(circuit_list, **kwargs)


@translate_errors
def job_status(job: Any) -> str:
    """Status name, e.g. ``"DONE"`` or ``"RUNNING"``."""
    status = job.status()
    return str(getattr(status, "name", status))


@translate_errors
def job_result(job: Any, timeout: float | None = None) -> Any:
    """
    Block until the job finishes and return its result.

    ``timeout`` (seconds) is passed to the job's own result call.
    """
    if timeout is None:
        return job.result()
    return job.result(timeout=timeout)


wait_for_job = job_result


@translate_errors
def job_cancel(job: Any) -> Any:
    return job.cancel()


# =============================================================================
# Results
# =============================================================================


@translate_errors
def get_counts(result: Any, index: int = 0) -> dict[str, int]:
    """Counts of experiment ``index`` as a plain dict."""
    return to_python(dict(result.get_counts(index)))


@translate_errors
def get_memory(result: Any, index: int = 0) -> list[str]:
    """Per-shot outcomes; the job must have been run with ``memory=True``."""
    return list(result.get_memory(index))


@translate_errors
def get_statevector(result: Any, index: int = 0) -> Statevector:
    from qiskit.quantum_info import Statevector

    return Statevector(result.get_statevector(index))


@translate_errors
def get_unitary(result: Any, index: int = 0) -> Any:
    return result.get_unitary(index)


# =============================================================================
# Noise
# =============================================================================


@with_qiskit
def noise_model() -> Any:
    """Empty Aer noise model."""
    noise = _optional_module("qiskit_aer.noise", "Qiskit Aer noise", _AER_HINT)
    return noise.NoiseModel()


@with_qiskit
def depolarizing_error(prob: float, num_qubits: int = 1) -> Any:
    """Depolarizing channel with error probability ``prob``."""
    noise = _optional_module("qiskit_aer.noise", "Qiskit Aer noise", _AER_HINT)
    validate_qubit_count(num_qubits)
    return noise.depolarizing_error(prob, num_qubits)


@translate_errors
def add_quantum_error(
    model: Any,
    error: Any,
    instructions: str | Sequence[str],
    qubits: Any = None,
) -> Any:
    """
    Attach ``error`` to ``instructions`` in ``model``.

    Parameters
    ----------
    model : NoiseModel
        Model to modify.
    error : QuantumError
        Error channel.
    instructions : str or list of str
        Gate names, e.g. ``["cx"]``.
    qubits : int or list of int, optional
        Specific qubits; when omitted the error applies to all qubits.

    Returns
    -------
    NoiseModel
        The same model.
    """
    names = [instructions] if isinstance(instructions, str) else list(instructions)
    if qubits is None:
        model.add_all_qubit_quantum_error(error, names)
    else:
        model.add_quantum_error(error, names, as_qubit_list(qubits))
    return model


# =============================================================================
# High-level execution
# =============================================================================


def execute_circuit(
    circuit: QuantumCircuit,
    backend: Any = None,
    shots: int | None = None,
    transpile_first: bool = True,
) -> dict[str, int]:
    """
    Run one circuit and return its counts.

    Parameters
    ----------
    circuit : QuantumCircuit
        Circuit with measurements.
    backend : BackendV2, optional
        Defaults to a fresh Aer simulator.
    shots : int, optional
        Defaults to ``Config.default_shots``.
    transpile_first : bool
        Transpile for the backend before running.

    Returns
    -------
    dict
        Bitstring to count.
    """
    if backend is None:
        backend = aer_simulator()
    if shots is None:
        shots = get_config().default_shots
    if transpile_first:
        circuit = transpile(circuit, backend)
    job = run_circuit(backend, circuit, shots=shots)
    return get_counts(wait_for_job(job))


def execute_statevector(circuit: QuantumCircuit, backend: Any = None) -> Statevector:
    """
    Simulate ``circuit`` and return its final statevector.

    Final measurements are removed from a copy of the circuit before a
    ``save_statevector`` instruction is appended; the input circuit is
    not modified.

    Parameters
    ----------
    circuit : QuantumCircuit
        Circuit to simulate.
    backend : AerSimulator, optional
        Defaults to an Aer simulator with ``method="statevector"``.
        Other backends cannot execute ``save_statevector``.
    """
    # save_statevector is registered on QuantumCircuit by importing Aer
    _optional_module("qiskit_aer", "Qiskit Aer", _AER_HINT)
    if backend is None:
        backend = aer_simulator(method="statevector")

    prepared = circuit.remove_final_measurements(inplace=False)
    prepared.save_statevector()
    job = run_circuit(backend, transpile(prepared, backend))
    return get_statevector(wait_for_job(job))
