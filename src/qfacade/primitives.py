# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qfacade

"""
Sampler and Estimator primitives.

Wraps the V2 primitives: exact ``StatevectorSampler`` /
``StatevectorEstimator`` when no backend is given, otherwise
``BackendSamplerV2`` / ``BackendEstimatorV2`` around the backend.
Inputs are packed into primitive unified blocs (PUBs), run, and the
result is returned once the job completes.

Observables use Qiskit's little-endian Pauli labels: the character for
qubit ``i`` sits at position ``n - 1 - i`` of the label.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Sequence

from qfacade.circuit import materialize_circuits
from qfacade.config import get_config
from qfacade.core import (
    to_python,
    translate_errors,
    validate_qubit_count,
    validate_qubits,
    with_qiskit,
)
from qfacade.errors import ValidationError
from qfacade.utils.distributions import bhattacharyya_overlap, normalize_counts


if TYPE_CHECKING:
    from qiskit import QuantumCircuit
    from qiskit.quantum_info import SparsePauliOp


logger = logging.getLogger(__name__)


# =============================================================================
# Construction
# =============================================================================


@with_qiskit
def create_sampler(backend: Any = None, options: dict[str, Any] | None = None) -> Any:
    """
    Create a V2 sampler.

    Parameters
    ----------
    backend : BackendV2, optional
        Backend to sample on. Without one, sampling is exact statevector
        simulation.
    options : dict, optional
        ``BackendSamplerV2`` options, or ``StatevectorSampler`` keyword
        arguments (``default_shots``, ``seed``) when no backend is given.
    """
    if backend is None:
        from qiskit.primitives import StatevectorSampler

        return StatevectorSampler(**(options or {}))

    from qiskit.primitives import BackendSamplerV2

    return BackendSamplerV2(backend=backend, options=options)


@with_qiskit
def create_estimator(backend: Any = None, options: dict[str, Any] | None = None) -> Any:
    """Create a V2 estimator; see :func:`create_sampler` for the arguments."""
    if backend is None:
        from qiskit.primitives import StatevectorEstimator

        return StatevectorEstimator(**(options or {}))

    from qiskit.primitives import BackendEstimatorV2

    return BackendEstimatorV2(backend=backend, options=options)


# =============================================================================
# Running
# =============================================================================


def _broadcast(name: str, values: list[Any], size: int) -> list[Any]:
    if len(values) == size:
        return values
    if len(values) == 1:
        return values * size
    raise ValidationError(f"Got {len(values)} {name} for {size} circuit(s)")


def _as_list(value: Any) -> list[Any]:
    # SparsePauliOp is iterable over its terms, so only plain sequences expand
    return list(value) if isinstance(value, (list, tuple)) else [value]


@translate_errors
def run_sampler(
    sampler: Any,
    circuits: Any,
    parameter_values: Any = None,
    shots: int | None = None,
) -> Any:
    """
    Sample one or more circuits.

    Parameters
    ----------
    sampler : BaseSamplerV2
        Sampler from :func:`create_sampler`.
    circuits : QuantumCircuit or list of QuantumCircuit
        Circuits with measurements.
    parameter_values : array-like or list of array-like, optional
        Parameter values for a single circuit, or one entry per circuit.
    shots : int, optional
        Defaults to ``Config.default_shots``.

    Returns
    -------
    PrimitiveResult
        One pub result per circuit.
    """
    circuit_list, was_single = materialize_circuits(circuits)
    if shots is None:
        shots = get_config().default_shots

    if parameter_values is None:
        pubs = [(c,) for c in circuit_list]
    else:
        values = [parameter_values] if was_single else list(parameter_values)
        values = _broadcast("parameter value sets", values, len(circuit_list))
        pubs = [(c, v) for c, v in zip(circuit_list, values)]

    logger.debug("Sampling %d pub(s) with %d shots", len(pubs), shots)
    return sampler.run(pubs, shots=shots).result()


@translate_errors
def run_estimator(
    estimator: Any,
    circuits: Any,
    observables: Any,
    parameter_values: Any = None,
    precision: float | None = None,
) -> Any:
    """
    Estimate expectation values.

    Parameters
    ----------
    estimator : BaseEstimatorV2
        Estimator from :func:`create_estimator`.
    circuits : QuantumCircuit or list of QuantumCircuit
        Circuits without measurements.
    observables : observable or list of observables
        One observable per circuit; a single observable is used for
        every circuit and a single circuit is paired with every
        observable.
    parameter_values : array-like or list of array-like, optional
        Parameter values, one entry per pub.
    precision : float, optional
        Target standard error. The estimator's default when omitted.

    Returns
    -------
    PrimitiveResult
        One pub result per (circuit, observable) pair.
    """
    circuit_list, was_single = materialize_circuits(circuits)
    observable_list = _as_list(observables)

    size = max(len(circuit_list), len(observable_list))
    circuit_list = _broadcast("circuits", circuit_list, size)
    observable_list = _broadcast("observables", observable_list, size)

    if parameter_values is None:
        pubs = [(c, o) for c, o in zip(circuit_list, observable_list)]
    else:
        values = [parameter_values] if was_single else list(parameter_values)
        values = _broadcast("parameter value sets", values, size)
        pubs = [(c, o, v) for c, o, v in zip(circuit_list, observable_list, values)]

    logger.debug("Estimating %d pub(s) (precision=%s)", len(pubs), precision)
    return estimator.run(pubs, precision=precision).result()


# =============================================================================
# Result extraction
# =============================================================================


@translate_errors
def sampler_result_to_counts(result: Any, index: int = 0) -> dict[str, int]:
    """Counts for pub ``index``, merged across classical registers."""
    return to_python(dict(result[index].join_data().get_counts()))


def sampler_result_to_probabilities(result: Any, index: int = 0) -> dict[str, float]:
    return normalize_counts(sampler_result_to_counts(result, index))


@translate_errors
def estimator_result_to_values(result: Any) -> list[Any]:
    """
    Expectation values, one per pub.

    Scalars for plain pubs; nested lists for broadcast parameter arrays.
    """
    return [to_python(pub.data.evs) for pub in result]


@translate_errors
def estimator_result_to_variances(result: Any) -> list[Any] | None:
    """Squared standard errors per pub, or None if the result has none."""
    variances = []
    for pub in result:
        stds = getattr(pub.data, "stds", None)
        if stds is None:
            return None
        variances.append(to_python(stds**2))
    return variances


# =============================================================================
# Observables
# =============================================================================


@with_qiskit
def pauli_observable(label: str, coefficient: complex = 1.0) -> SparsePauliOp:
    """Single weighted Pauli term, e.g. ``pauli_observable("ZZ")``."""
    from qiskit.quantum_info import SparsePauliOp

    return SparsePauliOp.from_list([(label, coefficient)])


@with_qiskit
def pauli_sum(terms: Sequence[tuple[str, complex]]) -> SparsePauliOp:
    """Weighted sum of Pauli terms, e.g. ``[("ZZ", 1.0), ("XX", 0.5)]``."""
    from qiskit.quantum_info import SparsePauliOp

    return SparsePauliOp.from_list(list(terms))


def _single_axis_label(axis: str, num_qubits: int, targets: Any) -> str:
    validate_qubit_count(num_qubits)
    chars = ["I"] * num_qubits
    for q in validate_qubits(targets, num_qubits):
        chars[num_qubits - 1 - q] = axis
    return "".join(chars)


def z_observable(num_qubits: int, targets: Any) -> SparsePauliOp:
    """
    Tensor product of Z on ``targets`` and identity elsewhere.

    Examples
    --------
    >>> z_observable(3, 0)
    SparsePauliOp(['IIZ'], coeffs=[1.+0.j])
    """
    return pauli_observable(_single_axis_label("Z", num_qubits, targets))


def x_observable(num_qubits: int, targets: Any) -> SparsePauliOp:
    return pauli_observable(_single_axis_label("X", num_qubits, targets))


def y_observable(num_qubits: int, targets: Any) -> SparsePauliOp:
    return pauli_observable(_single_axis_label("Y", num_qubits, targets))


# =============================================================================
# High-level helpers
# =============================================================================


def sample_circuit(
    circuit: QuantumCircuit,
    shots: int | None = None,
    backend: Any = None,
) -> dict[str, int]:
    """Sample one circuit and return its counts."""
    result = run_sampler(create_sampler(backend), circuit, shots=shots)
    return sampler_result_to_counts(result)


def measure_expectation(
    circuit: QuantumCircuit,
    observable: Any,
    precision: float | None = None,
    backend: Any = None,
) -> float:
    """Expectation value of ``observable`` in the state prepared by ``circuit``."""
    result = run_estimator(create_estimator(backend), circuit, observable, precision=precision)
    return float(estimator_result_to_values(result)[0])


def measure_pauli_expectation(
    circuit: QuantumCircuit,
    label: str,
    precision: float | None = None,
    backend: Any = None,
) -> float:
    """:func:`measure_expectation` for a single Pauli label."""
    return measure_expectation(circuit, pauli_observable(label), precision, backend)


def batch_sample(
    circuits: Sequence[QuantumCircuit],
    shots: int | None = None,
    backend: Any = None,
) -> list[dict[str, int]]:
    """Sample several circuits in one job; counts in input order."""
    circuit_list, _ = materialize_circuits(circuits)
    result = run_sampler(create_sampler(backend), circuit_list, shots=shots)
    return [sampler_result_to_counts(result, i) for i in range(len(circuit_list))]


def batch_measure(
    pairs: Sequence[tuple[QuantumCircuit, Any]],
    precision: float | None = None,
    backend: Any = None,
) -> list[float]:
    """Expectation values for ``(circuit, observable)`` pairs in one job."""
    pairs = list(pairs)
    if not pairs:
        return []
    circuit_list = [c for c, _ in pairs]
    observable_list = [o for _, o in pairs]
    result = run_estimator(
        create_estimator(backend), circuit_list, observable_list, precision=precision
    )
    return [float(v) for v in estimator_result_to_values(result)]


# =============================================================================
# Count analysis
# =============================================================================


def most_frequent_outcome(counts: dict[str, int]) -> str:
    """
    Outcome with the highest count.

    Raises
    ------
    ValueError
        If ``counts`` is empty.
    """
    if not counts:
        raise ValueError("Counts are empty")
    return max(counts, key=counts.__getitem__)


def outcome_probability(counts: dict[str, int], outcome: str) -> float:
    """Relative frequency of ``outcome``; 0.0 if it never occurred."""
    return normalize_counts(counts).get(outcome, 0.0)


def fidelity_from_counts(counts1: dict[str, int], counts2: dict[str, int]) -> float:
    """
    Classical fidelity of two measured distributions.

    The Bhattacharyya overlap ``sum(sqrt(p(x) * q(x)))``: 1.0 for
    identical distributions, 0.0 for disjoint ones.
    """
    return bhattacharyya_overlap(counts1, counts2)
