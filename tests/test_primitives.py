# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qfacade

"""Tests for qfacade.primitives."""

from __future__ import annotations

import math

import pytest


pytest.importorskip("qiskit")

from qfacade import primitives as prim  # noqa: E402
from qfacade.circuit import quantum_circuit  # noqa: E402
from qfacade.config import Config, set_config  # noqa: E402
from qfacade.errors import InvalidQubitCountError, InvalidQubitIndexError, ValidationError  # noqa: E402


@pytest.fixture
def bell_state_circuit():
    """Bell preparation without measurements."""
    from qiskit import QuantumCircuit

    qc = QuantumCircuit(2)
    qc.h(0)
    qc.cx(0, 1)
    return qc


class TestObservables:
    def test_little_endian_labels(self):
        """Qubit 0 is the rightmost character of the label."""
        assert prim.z_observable(3, 0).paulis[0].to_label() == "IIZ"
        assert prim.x_observable(3, 2).paulis[0].to_label() == "XII"
        assert prim.y_observable(3, [0, 1]).paulis[0].to_label() == "IYY"

    def test_targets_validated(self):
        with pytest.raises(InvalidQubitIndexError):
            prim.z_observable(2, 2)

    def test_num_qubits_validated(self):
        with pytest.raises(InvalidQubitCountError):
            prim.z_observable(0, 0)

    def test_pauli_sum(self):
        op = prim.pauli_sum([("ZZ", 1.0), ("XX", 0.5)])

        assert op.num_qubits == 2
        assert list(op.coeffs.real) == [1.0, 0.5]

    def test_pauli_observable_coefficient(self):
        op = prim.pauli_observable("XI", 2.0)

        assert op.coeffs[0] == 2.0


class TestSampler:
    def test_sample_circuit_counts(self, bell_circuit):
        counts = prim.sample_circuit(bell_circuit, shots=500)

        assert sum(counts.values()) == 500
        assert set(counts) <= {"00", "11"}

    def test_default_shots_from_config(self, clean_env, bell_circuit):
        set_config(Config(default_shots=64))

        counts = prim.sample_circuit(bell_circuit)

        assert sum(counts.values()) == 64

    def test_batch_sample(self, bell_circuit):
        flip = quantum_circuit(1)
        flip.x(0)
        flip.measure(0, 0)

        results = prim.batch_sample([bell_circuit, flip], shots=50)

        assert len(results) == 2
        assert results[1] == {"1": 50}

    def test_parameterized_pub(self):
        from qiskit.circuit import Parameter

        theta = Parameter("theta")
        qc = quantum_circuit(1)
        qc.rx(theta, 0)
        qc.measure(0, 0)

        result = prim.run_sampler(prim.create_sampler(), qc, [math.pi], shots=100)

        assert prim.sampler_result_to_counts(result) == {"1": 100}

    def test_probabilities(self, bell_circuit):
        result = prim.run_sampler(prim.create_sampler(options={"seed": 3}), bell_circuit, shots=1000)

        probs = prim.sampler_result_to_probabilities(result)

        assert sum(probs.values()) == pytest.approx(1.0)

    def test_backend_sampler(self, aer_simulator, bell_circuit):
        from qiskit import transpile

        sampler = prim.create_sampler(aer_simulator)
        result = prim.run_sampler(sampler, transpile(bell_circuit, aer_simulator), shots=100)

        assert sum(prim.sampler_result_to_counts(result).values()) == 100

    def test_parameter_count_mismatch(self, bell_circuit):
        with pytest.raises(ValidationError):
            prim.run_sampler(prim.create_sampler(), [bell_circuit] * 3, [[], []])


class TestEstimator:
    def test_zz_on_bell_state(self, bell_state_circuit):
        value = prim.measure_pauli_expectation(bell_state_circuit, "ZZ")

        assert value == pytest.approx(1.0)

    def test_single_z_on_bell_state(self, bell_state_circuit):
        value = prim.measure_expectation(bell_state_circuit, prim.z_observable(2, 0))

        assert value == pytest.approx(0.0, abs=1e-9)

    def test_batch_measure(self, bell_state_circuit):
        flip = quantum_circuit(1, 0)
        flip.x(0)

        values = prim.batch_measure(
            [(bell_state_circuit, prim.pauli_observable("XX")), (flip, prim.z_observable(1, 0))]
        )

        assert values == pytest.approx([1.0, -1.0])

    def test_batch_measure_empty(self):
        assert prim.batch_measure([]) == []

    def test_one_circuit_many_observables(self, bell_state_circuit):
        result = prim.run_estimator(
            prim.create_estimator(),
            bell_state_circuit,
            [prim.pauli_observable("ZZ"), prim.pauli_observable("ZI")],
        )

        assert prim.estimator_result_to_values(result) == pytest.approx([1.0, 0.0], abs=1e-9)

    def test_variances(self, bell_state_circuit):
        result = prim.run_estimator(
            prim.create_estimator(), bell_state_circuit, prim.pauli_observable("ZZ")
        )

        variances = prim.estimator_result_to_variances(result)

        assert len(variances) == 1
        assert variances[0] == pytest.approx(0.0, abs=1e-9)

    def test_parameterized_estimate(self):
        from qiskit.circuit import Parameter

        theta = Parameter("theta")
        qc = quantum_circuit(1, 0)
        qc.ry(theta, 0)

        result = prim.run_estimator(
            prim.create_estimator(), qc, prim.z_observable(1, 0), parameter_values=[math.pi]
        )

        assert prim.estimator_result_to_values(result)[0] == pytest.approx(-1.0)


class TestCountAnalysis:
    def test_most_frequent_outcome(self):
        assert prim.most_frequent_outcome({"00": 10, "11": 30, "01": 2}) == "11"

    def test_most_frequent_empty(self):
        with pytest.raises(ValueError):
            prim.most_frequent_outcome({})

    def test_outcome_probability(self):
        counts = {"0": 25, "1": 75}

        assert prim.outcome_probability(counts, "1") == 0.75
        assert prim.outcome_probability(counts, "2") == 0.0

    def test_outcome_probability_empty(self):
        with pytest.raises(ValueError):
            prim.outcome_probability({}, "0")

    def test_fidelity_identical(self):
        counts = {"00": 50, "11": 50}

        assert prim.fidelity_from_counts(counts, counts) == pytest.approx(1.0)

    def test_fidelity_disjoint(self):
        assert prim.fidelity_from_counts({"0": 10}, {"1": 10}) == 0.0

    def test_fidelity_partial_overlap(self):
        value = prim.fidelity_from_counts({"0": 100}, {"0": 50, "1": 50})

        assert value == pytest.approx(math.sqrt(0.5))

    def test_fidelity_empty(self):
        with pytest.raises(ValueError):
            prim.fidelity_from_counts({}, {"0": 1})
