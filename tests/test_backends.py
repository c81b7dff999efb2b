# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qfacade

"""Tests for qfacade.backends."""

from __future__ import annotations

from unittest.mock import MagicMock

import numpy as np
import pytest


pytest.importorskip("qiskit")

from qfacade import backends  # noqa: E402
from qfacade.config import Config, set_config  # noqa: E402
from qfacade.errors import (  # noqa: E402
    BackendUnavailableError,
    InvalidQubitCountError,
    ValidationError,
)


class TestConstruction:
    def test_aer_simulator_options(self):
        pytest.importorskip("qiskit_aer")

        sim = backends.aer_simulator(method="statevector", shots=10)

        assert sim.options.method == "statevector"
        assert sim.options.shots == 10

    def test_aer_simulator_uses_config_method(self, clean_env):
        pytest.importorskip("qiskit_aer")
        set_config(Config(simulation_method="density_matrix"))

        assert backends.aer_simulator().options.method == "density_matrix"

    def test_aer_missing_raises_with_hint(self, monkeypatch):
        def no_aer(name):
            if name.startswith("qiskit_aer"):
                raise ImportError("No module named 'qiskit_aer'")
            import importlib

            return importlib.import_module(name)

        monkeypatch.setattr(backends, "_import", no_aer)

        with pytest.raises(BackendUnavailableError) as exc_info:
            backends.aer_simulator()

        assert exc_info.value.install_hint == "pip install qiskit-aer"
        assert "not available" in str(exc_info.value)

    def test_basic_simulator(self):
        sim = backends.basic_simulator()

        assert backends.backend_name(sim) == "basic_simulator"
        assert backends.is_simulator(sim)

    def test_generic_backend(self):
        backend = backends.generic_backend(5, seed=42)

        assert backends.backend_num_qubits(backend) == 5
        assert backends.coupling_map(backend)

    def test_generic_backend_validates_count(self):
        with pytest.raises(InvalidQubitCountError):
            backends.generic_backend(0)

    def test_fake_backend(self):
        pytest.importorskip("qiskit_ibm_runtime")

        backend = backends.fake_backend("fake_manila")

        assert type(backend).__name__ == "FakeManilaV2"
        assert backends.detect_provider(backend) == "fake"

    def test_fake_backend_unknown(self):
        pytest.importorskip("qiskit_ibm_runtime")

        with pytest.raises(ValidationError, match="FakeNowhereV2"):
            backends.fake_backend("nowhere")

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("fake_manila", ["FakeManilaV2", "FakeManila"]),
            ("manila", ["FakeManilaV2", "FakeManila"]),
            ("fake-sherbrooke", ["FakeSherbrookeV2", "FakeSherbrooke"]),
            ("FakeManilaV2", ["FakeManilaV2"]),
        ],
    )
    def test_fake_class_names(self, name, expected):
        assert backends._fake_class_names(name) == expected


class TestInspection:
    def test_describe_aer(self, aer_simulator):
        info = backends.describe_backend(aer_simulator)

        assert info["name"] == "aer_simulator"
        assert info["provider"] == "aer"
        assert info["simulator"] is True
        assert "cx" in info["basis_gates"]

    def test_coupling_map_edges(self):
        backend = backends.generic_backend(3, seed=1)

        edges = backends.coupling_map(backend)

        assert all(len(edge) == 2 for edge in edges)
        assert all(isinstance(q, int) for edge in edges for q in edge)

    def test_legacy_backend_attributes(self):
        legacy = MagicMock(spec=["name", "configuration", "version"])
        legacy.name.return_value = "legacy_device"
        legacy.version = 1
        legacy.configuration.return_value = MagicMock(max_shots=8192, simulator=False)

        assert backends.backend_name(legacy) == "legacy_device"
        assert backends.backend_version(legacy) == "1"
        assert backends.max_shots(legacy) == 8192
        assert backends.is_simulator(legacy) is False

    def test_provider_detection_by_name(self):
        device = MagicMock(spec=["name"])
        device.name = "ibm_brisbane"

        assert backends.detect_provider(device) == "ibm_quantum"


class TestBackendModels:
    """Status, configuration and properties queries."""

    @pytest.fixture
    def device(self):
        device = MagicMock(spec=["name", "backend_version", "status", "configuration", "properties"])
        device.name = "ibm_device"
        device.backend_version = "2.1"
        device.status.return_value.to_dict.return_value = {
            "backend_name": "ibm_device",
            "operational": False,
            "pending_jobs": np.int64(12),
            "status_msg": "maintenance",
        }
        device.configuration.return_value.to_dict.return_value = {
            "n_qubits": 127,
            "basis_gates": ["ecr", "rz", "sx", "x"],
        }
        device.properties.return_value = None
        return device

    def test_status_from_backend(self, device):
        status = backends.backend_status(device)

        assert status["operational"] is False
        assert status["pending_jobs"] == 12
        assert type(status["pending_jobs"]) is int

    def test_status_defaults_for_local_backends(self):
        local = MagicMock(spec=["name"])
        local.name = "basic_simulator"

        status = backends.backend_status(local)

        assert status["backend_name"] == "basic_simulator"
        assert status["operational"] is True
        assert status["pending_jobs"] == 0

    def test_configuration_from_backend(self, device):
        config = backends.backend_configuration(device)

        assert config == {"n_qubits": 127, "basis_gates": ["ecr", "rz", "sx", "x"]}

    def test_configuration_built_from_target(self):
        backend = backends.generic_backend(3, seed=2)
        if callable(getattr(backend, "configuration", None)):
            pytest.skip("backend ships its own configuration model")

        config = backends.backend_configuration(backend)

        assert config["n_qubits"] == 3
        assert config["basis_gates"] == backends.basis_gates(backend)
        assert config["simulator"] is False

    def test_properties(self, device):
        assert backends.backend_properties(device) is None

        device.properties.return_value = MagicMock()
        device.properties.return_value.to_dict.return_value = {"qubits": [[{"name": "T1"}]]}

        assert backends.backend_properties(device) == {"qubits": [[{"name": "T1"}]]}

    def test_properties_missing(self):
        assert backends.backend_properties(MagicMock(spec=["name"])) is None


class TestTranspile:
    def test_single_in_single_out(self, bell_circuit):
        out = backends.transpile(bell_circuit, backends.generic_backend(3, seed=7), seed_transpiler=1)

        assert not isinstance(out, list)
        assert out.num_qubits == 3

    def test_list_in_list_out(self, bell_circuit):
        out = backends.transpile([bell_circuit, bell_circuit], optimization_level=0)

        assert isinstance(out, list)
        assert len(out) == 2

    def test_pass_manager(self, bell_circuit):
        from qiskit.transpiler.passes import RemoveBarriers

        pm = backends.create_pass_manager([RemoveBarriers()])
        circuit = bell_circuit.copy()
        circuit.barrier()

        out = backends.transpile_with_pass_manager(circuit, pm)

        assert "barrier" not in out.count_ops()

    def test_preset_pass_manager(self, bell_circuit):
        backend = backends.generic_backend(2, seed=3)
        pm = backends.preset_pass_manager(backend, optimization_level=1, seed_transpiler=5)

        out = backends.transpile_with_pass_manager(bell_circuit, pm)

        assert set(out.count_ops()) <= set(backends.basis_gates(backend)) | {"measure", "barrier"}


class TestExecution:
    def test_run_and_result(self, aer_simulator, bell_circuit):
        job = backends.run_circuit(aer_simulator, bell_circuit, shots=200, memory=True)
        result = backends.job_result(job, timeout=60)

        counts = backends.get_counts(result)
        memory = backends.get_memory(result)

        assert sum(counts.values()) == 200
        assert set(counts) <= {"00", "11"}
        assert len(memory) == 200
        assert backends.job_status(job) == "DONE"

    def test_timeout_forwarded(self):
        job = MagicMock()

        backends.job_result(job, timeout=3.5)
        backends.wait_for_job(job)

        assert job.result.call_args_list[0].kwargs == {"timeout": 3.5}
        assert job.result.call_args_list[1].kwargs == {}

    def test_execute_circuit_default_shots(self, clean_env, bell_circuit):
        pytest.importorskip("qiskit_aer")
        set_config(Config(default_shots=321))

        counts = backends.execute_circuit(bell_circuit)

        assert sum(counts.values()) == 321

    def test_execute_circuit_on_basic_simulator(self, bell_circuit):
        counts = backends.execute_circuit(bell_circuit, backends.basic_simulator(), shots=100)

        assert set(counts) <= {"00", "11"}

    def test_execute_statevector(self, bell_circuit):
        pytest.importorskip("qiskit_aer")

        state = backends.execute_statevector(bell_circuit)

        expected = np.array([1, 0, 0, 1]) / np.sqrt(2)
        assert np.allclose(np.abs(state.data), expected)
        assert bell_circuit.count_ops()["measure"] == 2


class TestNoise:
    def test_noisy_simulation(self, bell_circuit):
        pytest.importorskip("qiskit_aer")

        model = backends.noise_model()
        error = backends.depolarizing_error(0.5, 2)
        assert backends.add_quantum_error(model, error, "cx") is model

        sim = backends.aer_simulator(noise_model=model, seed_simulator=11)
        counts = backends.execute_circuit(bell_circuit, sim, shots=2000)

        assert set(counts) - {"00", "11"}

    def test_error_on_specific_qubits(self):
        pytest.importorskip("qiskit_aer")

        model = backends.noise_model()
        backends.add_quantum_error(model, backends.depolarizing_error(0.1), ["x"], qubits=0)

        assert "x" in model.noise_instructions
        assert 0 in model.noise_qubits
