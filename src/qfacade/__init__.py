"""
qfacade: a thin, validated facade over Qiskit.

Quick Start
-----------
>>> from qfacade import quantum_circuit, h, cx, measure_all, execute_circuit
>>> bell = measure_all(cx(h(quantum_circuit(2), 0), 0, 1))
>>> execute_circuit(bell, shots=1000)
{'00': 496, '11': 504}

Expectation Values
------------------
>>> from qfacade import measure_expectation, z_observable
>>> measure_expectation(h(quantum_circuit(1), 0), z_observable(1, 0))
0.0

States
------
>>> from qfacade import bell_state, concurrence
>>> concurrence(bell_state("phi_plus"))
1.0

Submodules
----------
- qfacade.core: Initialization, validation and error translation
- qfacade.circuit: Circuit construction and serialization
- qfacade.gates: Named gate library
- qfacade.backends: Backends, transpilation, execution, noise
- qfacade.primitives: Sampler / Estimator primitives
- qfacade.quantum_info: States, operators and information measures
- qfacade.diagnostics: Installation checks and benchmarking
- qfacade.config: Configuration management
- qfacade.errors: Public exception types
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from typing import TYPE_CHECKING, Any


__all__ = [
    # Version
    "__version__",
    # Runtime
    "initialize",
    "qiskit_version",
    # Circuits
    "quantum_circuit",
    "h",
    "x",
    "cx",
    "measure",
    "measure_all",
    "draw",
    "qasm",
    "circuit_info",
    "print_circuit",
    "random_circuit",
    # Execution
    "aer_simulator",
    "transpile",
    "execute_circuit",
    "execute_statevector",
    "backend_status",
    "backend_configuration",
    "backend_properties",
    # Primitives
    "sample_circuit",
    "measure_expectation",
    "z_observable",
    # Quantum info
    "statevector",
    "bell_state",
    "ghz_state",
    "state_fidelity",
    "concurrence",
    # Demos
    "hello_quantum",
    "bell_pair",
    "ghz_triple",
    # Diagnostics
    "benchmark_circuit",
    "verify_installation",
    # Config
    "Config",
    "get_config",
    "set_config",
]


try:
    __version__ = version("qfacade")
except PackageNotFoundError:
    __version__ = "0.0.0"


if TYPE_CHECKING:
    from qfacade.backends import (
        aer_simulator,
        backend_configuration,
        backend_properties,
        backend_status,
        execute_circuit,
        execute_statevector,
        transpile,
    )
    from qfacade.circuit import (
        circuit_info,
        cx,
        draw,
        h,
        measure,
        measure_all,
        print_circuit,
        qasm,
        quantum_circuit,
        random_circuit,
        x,
    )
    from qfacade.config import Config, get_config, set_config
    from qfacade.core import initialize, qiskit_version
    from qfacade.demos import bell_pair, ghz_triple, hello_quantum
    from qfacade.diagnostics import benchmark_circuit, verify_installation
    from qfacade.primitives import measure_expectation, sample_circuit, z_observable
    from qfacade.quantum_info import (
        bell_state,
        concurrence,
        ghz_state,
        state_fidelity,
        statevector,
    )


_LAZY_IMPORTS = {
    # Runtime
    "initialize": ("qfacade.core", "initialize"),
    "qiskit_version": ("qfacade.core", "qiskit_version"),
    # Circuits
    "quantum_circuit": ("qfacade.circuit", "quantum_circuit"),
    "h": ("qfacade.circuit", "h"),
    "x": ("qfacade.circuit", "x"),
    "cx": ("qfacade.circuit", "cx"),
    "measure": ("qfacade.circuit", "measure"),
    "measure_all": ("qfacade.circuit", "measure_all"),
    "draw": ("qfacade.circuit", "draw"),
    "qasm": ("qfacade.circuit", "qasm"),
    "circuit_info": ("qfacade.circuit", "circuit_info"),
    "print_circuit": ("qfacade.circuit", "print_circuit"),
    "random_circuit": ("qfacade.circuit", "random_circuit"),
    # Execution
    "aer_simulator": ("qfacade.backends", "aer_simulator"),
    "transpile": ("qfacade.backends", "transpile"),
    "execute_circuit": ("qfacade.backends", "execute_circuit"),
    "execute_statevector": ("qfacade.backends", "execute_statevector"),
    "backend_status": ("qfacade.backends", "backend_status"),
    "backend_configuration": ("qfacade.backends", "backend_configuration"),
    "backend_properties": ("qfacade.backends", "backend_properties"),
    # Primitives
    "sample_circuit": ("qfacade.primitives", "sample_circuit"),
    "measure_expectation": ("qfacade.primitives", "measure_expectation"),
    "z_observable": ("qfacade.primitives", "z_observable"),
    # Quantum info
    "statevector": ("qfacade.quantum_info", "statevector"),
    "bell_state": ("qfacade.quantum_info", "bell_state"),
    "ghz_state": ("qfacade.quantum_info", "ghz_state"),
    "state_fidelity": ("qfacade.quantum_info", "state_fidelity"),
    "concurrence": ("qfacade.quantum_info", "concurrence"),
    # Demos
    "hello_quantum": ("qfacade.demos", "hello_quantum"),
    "bell_pair": ("qfacade.demos", "bell_pair"),
    "ghz_triple": ("qfacade.demos", "ghz_triple"),
    # Diagnostics
    "benchmark_circuit": ("qfacade.diagnostics", "benchmark_circuit"),
    "verify_installation": ("qfacade.diagnostics", "verify_installation"),
    # Config
    "Config": ("qfacade.config", "Config"),
    "get_config": ("qfacade.config", "get_config"),
    "set_config": ("qfacade.config", "set_config"),
}


def __getattr__(name: str) -> Any:
    """Lazy import handler for module-level attributes."""
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        module = __import__(module_path, fromlist=[attr_name])
        value = getattr(module, attr_name)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    """List available attributes for autocomplete."""
    return sorted(set(__all__) | set(_LAZY_IMPORTS.keys()))
