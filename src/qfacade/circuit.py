# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qfacade

"""
Quantum circuit construction and manipulation.

Thin wrappers around :class:`qiskit.QuantumCircuit`. Every function that
adds an operation validates its qubit indices first and returns the
circuit it was given, so calls can be chained in builder style.

Example
-------
>>> from qfacade import circuit as qc
>>> bell = qc.quantum_circuit(2)
>>> qc.measure_all(qc.cx(qc.h(bell, 0), 0, 1))
>>> print(qc.draw(bell))
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping, Sequence

import numpy as np

from qfacade.core import (
    _is_int,
    translate_errors,
    validate_qubit_count,
    validate_qubit_index,
    validate_qubits,
    with_qiskit,
)
from qfacade.errors import (
    InvalidQubitIndexError,
    ParameterBindingError,
    ValidationError,
)
from qfacade.gates import _each, _multi


if TYPE_CHECKING:
    from qiskit import QuantumCircuit
    from qiskit.circuit import Parameter


logger = logging.getLogger(__name__)


# =============================================================================
# Construction and inspection
# =============================================================================


@with_qiskit
def quantum_circuit(
    num_qubits: int,
    num_clbits: int | None = None,
    name: str | None = None,
) -> QuantumCircuit:
    """
    Create a new quantum circuit.

    Parameters
    ----------
    num_qubits : int
        Number of qubits; must be a positive integer.
    num_clbits : int, optional
        Number of classical bits. Defaults to ``num_qubits``.
    name : str, optional
        Circuit name.

    Returns
    -------
    QuantumCircuit
        Empty circuit.

    Raises
    ------
    InvalidQubitCountError
        If ``num_qubits`` is not a positive integer.
    ValidationError
        If ``num_clbits`` is negative or not an integer.
    """
    from qiskit import QuantumCircuit

    validate_qubit_count(num_qubits)
    if num_clbits is None:
        num_clbits = num_qubits
    elif not _is_int(num_clbits) or num_clbits < 0:
        raise ValidationError(
            f"Classical bit count must be a non-negative integer, got {num_clbits!r}"
        )

    logger.debug("Creating circuit: qubits=%d clbits=%d name=%r", num_qubits, num_clbits, name)
    return QuantumCircuit(num_qubits, num_clbits, name=name)


def materialize_circuits(circuits: Any) -> tuple[list[Any], bool]:
    """
    Materialize circuit inputs exactly once.

    QuantumCircuit is iterable over its instructions, so it is checked
    explicitly before attempting iteration.

    Returns
    -------
    circuit_list : list
        List of circuits.
    was_single : bool
        True if the input was a single circuit.
    """
    from qiskit import QuantumCircuit

    if circuits is None:
        return [], False
    if isinstance(circuits, QuantumCircuit):
        return [circuits], True
    if isinstance(circuits, (list, tuple)):
        return list(circuits), False
    try:
        return list(circuits), False
    except TypeError:
        return [circuits], True


@translate_errors
def copy_circuit(circuit: QuantumCircuit) -> QuantumCircuit:
    return circuit.copy()


def num_qubits(circuit: QuantumCircuit) -> int:
    return circuit.num_qubits


def num_clbits(circuit: QuantumCircuit) -> int:
    return circuit.num_clbits


@translate_errors
def circuit_depth(circuit: QuantumCircuit) -> int:
    """Depth of the circuit (critical path length)."""
    return circuit.depth()


@translate_errors
def circuit_size(circuit: QuantumCircuit) -> int:
    """Total number of operations in the circuit."""
    return circuit.size()


@translate_errors
def circuit_width(circuit: QuantumCircuit) -> int:
    """Qubits plus classical bits."""
    return circuit.width()


def circuit_summary(circuit: QuantumCircuit) -> str:
    """One-line description used when drawing is unavailable."""
    return (
        f"QuantumCircuit(qubits={circuit.num_qubits}, "
        f"depth={circuit.depth()}, size={circuit.size()})"
    )


@translate_errors
def circuit_info(circuit: QuantumCircuit) -> dict[str, Any]:
    """
    Structural summary of a circuit.

    Returns
    -------
    dict
        ``num_qubits``, ``num_clbits``, ``depth``, ``size``, ``width``,
        plus ``operations`` mapping each operation name to its count.
    """
    return {
        "num_qubits": circuit.num_qubits,
        "num_clbits": circuit.num_clbits,
        "depth": circuit.depth(),
        "size": circuit.size(),
        "width": circuit.width(),
        "operations": {str(k): int(v) for k, v in circuit.count_ops().items()},
    }


# =============================================================================
# Gates
# =============================================================================


@translate_errors
def add_gate(
    circuit: QuantumCircuit,
    gate: Any,
    qubits: Any,
    params: list[Any] | None = None,
) -> QuantumCircuit:
    """
    Append a gate to the circuit.

    Parameters
    ----------
    circuit : QuantumCircuit
        Target circuit.
    gate : str, type or Instruction
        Gate instance, gate class, or the name of a class in
        :mod:`qiskit.circuit.library` (e.g. ``"HGate"``).
    qubits : int or sequence of int
        Qubits the gate acts on, in operand order.
    params : list, optional
        Constructor arguments when ``gate`` is a class or a name.

    Returns
    -------
    QuantumCircuit
        The same circuit.
    """
    from qiskit.circuit import library

    if isinstance(gate, str):
        try:
            gate = getattr(library, gate)
        except AttributeError:
            raise ValidationError(
                f"Unknown gate {gate!r}: not found in qiskit.circuit.library"
            ) from None
    if isinstance(gate, type):
        gate = gate(*(params or ()))

    qubit_list = validate_qubits(qubits, circuit.num_qubits)
    circuit.append(gate, qubit_list)
    return circuit


@translate_errors
def h(circuit: QuantumCircuit, qubits: Any) -> QuantumCircuit:
    """Apply a Hadamard gate to one qubit or each of several."""
    return _each(circuit, "h", qubits)


@translate_errors
def x(circuit: QuantumCircuit, qubits: Any) -> QuantumCircuit:
    """Apply a Pauli-X gate to one qubit or each of several."""
    return _each(circuit, "x", qubits)


@translate_errors
def y(circuit: QuantumCircuit, qubits: Any) -> QuantumCircuit:
    return _each(circuit, "y", qubits)


@translate_errors
def z(circuit: QuantumCircuit, qubits: Any) -> QuantumCircuit:
    return _each(circuit, "z", qubits)


@translate_errors
def cx(circuit: QuantumCircuit, control: int, target: int) -> QuantumCircuit:
    """Apply a CNOT with the given control and target."""
    return _multi(circuit, "cx", [control, target])


@translate_errors
def cz(circuit: QuantumCircuit, control: int, target: int) -> QuantumCircuit:
    return _multi(circuit, "cz", [control, target])


@translate_errors
def rx(circuit: QuantumCircuit, theta: Any, qubit: int) -> QuantumCircuit:
    """Rotate ``qubit`` about X by ``theta`` radians (float or Parameter)."""
    return _each(circuit, "rx", qubit, theta)


@translate_errors
def ry(circuit: QuantumCircuit, theta: Any, qubit: int) -> QuantumCircuit:
    return _each(circuit, "ry", qubit, theta)


@translate_errors
def rz(circuit: QuantumCircuit, theta: Any, qubit: int) -> QuantumCircuit:
    return _each(circuit, "rz", qubit, theta)


# =============================================================================
# Measurement, barriers, reset
# =============================================================================


@translate_errors
def measure(circuit: QuantumCircuit, qubit: int, clbit: int) -> QuantumCircuit:
    """Measure ``qubit`` into classical bit ``clbit``."""
    validate_qubit_index(qubit, circuit.num_qubits)
    if not _is_int(clbit) or not 0 <= clbit < circuit.num_clbits:
        raise InvalidQubitIndexError(
            clbit,
            circuit.num_clbits,
            f"Classical bit index {clbit!r} out of range [0, {circuit.num_clbits})",
        )
    circuit.measure(qubit, clbit)
    return circuit


@translate_errors
def measure_all(circuit: QuantumCircuit) -> QuantumCircuit:
    """
    Measure every qubit into the classical bit with the same index.

    A circuit with fewer classical bits than qubits gets a new ``meas``
    register for the results instead.
    """
    circuit.measure_all(add_bits=circuit.num_clbits < circuit.num_qubits)
    return circuit


@translate_errors
def barrier(circuit: QuantumCircuit, qubits: Any = None) -> QuantumCircuit:
    """Add a barrier across ``qubits``, or across all qubits when omitted."""
    if qubits is None:
        circuit.barrier()
    else:
        circuit.barrier(validate_qubits(qubits, circuit.num_qubits))
    return circuit


@translate_errors
def reset(circuit: QuantumCircuit, qubits: Any) -> QuantumCircuit:
    """Reset qubit(s) to the zero state."""
    return _each(circuit, "reset", qubits)


# =============================================================================
# Composition
# =============================================================================


@translate_errors
def compose(
    circuit1: QuantumCircuit,
    circuit2: QuantumCircuit,
    qubits: list[int] | None = None,
) -> QuantumCircuit:
    """
    Compose ``circuit2`` onto ``circuit1``.

    Returns a new circuit; neither input is modified.
    """
    if qubits is not None:
        qubits = validate_qubits(qubits, circuit1.num_qubits)
    return circuit1.compose(circuit2, qubits=qubits)


@translate_errors
def reverse_ops(circuit: QuantumCircuit) -> QuantumCircuit:
    return circuit.reverse_ops()


@translate_errors
def inverse(circuit: QuantumCircuit) -> QuantumCircuit:
    return circuit.inverse()


# =============================================================================
# Random circuits
# =============================================================================

RANDOM_GATE_SET: tuple[str, ...] = ("h", "x", "y", "z", "cx")

_RANDOM_SINGLE = frozenset({"h", "x", "y", "z", "s", "t"})
_RANDOM_PAIR = frozenset({"cx", "cz"})


@with_qiskit
def random_circuit(
    num_qubits: int,
    depth: int,
    gate_set: Sequence[str] = RANDOM_GATE_SET,
    seed: int | None = None,
) -> QuantumCircuit:
    """
    Build a random measured circuit for testing and benchmarking.

    Parameters
    ----------
    num_qubits : int
        Number of qubits.
    depth : int
        Number of random gates to draw.
    gate_set : sequence of str
        Gate names to draw from: any of ``h``, ``x``, ``y``, ``z``,
        ``s``, ``t``, ``cx`` and ``cz``.
    seed : int, optional
        Seed for reproducible circuits.

    Returns
    -------
    QuantumCircuit
        Circuit with every qubit measured into its own classical bit.
        Two-qubit draws on a single-qubit circuit are skipped.

    Raises
    ------
    ValidationError
        If ``depth`` is negative or ``gate_set`` is empty or holds an
        unsupported name.
    """
    if not _is_int(depth) or depth < 0:
        raise ValidationError(f"Circuit depth must be a non-negative integer, got {depth!r}")
    gates = [str(g).lower() for g in dict.fromkeys(gate_set)]
    if not gates:
        raise ValidationError("Random circuit gate set must not be empty")
    unknown = sorted(set(gates) - _RANDOM_SINGLE - _RANDOM_PAIR)
    if unknown:
        raise ValidationError(
            f"Unsupported random circuit gates {unknown}; "
            f"choose from {sorted(_RANDOM_SINGLE | _RANDOM_PAIR)}"
        )

    circuit = quantum_circuit(num_qubits, name="random")
    rng = np.random.default_rng(seed)
    for _ in range(depth):
        gate = gates[int(rng.integers(len(gates)))]
        if gate in _RANDOM_SINGLE:
            _each(circuit, gate, int(rng.integers(num_qubits)))
        elif num_qubits > 1:
            control, target = (int(q) for q in rng.choice(num_qubits, size=2, replace=False))
            _multi(circuit, gate, [control, target])

    logger.debug("Random circuit: qubits=%d gates=%d seed=%r", num_qubits, circuit.size(), seed)
    return measure_all(circuit)


# =============================================================================
# Rendering and serialization
# =============================================================================


def draw(
    circuit: QuantumCircuit,
    output: str = "text",
    scale: float | None = None,
    filename: str | None = None,
) -> str:
    """
    Draw the circuit.

    Parameters
    ----------
    circuit : QuantumCircuit
        Circuit to draw.
    output : str
        Drawer: ``"text"``, ``"mpl"`` or ``"latex"``.
    scale : float, optional
        Scale factor for image output.
    filename : str, optional
        File to save the drawing to.

    Returns
    -------
    str
        Text drawing, or a one-line summary when the drawer fails
        (for example, when matplotlib is not installed).
    """
    kwargs: dict[str, Any] = {"output": output}
    if scale is not None:
        kwargs["scale"] = scale
    if filename is not None:
        kwargs["filename"] = filename
    try:
        return str(circuit.draw(**kwargs))
    except Exception as exc:
        logger.warning("Circuit drawer %r failed, using summary: %s", output, exc)
        return circuit_summary(circuit)


def print_circuit(circuit: QuantumCircuit) -> str:
    """Print the text drawing of ``circuit`` and return it."""
    text = draw(circuit, output="text")
    print(text)
    return text


@translate_errors
def qasm(circuit: QuantumCircuit, version: int = 2) -> str:
    """
    Serialize the circuit to OpenQASM.

    Parameters
    ----------
    version : int
        2 for OpenQASM 2.0, 3 for OpenQASM 3.0.
    """
    if version == 2:
        from qiskit import qasm2

        return qasm2.dumps(circuit)
    if version == 3:
        from qiskit import qasm3

        return qasm3.dumps(circuit)
    raise ValidationError(f"Unsupported OpenQASM version: {version!r}")


@with_qiskit
def from_qasm(text: str, version: int = 2) -> QuantumCircuit:
    """Parse an OpenQASM program into a circuit."""
    if version == 2:
        from qiskit import qasm2

        return qasm2.loads(text)
    if version == 3:
        from qiskit import qasm3

        return qasm3.loads(text)
    raise ValidationError(f"Unsupported OpenQASM version: {version!r}")


# =============================================================================
# Parameters
# =============================================================================


@with_qiskit
def parameter(name: str) -> Parameter:
    """Create a named circuit parameter."""
    from qiskit.circuit import Parameter

    return Parameter(name)


def parameters(circuit: QuantumCircuit) -> list[str]:
    """Names of the unbound parameters, sorted as Qiskit sorts them."""
    return [p.name for p in circuit.parameters]


@translate_errors
def bind_parameters(
    circuit: QuantumCircuit,
    values: Mapping[Any, Any],
) -> QuantumCircuit:
    """
    Bind values to circuit parameters.

    Parameters
    ----------
    circuit : QuantumCircuit
        Parameterized circuit.
    values : mapping
        Keys are Parameter objects or parameter names.

    Returns
    -------
    QuantumCircuit
        New circuit with the parameters assigned.

    Raises
    ------
    ParameterBindingError
        If a name does not match any circuit parameter.
    """
    by_name = {p.name: p for p in circuit.parameters}
    resolved: dict[Any, Any] = {}
    for key, value in values.items():
        if isinstance(key, str):
            if key not in by_name:
                raise ParameterBindingError(key, sorted(by_name))
            key = by_name[key]
        resolved[key] = value
    return circuit.assign_parameters(resolved, inplace=False)
