# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qfacade

"""
Gate library.

Named wrappers for the standard gate set. Single-qubit wrappers accept
one qubit index or a list of indices and apply the gate to each;
multi-qubit wrappers take their operands positionally and require them
to be distinct. Every wrapper validates its indices against the circuit
and returns the circuit.

Qiskit orders qubits little-endian: qubit 0 is the rightmost character
of a measured bitstring.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any, Callable, Sequence

from qfacade.core import (
    to_python,
    translate_errors,
    validate_qubit_index,
    validate_qubits,
    with_qiskit,
)
from qfacade.errors import InvalidQubitIndexError, ValidationError


if TYPE_CHECKING:
    from qiskit import QuantumCircuit
    from qiskit.circuit import Gate


logger = logging.getLogger(__name__)

GateFn = Callable[..., "QuantumCircuit"]


def _each(circuit: QuantumCircuit, method: str, qubits: Any, *params: Any) -> QuantumCircuit:
    targets = validate_qubits(qubits, circuit.num_qubits)
    apply = getattr(circuit, method)
    for q in targets:
        apply(*params, q)
    return circuit


def _operands(circuit: QuantumCircuit, qubits: Sequence[Any]) -> list[int]:
    bound = circuit.num_qubits
    operands = [validate_qubit_index(q, bound) for q in qubits]
    if len(set(operands)) != len(operands):
        raise InvalidQubitIndexError(
            operands, bound, f"Gate operands must be distinct qubits, got {operands}"
        )
    return operands


def _multi(circuit: QuantumCircuit, method: str, qubits: Sequence[Any], *params: Any) -> QuantumCircuit:
    getattr(circuit, method)(*params, *_operands(circuit, qubits))
    return circuit


# =============================================================================
# Single-qubit gates
# =============================================================================


@translate_errors
def pauli_x(circuit: QuantumCircuit, qubits: Any) -> QuantumCircuit:
    """Bit flip."""
    return _each(circuit, "x", qubits)


@translate_errors
def pauli_y(circuit: QuantumCircuit, qubits: Any) -> QuantumCircuit:
    return _each(circuit, "y", qubits)


@translate_errors
def pauli_z(circuit: QuantumCircuit, qubits: Any) -> QuantumCircuit:
    """Phase flip."""
    return _each(circuit, "z", qubits)


@translate_errors
def hadamard(circuit: QuantumCircuit, qubits: Any) -> QuantumCircuit:
    return _each(circuit, "h", qubits)


@translate_errors
def s_gate(circuit: QuantumCircuit, qubits: Any) -> QuantumCircuit:
    """Quarter turn about Z (sqrt of Z)."""
    return _each(circuit, "s", qubits)


@translate_errors
def s_dagger(circuit: QuantumCircuit, qubits: Any) -> QuantumCircuit:
    return _each(circuit, "sdg", qubits)


@translate_errors
def t_gate(circuit: QuantumCircuit, qubits: Any) -> QuantumCircuit:
    """Eighth turn about Z (sqrt of S)."""
    return _each(circuit, "t", qubits)


@translate_errors
def t_dagger(circuit: QuantumCircuit, qubits: Any) -> QuantumCircuit:
    return _each(circuit, "tdg", qubits)


@translate_errors
def sx_gate(circuit: QuantumCircuit, qubits: Any) -> QuantumCircuit:
    """Square root of X."""
    return _each(circuit, "sx", qubits)


@translate_errors
def identity_gate(circuit: QuantumCircuit, qubits: Any) -> QuantumCircuit:
    return _each(circuit, "id", qubits)


@translate_errors
def reset_gate(circuit: QuantumCircuit, qubits: Any) -> QuantumCircuit:
    """Non-unitary reset to the zero state."""
    return _each(circuit, "reset", qubits)


# =============================================================================
# Parameterized single-qubit gates
# =============================================================================


@translate_errors
def rotation_x(circuit: QuantumCircuit, theta: Any, qubits: Any) -> QuantumCircuit:
    """
    Rotate about the X axis.

    Parameters
    ----------
    circuit : QuantumCircuit
        Target circuit.
    theta : float or Parameter
        Rotation angle in radians.
    qubits : int or list of int
        Target qubit(s).

    Returns
    -------
    QuantumCircuit
        The same circuit.
    """
    return _each(circuit, "rx", qubits, theta)


@translate_errors
def rotation_y(circuit: QuantumCircuit, theta: Any, qubits: Any) -> QuantumCircuit:
    return _each(circuit, "ry", qubits, theta)


@translate_errors
def rotation_z(circuit: QuantumCircuit, theta: Any, qubits: Any) -> QuantumCircuit:
    return _each(circuit, "rz", qubits, theta)


@translate_errors
def phase_gate(circuit: QuantumCircuit, phi: Any, qubits: Any) -> QuantumCircuit:
    """Apply ``diag(1, exp(i*phi))``."""
    return _each(circuit, "p", qubits, phi)


def u1_gate(circuit: QuantumCircuit, lam: Any, qubits: Any) -> QuantumCircuit:
    """Legacy U1; identical to :func:`phase_gate`."""
    return phase_gate(circuit, lam, qubits)


@translate_errors
def u2_gate(circuit: QuantumCircuit, phi: Any, lam: Any, qubits: Any) -> QuantumCircuit:
    """Legacy U2, applied as ``U(pi/2, phi, lam)``."""
    return _each(circuit, "u", qubits, math.pi / 2, phi, lam)


@translate_errors
def u3_gate(
    circuit: QuantumCircuit,
    theta: Any,
    phi: Any,
    lam: Any,
    qubits: Any,
) -> QuantumCircuit:
    """Legacy U3, applied as the generic ``U(theta, phi, lam)``."""
    return _each(circuit, "u", qubits, theta, phi, lam)


# =============================================================================
# Two-qubit gates
# =============================================================================


@translate_errors
def cnot(circuit: QuantumCircuit, control: int, target: int) -> QuantumCircuit:
    """
    Controlled-X.

    Raises
    ------
    InvalidQubitIndexError
        If either index is out of range or ``control == target``.
    """
    return _multi(circuit, "cx", [control, target])


@translate_errors
def controlled_y(circuit: QuantumCircuit, control: int, target: int) -> QuantumCircuit:
    return _multi(circuit, "cy", [control, target])


@translate_errors
def controlled_z(circuit: QuantumCircuit, control: int, target: int) -> QuantumCircuit:
    return _multi(circuit, "cz", [control, target])


@translate_errors
def controlled_hadamard(circuit: QuantumCircuit, control: int, target: int) -> QuantumCircuit:
    return _multi(circuit, "ch", [control, target])


@translate_errors
def swap_gate(circuit: QuantumCircuit, qubit1: int, qubit2: int) -> QuantumCircuit:
    return _multi(circuit, "swap", [qubit1, qubit2])


@translate_errors
def iswap_gate(circuit: QuantumCircuit, qubit1: int, qubit2: int) -> QuantumCircuit:
    return _multi(circuit, "iswap", [qubit1, qubit2])


@translate_errors
def controlled_rx(circuit: QuantumCircuit, theta: Any, control: int, target: int) -> QuantumCircuit:
    return _multi(circuit, "crx", [control, target], theta)


@translate_errors
def controlled_ry(circuit: QuantumCircuit, theta: Any, control: int, target: int) -> QuantumCircuit:
    return _multi(circuit, "cry", [control, target], theta)


@translate_errors
def controlled_rz(circuit: QuantumCircuit, theta: Any, control: int, target: int) -> QuantumCircuit:
    return _multi(circuit, "crz", [control, target], theta)


@translate_errors
def controlled_phase(circuit: QuantumCircuit, phi: Any, control: int, target: int) -> QuantumCircuit:
    return _multi(circuit, "cp", [control, target], phi)


# =============================================================================
# Three-qubit and multi-controlled gates
# =============================================================================


@translate_errors
def toffoli(circuit: QuantumCircuit, control1: int, control2: int, target: int) -> QuantumCircuit:
    """Doubly-controlled X (CCX)."""
    return _multi(circuit, "ccx", [control1, control2, target])


@translate_errors
def fredkin(circuit: QuantumCircuit, control: int, target1: int, target2: int) -> QuantumCircuit:
    """Controlled swap (CSWAP)."""
    return _multi(circuit, "cswap", [control, target1, target2])


def _controls_and_target(circuit: QuantumCircuit, controls: Any, target: int) -> tuple[list[int], int]:
    control_list = validate_qubits(controls, circuit.num_qubits)
    if not control_list:
        raise ValidationError("At least one control qubit is required")
    operands = _operands(circuit, [*control_list, target])
    return operands[:-1], operands[-1]


@translate_errors
def multi_controlled_x(circuit: QuantumCircuit, controls: Any, target: int) -> QuantumCircuit:
    """
    X on ``target`` conditioned on all ``controls`` being 1.

    Parameters
    ----------
    circuit : QuantumCircuit
        Target circuit.
    controls : int or list of int
        Control qubits; must not include ``target``.
    target : int
        Target qubit.
    """
    control_list, target = _controls_and_target(circuit, controls, target)
    circuit.mcx(control_list, target)
    return circuit


@translate_errors
def multi_controlled_z(circuit: QuantumCircuit, controls: Any, target: int) -> QuantumCircuit:
    """Z on ``target`` conditioned on all ``controls`` being 1."""
    from qiskit.circuit.library import ZGate

    control_list, target = _controls_and_target(circuit, controls, target)
    circuit.append(ZGate().control(len(control_list)), [*control_list, target])
    return circuit


# =============================================================================
# Composition helpers
# =============================================================================


def compose_gates(gates: Sequence[Sequence[Any]]) -> Callable[[QuantumCircuit], QuantumCircuit]:
    """
    Bundle gate applications into one callable.

    Parameters
    ----------
    gates : sequence of tuples
        Each item is ``(gate_fn, *args)``; ``gate_fn(circuit, *args)`` is
        called in order.

    Returns
    -------
    callable
        Function taking a circuit, applying every gate and returning it.

    Examples
    --------
    >>> bell = compose_gates([(hadamard, 0), (cnot, 0, 1)])
    >>> bell(quantum_circuit(2))
    """
    steps = [(step[0], tuple(step[1:])) for step in gates]

    def apply(circuit: QuantumCircuit) -> QuantumCircuit:
        for fn, args in steps:
            fn(circuit, *args)
        return circuit

    return apply


def _param_rotation(rotation: GateFn, name: str) -> Callable[[QuantumCircuit, Any], QuantumCircuit]:
    from qfacade.circuit import parameter

    param = parameter(name)

    def apply(circuit: QuantumCircuit, qubits: Any) -> QuantumCircuit:
        return rotation(circuit, param, qubits)

    apply.parameter = param  # type: ignore[attr-defined]
    return apply


def rx_param(name: str) -> Callable[[QuantumCircuit, Any], QuantumCircuit]:
    """
    Return an applier for an X rotation by the named parameter.

    The same :class:`~qiskit.circuit.Parameter` is reused on every call
    and exposed as ``applier.parameter``.
    """
    return _param_rotation(rotation_x, name)


def ry_param(name: str) -> Callable[[QuantumCircuit, Any], QuantumCircuit]:
    return _param_rotation(rotation_y, name)


def rz_param(name: str) -> Callable[[QuantumCircuit, Any], QuantumCircuit]:
    return _param_rotation(rotation_z, name)


# =============================================================================
# Gate inspection
# =============================================================================


def is_unitary(gate: Gate) -> bool:
    """True if the gate has a matrix representation."""
    from qiskit.exceptions import QiskitError

    try:
        gate.to_matrix()
    except (QiskitError, AttributeError, TypeError):
        return False
    return True


@translate_errors
def gate_matrix(gate: Gate) -> list[list[complex]]:
    """Unitary matrix of the gate as nested lists of complex numbers."""
    return to_python(gate.to_matrix())


@translate_errors
def gate_power(gate: Gate, exponent: float) -> Gate:
    return gate.power(exponent)


@with_qiskit
def decompose_to_basis(circuit: QuantumCircuit, basis_gates: Sequence[str]) -> QuantumCircuit:
    """
    Rewrite the circuit in terms of ``basis_gates``.

    No layout or routing is applied; only gate translation.
    """
    from qiskit import transpile

    logger.debug("Decomposing to basis %s", list(basis_gates))
    return transpile(circuit, basis_gates=list(basis_gates), optimization_level=0)
