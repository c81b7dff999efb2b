# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qfacade

"""
Shared CLI utilities.

Output helpers used by every command so text and JSON output look the
same everywhere.
"""

from __future__ import annotations

import json
from typing import Any, Sequence

import click


def echo(msg: str, *, err: bool = False) -> None:
    """
    Print message to stdout or stderr.

    Parameters
    ----------
    msg : str
        Message to print.
    err : bool, default=False
        If True, print to stderr instead of stdout.
    """
    click.echo(msg, err=err)


def print_json(obj: Any) -> None:
    """Print object as indented JSON; unknown types are stringified."""
    click.echo(json.dumps(obj, indent=2, default=str))


def print_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[Any]],
    title: str = "",
) -> None:
    """
    Print formatted ASCII table.

    Parameters
    ----------
    headers : sequence of str
        Column headers.
    rows : sequence of sequence
        Table rows, each as long as ``headers``.
    title : str, optional
        Title displayed above the table.
    """
    if title:
        echo(f"\n{title}\n{'=' * len(title)}")

    if not rows:
        echo("(empty)")
        return

    widths = [len(str(h)) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            if i < len(widths):
                widths[i] = max(widths[i], len(str(cell)))

    fmt = "  ".join(f"{{:<{w}}}" for w in widths)
    echo(fmt.format(*headers))
    echo(fmt.format(*["-" * w for w in widths]))
    for row in rows:
        echo(fmt.format(*[str(c) for c in row]))


def format_counts_table(counts: dict[str, int], top_k: int = 10) -> str:
    """Format measurement counts as an ASCII table, most frequent first."""
    total = sum(counts.values())
    ordered = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))

    lines = [
        f"Total shots: {total:,}",
        f"Unique outcomes: {len(counts)}",
        "",
        f"{'Outcome':<20} {'Count':>10} {'Prob':>10}",
        "-" * 42,
    ]
    for bitstring, count in ordered[:top_k]:
        prob = count / total if total else 0.0
        lines.append(f"{bitstring:<20} {count:>10,} {prob:>10.4f}")

    if len(ordered) > top_k:
        lines.append(f"... and {len(ordered) - top_k} more outcomes")

    return "\n".join(lines)
