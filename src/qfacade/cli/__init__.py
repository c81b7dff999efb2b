# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qfacade

"""
Command-line interface.

Registered as the ``qfacade`` console script::

    qfacade version --format json
    qfacade backends
    qfacade config
    qfacade demo bell --shots 2000
    qfacade verify
"""

from __future__ import annotations

import logging

import click

from qfacade.cli._utils import echo, format_counts_table, print_json, print_table


logger = logging.getLogger(__name__)

_FORMAT_OPTION = click.option(
    "--format",
    "fmt",
    type=click.Choice(["pretty", "json"]),
    default="pretty",
    help="Output format.",
)


def _configure_logging(verbose: int) -> None:
    from qfacade.config import get_config

    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = getattr(logging, get_config().log_level, logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@click.group()
@click.option("--verbose", "-v", count=True, help="Increase log verbosity (-vv for debug).")
@click.version_option(package_name="qfacade", message="%(prog)s %(version)s")
@click.pass_context
def cli(ctx: click.Context, verbose: int) -> None:
    """qfacade: validated Qiskit facade."""
    ctx.ensure_object(dict)
    try:
        _configure_logging(verbose)
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e
    ctx.obj["verbose"] = verbose


@cli.command("version")
@_FORMAT_OPTION
def version_cmd(fmt: str) -> None:
    """Show qfacade, Qiskit and Aer versions."""
    from qfacade import __version__
    from qfacade.core import runtime_info
    from qfacade.errors import QFacadeError

    try:
        info = runtime_info()
    except QFacadeError as e:
        raise click.ClickException(str(e)) from e

    data = {"qfacade": __version__, **info.to_dict()}
    if fmt == "json":
        print_json(data)
        return

    echo(f"qfacade: {__version__}")
    echo(f"qiskit:  {info.qiskit_version}")
    echo(f"aer:     {info.aer_version or 'not installed'}")
    echo(f"python:  {info.python_version}")


@cli.command("backends")
@_FORMAT_OPTION
def backends_cmd(fmt: str) -> None:
    """List local Aer simulator backends."""
    from qfacade.core import list_available_backends
    from qfacade.errors import QFacadeError

    try:
        names = list_available_backends()
    except QFacadeError as e:
        raise click.ClickException(str(e)) from e

    if fmt == "json":
        print_json(names)
        return

    if not names:
        echo("No Aer backends available. Install with: pip install qiskit-aer")
        return
    print_table(["Backend"], [[n] for n in names], "Aer backends")


@cli.command("config")
@_FORMAT_OPTION
def config_cmd(fmt: str) -> None:
    """Show the effective configuration."""
    from qfacade.config import get_config

    try:
        data = get_config().to_dict()
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e

    if fmt == "json":
        print_json(data)
        return

    redaction = data.pop("redaction")
    rows = [[k, "-" if v is None else v] for k, v in data.items()]
    rows.append(["redaction", "enabled" if redaction["enabled"] else "disabled"])
    print_table(["Setting", "Value"], rows, "Configuration")


@cli.command("demo")
@click.argument("name", type=click.Choice(["bell", "hello", "ghz"]))
@click.option("--shots", "-s", type=click.IntRange(min=1), default=None, help="Shots (default: config).")
@_FORMAT_OPTION
def demo_cmd(name: str, shots: int | None, fmt: str) -> None:
    """Run a demo circuit on the Aer simulator and print its counts."""
    from qfacade.demos import DEMOS
    from qfacade.errors import QFacadeError

    logger.info("Running demo %s (shots=%s)", name, shots)
    try:
        counts = DEMOS[name](shots)
    except QFacadeError as e:
        raise click.ClickException(str(e)) from e

    if fmt == "json":
        print_json({"demo": name, "counts": counts})
        return

    echo(format_counts_table(counts))


@cli.command("verify")
@_FORMAT_OPTION
def verify_cmd(fmt: str) -> None:
    """Check the installation by running a one-qubit circuit."""
    from qfacade.diagnostics import verify_installation

    report = verify_installation()

    if fmt == "json":
        print_json(report)
    else:
        rows = [
            [k, "-" if v is None else v]
            for k, v in report.items()
            if k not in ("status", "message")
        ]
        print_table(["Check", "Value"], rows, f"Installation: {report['status']}")
        echo(report["message"])

    if report["status"] != "success":
        raise click.ClickException(report.get("error", report["message"]))


def main() -> None:
    """Run the ``qfacade`` CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
