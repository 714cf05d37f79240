"""CLI interface for fibcat using Click."""

import logging
import sys

import click

from fibcat import __version__
from fibcat.config import ConfigFileError, build_config, load_file_config
from fibcat.errors import FibonacciError
from fibcat.pipeline import run_and_report
from fibcat.selector import Algorithm

_ALGORITHM_CHOICES = [a.value for a in Algorithm] + ["all"]
_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _collect_explicit_args(ctx: click.Context, **kwargs: object) -> dict[str, object]:
    """Return only the kwargs whose values were explicitly set on the command line."""
    explicit: dict[str, object] = {}
    for param_name, value in kwargs.items():
        source = ctx.get_parameter_source(param_name)
        if source is click.core.ParameterSource.COMMANDLINE:
            if param_name == "algorithm":
                explicit["algorithms"] = _resolve_algorithms(value)
            else:
                explicit[param_name] = value
    return explicit


def _resolve_algorithms(names: tuple[str, ...]) -> tuple[Algorithm, ...]:
    """Map CLI names to Algorithm members, expanding 'all' and dropping repeats."""
    resolved: list[Algorithm] = []
    for name in names:
        members = list(Algorithm) if name == "all" else [Algorithm.from_name(name)]
        for member in members:
            if member not in resolved:
                resolved.append(member)
    return tuple(resolved)


def _list_algorithms(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    for a in Algorithm:
        click.echo(f"{a.value:<10} {a.display_name}")
    ctx.exit()


@click.command()
@click.version_option(version=__version__, prog_name="fibcat")
@click.argument("indices", nargs=-1, type=click.IntRange(min=0))
@click.option(
    "-a",
    "--algorithm",
    multiple=True,
    type=click.Choice(_ALGORITHM_CHOICES, case_sensitive=False),
    help="Algorithm to use (repeatable, or 'all').  Default: doubling.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["human", "json"]),
    default="human",
    show_default=True,
    help="Output format.",
)
@click.option(
    "--strict-binet",
    is_flag=True,
    help="Fail instead of returning an inexact Binet result.",
)
@click.option(
    "--check",
    is_flag=True,
    help="Compare every result against dynamic programming.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "--list",
    is_flag=True,
    expose_value=False,
    is_eager=True,
    callback=_list_algorithms,
    help="List available algorithms and exit.",
)
@click.pass_context
def main(
    ctx,
    indices,
    algorithm,
    output_format,
    strict_binet,
    check,
    verbose,
):
    """Compute Fibonacci numbers with a choice of algorithms.

    Pass one or more non-negative INDICES.  Defaults to 10 if none are given.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=_LOG_FORMAT,
    )

    if not indices:
        indices = (10,)

    cli_overrides = _collect_explicit_args(
        ctx,
        algorithm=algorithm,
        output_format=output_format,
        strict_binet=strict_binet,
        check=check,
    )

    try:
        file_config = load_file_config()
    except ConfigFileError as exc:
        raise click.ClickException(str(exc)) from None

    config = build_config(cli_overrides, file_config)

    try:
        report = run_and_report(config, indices, out=sys.stdout)
    except FibonacciError as exc:
        raise click.ClickException(str(exc)) from None
    raise SystemExit(0 if report.ok else 1)
