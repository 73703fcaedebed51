"""Command line entry point for the top-contributors application."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import click
import marshmallow as ma
import structlog

from top_contributors.data import ExtractionParams, ExtractionParamsSchema, InputType, PivotTable
from top_contributors.data.check import check_file
from top_contributors.data.files import (
    ReportPaths,
    default_output_template,
    ensure_parent_directory,
    history_filename,
    resolve_output_name,
)
from top_contributors.errors import ExtractionError, IdentityNotFoundError, TableFormatError
from top_contributors.logging import configure_logging
from top_contributors.output import write_csv, write_history, write_markdown
from top_contributors.pipeline import run_comparison, run_extraction

OUT_HELP = (
    'Output file name. Defaults to "top-<type>_YYYY-MM.csv" where YYYY-MM is the requested '
    'month. Using the ".md" extension generates a Markdown file.'
)
TYPE_HELP = "Kind of activity counted in the pivot table. May also be set via TOPC_INPUT_TYPE."
HISTORY_HELP = "Also write the full monthly history of the top users with one chart per user."

LOG_FORMAT_CHOICES = ("console", "json")
LOG_LEVEL_CHOICES = ("critical", "error", "warning", "info", "debug")
INPUT_TYPE_CHOICES = tuple(member.value for member in InputType)

REPORT_ERRORS = (TableFormatError, ExtractionError, IdentityNotFoundError, OSError, ValueError)

logger = structlog.get_logger(__name__)


def _report_options(func):
    """Attach the options shared by ``extract`` and ``compare``."""
    options = [
        click.option("--out", "-o", "output", default=None, help=OUT_HELP),
        click.option(
            "--top-size",
            "-t",
            type=int,
            default=35,
            show_default=True,
            help="Number of top users to extract (ties at the cut-off are included).",
        ),
        click.option(
            "--period",
            "-p",
            type=int,
            default=12,
            show_default=True,
            help="Number of months to accumulate. 0 uses every available month.",
        ),
        click.option(
            "--month",
            "-m",
            "end_month",
            default="latest",
            show_default=True,
            help='Last month of the period ("YYYY-MM" or "latest").',
        ),
        click.option(
            "--type",
            "input_type",
            type=click.Choice(INPUT_TYPE_CHOICES, case_sensitive=False),
            envvar="TOPC_INPUT_TYPE",
            default=InputType.SUBMITTERS.value,
            show_default=True,
            help=TYPE_HELP,
        ),
        click.option("--history", is_flag=True, default=False, help=HISTORY_HELP),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _format_validation_errors(messages: Mapping[str, object] | list[str]) -> str:
    if isinstance(messages, Mapping):
        parts = []
        for key, value in messages.items():
            detail = " ".join(value) if isinstance(value, list) else str(value)
            parts.append(f"{key}: {detail}")
        return "; ".join(parts)
    return " ".join(messages)


def _load_params(
    *,
    end_month: str,
    period: int,
    top_size: int,
    offset: int = 0,
) -> ExtractionParams:
    """Validate raw option values into :class:`ExtractionParams`."""
    try:
        return ExtractionParamsSchema().load(
            {
                "end_month": end_month,
                "period_months": period,
                "offset_months": offset,
                "top_size": top_size,
            }
        )
    except ma.ValidationError as exc:
        raise click.BadParameter(_format_validation_errors(exc.messages)) from exc


def _check_input(input_path: Path) -> None:
    """Run the structural checker and turn its failures into CLI errors."""
    try:
        check_file(input_path)
    except (ValueError, OSError) as exc:
        logger.error("check.failed", input=str(input_path), error=str(exc))
        raise click.ClickException(f"Invalid input file {input_path}: {exc}") from exc


def _resolve_paths(
    output: str | None,
    input_type: InputType,
    end_month: str,
    *,
    history: bool,
    is_compare: bool,
) -> ReportPaths:
    """Compute the report (and optional history) file names and check their directory."""
    name = resolve_output_name(output or default_output_template(input_type), input_type, end_month)
    try:
        ensure_parent_directory(name)
    except FileNotFoundError as exc:
        raise click.BadParameter(str(exc), param_hint="--out") from exc
    history_path = history_filename(name, input_type, is_compare=is_compare) if history else None
    return ReportPaths(output=Path(name), history=history_path)


def _write_report(
    paths: ReportPaths,
    rows: list[list[str]],
    *,
    table: PivotTable,
    input_type: InputType,
    introduction: str,
) -> None:
    """Write the ranked rows, plus history and charts when requested."""
    link_dir = None
    if paths.history is not None:
        write_history(paths.history, rows, table, input_type=input_type)
        click.echo(f"Wrote history to {paths.history}")
        link_dir = input_type.plot_dir
    if paths.is_markdown:
        write_markdown(rows, paths.output, introduction=introduction, link_dir=link_dir)
    else:
        write_csv(rows, paths.output)
    click.echo(f"Wrote {len(rows) - 1} rows to {paths.output}")


def _extract_introduction(input_type: InputType, params: ExtractionParams, end_month: str) -> str:
    label = input_type.value
    role = "non-bot PR creators" if input_type is InputType.SUBMITTERS else "non-bot commenters"
    return (
        f"# Top {label.capitalize()}\n"
        f"\nExtraction of the {params.top_size} top {label} ({role}) \n"
        f'over the {params.period_months} months before "{end_month}".\n\n'
    )


def _compare_introduction(
    input_type: InputType,
    params: ExtractionParams,
    end_month: str,
    compare_with: int,
) -> str:
    label = input_type.value
    return (
        f"# Top {label.capitalize()} evolution\n"
        f"\nComparison of the {params.top_size} top {label} over the {params.period_months} "
        f'months before "{end_month}" \n'
        f"with the same extraction {compare_with} months earlier.\n\n"
    )


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVEL_CHOICES, case_sensitive=False),
    envvar="TOPC_LOG_LEVEL",
    default="info",
    show_default=True,
    help="Verbosity for structured logs.",
)
@click.option(
    "--log-format",
    type=click.Choice(LOG_FORMAT_CHOICES, case_sensitive=False),
    envvar="TOPC_LOG_FORMAT",
    default="console",
    show_default=True,
    help="Render logs as console-friendly text or JSON.",
)
@click.pass_context
def cli(ctx: click.Context, log_level: str, log_format: str) -> None:
    """Rank top submitters and commenters from monthly activity pivot tables."""
    configure_logging(level=log_level, json_output=log_format.lower() == "json")
    ctx.ensure_object(dict)
    ctx.obj.update({"log_level": log_level.lower()})
    logger.bind(command_group="top-contributors").debug(
        "cli.initialized",
        log_level=log_level.lower(),
        log_format=log_format.lower(),
    )


@cli.command("check")
@click.argument("input_file", type=click.Path(dir_okay=False, path_type=Path))
def check(input_file: Path) -> None:
    """Validate the structure of a pivot table file."""
    cmd_log = logger.bind(command="check", input=str(input_file))
    cmd_log.info("command.start")
    _check_input(input_file)
    click.echo(f"{input_file} is a valid pivot table.")
    cmd_log.info("command.completed")


@cli.command("extract")
@click.argument("input_file", type=click.Path(dir_okay=False, path_type=Path))
@_report_options
def extract_command(
    *,
    input_file: Path,
    output: str | None,
    top_size: int,
    period: int,
    end_month: str,
    input_type: str,
    history: bool,
) -> None:
    """Extract the top users of the pivot table over the requested period.

    The period is counted backwards from the requested month (the last month
    available by default). Users tied with the last selected one are included.
    """
    kind = InputType(input_type.lower())
    params = _load_params(end_month=end_month, period=period, top_size=top_size)
    cmd_log = logger.bind(command="extract", input=str(input_file), input_type=kind.value)
    cmd_log.info("command.start", **ExtractionParamsSchema().dump(params))
    _check_input(input_file)
    paths = _resolve_paths(output, kind, end_month, history=history, is_compare=False)

    try:
        extraction = run_extraction(input_file, params, input_type=kind)
        window = extraction.ranked.window
        click.echo(
            f"Accumulating data between {window.start_month} and {window.end_month} "
            f"(columns {window.start_column} and {window.end_column})"
        )
        _write_report(
            paths,
            extraction.ranked.to_rows(),
            table=extraction.table,
            input_type=kind,
            introduction=_extract_introduction(kind, params, extraction.end_month),
        )
    except REPORT_ERRORS as exc:
        cmd_log.error("command.failed", error=str(exc))
        raise click.ClickException(f"Failed to extract data: {exc}") from exc
    cmd_log.info("command.completed", output=str(paths.output), rows=len(extraction.ranked))


@cli.command("compare")
@click.argument("input_file", type=click.Path(dir_okay=False, path_type=Path))
@_report_options
@click.option(
    "--compare",
    "-c",
    "compare_with",
    type=int,
    default=3,
    show_default=True,
    help="Number of months back to compare with.",
)
def compare_command(
    *,
    input_file: Path,
    output: str | None,
    top_size: int,
    period: int,
    end_month: str,
    input_type: str,
    history: bool,
    compare_with: int,
) -> None:
    """Compare the top users with the same extraction a number of months earlier.

    Users absent from the older extraction are flagged "new"; users that
    dropped out of the ranking are listed as "churned".
    """
    kind = InputType(input_type.lower())
    if compare_with < 0:
        raise click.BadParameter("must be zero or a positive integer.", param_hint="--compare")
    params = _load_params(end_month=end_month, period=period, top_size=top_size)
    cmd_log = logger.bind(command="compare", input=str(input_file), input_type=kind.value)
    cmd_log.info("command.start", compare_with=compare_with, **ExtractionParamsSchema().dump(params))
    _check_input(input_file)
    paths = _resolve_paths(output, kind, end_month, history=history, is_compare=True)

    try:
        comparison = run_comparison(input_file, params, compare_with, input_type=kind)
        end_label = comparison.recent.window.end_month if comparison.recent.window else end_month
        _write_report(
            paths,
            comparison.result.to_rows(),
            table=comparison.table,
            input_type=kind,
            introduction=_compare_introduction(kind, params, end_label, compare_with),
        )
    except REPORT_ERRORS as exc:
        cmd_log.error("command.failed", error=str(exc))
        raise click.ClickException(f"Failed to compare data: {exc}") from exc
    cmd_log.info("command.completed", output=str(paths.output), rows=len(comparison.result.entries))


if __name__ == "__main__":
    cli()
