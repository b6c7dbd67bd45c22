"""CLI for the ``salarylens`` package.

Typer-based console interface over :mod:`salarylens.api`. Environment
variables are loaded from a local ``.env`` with ``python-dotenv`` before any
command runs; payload locations default to the settings in
:mod:`salarylens.config`. Business logic lives in ``salarylens.api`` and the
modules it composes; this module only reads input, renders output and maps
failures to exit codes.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .api import DatasetSnapshot, export_csv, run_scenario, try_load_dataset
from .config import Settings
from .ingest import read_payloads
from .locale_numbers import parse_salary
from .logging_setup import configure_logging
from .models import Scenario, ScenarioResult
from .results import Err

app = typer.Typer(
    name="salarylens",
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Compare a salary against compounded inflation and its USD value. "
        "Loads settings from a local .env before running."
    ),
)
console = Console()
err_console = Console(stderr=True)


InflationOpt = Annotated[
    str | None,
    typer.Option(
        "--inflation",
        help="Inflation JSON file path or URL (default: SALARYLENS_INFLATION_DATA).",
    ),
]
UsdtryOpt = Annotated[
    str | None,
    typer.Option(
        "--usdtry",
        help="USD/TRY JSON file path or URL (default: SALARYLENS_USDTRY_DATA).",
    ),
]
SourceOpt = Annotated[
    str | None,
    typer.Option(
        "--source",
        help="Preferred inflation source: tuik, enag or avg (default: SALARYLENS_SOURCE).",
    ),
]
SalaryOpt = Annotated[
    str,
    typer.Option("--salary", help="Monthly salary in TRY, e.g. 100000 or 100.000,50."),
]
StartMonthOpt = Annotated[
    str | None,
    typer.Option("--start-month", help="Month of the last raise (YYYY-MM); baseline month."),
]
WhatIfMonthOpt = Annotated[
    str | None,
    typer.Option("--what-if-month", help="Month a hypothetical raise takes effect (YYYY-MM)."),
]
WhatIfPctOpt = Annotated[
    float,
    typer.Option("--what-if-pct", help="Hypothetical raise in percent, clamped to 0..200."),
]


# ---- Small module-level helpers used by CLI commands -------------------------


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)
    return typer.Exit(1)


def _load_snapshot(
    inflation: str | None, usdtry: str | None, source: str | None
) -> DatasetSnapshot:
    """Read both payloads and run validation + alignment, exiting on failure."""

    try:
        settings = Settings.from_env()
    except ValidationError as e:
        raise _fail(f"invalid settings: {e.errors()[0]['msg']}") from e

    inflation_loc = inflation or settings.inflation_data
    usdtry_loc = usdtry or settings.usdtry_data
    if not inflation_loc:
        raise _fail("no inflation data given (use --inflation or SALARYLENS_INFLATION_DATA).")
    if not usdtry_loc:
        raise _fail("no USD/TRY data given (use --usdtry or SALARYLENS_USDTRY_DATA).")

    try:
        inflation_text, usdtry_text = asyncio.run(
            read_payloads(inflation_loc, usdtry_loc, timeout=settings.http_timeout)
        )
    except FileNotFoundError as e:
        raise _fail(f"File not found: {e.filename}") from e
    except PermissionError as e:
        raise _fail(f"Permission denied: {e.filename}") from e
    except (RuntimeError, UnicodeDecodeError) as e:
        raise _fail(str(e)) from e
    except OSError as e:
        raise _fail(f"failed to read payload: {e}") from e

    result = try_load_dataset(inflation_text, usdtry_text, source=source or settings.source)
    if isinstance(result, Err):
        raise _fail(f"{result.kind}: {result.message}")

    snapshot = result.value
    if snapshot.warning:
        err_console.print(f"[yellow]Warning:[/yellow] {escape(snapshot.warning)}", soft_wrap=True)
    if snapshot.dataset.is_empty:
        raise _fail("No overlapping months after alignment.")
    return snapshot


def _build_scenario(
    salary: str, start_month: str | None, what_if_month: str | None, what_if_pct: float
) -> Scenario:
    amount = parse_salary(salary)
    if amount is None or amount <= 0:
        raise _fail("Please enter a positive monthly salary (TRY).")
    try:
        return Scenario(
            salary=amount,
            start_month=start_month,
            what_if_month=what_if_month,
            what_if_pct=what_if_pct,
        )
    except ValidationError as e:
        raise _fail(e.errors()[0]["msg"]) from e


def _run(snapshot: DatasetSnapshot, scenario: Scenario) -> ScenarioResult:
    try:
        return run_scenario(snapshot.dataset, scenario)
    except ValueError as e:
        raise _fail(str(e)) from e


def _fmt_try(v: float) -> str:
    # Turkish grouping: '.' thousands, ',' decimals.
    s = f"{v:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"₺{s}"


def _fmt_usd(v: float) -> str:
    return f"${v:,.2f}"


def _fmt_signed_pct(fraction: float) -> str:
    return f"{fraction * 100:+.2f}%"


def _render_result(result: ScenarioResult) -> None:
    table = Table(title="Monthly breakdown")
    for header in (
        "Month",
        "MoM Inflation",
        "CPI",
        "Cumulative",
        "Nominal",
        "Required",
        "Gap",
        "Real",
        "USD/TRY",
        "USD",
    ):
        table.add_column(header, justify="left" if header == "Month" else "right")

    for r in result.rows:
        infl = f"{r.inflation_pct:+.2f}%" + (" (capped)" if r.capped else "")
        table.add_row(
            r.month,
            infl,
            f"{r.cpi:,.2f}",
            _fmt_signed_pct(r.cum_inflation),
            _fmt_try(r.nominal),
            _fmt_try(r.required),
            _fmt_signed_pct(r.gap_pct),
            _fmt_try(r.real),
            f"{r.usdtry:.4f}",
            _fmt_usd(r.usd),
        )
    console.print(table)

    s = result.summary
    lines = [
        f"Total inflation: {s.cum_inflation_latest * 100:.1f}%",
        f"Required raise today: {s.required_raise_today_pct * 100:.1f}%",
        f"Salary in USD: {_fmt_usd(s.usd_salary_latest)}",
        f"Purchasing power vs base: {s.purchasing_power_gap_pct * 100:.1f}%",
    ]
    console.print(
        Panel(
            "\n".join(lines),
            title=f"{result.dataset.months[0]} … {result.dataset.months[-1]}",
            border_style="green",
        )
    )


# ---- Commands ----------------------------------------------------------------


@app.command("sources")
def sources_cmd(
    inflation: InflationOpt = None, usdtry: UsdtryOpt = None, source: SourceOpt = None
) -> None:
    """List the inflation sources found in the payload and the active one."""

    snapshot = _load_snapshot(inflation, usdtry, source)
    for key in snapshot.collection.available():
        series = snapshot.collection[key]
        marker = "*" if key == snapshot.source else " "
        console.print(
            f"{marker} {key.value}: {series.first_month} … {series.last_month} "
            f"({len(series)} months)",
            soft_wrap=True,
        )


@app.command("validate")
def validate_cmd(
    inflation: InflationOpt = None, usdtry: UsdtryOpt = None, source: SourceOpt = None
) -> None:
    """Validate both payloads and report the aligned month range."""

    snapshot = _load_snapshot(inflation, usdtry, source)
    months = snapshot.dataset.months
    console.print(
        f"OK: source={snapshot.source.value} aligned {months[0]} … {months[-1]} "
        f"({len(months)} months)",
        soft_wrap=True,
    )


@app.command("compute")
def compute_cmd(
    salary: SalaryOpt,
    inflation: InflationOpt = None,
    usdtry: UsdtryOpt = None,
    source: SourceOpt = None,
    start_month: StartMonthOpt = None,
    what_if_month: WhatIfMonthOpt = None,
    what_if_pct: WhatIfPctOpt = 0.0,
) -> None:
    """Compute required, real and USD salary series and print them."""

    scenario = _build_scenario(salary, start_month, what_if_month, what_if_pct)
    snapshot = _load_snapshot(inflation, usdtry, source)
    _render_result(_run(snapshot, scenario))


@app.command("export-csv")
def export_csv_cmd(
    salary: SalaryOpt,
    inflation: InflationOpt = None,
    usdtry: UsdtryOpt = None,
    source: SourceOpt = None,
    start_month: StartMonthOpt = None,
    what_if_month: WhatIfMonthOpt = None,
    what_if_pct: WhatIfPctOpt = 0.0,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write CSV here instead of stdout.", dir_okay=False),
    ] = None,
) -> None:
    """Export the computed monthly rows as CSV."""

    scenario = _build_scenario(salary, start_month, what_if_month, what_if_pct)
    snapshot = _load_snapshot(inflation, usdtry, source)
    try:
        text = export_csv(snapshot.dataset, scenario)
    except ValueError as e:
        raise _fail(str(e)) from e

    if output is None:
        typer.echo(text, nl=False)
        return
    try:
        output.write_text(text, encoding="utf-8")
    except OSError as e:
        raise _fail(f"failed to write {output}: {e}") from e
    err_console.print(f"Wrote {len(text.splitlines()) - 1} rows to {escape(str(output))}")


@app.callback()
def _root(
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="Logging level (default: SALARYLENS_LOG_LEVEL or INFO)."),
    ] = None,
) -> None:
    """Root command.

    Loads ``.env`` from the current working directory (without overriding
    already-set variables) and configures package logging.
    """

    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level)


if __name__ == "__main__":  # pragma: no cover
    app()
