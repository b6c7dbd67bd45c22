import csv
import io
from pathlib import Path

import pytest
from typer.testing import CliRunner

import salarylens.cli as cli_mod
from salarylens.cli import app

from tests.helpers.payloads import inflation_json, sourced_inflation_json, usdtry_json

runner = CliRunner()


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch: pytest.MonkeyPatch) -> None:
    # The real setup binds a handler to the first invocation's stderr for the
    # whole process; tests only care about command output.
    monkeypatch.setattr(cli_mod, "configure_logging", lambda level=None: None)


def _write_payloads(tmp_path: Path, inflation_text: str, usdtry_text: str) -> tuple[str, str]:
    infl = tmp_path / "inflation.json"
    fx = tmp_path / "usdtry.json"
    infl.write_text(inflation_text, encoding="utf-8")
    fx.write_text(usdtry_text, encoding="utf-8")
    return str(infl), str(fx)


def test_validate_reports_aligned_range(tmp_path):
    infl, fx = _write_payloads(
        tmp_path, inflation_json("2024-01", [1, 2, 3]), usdtry_json("2024-01", [30, 31, 32])
    )
    result = runner.invoke(app, ["validate", "--inflation", infl, "--usdtry", fx])
    assert result.exit_code == 0, result.output
    assert "2024-01 … 2024-03" in result.output
    assert "3 months" in result.output


def test_validate_reports_validation_error(tmp_path):
    bad = '{"series": [{"month": "2024-01", "inflationPct": 51}]}'
    infl, fx = _write_payloads(tmp_path, bad, usdtry_json("2024-01", [30]))
    result = runner.invoke(app, ["validate", "--inflation", infl, "--usdtry", fx])
    assert result.exit_code == 1
    assert "InvalidValue" in result.output


def test_missing_file_exits_with_error(tmp_path):
    result = runner.invoke(
        app,
        [
            "validate",
            "--inflation",
            str(tmp_path / "nope.json"),
            "--usdtry",
            str(tmp_path / "x.json"),
        ],
    )
    assert result.exit_code == 1
    assert "File not found" in result.output


def test_no_overlap_exits_with_warning(tmp_path):
    infl, fx = _write_payloads(
        tmp_path, inflation_json("2023-01", [1, 2]), usdtry_json("2024-06", [30, 31])
    )
    result = runner.invoke(app, ["validate", "--inflation", infl, "--usdtry", fx])
    assert result.exit_code == 1
    assert "No overlapping months" in result.output


def test_payload_locations_fall_back_to_env(tmp_path, monkeypatch):
    infl, fx = _write_payloads(
        tmp_path, inflation_json("2024-01", [1, 2]), usdtry_json("2024-01", [30, 31])
    )
    monkeypatch.setenv("SALARYLENS_INFLATION_DATA", infl)
    monkeypatch.setenv("SALARYLENS_USDTRY_DATA", fx)
    result = runner.invoke(app, ["validate"])
    assert result.exit_code == 0, result.output


def test_missing_locations_are_reported():
    result = runner.invoke(app, ["validate"])
    assert result.exit_code == 1
    assert "no inflation data given" in result.output


def test_sources_marks_active_source(tmp_path):
    infl, fx = _write_payloads(
        tmp_path,
        sourced_inflation_json(tuik=("2024-01", [1, 2]), enag=("2024-01", [3, 4])),
        usdtry_json("2024-01", [30, 31]),
    )
    result = runner.invoke(
        app, ["sources", "--inflation", infl, "--usdtry", fx, "--source", "enag"]
    )
    assert result.exit_code == 0, result.output
    lines = [ln.strip() for ln in result.output.splitlines() if ln.strip()]
    assert any(ln.startswith("* ENAG") for ln in lines)
    assert any(ln.startswith("TUIK") for ln in lines)
    assert any(ln.startswith("AVG") for ln in lines)


def test_compute_prints_summary(tmp_path):
    infl, fx = _write_payloads(
        tmp_path, inflation_json("2024-01", [0, 10, 10]), usdtry_json("2024-01", [30, 30, 30])
    )
    result = runner.invoke(
        app, ["compute", "--inflation", infl, "--usdtry", fx, "--salary", "100"]
    )
    assert result.exit_code == 0, result.output
    assert "Total inflation: 21.0%" in result.output
    assert "Required raise today: 21.0%" in result.output


def test_compute_rejects_bad_salary(tmp_path):
    infl, fx = _write_payloads(
        tmp_path, inflation_json("2024-01", [1]), usdtry_json("2024-01", [30])
    )
    result = runner.invoke(
        app, ["compute", "--inflation", infl, "--usdtry", fx, "--salary", "1,2,3"]
    )
    assert result.exit_code == 1
    assert "positive monthly salary" in result.output


def test_export_csv_writes_file(tmp_path):
    infl, fx = _write_payloads(
        tmp_path, inflation_json("2024-01", [0, 10, 10]), usdtry_json("2024-01", [30, 30, 30])
    )
    out = tmp_path / "out.csv"
    result = runner.invoke(
        app,
        [
            "export-csv",
            "--inflation",
            infl,
            "--usdtry",
            fx,
            "--salary",
            "100.000",
            "--start-month",
            "2024-02",
            "-o",
            str(out),
        ],
    )
    assert result.exit_code == 0, result.output
    rows = list(csv.reader(io.StringIO(out.read_text(encoding="utf-8"))))
    assert [r[0] for r in rows[1:]] == ["2024-02", "2024-03"]
    # Salary "100.000" is Turkish-formatted one hundred thousand.
    assert rows[1][4] == "100000.00"
    assert rows[1][5] == "110000.00"


def test_export_csv_to_stdout(tmp_path):
    infl, fx = _write_payloads(
        tmp_path, inflation_json("2024-01", [1]), usdtry_json("2024-01", [32])
    )
    result = runner.invoke(
        app, ["export-csv", "--inflation", infl, "--usdtry", fx, "--salary", "3200"]
    )
    assert result.exit_code == 0, result.output
    assert '"USD/TRY"' in result.output
    assert '"32.0000"' in result.output


def test_unreadable_payload_path_exits_with_error(tmp_path):
    _, fx = _write_payloads(
        tmp_path, inflation_json("2024-01", [1]), usdtry_json("2024-01", [30])
    )
    result = runner.invoke(app, ["validate", "--inflation", str(tmp_path), "--usdtry", fx])
    assert result.exit_code == 1
    assert "failed to read payload" in result.output


def test_huge_rate_is_reported_as_invalid_value(tmp_path):
    infl, fx = _write_payloads(
        tmp_path,
        inflation_json("2024-01", [1]),
        '{"series": [{"month": "2024-01", "usdtry": 1' + "0" * 400 + "}]}",
    )
    result = runner.invoke(app, ["validate", "--inflation", infl, "--usdtry", fx])
    assert result.exit_code == 1
    assert "InvalidValue" in result.output
