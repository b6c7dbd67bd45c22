import math

import pytest

from salarylens.compute import (
    DISPLAY_INFLATION_CAP,
    build_rows,
    clamp_what_if_pct,
    compute_series,
    summarize,
)
from salarylens.models import AlignedDataset

TOL = 1e-9


def _mk_dataset(inflation: list[float], usdtry: list[float] | None = None) -> AlignedDataset:
    n = len(inflation)
    months = tuple(f"2024-{i + 1:02d}" for i in range(n))
    return AlignedDataset(
        months=months,
        inflation_pct=tuple(float(v) for v in inflation),
        usdtry=tuple(float(v) for v in (usdtry or [30.0] * n)),
    )


def _close(actual, expected):
    assert len(actual) == len(expected)
    for a, e in zip(actual, expected):
        assert math.isclose(a, e, rel_tol=0, abs_tol=TOL), (actual, expected)


def test_cpi_chain_for_zero_then_ten_percent():
    s = compute_series(_mk_dataset([0, 10, 10], [30, 30, 30]), 100, 0, 0)
    _close(s.cpi, [100, 110, 121])
    _close(s.cum_inflation, [0, 0.1, 0.21])
    _close(s.required_salary, [100, 110, 121])
    _close(s.actual_salary, [100, 100, 100])
    _close(s.usd_salary, [100 / 30] * 3)


def test_first_month_rate_is_part_of_the_chain():
    s = compute_series(_mk_dataset([5]), 1000, 0, 0)
    _close(s.cpi, [105])
    _close(s.required_salary, [1050])


def test_required_raise_today_equals_cumulative_inflation_without_raise():
    s = compute_series(_mk_dataset([2.5, -1, 3.75, 40]), 42_000, 0, 2)
    assert math.isclose(s.required_raise_today_pct, s.cum_inflation[-1], abs_tol=1e-12)


def test_what_if_raise_is_a_step_from_the_raise_index():
    s = compute_series(_mk_dataset([1, 1, 1, 1]), 100, 50, 2)
    _close(s.actual_salary, [100, 100, 150, 150])


def test_raise_index_past_end_leaves_salary_flat_and_negative_index_means_zero():
    flat = compute_series(_mk_dataset([1, 1]), 100, 50, 5)
    _close(flat.actual_salary, [100, 100])
    all_raised = compute_series(_mk_dataset([1, 1]), 100, 50, -3)
    _close(all_raised.actual_salary, [150, 150])


def test_real_salary_and_gap():
    s = compute_series(_mk_dataset([0, 10, 10]), 100, 10, 1)
    # actual = [100, 110, 110]; CPI ratio = [1, 1.1, 1.21]
    _close(s.real_salary, [100, 100, 110 / 1.21])
    _close(s.gap_pct, [0, 0, 110 / 121 - 1])
    assert math.isclose(s.required_raise_today_pct, 121 / 110 - 1, abs_tol=TOL)


def test_usd_equivalent_uses_each_months_rate():
    s = compute_series(_mk_dataset([0, 0], [20, 40]), 100, 0, 0)
    _close(s.usd_salary, [5, 2.5])


def test_empty_dataset_is_rejected():
    with pytest.raises(ValueError):
        compute_series(AlignedDataset(), 100, 0, 0)


@pytest.mark.parametrize("salary", [0, -5, float("nan")])
def test_non_positive_salary_is_rejected(salary):
    with pytest.raises(ValueError):
        compute_series(_mk_dataset([1]), salary, 0, 0)


def test_compute_series_clamps_what_if_pct():
    s = compute_series(_mk_dataset([1, 1]), 100, 500, 0)
    _close(s.actual_salary, [300, 300])
    with pytest.raises(ValueError):
        compute_series(_mk_dataset([1]), 100, float("nan"), 0)


def test_clamp_what_if_pct():
    assert clamp_what_if_pct(-10) == 0
    assert clamp_what_if_pct(35.5) == 35.5
    assert clamp_what_if_pct(250) == 200
    with pytest.raises(ValueError):
        clamp_what_if_pct(float("nan"))


def test_build_rows_caps_inflation_for_display_only():
    ds = AlignedDataset(
        months=("2024-01", "2024-02"), inflation_pct=(60.0, -2.0), usdtry=(30.0, 31.0)
    )
    s = compute_series(ds, 100, 0, 0)
    rows = build_rows(ds, s)

    assert rows[0].inflation_pct == DISPLAY_INFLATION_CAP
    assert rows[0].inflation_pct_raw == 60.0
    assert rows[0].capped
    assert not rows[1].capped
    # Computation still used the raw rate.
    assert math.isclose(rows[0].cpi, 160.0, abs_tol=TOL)
    assert rows[1].usdtry == 31.0
    assert rows[1].nominal == 100


def test_summarize_reports_latest_values():
    s = compute_series(_mk_dataset([0, 10, 10], [30, 30, 25]), 100, 0, 0)
    summary = summarize(s)
    assert math.isclose(summary.cum_inflation_latest, 0.21, abs_tol=TOL)
    assert math.isclose(summary.required_raise_today_pct, 0.21, abs_tol=TOL)
    assert math.isclose(summary.usd_salary_latest, 4.0, abs_tol=TOL)
    assert math.isclose(summary.purchasing_power_gap_pct, 100 / 121 - 1, abs_tol=TOL)
