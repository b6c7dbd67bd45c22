import asyncio

import pytest

from salarylens.ingest import read_payload_text, read_payloads


def test_read_payload_text_from_file(tmp_path):
    p = tmp_path / "usdtry.json"
    p.write_text('{"series": []}', encoding="utf-8")
    assert read_payload_text(p) == '{"series": []}'
    assert read_payload_text(str(p)) == '{"series": []}'


def test_missing_file_propagates(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_payload_text(tmp_path / "missing.json")


def test_read_payloads_returns_both_texts_in_order(tmp_path):
    infl = tmp_path / "inflation.json"
    fx = tmp_path / "usdtry.json"
    infl.write_text("inflation", encoding="utf-8")
    fx.write_text("usdtry", encoding="utf-8")

    assert asyncio.run(read_payloads(infl, fx)) == ("inflation", "usdtry")


def test_unreachable_url_is_reported_as_runtime_error():
    # Port 9 on localhost is not expected to accept connections.
    with pytest.raises(RuntimeError, match="Failed to fetch"):
        read_payload_text("http://127.0.0.1:9/inflation.json", timeout=2)
