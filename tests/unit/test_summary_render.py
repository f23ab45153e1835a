from __future__ import annotations

from datetime import UTC, datetime

import pytest

from src.models.processing_result import ExportStat, ProcessingResult
from src.services.summary import _format_seconds, render_summary_line

T = datetime(2024, 1, 1, tzinfo=UTC)


def _result(**kw) -> ProcessingResult:
    base = dict(source_file="a.csv", total_rows=2, warning_rows=0, sender_warnings=0,
                start_time=T, end_time=T, elapsed_seconds=1.5)
    base.update(kw)
    return ProcessingResult(**base)


def test_render_with_exports():
    result = _result(exports=[
        ExportStat("local", "out/mapped_addresses_germany.csv", 1, 100),
        ExportStat("international", "out/mapped_addresses_international.csv", 1, 90),
    ])
    assert render_summary_line(result) == (
        "SUMMARY rows=2 warning_rows=0 sender_warnings=0 "
        "exported=local:1,international:1 elapsed_sec=1.5"
    )


def test_render_without_exports():
    assert "exported=-" in render_summary_line(_result())


@pytest.mark.parametrize("value,expected", [
    (0, "0"),
    (2.0, "2"),
    (1.234, "1.23"),
    (0.5, "0.5"),
    (0.0012, "0.0012"),
])
def test_format_seconds(value, expected):
    assert _format_seconds(value) == expected


def test_has_warnings():
    assert not _result().has_warnings
    assert _result(warning_rows=1).has_warnings
    assert _result(sender_warnings=1).has_warnings
