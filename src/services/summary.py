from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering.

Format:
SUMMARY rows={rows} warning_rows={warning_rows} sender_warnings={n}
exported={scope}:{count}[,{scope}:{count}...] elapsed_sec={elapsed}

``exported=-`` when nothing was written.
"""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # 指数表記を避ける
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.2f}".rstrip("0").rstrip(".")


def render_summary_line(result: ProcessingResult) -> str:
    """Render the SUMMARY line for a finished run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> r = ProcessingResult(
        ...     source_file="a.csv", total_rows=3, warning_rows=1, sender_warnings=0,
        ...     start_time=t, end_time=t, elapsed_seconds=0.0,
        ... )
        >>> render_summary_line(r)
        'SUMMARY rows=3 warning_rows=1 sender_warnings=0 exported=- elapsed_sec=0'
    """
    exported = ",".join(f"{e.scope}:{e.address_rows}" for e in result.exports) or "-"
    return (
        f"SUMMARY rows={result.total_rows} "
        f"warning_rows={result.warning_rows} "
        f"sender_warnings={result.sender_warnings} "
        f"exported={exported} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
