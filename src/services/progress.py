from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Row progress for the mapping pass (tqdm, TTY only).

Without a TTY (CI, redirected output) no bar is created and the log stream
stays free of control sequences.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ProgressTracker:
    """One bar per source file, advanced by ``map_data``'s ``on_row`` hook.

    ``finish`` puts the number of rows with warnings into the postfix before
    the bar is removed.
    """

    def __init__(self, total_rows: int, *, source_name: str = "", description: str = "Mapping rows") -> None:
        self.total_rows = total_rows
        self.rows_done = 0
        self.description = f"{description} ({source_name})" if source_name else description

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None = None
        if self.enabled:
            self.pbar = tqdm(
                total=total_rows,
                desc=self.description,
                unit="row",
                leave=False,
                mininterval=0.2,
                ncols=80,
                ascii=True,
            )

    def advance(self, _index: int | None = None) -> None:
        self.rows_done += 1
        if self.pbar is not None:
            self.pbar.update(1)

    def finish(self, warning_rows: int) -> None:
        if self.pbar is not None:
            self.pbar.set_postfix(warnings=warning_rows, refresh=True)
        self.close()

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
