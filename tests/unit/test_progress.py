from __future__ import annotations

from unittest.mock import MagicMock, patch

from src.services.progress import ProgressTracker


def test_no_bar_without_tty():
    """非 TTY では tqdm を生成しない (行数だけ数える)。"""
    with patch("src.services.progress.is_tty_enabled", return_value=False), \
            patch("src.services.progress.tqdm") as mock_tqdm:
        with ProgressTracker(3, source_name="a.csv") as tracker:
            for i in range(3):
                tracker.advance(i)
            tracker.finish(1)
    mock_tqdm.assert_not_called()
    assert tracker.rows_done == 3
    assert tracker.pbar is None


def test_bar_with_tty():
    bar = MagicMock()
    with patch("src.services.progress.is_tty_enabled", return_value=True), \
            patch("src.services.progress.tqdm", return_value=bar) as mock_tqdm:
        tracker = ProgressTracker(2, source_name="addresses.xlsx")
        tracker.advance(0)
        tracker.advance(1)
        tracker.finish(1)

    kwargs = mock_tqdm.call_args.kwargs
    assert kwargs["total"] == 2
    assert kwargs["unit"] == "row"
    assert kwargs["desc"] == "Mapping rows (addresses.xlsx)"
    assert bar.update.call_count == 2
    bar.set_postfix.assert_called_once_with(warnings=1, refresh=True)
    bar.close.assert_called_once()
    assert tracker.pbar is None


def test_close_is_idempotent():
    bar = MagicMock()
    with patch("src.services.progress.is_tty_enabled", return_value=True), \
            patch("src.services.progress.tqdm", return_value=bar):
        with ProgressTracker(1) as tracker:
            assert tracker.description == "Mapping rows"
        tracker.close()
    bar.close.assert_called_once()
