from datetime import time, timedelta
from decimal import Decimal

from pytollcalculator.models import Passage, PassageType
from pytollcalculator.windowing import build_windows

_HOUR = timedelta(minutes=60)


def _passage(value: str, fee: int) -> Passage:
    hour, minute = (int(part) for part in value.split(":"))
    return Passage(
        time=time(hour, minute),
        potential_fee=Decimal(fee),
        type=PassageType.UNKNOWN if fee else PassageType.EXEMPTION_NO_FEE_INTERVAL,
    )


def _times(windows) -> list[list[str]]:
    return [[f"{passage.time:%H:%M}" for passage in window] for window in windows]


def test_build_windows_empty() -> None:
    assert build_windows([], _HOUR) == ()


def test_build_windows_single_passage() -> None:
    passage = _passage("08:00", 13)
    assert build_windows([passage], _HOUR) == ((passage,),)


def test_build_windows_anchor_is_first_passage() -> None:
    passages = [_passage("06:00", 8), _passage("06:40", 13), _passage("07:05", 18)]
    windows = build_windows(passages, _HOUR)
    assert _times(windows) == [["06:00", "06:40"], ["07:05"]]


def test_build_windows_duration_reached_starts_new_window() -> None:
    passages = [_passage("06:00", 8), _passage("07:00", 18)]
    assert _times(build_windows(passages, _HOUR)) == [["06:00"], ["07:00"]]


def test_build_windows_just_under_duration_merges() -> None:
    passages = [_passage("06:00", 8), _passage("06:59", 13)]
    assert _times(build_windows(passages, _HOUR)) == [["06:00", "06:59"]]


def test_build_windows_no_fee_passage_splits() -> None:
    passages = [_passage("17:30", 8), _passage("18:00", 0), _passage("18:10", 0)]
    assert _times(build_windows(passages, _HOUR)) == [["17:30"], ["18:00"], ["18:10"]]


def test_build_windows_no_fee_passage_resets_anchor() -> None:
    passages = [
        _passage("06:00", 8),
        _passage("06:10", 0),
        _passage("06:50", 13),
        _passage("07:20", 18),
    ]
    windows = build_windows(passages, _HOUR)
    assert _times(windows) == [["06:00"], ["06:10"], ["06:50", "07:20"]]


def test_build_windows_partitions_input() -> None:
    passages = [
        _passage("05:50", 0),
        _passage("06:29", 8),
        _passage("06:31", 13),
        _passage("07:15", 18),
        _passage("07:40", 18),
        _passage("09:00", 8),
        _passage("18:30", 0),
    ]
    windows = build_windows(passages, _HOUR)
    assert [passage for window in windows for passage in window] == passages
    assert all(window for window in windows)
