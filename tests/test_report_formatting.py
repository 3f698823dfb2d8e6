from datetime import datetime, timedelta
from routes.analytics import format_duration, percentage, round_half_up, window_start


def test_format_duration():
    assert format_duration(0) == "0m 0s"
    assert format_duration(125) == "2m 5s"
    assert format_duration(59.6) == "1m 0s"


def test_percentage_bounds():
    assert percentage(1, 0) == 0.0
    assert percentage(3, 2) == 100.0
    assert round_half_up(percentage(1, 8)) == 13


def test_unknown_time_range_falls_back_to_seven_days():
    now = datetime(2025, 1, 10)
    assert window_start("bogus", now) == now - timedelta(days=7)
    assert window_start("30d", now) == now - timedelta(days=30)
