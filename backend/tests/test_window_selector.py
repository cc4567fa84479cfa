from datetime import date

import pytest

from app.services.window_selector import WINDOW_DAYS, resolve_window


@pytest.mark.parametrize(
    "range_name, expected_start",
    [
        ("week", date(2024, 3, 8)),
        ("month", date(2024, 2, 14)),
        ("year", date(2023, 3, 16)),
    ],
)
def test_resolve_window_ends_on_as_of(range_name, expected_start):
    as_of = date(2024, 3, 15)
    start, end = resolve_window(range_name, as_of)
    assert end == as_of
    assert start == expected_start
    assert (end - start).days == WINDOW_DAYS[range_name]


def test_unknown_range_fails_fast():
    with pytest.raises(ValueError) as excinfo:
        resolve_window("fortnight", date(2024, 3, 15))
    assert "fortnight" in str(excinfo.value)
