from datetime import date, datetime

import pytest

from timetrack.domains.time_tracking.validity import (
    CellStatus,
    EmploymentWindow,
    ViewMode,
    cell_status,
    classify,
    classify_month,
)

TODAY = date(2024, 6, 20)


def window(start, end=None):
    return EmploymentWindow(start_date=start, end_date=end)


@pytest.mark.parametrize("day", [date(2024, 6, 1), date(2024, 6, 2), date(2024, 6, 15), date(2024, 6, 16)])
def test_weekend_is_never_editable_or_countable(day):
    result = classify(window(date(2020, 1, 1)), day, TODAY, ViewMode.EDIT, hours=8)

    assert result.status is CellStatus.WEEKEND
    assert not result.editable
    assert not result.countable


def test_weekend_wins_over_employment_rules():
    assert cell_status(window(date(2024, 6, 10)), date(2024, 6, 1), TODAY) is CellStatus.WEEKEND
    assert cell_status(window(date(2020, 1, 1), date(2024, 5, 31)), date(2024, 6, 8), TODAY) is CellStatus.WEEKEND


def test_future_day_is_read_only_and_not_counted():
    result = classify(window(date(2020, 1, 1)), date(2024, 6, 21), TODAY, ViewMode.EDIT, hours=8)

    assert result.status is CellStatus.FUTURE
    assert not result.editable
    assert not result.countable


def test_future_wins_over_termination():
    employee = window(date(2020, 1, 1), date(2024, 6, 10))

    assert cell_status(employee, date(2024, 6, 24), TODAY) is CellStatus.FUTURE


def test_today_is_editable_regardless_of_time_of_day():
    employee = window(date(2020, 1, 1))

    result = classify(employee, datetime(2024, 6, 20, 23, 59), datetime(2024, 6, 20, 0, 1), ViewMode.EDIT)

    assert result.status is CellStatus.OK
    assert result.editable


def test_start_date_is_inclusive():
    employee = window(date(2024, 6, 4))

    assert classify(employee, date(2024, 6, 4), TODAY, ViewMode.EDIT).editable
    before = classify(employee, date(2024, 6, 3), TODAY, ViewMode.EDIT)
    assert before.status is CellStatus.BEFORE_EMPLOYMENT
    assert not before.editable


def test_end_date_is_inclusive():
    employee = window(date(2024, 1, 1), date(2024, 6, 14))

    assert classify(employee, date(2024, 6, 14), TODAY, ViewMode.EDIT).editable
    after = classify(employee, date(2024, 6, 17), TODAY, ViewMode.EDIT)
    assert after.status is CellStatus.AFTER_TERMINATION
    assert not after.editable


def test_termination_mid_june_2024():
    # the 15th and 16th fall on a weekend, so the window edge shows on the
    # surrounding weekdays
    employee = window(date(2024, 1, 1), date(2024, 6, 15))

    assert employee.covers(date(2024, 6, 15))
    assert not employee.covers(date(2024, 6, 16))
    assert cell_status(employee, date(2024, 6, 14), TODAY) is CellStatus.OK
    assert cell_status(employee, date(2024, 6, 15), TODAY) is CellStatus.WEEKEND
    assert cell_status(employee, date(2024, 6, 17), TODAY) is CellStatus.AFTER_TERMINATION


def test_open_ended_employment_only_limited_by_today():
    employee = window(date(2001, 3, 1))

    assert cell_status(employee, date(2024, 6, 19), TODAY) is CellStatus.OK
    assert cell_status(employee, date(2030, 6, 19), TODAY) is CellStatus.FUTURE


def test_display_mode_never_editable():
    result = classify(window(date(2020, 1, 1)), date(2024, 6, 3), TODAY, ViewMode.DISPLAY, hours=8)

    assert result.status is CellStatus.OK
    assert not result.editable
    assert result.countable


def test_countable_needs_a_recorded_value():
    employee = window(date(2020, 1, 1))

    assert not classify(employee, date(2024, 6, 3), TODAY, "edit").countable
    assert classify(employee, date(2024, 6, 3), TODAY, "edit", hours=0).countable


def test_unknown_mode_is_rejected():
    with pytest.raises(ValueError):
        classify(window(date(2020, 1, 1)), date(2024, 6, 3), TODAY, "review")


def test_window_accepts_orm_like_objects():
    class Row:
        start_date = datetime(2024, 3, 10, 9, 30)
        end_date = None

    employee = EmploymentWindow.of(Row())

    assert employee == EmploymentWindow(start_date=date(2024, 3, 10))


def test_hired_mid_march_2024():
    cells = classify_month(window(date(2024, 3, 10)), 2024, 2, TODAY, ViewMode.EDIT)

    assert len(cells) == 31
    for cell in cells[:9]:
        assert not cell.editable
        expected = CellStatus.WEEKEND if cell.is_weekend else CellStatus.BEFORE_EMPLOYMENT
        assert cell.status is expected
    for cell in cells[9:]:
        assert cell.editable is (not cell.is_weekend)
    # the 10th itself is a Sunday
    assert cells[9].status is CellStatus.WEEKEND
    assert cells[10].status is CellStatus.OK


def test_classify_month_attaches_recorded_hours():
    cells = classify_month(window(date(2020, 1, 1)), 2024, 5, TODAY, ViewMode.DISPLAY, {3: 7.5, 21: 4})

    by_day = {cell.day: cell for cell in cells}
    assert len(cells) == 30
    assert by_day[3].hours == 7.5
    assert by_day[3].countable
    assert by_day[21].hours == 4
    assert by_day[21].status is CellStatus.FUTURE
    assert not by_day[21].countable
    assert by_day[4].hours is None


def test_window_overlaps_month():
    assert window(date(2024, 6, 30)).overlaps_month(2024, 5)
    assert window(date(2020, 1, 1), date(2024, 6, 1)).overlaps_month(2024, 5)
    assert not window(date(2024, 7, 1)).overlaps_month(2024, 5)
    assert not window(date(2020, 1, 1), date(2024, 5, 31)).overlaps_month(2024, 5)
