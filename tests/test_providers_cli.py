# Pytest test suite for the feeds and the `ycal` command:
#   - Static / Json holiday and vacation providers
#   - CountryHolidayProvider (workalendar, optional)
#   - cli.main through click's CliRunner
#
# Notes:
# - workalendar-backed tests assert stable invariants (1 January is a public
#   holiday) rather than full holiday lists.

from __future__ import annotations

import json
from datetime import date

import pytest
from click.testing import CliRunner

from year_calendar import (
    CalendarError,
    CountryHolidayProvider,
    Holiday,
    HolidayType,
    JsonHolidayProvider,
    JsonVacationProvider,
    MissingDependencyError,
    Period,
    StaticHolidayProvider,
    StaticVacationProvider,
    VacationDateType,
    YearCalendar,
)
from year_calendar.cli import main, render_day


# -------------------------
# Dependency gates
# -------------------------
def _has_workalendar() -> bool:
    try:
        import workalendar  # noqa: F401
        return True
    except Exception:
        return False


WORKALENDAR_OK = _has_workalendar()


# -------------------------
# Fixtures
# -------------------------
@pytest.fixture
def holidays_file(tmp_path):
    path = tmp_path / "holidays.json"
    path.write_text(json.dumps([
        {"date": "01-01-2024", "type": "holiday"},
        {"date": "02-01-2024", "type": "holiday"},
        {"date": "27-04-2024", "type": "weekend"},
        {"date": "01-01-2025", "type": "holiday"},
    ]), encoding="utf-8")
    return path


@pytest.fixture
def vacations_file(tmp_path):
    path = tmp_path / "vacations.json"
    path.write_text(json.dumps({
        "42": [
            {"date": "15-01-2024", "type": 0},
            {"date": "16-01-2024", "type": 1},
            {"date": "17-01-2024", "type": 3},
        ],
    }), encoding="utf-8")
    return path


# ============================================================
# 1) Providers
# ============================================================
def test_static_holiday_provider_filters_by_year() -> None:
    provider = StaticHolidayProvider([
        {"date": "01-01-2024", "type": "holiday"},
        Holiday("01-01-2025"),
    ])
    out = provider.get_holidays(2024)
    assert out == [Holiday("01-01-2024", HolidayType.HOLIDAY)]


def test_static_vacation_provider() -> None:
    provider = StaticVacationProvider({"7": [{"date": "03-03-2024", "type": "Planned"}]})
    out = provider.get_vacation_dates("7", 2024)
    assert len(out) == 1
    assert out[0].type == VacationDateType.PLANNED
    assert provider.get_vacation_dates("8", 2024) == []


def test_static_vacation_provider_is_hashable() -> None:
    provider = StaticVacationProvider({7: [{"date": "03-03-2024", "type": 0}]})
    assert hash(provider) == hash(StaticVacationProvider())
    assert isinstance(provider.vacation_dates["7"], tuple)
    assert provider.get_vacation_dates(7, 2024)[0].type == VacationDateType.PLANNED


def test_json_holiday_provider(holidays_file) -> None:
    out = JsonHolidayProvider(holidays_file).get_holidays(2024)
    assert [h.date for h in out] == ["01-01-2024", "02-01-2024", "27-04-2024"]
    assert out[2].type == HolidayType.WEEKEND


def test_json_vacation_provider_keyed_and_flat(vacations_file, tmp_path) -> None:
    keyed = JsonVacationProvider(vacations_file).get_vacation_dates("42", 2024)
    assert [v.type for v in keyed] == [
        VacationDateType.PLANNED, VacationDateType.SCHEDULE_USED, VacationDateType.RECALL,
    ]

    flat = tmp_path / "flat.json"
    flat.write_text(json.dumps([{"date": "01-06-2024", "type": 2}]), encoding="utf-8")
    out = JsonVacationProvider(flat).get_vacation_dates("anyone", 2024)
    assert out[0].type == VacationDateType.OFF_SCHEDULE_USED


def test_json_provider_rejects_non_list(tmp_path) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"date": "01-01-2024"}), encoding="utf-8")
    with pytest.raises(CalendarError, match="Expected a JSON list"):
        JsonHolidayProvider(path).get_holidays(2024)


def test_json_provider_rejects_incomplete_record(tmp_path) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([{"type": "holiday"}]), encoding="utf-8")
    with pytest.raises(CalendarError, match="Invalid holiday record"):
        JsonHolidayProvider(path).get_holidays(2024)


@pytest.mark.parametrize("record", ["15-01-2024", ["15-01-2024", 0], None])
def test_non_mapping_records_rejected_alike(tmp_path, record) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([record]), encoding="utf-8")
    with pytest.raises(CalendarError, match="Invalid holiday record"):
        JsonHolidayProvider(path).get_holidays(2024)
    with pytest.raises(CalendarError, match="Invalid vacation record"):
        JsonVacationProvider(path).get_vacation_dates("42", 2024)


def test_provider_feeds_year_calendar(holidays_file, vacations_file) -> None:
    cal = YearCalendar(
        2024,
        JsonHolidayProvider(holidays_file).get_holidays(2024),
        vacation_dates=JsonVacationProvider(vacations_file).get_vacation_dates("42", 2024),
    )
    assert cal.day("02-01-2024").holiday is True
    assert cal.day("27-04-2024").weekend is True
    assert cal.active_days(0) == 2


@pytest.mark.skipif(not WORKALENDAR_OK, reason="workalendar not installed")
def test_country_provider_new_year() -> None:
    out = CountryHolidayProvider("FR").get_holidays(2026)
    assert Holiday("01-01-2026") in out
    assert all(h.type == HolidayType.HOLIDAY for h in out)
    assert all(h.day.year == 2026 for h in out)


@pytest.mark.skipif(not WORKALENDAR_OK, reason="workalendar not installed")
def test_unknown_country_raises() -> None:
    with pytest.raises(CalendarError):
        CountryHolidayProvider("ZZ").get_holidays(2026)


@pytest.mark.skipif(WORKALENDAR_OK, reason="workalendar installed")
def test_country_provider_without_workalendar() -> None:
    with pytest.raises(MissingDependencyError):
        CountryHolidayProvider("FR").get_holidays(2026)


def test_period_days() -> None:
    days = list(Period("30-12-2024", "02-01-2025").days())
    assert days == [date(2024, 12, 30), date(2024, 12, 31), date(2025, 1, 1), date(2025, 1, 2)]


# ============================================================
# 2) CLI
# ============================================================
def test_render_day_markers() -> None:
    cal = YearCalendar(2024, [Holiday("01-01-2024"), Holiday("02-01-2024", "weekend")],
                       vacation_dates=[{"date": "03-01-2024", "type": 0}])
    assert render_day(cal.day("01-01-2024")) == "[ 1]"
    assert render_day(cal.day("02-01-2024")) == "( 2)"
    assert render_day(cal.day("03-01-2024")) == "  3*"
    assert render_day(cal.day("04-01-2024")) == "  4 "
    assert render_day(cal[1].day(0)) == "    "


def test_cli_single_month(holidays_file, vacations_file) -> None:
    runner = CliRunner()
    result = runner.invoke(main, [
        "-H", str(holidays_file), "-V", str(vacations_file), "-e", "42", "-l", "en", "2024", "1",
    ])
    assert result.exit_code == 0, result.output
    assert "January 2024" in result.output
    assert "Mo  Tu  We  Th  Fr  Sa  Su" in result.output
    assert "[ 1][ 2]" in result.output
    assert " 15*" in result.output
    assert "2 days" in result.output


def test_cli_full_year_default_locale(holidays_file) -> None:
    runner = CliRunner()
    result = runner.invoke(main, ["-H", str(holidays_file), "2024"])
    assert result.exit_code == 0, result.output
    assert "2024" in result.output
    for name in ("Январь", "Апрель", "Декабрь"):
        assert name in result.output
    assert "(27)" in result.output
    assert result.output.rstrip().endswith("0 дней")


def test_cli_add_holiday_option() -> None:
    runner = CliRunner()
    result = runner.invoke(main, ["--add-holiday", "08-03-2024", "--add-weekend", "09-03-2024",
                                  "-l", "en", "2024", "3"])
    assert result.exit_code == 0, result.output
    assert "[ 8]( 9)" in result.output


def test_cli_reports_bad_feed(tmp_path) -> None:
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([{"date": "2024/01/01", "type": "holiday"}]), encoding="utf-8")

    runner = CliRunner()
    result = runner.invoke(main, ["-H", str(path), "2024"])
    assert result.exit_code == 1
    assert "Error:" in result.output
