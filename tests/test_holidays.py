"""
Unit tests for the Colombian holiday resolver.
"""

import datetime

import pytest

from app.core.errors import InvalidPeriod, InvalidYear
from app.core.holidays import (
    MONDAY_SHIFTED_HOLIDAYS,
    ascension_day,
    colombian_holidays,
    corpus_christi,
    easter_sunday,
    holiday_names,
    move_to_monday,
    sacred_heart,
)


class TestEasterSunday:
    @pytest.mark.parametrize(
        "year,expected",
        [
            (2000, datetime.date(2000, 4, 23)),
            (2019, datetime.date(2019, 4, 21)),
            (2024, datetime.date(2024, 3, 31)),
            (2025, datetime.date(2025, 4, 20)),
            (2026, datetime.date(2026, 4, 5)),
        ],
    )
    def test_known_dates(self, year, expected):
        assert easter_sunday(year) == expected

    def test_always_a_sunday(self):
        for year in range(2000, 2101):
            assert easter_sunday(year).weekday() == 6


class TestMoveToMonday:
    def test_monday_is_kept(self):
        monday = datetime.date(2025, 3, 24)
        assert move_to_monday(monday) == monday

    def test_tuesday_moves_six_days(self):
        assert move_to_monday(datetime.date(2025, 1, 7)) == datetime.date(2025, 1, 13)

    def test_sunday_moves_one_day(self):
        assert move_to_monday(datetime.date(2025, 1, 5)) == datetime.date(2025, 1, 6)


class TestColombianHolidays:
    def test_2025_full_calendar(self):
        expected = [
            datetime.date(2025, 1, 1),
            datetime.date(2025, 1, 6),
            datetime.date(2025, 3, 24),
            datetime.date(2025, 4, 17),
            datetime.date(2025, 4, 18),
            datetime.date(2025, 5, 1),
            datetime.date(2025, 6, 2),
            datetime.date(2025, 6, 23),
            datetime.date(2025, 6, 30),
            datetime.date(2025, 7, 20),
            datetime.date(2025, 8, 7),
            datetime.date(2025, 8, 18),
            datetime.date(2025, 10, 13),
            datetime.date(2025, 11, 3),
            datetime.date(2025, 11, 17),
            datetime.date(2025, 12, 8),
            datetime.date(2025, 12, 25),
        ]
        assert list(colombian_holidays(2025)) == expected

    def test_colliding_mondays_appear_once(self):
        # Sacred Heart and Saint Peter and Saint Paul are both observed on June 30th 2025
        holidays = colombian_holidays(2025)
        assert sacred_heart(2025) == datetime.date(2025, 6, 30)
        assert holidays.count(datetime.date(2025, 6, 30)) == 1
        assert len(holidays) == len(set(holidays))

    def test_sorted(self):
        holidays = colombian_holidays(2031)
        assert list(holidays) == sorted(holidays)

    def test_easter_offsets_are_39_60_68(self):
        easter = easter_sunday(2025)
        assert ascension_day(2025) == move_to_monday(easter + datetime.timedelta(days=39))
        assert corpus_christi(2025) == move_to_monday(easter + datetime.timedelta(days=60))
        assert sacred_heart(2025) == move_to_monday(easter + datetime.timedelta(days=68))

    def test_monday_shifted_holidays_land_on_monday(self):
        for year in range(2000, 2101):
            for month, day in MONDAY_SHIFTED_HOLIDAYS.values():
                assert move_to_monday(datetime.date(year, month, day)).weekday() == 0
            for observed in (ascension_day(year), corpus_christi(year), sacred_heart(year)):
                assert observed.weekday() == 0

    def test_names_keep_first_holiday_on_collision(self):
        names = holiday_names(2025)
        assert names[datetime.date(2025, 4, 18)] == "Good Friday"
        assert datetime.date(2025, 6, 30) in names

    @pytest.mark.parametrize("year", [1999, 2101, 1582])
    def test_out_of_range_year_rejected(self, year):
        with pytest.raises(InvalidYear):
            colombian_holidays(year)

    def test_invalid_year_is_an_invalid_period(self):
        with pytest.raises(InvalidPeriod):
            colombian_holidays(1900)
