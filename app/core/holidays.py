import datetime

from app.core.validators import validate_year


def easter_sunday(year: int) -> datetime.date:
    """Anonymous Gregorian algorithm."""
    a = year % 19
    b = year // 100
    c = year % 100
    d = b // 4
    e = b % 4
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i = c // 4
    k = c % 4
    l = (32 + 2 * e + 2 * i - h - k) % 7
    m = (a + 11 * h + 22 * l) // 451
    month = (h + l - 7 * m + 114) // 31
    day = ((h + l - 7 * m + 114) % 31) + 1
    return datetime.date(year, month, day)


def move_to_monday(date_: datetime.date) -> datetime.date:
    """Observed date under Ley Emiliani: the date itself if Monday, else the next Monday."""
    return date_ + datetime.timedelta(days=(7 - date_.weekday()) % 7)  # 0 = Monday


# === Fixed holidays ===


def new_years_day(year: int) -> datetime.date:
    """January 1st."""
    return datetime.date(year, 1, 1)


def labour_day(year: int) -> datetime.date:
    """May 1st."""
    return datetime.date(year, 5, 1)


def independence_day(year: int) -> datetime.date:
    """July 20th."""
    return datetime.date(year, 7, 20)


def battle_of_boyaca(year: int) -> datetime.date:
    """August 7th."""
    return datetime.date(year, 8, 7)


def immaculate_conception(year: int) -> datetime.date:
    """December 8th."""
    return datetime.date(year, 12, 8)


def christmas_day(year: int) -> datetime.date:
    """December 25th."""
    return datetime.date(year, 12, 25)


# === Easter-derived holidays ===


def holy_thursday(year: int) -> datetime.date:
    """Thursday before Easter Sunday. Never moved."""
    return easter_sunday(year) - datetime.timedelta(days=3)


def good_friday(year: int) -> datetime.date:
    """Friday before Easter Sunday. Never moved."""
    return easter_sunday(year) - datetime.timedelta(days=2)


def ascension_day(year: int) -> datetime.date:
    """Ascension: 39 days after Easter Sunday, observed on the following Monday."""
    return move_to_monday(easter_sunday(year) + datetime.timedelta(days=39))


def corpus_christi(year: int) -> datetime.date:
    """Corpus Christi: 60 days after Easter Sunday, observed on the following Monday."""
    return move_to_monday(easter_sunday(year) + datetime.timedelta(days=60))


def sacred_heart(year: int) -> datetime.date:
    """Sacred Heart: 68 days after Easter Sunday, observed on the following Monday."""
    return move_to_monday(easter_sunday(year) + datetime.timedelta(days=68))


# Natural (month, day) of the holidays moved to Monday by law 51/1983.
MONDAY_SHIFTED_HOLIDAYS: dict[str, tuple[int, int]] = {
    "Epiphany": (1, 6),
    "Saint Joseph's Day": (3, 19),
    "Saint Peter and Saint Paul": (6, 29),
    "Assumption of Mary": (8, 15),
    "Columbus Day": (10, 12),
    "All Saints' Day": (11, 1),
    "Independence of Cartagena": (11, 11),
}


def holiday_names(year: int) -> dict[datetime.date, str]:
    """
    Observed Colombian holidays for a year, keyed by date.

    When two holidays are observed on the same Monday only the first name is
    kept; the date appears once.
    """
    validate_year(year)

    named: list[tuple[datetime.date, str]] = [
        (new_years_day(year), "New Year's Day"),
        (labour_day(year), "Labour Day"),
        (independence_day(year), "Independence Day"),
        (battle_of_boyaca(year), "Battle of Boyacá"),
        (immaculate_conception(year), "Immaculate Conception"),
        (christmas_day(year), "Christmas Day"),
    ]

    for name, (month, day) in MONDAY_SHIFTED_HOLIDAYS.items():
        named.append((move_to_monday(datetime.date(year, month, day)), name))

    named.extend(
        [
            (holy_thursday(year), "Holy Thursday"),
            (good_friday(year), "Good Friday"),
            (ascension_day(year), "Ascension Day"),
            (corpus_christi(year), "Corpus Christi"),
            (sacred_heart(year), "Sacred Heart"),
        ]
    )

    result: dict[datetime.date, str] = {}
    for holiday, name in sorted(named, key=lambda item: item[0]):
        result.setdefault(holiday, name)
    return result


def colombian_holidays(year: int) -> tuple[datetime.date, ...]:
    """Ordered, duplicate-free observed holidays for a year."""
    return tuple(holiday_names(year))
