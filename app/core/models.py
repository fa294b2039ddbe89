import datetime
import enum

from pydantic import BaseModel, ConfigDict, Field

from app.core.config import DAILY_REGULAR_HOURS, DEFAULT_DIURNAL_END, DEFAULT_DIURNAL_START


class DayType(str, enum.Enum):
    """Classification of a calendar day. Sunday dominates Holiday."""

    ORDINARY = "ordinary"
    SUNDAY = "sunday"
    HOLIDAY = "holiday"


class NoveltyType(str, enum.Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"


class ShiftPeriod(str, enum.Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


# ============ Persisted snapshots ============
# Read-only copies handed to the engine; it never sees ORM rows.


class ShiftTemplate(BaseModel):
    """Reusable shift definition attached to a store."""

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    store_id: int
    name: str
    period: ShiftPeriod = ShiftPeriod.WEEKLY
    start_time: str
    end_time: str
    lunch_minutes: int = Field(default=0, ge=0)
    is_active: bool = True


class AssignedShift(BaseModel):
    model_config = ConfigDict(frozen=True)

    employee_id: int
    date: datetime.date
    start_time: str
    end_time: str
    lunch_minutes: int = Field(default=0, ge=0)


class Absence(BaseModel):
    model_config = ConfigDict(frozen=True)

    employee_id: int
    date: datetime.date
    hours: float = Field(gt=0)
    reason: str | None = None


class Novelty(BaseModel):
    model_config = ConfigDict(frozen=True)

    employee_id: int
    date: datetime.date
    hours: float = Field(gt=0)
    type: NoveltyType
    comment: str | None = None

    @property
    def signed_hours(self) -> float:
        return self.hours if self.type == NoveltyType.POSITIVE else -self.hours


class WorkConfig(BaseModel):
    """Active diurnal band and daily regular-hours threshold."""

    model_config = ConfigDict(frozen=True)

    diurnal_start: str = DEFAULT_DIURNAL_START
    diurnal_end: str = DEFAULT_DIURNAL_END
    daily_regular_hours: float = DAILY_REGULAR_HOURS
    is_active: bool = True


# ============ Derived values ============


class CalendarDay(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: datetime.date
    day_type: DayType
    week: int


class Period(BaseModel):
    year: int
    month: int


class ExtraHourBlock(BaseModel):
    diurnal_extra: float = 0.0
    nocturnal_extra: float = 0.0


class ExtraHourSummary(BaseModel):
    """Projected extra hours for a shift template over one month."""

    period: Period
    ordinary: ExtraHourBlock = Field(default_factory=ExtraHourBlock)
    sunday: ExtraHourBlock = Field(default_factory=ExtraHourBlock)
    holiday: ExtraHourBlock = Field(default_factory=ExtraHourBlock)


class HourBlock(BaseModel):
    absence: float = 0.0
    novelty: float = 0.0
    diurnal_extra: float = 0.0
    nocturnal_extra: float = 0.0


class EmployeeInfo(BaseModel):
    id: int
    full_name: str


class EmployeeHourSummary(BaseModel):
    """Realized hours for one employee over one month."""

    employee: EmployeeInfo
    period: Period
    ordinary: HourBlock = Field(default_factory=HourBlock)
    sunday: HourBlock = Field(default_factory=HourBlock)
    holiday: HourBlock = Field(default_factory=HourBlock)


class HourTotals(BaseModel):
    ordinary: HourBlock = Field(default_factory=HourBlock)
    sunday: HourBlock = Field(default_factory=HourBlock)
    holiday: HourBlock = Field(default_factory=HourBlock)


class EmployeeYearSummary(BaseModel):
    year: int
    employee_id: int
    employee_name: str
    monthly_data: list[EmployeeHourSummary]
    total_hours: HourTotals


class ProjectedDay(BaseModel):
    date: datetime.date
    day_type: DayType
    worked_hours: float
    diurnal_extra: float
    nocturnal_extra: float


class DayHours(BaseModel):
    """Realized figures for one assigned day."""

    date: datetime.date
    day_type: DayType
    start_time: str
    end_time: str
    worked_hours: float
    novelty: float
    absence: float
    extra_hours: float
    diurnal_extra: float
    nocturnal_extra: float
