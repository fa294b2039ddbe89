# app/database/database.py
"""
SQLAlchemy database setup and models.
"""

import enum
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import declarative_base, relationship, sessionmaker

from app.core.config import DATABASE_URL, DAILY_REGULAR_HOURS, DEFAULT_DIURNAL_END, DEFAULT_DIURNAL_START

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def utcnow() -> datetime:
    """Naive UTC timestamp for audit columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class UserRole(str, enum.Enum):
    EMPLOYEE = "employee"
    ADMIN = "admin"


class ShiftPeriodColumn(str, enum.Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"


class NoveltyTypeColumn(str, enum.Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"


class Franchise(Base):
    __tablename__ = "franchises"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True)
    is_active = Column(Boolean, default=True, nullable=False)

    stores = relationship("Store", back_populates="franchise")


class Store(Base):
    __tablename__ = "stores"

    id = Column(Integer, primary_key=True, index=True)
    franchise_id = Column(Integer, ForeignKey("franchises.id"), nullable=False)
    name = Column(String(100), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    franchise = relationship("Franchise", back_populates="stores")
    shifts = relationship("Shift", back_populates="store")


class User(Base):
    """Employees and administrators. Roles are stored as a JSON list of strings."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(150), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False, default="")
    roles = Column(JSON, default=list, nullable=False)  # ["admin"] / ["employee"]
    franchise_id = Column(Integer, ForeignKey("franchises.id"), nullable=True)
    store_id = Column(Integer, ForeignKey("stores.id"), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Shift(Base):
    """Shift template. Times are stored as "HH:MM" strings."""

    __tablename__ = "shifts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    store_id = Column(Integer, ForeignKey("stores.id"), nullable=False)
    name = Column(String(100), nullable=False)
    period = Column(SQLEnum(ShiftPeriodColumn), default=ShiftPeriodColumn.WEEKLY, nullable=False)
    start_time = Column(String(8), nullable=False)
    end_time = Column(String(8), nullable=False)
    lunch_minutes = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    store = relationship("Store", back_populates="shifts")

    def __repr__(self):
        return f"<Shift(id={self.id}, store_id={self.store_id}, {self.start_time}-{self.end_time})>"


class AssignedShift(Base):
    """A concrete shift worked by an employee on a date."""

    __tablename__ = "assigned_shifts"
    __table_args__ = (UniqueConstraint("employee_id", "date", name="uq_assigned_shift_employee_date"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    employee_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    shift_id = Column(Integer, ForeignKey("shifts.id"), nullable=True)
    date = Column(Date, nullable=False)
    start_time = Column(String(8), nullable=False)
    end_time = Column(String(8), nullable=False)
    lunch_minutes = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=utcnow)

    employee = relationship("User", foreign_keys=[employee_id])

    def __repr__(self):
        return f"<AssignedShift(id={self.id}, employee_id={self.employee_id}, date={self.date})>"


class Absence(Base):
    """Unworked hours recorded for an employee on a date."""

    __tablename__ = "absences"

    id = Column(Integer, primary_key=True, autoincrement=True)
    employee_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    hours = Column(Float, nullable=False)
    reason = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    employee = relationship("User", foreign_keys=[employee_id])

    def __repr__(self):
        return f"<Absence(id={self.id}, employee_id={self.employee_id}, date={self.date}, hours={self.hours})>"


class Novelty(Base):
    """Signed hour adjustment for an employee on a date."""

    __tablename__ = "novelties"

    id = Column(Integer, primary_key=True, autoincrement=True)
    employee_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    date = Column(Date, nullable=False)
    hours = Column(Float, nullable=False)
    type = Column(SQLEnum(NoveltyTypeColumn), nullable=False)
    comment = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    employee = relationship("User", foreign_keys=[employee_id])

    def __repr__(self):
        return f"<Novelty(id={self.id}, employee_id={self.employee_id}, date={self.date}, type={self.type})>"


class WorkConfig(Base):
    """Diurnal band and daily threshold. Exactly one row is active at a time."""

    __tablename__ = "work_config"

    id = Column(Integer, primary_key=True, autoincrement=True)
    diurnal_start = Column(String(8), nullable=False, default=DEFAULT_DIURNAL_START)
    diurnal_end = Column(String(8), nullable=False, default=DEFAULT_DIURNAL_END)
    daily_regular_hours = Column(Float, nullable=False, default=DAILY_REGULAR_HOURS)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow)


def create_tables():
    """Create all database tables."""
    Base.metadata.create_all(bind=engine)


def get_db():
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
