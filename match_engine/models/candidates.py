"""Candidate records read by the matching engine."""

from datetime import date, datetime
from uuid import uuid4

from sqlalchemy import JSON, Boolean, Date, DateTime, Enum, Float, String, Text, func
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from match_engine.models.base import Base
from match_engine.models.enums import RemotePreferenceEnum, WorkingHoursEnum

# Postgres stores skill lists as TEXT[]; other backends (SQLite in tests) as JSON.
SkillList = JSON().with_variant(ARRAY(Text), "postgresql")


class Candidate(Base):
    """Candidate profile with the fields consumed by matching."""

    __tablename__ = "candidates"

    id: Mapped[str] = mapped_column(
        String(64), primary_key=True, default=lambda: str(uuid4())
    )
    full_name: Mapped[str | None] = mapped_column(Text, nullable=True)

    # ═══════════════════════════════════════════════════════════════════
    # SKILLS
    # ═══════════════════════════════════════════════════════════════════
    skills: Mapped[list[str] | None] = mapped_column(SkillList, nullable=True)  # Input order kept

    # ═══════════════════════════════════════════════════════════════════
    # LOCATION
    # ═══════════════════════════════════════════════════════════════════
    location_city: Mapped[str | None] = mapped_column(Text, nullable=True)
    location_region: Mapped[str | None] = mapped_column(Text, nullable=True)
    location_country: Mapped[str | None] = mapped_column(Text, nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    timezone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    remote_work: Mapped[bool] = mapped_column(Boolean, default=False)

    # ═══════════════════════════════════════════════════════════════════
    # EXPERIENCE & COMPENSATION
    # ═══════════════════════════════════════════════════════════════════
    years_experience: Mapped[float | None] = mapped_column(Float, nullable=True)
    salary_expectation_min: Mapped[float | None] = mapped_column(Float, nullable=True)
    salary_expectation_max: Mapped[float | None] = mapped_column(Float, nullable=True)

    # ═══════════════════════════════════════════════════════════════════
    # AVAILABILITY
    # ═══════════════════════════════════════════════════════════════════
    available_from: Mapped[date | None] = mapped_column(Date, nullable=True)
    working_hours: Mapped[WorkingHoursEnum | None] = mapped_column(
        Enum(WorkingHoursEnum, name="working_hours_enum"), nullable=True
    )
    remote_preference: Mapped[RemotePreferenceEnum | None] = mapped_column(
        Enum(RemotePreferenceEnum, name="remote_preference_enum"), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
