"""Job opening records read by the matching engine."""

from datetime import date, datetime
from uuid import uuid4

from sqlalchemy import Boolean, Date, DateTime, Enum, Float, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from match_engine.models.base import Base
from match_engine.models.candidates import SkillList
from match_engine.models.enums import RemotePreferenceEnum, WorkingHoursEnum


class Job(Base):
    """Job opening with its requirements."""

    __tablename__ = "jobs"

    id: Mapped[str] = mapped_column(
        String(64), primary_key=True, default=lambda: str(uuid4())
    )
    job_title: Mapped[str | None] = mapped_column(Text, nullable=True)
    company_name: Mapped[str | None] = mapped_column(Text, nullable=True)

    # ═══════════════════════════════════════════════════════════════════
    # REQUIREMENTS
    # ═══════════════════════════════════════════════════════════════════
    required_skills: Mapped[list[str] | None] = mapped_column(SkillList, nullable=True)
    min_experience: Mapped[float | None] = mapped_column(Float, nullable=True)
    max_experience: Mapped[float | None] = mapped_column(Float, nullable=True)

    # ═══════════════════════════════════════════════════════════════════
    # LOCATION & WORK TYPE
    # ═══════════════════════════════════════════════════════════════════
    location_city: Mapped[str | None] = mapped_column(Text, nullable=True)
    location_region: Mapped[str | None] = mapped_column(Text, nullable=True)
    location_country: Mapped[str | None] = mapped_column(Text, nullable=True)
    latitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    longitude: Mapped[float | None] = mapped_column(Float, nullable=True)
    timezone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    max_distance_km: Mapped[float | None] = mapped_column(Float, nullable=True)
    remote: Mapped[bool] = mapped_column(Boolean, default=False)

    # ═══════════════════════════════════════════════════════════════════
    # COMPENSATION
    # ═══════════════════════════════════════════════════════════════════
    salary_min: Mapped[float | None] = mapped_column(Float, nullable=True)
    salary_max: Mapped[float | None] = mapped_column(Float, nullable=True)

    # ═══════════════════════════════════════════════════════════════════
    # AVAILABILITY
    # ═══════════════════════════════════════════════════════════════════
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    working_hours: Mapped[WorkingHoursEnum | None] = mapped_column(
        Enum(WorkingHoursEnum, name="working_hours_enum"), nullable=True
    )
    remote_preference: Mapped[RemotePreferenceEnum | None] = mapped_column(
        Enum(RemotePreferenceEnum, name="remote_preference_enum"), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
