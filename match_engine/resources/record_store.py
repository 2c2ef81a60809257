"""Record store: single-record lookups of candidates and jobs."""

import asyncio

from dagster import ConfigurableResource
from pydantic import Field
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from match_engine.db import get_session
from match_engine.errors import CollaboratorUnavailableError, NotFoundError
from match_engine.matching.types import (
    AvailabilityProfile,
    CandidateRecord,
    GeoPoint,
    JobRecord,
    Location,
    Range,
)
from match_engine.models.candidates import Candidate
from match_engine.models.jobs import Job


class RecordStoreResource(ConfigurableResource):
    """get_candidate(id) / get_job(id); both raise NotFoundError for unknown ids."""

    async def get_candidate(self, candidate_id: str) -> CandidateRecord:
        raise NotImplementedError

    async def get_job(self, job_id: str) -> JobRecord:
        raise NotImplementedError


def _coordinates(latitude: float | None, longitude: float | None) -> GeoPoint | None:
    if latitude is None or longitude is None:
        return None
    return GeoPoint(latitude=latitude, longitude=longitude)


def _availability(start, working_hours, remote_preference) -> AvailabilityProfile | None:
    if start is None and working_hours is None and remote_preference is None:
        return None
    return AvailabilityProfile(
        start_date=start, working_hours=working_hours, remote_preference=remote_preference
    )


def candidate_to_record(row: Candidate) -> CandidateRecord:
    return CandidateRecord(
        id=str(row.id),
        skills=tuple(row.skills or ()),
        location=Location(
            city=row.location_city,
            region=row.location_region,
            country=row.location_country,
            remote=bool(row.remote_work),
            coordinates=_coordinates(row.latitude, row.longitude),
            timezone=row.timezone,
        ),
        years_experience=float(row.years_experience or 0),
        salary_expectation=Range(min=row.salary_expectation_min, max=row.salary_expectation_max),
        availability=_availability(row.available_from, row.working_hours, row.remote_preference),
    )


def job_to_record(row: Job) -> JobRecord:
    return JobRecord(
        id=str(row.id),
        required_skills=tuple(row.required_skills or ()),
        location=Location(
            city=row.location_city,
            region=row.location_region,
            country=row.location_country,
            remote=bool(row.remote),
            coordinates=_coordinates(row.latitude, row.longitude),
            timezone=row.timezone,
            max_distance_km=row.max_distance_km,
        ),
        experience=Range(min=row.min_experience, max=row.max_experience),
        salary=Range(min=row.salary_min, max=row.salary_max),
        availability=_availability(row.start_date, row.working_hours, row.remote_preference),
    )


class SqlRecordStoreResource(RecordStoreResource):
    """Reads candidates and jobs through SQLAlchemy.

    Queries run in a worker thread (asyncio.to_thread); database errors are
    reported as CollaboratorUnavailableError.
    """

    database_url: str | None = Field(
        default=None,
        description="SQLAlchemy URL; defaults to DATABASE_URL / POSTGRES_* settings",
    )

    def _get_session(self) -> Session:
        return get_session(self.database_url)

    def _load_candidate(self, candidate_id: str) -> CandidateRecord:
        session = self._get_session()
        try:
            row = session.execute(
                select(Candidate).where(Candidate.id == candidate_id)
            ).scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise CollaboratorUnavailableError("record_store", str(exc)) from exc
        finally:
            session.close()
        if row is None:
            raise NotFoundError("candidate", candidate_id)
        return candidate_to_record(row)

    def _load_job(self, job_id: str) -> JobRecord:
        session = self._get_session()
        try:
            row = session.execute(select(Job).where(Job.id == job_id)).scalar_one_or_none()
        except SQLAlchemyError as exc:
            raise CollaboratorUnavailableError("record_store", str(exc)) from exc
        finally:
            session.close()
        if row is None:
            raise NotFoundError("job", job_id)
        return job_to_record(row)

    async def get_candidate(self, candidate_id: str) -> CandidateRecord:
        return await asyncio.to_thread(self._load_candidate, candidate_id)

    async def get_job(self, job_id: str) -> JobRecord:
        return await asyncio.to_thread(self._load_job, job_id)

    def _insert(self, row: Candidate | Job) -> str:
        session = self._get_session()
        try:
            session.add(row)
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            raise CollaboratorUnavailableError("record_store", str(exc)) from exc
        finally:
            session.close()
        return str(row.id)

    def add_candidate(self, **fields) -> str:
        """Insert a candidate row and return its id."""
        return self._insert(Candidate(**fields))

    def add_job(self, **fields) -> str:
        """Insert a job row and return its id."""
        return self._insert(Job(**fields))
