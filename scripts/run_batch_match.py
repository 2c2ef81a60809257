#!/usr/bin/env python3
"""Run batch matching over candidates and jobs in the database; print the ranking.

Optionally pre-filters the candidate set by region before matching, and prints
the availability breakdown for every match.

Usage:
    python scripts/run_batch_match.py                      # all candidates x all jobs
    python scripts/run_batch_match.py --job j-1 --job j-2  # selected jobs only
    python scripts/run_batch_match.py --country Germany --max-distance 30 --center 52.52,13.40

Requires:
    - Candidates and jobs in the database (DATABASE_URL or POSTGRES_*)
    - OPENROUTER_API_KEY when --embeddings openrouter is used
"""

import argparse
import asyncio
import os
import sys

from dotenv import load_dotenv
from sqlalchemy import select

# Add project root for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
load_dotenv()

from match_engine.config import load_match_settings  # noqa: E402
from match_engine.db import get_session  # noqa: E402
from match_engine.engine import MatchEngine  # noqa: E402
from match_engine.matching.availability import match_availability  # noqa: E402
from match_engine.matching.region_filter import filter_by_region  # noqa: E402
from match_engine.matching.types import GeoPoint, RegionFilter  # noqa: E402
from match_engine.models.candidates import Candidate  # noqa: E402
from match_engine.models.jobs import Job  # noqa: E402
from match_engine.resources import (  # noqa: E402
    InMemoryCacheResource,
    MockEmbeddingResource,
    OpenRouterEmbeddingResource,
    SqlRecordStoreResource,
)
from match_engine.resources.record_store import candidate_to_record  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--candidate", action="append", default=[], help="Candidate id (repeatable)")
    parser.add_argument("--job", action="append", default=[], help="Job id (repeatable)")
    parser.add_argument("--embeddings", choices=["mock", "openrouter"], default="mock")
    parser.add_argument("--min-score", type=float, default=None)
    parser.add_argument("--limit", type=int, default=20)
    parser.add_argument("--country", action="append", default=[])
    parser.add_argument("--region", action="append", default=[])
    parser.add_argument("--city", action="append", default=[])
    parser.add_argument("--timezone", action="append", default=[])
    parser.add_argument("--max-distance", type=float, default=None, help="Kilometres")
    parser.add_argument("--center", default=None, help="lat,lng for --max-distance")
    return parser.parse_args()


def load_ids(args: argparse.Namespace) -> tuple[list, list[str]]:
    session = get_session()
    stmt = select(Candidate)
    if args.candidate:
        stmt = stmt.where(Candidate.id.in_(args.candidate))
    candidates = [candidate_to_record(row) for row in session.execute(stmt).scalars()]
    job_ids = args.job or [str(jid) for jid in session.execute(select(Job.id)).scalars()]
    session.close()
    return candidates, job_ids


def main():
    args = parse_args()
    candidates, job_ids = load_ids(args)

    center = None
    if args.center:
        lat, lng = (float(part) for part in args.center.split(","))
        center = GeoPoint(latitude=lat, longitude=lng)
    region_filter = RegionFilter(
        countries=tuple(args.country),
        regions=tuple(args.region),
        cities=tuple(args.city),
        max_distance_km=args.max_distance,
        center_point=center,
        timezones=tuple(args.timezone),
    )
    filtered = filter_by_region(candidates, region_filter)

    print("\n" + "=" * 80)
    print("  REGION FILTER")
    print("=" * 80)
    print(f"  Candidates: {filtered.stats.total_candidates}")
    print(f"  Passed:     {filtered.stats.filtered_count}")
    print(f"  Excluded:   {filtered.stats.excluded_count}")
    for reason, count in sorted(filtered.stats.filter_reasons.items()):
        print(f"    {reason}: {count}")

    if not filtered.filtered or not job_ids:
        print("\n  Nothing to match.")
        sys.exit(0)

    embeddings = (
        OpenRouterEmbeddingResource() if args.embeddings == "openrouter" else MockEmbeddingResource()
    )
    store = SqlRecordStoreResource()
    engine = MatchEngine(
        record_store=store,
        embeddings=embeddings,
        cache=InMemoryCacheResource(),
        settings=load_match_settings(),
    )
    report = asyncio.run(
        engine.batch_match_report(
            [c.id for c in filtered.filtered],
            job_ids,
            min_score=args.min_score,
            limit=args.limit,
        )
    )

    print("\n" + "-" * 80)
    print(f"  MATCHES (top {args.limit})")
    print("-" * 80)
    by_id = {c.id: c for c in filtered.filtered}
    for rank, m in enumerate(report.matches, start=1):
        job = asyncio.run(store.get_job(m.job_id))
        availability = match_availability(by_id[m.candidate_id].availability, job.availability)
        print(f"\n  {rank}. {m.candidate_id} -> {m.job_id}: {m.total_score:.3f}")
        print(
            f"    Skills: {m.skill_score:.3f}  Location: {m.location_score:.3f}  "
            f"Experience: {m.experience_score:.3f}  Salary: {m.salary_score:.3f}"
        )
        if m.matched_skills:
            print(f"    Matched skills: {', '.join(s.skill for s in m.matched_skills)}")
        print(f"    Availability: {availability.score:.2f} ({'; '.join(availability.details)})")

    for failure in report.failures:
        print(f"\n  FAILED {failure.candidate_id} -> {failure.job_id}: {failure.message}")

    print("\n" + "=" * 80)
    print(f"  Pairings processed: {report.processed}  Matches: {len(report.matches)}")
    print("=" * 80 + "\n")


if __name__ == "__main__":
    main()
