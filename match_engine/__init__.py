"""Candidate-to-job matching engine."""

from match_engine.engine import BatchMatchReport, MatchEngine, PairingFailure

__all__ = ["MatchEngine", "BatchMatchReport", "PairingFailure"]
