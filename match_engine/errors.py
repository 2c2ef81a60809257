"""Error taxonomy for the matching engine."""


class MatchEngineError(Exception):
    """Base class for every error raised by the matching engine."""


class InvalidInputError(MatchEngineError, ValueError):
    """Input violates a hard precondition (e.g. vectors of different length)."""


class NotFoundError(MatchEngineError, LookupError):
    """A candidate or job record does not exist in the record store."""

    def __init__(self, kind: str, record_id: str):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} not found: {record_id}")


class CollaboratorUnavailableError(MatchEngineError):
    """An external collaborator (embeddings, record store) failed or timed out."""

    def __init__(self, collaborator: str, message: str = ""):
        self.collaborator = collaborator
        detail = f": {message}" if message else ""
        super().__init__(f"{collaborator} unavailable{detail}")
