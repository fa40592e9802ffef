"""
Custom Exceptions - Performance Review Score Engine
score_engine/core/exceptions.py

Domain exceptions raised by the engine and repository exceptions raised
by the persistence adapters.
"""


# =============================================================================
# DOMAIN EXCEPTIONS
# =============================================================================

class ScoreEngineException(Exception):
    """Base exception for score engine operations."""

    pass


class ScoreValidationException(ScoreEngineException, ValueError):
    """Invalid input data. Raised at construction, never recovered locally."""

    pass


class InvalidPillarScoreException(ScoreValidationException):
    """Pillar score outside [0, 4] or not an integer."""

    pass


class InvalidEngineerLevelException(ScoreValidationException):
    """Unknown engineer level."""

    pass


class InvalidWeightedScoreException(ScoreValidationException):
    """Weighted score outside [0, 4] or not a number."""

    pass


class MissingRejectionReasonException(ScoreValidationException):
    """Rejecting an adjustment request without a reason."""

    def __init__(self, request_id: str):
        self.request_id = request_id
        super().__init__(f"Rejection reason is required to reject adjustment request {request_id}")


class FinalScoreLockedException(ScoreEngineException):
    """Score mutation attempted on a locked final score."""

    def __init__(self, final_score_id: str):
        self.final_score_id = final_score_id
        super().__init__(f"Cannot update scores: final score {final_score_id} is locked")


class FinalScoreNotLockedException(ScoreEngineException):
    """Adjustment requested before the final score was locked."""

    def __init__(self, final_score_id: str):
        self.final_score_id = final_score_id
        super().__init__(
            f"Cannot request score adjustment until final score {final_score_id} is locked"
        )


class AdjustmentAlreadyReviewedException(ScoreEngineException):
    """Adjustment request is already in a terminal state."""

    def __init__(self, request_id: str, status: str):
        self.request_id = request_id
        self.status = status
        super().__init__(f"Score adjustment request {request_id} has already been {status.lower()}")


class AdjustmentNotApprovedException(ScoreEngineException):
    """Applying an adjustment request that has not been approved."""

    def __init__(self, request_id: str, status: str):
        self.request_id = request_id
        self.status = status
        super().__init__(f"Score adjustment request {request_id} is {status}, not APPROVED")


class WeightConfigurationException(ScoreEngineException):
    """Missing or inconsistent weight vector. A deployment defect, never retried."""

    def __init__(self, level: str, message: str = ""):
        self.level = level
        super().__init__(message or f"No weights defined for level: {level}")


class ReviewPermissionException(ScoreEngineException):
    """Caller is not allowed to perform the operation."""

    pass


# =============================================================================
# REPOSITORY EXCEPTIONS
# =============================================================================

class RepositoryException(Exception):
    """Persistence failure for final scores, adjustment requests or directory lookups."""

    pass


class EntityNotFoundException(RepositoryException):
    """
    Lookup by id or natural key found nothing.

    entity_type is FinalScore, ScoreAdjustmentRequest or Employee;
    entity_id is an id or a "cycle/employee" key.
    """

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"No {entity_type} found for {entity_id}")


class EntityDeletedException(RepositoryException):
    """Write or delete aimed at a soft-deleted record."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} {entity_id} was soft-deleted and is read-only")


class DuplicateEntityException(RepositoryException):
    """A second live final score for the same (cycle, employee)."""

    def __init__(self, message: str = "Final score already recorded for this cycle and employee"):
        self.message = message
        super().__init__(message)


class ConcurrentModificationException(RepositoryException):
    """Optimistic concurrency conflict: the stored version moved on."""

    def __init__(self, entity_type: str, entity_id: str, expected: int, actual: int):
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{entity_type} with ID {entity_id} was modified concurrently "
            f"(expected version {expected}, found {actual})"
        )
