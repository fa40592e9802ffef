"""
Score Adjustment Service
score_engine/services/score_adjustment_service.py

The only sanctioned way to change a locked final score:

  request_adjustment   manager proposes new pillar scores (PENDING)
  review_adjustment    a different reviewer approves or rejects

Approval applies the proposed scores through AdjustmentApplier
(unlock → update → re-lock). The request is persisted first, so its
version check decides between concurrent reviews before the score
changes; a failed score write returns the request to PENDING.
"""

import structlog
from dataclasses import dataclass
from typing import List, Optional
from uuid import UUID

from score_engine.config import Settings, get_settings
from score_engine.core.exceptions import (
    AdjustmentAlreadyReviewedException,
    EntityNotFoundException,
    FinalScoreNotLockedException,
    MissingRejectionReasonException,
    RepositoryException,
    ReviewPermissionException,
)
from score_engine.models.enumerations import AdjustmentStatus
from score_engine.models.final_score import FinalScore
from score_engine.models.score_adjustment import ScoreAdjustmentRequest
from score_engine.models.scores import PillarScores
from score_engine.repositories.final_score_repository import FinalScoreRepository
from score_engine.repositories.score_adjustment_repository import ScoreAdjustmentRequestRepository
from score_engine.scoring.adjustment_applier import AdjustmentApplier
from score_engine.services.employee_directory import EmployeeDirectory

logger = structlog.get_logger(__name__)


@dataclass
class ReviewOutcome:
    """Output of ScoreAdjustmentService.review_adjustment()."""
    request: ScoreAdjustmentRequest
    final_score: Optional[FinalScore] = None    # set when approved


class ScoreAdjustmentService:
    """Score adjustment request workflow."""

    def __init__(
        self,
        request_repository: ScoreAdjustmentRequestRepository,
        final_score_repository: FinalScoreRepository,
        employee_directory: EmployeeDirectory,
        applier: Optional[AdjustmentApplier] = None,
        settings: Optional[Settings] = None,
    ):
        self.requests = request_repository
        self.final_scores = final_score_repository
        self.directory = employee_directory
        self.applier = applier or AdjustmentApplier()
        self.settings = settings or get_settings()

    async def request_adjustment(
        self,
        cycle_id: str,
        employee_id: str,
        requester_id: str,
        reason: str,
        proposed_scores: PillarScores,
    ) -> ScoreAdjustmentRequest:
        """
        Raises:
            EntityNotFoundException: no final score or no such employee
            FinalScoreNotLockedException: score not locked yet (ADJUSTMENT_REQUIRES_LOCK)
            ReviewPermissionException: requester is not the employee's manager
        """
        final_score = await self.final_scores.find_by_cycle_and_employee(cycle_id, employee_id)
        if final_score is None:
            raise EntityNotFoundException("FinalScore", f"{cycle_id}/{employee_id}")
        if self.settings.ADJUSTMENT_REQUIRES_LOCK and not final_score.locked:
            raise FinalScoreNotLockedException(str(final_score.id))

        employee = await self.directory.get_employee(employee_id)
        if employee is None:
            raise EntityNotFoundException("Employee", employee_id)
        if employee.manager_id != requester_id:
            logger.warning(
                "adjustment_request_denied",
                cycle_id=cycle_id,
                employee_id=employee_id,
                requester_id=requester_id,
            )
            raise ReviewPermissionException(
                "You can only request adjustments for your direct reports"
            )

        request = ScoreAdjustmentRequest(
            cycle_id=cycle_id,
            employee_id=employee_id,
            requester_id=requester_id,
            reason=reason,
            proposed_scores=proposed_scores,
        )
        saved = await self.requests.save(request)
        logger.info(
            "adjustment_requested",
            request_id=str(saved.id),
            cycle_id=cycle_id,
            employee_id=employee_id,
            requester_id=requester_id,
        )
        return saved

    async def review_adjustment(
        self,
        request_id: UUID,
        reviewer_id: str,
        approved: bool,
        notes: Optional[str] = None,
    ) -> ReviewOutcome:
        """
        Approve or reject a PENDING request.

        Raises:
            EntityNotFoundException: unknown request, or approved request whose score is gone
            AdjustmentAlreadyReviewedException: request is not PENDING
            ReviewPermissionException: reviewer is the requester
            MissingRejectionReasonException: rejection without a reason
            ConcurrentModificationException: another review of the request won
        """
        request = await self.requests.find_by_id(request_id)
        if request is None:
            raise EntityNotFoundException("ScoreAdjustmentRequest", str(request_id))
        if not request.is_pending:
            raise AdjustmentAlreadyReviewedException(str(request.id), request.status.value)
        if reviewer_id == request.requester_id:
            logger.warning("adjustment_self_review_denied", request_id=str(request_id), reviewer_id=reviewer_id)
            raise ReviewPermissionException("A score adjustment cannot be reviewed by its requester")

        if not approved:
            if self.settings.REJECTION_REASON_REQUIRED and not (notes and notes.strip()):
                raise MissingRejectionReasonException(str(request_id))
            request.reject(reviewer_id, notes)
            saved_request = await self.requests.save(request)
            logger.info("adjustment_rejected", request_id=str(request_id), reviewer_id=reviewer_id)
            return ReviewOutcome(request=saved_request)

        final_score = await self.final_scores.find_by_cycle_and_employee(
            request.cycle_id, request.employee_id
        )
        if final_score is None:
            raise EntityNotFoundException("FinalScore", f"{request.cycle_id}/{request.employee_id}")

        request.approve(reviewer_id, notes)
        self.applier.apply(final_score, request)
        # The request write carries the version check that settles concurrent reviews
        saved_request = await self.requests.save(request)
        try:
            saved_score = await self.final_scores.save(final_score)
        except RepositoryException:
            await self._reopen(saved_request)
            raise

        logger.info(
            "adjustment_approved",
            request_id=str(request_id),
            reviewer_id=reviewer_id,
            final_score_id=str(saved_score.id),
            bonus_tier=saved_score.bonus_tier.value,
        )
        return ReviewOutcome(request=saved_request, final_score=saved_score)

    async def _reopen(self, request: ScoreAdjustmentRequest) -> None:
        """Return an approved request to PENDING after its score write failed."""
        request.status = AdjustmentStatus.PENDING
        request.approver_id = None
        request.reviewed_at = None
        request.review_notes = None
        await self.requests.save(request)
        logger.warning("adjustment_approval_reverted", request_id=str(request.id))

    async def list_pending(self, cycle_id: Optional[str] = None) -> List[ScoreAdjustmentRequest]:
        return await self.requests.find_pending(cycle_id)

    async def list_for_employee(
        self, employee_id: str, cycle_id: Optional[str] = None
    ) -> List[ScoreAdjustmentRequest]:
        return await self.requests.find_by_employee(employee_id, cycle_id)
