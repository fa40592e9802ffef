"""
Final Score Service
score_engine/services/final_score_service.py

Use cases around the FinalScore lifecycle:

  calculate_cycle_scores   fan-out per employee → fan-in report
  lock_cycle_scores        calibration lock for a whole cycle
  lock / unlock            administrative, per score
  mark_feedback_delivered  manager delivery for a direct report
  deliver_feedback         delivery by final score id
  get_final_score / get_team_final_scores

Each employee's calculation is independent, so cycle batches run
concurrently (bounded by BATCH_CONCURRENCY) and report results in input
order. A failure for one employee is recorded in the report and does not
abort the batch, except configuration errors, which always propagate.
"""

import asyncio
import structlog
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import List, Optional
from uuid import UUID

from score_engine.config import Settings, get_settings
from score_engine.core.exceptions import (
    EntityNotFoundException,
    RepositoryException,
    ReviewPermissionException,
    ScoreEngineException,
    WeightConfigurationException,
)
from score_engine.models.enumerations import BonusTier, EngineerLevel
from score_engine.models.final_score import FinalScore
from score_engine.models.review_inputs import ManagerEvaluation
from score_engine.repositories.final_score_repository import FinalScoreRepository
from score_engine.scoring.final_score_calculator import FinalScoreCalculator
from score_engine.scoring.peer_aggregation import PeerFeedbackAggregator
from score_engine.services.employee_directory import EmployeeDirectory
from score_engine.services.review_inputs import ReviewInputSource

logger = structlog.get_logger(__name__)


class CalculationOutcome(str, Enum):
    CALCULATED = "calculated"
    SKIPPED_LOCKED = "skipped_locked"
    FAILED = "failed"


@dataclass
class EmployeeCalculationResult:
    employee_id: str
    outcome: CalculationOutcome
    final_score: Optional[FinalScore] = None
    error: Optional[str] = None


@dataclass
class CycleCalculationReport:
    """Output of FinalScoreService.calculate_cycle_scores()."""
    cycle_id: str
    results: List[EmployeeCalculationResult] = field(default_factory=list)

    def _count(self, outcome: CalculationOutcome) -> int:
        return sum(1 for r in self.results if r.outcome == outcome)

    @property
    def calculated_count(self) -> int:
        return self._count(CalculationOutcome.CALCULATED)

    @property
    def skipped_count(self) -> int:
        return self._count(CalculationOutcome.SKIPPED_LOCKED)

    @property
    def failed_count(self) -> int:
        return self._count(CalculationOutcome.FAILED)


@dataclass
class LockReport:
    """Output of FinalScoreService.lock_cycle_scores()."""
    cycle_id: str
    total_scores: int
    newly_locked: int
    locked_at: datetime
    failed_employee_ids: List[str] = field(default_factory=list)


@dataclass
class TeamScoreRow:
    """One row of a manager's team view. has_score=False rows are placeholders."""
    employee_id: str
    employee_name: str
    level: Optional[EngineerLevel]
    has_score: bool
    weighted_score: Decimal
    percentage_score: Decimal
    bonus_tier: BonusTier
    feedback_delivered: bool
    locked: bool


_DELIVERY_FIELDS = (
    "feedback_delivered",
    "feedback_delivered_at",
    "delivered_at",
    "delivered_by",
    "feedback_notes",
)


class FinalScoreService:
    """FinalScore use cases."""

    def __init__(
        self,
        final_score_repository: FinalScoreRepository,
        review_inputs: ReviewInputSource,
        employee_directory: EmployeeDirectory,
        calculator: Optional[FinalScoreCalculator] = None,
        aggregator: Optional[PeerFeedbackAggregator] = None,
        settings: Optional[Settings] = None,
    ):
        self.repository = final_score_repository
        self.review_inputs = review_inputs
        self.directory = employee_directory
        self.calculator = calculator or FinalScoreCalculator()
        self.aggregator = aggregator or PeerFeedbackAggregator()
        self.settings = settings or get_settings()

    # ------------------------------------------------------------------
    # Calculation (cycle batch)
    # ------------------------------------------------------------------

    async def calculate_cycle_scores(self, cycle_id: str) -> CycleCalculationReport:
        evaluations = await self.review_inputs.find_submitted_evaluations(cycle_id)
        logger.info("cycle_calculation_started", cycle_id=cycle_id, evaluations=len(evaluations))

        semaphore = asyncio.Semaphore(self.settings.BATCH_CONCURRENCY)
        outcomes = await asyncio.gather(
            *(self._calculate_one(cycle_id, ev, semaphore) for ev in evaluations),
            return_exceptions=True,
        )

        report = CycleCalculationReport(cycle_id=cycle_id)
        for evaluation, outcome in zip(evaluations, outcomes):
            if isinstance(outcome, WeightConfigurationException):
                logger.error("cycle_calculation_aborted", cycle_id=cycle_id, level=outcome.level)
                raise outcome
            if isinstance(outcome, (ScoreEngineException, RepositoryException)):
                logger.error(
                    "final_score_calculation_failed",
                    cycle_id=cycle_id,
                    employee_id=evaluation.employee_id,
                    error=str(outcome),
                )
                report.results.append(EmployeeCalculationResult(
                    employee_id=evaluation.employee_id,
                    outcome=CalculationOutcome.FAILED,
                    error=str(outcome),
                ))
                continue
            if isinstance(outcome, BaseException):
                raise outcome
            report.results.append(outcome)

        logger.info(
            "cycle_calculation_finished",
            cycle_id=cycle_id,
            calculated=report.calculated_count,
            skipped_locked=report.skipped_count,
            failed=report.failed_count,
        )
        return report

    async def _calculate_one(
        self,
        cycle_id: str,
        evaluation: ManagerEvaluation,
        semaphore: asyncio.Semaphore,
    ) -> EmployeeCalculationResult:
        async with semaphore:
            employee_id = evaluation.employee_id
            existing = await self.repository.find_by_cycle_and_employee(cycle_id, employee_id)
            if existing is not None and existing.locked:
                logger.info("final_score_skipped_locked", cycle_id=cycle_id, employee_id=employee_id)
                return EmployeeCalculationResult(
                    employee_id=employee_id,
                    outcome=CalculationOutcome.SKIPPED_LOCKED,
                    final_score=existing,
                )

            feedbacks = await self.review_inputs.find_peer_feedback(cycle_id, employee_id)
            aggregation = self.aggregator.aggregate(feedbacks)
            final_score = self.calculator.calculate_final_score(evaluation, aggregation)

            if existing is not None:
                # Upsert keyed by (cycle, employee): keep identity, version and delivery history
                final_score.id = existing.id
                final_score.version = existing.version
                for name in _DELIVERY_FIELDS:
                    setattr(final_score, name, getattr(existing, name))

            saved = await self.repository.save(final_score)
            return EmployeeCalculationResult(
                employee_id=employee_id,
                outcome=CalculationOutcome.CALCULATED,
                final_score=saved,
            )

    # ------------------------------------------------------------------
    # Lock axis
    # ------------------------------------------------------------------

    async def lock_cycle_scores(self, cycle_id: str) -> LockReport:
        """
        Lock every unlocked score of the cycle.

        The lock is per score, not atomic across the cycle: a score whose
        save fails (e.g. a concurrent write) stays unlocked and is listed in
        failed_employee_ids; the others are locked.
        """
        scores = await self.repository.find_by_cycle(cycle_id)
        to_lock = [s for s in scores if not s.locked]
        for score in to_lock:
            score.lock()
        outcomes = await asyncio.gather(
            *(self.repository.save(s) for s in to_lock),
            return_exceptions=True,
        )

        failed = []
        for score, outcome in zip(to_lock, outcomes):
            if isinstance(outcome, RepositoryException):
                logger.error(
                    "final_score_lock_failed",
                    cycle_id=cycle_id,
                    employee_id=score.employee_id,
                    error=str(outcome),
                )
                failed.append(score.employee_id)
            elif isinstance(outcome, BaseException):
                raise outcome

        report = LockReport(
            cycle_id=cycle_id,
            total_scores=len(scores),
            newly_locked=len(to_lock) - len(failed),
            locked_at=datetime.now(timezone.utc),
            failed_employee_ids=failed,
        )
        logger.info(
            "cycle_scores_locked",
            cycle_id=cycle_id,
            total_scores=report.total_scores,
            newly_locked=report.newly_locked,
            failed=len(failed),
        )
        return report

    async def lock_final_score(self, final_score_id: UUID) -> FinalScore:
        final_score = await self._require_by_id(final_score_id)
        final_score.lock()
        logger.info("final_score_locked", final_score_id=str(final_score_id))
        return await self.repository.save(final_score)

    async def unlock_final_score(self, final_score_id: UUID) -> FinalScore:
        final_score = await self._require_by_id(final_score_id)
        final_score.unlock()
        logger.info("final_score_unlocked", final_score_id=str(final_score_id))
        return await self.repository.save(final_score)

    # ------------------------------------------------------------------
    # Delivery axis
    # ------------------------------------------------------------------

    async def mark_feedback_delivered(
        self,
        cycle_id: str,
        employee_id: str,
        manager_id: str,
        feedback_notes: Optional[str] = None,
    ) -> FinalScore:
        """Manager delivers feedback to a direct report."""
        employee = await self.directory.get_employee(employee_id)
        if employee is None:
            raise EntityNotFoundException("Employee", employee_id)
        if employee.manager_id != manager_id:
            logger.warning(
                "feedback_delivery_denied",
                cycle_id=cycle_id,
                employee_id=employee_id,
                manager_id=manager_id,
            )
            raise ReviewPermissionException(
                "You can only mark feedback delivered for your direct reports"
            )

        final_score = await self.get_final_score(cycle_id, employee_id)
        final_score.mark_feedback_delivered(manager_id, feedback_notes)
        logger.info(
            "feedback_delivered",
            cycle_id=cycle_id,
            employee_id=employee_id,
            delivered_by=manager_id,
            locked=final_score.locked,
        )
        return await self.repository.save(final_score)

    async def deliver_feedback(
        self,
        final_score_id: UUID,
        delivered_by: str,
        feedback_notes: Optional[str] = None,
    ) -> FinalScore:
        """Delivery by id. Allowed on locked scores; does not change the lock."""
        final_score = await self._require_by_id(final_score_id)
        final_score.mark_feedback_delivered(delivered_by, feedback_notes)
        logger.info(
            "feedback_delivered",
            final_score_id=str(final_score_id),
            delivered_by=delivered_by,
            locked=final_score.locked,
        )
        return await self.repository.save(final_score)

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_final_score(self, cycle_id: str, employee_id: str) -> FinalScore:
        final_score = await self.repository.find_by_cycle_and_employee(cycle_id, employee_id)
        if final_score is None:
            raise EntityNotFoundException("FinalScore", f"{cycle_id}/{employee_id}")
        return final_score

    async def get_team_final_scores(self, cycle_id: str, manager_id: str) -> List[TeamScoreRow]:
        reports = await self.directory.find_direct_reports(manager_id)
        scores = await asyncio.gather(
            *(self.repository.find_by_cycle_and_employee(cycle_id, e.id) for e in reports)
        )

        rows = []
        for employee, score in zip(reports, scores):
            if score is None:
                rows.append(TeamScoreRow(
                    employee_id=employee.id,
                    employee_name=employee.name,
                    level=employee.level,
                    has_score=False,
                    weighted_score=Decimal("0"),
                    percentage_score=Decimal("0"),
                    bonus_tier=BonusTier.BELOW,
                    feedback_delivered=False,
                    locked=False,
                ))
                continue
            rows.append(TeamScoreRow(
                employee_id=employee.id,
                employee_name=employee.name,
                level=employee.level,
                has_score=True,
                weighted_score=score.weighted_score.value,
                percentage_score=score.percentage_score,
                bonus_tier=score.bonus_tier,
                feedback_delivered=score.feedback_delivered,
                locked=score.locked,
            ))
        return rows

    async def _require_by_id(self, final_score_id: UUID) -> FinalScore:
        final_score = await self.repository.find_by_id(final_score_id)
        if final_score is None:
            raise EntityNotFoundException("FinalScore", str(final_score_id))
        return final_score
