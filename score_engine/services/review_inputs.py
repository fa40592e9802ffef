"""
Review Input Source
score_engine/services/review_inputs.py

Supplies submitted manager evaluations and peer feedback per cycle.
"""

from collections import defaultdict
from typing import Dict, List, Protocol, Tuple, runtime_checkable

from score_engine.models.review_inputs import ManagerEvaluation, PeerFeedback


@runtime_checkable
class ReviewInputSource(Protocol):

    async def find_submitted_evaluations(self, cycle_id: str) -> List[ManagerEvaluation]:
        ...

    async def find_peer_feedback(self, cycle_id: str, employee_id: str) -> List[PeerFeedback]:
        ...


class InMemoryReviewInputSource:
    """ReviewInputSource backed by lists. Evaluations keep insertion order."""

    def __init__(self):
        self._evaluations: Dict[str, List[ManagerEvaluation]] = defaultdict(list)
        self._peer_feedback: Dict[Tuple[str, str], List[PeerFeedback]] = defaultdict(list)

    def add_evaluation(self, evaluation: ManagerEvaluation) -> None:
        self._evaluations[evaluation.cycle_id].append(evaluation)

    def add_peer_feedback(self, feedback: PeerFeedback) -> None:
        self._peer_feedback[(feedback.cycle_id, feedback.reviewee_id)].append(feedback)

    async def find_submitted_evaluations(self, cycle_id: str) -> List[ManagerEvaluation]:
        return list(self._evaluations.get(cycle_id, []))

    async def find_peer_feedback(self, cycle_id: str, employee_id: str) -> List[PeerFeedback]:
        return list(self._peer_feedback.get((cycle_id, employee_id), []))
