"""Vote aggregation for the three voting methods."""

import math
from collections.abc import Sequence

from .models import Outcome, TallyResult, Vote, VoteChoice, VotingMethod
from .text import format_number

ALL_ABSTAINED = "All members abstained. No decision reached."
ZERO_WEIGHT = "Total weight is zero. No decision reached."


def round_margin(value: float) -> float:
    """Round to two decimals, halves toward positive infinity.

    Values too large to scale are returned unchanged.
    """
    scaled = value * 100
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled + 0.5) / 100


def _compare(approve: float, reject: float) -> Outcome:
    if approve > reject:
        return Outcome.APPROVED
    if approve < reject:
        return Outcome.REJECTED
    return Outcome.TIED


def _tally_majority(approve: int, reject: int, abstain: int) -> TallyResult:
    if approve + reject == 0:
        return TallyResult(Outcome.NO_DECISION, 0, ALL_ABSTAINED)

    margin = approve - reject
    return TallyResult(
        outcome=_compare(approve, reject),
        margin=margin,
        details=(
            f"Majority vote: {approve} approve, {reject} reject, "
            f"{abstain} abstain. Margin: {margin}."
        ),
    )


def _tally_unanimous(approve: int, reject: int, abstain: int) -> TallyResult:
    if approve + reject == 0:
        return TallyResult(Outcome.NO_DECISION, 0, ALL_ABSTAINED)

    if reject == 0:
        return TallyResult(
            outcome=Outcome.APPROVED,
            margin=approve,
            details=f"Unanimously approved ({approve} approve, {abstain} abstain).",
        )
    return TallyResult(
        outcome=Outcome.REJECTED,
        margin=reject,
        details=f"Not unanimous: {approve} approve, {reject} reject, {abstain} abstain.",
    )


def _tally_weighted(votes: Sequence[Vote]) -> TallyResult:
    approve_weight = sum(v.weight for v in votes if v.vote is VoteChoice.APPROVE)
    reject_weight = sum(v.weight for v in votes if v.vote is VoteChoice.REJECT)
    # Abstainers count toward the total but toward neither side.
    total_weight = sum(v.weight for v in votes)

    if total_weight == 0:
        return TallyResult(Outcome.NO_DECISION, 0, ZERO_WEIGHT)

    margin = round_margin(approve_weight - reject_weight)
    return TallyResult(
        outcome=_compare(approve_weight, reject_weight),
        margin=margin,
        details=(
            f"Weighted tally: approve={format_number(approve_weight)}, "
            f"reject={format_number(reject_weight)}, "
            f"total={format_number(total_weight)}. Margin: {format_number(margin)}."
        ),
    )


def tally_votes(votes: Sequence[Vote], method: VotingMethod) -> TallyResult:
    """Aggregate cast votes under a voting method.

    Pure and deterministic. Abstentions are excluded from the
    majority/unanimous comparison; an all-abstain ballot yields
    ``no_decision`` with margin 0. Under ``weighted`` only a zero total weight
    yields ``no_decision``.

    Args:
        votes: Cast votes, normally one per member
        method: Aggregation rule

    Returns:
        TallyResult with outcome, margin, and a details summary
    """
    if method is VotingMethod.WEIGHTED:
        return _tally_weighted(votes)

    approve = sum(1 for v in votes if v.vote is VoteChoice.APPROVE)
    reject = sum(1 for v in votes if v.vote is VoteChoice.REJECT)
    abstain = sum(1 for v in votes if v.vote is VoteChoice.ABSTAIN)

    if method is VotingMethod.UNANIMOUS:
        return _tally_unanimous(approve, reject, abstain)
    return _tally_majority(approve, reject, abstain)
