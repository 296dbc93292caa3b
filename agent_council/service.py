"""Council service: the seven council actions behind one entry point.

Every action validates its parameters before touching the store, so a failed
call never leaves a council half-modified. Failures come back as an
``ActionResult`` with ``success: False`` and an error code; they are never
raised to the caller.
"""

import functools
import inspect
import logging
import math
from collections.abc import Callable, Mapping
from typing import Any

from . import report
from .errors import CouncilError, ErrorCode
from .logging_config import set_council_id
from .models import ActionResult, Council, Member, Role, Vote, VotingMethod
from .roles import position_for, vote_for
from .store import CouncilStore
from .tally import tally_votes
from .telemetry import mark_failed, trace_span
from .text import is_blank, sanitize

logger = logging.getLogger(__name__)

_SUPPORTED = ", ".join(report.SUPPORTED_ACTIONS)
_ROLES = ", ".join(r.value for r in Role)
_METHODS = ", ".join(m.value for m in VotingMethod)


def _failure(error: CouncilError) -> ActionResult:
    return ActionResult(
        result=f"Error: {error.message}",
        metadata={"success": False, "error": error.code.value},
    )


def _action(name: str) -> Callable:
    """Wrap a handler: trace it, tag logs with its council, convert errors."""

    def decorator(func: Callable[..., ActionResult]) -> Callable[..., ActionResult]:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> ActionResult:
            council_id = signature.bind(*args, **kwargs).arguments.get("council_id")
            if not isinstance(council_id, str):
                council_id = None

            set_council_id(council_id)
            try:
                with trace_span(f"council.{name}", {"council.action": name}) as span:
                    if council_id:
                        span.set_attribute("council.id", council_id)
                    try:
                        result = func(*args, **kwargs)
                    except CouncilError as e:
                        mark_failed(span, e.code.value)
                        logger.info("%s failed: %s", name, e.code.value)
                        return _failure(e)
                    logger.info("%s succeeded", name)
                    return result
            finally:
                set_council_id(None)

        return wrapper

    return decorator


def _require_text(value: Any, code: ErrorCode, message: str) -> str:
    """Trimmed, sanitized text, or CouncilError if value is blank."""
    if is_blank(value):
        raise CouncilError(code, message)
    return sanitize(value.strip())


def _require_council_id(council_id: Any, action: str) -> str:
    if not council_id or not isinstance(council_id, str):
        raise CouncilError(
            ErrorCode.MISSING_COUNCIL_ID,
            f"The 'councilId' parameter is required for {action}.",
        )
    return council_id


def _parse_voting_method(voting_method: Any) -> VotingMethod:
    try:
        return VotingMethod(voting_method or VotingMethod.MAJORITY)
    except (TypeError, ValueError):
        raise CouncilError(
            ErrorCode.INVALID_VOTING_METHOD,
            f"Invalid voting method '{sanitize(str(voting_method))}'. "
            f"Must be one of: {_METHODS}.",
        ) from None


def _parse_weight(weight: Any) -> float:
    """Member weight, defaulting to 1.0 when absent, non-numeric, negative or infinite."""
    if isinstance(weight, bool) or not isinstance(weight, (int, float)):
        return 1.0
    try:
        weight = float(weight)
    except OverflowError:
        return 1.0
    if not math.isfinite(weight) or weight < 0:
        return 1.0
    return weight


def _parse_member(member: Any) -> Member:
    """Validate a member payload, checking fields in a fixed order."""
    if member is None or not isinstance(member, Mapping):
        raise CouncilError(
            ErrorCode.MISSING_MEMBER,
            "The 'member' parameter is required and must be an object "
            "with name, role, and perspective.",
        )

    name = _require_text(
        member.get("name"), ErrorCode.MISSING_MEMBER_NAME, "Member 'name' is required."
    )

    raw_role = member.get("role")
    if not raw_role or not isinstance(raw_role, str):
        raise CouncilError(ErrorCode.MISSING_MEMBER_ROLE, "Member 'role' is required.")
    try:
        role = Role(raw_role)
    except ValueError:
        raise CouncilError(
            ErrorCode.INVALID_ROLE,
            f"Invalid role '{sanitize(raw_role)}'. Must be one of: {_ROLES}.",
        ) from None

    perspective = _require_text(
        member.get("perspective"),
        ErrorCode.MISSING_MEMBER_PERSPECTIVE,
        "Member 'perspective' is required.",
    )

    return Member(
        name=name,
        role=role,
        perspective=perspective,
        weight=_parse_weight(member.get("weight")),
    )


class CouncilService:
    """Facade over a CouncilStore exposing the council actions.

    Args:
        store: Store to operate on; a fresh one is created if omitted
    """

    def __init__(self, store: CouncilStore | None = None) -> None:
        self.store = store if store is not None else CouncilStore()

    def _load(self, council_id: str) -> Council:
        council = self.store.get(council_id)
        if council is None:
            raise CouncilError(
                ErrorCode.COUNCIL_NOT_FOUND,
                f"Council with ID '{sanitize(council_id)}' not found.",
            )
        return council

    @_action("create_council")
    def create_council(
        self, name: Any = None, topic: Any = None, voting_method: Any = None
    ) -> ActionResult:
        """Create an empty council. voting_method defaults to majority."""
        clean_name = _require_text(
            name, ErrorCode.MISSING_NAME, "The 'name' parameter is required for create_council."
        )
        clean_topic = _require_text(
            topic, ErrorCode.MISSING_TOPIC, "The 'topic' parameter is required for create_council."
        )
        method = _parse_voting_method(voting_method)

        council = self.store.create(clean_name, clean_topic, method)
        logger.info("Created council %s with voting method %s", council.id, method.value)

        return ActionResult(
            result=report.format_created(council),
            metadata={
                "success": True,
                "action": "create_council",
                "councilId": council.id,
                "council": council.to_dict(),
            },
        )

    @_action("add_member")
    def add_member(self, council_id: Any = None, member: Any = None) -> ActionResult:
        """Append a validated member to an existing council."""
        council_id = _require_council_id(council_id, "add_member")
        self._load(council_id)
        new_member = _parse_member(member)

        council = self.store.add_member(council_id, new_member)

        return ActionResult(
            result=report.format_member_added(council, new_member),
            metadata={
                "success": True,
                "action": "add_member",
                "councilId": council_id,
                "member": new_member.to_dict(),
                "memberCount": len(council.members),
            },
        )

    @_action("remove_member")
    def remove_member(self, council_id: Any = None, member_name: Any = None) -> ActionResult:
        """Remove the first member whose name matches case-insensitively."""
        council_id = _require_council_id(council_id, "remove_member")
        self._load(council_id)
        name = _require_text(
            member_name,
            ErrorCode.MISSING_MEMBER_NAME,
            "The 'memberName' parameter is required for remove_member.",
        )

        removed, council = self.store.remove_member(council_id, name)

        return ActionResult(
            result=report.format_member_removed(council, removed),
            metadata={
                "success": True,
                "action": "remove_member",
                "councilId": council_id,
                "removedMember": removed.to_dict(),
                "memberCount": len(council.members),
            },
        )

    @_action("deliberate")
    def deliberate(self, council_id: Any = None, question: Any = None) -> ActionResult:
        """Generate one position per member, in member order."""
        council_id = _require_council_id(council_id, "deliberate")
        council = self._load(council_id)
        clean_question = _require_text(
            question,
            ErrorCode.MISSING_QUESTION,
            "The 'question' parameter is required for deliberate.",
        )
        if not council.members:
            raise CouncilError(
                ErrorCode.NO_MEMBERS,
                f'Council "{council.name}" has no members. Add members before deliberating.',
            )

        positions = [position_for(m, clean_question) for m in council.members]

        return ActionResult(
            result=report.format_deliberation(council, clean_question, positions),
            metadata={
                "success": True,
                "action": "deliberate",
                "councilId": council_id,
                "question": clean_question,
                "positions": [p.to_dict() for p in positions],
                "memberCount": len(council.members),
            },
        )

    @_action("vote")
    def vote(self, council_id: Any = None, proposal: Any = None) -> ActionResult:
        """Collect one vote per member and tally them with the council's method."""
        council_id = _require_council_id(council_id, "vote")
        council = self._load(council_id)
        clean_proposal = _require_text(
            proposal,
            ErrorCode.MISSING_PROPOSAL,
            "The 'proposal' parameter is required for vote.",
        )
        if not council.members:
            raise CouncilError(
                ErrorCode.NO_MEMBERS,
                f'Council "{council.name}" has no members. Add members before voting.',
            )

        votes = [
            Vote(m.name, m.role, vote_for(m, clean_proposal), m.weight)
            for m in council.members
        ]
        tally = tally_votes(votes, council.voting_method)
        logger.info(
            "Council %s vote outcome: %s (margin %s)",
            council_id,
            tally.outcome.value,
            tally.margin,
        )

        return ActionResult(
            result=report.format_vote(council, clean_proposal, votes, tally),
            metadata={
                "success": True,
                "action": "vote",
                "councilId": council_id,
                "proposal": clean_proposal,
                "votes": [v.to_dict() for v in votes],
                "outcome": tally.outcome.value,
                "margin": tally.margin,
                "votingMethod": council.voting_method.value,
            },
        )

    @_action("get_council")
    def get_council(self, council_id: Any = None) -> ActionResult:
        """Full snapshot of one council."""
        council_id = _require_council_id(council_id, "get_council")
        council = self._load(council_id)

        return ActionResult(
            result=report.format_council(council),
            metadata={
                "success": True,
                "action": "get_council",
                "council": council.to_dict(),
            },
        )

    @_action("list_councils")
    def list_councils(self) -> ActionResult:
        """Summaries of every council. An empty store is not an error."""
        councils = self.store.list()

        return ActionResult(
            result=report.format_council_list(councils),
            metadata={
                "success": True,
                "action": "list_councils",
                "count": len(councils),
                "councils": [c.summary() for c in councils],
            },
        )

    def execute(self, params: Mapping[str, Any] | None) -> ActionResult:
        """Dispatch a flat ``{action, ...params}`` request.

        Args:
            params: Action tag plus camelCase parameters

        Returns:
            ActionResult for the action, or MISSING_ACTION / UNKNOWN_ACTION
        """
        params = params or {}
        action = params.get("action")

        if not action:
            logger.info("Rejected request without an action")
            return _failure(
                CouncilError(
                    ErrorCode.MISSING_ACTION,
                    f"The 'action' parameter is required. Supported actions: {_SUPPORTED}.",
                )
            )

        handlers: dict[str, Callable[[], ActionResult]] = {
            "create_council": lambda: self.create_council(
                name=params.get("name"),
                topic=params.get("topic"),
                voting_method=params.get("votingMethod"),
            ),
            "add_member": lambda: self.add_member(
                council_id=params.get("councilId"), member=params.get("member")
            ),
            "remove_member": lambda: self.remove_member(
                council_id=params.get("councilId"), member_name=params.get("memberName")
            ),
            "deliberate": lambda: self.deliberate(
                council_id=params.get("councilId"), question=params.get("question")
            ),
            "vote": lambda: self.vote(
                council_id=params.get("councilId"), proposal=params.get("proposal")
            ),
            "get_council": lambda: self.get_council(council_id=params.get("councilId")),
            "list_councils": self.list_councils,
        }

        handler = handlers.get(action) if isinstance(action, str) else None
        if handler is None:
            logger.info("Rejected unknown action %r", action)
            return _failure(
                CouncilError(
                    ErrorCode.UNKNOWN_ACTION,
                    f"Unknown action '{sanitize(str(action))}'. Supported actions: {_SUPPORTED}.",
                )
            )

        return handler()
