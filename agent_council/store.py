"""In-memory storage for councils.

The store owns every Council; callers receive copies, so the only way to
change a council is through the methods below. All access is serialized by a
single re-entrant lock, which keeps the member-name uniqueness check and the
append it guards atomic when the service is shared across threads.
"""

import logging
import threading
from dataclasses import replace
from datetime import datetime, timezone

from .errors import CouncilError, ErrorCode
from .models import Council, Member, VotingMethod
from .text import generate_council_id, sanitize

logger = logging.getLogger(__name__)


def _snapshot(council: Council) -> Council:
    return replace(council, members=list(council.members))


class CouncilStore:
    """Process-lifetime mapping of council id to Council."""

    def __init__(self) -> None:
        self._councils: dict[str, Council] = {}
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._councils)

    def _require(self, council_id: str) -> Council:
        council = self._councils.get(council_id)
        if council is None:
            raise CouncilError(
                ErrorCode.COUNCIL_NOT_FOUND,
                f"Council with ID '{sanitize(council_id)}' not found.",
            )
        return council

    def create(self, name: str, topic: str, voting_method: VotingMethod) -> Council:
        """Create a council with no members.

        Args:
            name: Display name, already sanitized
            topic: Topic, already sanitized
            voting_method: Aggregation rule, fixed for the council's lifetime

        Returns:
            Snapshot of the new council
        """
        council = Council(
            id=generate_council_id(),
            name=name,
            topic=topic,
            voting_method=voting_method,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        with self._lock:
            self._councils[council.id] = council
        logger.debug("Stored council %s", council.id)
        return _snapshot(council)

    def get(self, council_id: str) -> Council | None:
        """Load a council snapshot, or None if the id is unknown."""
        with self._lock:
            council = self._councils.get(council_id)
            return _snapshot(council) if council is not None else None

    def add_member(self, council_id: str, member: Member) -> Council:
        """Append a member to a council.

        Raises:
            CouncilError: COUNCIL_NOT_FOUND, or DUPLICATE_MEMBER when a member
                with a case-insensitively equal name already exists
        """
        with self._lock:
            council = self._require(council_id)
            if council.find_member(member.name) is not None:
                raise CouncilError(
                    ErrorCode.DUPLICATE_MEMBER,
                    f"A member named '{member.name}' already exists in this council.",
                )
            council.members.append(member)
            return _snapshot(council)

    def remove_member(self, council_id: str, member_name: str) -> tuple[Member, Council]:
        """Remove the first member whose name matches case-insensitively.

        Returns:
            Tuple of (removed member, council snapshot after removal)

        Raises:
            CouncilError: COUNCIL_NOT_FOUND or MEMBER_NOT_FOUND
        """
        with self._lock:
            council = self._require(council_id)
            idx = council.find_member(member_name)
            if idx is None:
                raise CouncilError(
                    ErrorCode.MEMBER_NOT_FOUND,
                    f"Member '{member_name}' not found in council \"{council.name}\".",
                )
            removed = council.members.pop(idx)
            return removed, _snapshot(council)

    def list(self) -> list[Council]:
        """Snapshots of every council in creation order."""
        with self._lock:
            return [_snapshot(c) for c in self._councils.values()]

    def clear(self) -> None:
        """Drop every council. Intended for test isolation."""
        with self._lock:
            self._councils.clear()
