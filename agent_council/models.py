"""Data models for councils, members, and the ephemeral results of a session."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Role(str, Enum):
    """Fixed role tags a council member can hold."""

    ANALYST = "analyst"
    CRITIC = "critic"
    OPTIMIST = "optimist"
    PESSIMIST = "pessimist"
    DOMAIN_EXPERT = "domain_expert"
    DEVIL_ADVOCATE = "devil_advocate"


class VotingMethod(str, Enum):
    """Aggregation rules a council can be created with."""

    MAJORITY = "majority"
    UNANIMOUS = "unanimous"
    WEIGHTED = "weighted"


class VoteChoice(str, Enum):
    """A single member's ballot."""

    APPROVE = "approve"
    REJECT = "reject"
    ABSTAIN = "abstain"


class Outcome(str, Enum):
    """Aggregate result of a tally."""

    APPROVED = "approved"
    REJECTED = "rejected"
    TIED = "tied"
    NO_DECISION = "no_decision"


@dataclass(frozen=True)
class Member:
    """A role-typed council participant. Never mutated after creation."""

    name: str
    role: Role
    perspective: str
    weight: float = 1.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "role": self.role.value,
            "perspective": self.perspective,
            "weight": self.weight,
        }


@dataclass
class Council:
    """A named group of members deliberating on a shared topic."""

    id: str
    name: str
    topic: str
    voting_method: VotingMethod
    created_at: str
    members: list[Member] = field(default_factory=list)

    def find_member(self, name: str) -> int | None:
        """Index of the first member whose name matches case-insensitively."""
        wanted = name.lower()
        for idx, member in enumerate(self.members):
            if member.name.lower() == wanted:
                return idx
        return None

    def summary(self) -> dict[str, Any]:
        """Lightweight listing entry."""
        return {
            "id": self.id,
            "name": self.name,
            "topic": self.topic,
            "votingMethod": self.voting_method.value,
            "memberCount": len(self.members),
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "topic": self.topic,
            "votingMethod": self.voting_method.value,
            "members": [m.to_dict() for m in self.members],
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class Position:
    """One member's templated stance on a question."""

    member_name: str
    role: Role | str
    position: str
    rationale: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "memberName": self.member_name,
            "role": self.role.value if isinstance(self.role, Role) else self.role,
            "position": self.position,
            "rationale": self.rationale,
        }


@dataclass(frozen=True)
class Vote:
    """One member's ballot on a proposal."""

    member_name: str
    role: Role | str
    vote: VoteChoice
    weight: float = 1.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "memberName": self.member_name,
            "role": self.role.value if isinstance(self.role, Role) else self.role,
            "vote": self.vote.value,
            "weight": self.weight,
        }


@dataclass(frozen=True)
class TallyResult:
    """Aggregate outcome of a vote."""

    outcome: Outcome
    margin: int | float
    details: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "outcome": self.outcome.value,
            "margin": self.margin,
            "details": self.details,
        }


@dataclass
class ActionResult:
    """Envelope returned by every service action.

    ``result`` is the human-readable report; ``metadata`` carries
    ``success`` plus either ``error`` or the action's structured payload.
    """

    result: str
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        return bool(self.metadata.get("success"))

    @property
    def error(self) -> str | None:
        return self.metadata.get("error")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"result": self.result, "metadata": self.metadata}
