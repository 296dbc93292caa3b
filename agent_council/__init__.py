"""Agent Council: role-typed virtual councils that deliberate and vote."""

__version__ = "0.1.0"

from .errors import CouncilError, ErrorCode
from .models import (
    ActionResult,
    Council,
    Member,
    Outcome,
    Position,
    Role,
    TallyResult,
    Vote,
    VoteChoice,
    VotingMethod,
)
from .service import CouncilService
from .store import CouncilStore
from .tally import tally_votes

__all__ = [
    "ActionResult",
    "Council",
    "CouncilError",
    "CouncilService",
    "CouncilStore",
    "ErrorCode",
    "Member",
    "Outcome",
    "Position",
    "Role",
    "TallyResult",
    "Vote",
    "VoteChoice",
    "VotingMethod",
    "tally_votes",
]
