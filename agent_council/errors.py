"""Error codes surfaced by council actions."""

from enum import Enum


class ErrorCode(str, Enum):
    """Caller-input and lookup failures. None of them are transient."""

    MISSING_ACTION = "MISSING_ACTION"
    UNKNOWN_ACTION = "UNKNOWN_ACTION"
    MISSING_NAME = "MISSING_NAME"
    MISSING_TOPIC = "MISSING_TOPIC"
    INVALID_VOTING_METHOD = "INVALID_VOTING_METHOD"
    MISSING_COUNCIL_ID = "MISSING_COUNCIL_ID"
    COUNCIL_NOT_FOUND = "COUNCIL_NOT_FOUND"
    MISSING_MEMBER = "MISSING_MEMBER"
    # Also raised by remove_member when the memberName parameter is absent.
    MISSING_MEMBER_NAME = "MISSING_MEMBER_NAME"
    MISSING_MEMBER_ROLE = "MISSING_MEMBER_ROLE"
    INVALID_ROLE = "INVALID_ROLE"
    MISSING_MEMBER_PERSPECTIVE = "MISSING_MEMBER_PERSPECTIVE"
    DUPLICATE_MEMBER = "DUPLICATE_MEMBER"
    MISSING_QUESTION = "MISSING_QUESTION"
    MISSING_PROPOSAL = "MISSING_PROPOSAL"
    NO_MEMBERS = "NO_MEMBERS"
    MEMBER_NOT_FOUND = "MEMBER_NOT_FOUND"


NOT_FOUND_CODES = frozenset({ErrorCode.COUNCIL_NOT_FOUND, ErrorCode.MEMBER_NOT_FOUND})


class CouncilError(Exception):
    """A council action failed validation or lookup.

    Args:
        code: Machine-readable error code
        message: Description shown to the caller, without the "Error: " prefix
    """

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"CouncilError({self.code.value!r}, {self.message!r})"
