"""Render council data as plain-text reports."""

from collections.abc import Sequence

from .config import REPORT_RULE_WIDTH
from .models import Council, Member, Position, TallyResult, Vote, VotingMethod
from .text import format_number

RULE = "=" * REPORT_RULE_WIDTH

SUPPORTED_ACTIONS = (
    "create_council",
    "add_member",
    "remove_member",
    "deliberate",
    "vote",
    "get_council",
    "list_councils",
)

NO_COUNCILS = "No councils found. Create one with the create_council action."


def format_created(council: Council) -> str:
    """One-line confirmation for a new council."""
    return (
        f'Council "{council.name}" created successfully with ID {council.id}. '
        f'Topic: "{council.topic}". Voting method: {council.voting_method.value}.'
    )


def format_member_added(council: Council, member: Member) -> str:
    return (
        f'Member "{member.name}" ({member.role.value}) added to council "{council.name}". '
        f"Council now has {len(council.members)} member(s)."
    )


def format_member_removed(council: Council, member: Member) -> str:
    return (
        f'Member "{member.name}" removed from council "{council.name}". '
        f"Council now has {len(council.members)} member(s)."
    )


def format_deliberation(
    council: Council, question: str, positions: Sequence[Position]
) -> str:
    """Render every member's position on a question.

    Args:
        council: Council that deliberated
        question: Sanitized question text
        positions: One position per member, in member order

    Returns:
        Multi-section report
    """
    lines = [
        f'Council Deliberation: "{council.name}"',
        RULE,
        f"Topic: {council.topic}",
        f"Question: {question}",
        f"Members: {len(council.members)}",
        "",
    ]

    for pos in positions:
        role = pos.to_dict()["role"]
        lines.append(f"--- {pos.member_name} ({role}) ---")
        lines.append(f"Position: {pos.position}")
        lines.append(f"Rationale: {pos.rationale}")
        lines.append("")

    return "\n".join(lines)


def format_vote(
    council: Council, proposal: str, votes: Sequence[Vote], tally: TallyResult
) -> str:
    """Render the per-member ballots and the aggregate outcome.

    Weights are shown only for weighted councils.
    """
    show_weight = council.voting_method is VotingMethod.WEIGHTED
    lines = [
        f'Council Vote: "{council.name}"',
        RULE,
        f"Proposal: {proposal}",
        f"Voting Method: {council.voting_method.value}",
        "",
        "Votes:",
    ]

    for vote in votes:
        data = vote.to_dict()
        weight = f" (weight: {format_number(vote.weight)})" if show_weight else ""
        lines.append(f"  {vote.member_name} ({data['role']}): {data['vote'].upper()}{weight}")

    lines.append("")
    lines.append(f"Outcome: {tally.outcome.value.upper()}")
    lines.append(f"Details: {tally.details}")

    return "\n".join(lines)


def format_council(council: Council) -> str:
    """Full council snapshot including the member roster."""
    lines = [
        f'Council: "{council.name}"',
        RULE,
        f"ID: {council.id}",
        f"Topic: {council.topic}",
        f"Voting Method: {council.voting_method.value}",
        f"Created: {council.created_at}",
        f"Members: {len(council.members)}",
    ]

    if council.members:
        lines.extend(["", "Member Roster:", "--------------"])
        for m in council.members:
            lines.append(
                f"  {m.name} ({m.role.value}, weight: {format_number(m.weight)}) - {m.perspective}"
            )

    return "\n".join(lines)


def format_council_list(councils: Sequence[Council]) -> str:
    """Summaries of every council, or the empty-state message."""
    if not councils:
        return NO_COUNCILS

    lines = [f"Councils ({len(councils)})", RULE, ""]
    for c in councils:
        lines.append(f"- {c.name} (ID: {c.id})")
        lines.append(
            f"  Topic: {c.topic} | Method: {c.voting_method.value} | Members: {len(c.members)}"
        )
        lines.append("")

    return "\n".join(lines)
