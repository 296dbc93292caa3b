"""Role policy: how each role argues and how it votes.

Positions and votes are fully determined by the member's role. The question
or proposal only appears as quoted text; it never changes the outcome.
"""

from dataclasses import dataclass

from .models import Member, Position, Role, VoteChoice


@dataclass(frozen=True)
class RoleTemplate:
    """Position label and rationale sentences for one role.

    ``opening`` is formatted with ``ctx``, ``name`` and ``question``; the
    three follow-up sentences are fixed.
    """

    position: str
    opening: str
    sentences: tuple[str, str, str]
    vote: VoteChoice


ROLE_POLICY: dict[Role, RoleTemplate] = {
    Role.ANALYST: RoleTemplate(
        position="Requires further data analysis",
        opening='As an analyst,{ctx} {name} evaluates "{question}" through a data-driven lens.',
        sentences=(
            "Pros: Structured approaches tend to yield measurable outcomes and clear benchmarks.",
            "Cons: Insufficient data may lead to premature conclusions.",
            "Recommendation: Gather quantitative evidence before committing to a direction.",
        ),
        vote=VoteChoice.ABSTAIN,
    ),
    Role.CRITIC: RoleTemplate(
        position="Identifies significant risks",
        opening='As a critic,{ctx} {name} scrutinizes "{question}" for weaknesses.',
        sentences=(
            "Key risks: Hidden complexity, resource underestimation, and unforeseen dependencies.",
            "Potential failure modes should be mapped before proceeding.",
            "Stress-testing assumptions is essential to avoid costly mistakes.",
        ),
        vote=VoteChoice.REJECT,
    ),
    Role.OPTIMIST: RoleTemplate(
        position="Sees strong opportunity",
        opening='As an optimist,{ctx} {name} views "{question}" as an opportunity.',
        sentences=(
            "This direction could unlock significant value and open new possibilities.",
            "The potential upside outweighs the risks when managed properly.",
            "Early action gives a competitive advantage and builds momentum.",
        ),
        vote=VoteChoice.APPROVE,
    ),
    Role.PESSIMIST: RoleTemplate(
        position="Warns of potential pitfalls",
        opening='As a pessimist,{ctx} {name} warns about pitfalls in "{question}".',
        sentences=(
            "Worst-case scenarios include resource waste, missed deadlines, and scope creep.",
            "Historical precedent suggests similar initiatives often underperform expectations.",
            "A cautious, phased approach with clear exit criteria is advised.",
        ),
        vote=VoteChoice.REJECT,
    ),
    Role.DOMAIN_EXPERT: RoleTemplate(
        position="Provides technical assessment",
        opening='As a domain expert,{ctx} {name} assesses "{question}" from a technical standpoint.',
        sentences=(
            "Technical feasibility depends on current capabilities and infrastructure readiness.",
            "Industry best practices suggest a modular approach with clear integration points.",
            "Key technical considerations must be addressed in the design phase.",
        ),
        vote=VoteChoice.APPROVE,
    ),
    Role.DEVIL_ADVOCATE: RoleTemplate(
        position="Challenges the prevailing view",
        opening=(
            "As devil's advocate,{ctx} {name} deliberately challenges "
            'the consensus on "{question}".'
        ),
        sentences=(
            "What if the opposite approach is actually correct?",
            "The group may be suffering from confirmation bias or groupthink.",
            "Consider the contrarian position: doing nothing may be the optimal strategy.",
        ),
        vote=VoteChoice.REJECT,
    ),
}

if set(ROLE_POLICY) != set(Role):
    raise RuntimeError("ROLE_POLICY must cover every Role")

GENERAL_POSITION = "General perspective"


def _perspective_clause(member: Member) -> str:
    if member.perspective:
        return f" Given their focus on {member.perspective},"
    return ""


def position_for(member: Member, question: str) -> Position:
    """Build the member's position on an already-sanitized question."""
    ctx = _perspective_clause(member)
    template = ROLE_POLICY.get(member.role)

    if template is None:
        rationale = (
            f'{member.name} considers "{question}" from a general perspective.{ctx} '
            "Multiple factors should be weighed before reaching a conclusion."
        )
        return Position(member.name, member.role, GENERAL_POSITION, rationale)

    opening = template.opening.format(ctx=ctx, name=member.name, question=question)
    rationale = " ".join((opening, *template.sentences))
    return Position(member.name, member.role, template.position, rationale)


def vote_for(member: Member, proposal: str) -> VoteChoice:
    """Return the member's ballot. Depends on role only, never on the proposal."""
    template = ROLE_POLICY.get(member.role)
    if template is None:
        return VoteChoice.ABSTAIN
    return template.vote
