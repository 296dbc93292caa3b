"""Shared test fixtures.

Each test gets its own CouncilService with an empty store, so no council
leaks between tests.
"""

import pytest

from agent_council.service import CouncilService
from agent_council.store import CouncilStore

STANDARD_MEMBERS = [
    {"name": "Analyst Ann", "role": "analyst", "perspective": "metrics"},
    {"name": "Critic Carl", "role": "critic", "perspective": "risk assessment"},
    {"name": "Optimist Olive", "role": "optimist", "perspective": "growth"},
    {"name": "Pessimist Pete", "role": "pessimist", "perspective": "failure modes"},
    {"name": "Expert Eve", "role": "domain_expert", "perspective": "engineering"},
    {"name": "Devil Dave", "role": "devil_advocate", "perspective": "contrarian view"},
]


@pytest.fixture
def store():
    return CouncilStore()


@pytest.fixture
def service(store):
    return CouncilService(store)


@pytest.fixture
def make_council(service):
    """Create a council through execute() and return its id."""

    def _make(voting_method="majority", members=(), **overrides):
        params = {
            "action": "create_council",
            "name": "Test Council",
            "topic": "Test decisions",
            "votingMethod": voting_method,
            **overrides,
        }
        created = service.execute(params)
        assert created.success, created.result
        council_id = created.metadata["councilId"]
        for member in members:
            added = service.execute(
                {"action": "add_member", "councilId": council_id, "member": member}
            )
            assert added.success, added.result
        return council_id

    return _make


@pytest.fixture
def standard_members():
    """One member per role, in role order."""
    return [dict(m) for m in STANDARD_MEMBERS]
