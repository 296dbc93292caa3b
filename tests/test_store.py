"""Tests for CouncilStore."""

import threading

import pytest

from agent_council.errors import CouncilError, ErrorCode
from agent_council.models import Member, Role, VotingMethod
from agent_council.store import CouncilStore


def _member(name, role=Role.ANALYST):
    return Member(name=name, role=role, perspective="data")


class TestCreateAndGet:
    """Tests for create/get/list."""

    def test_create_returns_empty_council(self, store):
        """A new council has an id, no members, and a timestamp."""
        council = store.create("Arch Board", "API design", VotingMethod.WEIGHTED)
        assert council.id
        assert council.members == []
        assert council.voting_method is VotingMethod.WEIGHTED
        assert council.created_at

    def test_get_unknown_returns_none(self, store):
        """Unknown ids return None."""
        assert store.get("nope") is None

    def test_list_preserves_creation_order(self, store):
        """Councils are listed in creation order."""
        ids = [store.create(f"C{i}", "t", VotingMethod.MAJORITY).id for i in range(3)]
        assert [c.id for c in store.list()] == ids

    def test_snapshots_are_isolated(self, store):
        """Mutating a returned council does not change the stored one."""
        council = store.create("C", "t", VotingMethod.MAJORITY)
        council.members.append(_member("Intruder"))
        assert store.get(council.id).members == []

    def test_len_and_clear(self, store):
        """clear() empties the store."""
        store.create("A", "t", VotingMethod.MAJORITY)
        store.create("B", "t", VotingMethod.MAJORITY)
        assert len(store) == 2
        store.clear()
        assert len(store) == 0
        assert store.list() == []


class TestMembers:
    """Tests for add_member/remove_member."""

    def test_add_appends_in_order(self, store):
        """Members are appended in order."""
        council = store.create("C", "t", VotingMethod.MAJORITY)
        store.add_member(council.id, _member("Alice"))
        updated = store.add_member(council.id, _member("Bob"))
        assert [m.name for m in updated.members] == ["Alice", "Bob"]

    def test_duplicate_is_case_insensitive(self, store):
        """Names differing only in case are duplicates."""
        council = store.create("C", "t", VotingMethod.MAJORITY)
        store.add_member(council.id, _member("Alice"))
        with pytest.raises(CouncilError) as exc:
            store.add_member(council.id, _member("alice", Role.CRITIC))
        assert exc.value.code is ErrorCode.DUPLICATE_MEMBER
        assert len(store.get(council.id).members) == 1

    def test_add_to_unknown_council(self, store):
        """Adding to an unknown council raises."""
        with pytest.raises(CouncilError) as exc:
            store.add_member("missing", _member("Alice"))
        assert exc.value.code is ErrorCode.COUNCIL_NOT_FOUND

    def test_remove_case_insensitive(self, store):
        """Removal matches names case-insensitively."""
        council = store.create("C", "t", VotingMethod.MAJORITY)
        store.add_member(council.id, _member("Alice"))
        store.add_member(council.id, _member("Bob"))
        removed, updated = store.remove_member(council.id, "ALICE")
        assert removed.name == "Alice"
        assert [m.name for m in updated.members] == ["Bob"]

    def test_remove_unknown_member(self, store):
        """Removing an unknown member raises."""
        council = store.create("C", "t", VotingMethod.MAJORITY)
        with pytest.raises(CouncilError) as exc:
            store.remove_member(council.id, "Ghost")
        assert exc.value.code is ErrorCode.MEMBER_NOT_FOUND


class TestConcurrency:
    """Concurrent mutations keep member names unique."""

    def test_concurrent_duplicate_adds_only_one_succeeds(self):
        """Racing adds of one name let exactly one through."""
        store = CouncilStore()
        council = store.create("C", "t", VotingMethod.MAJORITY)
        num_threads = 16
        barrier = threading.Barrier(num_threads)
        successes = []
        failures = []
        results_lock = threading.Lock()

        def add():
            barrier.wait()
            try:
                store.add_member(council.id, _member("Alice"))
            except CouncilError as e:
                with results_lock:
                    failures.append(e.code)
            else:
                with results_lock:
                    successes.append(True)

        threads = [threading.Thread(target=add) for _ in range(num_threads)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(successes) == 1
        assert failures == [ErrorCode.DUPLICATE_MEMBER] * (num_threads - 1)
        assert len(store.get(council.id).members) == 1

    def test_concurrent_distinct_adds_all_land(self):
        """Concurrent adds of distinct names are all kept."""
        store = CouncilStore()
        council = store.create("C", "t", VotingMethod.MAJORITY)

        def add(i):
            store.add_member(council.id, _member(f"Member {i}"))

        threads = [threading.Thread(target=add, args=(i,)) for i in range(50)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(store.get(council.id).members) == 50
