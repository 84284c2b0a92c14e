"""
Tests for the Tax Data Store.

Verifies:
1. Transitions are pure and replace sections wholesale
2. Completed steps keep set semantics
3. Every transition is written through to persistence
4. Reset restores defaults and clears the snapshot
"""

import pytest

from database.wizard_persistence import InMemoryKeyValueStore, WizardStatePersistence
from models.tax_data import IncomeData, PersonalInfo, TaxDataState
from wizard import store as transitions
from wizard.store import TaxDataStore


@pytest.fixture
def kv_store():
    return InMemoryKeyValueStore()


@pytest.fixture
def persistence(kv_store):
    return WizardStatePersistence(kv_store)


@pytest.fixture
def store(persistence):
    return TaxDataStore(persistence=persistence)


# =============================================================================
# PURE TRANSITION TESTS
# =============================================================================

class TestTransitions:
    """Module-level transition functions."""

    def test_set_section_returns_new_state(self, personal_info):
        """The old state is left untouched."""
        old = TaxDataState()
        new = transitions.set_personal_info(old, personal_info)
        assert new is not old
        assert old.personal_info is None
        assert new.personal_info == personal_info

    def test_set_section_replaces_wholesale(self):
        """No merge with the previous section record."""
        state = transitions.set_income(TaxDataState(), IncomeData(w2_wages="1000", interest_income="50"))
        state = transitions.set_income(state, IncomeData(w2_wages="2000"))
        assert state.income.w2_wages == "2000"
        assert state.income.interest_income == ""

    def test_set_current_step_is_not_clamped(self):
        """The cursor is set as given."""
        assert transitions.set_current_step(TaxDataState(), 9).current_step == 9
        assert transitions.set_current_step(TaxDataState(), 0).current_step == 0

    def test_add_completed_step_idempotent(self):
        """Adding a step twice equals adding it once."""
        once = transitions.add_completed_step(TaxDataState(), 2)
        twice = transitions.add_completed_step(once, 2)
        assert twice.completed_steps == once.completed_steps == [2]

    def test_add_existing_step_returns_same_state(self):
        """An already-completed step yields the very same state object."""
        state = TaxDataState(completed_steps=[1])
        assert transitions.add_completed_step(state, 1) is state

    @pytest.mark.parametrize("step", [1, 2, 3, 4])
    def test_add_completed_step_for_each_step(self, step):
        """Idempotence holds for every valid step."""
        state = TaxDataState()
        for _ in range(3):
            state = transitions.add_completed_step(state, step)
        assert state.completed_steps == [step]

    def test_set_completed_steps_collapses_duplicates(self):
        """Wholesale replacement keeps set semantics."""
        state = transitions.set_completed_steps(TaxDataState(completed_steps=[1]), [1, 2, 2, 3, 4])
        assert state.completed_steps == [1, 2, 3, 4]

    def test_reset_state(self):
        """Reset gives the default state."""
        assert transitions.reset_state() == TaxDataState()


# =============================================================================
# STORE TESTS
# =============================================================================

class TestTaxDataStore:
    """Store ownership and write-through persistence."""

    def test_default_state(self, store):
        """A fresh store starts at step 1 with nothing completed."""
        assert store.current_step == 1
        assert store.completed_steps == []
        assert store.personal_info is None
        assert store.income is None
        assert store.expenses is None
        assert store.salary is None

    def test_in_memory_store(self):
        """A store without persistence works on its own."""
        store = TaxDataStore()
        store.set_current_step(2)
        assert store.current_step == 2

    def test_initial_state_wins_over_persistence(self, persistence):
        """An explicit initial state is used as given."""
        persistence.save(TaxDataState(current_step=3))
        store = TaxDataStore(persistence=persistence, initial_state=TaxDataState(current_step=2))
        assert store.current_step == 2

    def test_write_through(self, store, persistence, personal_info):
        """Each transition is immediately saved."""
        store.set_personal_info(personal_info)
        assert persistence.load().personal_info == personal_info

        store.add_completed_step(1)
        store.set_current_step(2)
        loaded = persistence.load()
        assert loaded.completed_steps == [1]
        assert loaded.current_step == 2

    def test_restores_from_snapshot(self, persistence, personal_info):
        """A new store resumes from the saved snapshot."""
        first = TaxDataStore(persistence=persistence)
        first.set_personal_info(personal_info)
        first.add_completed_step(1)
        first.set_current_step(2)

        second = TaxDataStore(persistence=persistence)
        assert second.state == first.state

    def test_noop_transition_skips_save(self, kv_store, persistence):
        """Re-adding a completed step does not rewrite the snapshot."""
        store = TaxDataStore(persistence=persistence)
        store.add_completed_step(1)
        kv_store.delete(persistence.key)

        store.add_completed_step(1)
        assert kv_store.get(persistence.key) is None

    def test_completed_steps_copy(self, store):
        """Callers cannot mutate the store through the selector."""
        store.add_completed_step(1)
        store.completed_steps.append(3)
        assert store.completed_steps == [1]

    def test_reset_clears_snapshot(self, store, kv_store, persistence):
        """Reset restores defaults and deletes the snapshot."""
        store.set_personal_info(PersonalInfo(full_name="Jane"))
        store.set_completed_steps([1, 2])
        store.set_current_step(3)

        state = store.reset()
        assert state == TaxDataState()
        assert store.state == TaxDataState()
        assert kv_store.get(persistence.key) is None

    def test_completed_steps_stay_within_range(self, store):
        """Normal use never puts a step outside 1..4 in the set."""
        for step in [1, 2, 2, 3, 4, 4]:
            store.add_completed_step(step)
        assert sorted(store.completed_steps) == [1, 2, 3, 4]
        assert len(store.completed_steps) == len(set(store.completed_steps))

    def test_unknown_step_not_marked(self, store, persistence):
        """Completing a step outside 1..4 leaves the state and snapshot alone."""
        store.set_personal_info(PersonalInfo(full_name="Jane"))
        before = store.state
        store.add_completed_step(5)
        store.set_completed_steps([0, 1, 5])

        assert store.completed_steps == [1]
        assert store.add_completed_step(9) == store.state
        assert before.completed_steps == []

        reloaded = persistence.load()
        assert reloaded == store.state
        assert reloaded.personal_info.full_name == "Jane"
