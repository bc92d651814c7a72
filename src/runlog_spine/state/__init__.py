"""Run and executable lookups."""

from runlog_spine.state.manager import InMemoryStateManager, StateManager

__all__ = ["InMemoryStateManager", "StateManager"]
