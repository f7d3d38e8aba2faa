"""Tests for reducer config module."""
import dataclasses

import pytest

from formstate import (
    BLUR, CHANGE, FOCUS, INITIALIZE, RESET,
    FormReducer,
    ReducerConfig,
    get_reducer_config,
    reset_reducer_config,
    set_reducer_config,
)


def test_default_config():
    """Test the defaults of a fresh config."""
    config = ReducerConfig()
    assert config.value_mutating_actions == frozenset({BLUR, CHANGE, INITIALIZE, RESET})
    assert config.strict_paths is True


def test_config_is_frozen():
    config = ReducerConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.strict_paths = False


def test_with_changes_returns_copy():
    """Test with_changes() leaves the original alone and freezes action sets."""
    config = ReducerConfig()
    changed = config.with_changes(value_mutating_actions=[FOCUS], strict_paths=False)
    assert changed.value_mutating_actions == frozenset({FOCUS})
    assert isinstance(changed.value_mutating_actions, frozenset)
    assert changed.strict_paths is False
    assert config.strict_paths is True


def test_set_and_get_reducer_config():
    """Test setting and getting the process-wide config."""
    config = ReducerConfig(strict_paths=False)
    set_reducer_config(config)
    assert get_reducer_config() is config


def test_override_wins():
    set_reducer_config(ReducerConfig(strict_paths=False))
    override = ReducerConfig()
    assert get_reducer_config(override) is override


def test_reset_reducer_config():
    set_reducer_config(ReducerConfig(strict_paths=False))
    reset_reducer_config()
    assert get_reducer_config() == ReducerConfig()


def test_reducer_follows_process_wide_config():
    """A reducer without its own config sees later changes."""
    reducer = FormReducer()
    config = ReducerConfig(strict_paths=False)
    set_reducer_config(config)
    assert reducer.config is config


def test_reducer_with_own_config():
    config = ReducerConfig(strict_paths=False)
    reducer = FormReducer(config)
    set_reducer_config(ReducerConfig())
    assert reducer.config is config
