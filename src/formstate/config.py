"""
Reducer configuration.

A single process-wide ReducerConfig is used by every reducer that was not
given its own. Reducers constructed with an explicit config ignore the
process-wide value.

Default behavior: normalize after BLUR, CHANGE, INITIALIZE and RESET, and
treat malformed field keys as errors when projecting values.
"""

from dataclasses import dataclass, field, replace
import logging
from typing import Any, FrozenSet, Optional

from formstate.actions import BLUR, CHANGE, INITIALIZE, RESET

logger = logging.getLogger(__name__)

DEFAULT_VALUE_MUTATING_ACTIONS: FrozenSet[str] = frozenset({BLUR, CHANGE, INITIALIZE, RESET})


@dataclass(frozen=True)
class ReducerConfig:
    """Tunable reducer behavior.

    Attributes:
        value_mutating_actions: Action kinds after which field normalizers run
        strict_paths: If True, get_values() raises PathSyntaxError on a field key
                      that does not parse. If False, the key is skipped with a warning.
    """
    value_mutating_actions: FrozenSet[str] = field(default=DEFAULT_VALUE_MUTATING_ACTIONS)
    strict_paths: bool = True

    def with_changes(self, **changes: Any) -> 'ReducerConfig':
        """Return a copy with the given attributes replaced."""
        if 'value_mutating_actions' in changes:
            changes['value_mutating_actions'] = frozenset(changes['value_mutating_actions'])
        return replace(self, **changes)


_current_config: ReducerConfig = ReducerConfig()


def set_reducer_config(config: ReducerConfig) -> None:
    """Set the process-wide config used by reducers without their own.

    Args:
        config: The config instance to install
    """
    global _current_config
    _current_config = config
    logger.debug(f"Reducer config set: {config}")


def get_reducer_config(override: Optional[ReducerConfig] = None) -> ReducerConfig:
    """Get the effective config.

    Args:
        override: Config carried by a specific reducer, if any

    Returns:
        ``override`` when given, otherwise the process-wide config
    """
    return override if override is not None else _current_config


def reset_reducer_config() -> None:
    """Restore the default process-wide config."""
    set_reducer_config(ReducerConfig())
