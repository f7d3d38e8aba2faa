"""
Pure state-transition engine for live form state.

Keeps the state of any number of independently named forms inside one plain
dict. Each form is a flat collection of field records (value, initial,
touched/visited flags, async/submit errors) addressed by dot/bracket paths
such as ``items[0].name``, plus five metadata keys. Actions describing user
or system events produce a new, structurally shared state tree; unrelated
forms and fields keep their identity.

Quick Start:
    >>> from formstate import reducer, get_values
    >>> state = reducer({}, {'type': 'INITIALIZE', 'form': 'order',
    ...                      'values': {'name': 'Meck', 'items': [{'amount': 10}]}})
    >>> state = reducer(state, {'type': 'CHANGE', 'form': 'order',
    ...                         'field': 'items[0].amount', 'value': 12, 'touch': True})
    >>> get_values(state['order'])
    {'name': 'Meck', 'items': [{'amount': 12}]}

Architecture:
    paths        Path parsing and copy-on-write get/set over nested data
    form_state   Form slice shape and metadata keys
    actions      Action kinds and payload accessors
    transitions  One pure transition per action kind
    dispatch     Dispatch root (routing, lazy creation, destroy)
    extensions   plugin() / normalize() decorating reducers
    values       Projection of a slice onto its nested plain values
    config       Process-wide reducer configuration
"""

# Actions
from formstate.actions import (
    BLUR,
    CHANGE,
    DESTROY,
    FOCUS,
    INITIALIZE,
    RESET,
    START_ASYNC_VALIDATION,
    START_SUBMIT,
    STOP_ASYNC_VALIDATION,
    STOP_SUBMIT,
    TOUCH,
    UNTOUCH,
)

# Configuration
from formstate.config import (
    ReducerConfig,
    get_reducer_config,
    reset_reducer_config,
    set_reducer_config,
)

# Errors
from formstate.exceptions import FormStateError, PathSyntaxError

# Form slice shape
from formstate.form_state import METADATA_DEFAULTS, empty_form, field_paths

# Paths
from formstate.paths import (
    DELETE,
    MISSING,
    ArrayIndex,
    ObjectKey,
    flatten,
    is_descendant,
    parse_path,
    read,
    write,
)

# Reducers
from formstate.dispatch import FormReducer, Reducer, reduce, reducer
from formstate.extensions import NormalizingReducer, PluginReducer

# Values
from formstate.values import get_values

__all__ = [
    # Actions
    'BLUR',
    'CHANGE',
    'DESTROY',
    'FOCUS',
    'INITIALIZE',
    'RESET',
    'START_ASYNC_VALIDATION',
    'START_SUBMIT',
    'STOP_ASYNC_VALIDATION',
    'STOP_SUBMIT',
    'TOUCH',
    'UNTOUCH',
    # Configuration
    'ReducerConfig',
    'get_reducer_config',
    'reset_reducer_config',
    'set_reducer_config',
    # Errors
    'FormStateError',
    'PathSyntaxError',
    # Form slice shape
    'METADATA_DEFAULTS',
    'empty_form',
    'field_paths',
    # Paths
    'DELETE',
    'MISSING',
    'ArrayIndex',
    'ObjectKey',
    'flatten',
    'is_descendant',
    'parse_path',
    'read',
    'write',
    # Reducers
    'FormReducer',
    'Reducer',
    'reduce',
    'reducer',
    'NormalizingReducer',
    'PluginReducer',
    # Values
    'get_values',
]

__version__ = '1.0.0'
__description__ = 'Pure state-transition engine for live form state'
