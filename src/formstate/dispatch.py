"""
Dispatch root: routes actions to the target form and installs the result.

Global state is a plain dict from form name to form slice. A form that carries
``key`` on its actions is multiplexed: its entry is a dict from sub-key to
form slice, and the transition runs on one sub-slice.

The root never mutates the state it receives. If the transition returns the
slice it was given, the global state is returned by reference, which lets
consumers detect "nothing happened" with an identity check.

Reducers compose by wrapping:

    from formstate import reducer

    app_reducer = reducer.plugin({'login': clear_password_on_failure}).normalize({
        'signup': {'username': lambda value, *_: value and value.lower()},
    })
    state = app_reducer()
    state = app_reducer(state, {'type': 'CHANGE', 'form': 'signup',
                                'field': 'username', 'value': 'Meck'})
"""

from abc import ABC, abstractmethod
import logging
from typing import Any, Callable, Dict, Mapping, Optional

from formstate.actions import DESTROY
from formstate.config import ReducerConfig, get_reducer_config
from formstate.form_state import FormSlice, GlobalState, ensure_form
from formstate.transitions import apply_transition

logger = logging.getLogger(__name__)

Plugin = Callable[[FormSlice, GlobalState], FormSlice]
Normalizer = Callable[[Any, Any, Dict[str, Any], Dict[str, Any]], Any]


class Reducer(ABC):
    """Abstract reducer capability: ``(state, action) -> state``.

    Subclasses implement ``apply``. Calling the reducer fills in the defaults
    (``{}`` state, empty action) the way a store's initial dispatch expects.
    """

    def __init__(self, config: Optional[ReducerConfig] = None):
        self._config = config

    @property
    def config(self) -> ReducerConfig:
        """Effective config: this reducer's own, or the process-wide one."""
        return get_reducer_config(self._config)

    def __call__(self, state: Optional[GlobalState] = None, action: Optional[Mapping[str, Any]] = None) -> GlobalState:
        return self.apply({} if state is None else state, {} if action is None else action)

    @abstractmethod
    def apply(self, state: GlobalState, action: Mapping[str, Any]) -> GlobalState:
        """Compute the next global state; never mutates ``state``."""

    def plugin(self, plugins: Mapping[str, Plugin]) -> 'Reducer':
        """Wrap this reducer so per-form plugins run after every dispatch.

        Args:
            plugins: form name -> ``(form_slice, global_state) -> form_slice``
        """
        from formstate.extensions import PluginReducer
        return PluginReducer(self, plugins)

    def normalize(self, normalizers: Mapping[str, Mapping[str, Normalizer]]) -> 'Reducer':
        """Wrap this reducer so per-field normalizers run after value changes.

        Args:
            normalizers: form name -> field path ->
                ``(value, previous_value, all_values, previous_all_values) -> value``
        """
        from formstate.extensions import NormalizingReducer
        return NormalizingReducer(self, normalizers)


class FormReducer(Reducer):
    """The base form reducer: one transition per action, no decoration."""

    def apply(self, state: GlobalState, action: Mapping[str, Any]) -> GlobalState:
        form_name = action.get('form')
        if not form_name:
            return state

        key = action.get('key')
        action_type = action.get('type')
        logger.debug(f"Dispatch {action_type!r} to form={form_name!r}, key={key!r}")

        if action_type == DESTROY:
            return destroy(state, form_name, key)

        if key is not None:
            container = state.get(form_name) or {}
            previous = container.get(key)
            form = apply_transition(ensure_form(previous), action)
            if form is previous:
                return state
            return {**state, form_name: {**container, key: form}}

        previous = state.get(form_name)
        form = apply_transition(ensure_form(previous), action)
        if form is previous:
            return state
        return {**state, form_name: form}


def destroy(state: GlobalState, form_name: str, key: Optional[str] = None) -> GlobalState:
    """Remove a form, or one sub-instance of a multiplexed form.

    With ``key`` only that sub-key is removed and the container stays, even if
    it becomes empty. Without ``key`` the whole form entry goes. Removing the
    last form leaves ``{}``.
    """
    if key is not None:
        container = state.get(form_name)
        if not container or key not in container:
            return state
        logger.debug(f"Destroyed form={form_name!r}, key={key!r}")
        return {**state, form_name: {k: v for k, v in container.items() if k != key}}

    if form_name not in state:
        return state
    logger.debug(f"Destroyed form={form_name!r}")
    return {name: form for name, form in state.items() if name != form_name}


reducer = FormReducer()


def reduce(state: Optional[GlobalState], action: Optional[Mapping[str, Any]]) -> GlobalState:
    """Apply one action with the default reducer."""
    return reducer(state, action)
