"""
Decorating reducers.

PluginReducer and NormalizingReducer wrap another Reducer and post-process
its result. Both are Reducers themselves, so wrappers stack:

    reducer.plugin(plugins).normalize(normalizers)

Each wrapper returns the wrapped result by reference when its decoration
changed nothing.
"""

import logging
from typing import Any, Dict, Iterable, Mapping, Optional

from formstate.dispatch import Normalizer, Plugin, Reducer
from formstate.form_state import VALUE, FormSlice, GlobalState, ensure_form, is_keyed_container
from formstate.paths import MISSING, ObjectKey, get_in, set_in
from formstate.values import get_values

logger = logging.getLogger(__name__)


class PluginReducer(Reducer):
    """Run per-form plugin reducers after every dispatch.

    Each plugin receives the form's current slice (a fresh default slice if
    the form does not exist yet) and the global state produced by the wrapped
    reducer, and returns the slice to install. A plugin can therefore shape a
    form before any action has named it.
    """

    def __init__(self, base: Reducer, plugins: Mapping[str, Plugin]):
        super().__init__(base._config)
        self.base = base
        self.plugins = dict(plugins)

    def apply(self, state: GlobalState, action: Mapping[str, Any]) -> GlobalState:
        result = self.base.apply(state, action)

        updates: Dict[str, FormSlice] = {}
        for form_name, plugin in self.plugins.items():
            current = result.get(form_name)
            # Multiplexed forms hand the plugin their whole container
            form = current if is_keyed_container(current) else ensure_form(current)
            updated = plugin(form, result)
            if updated is not current:
                updates[form_name] = updated

        if not updates:
            return result
        logger.debug(f"Plugins updated forms: {sorted(updates)}")
        return {**result, **updates}


class NormalizingReducer(Reducer):
    """Run per-field normalizers after value-mutating actions.

    Normalizers run for the action's form when the action kind is listed in
    ``config.value_mutating_actions`` (on the keyed sub-slice if the action has
    ``key``). An action without a form, including the initial ``reducer()``
    call, normalizes every form in the map so normalized fields exist from
    the start.

    A normalizer is called as
    ``normalizer(value, previous_value, all_values, previous_all_values)``
    where the "previous" arguments come from the slice before dispatch.
    """

    def __init__(self, base: Reducer, normalizers: Mapping[str, Mapping[str, Normalizer]]):
        super().__init__(base._config)
        self.base = base
        self.normalizers = {form_name: dict(fields) for form_name, fields in normalizers.items()}

    def apply(self, state: GlobalState, action: Mapping[str, Any]) -> GlobalState:
        result = self.base.apply(state, action)

        form_name = action.get('form')
        if not form_name:
            targets: Iterable[str] = self.normalizers
        elif form_name in self.normalizers and action.get('type') in self.config.value_mutating_actions:
            targets = (form_name,)
        else:
            return result

        key = action.get('key') if form_name else None
        updates: Dict[str, Any] = {}
        for name in targets:
            if key is not None:
                container = result.get(name) or {}
                previous_container = state.get(name) or {}
                current = container.get(key)
                normalized = self._normalize_form(name, previous_container.get(key), current)
                if normalized is not current:
                    updates[name] = {**container, key: normalized}
            else:
                current = result.get(name)
                if is_keyed_container(current):
                    continue
                normalized = self._normalize_form(name, state.get(name), current)
                if normalized is not current:
                    updates[name] = normalized

        if not updates:
            return result
        return {**result, **updates}

    def _normalize_form(
        self,
        form_name: str,
        previous: Optional[FormSlice],
        current: Optional[FormSlice],
    ) -> FormSlice:
        previous_form = ensure_form(previous)
        form = ensure_form(current)
        # Dispatch never raises; unparseable field keys are left out of the projections
        lenient = self.config.with_changes(strict_paths=False)
        previous_values = get_values(previous_form, lenient)
        values = get_values(form, lenient)

        for field, normalizer in self.normalizers[form_name].items():
            if not callable(normalizer):
                logger.warning(f"Normalizer for {form_name}.{field} is not callable, skipping")
                continue
            segments = (ObjectKey(field), ObjectKey(VALUE))
            value = get_in(form, segments)
            normalized = normalizer(
                None if value is MISSING else value,
                get_in(previous_form, segments, None),
                values,
                previous_values,
            )
            updated = set_in(form, segments, normalized)
            if updated is not form:
                logger.debug(f"Normalized {form_name}.{field}: {value!r} -> {normalized!r}")
                form = updated
        return form
