"""
Transition table: one pure function per action kind.

Every transition has the signature ``(form_slice, action) -> form_slice``.
Transitions never mutate their input. Writes go through ``set_in`` so a field
record that is not touched keeps its identity, and a write that stores the
value already present returns the slice unchanged.

Presence matters on field records. Consumers decide whether to render an
error from whether ``asyncError``/``submitError`` exists, so clearing errors
removes the key (``DELETE``) except where a transition deliberately stores
``None``.

DESTROY removes whole slices and is therefore handled by the dispatch root,
not here.
"""

import logging
from typing import Any, Callable, Dict, Iterator, Mapping, Sequence, Tuple

from formstate.actions import (
    BLUR, CHANGE, FOCUS, INITIALIZE, RESET,
    START_ASYNC_VALIDATION, STOP_ASYNC_VALIDATION,
    START_SUBMIT, STOP_SUBMIT, TOUCH, UNTOUCH,
    action_errors, action_fields,
)
from formstate.form_state import (
    ACTIVE, ASYNC_ERROR, ASYNC_VALIDATING, ERROR, INITIAL, SUBMIT_ERROR,
    SUBMIT_FAILED, SUBMITTING, TOUCHED, VALUE, VISITED,
    FieldRecord, FormSlice, is_metadata_key, metadata,
)
from formstate.exceptions import PathSyntaxError
from formstate.paths import (
    DELETE, MISSING, ObjectKey, Segment,
    flatten, get_in, is_descendant, parse_path, read, set_in,
)

logger = logging.getLogger(__name__)

Transition = Callable[[FormSlice, Mapping[str, Any]], FormSlice]

TRANSITIONS: Dict[str, Transition] = {}


def transition(action_type: str) -> Callable[[Transition], Transition]:
    """Register the decorated function as the transition for ``action_type``."""
    def decorator(func: Transition) -> Transition:
        TRANSITIONS[action_type] = func
        return func
    return decorator


def apply_transition(form: FormSlice, action: Mapping[str, Any]) -> FormSlice:
    """Run the transition matching ``action['type']``; unknown kinds are no-ops."""
    handler = TRANSITIONS.get(action.get('type'))
    if handler is None:
        logger.debug(f"No transition for action type {action.get('type')!r}, slice unchanged")
        return form
    return handler(form, action)


def _attr(field: str, attribute: str) -> Tuple[Segment, ...]:
    # The whole field path is a single key of the flat slice
    return (ObjectKey(field), ObjectKey(attribute))


def _meta(key: str) -> Tuple[Segment, ...]:
    return (ObjectKey(key),)


def _records(form: FormSlice) -> Iterator[Tuple[str, FieldRecord]]:
    for key, record in form.items():
        if not is_metadata_key(key) and isinstance(record, Mapping):
            yield key, record


def _replace_records(form: FormSlice, updates: Dict[str, FieldRecord]) -> FormSlice:
    if not updates:
        return form
    return {**form, **updates}


@transition(BLUR)
def blur(form: FormSlice, action: Mapping[str, Any]) -> FormSlice:
    field = action.get('field')
    if field is None:
        return form
    # An absent value leaves the stored one alone; some platforms cannot report a value on blur
    if 'value' in action:
        form = set_in(form, _attr(field, VALUE), action['value'])
    touched = bool(action.get('touch')) or bool(get_in(form, _attr(field, TOUCHED), False))
    form = set_in(form, _attr(field, TOUCHED), touched)
    return set_in(form, _meta(ACTIVE), None)


@transition(CHANGE)
def change(form: FormSlice, action: Mapping[str, Any]) -> FormSlice:
    field = action.get('field')
    if field is None:
        return form
    form = set_in(form, _attr(field, VALUE), action.get('value'))
    if action.get('touch'):
        form = set_in(form, _attr(field, TOUCHED), True)
        form = set_in(form, _attr(field, ASYNC_ERROR), None)
        return set_in(form, _attr(field, SUBMIT_ERROR), None)
    touched = bool(get_in(form, _attr(field, TOUCHED), False))
    return set_in(form, _attr(field, TOUCHED), touched)


@transition(FOCUS)
def focus(form: FormSlice, action: Mapping[str, Any]) -> FormSlice:
    field = action.get('field')
    if field is None:
        return form
    form = set_in(form, _attr(field, VISITED), True)
    return set_in(form, _meta(ACTIVE), field)


@transition(INITIALIZE)
def initialize(form: FormSlice, action: Mapping[str, Any]) -> FormSlice:
    """Replace every field record with ``{initial: v, value: v}``.

    Values come from reading each listed field path out of ``values``, or from
    flattening ``values`` when no list is given. Metadata is kept except
    ``_active``, which is cleared. ``touch`` is accepted and ignored.
    """
    values = action.get('values') or {}
    if action.get('fields') is not None:
        # An explicit list, even an empty one, is authoritative
        entries = {path: read(values, path) for path in action_fields(action)}
    else:
        entries = flatten(values)

    result = metadata(form)
    result[ACTIVE] = None
    for path, value in entries.items():
        if is_metadata_key(path):
            logger.debug(f"INITIALIZE skipping reserved key {path!r}")
            continue
        result[path] = {INITIAL: value, VALUE: value}
    return result


@transition(RESET)
def reset(form: FormSlice, action: Mapping[str, Any]) -> FormSlice:
    """Collapse initialized fields to ``{initial, value: initial}``; drop the rest."""
    result: FormSlice = {}
    changed = False
    for key, record in form.items():
        if is_metadata_key(key):
            result[key] = record
            continue
        if not isinstance(record, Mapping) or INITIAL not in record:
            changed = True
            continue
        initial = record[INITIAL]
        if record.keys() == {INITIAL, VALUE} and record[VALUE] is initial:
            result[key] = record
        else:
            result[key] = {INITIAL: initial, VALUE: initial}
            changed = True
    if not changed:
        return set_in(form, _meta(ACTIVE), None)
    result[ACTIVE] = None
    return result


@transition(START_ASYNC_VALIDATION)
def start_async_validation(form: FormSlice, action: Mapping[str, Any]) -> FormSlice:
    return set_in(form, _meta(ASYNC_VALIDATING), True)


def _field_error(errors: Mapping[str, Any], path: str) -> Any:
    """Error for ``path``: the flat key if present, else a nested lookup."""
    if path in errors:
        return errors[path]
    try:
        return get_in(errors, parse_path(path))
    except PathSyntaxError:
        return MISSING


def _nests_field(key: str, paths: Sequence[str]) -> bool:
    """True when error key ``key`` is a parent of an existing field path."""
    try:
        return any(is_descendant(key, path) for path in paths)
    except PathSyntaxError:
        return False


@transition(STOP_ASYNC_VALIDATION)
def stop_async_validation(form: FormSlice, action: Mapping[str, Any]) -> FormSlice:
    """Store async errors for every field; fields without one lose the key entirely.

    Errors are matched by flat field path (``{'shipping.street': ...}``) or
    through a nested map (``{'shipping': {'street': ...}}``). ``_error`` in the
    payload sets the form-level error; its absence leaves the existing
    form-level error in place.
    """
    errors = action_errors(action) or {}
    form = set_in(form, _meta(ASYNC_VALIDATING), False)

    updates: Dict[str, FieldRecord] = {}
    for path, record in _records(form):
        error = _field_error(errors, path)
        updated = set_in(record, (ObjectKey(ASYNC_ERROR),), DELETE if error is MISSING else error)
        if updated is not record:
            updates[path] = updated
    form = _replace_records(form, updates)

    if ERROR in errors:
        form = set_in(form, _meta(ERROR), errors[ERROR])
    return form


@transition(START_SUBMIT)
def start_submit(form: FormSlice, action: Mapping[str, Any]) -> FormSlice:
    return set_in(form, _meta(SUBMITTING), True)


@transition(STOP_SUBMIT)
def stop_submit(form: FormSlice, action: Mapping[str, Any]) -> FormSlice:
    """Finish a submission.

    Without an error map the submission succeeded: ``_submitFailed`` is cleared
    and every ``submitError`` key is removed. With a map (even an empty one)
    ``_submitFailed`` is set and each listed field gets its ``submitError``.
    Existing fields are matched flat or nested like async errors; any other
    flat key creates its field record.
    """
    errors = action_errors(action)
    form = set_in(form, _meta(SUBMITTING), False)

    if errors is None:
        form = set_in(form, _meta(SUBMIT_FAILED), False)
        updates: Dict[str, FieldRecord] = {}
        for path, record in _records(form):
            updated = set_in(record, (ObjectKey(SUBMIT_ERROR),), DELETE)
            if updated is not record:
                updates[path] = updated
        return _replace_records(form, updates)

    form = set_in(form, _meta(SUBMIT_FAILED), True)
    paths = [path for path, _ in _records(form)]
    for path in paths:
        error = _field_error(errors, path)
        if error is not MISSING:
            form = set_in(form, _attr(path, SUBMIT_ERROR), error)
    for key, error in errors.items():
        if is_metadata_key(key) or key in paths or _nests_field(key, paths):
            continue
        form = set_in(form, _attr(key, SUBMIT_ERROR), error)
    if ERROR in errors:
        form = set_in(form, _meta(ERROR), errors[ERROR])
    return form


def _set_touched(form: FormSlice, action: Mapping[str, Any], touched: bool) -> FormSlice:
    for field in action_fields(action):
        form = set_in(form, _attr(field, TOUCHED), touched)
    return form


@transition(TOUCH)
def touch(form: FormSlice, action: Mapping[str, Any]) -> FormSlice:
    return _set_touched(form, action, True)


@transition(UNTOUCH)
def untouch(form: FormSlice, action: Mapping[str, Any]) -> FormSlice:
    return _set_touched(form, action, False)
