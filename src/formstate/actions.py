"""
Action kinds understood by the form reducer.

An action is any mapping with a ``type`` entry naming one of the kinds below
and a ``form`` entry naming the target form. Payload entries by kind:

    BLUR                    field, value?, touch?
    CHANGE                  field, value, touch?
    FOCUS                   field
    INITIALIZE              values, fields?, timestamp?, touch? (ignored)
    RESET                   -
    START_ASYNC_VALIDATION  -
    STOP_ASYNC_VALIDATION   errors?
    START_SUBMIT            -
    STOP_SUBMIT             errors?
    TOUCH                   fields
    UNTOUCH                 fields
    DESTROY                 -

Any action may also carry ``key`` to address one sub-instance of a
multiplexed form. Entries that do not apply to a kind are ignored.
"""

from typing import Any, Mapping, Optional, Sequence

BLUR = 'BLUR'
CHANGE = 'CHANGE'
FOCUS = 'FOCUS'
INITIALIZE = 'INITIALIZE'
RESET = 'RESET'
START_ASYNC_VALIDATION = 'START_ASYNC_VALIDATION'
STOP_ASYNC_VALIDATION = 'STOP_ASYNC_VALIDATION'
START_SUBMIT = 'START_SUBMIT'
STOP_SUBMIT = 'STOP_SUBMIT'
TOUCH = 'TOUCH'
UNTOUCH = 'UNTOUCH'
DESTROY = 'DESTROY'


def action_fields(action: Mapping[str, Any]) -> Sequence[str]:
    """Field list carried by TOUCH/UNTOUCH/INITIALIZE, as a sequence.

    A single string is treated as a one-element list.
    """
    fields = action.get('fields') or ()
    if isinstance(fields, str):
        return (fields,)
    return tuple(fields)


def action_errors(action: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    """Error map carried by STOP_ASYNC_VALIDATION/STOP_SUBMIT.

    A top-level ``_error`` entry on the action is folded into the map unless
    the map already has one.

    Returns:
        The error map, or None when the action supplies neither ``errors``
        nor ``_error``
    """
    errors = action.get('errors')
    if '_error' in action and (errors is None or '_error' not in errors):
        errors = {**(errors or {}), '_error': action['_error']}
    return errors
