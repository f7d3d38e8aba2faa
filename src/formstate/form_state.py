"""
Per-form state shape.

A form slice is a flat dict from field path to field record, plus five
reserved metadata keys:

    _active           path of the focused field, or None
    _asyncValidating  async validation in flight
    _error            form-level error value, or None
    _submitting       submission in flight
    _submitFailed     last submission reported errors

Field paths never start with ``_``, so metadata and field keys cannot collide.
Field records are dicts whose keys are presence-significant: an absent
``asyncError`` is different from ``asyncError: None``.
"""

from typing import Any, Dict, Iterator, Mapping, Optional

FormSlice = Dict[str, Any]
FieldRecord = Dict[str, Any]
GlobalState = Dict[str, Any]

ACTIVE = '_active'
ASYNC_VALIDATING = '_asyncValidating'
ERROR = '_error'
SUBMITTING = '_submitting'
SUBMIT_FAILED = '_submitFailed'

METADATA_DEFAULTS: Mapping[str, Any] = {
    ACTIVE: None,
    ASYNC_VALIDATING: False,
    ERROR: None,
    SUBMITTING: False,
    SUBMIT_FAILED: False,
}

# Field record attributes
VALUE = 'value'
INITIAL = 'initial'
TOUCHED = 'touched'
VISITED = 'visited'
ASYNC_ERROR = 'asyncError'
SUBMIT_ERROR = 'submitError'


def empty_form() -> FormSlice:
    """Fresh slice holding only the defaulted metadata."""
    return dict(METADATA_DEFAULTS)


def ensure_form(form: Optional[Mapping[str, Any]]) -> FormSlice:
    """Return ``form`` if it already carries every metadata key, else a copy with defaults filled in."""
    if form is None:
        return empty_form()
    if all(key in form for key in METADATA_DEFAULTS):
        return form
    return {**METADATA_DEFAULTS, **form}


def is_metadata_key(key: str) -> bool:
    return key.startswith('_')


def field_paths(form: Mapping[str, Any]) -> Iterator[str]:
    """Iterate the field keys of a slice, skipping metadata."""
    return (key for key in form if not is_metadata_key(key))


def metadata(form: Mapping[str, Any]) -> FormSlice:
    """Metadata entries of a slice, defaulted where missing."""
    return {key: form.get(key, default) for key, default in METADATA_DEFAULTS.items()}


def is_keyed_container(entry: Any) -> bool:
    """True for the sub-key -> slice dict of a multiplexed form.

    A plain slice always carries metadata keys; a container carries none and
    holds only slices. An empty dict left behind by a keyed DESTROY counts as
    a container.
    """
    if not isinstance(entry, Mapping) or any(is_metadata_key(key) for key in entry):
        return False
    return all(isinstance(sub, Mapping) and ACTIVE in sub for sub in entry.values())
