"""
Values projection: rebuild the nested plain-value tree from a form slice.

Inverse of how INITIALIZE and CHANGE populate flat field paths:

    {'name': {'value': 'Meck'}, 'items[0].name': {'value': 'Lego'}}
        -> {'name': 'Meck', 'items': [{'name': 'Lego'}]}
"""

import logging
from typing import Any, Dict, Mapping, Optional

from formstate.config import ReducerConfig, get_reducer_config
from formstate.exceptions import PathSyntaxError
from formstate.form_state import VALUE, field_paths
from formstate.paths import parse_path, set_in

logger = logging.getLogger(__name__)


def get_values(form: Mapping[str, Any], config: Optional[ReducerConfig] = None) -> Dict[str, Any]:
    """Project a form slice onto its plain values.

    Metadata keys are skipped, and so are fields whose record has no ``value``
    key (they are omitted, not written as None).

    Args:
        form: Form slice
        config: Optional config; falls back to the process-wide one

    Returns:
        Fresh nested dict; the slice is not modified

    Raises:
        PathSyntaxError: For a field key that does not parse, when
                         ``strict_paths`` is enabled
    """
    strict = get_reducer_config(config).strict_paths
    values: Dict[str, Any] = {}
    for path in field_paths(form):
        record = form[path]
        if not isinstance(record, Mapping) or VALUE not in record:
            continue
        try:
            segments = parse_path(path)
        except PathSyntaxError:
            if strict:
                raise
            logger.warning(f"Skipping field with unparseable path {path!r}")
            continue
        values = set_in(values, segments, record[VALUE])
    return values
