"""
Tests for path parsing and copy-on-write access.

Tests cover:
- Parsing dot/bracket paths into typed segments
- Reads through missing segments
- Writes creating intermediate dicts and lists
- DELETE semantics
- Structural sharing of untouched branches
- Automatic flattening and nesting checks
"""

import pytest

from formstate import PathSyntaxError
from formstate.paths import (
    DELETE, MISSING, ArrayIndex, ObjectKey,
    flatten, get_in, is_descendant, parse_path, read, set_in, write,
)


class TestParsePath:
    """Test parse_path()."""

    def test_single_key(self):
        assert parse_path('name') == (ObjectKey('name'),)

    def test_mixed_path(self):
        """Keys and indexes interleave."""
        assert parse_path('items[0].name') == (
            ObjectKey('items'), ArrayIndex(0), ObjectKey('name'),
        )

    def test_consecutive_indexes(self):
        assert parse_path('matrix[1][12]') == (
            ObjectKey('matrix'), ArrayIndex(1), ArrayIndex(12),
        )

    def test_parse_is_cached(self):
        """Same path string yields the identical tuple."""
        assert parse_path('a.b[3]') is parse_path('a.b[3]')

    @pytest.mark.parametrize('path', ['', '.name', '[0]', 'a..b', 'a[x]', 'a[0', 'a.', 'a]'])
    def test_malformed_paths_raise(self, path):
        with pytest.raises(PathSyntaxError):
            parse_path(path)

    def test_non_string_raises(self):
        with pytest.raises(PathSyntaxError):
            parse_path(None)

    def test_syntax_error_is_value_error(self):
        """Callers catching ValueError also catch bad paths."""
        with pytest.raises(ValueError) as exc_info:
            parse_path('a..b')
        assert exc_info.value.path == 'a..b'
        assert 'a..b' in str(exc_info.value)


class TestRead:
    """Test read() and get_in()."""

    def test_read_nested(self, nested_values):
        assert read(nested_values, 'shipping.street') == 'Yuhang road'
        assert read(nested_values, 'items[0].amount') == 10

    def test_missing_intermediate_returns_default(self, nested_values):
        assert read(nested_values, 'billing.street') is None
        assert read(nested_values, 'items[3].name', 'fallback') == 'fallback'

    def test_index_into_non_list(self, nested_values):
        assert read(nested_values, 'name[0]') is None

    def test_key_into_scalar(self, nested_values):
        assert read(nested_values, 'name.first') is None

    def test_read_from_none(self):
        assert read(None, 'a.b') is None

    def test_get_in_default_is_missing(self):
        """Absent and stored-None are distinguishable."""
        assert get_in({'a': None}, parse_path('a')) is None
        assert get_in({}, parse_path('a')) is MISSING


class TestWrite:
    """Test write() and set_in()."""

    def test_write_creates_dicts(self):
        assert write({}, 'shipping.street', 'Main') == {'shipping': {'street': 'Main'}}

    def test_write_creates_lists_for_indexes(self):
        assert write({}, 'items[0].name', 'Lego') == {'items': [{'name': 'Lego'}]}

    def test_write_from_none(self):
        assert write(None, 'a', 1) == {'a': 1}

    def test_sparse_list_write(self):
        """Writing past the end pads with holes instead of failing."""
        result = write({'items': []}, 'items[3]', 'x')
        assert result == {'items': [None, None, None, 'x']}
        assert read(result, 'items[1]') is None

    def test_write_does_not_mutate_input(self, nested_values):
        before = {
            'name': 'Meck',
            'shipping': {'street': 'Yuhang road'},
            'items': [{'name': 'Lego', 'amount': 10}],
        }
        write(nested_values, 'items[0].amount', 11)
        assert nested_values == before

    def test_untouched_branches_are_shared(self, nested_values):
        result = write(nested_values, 'items[0].amount', 11)
        assert result is not nested_values
        assert result['items'] is not nested_values['items']
        assert result['items'][0] is not nested_values['items'][0]
        assert result['shipping'] is nested_values['shipping']

    def test_identical_write_returns_same_root(self, nested_values):
        shipping = nested_values['shipping']
        assert write(nested_values, 'shipping', shipping) is nested_values
        assert write(nested_values, 'items[0].amount', 10) is nested_values

    def test_write_replaces_scalar_with_container(self):
        assert write({'a': 5}, 'a.b', 1) == {'a': {'b': 1}}

    def test_set_in_flat_key(self):
        """A whole field path can be addressed as one key."""
        form = {'items[0].name': {'value': 'Lego'}}
        result = set_in(form, (ObjectKey('items[0].name'), ObjectKey('touched')), True)
        assert result == {'items[0].name': {'value': 'Lego', 'touched': True}}

    def test_set_in_empty_segments_raises(self):
        with pytest.raises(PathSyntaxError):
            set_in({}, (), 1)


class TestDelete:
    """Test DELETE as a write value."""

    def test_delete_removes_key(self):
        record = {'value': 1, 'asyncError': 'bad'}
        assert write(record, 'asyncError', DELETE) == {'value': 1}

    def test_delete_absent_key_returns_same_root(self):
        record = {'value': 1}
        assert write(record, 'asyncError', DELETE) is record

    def test_delete_through_missing_intermediate(self):
        """Nothing is created just to delete."""
        root = {}
        assert write(root, 'a.b.c', DELETE) is root

    def test_delete_list_slot_leaves_hole(self):
        assert write({'items': [1, 2, 3]}, 'items[1]', DELETE) == {'items': [1, None, 3]}

    def test_sentinels_are_falsy(self):
        assert not MISSING
        assert not DELETE
        assert repr(MISSING) == 'MISSING'


class TestFlatten:
    """Test flatten() and is_descendant()."""

    def test_flatten_nested(self, nested_values, nested_fields):
        flat = flatten(nested_values)
        assert sorted(flat) == sorted(nested_fields)
        assert flat['items[0].amount'] == 10

    def test_flatten_skips_empty_containers(self):
        assert flatten({'a': {}, 'b': [], 'c': 1}) == {'c': 1}

    def test_flatten_keeps_none_leaves(self):
        assert flatten({'a': None}) == {'a': None}

    def test_flatten_then_write_round_trips(self, nested_values):
        rebuilt = {}
        for path, value in flatten(nested_values).items():
            rebuilt = write(rebuilt, path, value)
        assert rebuilt == nested_values

    def test_is_descendant(self):
        assert is_descendant('a', 'a.b')
        assert is_descendant('a', 'a[0]')
        assert is_descendant('items[0]', 'items[0].name')
        assert not is_descendant('a', 'ab')
        assert not is_descendant('a', 'a')
        assert not is_descendant('a.b', 'a')
