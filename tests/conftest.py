"""Pytest configuration and shared fixtures."""
import pytest

import formstate.config as config_module
from formstate import METADATA_DEFAULTS


@pytest.fixture(autouse=True)
def reset_reducer_config():
    """Restore the process-wide reducer config after each test."""
    original_config = config_module._current_config

    yield

    config_module._current_config = original_config


@pytest.fixture
def meta():
    """Defaulted metadata of a fresh form slice."""
    return dict(METADATA_DEFAULTS)


@pytest.fixture
def nested_values():
    """Nested value tree mixing objects and arrays."""
    return {
        'name': 'Meck',
        'shipping': {
            'street': 'Yuhang road',
        },
        'items': [
            {'name': 'Lego', 'amount': 10},
        ],
    }


@pytest.fixture
def nested_fields():
    """Field paths addressing every leaf of nested_values."""
    return ['name', 'shipping.street', 'items[0].name', 'items[0].amount']
