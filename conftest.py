"""Общие фикстуры для тестов генератора"""

import pytest

from openapi_tsgen.internal.types.schema_resolver import TypeResolver


@pytest.fixture
def resolver():
    return TypeResolver()
