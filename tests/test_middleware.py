"""
Tests for request logging helpers
"""

import pytest

from postboard.middleware import operation_name_from_query, sanitize_query_params


@pytest.mark.unit
def test_sanitize_query_params_redacts_secrets():
    params = {"password": "hunter22", "access_token": "t", "page": "2"}

    assert sanitize_query_params(params) == {
        "password": "[REDACTED]",
        "access_token": "[REDACTED]",
        "page": "2",
    }


@pytest.mark.unit
@pytest.mark.parametrize(
    ("query", "expected"),
    [
        ("mutation Register($u: String!) { register }", "mutation:Register"),
        ("query Posts { posts { id } }", "Posts"),
        ("{ hello }", "unnamed_operation"),
        ("query IntrospectionQuery { __schema { types { name } } }", "__introspection"),
    ],
)
def test_operation_name_from_query(query, expected):
    assert operation_name_from_query(query) == expected
