"""
Tests for SupabaseClient query building.

Runs without a Supabase connection: the underlying client is a MagicMock
query builder.
"""

from unittest.mock import MagicMock

import pytest


@pytest.fixture
def query():
    builder = MagicMock()
    builder.table.return_value = builder
    builder.select.return_value = builder
    builder.ilike.return_value = builder
    return builder


@pytest.fixture
def supabase_client(query):
    from facade_energy.db import SupabaseClient

    client = SupabaseClient(url="https://example.supabase.co", key="test-key")
    client._client = query
    return client


class TestGetCity:

    def test_wildcards_are_escaped(self, supabase_client, query):
        query.execute.return_value = MagicMock(data=[])

        assert supabase_client.get_city("M%") is None
        query.ilike.assert_called_once_with("name", "M\\%")

    def test_underscore_and_backslash_escaped(self, supabase_client, query):
        query.execute.return_value = MagicMock(data=[])

        supabase_client.get_city("a_b\\")
        query.ilike.assert_called_once_with("name", "a\\_b\\\\")

    def test_pattern_matches_are_not_returned(self, supabase_client, query):
        # a backend that ignores the escaping must still not leak other cities
        query.execute.return_value = MagicMock(data=[{"name": "Mumbai"}, {"name": "Miami"}])

        assert supabase_client.get_city("M%") is None

    def test_exact_name_case_insensitive(self, supabase_client, query):
        row = {"name": "Mumbai", "electricity_rate": 9.0}
        query.execute.return_value = MagicMock(data=[row])

        assert supabase_client.get_city(" mumbai ") == row
        query.ilike.assert_called_once_with("name", "mumbai")
