"""Tests for the variable allow-list."""

import pytest

from env_at_startup.variables import AllowList


def test_empty_allow_list_allows_everything():
    allow_list = AllowList.parse(None)
    assert not allow_list
    assert allow_list.is_allowed('ANYTHING')
    assert AllowList.parse('').is_allowed('ANYTHING')


def test_exact_and_wildcard_entries():
    allow_list = AllowList.parse(['API_URL', 'NEXT_PUBLIC_*'])

    assert allow_list.is_allowed('API_URL')
    assert allow_list.is_allowed('NEXT_PUBLIC_FOO')
    assert allow_list.is_allowed('NEXT_PUBLIC_')
    assert not allow_list.is_allowed('OTHER')


def test_comma_separated_string():
    allow_list = AllowList.parse('API_URL, NEXT_PUBLIC_*,,')
    assert allow_list.tokens == ('API_URL', 'NEXT_PUBLIC_*')
    assert len(allow_list) == 2


def test_match_is_anchored():
    allow_list = AllowList.parse('API')
    assert not allow_list.is_allowed('API_URL')
    assert not allow_list.is_allowed('MY_API')


def test_match_is_case_sensitive():
    allow_list = AllowList.parse('API_URL')
    assert not allow_list.is_allowed('api_url')


def test_multiple_wildcards():
    allow_list = AllowList.parse('*_PUBLIC_*')
    assert allow_list.is_allowed('NEXT_PUBLIC_URL')
    assert allow_list.is_allowed('VITE_PUBLIC_KEY')
    assert not allow_list.is_allowed('NEXT_PRIVATE_URL')


@pytest.mark.parametrize("name", ["A.B", "AxB"])
def test_other_characters_are_literal(name):
    allow_list = AllowList.parse('A.B')
    assert allow_list.is_allowed(name) == (name == 'A.B')


def test_equality():
    assert AllowList.parse('A,B') == AllowList(['A', 'B'])
    assert AllowList.parse('A') != AllowList.parse('B')
