"""Tests for the bearer token codec."""

import hmac
from unittest import mock

import pytest

from countries import Country
from errors import BadRequest, InternalError
from tokens import Claims, issue_token, parse_bearer, verify_token


@pytest.mark.parametrize("country", list(Country))
def test_issue_then_verify_recovers_claims(secret, room_id, country):
    token = issue_token(secret, room_id, country.value)
    assert verify_token(secret, token) == Claims(room_id=room_id, country=country)


def test_token_layout(secret):
    token = issue_token(secret, "R1", "austria")
    room, country, digest = token.split("|")
    assert room == "R1"
    assert country == "austria"
    assert len(digest) == 64
    int(digest, 16)


def test_room_id_containing_delimiter_is_tolerated(secret):
    token = issue_token(secret, "a|b|c", "france")
    claims = verify_token(secret, token)
    assert claims.room_id == "a|b|c"
    assert claims.country == Country.FRANCE


def test_flipping_any_character_fails_verification(secret):
    token = issue_token(secret, "R1", "austria")
    for i, ch in enumerate(token):
        if ch == "|":
            continue
        replacement = "x" if ch != "x" else "y"
        tampered = token[:i] + replacement + token[i + 1:]
        assert verify_token(secret, tampered) is None, f"position {i} accepted"


def test_uppercased_digest_is_rejected(secret):
    token = issue_token(secret, "R1", "austria")
    room, country, digest = token.split("|")
    assert verify_token(secret, f"{room}|{country}|{digest.upper()}") is None


def test_token_signed_with_another_secret_is_rejected(secret):
    token = issue_token("other-secret", "R1", "italy")
    assert verify_token(secret, token) is None


def test_claims_cannot_be_moved_to_another_seat(secret):
    _, _, digest = issue_token(secret, "R1", "italy").split("|")
    assert verify_token(secret, f"R1|france|{digest}") is None
    assert verify_token(secret, f"R2|italy|{digest}") is None


@pytest.mark.parametrize("token", ["", "garbage", "R1|austria", "|", "||", None, "R1|Austria|00"])
def test_malformed_tokens_are_rejected(secret, token):
    assert verify_token(secret, token) is None


def test_digest_comparison_is_constant_time(secret):
    token = issue_token(secret, "R1", "russia")
    with mock.patch("tokens.hmac.compare_digest", wraps=hmac.compare_digest) as compare:
        assert verify_token(secret, token) is not None
    compare.assert_called_once()


def test_issue_rejects_unknown_country(secret):
    with pytest.raises(BadRequest):
        issue_token(secret, "R1", "spain")


@pytest.mark.parametrize("room", ["", "r" * 65, "é" * 33])
def test_issue_rejects_bad_room_id(secret, room):
    with pytest.raises(BadRequest):
        issue_token(secret, room, "turkey")


def test_issue_accepts_64_byte_room_id(secret):
    room = "r" * 64
    assert verify_token(secret, issue_token(secret, room, "turkey")).room_id == room


def test_missing_secret_is_an_internal_error():
    with pytest.raises(InternalError):
        issue_token("", "R1", "england")


@pytest.mark.parametrize(
    "header,expected",
    [
        ("Bearer abc|def", "abc|def"),
        ("bearer abc", None),
        ("Basic abc", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_bearer(header, expected):
    assert parse_bearer(header) == expected
