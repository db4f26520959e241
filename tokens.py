"""Stateless bearer tokens binding a caller to one (room, country) seat.

Token layout: ``{room_id}|{country}|{hex hmac-sha256 of "room_id:country"}``.
The token is parsed from the right, so a room id may itself contain ``|``.
There is no expiry and no revocation; a token is valid for as long as the
signing secret is.
"""

import hashlib
import hmac
from dataclasses import dataclass
from typing import Optional

from constants import MAX_ROOM_ID_LENGTH, TOKEN_DELIMITER
from countries import Country, parse_country
from errors import BadRequest, InternalError

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class Claims:
    room_id: str
    country: Country


def validate_room_id(room_id) -> str:
    if not isinstance(room_id, str) or not room_id or len(room_id.encode("utf-8")) > MAX_ROOM_ID_LENGTH:
        raise BadRequest("Invalid room_id")
    return room_id


def _digest(secret: str, room_id: str, country: str) -> str:
    if not secret:
        raise InternalError("Signing secret not configured")
    mac = hmac.new(secret.encode("utf-8"), f"{room_id}:{country}".encode("utf-8"), hashlib.sha256)
    return mac.hexdigest()


def issue_token(secret: str, room_id: str, country: str) -> str:
    parsed = parse_country(country)
    if parsed is None:
        raise BadRequest("Invalid country")
    validate_room_id(room_id)
    return TOKEN_DELIMITER.join([room_id, parsed.value, _digest(secret, room_id, parsed.value)])


def verify_token(secret: str, token: str) -> Optional[Claims]:
    """Return the claims bound in token, or None if it is malformed or forged.

    All failure causes look the same to the caller.
    """
    if not isinstance(token, str):
        return None
    parts = token.rsplit(TOKEN_DELIMITER, 2)
    if len(parts) != 3:
        return None
    room_id, country_part, supplied = parts
    country = parse_country(country_part)
    if country is None:
        return None
    expected = _digest(secret, room_id, country.value)
    if not hmac.compare_digest(expected.encode("ascii"), supplied.encode("utf-8")):
        return None
    return Claims(room_id=room_id, country=country)


def parse_bearer(authorization: Optional[str]) -> Optional[str]:
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    return authorization[len(BEARER_PREFIX):]
