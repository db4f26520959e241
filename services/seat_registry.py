from backend import KVBackend
from countries import parse_country
from errors import BadRequest, Conflict, InternalError
from logging_config import get_logger
from redis_keys import seat_key
from tokens import issue_token, validate_room_id

logger = get_logger(__name__)


class SeatRegistry:
    """Hands out at most one token per (room, country).

    The store has no compare-and-set, so two first-time claims racing on the
    same seat can both see it free and both get a token. That window is
    accepted. Seats are never released.
    """

    def __init__(self, backend: KVBackend, secret: str):
        self.backend = backend
        self.secret = secret

    def claim_seat(self, room_id: str, country: str) -> str:
        if not self.secret:
            raise InternalError("Signing secret not configured")
        parsed = parse_country(country)
        if parsed is None:
            logger.warning(f"Seat claim rejected: invalid country {country!r}")
            raise BadRequest("Invalid country")
        validate_room_id(room_id)

        key = seat_key(room_id, parsed.value)
        if self.backend.get_json(key) is not None:
            logger.warning(f"Seat claim rejected: {parsed.value} already taken in room {room_id}")
            raise Conflict("Seat already taken")

        # The marker is committed before any token exists.
        self.backend.put_json(key, True)
        token = issue_token(self.secret, room_id, parsed.value)
        logger.info(f"Seat {parsed.value} claimed in room {room_id}")
        return token
