import hashlib
from typing import Iterable, List, Optional

from pydantic import ValidationError

from backend import KVBackend
from constants import CONVERSATION_ID_BYTES, MAX_PARTICIPANTS, MIN_PARTICIPANTS
from countries import parse_country
from errors import BadRequest, Forbidden, NotFound, StoreError, Unauthorized
from logging_config import get_logger
from redis_keys import conv_meta_key, room_conversations_key
from schemas.conversations import ConversationInfo, ConversationMeta
from tokens import Claims

logger = get_logger(__name__)


def derive_conversation_id(room_id: str, participants: Iterable[str]) -> str:
    """Deterministic id for a participant set: the order of participants does not matter."""
    canonical = f"{room_id}:{':'.join(sorted(participants))}"
    return hashlib.sha256(canonical.encode("utf-8")).digest()[:CONVERSATION_ID_BYTES].hex()


class ConversationDirectory:
    def __init__(self, backend: KVBackend):
        self.backend = backend

    def derive_id(self, room_id: str, participants: Iterable[str]) -> str:
        return derive_conversation_id(room_id, participants)

    def _validate_participants(self, participants) -> List[str]:
        if not isinstance(participants, list) or not MIN_PARTICIPANTS <= len(participants) <= MAX_PARTICIPANTS:
            raise BadRequest(f"participants must be {MIN_PARTICIPANTS} or {MAX_PARTICIPANTS}")
        seen = set()
        for p in participants:
            country = parse_country(p)
            if country is None:
                raise BadRequest("Invalid participant country")
            if country in seen:
                raise BadRequest("Duplicate participant")
            seen.add(country)
        return sorted(c.value for c in seen)

    def _room_index(self, room_id: str) -> List[str]:
        ids = self.backend.get_json(room_conversations_key(room_id))
        if ids is None:
            return []
        if not isinstance(ids, list):
            raise StoreError(f"Conversation index for room {room_id} is corrupt")
        return ids

    def get_meta(self, conversation_id: str) -> Optional[ConversationMeta]:
        data = self.backend.get_json(conv_meta_key(conversation_id))
        if data is None:
            return None
        try:
            return ConversationMeta.model_validate(data)
        except ValidationError as e:
            logger.error(f"Corrupt metadata for conversation {conversation_id}: {e}")
            raise StoreError("Conversation metadata is corrupt") from e

    def create(self, claims: Claims, room_id: str, participants: List[str]) -> str:
        """Create the conversation for this participant set, or return the existing one.

        Metadata is written first, then the id is appended to the room index.
        Both writes are skipped when already done, so a create that died
        between them is completed by the next create for the same set.
        """
        if room_id != claims.room_id:
            logger.warning(f"Create conversation rejected: token room {claims.room_id} != {room_id}")
            raise Unauthorized()
        sorted_participants = self._validate_participants(participants)
        if claims.country.value not in sorted_participants:
            logger.warning(f"Create conversation rejected: {claims.country} not in {sorted_participants}")
            raise Forbidden("Caller must be a participant")

        conversation_id = self.derive_id(claims.room_id, sorted_participants)
        meta_key = conv_meta_key(conversation_id)
        if self.backend.get_json(meta_key) is None:
            meta = ConversationMeta(room_id=claims.room_id, participants=sorted_participants)
            self.backend.put_json(meta_key, meta.model_dump())
            logger.info(f"Conversation {conversation_id} created in room {claims.room_id}: {sorted_participants}")
        else:
            logger.debug(f"Conversation {conversation_id} already exists in room {claims.room_id}")

        ids = self._room_index(claims.room_id)
        if conversation_id not in ids:
            ids.append(conversation_id)
            self.backend.put_json(room_conversations_key(claims.room_id), ids)
        return conversation_id

    def list(self, claims: Claims) -> List[ConversationInfo]:
        ids = self._room_index(claims.room_id)
        result = []
        for conversation_id in ids:
            meta = self.get_meta(conversation_id)
            if meta is None:
                continue
            if claims.country.value in meta.participants:
                result.append(ConversationInfo(conversation_id=conversation_id, participants=meta.participants))
        logger.debug(f"{claims.country} in room {claims.room_id} sees {len(result)} of {len(ids)} conversations")
        return result

    def require_participant(self, claims: Claims, conversation_id: str) -> ConversationMeta:
        """Load a conversation the caller is allowed to use.

        Raises NotFound when no such conversation exists and Forbidden when it
        belongs to another room or does not list the caller.
        """
        meta = self.get_meta(conversation_id)
        if meta is None:
            raise NotFound("Conversation not found")
        if meta.room_id != claims.room_id or claims.country.value not in meta.participants:
            logger.warning(f"{claims.country}@{claims.room_id} denied access to conversation {conversation_id}")
            raise Forbidden()
        return meta
