import time
import uuid
from typing import Callable, List

from pydantic import ValidationError

from backend import KVBackend
from constants import MAX_CONTENT_LENGTH, MAX_MSG_FETCH, TIMESTAMP_WIDTH
from errors import BadRequest, StoreError
from logging_config import get_logger
from redis_keys import conv_msg_key, conv_msg_prefix
from schemas.messages import Message
from services.conversation_directory import ConversationDirectory
from tokens import Claims

logger = get_logger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


def since_boundary_key(conversation_id: str, since: int) -> str:
    # ';' sorts right after ':', so every key stamped `since` or earlier is <= this boundary.
    return f"{conv_msg_prefix(conversation_id)}{since:0{TIMESTAMP_WIDTH}d};"


class MessageLog:
    """Append-only, time-ordered messages per conversation.

    Order comes from the storage keys, never from insertion order: each key
    embeds the zero-padded server timestamp followed by the message id, and
    the store lists keys sorted.
    """

    def __init__(self, backend: KVBackend, directory: ConversationDirectory = None, clock: Callable[[], int] = now_ms):
        self.backend = backend
        self.directory = directory or ConversationDirectory(backend)
        self.clock = clock

    def append(self, claims: Claims, conversation_id: str, content: str) -> str:
        size = len(content.encode("utf-8")) if isinstance(content, str) else 0
        if not 1 <= size <= MAX_CONTENT_LENGTH:
            raise BadRequest(f"content must be 1-{MAX_CONTENT_LENGTH} bytes")
        self.directory.require_participant(claims, conversation_id)

        timestamp = self.clock()
        message_id = str(uuid.uuid4())
        message = Message(
            message_id=message_id,
            room_id=claims.room_id,
            conversation_id=conversation_id,
            sender_country=claims.country.value,
            content=content,
            timestamp=timestamp,
        )
        self.backend.put_json(conv_msg_key(conversation_id, timestamp, message_id), message.model_dump())
        logger.info(f"Message {message_id} from {claims.country} appended to conversation {conversation_id}")
        return message_id

    def read(self, claims: Claims, conversation_id: str, since: int = 0) -> List[Message]:
        """Return up to MAX_MSG_FETCH messages stamped strictly after since, oldest first."""
        if since < 0:
            raise BadRequest("since must be non-negative")
        self.directory.require_participant(claims, conversation_id)

        keys = self.backend.list_keys(conv_msg_prefix(conversation_id))
        boundary = since_boundary_key(conversation_id, since)
        messages = []
        for key in keys:
            if key <= boundary:
                continue
            data = self.backend.get_json(key)
            if data is None:
                # listed but not yet readable
                continue
            try:
                messages.append(Message.model_validate(data))
            except ValidationError as e:
                logger.error(f"Corrupt message record {key}: {e}")
                raise StoreError("Message record is corrupt") from e
            if len(messages) >= MAX_MSG_FETCH:
                break
        logger.debug(f"Read {len(messages)} messages from conversation {conversation_id} since {since}")
        return messages
