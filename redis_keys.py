REDIS_SEAT_KEY = "room:{room_id}:seat:{country}" # room id, country - claim marker
REDIS_ROOM_CONVERSATIONS_KEY = "room:{room_id}:conversations" # room id - JSON list of conversation ids
REDIS_CONV_META_KEY = "conv:{conversation_id}:meta" # conversation id - JSON metadata
REDIS_CONV_MSG_PREFIX = "conv:{conversation_id}:msg:" # conversation id - prefix of every message key
REDIS_CONV_MSG_KEY = "conv:{conversation_id}:msg:{timestamp:020d}:{message_id}" # one message record

# **Example `conv:{id}:meta` value**
# {"room_id": "R1", "participants": ["austria", "germany"]}

# **Example message key**
# conv:3f0c...:msg:00000001760000000000:9b2e...
# The timestamp is zero-padded so that lexicographic key order is chronological order.


def seat_key(room_id: str, country: str) -> str:
    return REDIS_SEAT_KEY.format(room_id=room_id, country=country)


def room_conversations_key(room_id: str) -> str:
    return REDIS_ROOM_CONVERSATIONS_KEY.format(room_id=room_id)


def conv_meta_key(conversation_id: str) -> str:
    return REDIS_CONV_META_KEY.format(conversation_id=conversation_id)


def conv_msg_prefix(conversation_id: str) -> str:
    return REDIS_CONV_MSG_PREFIX.format(conversation_id=conversation_id)


def conv_msg_key(conversation_id: str, timestamp: int, message_id: str) -> str:
    return REDIS_CONV_MSG_KEY.format(conversation_id=conversation_id, timestamp=timestamp, message_id=message_id)
