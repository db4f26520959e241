import os

REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_PORT", 6379))
REDIS_PASSWORD = os.getenv("REDIS_PASSWORD", None)
REDIS_DB = int(os.getenv("REDIS_DB", 0))

# "redis" or "memory"
KV_BACKEND = os.getenv("KV_BACKEND", "redis")

HMAC_SECRET = os.getenv("HMAC_SECRET", None)

ALLOWED_ORIGINS = [o.strip() for o in os.getenv("ALLOWED_ORIGINS", "*").split(",") if o.strip()]

MAX_CONTENT_LENGTH = 4096
MAX_MSG_FETCH = 200
MAX_ROOM_ID_LENGTH = 64
MIN_PARTICIPANTS = 2
MAX_PARTICIPANTS = 3
CONVERSATION_ID_BYTES = 16
TIMESTAMP_WIDTH = 20
TOKEN_DELIMITER = "|"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE = os.getenv("LOG_FILE", None)
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 8000))
