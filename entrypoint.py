import uvicorn
from constants import HOST, KV_BACKEND, LOG_FILE, LOG_LEVEL, PORT
from logging_config import setup_logging

# Setup logging before importing app
setup_logging(log_level=LOG_LEVEL, log_file=LOG_FILE)

from app import app
from backend import get_backend
from logging_config import get_logger

logger = get_logger(__name__)


def main():
    if KV_BACKEND == "redis":
        # Fail fast instead of on the first request
        get_backend().ping()
        logger.info("Redis client connected successfully")
    logger.info(f"Starting council-chat server on {HOST}:{PORT}")
    uvicorn.run(app, host=HOST, port=PORT, log_config=None)


if __name__ == "__main__":
    main()
