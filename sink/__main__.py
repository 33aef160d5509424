import uvicorn

from sink.config import KEEP_ALIVE_TIMEOUT, LOG_LEVEL, SINK_HOST, SINK_PORT
from sink.logs import configure_logging, get_logger

logger = get_logger("sink")


def main():
    configure_logging(LOG_LEVEL)
    logger.info("starting http sink", port=SINK_PORT)
    # log_config=None keeps uvicorn on the JSON handler configured above
    uvicorn.run(
        "sink.main:app",
        host=SINK_HOST,
        port=SINK_PORT,
        timeout_keep_alive=KEEP_ALIVE_TIMEOUT,
        log_config=None
    )


if __name__ == "__main__":
    main()
