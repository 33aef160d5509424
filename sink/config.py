import os

SINK_HOST = os.getenv("SINK_HOST", "0.0.0.0")
SINK_PORT = int(os.getenv("SINK_PORT", "9009"))

READ_TIMEOUT = float(os.getenv("SINK_READ_TIMEOUT", "2"))
# idle time before uvicorn closes a kept-alive connection; responses have no write deadline
KEEP_ALIVE_TIMEOUT = int(os.getenv("SINK_KEEP_ALIVE_TIMEOUT", "2"))

# share of POST requests answered with 503, in percent
FAILURE_PERCENT = int(os.getenv("SINK_FAILURE_PERCENT", "20"))

LOG_LEVEL = os.getenv("SINK_LOG_LEVEL", "INFO")
