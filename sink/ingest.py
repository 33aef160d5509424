import asyncio
import random
from dataclasses import dataclass
from datetime import date
from typing import Awaitable, Callable, Mapping, Optional

from fastapi import status
from starlette.requests import ClientDisconnect

from sink.config import FAILURE_PERCENT, READ_TIMEOUT
from sink.errors import BodyReadError, SinkError, TransientError, UnsupportedMethodError
from sink.logs import get_logger
from sink.metrics import SinkMetrics
from sink.models import decode_film
from sink.validation import validate_film

logger = get_logger(__name__)

BodyReader = Callable[[], Awaitable[bytes]]


@dataclass(frozen=True)
class Outcome:
    status: int
    content: Optional[str] = None
    media_type: str = "text/plain"


class FilmSink:
    """Accepts single film records, classifies each request and counts it.

    ``rng`` decides which POST requests fail with a simulated 503; anything
    with ``randrange(n)`` works, so tests can pass a fixed sequence. It is
    created once and only drawn from afterwards.
    """

    def __init__(
            self,
            metrics: SinkMetrics,
            rng=None,
            failure_percent: int = FAILURE_PERCENT,
            read_timeout: float = READ_TIMEOUT,
            today: Callable[[], date] = date.today
    ):
        if not 0 <= failure_percent <= 100:
            raise ValueError(f"failure_percent must be between 0 and 100, got {failure_percent}")
        self.metrics = metrics
        self.rng = rng or random.Random()
        self.failure_percent = failure_percent
        self.read_timeout = read_timeout
        self.today = today

    async def handle(
            self,
            method: str,
            path: str,
            query: Mapping[str, str],
            read_body: BodyReader
    ) -> Outcome:
        method = method.upper()
        if method == "GET":
            return self.get(path, query.get("name", ""))
        if method == "POST":
            return await self.post(path, read_body)
        return self.reject(method, path)

    def get(self, path: str, name: str = "") -> Outcome:
        logger.info("GET request", method="GET", path=path, name=name)
        self.metrics.count_get(status.HTTP_200_OK)
        return Outcome(status.HTTP_200_OK, "[]", "application/json")

    async def post(self, path: str, read_body: BodyReader) -> Outcome:
        fields = {"method": "POST", "path": path}
        try:
            if self.rng.randrange(100) < self.failure_percent:
                raise TransientError("simulated backend failure")

            body = await self.read(read_body)
            fields["body"] = body.decode("utf-8", errors="replace")

            film = decode_film(body)
            validate_film(film, self.today())
        except SinkError as e:
            return self.fail(e, fields, self.metrics.count_post)

        logger.info("POST request", **fields)
        self.metrics.count_post(status.HTTP_201_CREATED)
        return Outcome(status.HTTP_201_CREATED)

    def reject(self, method: str, path: str) -> Outcome:
        return self.fail(UnsupportedMethodError(method), {"method": method, "path": path})

    async def read(self, read_body: BodyReader) -> bytes:
        try:
            return await asyncio.wait_for(read_body(), timeout=self.read_timeout)
        except asyncio.TimeoutError as e:
            raise BodyReadError(f"body not received within {self.read_timeout}s") from e
        except (ClientDisconnect, OSError) as e:
            raise BodyReadError(f"failed to read body: {type(e).__name__}") from e

    def fail(
            self,
            error: SinkError,
            fields: dict,
            count: Optional[Callable[[int], None]] = None
    ) -> Outcome:
        logger.error(f"return {error.status_code}", error=str(error), **fields)
        if count is not None:
            count(error.status_code)
        return Outcome(error.status_code, str(error) if error.expose else None)
