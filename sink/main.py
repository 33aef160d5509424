from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, Response

from sink.config import LOG_LEVEL
from sink.ingest import FilmSink, Outcome
from sink.logs import configure_logging, get_logger
from sink.metrics import SinkMetrics

configure_logging(LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("The film sink is ready to work")
    yield


def to_response(outcome: Outcome) -> Response:
    return Response(
        content=outcome.content,
        status_code=outcome.status,
        media_type=outcome.media_type if outcome.content is not None else None
    )


def create_app(sink: Optional[FilmSink] = None) -> FastAPI:
    sink = sink or FilmSink(SinkMetrics())

    app = FastAPI(
        title="Film sink",
        description="API for validating and counting incoming film records",
        version="1.0.0",
        lifespan=lifespan
    )

    async def dispatch(request: Request) -> Response:
        outcome = await sink.handle(
            request.method,
            request.url.path,
            request.query_params,
            request.body
        )
        return to_response(outcome)

    async def read_metrics(request: Request) -> Response:
        return Response(content=sink.metrics.render(), media_type=sink.metrics.content_type)

    # no method filter: /metrics answers every method and is never taken for a key
    app.add_route("/metrics", read_metrics, include_in_schema=False)

    app.add_api_route("/{key}", dispatch,
                      methods=["GET"],
                      summary="List films (always empty)",
                      response_class=Response)
    app.add_api_route("/{key}", dispatch,
                      methods=["POST"],
                      status_code=201,
                      summary="Validate a film record",
                      response_class=Response,
                      responses={
                          400: {"description": "The record failed decoding or validation"},
                          500: {"description": "The request body could not be read"},
                          503: {"description": "Simulated transient failure, retry later"}
                      })
    # every other method, including ones not known in advance, ends in a 405 from the sink
    app.add_route("/{key}", dispatch, include_in_schema=False)

    return app


app = create_app()
