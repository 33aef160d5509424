"""Pytest configuration and shared fixtures."""

import itertools

import pytest
from fastapi.testclient import TestClient

from sink.ingest import FilmSink
from sink.main import create_app
from sink.metrics import SinkMetrics


class SequenceRandom:
    """Stand-in for random.Random that draws from a fixed, repeating sequence."""

    def __init__(self, values):
        self._values = itertools.cycle(values)
        self.draws = 0

    def randrange(self, stop: int) -> int:
        self.draws += 1
        return next(self._values) % stop


@pytest.fixture
def metrics() -> SinkMetrics:
    return SinkMetrics()


@pytest.fixture
def make_sink(metrics):
    """Build a FilmSink on the test registry.

    The default draw of 99 is never below the failure percent, so no request
    is turned into a 503 unless the test asks for it.
    """

    def _make(draws=(99,), **kwargs) -> FilmSink:
        return FilmSink(metrics, rng=SequenceRandom(draws), **kwargs)

    return _make


@pytest.fixture
def sink(make_sink) -> FilmSink:
    return make_sink()


@pytest.fixture
def client(sink):
    with TestClient(create_app(sink)) as client:
        yield client


@pytest.fixture
def valid_film() -> dict:
    return {
        "year": 1994,
        "length": 142,
        "title": "The Shawshank Redemption",
        "subject": "Drama",
        "actor": "Tim Robbins",
        "actress": "",
        "director": "Frank Darabont",
        "popularity": 80.5,
        "awards": "No",
        "image": "shawshank.jpg",
    }
