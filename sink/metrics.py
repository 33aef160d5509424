from typing import Optional

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter, generate_latest


class SinkMetrics:
    """Per-status request counters for the sink.

    One instance lives for the whole process and is shared by every request.
    prometheus_client counters lock internally, so concurrent increments are
    not lost.
    """

    content_type = CONTENT_TYPE_LATEST

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry or CollectorRegistry()
        self.gets = Counter(
            "sink_get_total",
            "The total get calls",
            ["status"],
            registry=self.registry,
        )
        self.posts = Counter(
            "sink_post_total",
            "The total post calls",
            ["status"],
            registry=self.registry,
        )

    def count_get(self, status: int) -> None:
        self.gets.labels(status=str(status)).inc()

    def count_post(self, status: int) -> None:
        self.posts.labels(status=str(status)).inc()

    def value(self, name: str, status: int) -> float:
        """Current value of ``sink_get_total`` or ``sink_post_total`` for a status."""
        sample = self.registry.get_sample_value(name, {"status": str(status)})
        return sample or 0.0

    def render(self) -> bytes:
        return generate_latest(self.registry)
