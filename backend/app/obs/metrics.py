"""Central registry for Prometheus metrics used across the backend."""

from __future__ import annotations

from prometheus_client import Counter, Histogram, Summary


REQUEST_COUNTER = Counter(
	"discovery_http_requests_total",
	"Total HTTP requests processed",
	["route", "method", "status"],
)

REQUEST_LATENCY = Histogram(
	"discovery_http_request_duration_seconds",
	"HTTP request latency in seconds",
	["route", "method"],
	buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0),
)

SEARCH_QUERIES = Counter(
	"discovery_search_queries_total",
	"User search queries executed",
	["outcome"],
)

SEARCH_LATENCY = Histogram(
	"discovery_search_latency_seconds",
	"User search latency in seconds",
	buckets=(0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0),
)

SEARCH_RESULTS = Summary(
	"discovery_search_results",
	"Users returned per search query",
)

SEARCH_CORPUS_INVALIDATIONS = Counter(
	"discovery_search_corpus_invalidations_total",
	"Search corpus cache invalidations triggered by stale data",
)

SEARCH_CORPUS_REBUILDS = Counter(
	"discovery_search_corpus_rebuilds_total",
	"Search corpus rebuilds from the user store",
)

RECOMMENDATION_REQUESTS = Counter(
	"discovery_recommendation_requests_total",
	"Friend recommendation computations",
	["outcome"],
)

RECOMMENDATION_LATENCY = Histogram(
	"discovery_recommendation_latency_seconds",
	"Friend recommendation latency in seconds",
	buckets=(0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0),
)

RECOMMENDATION_CANDIDATES = Summary(
	"discovery_recommendation_candidates",
	"Candidate pool size per recommendation call",
)


def observe_request(route: str, method: str, status: int, elapsed_seconds: float) -> None:
	REQUEST_COUNTER.labels(route=route, method=method, status=str(status)).inc()
	REQUEST_LATENCY.labels(route=route, method=method).observe(elapsed_seconds)


def observe_search(outcome: str, elapsed_seconds: float, results: int = 0) -> None:
	SEARCH_QUERIES.labels(outcome=outcome).inc()
	SEARCH_LATENCY.observe(elapsed_seconds)
	if outcome == "ok":
		SEARCH_RESULTS.observe(results)


def inc_corpus_invalidation() -> None:
	SEARCH_CORPUS_INVALIDATIONS.inc()


def inc_corpus_rebuild() -> None:
	SEARCH_CORPUS_REBUILDS.inc()


def observe_recommendations(outcome: str, elapsed_seconds: float, candidates: int = 0) -> None:
	RECOMMENDATION_REQUESTS.labels(outcome=outcome).inc()
	RECOMMENDATION_LATENCY.observe(elapsed_seconds)
	if outcome == "ok":
		RECOMMENDATION_CANDIDATES.observe(candidates)
