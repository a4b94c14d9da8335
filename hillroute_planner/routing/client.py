"""RoutingClient - HTTP access to the external routing service.

The service exposes POST {base_url}dijkstra taking a JSON RouteQuery body and
answering with a JSON array of candidates ordered ascending by path length.

fetch() never raises for transport or payload problems: every answer is
turned into a tagged RoutingOutcome. submit() runs fetch() on a worker thread;
the worker only produces the outcome, the caller applies it on the UI thread.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

import requests

from hillroute_planner.constants import RoutingConfig
from hillroute_planner.model.path_candidate import ResponseFormatError, WeightedPathCandidate, parse_candidates
from hillroute_planner.routing.query import (
    QueryTicket,
    RouteEmpty,
    RouteFailure,
    RouteQuery,
    RouteSuccess,
    RoutingOutcome,
)

logger = logging.getLogger(__name__)


class RoutingError(Exception):
    """Routing service unreachable or answered with a non-success status."""


class RoutingClient:
    """Client for the routing service.

    Example:
        client = RoutingClient(base_url="http://localhost:8080/")
        outcome = client.fetch(ticket)
    """

    def __init__(
        self,
        base_url: str = RoutingConfig.BASE_URL,
        timeout_s: float = RoutingConfig.REQUEST_TIMEOUT_S,
        max_workers: int = RoutingConfig.MAX_WORKERS,
    ) -> None:
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout_s = timeout_s
        self.max_workers = max_workers
        self._executor: ThreadPoolExecutor | None = None

    @property
    def url(self) -> str:
        return self.base_url + RoutingConfig.ENDPOINT

    def post_query(self, query: RouteQuery) -> list[WeightedPathCandidate]:
        """Send one query and validate the answer.

        Raises:
            RoutingError: On network failure or non-2xx status.
            ResponseFormatError: If the body is not a valid candidate array.
        """
        body = query.to_dict()
        logger.debug(f"POST {self.url} {body}")
        try:
            response = requests.post(self.url, json=body, timeout=self.timeout_s)
        except requests.RequestException as e:
            raise RoutingError(f"Routing service unreachable: {e}") from e

        if not response.ok:
            raise RoutingError(f"Routing service answered {response.status_code}")

        try:
            payload: Any = response.json()
        except ValueError as e:
            raise ResponseFormatError(f"Routing response is not valid JSON: {e}") from e

        candidates = parse_candidates(payload, default_travel_type=query.options.travel_type)
        logger.info(f"Routing service returned {len(candidates)} candidate(s)")
        return candidates

    def fetch(self, ticket: QueryTicket) -> RoutingOutcome:
        """Run the ticket's query and tag the result with its sequence id."""
        try:
            candidates = self.post_query(ticket.query)
        except (RoutingError, ResponseFormatError) as e:
            logger.warning(f"Query #{ticket.sequence_id} failed: {e}")
            return RouteFailure(sequence_id=ticket.sequence_id, reason=str(e))

        if not candidates:
            return RouteEmpty(sequence_id=ticket.sequence_id)
        return RouteSuccess(sequence_id=ticket.sequence_id, candidates=tuple(candidates))

    def submit(self, ticket: QueryTicket) -> "Future[RoutingOutcome]":
        """Run fetch() in the background. The in-flight call is never cancelled."""
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="routing")
        return self._executor.submit(self.fetch, ticket)

    def close(self) -> None:
        """Shut down the background worker pool (waits for in-flight calls)."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __repr__(self) -> str:
        return f"RoutingClient(url={self.url!r}, timeout_s={self.timeout_s})"
