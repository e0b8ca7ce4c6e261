"""Latest-input-wins recomputation for an interactive quoting surface."""

from __future__ import annotations

import logging
import threading

from service_quote.domain.errors import DomainError
from service_quote.domain.quote import Quote
from service_quote.use_cases.compute_quote import ComputeQuote, QuoteRequest

logger = logging.getLogger(__name__)


class QuoteSession:
    """
    Holds the last published quote for one quoting session.

    Every input change is submitted as a complete QuoteRequest and gets a
    revision number. A computation only publishes its quote if its revision
    is still the latest one submitted; results of superseded revisions are
    discarded, never merged. The session keeps no state besides the latest
    revision and the memoized last (request, quote) pair.
    """

    def __init__(self, use_case: ComputeQuote | None = None) -> None:
        self._use_case = use_case or ComputeQuote()
        self._lock = threading.Lock()
        self._revision = 0
        self._pending: dict[int, QuoteRequest] = {}
        self._last_request: QuoteRequest | None = None
        self._last_quote: Quote | None = None

    @property
    def latest_revision(self) -> int:
        with self._lock:
            return self._revision

    @property
    def quote(self) -> Quote | None:
        """The authoritative quote, or None before the first completed revision."""
        with self._lock:
            return self._last_quote

    def submit(self, request: QuoteRequest) -> int:
        """Register a new input snapshot and return its revision."""
        with self._lock:
            self._revision += 1
            # Older pending snapshots can never publish anymore
            self._pending = {self._revision: request}
            return self._revision

    def complete(self, revision: int) -> Quote | None:
        """
        Compute the quote for a submitted revision.

        Returns:
            The published quote, or None if the revision was superseded,
            also when its computation failed after being superseded

        Raises:
            ValidationError, NoPricingDataError: As raised by ComputeQuote,
                only while the revision is still the latest
        """
        with self._lock:
            request = self._pending.get(revision)
            if request is None:
                logger.debug("Discarding superseded quote revision", extra={"revision": revision})
                return None
            if request == self._last_request and self._last_quote is not None:
                del self._pending[revision]
                return self._last_quote

        # Computation is pure, so it runs outside the lock
        try:
            quote = self._use_case.execute(request)
        except DomainError:
            with self._lock:
                superseded = revision != self._revision
            if superseded:
                logger.debug(
                    "Discarding error of superseded quote revision", extra={"revision": revision}
                )
                return None
            raise

        with self._lock:
            if revision != self._revision:
                logger.debug("Discarding stale quote result", extra={"revision": revision})
                return None
            self._pending.pop(revision, None)
            self._last_request = request
            self._last_quote = quote
            return quote

    def recompute(self, request: QuoteRequest) -> Quote | None:
        """Submit and complete in one step, for synchronous callers."""
        return self.complete(self.submit(request))
