# src/workable/clients/workable.py

"""
Client for Workable's jobs API (https://workable.readme.io/docs/jobs).

Design goals (ELI5):
- Keep *all* HTTP details here so the rest of your code never worries about URLs or rate limits.
- Both the HTTP client and the cache are handed in, so tests can swap in fakes.
- Every query is cached; flush the "workable" cache namespace to start fresh.
- Workable rate-limits hard (HTTP 429). We wait until the time it tells us and try again.
"""

from __future__ import annotations
import logging
import time
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol

import httpx
from tenacity import Retrying, RetryCallState, retry_if_exception, stop_never
from tenacity.wait import wait_base

from workable.config import Settings, load_settings
from workable.io.cache import Cache, CacheNamespace, cache_key, get_cache_namespace
from workable.models import WorkableResult
from workable.pipeline.normalize import job_shortcodes, wrap_job, wrap_jobs

logger = logging.getLogger(__name__)

RATE_LIMIT_RESET_HEADER = "X-Rate-Limit-Reset"
DEFAULT_RATE_LIMIT_SLEEP = 10.0  # seconds; Workable's own interval


class HttpClient(Protocol):
    """Anything shaped like httpx.Client.request()."""

    def request(self, method: str, url: str, *, params: Any = None) -> httpx.Response: ...


# ---- Internal helpers ---------------------------------------------------------

def _default_headers(api_key: str) -> Dict[str, str]:
    return {
        "Authorization": f"Bearer {api_key}",
        "Accept": "application/json",
        "User-Agent": "workable-client/0.1",
    }


def create_http_client(settings: Settings) -> httpx.Client:
    """
    Build the httpx client every request goes through.
    Raises ConfigurationError (before any network call) if settings are incomplete.
    """
    settings.validate()
    return httpx.Client(
        base_url=settings.base_url,
        headers=_default_headers(settings.api_key),
        timeout=settings.timeout,
    )


def _is_rate_limited(exc: BaseException) -> bool:
    return isinstance(exc, httpx.HTTPStatusError) and exc.response.status_code == 429


class wait_for_rate_limit_reset(wait_base):
    """
    Wait until the timestamp Workable puts in X-Rate-Limit-Reset.

    - The header may list several values; the first one wins.
    - A reset time already in the past means "go now" (0 seconds).
    - No header (or garbage in it) means the default 10 seconds.
    """

    def __init__(self, clock: Callable[[], float] = time.time, default: float = DEFAULT_RATE_LIMIT_SLEEP):
        self.clock = clock
        self.default = default

    def __call__(self, retry_state: RetryCallState) -> float:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        if not isinstance(exc, httpx.HTTPStatusError):
            return self.default

        values = exc.response.headers.get_list(RATE_LIMIT_RESET_HEADER, split_commas=True)
        if not values or not values[0]:
            return self.default
        try:
            reset_at = float(values[0])
        except ValueError:
            logger.debug("Unparsable %s header %r; using default interval", RATE_LIMIT_RESET_HEADER, values[0])
            return self.default
        return max(0.0, reset_at - self.clock())


def _log_rate_limit(retry_state: RetryCallState) -> None:
    seconds = retry_state.next_action.sleep if retry_state.next_action else 0
    logger.info("Rate limit exceeded - sleeping %.1fs until next interval", seconds)


# ---- Public API ---------------------------------------------------------------

class WorkableClient:
    """
    Fetch jobs from Workable.

    Arguments:
    - http_client: usually from create_http_client(); anything with .request() works.
    - cache: where results go. Left out -> the shared cache of `namespace`.
    - namespace: shared cache partition flushed by flush_cache(). Default "workable".
    - sleep / clock: only swapped out in tests.
    """

    def __init__(
        self,
        http_client: HttpClient,
        cache: Optional[Cache] = None,
        *,
        namespace: Optional[CacheNamespace] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.time,
    ):
        self.http_client = http_client
        self.namespace = namespace or get_cache_namespace()
        self._cache = cache
        self._retrying = Retrying(
            retry=retry_if_exception(_is_rate_limited),
            wait=wait_for_rate_limit_reset(clock=clock),
            stop=stop_never,
            sleep=sleep,
            before_sleep=_log_rate_limit,
            reraise=True,
        )

    @classmethod
    def from_env(cls, **kwargs: Any) -> "WorkableClient":
        """Build a client from WORKABLE_SUBDOMAIN / WORKABLE_API_KEY."""
        return cls(create_http_client(load_settings()), **kwargs)

    # -- queries --

    def get_jobs(self, params: Optional[Mapping[str, Any]] = None) -> List[WorkableResult]:
        """
        All jobs from the list endpoint, e.g. get_jobs({"state": "published"}).
        See https://workable.readme.io/docs/jobs for the query params Workable accepts.
        """
        params = params or {}
        key = cache_key("Jobs", params)
        cache = self.get_cache()
        if cache.has(key):
            return cache.get(key)

        response = self.call_api("jobs", params)
        if not response:
            return []

        jobs = wrap_jobs(response)
        cache.set(key, jobs)
        return jobs

    def get_job(self, shortcode: str, params: Optional[Mapping[str, Any]] = None) -> Optional[WorkableResult]:
        """One job by its shortcode (e.g. "GROOV005"), or None if Workable has nothing usable."""
        params = params or {}
        key = cache_key(f"Job-{shortcode}", params)
        cache = self.get_cache()
        if cache.has(key):
            return cache.get(key)

        job = wrap_job(self.call_api(f"jobs/{shortcode}", params))
        if job is not None:
            cache.set(key, job)
        return job

    def get_full_jobs(self, params: Optional[Mapping[str, Any]] = None) -> List[Optional[WorkableResult]]:
        """
        Every job with its full details.

        Careful: this is 1 list call + 1 detail call per job. Use sparingly.
        Jobs whose detail lookup comes back empty stay in the list as None.
        """
        params = params or {}
        key = cache_key("FullJobs", params)
        cache = self.get_cache()
        if cache.has(key):
            return cache.get(key)

        response = self.call_api("jobs", params)
        if not response:
            return []

        jobs = [self.get_job(code, params) if code else None for code in job_shortcodes(response)]
        cache.set(key, jobs)
        return jobs

    # -- transport --

    def call_api(self, url: str, params: Optional[Mapping[str, Any]] = None, method: str = "GET") -> Any:
        """
        Send one request and return the decoded JSON body.

        - 429: sleep until Workable's reset time, then try again (as often as it takes).
        - Other HTTP errors: logged, then raised as httpx.HTTPStatusError.
        - No response at all (DNS, refused connection, timeout): returns {}.
        - A body that isn't JSON raises json.JSONDecodeError.
        - Valid JSON that isn't an object is returned as-is; the query methods treat it as no data.
        """
        try:
            return self._retrying(self._send, method, url, dict(params or {}))
        except httpx.HTTPStatusError as e:
            logger.warning("Failed to retrieve valid response from Workable: %s", e, exc_info=e)
            raise
        except httpx.RequestError as e:
            logger.debug("No response from Workable for %s %s: %s", method, url, e)
            return {}

    def _send(self, method: str, url: str, params: Dict[str, Any]) -> Any:
        response = self.http_client.request(method, url, params=params)
        response.raise_for_status()  # raises httpx.HTTPStatusError for 4xx/5xx
        return response.json()

    # -- cache --

    def get_cache(self) -> Cache:
        if self._cache is None:
            self.set_cache(self.namespace.cache)
        return self._cache

    def set_cache(self, cache: Cache) -> "WorkableClient":
        self._cache = cache
        return self

    def flush_cache(self) -> None:
        """Clear the whole shared namespace, whatever cache this instance was given."""
        self.namespace.flush()

    def close(self) -> None:
        close = getattr(self.http_client, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> "WorkableClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
