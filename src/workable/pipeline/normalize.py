# src/workable/pipeline/normalize.py
"""
Turn Workable's raw JSON responses into WorkableResult objects.

Workable's list endpoint returns {"jobs": [...], "paging": {...}};
the detail endpoint returns the job object itself.
Anything else (a bare JSON array, a string, ...) counts as "no jobs".
"""
from typing import Any, List, Mapping, Optional
from workable.models import WorkableResult


def _records(response_json: Any) -> List[Mapping[str, Any]]:
    # Only JSON objects under "jobs" are job records; everything else is skipped.
    if not isinstance(response_json, Mapping):
        return []
    jobs = response_json.get("jobs") or []
    if not isinstance(jobs, list):
        return []
    return [record for record in jobs if isinstance(record, Mapping)]


def wrap_jobs(response_json: Any) -> List[WorkableResult]:
    """
    Wrap every record under "jobs". A missing "jobs" key counts as no jobs.
    """
    return [WorkableResult(record) for record in _records(response_json)]


def job_shortcodes(response_json: Any) -> List[Optional[str]]:
    """
    Shortcodes of the listed jobs, in listing order.
    A record without a shortcode shows up as None so positions still line up.
    """
    return [record.get("shortcode") or None for record in _records(response_json)]


def wrap_job(response_json: Any) -> Optional[WorkableResult]:
    """
    Wrap a single job, or return None when the response has no "id"
    (empty response, error payload, not a JSON object, ...).
    """
    if not isinstance(response_json, Mapping) or response_json.get("id") is None:
        return None
    return WorkableResult(response_json)
