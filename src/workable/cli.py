# src/workable/cli.py
"""
Command-line interface for the Workable client.

This module provides CLI commands to:
- List jobs (summaries) for the configured Workable account
- Show one job in full by its shortcode
- List every job in full (1 + N API calls)
"""

from dotenv import load_dotenv
load_dotenv(override=True)  # automatically looks for a .env file in the working directory

import json
import logging
from typing import Dict, List, Optional

import httpx
import typer

from workable.clients.workable import WorkableClient
from workable.config import ConfigurationError

# Typer app instance for CLI commands
app = typer.Typer(help="Workable jobs API client")


def _build_params(state: Optional[str], param: Optional[List[str]]) -> Dict[str, str]:
    """
    Turn --state / --param key=value options into query params, in the order given.
    (Order matters: it is part of the cache key.)
    """
    params: Dict[str, str] = {}
    if state:
        params["state"] = state
    for item in param or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got {item!r}", param_hint="--param")
        params[key] = value
    return params


def _client(verbose: bool) -> WorkableClient:
    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    try:
        return WorkableClient.from_env()
    except ConfigurationError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=2)


def _dump(value) -> None:
    typer.echo(json.dumps(value, indent=2, ensure_ascii=False))


def _remote_failure(e: httpx.HTTPStatusError) -> typer.Exit:
    """One line instead of a traceback when Workable says no (bad key, unknown shortcode, outage)."""
    typer.echo(f"Workable API error: {e.response.status_code} {e.response.reason_phrase} for {e.request.url}", err=True)
    return typer.Exit(code=1)


@app.command()
def jobs(
    state: Optional[str] = typer.Option(None, "--state", help="Job state, e.g. published, draft, closed"),
    param: Optional[List[str]] = typer.Option(None, "--param", help="Extra query param as key=value (repeatable)"),
    verbose: bool = typer.Option(False, "--verbose", help="Log requests and rate-limit waits"),
):
    """
    List jobs as returned by Workable's /jobs endpoint.
    """
    params = _build_params(state, param)
    try:
        with _client(verbose) as client:
            _dump([job.to_dict() for job in client.get_jobs(params)])
    except httpx.HTTPStatusError as e:
        raise _remote_failure(e)


@app.command()
def job(
    shortcode: str,
    state: Optional[str] = typer.Option(None, "--state", help="Job state, e.g. published, draft, closed"),
    param: Optional[List[str]] = typer.Option(None, "--param", help="Extra query param as key=value (repeatable)"),
    verbose: bool = typer.Option(False, "--verbose", help="Log requests and rate-limit waits"),
):
    """
    Show the full record for one job, e.g. `workable job GROOV005`.
    Exits with code 1 if Workable returns nothing for that shortcode.
    """
    params = _build_params(state, param)
    try:
        with _client(verbose) as client:
            result = client.get_job(shortcode, params)
    except httpx.HTTPStatusError as e:
        raise _remote_failure(e)
    if result is None:
        typer.echo(f"No job found for shortcode {shortcode!r}", err=True)
        raise typer.Exit(code=1)
    _dump(result.to_dict())


@app.command()
def full_jobs(
    state: Optional[str] = typer.Option(None, "--state", help="Job state, e.g. published, draft, closed"),
    param: Optional[List[str]] = typer.Option(None, "--param", help="Extra query param as key=value (repeatable)"),
    verbose: bool = typer.Option(False, "--verbose", help="Log requests and rate-limit waits"),
):
    """
    List every job with full details. Makes one extra API call per job!
    """
    params = _build_params(state, param)
    try:
        with _client(verbose) as client:
            results = client.get_full_jobs(params)
    except httpx.HTTPStatusError as e:
        raise _remote_failure(e)
    _dump([r.to_dict() if r is not None else None for r in results])


if __name__ == "__main__":
    app()
