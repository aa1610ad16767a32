"""Shared HTTP helpers used by the index client and the installer.

Encapsulates common request/timeout error handling so callers avoid
duplicating try/except blocks. Nothing here exits the process; callers
decide how a failure is reported.
"""
from __future__ import annotations

import hashlib
import json
import logging
import os
import time
from typing import Any, Dict, Optional, Tuple

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


class DownloadError(Exception):
    """An artifact could not be fetched or failed verification."""


# Simple in-memory cache for HTTP responses
_http_cache: Dict[str, Tuple[Any, float]] = {}


def clear_cache() -> None:
    """Drop every cached response."""
    _http_cache.clear()


def _get_cache_key(method: str, url: str, headers: Optional[Dict[str, str]] = None) -> str:
    """Generate cache key from request parameters."""
    headers_str = str(sorted(headers.items())) if headers else ""
    return f"{method}:{url}:{headers_str}"


def _is_cache_valid(cache_entry: Tuple[Any, float]) -> bool:
    """Check if cache entry is still valid."""
    _, cached_time = cache_entry
    return time.time() - cached_time < Constants.HTTP_CACHE_TTL_SEC


def robust_get(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], str]:
    """Perform GET request with timeout, retries, and caching with DEBUG traces.

    Returns:
        (status_code, headers, text); status_code is 0 when every attempt
        failed at the transport level, with the last error in ``text``.
    """
    cache_key = _get_cache_key('GET', url, headers)
    safe_target = safe_url(url)

    if cache_key in _http_cache and _is_cache_valid(_http_cache[cache_key]):
        cached_data, _ = _http_cache[cache_key]
        if is_debug_enabled(logger):
            logger.debug(
                "HTTP cache hit",
                extra=extra_context(
                    event="cache_hit",
                    component="http_client",
                    action="GET",
                    target=safe_target
                )
            )
        return cached_data

    last_exception = None

    for attempt in range(Constants.HTTP_RETRY_MAX):
        if attempt:
            time.sleep(Constants.HTTP_RETRY_BASE_DELAY_SEC * (2 ** (attempt - 1)))
        with Timer() as t:
            try:
                if is_debug_enabled(logger):
                    logger.debug(
                        "HTTP request",
                        extra=extra_context(
                            event="http_request",
                            component="http_client",
                            action="GET",
                            target=safe_target,
                            attempt=attempt + 1
                        )
                    )

                response = requests.get(
                    url,
                    timeout=Constants.REQUEST_TIMEOUT,
                    headers=headers,
                    **kwargs
                )
            except requests.Timeout:
                last_exception = "timeout"
                logger.debug(
                    "HTTP timeout",
                    extra=extra_context(
                        event="http_exception",
                        component="http_client",
                        action="GET",
                        outcome="timeout",
                        attempt=attempt + 1,
                        target=safe_target
                    )
                )
                continue
            except requests.RequestException as exc:  # includes ConnectionError
                last_exception = str(exc)
                logger.debug(
                    "HTTP request exception",
                    extra=extra_context(
                        event="http_exception",
                        component="http_client",
                        action="GET",
                        outcome="request_exception",
                        attempt=attempt + 1,
                        target=safe_target
                    )
                )
                continue

        if response.status_code >= 500:
            last_exception = f"HTTP {response.status_code}"
            continue

        cache_data = (response.status_code, dict(response.headers), response.text)
        _http_cache[cache_key] = (cache_data, time.time())

        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response ok",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    outcome="success",
                    status_code=response.status_code,
                    duration_ms=t.duration_ms(),
                    target=safe_target
                )
            )
        return cache_data

    # All retries failed
    return 0, {}, f"Request failed after {Constants.HTTP_RETRY_MAX} attempts: {last_exception}"


def get_json(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], Optional[Any]]:
    """Perform GET request and parse JSON response with DEBUG traces.

    Args:
        url: Target URL
        headers: Optional request headers
        **kwargs: Additional requests.get parameters

    Returns:
        Tuple of (status_code, headers_dict, parsed_json_or_none)
    """
    status_code, response_headers, text = robust_get(url, headers=headers, **kwargs)

    if status_code == 200 and text:
        try:
            return status_code, response_headers, json.loads(text)
        except json.JSONDecodeError:
            logger.debug(
                "JSON decode error",
                extra=extra_context(
                    event="parse",
                    component="http_client",
                    action="get_json",
                    outcome="json_decode_error",
                    status_code=status_code,
                    target=safe_url(url)
                )
            )
            return status_code, response_headers, None

    return status_code, response_headers, None


def download_file(
    url: str,
    dest: str,
    *,
    expected_size: Optional[int] = None,
    sha256: Optional[str] = None,
) -> int:
    """Stream ``url`` into ``dest`` and verify it.

    A size of 0 or None skips the size check. The partial file is removed
    on any failure.

    Returns:
        Number of bytes written.

    Raises:
        DownloadError: transport failure, non-200 status, size or digest mismatch.
    """
    safe_target = safe_url(url)
    digest = hashlib.sha256()
    written = 0

    with Timer() as t:
        try:
            with requests.get(url, stream=True, timeout=Constants.REQUEST_TIMEOUT) as res:
                if res.status_code != 200:
                    raise DownloadError(f"HTTP {res.status_code} fetching {safe_target}")
                with open(dest, "wb") as handle:
                    for chunk in res.iter_content(chunk_size=Constants.DOWNLOAD_CHUNK_SIZE):
                        if not chunk:
                            continue
                        handle.write(chunk)
                        digest.update(chunk)
                        written += len(chunk)
        except requests.RequestException as exc:
            _discard(dest)
            raise DownloadError(f"Connection error fetching {safe_target}: {exc}") from exc
        except (DownloadError, OSError):
            _discard(dest)
            raise

    if expected_size and written != expected_size:
        _discard(dest)
        raise DownloadError(
            f"Size mismatch for {safe_target}: expected {expected_size} bytes, got {written}"
        )
    if sha256 and digest.hexdigest().lower() != sha256.lower():
        _discard(dest)
        raise DownloadError(f"sha256 mismatch for {safe_target}")

    logger.info(
        "Downloaded %s (%d bytes)",
        safe_target,
        written,
        extra=extra_context(
            event="download",
            component="http_client",
            outcome="success",
            duration_ms=t.duration_ms(),
        ),
    )
    return written


def _discard(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
