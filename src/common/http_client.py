"""Shared HTTP helpers used by the listing, checksum and download modules.

Encapsulates common request/timeout error handling so modules avoid
duplicating try/except blocks. This module is dependency-light and can be
safely imported by every archive/* module without cycles.
"""
from __future__ import annotations

import logging
import os
import time
from typing import Any, Callable, Dict, Iterable, Optional, Tuple, TypeVar

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


def robust_get(
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any
) -> Tuple[int, Dict[str, str], str]:
    """Perform GET request with timeout and retries with DEBUG traces.

    Returns:
        Tuple of (status_code, headers_dict, text). Transport failures after
        all retries yield ``(0, {}, reason)``.
    """
    safe_target = safe_url(url)
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
                return response.status_code, dict(response.headers), response.text

            except requests.Timeout:
                last_exception = "timeout"
                if is_debug_enabled(logger):
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
                if is_debug_enabled(logger):
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

    # All retries failed
    return 0, {}, f"Request failed after {Constants.HTTP_RETRY_MAX} attempts: {last_exception}"


def fetch_text(url: str, *, context: str) -> Optional[str]:
    """Return the body of a successful GET, or None.

    Args:
        url: Target URL
        context: Human-readable source tag for logs (e.g., "checksum").
    """
    status_code, _, text = robust_get(url)
    if status_code == 200:
        return text
    if status_code == 0:
        logger.warning("%s request failed: %s", context, text)
    elif is_debug_enabled(logger):
        logger.debug(
            "HTTP non-success status",
            extra=extra_context(
                event="http_response",
                component="http_client",
                action="fetch_text",
                outcome="not_found" if status_code == 404 else "error",
                status_code=status_code,
                target=safe_url(url),
                context=context
            )
        )
    return None


def first_successful(
    candidates: Iterable[T],
    fetch: Callable[[T], Optional[R]],
) -> Optional[Tuple[T, R]]:
    """Try candidates in order and stop at the first non-None result.

    Returns:
        Tuple of (candidate, result), or None when every candidate failed.
    """
    for candidate in candidates:
        result = fetch(candidate)
        if result is not None:
            return candidate, result
    return None


def stream_to_file(url: str, target_path: str) -> int:
    """Stream ``url`` into ``target_path``, resuming a partial file.

    Raises:
        requests.RequestException: on transport or HTTP errors.

    Returns:
        Size of the file on disk once complete.
    """
    downloaded = os.path.getsize(target_path) if os.path.exists(target_path) else 0
    headers: Dict[str, str] = {}
    mode = "wb"
    if downloaded > 0:
        headers["Range"] = f"bytes={downloaded}-"
        mode = "ab"

    safe_target = safe_url(url)
    with Timer() as t:
        with requests.get(
            url,
            headers=headers,
            stream=True,
            timeout=Constants.REQUEST_TIMEOUT,
        ) as resp:
            if downloaded > 0 and resp.status_code == 416:
                # Server has nothing past our offset: the file is already whole.
                return downloaded
            if downloaded > 0 and resp.status_code == 200:
                downloaded = 0
                mode = "wb"
            resp.raise_for_status()

            with open(target_path, mode) as f:
                for chunk in resp.iter_content(chunk_size=Constants.DOWNLOAD_CHUNK_SIZE):
                    if not chunk:
                        continue
                    f.write(chunk)
                    downloaded += len(chunk)

        if is_debug_enabled(logger):
            logger.debug(
                "Download complete",
                extra=extra_context(
                    event="http_download",
                    component="http_client",
                    action="GET",
                    outcome="success",
                    bytes=downloaded,
                    duration_ms=t.duration_ms(),
                    target=safe_target
                )
            )
    return downloaded
