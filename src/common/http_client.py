"""Shared HTTP helpers used by the registry sources.

Encapsulates request/timeout error handling so each source stays a thin
URL-plus-extraction adapter. Every failure collapses to ``None``.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer

logger = logging.getLogger(__name__)


def get_json(
    url: str,
    *,
    context: str,
    headers: Optional[Dict[str, str]] = None,
    **kwargs: Any,
) -> Optional[Any]:
    """Perform a GET request and return the decoded JSON body.

    Args:
        url: Target URL.
        context: Human-readable source tag for logs (e.g., "npm", "cargo").
        headers: Optional extra request headers.
        **kwargs: Passed through to requests.get.

    Returns:
        The parsed JSON document, or None on network error, non-200 status
        or undecodable body.
    """
    request_headers = {"User-Agent": Constants.USER_AGENT, "Accept": "application/json"}
    if headers:
        request_headers.update(headers)
    safe_target = safe_url(url)

    with Timer() as t:
        try:
            res = requests.get(
                url,
                timeout=Constants.REQUEST_TIMEOUT,
                headers=request_headers,
                **kwargs,
            )
        except requests.Timeout:
            logger.debug(
                "%s request timed out after %s seconds",
                context,
                Constants.REQUEST_TIMEOUT,
                extra=extra_context(
                    event="http_exception",
                    component="http_client",
                    outcome="timeout",
                    target=safe_target,
                ),
            )
            return None
        except requests.RequestException as exc:  # includes ConnectionError
            logger.debug(
                "%s connection error: %s",
                context,
                exc,
                extra=extra_context(
                    event="http_exception",
                    component="http_client",
                    outcome="request_exception",
                    target=safe_target,
                ),
            )
            return None

    if res.status_code != 200:
        logger.debug(
            "%s returned HTTP %s",
            context,
            res.status_code,
            extra=extra_context(
                event="http_response",
                component="http_client",
                outcome="handled_non_200",
                status_code=res.status_code,
                duration_ms=t.duration_ms(),
                target=safe_target,
            ),
        )
        return None

    try:
        data = res.json()
    except ValueError:  # json.JSONDecodeError and requests' wrapper
        logger.debug(
            "%s returned undecodable JSON",
            context,
            extra=extra_context(
                event="parse",
                component="http_client",
                outcome="json_decode_error",
                target=safe_target,
            ),
        )
        return None

    if is_debug_enabled(logger):
        logger.debug(
            "HTTP response ok",
            extra=extra_context(
                event="http_response",
                component="http_client",
                action="GET",
                outcome="success",
                status_code=res.status_code,
                duration_ms=t.duration_ms(),
                target=safe_target,
                context=context,
            ),
        )
    return data
