from __future__ import annotations

import logging
from contextlib import contextmanager

from invtrack.domain.errors import RequestError

log = logging.getLogger(__name__)


@contextmanager
def parsed(resource: str):
    """Turns a malformed response body into RequestError."""
    try:
        yield
    except (ValueError, TypeError, AttributeError, KeyError) as exc:
        log.warning("invalid_payload resource=%s error=%s", resource, exc)
        raise RequestError("Server returned an invalid response.") from exc
