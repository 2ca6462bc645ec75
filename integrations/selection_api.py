"""HTTP client for the selection service that persists finished questionnaires.

The service receives the full three-class answer map plus the school id and
answers with ``{"ok": true, "id": "..."}`` or ``{"ok": false}``. Transport
failures (connection errors, timeouts, non-2xx responses) are raised as
:class:`~core.errors.SelectionServiceError`; callers treat them the same as an
explicit ``ok: false``. No request is retried automatically.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

import requests

import config
from core.errors import SelectionServiceError
from models.questionnaire import AnswerMap, answers_payload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaveResult:
    ok: bool
    id: str | None = None


class SaveSelection(Protocol):
    """Callable signature for persisting a finished answer map."""

    def __call__(self, answers: AnswerMap, school_id: str, /) -> SaveResult:
        ...


def build_request_body(answers: AnswerMap, school_id: str) -> dict[str, Any]:
    return {"schoolId": school_id, "answers": answers_payload(answers)}


def _parse_result(payload: object) -> SaveResult:
    if not isinstance(payload, dict) or payload.get("ok") is not True:
        return SaveResult(ok=False)
    saved_id = payload.get("id")
    if saved_id is None:
        return SaveResult(ok=False)
    return SaveResult(ok=True, id=str(saved_id))


def save_selection(
    answers: AnswerMap,
    school_id: str,
    /,
    *,
    url: str | None = None,
    timeout: float | None = None,
    session: requests.Session | None = None,
) -> SaveResult:
    """Post ``answers`` for ``school_id`` and return the service verdict."""

    endpoint = url if url is not None else config.SAVE_URL
    if not endpoint:
        raise SelectionServiceError("Selection service URL is not configured")
    http = session or requests
    try:
        response = http.post(
            endpoint,
            json=build_request_body(answers, school_id),
            timeout=timeout or config.SAVE_TIMEOUT,
        )
        response.raise_for_status()
    except requests.HTTPError as exc:
        status = exc.response.status_code if exc.response is not None else None
        raise SelectionServiceError(
            f"Selection service returned HTTP {status}", status_code=status, original=exc
        ) from exc
    except requests.RequestException as exc:
        raise SelectionServiceError(f"Selection service request failed: {exc}", original=exc) from exc

    try:
        payload = response.json()
    except ValueError:
        logger.warning("Selection service returned a non-JSON body")
        return SaveResult(ok=False)
    return _parse_result(payload)


__all__ = ["SaveResult", "SaveSelection", "build_request_body", "save_selection"]
