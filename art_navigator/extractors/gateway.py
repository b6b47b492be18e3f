"""Extraction gateway: remote extraction with a local fallback."""

from __future__ import annotations

import requests

from . import get_extractor
from .base import QueryExtractor
from .heuristic import HeuristicExtractor
from ..config import Settings, get_settings
from ..errors import ExtractionError, QueryValidationError
from ..log import Loggable
from ..models import ExtractionOutcome

# Gateway states
IDLE = "idle"
REQUESTING = "requesting"
SUCCEEDED = "succeeded"
FALLBACK_SUCCEEDED = "fallback-succeeded"
REJECTED = "rejected"


def validate_utterance(utterance: object, max_chars: int) -> str:
    """Return the utterance if it may be sent, otherwise raise QueryValidationError."""
    if not isinstance(utterance, str):
        raise QueryValidationError("请输入文字描述。")
    if not utterance.strip():
        raise QueryValidationError("请输入您想查找的内容。")
    if len(utterance) > max_chars:
        raise QueryValidationError(f"输入过长（{len(utterance)} 字），请控制在 {max_chars} 字以内。")
    return utterance


class ExtractionGateway(Loggable):
    """
    Tries the primary extractor and falls back to the heuristic one.

    The primary defaults to the extractor named by ``extraction_backend``
    (REMOTE or ENDPOINT).

    ``process_user_query`` never raises: validation problems come back as
    ``errors`` on the outcome, and any failure of the primary extractor is
    replaced by the fallback's result.
    """

    log_name = "GATEWAY"

    def __init__(
        self,
        primary: QueryExtractor | None = None,
        fallback: QueryExtractor | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.primary = primary or get_extractor(self.settings.extraction_backend, settings=self.settings)
        self.fallback = fallback or HeuristicExtractor()
        self.state = IDLE
        self.last_failure: str | None = None

    def set_logger(self, callback) -> None:
        super().set_logger(callback)
        self.primary.set_logger(callback)
        self.fallback.set_logger(callback)

    def process_user_query(self, utterance: str) -> ExtractionOutcome:
        """Extract time and place from ``utterance``, degrading to the fallback on failure."""
        self.last_failure = None
        try:
            validate_utterance(utterance, self.settings.max_utterance_chars)
        except QueryValidationError as e:
            self.state = REJECTED
            self._log_warning(f"Rejected utterance: {e}")
            return ExtractionOutcome(message=str(e), source="none", errors=[str(e)])

        self.state = REQUESTING
        try:
            outcome = self.primary.extract(utterance)
            self.state = SUCCEEDED
            self._log_info(f"{self.primary.name} succeeded")
            return outcome

        except requests.Timeout:
            self._record_failure(f"Timeout after {self.settings.extraction_timeout}s")

        except requests.ConnectionError:
            self._record_failure("Connection failed")

        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "unknown"
            self._record_failure(f"HTTP error: {status}")

        except requests.RequestException as e:
            self._record_failure(f"Request error: {e}")

        except ExtractionError as e:
            self._record_failure(f"Extraction failed: {e}")

        except Exception as e:
            self._record_failure(f"Unexpected error: {type(e).__name__}: {e}")

        outcome = self.fallback.extract(utterance)
        outcome.fallback_used = True
        self.state = FALLBACK_SUCCEEDED
        return outcome

    def _record_failure(self, reason: str) -> None:
        self.last_failure = reason
        self._log_warning(f"{reason}; falling back to {self.fallback.name}")
