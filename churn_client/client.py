import logging
import os
from typing import Any, Optional

import requests
from pydantic import ValidationError

from .encoder import EncodedVector, Number
from .io_schemas import PredictRequest, PredictResponse

_logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8000"


class PredictionFailed(RuntimeError):
    """
    The prediction service could not be reached or gave an unusable answer.
    """


def _api_url() -> str:
    """
    Return the prediction service base URL, defaulting to a local server.
    """
    return os.getenv("CHURN_API_URL", DEFAULT_API_URL)


def _api_timeout() -> Optional[float]:
    """
    Return the request timeout in seconds, or None to wait as long as the network stack allows.
    """
    raw = os.getenv("CHURN_API_TIMEOUT", "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"Invalid CHURN_API_TIMEOUT '{raw}': {e}")


class PredictionClient:
    """
    Sends one encoded vector to `POST <base_url>/predict` and returns the raw prediction.

    `session` can be any object with a requests-style `post`; a fresh
    `requests.Session` is used when omitted.
    """

    def __init__(self, base_url: Optional[str] = None, session: Any = None, timeout: Optional[float] = None):
        self.base_url = (base_url or _api_url()).rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout if timeout is not None else _api_timeout()

    @property
    def predict_url(self) -> str:
        return f"{self.base_url}/predict"

    def _post(self, payload: PredictRequest) -> Any:
        kwargs = {"json": payload.model_dump(), "headers": {"Content-Type": "application/json"}}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        try:
            response = self.session.post(self.predict_url, **kwargs)
        except requests.RequestException as e:
            raise PredictionFailed(f"Could not reach the prediction service: {e}")
        if not 200 <= response.status_code < 300:
            raise PredictionFailed(f"Prediction service error ({response.status_code}): {response.text}")
        try:
            return response.json()
        except ValueError as e:
            raise PredictionFailed(f"Prediction service did not return valid JSON: {e}")

    def _build_request(self, vector: EncodedVector) -> PredictRequest:
        try:
            return PredictRequest.from_vector(vector)
        except ValidationError as e:
            raise PredictionFailed(f"Encoded vector cannot be sent: {e}")

    def predict(self, vector: EncodedVector) -> Number:
        try:
            payload = self._build_request(vector)
            _logger.debug("POST %s features=%s", self.predict_url, payload.features)
            body = self._post(payload)
            return PredictResponse.model_validate(body).prediction
        except ValidationError as e:
            _logger.warning("Malformed prediction response: %s", e)
            raise PredictionFailed(f"Malformed prediction response: {e}")
        except PredictionFailed as e:
            _logger.warning("%s", e)
            raise
