import logging
from enum import Enum
from typing import Callable, List, Optional, Sequence

from .client import PredictionClient, PredictionFailed
from .encoder import FeatureEncoder, Number, validate_example
from .features import FEATURE_SCHEMA, SAMPLE_INPUT, FeatureSchema, build_schema
from .form_state import FormState
from .history import HistoryEntry, HistoryLog
from .io_schemas import PredictionLabel, label_for

_logger = logging.getLogger(__name__)

NOTICE = "Something went wrong. Check your inputs and try again."


class SubmitStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"


class SubmissionInProgress(RuntimeError):
    """
    submit() was called while a previous submission was still running.
    """


def _log_notice(message: str) -> None:
    _logger.error(message)


class ChurnFormSession:
    """
    Form, current prediction and history of one user session.

    Drives the submit lifecycle IDLE -> SUBMITTING -> IDLE. A failed call
    leaves the form, the current prediction and the history as they were and
    reports a single notice through `notify`. Listeners registered with
    `subscribe` are called with the session after every state change so a
    front end can redraw.
    """

    def __init__(
        self,
        schema: FeatureSchema = FEATURE_SCHEMA,
        client: Optional[PredictionClient] = None,
        history: Optional[HistoryLog] = None,
        example: Optional[Sequence[str]] = None,
        notify: Optional[Callable[[str], None]] = None,
    ):
        self.schema = build_schema(schema)
        self.encoder = FeatureEncoder(self.schema)
        self.form = FormState(self.schema)
        self.client = client if client is not None else PredictionClient()
        self.history = history if history is not None else HistoryLog()
        if example is None and self.schema == FEATURE_SCHEMA:
            example = SAMPLE_INPUT
        if example is not None:
            validate_example(self.schema, example)
        self.example = tuple(example) if example is not None else None
        self.notify = notify or _log_notice
        self.current_prediction: Optional[Number] = None
        self.status = SubmitStatus.IDLE
        self._listeners: List[Callable[["ChurnFormSession"], None]] = []
        self.form.subscribe(lambda _values: self._changed())

    def subscribe(self, listener: Callable[["ChurnFormSession"], None]) -> None:
        self._listeners.append(listener)

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    @property
    def can_submit(self) -> bool:
        return self.status == SubmitStatus.IDLE

    @property
    def current_label(self) -> Optional[PredictionLabel]:
        if self.current_prediction is None:
            return None
        return label_for(self.current_prediction)

    def set_field(self, index: int, value: str) -> None:
        self.form.set_field(index, value)

    def _clear_prediction(self) -> None:
        self.current_prediction = None

    def reset(self) -> None:
        self._clear_prediction()
        self.form.reset()

    def prefill(self, example: Sequence[str]) -> None:
        validate_example(self.schema, example)
        self._clear_prediction()
        self.form.prefill(example)

    def prefill_example(self) -> None:
        if self.example is None:
            raise ValueError("No example customer configured for this schema")
        self.prefill(self.example)

    def _set_status(self, status: SubmitStatus) -> None:
        self.status = status
        self._changed()

    def submit(self) -> Optional[Number]:
        """
        Encode the current form and ask the service for a prediction.

        Returns the prediction, or None when the call failed.
        """
        if self.status == SubmitStatus.SUBMITTING:
            raise SubmissionInProgress("A prediction request is already in flight")
        snapshot = self.form.snapshot()
        vector = self.encoder.encode(snapshot)
        self._set_status(SubmitStatus.SUBMITTING)
        try:
            prediction = self.client.predict(vector)
        except PredictionFailed as e:
            _logger.warning("Prediction failed, keeping previous state: %s", e)
            self.notify(NOTICE)
            return None
        else:
            self.current_prediction = prediction
            self.history.record(HistoryEntry(input=snapshot, output=prediction))
            _logger.info(
                "Prediction %s (%s), %d entries in history",
                prediction,
                label_for(prediction).value,
                len(self.history),
            )
            return prediction
        finally:
            self._set_status(SubmitStatus.IDLE)
