from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, Field, StrictFloat, StrictInt

from .encoder import EncodedVector, Number, is_not_a_number


class PredictionLabel(str, Enum):
    STAY = "Stay"
    CHURN = "Churn"

    @property
    def code(self) -> int:
        return 1 if self is PredictionLabel.CHURN else 0


def label_for(prediction: Number) -> PredictionLabel:
    """
    Map a raw prediction to its label. Only 1 means churn.
    """
    return PredictionLabel.CHURN if prediction == 1 else PredictionLabel.STAY


class PredictRequest(BaseModel):
    """
    Encoded features in schema order. NaN markers travel as null.
    """
    features: List[Optional[Union[StrictInt, StrictFloat]]] = Field(...)

    @classmethod
    def from_vector(cls, vector: EncodedVector) -> "PredictRequest":
        return cls(features=[None if is_not_a_number(v) else v for v in vector])


class PredictResponse(BaseModel):
    """
    Service reply. `prediction` is expected to be 0 or 1 but any number is kept as is.
    """
    prediction: Union[StrictInt, StrictFloat]
