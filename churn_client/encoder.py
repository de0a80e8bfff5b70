import re
from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from .features import FEATURE_SCHEMA, FeatureSchema

Number = Union[int, float]
EncodedVector = Tuple[Number, ...]

# Code for a categorical value that is empty or not one of the field's options.
NOT_FOUND: int = -1
# Marker for a numeric value that does not parse.
NOT_A_NUMBER: float = np.nan

_DECIMAL = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")


def parse_decimal(value: object) -> float:
    """
    Parse a plain decimal literal, returning NOT_A_NUMBER for anything else.
    """
    if not isinstance(value, str) or not _DECIMAL.match(value):
        return NOT_A_NUMBER
    x = float(value)
    # overflow such as "1e999" cannot be sent as JSON
    if not np.isfinite(x):
        return NOT_A_NUMBER
    return x


def is_not_a_number(x: Number) -> bool:
    return bool(np.isnan(x))


class FeatureEncoder:
    """
    Turns raw form values into the numeric vector the prediction service expects.

    Categorical codes come from an option-to-position mapping built once per
    field. Encoding never raises for unknown or unparsable values: they become
    NOT_FOUND and NOT_A_NUMBER and are passed on as they are.
    """

    def __init__(self, schema: FeatureSchema = FEATURE_SCHEMA):
        self.schema = schema
        self._codes: List[Optional[Dict[str, int]]] = []
        for field in schema:
            if not field.is_categorical:
                self._codes.append(None)
                continue
            codes: Dict[str, int] = {}
            for position, option in enumerate(field.options):
                codes.setdefault(option, position)
            self._codes.append(codes)

    def __len__(self) -> int:
        return len(self.schema)

    def encode_feature(self, index: int, value: object) -> Number:
        codes = self._codes[index]
        if codes is None:
            return parse_decimal(value)
        if not isinstance(value, str):
            return NOT_FOUND
        return codes.get(value, NOT_FOUND)

    def encode(self, values: Sequence[object]) -> EncodedVector:
        if len(values) != len(self.schema):
            raise ValueError(f"Expected {len(self.schema)} values, got {len(values)}")
        return tuple(self.encode_feature(i, v) for i, v in enumerate(values))


def encode(schema: FeatureSchema, values: Sequence[object]) -> EncodedVector:
    """
    Encode one form against a schema.
    """
    return FeatureEncoder(schema).encode(values)


def validate_example(schema: FeatureSchema, example: Sequence[str]) -> None:
    """
    Check that an example vector can stand in for a filled form: same length as
    the schema, categorical values drawn from the options and numeric values parseable.
    """
    if len(example) != len(schema):
        raise ValueError(f"Example has {len(example)} values, schema has {len(schema)} fields")
    for field, value in zip(schema, example):
        if field.is_categorical:
            if value not in field.options:
                raise ValueError(f"Invalid {field.name} '{value}', expected one of {list(field.options)}")
        elif is_not_a_number(parse_decimal(value)):
            raise ValueError(f"Invalid {field.name} '{value}', expected a number")
