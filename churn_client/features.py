from enum import Enum
from typing import List, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, model_validator


class FeatureKind(str, Enum):
    CATEGORICAL = "categorical"
    NUMERIC = "numeric"


class FieldDescriptor(BaseModel):
    """
    One form field. For categorical fields the position of an option in
    `options` is its numeric code.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    kind: FeatureKind
    options: Optional[Tuple[str, ...]] = None
    tooltip: str = ""

    @model_validator(mode="after")
    def _check_options(self) -> "FieldDescriptor":
        if self.kind == FeatureKind.CATEGORICAL and not self.options:
            raise ValueError(f"Categorical field '{self.name}' needs at least one option")
        if self.kind == FeatureKind.NUMERIC and self.options is not None:
            raise ValueError(f"Numeric field '{self.name}' cannot declare options")
        return self

    @property
    def is_categorical(self) -> bool:
        return self.kind == FeatureKind.CATEGORICAL


FeatureSchema = Tuple[FieldDescriptor, ...]

_NO_YES = ("No", "Yes")
_NO_YES_NO_INTERNET = ("No", "Yes", "No internet service")


def _categorical(name: str, options: Sequence[str], tooltip: str) -> FieldDescriptor:
    return FieldDescriptor(name=name, kind=FeatureKind.CATEGORICAL, options=tuple(options), tooltip=tooltip)


def _numeric(name: str, tooltip: str) -> FieldDescriptor:
    return FieldDescriptor(name=name, kind=FeatureKind.NUMERIC, tooltip=tooltip)


def build_schema(fields: Sequence[FieldDescriptor]) -> FeatureSchema:
    """
    Freeze a list of descriptors into a schema, rejecting duplicate field names.
    """
    names = [f.name for f in fields]
    duplicates = sorted({n for n in names if names.count(n) > 1})
    if duplicates:
        raise ValueError(f"Duplicate field names in schema: {duplicates}")
    return tuple(fields)


# Order and option order must match the feature order the prediction service was trained on.
FEATURE_SCHEMA: FeatureSchema = build_schema(
    [
        _categorical("Gender", ("Female", "Male"), "Customer's gender."),
        _categorical("Senior Citizen", _NO_YES, "Is the customer a senior citizen?"),
        _categorical("Partner", _NO_YES, "Does the customer have a partner?"),
        _categorical("Dependents", _NO_YES, "Does the customer have dependents?"),
        _numeric("Tenure (months)", "Number of months the customer has stayed."),
        _categorical("Phone Service", _NO_YES, "Is phone service active?"),
        _categorical("Multiple Lines", ("No", "Yes", "No phone service"), "Does the customer have multiple lines?"),
        _categorical("Internet Service", ("DSL", "Fiber optic", "No"), "Type of internet service."),
        _categorical("Online Security", _NO_YES_NO_INTERNET, "Is online security enabled?"),
        _categorical("Online Backup", _NO_YES_NO_INTERNET, "Is online backup enabled?"),
        _categorical("Device Protection", _NO_YES_NO_INTERNET, "Does the customer have device protection?"),
        _categorical("Tech Support", _NO_YES_NO_INTERNET, "Is tech support active?"),
        _categorical("Streaming TV", _NO_YES_NO_INTERNET, "Is streaming TV subscribed?"),
        _categorical("Streaming Movies", _NO_YES_NO_INTERNET, "Is streaming movies subscribed?"),
        _categorical("Contract", ("Month-to-month", "One year", "Two year"), "Type of contract."),
        _categorical("Paperless Billing", _NO_YES, "Is paperless billing active?"),
        _categorical(
            "Payment Method",
            ("Electronic check", "Mailed check", "Bank transfer", "Credit card"),
            "Customer's payment method.",
        ),
        _numeric("Monthly Charges", "Current monthly bill amount."),
        _numeric("Total Charges", "Total charges accumulated."),
    ]
)

SAMPLE_INPUT: Tuple[str, ...] = (
    "Female",
    "No",
    "Yes",
    "No",
    "5",
    "Yes",
    "No",
    "Fiber optic",
    "No",
    "Yes",
    "No",
    "No",
    "No",
    "Yes",
    "Month-to-month",
    "Yes",
    "Electronic check",
    "70.35",
    "350.5",
)


def get_feature_names(schema: FeatureSchema = FEATURE_SCHEMA) -> List[str]:
    """
    Return the field names in schema order.
    """
    return [f.name for f in schema]


def get_feature_lists(schema: FeatureSchema = FEATURE_SCHEMA) -> Tuple[List[str], List[str]]:
    """
    Return the categorical feature names and the numeric feature names.
    """
    categorical = [f.name for f in schema if f.kind == FeatureKind.CATEGORICAL]
    numeric = [f.name for f in schema if f.kind == FeatureKind.NUMERIC]
    return categorical, numeric

