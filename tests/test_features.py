import pytest
from pydantic import ValidationError

from churn_client.features import (
    FEATURE_SCHEMA,
    SAMPLE_INPUT,
    FeatureKind,
    FieldDescriptor,
    build_schema,
    get_feature_lists,
    get_feature_names,
)
from churn_client.encoder import validate_example


def test_default_schema_layout() -> None:
    """
    The schema has 19 fields in the order the service expects, with three numeric ones.
    """
    names = get_feature_names()
    assert len(names) == 19
    assert names[0] == "Gender"
    assert names[4] == "Tenure (months)"
    assert names[-2:] == ["Monthly Charges", "Total Charges"]
    categorical, numeric = get_feature_lists()
    assert numeric == ["Tenure (months)", "Monthly Charges", "Total Charges"]
    assert len(categorical) == 16
    assert FEATURE_SCHEMA[0].options == ("Female", "Male")
    assert FEATURE_SCHEMA[16].options == ("Electronic check", "Mailed check", "Bank transfer", "Credit card")
    assert all(f.tooltip for f in FEATURE_SCHEMA)


def test_sample_input_matches_schema() -> None:
    """
    The example customer is a valid, fully filled form.
    """
    validate_example(FEATURE_SCHEMA, SAMPLE_INPUT)


def test_descriptor_options_invariant() -> None:
    """
    Options are required for categorical fields and forbidden for numeric ones.
    """
    with pytest.raises(ValidationError):
        FieldDescriptor(name="Contract", kind=FeatureKind.CATEGORICAL)
    with pytest.raises(ValidationError):
        FieldDescriptor(name="Contract", kind=FeatureKind.CATEGORICAL, options=())
    with pytest.raises(ValidationError):
        FieldDescriptor(name="Tenure", kind=FeatureKind.NUMERIC, options=("1",))
    field = FieldDescriptor(name="Tenure", kind="numeric")
    assert field.kind == FeatureKind.NUMERIC
    assert not field.is_categorical


def test_descriptor_is_immutable() -> None:
    """
    Descriptors cannot be changed once built.
    """
    with pytest.raises(ValidationError):
        FEATURE_SCHEMA[0].name = "Sex"


def test_build_schema_rejects_duplicate_names() -> None:
    """
    Two fields with the same name make the schema ambiguous.
    """
    a = FieldDescriptor(name="A", kind=FeatureKind.NUMERIC)
    with pytest.raises(ValueError):
        build_schema([a, a])
    assert build_schema([a]) == (a,)


def test_validate_example_errors() -> None:
    """
    Wrong length, unknown options and non-numeric values are rejected.
    """
    with pytest.raises(ValueError):
        validate_example(FEATURE_SCHEMA, SAMPLE_INPUT[:-1])
    bad_option = list(SAMPLE_INPUT)
    bad_option[0] = "Unknown"
    with pytest.raises(ValueError):
        validate_example(FEATURE_SCHEMA, bad_option)
    bad_number = list(SAMPLE_INPUT)
    bad_number[4] = "five"
    with pytest.raises(ValueError):
        validate_example(FEATURE_SCHEMA, bad_number)


def test_default_schema_names_are_unique() -> None:
    """
    The default schema passes the duplicate-name check it was built with.
    """
    assert build_schema(list(FEATURE_SCHEMA)) == FEATURE_SCHEMA
    assert len(set(get_feature_names())) == len(FEATURE_SCHEMA)
