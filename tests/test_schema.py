import pytest

from carprice.errors import SchemaError
from carprice.schema import DEFAULT_SCHEMA, validate_columns


def test_validate_columns_accepts_declared_train_and_test_frames(make_listings):
    validate_columns(make_listings(5), DEFAULT_SCHEMA, with_response=True)
    validate_columns(make_listings(5, with_price=False), DEFAULT_SCHEMA, with_response=False)


def test_validate_columns_reports_missing_column(make_listings):
    frame = make_listings(5).drop(columns=["horsepower"])
    with pytest.raises(SchemaError, match="missing columns \\['horsepower'\\]"):
        validate_columns(frame, DEFAULT_SCHEMA, with_response=True)


def test_validate_columns_rejects_unexpected_column(make_listings):
    frame = make_listings(5).assign(vin="1HGCM82633A123456")
    with pytest.raises(SchemaError, match="unexpected columns \\['vin'\\]"):
        validate_columns(frame, DEFAULT_SCHEMA, with_response=True)


def test_training_frame_without_price_is_rejected(make_listings):
    with pytest.raises(SchemaError, match="price"):
        validate_columns(make_listings(5, with_price=False), DEFAULT_SCHEMA, with_response=True)


def test_test_frame_carrying_price_is_rejected(make_listings):
    with pytest.raises(SchemaError, match="unexpected"):
        validate_columns(make_listings(5), DEFAULT_SCHEMA, with_response=False)


def test_schema_kind_lookup():
    assert DEFAULT_SCHEMA.response == "price"
    assert DEFAULT_SCHEMA.names("date") == ("listed_date",)
    assert "maximum_seating" in DEFAULT_SCHEMA.names("mixed_numeric")
    assert "price" not in DEFAULT_SCHEMA.expected_columns(with_response=False)
