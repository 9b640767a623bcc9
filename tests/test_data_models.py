import pandas as pd

from carprice.data_models import EncodedMatrix, SubmissionRecord


def test_encoded_matrix_shape():
    matrix = EncodedMatrix(features=pd.DataFrame({"a": [1.0, 2.0], "b": [0.0, 1.0]}))
    assert matrix.n_predictors == 2
    assert matrix.response is None


def test_submission_record_shape():
    rec = SubmissionRecord(
        identity="Richardo",
        identifier="20902543",
        score=0.87,
        model_label="Random Forest",
        predictions=(9.21, 8.95, 10.02),
    )
    assert len(rec.predictions) == 3
