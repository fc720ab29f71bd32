import pytest

from errors import InvalidInputError, NotTrainedError
from model_store import Metadata
from predict import build_input_vector, predict_record, predict_vector
from tree import Leaf, Split

FEATURES = ["Credit_Score", "Income", "Loan_Amount(s)"]
TREE = Split(0, 400.0, Leaf(0), Split(2, 25000.0, Leaf(1), Leaf(0)))


def test_predict_vector_walks_left_on_equal():
    assert predict_vector(TREE, [400, 0, 0]) == 0
    assert predict_vector(TREE, [401, 0, 25000]) == 1
    assert predict_vector(TREE, [401, 0, 25001]) == 0


def test_predict_vector_on_single_leaf():
    assert predict_vector(Leaf(1), [0, 0, 0]) == 1


def test_build_input_vector_uses_names_not_order():
    record = {"Loan_Amount(s)": "8000", "Credit_Score": 720, "Income": 55000.0, "extra": "x"}
    assert build_input_vector(record, FEATURES) == [720.0, 55000.0, 8000.0]


@pytest.mark.parametrize(
    "record",
    [
        {"Credit_Score": 720, "Loan_Amount(s)": 8000},
        {"Credit_Score": 720, "Income": "lots", "Loan_Amount(s)": 8000},
        {"Credit_Score": 720, "Income": "", "Loan_Amount(s)": 8000},
        {"Credit_Score": True, "Income": 55000, "Loan_Amount(s)": 8000},
        {},
        None,
    ],
)
def test_build_input_vector_rejects_bad_input(record):
    with pytest.raises(InvalidInputError, match="Required: Credit_Score, Income, Loan_Amount"):
        build_input_vector(record, FEATURES)


def test_predict_before_training(store):
    with pytest.raises(NotTrainedError):
        predict_record({"Credit_Score": 720, "Income": 55000, "Loan_Amount(s)": 8000}, store)


def test_predict_record_response(store):
    store.save(TREE, Metadata(FEATURES, "Loan_Approved", 4, 0))
    result = predict_record({"Credit_Score": "720", "Income": "55000", "Loan_Amount(s)": "8000"}, store)
    assert result == {
        "ok": True,
        "features_used": FEATURES,
        "input_vector": [720.0, 55000.0, 8000.0],
        "prediction": "Approved ✅",
        "label": 1,
    }


def test_predict_record_is_repeatable(store):
    store.save(TREE, Metadata(FEATURES, "Loan_Approved", 4, 0))
    record = {"Credit_Score": 390, "Income": 19000, "Loan_Amount(s)": 29000}
    first = predict_record(record, store)
    assert first["label"] == 0
    assert first["prediction"] == "Rejected ❌"
    assert predict_record(record, store) == first


def test_predict_missing_income_never_returns_a_label(store):
    store.save(TREE, Metadata(FEATURES, "Loan_Approved", 4, 0))
    with pytest.raises(InvalidInputError):
        predict_record({"Credit_Score": 720, "Loan_Amount(s)": 8000}, store)
