import logging
import math

from errors import SchemaError

log = logging.getLogger(__name__)

APPROVED_TOKENS = {"yes", "y", "true", "1", "approved", "approve"}
REJECTED_TOKENS = {"no", "n", "false", "0", "rejected", "reject"}


def label_to_01(value):
    """Map a raw approval value to 1 / 0, or None when it is not recognised."""
    if value is None:
        return None
    token = str(value).strip().lower()
    if token in APPROVED_TOKENS:
        return 1
    if token in REJECTED_TOKENS:
        return 0
    return None


def parse_number(value):
    """Return ``value`` as a finite float, or None.

    Accepts ints/floats as they come out of JSON and numeric strings as they
    come out of a CSV. Empty strings, booleans and nan/inf are rejected.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return None
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if not math.isfinite(number):
        return None
    return number


def check_columns(columns, feature_columns, target_column):
    present = set(columns)
    for needed in list(feature_columns) + [target_column]:
        if needed not in present:
            raise SchemaError(f"CSV missing required column: {needed}")


def normalize_row(row, feature_columns, target_column):
    """Turn one raw row into ``(vector, label)``, or None if it is unusable."""
    label = label_to_01(row.get(target_column))
    if label is None:
        return None

    vector = []
    for name in feature_columns:
        number = parse_number(row.get(name))
        if number is None:
            return None
        vector.append(number)
    return vector, label


def build_dataset(columns, rows, feature_columns, target_column):
    """Normalize every row of a row source.

    The header is checked once up front; bad rows are counted, never raised.
    Returns ``(X, y, skipped)``.
    """
    check_columns(columns, feature_columns, target_column)

    X, y = [], []
    skipped = 0
    for index, row in enumerate(rows):
        pair = normalize_row(row, feature_columns, target_column)
        if pair is None:
            skipped += 1
            log.debug("Skipping row %d: invalid label or feature value", index)
            continue
        X.append(pair[0])
        y.append(pair[1])
    return X, y, skipped
