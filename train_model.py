import logging
import sys

import pandas as pd
from sklearn.metrics import accuracy_score

from config import CSV_FILE, FEATURE_COLUMNS, LOG_LEVEL, TARGET_COLUMN
from errors import DataError, SchemaError
from model_store import Metadata, ModelStore
from predict import predict_vector
from records import build_dataset
from tree import leaf_count, train_tree, tree_depth

log = logging.getLogger(__name__)


def load_rows(csv_path=CSV_FILE):
    """Read the training CSV as raw text: ``(columns, rows)``.

    Lines with more fields than the header come back as empty rows, so the
    normalizer skips and counts them like any other unusable row.
    """
    malformed = []
    try:
        df = pd.read_csv(
            csv_path,
            dtype=str,
            keep_default_na=False,
            engine="python",
            on_bad_lines=malformed.append,
        )
    except FileNotFoundError as exc:
        raise DataError(f"Training data not found: {csv_path}") from exc
    except pd.errors.EmptyDataError as exc:
        raise SchemaError("CSV is empty.") from exc
    except pd.errors.ParserError as exc:
        raise SchemaError(f"CSV could not be parsed: {exc}") from exc

    if malformed:
        log.warning("%d malformed CSV line(s) will be skipped", len(malformed))
    return list(df.columns), df.to_dict(orient="records") + [{} for _ in malformed]


def train_from_rows(columns, rows, store=None):
    """Normalize ``rows``, fit the tree and persist it. Returns the summary."""
    store = store or ModelStore()

    X, y, skipped = build_dataset(columns, rows, FEATURE_COLUMNS, TARGET_COLUMN)
    if len(X) < 2:
        raise DataError(f"Not enough valid rows to train (got {len(X)}, skipped {skipped}).")

    tree = train_tree(X, y)

    accuracy = accuracy_score(y, [predict_vector(tree, row) for row in X])
    log.info(
        "Trained tree: samples=%d skipped=%d depth=%d leaves=%d training accuracy=%.3f",
        len(X), skipped, tree_depth(tree), leaf_count(tree), accuracy,
    )

    metadata = Metadata(
        feature_names=list(FEATURE_COLUMNS),
        target_name=TARGET_COLUMN,
        samples_used=len(X),
        rows_skipped=skipped,
    )
    store.save(tree, metadata)

    return {
        "ok": True,
        "message": "Model trained & saved.",
        "features": metadata.feature_names,
        "target": metadata.target_name,
        "samples_used": metadata.samples_used,
        "rows_skipped": metadata.rows_skipped,
    }


def train_from_csv(csv_path=CSV_FILE, store=None):
    columns, rows = load_rows(csv_path)
    return train_from_rows(columns, rows, store)


if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    path = sys.argv[1] if len(sys.argv) > 1 else CSV_FILE
    summary = train_from_csv(path)
    print("Samples used:", summary["samples_used"], "| rows skipped:", summary["rows_skipped"])
