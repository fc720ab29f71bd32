import logging

from errors import InvalidInputError
from model_store import ModelStore
from records import parse_number
from tree import Leaf, Split

log = logging.getLogger(__name__)

LABEL_TEXT = {1: "Approved ✅", 0: "Rejected ❌"}


def predict_vector(tree, vector):
    """Walk ``tree`` from the root and return the label of the leaf reached."""
    node = tree
    while True:
        if isinstance(node, Leaf):
            return node.label
        if isinstance(node, Split):
            node = node.left if vector[node.feature_index] <= node.threshold else node.right
        else:
            raise TypeError(f"Not a tree node: {node!r}")


def build_input_vector(record, feature_names):
    """Look up each trained feature by name in ``record``."""
    if not isinstance(record, dict):
        record = {}
    vector = [parse_number(record.get(name)) for name in feature_names]
    if any(value is None for value in vector):
        raise InvalidInputError(
            f"Missing or invalid numeric inputs. Required: {', '.join(feature_names)}"
        )
    return vector


def predict_record(record, store=None):
    store = store or ModelStore()
    tree, metadata = store.load()

    vector = build_input_vector(record, metadata.feature_names)
    label = predict_vector(tree, vector)
    log.info("Predicted %s for %s", label, vector)

    return {
        "ok": True,
        "features_used": metadata.feature_names,
        "input_vector": vector,
        "prediction": LABEL_TEXT[label],
        "label": label,
    }
