"""Persisted model: ``tree.joblib`` (the tree record) and ``meta.json``.

A new training run replaces both files. Each file is written to a temporary
path in the model directory and renamed into place, so a reader never sees a
half-written artifact.
"""
import json
import logging
import math
import os
import shutil
import tempfile
from dataclasses import asdict, dataclass
from typing import List

import joblib

from config import FEATURE_COLUMNS, META_FILENAME, MODEL_DIR, TREE_FILENAME
from errors import CorruptModelError, NotTrainedError
from tree import Leaf, Split

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Metadata:
    feature_names: List[str]
    target_name: str
    samples_used: int
    rows_skipped: int

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise CorruptModelError("Model metadata is not an object")
        try:
            feature_names = data["feature_names"]
            target_name = data["target_name"]
            samples_used = data["samples_used"]
            rows_skipped = data["rows_skipped"]
        except KeyError as exc:
            raise CorruptModelError(f"Model metadata is missing {exc}") from exc

        if (
            not isinstance(feature_names, list)
            or len(feature_names) != len(FEATURE_COLUMNS)
            or not all(isinstance(name, str) for name in feature_names)
        ):
            raise CorruptModelError("Model metadata has an invalid feature_names list")
        if not isinstance(target_name, str):
            raise CorruptModelError("Model metadata has an invalid target_name")
        for key, value in (("samples_used", samples_used), ("rows_skipped", rows_skipped)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise CorruptModelError(f"Model metadata has an invalid {key}")

        return cls(list(feature_names), target_name, samples_used, rows_skipped)


# ---------------- TREE <-> RECORD ----------------
def node_to_record(node):
    if isinstance(node, Leaf):
        return {"type": "leaf", "label": node.label}
    return {
        "type": "split",
        "feature_index": node.feature_index,
        "threshold": node.threshold,
        "left": node_to_record(node.left),
        "right": node_to_record(node.right),
    }


def node_from_record(record, n_features):
    if not isinstance(record, dict):
        raise CorruptModelError("Tree node is not a record")

    kind = record.get("type")
    if kind == "leaf":
        label = record.get("label")
        if isinstance(label, bool) or label not in (0, 1):
            raise CorruptModelError(f"Leaf has invalid label: {label!r}")
        return Leaf(int(label))

    if kind == "split":
        feature_index = record.get("feature_index")
        if (
            isinstance(feature_index, bool)
            or not isinstance(feature_index, int)
            or not 0 <= feature_index < n_features
        ):
            raise CorruptModelError(f"Split has invalid feature_index: {feature_index!r}")
        threshold = record.get("threshold")
        if (
            isinstance(threshold, bool)
            or not isinstance(threshold, (int, float))
            or not math.isfinite(threshold)
        ):
            raise CorruptModelError(f"Split has non-numeric threshold: {threshold!r}")
        if "left" not in record or "right" not in record:
            raise CorruptModelError("Split is missing a child")
        return Split(
            feature_index=feature_index,
            threshold=float(threshold),
            left=node_from_record(record["left"], n_features),
            right=node_from_record(record["right"], n_features),
        )

    raise CorruptModelError(f"Unknown tree node type: {kind!r}")


# ---------------- STORE ----------------
class ModelStore:
    def __init__(self, model_dir=MODEL_DIR):
        self.model_dir = model_dir
        self.tree_path = os.path.join(model_dir, TREE_FILENAME)
        self.meta_path = os.path.join(model_dir, META_FILENAME)

    def exists(self):
        return os.path.exists(self.tree_path) and os.path.exists(self.meta_path)

    def _temp_path(self, suffix):
        fd, path = tempfile.mkstemp(dir=self.model_dir, prefix=".tmp-", suffix=suffix)
        os.close(fd)
        return path

    def save(self, tree, metadata):
        os.makedirs(self.model_dir, exist_ok=True)

        tree_tmp = self._temp_path(".joblib")
        meta_tmp = self._temp_path(".json")
        backup = None
        try:
            joblib.dump(node_to_record(tree), tree_tmp)
            with open(meta_tmp, "w", encoding="utf-8") as f:
                json.dump(metadata.to_dict(), f, indent=2)

            # Previous tree is restored if the metadata cannot be swapped in
            if os.path.exists(self.tree_path):
                backup = self._temp_path(".bak")
                shutil.copy2(self.tree_path, backup)

            os.replace(tree_tmp, self.tree_path)
            try:
                os.replace(meta_tmp, self.meta_path)
            except OSError:
                if backup is not None:
                    os.replace(backup, self.tree_path)
                else:
                    os.remove(self.tree_path)
                raise
        finally:
            for path in (tree_tmp, meta_tmp, backup):
                if path is not None and os.path.exists(path):
                    os.remove(path)

        log.info("Model saved to %s", self.model_dir)

    def load(self):
        """Read back ``(tree, metadata)``."""
        if not self.exists():
            raise NotTrainedError("Model not trained. Run POST /train first.")

        try:
            with open(self.meta_path, encoding="utf-8") as f:
                meta_record = json.load(f)
        except FileNotFoundError as exc:
            raise NotTrainedError("Model not trained. Run POST /train first.") from exc
        except ValueError as exc:
            raise CorruptModelError(f"Model metadata is not valid JSON: {exc}") from exc
        metadata = Metadata.from_dict(meta_record)

        try:
            tree_record = joblib.load(self.tree_path)
        except FileNotFoundError as exc:
            raise NotTrainedError("Model not trained. Run POST /train first.") from exc
        except Exception as exc:
            raise CorruptModelError(f"Model tree could not be loaded: {exc}") from exc
        tree = node_from_record(tree_record, len(metadata.feature_names))

        return tree, metadata
