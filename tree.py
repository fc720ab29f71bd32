"""CART-style binary decision tree for 0/1 labels.

Splits are scored by Gini impurity reduction. Candidate thresholds are the
observed feature values themselves: ``value <= threshold`` goes left,
``value > threshold`` goes right. Among equally good splits the lower
feature index wins, then the lower threshold, so training the same data
always yields the same tree.
"""
from dataclasses import dataclass
from typing import Union

from config import MAX_DEPTH, MIN_SAMPLES_SPLIT
from errors import DataError

# Gains closer than this are treated as equal
_EPS = 1e-12


@dataclass(frozen=True)
class Leaf:
    label: int


@dataclass(frozen=True)
class Split:
    feature_index: int
    threshold: float
    left: "Node"
    right: "Node"


Node = Union[Split, Leaf]


def _gini_counts(n, ones):
    if n == 0:
        return 0.0
    p1 = ones / n
    p0 = 1.0 - p1
    return 1.0 - (p0 * p0 + p1 * p1)


def gini(labels):
    return _gini_counts(len(labels), sum(labels))


def majority_label(labels):
    # 50/50 goes to approved
    ones = sum(labels)
    return 1 if ones * 2 >= len(labels) else 0


def best_split(X, y):
    """Return ``(gain, feature_index, threshold)`` of the best split, or None.

    Each feature is sorted once and swept left to right, keeping running
    counts of the samples at or below the current threshold.
    """
    n = len(y)
    total_ones = sum(y)
    parent = _gini_counts(n, total_ones)
    best = None

    for feature_index in range(len(X[0])):
        order = sorted(range(n), key=lambda i: X[i][feature_index])
        left_n = left_ones = 0
        for pos, i in enumerate(order):
            left_n += 1
            left_ones += y[i]
            threshold = X[i][feature_index]
            # Only the last sample of a run of equal values closes a partition
            if pos + 1 < n and X[order[pos + 1]][feature_index] == threshold:
                continue
            right_n = n - left_n
            if right_n == 0:
                continue

            weighted = (
                left_n * _gini_counts(left_n, left_ones)
                + right_n * _gini_counts(right_n, total_ones - left_ones)
            ) / n
            gain = parent - weighted
            if best is None or gain > best[0] + _EPS:
                best = (gain, feature_index, threshold)

    if best is None or best[0] <= _EPS:
        return None
    return best


def _grow(X, y, depth, max_depth, min_samples_split):
    if len(set(y)) == 1 or len(y) < min_samples_split or depth >= max_depth:
        return Leaf(majority_label(y))

    split = best_split(X, y)
    if split is None:
        return Leaf(majority_label(y))

    _, feature_index, threshold = split
    left_X, left_y, right_X, right_y = [], [], [], []
    for row, label in zip(X, y):
        if row[feature_index] <= threshold:
            left_X.append(row)
            left_y.append(label)
        else:
            right_X.append(row)
            right_y.append(label)

    return Split(
        feature_index=feature_index,
        threshold=threshold,
        left=_grow(left_X, left_y, depth + 1, max_depth, min_samples_split),
        right=_grow(right_X, right_y, depth + 1, max_depth, min_samples_split),
    )


def train_tree(X, y, max_depth=MAX_DEPTH, min_samples_split=MIN_SAMPLES_SPLIT) -> Node:
    if len(X) != len(y):
        raise ValueError(f"Got {len(X)} feature vectors but {len(y)} labels")
    if len(X) < 2:
        raise DataError(f"Not enough valid rows to train (got {len(X)}).")
    return _grow([list(row) for row in X], list(y), 0, max_depth, min_samples_split)


def tree_depth(node):
    if isinstance(node, Leaf):
        return 0
    return 1 + max(tree_depth(node.left), tree_depth(node.right))


def leaf_count(node):
    if isinstance(node, Leaf):
        return 1
    return leaf_count(node.left) + leaf_count(node.right)
