"""
Loading and validation of the two view matrices.

Views are read from ``.npy`` files or delimited text (``.csv``, ``.tsv``,
``.txt``). Row order is the item identity and must match across views.
"""

from __future__ import annotations

import os
from typing import Tuple

import numpy as np

from mvsc.exceptions import DegenerateInputError


DELIMITERS = {'.csv': ',', '.tsv': '\t', '.txt': None}


def load_view(path: str, skip_header: int = 0, index_col: bool = False) -> np.ndarray:
    """Read one view into a 2-D float matrix.

    Args:
        path: File to read.
        skip_header: Number of header lines in text files.
        index_col: Drop the first column of text files (row names).

    Returns:
        Matrix of shape (N, D).
    """
    if not os.path.isfile(path):
        raise FileNotFoundError(f'View file not found: {path}')

    ext = os.path.splitext(path)[1].lower()
    if ext == '.npy':
        X = np.load(path)
    elif ext in DELIMITERS:
        X = np.loadtxt(path, delimiter=DELIMITERS[ext], skiprows=skip_header, ndmin=2)
        if index_col:
            X = X[:, 1:]
    else:
        raise ValueError(f"Unsupported view format: {ext}")
    return np.asarray(X, dtype=np.float64)


def validate_views(view1: np.ndarray, view2: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Check that two views describe the same items and carry signal.

    Individual all-zero rows are accepted; they normalize to the zero vector.

    Raises:
        ValueError: On shape mismatch, empty views or non-finite entries.
        DegenerateInputError: If every row of a view is zero.
    """
    checked = []
    for name, view in (('view1', view1), ('view2', view2)):
        view = np.asarray(view, dtype=np.float64)
        if view.ndim != 2:
            raise ValueError(f"{name} must be 2-D, got shape {view.shape}")
        if view.shape[0] == 0 or view.shape[1] == 0:
            raise ValueError(f"{name} is empty: shape {view.shape}")
        if not np.all(np.isfinite(view)):
            raise ValueError(f"{name} contains non-finite entries")
        if not np.any(view):
            raise DegenerateInputError(f"{name} has no non-zero row")
        checked.append(view)

    if checked[0].shape[0] != checked[1].shape[0]:
        raise ValueError(
            f"Views differ in row count: {checked[0].shape[0]} vs {checked[1].shape[0]}"
        )
    return checked[0], checked[1]


def load_views(path1: str, path2: str, skip_header: int = 0, index_col: bool = False) -> Tuple[np.ndarray, np.ndarray]:
    """Load and validate both views."""
    view1 = load_view(path1, skip_header=skip_header, index_col=index_col)
    view2 = load_view(path2, skip_header=skip_header, index_col=index_col)
    return validate_views(view1, view2)
