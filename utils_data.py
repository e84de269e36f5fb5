# FILE: utils_data.py
# Helperi pentru date: codare bipolara, zgomot, imagini <-> vectori de stare.

import numpy as np
import pandas as pd
from sklearn.preprocessing import minmax_scale

from hopfield_errors import InvalidParameterError, InvalidPatternError, ShapeError

IMAGE_SHAPE = (28, 28)


def load_patterns_csv(path="patterns.csv", label_col=None):
    # o imagine pe rand; labels = None daca nu avem coloana de eticheta
    df = pd.read_csv(path)
    labels = None
    if label_col is not None:
        labels = df[label_col].values
        df = df.drop(columns=[label_col])
    X = df.values.astype(float)
    return X, labels


def to_bipolar(x01: np.ndarray) -> np.ndarray:
    # 0/1 -> -1/+1
    return np.where(np.asarray(x01) > 0, 1, -1).astype(int)


def to_01(xpm: np.ndarray) -> np.ndarray:
    # -1/+1 -> 0/1
    return np.where(np.asarray(xpm) > 0, 1, 0).astype(int)


def check_bipolar(x, what="pattern") -> np.ndarray:
    arr = np.asarray(x)
    if arr.dtype == object or not np.issubdtype(arr.dtype, np.number):
        raise InvalidPatternError(f"{what} must be numeric, got dtype {arr.dtype}")
    bad = (arr != 1) & (arr != -1)
    if bad.any():
        raise InvalidPatternError(
            f"{what} has {int(bad.sum())} value(s) outside {{-1, +1}}"
        )
    return arr.astype(int)


def add_noise(pattern_pm1: np.ndarray, noise_rate=0.2, seed=42, rng=None) -> np.ndarray:
    # flip int(noise_rate * n) distinct positions; input is left untouched
    if not 0.0 <= noise_rate <= 1.0:
        raise InvalidParameterError(f"noise_rate must be in [0, 1], got {noise_rate}")
    if rng is None:
        rng = np.random.default_rng(seed)
    x = check_bipolar(pattern_pm1).copy()
    x_flat = x.reshape(-1)
    n = x_flat.size
    k = int(noise_rate * n)
    idx = rng.choice(n, size=k, replace=False)
    x_flat[idx] = -x_flat[idx]
    return x_flat.reshape(x.shape)


def encode_images(images, threshold=0.5) -> np.ndarray:
    # fiecare imagine scalata separat in [0,1], apoi prag -> -1/+1
    arr = np.asarray(images, dtype=float)
    if arr.ndim < 2:
        raise ShapeError(f"encode_images expects a stack of images, got shape {arr.shape}")
    X = arr.reshape(arr.shape[0], -1)
    X_s = minmax_scale(X, axis=1)
    return np.where(X_s > threshold, 1, -1).astype(int)


def decode(state, shape=IMAGE_SHAPE) -> np.ndarray:
    # -1/+1 -> 0/1 pe linii; pixelii fara valoare raman 0
    s = np.asarray(state, dtype=np.float32).reshape(-1)
    rows, cols = shape
    img = np.zeros(rows * cols, dtype=np.float32)
    n = min(s.size, img.size)
    img[:n] = (s[:n] + 1.0) / 2.0
    return img.reshape(rows, cols)
