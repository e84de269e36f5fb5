# FILE: utils_distance.py
# Distanta Hamming intre stari bipolare + similaritate fata de prototipuri.
# Folosit de recover() pentru testul de convergenta.

import numpy as np

from hopfield_errors import ShapeError


def hamming(a, b) -> int:
    # nr pozitii unde a[i] != b[i]
    a = np.asarray(a).reshape(-1)
    b = np.asarray(b).reshape(-1)
    if a.shape != b.shape:
        raise ShapeError(f"hamming: length mismatch {a.size} vs {b.size}")
    return int(np.count_nonzero(a != b))


def hamming_similarity(x_pm1: np.ndarray, prototypes_pm1: np.ndarray) -> np.ndarray:
    # Pentru -1/+1: similaritate = nr potriviri
    x_pm1 = np.asarray(x_pm1).reshape(-1)
    prototypes_pm1 = np.atleast_2d(np.asarray(prototypes_pm1))
    if prototypes_pm1.shape[1] != x_pm1.size:
        raise ShapeError(
            f"hamming_similarity: prototypes have length {prototypes_pm1.shape[1]}, "
            f"input has {x_pm1.size}"
        )
    matches = (prototypes_pm1 == x_pm1).sum(axis=1)
    return matches.astype(float)


def closest_memory(state, memories):
    # (index, distanta) a celei mai apropiate memorii; la egalitate castiga primul
    memories = np.atleast_2d(np.asarray(memories))
    state = np.asarray(state).reshape(-1)
    if memories.shape[1] != state.size:
        raise ShapeError(
            f"closest_memory: memories have length {memories.shape[1]}, state has {state.size}"
        )
    # distance = N - matches
    dist = state.size - hamming_similarity(state, memories)
    idx = int(np.argmin(dist))
    return idx, int(dist[idx])
