# FILE: model_hopfield.py
# Hopfield Network (discrete) FROM SCRATCH - memorie asociativa
# Invatare Hebb + relaxare asincrona stocastica (un neuron ales aleator pe iteratie)
# cu detectie de convergenta pe o fereastra de `patience` stari identice.

import logging
from collections import deque
from dataclasses import dataclass, replace
from itertools import islice

import numpy as np

from hopfield_errors import (
    EmptyMemoryError,
    InvalidParameterError,
    ShapeError,
)
from utils_data import add_noise, check_bipolar, to_bipolar
from utils_distance import closest_memory, hamming

logger = logging.getLogger(__name__)

DEFAULT_MAX_ITERATIONS = 1000
DEFAULT_PATIENCE = 5


def _readonly(a: np.ndarray) -> np.ndarray:
    a.flags.writeable = False
    return a


@dataclass(frozen=True, eq=False)
class HopfieldModel:
    # W (N x N, diag 0), b (N), energia fiecarei memorii; array-uri read-only
    weights: np.ndarray
    bias: np.ndarray
    reference_energies: tuple = ()

    def __post_init__(self):
        W = np.array(self.weights, dtype=float)
        if W.ndim != 2 or W.shape[0] != W.shape[1]:
            raise ShapeError(f"weights must be a square matrix, got shape {W.shape}")
        b = np.array(self.bias, dtype=float).reshape(-1)
        if b.size != W.shape[0]:
            raise ShapeError(f"bias has length {b.size}, expected {W.shape[0]}")
        if np.any(np.diag(W) != 0):
            raise InvalidParameterError("weights must have a zero diagonal (no self-connections)")
        object.__setattr__(self, "weights", _readonly(W))
        object.__setattr__(self, "bias", _readonly(b))
        object.__setattr__(self, "reference_energies", tuple(float(e) for e in self.reference_energies))

    @property
    def n_neurons(self) -> int:
        return self.weights.shape[0]

    @property
    def n_memories(self) -> int:
        return len(self.reference_energies)


@dataclass(frozen=True, eq=False)
class Trajectory:
    # iteratia t (de la 1) e la pozitia t-1; frames, energies = traj
    frames: tuple = ()
    energies: tuple = ()
    converged: bool = False
    cancelled: bool = False

    def __len__(self):
        return len(self.frames)

    def __iter__(self):
        yield self.frames
        yield self.energies

    def items(self):
        for t, (state, e) in enumerate(zip(self.frames, self.energies), start=1):
            yield t, state, e

    @property
    def final_state(self):
        return self.frames[-1] if self.frames else None

    @property
    def final_energy(self):
        return self.energies[-1] if self.energies else None


def _as_pattern_matrix(memories) -> np.ndarray:
    # one pattern per row; ragged input must be caught before np.asarray
    if isinstance(memories, np.ndarray) and memories.dtype != object:
        arr = memories
        if arr.ndim == 1:
            arr = arr[None, :]
        if arr.ndim != 2:
            raise ShapeError(f"memories must be K x N, got shape {memories.shape}")
    else:
        items = list(memories)
        if items and all(np.ndim(p) == 0 for p in items):
            # flat sequence of scalars = a single pattern, same as a 1-D array
            items = [items]
        rows = [np.asarray(p).reshape(-1) for p in items]
        if not rows:
            raise EmptyMemoryError("build needs at least one pattern")
        lengths = sorted({r.size for r in rows})
        if len(lengths) > 1:
            raise ShapeError(f"all patterns must have the same length, got lengths {lengths}")
        arr = np.stack(rows, axis=0)

    if arr.shape[0] < 1:
        raise EmptyMemoryError("build needs at least one pattern")
    if arr.shape[1] < 1:
        raise EmptyMemoryError("patterns must have at least one component")
    return check_bipolar(arr, "memories")


def energy(model: HopfieldModel, state) -> float:
    # E(s) = -0.5 * s^T W s - b^T s
    s = np.asarray(state, dtype=float).reshape(-1)
    if s.size != model.n_neurons:
        raise ShapeError(f"state has length {s.size}, model has {model.n_neurons} neurons")
    return float(-0.5 * s @ model.weights @ s - model.bias @ s)


def build(memories) -> HopfieldModel:
    # Hebb rule: W = (1/K) * sum(p p^T), diag=0, b=0
    P = _as_pattern_matrix(memories)
    K, n = P.shape

    W = np.zeros((n, n), dtype=float)
    for p in P:
        W += np.outer(p, p)
    W /= K
    np.fill_diagonal(W, 0.0)

    model = HopfieldModel(weights=W, bias=np.zeros(n, dtype=float))
    ref = tuple(energy(model, p) for p in P)
    logger.debug("built Hopfield model: %d neurons, %d memories", n, K)
    return replace(model, reference_energies=ref)


def _check_int(name, value, minimum):
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidParameterError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidParameterError(f"{name} must be >= {minimum}, got {value}")
    return int(value)


def _quantize(s: np.ndarray) -> np.ndarray:
    return _readonly(np.where(s >= 0, 1, -1).astype(np.int32))


def recover(
    model: HopfieldModel,
    initial_state,
    max_iterations=DEFAULT_MAX_ITERATIONS,
    patience=DEFAULT_PATIENCE,
    min_iterations_before_convergence=None,
    rng=None,
    seed=None,
    should_stop=None,
) -> Trajectory:
    """
    One random neuron per iteration: s[i] = sign(W[i] @ s - b[i]), sign(0) = +1.
    Converged when the last ``patience`` states are identical (checked from
    ``min_iterations_before_convergence`` on, default ``patience``).
    Hitting ``max_iterations`` is not an error (``converged=False``);
    ``should_stop`` is polled before each iteration (``cancelled=True``).
    """
    max_iterations = _check_int("max_iterations", max_iterations, 1)
    patience = _check_int("patience", patience, 1)
    if min_iterations_before_convergence is None:
        min_iter = patience
    else:
        min_iter = _check_int("min_iterations_before_convergence", min_iterations_before_convergence, 0)

    s0 = np.asarray(initial_state)
    n = model.n_neurons
    if s0.ndim != 1 or s0.size != n:
        raise ShapeError(f"initial_state has shape {s0.shape}, model has {n} neurons")
    s = check_bipolar(s0, "initial_state").astype(float)

    if rng is None:
        rng = np.random.default_rng(seed)

    W, b = model.weights, model.bias
    frames, energies = [], []
    window = deque(maxlen=patience)
    converged = cancelled = False

    logger.debug(
        "recover: n=%d max_iterations=%d patience=%d min_iterations=%d",
        n, max_iterations, patience, min_iter,
    )

    t = 1
    while t <= max_iterations:
        if should_stop is not None and should_stop():
            cancelled = True
            break

        i = int(rng.integers(0, n))
        activation = W[i] @ s - b[i]
        s[i] = 1.0 if activation >= 0 else -1.0

        frame = _quantize(s)
        frames.append(frame)
        energies.append(energy(model, s))

        window.append(frame)
        if t >= min_iter and len(window) == patience:
            first = window[0]
            if all(hamming(first, other) == 0 for other in islice(window, 1, None)):
                converged = True
                break
        t += 1

    if converged:
        logger.debug("recover: converged after %d iterations, E=%.4f", len(frames), energies[-1])
    elif cancelled:
        logger.info("recover: cancelled after %d iterations", len(frames))
    else:
        logger.info("recover: no convergence within %d iterations", max_iterations)

    return Trajectory(
        frames=tuple(frames),
        energies=tuple(energies),
        converged=converged,
        cancelled=cancelled,
    )


def main():
    # 3 patternuri simple 10x10 (litere stilizate)
    A = np.array([
        [0,0,0,1,1,1,1,0,0,0],
        [0,0,1,1,0,0,1,1,0,0],
        [0,1,1,0,0,0,0,1,1,0],
        [0,1,1,0,0,0,0,1,1,0],
        [0,1,1,1,1,1,1,1,1,0],
        [0,1,1,0,0,0,0,1,1,0],
        [0,1,1,0,0,0,0,1,1,0],
        [0,1,1,0,0,0,0,1,1,0],
        [0,1,1,0,0,0,0,1,1,0],
        [0,0,0,0,0,0,0,0,0,0],
    ], dtype=int)

    H = np.array([
        [0,1,1,0,0,0,0,1,1,0],
        [0,1,1,0,0,0,0,1,1,0],
        [0,1,1,0,0,0,0,1,1,0],
        [0,1,1,1,1,1,1,1,1,0],
        [0,1,1,1,1,1,1,1,1,0],
        [0,1,1,0,0,0,0,1,1,0],
        [0,1,1,0,0,0,0,1,1,0],
        [0,1,1,0,0,0,0,1,1,0],
        [0,1,1,0,0,0,0,1,1,0],
        [0,0,0,0,0,0,0,0,0,0],
    ], dtype=int)

    T = np.array([
        [0,1,1,1,1,1,1,1,1,0],
        [0,0,0,0,1,1,0,0,0,0],
        [0,0,0,0,1,1,0,0,0,0],
        [0,0,0,0,1,1,0,0,0,0],
        [0,0,0,0,1,1,0,0,0,0],
        [0,0,0,0,1,1,0,0,0,0],
        [0,0,0,0,1,1,0,0,0,0],
        [0,0,0,0,1,1,0,0,0,0],
        [0,0,0,0,1,1,0,0,0,0],
        [0,0,0,0,0,0,0,0,0,0],
    ], dtype=int)

    print("=== HOPFIELD: RECUPERARE ASINCRONA ===")
    memories = np.array([to_bipolar(p.reshape(-1)) for p in (A, H, T)])
    model = build(memories)
    print("Neuroni:", model.n_neurons, "Memorii:", model.n_memories)
    print("Energii de referinta:", [round(e, 2) for e in model.reference_energies])

    # test: luam pattern A si il corupem
    s0 = add_noise(memories[0], noise_rate=0.1, seed=1)
    print("Hamming(A, A_noisy):", hamming(memories[0], s0))

    traj = recover(model, s0, max_iterations=3000, patience=60, seed=1)
    idx, dist = closest_memory(traj.final_state, memories)
    print(f"Iteratii: {len(traj)} converged={traj.converged}")
    print(f"E start={traj.energies[0]:.2f} E final={traj.final_energy:.2f} "
          f"E(A)={model.reference_energies[0]:.2f}")
    print("Cea mai apropiata memorie:", "AHT"[idx], "distanta Hamming:", dist)


if __name__ == "__main__":
    main()
