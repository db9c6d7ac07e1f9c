# statlearn/engines/kmeans_engine.py
from __future__ import annotations

from functools import partial
from typing import Literal

import numpy as np
from scipy.spatial.distance import cdist

from statlearn.engines.results import ClusterResult
from statlearn.engines.validation import as_matrix
from statlearn.pipeline.parallel.executor import ParallelExecutor
from statlearn.pipeline.parallel.types import ParallelKind
from statlearn.utils.errors import ParameterError

InitMethod = Literal["k-means++", "random"]


# ======================================================================
# Initialization
# ======================================================================
def init_random(X: np.ndarray, k: int, rng: np.random.Generator) -> np.ndarray:
    """k distinct input points."""
    idx = rng.choice(len(X), size=k, replace=False)
    return X[idx].copy()


def init_kmeans_pp(X: np.ndarray, k: int, rng: np.random.Generator) -> np.ndarray:
    """
    k-means++ seeding: each next centroid is drawn with probability
    proportional to the squared distance to the nearest chosen one.
    """
    n = len(X)
    chosen = [int(rng.integers(n))]
    d2 = cdist(X, X[chosen], "sqeuclidean")[:, 0]

    for _ in range(1, k):
        total = float(d2.sum())
        if total > 0:
            idx = int(rng.choice(n, p=d2 / total))
        else:
            # every remaining point duplicates a chosen one
            remaining = np.setdiff1d(np.arange(n), chosen)
            idx = int(rng.choice(remaining))
        chosen.append(idx)
        d2 = np.minimum(d2, cdist(X, X[[idx]], "sqeuclidean")[:, 0])

    return X[chosen].copy()


_INITS = {
    "k-means++": init_kmeans_pp,
    "random": init_random,
}


# ======================================================================
# Lloyd iteration
# ======================================================================
def assign(X: np.ndarray, centroids: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """
    Nearest centroid by squared Euclidean distance.
    argmin returns the first minimum: exact ties go to the lowest cluster id.
    """
    d2 = cdist(X, centroids, "sqeuclidean")
    labels = np.argmin(d2, axis=1)
    return labels, d2[np.arange(len(X)), labels]


def update(X: np.ndarray, labels: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """
    Centroid = mean of its points.

    Empty cluster policy: re-seed from the point currently farthest from
    its assigned centroid (lowest point index on ties); a point re-seeds
    at most one empty cluster per update.
    """
    k = len(centroids)
    new = centroids.copy()
    counts = np.bincount(labels, minlength=k)

    for c in np.flatnonzero(counts):
        new[c] = X[labels == c].mean(axis=0)

    empty = np.flatnonzero(counts == 0)
    if empty.size:
        dist = np.sum((X - new[labels]) ** 2, axis=1)
        for c in empty:
            far = int(np.argmax(dist))
            new[c] = X[far]
            dist[far] = -1.0

    return new


def lloyd(
        X: np.ndarray,
        k: int,
        rng: np.random.Generator,
        *,
        init: InitMethod = "k-means++",
        max_iter: int = 100,
) -> ClusterResult:
    """
    One k-means run: assign, then alternate update / re-assign until no
    label changes, or until max_iter centroid updates.

    The returned labels are always the assignment to the returned
    centroids; n_iter counts centroid updates.
    """
    centroids = _INITS[init](X, k, rng)
    labels, _ = assign(X, centroids)
    converged = False

    n_iter = 0
    while n_iter < max_iter:
        centroids = update(X, labels, centroids)
        n_iter += 1
        new_labels, _ = assign(X, centroids)
        changed = not np.array_equal(new_labels, labels)
        labels = new_labels
        if not changed:
            converged = True
            break

    d2 = np.sum((X - centroids[labels]) ** 2, axis=1)

    return ClusterResult(
        labels=labels,
        centroids=centroids,
        inertia=float(d2.sum()),
        n_iter=n_iter,
        converged=converged,
    )


def _run_once(
        seed_seq: np.random.SeedSequence,
        *,
        X: np.ndarray,
        k: int,
        init: InitMethod,
        max_iter: int,
) -> ClusterResult:
    return lloyd(X, k, np.random.default_rng(seed_seq), init=init, max_iter=max_iter)


# ======================================================================
# Engine
# ======================================================================
class KMeansEngine:
    """
    KMeansEngine (FINAL / FROZEN)

    Contract:
    - 1 <= k <= n
    - all randomness comes from `seed`; restarts use child seeds spawned
      from it, so results do not depend on n_jobs
    - the restart with the lowest inertia wins (first one on ties)
    """

    def __init__(
            self,
            *,
            init: InitMethod = "k-means++",
            n_init: int = 10,
            max_iter: int = 100,
            seed: int = 0,
            n_jobs: int = 1,
    ):
        if init not in _INITS:
            raise ParameterError(
                f"unknown init '{init}'. Available: {', '.join(_INITS)}"
            )
        if n_init < 1:
            raise ParameterError(f"n_init must be >= 1, got {n_init}")
        if max_iter < 1:
            raise ParameterError(f"max_iter must be >= 1, got {max_iter}")

        self.init = init
        self.n_init = n_init
        self.max_iter = max_iter
        self.seed = seed
        self.n_jobs = n_jobs

    def fit(self, points, k: int) -> ClusterResult:
        X, _ = as_matrix(points)
        n = len(X)

        if not 1 <= k <= n:
            raise ParameterError(f"k must satisfy 1 <= k <= n={n}, got k={k}")

        handler = partial(
            _run_once,
            X=X,
            k=k,
            init=self.init,
            max_iter=self.max_iter,
        )
        runs = ParallelExecutor.run(
            kind=ParallelKind.KMEANS_RESTART,
            items=np.random.SeedSequence(self.seed).spawn(self.n_init),
            handler=handler,
            max_workers=self.n_jobs,
        )

        best = min(range(len(runs)), key=lambda i: runs[i].inertia)
        return runs[best]
