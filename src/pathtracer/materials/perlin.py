# materials/perlin.py
import math
from enum import Enum
import numpy as np
from numba import njit
from pathtracer.core.vector import Vector3

POINT_COUNT = 256
TURBULENCE_DEPTH = 7


class NoiseKind(Enum):
    """Filtering applied to the Perlin lattice when sampling a noise texture."""
    TRILINEAR = "trilinear"
    UNFILTERED = "unfiltered"
    SMOOTHED = "smoothed"
    WITH_RANDOM_VECTORS = "random_vectors"
    TURBULENCE = "turbulence"
    MARBLE = "marble"


@njit
def _hash(perm, i, j, k):
    return perm[0, i & 255] ^ perm[1, j & 255] ^ perm[2, k & 255]


@njit
def _hermite(t):
    return t * t * (3.0 - 2.0 * t)


@njit
def _unfiltered(ranfloat, perm, x, y, z):
    # Truncation toward zero gives the blocky look at scale 4.
    i = np.int64(4.0 * x)
    j = np.int64(4.0 * y)
    k = np.int64(4.0 * z)
    return ranfloat[_hash(perm, i, j, k)]


@njit
def _scalar_lattice(ranfloat, perm, x, y, z, smooth):
    fi = math.floor(x)
    fj = math.floor(y)
    fk = math.floor(z)
    u = x - fi
    v = y - fj
    w = z - fk
    if smooth:
        u = _hermite(u)
        v = _hermite(v)
        w = _hermite(w)
    i = np.int64(fi)
    j = np.int64(fj)
    k = np.int64(fk)

    accum = 0.0
    for di in range(2):
        for dj in range(2):
            for dk in range(2):
                c = ranfloat[_hash(perm, i + di, j + dj, k + dk)]
                accum += ((di * u + (1 - di) * (1.0 - u))
                          * (dj * v + (1 - dj) * (1.0 - v))
                          * (dk * w + (1 - dk) * (1.0 - w))
                          * c)
    return accum


@njit
def _gradient(ranvec, perm, x, y, z):
    fi = math.floor(x)
    fj = math.floor(y)
    fk = math.floor(z)
    u = x - fi
    v = y - fj
    w = z - fk
    uu = _hermite(u)
    vv = _hermite(v)
    ww = _hermite(w)
    i = np.int64(fi)
    j = np.int64(fj)
    k = np.int64(fk)

    accum = 0.0
    for di in range(2):
        for dj in range(2):
            for dk in range(2):
                idx = _hash(perm, i + di, j + dj, k + dk)
                dot = (ranvec[idx, 0] * (u - di)
                       + ranvec[idx, 1] * (v - dj)
                       + ranvec[idx, 2] * (w - dk))
                accum += ((di * uu + (1 - di) * (1.0 - uu))
                          * (dj * vv + (1 - dj) * (1.0 - vv))
                          * (dk * ww + (1 - dk) * (1.0 - ww))
                          * dot)
    return accum


@njit
def _turbulence(ranvec, perm, x, y, z, depth):
    accum = 0.0
    weight = 1.0
    for _ in range(depth):
        accum += weight * _gradient(ranvec, perm, x, y, z)
        weight *= 0.5
        x *= 2.0
        y *= 2.0
        z *= 2.0
    return abs(accum)


class Perlin:
    """
    Perlin noise generator.

    Holds 256 random scalars, 256 random unit vectors and three independent
    permutations of 0..255, all drawn from one seeded numpy generator. The
    tables are never written after construction, so a single instance can be
    shared by every render thread and a fixed seed always yields the same noise.
    """
    def __init__(self, seed: int = 0):
        rng = np.random.default_rng(seed)
        self.seed = seed
        self.ranfloat = rng.random(POINT_COUNT)
        vectors = rng.uniform(-1.0, 1.0, size=(POINT_COUNT, 3))
        norms = np.linalg.norm(vectors, axis=1, keepdims=True)
        self.ranvec = vectors / np.where(norms == 0.0, 1.0, norms)
        self.perm = np.stack([rng.permutation(POINT_COUNT) for _ in range(3)]).astype(np.int64)
        for table in (self.ranfloat, self.ranvec, self.perm):
            table.setflags(write=False)

    def noise(self, p: Vector3, kind: NoiseKind = NoiseKind.WITH_RANDOM_VECTORS) -> float:
        """
        Raw noise at p. Scalar variants lie in [0, 1]; the gradient variant in [-1, 1].
        """
        if kind is NoiseKind.UNFILTERED:
            return float(_unfiltered(self.ranfloat, self.perm, p.x, p.y, p.z))
        if kind is NoiseKind.TRILINEAR:
            return float(_scalar_lattice(self.ranfloat, self.perm, p.x, p.y, p.z, False))
        if kind is NoiseKind.SMOOTHED:
            return float(_scalar_lattice(self.ranfloat, self.perm, p.x, p.y, p.z, True))
        return float(_gradient(self.ranvec, self.perm, p.x, p.y, p.z))

    def turbulence(self, p: Vector3, depth: int = TURBULENCE_DEPTH) -> float:
        return float(_turbulence(self.ranvec, self.perm, p.x, p.y, p.z, depth))
