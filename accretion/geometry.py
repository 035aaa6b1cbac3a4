from __future__ import annotations
import numpy as np
from typing import Tuple

"""
This module provides the distance kernels used by the simulation step. center_offsets computes, for every particle, the vector toward the gravitational center and its length in one pass. pair_overlaps builds the pairwise difference and squared-distance matrices with Einstein summation and reports which pairs of live particles overlap, excluding self-pairs and dead rows. The merge pass uses it as a pre-filter so that the exact, order-dependent merge loop only runs when at least one contact exists. It assumes 2D position arrays.

"""




__all__ = ["center_offsets", "pair_overlaps"]

def center_offsets(
    pos: np.ndarray,
    center: Tuple[float, float],
) -> Tuple[np.ndarray, np.ndarray]:
    pos = np.asarray(pos, dtype=float)
    dr = np.asarray(center, dtype=float)[None, :] - pos
    d = np.sqrt(np.einsum("ij,ij->i", dr, dr, optimize=True))
    return dr, d


def pair_overlaps(
    pos: np.ndarray,
    radii: np.ndarray,
    alive: np.ndarray,
) -> np.ndarray:
    pos = np.asarray(pos, dtype=float)
    n = pos.shape[0]
    if n < 2:
        return np.zeros((n, n), dtype=bool)

    diff = pos[:, None, :] - pos[None, :, :]
    r2 = np.einsum("ijk,ijk->ij", diff, diff, optimize=True)
    reach = radii[:, None] + radii[None, :]

    hit = r2 < reach * reach
    hit &= alive[:, None] & alive[None, :]
    np.fill_diagonal(hit, False)
    return hit
