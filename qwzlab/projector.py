"""Hermitian 2x2 diagonalization and the occupied-band projector."""

from typing import Tuple

import numpy as np

from .schema import WilsonSettings

_EPS = 1e-300


def eigh_2x2(H: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Closed-form eigendecomposition of a 2x2 Hermitian matrix.

    Same contract as numpy.linalg.eigh: eigenvalues ascending, eigenvectors as
    orthonormal columns. Only the diagonal and the upper off-diagonal entry are read.
    """
    a = float(np.real(H[0, 0])); d = float(np.real(H[1, 1])); c = complex(H[0, 1])
    mean = 0.5 * (a + d)
    r = float(np.hypot(0.5 * (a - d), abs(c)))
    evals = np.array([mean - r, mean + r], dtype=float)

    if r <= _EPS:
        return evals, np.eye(2, dtype=np.complex128)

    lam = evals[0]
    # two null-space candidates of H - lam; keep the better conditioned one
    v_row0 = np.array([c, lam - a], dtype=np.complex128)
    v_row1 = np.array([lam - d, np.conj(c)], dtype=np.complex128)
    v = v_row0 if np.vdot(v_row0, v_row0).real >= np.vdot(v_row1, v_row1).real else v_row1
    v = v / np.linalg.norm(v)

    evecs = np.empty((2, 2), dtype=np.complex128)
    evecs[:, 0] = v
    evecs[:, 1] = (-np.conj(v[1]), np.conj(v[0]))
    return evals, evecs


def diagonalize(H: np.ndarray, solver: str = "closed_form") -> Tuple[np.ndarray, np.ndarray]:
    if solver == "closed_form":
        return eigh_2x2(H)
    if solver == "numpy":
        return np.linalg.eigh(H)
    raise ValueError(f"unknown solver {solver!r}")


def occupied_projector(H: np.ndarray, settings: WilsonSettings = WilsonSettings()) -> np.ndarray:
    """[num_bands, proj_subspace] block of eigenvectors of the lowest eigenvalues."""
    _, evecs = diagonalize(H, settings.solver)
    return evecs[:, :settings.proj_subspace]
