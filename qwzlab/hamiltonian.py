"""Qi-Wu-Zhang Bloch Hamiltonian on the square lattice."""

from typing import Sequence

import numpy as np

CRITICAL_MASSES = (-2.0, 0.0, 2.0)


def qwz_d_vector(k: Sequence[float], mass: float) -> np.ndarray:
    """Real vector d(k) with H(k) = d(k) . sigma."""
    kx, ky = float(k[0]), float(k[1])
    return np.array([np.sin(kx), np.sin(ky), mass + np.cos(kx) + np.cos(ky)], dtype=float)


def qwz_hamiltonian(k: Sequence[float], mass: float) -> np.ndarray:
    """
    H = [[Mz, sin kx - i sin ky], [sin kx + i sin ky, -Mz]],  Mz = M + cos kx + cos ky.
    Hermitian by construction.
    """
    dx, dy, dz = qwz_d_vector(k, mass)
    return np.array([[dz, dx - 1j * dy],
                     [dx + 1j * dy, -dz]], dtype=np.complex128)


def band_gap(k: Sequence[float], mass: float) -> float:
    """Direct gap 2|d(k)| between the two bands at k."""
    return float(2.0 * np.linalg.norm(qwz_d_vector(k, mass)))


def is_critical_mass(mass: float, tol: float = 1e-9) -> bool:
    """True where the gap closes somewhere in the zone (M = 0, +-2)."""
    return any(abs(mass - m_c) <= tol for m_c in CRITICAL_MASSES)
