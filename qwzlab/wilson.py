import numpy as np

from .hamiltonian import qwz_hamiltonian
from .projector import occupied_projector
from .schema import WilsonSettings


def wilson_loop(n: int, grid: np.ndarray, mass: float,
                settings: WilsonSettings = WilsonSettings()) -> np.ndarray:
    """
    Wilson loop along the cycle index m at fixed loop index n.

    W = prod_m U_m^dagger U_{m+1}, closed back onto grid[n, 0]. Each projector
    carries a solver-chosen phase that cancels only in the closed product.
    Returns a [P, P] complex matrix.
    """
    nk = grid.shape[1]
    k0 = grid[n, 0]
    W = np.eye(settings.proj_subspace, dtype=np.complex128)

    U_cache = occupied_projector(qwz_hamiltonian(k0, mass), settings)
    for m in range(1, nk):
        U = occupied_projector(qwz_hamiltonian(grid[n, m], mass), settings)
        W = W @ (U_cache.conj().T @ U)
        U_cache = U

    # link (Nk-1) -> 0, re-solved at the stored grid[n, 0]
    U = occupied_projector(qwz_hamiltonian(k0, mass), settings)
    W = W @ (U_cache.conj().T @ U)
    return W


def wilson_loops(grid: np.ndarray, mass: float,
                 settings: WilsonSettings = WilsonSettings()) -> np.ndarray:
    """Independent Wilson loop for every loop index; [Nk, P, P]."""
    nk = grid.shape[0]
    P = settings.proj_subspace
    loops = np.empty((nk, P, P), dtype=np.complex128)
    for n in range(nk):
        loops[n] = wilson_loop(n, grid, mass, settings)
    return loops


def wilson_spectrum(loops: np.ndarray) -> np.ndarray:
    """Eigenvalues of each loop operator; [Nk, P]."""
    loops = np.asarray(loops)
    if loops.ndim != 3 or loops.shape[1] != loops.shape[2]:
        raise ValueError("loops must have shape [Nk, P, P]")
    if loops.shape[1] == 1:
        return loops[:, :, 0].copy()
    return np.stack([np.linalg.eigvals(W) for W in loops], axis=0)
