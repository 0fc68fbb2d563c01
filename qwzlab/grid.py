import numpy as np


def kpoint_grid(nk: int) -> np.ndarray:
    """
    Nk x Nk momentum grid tiling [0, 2pi)^2.

    Returns a read-only [Nk, Nk, 2] array with grid[n, m] = (2pi n/Nk, 2pi m/Nk);
    n is the Wilson-loop index, m the cycle index.
    """
    if int(nk) != nk or nk < 2:
        raise ValueError(f"nk must be an integer >= 2, got {nk!r}")
    nk = int(nk)
    grid = np.empty((nk, nk, 2), dtype=float)
    for i in range(nk):
        for j in range(nk):
            grid[i, j] = (2.0 * np.pi * i / nk, 2.0 * np.pi * j / nk)
    grid.setflags(write=False)
    return grid
