import logging
from typing import Dict, Iterable

import numpy as np

from .grid import kpoint_grid
from .hamiltonian import is_critical_mass
from .schema import WilsonLoopResult, WilsonSettings
from .spectral_flow import (
    chern_number,
    closed_chern_number,
    max_phase_step,
    unwrap_phases,
    wilson_phases,
)
from .wilson import wilson_loops, wilson_spectrum

logger = logging.getLogger(__name__)


def run_wilson_loop(mass: float, settings: WilsonSettings = WilsonSettings()) -> WilsonLoopResult:
    """
    Wilson-loop spectrum and Chern number of the QWZ model at mass M.

    grid -> Hamiltonian -> projector -> loop product -> phase track -> Chern number.
    """
    settings.check_basic()
    mass = float(mass)
    if is_critical_mass(mass, tol=1e-6):
        logger.warning("M=%g is a gap-closing point; the Chern number is not expected to converge", mass)

    grid = kpoint_grid(settings.nk)
    loops = wilson_loops(grid, mass, settings)
    spectrum = wilson_spectrum(loops)
    raw = wilson_phases(loops)
    phases = unwrap_phases(raw)
    C = chern_number(phases)
    C_closed = closed_chern_number(phases)
    logger.debug("M=%g nk=%d min|W|=%.6f max step=%.6f C=%.6f closed=%.6f",
                 mass, settings.nk, float(np.min(np.abs(spectrum))),
                 max_phase_step(phases), C, C_closed)

    res = WilsonLoopResult(
        mass=mass,
        kpoints=grid,
        wilson_loops=loops,
        wilson_spectrum=spectrum,
        raw_phases=raw,
        phases=phases,
        chern_number=C,
        settings=settings,
        closed_chern_number=C_closed,
        meta={"model": "qwz"},
    )
    res.check_basic()
    return res


def chern_scan(masses: Iterable[float], settings: WilsonSettings = WilsonSettings()) -> Dict[str, np.ndarray]:
    """Chern number (open and closed seam) across a list of masses."""
    masses = np.asarray(list(masses), dtype=float)
    open_c = np.empty(masses.size, dtype=float)
    closed_c = np.empty(masses.size, dtype=float)
    for i, mass in enumerate(masses):
        res = run_wilson_loop(mass, settings)
        open_c[i] = res.chern_number
        closed_c[i] = res.closed_chern_number
        logger.info("M=%.3f  C=%.4f  closed=%.4f", mass, open_c[i], closed_c[i])
    return {"mass": masses, "chern_number": open_c, "closed_chern_number": closed_c}
