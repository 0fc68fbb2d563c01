from dataclasses import dataclass, field
from typing import Optional, Dict, Any

import numpy as np

SOLVERS = ("closed_form", "numpy")


@dataclass(frozen=True)
class WilsonSettings:
    """Grid and subspace sizes for one Wilson-loop run."""

    nk: int = 100                 # points per grid direction
    num_bands: int = 2            # size of the Bloch Hamiltonian
    proj_subspace: int = 1        # occupied bands kept in the projector
    solver: str = "closed_form"   # 'closed_form' | 'numpy'

    def check_basic(self) -> None:
        for name in ("nk", "num_bands", "proj_subspace"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if self.nk < 2:
            raise ValueError(f"nk must be an integer >= 2, got {self.nk!r}")
        if self.num_bands != 2:
            raise ValueError(f"the QWZ model has 2 bands, got num_bands={self.num_bands!r}")
        if not 1 <= self.proj_subspace <= self.num_bands:
            raise ValueError(
                f"proj_subspace must lie in [1, {self.num_bands}], got {self.proj_subspace!r}"
            )
        if self.solver not in SOLVERS:
            raise ValueError(f"unknown solver {self.solver!r}; expected one of {SOLVERS}")


@dataclass(frozen=True)
class WilsonLoopResult:
    mass: float
    kpoints: np.ndarray                 # [Nk,Nk,2]
    wilson_loops: np.ndarray            # [Nk,P,P] complex
    wilson_spectrum: np.ndarray         # [Nk,P] complex
    raw_phases: np.ndarray              # [Nk] principal arg det W
    phases: np.ndarray                  # [Nk] unwrapped
    chern_number: float
    settings: WilsonSettings = field(default_factory=WilsonSettings)
    closed_chern_number: Optional[float] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    def check_basic(self) -> None:
        nk = self.settings.nk
        p = self.settings.proj_subspace
        assert np.shape(self.kpoints) == (nk, nk, 2), "kpoints shape != [Nk,Nk,2]"
        assert np.shape(self.wilson_loops) == (nk, p, p), "wilson_loops shape != [Nk,P,P]"
        assert np.shape(self.wilson_spectrum) == (nk, p), "wilson_spectrum shape != [Nk,P]"
        for name in ["raw_phases", "phases"]:
            assert len(getattr(self, name)) == nk, f"{name} length != Nk"
