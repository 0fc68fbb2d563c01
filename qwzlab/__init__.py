"""Wilson-loop spectrum and Chern number of the Qi-Wu-Zhang model."""

from .pipeline import chern_scan, run_wilson_loop
from .schema import WilsonLoopResult, WilsonSettings

__all__ = [
    "schema",
    "hamiltonian",
    "grid",
    "projector",
    "wilson",
    "spectral_flow",
    "io",
    "config",
    "pipeline",
    "cli",
    "run_wilson_loop",
    "chern_scan",
    "WilsonSettings",
    "WilsonLoopResult",
]
