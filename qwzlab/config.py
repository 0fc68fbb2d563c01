"""YAML configuration for Wilson-loop runs.

Recognised keys:
    nk: grid points per direction (default 100)
    num_bands: bands of the Bloch Hamiltonian (default 2)
    proj_subspace: occupied bands in the projector (default 1)
    solver: 'closed_form' or 'numpy' (default 'closed_form')
    phases_file: name of the phase artifact (default Wilson_Loop_Phases)
    kpoints_file: name of the k-point artifact (default Kpoints)
"""

from typing import Any, Dict, Optional, Tuple

import yaml

from .io import KPOINTS_FILE, PHASES_FILE
from .schema import WilsonSettings

SETTINGS_KEYS = ("nk", "num_bands", "proj_subspace", "solver")
OUTPUT_KEYS = ("phases_file", "kpoints_file")


def _load_config(config_path) -> Dict[str, Any]:
    with open(config_path) as f:
        cfg = yaml.safe_load(f)
    if cfg is None:
        return {}
    if not isinstance(cfg, dict):
        raise ValueError(f"{config_path}: top level must be a mapping, got {type(cfg).__name__}")
    return cfg


def settings_from_mapping(cfg: Dict[str, Any]) -> Tuple[WilsonSettings, Dict[str, str]]:
    unknown = sorted(set(cfg) - set(SETTINGS_KEYS) - set(OUTPUT_KEYS))
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
    settings = WilsonSettings(**{k: cfg[k] for k in SETTINGS_KEYS if k in cfg})
    settings.check_basic()
    outputs = {
        "phases_file": str(cfg.get("phases_file", PHASES_FILE)),
        "kpoints_file": str(cfg.get("kpoints_file", KPOINTS_FILE)),
    }
    return settings, outputs


def load_settings(config_path: Optional[str] = None) -> Tuple[WilsonSettings, Dict[str, str]]:
    """Settings plus artifact names; built-in defaults when no path is given."""
    cfg = _load_config(config_path) if config_path is not None else {}
    return settings_from_mapping(cfg)
