import json
import logging
import pathlib

import h5py
import numpy as np

from .schema import WilsonLoopResult, WilsonSettings

logger = logging.getLogger(__name__)

PHASES_FILE = "Wilson_Loop_Phases"
KPOINTS_FILE = "Kpoints"

_ARRAYS = ("kpoints", "wilson_loops", "wilson_spectrum", "raw_phases", "phases")


def _fixed(value: float, width: int) -> str:
    # fixed-point, 17 decimals, left-justified
    return f"{float(value):<{width}.17f}"


def write_phases(path, phases) -> pathlib.Path:
    """One unwrapped phase per line, loop index n = 0 .. Nk-1."""
    p = pathlib.Path(path)
    with open(p, "w") as f:
        for value in np.asarray(phases, dtype=float):
            f.write(_fixed(value, 30) + "\n")
    logger.debug("wrote %d phases to %s", len(phases), p)
    return p


def write_kpoints(path, grid) -> pathlib.Path:
    """Nk*Nk lines of (kx, ky), n outer and m inner."""
    grid = np.asarray(grid, dtype=float)
    if grid.ndim != 3 or grid.shape[2] != 2:
        raise ValueError("grid must have shape [Nk, Nk, 2]")
    p = pathlib.Path(path)
    with open(p, "w") as f:
        for n in range(grid.shape[0]):
            for m in range(grid.shape[1]):
                f.write(_fixed(grid[n, m, 0], 30) + _fixed(grid[n, m, 1], 40) + "\n")
    logger.debug("wrote %d k-points to %s", grid.shape[0] * grid.shape[1], p)
    return p


def read_phases(path) -> np.ndarray:
    return np.loadtxt(path, dtype=float, ndmin=1)


def read_kpoints(path, nk: int) -> np.ndarray:
    flat = np.loadtxt(path, dtype=float, ndmin=2)
    if flat.shape != (nk * nk, 2):
        raise ValueError(f"{path}: expected {nk * nk} rows of 2 columns, got {flat.shape}")
    return flat.reshape(nk, nk, 2)


def _settings_dict(s: WilsonSettings) -> dict:
    return {"nk": s.nk, "num_bands": s.num_bands, "proj_subspace": s.proj_subspace, "solver": s.solver}


def save_result(path, result: WilsonLoopResult) -> pathlib.Path:
    """
    Persist a full WilsonLoopResult.

    Supports: .npz (plus a .meta.json sidecar) and .h5/.hdf5 (group /qwz).
    """
    p = pathlib.Path(path)
    kind = p.suffix.lower().lstrip('.')
    scalars = {
        "mass": float(result.mass),
        "chern_number": float(result.chern_number),
        "closed_chern_number": (None if result.closed_chern_number is None
                                else float(result.closed_chern_number)),
        "settings": _settings_dict(result.settings),
    }

    if kind == "npz":
        np.savez_compressed(p, **{k: getattr(result, k) for k in _ARRAYS})
        sidecar = p.with_suffix(".meta.json")
        with open(sidecar, "w") as f:
            json.dump({**scalars, "meta": result.meta}, f, indent=2, default=str)
        return p

    if kind in ("h5", "hdf5"):
        with h5py.File(p, "w") as h:
            g = h.create_group("qwz")
            for k in _ARRAYS:
                g.create_dataset(k, data=getattr(result, k))
            g.attrs["mass"] = scalars["mass"]
            g.attrs["chern_number"] = scalars["chern_number"]
            if scalars["closed_chern_number"] is not None:
                g.attrs["closed_chern_number"] = scalars["closed_chern_number"]
            g.attrs["settings"] = json.dumps(scalars["settings"])
            g.attrs["meta"] = json.dumps(result.meta, default=str)
        return p

    raise ValueError(f"Unsupported result format: {p}")


def load_result(path) -> WilsonLoopResult:
    p = pathlib.Path(path)
    kind = p.suffix.lower().lstrip('.')

    if kind == "npz":
        with np.load(p, allow_pickle=False) as z:
            arrays = {k: z[k] for k in _ARRAYS}
        with open(p.with_suffix(".meta.json")) as f:
            scalars = json.load(f)
        meta = scalars.get("meta", {})
    elif kind in ("h5", "hdf5"):
        with h5py.File(p, "r") as h:
            g = h["/qwz"]
            arrays = {k: g[k][...] for k in _ARRAYS}
            closed = g.attrs.get("closed_chern_number")
            scalars = {
                "mass": float(g.attrs["mass"]),
                "chern_number": float(g.attrs["chern_number"]),
                "closed_chern_number": None if closed is None else float(closed),
                "settings": json.loads(g.attrs["settings"]),
            }
            meta = json.loads(g.attrs["meta"])
    else:
        raise ValueError(f"Unsupported or unrecognized input: {p}")

    res = WilsonLoopResult(
        mass=scalars["mass"],
        chern_number=scalars["chern_number"],
        closed_chern_number=scalars.get("closed_chern_number"),
        settings=WilsonSettings(**scalars["settings"]),
        meta=meta,
        **arrays,
    )
    res.check_basic()
    return res
