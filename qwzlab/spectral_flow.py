"""Spectral flow of Wilson-loop phases: extraction, unwrapping, Chern numbers."""

from __future__ import annotations

from math import pi
from typing import Iterable

import numpy as np


def _wrap_step(delta: float) -> float:
    if delta > pi:
        delta -= 2.0 * pi
    elif delta < -pi:
        delta += 2.0 * pi
    return delta


def wilson_phases(loops) -> np.ndarray:
    """
    Principal argument of det W(n) in (-pi, pi] for each loop index.

    For a 1x1 loop operator this is arg W(n).
    """
    arr = np.asarray(loops)
    if arr.ndim == 1:
        dets = arr.astype(np.complex128)
    elif arr.ndim == 3:
        dets = arr[:, 0, 0] if arr.shape[1] == 1 else np.linalg.det(arr)
    else:
        raise ValueError("loops must be [Nk] scalars or [Nk, P, P] matrices")
    return np.angle(dets)


def unwrap_phases(phases: Iterable[float]) -> np.ndarray:
    """
    Remove 2pi jumps between consecutive samples, left to right.

    Each step gets at most one 2pi correction against the previous unwrapped
    value, so continuity holds only while the track stays within 2pi of zero;
    a track that drifts past about 3pi picks up a residual jump. The seam from
    the last sample back to the first is left open. Returns a new array.
    """
    raw = np.asarray(list(phases), dtype=float)
    out = raw.copy()
    if out.size == 0:
        return out
    prev = out[0]
    for n in range(1, out.size):
        out[n] = prev + _wrap_step(raw[n] - prev)
        prev = out[n]
    return out


def chern_number(unwrapped: Iterable[float]) -> float:
    """
    Total winding of the unwrapped track over n = 0 .. Nk-1, divided by 2pi.

    The step from Nk-1 back to 0 is not included and the value is not rounded.
    """
    track = np.asarray(list(unwrapped), dtype=float)
    total = 0.0
    for n in range(track.size - 1):
        total += track[n + 1] - track[n]
    return float(total / (2.0 * pi))


def closed_chern_number(unwrapped: Iterable[float]) -> float:
    """Like chern_number, plus the seam step Nk-1 -> 0 reduced into (-pi, pi]."""
    track = np.asarray(list(unwrapped), dtype=float)
    if track.size < 2:
        return 0.0
    seam = _wrap_step(track[0] - track[-1])
    return chern_number(track) + float(seam / (2.0 * pi))


def max_phase_step(unwrapped: Iterable[float]) -> float:
    track = np.asarray(list(unwrapped), dtype=float)
    if track.size < 2:
        return 0.0
    return float(np.max(np.abs(np.diff(track))))


def quantization_check(value: float) -> float:
    """Distance of a Chern estimate from the nearest integer."""
    return float(abs(value - round(value)))
