"""Artifact writers/readers and result bundles."""

from __future__ import annotations

import numpy as np
import pytest

from qwzlab.grid import kpoint_grid
from qwzlab.io import (
    load_result,
    read_kpoints,
    read_phases,
    save_result,
    write_kpoints,
    write_phases,
)


@pytest.mark.parametrize("nk", [2, 5])
def test_artifact_line_counts(tmp_path, nk):
    grid = kpoint_grid(nk)
    phases = np.linspace(-1.0, -6.0, nk)
    p = write_phases(tmp_path / "Wilson_Loop_Phases", phases)
    k = write_kpoints(tmp_path / "Kpoints", grid)
    assert len(p.read_text().splitlines()) == nk
    assert len(k.read_text().splitlines()) == nk * nk


def test_fixed_width_full_precision_format(tmp_path):
    p = write_phases(tmp_path / "phases", [-3.0915926535897931, 0.5])
    lines = p.read_text().splitlines()
    assert lines[0] == f"{-3.0915926535897931:<30.17f}"
    assert len(lines[1]) == 30
    assert lines[1].rstrip() == "0.50000000000000000"

    k = write_kpoints(tmp_path / "kpoints", kpoint_grid(3))
    rows = k.read_text().splitlines()
    assert all(len(row) == 70 for row in rows)
    # row-major: n outer, m inner
    assert rows[1].split() == [f"{0.0:.17f}", f"{2.0 * np.pi / 3:.17f}"]
    assert rows[3].split()[0] == f"{2.0 * np.pi / 3:.17f}"


def test_artifacts_read_back(tmp_path):
    grid = kpoint_grid(4)
    phases = np.array([0.1, -0.7, -1.9, -3.3])
    write_phases(tmp_path / "phases", phases)
    write_kpoints(tmp_path / "kpoints", grid)
    assert np.allclose(read_phases(tmp_path / "phases"), phases, atol=1e-15)
    assert np.allclose(read_kpoints(tmp_path / "kpoints", 4), grid, atol=1e-15)
    with pytest.raises(ValueError):
        read_kpoints(tmp_path / "kpoints", 5)


def test_write_kpoints_rejects_flat_input(tmp_path):
    with pytest.raises(ValueError):
        write_kpoints(tmp_path / "kpoints", np.zeros((4, 2)))


@pytest.mark.parametrize("suffix", [".npz", ".h5"])
def test_result_bundle_round_trip(tmp_path, topological_result, suffix):
    path = save_result(tmp_path / f"bundle{suffix}", topological_result)
    back = load_result(path)
    assert back.mass == topological_result.mass
    assert back.settings == topological_result.settings
    assert back.chern_number == topological_result.chern_number
    assert back.closed_chern_number == topological_result.closed_chern_number
    assert np.array_equal(back.phases, topological_result.phases)
    assert np.array_equal(back.wilson_loops, topological_result.wilson_loops)
    assert back.meta == topological_result.meta


def test_unknown_bundle_format(tmp_path, topological_result):
    with pytest.raises(ValueError):
        save_result(tmp_path / "bundle.csv", topological_result)
    with pytest.raises(ValueError):
        load_result(tmp_path / "bundle.csv")
