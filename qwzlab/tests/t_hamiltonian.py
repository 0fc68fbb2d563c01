"""Checks for the QWZ Hamiltonian, the k-point grid and the band projector."""

from __future__ import annotations

import math

import numpy as np
import pytest

from qwzlab.grid import kpoint_grid
from qwzlab.hamiltonian import band_gap, is_critical_mass, qwz_d_vector, qwz_hamiltonian
from qwzlab.projector import diagonalize, eigh_2x2, occupied_projector
from qwzlab.schema import WilsonSettings


def _sample_ks():
    rng = np.random.default_rng(7)
    return rng.uniform(0.0, 2.0 * math.pi, size=(25, 2))


def test_hamiltonian_matches_closed_form_entries():
    kx, ky, M = 0.3, 1.1, -1.0
    H = qwz_hamiltonian((kx, ky), M)
    mz = M + math.cos(kx) + math.cos(ky)
    assert H[0, 0] == pytest.approx(mz)
    assert H[1, 1] == pytest.approx(-mz)
    assert H[0, 1] == pytest.approx(math.sin(kx) - 1j * math.sin(ky))
    assert H[1, 0] == pytest.approx(math.sin(kx) + 1j * math.sin(ky))


def test_hamiltonian_is_hermitian_and_traceless():
    for k in _sample_ks():
        H = qwz_hamiltonian(k, 0.7)
        assert np.max(np.abs(H - H.conj().T)) < 1e-15
        assert abs(np.trace(H)) < 1e-15


def test_band_gap_is_twice_d_norm():
    k = (0.0, 0.0)
    # d(Gamma) = (0, 0, M + 2)
    assert band_gap(k, -1.0) == pytest.approx(2.0)
    assert np.allclose(qwz_d_vector(k, -1.0), [0.0, 0.0, 1.0])


@pytest.mark.parametrize("mass,critical", [(0.0, True), (2.0, True), (-2.0, True),
                                           (-1.0, False), (1.5, False), (-3.0, False)])
def test_critical_masses(mass, critical):
    assert is_critical_mass(mass) is critical


def test_grid_values_and_determinism():
    g1 = kpoint_grid(6)
    g2 = kpoint_grid(6)
    assert g1.shape == (6, 6, 2)
    assert np.array_equal(g1, g2)
    assert g1[2, 5, 0] == 2.0 * math.pi * 2 / 6
    assert g1[2, 5, 1] == 2.0 * math.pi * 5 / 6
    assert np.all(g1[:, 0, 1] == 0.0)
    assert np.all(g1 < 2.0 * math.pi)


def test_grid_is_read_only():
    g = kpoint_grid(3)
    with pytest.raises(ValueError):
        g[0, 0, 0] = 1.0


@pytest.mark.parametrize("nk", [0, 1, 2.5])
def test_grid_rejects_degenerate_sizes(nk):
    with pytest.raises(ValueError):
        kpoint_grid(nk)


def test_closed_form_solver_agrees_with_numpy():
    for k in _sample_ks():
        H = qwz_hamiltonian(k, -1.3)
        w_cf, V_cf = eigh_2x2(H)
        w_np, _ = np.linalg.eigh(H)
        assert np.allclose(w_cf, w_np, atol=1e-12)
        assert w_cf[0] <= w_cf[1]
        # orthonormal columns, each an eigenvector
        assert np.allclose(V_cf.conj().T @ V_cf, np.eye(2), atol=1e-12)
        assert np.allclose(H @ V_cf, V_cf * w_cf, atol=1e-12)


def test_closed_form_diagonal_and_degenerate_inputs():
    w, V = eigh_2x2(np.diag([1.0, -1.0]).astype(complex))
    assert np.allclose(w, [-1.0, 1.0])
    assert abs(abs(V[1, 0]) - 1.0) < 1e-15

    w, V = eigh_2x2(np.zeros((2, 2), dtype=complex))
    assert np.allclose(w, [0.0, 0.0])
    assert np.array_equal(V, np.eye(2))


def test_occupied_projector_shape_and_band():
    H = qwz_hamiltonian((0.4, 2.2), -1.0)
    for solver in ("closed_form", "numpy"):
        U = occupied_projector(H, WilsonSettings(solver=solver))
        assert U.shape == (2, 1)
        energy = (U.conj().T @ H @ U).real.item()
        assert energy == pytest.approx(-np.linalg.norm(qwz_d_vector((0.4, 2.2), -1.0)))
    assert occupied_projector(H, WilsonSettings(proj_subspace=2)).shape == (2, 2)


def test_unknown_solver_is_rejected():
    with pytest.raises(ValueError):
        diagonalize(np.eye(2), solver="lapack")
