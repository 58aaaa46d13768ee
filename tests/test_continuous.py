from __future__ import annotations

import functools
import math

import numpy as np
import pytest

from graphlap.calculus.continuous import _require_torch, gaussian_well, sample_grid


def _closed_form(x, y, sigma):
    c = 2.0 * sigma * math.sqrt(2.0 * math.pi)
    ex = np.exp(-((x / (2.0 * sigma)) ** 2))
    ey = np.exp(-((y / (2.0 * sigma)) ** 2))
    grad = np.stack([x * ex, y * ey], axis=-1) / (2.0 * sigma**2 * c)
    lap = (ex * (1.0 - x**2 / (2.0 * sigma**2)) + ey * (1.0 - y**2 / (2.0 * sigma**2))) / (2.0 * sigma**2 * c)
    return grad, lap


def test_gaussian_well_values():
    sigma = 0.1
    assert gaussian_well(0.0, 0.0, sigma=sigma) == pytest.approx(-2.0 / (2.0 * sigma * math.sqrt(2.0 * math.pi)))
    # symmetric in both coordinates
    assert gaussian_well(0.3, -0.2, sigma=sigma) == pytest.approx(gaussian_well(-0.2, 0.3, sigma=sigma))
    with pytest.raises(ValueError):
        gaussian_well(0.0, 0.0, sigma=0.0)


def test_sample_grid_indexing():
    xs = np.array([0.0, 1.0, 2.0])
    ys = np.array([10.0, 20.0])
    F = sample_grid(lambda x, y: x + y, xs, ys)
    assert F.shape == (3, 2)
    assert F[2, 1] == 22.0


def test_autodiff_matches_closed_form():
    torch = pytest.importorskip("torch")

    from graphlap.calculus.continuous import gradient_field, laplacian_field

    sigma = 0.3
    xs = np.linspace(-1.0, 1.0, 11)
    ys = np.linspace(-0.5, 0.5, 7)
    fn = functools.partial(gaussian_well, sigma=sigma, xp=torch)

    grad = gradient_field(fn, xs, ys)
    lap = laplacian_field(fn, xs, ys)

    X, Y = np.meshgrid(xs, ys, indexing="ij")
    grad_ref, lap_ref = _closed_form(X, Y, sigma)

    assert grad.shape == (11, 7, 2)
    assert lap.shape == (11, 7)
    assert np.allclose(grad, grad_ref, atol=1e-10)
    assert np.allclose(lap, lap_ref, atol=1e-10)


def test_quadratic_and_linear_fields():
    pytest.importorskip("torch")

    from graphlap.calculus.continuous import gradient_field, laplacian_field

    xs = np.linspace(-1.0, 1.0, 5)

    lap = laplacian_field(lambda x, y: x**2 + 3.0 * y**2, xs, xs)
    assert np.allclose(lap, 8.0)

    grad = gradient_field(lambda x, y: x**2 + 3.0 * y**2, xs, xs)
    X, Y = np.meshgrid(xs, xs, indexing="ij")
    assert np.allclose(grad[..., 0], 2.0 * X)
    assert np.allclose(grad[..., 1], 6.0 * Y)

    # A linear field has a constant gradient and zero Laplacian.
    assert np.allclose(laplacian_field(lambda x, y: 2.0 * x + y, xs, xs), 0.0)


def test_chunking_does_not_change_results():
    torch = pytest.importorskip("torch")

    from graphlap.calculus.continuous import laplacian_field

    xs = np.linspace(-1.0, 1.0, 9)
    fn = functools.partial(gaussian_well, sigma=0.2, xp=torch)
    whole = laplacian_field(fn, xs, xs, chunk_rows=None)
    chunked = laplacian_field(fn, xs, xs, chunk_rows=2)
    assert np.allclose(whole, chunked)


def test_missing_torch_gives_install_hint(monkeypatch):
    import sys

    # A None entry makes `import torch` raise ImportError.
    monkeypatch.setitem(sys.modules, "torch", None)
    with pytest.raises(ImportError, match=r"graphlap\[torch\]"):
        _require_torch()
