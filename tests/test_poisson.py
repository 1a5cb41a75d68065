import numpy as np
import pytest
from fieldviz.poisson import solve_poisson, grad_phi, poisson_residual


@pytest.mark.parametrize("iterations", [0, 1, 7, 200])
def test_zero_divergence_is_a_fixed_point(iterations):
    phi = solve_poisson(np.zeros((9, 12)), 0.4, 0.25, iterations=iterations)
    assert phi.shape == (9, 12)
    assert np.all(phi == 0.0)


def test_single_sweep_by_hand():
    div = np.zeros((3, 3))
    div[1, 1] = 1.0
    phi = solve_poisson(div, 1.0, 1.0, iterations=1)
    assert np.isclose(phi[1, 1], -0.25)
    phi = solve_poisson(div, 1.0, 1.0, iterations=5)
    assert np.isclose(phi[1, 1], -0.25)


def test_sweep_reads_only_previous_buffer():
    div = np.zeros((3, 4))
    div[1, 1:3] = 1.0
    phi = solve_poisson(div, 1.0, 1.0, iterations=1)
    # In-place (Gauss-Seidel) ordering would give -0.3125 for the second cell
    assert np.allclose(phi[1, 1:3], [-0.25, -0.25])


def test_boundary_stays_zero():
    rng = np.random.default_rng(0)
    div = rng.standard_normal((10, 8))
    phi = solve_poisson(div, 0.2, 0.3, iterations=50)
    assert np.all(phi[0, :] == 0.0) and np.all(phi[-1, :] == 0.0)
    assert np.all(phi[:, 0] == 0.0) and np.all(phi[:, -1] == 0.0)
    assert np.any(phi[1:-1, 1:-1] != 0.0)


def test_recovers_manufactured_discrete_solution():
    n = 11
    h = 1.0 / (n - 1)
    x = np.linspace(0.0, 1.0, n)
    XX, YY = np.meshgrid(x, x)
    phi_true = np.sin(np.pi * XX) * np.sin(np.pi * YY)
    phi_true[0, :] = phi_true[-1, :] = phi_true[:, 0] = phi_true[:, -1] = 0.0

    div = np.zeros_like(phi_true)
    div[1:-1, 1:-1] = (
        phi_true[1:-1, 2:] + phi_true[1:-1, :-2] + phi_true[2:, 1:-1] + phi_true[:-2, 1:-1]
        - 4.0 * phi_true[1:-1, 1:-1]
    ) / (h * h)

    phi = solve_poisson(div, h, h, iterations=2000)
    assert np.allclose(phi, phi_true, atol=1e-8)
    assert poisson_residual(phi, div, h, h) < 1e-6


def test_fixed_iteration_count_is_not_converged_on_fine_grids():
    div = np.ones((41, 41))
    h = 0.1
    r200 = poisson_residual(solve_poisson(div, h, h, iterations=200), div, h, h)
    r2000 = poisson_residual(solve_poisson(div, h, h, iterations=2000), div, h, h)
    assert r200 > r2000 > 0.0


def test_grad_phi_of_linear_potential():
    x = np.linspace(-2.0, 2.0, 6)
    y = np.linspace(-1.0, 1.0, 5)
    XX, YY = np.meshgrid(x, y)
    phi = 2.0 * XX + 3.0 * YY
    gx, gy = grad_phi(phi, x[1] - x[0], y[1] - y[0])
    assert gx.shape == phi.shape and gy.shape == phi.shape
    # clamped one-sided steps keep the edges exact too
    assert np.allclose(gx, 2.0) and np.allclose(gy, 3.0)


def test_rejects_malformed_input():
    with pytest.raises(AssertionError):
        solve_poisson(np.zeros(5), 1.0, 1.0)
    with pytest.raises(AssertionError):
        solve_poisson(np.zeros((3, 3)), 1.0, 1.0, iterations=-1)
