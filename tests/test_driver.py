import numpy as np
import pytest
from fieldviz.driver import FrameDriver, ViewSettings
from fieldviz.field import Transform, Vector2, default_field, field_sampler
from fieldviz.grid import evaluate_grid
from fieldviz.interaction import HandleSet
from fieldviz.jacobian import jacobian_at


def test_plain_tick_skips_optional_work():
    d = FrameDriver(seed=0)
    frame = d.tick()
    assert frame.u.shape == (25, 25) and frame.v.shape == (25, 25)
    assert frame.div is None and frame.curl is None and frame.lap is None
    assert frame.particles is None and frame.streamlines is None
    assert frame.tick == 0
    assert d.tick().tick == 1


def test_tick_matches_core_evaluation():
    d = FrameDriver(ViewSettings(grid=9, show_div=True, show_curl=True, show_lap=True), seed=0)
    frame = d.tick()
    u, v, spec = evaluate_grid(field_sampler(d.handles), 9, 9)
    assert np.allclose(frame.u, u) and np.allclose(frame.v, v)
    for k in ("div", "curl", "lap"):
        assert getattr(frame, k).shape == (9, 9)
    assert np.allclose(frame.magnitude, np.hypot(u, v))


def test_without_handles_the_base_field_is_sampled():
    d = FrameDriver(ViewSettings(grid=5), handles=HandleSet(()), width=100, height=100)
    frame = d.tick()
    assert frame.spec.rows == 8  # aspect rule never drops below 8 rows
    u, v, _ = evaluate_grid(default_field, 5, 8)
    assert np.allclose(frame.u, u) and np.allclose(frame.v, v)


def test_rotation_transform_is_applied_to_frame():
    d0 = FrameDriver(ViewSettings(grid=6), seed=1)
    d90 = FrameDriver(ViewSettings(grid=6, transform=Transform(rotate=90.0)), seed=1)
    a, b = d0.tick(), d90.tick()
    assert np.allclose(b.u, -a.v, atol=1e-12)
    assert np.allclose(b.v, a.u, atol=1e-12)


def test_particles_and_streamlines():
    s = ViewSettings(grid=6, particles=True, streamlines=True, n_particles=20,
                     n_streamlines=4, streamline_steps=10)
    d = FrameDriver(s, seed=2)
    for _ in range(30):
        frame = d.tick()
    assert frame.particles.shape == (20, 2)
    assert np.all(np.abs(frame.particles) <= 2.0)
    assert len(frame.streamlines) == 4
    assert all(S.shape == (11, 2) for S in frame.streamlines)


def test_move_handle_changes_later_frames_only():
    d = FrameDriver(ViewSettings(grid=7), seed=0)
    before = d.tick()
    d.move_handle(0, Vector2(1.5, -1.5))
    after = d.tick()
    assert before.handles.version == 0 and after.handles.version == 1
    assert before.handles[0].position == Vector2(-1.2, -0.8)
    assert not np.allclose(before.u, after.u)


def test_probe_and_potential():
    d = FrameDriver(ViewSettings(grid=12), seed=0)
    r = d.probe(0.3, -0.4)
    assert r == jacobian_at(field_sampler(d.handles), 0.3, -0.4)

    phi, gx, gy = d.potential(iterations=20)
    assert phi.shape == (12, 12) and gx.shape == phi.shape and gy.shape == phi.shape
    assert np.all(phi[0, :] == 0.0) and np.all(phi[:, -1] == 0.0)


def test_invalid_settings_fail_fast():
    with pytest.raises(AssertionError):
        ViewSettings(mode="vortex")
    with pytest.raises(AssertionError):
        ViewSettings(grid=1)


def test_zoom_sets_the_sampled_window():
    base = FrameDriver(ViewSettings(grid=6), seed=0).tick()
    wide = FrameDriver(ViewSettings(grid=6, zoom=2.0), seed=0).tick()
    assert (base.spec.xmin, base.spec.xmax) == (-2.0, 2.0)
    assert (wide.spec.xmin, wide.spec.xmax, wide.spec.ymin, wide.spec.ymax) == (-4.0, 4.0, -4.0, 4.0)
    assert not np.allclose(base.u, wide.u)

    u, v, _ = evaluate_grid(field_sampler(HandleSet.default()), 6, 6, (-4.0, 4.0, -4.0, 4.0))
    assert np.allclose(wide.u, u) and np.allclose(wide.v, v)

    d = FrameDriver(ViewSettings(grid=6, zoom=0.5), seed=0)
    phi, _, _ = d.potential(iterations=5)
    assert phi.shape == (6, 6)
    assert d.window == (-1.0, 1.0, -1.0, 1.0)


def test_setup_logging_replaces_its_own_handlers(tmp_path):
    import logging
    from fieldviz.logging_config import resolve_level, setup_logging

    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level(logging.WARNING) == logging.WARNING
    with pytest.raises(AssertionError):
        resolve_level("chatty")

    log_file = tmp_path / "fieldviz.log"
    setup_logging("DEBUG")
    logger = setup_logging(logging.DEBUG, log_file=str(log_file))
    try:
        assert logger.name == "fieldviz"
        active = [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]
        assert len(active) == 2
        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)

        FrameDriver(ViewSettings(grid=4), seed=0).potential(iterations=3)
        for h in active:
            h.flush()
        assert "Solving Poisson" in log_file.read_text(encoding="utf-8")
    finally:
        for h in [h for h in logger.handlers if not isinstance(h, logging.NullHandler)]:
            logger.removeHandler(h)
            h.close()
        logger.setLevel(logging.NOTSET)
