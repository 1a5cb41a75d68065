"""
Drive the field explorer for a few ticks, probe a point and plot the result.

Run:
  python -m experiments.field_explorer --grid 25 --ticks 50 --particles --div --probe 0.5 -0.3
"""
import argparse
import logging
import sys
from pathlib import Path

# Ensure project root is on sys.path when running as a script
if __package__ is None or __package__ == '':
    sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from fieldviz.driver import FrameDriver, ViewSettings
from fieldviz.field import Transform, Vector2
from fieldviz.logging_config import setup_logging
from fieldviz.poisson import poisson_residual
from fieldviz.viz import format_jacobian, plot_frame, plot_potential

logger = logging.getLogger("fieldviz.experiments")


def main(mode="arrows", grid=25, ticks=50, rotate=0.0, scale=1.0, shear=0.0,
         div=False, curl=False, lap=False, particles=False, streamlines=False,
         zoom=1.0, probe=(0.5, -0.3), move=None, iterations=200, seed=7, log_level="INFO"):
    setup_logging(log_level, capture_warnings=True)

    settings = ViewSettings(
        mode=mode, transform=Transform(rotate=rotate, scale=scale, shear=shear), grid=grid,
        show_div=div, show_curl=curl, show_lap=lap, particles=particles, streamlines=streamlines,
        zoom=zoom,
    )
    driver = FrameDriver(settings, seed=seed)
    if move is not None:
        driver.move_handle(0, Vector2(move[0], move[1]))

    frame = None
    for _ in range(ticks):
        frame = driver.tick()
    logger.info("Ran %d ticks on a %dx%d grid", driver.ticks, frame.spec.rows, frame.spec.cols)

    result = driver.probe(*probe)
    for line in format_jacobian(result):
        print(line)

    phi, gx, gy = driver.potential(iterations=iterations)
    if frame.div is not None:
        res = poisson_residual(phi, frame.div, frame.spec.dx, frame.spec.dy)
        logger.info("Poisson residual after %d iterations: %.3e", iterations, res)

    plot_frame(frame, mode=mode, probe=(probe, result))
    plot_potential(phi, gx, gy, frame.spec, show=True)


if __name__ == "__main__":
    ap = argparse.ArgumentParser()
    ap.add_argument("--mode", choices=["arrows", "heat", "normalized"], default="arrows")
    ap.add_argument("--grid", type=int, default=25)
    ap.add_argument("--ticks", type=int, default=50)
    ap.add_argument("--rotate", type=float, default=0.0, help="degrees")
    ap.add_argument("--scale", type=float, default=1.0)
    ap.add_argument("--shear", type=float, default=0.0)
    ap.add_argument("--div", action="store_true")
    ap.add_argument("--curl", action="store_true")
    ap.add_argument("--lap", action="store_true")
    ap.add_argument("--particles", action="store_true")
    ap.add_argument("--streamlines", action="store_true")
    ap.add_argument("--zoom", type=float, default=1.0, help="> 1 shows more of the plane")
    ap.add_argument("--probe", type=float, nargs=2, default=(0.5, -0.3))
    ap.add_argument("--move", type=float, nargs=2, default=None, help="new position of handle 0")
    ap.add_argument("--iterations", type=int, default=200)
    ap.add_argument("--seed", type=int, default=7)
    ap.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = ap.parse_args()
    main(**vars(args))
