"""
Plotting helpers for field frames, plus the grey-level mappings used for
heat and overlay cells.
"""
import numpy as np
import matplotlib.pyplot as plt


def heat_shade(mag):
    """Grey level for speed: 255 (white) at rest, 0 at |v| >= 3."""
    norm = np.minimum(1.0, np.asarray(mag, dtype=float) / 3.0)
    return np.round(255 * (1 - norm)).astype(int)


def div_shade(div):
    return np.clip(np.round(127 - np.asarray(div, dtype=float) * 50), 0, 255).astype(int)


def lap_shade(lap):
    return np.clip(np.round(127 - np.asarray(lap, dtype=float) * 10), 0, 255).astype(int)


def arrow_length(mag, normalized=False):
    mag = np.asarray(mag, dtype=float)
    if normalized:
        return np.full_like(mag, 12.0)
    return np.minimum(30.0, mag * 10.0)


def format_jacobian(result):
    return (
        f"Jacobian: [{result.j11:.2f}, {result.j12:.2f}; {result.j21:.2f}, {result.j22:.2f}]",
        f"Eigen: {result.eig_a:.2f}, {result.eig_b:.2f}",
    )


def plot_frame(frame, mode="arrows", probe=None, title="Vector field", show=False):
    spec = frame.spec
    extent = [spec.xmin, spec.xmax, spec.ymin, spec.ymax]
    XX, YY = np.meshgrid(spec.xs(), spec.ys())
    mag = frame.magnitude

    fig, ax = plt.subplots(figsize=(6, 6))
    if mode == "heat":
        ax.imshow(heat_shade(mag), origin="lower", extent=extent, cmap="gray", vmin=0, vmax=255)
    else:
        L = arrow_length(mag, normalized=(mode == "normalized"))
        safe = np.where(mag > 0, mag, 1.0)
        ax.quiver(XX, YY, frame.u / safe * L, frame.v / safe * L,
                  angles="xy", scale_units="xy", scale=60, width=0.003, color="k")

    if frame.div is not None:
        ax.imshow(div_shade(frame.div), origin="lower", extent=extent, cmap="gray",
                  vmin=0, vmax=255, alpha=0.4)
    if frame.lap is not None:
        ax.contour(XX, YY, frame.lap, levels=10, colors="k", alpha=0.4, linewidths=0.5)
    if frame.curl is not None:
        ax.contour(XX, YY, frame.curl, levels=10, colors="k", linestyles="dotted", linewidths=0.5)

    if frame.streamlines:
        for S in frame.streamlines:
            ax.plot(S[:, 0], S[:, 1], color="k", linewidth=0.6)
    if frame.particles is not None:
        ax.scatter(frame.particles[:, 0], frame.particles[:, 1], s=4, c="k")

    for h in frame.handles:
        ax.scatter([h.position.x], [h.position.y], s=80, facecolors="w", edgecolors="k", zorder=3)
        ax.plot([h.position.x, h.position.x + 0.3 * h.vector.x],
                [h.position.y, h.position.y + 0.3 * h.vector.y], color="k")

    if probe is not None:
        (px, py), result = probe
        ax.scatter([px], [py], s=30, c="k")
        line1, line2 = format_jacobian(result)
        ax.text(0.02, 0.98, f"{line1}\n{line2}", transform=ax.transAxes,
                family="monospace", fontsize=8, va="top")

    ax.set_xlim(spec.xmin, spec.xmax)
    ax.set_ylim(spec.ymin, spec.ymax)
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.set_title(title)
    fig.tight_layout()
    if show:
        plt.show()
    return fig


def plot_potential(phi, gx, gy, spec, skip=1, show=False):
    XX, YY = np.meshgrid(spec.xs(), spec.ys())
    fig = plt.figure(figsize=(12, 5))
    plt.subplot(1, 2, 1)
    plt.imshow(phi, origin="lower", extent=[spec.xmin, spec.xmax, spec.ymin, spec.ymax], aspect="auto")
    plt.colorbar(label="phi")
    plt.title("Potential from divergence (Jacobi)")
    plt.xlabel("x"); plt.ylabel("y")

    plt.subplot(1, 2, 2)
    plt.quiver(XX[::skip, ::skip], YY[::skip, ::skip], gx[::skip, ::skip], gy[::skip, ::skip],
               scale=60, width=0.003)
    plt.title("grad phi")
    plt.xlabel("x"); plt.ylabel("y")
    plt.tight_layout()
    if show:
        plt.show()
    return fig
