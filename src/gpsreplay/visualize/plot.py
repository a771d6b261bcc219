# gpsreplay/visualize/plot.py
"""
Static plotting routines for gpsreplay (matplotlib).

Undefined values are plotted as NaN so they show up as gaps.
"""

import math

import matplotlib.pyplot as plt


def _nan(values):
    return [math.nan if v is None else v for v in values]


def plot_profile(track, profile, x_axis, *, show=True):
    """Route coloured by `profile` (top) and `profile` over `x_axis` (bottom)."""
    lats = [s.lat for s in track]
    lons = [s.lon for s in track]
    ys = _nan(profile.values)

    fig, (ax_route, ax_prof) = plt.subplots(2, 1, figsize=(8, 9))

    ax_route.plot(lons, lats, color="lightgray", linewidth=1)
    sc = ax_route.scatter(lons, lats, c=ys, s=5, cmap="viridis")
    fig.colorbar(sc, ax=ax_route, label=profile.title)
    ax_route.set_xlabel("Longitude")
    ax_route.set_ylabel("Latitude")
    ax_route.set_title(f"Track coloured by {profile.label.lower()}")

    ax_prof.plot(_nan(x_axis.values), ys, linewidth=1)
    ax_prof.set_xlabel(f"{x_axis.label} [{x_axis.unit}]")
    ax_prof.set_ylabel(profile.title)

    fig.tight_layout()
    if show:
        plt.show()
    return fig
