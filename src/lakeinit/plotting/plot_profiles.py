"""
Diagnostic plots of the lake area-depth profiles, made when
`diagnostic_plots` is set in the model setup.
"""

import os


def plot_lake_profile(geometry, ax=None):
    """
    Plot the area of the lake at each node against node depth.

    Parameters
    ----------
    geometry : LakeGeometry
        Lake geometry to plot.
    ax : matplotlib.axes.Axes, optional
        Axes to plot onto. If not given, a new figure is created.

    Returns
    -------
    ax : matplotlib.axes.Axes
    """
    # pylint: disable=import-outside-toplevel
    from matplotlib import pyplot as plt

    # pylint: enable=import-outside-toplevel
    if ax is None:
        _, ax = plt.subplots()
    ax.plot(geometry.basin / 1e6, geometry.z, marker="o")
    ax.set_xlabel("Lake area (km$^2$)")
    ax.set_ylabel("Node depth (m)")
    ax.invert_yaxis()
    ax.set_title(
        f"Cell {geometry.gridcel} ({geometry.profile.value}),"
        f" max volume {geometry.maxvolume / 1e6:.3g} Mm$^3$"
    )
    return ax


def save_profile_plots(geometries, plot_filepath):
    """
    Save one area-depth plot per lake into `plot_filepath`.

    Parameters
    ----------
    geometries : list of LakeGeometry
        Lake geometries to plot.
    plot_filepath : str
        Folder to save the plots into. Created if it does not exist.

    Returns
    -------
    fnames : list of str
        Paths of the saved figures.
    """
    # pylint: disable=import-outside-toplevel
    import matplotlib

    matplotlib.use("Agg")
    from matplotlib import pyplot as plt

    # pylint: enable=import-outside-toplevel
    if not os.path.exists(plot_filepath):
        os.makedirs(plot_filepath)
    fnames = []
    for geometry in geometries:
        fig, ax = plt.subplots()
        plot_lake_profile(geometry, ax=ax)
        fname = os.path.join(plot_filepath, f"lake_profile_{geometry.gridcel}.png")
        fig.savefig(fname)
        plt.close(fig)
        fnames.append(fname)
    print(
        f"lakeinit.plotting.plot_profiles.save_profile_plots: Saved"
        f" {len(fnames)} plots to {plot_filepath}"
    )
    return fnames
