"""
Run script for lakeinit.
All parameters that have default values will use these defaults if they are not specified in the runscript.
The template includes all lakeinit parameters explicitly.
Since this is a Python script, you can specify parameters e.g. as numpy arrays.
"""

import os

print(f"Loading runscript from {os.getcwd()}/model_setup.py")
"""
Input files

    lake_param_path : str
        Path to the lake parameter file. Each line holds the record for one grid cell:
            gridcel maxdepth numnod mindepth maxrate depth_in rpercent Cl[0] ... Cl[numnod - 1]
        or, if <lake_profile> = 'parabolic',
            gridcel maxdepth numnod mindepth maxrate depth_in rpercent Cl[0] b
        Cl[0] is the fraction of the grid cell covered by the lake when it is at its maximum depth.
        If using a relative path, it is relative to the folder you are running lakeinit from.

    soil_param_path : str
        Path to a soil parameter file. Only the first four columns (run_cell gridcel lat lng) are read,
        and cells with run_cell = 0 are skipped.

    cells : list of tuples
        Alternative to <soil_param_path>. List of (gridcel, lat, lon) for each cell you want to initialise.
        Ignored if <soil_param_path> is set.

    rewind : bool
        Default False.
        If False, the lake parameter file is read forward only, so the cells must be in the same order
        as in the soil parameter file. Set True to search the whole file for every cell.
"""
lake_param_path = "lake_param.txt"
soil_param_path = "soil_param.txt"
# cells = [(1, 45.25, -120.25), (2, 45.25, -119.75)]
rewind = False

"""
Grid cell parameters

    resolution : float
        Size of each grid cell, in degrees. Used to calculate the area of the grid cell.

    cv_sum : float, or dict
        Default 0.
        Sum of the fractions of each grid cell already covered by vegetation (or other cover types).
        The lake footprint is added to this, and if the total is above 0.999 the lake footprint is
        reduced so that the total is exactly 1. Specify either a single number for every cell,
        or a dict of {gridcel: cv_sum}.
"""
resolution = 0.5
cv_sum = 0.0

"""
Lake profile

    lake_profile : str
        Default 'tabulated'.
        'tabulated' - read the lake area fraction at every node.
        'parabolic' - compute the lake area from the lake footprint and a power law exponent <b>.
            This has not been verified, and will raise a warning.

    max_lake_nodes : int
        Default 20.
        Maximum number of lake nodes allowed in the lake parameter file.

    check_profiles : bool
        Default True.
        Warn if the lake area increases towards the bottom of any lake.
"""
lake_profile = "tabulated"
max_lake_nodes = 20
check_profiles = True

"""
Model output

    save_output : bool
        Default True.
        Write the lake geometry of every cell to a netCDF file.

    output_filepath : str
        Default 'output/lake_geometry.nc'.

    diagnostic_plots : bool
        Default False.
        Plot the area-depth profile of each lake. Requires matplotlib.

    plot_filepath : str
        Folder to save the plots into. Required if <diagnostic_plots> is True.
"""
save_output = True
output_filepath = "output/lake_geometry.nc"
diagnostic_plots = False
plot_filepath = "output/plots"

"""
Computing and error handling

    use_numba : bool
        Default False.
        Compile the grid cell area calculation with Numba. Requires numba.

    ignore_errors : bool
        Default False.
        If True, cells with bad lake parameters are skipped rather than stopping the run.
"""
use_numba = False
ignore_errors = False
