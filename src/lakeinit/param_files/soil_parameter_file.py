"""
Read grid cell locations from a VIC-style soil parameter file.

Only the first four columns are used:

    run_cell gridcel lat lng ...

Cells with run_cell <= 0 are not being simulated, and are skipped.
"""

from lakeinit.core.lake_types import GridCellLocation

MODULE_NAME = "lakeinit.param_files.soil_parameter_file"


def read_soil_cells(path, resolution):
    """
    Get the location of every active grid cell in a soil parameter file.

    Parameters
    ----------
    path : str
        Path to the soil parameter file.
    resolution : float
        Size of each grid cell. [degrees]

    Returns
    -------
    cells : list of GridCellLocation
        Active grid cells, in the order they appear in the file.

    Raises
    ------
    ValueError
        If a line has fewer than four columns, or they cannot be read as
        numbers.
    """
    func_name = f"{MODULE_NAME}.read_soil_cells"
    cells = []
    with open(path, "r", encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            tokens = line.split()
            if not tokens or tokens[0].startswith("#"):
                continue
            if len(tokens) < 4:
                raise ValueError(
                    f"{func_name}: Line {line_number} of {path} has"
                    f" {len(tokens)} columns, expected at least 4"
                    " (run_cell gridcel lat lng)."
                )
            try:
                run_cell = int(tokens[0])
                gridcel = int(tokens[1])
                lat = float(tokens[2])
                lon = float(tokens[3])
            except ValueError as exc:
                raise ValueError(
                    f"{func_name}: Could not read line {line_number} of {path}:"
                    f" {line.strip()}"
                ) from exc
            if run_cell <= 0:
                continue
            cells.append(GridCellLocation(gridcel, lat, lon, resolution))
    print(f"{func_name}: Read {len(cells)} active cells from {path}")
    return cells
