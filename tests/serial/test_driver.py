"""
End-to-end runs of lakeinit, from a model setup script through to the netCDF
output.
"""

import numpy as np
import pytest
from numpy import testing as npt

from lakeinit.core import driver
from lakeinit.core.errors import (
    AreaFractionError,
    CellNotFoundError,
    ProfileShapeError,
)
from lakeinit.core.model_output import load_output
from lakeinit.geometry import grid_cell_area

LAKE_PARAMS = """101 4.6 3 0.5 0.01 2.0 0.3 0.1 0.06 0.02
102 10.6 5 1.0 0.02 5.0 0.5 0.3 0.2 0.15 0.1 0.02
103 2.6 2 0.2 0.005 1.0 0.1 1.5 0.01
104 6.6 3 0.2 0.005 1.0 0.1 0.4 0.2 0.1
"""

SOIL_PARAMS = """1 101 45.25 -120.25 0.2 2.0
1 102 45.25 -119.75 0.2 2.0
0 103 45.75 -120.25 0.2 2.0
1 104 45.75 -119.75 0.2 2.0
"""


def write_setup(tmp_path, extra="", use_soil_file=True):
    (tmp_path / "lake_param.txt").write_text(LAKE_PARAMS)
    (tmp_path / "soil_param.txt").write_text(SOIL_PARAMS)
    setup = f'lake_param_path = "{(tmp_path / "lake_param.txt").as_posix()}"\n'
    if use_soil_file:
        setup += f'soil_param_path = "{(tmp_path / "soil_param.txt").as_posix()}"\n'
    setup_path = tmp_path / "model_setup.py"
    setup_path.write_text(
        setup
        + "resolution = 0.5\n"
        f'output_filepath = "{(tmp_path / "output" / "lakes.nc").as_posix()}"\n'
        + extra
    )
    return str(setup_path)


def test_run_from_soil_file(tmp_path):
    setup_path = write_setup(tmp_path, extra="cv_sum = {101: 0.5, 104: 0.7}\n")
    geometries, cv_sums = driver.lakeinit(setup_path)

    # 103 is switched off in the soil file, so its bad record is never read
    assert [g.gridcel for g in geometries] == [101, 102, 104]
    npt.assert_almost_equal(cv_sums[101], 0.6)
    npt.assert_almost_equal(cv_sums[102], 0.3)
    assert cv_sums[104] == 1.0
    npt.assert_almost_equal(geometries[2].Cl[0], 0.3)

    cell_area = grid_cell_area.estimate_cell_area(45.25, -120.25, 0.5)
    npt.assert_allclose(geometries[0].cell_area, cell_area)
    npt.assert_allclose(geometries[0].basin, np.array([0.1, 0.06, 0.02]) * cell_area)
    assert geometries[0].lat == 45.25
    assert geometries[0].lon == -120.25

    lake_grid = load_output(str(tmp_path / "output" / "lakes.nc"))
    npt.assert_array_equal(lake_grid["gridcel"], [101, 102, 104])
    npt.assert_allclose(lake_grid["maxvolume"], [g.maxvolume for g in geometries])
    npt.assert_allclose(lake_grid["Cl"][2][:3], geometries[2].Cl)


def test_run_from_cell_list(tmp_path):
    setup_path = write_setup(
        tmp_path,
        extra="cells = [(102, -45.25, 119.75)]\n"
        "save_output = False\n",
        use_soil_file=False,
    )
    geometries, _ = driver.lakeinit(setup_path)
    assert len(geometries) == 1
    npt.assert_allclose(
        geometries[0].cell_area,
        grid_cell_area.estimate_cell_area(45.25, -119.75, 0.5),
    )
    assert not (tmp_path / "output").exists()


def test_bad_record_stops_run(tmp_path):
    setup_path = write_setup(
        tmp_path,
        extra="cells = [(101, 45.25, -120.25), (103, 45.75, -120.25)]\n",
        use_soil_file=False,
    )
    with pytest.raises(AreaFractionError):
        driver.lakeinit(setup_path)


def test_ignore_errors_skips_cell(tmp_path):
    setup_path = write_setup(
        tmp_path,
        extra="cells = [(101, 45.25, -120.25), (103, 45.75, -120.25),"
        " (104, 45.75, -119.75)]\n"
        "ignore_errors = True\n",
        use_soil_file=False,
    )
    geometries, cv_sums = driver.lakeinit(setup_path)
    assert [g.gridcel for g in geometries] == [101, 104]
    assert 103 not in cv_sums


def test_out_of_order_cells_need_rewind(tmp_path):
    extra = "cells = [(104, 45.75, -119.75), (101, 45.25, -120.25)]\n"
    setup_path = write_setup(tmp_path, extra=extra, use_soil_file=False)
    with pytest.raises(CellNotFoundError):
        driver.lakeinit(setup_path)

    setup_path = write_setup(
        tmp_path, extra=extra + "rewind = True\n", use_soil_file=False
    )
    geometries, _ = driver.lakeinit(setup_path)
    assert [g.gridcel for g in geometries] == [104, 101]


def test_parabolic_run(tmp_path):
    (tmp_path / "lake_param.txt").write_text("201 8.6 5 0.5 0.01 3.0 0.2 0.25 2.0\n")
    setup_path = tmp_path / "model_setup.py"
    setup_path.write_text(
        f'lake_param_path = "{(tmp_path / "lake_param.txt").as_posix()}"\n'
        "cells = [(201, 10.25, 30.25)]\n"
        "resolution = 0.5\n"
        'lake_profile = "parabolic"\n'
        "save_output = False\n"
    )
    with pytest.warns(UserWarning, match="parabolic"):
        geometries, _ = driver.lakeinit(str(setup_path))
    assert geometries[0].maxvolume > 0


@pytest.mark.parametrize("ignore_errors", [False, True])
def test_bad_parabolic_exponent(tmp_path, ignore_errors):
    (tmp_path / "lake_param.txt").write_text(
        "201 8.6 5 0.5 0.01 3.0 0.2 0.25 0.0\n"
        "202 8.6 5 0.5 0.01 3.0 0.2 0.25 2.0\n"
    )
    setup_path = tmp_path / "model_setup.py"
    setup_path.write_text(
        f'lake_param_path = "{(tmp_path / "lake_param.txt").as_posix()}"\n'
        "cells = [(201, 10.25, 30.25), (202, 10.25, 30.75)]\n"
        "resolution = 0.5\n"
        'lake_profile = "parabolic"\n'
        "save_output = False\n"
        f"ignore_errors = {ignore_errors}\n"
    )
    if not ignore_errors:
        with pytest.raises(ProfileShapeError) as excinfo:
            driver.lakeinit(str(setup_path))
        assert excinfo.value.gridcel == 201
        return
    with pytest.warns(UserWarning, match="parabolic"):
        geometries, cv_sums = driver.lakeinit(str(setup_path))
    assert [g.gridcel for g in geometries] == [202]
    assert 201 not in cv_sums


def test_diagnostic_plots(tmp_path):
    pytest.importorskip("matplotlib")
    setup_path = write_setup(
        tmp_path,
        extra="diagnostic_plots = True\n"
        f'plot_filepath = "{(tmp_path / "plots").as_posix()}"\n',
    )
    driver.lakeinit(setup_path)
    assert sorted(p.name for p in (tmp_path / "plots").iterdir()) == [
        "lake_profile_101.png",
        "lake_profile_102.png",
        "lake_profile_104.png",
    ]


def test_numba_matches_python(tmp_path):
    pytest.importorskip("numba")
    setup_path = write_setup(tmp_path, extra="save_output = False\n")
    python_geometries, _ = driver.lakeinit(setup_path)

    originals = {
        name: getattr(grid_cell_area, name)
        for name in ("great_circle_distance", "estimate_cell_area")
    }
    try:
        setup_path = write_setup(
            tmp_path, extra="save_output = False\nuse_numba = True\n"
        )
        numba_geometries, _ = driver.lakeinit(setup_path)
        assert grid_cell_area.estimate_cell_area is not originals["estimate_cell_area"]
    finally:
        for name, function in originals.items():
            setattr(grid_cell_area, name, function)

    for python_geometry, numba_geometry in zip(python_geometries, numba_geometries):
        npt.assert_allclose(numba_geometry.cell_area, python_geometry.cell_area)
        npt.assert_allclose(numba_geometry.maxvolume, python_geometry.maxvolume)
