"""
Build the area-depth profile of a lake from its parameter record.

The lake is split into `numnod` nodes. Node 0 sits at the bottom of the lake
and carries the full lake footprint; the surface layer has a fixed thickness
SURF and the remaining depth is split evenly between the other layers.

Two profiles are supported:
    - tabulated, where the area fraction at each node is read from file
    - parabolic, where the area follows y = A x^b, derived from the lake
      footprint and the exponent b. This has not been verified, and raises
      a warning whenever it is used.

build_lake_geometry runs the whole sequence (validation, layer thickness,
profile, volume, cover fraction) and is what the driver calls.
"""

import warnings

import numpy as np

from lakeinit.core.errors import (
    AreaFractionError,
    DepthInvariantError,
    NodeCountError,
    ProfileShapeError,
)
from lakeinit.core.lake_types import LakeGeometry, LakeProfile

SURF = 0.6  # Thickness of the surface layer of the lake [m]
MAX_LAKE_NODES = 20  # Default maximum number of lake nodes
COVER_FRACTION_THRESHOLD = 0.999
MODULE_NAME = "lakeinit.physics.lake_profile"


def validate_record(record, max_nodes=MAX_LAKE_NODES):
    """
    Check that a lake parameter record is consistent before any geometry is
    computed from it.

    Parameters
    ----------
    record : LakeParameterRecord
        Lake parameters as read from file.
    max_nodes : int, optional
        Largest number of lake nodes allowed. Default MAX_LAKE_NODES.

    Returns
    -------
    None

    Raises
    ------
    NodeCountError
        If `numnod` is larger than `max_nodes`, or smaller than 2 (the layer
        thickness is undefined for a single node), or if the number of area
        fractions does not match the profile (`numnod` for a tabulated
        profile, at least 1 for a parabolic one).
    DepthInvariantError
        If the maximum lake depth is not deeper than the surface layer SURF,
        or the initial lake depth exceeds the maximum lake depth.
    AreaFractionError
        If any of the area fractions is outside [0, 1] or NaN.
    ProfileShapeError
        If the exponent `b` of a parabolic profile is not positive.
    """
    func_name = f"{MODULE_NAME}.validate_record"
    if record.numnod > max_nodes:
        raise NodeCountError(
            f"{func_name}: Number of lake nodes ({record.numnod}) in cell"
            f" {record.gridcel} exceeds the maximum allowable ({max_nodes}).",
            gridcel=record.gridcel,
        )
    if record.numnod < 2:
        raise NodeCountError(
            f"{func_name}: Cell {record.gridcel} has {record.numnod} lake"
            " node(s). At least 2 are needed to define the lake layers.",
            gridcel=record.gridcel,
        )
    fractions = np.atleast_1d(np.asarray(record.Cl, dtype=np.float64))
    if record.profile == LakeProfile.PARABOLIC:
        # only the footprint is given, the other fractions are derived
        fractions = fractions[:1]
        expected = 1
    else:
        expected = record.numnod
    if len(fractions) != expected:
        raise NodeCountError(
            f"{func_name}: Cell {record.gridcel} has {len(fractions)} area"
            f" fraction(s), expected {expected} for a {record.profile.value}"
            f" lake profile with {record.numnod} nodes.",
            gridcel=record.gridcel,
        )
    if not record.maxdepth > SURF:
        raise DepthInvariantError(
            f"{func_name}: Maximum lake depth ({record.maxdepth} m) in cell"
            f" {record.gridcel} must be greater than the surface layer"
            f" thickness ({SURF} m).",
            gridcel=record.gridcel,
        )
    if record.depth_in > record.maxdepth:
        raise DepthInvariantError(
            f"{func_name}: Initial depth ({record.depth_in} m) exceeds the"
            f" specified maximum lake depth ({record.maxdepth} m) in cell"
            f" {record.gridcel}.",
            gridcel=record.gridcel,
        )
    # written so that NaN fails the check as well
    bad = np.where(~((fractions >= 0.0) & (fractions <= 1.0)))[0]
    if len(bad) > 0:
        raise AreaFractionError(
            f"{func_name}: Lake area must be a fraction between 0 and 1,"
            f" check the lake parameter file. Cell {record.gridcel} has"
            f" Cl = {fractions[bad]} at node(s) {bad}.",
            gridcel=record.gridcel,
        )
    if record.profile == LakeProfile.PARABOLIC and not record.b > 0:
        raise ProfileShapeError(
            f"{func_name}: Parabolic profile exponent b ({record.b}) in cell"
            f" {record.gridcel} must be a positive number.",
            gridcel=record.gridcel,
        )


def compute_layer_thickness(maxdepth, numnod):
    """Thickness of each lake layer below the surface layer. [m]"""
    return (maxdepth - SURF) / (numnod - 1.0)


def node_depths(numnod, dz):
    """
    Depth of each lake node, measured from the surface.
    Node 0 is the bottom of the lake, so its depth includes the surface
    layer; the other nodes are spaced `dz` apart above it.

    Parameters
    ----------
    numnod : int
        Number of lake nodes.
    dz : float
        Layer thickness. [m]

    Returns
    -------
    z : array_like, float, dimension(numnod)
        Node depths. [m]
    """
    z = (numnod - np.arange(numnod)) * dz
    z[0] = (numnod - 1.0) * dz + SURF
    return z


def tabulated_profile(Cl, cell_area):
    """
    Lake area at each node, from the area fractions read from file.

    Parameters
    ----------
    Cl : array_like, float, dimension(numnod)
        Fraction of the grid cell covered by the lake at each node.
    cell_area : float
        Area of the grid cell. [m^2]

    Returns
    -------
    basin : array_like, float, dimension(numnod)
        Lake area at each node. [m^2]
    """
    return np.asarray(Cl, dtype=np.float64) * cell_area


def parabolic_profile(footprint, b, maxdepth, numnod, dz, cell_area):
    """
    Lake area at each node, assuming the lake bed follows y = A x^b.
    The footprint of the lake gives its radius, and hence A for a lake of
    depth `maxdepth`.

    Parameters
    ----------
    footprint : float
        Fraction of the grid cell covered by the lake at maximum depth.
    b : float
        Exponent of the depth profile.
    maxdepth : float
        Maximum lake depth. [m]
    numnod : int
        Number of lake nodes.
    dz : float
        Layer thickness. [m]
    cell_area : float
        Area of the grid cell. [m^2]

    Returns
    -------
    basin : array_like, float, dimension(numnod)
        Lake area at each node. [m^2]
    """
    warnings.warn(
        f"{MODULE_NAME}.parabolic_profile: Lake profile being computed from"
        " a parabolic curve - this has not been verified."
    )
    basin = np.zeros(numnod)
    basin[0] = footprint * cell_area
    if basin[0] <= 0:
        return basin

    radius = np.sqrt(basin[0] / np.pi)
    A = maxdepth / radius**b
    for i in range(1, numnod):
        y = maxdepth - SURF - dz * i / 2.0
        # nodes that fall below the bed of the curve have no area
        if y <= 0:
            continue
        x = (y / A) ** (1.0 / b)
        basin[i] = np.pi * x * x
    return basin


def integrate_volume(basin, dz, surf=SURF):
    """
    Maximum volume of the lake, using the trapezium rule over the nodes.
    The first layer has the surface layer thickness `surf`; the last layer is
    treated as a flat cap with the area of its top.

    Parameters
    ----------
    basin : array_like, float, dimension(numnod)
        Lake area at each node. [m^2]
    dz : float
        Layer thickness. [m]
    surf : float, optional
        Thickness of the surface layer. Default SURF. [m]

    Returns
    -------
    maxvolume : float
        Volume of the lake when full. [m^3]
    """
    numnod = len(basin)
    maxvolume = 0.0
    for i in range(numnod):
        if i == 0:
            maxvolume += (basin[0] + basin[1]) * surf / 2.0
        elif i < numnod - 1:
            maxvolume += (basin[i] + basin[i + 1]) * dz / 2.0
        else:
            maxvolume += basin[i] * dz
    return maxvolume


def add_lake_cover_fraction(footprint, cv_sum):
    """
    Add the lake footprint to the running total of cover fractions in the
    grid cell. If the total ends up above COVER_FRACTION_THRESHOLD, the lake
    footprint is reduced by the overshoot and the total set to exactly 1, so
    that 1 - cv_sum is once again the bare soil fraction.

    Parameters
    ----------
    footprint : float
        Fraction of the grid cell covered by the lake at maximum depth.
    cv_sum : float
        Sum of the cover fractions already assigned in this grid cell.

    Returns
    -------
    footprint : float
        Lake footprint, reduced if needed.
    cv_sum : float
        Updated cover fraction total.
    """
    cv_sum += footprint
    if cv_sum > COVER_FRACTION_THRESHOLD:
        footprint += 1.0 - cv_sum
        cv_sum = 1.0
    return footprint, cv_sum


def build_lake_geometry(record, cell_area, cv_sum=0.0, max_nodes=MAX_LAKE_NODES):
    """
    Convert a lake parameter record into a full lake geometry.

    Parameters
    ----------
    record : LakeParameterRecord
        Lake parameters for the grid cell.
    cell_area : float
        Area of the grid cell, e.g. from
        lakeinit.geometry.grid_cell_area.estimate_cell_area. [m^2]
    cv_sum : float, optional
        Sum of the cover fractions already assigned in this grid cell.
        Default 0.
    max_nodes : int, optional
        Largest number of lake nodes allowed. Default MAX_LAKE_NODES.

    Returns
    -------
    geometry : LakeGeometry
        Lake geometry for the grid cell.
    cv_sum : float
        Cover fraction total including the lake.

    Raises
    ------
    LakeParameterError
        One of its subclasses, if the record fails validation. See
        validate_record.
    """
    validate_record(record, max_nodes=max_nodes)

    numnod = int(record.numnod)
    dz = compute_layer_thickness(record.maxdepth, numnod)
    z = node_depths(numnod, dz)

    if record.profile == LakeProfile.PARABOLIC:
        basin = parabolic_profile(
            record.Cl[0], record.b, record.maxdepth, numnod, dz, cell_area
        )
        Cl = basin / cell_area
        Cl[0] = record.Cl[0]
    else:
        Cl = np.array(record.Cl, dtype=np.float64)
        basin = tabulated_profile(Cl, cell_area)

    maxvolume = integrate_volume(basin, dz)

    # basin[0] keeps the unadjusted footprint; only the fraction is reduced
    Cl[0], cv_sum = add_lake_cover_fraction(Cl[0], cv_sum)

    geometry = LakeGeometry(
        gridcel=record.gridcel,
        cell_area=cell_area,
        numnod=numnod,
        maxdepth=record.maxdepth,
        mindepth=record.mindepth,
        maxrate=record.maxrate,
        depth_in=record.depth_in,
        rpercent=record.rpercent,
        dz=dz,
        z=z,
        Cl=Cl,
        basin=basin,
        maxvolume=maxvolume,
        b=record.b,
        profile=record.profile,
    )
    return geometry, cv_sum
