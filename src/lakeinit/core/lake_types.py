"""
Data types passed between the lake parameter reader, the profile builder and
the output routines.

LakeParameterRecord holds the values exactly as they are read from the lake
parameter file. LakeGeometry is built from it by
lakeinit.physics.lake_profile.build_lake_geometry, and holds no reference
back to the record.
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np


class LakeProfile(Enum):
    """
    How the area-depth profile of a lake is obtained.

    TABULATED - area fraction is read for every node.
    PARABOLIC - area is derived from a power law y = A x^b, using the lake
                footprint fraction and the exponent b. Experimental.
    """

    TABULATED = "tabulated"
    PARABOLIC = "parabolic"


@dataclass(frozen=True)
class GridCellLocation:
    """Centre and size of a model grid cell, all in degrees."""

    gridcel: int
    lat: float
    lon: float
    resolution: float


@dataclass
class LakeParameterRecord:
    """
    Raw lake parameters for one grid cell.

    Attributes
    ----------
    gridcel : int
        Grid cell identifier used to find the record.
    maxdepth : float
        Maximum lake depth. [m]
    numnod : int
        Number of lake solution nodes.
    mindepth : float
        Minimum lake depth. [m]
    maxrate : float
        Maximum drawdown rate of the lake. [m per timestep]
    depth_in : float
        Initial lake depth. [m]
    rpercent : float
        Fraction of the grid cell runoff routed through the lake.
    Cl : array_like, float, dimension(numnod)
        Fraction of the grid cell covered by the lake at each node. Cl[0] is
        the footprint of the lake at maximum depth. For PARABOLIC records
        only Cl[0] is read.
    b : float
        Exponent of the parabolic profile. NaN for TABULATED records.
    profile : LakeProfile
        Profile type the record was read as.
    """

    gridcel: int
    maxdepth: float
    numnod: int
    mindepth: float
    maxrate: float
    depth_in: float
    rpercent: float
    Cl: np.ndarray
    b: float = np.nan
    profile: LakeProfile = LakeProfile.TABULATED


@dataclass
class LakeGeometry:
    """
    Fully specified lake geometry for one grid cell.

    Node 0 is the bottom node of the lake (at maximum depth, with the full
    lake footprint); node depths decrease towards the surface as the index
    increases.

    Attributes
    ----------
    cell_area : float
        Area of the model grid cell. [m^2]
    dz : float
        Thickness of each solution layer below the surface layer. [m]
    z : array_like, float, dimension(numnod)
        Depth of each node, measured from the surface. [m]
    Cl : array_like, float, dimension(numnod)
        Area fraction at each node. Cl[0] may have been reduced so that the
        cover fractions of the grid cell sum to 1.
    basin : array_like, float, dimension(numnod)
        Lake surface area at each node. [m^2]
    maxvolume : float
        Storage capacity of the lake. [m^3]
    """

    gridcel: int
    cell_area: float
    numnod: int
    maxdepth: float
    mindepth: float
    maxrate: float
    depth_in: float
    rpercent: float
    dz: float
    z: np.ndarray
    Cl: np.ndarray
    basin: np.ndarray
    maxvolume: float
    bpercent: float = 0.0
    wetland_veg_class: int = 0
    b: float = np.nan
    profile: LakeProfile = LakeProfile.TABULATED
    lat: float = np.nan
    lon: float = np.nan
