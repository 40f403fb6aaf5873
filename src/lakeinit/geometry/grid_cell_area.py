"""
Grid cell area from latitude/longitude.

The area is found by splitting the cell into ten latitude strips, measuring the
east-west great-circle width of each strip, and multiplying by a fixed
north-south strip height. The strip height is taken once, at the cell centre,
and reused for every strip.

These functions only use scalar maths, so they can be compiled with Numba
(see lakeinit.core.configuration.jit_modules).
"""

import numpy as np

RADIUS = 6371.0072  # Radius of the Earth [km]
NUM_STRIPS = 10


def great_circle_distance(lat1, lon1, lat2, lon2):
    """
    Distance between two points on the surface of a sphere, using the
    spherical law of cosines.

    Parameters
    ----------
    lat1, lon1 : float
        Latitude and longitude of the first point. [degrees]
    lat2, lon2 : float
        Latitude and longitude of the second point. [degrees]

    Returns
    -------
    distance : float
        Great-circle distance between the two points. [km]
    """
    if lat1 == lat2 and lon1 == lon2:
        return 0.0
    dtor = 2.0 * np.pi / 360.0
    theta1 = dtor * lon1
    phi1 = dtor * lat1
    theta2 = dtor * lon2
    phi2 = dtor * lat2
    term1 = np.cos(phi1) * np.cos(theta1) * np.cos(phi2) * np.cos(theta2)
    term2 = np.cos(phi1) * np.sin(theta1) * np.cos(phi2) * np.sin(theta2)
    term3 = np.sin(phi1) * np.sin(phi2)
    # rounding can push the sum of a point with itself just above 1
    temp = min(term1 + term2 + term3, 1.0)
    return RADIUS * np.arccos(temp)


def estimate_cell_area(lat, lon, resolution):
    """
    Estimate the area of a grid cell that is `resolution` degrees on each
    side, centred on (lat, lon). The calculation works on the absolute value
    of lat/lon, so it is the same in every hemisphere.

    Parameters
    ----------
    lat : float
        Latitude of the grid cell centre. [degrees]
    lon : float
        Longitude of the grid cell centre. [degrees]
    resolution : float
        Size of the grid cell. [degrees]

    Returns
    -------
    cell_area : float
        Area of the grid cell. [m^2]
    """
    lat = abs(lat)
    lon = abs(lon)

    start_lat = lat - resolution / 2.0
    right_lon = lon + resolution / 2.0
    left_lon = lon - resolution / 2.0

    delta = great_circle_distance(lat, lon, lat + resolution / NUM_STRIPS, lon)

    dist = 0.0
    for _ in range(NUM_STRIPS):
        dist += great_circle_distance(start_lat, left_lon, start_lat, right_lon) * delta
        start_lat += resolution / NUM_STRIPS

    # distances are in km, so convert km^2 to m^2
    return dist * 1000.0 * 1000.0
