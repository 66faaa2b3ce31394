# -*- coding: utf-8 -*-
"""
BresenhamLine
=============

Digital lines through the origin of an N-dimensional grid.

A line along an integer direction advances one pixel along the dominant
axis of the direction per step, the other axes follow using integer error
accumulation as in Bresenham's algorithm.

Example
-------

>>> import GreyMorph.ImageProcessing.Morphology.BresenhamLine as bl
>>> bl.rasterize((2, 1), 5).tolist()
[[0, 0], [1, 1], [2, 1], [3, 2], [4, 2]]
"""
__author__ = 'GreyMorph developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2026 by the GreyMorph developers'


import numpy as np

from GreyMorph.Utils.exceptions import GeometryError


def dominant_axis(direction):
    """Axis with the largest absolute component of direction."""
    return int(np.argmax(np.abs(np.asarray(direction, dtype=int))))


def rasterize(direction, length):
    """Offsets of a digital line through the origin.

    Arguments
    ---------
    direction : tuple of ints
        The direction of the line, not all zero.
    length : int
        The number of offsets to generate.

    Returns
    -------
    offsets : array
        Array of shape (length, ndim), the first offset is the origin.
        Reversing the direction negates the offsets.
    """
    direction = np.asarray(direction, dtype=int).flatten()
    if not np.any(direction):
        raise GeometryError('Cannot rasterize a line along the zero direction %r!' % (tuple(direction),))
    length = int(length)
    if length < 0:
        raise GeometryError('Line length %d is negative!' % length)

    ndim = len(direction)
    main = dominant_axis(direction)
    distance = np.abs(direction)
    maximal_error = distance[main]
    increment_error = 2 * distance
    reduce_error = 2 * maximal_error
    step = np.where(direction < 0, -1, 1)

    offsets = np.zeros((length, ndim), dtype=int)
    current = np.zeros(ndim, dtype=int)
    error = np.zeros(ndim, dtype=int)
    for k in range(1, length):
        for d in range(ndim):
            if d == main:
                continue
            error[d] += increment_error[d]
            if error[d] >= maximal_error:
                current[d] += step[d]
                error[d] -= reduce_error
        current[main] += step[main]
        offsets[k] = current
    return offsets


def line_period(direction):
    """Number of steps after which the offsets of a digital line repeat.

    After ``period`` steps a line along the reduced direction ``d`` has moved
    by exactly ``d``, so ``rasterize(d, n)[k + period] == rasterize(d, n)[k] + d``.
    """
    direction = np.asarray(direction, dtype=int).flatten()
    divisor = np.gcd.reduce(np.abs(direction))
    if divisor == 0:
        raise GeometryError('Zero direction %r has no period!' % (tuple(direction),))
    return int(np.max(np.abs(direction)) // divisor)


def line_footprint(direction, length):
    """Offsets seen by a centered window sliding along a digital line.

    The window of an oblique line sees different offsets at different
    positions along the line. The footprint is their union over one period.

    Arguments
    ---------
    direction : tuple of ints
        The direction of the line, not all zero.
    length : int
        The odd number of pixels of the window.

    Returns
    -------
    offsets : array
        Array of shape (n, ndim) of the distinct offsets, symmetric about the origin.
    """
    length = int(length)
    if length % 2 == 0:
        raise GeometryError('Line window length %d is not odd!' % length)
    period = line_period(direction)
    half = length // 2
    offsets = rasterize(direction, length + period - 1)
    windows = [offsets[k - half:k + half + 1] - offsets[k] for k in range(half, half + period)]
    return np.unique(np.concatenate(windows), axis=0)
