# -*- coding: utf-8 -*-
"""
AnchorLine
==========

Sliding window minimum and maximum along a single line of pixels.

The line is held in a buffer with one extra slot at each end that carries
the boundary value, so windows reaching past the ends of the line see the
boundary instead of reading outside of the data. The extremum of each
centered window is tracked with a monotonic queue of candidate positions,
which costs amortized O(1) per pixel independent of the window size.

Example
-------

>>> import GreyMorph.ImageProcessing.Morphology.AnchorLine as al
>>> al.sliding_extremum([5, 1, 4, 2, 3], 3, function='min')
array([1, 1, 1, 2, 2])
>>> al.sliding_extremum([5, 1, 4, 2, 3], 3, function='max')
array([5, 5, 4, 4, 3])
"""
__author__ = 'GreyMorph developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2026 by the GreyMorph developers'


import collections
import operator

import numpy as np

from GreyMorph.Utils.exceptions import GeometryError


MIN = 'min'
"""Erosion, the window prefers the minimum."""

MAX = 'max'
"""Dilation, the window prefers the maximum."""

_better = {MIN: operator.lt, MAX: operator.gt}


def check_function(function):
    if function not in _better:
        raise ValueError('Function %r not in %r!' % (function, tuple(_better.keys())))
    return function


def extremum_identity(dtype, function):
    """Boundary value that never wins the comparison.

    Arguments
    ---------
    dtype : dtype
        The pixel type.
    function : 'min' or 'max'
        The extremum.

    Returns
    -------
    value : scalar
        The maximum of the type for 'min', the minimum for 'max'.
    """
    function = check_function(function)
    dtype = np.dtype(dtype)
    if dtype == bool:
        return np.True_ if function == MIN else np.False_
    if np.issubdtype(dtype, np.floating):
        return dtype.type(np.inf if function == MIN else -np.inf)
    info = np.iinfo(dtype)
    return dtype.type(info.max if function == MIN else info.min)


def anchor_line(in_buffer, out_buffer, length, size, function, boundary):
    """Sliding window extremum of a line in a buffer.

    Arguments
    ---------
    in_buffer : array
        Buffer holding the line in ``in_buffer[1:length+1]``. The slots
        ``in_buffer[0]`` and ``in_buffer[length+1]`` are set to boundary.
    out_buffer : array
        Buffer receiving the result in ``out_buffer[1:length+1]``.
    length : int
        Number of pixels of the line.
    size : int
        Odd size of the centered window.
    function : 'min' or 'max'
        The extremum to compute.
    boundary : scalar
        The value of the pixels outside the line.
    """
    better = _better[check_function(function)]
    if size % 2 == 0 or size < 1:
        raise ValueError('Window size %d is not odd and positive!' % size)
    if length + 2 > min(len(in_buffer), len(out_buffer)):
        raise GeometryError('Line of length %d does not fit into buffers of size %d!'
                            % (length, min(len(in_buffer), len(out_buffer))))
    if length == 0:
        return

    in_buffer[0] = boundary
    in_buffer[length + 1] = boundary

    if size == 1:
        out_buffer[1:length + 1] = in_buffer[1:length + 1]
        return

    half = size // 2
    values = in_buffer[:length + 2].tolist()
    last = length + 1
    result = [None] * length

    queue = collections.deque()
    next_position = max(1 - half, 0)
    for j in range(1, last):
        hi = min(j + half, last)
        while next_position <= hi:
            value = values[next_position]
            while queue and not better(values[queue[-1]], value):
                queue.pop()
            queue.append(next_position)
            next_position += 1
        lo = j - half
        while queue[0] < lo:
            queue.popleft()
        result[j - 1] = values[queue[0]]

    out_buffer[1:last] = result


def sliding_extremum(values, size, function=MIN, boundary=None):
    """Sliding window extremum of a sequence.

    Arguments
    ---------
    values : array
        The 1d sequence.
    size : int
        Odd size of the centered window.
    function : 'min' or 'max'
        The extremum to compute.
    boundary : scalar or None
        Value of the positions outside the sequence. If None, the identity
        of the extremum for the type of values is used so edge windows only
        see the sequence.

    Returns
    -------
    result : array
        The extremum of each window.
    """
    values = np.asarray(values)
    if values.ndim != 1:
        raise GeometryError('Sequence of dimension %d is not 1d!' % values.ndim)
    if boundary is None:
        boundary = extremum_identity(values.dtype, function)
    length = len(values)
    in_buffer = np.empty(length + 2, dtype=values.dtype)
    out_buffer = np.empty(length + 2, dtype=values.dtype)
    in_buffer[1:length + 1] = values
    anchor_line(in_buffer, out_buffer, length, size, function, boundary)
    return out_buffer[1:length + 1].copy()
