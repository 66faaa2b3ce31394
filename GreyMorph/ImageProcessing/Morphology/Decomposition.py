# -*- coding: utf-8 -*-
"""
Decomposition
=============

Decomposition of flat structure elements into 1d lines.

A decomposable structure element is the Minkowski sum of a sequence of line
segments, so eroding or dilating with it equals eroding or dilating along
each line in turn.
"""
__author__ = 'GreyMorph developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2026 by the GreyMorph developers'


import collections
import functools
import math

import numpy as np

from GreyMorph.Utils.exceptions import GeometryError


Line = collections.namedtuple('Line', ['direction', 'length'])
"""A line of the decomposition: reduced integer direction and odd pixel count."""


def line_pixels(vector):
    """Natural number of pixels covered by a line vector."""
    return int(np.max(np.abs(np.asarray(vector, dtype=int))))


def reduce_direction(vector):
    """Divide an integer vector by the gcd of its components."""
    vector = tuple(int(v) for v in vector)
    divisor = functools.reduce(math.gcd, (abs(v) for v in vector), 0)
    if divisor == 0:
        raise GeometryError('Line vector %r is zero!' % (vector,))
    return tuple(v // divisor for v in vector)


def decompose(selem):
    """Decompose a structure element into lines.

    Arguments
    ---------
    selem : FlatStructureElement
        The structure element.

    Returns
    -------
    decomposable : bool
        True if the structure element can be decomposed into lines.
    lines : list of Line
        The lines in order of application, empty if not decomposable.
        Line lengths are odd so each line has a center pixel.
    """
    if not selem.decomposable:
        return False, []

    lines = []
    for direction, length in selem.lines:
        length = int(length)
        if length <= 0:
            continue
        if length % 2 == 0:
            length += 1
        lines.append(Line(reduce_direction(direction), length))
    return True, lines
