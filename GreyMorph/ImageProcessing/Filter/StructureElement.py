# -*- coding: utf-8 -*-
"""
StructureElement
================

Routines to generate flat structure elements for morphological filters.

A :class:`FlatStructureElement` holds the boolean mask of the neighbourhood
and, for shapes that are Minkowski sums of line segments (boxes, polygons),
the lines it decomposes into. Decomposable elements can be used with the
anchor algorithm in
:mod:`~GreyMorph.ImageProcessing.Morphology.AnchorErodeDilate`.

Example
-------

>>> import GreyMorph.ImageProcessing.Filter.StructureElement as se
>>> selem = se.box((1, 2))
>>> selem.shape, selem.decomposable
((3, 5), True)
>>> se.ball(2, ndim=2).decomposable
False
"""
__author__ = 'GreyMorph developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2026 by the GreyMorph developers'


import numpy as np

import GreyMorph.ImageProcessing.Morphology.BresenhamLine as bl
from GreyMorph.ImageProcessing.Morphology.Decomposition import Line, line_pixels, reduce_direction
from GreyMorph.Utils.exceptions import GeometryError


polygon_directions = {
    2: [(1, 0), (0, 1)],
    4: [(1, 0), (0, 1), (1, 1), (1, -1)],
    8: [(1, 0), (0, 1), (1, 1), (1, -1), (2, 1), (1, 2), (2, -1), (1, -2)]
}
"""Line directions of the 2d polygon structure elements by number of lines."""


class FlatStructureElement(object):
    """Flat structure element.

    Arguments
    ---------
    array : array
        Boolean mask of the neighbourhood, odd size along all axes, centered.
    lines : list of Line or None
        The lines the element decomposes into, None if not decomposable.
    """

    def __init__(self, array, lines=None):
        array = np.asarray(array, dtype=bool)
        if any(s % 2 == 0 for s in array.shape):
            raise GeometryError('Structure element shape %r is not odd!' % (array.shape,))
        self._array = array
        self._lines = None if lines is None else list(lines)

    @property
    def array(self):
        return self._array

    @property
    def shape(self):
        return self._array.shape

    @property
    def ndim(self):
        return self._array.ndim

    @property
    def radius(self):
        """Radius of the element along each axis."""
        return tuple(s // 2 for s in self._array.shape)

    @property
    def decomposable(self):
        return self._lines is not None

    @property
    def lines(self):
        """Lines with natural pixel counts, empty if not decomposable."""
        return [] if self._lines is None else list(self._lines)

    def __repr__(self):
        return 'FlatStructureElement%r<%s>' % (self.shape, 'decomposable' if self.decomposable else 'mask')


###############################################################################
### Constructors
###############################################################################

def box(radius, ndim=None):
    """Box structure element.

    Arguments
    ---------
    radius : int or tuple of ints
        Radius along each axis.
    ndim : int or None
        Dimension if radius is a single int.

    Returns
    -------
    selem : FlatStructureElement
        Decomposable into one axis line per non zero radius.
    """
    radius = _radius(radius, ndim)
    lines = []
    for d, r in enumerate(radius):
        if r > 0:
            direction = tuple(1 if e == d else 0 for e in range(len(radius)))
            lines.append(Line(direction, 2 * r + 1))
    return FlatStructureElement(np.ones(tuple(2 * r + 1 for r in radius), dtype=bool), lines=lines)


def from_lines(lines, ndim=None):
    """Structure element from a sequence of lines.

    Arguments
    ---------
    lines : list
        Either integer line vectors whose largest component gives the number
        of pixels, or (direction, length) pairs.
    ndim : int or None
        Dimension of an element without lines.

    Returns
    -------
    selem : FlatStructureElement
        The Minkowski sum of the footprints of the lines, see
        :func:`~GreyMorph.ImageProcessing.Morphology.BresenhamLine.line_footprint`.
    """
    parsed = []
    for line in lines:
        if isinstance(line, Line) or (len(line) == 2 and not np.isscalar(line[0])):
            direction, length = line
            parsed.append(Line(tuple(int(d) for d in direction), int(length)))
        else:
            parsed.append(Line(reduce_direction(line), line_pixels(line)))

    if ndim is None:
        if not parsed:
            raise GeometryError('Dimension of a structure element without lines not defined!')
        ndim = len(parsed[0].direction)

    points = np.zeros((1, ndim), dtype=int)
    for direction, length in parsed:
        if len(direction) != ndim:
            raise GeometryError('Line direction %r does not match dimension %d!' % (direction, ndim))
        if length % 2 == 0:
            length += 1
        footprint = bl.line_footprint(direction, length)
        points = (points[:, np.newaxis, :] + footprint[np.newaxis, :, :]).reshape(-1, ndim)
        points = np.unique(points, axis=0)

    radius = np.max(np.abs(points), axis=0)
    array = np.zeros(tuple(2 * radius + 1), dtype=bool)
    array[tuple((points + radius).T)] = True
    return FlatStructureElement(array, lines=parsed)


def polygon(radius, n_lines=4):
    """2d polygon structure element approximating a disk.

    Arguments
    ---------
    radius : int
        Radius of the polygon along the axes.
    n_lines : 2, 4 or 8
        Number of line directions.

    Returns
    -------
    selem : FlatStructureElement
        Decomposable polygon with equal Euclidean side lengths up to rounding.
    """
    if n_lines not in polygon_directions:
        raise ValueError('Number of polygon lines %r not in %r!' % (n_lines, tuple(polygon_directions.keys())))
    radius = int(radius)
    directions = [np.array(d) for d in polygon_directions[n_lines]]
    norms = [np.linalg.norm(d) for d in directions]

    scale = radius / sum(abs(d[0]) / n for d, n in zip(directions, norms))
    oblique = [(d, int(round(scale * np.max(np.abs(d)) / n)))
               for d, n in zip(directions, norms) if np.count_nonzero(d) > 1]

    def reach():
        r = np.zeros(2, dtype=int)
        for d, half in oblique:
            r += np.max(np.abs(bl.line_footprint(d, 2 * half + 1)), axis=0)
        return r

    # the axis lines keep at least one pixel on each side,
    # directions equal up to mirroring shrink together, steepest first
    def group(d):
        return tuple(sorted(np.abs(d)))

    while radius > 0 and np.any(reach() >= radius):
        shrink = max((half, group(d)) for d, half in oblique)
        if shrink[0] == 0:
            break
        oblique = [(d, half - 1 if (half, group(d)) == shrink else half) for d, half in oblique]

    lines = [Line(tuple(int(c) for c in d), 2 * half + 1) for d, half in oblique if half > 0]
    r = reach()
    for axis in range(2):
        half = max(0, radius - r[axis])
        if half > 0:
            direction = tuple(1 if e == axis else 0 for e in range(2))
            lines.insert(axis, Line(direction, 2 * half + 1))

    return from_lines(lines, ndim=2)


def ball(radius, ndim=None):
    """Ball (ellipsoid) structure element, not decomposable."""
    radius = _radius(radius, ndim)
    grid = np.meshgrid(*[np.arange(-r, r + 1) for r in radius], indexing='ij')
    distance = np.zeros(grid[0].shape) if grid else np.zeros(())
    for g, r in zip(grid, radius):
        if r > 0:
            distance = distance + (g / r) ** 2
    return FlatStructureElement(distance <= 1)


def cross(radius, ndim=None):
    """Cross structure element along the axes, not decomposable."""
    radius = _radius(radius, ndim)
    grid = np.meshgrid(*[np.arange(-r, r + 1) for r in radius], indexing='ij')
    n_nonzero = np.sum([g != 0 for g in grid], axis=0)
    return FlatStructureElement(n_nonzero <= 1)


def from_array(array):
    """Structure element from a mask with odd shape, not decomposable."""
    return FlatStructureElement(array)


def structure_element(shape=(3, 3), form='Box', ndim=None):
    """Creates specific structure elements.

    Arguments
    ---------
    shape : int, tuple or FlatStructureElement
        Shape of the structure element, even sizes are rounded up to the next odd size.
    form : str
        Structure element type, 'Box', 'Ball', 'Polygon' or 'Cross'.
    ndim : int or None
        Dimension if shape is a single int.

    Returns
    -------
    selem : FlatStructureElement
        The structure element.
    """
    if isinstance(shape, FlatStructureElement):
        return shape

    if isinstance(shape, int):
        if ndim is None:
            raise ValueError('Dimension needed for structure element of shape %d!' % shape)
        shape = (shape,) * ndim
    shape = np.array([shape]).flatten()
    if ndim is not None:
        shape = np.pad(shape[:ndim], (0, max(0, ndim - len(shape))), 'wrap')

    radius = tuple(int(r) for r in structure_element_offsets(shape)[:, 0])
    if form in ['Cube', 'cube', 'c', 'Box', 'box', 'b', 'Rectangle', 'rectangle', 'r']:
        return box(radius)
    elif form in ['Disk', 'disk', 'd', 'Ball', 'ball', 'Sphere', 'sphere', 's']:
        return ball(radius)
    elif form in ['Polygon', 'polygon', 'p']:
        if len(radius) != 2:
            raise ValueError('Polygon structure elements are 2d, got shape %r!' % (tuple(shape),))
        return polygon(max(radius))
    elif form in ['Cross', 'cross', 'x']:
        return cross(radius)
    else:
        raise ValueError('Form %r for structure element not valid!' % form)


def structure_element_offsets(shape):
    """Calculates offsets to center for a structure element given its shape.

    Arguments
    ---------
    shape : array or tuple
        Shape of the structure element

    Returns
    -------
    offsets : array
        Offsets to center taking care of even/odd number of elements.
    """
    shape = np.array([shape], dtype=int).flatten()
    off = shape // 2
    off = np.array([off, shape - off]).T
    return off


def _radius(radius, ndim=None):
    if isinstance(radius, (list, tuple, np.ndarray)):
        radius = tuple(int(r) for r in radius)
        if ndim is not None and len(radius) != ndim:
            raise GeometryError('Radius %r does not match dimension %d!' % (radius, ndim))
    else:
        if ndim is None:
            raise GeometryError('Dimension needed for a scalar radius %r!' % radius)
        radius = (int(radius),) * ndim
    if any(r < 0 for r in radius):
        raise GeometryError('Radius %r has negative components!' % (radius,))
    return radius
