# -*- coding: utf-8 -*-
"""
Region
======

N-dimensional axis aligned regions of an image grid.

A region is given by its start ``index`` and its ``size`` along each axis.
Regions are immutable: padding and cropping return new regions.

Example
-------

>>> from GreyMorph.Geometry.Region import Region
>>> r = Region(index=(2, 3), size=(4, 5))
>>> r.pad(2)
Region(index=(0, 1), size=(8, 9))
>>> r.pad(2).crop(Region.from_shape((6, 6)))
Region(index=(0, 1), size=(6, 5))
"""
__author__ = 'GreyMorph developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2026 by the GreyMorph developers'


import numpy as np

from GreyMorph.Utils.exceptions import GeometryError


class Region(object):
    """Axis aligned region of an N-dimensional index grid.

    Attributes
    ----------
    index : tuple of ints
        The first index inside the region.
    size : tuple of ints
        The number of pixels along each axis.
    """

    def __init__(self, index=None, size=None):
        if index is None and size is None:
            raise GeometryError('A region needs an index or a size!')
        if size is None:
            size = (0,) * len(index)
        if index is None:
            index = (0,) * len(size)
        index = tuple(int(i) for i in index)
        size = tuple(int(s) for s in size)
        if len(index) != len(size):
            raise GeometryError('Index %r and size %r dimensions do not match!' % (index, size))
        if any(s < 0 for s in size):
            raise GeometryError('Region size %r has negative components!' % (size,))
        self._index = index
        self._size = size

    @classmethod
    def from_shape(cls, shape, index=None):
        """Region of an array with the given shape, starting at index or the origin."""
        shape = tuple(shape)
        if index is None:
            index = (0,) * len(shape)
        return cls(index=index, size=shape)

    @property
    def index(self):
        return self._index

    @property
    def size(self):
        return self._size

    @property
    def ndim(self):
        return len(self._size)

    @property
    def upper(self):
        """The exclusive upper corner of the region."""
        return tuple(i + s for i, s in zip(self._index, self._size))

    @property
    def number_of_pixels(self):
        return int(np.prod(self._size, dtype=np.int64))

    @property
    def is_empty(self):
        return self.number_of_pixels == 0

    def pad(self, radius):
        """Grow the region symmetrically.

        Arguments
        ---------
        radius : int or tuple of ints
            The padding along each axis.

        Returns
        -------
        region : Region
            The padded region.
        """
        radius = self._unpack(radius)
        index = tuple(i - r for i, r in zip(self._index, radius))
        size = tuple(max(0, s + 2 * r) for s, r in zip(self._size, radius))
        return Region(index=index, size=size)

    def crop(self, bounds):
        """Intersect the region with bounds.

        Axes without overlap result in a zero size, the size is never negative.

        Arguments
        ---------
        bounds : Region
            The region to crop to.

        Returns
        -------
        region : Region
            The cropped region.
        """
        self._check_dimension(bounds)
        index = []
        size = []
        for lo, hi, b_lo, b_hi in zip(self._index, self.upper, bounds.index, bounds.upper):
            lo_new = min(max(lo, b_lo), b_hi)
            hi_new = max(min(hi, b_hi), lo_new)
            index.append(lo_new)
            size.append(hi_new - lo_new)
        return Region(index=index, size=size)

    def is_inside(self, other):
        """Test if an index or a region lies inside this region.

        Arguments
        ---------
        other : tuple of ints or Region
            The index or region to test.

        Returns
        -------
        inside : bool
            True if other is contained in this region.
        """
        if isinstance(other, Region):
            self._check_dimension(other)
            if other.is_empty:
                return True
            return all(lo <= o_lo and o_hi <= hi for lo, hi, o_lo, o_hi
                       in zip(self._index, self.upper, other.index, other.upper))

        other = tuple(other)
        if len(other) != self.ndim:
            raise GeometryError('Index %r does not match region dimension %d!' % (other, self.ndim))
        return all(lo <= i < hi for lo, hi, i in zip(self._index, self.upper, other))

    def slicing(self, origin=None):
        """Slices addressing this region in an array whose first element is at origin.

        Arguments
        ---------
        origin : tuple of ints or None
            Index of the first array element. If None, the grid origin is used.

        Returns
        -------
        slicing : tuple of slices
        """
        if origin is None:
            origin = (0,) * self.ndim
        return tuple(slice(i - o, i - o + s) for i, s, o in zip(self._index, self._size, origin))

    def indices(self):
        """Iterate over all indices of the region in index order (last axis fastest)."""
        for local in np.ndindex(*self._size):
            yield tuple(i + l for i, l in zip(self._index, local))

    def _unpack(self, values):
        if not isinstance(values, (list, tuple, np.ndarray)):
            values = [values] * self.ndim
        values = [int(v) for v in values]
        if len(values) != self.ndim:
            raise GeometryError('Dimension %d does not match region dimension %d!' % (len(values), self.ndim))
        return values

    def _check_dimension(self, other):
        if other.ndim != self.ndim:
            raise GeometryError('Region dimensions %d and %d do not match!' % (self.ndim, other.ndim))

    def __eq__(self, other):
        if not isinstance(other, Region):
            return NotImplemented
        return self._index == other._index and self._size == other._size

    def __hash__(self):
        return hash((self._index, self._size))

    def __repr__(self):
        return 'Region(index=%r, size=%r)' % (self._index, self._size)
