# -*- coding: utf-8 -*-
"""
ImageBuffer
===========

Dense N-dimensional pixel buffer placed on an index grid.

An :class:`ImageBuffer` wraps a numpy array whose first element sits at the
start index of its buffered region. It carries the regions used to negotiate
what a filter may read:

  * the largest possible region, i.e. the full image extent,
  * the buffered region, i.e. the part held in memory,
  * the requested region, i.e. the part downstream filters may read.

Example
-------

>>> import numpy as np
>>> from GreyMorph.Geometry.Region import Region
>>> from GreyMorph.IO.ImageBuffer import ImageBuffer
>>> image = ImageBuffer.allocate(Region(index=(10, 10), size=(3, 4)), dtype=float)
>>> image.set_pixel((11, 12), 5)
>>> image.get_pixel((11, 12))
5.0
"""
__author__ = 'GreyMorph developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2026 by the GreyMorph developers'


import numpy as np

from GreyMorph.Geometry.Region import Region
from GreyMorph.Utils.exceptions import GeometryError


class ImageBuffer(object):
    """Pixel buffer with region information.

    Arguments
    ---------
    array : array
        The pixel data of the buffered region.
    index : tuple of ints or None
        The grid index of the first array element. If None, the origin.
    largest_possible_region : Region or None
        The full image extent. If None, the buffered region.
    """

    def __init__(self, array, index=None, largest_possible_region=None):
        array = np.asarray(array)
        self._array = array
        self._buffered_region = Region.from_shape(array.shape, index=index)
        if largest_possible_region is None:
            largest_possible_region = self._buffered_region
        elif not largest_possible_region.is_inside(self._buffered_region):
            raise GeometryError('Buffered region %r not inside the largest possible region %r!'
                                % (self._buffered_region, largest_possible_region))
        self._largest_possible_region = largest_possible_region
        self._requested_region = self._buffered_region

    @classmethod
    def allocate(cls, region, dtype=float, largest_possible_region=None):
        """Allocate a buffer over region.

        Arguments
        ---------
        region : Region
            The region to buffer.
        dtype : dtype
            The pixel type.
        largest_possible_region : Region or None
            The full image extent. If None, the buffered region.

        Returns
        -------
        buffer : ImageBuffer
            The allocated buffer, pixel values are not initialized.
        """
        return cls(np.empty(region.size, dtype=dtype), index=region.index,
                   largest_possible_region=largest_possible_region)

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
    def dtype(self):
        return self._array.dtype

    @property
    def order(self):
        """Memory order of the pixel data, 'C' or 'F'."""
        if self._array.flags.f_contiguous and not self._array.flags.c_contiguous:
            return 'F'
        return 'C'

    @property
    def largest_possible_region(self):
        return self._largest_possible_region

    @property
    def buffered_region(self):
        return self._buffered_region

    @property
    def requested_region(self):
        """The region downstream filters may read, defaults to the buffered region."""
        return self._requested_region

    @requested_region.setter
    def requested_region(self, region):
        if region is None:
            region = self._buffered_region
        if not self._buffered_region.is_inside(region):
            raise GeometryError('Requested region %r is not inside the buffered region %r!'
                                % (region, self._buffered_region))
        self._requested_region = region

    def get_pixel(self, index):
        return self._array[self._local_index(index)]

    def set_pixel(self, index, value):
        self._array[self._local_index(index)] = value

    def fill_buffer(self, value):
        self._array.fill(value)

    def view(self, region):
        """Array view of the pixels in region.

        Arguments
        ---------
        region : Region
            The region to read, it must lie in the buffered region.

        Returns
        -------
        view : array
            The pixel data of the region (not a copy).
        """
        self._check_region(region)
        return self._array[region.slicing(origin=self._buffered_region.index)]

    def write(self, region, values):
        """Write values into region."""
        self._check_region(region)
        self._array[region.slicing(origin=self._buffered_region.index)] = values

    def _local_index(self, index):
        index = tuple(index)
        if not self._buffered_region.is_inside(index):
            raise GeometryError('Index %r outside of the buffered region %r!' % (index, self._buffered_region))
        return tuple(i - o for i, o in zip(index, self._buffered_region.index))

    def _check_region(self, region):
        if not self._buffered_region.is_inside(region):
            raise GeometryError('Region %r outside of the buffered region %r!' % (region, self._buffered_region))

    def __repr__(self):
        return 'ImageBuffer%r[%s]@%r' % (self.shape, self.dtype, self._buffered_region.index)


def as_image_buffer(source):
    """Convert a source to an ImageBuffer.

    Arguments
    ---------
    source : array or ImageBuffer
        The source to convert, buffers are passed through.

    Returns
    -------
    buffer : ImageBuffer
    """
    if isinstance(source, ImageBuffer):
        return source
    return ImageBuffer(source)
