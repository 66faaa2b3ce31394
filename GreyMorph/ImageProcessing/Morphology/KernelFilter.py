# -*- coding: utf-8 -*-
"""
KernelFilter
============

Base class of the erosion and dilation filters.

A kernel filter reads a neighbourhood given by a structure element around
each output pixel. It processes the output in regions: for each region it
reads the region padded by the radius of the structure element, cropped to
the requested region of the input. The regions are distributed over workers
by :mod:`~GreyMorph.ParallelProcessing.BlockProcessing`.
"""
__author__ = 'GreyMorph developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2026 by the GreyMorph developers'


import GreyMorph.ParallelProcessing.BlockProcessing as bp

from GreyMorph.ImageProcessing.Morphology.AnchorLine import MIN, check_function, extremum_identity
from GreyMorph.IO.ImageBuffer import ImageBuffer, as_image_buffer
from GreyMorph.Utils.exceptions import GeometryError


class KernelFilter(object):
    """Erosion or dilation with a flat structure element.

    Arguments
    ---------
    kernel : FlatStructureElement
        The structure element.
    function : 'min' or 'max'
        'min' for erosion, 'max' for dilation.
    boundary : scalar or None
        Value of the pixels outside of the input. If None, the identity of
        the function for the input type is used.
    """

    def __init__(self, kernel, function=MIN, boundary=None):
        self._kernel = kernel
        self._function = check_function(function)
        self._boundary = boundary
        self._input = None

    @property
    def kernel(self):
        return self._kernel

    @property
    def function(self):
        return self._function

    @property
    def boundary(self):
        """The boundary value, do not change it while regions are processed."""
        return self._boundary

    @boundary.setter
    def boundary(self, value):
        self._boundary = value

    @property
    def input(self):
        return self._input

    def set_input(self, source):
        """Set the image to filter, numpy arrays are wrapped into an ImageBuffer."""
        source = as_image_buffer(source)
        if source.ndim != self._kernel.ndim:
            raise GeometryError('Input dimension %d does not match structure element dimension %d!'
                                % (source.ndim, self._kernel.ndim))
        self._input = source

    def boundary_value(self, dtype=None):
        """The boundary value used for pixels of the given type."""
        if self._boundary is not None:
            return self._boundary
        if dtype is None:
            dtype = self._input.dtype
        return extremum_identity(dtype, self._function)

    def input_requested_region(self, region):
        """The input region needed to compute the output region.

        Arguments
        ---------
        region : Region
            The output region.

        Returns
        -------
        region : Region
            The output region padded by the kernel radius and cropped to the requested region of the input.
        """
        return region.pad(self._kernel.radius).crop(self._input.requested_region)

    def check_configuration(self):
        """Raise an error if the filter cannot run with its current configuration."""
        if self._input is None:
            raise GeometryError('No input set for %r!' % self)

    def check_region(self, region):
        if not self._input.requested_region.is_inside(region):
            raise GeometryError('Output region %r not inside the requested input region %r!'
                                % (region, self._input.requested_region))

    def process_region(self, region, sink, verbose=False):
        """Filter the pixels of an output region into sink."""
        raise NotImplementedError

    def update(self, sink=None, region=None, processes=None, size_max=None, axes=None, verbose=False):
        """Filter the input into sink.

        Arguments
        ---------
        sink : array, ImageBuffer or None
            The output. If None, a buffer over the requested input region is allocated.
        region : Region or None
            The output region to compute. If None, the requested input region.
        processes : int, 'serial' or None
            Number of parallel workers.
        size_max : int, list of ints or None
            Maximal size of the processed regions along the split axes.
        axes : list of ints, all or None
            The axes along which to split the output.
        verbose : bool
            Print progress information.

        Returns
        -------
        sink : ImageBuffer
            The filtered image.
        """
        self.check_configuration()
        if region is None:
            region = self._input.requested_region
        if sink is None:
            sink = ImageBuffer.allocate(region, dtype=self._input.dtype,
                                        largest_possible_region=self._input.largest_possible_region)
        sink = as_image_buffer(sink)
        bp.process(self, sink, region=region, processes=processes,
                   size_max=size_max, axes=axes, verbose=verbose)
        return sink

    def __repr__(self):
        return '%s<%s>[%r]' % (type(self).__name__, self._function, self._kernel)
