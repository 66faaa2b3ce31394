# -*- coding: utf-8 -*-
"""
BasicErodeDilate
================

Grayscale erosion and dilation with arbitrary flat structure elements.

Each output pixel is the extremum over the full structure element, computed
with :func:`scipy.ndimage.grey_erosion` and :func:`scipy.ndimage.grey_dilation`
on the padded input region. This is slower than the anchor algorithm for
large elements but works for structure elements that are not decomposable.
"""
__author__ = 'GreyMorph developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2026 by the GreyMorph developers'


import scipy.ndimage as ndi

import GreyMorph.Utils.Timer as tmr

from GreyMorph.ImageProcessing.Morphology.AnchorLine import MAX, MIN
from GreyMorph.ImageProcessing.Morphology.KernelFilter import KernelFilter
from GreyMorph.IO.ImageBuffer import as_image_buffer


class BasicErodeDilate(KernelFilter):
    """Erosion or dilation by direct evaluation of the structure element."""

    def process_region(self, region, sink, verbose=False):
        """Filter the pixels of an output region into sink.

        Arguments
        ---------
        region : Region
            The output region, inside the requested region of the input.
        sink : array or ImageBuffer
            The output buffer, only the pixels in region are written.
        verbose : bool
            Print progress information.
        """
        if verbose:
            timer = tmr.Timer()

        self.check_configuration()
        self.check_region(region)
        sink = as_image_buffer(sink)
        if region.is_empty:
            return

        padded = self.input_requested_region(region)
        data = self.input.view(padded)
        boundary = self.boundary_value(data.dtype)
        if self.function == MIN:
            result = ndi.grey_erosion(data, footprint=self.kernel.array, mode='constant', cval=boundary)
        else:
            result = ndi.grey_dilation(data, footprint=self.kernel.array, mode='constant', cval=boundary)
        sink.write(region, result[region.slicing(origin=padded.index)])

        if verbose:
            timer.print_elapsed_time('Processing region %r' % (region,))


class BasicErode(BasicErodeDilate):
    """Basic erosion filter."""

    def __init__(self, kernel, boundary=None):
        super().__init__(kernel, function=MIN, boundary=boundary)


class BasicDilate(BasicErodeDilate):
    """Basic dilation filter."""

    def __init__(self, kernel, boundary=None):
        super().__init__(kernel, function=MAX, boundary=boundary)
