# -*- coding: utf-8 -*-
"""
AnchorErodeDilate
=================

Grayscale erosion and dilation with decomposable structure elements.

The structure element is decomposed into lines
(:mod:`~GreyMorph.ImageProcessing.Morphology.Decomposition`). Each line is
applied in turn: the padded input region is swept by parallel digital lines
(:mod:`~GreyMorph.ImageProcessing.Morphology.BresenhamLine`) along the line
direction and the sliding window extremum of each digital line is computed
in a line buffer (:mod:`~GreyMorph.ImageProcessing.Morphology.AnchorLine`).
Loading a line into a buffer at a time keeps the memory access local also
along non raster directions.

Each processed region owns an internal accumulator over the padded region
and two line buffers. The first line reads from the input, the following
ones from the accumulator. The accumulator is copied into the output region
once all lines are done, so regions can be processed in parallel sharing
only the read-only input.

Example
-------

>>> import numpy as np
>>> import GreyMorph.ImageProcessing.Filter.StructureElement as se
>>> from GreyMorph.ImageProcessing.Morphology.AnchorErodeDilate import AnchorErode
>>> erode = AnchorErode(se.box(1, ndim=1))
>>> erode.set_input(np.array([5, 1, 4, 2, 3]))
>>> erode.update(processes='serial').array
array([1, 1, 1, 2, 2])
"""
__author__ = 'GreyMorph developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2026 by the GreyMorph developers'


import numpy as np

import GreyMorph.ImageProcessing.Morphology.BresenhamLine as bl
import GreyMorph.Settings as settings
import GreyMorph.Utils.Timer as tmr

from GreyMorph.ImageProcessing.Morphology.AnchorLine import MAX, MIN, anchor_line
from GreyMorph.ImageProcessing.Morphology.Decomposition import decompose
from GreyMorph.ImageProcessing.Morphology.KernelFilter import KernelFilter
from GreyMorph.IO.ImageBuffer import as_image_buffer
from GreyMorph.Utils.exceptions import ConfigurationError, GeometryError


NOT_STARTED = 'not-started'
BOUNDARY_CHECK = 'boundary-check'
REGION_PREPARED = 'region-prepared'
LINE_PASS = 'line-pass'
WRITING_BACK = 'writing-back'
DONE = 'done'


class AnchorErodeDilate(KernelFilter):
    """Anchor erosion or dilation filter.

    Arguments
    ---------
    kernel : FlatStructureElement
        A decomposable structure element.
    function : 'min' or 'max'
        'min' for erosion, 'max' for dilation.
    boundary : scalar or None
        Value of the pixels outside of the input. If None, the identity of
        the function for the input type is used.
    buffer_margin : int or None
        Extra slots of the line buffers, if None :const:`GreyMorph.Settings.buffer_margin`.
    """

    def __init__(self, kernel, function=MIN, boundary=None, buffer_margin=None):
        super().__init__(kernel, function=function, boundary=boundary)
        if buffer_margin is None:
            buffer_margin = settings.buffer_margin
        self.buffer_margin = int(buffer_margin)

    def check_configuration(self):
        if not self.kernel.decomposable:
            raise ConfigurationError('Anchor morphology only works with decomposable structure elements, '
                                     'got %r!' % (self.kernel,))
        super().check_configuration()

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

        Returns
        -------
        processor : AnchorRegionProcessor
            The finished processor of this region.
        """
        processor = AnchorRegionProcessor(self, region, sink)
        processor.run(verbose=verbose)
        return processor


class AnchorErode(AnchorErodeDilate):
    """Anchor erosion filter."""

    def __init__(self, kernel, boundary=None, buffer_margin=None):
        super().__init__(kernel, function=MIN, boundary=boundary, buffer_margin=buffer_margin)


class AnchorDilate(AnchorErodeDilate):
    """Anchor dilation filter."""

    def __init__(self, kernel, boundary=None, buffer_margin=None):
        super().__init__(kernel, function=MAX, boundary=boundary, buffer_margin=buffer_margin)


class AnchorRegionProcessor(object):
    """Processing of a single output region by the anchor algorithm.

    The processor owns the internal accumulator and line buffers of the
    region. Its state advances from 'not-started' over 'boundary-check',
    'region-prepared', 'line-pass' and 'writing-back' to 'done'.

    Attributes
    ----------
    state : str
        The processing state.
    line_index : int or None
        The index of the current line during the line passes.
    padded_region : Region or None
        The input region read by this processor.
    buffer_length : int or None
        The capacity of the line buffers.
    """

    def __init__(self, anchor_filter, region, sink):
        self.filter = anchor_filter
        self.region = region
        self.sink = as_image_buffer(sink)
        self.state = NOT_STARTED
        self.line_index = None
        self.lines = None
        self.padded_region = None
        self.buffer_length = None
        self.boundary = None
        self.accumulator = None
        self.in_buffer = None
        self.out_buffer = None

    def run(self, verbose=False):
        if verbose:
            timer = tmr.Timer()
            print('Processing region %r with %r' % (self.region, self.filter))

        self.check_boundary()
        if self.region.is_empty:
            self.state = DONE
            return

        self.prepare_region()

        source = self.filter.input.view(self.padded_region)
        for i, line in enumerate(self.lines):
            self.state = LINE_PASS
            self.line_index = i
            self.line_pass(source, line)
            source = self.accumulator
        if not self.lines:
            self.accumulator[:] = source

        self.write_back()
        self.state = DONE

        if verbose:
            timer.print_elapsed_time('Processing region %r' % (self.region,))

    def check_boundary(self):
        self.state = BOUNDARY_CHECK
        decomposable, lines = decompose(self.filter.kernel)
        if not decomposable:
            raise ConfigurationError('Anchor morphology only works with decomposable structure elements, '
                                     'got %r!' % (self.filter.kernel,))
        self.filter.check_configuration()
        self.filter.check_region(self.region)
        self.lines = lines

    def prepare_region(self):
        source = self.filter.input
        self.padded_region = self.filter.input_requested_region(self.region)
        self.accumulator = np.empty(self.padded_region.size, dtype=source.dtype)

        self.buffer_length = sum(self.padded_region.size) + self.filter.buffer_margin
        self.in_buffer = np.empty(self.buffer_length, dtype=source.dtype)
        self.out_buffer = np.empty(self.buffer_length, dtype=source.dtype)
        self.boundary = self.filter.boundary_value(source.dtype)
        self.state = REGION_PREPARED

    def line_pass(self, source, line):
        """Apply one line of the decomposition to the whole padded region.

        Arguments
        ---------
        source : array
            The data of the padded region, input view or accumulator.
        line : Line
            The line to apply.
        """
        shape = self.accumulator.shape
        ndim = len(shape)
        main = bl.dominant_axis(line.direction)
        steps = shape[main]
        if steps + 2 > self.buffer_length:
            raise GeometryError('Line buffers of size %d too small for lines of %d pixels!'
                                % (self.buffer_length, steps))

        # lines start on grid indices along the main axis that are multiples
        # of the line period, so a pixel sees the same digital line in every region
        period = bl.line_period(line.direction)
        offsets = bl.rasterize(line.direction, steps + period - 1)
        lo = offsets.min(axis=0)
        hi = offsets.max(axis=0)

        origin = self.padded_region.index[main]
        if line.direction[main] > 0:
            main_start = -(origin % period)
        else:
            main_start = steps - 1 + (-(origin + steps - 1)) % period

        # the other axes start on the face of the region orthogonal to the
        # main axis, enlarged by the drift of the line along them
        face_axes = [d for d in range(ndim) if d != main]
        face_start = np.array([-hi[d] for d in face_axes], dtype=int)
        face_size = [shape[d] - lo[d] + hi[d] for d in face_axes]

        start = np.zeros(ndim, dtype=int)
        start[main] = main_start
        shape = np.array(shape)
        for face_index in np.ndindex(*face_size):
            start[face_axes] = face_start + np.array(face_index, dtype=int)
            positions = start + offsets
            inside = np.flatnonzero(np.all((positions >= 0) & (positions < shape), axis=1))
            if inside.size == 0:
                continue
            positions = tuple(positions[inside[0]:inside[-1] + 1].T)
            length = inside[-1] - inside[0] + 1

            self.in_buffer[1:length + 1] = source[positions]
            anchor_line(self.in_buffer, self.out_buffer, length, line.length, self.filter.function, self.boundary)
            self.accumulator[positions] = self.out_buffer[1:length + 1]

    def write_back(self):
        self.state = WRITING_BACK
        self.sink.write(self.region, self.accumulator[self.region.slicing(origin=self.padded_region.index)])
