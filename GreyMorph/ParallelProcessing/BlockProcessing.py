# -*- coding: utf-8 -*-
"""
BlockProcessing
===============

Module to process the output of a filter in parallel, region by region.

The output region is split into disjoint sub-regions along a set of axes.
Each sub-region is passed to the ``process_region`` method of the filter,
which reads the part of the input it needs itself, e.g. the sub-region
padded by the radius of a structure element. The workers share the sink and
write disjoint parts of it, so no synchronization is needed.

Example
-------

>>> import numpy as np
>>> from GreyMorph.Geometry.Region import Region
>>> import GreyMorph.ParallelProcessing.BlockProcessing as bp
>>> bp.block_sizes(100, processes=4, size_max=30)
(4, [(0, 25), (25, 50), (50, 75), (75, 100)])
>>> regions = bp.split_into_regions(Region.from_shape((50, 100)), processes=4, axes=[1], size_max=30)
>>> regions[1]
Region(index=(0, 25), size=(50, 25))
"""
__author__ = 'GreyMorph developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2026 by the GreyMorph developers'


import concurrent.futures as cf
import functools as ft
import multiprocessing as mp
import warnings

import numpy as np

import GreyMorph.ParallelProcessing.ParallelTraceback as ptb
import GreyMorph.Settings as settings
import GreyMorph.Utils.Timer as tmr

from GreyMorph.Geometry.Region import Region
from GreyMorph.IO.ImageBuffer import as_image_buffer


###############################################################################
### Processing
###############################################################################

def process(filter, sink, region=None, processes=None, axes=None,
            size_max=None, size_min=None,
            optimization=True, optimization_fix='all', verbose=False):
    """Split the output into regions and let a filter process them in parallel.

    Arguments
    ---------
    filter : object
        Filter with a ``process_region(region, sink, verbose)`` method.
    sink : array or ImageBuffer
        The output the filter writes to.
    region : Region or None
        The output region to process. If None, the buffered region of the sink.
    processes : int, 'serial' or None
        The number of parallel workers, if 'serial', use serial processing.
        If None, :const:`GreyMorph.Settings.default_processes` is used and
        the number of cpus if that is None as well.
    axes : int, list of ints, all or None
        Axes along which to split the output. If None, the
        splitting is determined from the order of the sink.
    size_max : int, list of ints or None
        Maximal size of a region along the axes.
        If None, :const:`GreyMorph.Settings.default_size_max` is used.
    size_min : int, list of ints or None
        Minimal size of a region along the axes.
    optimization : bool or list of bools
        If True, optimize region sizes to best fit number of processes.
    optimization_fix : 'increase', 'decrease', 'all' or None or list
        Increase, decrease or optimally change the region size when optimization
        is active.
    verbose : bool
        Print information on the processing.

    Returns
    -------
    sink : ImageBuffer
        The output.

    Note
    ----
    The first error raised by a worker aborts the processing, pending regions
    are cancelled and the error is re-raised.
    """
    sink = as_image_buffer(sink)
    if region is None:
        region = sink.buffered_region
    if processes is None:
        processes = settings.default_processes
    if size_max is None:
        size_max = settings.default_size_max
    if axes is None:
        axes = settings.default_axes

    regions = split_into_regions(region, processes=processes, axes=axes, order=sink.order,
                                 size_max=size_max, size_min=size_min,
                                 optimization=optimization, optimization_fix=optimization_fix,
                                 verbose=verbose)
    n_regions = len(regions)

    func = ft.partial(process_region, filter=filter, sink=sink, verbose=verbose)

    if not isinstance(processes, int) and processes != 'serial':
        processes = mp.cpu_count()

    if verbose:
        timer = tmr.Timer()
        print('Processing %d regions with filter %r.' % (n_regions, filter))

    if isinstance(processes, int) and processes > 1 and n_regions > 1:
        executor = cf.ThreadPoolExecutor(max_workers=processes)
        try:
            futures = [executor.submit(func, r) for r in regions]
            for f in futures:
                f.result()
        finally:
            executor.shutdown(wait=True, cancel_futures=True)
    else:
        for r in regions:
            func(r)

    if verbose:
        timer.print_elapsed_time('Processed %d regions with filter %r' % (n_regions, filter))

    return sink


@ptb.parallel_traceback
def process_region(region, filter, sink, verbose=False):
    """Process a region with full traceback.

    Arguments
    ---------
    region : Region
        The output region to process.
    filter : object
        The filter processing the region.
    sink : ImageBuffer
        The output.
    """
    filter.process_region(region, sink, verbose=verbose)


###############################################################################
### Region splitting
###############################################################################

def block_sizes(size, processes=None, size_max=None, size_min=None,
                optimization=True, optimization_fix='all', verbose=False):
    """Calculates the block ranges along a single axis.

    Arguments
    ---------
    size : int
        Size of the axis to be split up.
    processes : int or None
        Number of parallel processes to use.
    size_max : int or None.
        Maximal size of a block. If None, do not split.
    size_min : int or None
        Minimal size of a block. If None, 1.
    optimization : bool
        If True, optimize block sizes to best fit number of processes.
    optimization_fix : 'increase', 'decrease', 'all' or None
        Increase, decrease or optimally change the block size when optimization
        is active.
    verbose : bool
        Print information on block generation.

    Returns
    -------
    n_blocks : int
        Number of blocks.
    block_ranges : list of tuple of ints
        Disjoint ranges of the blocks of the form [(lo0,hi0),(lo1,hi1),...] covering [0, size).

    Note
    ----
    The optimization allows block sizes to change slightly to better distribute
    the blocks over processes, assuming each block processes a similar amount of
    time.
    """
    if processes is None:
        processes = mp.cpu_count()
    if not isinstance(processes, int) or processes <= 0:
        processes = 1

    if size <= 0:
        return 1, [(0, size)]

    if size_max is None or size_max > size:
        size_max = size
    if size_min is None:
        size_min = 1
    if size_min > size:
        size_min = size

    if size_min > size_max:
        raise ValueError('Minimal block size larger than maximal block size %d > %d !' % (size_min, size_max))

    n_blocks = int(np.ceil(float(size) / size_max))
    block_size = float(size) / n_blocks

    if verbose:
        print("Estimated block size %d in %d blocks!" % (block_size, n_blocks))

    if optimization and n_blocks > 1:
        n_add = n_blocks % processes
        if n_add != 0:
            if optimization_fix in [None, 'all', all]:
                if n_add < processes / 2.0 and n_blocks > n_add:
                    optimization_fix = 'increase'
                else:
                    optimization_fix = 'decrease'

            if optimization_fix == 'decrease':
                # decrease block size, increase block number to fit processes
                n_blocks = min(n_blocks - n_add + processes, size)
            elif optimization_fix == 'increase' and n_blocks > n_add:
                # increase block size, decrease block number to fit processes
                n_blocks = n_blocks - n_add
            block_size = float(size) / n_blocks

            if verbose:
                print("Optimized block size %.02f in %d blocks!" % (block_size, n_blocks))

    if block_size < size_min:
        warnings.warn("Some blocks with average block size %.02f may be smaller than minimal block size %d "
                      "due to optimization!" % (block_size, size_min))
    if block_size > size_max:
        warnings.warn("Some blocks with average block size %.02f may be larger than maximal block size %d "
                      "due to optimization!" % (block_size, size_max))

    bounds = [int(round(i * block_size)) for i in range(n_blocks)] + [size]
    block_ranges = [(lo, hi) for lo, hi in zip(bounds[:-1], bounds[1:])]

    if verbose:
        n_prt = min(10, n_blocks)
        pr = '...' if n_blocks > n_prt else ''
        print("Final blocks : %d" % n_blocks)
        print("Final blocks : " + str(block_ranges[:n_prt]) + pr)

    return n_blocks, block_ranges


def block_axes(ndim, axes=None, order='C'):
    """Determine the axes for block processing.

    Arguments
    ---------
    ndim : int
        The dimension of the data.
    axes : int, list, all or None
        The axes over which to split the block processing.
    order : 'C' or 'F'
        Memory order of the data, used when axes is None.

    Returns
    -------
    axes : list
        The axes over which to split the block processing.
    """
    if axes is all:
        return list(range(ndim))
    if axes is not None:
        if not isinstance(axes, (list, tuple)):
            axes = [axes]
        axes = list(axes)
        if len(axes) > 0 and (np.max(axes) >= ndim or np.min(axes) < 0):
            raise ValueError('Axes specification %r for data with dimension %d not valid!' % (axes, ndim))
        return axes

    if ndim == 0:
        return []
    if order == 'F':
        return [ndim - 1]
    return [0]


def split_into_regions(region, processes=None, axes=None, order='C',
                       size_max=None, size_min=None,
                       optimization=True, optimization_fix='all', verbose=False):
    """Splits a region into disjoint sub-regions for parallel processing.

    Arguments
    ---------
    region : Region
        Region to divide.
    processes : int or None
        Number of parallel processes to use.
    axes : int or list of ints, all or None
        Axes along which to split the region.
    order : 'C' or 'F'
        Memory order of the data, used to choose the axes if axes is None.
    size_max : int or list of ints
        Maximal size of a sub-region along the axes.
    size_min : int or list of ints
        Minimal size of a sub-region along the axes.
    optimization : bool or list of bools
        If True, optimize sizes to best fit number of processes.
    optimization_fix : 'increase', 'decrease', 'all' or None or list
        Increase, decrease or optimally change the size when optimization is active.
    verbose : bool
        Print information on region generation.

    Returns
    -------
    regions : list of Region
        Disjoint regions covering region, in index order of the grid of regions.
    """
    ndim = region.ndim
    axes = block_axes(ndim, axes=axes, order=order)
    n_axes = len(axes)

    size_max = _unpack(size_max, n_axes)
    size_min = _unpack(size_min, n_axes)
    optimization = _unpack(optimization, n_axes)
    optimization_fix = _unpack(optimization_fix, n_axes)

    axis_ranges = []
    for d in range(ndim):
        if d in axes:
            a = axes.index(d)
            _, ranges = block_sizes(region.size[d], processes=processes,
                                    size_max=size_max[a], size_min=size_min[a],
                                    optimization=optimization[a], optimization_fix=optimization_fix[a],
                                    verbose=verbose)
        else:
            ranges = [(0, region.size[d])]
        axis_ranges.append(ranges)

    regions_shape = tuple(len(r) for r in axis_ranges)
    regions = []
    for grid_index in np.ndindex(*regions_shape):
        ranges = [axis_ranges[d][grid_index[d]] for d in range(ndim)]
        index = tuple(i + r[0] for i, r in zip(region.index, ranges))
        size = tuple(r[1] - r[0] for r in ranges)
        regions.append(Region(index=index, size=size))
    return regions


def _unpack(values, ndim=None):
    """Helper to parse values into standard form (value0,value1,...)."""
    if not isinstance(values, (list, tuple)):
        values = [values] * (ndim or 1)

    if ndim is not None and len(values) != ndim:
        raise ValueError('Dimension %d does not match data dimensions %d' % (len(values), ndim))

    return values
