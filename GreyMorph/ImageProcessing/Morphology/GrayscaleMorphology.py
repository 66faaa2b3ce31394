# -*- coding: utf-8 -*-
"""
GrayscaleMorphology
===================

Grayscale erosion, dilation, opening and closing of N-dimensional images.

Two algorithms are available:

  * 'anchor' : line by line sliding window extrema for decomposable
    structure elements, see
    :mod:`~GreyMorph.ImageProcessing.Morphology.AnchorErodeDilate`.
  * 'basic' : direct evaluation of the full structure element, see
    :mod:`~GreyMorph.ImageProcessing.Morphology.BasicErodeDilate`.

With 'auto' the anchor algorithm is used whenever the structure element
is decomposable.

Example
-------

>>> import numpy as np
>>> import GreyMorph.ImageProcessing.Morphology.GrayscaleMorphology as gm
>>> gm.erode(np.array([5, 1, 4, 2, 3]), processes='serial')
array([1, 1, 1, 2, 2])
>>> gm.dilate(np.array([5, 1, 4, 2, 3]), processes='serial')
array([5, 5, 4, 4, 3])
"""
__author__ = 'GreyMorph developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2026 by the GreyMorph developers'


import numpy as np

import GreyMorph.ImageProcessing.Filter.StructureElement as se
import GreyMorph.Settings as settings

from GreyMorph.ImageProcessing.Morphology.AnchorErodeDilate import AnchorErodeDilate
from GreyMorph.ImageProcessing.Morphology.AnchorLine import MAX, MIN
from GreyMorph.ImageProcessing.Morphology.BasicErodeDilate import BasicErodeDilate
from GreyMorph.IO.ImageBuffer import ImageBuffer
from GreyMorph.Utils.exceptions import ConfigurationError

__all__ = ['erode', 'dilate', 'opening', 'closing', 'morphology_filter']


algorithms = ('anchor', 'basic', 'auto')
"""Available algorithms."""


###############################################################################
### Filters
###############################################################################

def morphology_filter(selem, function=MIN, boundary=None, algorithm=None):
    """Create an erosion or dilation filter.

    Arguments
    ---------
    selem : FlatStructureElement
        The structure element.
    function : 'min' or 'max'
        'min' for erosion, 'max' for dilation.
    boundary : scalar or None
        Value of the pixels outside of the image.
    algorithm : 'anchor', 'basic', 'auto' or None
        The algorithm. If None, :const:`GreyMorph.Settings.default_algorithm`.

    Returns
    -------
    filter : KernelFilter
        The filter.
    """
    if algorithm is None:
        algorithm = settings.default_algorithm
    if algorithm not in algorithms:
        raise ConfigurationError('Algorithm %r not in %r!' % (algorithm, algorithms))
    if algorithm == 'auto':
        algorithm = 'anchor' if selem.decomposable else 'basic'

    if algorithm == 'anchor':
        morphology = AnchorErodeDilate(selem, function=function, boundary=boundary)
    else:
        morphology = BasicErodeDilate(selem, function=function, boundary=boundary)
    return morphology


def erode(source, selem=None, sink=None, boundary=None, algorithm=None,
          processes=None, size_max=None, axes=None, verbose=False):
    """Grayscale erosion.

    Arguments
    ---------
    source : array or ImageBuffer
        Input image.
    selem : FlatStructureElement or None
        Structure element. If None, use a box of radius :const:`GreyMorph.Settings.default_radius`.
    sink : array, ImageBuffer or None
        Output image. If None, a new array is allocated.
    boundary : scalar or None
        Value of the pixels outside of the image. If None, the maximum of the pixel type.
    algorithm : 'anchor', 'basic', 'auto' or None
        The algorithm to use.
    processes : int, 'serial' or None
        Number of parallel workers.
    size_max : int or None
        Maximal size of the regions processed in parallel along the split axes.
    axes : list of ints, all or None
        Axes along which to split the image for parallel processing.
    verbose : bool
        Print progress information.

    Returns
    -------
    sink : array or ImageBuffer
        The eroded image.
    """
    return _apply(MIN, source, selem=selem, sink=sink, boundary=boundary, algorithm=algorithm,
                  processes=processes, size_max=size_max, axes=axes, verbose=verbose)


def dilate(source, selem=None, sink=None, boundary=None, algorithm=None,
           processes=None, size_max=None, axes=None, verbose=False):
    """Grayscale dilation.

    Arguments
    ---------
    source : array or ImageBuffer
        Input image.
    selem : FlatStructureElement or None
        Structure element. If None, use a box of radius :const:`GreyMorph.Settings.default_radius`.
    sink : array, ImageBuffer or None
        Output image. If None, a new array is allocated.
    boundary : scalar or None
        Value of the pixels outside of the image. If None, the minimum of the pixel type.
    algorithm : 'anchor', 'basic', 'auto' or None
        The algorithm to use.
    processes : int, 'serial' or None
        Number of parallel workers.
    size_max : int or None
        Maximal size of the regions processed in parallel along the split axes.
    axes : list of ints, all or None
        Axes along which to split the image for parallel processing.
    verbose : bool
        Print progress information.

    Returns
    -------
    sink : array or ImageBuffer
        The dilated image.
    """
    return _apply(MAX, source, selem=selem, sink=sink, boundary=boundary, algorithm=algorithm,
                  processes=processes, size_max=size_max, axes=axes, verbose=verbose)


def opening(source, selem=None, sink=None, boundary=None, algorithm=None,
            processes=None, size_max=None, axes=None, verbose=False):
    """Grayscale opening, the dilation of the erosion.

    See :func:`erode` for the arguments, boundary is used by both passes.
    """
    eroded = erode(source, selem=selem, boundary=boundary, algorithm=algorithm,
                   processes=processes, size_max=size_max, axes=axes, verbose=verbose)
    return dilate(eroded, selem=selem, sink=sink, boundary=boundary, algorithm=algorithm,
                  processes=processes, size_max=size_max, axes=axes, verbose=verbose)


def closing(source, selem=None, sink=None, boundary=None, algorithm=None,
            processes=None, size_max=None, axes=None, verbose=False):
    """Grayscale closing, the erosion of the dilation.

    See :func:`erode` for the arguments, boundary is used by both passes.
    """
    dilated = dilate(source, selem=selem, boundary=boundary, algorithm=algorithm,
                     processes=processes, size_max=size_max, axes=axes, verbose=verbose)
    return erode(dilated, selem=selem, sink=sink, boundary=boundary, algorithm=algorithm,
                 processes=processes, size_max=size_max, axes=axes, verbose=verbose)


###############################################################################
### Helpers
###############################################################################

def _apply(function, source, selem=None, sink=None, boundary=None, algorithm=None,
           processes=None, size_max=None, axes=None, verbose=False):
    as_array = not isinstance(source, ImageBuffer)
    if as_array:
        source = np.asarray(source)
    if selem is None:
        selem = se.box(settings.default_radius, ndim=source.ndim)

    morphology = morphology_filter(selem, function=function, boundary=boundary, algorithm=algorithm)
    morphology.set_input(source)
    morphology.check_configuration()

    if sink is None and as_array:
        sink = np.empty(source.shape, dtype=source.dtype)

    result = morphology.update(sink=sink, processes=processes, size_max=size_max, axes=axes, verbose=verbose)
    if isinstance(sink, ImageBuffer) or (sink is None and not as_array):
        return result
    return result.array
