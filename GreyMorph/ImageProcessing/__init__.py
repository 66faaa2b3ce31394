# -*- coding: utf-8 -*-
"""
ImageProcessing
===============

This sub-package provides routines for grayscale morphology of
N-dimensional images.

Structure elements are defined in :mod:`~GreyMorph.ImageProcessing.Filter`,
the morphological filters in :mod:`~GreyMorph.ImageProcessing.Morphology`.


Parallel Image Processing
-------------------------

The filters compute their output region by region. Each region reads the
input padded by the radius of the structure element, so regions can be
processed independently by parallel workers.

Parallel processing is handled via the
:mod:`~GreyMorph.ParallelProcessing` module.
"""
