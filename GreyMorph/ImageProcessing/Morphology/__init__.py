# -*- coding: utf-8 -*-
"""
Morphology
==========

This sub-package provides grayscale erosion and dilation filters.

The array level functions are in
:mod:`~GreyMorph.ImageProcessing.Morphology.GrayscaleMorphology`. The
anchor algorithm is built from the line rasterization in
:mod:`~GreyMorph.ImageProcessing.Morphology.BresenhamLine`, the structure
element decomposition in
:mod:`~GreyMorph.ImageProcessing.Morphology.Decomposition`, the line
processing in :mod:`~GreyMorph.ImageProcessing.Morphology.AnchorLine` and
the region processing in
:mod:`~GreyMorph.ImageProcessing.Morphology.AnchorErodeDilate`.
"""
