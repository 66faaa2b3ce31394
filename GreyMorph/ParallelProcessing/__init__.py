# -*- coding: utf-8 -*-
"""
ParallelProcessing
==================

This sub-package provides functions for parallel processing of images
for GreyMorph.

The output of a filter is split into disjoint regions that are processed by
parallel workers, managed by
:mod:`~GreyMorph.ParallelProcessing.BlockProcessing`.
"""
