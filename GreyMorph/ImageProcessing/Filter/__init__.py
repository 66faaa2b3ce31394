# -*- coding: utf-8 -*-
"""
Filter
======

This sub-package provides the structure elements used by the morphological
filters, see :mod:`~GreyMorph.ImageProcessing.Filter.StructureElement`.
"""
