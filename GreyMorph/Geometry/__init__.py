# -*- coding: utf-8 -*-
"""
Geometry
========

This sub-package provides the index grid geometry used by the filters,
most importantly the :mod:`~GreyMorph.Geometry.Region` class used to
split images into the parts processed in parallel.
"""
