# -*- coding: utf-8 -*-
"""
IO
==

This sub-package provides the in memory pixel containers the filters read
from and write to, see :mod:`~GreyMorph.IO.ImageBuffer`.
"""
