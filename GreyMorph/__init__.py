# -*- coding: utf-8 -*-
"""
``GreyMorph`` is a toolbox for grayscale mathematical morphology of
N-dimensional images.

*GreyMorph* includes
* flat structure elements (boxes, polygons, balls, crosses, custom masks)
  and their decomposition into lines,
* erosion, dilation, opening and closing using the anchor algorithm for
  decomposable structure elements and a direct algorithm for all others,
* parallel processing of images split into disjoint regions.

``GreyMorph`` is written in `Python 3 <https://docs.python.org/3/>`_ and
builds on numpy and scipy.
"""
from importlib.metadata import version, PackageNotFoundError

__title__ = 'GreyMorph'
__author__ = 'GreyMorph developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2026 by the GreyMorph developers'
try:
    __version__ = version("GreyMorph")
except PackageNotFoundError:
    __version__ = '1.0.0'
