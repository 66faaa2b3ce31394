# -*- coding: utf-8 -*-
"""
Settings
========

Module to set *GreyMorph's* internal parameters and paths.

The defaults are read from the ``morphology_params.cfg`` configuration file,
a copy in ``~/.greymorph/`` takes precedence over the one in the package.

See Also
--------
    * :const:`greymorph_path`
    * :const:`default_radius`
    * :const:`default_algorithm`
    * :const:`buffer_margin`
"""
__author__ = 'GreyMorph developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2026 by the GreyMorph developers'


import os

from GreyMorph.config.config_loader import get_cfg


###############################################################################
# ## Paths
###############################################################################


def path():
    """Returns root path to the GreyMorph software.

    Returns
    -------
    path : str
        Root path to *GreyMorph*.
    """
    f_name = os.path.split(__file__)
    f_name = os.path.abspath(f_name[0])
    return f_name


greymorph_path = path()
"""Absolute path to the GreyMorph's root folder."""

config_path = os.path.join(greymorph_path, 'config')
"""Absolute path to the GreyMorph's default configuration folder."""


###############################################################################
# ## Parameters
###############################################################################

config = get_cfg('morphology')

default_radius = config['defaults'].get('radius', 1)
"""Radius of the box structure element used when none is given."""

default_algorithm = config['defaults'].get('algorithm', 'auto')
"""Algorithm used by the grayscale morphology functions, 'anchor', 'basic' or 'auto'."""

buffer_margin = config['anchor'].get('buffer_margin', 2)
"""Number of slots added to the line buffers of the anchor algorithm on top of
the sum of the region extents. Two slots hold the boundary values at both ends
of a line."""

default_processes = config['processing'].get('processes')
"""Number of parallel workers, None uses the number of cpus, 'serial' processes in the calling thread."""

default_size_max = config['processing'].get('size_max')
"""Maximal size of a region along the split axes, None for no limit."""

default_axes = config['processing'].get('axes')
"""Axes along which regions are split, None determines them from the array order."""
