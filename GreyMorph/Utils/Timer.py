# -*- coding: utf-8 -*-
"""
Timer
=====

Timing information for the ``verbose`` output of the filters.

Example
-------

>>> import GreyMorph.Utils.Timer as tmr
>>> timer = tmr.Timer(head='Erosion')
>>> timer.print_elapsed_time('region 0')
Erosion region 0: elapsed time: 0:00:00.000
>>> with tmr.Timer('Dilation'):
...     pass
Dilation: elapsed time: 0:00:00.000
"""
__author__ = 'GreyMorph developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2026 by the GreyMorph developers'

import time


class Timer(object):
    """Wall clock timer.

    Arguments
    ---------
    head : str or None
        Prefix of the printed timing strings.

    Note
    ----
    Used as a context manager the timer prints the elapsed time on exit.
    """

    def __init__(self, head=None):
        self.head = head
        self.start()

    def start(self):
        self.time = time.perf_counter()

    reset = start

    def elapsed_time(self, head=None, as_string=True):
        """Elapsed time since the start.

        Arguments
        ---------
        head : str or None
            Appended to the timer head in the timing string.
        as_string : bool
            If False, return the seconds as float.

        Returns
        -------
        time : str or float
            The elapsed time.
        """
        seconds = time.perf_counter() - self.time
        if not as_string:
            return seconds

        head = ' '.join(h for h in (self.head, head) if h)
        if head:
            return '%s: elapsed time: %s' % (head, format_time(seconds))
        return 'Elapsed time: %s' % format_time(seconds)

    def print_elapsed_time(self, head=None, reset=False):
        """Print the elapsed time, optionally restarting the timer."""
        print(self.elapsed_time(head=head), flush=True)
        if reset:
            self.reset()

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *args):
        self.print_elapsed_time()
        return False

    def __repr__(self):
        return self.elapsed_time()


def format_time(seconds):
    """Format seconds as 'hours:minutes:seconds.milliseconds'."""
    minutes, seconds = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    return '%d:%02d:%06.3f' % (hours, minutes, seconds)
