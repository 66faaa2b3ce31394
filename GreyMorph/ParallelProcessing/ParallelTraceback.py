# -*- coding: utf-8 -*-
"""
ParallelTraceback
=================

Decorator keeping the traceback of errors raised in worker threads.

Errors raised inside a worker reach the caller through the futures of the
executor, which report the traceback of the caller. The decorator appends
the worker traceback and the failing call to the message of the error.
"""
__author__ = 'GreyMorph developers'
__license__ = 'GPLv3 - GNU General Public License v3 (see LICENSE)'
__copyright__ = 'Copyright © 2026 by the GreyMorph developers'


import functools
import traceback


def describe_call(func, args):
    """Short description of a call, naming the first argument (the region)."""
    if args:
        return '%s(%r, ...)' % (func.__name__, args[0])
    return '%s()' % func.__name__


def parallel_traceback(func):
    """Re-raise errors of func with the worker traceback in their message.

    Arguments
    ---------
    func : function
        The function run by a worker.

    Returns
    -------
    wrapper : function
        The wrapped function. Errors keep their type, errors whose type
        cannot be built from a message are re-raised unchanged.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as error:
            worker_traceback = ''.join(traceback.format_exception(type(error), error, error.__traceback__))
            message = '%s\n\nIn worker call %s:\n%s' % (error, describe_call(func, args), worker_traceback)
            try:
                annotated = type(error)(message)
            except TypeError:
                raise error
            raise annotated from error
    return wrapper
