# -*- mode: python; coding: utf-8 -*-
# Copyright 2015 Peter Williams <peter@newton.cx> and collaborators.
# Licensed under the MIT license.

"""Summary statistics of small numeric buffers.

These are the helpers behind :meth:`gumkit.msmt.Quantity.from_observations`.

"""

__all__ = '''
try_asarray
mean
standard_deviation
mean_and_std
span
'''.split ()

import numpy as np


def try_asarray (thing):
    """Return *thing* as a flat floating-point ndarray, or None if it does not
    look like a buffer of real numbers.

    """
    try:
        thing = np.asarray (thing)
    except (TypeError, ValueError):
        return None
    if thing.dtype.kind not in 'bif':
        return None
    return thing.astype (np.double).ravel ()


def _as_buffer (values):
    a = try_asarray (values)
    if a is None:
        raise ValueError ('expected a buffer of real numbers; got %r' % (values,))
    return a


def mean (values):
    a = _as_buffer (values)
    if not a.size:
        raise ValueError ('cannot take the mean of an empty buffer')
    return float (a.mean ())


def standard_deviation (values):
    """The sample standard deviation of *values* (with the n-1 denominator). This
    is NaN for fewer than two values.

    """
    a = _as_buffer (values)
    if a.size < 2:
        return np.nan
    return float (a.std (ddof=1))


def mean_and_std (values):
    return mean (values), standard_deviation (values)


def span (values):
    a = _as_buffer (values)
    if not a.size:
        raise ValueError ('cannot take the span of an empty buffer')
    return float (a.max () - a.min ())
