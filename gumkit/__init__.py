# -*- mode: python; coding: utf-8 -*-
# Copyright 2015 Peter Williams <peter@newton.cx> and collaborators.
# Licensed under the MIT license.

"""gumkit - numeric values that know how wrong they might be.

Two independent value types live here: :class:`gumkit.msmt.Quantity`, a
measured value with a propagated standard uncertainty, and
:class:`gumkit.interval.Interval`, a closed real interval. Elementary
functions that work on either (and on plain numbers) live in
:mod:`gumkit.mathlib`.

"""

__all__ = '''GumError'''.split ()

import logging

logging.getLogger (__name__).addHandler (logging.NullHandler ())


class GumError (Exception):
    """A generic exception class that may be raised by gumkit code. Arithmetic
    never raises it; invalid results flow forward as NaN or as the empty
    interval instead.

    """
    def __init__ (self, fmt, *args):
        if not len (args):
            self.gummsg = str (fmt)
        else:
            self.gummsg = str (fmt) % args

    def __str__ (self):
        return self.gummsg
