# -*- mode: python; coding: utf-8 -*-
# Copyright 2015 Peter Williams <peter@newton.cx> and collaborators.
# Licensed under the MIT license.

"""Interval arithmetic.

An :class:`Interval` is a closed range of real numbers ``[a, b]``, or the
special "empty" interval, which is what you get when you ask for something
that has no sensible answer: the square root of an interval reaching below
zero, division by an interval that straddles zero, and so on. Once a
computation produces the empty interval, every further operation on it
produces the empty interval too, so you only need to check at the end.

Endpoints are computed in plain floating point, without directed rounding,
so results are not guaranteed enclosures at the level of the last bit.

As with uncertain quantities, each occurrence of an interval in an expression
is treated independently. If a variable appears more than once the result can
be wider than the true range of the expression (the "dependency problem").

"""

__all__ = '''
Interval
IntervalFunctionLibrary
IntervalPowFunctionLibrary
interval_function_library
'''.split ()

import locale, logging, math
from functools import partialmethod
import numpy as np

from .mathlib import CoercingFunctionLibrary, MathlibDelegatingObject, ValueFunctionLibrary, real_types

_log = logging.getLogger (__name__)

general_precision = 15

empty_text = '<no interval>'


class Interval (MathlibDelegatingObject):
    """The closed interval between *a* and *b*, in either order. If *b* is not
    given, the interval is the single point *a*. Use :meth:`empty` to get the
    empty interval, whose endpoints are None.

    """
    __slots__ = ('_a', '_b')

    def __init__ (self, a, b=None):
        a = float (a)
        b = a if b is None else float (b)

        if a > b:
            a, b = b, a

        # Adding zero turns -0.0 into 0.0, so that the reciprocal of an
        # endpoint at zero is always +inf before any sign correction.
        self._a = a + 0.
        self._b = b + 0.


    @classmethod
    def empty (cls):
        rv = cls.__new__ (cls)
        rv._a = None
        rv._b = None
        return rv


    @classmethod
    def from_other (cls, v):
        if isinstance (v, cls):
            return v
        if isinstance (v, real_types):
            return cls (v)
        raise ValueError ('do not know how to handle operand %r' % (v,))


    @property
    def lower (self):
        return self._a

    @property
    def upper (self):
        return self._b

    @property
    def is_nonempty (self):
        return self._a is not None

    @property
    def zero_is_interior (self):
        """Whether zero lies strictly inside the interval; endpoints don't count.

        """
        return self._a is not None and self._a < 0 and self._b > 0


    def __eq__ (self, other):
        if not isinstance (other, Interval):
            return NotImplemented
        return self._a == other._a and self._b == other._b

    def __ne__ (self, other):
        if not isinstance (other, Interval):
            return NotImplemented
        return not (self._a == other._a and self._b == other._b)

    def __hash__ (self):
        return hash ((self._a, self._b))


    # Stringification

    def __format__ (self, spec):
        """An empty *spec*, or "G", gives general number formatting following the
        current locale. Anything else is a printf-style conversion without the
        leading "%", such as ".2f" or ".3e", applied to each endpoint. Both
        forms use the current locale's decimal point.

        """
        if self._a is None:
            return empty_text

        if not spec or spec.strip () == 'G':
            a = locale.format_string ('%%.%dg' % general_precision, self._a)
            b = locale.format_string ('%%.%dg' % general_precision, self._b)
        else:
            a = locale.format_string ('%' + spec.strip (), self._a)
            b = locale.format_string ('%' + spec.strip (), self._b)

        return '[%s , %s]' % (a, b)

    def format (self, spec='G'):
        return self.__format__ (spec)

    def __str__ (self):
        return self.__format__ ('G')

    def __repr__ (self):
        return str (self)




def _product_bounds (a1, b1, a2, b2):
    # 0 * inf shows up when dividing by an interval with a zero endpoint; those
    # products don't bound anything.
    products = [p for p in (a1 * a2, a1 * b2, b1 * a2, b1 * b2) if not math.isnan (p)]
    if not len (products):
        return np.nan, np.nan
    return min (products), max (products)


def _reciprocal_bounds (a, b):
    with np.errstate (all='ignore'):
        lo = float (np.divide (1., b))
        hi = float (np.divide (1., a))

    if lo > hi:
        lo, hi = hi, lo

    if lo < 0 and math.isinf (hi):
        # We divided by an exact zero endpoint of a nonpositive interval; the
        # infinity we want is the negative one.
        hi = -np.inf

    return lo, hi


def _evaluate (func, *args):
    with np.errstate (all='ignore'):
        return float (func (*args))


def _log_in_base (v, lnb):
    return np.log (np.float64 (v)) / lnb


class IntervalFunctionLibrary (ValueFunctionLibrary):
    value_type = Interval

    # The actual core math functions

    def add (self, x, y):
        if not (x.is_nonempty and y.is_nonempty):
            return Interval.empty ()
        return Interval (x.lower + y.lower, x.upper + y.upper)


    def multiply (self, x, y):
        if not (x.is_nonempty and y.is_nonempty):
            return Interval.empty ()
        return Interval (*_product_bounds (x.lower, x.upper, y.lower, y.upper))


    def negative (self, x):
        if not x.is_nonempty:
            return x
        return Interval (-x.upper, -x.lower)


    def reciprocal (self, x):
        if not x.is_nonempty:
            return x
        if x.zero_is_interior:
            _log.debug ('reciprocal of %s, which straddles zero; returning the empty interval', x)
            return Interval.empty ()
        return Interval (*_reciprocal_bounds (x.lower, x.upper))


    def _nonnegative_monotonic (self, name, func, x):
        # All of these functions are monotonically increasing where they are
        # defined, so the endpoints map onto the endpoints.
        if not x.is_nonempty:
            return x
        if x.lower < 0:
            _log.debug ('%s of %s is outside the domain; returning the empty interval', name, x)
            return Interval.empty ()
        return Interval (_evaluate (func, x.lower), _evaluate (func, x.upper))

    exp = partialmethod (_nonnegative_monotonic, 'exp', np.exp)
    log = partialmethod (_nonnegative_monotonic, 'log', np.log)
    log10 = partialmethod (_nonnegative_monotonic, 'log10', np.log10)
    sqrt = partialmethod (_nonnegative_monotonic, 'sqrt', np.sqrt)


class IntervalPowFunctionLibrary (CoercingFunctionLibrary):
    def power (self, x, y):
        if isinstance (x, real_types):
            # The __rpow__ case: an exact base raised to an interval.
            if not y.is_nonempty:
                return y
            if y.lower < 0:
                _log.debug ('%r ** %s has a negative exponent; returning the empty interval', x, y)
                return Interval.empty ()
            return Interval (_evaluate (np.power, np.float64 (x), y.lower),
                             _evaluate (np.power, np.float64 (x), y.upper))

        if not isinstance (y, real_types) or not float (y).is_integer ():
            raise ValueError ('intervals can only be raised to exact integer powers')

        p = int (y)

        if not x.is_nonempty:
            return x

        if p == 0:
            return Interval (1.)

        if p < 0:
            if x.zero_is_interior:
                _log.debug ('%s ** %d straddles zero; returning the empty interval', x, p)
                return Interval.empty ()
            t = self.power (x, -p)
            return Interval (_evaluate (np.divide, 1., t.upper),
                             _evaluate (np.divide, 1., t.lower))

        lo = _evaluate (np.power, np.float64 (x.lower), p)
        hi = _evaluate (np.power, np.float64 (x.upper), p)

        if p % 2 == 0 and x.zero_is_interior:
            # The minimum is attained inside the interval, not at an endpoint.
            return Interval (0., max (lo, hi))
        return Interval (lo, hi)


    def logb (self, x, base):
        """The logarithm of *x* in the exact base *base*, which must be larger than
        one.

        """
        if not isinstance (base, real_types):
            raise ValueError ('logarithm bases must be exact values')

        x = self.sub_library.coerce_one (x)

        if not x.is_nonempty:
            return x
        if x.lower < 0 or base <= 1:
            _log.debug ('log base %r of %s is outside the domain; returning the empty interval',
                        base, x)
            return Interval.empty ()

        lnb = np.log (np.float64 (base))
        return Interval (_evaluate (_log_in_base, x.lower, lnb),
                         _evaluate (_log_in_base, x.upper, lnb))


interval_function_library = IntervalPowFunctionLibrary (IntervalFunctionLibrary ())
Interval._gk_mathlib_library_ = interval_function_library
