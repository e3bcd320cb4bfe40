# -*- mode: python; coding: utf-8 -*-
# Copyright 2013-2015 Peter Williams <peter@newton.cx> and collaborators.
# Licensed under the MIT license.

"""Math with uncertain measurements.

A :class:`Quantity` is a value with a standard uncertainty attached. Math on
quantities does first-order ("GUM") propagation of uncertainty: each result's
uncertainty is the root-sum-square of the partial-derivative contributions of
its operands.

That scheme assumes every operand is independent of every other, which stops
being true as soon as the same quantity shows up twice in one expression:
``x*y + x`` does not come out with the same uncertainty as ``x*(y + 1)``. We
do not try to track correlations; write your expressions so that each variable
appears once.

Invalid math never raises. Division by a zero value, logarithms of negative
values and the like produce IEEE infinities and NaNs, which then flow through
any further arithmetic.

"""

__all__ = '''
default_coverage_factor
general_precision
angle_units
Quantity
QuantityFunctionLibrary
QuantityPowFunctionLibrary
quantity_function_library
en
is_equivalent
is_zero
'''.split ()

import locale, logging
import numpy as np

from . import numutil
from .mathlib import CoercingFunctionLibrary, MathlibDelegatingObject, ValueFunctionLibrary, real_types

_log = logging.getLogger (__name__)


# Two quantities are "equivalent" if their difference is no bigger than this
# many times the uncertainty of the difference.
default_coverage_factor = 2.

# Number of significant digits used by the general ("G") number format.
general_precision = 15

# Unit symbols that attach directly to a number, without a space.
angle_units = frozenset (('°', '′', '″', "'", "''"))

# Standard uncertainty of a distribution over [a, b] is |a - b| / sqrt(divisor).
_distribution_divisors = {
    'R': 12., # rectangular
    'U': 8., # U-shaped
}


def _clamp_uncertainty (u):
    # NaN compares false and so passes through untouched.
    if u < 0:
        return 0.
    return u


def _propagate (u, derivative):
    """First-order propagation through a one-argument function. An exact input
    stays exact even where the derivative blows up.

    """
    if u == 0:
        return 0.
    return np.abs (derivative) * u




class Quantity (MathlibDelegatingObject):
    """A measured value *x* with standard uncertainty *u*.

    Quantities are immutable; all math on them returns new objects. A negative
    uncertainty is silently clamped to zero. *n* is the number of observations
    that the quantity was computed from when it was built with
    :meth:`from_observations`, and None otherwise. It is informational only.

    The ordering operators consider uncertainties: two quantities that are
    equivalent (see :func:`is_equivalent`) compare as "equal" for ``<=`` and
    ``>=``, and neither is ``<`` or ``>`` the other. This relation is not
    transitive, and so for equivalent quantities ``a < b``, ``a > b`` *and*
    ``a == b`` may all be false at once. ``==`` itself is plain structural
    equality of value and uncertainty, which keeps quantities usable as dict
    keys; a plain number equals the exact quantity with that value.
    Use :meth:`compare` or ``key=float`` to sort.

    """
    __slots__ = ('_x', '_u', '_n')

    def __init__ (self, x=0., u=0.):
        if isinstance (x, Quantity):
            raise ValueError ('cannot build a Quantity from another Quantity %r; '
                              'use Quantity.from_other ()' % (x,))

        self._x = float (x)
        self._u = _clamp_uncertainty (float (u))
        self._n = None


    @classmethod
    def from_other (cls, v):
        """Implicit widening: a plain real number becomes a quantity with zero
        uncertainty.

        """
        if isinstance (v, cls):
            return v
        if isinstance (v, real_types):
            return cls (v)
        raise ValueError ('do not know how to handle operand %r' % (v,))


    @classmethod
    def from_observations (cls, values):
        """The mean of a series of repeated observations, with the standard error
        of the mean as its uncertainty. A single observation gives zero
        uncertainty; an empty series gives a zero quantity.

        """
        a = numutil.try_asarray (values)
        if a is None:
            raise ValueError ('expected a series of real numbers; got %r' % (values,))

        rv = cls ()
        rv._n = a.size

        if a.size:
            rv._x = numutil.mean (a)
            if a.size > 1:
                rv._u = float (numutil.standard_deviation (a) / np.sqrt (a.size))
        return rv


    @classmethod
    def from_distribution (cls, a, b, pdf):
        """Build a quantity from a Type-B description. *pdf* selects the meaning
        of *a* and *b*:

        "R"
          Rectangular distribution between *a* and *b*.
        "N"
          Normal distribution with mean *a* and standard deviation *b*.
        "U"
          U-shaped (arcsine) distribution between *a* and *b*.

        Any other tag gives a zero quantity.

        """
        tag = pdf.strip ().upper ()

        if tag == 'N':
            return cls (a, b)

        divisor = _distribution_divisors.get (tag)
        if divisor is None:
            _log.debug ('unrecognized distribution tag %r; returning a zero quantity', pdf)
            return cls ()

        return cls ((a + b) / 2., abs (a - b) / np.sqrt (divisor))


    @classmethod
    def parse (cls, text):
        """Accepted formats are:

        "{float}"
        "{float}pm{float}"
        "{float}±{float}"

        where {float} stands for a floating-point number.
        """
        pieces = text.replace ('±', 'pm').split ('pm', 1)
        x = float (pieces[0])

        if len (pieces) == 1:
            return cls (x)
        return cls (x, float (pieces[1]))


    # Basic properties

    @property
    def x (self):
        return self._x

    @property
    def u (self):
        return self._u

    @property
    def n (self):
        return self._n

    def __float__ (self):
        # Lossy! The uncertainty is discarded, which is why this only happens
        # when asked for.
        return self._x


    # Comparisons.

    def en (self, other):
        return en (self, other)

    def is_equivalent (self, other, k=None):
        return is_equivalent (self, other, k)

    def is_zero (self, k=None):
        return is_zero (self, k)

    def compare (self, other):
        """Strict ordering by value alone; uncertainties are ignored. Returns -1,
        0, or 1.

        """
        other = Quantity.from_other (other)
        if self._x < other._x:
            return -1
        if self._x == other._x:
            return 0
        return 1

    @classmethod
    def _comparable (cls, other):
        if isinstance (other, cls):
            return other
        if isinstance (other, real_types):
            return cls (other)
        return None

    def __lt__ (self, other):
        other = self._comparable (other)
        if other is None:
            return NotImplemented
        if is_equivalent (self, other):
            return False
        return self._x < other._x

    def __le__ (self, other):
        other = self._comparable (other)
        if other is None:
            return NotImplemented
        if is_equivalent (self, other):
            return True
        return self._x <= other._x

    def __gt__ (self, other):
        other = self._comparable (other)
        if other is None:
            return NotImplemented
        if is_equivalent (self, other):
            return False
        return self._x > other._x

    def __ge__ (self, other):
        other = self._comparable (other)
        if other is None:
            return NotImplemented
        if is_equivalent (self, other):
            return True
        return self._x >= other._x

    def __eq__ (self, other):
        other = self._comparable (other)
        if other is None:
            return NotImplemented
        return self._x == other._x and self._u == other._u

    def __ne__ (self, other):
        other = self._comparable (other)
        if other is None:
            return NotImplemented
        return not (self._x == other._x and self._u == other._u)

    def __hash__ (self):
        # Exact quantities compare equal to plain numbers, so they must hash
        # like them too.
        if self._u == 0:
            return hash (self._x)
        return hash ((self._x, self._u))


    # Stringification

    def __format__ (self, spec):
        """*spec* looks like "{unit}.{precision}". The unit "G" means no unit at all.
        The precision, if given as a non-negative integer, is the number of
        digits after the decimal point; otherwise numbers are formatted with
        :data:`general_precision` significant digits. The current locale's
        decimal point is used.

        """
        unit, precision = _parse_format_spec (spec)
        return '(%s%s ± %s%s)' % (_format_number (self._x, precision), unit,
                                  _format_number (self._u, precision), unit)

    def format (self, spec='G'):
        return self.__format__ (spec)

    def __str__ (self):
        return self.__format__ ('G')

    def __repr__ (self):
        return str (self)


def _format_unit (symbol):
    if symbol == 'G':
        return ''
    if symbol in angle_units:
        return symbol
    return ' ' + symbol


def _format_precision (text):
    text = text.strip ()
    if not text.isdecimal ():
        return None
    return int (text)


def _parse_format_spec (spec):
    tokens = [t for t in (spec or 'G').strip ().split ('.') if len (t)]

    if len (tokens) == 2:
        return _format_unit (tokens[0]), _format_precision (tokens[1])
    if len (tokens) == 1:
        return _format_unit (tokens[0]), None
    return '', None


def _format_number (value, precision):
    if precision is None:
        return locale.format_string ('%%.%dg' % general_precision, value)
    return locale.format_string ('%%.%df' % precision, value)




def en (q1, q2):
    """The normalized error of *q1* and *q2*: their difference divided by the
    uncertainty of the difference.

    """
    delta = Quantity.from_other (q1) - Quantity.from_other (q2)
    with np.errstate (all='ignore'):
        return float (np.float64 (delta.x) / np.float64 (delta.u))


def is_equivalent (q1, q2, k=None):
    """Whether *q1* and *q2* agree within *k* times the uncertainty of their
    difference. This is reflexive and symmetric but *not* transitive. If *k* is
    None, :data:`default_coverage_factor` is used.

    """
    if k is None:
        k = default_coverage_factor

    delta = Quantity.from_other (q1) - Quantity.from_other (q2)
    return abs (delta.x) <= k * delta.u


def is_zero (q, k=None):
    return is_equivalent (q, Quantity (), k)




class QuantityFunctionLibrary (ValueFunctionLibrary):
    value_type = Quantity

    # The actual core math functions

    def add (self, x, y):
        return Quantity (x.x + y.x, np.sqrt (x.u * x.u + y.u * y.u))


    def multiply (self, x, y):
        c1 = x.u * y.x
        c2 = y.u * x.x
        return Quantity (x.x * y.x, np.sqrt (c1 * c1 + c2 * c2))


    def true_divide (self, x, y):
        # Not implemented in terms of reciprocal() so that the value comes out
        # exactly as x1 / x2.
        x1 = np.float64 (x.x)
        x2 = np.float64 (y.x)

        with np.errstate (all='ignore'):
            c1 = np.float64 (x.u) / x2
            c2 = np.float64 (y.u) * x1 / (x2 * x2)
            return Quantity (x1 / x2, np.sqrt (c1 * c1 + c2 * c2))


    def negative (self, x):
        return Quantity (-x.x, x.u)


    def reciprocal (self, x):
        v = np.float64 (x.x)

        with np.errstate (all='ignore'):
            return Quantity (np.divide (1., v), _propagate (x.u, np.divide (1., v * v)))


    def exp (self, x):
        with np.errstate (all='ignore'):
            v = np.exp (x.x)
            return Quantity (v, _propagate (x.u, v))


    def log (self, x):
        with np.errstate (all='ignore'):
            return Quantity (np.log (x.x), _propagate (x.u, np.divide (1., x.x)))


    def log10 (self, x):
        with np.errstate (all='ignore'):
            return Quantity (np.log10 (x.x),
                             _propagate (x.u, np.divide (1., x.x * np.log (10))))


    def sqrt (self, x):
        with np.errstate (all='ignore'):
            v = np.sqrt (x.x)
            return Quantity (v, _propagate (x.u, np.divide (0.5, v)))


class QuantityPowFunctionLibrary (CoercingFunctionLibrary):
    def power (self, x, y):
        if isinstance (x, real_types):
            # This is the __rpow__ case. You might not think that this is
            # common functionality, but it's important for undoing
            # logarithms; i.e. 10**x.
            r = np.float64 (x)

            with np.errstate (all='ignore'):
                v = np.power (r, y.x)
                return Quantity (v, _propagate (y.u, v * np.log (r)))

        if not isinstance (y, real_types):
            raise ValueError ('quantities can only be exponentiated by exact values')

        p = np.float64 (y)
        if p == 0:
            return Quantity (1.)

        with np.errstate (all='ignore'):
            v = np.power (np.float64 (x.x), p)
            return Quantity (v, _propagate (x.u, p * np.power (np.float64 (x.x), p - 1)))


    def logb (self, x, base):
        """The logarithm of *x* in the exact base *base*.

        """
        if not isinstance (base, real_types):
            raise ValueError ('logarithm bases must be exact values')

        x = self.sub_library.coerce_one (x)
        lnb = np.log (np.float64 (base))

        with np.errstate (all='ignore'):
            return Quantity (np.log (x.x) / lnb,
                             _propagate (x.u, np.divide (1., x.x * lnb)))


quantity_function_library = QuantityPowFunctionLibrary (QuantityFunctionLibrary ())
Quantity._gk_mathlib_library_ = quantity_function_library
