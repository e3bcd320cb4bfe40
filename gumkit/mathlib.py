# -*- mode: python; coding: utf-8 -*-
# Copyright 2015 Peter Williams <peter@newton.cx> and collaborators.
# Licensed under the MIT license.

"""Math functions that work on objects of any type

Numpy's ufuncs can't be overridden for arbitrary classes, so we implement a
small dispatch layer instead. Each function in this module looks at its
operands and hands the work to a "function library": plain numbers go to
Numpy, while :class:`~gumkit.msmt.Quantity` and
:class:`~gumkit.interval.Interval` objects carry a library of their own in the
:attr:`_gk_mathlib_library_` attribute.

"""

# __all__ is augmented below:
__all__ = '''
unary_funcs
binary_funcs
MathFunctionLibrary
NumpyFunctionLibrary
numpy_library
numpy_types
real_types
get_library_for
ValueFunctionLibrary
CoercingFunctionLibrary
MathlibDelegatingObject
'''.split ()

import numbers
from functools import partial, partialmethod
import numpy as np


unary_funcs = '''
exp
log
log10
negative
reciprocal
sqrt
'''.split ()

binary_funcs = '''
add
logb
multiply
power
subtract
true_divide
'''.split ()

# These take two operands of "the same kind" and so are allowed to coerce
# their arguments. `power` and `logb` take an exact number as one of their
# arguments and are handled by each library individually.
algebraic_binary_funcs = '''
add
multiply
subtract
true_divide
'''.split ()




class _MathFunctionLibraryBase (object):
    def accepts (self, opname, other):
        return False


def _unimplemented_unary_func (name, x):
    raise NotImplementedError ('math function "%s" not implemented for objects of type "%s"'
                               % (name, x.__class__.__name__))

def _unimplemented_binary_func (name, x, y):
    raise NotImplementedError ('math function "%s" not implemented for objects of type "%s"'
                               % (name, x.__class__.__name__))

def _make_base_library_type ():
    items = {}

    for name in unary_funcs:
        items[name] = partial (_unimplemented_unary_func, name)

    for name in binary_funcs:
        items[name] = partial (_unimplemented_binary_func, name)

    return type ('MathFunctionLibrary', (_MathFunctionLibraryBase,), items)

MathFunctionLibrary = _make_base_library_type ()




numpy_types = (numbers.Number, np.generic, np.ndarray, list, tuple)

# Things that we are willing to silently widen into a zero-width value of
# one of our own types.
real_types = (numbers.Real, np.floating, np.integer)

class _NumpyFunctionLibraryBase (MathFunctionLibrary):
    def accepts (self, opname, other):
        return isinstance (other, numpy_types)


def _numpy_reciprocal (x):
    # np.reciprocal() truncates integers, which we don't want
    return np.divide (1., x)

def _numpy_logb (x, base):
    return np.log (x) / np.log (base)

def _make_numpy_library_type ():
    items = {}

    for name in unary_funcs + binary_funcs:
        impl = getattr (np, name, None)
        if impl is not None:
            items[name] = impl

    items['reciprocal'] = staticmethod (_numpy_reciprocal)
    items['logb'] = staticmethod (_numpy_logb)
    return type ('NumpyFunctionLibrary', (_NumpyFunctionLibraryBase,), items)

NumpyFunctionLibrary = _make_numpy_library_type ()

numpy_library = NumpyFunctionLibrary ()




def get_library_for (x):
    if isinstance (x, numpy_types):
        return numpy_library

    # If it has a _gk_mathlib_library_ property, then, well, good:

    library = getattr (x, '_gk_mathlib_library_', None)
    if library is not None:
        return library

    raise ValueError ('cannot identify math function library for object '
                      '%r of type %s' % (x, x.__class__.__name__))


def _dispatch_unary_function (name, x):
    # Efficiency (?): if it's a standard numpy or builtin type, delegate to
    # that ASAP.

    if isinstance (x, numpy_types):
        return getattr (numpy_library, name) (x)

    # If it has a _gk_mathlib_library_ property, it's telling us how to do
    # math on it.

    library = getattr (x, '_gk_mathlib_library_', None)
    if library is not None:
        return getattr (library, name) (x)

    raise ValueError ('cannot determine how to apply math function "%s" to object '
                      '%r of type %s' % (name, x, x.__class__.__name__))


def _dispatch_binary_function (name, x, y):
    # Efficiency (?): if they're both standard numpy or builtin types,
    # delegate to numpy ASAP.

    if isinstance (x, numpy_types) and isinstance (y, numpy_types):
        return getattr (numpy_library, name) (x, y)

    # If either object has a _gk_mathlib_library_ attribute, it can tell us
    # how to combine the operands.

    library = getattr (x, '_gk_mathlib_library_', None)
    if library is not None and library.accepts (name, y):
        return getattr (library, name) (x, y)

    library = getattr (y, '_gk_mathlib_library_', None)
    if library is not None and library.accepts (name, x):
        return getattr (library, name) (x, y)

    raise ValueError ('cannot determine how to apply math function "%s" to objects '
                      '%r (type %s) and %r (type %s)' % (name, x, x.__class__.__name__,
                                                         y, y.__class__.__name__))


def _create_wrappers (namespace):
    """This function populates the global namespace with functions dispatching the
    unary and binary math functions.

    """
    for name in unary_funcs:
        namespace[name] = partial (_dispatch_unary_function, name)

    for name in binary_funcs:
        namespace[name] = partial (_dispatch_binary_function, name)

_create_wrappers (globals ())
__all__ += unary_funcs
__all__ += binary_funcs




class ValueFunctionLibrary (MathFunctionLibrary):
    """This function library implements as much basic algebra as it can in terms
    of the following fundamental operations:

    - add
    - multiply
    - negative
    - reciprocal

    Subclasses set :attr:`value_type` to the class whose instances they do
    math on, and must be wrapped in a :class:`CoercingFunctionLibrary` so that
    plain numbers get widened before these functions are called.

    """
    value_type = None

    def accepts (self, opname, other):
        return isinstance (other, real_types + (self.value_type,))

    def coerce_one (self, x):
        """Convert an arbitrary numerical-ish object into the right type.

        """
        if isinstance (x, self.value_type):
            return x
        return self.value_type.from_other (x)

    def subtract (self, x, y):
        return self.add (x, self.negative (y))

    def true_divide (self, x, y):
        return self.multiply (x, self.reciprocal (y))


class _CoercingFunctionLibraryBase (MathFunctionLibrary):
    def __init__ (self, sub_library):
        self.sub_library = sub_library

    def accepts (self, opname, other):
        return self.sub_library.accepts (opname, other)

    def _delegate_unary (self, name, x):
        return getattr (self.sub_library, name) (self.sub_library.coerce_one (x))

    def _delegate_binary (self, name, x, y):
        x = self.sub_library.coerce_one (x)
        y = self.sub_library.coerce_one (y)
        return getattr (self.sub_library, name) (x, y)


def _make_coercing_library_type ():
    items = {}

    for name in unary_funcs:
        items[name] = partialmethod (_CoercingFunctionLibraryBase._delegate_unary, name)

    for name in algebraic_binary_funcs:
        items[name] = partialmethod (_CoercingFunctionLibraryBase._delegate_binary, name)

    return type ('CoercingFunctionLibrary', (_CoercingFunctionLibraryBase,), items)

CoercingFunctionLibrary = _make_coercing_library_type ()




class MathlibDelegatingObject (object):
    """Inherit from this class to delegate all arithmetic operators to the mathlib
    dispatch mechanism. You must set the :attr:`_gk_mathlib_library_`
    attribute to an instance of :class:`MathFunctionLibrary`.

    Comparisons are **not** provided here; their meaning differs too much
    between the kinds of values we handle.

    """
    __slots__ = ()

    _gk_mathlib_library_ = None

    # Stop Numpy arrays and scalars from trying to broadcast over us; they
    # return NotImplemented and Python falls back on our reflected methods.
    __array_ufunc__ = None

    def __dispatch_binary (self, name, other):
        return _dispatch_binary_function (name, self, other)

    __add__ = partialmethod (__dispatch_binary, 'add')
    __sub__ = partialmethod (__dispatch_binary, 'subtract')
    __mul__ = partialmethod (__dispatch_binary, 'multiply')
    __truediv__ = partialmethod (__dispatch_binary, 'true_divide')

    def __pow__ (self, other, modulo=None):
        if modulo is not None:
            raise NotImplementedError ()
        return _dispatch_binary_function ('power', self, other)

    def __dispatch_binary_reflected (self, name, other):
        return _dispatch_binary_function (name, other, self)

    __radd__ = partialmethod (__dispatch_binary_reflected, 'add')
    __rsub__ = partialmethod (__dispatch_binary_reflected, 'subtract')
    __rmul__ = partialmethod (__dispatch_binary_reflected, 'multiply')
    __rtruediv__ = partialmethod (__dispatch_binary_reflected, 'true_divide')

    def __rpow__ (self, other, modulo=None):
        if modulo is not None:
            raise NotImplementedError ()
        return _dispatch_binary_function ('power', other, self)

    def __neg__ (self):
        return self._gk_mathlib_library_.negative (self)
