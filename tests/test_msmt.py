# -*- mode: python; coding: utf-8 -*-
# Copyright 2016 Peter Williams <peter@newton.cx> and collaborators.
# Licensed under the MIT License.

"""Tests for gumkit.msmt."""

import locale, warnings
import numpy as np
from numpy import testing as nt
from gumkit import mathlib as ml
from gumkit import msmt
from gumkit.msmt import Quantity, en, is_equivalent, is_zero


def test_construction ():
    q = Quantity (1.5, 0.25)
    assert q.x == 1.5
    assert q.u == 0.25
    assert q.n is None

    assert Quantity (1.5, -0.25).u == 0.

    q = Quantity (7)
    assert (q.x, q.u) == (7., 0.)

    q = Quantity ()
    assert (q.x, q.u) == (0., 0.)

    q = Quantity (np.nan, np.nan)
    assert np.isnan (q.x)
    assert np.isnan (q.u)


def test_immutable ():
    q = Quantity (1., 2.)
    nt.assert_raises (AttributeError, lambda: setattr (q, 'x', 3.))
    nt.assert_raises (AttributeError, lambda: setattr (q, 'u', 3.))
    nt.assert_raises (AttributeError, lambda: setattr (q, 'extra', 3.))


def test_from_observations ():
    q = Quantity.from_observations ([1., 2., 3., 4.])
    assert q.n == 4
    nt.assert_almost_equal (q.x, 2.5)
    nt.assert_almost_equal (q.u, np.sqrt (5. / 3) / 2)

    q = Quantity.from_observations (np.array ([3.]))
    assert q.n == 1
    assert (q.x, q.u) == (3., 0.)

    q = Quantity.from_observations ([])
    assert q.n == 0
    assert (q.x, q.u) == (0., 0.)

    nt.assert_raises (ValueError, lambda: Quantity.from_observations (['a', 'b']))


def test_from_distribution ():
    q = Quantity.from_distribution (1., 3., 'R')
    nt.assert_almost_equal (q.x, 2.)
    nt.assert_almost_equal (q.u, 2. / np.sqrt (12.))

    # endpoint order and tag case don't matter
    q = Quantity.from_distribution (3., 1., ' r ')
    nt.assert_almost_equal (q.u, 2. / np.sqrt (12.))

    q = Quantity.from_distribution (1., 3., 'U')
    nt.assert_almost_equal (q.x, 2.)
    nt.assert_almost_equal (q.u, 2. / np.sqrt (8.))

    q = Quantity.from_distribution (5., 0.1, 'N')
    assert (q.x, q.u) == (5., 0.1)

    assert Quantity.from_distribution (5., -0.1, 'N').u == 0.

    q = Quantity.from_distribution (1., 3., 'T')
    assert (q.x, q.u) == (0., 0.)


def test_parse ():
    q = Quantity.parse ('1.5pm0.25')
    assert (q.x, q.u) == (1.5, 0.25)

    q = Quantity.parse ('1.5±0.25')
    assert (q.x, q.u) == (1.5, 0.25)

    q = Quantity.parse ('2')
    assert (q.x, q.u) == (2., 0.)

    assert Quantity.parse ('2pm-1').u == 0.
    nt.assert_raises (ValueError, lambda: Quantity.parse ('bogus'))


def test_add_subtract ():
    a = Quantity (3., 0.3)
    b = Quantity (1., 0.4)
    s = a + b
    d = a - b

    nt.assert_almost_equal (s.x, 4.)
    nt.assert_almost_equal (d.x, 2.)
    nt.assert_almost_equal (s.u, 0.5)
    assert s.u == d.u


def test_multiply_divide ():
    a = Quantity (3., 0.3)
    b = Quantity (2., 0.4)

    p = a * b
    nt.assert_almost_equal (p.x, 6.)
    nt.assert_almost_equal (p.u, np.sqrt (0.6**2 + 1.2**2))

    q = a / b
    nt.assert_almost_equal (q.x, 1.5)
    nt.assert_almost_equal (q.u, np.sqrt (0.15**2 + 0.3**2))

    # The value survives a round trip; the uncertainty does not, since the
    # two uses of `b` are treated as independent.
    r = (a * b) / b
    nt.assert_almost_equal (r.x, a.x)
    assert r.u > a.u


def test_divide_by_zero ():
    with warnings.catch_warnings ():
        warnings.simplefilter ('error')

        q = Quantity (1., 0.1) / Quantity (0., 0.1)
        assert np.isinf (q.x)
        assert np.isinf (q.u)

        q = Quantity (0.) / Quantity (0.)
        assert np.isnan (q.x)

        # NaN keeps flowing
        q = q + Quantity (1., 1.)
        assert np.isnan (q.x)


def test_mixed_operands ():
    q = Quantity (2., 0.1) + 1
    nt.assert_almost_equal (q.x, 3.)
    nt.assert_almost_equal (q.u, 0.1)

    q = 1 - Quantity (2., 0.1)
    nt.assert_almost_equal (q.x, -1.)
    nt.assert_almost_equal (q.u, 0.1)

    q = 6 / Quantity (2., 0.1)
    nt.assert_almost_equal (q.x, 3.)
    nt.assert_almost_equal (q.u, 0.15)

    q = -Quantity (2., 0.1)
    assert (q.x, q.u) == (-2., 0.1)


def test_functions ():
    q = ml.sqrt (Quantity (4., 0.4))
    nt.assert_almost_equal (q.x, 2.)
    nt.assert_almost_equal (q.u, 0.1)

    q = ml.exp (Quantity (0., 0.1))
    nt.assert_almost_equal (q.x, 1.)
    nt.assert_almost_equal (q.u, 0.1)

    q = ml.log (Quantity (np.e, 0.1))
    nt.assert_almost_equal (q.x, 1.)
    nt.assert_almost_equal (q.u, 0.1 / np.e)

    q = ml.log10 (Quantity (100., 1.))
    nt.assert_almost_equal (q.x, 2.)
    nt.assert_almost_equal (q.u, 1. / (100 * np.log (10)))

    q = ml.logb (Quantity (8., 0.8), 2)
    nt.assert_almost_equal (q.x, 3.)
    nt.assert_almost_equal (q.u, 0.8 / (8 * np.log (2)))

    # exact inputs stay exact
    assert ml.sqrt (Quantity (0.)).u == 0.

    with warnings.catch_warnings ():
        warnings.simplefilter ('error')
        q = ml.sqrt (Quantity (-1., 0.1))
        assert np.isnan (q.x)


def test_power ():
    q = Quantity (3., 0.1) ** 2
    nt.assert_almost_equal (q.x, 9.)
    nt.assert_almost_equal (q.u, 0.6)

    q = Quantity (3., 0.1) ** -1
    nt.assert_almost_equal (q.x, 1. / 3)
    nt.assert_almost_equal (q.u, 0.1 / 9)

    q = Quantity (3., 0.1) ** 0
    assert (q.x, q.u) == (1., 0.)

    q = 2 ** Quantity (3., 0.1)
    nt.assert_almost_equal (q.x, 8.)
    nt.assert_almost_equal (q.u, 0.8 * np.log (2))

    nt.assert_raises (ValueError, lambda: Quantity (3., 0.1) ** Quantity (2., 0.1))
    nt.assert_raises (ValueError, lambda: ml.logb (8., Quantity (2., 0.1)))


def test_en ():
    nt.assert_almost_equal (en (Quantity (1., 0.3), Quantity (0., 0.4)), 2.)
    nt.assert_almost_equal (Quantity (0., 0.4).en (Quantity (1., 0.3)), -2.)

    with warnings.catch_warnings ():
        warnings.simplefilter ('error')
        assert np.isinf (en (Quantity (1.), Quantity (0.)))


def test_equivalence_not_transitive ():
    a = Quantity (0., 1.)
    b = Quantity (2., 1.)
    c = Quantity (4., 1.)

    assert is_equivalent (a, b)
    assert is_equivalent (b, a)
    assert is_equivalent (b, c)
    assert not is_equivalent (a, c)

    # reflexive, even with no uncertainty at all
    assert is_equivalent (a, a)
    assert Quantity (3.).is_equivalent (Quantity (3.))

    # the coverage factor is a per-call setting
    assert not a.is_equivalent (b, k=1.)


def test_is_zero ():
    assert is_zero (Quantity (0.1, 0.1))
    assert Quantity (-0.1, 0.1).is_zero ()
    assert not Quantity (1., 0.1).is_zero ()
    assert Quantity (1., 0.1).is_zero (k=20.)
    assert is_zero (Quantity ())


def test_ordering ():
    a = Quantity (1., 0.1)
    b = Quantity (2., 0.1)

    assert a < b
    assert a <= b
    assert b > a
    assert b >= a
    assert not a > b
    assert not a >= b

    assert a < 2
    assert Quantity (3., 0.1) > 1
    assert 3 > a


def test_ordering_trichotomy_break ():
    # These two are equivalent at k = 2, so neither is less than the other,
    # but they're not structurally equal either.
    a = Quantity (1., 0.5)
    b = Quantity (1.5, 0.5)

    assert a.is_equivalent (b)
    assert not a < b
    assert not a > b
    assert not a == b
    assert a <= b
    assert a >= b

    # compare() looks at values only.
    assert a.compare (b) == -1
    assert b.compare (a) == 1
    assert a.compare (Quantity (1., 3.)) == 0
    assert sorted ([b, a], key=float) == [a, b]


def test_equality_and_hashing ():
    assert Quantity (1., 0.1) == Quantity (1., 0.1)
    assert Quantity (1., 0.1) != Quantity (1., 0.2)
    assert len ({Quantity (1., 0.1), Quantity (1., 0.1), Quantity (1., 0.2)}) == 2
    assert Quantity (1., -5.) == Quantity (1.)


def test_narrowing ():
    assert float (Quantity (2.5, 0.1)) == 2.5


def test_formatting ():
    q = Quantity (3.14159, 0.002)

    assert format (q, 'mm.2') == '(3.14 mm ± 0.00 mm)'
    assert q.format ('mm.2') == '(3.14 mm ± 0.00 mm)'
    assert '{:mm.3}'.format (q) == '(3.142 mm ± 0.002 mm)'
    assert format (q, 'G.3') == '(3.142 ± 0.002)'
    assert format (q, '°.1') == '(3.1° ± 0.0°)'
    assert format (q, "''.1") == "(3.1'' ± 0.0'')"

    # general formatting
    assert str (q) == '(3.14159 ± 0.002)'
    assert '{}'.format (q) == '(3.14159 ± 0.002)'
    assert format (q, 'mm') == '(3.14159 mm ± 0.002 mm)'
    assert format (q, 'mm.x') == '(3.14159 mm ± 0.002 mm)'
    assert format (q, 'mm.-2') == '(3.14159 mm ± 0.002 mm)'
    assert format (q, 'a.b.c') == '(3.14159 ± 0.002)'


def test_locale_formatting (monkeypatch):
    conv = dict (locale.localeconv ())
    conv['decimal_point'] = ','
    monkeypatch.setattr (locale, 'localeconv', lambda: conv)

    q = Quantity (1.5, 0.25)
    assert str (q) == '(1,5 ± 0,25)'
    assert format (q, 'mm.2') == '(1,50 mm ± 0,25 mm)'


def test_equality_with_numbers ():
    assert Quantity (3.) == 3
    assert 3 == Quantity (3.)
    assert Quantity (3., 0.1) != 3
    assert not Quantity (3., 0.1) == 3
    assert hash (Quantity (3.)) == hash (3)
    assert {Quantity (3.): 'a'}[3] == 'a'
    assert Quantity (3.) != 'three'


def test_default_coverage_factor_read_at_call_time (monkeypatch):
    a = Quantity (0., 1.)
    b = Quantity (2., 1.)
    assert a.is_equivalent (b)
    assert not a < b

    monkeypatch.setattr (msmt, 'default_coverage_factor', 1.)
    assert not a.is_equivalent (b)
    assert not is_equivalent (a, b)
    assert a < b
    assert not is_zero (Quantity (0.2, 0.1))

    # an explicit k still wins
    assert a.is_equivalent (b, k=2.)


def test_construction_from_quantity_rejected ():
    nt.assert_raises (ValueError, lambda: Quantity (Quantity (1., 0.5)))
    q = Quantity (1., 0.5)
    assert Quantity.from_other (q) is q
