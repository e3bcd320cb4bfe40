# -*- mode: python; coding: utf-8 -*-
# Copyright 2016 Peter Williams <peter@newton.cx> and collaborators.
# Licensed under the MIT License.

"""Tests for gumkit.numutil."""

import numpy as np
from numpy import testing as nt
from gumkit import numutil


def test_try_asarray ():
    a = numutil.try_asarray ([1, 2, 3])
    assert a.dtype == np.double
    nt.assert_array_equal (a, [1., 2., 3.])
    nt.assert_array_equal (numutil.try_asarray ([[1, 2], [3, 4]]), [1., 2., 3., 4.])
    assert numutil.try_asarray (['a', 'b']) is None
    assert numutil.try_asarray ([1j]) is None


def test_mean_and_std ():
    nt.assert_almost_equal (numutil.mean ([1., 2., 3., 4.]), 2.5)
    nt.assert_almost_equal (numutil.standard_deviation ([1., 2., 3., 4.]), np.sqrt (5. / 3))
    assert np.isnan (numutil.standard_deviation ([1.]))
    assert np.isnan (numutil.standard_deviation ([]))

    m, s = numutil.mean_and_std (np.array ([2., 4.]))
    nt.assert_almost_equal (m, 3.)
    nt.assert_almost_equal (s, np.sqrt (2.))


def test_span ():
    assert numutil.span ([3., -1., 2.]) == 4.
    assert numutil.span ([5.]) == 0.


def test_bad_input ():
    nt.assert_raises (ValueError, lambda: numutil.mean ([]))
    nt.assert_raises (ValueError, lambda: numutil.span ([]))
    nt.assert_raises (ValueError, lambda: numutil.mean (['x']))
