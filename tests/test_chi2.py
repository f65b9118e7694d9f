# test_chi2.py - unit tests for the osbclassifier.chi2 module
#
# Copyright (C) 2002-2013 Python Software Foundation; All Rights Reserved
# Copyright 2014 Jeffrey Finkelstein.
#
# This file is part of osbclassifier, which is licensed under the Python
# Software Foundation License; for more information, see LICENSE.txt.
import math

from osbclassifier.chi2 import combine
from osbclassifier.chi2 import finalize
from osbclassifier.chi2 import fisher_confidences
from osbclassifier.chi2 import inv_chi_square
from osbclassifier.chi2 import naive_confidences


def test_inv_chi_square_zero():
    for freedom in (1, 2, 10, 150):
        assert inv_chi_square(0.0, freedom) == 1.0


def test_inv_chi_square_one_degree():
    assert inv_chi_square(-2.5, 1) == math.exp(-2.5)


def test_inv_chi_square_known_value():
    # P(chisq >= 2) with 4 degrees of freedom is e**-1 * (1 + 1).
    assert abs(inv_chi_square(-1.0, 2) - 2 * math.exp(-1)) < 1e-15


def test_inv_chi_square_monotonic():
    for freedom in (1, 3, 5):
        values = [inv_chi_square(-x, freedom)
                  for x in (0.5, 1, 5, 10, 50, 250)]
        assert all(0.0 <= v <= 1.0 for v in values)
        assert values == sorted(values, reverse=True)


def test_inv_chi_square_never_above_one():
    # Small value with many degrees of freedom accumulates roundoff.
    assert inv_chi_square(-50.0, 150) <= 1.0
    assert inv_chi_square(-0.01, 1000) <= 1.0


def test_inv_chi_square_overflow():
    assert inv_chi_square(1000.0, 3) == 1.0
    assert inv_chi_square(math.inf, 3) == 1.0
    assert inv_chi_square(-1000.0, 3) == 0.0


def test_fisher_pairing():
    h, s = fisher_confidences(-0.1, -5.0, 1)
    assert h == 1 - math.exp(-0.1)
    assert s == 1 - math.exp(-5.0)
    assert s > h


def test_naive_confidences():
    h, s = naive_confidences(-400.0, -10.0)
    assert h == 1.0
    assert s == 0.0
    h, s = naive_confidences(-10.0, -400.0)
    assert h == 0.0
    assert s == 1.0
    h, s = naive_confidences(-301.0, -300.0)
    assert 0.0 < h < 1.0
    assert abs(h + s - 1.0) < 1e-15


def test_naive_confidences_infinite():
    h, s = naive_confidences(-math.inf, -3.0)
    assert (h, s) == (1.0, 0.0)
    h, s = naive_confidences(-3.0, -math.inf)
    assert (h, s) == (0.0, 1.0)


def test_combine_branches():
    assert combine(-1.0, -2.0, 2) == fisher_confidences(-1.0, -2.0, 2)
    assert combine(-300.0, -1.0, 5) == naive_confidences(-300.0, -1.0)
    assert combine(-1.0, -300.0, 5) == naive_confidences(-1.0, -300.0)
    assert combine(-299.9, -299.9, 5) == fisher_confidences(-299.9, -299.9, 5)


def test_finalize():
    assert abs(finalize(0.1, 0.9) - 0.9) < 1e-15
    assert finalize(0.9, 0.1) == (0.1 + 1 - 0.9) / 2
    assert finalize(0.5, 0.5) is None
    assert finalize(0.45, 0.5) is None


def test_finalize_non_finite():
    assert finalize(0.3, math.nan) == 1.0
    assert finalize(0.3, math.inf) == 1.0
    assert finalize(math.nan, 0.3) == 0.0
    assert finalize(math.nan, math.nan) is None
    assert finalize(math.inf, -math.inf) is None
