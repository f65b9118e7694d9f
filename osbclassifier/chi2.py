# chi2.py - chi-squared combining of per-token log probabilities
#
# Copyright (C) 2002-2013 Python Software Foundation; All Rights Reserved
# Copyright 2014 Jeffrey Finkelstein.
#
# This file is part of osbclassifier, which is licensed under the Python
# Software Foundation License; for more information, see LICENSE.txt.
"""Functions that turn two sums of log probabilities into one spam score.

Across vectors of length n containing random, uniformly distributed
probabilities, -2*sum(ln(p_i)) follows the chi-squared distribution with 2*n
degrees of freedom.  :func:`inv_chi_square` computes the tail of that
distribution directly from sum(ln(p_i)), which is what the classifier
accumulates.

When either sum is very negative the series becomes unreliable, so
:func:`combine` falls back to :func:`naive_confidences`, which only ever
exponentiates the (non-positive) difference of the two sums.

"""
import logging
import math

from osbclassifier.classifiers.constants import DECISIVENESS_MARGIN
from osbclassifier.classifiers.constants import FISHER_LOG_SUM_FLOOR


def inv_chi_square(value, freedom):
    """Return the probability that chi-squared with ``2 * freedom`` degrees of
    freedom is at least ``-2 * value``.

    `value` is a sum of natural logarithms of probabilities, so it is normally
    not positive.  The result is in the interval [0.0, 1.0]: 1.0 means no
    confidence at all, 0.0 means full confidence.

    """
    try:
        prob = math.exp(value)
    except OverflowError:
        prob = math.inf
    if not math.isfinite(prob):
        # e**x for a huge *negative* x is fine; only a positive x can get
        # here, which is as unconfident as it gets.
        return 0.0 if value < 0 else 1.0

    result = prob
    m = -value
    for i in range(1, freedom):
        prob *= m / i
        result += prob
    # Accumulated roundoff can spill a few ULP above 1.0.
    return min(1.0, result)


def fisher_confidences(spam_sum, ham_sum, freedom):
    """Returns the ``(h, s)`` pair computed by Fisher's method.

    The spam log sum always produces the first value and the ham log sum the
    second; swapping them would invert the classifier.

    """
    h = 1 - inv_chi_square(spam_sum, freedom)
    s = 1 - inv_chi_square(ham_sum, freedom)
    return h, s


def naive_confidences(spam_sum, ham_sum):
    """Returns the ``(h, s)`` pair by comparing the two log sums directly.

    Only the difference of the two sums is exponentiated, and it is always
    the smaller minus the larger, so :func:`math.exp` cannot overflow.

    """
    if spam_sum < ham_sum:
        e = math.exp(spam_sum - ham_sum)
        h = (1 - e) / (1 + e)
        return h, 1 - h
    e = math.exp(ham_sum - spam_sum)
    s = (1 - e) / (1 + e)
    return 1 - s, s


def combine(spam_sum, ham_sum, freedom):
    """Returns the ``(h, s)`` pair for the given log sums.

    `freedom` is the number of tokens that went into each sum.

    """
    if spam_sum > FISHER_LOG_SUM_FLOOR and ham_sum > FISHER_LOG_SUM_FLOOR:
        logging.debug('using inverse chi-square on sums %r and %r (%d tokens)',
                      spam_sum, ham_sum, freedom)
        return fisher_confidences(spam_sum, ham_sum, freedom)
    logging.debug('using naive comparison on sums %r and %r', spam_sum,
                  ham_sum)
    return naive_confidences(spam_sum, ham_sum)


def finalize(h, s):
    """Merges `h` and `s` into a single spam probability.

    Returns ``None`` if the result is within :const:`DECISIVENESS_MARGIN` of
    0.5, that is, if the message cannot be called either way.

    """
    if math.isfinite(h) and math.isfinite(s):
        prob = (s + 1 - h) / 2
    # Something overflowed; whichever side survived wins.
    elif math.isfinite(h):
        prob = 1.0
    elif math.isfinite(s):
        prob = 0.0
    else:
        prob = 0.5

    if abs(prob - 0.5) > DECISIVENESS_MARGIN:
        return prob
    logging.debug('probability %r is too close to 0.5 to decide', prob)
    return None
