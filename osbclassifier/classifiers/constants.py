# constants.py - constant variables used in multiple modules
#
# Copyright (C) 2002-2013 Python Software Foundation; All Rights Reserved
# Copyright 2014 Jeffrey Finkelstein.
#
# This file is part of osbclassifier, which is licensed under the Python
# Software Foundation License; for more information, see LICENSE.txt.
HAM_CUTOFF = 0.2
SPAM_CUTOFF = 0.9

#: The confidence multiplier for each token shape, indexed by the feature
#: index carried by the token.  Index 0 is a plain unigram.  Indices 1 through
#: 4 are sparse bigrams whose two words are 1, 2, 3 and 4 positions apart; the
#: closer the words, the more specific the feature and the faster its
#: probability is believed.  The widest spans carry no confidence at all.
#: These were calibrated empirically and must never be changed at runtime.
FEATURE_WEIGHTS = (1.0, 3125.0, 256.0, 27.0, 1.0, 0.0, 0.0, 0.0)

#: The probability a token with no usable evidence is shrunk toward.
UNKNOWN_WORD_PROB = 0.5

#: Do not classify at all until this many spam messages *and* this many ham
#: messages have been trained.  Below that the chi-squared tail estimate is
#: meaningless.  0 disables the check.
MIN_LEARNS = 200

#: Ignore tokens seen fewer than this many times in spam and ham combined.
MIN_TOKEN_HITS = 2

#: When scoring a message, ignore all tokens with abs(prob - 0.5) <
#: min_prob_strength.  Such tokens are hardly evidence either way and only
#: dilute the chi-squared statistic.
MIN_PROB_STRENGTH = 0.05

#: The number of informative tokens a message should have.  Only a tenth of
#: this (see MIN_TOKENS_TOLERANCE) is actually required before a message is
#: classified.  0 disables the check.
MIN_TOKENS = 11

#: The fraction of MIN_TOKENS that must actually be present.
MIN_TOKENS_TOLERANCE = 0.1

#: If either sum of log probabilities is at or below this value, exp() of it
#: is too close to underflow for the chi-squared series to be trusted, and the
#: two sums are compared directly instead.
FISHER_LOG_SUM_FLOOR = -300.0

#: Final probabilities within this distance of 0.5 are reported as "unsure"
#: (``None``) rather than as a weak lean either way.
DECISIVENESS_MARGIN = 0.05

#: For vectors of random, uniformly distributed probabilities, -2*sum(ln(p_i))
#: follows the chi-squared distribution with 2*n degrees of freedom.  This is
#: the "provably most-sensitive" test Gary Robinson's scheme was monotonic with.
#: One systematic benefit is immunity to "cancellation disease": if there are
#: many strong ham *and* spam clues, the result lands near 0.5.  The S and H
#: measures are combined via (S-H+1)/2 instead of via S/(S+H).
