# basic.py - a Bayesian classifier for feature-weighted token streams
#
# Copyright (C) 2002-2013 Python Software Foundation; All Rights Reserved
# Copyright 2014 Jeffrey Finkelstein.
#
# This file is part of osbclassifier, which is licensed under the Python
# Software Foundation License; for more information, see LICENSE.txt.
"""An implementation of a Bayes-like spam classifier over weighted tokens.

Each token arrives with its feature index (the shape of the token: a plain
word, or a sparse bigram of a given span) and the number of times that exact
token has been seen in trained spam and in trained ham.  The counts come from
some external store; this module never trains, stores or tokenizes anything.

For every token a spam probability is estimated from the counts, then
pulled toward 0.5 using Gary Robinson's Bayesian adjustment, with a strength
that depends on how often the token was seen and on how specific its shape
is.  The logarithms of the adjusted probabilities are summed and handed to
the chi-squared combining in :mod:`osbclassifier.chi2`.

"""
import logging
import math

from blinker import signal

from osbclassifier.chi2 import combine
from osbclassifier.chi2 import finalize
from osbclassifier.classifiers.constants import FEATURE_WEIGHTS
from osbclassifier.classifiers.constants import MIN_LEARNS
from osbclassifier.classifiers.constants import MIN_PROB_STRENGTH
from osbclassifier.classifiers.constants import MIN_TOKEN_HITS
from osbclassifier.classifiers.constants import MIN_TOKENS
from osbclassifier.classifiers.constants import MIN_TOKENS_TOLERANCE
from osbclassifier.classifiers.constants import UNKNOWN_WORD_PROB

#: A signal that is emitted every time a classifier scores a message.
#:
#: Subscribers to this signal receive the classifier object that emitted the
#: signal, along with a ``probability`` keyword argument, whose value is the
#: spam probability of the message, or ``None`` if no decision was made.
message_classified = signal('message-classified')


def prob_combine(prob, count, weight, assumed=UNKNOWN_WORD_PROB):
    """Robinson's Bayesian adjustment of `prob` toward `assumed`.

    ::

                weight*assumed + count*prob
        f(w) = -----------------------------
                      weight + count

    It moves `prob` a fraction of the distance toward `assumed`, and less so
    the larger `count` is or the smaller `weight` is.

    """
    return (weight * assumed + count * prob) / (weight + count)


def feature_weight(idx):
    """Returns the confidence multiplier for tokens of shape `idx`.

    An index outside the feature table means the tokenizer is broken, so
    :exc:`IndexError` is raised instead of guessing a weight.  Negative
    indices are refused too.

    """
    if not 0 <= idx < len(FEATURE_WEIGHTS):
        raise IndexError('feature index {} out of range [0, {}]'
                         .format(idx, len(FEATURE_WEIGHTS) - 1))
    return FEATURE_WEIGHTS[idx]


def _ln(x):
    # A fully shrunk probability of exactly 0.0 contributes -inf, which sends
    # the combiner down the naive branch.
    return math.log(x) if x > 0 else -math.inf


class Weights(object):
    """Represents the number of occurrences of a token in spam and in ham.

    ``Weights(spam, ham)`` also unpacks like the tuple ``(spam, ham)``.

    .. note::

       This is a tiny object.  Use of ``__slots__`` is essential to conserve
       memory.

    """

    __slots__ = 'spam', 'ham'

    def __init__(self, spam=0, ham=0):
        self.__setstate__((spam, ham))

    def __repr__(self):
        return 'Weights{!r}'.format(self.__getstate__())

    def __eq__(self, other):
        if not isinstance(other, Weights):
            return NotImplemented
        return self.__getstate__() == other.__getstate__()

    def __hash__(self):
        return hash(self.__getstate__())

    def __iter__(self):
        return iter(self.__getstate__())

    def __getstate__(self):
        return self.spam, self.ham

    def __setstate__(self, t):
        self.spam, self.ham = t

    @property
    def total(self):
        return self.spam + self.ham


class Token(object):
    """A token's feature index together with its :class:`Weights`.

    `idx` must be a valid index into
    :const:`~osbclassifier.classifiers.constants.FEATURE_WEIGHTS`.  `weights`
    may be a :class:`Weights` or a ``(spam, ham)`` pair.  Like
    :class:`Weights`, a token unpacks as ``idx, weights = token``, and a plain
    ``(idx, (spam, ham))`` tuple can be used wherever a token is expected.

    """

    __slots__ = 'idx', 'weights'

    def __init__(self, idx, weights):
        if not isinstance(weights, Weights):
            weights = Weights(*weights)
        self.idx = idx
        self.weights = weights

    def __repr__(self):
        return 'Token({!r}, {!r})'.format(self.idx, self.weights)

    def __eq__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return (self.idx, self.weights) == (other.idx, other.weights)

    def __hash__(self):
        return hash((self.idx, self.weights))

    def __iter__(self):
        return iter((self.idx, self.weights))


class ClassifierConfig(object):
    """The thresholds that decide whether a message may be classified.

    `min_learns` is the number of spam messages *and* of ham messages that
    must have been trained before anything is classified; 0 disables the
    check.  `min_token_hits` is the smallest combined spam and ham count a
    token needs in order to be looked at.  `min_prob_strength` is how far from
    0.5 a token's adjusted probability must be to count as evidence.
    `min_tokens` is the nominal number of informative tokens a message needs;
    only a tenth of it is enforced.

    All values must be non-negative, and `min_prob_strength` must be less
    than 0.5, otherwise :exc:`ValueError` is raised.  Instances cannot be
    modified once created.

    """

    __slots__ = ('min_learns', 'min_token_hits', 'min_prob_strength',
                 'min_tokens')

    def __init__(self, min_learns=MIN_LEARNS, min_token_hits=MIN_TOKEN_HITS,
                 min_prob_strength=MIN_PROB_STRENGTH, min_tokens=MIN_TOKENS):
        values = dict(min_learns=min_learns, min_token_hits=min_token_hits,
                      min_prob_strength=min_prob_strength,
                      min_tokens=min_tokens)
        for name, value in values.items():
            if value < 0:
                raise ValueError('{} must be non-negative, not {!r}'
                                 .format(name, value))
        if min_prob_strength >= 0.5:
            raise ValueError('min_prob_strength must be less than 0.5, not'
                             ' {!r}'.format(min_prob_strength))
        for name, value in values.items():
            object.__setattr__(self, name, value)

    def __setattr__(self, name, value):
        raise AttributeError('{} is immutable'.format(type(self).__name__))

    def __delattr__(self, name):
        raise AttributeError('{} is immutable'.format(type(self).__name__))

    def __getstate__(self):
        return (self.min_learns, self.min_token_hits, self.min_prob_strength,
                self.min_tokens)

    def __reduce__(self):
        return type(self), self.__getstate__()

    def __repr__(self):
        return ('ClassifierConfig(min_learns={!r}, min_token_hits={!r},'
                ' min_prob_strength={!r}, min_tokens={!r})'
                .format(*self.__getstate__()))

    def __eq__(self, other):
        if not isinstance(other, ClassifierConfig):
            return NotImplemented
        return self.__getstate__() == other.__getstate__()

    def __hash__(self):
        return hash(self.__getstate__())

    @property
    def required_tokens(self):
        """The number of informative tokens actually required."""
        return int(self.min_tokens * MIN_TOKENS_TOLERANCE)


class Classifier:
    """Scores streams of :class:`Token` objects.

    The classifier holds nothing but its :class:`ClassifierConfig`; the token
    counts and the number of trained messages are supplied on every call.
    Since nothing is modified while classifying, one instance can be shared
    between threads.

    If `config` is not given, one is built from `options`, which are the
    keyword arguments accepted by :class:`ClassifierConfig`.

    """

    def __init__(self, config=None, **options):
        if config is None:
            config = ClassifierConfig(**options)
        elif options:
            raise TypeError('cannot give both a config and options')
        self.config = config

    def probability(self, weights, idx, ham_learns, spam_learns):
        """Returns the adjusted probability that a message containing a token
        is spam.

        `weights` is the :class:`Weights` (or ``(spam, ham)`` pair) of a token
        whose feature index is `idx`.  `ham_learns` and `spam_learns` are the
        numbers of trained ham and spam messages.  A token never seen at all
        has probability 0.5.

        """
        spam, ham = weights
        fw = feature_weight(idx)
        spam_prob, _ = self._raw_probabilities(spam, ham, ham_learns,
                                               spam_learns)
        if spam_prob is None:
            return UNKNOWN_WORD_PROB
        total = spam + ham
        w = (fw * total) / (1 + fw * total)
        return prob_combine(spam_prob, total, w)

    def classify(self, tokens, ham_learns, spam_learns, evidence=False,
                 emit_signal=True):
        """Returns the probability that the message made of `tokens` is spam,
        or ``None`` if no confident decision can be made.

        `tokens` is an iterable of :class:`Token` objects (or ``(idx, (spam,
        ham))`` tuples).  It is consumed exactly once, in order, and never
        stored, so a generator is fine.

        `ham_learns` and `spam_learns` are the total numbers of ham and spam
        messages that the token counts were trained on.

        If `evidence` is ``True``, the return value is a pair in which the
        first element is the probability as described above and the second
        element is a list of ``(token, probability)`` pairs for each token
        that counted as evidence, sorted by probability.  If the statistical
        test was run, the list starts with the ``'*H*'`` and ``'*S*'``
        entries.

        If `emit_signal` is ``True``, the :data:`message_classified` signal is
        emitted with the probability.

        """
        prob, clues = self._classify(tokens, ham_learns, spam_learns, evidence)
        if emit_signal:
            message_classified.send(self, probability=prob)
        if evidence:
            return prob, clues
        return prob

    # SpamBayes calls it this.
    spamprob = classify

    def _classify(self, tokens, ham_learns, spam_learns, evidence=False):
        config = self.config
        clues = []
        if config.min_learns > 0 and (spam_learns < config.min_learns
                                      or ham_learns < config.min_learns):
            logging.debug('not classifying: trained on %d spam and %d ham,'
                          ' need %d of each', spam_learns, ham_learns,
                          config.min_learns)
            return None, clues

        processed = 0
        spam_sum = 0.0
        ham_sum = 0.0
        low = UNKNOWN_WORD_PROB - config.min_prob_strength
        high = UNKNOWN_WORD_PROB + config.min_prob_strength

        for token in tokens:
            idx, (spam, ham) = token
            total = spam + ham
            if total < config.min_token_hits:
                continue
            fw = feature_weight(idx)
            spam_prob, ham_prob = self._raw_probabilities(spam, ham,
                                                          ham_learns,
                                                          spam_learns)
            if spam_prob is None:
                continue

            w = (fw * total) / (1 + fw * total)
            bayes_spam_prob = prob_combine(spam_prob, total, w)
            if (UNKNOWN_WORD_PROB < bayes_spam_prob < high
                    or low < bayes_spam_prob < UNKNOWN_WORD_PROB):
                continue

            bayes_ham_prob = prob_combine(ham_prob, total, w)
            spam_sum += _ln(bayes_spam_prob)
            ham_sum += _ln(bayes_ham_prob)
            processed += 1
            if evidence:
                clues.append((token, bayes_spam_prob))

        clues.sort(key=lambda x: x[1])
        if processed == 0 or (config.min_tokens > 0
                              and processed < config.required_tokens):
            logging.debug('not classifying: only %d informative tokens',
                          processed)
            return None, clues

        h, s = combine(spam_sum, ham_sum, processed)
        if evidence:
            clues.insert(0, ('*S*', s))
            clues.insert(0, ('*H*', h))
        return finalize(h, s), clues

    @staticmethod
    def _raw_probabilities(spam, ham, ham_learns, spam_learns):
        """Returns the unadjusted ``(spam_prob, ham_prob)`` for the counts, or
        ``(None, None)`` if the token was never seen at all.

        """
        spam_freq = spam / max(1, spam_learns)
        ham_freq = ham / max(1, ham_learns)
        if spam_freq + ham_freq == 0:
            return None, None
        return (spam_freq / (spam_freq + ham_freq),
                ham_freq / (spam_freq + ham_freq))
