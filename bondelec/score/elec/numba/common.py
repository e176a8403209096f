import math

import numba
import numpy
import toolz

jit = toolz.curry(numba.jit)(nopython=True, nogil=True)


@jit
def screening_weight(bond_distance, max_link):
    """Interaction multiplier for a pair ``bond_distance`` bonds apart.

    ``bond_distance`` is 0 when there is no bond path of at most ``max_link``.
    """
    if bond_distance == 0:
        return 1.0
    elif bond_distance < max_link:
        return 0.0
    else:
        return 0.5


@jit
def dist(x, y):
    # nested hypot, no squared intermediates to overflow or underflow
    return math.hypot(x[0] - y[0], math.hypot(x[1] - y[1], x[2] - y[2]))


@jit
def lookup_bond_distance(spans, targets, distances, a, b):
    """Bond distance from a to b in a BondDistanceTable layout, 0 if absent."""
    start = spans[a, 0]
    end = spans[a, 1]
    k = start + numpy.searchsorted(targets[start:end], b)
    if k < end and targets[k] == b:
        return distances[k]
    return 0
