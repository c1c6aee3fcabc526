"""Free variables of λ-terms.

Sets of names are tuples kept in strictly ascending order with no duplicates, so that membership is a binary search,
union is a merge and difference is a filter. Names compare lexicographically, as Python compares str.
"""

from bisect import bisect_left

from workbench.pure.lexical import Abstraction, Application, Error, Variable


def to_set(names):
    """Returns names sorted and deduplicated."""
    return tuple(sorted(set(names)))


def contains(names, name):
    """Whether or not name is in the sorted set names."""
    idx = bisect_left(names, name)
    return idx < len(names) and names[idx] == name


def difference(names, other):
    """Returns the names in names but not in other."""
    return tuple(name for name in names if not contains(other, name))


def union(names, other):
    """Returns the names in either names or other, merging the two sorted sets."""
    result = []
    i = j = 0
    while i < len(names) and j < len(other):
        if names[i] < other[j]:
            result.append(names[i])
            i += 1
        elif other[j] < names[i]:
            result.append(other[j])
            j += 1
        else:
            result.append(names[i])
            i += 1
            j += 1
    return tuple(result) + names[i:] + other[j:]


def free_vars(term):
    """Returns the free variables of term as a sorted set."""
    if isinstance(term, Variable):
        return (term.name,)
    elif isinstance(term, Abstraction):
        return difference(free_vars(term.body), to_set(term.params))
    elif isinstance(term, Application):
        free = free_vars(term.function)
        for arg in term.arguments:
            free = union(free, free_vars(arg))
        return free
    elif isinstance(term, Error):
        raise ValueError(f"'{term}' has no free variables")
    raise TypeError(f"'{term!r}' is not a LambdaTerm")
