"""Pairwise relation between records.

Two records are related when they have the same arity and at least one
position holds equal, non-empty values after trimming. The relation is
symmetric but not transitive: grouping A with C through a common neighbour B
is the job of the disjoint-set forest, not of this predicate.
"""

from record_grouper.analysis.record import Record


def related(a: Record, b: Record) -> bool:
    """Return True if a and b share a non-empty trimmed value at some position."""
    if a.arity != b.arity:
        return False
    for value_a, value_b in zip(a.fields, b.fields):
        value_a = value_a.strip()
        if value_a and value_a == value_b.strip():
            return True
    return False

