"""Tests for the persistent set."""

import numpy as np
import pytest
from pyrbmap import OrderingWarning, RBSet, default_compare, reverse
from pyrbmap.tree import validate


class TestRBSet:
    """Test basic set operations."""

    def test_empty(self):
        """Test the empty set."""
        s = RBSet.empty()
        assert s.is_empty()
        assert len(s) == 0
        assert s.min_elt() is None
        assert s.max_elt() is None

    def test_insert_and_member(self):
        """Test adding elements."""
        s = RBSet().insert(3).insert(1).insert(3)
        assert s.member(1)
        assert 3 in s
        assert 2 not in s
        assert s.size == 2
        assert s.elements() == [1, 3]

    def test_values_are_none(self):
        """Test the value slot is unused."""
        s = RBSet.of_iterable([2, 1])
        assert s.root.value is None

    def test_singleton(self):
        """Test a one-element set."""
        assert RBSet.singleton("x").elements() == ["x"]

    def test_remove(self):
        """Test removing elements."""
        s = RBSet.of_iterable(range(10))
        r = s.remove(4)
        assert 4 not in r
        assert 4 in s
        assert s.remove(42) is s

    def test_min_max(self):
        """Test extreme elements."""
        s = RBSet.of_iterable([5, 2, 9])
        assert (s.min_elt(), s.max_elt()) == (2, 9)

    def test_fold_and_iter(self):
        """Test traversal in ascending order."""
        s = RBSet.of_iterable([3, 1, 2])
        assert s.fold(lambda x, acc: acc + [x], []) == [1, 2, 3]
        seen = []
        s.iter(seen.append)
        assert seen == [1, 2, 3]
        assert list(s) == [1, 2, 3]

    def test_predicates(self):
        """Test exists, for_all and filter."""
        s = RBSet.of_iterable(range(20))
        assert s.exists(lambda x: x > 18)
        assert s.for_all(lambda x: x >= 0)
        evens = s.filter(lambda x: x % 2 == 0)
        validate(evens.root)
        assert evens.elements() == list(range(0, 20, 2))

    def test_custom_order(self):
        """Test a set under a reversed comparator."""
        desc = reverse(default_compare)
        s = RBSet(desc)
        for x in [1, 5, 3]:
            s = s.insert(x)
        assert s.elements() == [5, 3, 1]
        assert s.min_elt() == 5

    def test_repr(self):
        """Test string representation."""
        assert repr(RBSet.of_iterable([2, 1])) == "RBSet([1, 2])"


class TestComparison:
    """Test compare and equal."""

    def test_equal(self):
        """Test equality ignores insertion order."""
        a = RBSet.of_iterable([1, 2, 3])
        b = RBSet().insert(3).insert(1).insert(2)
        assert a.equal(b)
        assert a == b
        assert a.compare(b) == 0

    def test_compare(self):
        """Test lexicographic ordering."""
        a = RBSet.of_iterable([1, 2])
        b = RBSet.of_iterable([1, 3])
        assert a.compare(b) < 0
        assert b.compare(a) > 0
        assert a != b

    def test_equal_under_reversed_ordering(self):
        """Test sets with the same elements are equal whatever their ordering."""
        a = RBSet.of_iterable([1, 2, 3])
        desc = RBSet.of_iterable([3, 1, 2], reverse(default_compare))
        with pytest.warns(OrderingWarning):
            assert a.equal(desc)
        with pytest.warns(OrderingWarning):
            assert a.compare(desc) == 0
        with pytest.warns(OrderingWarning):
            assert a.compare(desc.insert(0)) > 0

    def test_unhashable(self):
        """Test sets cannot be hashed."""
        with pytest.raises(TypeError):
            hash(RBSet())


class TestSetAlgebra:
    """Test union, intersection, difference and subset."""

    def test_union(self):
        """Test union."""
        a = RBSet.of_iterable([1, 3, 5])
        b = RBSet.of_iterable([2, 3, 4])
        u = a.union(b)
        validate(u.root)
        assert u.elements() == [1, 2, 3, 4, 5]
        assert a.union(RBSet()) is a
        assert RBSet().union(a) == a

    def test_inter(self):
        """Test intersection."""
        a = RBSet.of_iterable(range(0, 20, 2))
        b = RBSet.of_iterable(range(0, 20, 3))
        i = a.inter(b)
        validate(i.root)
        assert i.elements() == [0, 6, 12, 18]
        assert a.inter(RBSet()).is_empty()

    def test_diff(self):
        """Test difference."""
        a = RBSet.of_iterable(range(10))
        b = RBSet.of_iterable([0, 5, 9, 42])
        d = a.diff(b)
        validate(d.root)
        assert d.elements() == [1, 2, 3, 4, 6, 7, 8]
        assert a.diff(RBSet()) is a

    def test_subset(self):
        """Test subset."""
        a = RBSet.of_iterable([2, 4])
        b = RBSet.of_iterable(range(5))
        assert a.subset(b)
        assert not b.subset(a)
        assert RBSet().subset(a)

    def test_algebra_against_builtin_sets(self):
        """Test random set algebra against Python sets."""
        rng = np.random.default_rng(17)
        xs = rng.integers(0, 200, size=120).tolist()
        ys = rng.integers(100, 300, size=120).tolist()
        a, b = RBSet.of_iterable(xs), RBSet.of_iterable(ys)
        assert a.union(b).elements() == sorted(set(xs) | set(ys))
        assert a.inter(b).elements() == sorted(set(xs) & set(ys))
        assert a.diff(b).elements() == sorted(set(xs) - set(ys))
        assert b.diff(a).elements() == sorted(set(ys) - set(xs))

    def test_mixed_comparators_warn(self):
        """Test combining sets with different orderings warns."""
        a = RBSet.of_iterable([1, 2])
        b = RBSet.of_iterable([2, 3], lambda x, y: default_compare(x, y))
        with pytest.warns(OrderingWarning):
            assert a.union(b).elements() == [1, 2, 3]

    def test_algebra_under_reversed_ordering(self):
        """Test set algebra re-sorts a set built under the opposite ordering."""
        a = RBSet.of_iterable([1, 5])
        desc = RBSet.of_iterable([2, 3, 4, 5], reverse(default_compare))
        with pytest.warns(OrderingWarning):
            u = a.union(desc)
        validate(u.root)
        assert u.elements() == [1, 2, 3, 4, 5]
        assert u.member(2)
        assert u.compare_keys is a.compare_keys

        with pytest.warns(OrderingWarning):
            i = a.inter(desc)
        validate(i.root)
        assert i.elements() == [5]

        with pytest.warns(OrderingWarning):
            d = a.diff(desc)
        validate(d.root)
        assert d.elements() == [1]

        with pytest.warns(OrderingWarning):
            assert RBSet.of_iterable([3, 4]).subset(desc)

    def test_empty_operand_still_warns(self):
        """Test an empty set with another ordering is reported like any other."""
        a = RBSet.of_iterable([1, 2])
        empty_desc = RBSet(reverse(default_compare))
        with pytest.warns(OrderingWarning):
            assert a.union(empty_desc) is a
        with pytest.warns(OrderingWarning):
            assert a.diff(empty_desc) is a
