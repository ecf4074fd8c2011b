"""Tests for key values and the index implementations."""

import pytest

from typed_relations.index import HashIndex, IndexKind, OrderedIndex, make_index
from typed_relations.key import KeyType


class TestKeyType:
    """Tests for KeyType."""

    def test_value_equality(self):
        """Keys built from equal components are equal and hash alike."""
        a = KeyType(("Star_Wars", 1977))
        b = KeyType.of("Star_Wars", 1977)
        assert a == b
        assert hash(a) == hash(b)

    def test_list_converted_to_tuple(self):
        """A list of components is stored as a tuple."""
        key = KeyType(["Star_Wars", 1977])  # type: ignore[arg-type]
        assert key.values == ("Star_Wars", 1977)
        assert key == KeyType.of("Star_Wars", 1977)

    def test_lexicographic_order(self):
        """Ordering compares the first component, then the next."""
        keys = [
            KeyType.of("Star_Wars", 1980),
            KeyType.of("Rocky", 1985),
            KeyType.of("Star_Wars", 1977),
        ]
        assert sorted(keys) == [
            KeyType.of("Rocky", 1985),
            KeyType.of("Star_Wars", 1977),
            KeyType.of("Star_Wars", 1980),
        ]

    def test_immutable(self):
        """Keys cannot be changed after construction."""
        key = KeyType.of(1)
        with pytest.raises(AttributeError):
            key.values = (2,)  # type: ignore[misc]

    def test_len_and_iter(self):
        key = KeyType.of("a", 1, 2.5)
        assert len(key) == 3
        assert list(key) == ["a", 1, 2.5]

    def test_str(self):
        assert str(KeyType.of("Star_Wars", 1977)) == "{ Star_Wars, 1977 }"


@pytest.fixture(params=[OrderedIndex, HashIndex], ids=["ordered", "hash"])
def index(request):
    """Create an empty index of each implementation."""
    return request.param()


class TestIndex:
    """Behaviour shared by every index implementation."""

    def test_put_and_get(self, index):
        """A stored row is returned by exact-key lookup."""
        row = ("Star_Wars", 1977, 124)
        index.put(KeyType.of("Star_Wars", 1977), row)

        assert index.get(KeyType.of("Star_Wars", 1977)) is row
        assert KeyType.of("Star_Wars", 1977) in index
        assert len(index) == 1

    def test_missing_key(self, index):
        """Lookup of an absent key returns None."""
        index.put(KeyType.of(1), (1,))
        assert index.get(KeyType.of(2)) is None
        assert KeyType.of(2) not in index

    def test_overwrite(self, index):
        """Putting an existing key replaces the row (last write wins)."""
        index.put(KeyType.of(1), (1, "old"))
        index.put(KeyType.of(1), (1, "new"))

        assert index.get(KeyType.of(1)) == (1, "new")
        assert len(index) == 1

    def test_items_in_key_order(self, index):
        """items() traverses in ascending key order regardless of insertion order."""
        for n in [5, 1, 4, 2, 3]:
            index.put(KeyType.of(n), (n,))

        assert [k.values[0] for k, _ in index.items()] == [1, 2, 3, 4, 5]
        assert [row for _, row in index.items()] == [(1,), (2,), (3,), (4,), (5,)]
        assert [k.values[0] for k in index] == [1, 2, 3, 4, 5]


class TestOrderedIndex:
    """Tests specific to OrderedIndex."""

    def test_overwrite_keeps_single_key(self):
        """Overwriting does not duplicate the key in the sorted key list."""
        index = OrderedIndex()
        for _ in range(3):
            index.put(KeyType.of("k"), ("k",))
        assert list(index) == [KeyType.of("k")]

    def test_repr(self):
        index = OrderedIndex()
        index.put(KeyType.of(1), (1,))
        assert repr(index) == "OrderedIndex(1 keys)"


class TestMakeIndex:
    """Tests for make_index."""

    def test_kinds(self):
        assert isinstance(make_index(IndexKind.ORDERED), OrderedIndex)
        assert isinstance(make_index(IndexKind.HASH), HashIndex)
        assert make_index(IndexKind.NONE) is None
