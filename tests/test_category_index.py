"""
==============================================================================
Category Index Tests
==============================================================================

Tests for the category tree: ordering, lookup and deletion policies.

==============================================================================
"""

import pytest

from warehouse.core import CategoryNotEmpty, InvalidInput, NotFound
from warehouse.inventory import CategoryIndex, DeletePolicy


def _shape(node):
    """Nested (name, left, right) tuples for structural assertions."""
    if node is None:
        return None
    return (node.name, _shape(node.left), _shape(node.right))


class TestInsert:
    """Tests for category insertion."""

    def test_inorder_is_sorted(self, index: CategoryIndex):
        """Bolts, Tools, Anvils traverse as Anvils, Bolts, Tools."""
        assert index.names() == ["Anvils", "Bolts", "Tools"]

    def test_first_insert_becomes_root(self, index: CategoryIndex):
        """The first category inserted sits at the root."""
        assert _shape(index.root) == ("Bolts", ("Anvils", None, None), ("Tools", None, None))

    def test_duplicate_is_noop(self, index: CategoryIndex):
        """Inserting an existing name returns the node with created=False."""
        node = index.find("Tools")
        node.add_product(1, "Hammer", 10)

        again, created = index.insert("Tools")

        assert created is False
        assert again is node
        assert len(index) == 3
        assert len(again.products) == 1

    def test_ordering_is_case_sensitive(self):
        """Uppercase names sort before lowercase ones."""
        index = CategoryIndex()
        for name in ["anvils", "Zinc", "bolts"]:
            index.insert(name)
        assert index.names() == ["Zinc", "anvils", "bolts"]

    def test_name_is_trimmed(self):
        """Surrounding whitespace is not part of the key."""
        index = CategoryIndex()
        node, created = index.insert("  Tools ")
        assert created is True
        assert node.name == "Tools"
        assert index.find("Tools") is node

    @pytest.mark.parametrize("name", ["", "   ", "x" * 50, "Nuts,Bolts"])
    def test_invalid_names_rejected(self, name: str):
        """Empty, over-long and comma names are validation errors."""
        index = CategoryIndex()
        with pytest.raises(InvalidInput):
            index.insert(name)
        assert len(index) == 0

    def test_max_length_name_accepted(self):
        """A 49 character name fits."""
        index = CategoryIndex()
        _, created = index.insert("x" * 49)
        assert created is True


class TestLookup:
    """Tests for find, get and traversal."""

    def test_find_missing_returns_none(self, index: CategoryIndex):
        """find() reports absence with None."""
        assert index.find("Chains") is None

    def test_get_missing_raises(self, index: CategoryIndex):
        """get() raises CATEGORY_NOT_FOUND."""
        with pytest.raises(NotFound) as exc_info:
            index.get("Chains")
        assert exc_info.value.code == "CATEGORY_NOT_FOUND"

    def test_contains(self, index: CategoryIndex):
        """Membership test uses exact match."""
        assert "Anvils" in index
        assert "anvils" not in index

    def test_traversal_is_restartable(self, index: CategoryIndex):
        """Every call yields a fresh, complete sequence."""
        first = [node.name for node in index.traverse_inorder()]
        second = [node.name for node in index]
        assert first == second == ["Anvils", "Bolts", "Tools"]

    def test_traversal_is_lazy(self, index: CategoryIndex):
        """The traversal can be consumed one node at a time."""
        nodes = index.traverse_inorder()
        assert next(nodes).name == "Anvils"
        assert next(nodes).name == "Bolts"

    def test_find_product_searches_in_order(self, index: CategoryIndex):
        """The first category in ascending order holding the id wins."""
        index.find("Tools").add_product(5, "Saw", 3)
        index.find("Anvils").add_product(5, "Anvil", 1)

        node, product = index.find_product(5)

        assert node.name == "Anvils"
        assert product.name == "Anvil"
        assert index.find_product(99) is None

    def test_all_products_snapshot(self, index: CategoryIndex):
        """Snapshot lists categories in order and aliases the records."""
        tools = index.find("Tools")
        hammer = tools.add_product(1, "Hammer", 10)
        index.find("Anvils").add_product(2, "Anvil", 1)

        snapshot = index.all_products()

        assert [p.product_id for p in snapshot] == [2, 1]
        assert snapshot.find(1) is hammer

    def test_height(self, index: CategoryIndex):
        """Height counts levels."""
        assert index.height() == 2
        assert CategoryIndex().height() == 0


class TestDelete:
    """Tests for category deletion."""

    def test_delete_leaf(self, index: CategoryIndex):
        """A leaf is removed outright."""
        index.delete("Anvils")
        assert index.names() == ["Bolts", "Tools"]
        assert len(index) == 2

    def test_delete_single_child_splices(self):
        """A node with one child is replaced by that child."""
        index = CategoryIndex()
        for name in ["M", "C", "A"]:
            index.insert(name)

        index.delete("C")

        assert _shape(index.root) == ("M", ("A", None, None), None)

    def test_delete_two_children_promotes_successor(self):
        """The in-order successor's key moves up and its old node disappears."""
        index = CategoryIndex()
        for name in ["M", "D", "T", "P", "W", "R"]:
            index.insert(name)

        index.delete("M")

        assert _shape(index.root) == (
            "P",
            ("D", None, None),
            ("T", ("R", None, None), ("W", None, None)),
        )
        assert index.names() == ["D", "P", "R", "T", "W"]

    def test_successor_keeps_its_products(self):
        """The promoted category keeps its own products under its name."""
        index = CategoryIndex()
        for name in ["M", "D", "T", "P"]:
            index.insert(name)
        index.find("M").add_product(1, "Lost", 5)
        index.find("P").add_product(2, "Kept", 7)

        removed = index.delete("M")

        promoted = index.find("P")
        assert [p.name for p in promoted.products] == ["Kept"]
        assert [p.name for p in removed] == ["Lost"]
        assert index.find_product(1) is None

    def test_delete_root_only(self):
        """Deleting the only category empties the index."""
        index = CategoryIndex()
        index.insert("Tools")
        index.delete("Tools")
        assert index.root is None
        assert len(index) == 0

    def test_delete_missing_raises(self, index: CategoryIndex):
        """Deleting an unknown category fails without changes."""
        with pytest.raises(NotFound):
            index.delete("Chains")
        assert index.names() == ["Anvils", "Bolts", "Tools"]

    def test_discard_returns_products(self, index: CategoryIndex):
        """DISCARD hands the dropped products back."""
        index.find("Tools").add_product(1, "Hammer", 10)

        removed = index.delete("Tools", policy=DeletePolicy.DISCARD)

        assert [p.product_id for p in removed] == [1]
        assert index.find_product(1) is None

    def test_reject_non_empty(self, index: CategoryIndex):
        """REJECT refuses to delete a category holding products."""
        index.find("Tools").add_product(1, "Hammer", 10)

        with pytest.raises(CategoryNotEmpty) as exc_info:
            index.delete("Tools", policy=DeletePolicy.REJECT)

        assert exc_info.value.details["product_count"] == 1
        assert "Tools" in index

    def test_reject_allows_empty(self, index: CategoryIndex):
        """REJECT still deletes an empty category."""
        index.delete("Tools", policy="reject")
        assert "Tools" not in index

    def test_transfer_moves_products(self, index: CategoryIndex):
        """TRANSFER puts the products in front of the target, retagged."""
        tools = index.find("Tools")
        tools.add_product(1, "Hammer", 10)
        tools.add_product(2, "Wrench", 4)
        index.find("Anvils").add_product(9, "Anvil", 1)

        removed = index.delete("Tools", policy=DeletePolicy.TRANSFER, transfer_to="Anvils")

        anvils = index.find("Anvils")
        assert len(removed) == 0
        assert [p.product_id for p in anvils.products] == [2, 1, 9]
        assert {p.category for p in anvils.products} == {"Anvils"}

    def test_transfer_to_missing_target_changes_nothing(self, index: CategoryIndex):
        """An unknown target fails before anything moves."""
        index.find("Tools").add_product(1, "Hammer", 10)

        with pytest.raises(NotFound):
            index.delete("Tools", policy=DeletePolicy.TRANSFER, transfer_to="Chains")

        assert len(index.find("Tools").products) == 1

    def test_transfer_to_self_rejected(self, index: CategoryIndex):
        """Transferring to the deleted category itself is invalid."""
        with pytest.raises(InvalidInput):
            index.delete("Tools", policy=DeletePolicy.TRANSFER, transfer_to="Tools")
        assert "Tools" in index
