"""
==============================================================================
Category Index Module
==============================================================================

Binary search tree of categories keyed by name. Every node exclusively owns
one ProductCollection and its two child subtrees.

Ordering:
--------
Plain ``str`` comparison, i.e. case-sensitive lexicographic order
("Zinc" sorts before "anvils").

Deletion:
--------
    leaf / one child  →  node is spliced out
    two children      →  the in-order successor's name *and* products move
                         into the node, then the successor is spliced out

What happens to the deleted category's own products is decided by a
DeletePolicy:

    DISCARD   products are dropped and handed back to the caller
    REJECT    delete fails while the category still holds products
    TRANSFER  products move to the front of another existing category

==============================================================================
"""

from __future__ import annotations

import enum
import logging
from typing import Iterator, List, Optional, Tuple

from warehouse.core import exceptions
from warehouse.utils.validators import BoundedNameValidator

from .models import Product
from .products import ProductCollection


# Module logger
logger = logging.getLogger(__name__)


class DeletePolicy(str, enum.Enum):
    """Fate of a deleted category's products."""

    DISCARD = "discard"
    REJECT = "reject"
    TRANSFER = "transfer"


class CategoryNode:
    """
    One category in the index.

    Attributes:
        name: Category key
        products: Products owned by this category
        left: Subtree of smaller names
        right: Subtree of greater names
    """

    __slots__ = ("name", "products", "left", "right")

    def __init__(self, name: str) -> None:
        self.name = name
        self.products = ProductCollection()
        self.left: Optional[CategoryNode] = None
        self.right: Optional[CategoryNode] = None

    def add_product(self, product_id: int, name: str, quantity: int) -> Product:
        """Prepend a new product tagged with this category's name."""
        return self.products.insert(product_id, name, quantity, category=self.name)

    def __repr__(self) -> str:
        return f"CategoryNode(name={self.name!r}, products={len(self.products)})"


class CategoryIndex:
    """
    Ordered index of categories.

    Example:
        >>> index = CategoryIndex()
        >>> for name in ["Bolts", "Tools", "Anvils"]:
        ...     index.insert(name)
        >>> [node.name for node in index.traverse_inorder()]
        ['Anvils', 'Bolts', 'Tools']
        >>> index.find("Tools").add_product(1, "Hammer", 10)
    """

    def __init__(self) -> None:
        self._root: Optional[CategoryNode] = None
        self._size = 0
        self._name_validator = BoundedNameValidator("category name")

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def root(self) -> Optional[CategoryNode]:
        """Root node, or None for an empty index."""
        return self._root

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._root is not None

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find(name) is not None

    def __iter__(self) -> Iterator[CategoryNode]:
        return self.traverse_inorder()

    # =========================================================================
    # INSERT
    # =========================================================================

    def insert(self, name: str) -> Tuple[CategoryNode, bool]:
        """
        Insert a category.

        An existing name is left untouched.

        Args:
            name: Category name (surrounding whitespace is trimmed)

        Returns:
            Tuple of (node, created); created is False for an existing name

        Raises:
            InvalidInput: If the name is empty or too long
        """
        is_valid, normalized, error = self._name_validator.validate(name)
        if not is_valid:
            raise exceptions.invalid_input("category name", error or "Invalid")

        parent: Optional[CategoryNode] = None
        node = self._root

        while node is not None:
            if normalized == node.name:
                return node, False
            parent = node
            node = node.left if normalized < node.name else node.right

        new_node = CategoryNode(normalized)

        if parent is None:
            self._root = new_node
        elif normalized < parent.name:
            parent.left = new_node
        else:
            parent.right = new_node

        self._size += 1
        return new_node, True

    # =========================================================================
    # LOOKUP
    # =========================================================================

    def find(self, name: str) -> Optional[CategoryNode]:
        """
        Exact-match descent.

        Returns:
            CategoryNode or None
        """
        name = name.strip()
        node = self._root

        while node is not None:
            if name == node.name:
                return node
            node = node.left if name < node.name else node.right

        return None

    def get(self, name: str) -> CategoryNode:
        """
        Find a category or fail.

        Raises:
            NotFound: CATEGORY_NOT_FOUND
        """
        node = self.find(name)
        if node is None:
            raise exceptions.category_not_found(name)
        return node

    def find_product(self, product_id: int) -> Optional[Tuple[CategoryNode, Product]]:
        """
        First product with this id, searching categories in ascending order.

        Returns:
            Tuple of (category node, product) or None
        """
        for node in self.traverse_inorder():
            product = node.products.find(product_id)
            if product is not None:
                return node, product
        return None

    # =========================================================================
    # TRAVERSAL
    # =========================================================================

    def traverse_inorder(self) -> Iterator[CategoryNode]:
        """
        Yield categories in ascending name order.

        Each call returns a fresh generator.
        """
        stack: List[CategoryNode] = []
        node = self._root

        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node
            node = node.right

    def names(self) -> List[str]:
        """Category names in ascending order."""
        return [node.name for node in self.traverse_inorder()]

    def all_products(self) -> ProductCollection:
        """
        Snapshot of every product, categories in ascending order.

        The snapshot links the stored records, it does not copy them.
        """
        return ProductCollection.from_products(
            product
            for node in self.traverse_inorder()
            for product in node.products
        )

    def height(self) -> int:
        """Number of levels; 0 for an empty index."""
        def _height(node: Optional[CategoryNode]) -> int:
            if node is None:
                return 0
            return 1 + max(_height(node.left), _height(node.right))

        return _height(self._root)

    # =========================================================================
    # DELETE
    # =========================================================================

    def delete(
        self,
        name: str,
        policy: DeletePolicy = DeletePolicy.DISCARD,
        transfer_to: Optional[str] = None
    ) -> ProductCollection:
        """
        Remove a category.

        Every check runs before the tree is touched, so a failed delete
        leaves the index unchanged.

        Args:
            name: Category to delete
            policy: What to do with the category's products
            transfer_to: Target category for DeletePolicy.TRANSFER

        Returns:
            The products removed with the category (empty after a transfer)

        Raises:
            NotFound: CATEGORY_NOT_FOUND for the category or transfer target
            CategoryNotEmpty: Under REJECT while products remain
            InvalidInput: TRANSFER without a distinct target
        """
        policy = DeletePolicy(policy)
        target = self.get(name)
        removed = target.products

        if policy is DeletePolicy.REJECT and removed:
            raise exceptions.category_not_empty(target.name, len(removed))

        if policy is DeletePolicy.TRANSFER:
            if not transfer_to or transfer_to.strip() == target.name:
                raise exceptions.invalid_input(
                    "transfer target",
                    "a different existing category is required"
                )
            destination = self.get(transfer_to)
            for product in removed:
                product.category = destination.name
            moved = destination.products.extend_front(removed)
            logger.info(
                f"Moved {moved} product(s) from '{target.name}' to '{destination.name}'"
            )

        deleted_name = target.name
        self._root = self._delete_rec(self._root, deleted_name)
        self._size -= 1

        if removed:
            logger.warning(
                f"Category '{deleted_name}' deleted with {len(removed)} product(s) discarded"
            )

        return removed

    def _delete_rec(self, node: Optional[CategoryNode], name: str) -> Optional[CategoryNode]:
        if node is None:
            return None

        if name < node.name:
            node.left = self._delete_rec(node.left, name)
            return node

        if name > node.name:
            node.right = self._delete_rec(node.right, name)
            return node

        if node.left is None:
            return node.right

        if node.right is None:
            return node.left

        node.right, successor = self._detach_min(node.right)
        node.name = successor.name
        node.products = successor.products
        return node

    def _detach_min(self, node: CategoryNode) -> Tuple[Optional[CategoryNode], CategoryNode]:
        """Splice the leftmost node out of a subtree; return (subtree, leftmost)."""
        if node.left is None:
            return node.right, node
        node.left, minimum = self._detach_min(node.left)
        return node, minimum
