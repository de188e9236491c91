"""
Player Registry - Ordered binary search tree of players keyed by name.

The registry is the single owner of every Player in a run:
- insert() takes ownership on success
- find() returns the live record (no copies)
- remove() splices the node out of the tree and drops the player
- clear() releases everything at the end of a run

The tree is deliberately unbalanced; worst-case depth is the number
of players, which the roster limits keep small.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Sequence

from .player import Player

if TYPE_CHECKING:
    from .aggregator import Team


@dataclass
class _Node:
    """A tree node. Left subtree names sort before, right subtree after."""
    player: Player
    left: _Node | None = None
    right: _Node | None = None


def _insert(node: _Node | None, player: Player) -> tuple[_Node, bool]:
    """Insert into a subtree. Returns (subtree root, inserted)."""
    if node is None:
        return _Node(player), True

    if player.name < node.player.name:
        node.left, inserted = _insert(node.left, player)
    elif player.name > node.player.name:
        node.right, inserted = _insert(node.right, player)
    else:
        inserted = False

    return node, inserted


def _find(node: _Node | None, name: str) -> Player | None:
    while node is not None:
        if name == node.player.name:
            return node.player
        node = node.left if name < node.player.name else node.right
    return None


def _min_node(node: _Node | None) -> _Node | None:
    while node is not None and node.left is not None:
        node = node.left
    return node


def _max_node(node: _Node | None) -> _Node | None:
    while node is not None and node.right is not None:
        node = node.right
    return node


def _remove(node: _Node | None, name: str) -> _Node | None:
    """
    Remove name from a subtree and return the new subtree root.

    A node with two children takes the player of its in-order
    successor (minimum of the right subtree), which is then removed
    from the right subtree.
    """
    if node is None:
        raise KeyError(name)

    if name < node.player.name:
        node.left = _remove(node.left, name)
    elif name > node.player.name:
        node.right = _remove(node.right, name)
    else:
        if node.left is None:
            return node.right
        if node.right is None:
            return node.left

        successor = _min_node(node.right)
        node.player = successor.player
        node.right = _remove(node.right, successor.player.name)

    return node


def _in_order(node: _Node | None) -> Iterator[Player]:
    if node is None:
        return
    yield from _in_order(node.left)
    yield node.player
    yield from _in_order(node.right)


def _collect_power(node: _Node | None, teams: Sequence[Team]) -> None:
    if node is None:
        return
    teams[node.player.team].power += node.player.power
    _collect_power(node.left, teams)
    _collect_power(node.right, teams)


def _depth(node: _Node | None) -> int:
    if node is None:
        return 0
    return 1 + max(_depth(node.left), _depth(node.right))


class PlayerRegistry:
    """
    Name-ordered registry of players.

    Usage:
        registry = PlayerRegistry()
        registry.insert(Player(name="Harry", team=0, power=500))

        harry = registry.find("Harry")
        harry.freeze()  # mutates the registry's record

        registry.remove("Harry")
    """

    def __init__(self):
        self._root: _Node | None = None
        self._size = 0

    def __len__(self) -> int:
        return self._size

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and _find(self._root, name) is not None

    def __iter__(self) -> Iterator[Player]:
        """Iterate players in ascending name order."""
        return _in_order(self._root)

    def insert(self, player: Player) -> bool:
        """
        Insert a player.

        Returns True and takes ownership if no player shares its name.
        Returns False and leaves the registry unchanged otherwise.
        """
        self._root, inserted = _insert(self._root, player)
        if inserted:
            self._size += 1
        return inserted

    def find(self, name: str) -> Player | None:
        """Find the live player record by exact name."""
        return _find(self._root, name)

    def remove(self, name: str) -> None:
        """
        Remove the player with the given name.

        Raises:
            KeyError: If no player has this name. The tree is left unchanged.
        """
        if _find(self._root, name) is None:
            raise KeyError(name)
        self._root = _remove(self._root, name)
        self._size -= 1

    def min(self) -> Player | None:
        """Player with the smallest name, or None if empty."""
        node = _min_node(self._root)
        return node.player if node else None

    def max(self) -> Player | None:
        """Player with the largest name, or None if empty."""
        node = _max_node(self._root)
        return node.player if node else None

    def collect_power(self, teams: Sequence[Team]) -> None:
        """
        Add every player's power into teams[player.team].power.

        Visits each live player exactly once.
        """
        _collect_power(self._root, teams)

    def depth(self) -> int:
        """Height of the tree (0 when empty)."""
        return _depth(self._root)

    def clear(self) -> None:
        """Release every player."""
        self._root = None
        self._size = 0
