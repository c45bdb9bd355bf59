"""Arena-backed doubly linked lists used by the eviction indexes."""

from typing import Any, Hashable, Iterator, List, Optional


class NodeArena:
    """
    Flat slab of doubly linked list nodes addressed by integer handle.

    Nodes are stored as parallel lists (key, prev, next). Released handles
    go onto a free list and are handed out again before the slab grows.
    """

    __slots__ = ("_keys", "_prev", "_next", "_free")

    def __init__(self):
        self._keys: List[Any] = []
        self._prev: List[int] = []
        self._next: List[int] = []
        self._free: List[int] = []

    def allocate(self, key: Any) -> int:
        """
        Allocate an unlinked node holding key.

        Args:
            key: The key stored in the node

        Returns:
            Handle of the new node
        """
        if self._free:
            handle = self._free.pop()
            self._keys[handle] = key
            self._prev[handle] = handle
            self._next[handle] = handle
            return handle

        handle = len(self._keys)
        self._keys.append(key)
        self._prev.append(handle)
        self._next.append(handle)
        return handle

    def release(self, handle: int) -> None:
        """Return an unlinked node to the free list."""
        self._keys[handle] = None
        self._prev[handle] = handle
        self._next[handle] = handle
        self._free.append(handle)

    def key(self, handle: int) -> Any:
        return self._keys[handle]

    def next(self, handle: int) -> int:
        return self._next[handle]

    def prev(self, handle: int) -> int:
        return self._prev[handle]

    def link_after(self, anchor: int, handle: int) -> None:
        """Link handle directly after anchor."""
        following = self._next[anchor]
        self._prev[handle] = anchor
        self._next[handle] = following
        self._prev[following] = handle
        self._next[anchor] = handle

    def unlink(self, handle: int) -> None:
        """Detach handle from its neighbours, leaving it self-linked."""
        before = self._prev[handle]
        after = self._next[handle]
        self._next[before] = after
        self._prev[after] = before
        self._prev[handle] = handle
        self._next[handle] = handle

    def capacity(self) -> int:
        """Number of slots ever allocated, live or free."""
        return len(self._keys)

    def __len__(self) -> int:
        return len(self._keys) - len(self._free)


class KeyList:
    """
    Doubly linked list of keys living in a NodeArena.

    Sentinel head and tail nodes are allocated in the arena, so an empty list
    still occupies two slots until discard() is called.
    """

    __slots__ = ("_arena", "_head", "_tail", "_size")

    def __init__(self, arena: NodeArena):
        self._arena = arena
        self._head = arena.allocate(None)
        self._tail = arena.allocate(None)
        arena.link_after(self._head, self._tail)
        self._size = 0

    def push_front(self, key: Hashable) -> int:
        """Insert key right after the head sentinel and return its handle."""
        handle = self._arena.allocate(key)
        self._arena.link_after(self._head, handle)
        self._size += 1
        return handle

    def push_back(self, key: Hashable) -> int:
        """Insert key right before the tail sentinel and return its handle."""
        handle = self._arena.allocate(key)
        self._arena.link_after(self._arena.prev(self._tail), handle)
        self._size += 1
        return handle

    def move_to_front(self, handle: int) -> None:
        self._arena.unlink(handle)
        self._arena.link_after(self._head, handle)

    def remove(self, handle: int) -> Hashable:
        """
        Unlink a node and release it back to the arena.

        Args:
            handle: Handle previously returned by push_front/push_back

        Returns:
            The key that the node held
        """
        key = self._arena.key(handle)
        self._arena.unlink(handle)
        self._arena.release(handle)
        self._size -= 1
        return key

    def front(self) -> Optional[int]:
        """Handle of the first node, or None if the list is empty."""
        if self._size == 0:
            return None
        return self._arena.next(self._head)

    def back(self) -> Optional[int]:
        """Handle of the last node, or None if the list is empty."""
        if self._size == 0:
            return None
        return self._arena.prev(self._tail)

    def discard(self) -> None:
        """Release every node, sentinels included. The list is unusable afterwards."""
        handle = self._arena.next(self._head)
        while handle != self._tail:
            following = self._arena.next(handle)
            self._arena.unlink(handle)
            self._arena.release(handle)
            handle = following
        self._arena.unlink(self._tail)
        self._arena.release(self._tail)
        self._arena.release(self._head)
        self._size = 0

    def is_empty(self) -> bool:
        return self._size == 0

    def __iter__(self) -> Iterator[Hashable]:
        handle = self._arena.next(self._head)
        while handle != self._tail:
            yield self._arena.key(handle)
            handle = self._arena.next(handle)

    def __reversed__(self) -> Iterator[Hashable]:
        handle = self._arena.prev(self._tail)
        while handle != self._head:
            yield self._arena.key(handle)
            handle = self._arena.prev(handle)

    def __len__(self) -> int:
        return self._size
