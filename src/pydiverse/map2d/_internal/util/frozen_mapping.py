from __future__ import annotations

from typing import (
    ItemsView,
    Iterable,
    Iterator,
    KeysView,
    Mapping,
    TypeVar,
    ValuesView,
)

KT = TypeVar("KT")
VT = TypeVar("VT")


class FrozenMapping(Mapping[KT, VT]):
    """
    Read-only snapshot of a mapping.

    The input is copied on construction, so later changes to the source do not
    show up here. There are no mutating methods. Equality follows
    `collections.abc.Mapping`, i.e. a `FrozenMapping` equals any mapping with
    the same items.
    """

    __slots__ = ("__data", "__hash")

    def __init__(self, seq: Mapping[KT, VT] | Iterable[tuple[KT, VT]] = (), /):
        self.__data = dict(seq)
        self.__hash = None

    def __getitem__(self, key: KT) -> VT:
        return self.__data[key]

    def __iter__(self) -> Iterator[KT]:
        yield from self.__data.__iter__()

    def __len__(self) -> int:
        return len(self.__data)

    def __contains__(self, item) -> bool:
        return item in self.__data

    def __repr__(self):
        return f"{self.__class__.__name__}({self.__data!r})"

    def __hash__(self):
        # values may be unhashable, so we only fail once someone asks
        if self.__hash is None:
            self.__hash = hash(frozenset(self.__data.items()))
        return self.__hash

    def __copy__(self):
        return self

    def items(self) -> ItemsView[KT, VT]:
        return self.__data.items()

    def keys(self) -> KeysView[KT]:
        return self.__data.keys()

    def values(self) -> ValuesView[VT]:
        return self.__data.values()

    def to_dict(self) -> dict[KT, VT]:
        """Returns a mutable shallow copy."""
        return dict(self.__data)
