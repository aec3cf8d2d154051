"""Catalogs of named rules and segmenters.

A catalog maps names to callables in a fixed order. Callers select from
a catalog by name, or pass their own callables; the selection is resolved
once, before any document is linted, into a tuple of Named/Custom entries.

Thread Safety:
Catalog is immutable after creation. Safe to share.
Use CatalogBuilder for mutable construction.

Example:
    >>> builder = CatalogBuilder("rule")
    >>> builder.register("space-quotes", space_quotes)
    >>> catalog = builder.build()
    >>> catalog.get("space-quotes")
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from hanlint.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class Named:
    """A catalog entry selected by name."""

    name: str
    fn: Callable[..., Any]


@dataclass(frozen=True, slots=True)
class Custom:
    """A caller-supplied callable that is not in any catalog."""

    fn: Callable[..., Any]

    @property
    def name(self) -> str:
        return getattr(self.fn, "__name__", repr(self.fn))


Entry = Named | Custom
Selection = str | Callable[..., Any]


class Catalog:
    """Immutable, ordered mapping of names to callables.

    Thread Safety:
        Immutable after creation. Safe to share across threads.
    """

    __slots__ = ("_kind", "_entries", "_by_name")

    def __init__(self, kind: str, entries: tuple[Named, ...]) -> None:
        """Initialize catalog with pre-built entries.

        Use CatalogBuilder to create instances.
        """
        self._kind = kind
        self._entries = entries
        self._by_name = {entry.name: entry for entry in entries}

    @property
    def kind(self) -> str:
        """What the catalog holds ("rule", "segmenter")."""
        return self._kind

    def get(self, name: str) -> Named | None:
        """Get entry by name.

        Args:
            name: Registered name (e.g., "space-quotes")

        Returns:
            Entry if registered, None otherwise
        """
        return self._by_name.get(name)

    def has(self, name: str) -> bool:
        """Check if name is registered."""
        return name in self._by_name

    @property
    def names(self) -> tuple[str, ...]:
        """All registered names, in catalog order."""
        return tuple(entry.name for entry in self._entries)

    @property
    def entries(self) -> tuple[Named, ...]:
        """All entries, in catalog order."""
        return self._entries

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Named]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


class CatalogBuilder:
    """Mutable builder for Catalog.

    Example:
        >>> builder = CatalogBuilder("segmenter")
        >>> builder.register("ignore", parse_ignore)
        >>> catalog = builder.build()
    """

    __slots__ = ("_kind", "_entries", "_names")

    def __init__(self, kind: str) -> None:
        self._kind = kind
        self._entries: list[Named] = []
        self._names: set[str] = set()

    def register(self, name: str, fn: Callable[..., Any]) -> CatalogBuilder:
        """Register a callable under a name.

        Returns:
            Self for chaining

        Raises:
            ValueError: If the name is already registered
        """
        if name in self._names:
            msg = f"{self._kind.capitalize()} '{name}' already registered"
            raise ValueError(msg)
        self._names.add(name)
        self._entries.append(Named(name, fn))
        return self

    def register_all(self, pairs: Iterable[tuple[str, Callable[..., Any]]]) -> CatalogBuilder:
        for name, fn in pairs:
            self.register(name, fn)
        return self

    def build(self) -> Catalog:
        """Build immutable catalog from registered entries."""
        return Catalog(self._kind, tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)


def resolve(
    selection: Sequence[Selection] | None,
    catalog: Catalog,
    *,
    strict: bool = False,
    logger: logging.Logger | None = None,
) -> tuple[Entry, ...]:
    """Resolve a user selection against a catalog.

    Args:
        selection: Names and/or callables; None selects the whole catalog
        catalog: Catalog names are looked up in
        strict: Raise on unknown names instead of dropping them
        logger: Receives a DEBUG record for every dropped name

    Returns:
        Entries in selection order

    Raises:
        ConfigurationError: Unknown name in strict mode, or a selection
            item that is neither a name nor a callable
    """
    if selection is None:
        return catalog.entries
    resolved: list[Entry] = []
    for item in selection:
        if isinstance(item, str):
            entry = catalog.get(item)
            if entry is not None:
                resolved.append(entry)
                continue
            if strict:
                raise ConfigurationError(f"Unknown {catalog.kind}", name=item)
            if logger is not None:
                logger.debug("Dropping unknown %s %r", catalog.kind, item)
        elif callable(item):
            resolved.append(Custom(item))
        else:
            raise ConfigurationError(f"Invalid {catalog.kind} selection", name=repr(item))
    return tuple(resolved)
