# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tag to message lookup built from fixture legend lines."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from ..errors import DuplicateTagError, UnresolvedTagError
from .grammar import AnnotationMark, LegendEntry


class Legend:
    """Accumulate legend entries and resolve annotation tags against them.

    Legend lines may appear anywhere in a fixture, so resolution only happens
    once the whole fixture has been read.
    """

    def __init__(self) -> None:
        self._entries: dict[str, LegendEntry] = {}

    def add(self, entry: LegendEntry) -> None:
        """Register ``entry`` in the legend.

        Args:
            entry: Parsed legend definition.

        Raises:
            DuplicateTagError: If ``entry.tag`` is already defined.
        """

        existing = self._entries.get(entry.tag)
        if existing is not None:
            raise DuplicateTagError(entry.tag, entry.line_number, existing.line_number)
        self._entries[entry.tag] = entry

    def resolve(self, mark: AnnotationMark) -> str:
        """Return the message referenced by ``mark``.

        Args:
            mark: Annotation group whose tag should be looked up.

        Returns:
            str: Legend message for the tag.

        Raises:
            UnresolvedTagError: If the tag has no legend entry.
        """

        entry = self._entries.get(mark.tag)
        if entry is None:
            raise UnresolvedTagError(mark.tag, mark.line_number)
        return entry.message

    def as_mapping(self) -> Mapping[str, str]:
        """Return a read-only ``tag -> message`` view of the legend."""
        return MappingProxyType({tag: entry.message for tag, entry in self._entries.items()})

    def __contains__(self, tag: object) -> bool:
        return tag in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["Legend"]
