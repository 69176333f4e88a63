#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/version.py - Structured dot-separated version numbers
#
# Copyright (c) 2025, modbuild contributors
# All rights reserved.
#

from typing import Iterator, Optional, Tuple


def _parse_component(segment: str) -> Optional[int]:
    """Return *segment* as a non-negative int, or None when it is not one."""
    segment = segment.strip()
    if not segment.isdigit() or not segment.isascii():
        return None
    return int(segment)


def _check_override(override):
    if override is not None and (not isinstance(override, int) or isinstance(override, bool)):
        raise TypeError(f"override must be an int or None, not {type(override).__name__}")


class VersionValue:
    """Immutable version made of non-negative integer components.

    Components are indexed as major (0), minor (1), patch (2), build (3)
    and beyond. Every accessor except major() accepts an override that is
    returned when the component is missing, so templates can give a
    fallback inline::

        VersionValue.parse("1.2").patch(0)  # -> 0
    """

    __slots__ = ("_components",)

    def __init__(self, components=()):
        components = tuple(components)
        for component in components:
            if not isinstance(component, int) or isinstance(component, bool) or component < 0:
                raise ValueError(f"invalid version component: {component!r}")
        object.__setattr__(self, "_components", components)

    @classmethod
    def parse(cls, raw: str) -> "VersionValue":
        """Build a version from *raw*, dropping segments that are not integers.

        Parsing never fails: "1.x.3" gives (1, 3) and "" gives ().
        """
        if not raw:
            return cls()
        parsed = (_parse_component(segment) for segment in raw.strip().split('.'))
        return cls(component for component in parsed if component is not None)

    @property
    def components(self) -> Tuple[int, ...]:
        return self._components

    def at(self, index: int, override: Optional[int] = None) -> Optional[int]:
        """Return the component at *index*, or *override* when it is absent."""
        if not isinstance(index, int) or isinstance(index, bool):
            raise TypeError(f"index must be an int, not {type(index).__name__}")
        if index < 0:
            raise ValueError(f"index must not be negative: {index}")
        _check_override(override)
        if index < len(self._components):
            return self._components[index]
        return override

    def major(self) -> Optional[int]:
        return self.at(0)

    def minor(self, override: Optional[int] = None) -> Optional[int]:
        return self.at(1, override)

    def patch(self, override: Optional[int] = None) -> Optional[int]:
        return self.at(2, override)

    def build(self, override: Optional[int] = None) -> Optional[int]:
        return self.at(3, override)

    def to_string(self, limit: Optional[int] = None) -> str:
        """Join the components with dots.

        With *limit* the result has exactly that many components: extra ones
        are dropped and missing ones are filled with 0.
        """
        if limit is None:
            components = self._components
        else:
            if not isinstance(limit, int) or isinstance(limit, bool):
                raise TypeError(f"limit must be an int, not {type(limit).__name__}")
            if limit < 0:
                raise ValueError(f"limit must not be negative: {limit}")
            padding = (0,) * max(0, limit - len(self._components))
            components = self._components[:limit] + padding
        return '.'.join(str(component) for component in components)

    # Spelling used by existing templates
    to_s = to_string

    def __getitem__(self, key):
        # version[1] or version[3, 888]
        if isinstance(key, tuple):
            if len(key) != 2:
                raise TypeError(f"expected version[index] or version[index, override], got {len(key)} values")
            return self.at(*key)
        return self.at(key)

    def __len__(self) -> int:
        return len(self._components)

    def __iter__(self) -> Iterator[int]:
        return iter(self._components)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other):
        if isinstance(other, VersionValue):
            return self._components == other._components
        return NotImplemented

    def __hash__(self):
        return hash(self._components)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"VersionValue({self.to_string()!r})"
