# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Static endpoint resolution.

EndpointResolver maps ``(region_id, product)`` to a domain name. It is built
once, explicitly, and handed to every client that needs it; it never changes
after construction. ``with_endpoint`` returns a new resolver instead of
mutating the shared one.

Product names are matched case-insensitively (``Ecs`` == ``ecs``); region ids
are matched exactly.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from importlib import resources
from pathlib import Path
from types import MappingProxyType

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINTS_RESOURCE = "endpoints.json"


class EndpointResolver:
    """Read-only ``(region, product) -> domain`` lookup table.

    Example:
        >>> resolver = EndpointResolver.from_mapping(
        ...     {"cn-hangzhou": {"Ecs": "ecs-cn-hangzhou.aliyuncs.com"}}
        ... )
        >>> resolver.resolve("cn-hangzhou", "ecs")
        'ecs-cn-hangzhou.aliyuncs.com'
    """

    __slots__ = ("_table",)

    def __init__(self, table: Mapping[str, Mapping[str, str]] | None = None) -> None:
        frozen: dict[str, Mapping[str, str]] = {}
        for region_id, products in (table or {}).items():
            if not region_id:
                raise ValueError("region_id must not be empty")
            frozen[region_id] = MappingProxyType(
                {str(product).lower(): str(domain) for product, domain in products.items()}
            )
        self._table: Mapping[str, Mapping[str, str]] = MappingProxyType(frozen)

    @classmethod
    def from_mapping(cls, table: Mapping[str, Mapping[str, str]]) -> EndpointResolver:
        return cls(table)

    @classmethod
    def from_file(cls, path: str | Path) -> EndpointResolver:
        """Load a JSON document of the form ``{region: {product: domain}}``."""
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)
        resolver = cls(data)
        logger.debug(f"Loaded {len(resolver)} endpoint regions from {path}")
        return resolver

    @classmethod
    def default(cls) -> EndpointResolver:
        """Endpoint table bundled with the package."""
        text = (
            resources.files(__package__)
            .joinpath(DEFAULT_ENDPOINTS_RESOURCE)
            .read_text(encoding="utf-8")
        )
        return cls(json.loads(text))

    def resolve(self, region_id: str | None, product: str | None) -> str | None:
        """Return the domain for ``(region_id, product)``, or None if unknown."""
        if not region_id or not product:
            return None
        products = self._table.get(region_id)
        if products is None:
            return None
        return products.get(product.lower())

    def with_endpoint(self, region_id: str, product: str, domain: str) -> EndpointResolver:
        """Return a copy of this resolver with one extra or replaced entry."""
        table = {region: dict(products) for region, products in self._table.items()}
        table.setdefault(region_id, {})[product.lower()] = domain
        return type(self)(table)

    @property
    def region_ids(self) -> frozenset[str]:
        return frozenset(self._table)

    def products(self, region_id: str) -> Mapping[str, str]:
        return self._table.get(region_id, MappingProxyType({}))

    def __contains__(self, region_id: object) -> bool:
        return region_id in self._table

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __repr__(self) -> str:
        return f"EndpointResolver(regions={len(self._table)})"


__all__ = ["DEFAULT_ENDPOINTS_RESOURCE", "EndpointResolver"]
