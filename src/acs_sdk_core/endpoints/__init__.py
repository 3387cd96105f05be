# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Endpoint resolution for (region, product) pairs."""

from .resolver import DEFAULT_ENDPOINTS_RESOURCE, EndpointResolver

__all__ = ["DEFAULT_ENDPOINTS_RESOURCE", "EndpointResolver"]
