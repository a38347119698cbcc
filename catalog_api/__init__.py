"""Catalog API: product catalog query service."""
