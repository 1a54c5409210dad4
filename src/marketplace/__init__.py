"""Marketplace product catalog API."""
