"""Catalog export service for Shopify admin."""
