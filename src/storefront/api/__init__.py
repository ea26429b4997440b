"""Storefront HTTP API: routers, schemas and error mapping."""
