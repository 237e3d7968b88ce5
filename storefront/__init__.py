"""Storefront backend: accounts, carts and wishlists over a user-document store."""

__version__ = "1.0.0"
