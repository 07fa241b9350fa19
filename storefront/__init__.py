"""Telegram storefront: catalog, basket and two-step checkout."""
