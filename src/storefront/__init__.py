"""Storefront: catalog, cart and order management with Google sign-in."""
