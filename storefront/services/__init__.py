"""
Storefront services.

Submodules are imported directly (storefront.services.checkout,
storefront.services.email, ...); nothing is re-exported here so that
storefront.models can depend on storefront.services.money without cycles.
"""
