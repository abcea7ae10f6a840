"""WooCommerce REST API integration."""

from app.infrastructure.external.woocommerce.client import (
    WooCommerceClient,
    WooCommerceClientFactory,
    api_base_url,
)

__all__ = ["WooCommerceClient", "WooCommerceClientFactory", "api_base_url"]
