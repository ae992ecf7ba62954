"""Payment processor integration: products and checkout."""
