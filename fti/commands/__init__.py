"""Command handlers, one module per API resource."""
