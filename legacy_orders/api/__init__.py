# legacy_orders/api/__init__.py
