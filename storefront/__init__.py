"""
Storefront Client

- cart: cart store (reducer, durable slot, observers)
- catalog: product queries and line-item construction
- orders: createOrder client and checkout
- routers: FastAPI shell endpoints (included in api/index.py)
"""

__version__ = "1.0.0"
