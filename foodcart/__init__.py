"""
foodcart - cart, checkout and store-browsing core of a food-ordering app.

    from foodcart.cart import CartLedger
    from foodcart.checkout import CheckoutService, CheckoutSimulator
    from foodcart.catalog import SAMPLE_STORES, stores_with_distance
"""

__version__ = "0.1.0"
