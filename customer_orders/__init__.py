"""
Customer Order Service.

REST service exposing customers and their orders stored in MongoDB,
plus a customer-order aggregation view.
"""

__version__ = "1.0.0"
