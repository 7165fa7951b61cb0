"""
Domain layer - Customer and order records and domain errors.

This layer is independent of HTTP and storage concerns.
"""
