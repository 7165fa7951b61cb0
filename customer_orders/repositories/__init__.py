"""
Repository layer - Data access abstractions.

This layer provides interfaces for document persistence and retrieval,
hiding storage details from the HTTP and service layers.
"""
