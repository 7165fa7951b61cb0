"""
Service layer - Query orchestration over the repositories.
"""
