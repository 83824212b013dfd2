"""Domain layer — records and enums for the configuration store.

This layer depends only on stdlib.
It must never import from services, infrastructure, or config.
"""
