"""Domain layer — locators, endpoints, and style documents.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
