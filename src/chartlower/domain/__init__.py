"""Domain layer — encoding vocabulary, naming contract, and definitions.

This layer depends only on stdlib and pydantic.
It must never import from compile, services, commands, or config.
"""
