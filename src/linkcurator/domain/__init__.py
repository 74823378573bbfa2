"""Domain layer — link types, aggregation, ranking, and prompt rendering.

This layer depends only on stdlib and pure third-party helpers.
It must never import from services, infrastructure, commands, or config.
"""
