"""Infrastructure layer — filesystem-backed corpus for the CLI host.

Depends on stdlib, third-party libs (ruamel.yaml) and pure domain parsing.
It must never import from services, commands, or output.
"""
