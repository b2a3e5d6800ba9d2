"""Domain layer — the semantic map model, its text format, and reconciliation.

This layer depends only on stdlib, pydantic, ruamel.yaml and structlog.
It must never import from services, infrastructure, commands, or config.
"""
