"""Service layer — semantic map operations returning ServiceResult.

Services may import from domain, infrastructure, plugins and config.
They must never import from commands or output.
"""
