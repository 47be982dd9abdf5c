"""Service layer — compile operations returning ServiceResult.

Services may import from domain, config, and compile layers.
They must never import from commands or output.
"""
