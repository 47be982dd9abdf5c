"""Compile layer — model tree, scale pass, and layout pass.

Compile modules may import from domain and config models.
They must never import from services, commands, or output.
"""
