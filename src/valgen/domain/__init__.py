"""Domain layer — rule DSL, value coercion, and message templates.

This layer depends only on the stdlib.
It must never import from services, infrastructure, codegen, commands, or config.
"""
