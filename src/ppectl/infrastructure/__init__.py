"""Infrastructure layer — in-memory record stores and the inventory.

This layer depends on the domain layer and config models.
It must never import from services, commands, or output.
"""
