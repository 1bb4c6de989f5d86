"""Infrastructure adapters for the Karin-law deadline engine.

Adapters implement the ports defined in the application layer,
providing concrete implementations for external services.

Available adapters:
- catalog: Versioned YAML holiday catalogs
- time: System clock time authority
"""

__all__: list[str] = []
