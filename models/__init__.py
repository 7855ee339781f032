"""
models/ - Domain Layer
======================
Plain dataclasses shared by providers, services and handlers.
"""
