"""Composition root for wiring dependencies.

This package centralizes infrastructure-aware wiring so host applications
and the application layer depend on ports without importing
infrastructure directly.
"""
