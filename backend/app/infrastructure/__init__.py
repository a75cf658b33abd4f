"""Infrastructure Layer — external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure imports from core/ only for the error hierarchy
    - Every external call maps SDK failures onto core/errors.py types

Design Decisions:
    - Thin wrappers over raw clients (ADR: single responsibility)
"""
