"""Services Layer — orchestration between the pure core and the model client.

Invariants:
    - Services never build HTTP responses (routes do)
    - Services receive their clients through constructors

Design Decisions:
    - One orchestrator per use case (ADR: no god objects)
"""
