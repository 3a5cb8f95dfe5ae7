"""Services Layer: startup wiring between settings, logging and the core.

Invariants:
    - Services may log and read settings; core never does
"""
