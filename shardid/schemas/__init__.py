"""Pydantic Schemas: boundary models carrying shard identifiers.

Invariants:
    - Schemas validate at the system boundary (attach requests, stored config)
    - Identifier fields use the core value types directly, never bare strings
"""
