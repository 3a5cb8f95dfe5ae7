"""shardid: tenant shard identifiers and shard-membership validation.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports from submodules only, no star exports
"""
