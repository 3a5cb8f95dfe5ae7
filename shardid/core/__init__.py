"""Core Layer: identifier value types, codecs and validation. No IO, no async.

Invariants:
    - No module in core/ imports from services/, schemas/, infrastructure/ or config
    - Every value produced here is immutable and safe to share between threads

Design Decisions:
    - Functional core separated from the imperative shell that loads settings and logs
"""
