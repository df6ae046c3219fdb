"""Core Layer - pure sorting logic, no IO, no async, no network.

Invariants:
    - No module in core/ imports from services/, api/ or infrastructure/
    - Timers reach the core only through the Scheduler protocol

Design Decisions:
    - Functional core separated from imperative shell
"""
