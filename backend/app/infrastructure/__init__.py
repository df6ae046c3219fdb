"""Infrastructure Layer - external data sources and cross-cutting concerns.

Invariants:
    - Infrastructure never imports sorter logic, only core errors and types
    - All external calls wrapped with timeout and error mapping

Design Decisions:
    - Thin wrappers over raw clients: one failure type per data source
"""
