"""Services Layer - board lifecycle and data loading around the pure sorter core.

Invariants:
    - Services own IO (catalog file, remote directory); core stays pure
    - Every Sorter is created and closed by a Board, never by a route

Design Decisions:
    - One Board per sorter instance, registry built once in the app lifespan
"""
