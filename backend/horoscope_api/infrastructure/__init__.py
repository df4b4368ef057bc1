"""Infrastructure Layer — store backends, logging, and startup wiring.

Invariants:
    - Every backend error is mapped to StoreError before leaving this layer
    - Backends are chosen once at startup (store_factory), never per request
"""
