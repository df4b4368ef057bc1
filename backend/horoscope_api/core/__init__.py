"""Core Layer — pure domain logic, no IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, or db/
    - Date normalization and key resolution are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: the shell decides what
      "today" is and which store answers, the core only maps values to keys
"""
