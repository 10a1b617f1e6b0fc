"""Database Package — declarative Base and schema bootstrap.

Invariants:
    - Engines and sessions are owned by infrastructure/database.py
"""
