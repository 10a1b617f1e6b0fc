"""Bookstore Package — Books API and its reverse-proxy gateway.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
