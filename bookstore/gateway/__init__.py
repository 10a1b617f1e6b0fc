"""Gateway Package — config-driven reverse proxy for the Books API.

Invariants:
    - No dynamic discovery, load balancing, retries or circuit breaking
    - Proxying mechanics delegated to httpx
"""
