"""Services — imperative shell around the store.

Invariants:
    - Services take their AsyncSession from the caller
    - Pure helpers live in core/; services only orchestrate IO
"""
