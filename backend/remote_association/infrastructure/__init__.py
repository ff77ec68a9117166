"""Infrastructure Layer — HTTP resource client and logging.

Invariants:
    - Infrastructure never imports from services/
    - All external failures mapped to the core/errors.py hierarchy
"""
