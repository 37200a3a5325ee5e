"""Infrastructure Layer — storage implementation and logging setup.

Invariants:
    - Implements the Protocols declared in core/repository_protocols.py
    - Nothing here imports from api/
"""
