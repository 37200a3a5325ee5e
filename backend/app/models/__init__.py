"""Records — immutable dataclasses held by the repository.

Invariants:
    - Records are frozen; mutation happens by replacement inside the repository
"""
