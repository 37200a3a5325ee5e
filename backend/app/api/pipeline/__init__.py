"""Request Pipeline — cross-cutting stages every request flows through.

Invariants:
    - Each stage is a plain `async def dispatch(request, call_next)` built by a factory
    - Order is fixed in compose_pipeline.build_pipeline(): first entry = outermost

Design Decisions:
    - Stages close over their collaborators (settings, token table) — no module globals
"""
