"""API Layer — FastAPI routes, request pipeline stages and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return structured JSON responses

Design Decisions:
    - Thin routes delegate to the repository; cross-cutting work lives in api/pipeline
"""
