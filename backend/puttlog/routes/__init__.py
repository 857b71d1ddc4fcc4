# Routes package init
"""
PuttLog Backend - API Routes Package
=====================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - sessions.py: GET    /sessions
                   POST   /sessions
                   GET    /sessions/{id}
                   DELETE /sessions/{id}
                   POST   /sessions/{id}/putts
                   PATCH  /sessions/{id}/putts/{putt_id}
                   DELETE /sessions/{id}/putts/{putt_id}
    - health.py:   GET    /health

Design Principle:
    Routes are THIN: resolve the caller, read the body, call a service,
    pick the status code. Ownership and validation live in services.
"""
