# Services package init
"""
PuttLog Backend - Services Layer
=================================

What:  Business logic between routes (HTTP) and the database (persistence).
How:   Services take the request's AsyncSession plus the caller's owner id,
       apply ownership and validation rules, and return response schemas.

Service Inventory:
    - SessionService: list / create / read / delete sessions, ownership check
    - PuttService:    add / update / delete putt records under a session
    - stats:          derived totals and accuracy percentages
    - normalize:      digit-only parsing of typed count fields
    - steppers:       +/- adjustments producing partial updates
"""
