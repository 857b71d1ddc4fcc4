"""
PuttLog Backend - Caller Identity
==================================

What:  FastAPI dependency that resolves the authenticated caller's owner id.
How:   Reads the configured identity header (default `x-user-id`). The value
       comes from the external identity provider at the edge and is trusted
       as-is here; services only ever see the resulting plain string.
Who:   Every /sessions route declares `owner_id: str = Depends(get_owner_id)`.

A missing or blank header is a client error (400), never an anonymous caller.
"""

from fastapi import Request

from puttlog.config import Settings, settings as default_settings
from puttlog.exceptions import ValidationError


def get_owner_id(request: Request) -> str:
    config: Settings = getattr(request.app.state, "settings", default_settings)
    header = config.identity_header

    owner_id = request.headers.get(header, "").strip()
    if not owner_id:
        raise ValidationError(message=f"Missing {header} header", field=header)
    return owner_id
