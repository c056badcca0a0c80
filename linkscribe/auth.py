"""API key dependency guarding the flow and step routes."""

import secrets

from fastapi import Header, HTTPException

from linkscribe.config import settings


def _extract_token(authorization: str | None, x_api_key: str | None) -> str | None:
    if authorization and authorization.startswith("Bearer "):
        return authorization[7:].strip()
    if x_api_key:
        return x_api_key.strip()
    return None


async def require_api_key(
    authorization: str | None = Header(None),
    x_api_key: str | None = Header(None, alias="X-API-Key"),
) -> None:
    """Accept the key from Authorization Bearer or X-API-Key; 401 otherwise."""
    token = _extract_token(authorization, x_api_key)
    if not token or not secrets.compare_digest(token.encode(), settings.API_KEY.encode()):
        raise HTTPException(status_code=401, detail="Invalid or missing API key")
