"""FastAPI dependencies that resolve the caller from the Authorization header."""

from fastapi import Depends, Header, HTTPException

from storefront.auth import get_verifier
from storefront.auth.port import Principal
from storefront.utils.logging import current_env

# Environments where the development helpers (token issuing, gateway switches) are served
DEV_ENVIRONMENTS = ("development", "test")


def current_principal(authorization: str | None = Header(default=None)) -> Principal:
    if not authorization:
        raise HTTPException(status_code=401, detail="No token, authorization denied")

    token = authorization.removeprefix("Bearer ").strip()
    principal = get_verifier().verify(token) if token else None
    if principal is None:
        raise HTTPException(status_code=401, detail="Token is not valid")
    return principal


def require_admin(principal: Principal = Depends(current_principal)) -> Principal:
    if not principal.is_admin:
        raise HTTPException(status_code=403, detail="Access denied. Admin privileges required.")
    return principal


def require_dev_environment() -> None:
    if current_env() not in DEV_ENVIRONMENTS:
        raise HTTPException(status_code=403, detail="Not available in this environment")
