"""Development token endpoint (development and test environments only).

Real deployments put an identity provider behind the TokenVerifier port.
Locally and in load tests, tokens come from the FakeTokenVerifier through
this endpoint.
"""

from fastapi import APIRouter, Depends, HTTPException

from storefront.api.dependencies import require_dev_environment
from storefront.api.schemas import IssueTokenRequest
from storefront.api.views import ok
from storefront.auth import get_verifier
from storefront.auth.fake_adapter import FakeTokenVerifier

auth_router = APIRouter(prefix="/auth", tags=["auth"])


@auth_router.post("/token", status_code=201, dependencies=[Depends(require_dev_environment)])
async def issue_token(body: IssueTokenRequest):
    verifier = get_verifier()
    if not isinstance(verifier, FakeTokenVerifier):
        raise HTTPException(status_code=400, detail="Token issuing only available for FakeTokenVerifier")

    token = verifier.issue(customer_id=body.customer_id, role=body.role)
    principal = verifier.verify(token)
    return ok({"token": token, "customer_id": principal.customer_id, "role": principal.role})
