"""Review endpoints."""

import json

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.api.dependencies import current_principal
from storefront.api.schemas import SubmitReviewRequest
from storefront.api.views import ok, pagination, review_view
from storefront.auth.port import Principal
from storefront.review.helpful import MarkReviewHelpful
from storefront.review.review import Review
from storefront.review.submission import SubmitReview

review_router = APIRouter(prefix="/reviews", tags=["reviews"])


@review_router.get("/product/{product_id}")
async def list_product_reviews(
    product_id: str,
    sort: str = "newest",
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
):
    reviews, total, distribution = current_domain.repository_for(Review).product_page(
        product_id, sort=sort, page=page, limit=limit
    )
    return ok(
        {
            "reviews": [review_view(r) for r in reviews],
            "pagination": pagination(page, limit, len(reviews), total),
            "rating_distribution": [{"rating": score, "count": count} for score, count in distribution.items()],
        }
    )


@review_router.post("", status_code=201)
async def submit_review(body: SubmitReviewRequest, principal: Principal = Depends(current_principal)):
    command = SubmitReview(
        product_id=body.product_id,
        customer_id=principal.customer_id,
        order_id=body.order_id,
        rating=body.rating,
        title=body.title,
        comment=body.comment,
        pros=json.dumps(body.pros),
        cons=json.dumps(body.cons),
    )
    review_id = current_domain.process(command, asynchronous=False)
    review = current_domain.repository_for(Review).get(review_id)
    return ok(review_view(review), "Review submitted successfully")


@review_router.get("/user")
async def list_my_reviews(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    principal: Principal = Depends(current_principal),
):
    results = current_domain.repository_for(Review).by_customer(principal.customer_id, page=page, limit=limit)
    return ok(
        {
            "reviews": [review_view(r) for r in results.items],
            "pagination": pagination(page, limit, len(results.items), results.total),
        }
    )


@review_router.put("/{review_id}/helpful")
async def mark_helpful(review_id: str, principal: Principal = Depends(current_principal)):
    votes = current_domain.process(MarkReviewHelpful(review_id=review_id), asynchronous=False)
    return ok({"helpful_votes": votes}, "Review marked as helpful")
