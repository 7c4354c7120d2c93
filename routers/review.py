"""리뷰 라우터"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from config.auth_middleware import require_user
from core.dependencies import get_review_service
from schemas.auth import Identity
from schemas.review import ReviewPayload
from services.review_service import ReviewService, validate_review

router = APIRouter(prefix="/api", tags=["리뷰"])


def _review_list(reviews) -> JSONResponse:
    return JSONResponse({
        "success": True,
        "count": len(reviews),
        "reviews": [review.model_dump(mode="json") for review in reviews]
    })


@router.get("/reviews")
def get_reviews(service: ReviewService = Depends(get_review_service)):
    """전체 리뷰 목록 (최신순, 로그인 불필요)"""
    return _review_list(service.list_all())


@router.post("/reviews", status_code=201)
def create_review(
    payload: ReviewPayload,
    user: Identity = Depends(require_user),
    service: ReviewService = Depends(get_review_service)
):
    """
    리뷰 작성

    작성자 정보는 요청 본문이 아니라 검증된 토큰에서 가져옵니다.

    Returns:
        201 {"success": True, "review": {...}}
    """
    cleaned = validate_review(payload.model_dump())
    review = service.create(cleaned, user)
    return JSONResponse(
        {
            "success": True,
            "message": "Review created successfully",
            "review": review.model_dump(mode="json")
        },
        status_code=201
    )


@router.get("/reviews/{review_id}")
def get_review(review_id: str, service: ReviewService = Depends(get_review_service)):
    """리뷰 단건 조회"""
    review = service.get(review_id)
    return JSONResponse({"success": True, "review": review.model_dump(mode="json")})


@router.put("/reviews/{review_id}")
def update_review(
    review_id: str,
    payload: ReviewPayload,
    user: Identity = Depends(require_user),
    service: ReviewService = Depends(get_review_service)
):
    """리뷰 수정 (작성자만 가능)"""
    cleaned = validate_review(payload.model_dump())
    review = service.update(review_id, cleaned, user)
    return JSONResponse({
        "success": True,
        "message": "Review updated successfully",
        "reviewId": review_id,
        "review": review.model_dump(mode="json")
    })


@router.delete("/reviews/{review_id}")
def delete_review(
    review_id: str,
    user: Identity = Depends(require_user),
    service: ReviewService = Depends(get_review_service)
):
    """리뷰 삭제 (작성자만 가능)"""
    service.delete(review_id, user)
    return JSONResponse({
        "success": True,
        "message": "Review deleted successfully",
        "reviewId": review_id
    })


@router.get("/my-reviews")
def get_my_reviews(
    user: Identity = Depends(require_user),
    service: ReviewService = Depends(get_review_service)
):
    """내 리뷰 목록 (최신순)"""
    return _review_list(service.list_by_user(user))
