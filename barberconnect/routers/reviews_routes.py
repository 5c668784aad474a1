# barberconnect/routers/reviews_routes.py

from typing import List

from fastapi import APIRouter, Depends
from sqlmodel import Session

from barberconnect.db import get_session
from barberconnect.schemas import ReviewCreate, ReviewUpdate, ReviewPublic
from barberconnect.auth import get_current_user
from barberconnect.deps import require_role
from barberconnect import reviews
from barberconnect.routers.barbers_routes import get_profile

router = APIRouter(
    tags=["reviews"],
)


@router.post("/reviews", response_model=ReviewPublic, status_code=201)
def create_review(
    body: ReviewCreate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "customer")
    return reviews.create_review(session, current_user, body)


@router.put("/reviews/{review_id}", response_model=ReviewPublic)
def update_review(
    review_id: int,
    body: ReviewUpdate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    review = reviews.get_review(session, review_id)
    return reviews.update_review(session, review, current_user, body)


@router.delete("/reviews/{review_id}")
def delete_review(
    review_id: int,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    review = reviews.get_review(session, review_id)
    reviews.delete_review(session, review, current_user)
    return {"message": "Review deleted"}


@router.get("/barbers/{profile_id}/reviews", response_model=List[ReviewPublic])
def barber_reviews(profile_id: int, session: Session = Depends(get_session)):
    profile = get_profile(session, profile_id)
    return reviews.list_barber_reviews(session, profile.user_id)
