# barberconnect/reviews.py
"""
Review write path.

Every create, update and delete commits the review first and then calls
``recompute_barber_rating`` for the reviewed barber.
"""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from .deps import authorize
from .errors import DuplicateReview, InvalidTransition, NotFound
from .models import Appointment, Review, utcnow
from .ratings import recompute_barber_rating
from .schemas import AppointmentStatus, ReviewCreate, ReviewUpdate

logger = logging.getLogger(__name__)


def get_review(session: Session, review_id: int) -> Review:
    review = session.get(Review, review_id)
    if review is None:
        raise NotFound("Review not found")
    return review


def create_review(session: Session, user: dict, data: ReviewCreate) -> Review:
    appointment = session.get(Appointment, data.appointment_id)
    if appointment is None:
        raise NotFound("Appointment not found")

    authorize(user, appointment, "review:create")

    if appointment.status != AppointmentStatus.completed.value:
        raise InvalidTransition("Only completed appointments can be reviewed")

    existing = session.exec(
        select(Review).where(Review.appointment_id == appointment.id)
    ).first()
    if existing is not None:
        raise DuplicateReview("This appointment has already been reviewed")

    review = Review(
        customer_id=user["id"],
        barber_id=appointment.barber_id,
        appointment_id=appointment.id,
        rating=data.rating,
        comment=data.comment.strip() if data.comment else None,
        is_anonymous=data.is_anonymous,
    )
    appointment.is_rated = True
    appointment.updated_at = utcnow()

    session.add(review)
    session.add(appointment)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise DuplicateReview("This appointment has already been reviewed")
    session.refresh(review)
    logger.info(f"Review {review.id} ({review.rating}) created for appointment {appointment.id}")

    recompute_barber_rating(session, review.barber_id)
    session.refresh(review)
    return review


def update_review(session: Session, review: Review, user: dict, data: ReviewUpdate) -> Review:
    authorize(user, review, "review:update")

    changes = data.model_dump(exclude_unset=True)
    if "comment" in changes and changes["comment"]:
        changes["comment"] = changes["comment"].strip()
    for key, value in changes.items():
        if key in ("rating", "is_anonymous") and value is None:
            continue
        setattr(review, key, value)
    review.updated_at = utcnow()

    session.add(review)
    session.commit()
    session.refresh(review)
    logger.info(f"Review {review.id} updated")

    recompute_barber_rating(session, review.barber_id)
    session.refresh(review)
    return review


def delete_review(session: Session, review: Review, user: dict):
    authorize(user, review, "review:delete")

    barber_id = review.barber_id
    review_id = review.id
    appointment = session.get(Appointment, review.appointment_id)
    if appointment is not None:
        appointment.is_rated = False
        appointment.updated_at = utcnow()
        session.add(appointment)

    session.delete(review)
    session.commit()
    logger.info(f"Review {review_id} deleted")

    recompute_barber_rating(session, barber_id)


def list_barber_reviews(session: Session, barber_id: int) -> List[dict]:
    reviews = session.exec(
        select(Review)
        .where(Review.barber_id == barber_id)
        .order_by(Review.created_at.desc())
    ).all()

    return [
        {
            "id": r.id,
            "customer_id": None if r.is_anonymous else r.customer_id,
            "barber_id": r.barber_id,
            "appointment_id": r.appointment_id,
            "rating": r.rating,
            "comment": r.comment,
            "is_anonymous": r.is_anonymous,
            "created_at": r.created_at,
        }
        for r in reviews
    ]
