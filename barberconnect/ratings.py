# barberconnect/ratings.py

import logging
import math
from typing import Optional, Tuple

from sqlalchemy import func
from sqlmodel import Session, select

from .models import BarberProfile, Review, utcnow

logger = logging.getLogger(__name__)


def round_rating(value: float) -> float:
    # half-up to one decimal: 4.25 -> 4.3
    return math.floor(value * 10 + 0.5) / 10


def review_stats(session: Session, barber_id: int) -> Tuple[Optional[float], int]:
    average, count = session.exec(
        select(func.avg(Review.rating), func.count(Review.id)).where(Review.barber_id == barber_id)
    ).one()
    return average, count


def recompute_barber_rating(session: Session, barber_id: int) -> Optional[BarberProfile]:
    """Recompute rating and total_reviews for a barber from all of their reviews.

    With no reviews left the aggregate is reset to 0. Each call reads the full
    review set, so concurrent recomputations converge on the last writer.
    """
    profile = session.exec(
        select(BarberProfile).where(BarberProfile.user_id == barber_id)
    ).first()
    if profile is None:
        logger.warning(f"No barber profile for user {barber_id}, rating not updated")
        return None

    average, count = review_stats(session, barber_id)
    profile.rating = round_rating(average) if count else 0.0
    profile.total_reviews = count
    profile.updated_at = utcnow()

    session.add(profile)
    session.commit()
    session.refresh(profile)
    logger.info(f"Barber {barber_id} rating is now {profile.rating} over {profile.total_reviews} reviews")
    return profile
