# barberconnect/routers/users_routes.py

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from barberconnect.db import get_session
from barberconnect.models import User
from barberconnect.schemas import UserCreate, UserPublic
from barberconnect.auth import get_current_user, hash_password
from barberconnect.deps import require_role, authorize
from barberconnect.errors import NotFound

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["users"],
)

@router.get("/me", response_model=UserPublic)
def me(current_user: dict = Depends(get_current_user)):
    return {
        "id": current_user["id"],
        "email": current_user["email"],
        "name": current_user["name"],
        "role": current_user["role"],
    }


@router.post("/users", status_code=201, response_model=UserPublic)
def create_user(
    user: UserCreate,
    session: Session = Depends(get_session),
):
    # 1) Check if email already exists
    existing = session.exec(
        select(User).where(User.email == user.email)
    ).first()
    if existing is not None:
        raise HTTPException(status_code=409, detail="Email already registered")

    # 2) Create user in DB
    password_hash = hash_password(user.password)

    db_user = User(
        email=user.email,
        name=user.name,
        password_hash=password_hash,
        role=user.role.value,
    )

    session.add(db_user)
    session.commit()
    session.refresh(db_user)  # fills db_user.id
    logger.info(f"Registered {db_user.role} user {db_user.id}")

    # 3) Return public user
    return {
        "id": db_user.id,
        "email": db_user.email,
        "name": db_user.name,
        "role": db_user.role,
    }


@router.get("/users", response_model=List[UserPublic])
def list_users(
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "admin")
    users = session.exec(select(User).order_by(User.id)).all()
    return [
        {"id": u.id, "email": u.email, "name": u.name, "role": u.role}
        for u in users
    ]


@router.get("/users/{user_id}", response_model=UserPublic)
def get_user(
    user_id: int,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    user = session.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    authorize(current_user, user, "user:view")
    return {"id": user.id, "email": user.email, "name": user.name, "role": user.role}
