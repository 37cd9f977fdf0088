# barbershop/routers/auth_routes.py

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session, select

from barbershop.auth import CurrentBarber, create_access_token, get_current_barber, hash_password, verify_password
from barbershop.config import Settings, get_settings
from barbershop.db import get_session
from barbershop.errors import ConflictError
from barbershop.models import Barber
from barbershop.schemas import BarberCreate, BarberPublic, Token

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["auth"],
)


@router.post("/register", response_model=Token, status_code=201)
def register(
    barber: BarberCreate,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    # 1) Check if email already exists
    existing = session.exec(
        select(Barber).where(Barber.email == barber.email)
    ).first()
    if existing is not None:
        raise ConflictError("Email already registered")

    # 2) Create barber in DB
    db_barber = Barber(
        name=barber.name,
        email=barber.email,
        password_hash=hash_password(barber.password),
    )
    session.add(db_barber)
    session.commit()
    session.refresh(db_barber)  # fills db_barber.id
    logger.info(f"Registered barber {db_barber.id}")

    token = create_access_token({"sub": db_barber.email}, settings)
    return {"access_token": token, "token_type": "bearer"}


@router.post("/login", response_model=Token)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    email = form_data.username
    password = form_data.password

    barber = session.exec(
        select(Barber).where(Barber.email == email)
    ).first()

    if barber is None or not verify_password(password, barber.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = create_access_token({"sub": barber.email}, settings)
    return {"access_token": token, "token_type": "bearer"}


@router.get("/me", response_model=BarberPublic)
def me(current_barber: CurrentBarber = Depends(get_current_barber)):
    return {
        "id": current_barber.id,
        "name": current_barber.name,
        "email": current_barber.email,
    }
