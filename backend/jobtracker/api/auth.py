import logging
from fastapi import APIRouter, Depends, Response, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from jobtracker.config import get_settings
from jobtracker.database import get_db
from jobtracker.models import User
from jobtracker.schemas import SignUpRequest, SignInRequest, AuthResponse
from jobtracker.auth import (
    COOKIE_NAME,
    create_session_token,
    get_current_user,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)
router = APIRouter()
settings = get_settings()


@router.post("/sign-up", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(request: SignUpRequest, db: AsyncSession = Depends(get_db)):
    existing = await db.execute(select(User.id).where(User.email == request.email))
    if existing.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="An account with this email already exists",
        )

    db.add(User(email=request.email, password_hash=hash_password(request.password)))
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="An account with this email already exists",
        )

    logger.info(f"New account created for {request.email}")
    return AuthResponse(success=True, message="Account created, you can now sign in")


@router.post("/sign-in", response_model=AuthResponse)
async def sign_in(request: SignInRequest, response: Response, db: AsyncSession = Depends(get_db)):
    result = await db.execute(select(User).where(User.email == request.email))
    user = result.scalar_one_or_none()

    if not user or not verify_password(request.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    response.set_cookie(
        key=COOKIE_NAME,
        value=create_session_token(user.id),
        httponly=True,
        max_age=settings.session_expire_days * 24 * 60 * 60,
        samesite="lax",
    )
    return AuthResponse(success=True, message="Signed in successfully")


@router.post("/sign-out")
async def sign_out(response: Response):
    response.delete_cookie(COOKIE_NAME)
    return {"ok": True}


@router.get("/check")
async def check_auth(user: User = Depends(get_current_user)):
    return {"authenticated": True, "email": user.email}
