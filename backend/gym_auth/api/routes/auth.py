import logging

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from gym_auth.api.deps import db, session_cookie, session_store
from gym_auth.core.config import settings
from gym_auth.schemas.auth import LocalLoginIn, MessageOut
from gym_auth.services.sessions import SessionStore
from gym_auth.services.users import get_or_create_user

log = logging.getLogger(__name__)

router = APIRouter(prefix="/auth/local", tags=["auth"])

@router.post("/login", response_model=MessageOut)
def login(
    body: LocalLoginIn,
    response: Response,
    s: Session = Depends(db),
    store: SessionStore = Depends(session_store),
):
    username = (body.username or "").strip()
    if not username:
        raise HTTPException(status_code=400, detail="username_required")

    try:
        user, created = get_or_create_user(s, username)
    except SQLAlchemyError:
        log.exception("login failed for username=%s", username)
        raise HTTPException(status_code=500, detail="database_error")

    if created:
        log.info("new user created username=%s id=%s", username, user.id)
    else:
        log.info("user logged in username=%s id=%s", username, user.id)

    token = store.create(user.id)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age_seconds,
        path="/",
        secure=settings.session_cookie_secure,
        httponly=True,
    )
    return {"message": "Local login successful"}

@router.post("/logout", response_model=MessageOut)
def logout(
    response: Response,
    token: str | None = Depends(session_cookie),
    store: SessionStore = Depends(session_store),
):
    if token is None:
        raise HTTPException(status_code=401, detail="not_logged_in")

    known = store.delete(token)
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        secure=settings.session_cookie_secure,
        httponly=True,
    )
    log.info("session closed known=%s", known)
    return {"message": "Logged out"}
