from fastapi import Depends, HTTPException, Request
from gym_auth.core.config import settings
from gym_auth.db.session import SessionLocal
from gym_auth.services.sessions import SessionStore

def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()

def session_store(request: Request) -> SessionStore:
    return request.app.state.sessions

def session_cookie(request: Request) -> str | None:
    return request.cookies.get(settings.session_cookie_name)

def current_user_id(
    request: Request,
    token: str | None = Depends(session_cookie),
    store: SessionStore = Depends(session_store),
) -> int:
    if token is None:
        raise HTTPException(status_code=401, detail="not_authenticated")
    user_id = store.get(token)
    if user_id is None:
        raise HTTPException(status_code=401, detail="invalid_session")
    request.state.user_id = user_id
    return user_id
