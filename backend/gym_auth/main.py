import asyncio
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gym_auth.core.config import settings
from gym_auth.api.routes.auth import router as auth_router
from gym_auth.api.routes.protected import router as protected_router
from gym_auth.db.session import check_connection, engine
from gym_auth.services.sessions import SessionStore, session_sweep_loop

log = logging.getLogger(__name__)

app = FastAPI(title="gym-auth")

# sessions are process local; a restart logs everyone out
app.state.sessions = SessionStore(
    ttl_seconds=settings.session_max_age_seconds,
    token_bytes=settings.session_token_bytes,
)

origins = [o.strip() for o in (settings.cors_origins or "").split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Origin", "Content-Type", "Accept"],
)

@app.exception_handler(RequestValidationError)
async def _invalid_body(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"detail": "invalid_request_body"})

@app.get("/health")
def health():
    return {"status": "ok"}

app.include_router(auth_router)
app.include_router(protected_router)

@app.on_event("startup")
def _startup():
    logging.basicConfig(level=settings.log_level.upper())
    check_connection()
    log.info("gym-auth started cors_origins=%s", origins)

@app.on_event("startup")
async def _start_session_sweep():
    asyncio.create_task(session_sweep_loop(app.state.sessions, settings.session_max_age_seconds))

@app.on_event("shutdown")
def _shutdown():
    engine.dispose()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.port)
