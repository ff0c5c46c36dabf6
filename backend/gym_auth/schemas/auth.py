from pydantic import BaseModel

class LocalLoginIn(BaseModel):
    username: str | None = None

class MessageOut(BaseModel):
    message: str
