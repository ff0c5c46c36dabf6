from fastapi import APIRouter, Depends
from gym_auth.api.deps import current_user_id
from gym_auth.schemas.auth import MessageOut

router = APIRouter(tags=["protected"])

@router.get("/protected", response_model=MessageOut)
def protected(user_id: int = Depends(current_user_id)):
    return {"message": f"Protected data for user ID: {user_id}"}
