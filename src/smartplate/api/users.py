"""User endpoints; preferences live in the browser for now."""

from fastapi import APIRouter

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/preferences")
async def get_preferences() -> dict[str, str]:
    """Preferences are stored client-side until accounts exist."""
    return {"message": "User accounts not implemented yet"}


@router.post("/preferences")
async def update_preferences() -> dict[str, str]:
    """Accept a preferences update without persisting it."""
    return {"message": "User accounts not implemented yet"}


@router.post("/register")
async def register() -> dict[str, str]:
    """Placeholder for account registration."""
    return {"message": "User registration not implemented yet"}


@router.post("/login")
async def login() -> dict[str, str]:
    """Placeholder for account login."""
    return {"message": "User login not implemented yet"}
