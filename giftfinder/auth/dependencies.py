from __future__ import annotations

from fastapi import Depends, HTTPException, Request


def current_user(request: Request) -> dict | None:
    """Return the session user, or ``None`` for anonymous shoppers."""
    return request.session.get("user")


def require_user(user: dict | None = Depends(current_user)) -> dict:
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user


def require_admin(user: dict = Depends(require_user)) -> dict:
    """Only the store owner may change the gift catalog."""
    if user.get("role") != "admin":
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
