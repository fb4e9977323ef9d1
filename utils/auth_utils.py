import os, logging
from typing import Any

from fastapi import Header, HTTPException
from google.oauth2 import id_token
from google.auth.transport import requests as google_requests

FIREBASE_PROJECT_ID = os.getenv("FIREBASE_PROJECT_ID")
DEFAULT_ROLE = "student"

def verify_firebase_token(token: str) -> dict[str, Any]:
    """Verify a Firebase ID token and return the caller's uid and role."""
    claims = id_token.verify_firebase_token(token, google_requests.Request(), audience=FIREBASE_PROJECT_ID)
    if not claims or not claims.get("sub"):
        raise ValueError("Token has no subject")
    return {
        "uid": claims.get("user_id") or claims["sub"],
        "role": claims.get("role", DEFAULT_ROLE),
    }

def firebase_user(authorization: str | None = Header(default=None)) -> dict[str, Any]:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Missing token")
    token = authorization.split(" ", 1)[1]
    try:
        return verify_firebase_token(token)
    except Exception as e:
        logging.error(f"Token verification failed: {e}")
        raise HTTPException(status_code=403, detail="Invalid token")
