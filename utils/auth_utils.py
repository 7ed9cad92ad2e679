import os, jwt
from typing import Any

# Shared secret of the hosted identity provider (Supabase-style HS256 access tokens)
JWT_SECRET = os.getenv("JWT_SECRET", "dev_secret_change_me_before_deploying")
JWT_ALG = os.getenv("JWT_ALG", "HS256")
JWT_AUDIENCE = os.getenv("JWT_AUDIENCE") or None

def decode_token(token: str) -> dict[str, Any]:
    options = {"verify_aud": JWT_AUDIENCE is not None}
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALG], audience=JWT_AUDIENCE, options=options)

def user_id_from_token(token: str) -> str:
    payload = decode_token(token)
    sub = payload.get("sub")
    if not sub:
        raise jwt.InvalidTokenError("Token has no subject")
    return str(sub)
