# app/lambdas/identity_authorizer/handler.py
import logging
import os

import jwt

from notes_core import config

logger = logging.getLogger()
logger.setLevel(config.LOG_LEVEL)

COGNITO_USER_POOL_ID = os.environ.get("COGNITO_USER_POOL_ID", "")
COGNITO_CLIENT_ID = os.environ.get("COGNITO_CLIENT_ID", "")

_jwks_client = None


def _issuer():
    region = COGNITO_USER_POOL_ID.split("_")[0]
    return f"https://cognito-idp.{region}.amazonaws.com/{COGNITO_USER_POOL_ID}"


def _bearer_token(event):
    headers = event.get("headers") or {}
    value = headers.get("authorization") or headers.get("Authorization") or ""
    scheme, _, token = value.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise ValueError("missing_token")
    return token.strip()


def _signing_key(token):
    global _jwks_client
    if _jwks_client is None:
        if not COGNITO_USER_POOL_ID:
            raise ValueError("authorizer_not_configured")
        _jwks_client = jwt.PyJWKClient(f"{_issuer()}/.well-known/jwks.json")
    return _jwks_client.get_signing_key_from_jwt(token).key


def verify_token(token):
    """Verify a Cognito id or access token and return its claims."""
    if not COGNITO_CLIENT_ID:
        raise ValueError("authorizer_not_configured")
    try:
        claims = jwt.decode(
            token,
            _signing_key(token),
            algorithms=["RS256"],
            issuer=_issuer(),
            options={"verify_aud": False, "require": ["exp", "iss", "sub"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise ValueError("token_expired") from exc
    except jwt.PyJWTError as exc:
        raise ValueError("invalid_token") from exc

    # id tokens carry the app client in "aud", access tokens in "client_id"
    if claims.get("token_use") == "access":
        audience = claims.get("client_id")
    else:
        audience = claims.get("aud")
    if audience != COGNITO_CLIENT_ID:
        raise ValueError("audience_mismatch")
    return claims


def lambda_handler(event, context):
    """
    HTTP API v2 REQUEST authorizer (simple response format).
    The caller's stable id is passed to the routes as principalId.
    """
    try:
        claims = verify_token(_bearer_token(event))
    except ValueError as exc:
        logger.warning("Denied request %s: %s",
                       (event.get("requestContext") or {}).get("requestId"), exc)
        return {"isAuthorized": False, "context": {"reason": str(exc)}}

    return {
        "isAuthorized": True,
        "context": {"principalId": claims["sub"]},
    }
