# app/notes_core/handler.py
"""
Adapter between API Gateway (HTTP API v2 / REST proxy) events and the
note operations.

    lambda_handler = handler(lambda request: notes.list_notes(table, request))

The wrapped function receives an AuthenticatedRequest and returns either a
JSON-serializable value (sent as a 200) or a complete proxy response dict
(returned as-is).
"""
import base64
import binascii
import json
import logging
from decimal import Decimal
from functools import wraps

from . import config
from .errors import AuthenticationError, NotesError, ValidationError
from .types import AuthenticatedRequest

logger = logging.getLogger()
logger.setLevel(config.LOG_LEVEL)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Credentials": True,
    "Access-Control-Allow-Headers": "Content-Type,X-Amz-Date,Authorization,X-Api-Key,X-Amz-Security-Token",
    "Access-Control-Allow-Methods": "GET,POST,PUT,DELETE,OPTIONS",
    "Content-Type": "application/json",
}


class DecimalEncoder(json.JSONEncoder):
    def default(self, obj):
        if isinstance(obj, Decimal):
            # DynamoDB returns numbers as Decimal
            if obj % 1 == 0:
                return int(obj)
            return float(obj)
        return super().default(obj)


SENSITIVE_HEADERS = {"authorization", "x-amz-security-token", "cookie"}


def loggable_event(event):
    """Copy of the event with credential headers masked."""
    masked = dict(event)
    for key in ("headers", "multiValueHeaders"):
        headers = event.get(key)
        if headers:
            masked[key] = {
                name: "***" if name.lower() in SENSITIVE_HEADERS else value
                for name, value in headers.items()
            }
    if event.get("cookies"):
        masked["cookies"] = "***"
    return masked


def owner_id(event):
    """Caller identity attached by the gateway's authorizer, or None."""
    authorizer = (event.get("requestContext") or {}).get("authorizer") or {}

    iam = authorizer.get("iam") or {}
    identity_id = (iam.get("cognitoIdentity") or {}).get("identityId")
    if identity_id:
        return identity_id

    principal_id = (authorizer.get("lambda") or {}).get("principalId")
    if principal_id:
        return principal_id

    claims = (authorizer.get("jwt") or {}).get("claims") or {}
    return claims.get("sub") or None


def http_method(event):
    context = event.get("requestContext") or {}
    return (context.get("http") or {}).get("method") or event.get("httpMethod") or "GET"


def parse_body(event):
    raw = event.get("body")
    if not raw:
        return None
    if event.get("isBase64Encoded"):
        try:
            raw = base64.b64decode(raw).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise ValidationError("Request body is not valid base64") from exc
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValidationError("Invalid JSON body") from exc
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def build_request(event):
    caller = owner_id(event)
    if not caller:
        raise AuthenticationError("User not authenticated")
    return AuthenticatedRequest(
        owner_id=caller,
        method=http_method(event),
        path_parameters=dict(event.get("pathParameters") or {}),
        body=parse_body(event),
    )


def error_status(exc):
    if config.ERROR_STATUS_MODE == "typed" and isinstance(exc, NotesError):
        return exc.status_code
    return 500


def error_body(exc):
    if not isinstance(exc, NotesError):
        return {"error": str(exc) or "Unknown error occurred"}
    body = {"error": exc.message}
    if config.ERROR_STATUS_MODE == "typed":
        body.update(exc.details())
    return body


def handler(fn):
    @wraps(fn)
    def lambda_handler(event, context):
        logger.info("Received event: %s", json.dumps(loggable_event(event), default=str))
        try:
            result = fn(build_request(event))
            if isinstance(result, dict) and "statusCode" in result:
                return result
            body = json.dumps(result, cls=DecimalEncoder)
            status_code = 200
        except Exception as exc:
            logger.exception("Request failed: %s", exc)
            body = json.dumps(error_body(exc))
            status_code = error_status(exc)

        return {
            "statusCode": status_code,
            "body": body,
            "headers": dict(CORS_HEADERS),
        }

    return lambda_handler
