# app/notes_core/local.py
"""
Local stand-in for the HTTP API.

Serves the routes declared in routes.yaml by turning each Flask request
into an HTTP API v2 event and invoking the matching Lambda handler.

Example usage:
  # DynamoDB Local, or real credentials for a deployed table
  export TABLE_NAME=notes AWS_ENDPOINT_URL_DYNAMODB=http://localhost:8000

  notes-local --port 3000 --identity us-east-1:local-user

  curl -X POST -H "Content-Type: application/json" \
       --data '{"content": "hello"}' http://localhost:3000/notes
"""
import argparse
import importlib.util
import json
import re
import uuid
from collections import namedtuple
from pathlib import Path

import yaml
from flask import Flask, Response, request

from .handler import CORS_HEADERS

APP_DIR = Path(__file__).resolve().parents[1]
DEFAULT_ROUTES = APP_DIR / "routes.yaml"
DEFAULT_LAMBDAS = APP_DIR / "lambdas"

# Overrides --identity for a single request.
IDENTITY_HEADER = "X-Local-Identity"

Route = namedtuple("Route", ["method", "path", "function"])

_PARAM = re.compile(r"\{(\w+)\}")


def load_routes(path=DEFAULT_ROUTES):
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    routes = []
    for entry in data.get("routes") or []:
        method, _, route_path = entry["route"].strip().partition(" ")
        if not route_path:
            raise ValueError(f"Route must be '<METHOD> <path>': {entry['route']!r}")
        routes.append(Route(method.upper(), route_path.strip(), entry["function"]))
    if not routes:
        raise ValueError(f"No routes defined in {path}")
    return routes


def load_lambda(name, lambdas_dir=DEFAULT_LAMBDAS):
    # handler.py files share a module name, so load each under its own
    path = Path(lambdas_dir) / name / "handler.py"
    spec = importlib.util.spec_from_file_location(f"{name}_handler", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def build_event(route, raw_path, path_parameters=None, headers=None,
                body=None, query_string="", identity=None, source_ip="127.0.0.1"):
    """HTTP API v2 payload as the gateway would hand it to the Lambda."""
    request_context = {
        "http": {"method": route.method, "path": raw_path, "sourceIp": source_ip},
        "requestId": str(uuid.uuid4()),
    }
    if identity:
        request_context["authorizer"] = {
            "iam": {"cognitoIdentity": {"identityId": identity}},
        }
    return {
        "version": "2.0",
        "routeKey": f"{route.method} {route.path}",
        "rawPath": raw_path,
        "rawQueryString": query_string,
        "headers": {k.lower(): v for k, v in (headers or {}).items()},
        "requestContext": request_context,
        "pathParameters": path_parameters or None,
        "body": body or None,
        "isBase64Encoded": False,
    }


def _header_value(value):
    if isinstance(value, bool):
        return json.dumps(value)
    return str(value)


def to_flask_response(result):
    headers = {k: _header_value(v) for k, v in (result.get("headers") or {}).items()}
    return Response(result.get("body") or "", status=result["statusCode"], headers=headers)


def create_app(routes=None, lambdas_dir=DEFAULT_LAMBDAS, identity=None):
    routes = routes if routes is not None else load_routes()
    app = Flask(__name__)

    modules = {}
    for route in routes:
        if route.function not in modules:
            modules[route.function] = load_lambda(route.function, lambdas_dir)

    def make_view(route, module):
        def view(**path_parameters):
            event = build_event(
                route,
                request.path,
                path_parameters=path_parameters,
                headers=dict(request.headers),
                body=request.get_data(as_text=True),
                query_string=request.query_string.decode("utf-8"),
                identity=request.headers.get(IDENTITY_HEADER) or identity,
                source_ip=request.remote_addr or "127.0.0.1",
            )
            return to_flask_response(module.lambda_handler(event, None))
        return view

    def preflight(**path_parameters):
        return to_flask_response({"statusCode": 200, "body": "", "headers": CORS_HEADERS})

    paths = []
    for route in routes:
        rule = _PARAM.sub(r"<\1>", route.path)
        app.add_url_rule(
            rule,
            endpoint=f"{route.method} {route.path}",
            view_func=make_view(route, modules[route.function]),
            methods=[route.method],
            provide_automatic_options=False,
        )
        if rule not in paths:
            paths.append(rule)

    for rule in paths:
        app.add_url_rule(rule, endpoint=f"OPTIONS {rule}", view_func=preflight,
                         methods=["OPTIONS"], provide_automatic_options=False)

    return app


def main(argv=None):
    parser = argparse.ArgumentParser(description="Run the notes API locally")
    parser.add_argument("--host", default="127.0.0.1", help="Bind address (default 127.0.0.1)")
    parser.add_argument("--port", default=3000, type=int, help="Port (default 3000)")
    parser.add_argument("--routes", default=str(DEFAULT_ROUTES), help="Path to routes.yaml")
    parser.add_argument("--lambdas", default=str(DEFAULT_LAMBDAS), help="Directory of Lambda handlers")
    parser.add_argument("--identity", default="local-user",
                        help=f"Caller identity for every request (override per request with {IDENTITY_HEADER})")
    args = parser.parse_args(argv)

    app = create_app(load_routes(args.routes), args.lambdas, args.identity)
    print(f"[*] Notes API listening on http://{args.host}:{args.port}")
    app.run(host=args.host, port=args.port, threaded=True)


if __name__ == "__main__":
    main()
