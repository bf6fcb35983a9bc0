from __future__ import annotations

from functools import wraps

from flask import Flask, current_app, g, jsonify, session

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    NotFoundError,
    PeriodFinalizedError,
    ValidationError,
)
from ..container import Container

_STATUS_BY_ERROR = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (PeriodFinalizedError, 409),
    (ValidationError, 400),
    (ConfigurationError, 400),
)


def error_response(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def api_endpoint(container: Container, *, super_admin: bool = False):
    """JSON view wrapper.

    Resolves the caller into ``g.user`` for this request only and maps domain
    errors onto HTTP status codes.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                g.user = container.session_service.resolve(session.get("email"))
                if super_admin:
                    container.session_service.require_super_admin(g.user)
                return view(*args, **kwargs)
            except tuple(cls for cls, _ in _STATUS_BY_ERROR) as e:
                status = next(code for cls, code in _STATUS_BY_ERROR if isinstance(e, cls))
                return error_response(str(e), status)
            except Exception:
                current_app.logger.exception("Unhandled error in %s", view.__name__)
                if bool(current_app.config.get("DEBUG", False)):
                    raise
                return error_response("Internal server error", 500)

        return wrapper

    return decorator


def register(app: Flask, container: Container) -> None:
    @app.route("/api/me", methods=["GET"], endpoint="me")
    @api_endpoint(container)
    def me():
        user = g.user
        return jsonify(
            {
                "email": user.email,
                "display_name": user.display_name,
                "role": user.role.value,
                "branch_ids": sorted(user.branch_ids),
            }
        )

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})
