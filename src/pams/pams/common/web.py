"""Helpers shared by the Flask controllers.

The signed-in identity lives in the Flask session (``user_id``, ``company_id``,
``role``); populating it is the auth collaborator's job.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import wraps
from typing import Any, Optional

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, DomainError, NotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Actor:
    user_id: int
    company_id: int
    role: Role


def current_actor() -> Actor:
    return Actor(
        user_id=int(session["user_id"]),
        company_id=int(session["company_id"]),
        role=Role(session["role"]),
    )


def json_ok(data: Any = None, message: Optional[str] = None, status: int = 200):
    body: dict[str, Any] = {"success": True, "data": data}
    if message:
        body["message"] = message
    return jsonify(body), status


def json_error(message: str, status: int = 400):
    return jsonify({"success": False, "error": message}), status


def json_body() -> dict:
    """Request JSON as a dict; an empty dict when the body is missing or malformed."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session or "company_id" not in session:
            return json_error("Unauthorized", 401)
        return view(*args, **kwargs)

    return wrapper


def api_errors(label: str):
    """Translate domain errors into JSON responses; log anything unexpected."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except NotFoundError as e:
                return json_error(str(e), 404)
            except AuthorizationError as e:
                return json_error(str(e), 403)
            except DomainError as e:
                return json_error(str(e), 400)
            except Exception:
                logger.exception("[%s] unexpected failure", label)
                return json_error(f"Failed to {label}", 500)

        return wrapper

    return decorator
