from __future__ import annotations

from flask import Blueprint, Flask

from ..auth.guard import bearer_token
from ..common.http import json_body, success
from ..common.validators import require_non_empty
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    bp = Blueprint("auth", __name__, url_prefix="/api/auth")

    @bp.post("/login")
    def login():
        data = json_body()
        if not data.get("idToken"):
            raise ValidationError("ID token is required")

        result = container.auth_service.login(require_non_empty(data["idToken"], "ID token"))
        user = result.user
        return success(
            name=user.name,
            email=user.email,
            firebaseUid=user.identity_uid,
            role=user.role.value,
            userUnivId=user.university_id,
            idToken=result.id_token,
            redirectUrl=result.redirect_url,
        )

    @bp.get("/verify")
    def verify():
        user = container.auth_service.authenticate_token(bearer_token())
        return success(user=user.to_dict())

    @bp.post("/check-access")
    def check_access():
        data = json_body()
        if not data.get("idToken") or not data.get("requestedFirebaseUid"):
            raise ValidationError("ID token and requested Firebase UID are required")

        container.auth_service.check_access(str(data["idToken"]), str(data["requestedFirebaseUid"]))
        return success("Access granted")

    app.register_blueprint(bp)
