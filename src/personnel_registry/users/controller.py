from __future__ import annotations

import logging

from flask import Flask, jsonify, redirect, render_template, request, session, url_for

from ..common.web import payload, require_acting_as, service_number_from, start_session, wants_json
from ..core.enums import NextStep
from ..container import Container
from .model import PROFILE_FORM_FIELDS
from .service import profile_from_form

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/", methods=["GET"], endpoint="login_form")
    def login_form():
        return render_template("login.html", title="Login Page")

    @app.route("/signup", methods=["GET"], endpoint="signup_form")
    def signup_form():
        return render_template("signup.html", title="Signup Page")

    @app.route("/signup", methods=["POST"], endpoint="signup")
    def signup():
        data = payload()
        service_number = container.auth_service.register(service_number_from(data), data.get("password"))
        start_session(service_number)
        return redirect(url_for("create_profile_form", svcNo=service_number))

    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = payload()
        result = container.auth_service.authenticate(service_number_from(data), data.get("password"))
        start_session(result.service_number)
        logger.info("login %s -> %s", result.service_number, result.next_step.value)

        if result.next_step == NextStep.PROFILE:
            return redirect(url_for("profile", svcNo=result.service_number))
        return redirect(url_for("create_profile_form", svcNo=result.service_number))

    @app.route("/logout", endpoint="logout")
    def logout():
        session.clear()
        return redirect(url_for("login_form"))

    @app.route("/create-profile", methods=["GET"], endpoint="create_profile_form")
    def create_profile_form():
        service_number = request.args.get("svcNo")
        require_acting_as(service_number)
        return render_template("new_profile.html", svcNo=service_number, fields=PROFILE_FORM_FIELDS)

    @app.route("/create-profile", methods=["POST"], endpoint="create_profile")
    def create_profile():
        data = payload()
        service_number = service_number_from(data)
        require_acting_as(service_number)

        container.profile_service.create_profile(service_number, profile_from_form(data))
        return redirect(url_for("profile", svcNo=service_number))

    @app.route("/profile", methods=["GET"], endpoint="profile")
    def profile():
        service_number = request.args.get("svcNo")
        require_acting_as(service_number)

        public = container.profile_service.get_profile(service_number)
        if wants_json():
            return jsonify({"success": True, "user": public.to_dict()})
        return render_template("profile.html", user=public.to_dict())
