# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from flask import Blueprint, Response, g, jsonify, request

from authsvc.interfaces.http.routes import Route, RouteTable, dispatch


def _client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


def _make_view(route: Route, authenticate: Callable[[str | None], str]):
    def view() -> tuple[Response, int]:
        payload = request.get_json(silent=True) if route.body_model is not None else None
        response = dispatch(
            route,
            payload=payload,
            authorization=request.headers.get("Authorization"),
            authenticate=authenticate,
            client_ip=_client_ip(),
        )
        return jsonify(response.body), int(response.status)

    view.__name__ = route.endpoint
    return view


def as_blueprint(
    table: RouteTable,
    *,
    name: str,
    url_prefix: str,
    authenticate: Callable[[str | None], str],
) -> Blueprint:
    def _remember_subject(token: str | None) -> str:
        subject_id = authenticate(token)
        g.user_id = subject_id
        return subject_id

    bp = Blueprint(name, __name__, url_prefix=url_prefix)
    for route in table:
        bp.add_url_rule(
            route.path,
            endpoint=route.endpoint,
            view_func=_make_view(route, _remember_subject),
            methods=[route.method],
            strict_slashes=False,
        )
    return bp


__all__ = ["as_blueprint"]
