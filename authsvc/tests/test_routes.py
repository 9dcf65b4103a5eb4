from __future__ import annotations

from http import HTTPStatus

import pytest
from pydantic import BaseModel

from authsvc.domain.users.exceptions import UnauthorizedError
from authsvc.interfaces.http.middleware import extract_bearer_token
from authsvc.interfaces.http.routes import ApiRequest, ApiResponse, RouteTable, dispatch
from authsvc.shared.errors.base import ValidationError


class EchoBody(BaseModel):
    name: str


def echo(req: ApiRequest) -> ApiResponse:
    body = req.body.model_dump() if req.body else {}
    return ApiResponse(HTTPStatus.OK, {"body": body, "subject": req.subject_id})


def fixed_authenticate(token: str | None) -> str:
    if token != "good":
        raise UnauthorizedError()
    return "user-1"


@pytest.fixture()
def table() -> RouteTable:
    table = RouteTable()
    table.add("POST", "/echo", echo, body_model=EchoBody)
    table.add("GET", "/me", echo, endpoint="me", requires_auth=True)
    return table


def test_resolve_by_method_and_path(table: RouteTable) -> None:
    assert table.resolve("post", "/echo").handler is echo
    assert table.resolve("GET", "/echo") is None
    assert len(table) == 2
    assert [route.endpoint for route in table] == ["echo", "me"]


def test_duplicate_route_is_rejected(table: RouteTable) -> None:
    with pytest.raises(ValueError):
        table.add("POST", "/echo", echo)


def test_dispatch_validates_body(table: RouteTable) -> None:
    route = table.resolve("POST", "/echo")

    response = dispatch(
        route, payload={"name": "x"}, authorization=None, authenticate=fixed_authenticate
    )

    assert response.status == HTTPStatus.OK
    assert response.body == {"body": {"name": "x"}, "subject": None}


@pytest.mark.parametrize("payload", [None, {}, {"name": 3}, ["name"]])
def test_dispatch_rejects_malformed_body(table: RouteTable, payload) -> None:
    route = table.resolve("POST", "/echo")

    with pytest.raises(ValidationError) as exc_info:
        dispatch(route, payload=payload, authorization=None, authenticate=fixed_authenticate)

    assert exc_info.value.status == HTTPStatus.BAD_REQUEST


def test_dispatch_injects_subject_for_protected_route(table: RouteTable) -> None:
    route = table.resolve("GET", "/me")

    response = dispatch(
        route, payload=None, authorization="Bearer good", authenticate=fixed_authenticate
    )

    assert response.body["subject"] == "user-1"


@pytest.mark.parametrize(
    "header", [None, "", "Bearer", "Basic good", "Bearer bad", "Bearer good extra"]
)
def test_dispatch_short_circuits_without_valid_token(table: RouteTable, header) -> None:
    route = table.resolve("GET", "/me")

    with pytest.raises(UnauthorizedError):
        dispatch(route, payload=None, authorization=header, authenticate=fixed_authenticate)


def test_extract_bearer_token_is_case_insensitive_on_scheme() -> None:
    assert extract_bearer_token("bearer abc") == "abc"
    assert extract_bearer_token("BEARER abc") == "abc"
    assert extract_bearer_token("Token abc") is None
