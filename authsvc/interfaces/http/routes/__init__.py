# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Framework-free route table.

Handlers take an :class:`ApiRequest` whose body has already been validated
and whose subject id has already been resolved, and return an
:class:`ApiResponse`. :func:`dispatch` runs that pipeline; the Flask
adapter only translates requests and responses.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any

from pydantic import BaseModel

from authsvc.interfaces.http.middleware import authenticate_request, validate_body


@dataclass(slots=True, frozen=True)
class ApiRequest:
    body: BaseModel | None = None
    subject_id: str | None = None
    client_ip: str | None = None


@dataclass(slots=True, frozen=True)
class ApiResponse:
    status: HTTPStatus
    body: dict[str, Any] = field(default_factory=dict)


Handler = Callable[[ApiRequest], ApiResponse]


@dataclass(slots=True, frozen=True)
class Route:
    method: str
    path: str
    handler: Handler
    endpoint: str
    body_model: type[BaseModel] | None = None
    requires_auth: bool = False


class RouteTable:
    def __init__(self) -> None:
        self._routes: dict[tuple[str, str], Route] = {}

    def add(
        self,
        method: str,
        path: str,
        handler: Handler,
        *,
        endpoint: str | None = None,
        body_model: type[BaseModel] | None = None,
        requires_auth: bool = False,
    ) -> Route:
        key = (method.upper(), path)
        if key in self._routes:
            raise ValueError(f"route already registered: {key[0]} {path}")
        route = Route(
            method=key[0],
            path=path,
            handler=handler,
            endpoint=endpoint or getattr(handler, "__name__", path.strip("/")),
            body_model=body_model,
            requires_auth=requires_auth,
        )
        self._routes[key] = route
        return route

    def resolve(self, method: str, path: str) -> Route | None:
        return self._routes.get((method.upper(), path))

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes.values())

    def __len__(self) -> int:
        return len(self._routes)


def dispatch(
    route: Route,
    *,
    payload: Mapping[str, Any] | None,
    authorization: str | None,
    authenticate: Callable[[str | None], str],
    client_ip: str | None = None,
) -> ApiResponse:
    subject_id = None
    if route.requires_auth:
        subject_id = authenticate_request(authorization, authenticate)

    body = None
    if route.body_model is not None:
        body = validate_body(route.body_model, payload)

    return route.handler(ApiRequest(body=body, subject_id=subject_id, client_ip=client_ip))


__all__ = [
    "ApiRequest",
    "ApiResponse",
    "Handler",
    "Route",
    "RouteTable",
    "dispatch",
]
