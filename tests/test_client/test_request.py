"""Tests for request envelopes and the type-erased body."""

from __future__ import annotations

import dataclasses
import uuid
from datetime import date

import pytest

from github_resources import Resources, User, UserEmail
from typed_apiclient import AnyEncodable, HTTPMethod, Request, Serializer


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


class TestConstructors:
    @pytest.mark.parametrize(
        ("factory", "method"),
        [
            (Request.get, HTTPMethod.GET),
            (Request.delete, HTTPMethod.DELETE),
            (Request.options, HTTPMethod.OPTIONS),
            (Request.head, HTTPMethod.HEAD),
            (Request.trace, HTTPMethod.TRACE),
        ],
    )
    def test_query_only_methods(self, factory, method) -> None:
        request = factory("/user", query={"page": 1})
        assert request.method is method
        assert request.path == "/user"
        assert dict(request.query) == {"page": 1}
        assert request.body is None
        assert request.response_type is None

    @pytest.mark.parametrize(
        ("factory", "method"),
        [
            (Request.post, HTTPMethod.POST),
            (Request.put, HTTPMethod.PUT),
            (Request.patch, HTTPMethod.PATCH),
        ],
    )
    def test_body_methods(self, factory, method) -> None:
        request = factory("/user", body={"login": "kean"}, response_type=User)
        assert request.method is method
        assert request.body == AnyEncodable({"login": "kean"})
        assert request.query is None
        assert request.response_type is User

    def test_body_rejected_for_get(self) -> None:
        with pytest.raises(ValueError, match="GET requests cannot carry a body"):
            Request(HTTPMethod.GET, "/user", body=AnyEncodable({"login": "kean"}))

    def test_method_string_is_coerced(self) -> None:
        request = Request("PUT", "/user")
        assert request.method is HTTPMethod.PUT


# ---------------------------------------------------------------------------
# Identity and immutability
# ---------------------------------------------------------------------------


class TestEnvelope:
    def test_each_request_gets_unique_id(self) -> None:
        first = Request.get("/user")
        second = Request.get("/user")
        assert isinstance(first.id, uuid.UUID)
        assert first.id != second.id

    def test_id_does_not_affect_equality(self) -> None:
        assert Request.get("/user", response_type=User) == Request.get("/user", response_type=User)

    def test_is_frozen(self) -> None:
        request = Request.get("/user")
        with pytest.raises(dataclasses.FrozenInstanceError):
            request.path = "/other"  # type: ignore[misc]

    def test_query_is_snapshotted(self) -> None:
        query = {"q": "kean"}
        request = Request.get("/search/users", query=query)
        query["q"] = "changed"
        assert request.query["q"] == "kean"
        with pytest.raises(TypeError):
            request.query["q"] = "mutated"  # type: ignore[index]


# ---------------------------------------------------------------------------
# AnyEncodable
# ---------------------------------------------------------------------------


class TestAnyEncodable:
    def test_encodes_with_runtime_type(self) -> None:
        body = AnyEncodable(["a@example.com", "b@example.com"])
        assert body.encode(Serializer()) == b'["a@example.com","b@example.com"]'

    def test_encodes_with_declared_type(self) -> None:
        emails = [UserEmail(email="a@example.com", verified=True, primary=True)]
        body = AnyEncodable(emails, list[UserEmail])
        assert body.encode(Serializer()) == (
            b'[{"email":"a@example.com","verified":true,"primary":true,"visibility":null}]'
        )

    def test_encodes_dates_as_iso8601(self) -> None:
        body = AnyEncodable({"since": date(2021, 11, 1)})
        assert body.encode(Serializer()) == b'{"since":"2021-11-01"}'


# ---------------------------------------------------------------------------
# Resource catalog
# ---------------------------------------------------------------------------


class TestResources:
    def test_user_resource(self) -> None:
        request = Resources.user.get
        assert request.method is HTTPMethod.GET
        assert request.path == "/user"
        assert request.response_type is User

    def test_nested_followers_resource(self) -> None:
        request = Resources.users("kean").followers.get
        assert request.path == "/users/kean/followers"
        assert request.response_type == list[User]

    def test_emails_post_is_void(self) -> None:
        request = Resources.user.emails.post(["kean@example.com"])
        assert request.method is HTTPMethod.POST
        assert request.response_type is None
        assert request.body.value == ["kean@example.com"]
