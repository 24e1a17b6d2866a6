# =============================================================================
# tests/test_pipeline.py - Request Pipeline Unit Tests
# =============================================================================
# Tests the pipeline stages in isolation, without an HTTP round trip:
# - Sanitizer: trimming and HTML escaping
# - Validator: individual checks, field rules and the 400 stage
# - Authorizer: role gating on an attached principal
# - Pipeline: stage ordering and short-circuiting
# =============================================================================

import asyncio
import json
from unittest.mock import MagicMock

import pytest
from starlette.responses import JSONResponse

from app.auth.models import Principal
from app.pipeline import CONTINUE, FieldRule, Halt, Location, Pipeline, RequestContext, require_roles, sanitize, validate
from app.pipeline.rules import PRODUCT_CREATE_RULES, REGISTER_RULES
from app.pipeline.sanitizer import sanitize_mapping, sanitize_value
from app.pipeline.validator import (
    Custom,
    IsEmail,
    IsInteger,
    IsNumber,
    IsUrl,
    Length,
    Matches,
    OneOf,
    collect_errors,
)
from core.models import Role


def run(coro):
    return asyncio.run(coro)


def body_of(response) -> dict:
    return json.loads(response.body)


def make_context(**kwargs) -> RequestContext:
    return RequestContext(request=MagicMock(), **kwargs)


# =============================================================================
# Sanitizer
# =============================================================================

class TestSanitizer:
    """Tests for the sanitizing stage."""

    def test_strips_and_escapes(self):
        assert sanitize_value("  <script>alert(1)</script> ") == "&lt;script&gt;alert(1)&lt;/script&gt;"

    def test_escapes_quotes_and_ampersand(self):
        assert sanitize_value("Tom & \"Jerry's\"") == "Tom &amp; &quot;Jerry&#x27;s&quot;"

    def test_non_strings_untouched(self):
        data = {"price": 19.99, "tags": [" a "], "active": True, "title": " Mouse "}

        sanitize_mapping(data)

        assert data == {"price": 19.99, "tags": [" a "], "active": True, "title": "Mouse"}

    def test_stage_rewrites_body_and_query(self):
        context = make_context(body={"title": " <b>x</b> "}, query={"keyword": " mouse "})

        result = run(sanitize(context))

        assert result == CONTINUE
        assert context.body["title"] == "&lt;b&gt;x&lt;/b&gt;"
        assert context.query["keyword"] == "mouse"


# =============================================================================
# Validator checks
# =============================================================================

class TestChecks:
    """Tests for individual field checks."""

    def test_length_bounds(self):
        check = Length(2, 4)
        assert check("ab") is None
        assert check("abcd") is None
        assert check("a") is not None
        assert check("abcde") is not None
        assert check(12) is not None

    def test_number_accepts_numeric_strings(self):
        check = IsNumber(min=0)
        assert check(0) is None
        assert check("19.99") is None
        assert check(-0.01) is not None
        assert check("abc") is not None
        assert check(True) is not None
        assert check(float("nan")) is not None
        assert check("inf") is not None

    def test_number_beyond_float_range(self):
        assert IsNumber()(10**400) is not None
        assert IsNumber(min=0)("9" * 400) is not None
        assert IsInteger(min=1)(10**400) is not None

    def test_integer(self):
        check = IsInteger(min=1, max=100)
        assert check("1") is None
        assert check(100) is None
        assert check("0") is not None
        assert check("101") is not None
        assert check("1.5") is not None
        assert check("1e2") is not None
        assert check(2.0) is None
        assert check(2.5) is not None

    def test_matches_and_one_of(self):
        assert Matches(r"^\d+$")("123") is None
        assert Matches(r"^\d+$")("12a") == "Invalid format"
        assert OneOf(["ASC", "DESC"])("ASC") is None
        assert OneOf(["ASC", "DESC"])("asc") == "Must be one of: ASC, DESC"

    def test_email(self):
        assert IsEmail()("ann@x.com") is None
        assert IsEmail()("ann@") is not None
        assert IsEmail()(None) is not None

    def test_url(self):
        assert IsUrl()("https://x.com/m.jpg") is None
        assert IsUrl()("ftp://x.com/m.jpg") is not None
        assert IsUrl()("x.com/m.jpg") is not None

    def test_url_must_be_well_formed(self):
        assert IsUrl()("https://exa mple.com/m.jpg") is not None
        assert IsUrl()("https://example.com:notaport/m.jpg") is not None
        assert IsUrl()("https://example.com:8080/m.jpg") is None

    def test_custom(self):
        check = Custom(lambda value: value == "ok", "Must be ok")
        assert check("ok") is None
        assert check("no") == "Must be ok"


# =============================================================================
# Field rules and the validate stage
# =============================================================================

class TestFieldRules:
    """Tests for rule evaluation and the validate stage."""

    def test_missing_required_field(self):
        rule = FieldRule("image", IsUrl())

        error = rule.evaluate(make_context(body={}))

        assert error.field == "image"
        assert error.message == "Image is required"
        assert error.value is None

    def test_missing_optional_field_passes(self):
        rule = FieldRule("role", OneOf(["user"]), optional=True)

        assert rule.evaluate(make_context(body={})) is None

    def test_first_failing_check_wins(self):
        rule = FieldRule("name", Length(2, 50, message="too short"), Matches(r"^[a-z]+$", message="letters"))

        error = rule.evaluate(make_context(body={"name": "1"}))

        assert error.message == "too short"

    def test_reads_from_location(self):
        rule = FieldRule("page", IsInteger(min=1), location=Location.QUERY)

        assert rule.evaluate(make_context(query={"page": "2"}, body={"page": "x"})) is None

    def test_collects_one_error_per_field(self):
        context = make_context(body={"title": "", "description": "ok", "price": -5, "image": "nope"})

        errors = collect_errors(PRODUCT_CREATE_RULES, context)

        assert [error.field for error in errors] == ["title", "price", "image"]

    def test_register_rules_accept_valid_body(self):
        context = make_context(body={"name": "Ann Lee", "email": "ann@x.com", "password": "Abcdef1"})

        assert collect_errors(REGISTER_RULES, context) == []

    def test_stage_halts_with_400(self):
        stage = validate(FieldRule("price", IsNumber(min=0, message="Price must be a positive number")))

        result = run(stage(make_context(body={"price": -1})))

        assert isinstance(result, Halt)
        assert result.response.status_code == 400
        assert body_of(result.response) == {
            "success": False,
            "message": "Validation failed",
            "errors": [{"field": "price", "message": "Price must be a positive number", "value": -1}],
        }

    def test_stage_continues_when_valid(self):
        stage = validate(FieldRule("price", IsNumber(min=0)))

        assert run(stage(make_context(body={"price": 3}))) == CONTINUE


# =============================================================================
# Authorizer
# =============================================================================

class TestRequireRoles:
    """Tests for role gating."""

    def test_allowed_role_continues(self):
        context = make_context(principal=Principal(id=1, role=Role.ADMIN))

        assert run(require_roles(Role.ADMIN)(context)) == CONTINUE

    def test_other_role_is_403(self):
        context = make_context(principal=Principal(id=1, role=Role.USER))

        result = run(require_roles(Role.ADMIN)(context))

        assert result.response.status_code == 403
        assert body_of(result.response)["message"] == "Access denied. Required role: admin"

    def test_lists_every_allowed_role(self):
        context = make_context(principal=Principal(id=1, role=Role.USER))

        result = run(require_roles(Role.ADMIN, Role.USER)(context))

        assert result == CONTINUE

    def test_without_principal_is_401(self):
        result = run(require_roles(Role.USER)(make_context()))

        assert result.response.status_code == 401


# =============================================================================
# Pipeline
# =============================================================================

class TestPipeline:
    """Tests for stage ordering."""

    @pytest.fixture
    def request_stub(self):
        request = MagicMock()
        request.method = "GET"
        request.query_params = {}
        request.path_params = {}
        return request

    def test_stages_run_in_order_then_handler(self, request_stub):
        calls = []

        def stage(name):
            async def _stage(context):
                calls.append(name)
                return CONTINUE
            return _stage

        async def handler(context):
            calls.append("handler")
            return JSONResponse({"ok": True})

        response = run(Pipeline(stage("a"), stage("b")).run(request_stub, handler))

        assert calls == ["a", "b", "handler"]
        assert response.status_code == 200

    def test_first_halt_wins(self, request_stub):
        calls = []

        async def halt(context):
            calls.append("halt")
            return Halt(JSONResponse({"stop": True}, status_code=418))

        async def never(context):
            calls.append("never")
            return CONTINUE

        async def handler(context):
            calls.append("handler")
            return JSONResponse({})

        response = run(Pipeline(halt, never).run(request_stub, handler))

        assert response.status_code == 418
        assert calls == ["halt"]

    def test_then_appends_stages(self):
        async def a(context):
            return CONTINUE

        async def b(context):
            return CONTINUE

        extended = Pipeline(a).then(b)

        assert extended.stages == (a, b)
