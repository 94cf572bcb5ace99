"""
HTTP surface tests for the roadmap server.

Covers:
- GET /health and GET /institutions
- Security headers
- Request validation (400 INVALID_INPUT)
- Pipeline failures mapped to 422 / 503 / 502 with the error envelope
- A successful POST /roadmap with a fake plan generator
"""

import json
import re

import pytest
import server
from errors import GenerationUnavailable

_CODE_LINE = re.compile(r"^([A-Za-z]+ \d+\w*): ", re.MULTILINE)


@pytest.fixture(scope="module")
def client():
    server.app.config["TESTING"] = True
    with server.app.test_client() as c:
        yield c


def _fake_generator(calls):
    def generate(policy, data):
        calls.append((policy, data))
        codes = _CODE_LINE.findall(data)
        courses = [{"name": code, "credits": 3} for code in codes[:4]]
        courses.append({"name": "ICS 999", "credits": 3})
        return json.dumps({
            "program_name": "Computer Science",
            "institution": "UH Manoa",
            "total_credits": 15,
            "years": [{
                "year_number": 1,
                "semesters": [{"semester_name": "fall_semester", "credits": 15, "courses": courses}],
            }],
        })
    return generate


def _post(client, body):
    return client.post("/roadmap", data=json.dumps(body), content_type="application/json")


VALID_BODY = {"institution": "uh_manoa", "program": "Computer Science", "credential": "BS"}


class TestHealth:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["status"] == "ok"
        assert data["courses_loaded"] > 0

    def test_security_headers(self, client):
        resp = client.get("/health")
        assert resp.headers.get("X-Frame-Options") == "DENY"
        assert resp.headers.get("X-Content-Type-Options") == "nosniff"


class TestRoutingErrors:
    def test_unknown_path_is_404(self, client, capsys):
        resp = client.get("/does-not-exist")
        assert resp.status_code == 404
        data = resp.get_json()
        assert data["mode"] == "error"
        assert data["error"]["error_code"] == "NOT_FOUND"
        assert "Unhandled exception" not in capsys.readouterr().err

    def test_wrong_method_is_405(self, client):
        resp = client.get("/roadmap")
        assert resp.status_code == 405
        assert resp.get_json()["error"]["error_code"] == "METHOD_NOT_ALLOWED"


def test_institutions_listed(client):
    resp = client.get("/institutions")
    assert resp.status_code == 200
    ids = [inst["id"] for inst in resp.get_json()["institutions"]]
    assert "uh_manoa" in ids


class TestValidation:
    @pytest.mark.parametrize("body", [
        {},
        {"institution": "uh_manoa", "program": "Computer Science"},
        {"institution": "uh_manoa", "program": "  ", "credential": "BS"},
        {"institution": "uh_manoa", "program": 5, "credential": "BS"},
        {**VALID_BODY, "program": "x" * 201},
        {**VALID_BODY, "prioritized_skills": "Python"},
        {**VALID_BODY, "prioritized_skills": [str(i) for i in range(11)]},
    ])
    def test_rejected(self, client, body):
        resp = _post(client, body)
        assert resp.status_code == 400
        data = resp.get_json()
        assert data["mode"] == "error"
        assert data["error"]["error_code"] == "INVALID_INPUT"

    def test_non_json_body(self, client):
        resp = client.post("/roadmap", data="not json", content_type="text/plain")
        assert resp.status_code == 400


class TestRoadmap:
    def test_success(self, client, monkeypatch):
        calls = []
        monkeypatch.setattr(server, "plan_generator", _fake_generator(calls))
        resp = _post(client, {**VALID_BODY, "prioritized_skills": ["Python"]})
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["mode"] == "roadmap"
        assert "ICS" in data["prefixes"]
        assert len(calls) == 1
        assert "Prioritized skills: Python" in calls[0][1]

        courses = data["plan"]["years"][0]["semesters"][0]["courses"]
        assert courses[-1]["name"] == "Elective"
        assert data["plan"]["total_credits"] == 15
        assert data["diagnostics"]["discarded"] == ["ICS 999"]
        assert data["diagnostics"]["credit_status"] == "under_target"

    def test_unknown_institution_is_503(self, client, monkeypatch):
        monkeypatch.setattr(server, "plan_generator", _fake_generator([]))
        resp = _post(client, {**VALID_BODY, "institution": "Atlantis Tech"})
        assert resp.status_code == 503
        assert resp.get_json()["error"]["error_code"] == "CATALOG_UNAVAILABLE"

    def test_unresolvable_program_is_422(self, client, monkeypatch):
        calls = []
        monkeypatch.setattr(server, "plan_generator", _fake_generator(calls))
        resp = _post(client, {**VALID_BODY, "program": "Underwater Basket Weaving"})
        assert resp.status_code == 422
        assert resp.get_json()["error"]["error_code"] == "NO_RELEVANT_COURSES"
        assert calls == []

    def test_unparseable_generation_is_502(self, client, monkeypatch):
        monkeypatch.setattr(server, "plan_generator", lambda policy, data: "I cannot do that")
        resp = _post(client, VALID_BODY)
        assert resp.status_code == 502
        assert resp.get_json()["error"]["error_code"] == "GENERATION_PARSE_ERROR"

    def test_provider_failure_is_502(self, client, monkeypatch):
        def failing(policy, data):
            raise GenerationUnavailable("provider down")

        monkeypatch.setattr(server, "plan_generator", failing)
        resp = _post(client, VALID_BODY)
        assert resp.status_code == 502
        assert resp.get_json()["error"]["error_code"] == "GENERATION_UNAVAILABLE"
