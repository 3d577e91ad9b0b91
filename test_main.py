# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Reviewer Assignment Service — HTTP tests
========================================
Run:  pytest test_main.py -v --cov=reviewer_service --cov-report=term-missing
"""
from pathlib import Path
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from main import app
from reviewer_service.core import dependencies
from reviewer_service.core.config import settings
from reviewer_service.middleware import normalize_path

client = TestClient(app)


@pytest.fixture(autouse=True)
def reset():
    dependencies.get_memory_db().clear()
    yield


# ── Helpers ──────────────────────────────────────────────────────────────
def _member(uid, active=True):
    return {"user_id": uid, "username": f"user-{uid}", "is_active": active}


def _add_team(name="infra", *ids):
    members = [_member(i.rstrip("!"), not i.endswith("!")) for i in (ids or ("A", "B", "C", "D"))]
    return client.post("/team/add", json={"team_name": name, "members": members})


def _create_pr(pr_id="pr1", author="A", name="Add feature"):
    return client.post("/pullRequest/create", json={
        "pull_request_id": pr_id, "pull_request_name": name, "author_id": author,
    })


def _error_code(response):
    return response.json()["error"]["code"]


# ═══════════════════════════════════════════════════════════════════════════
# HEALTH & METRICS
# ═══════════════════════════════════════════════════════════════════════════
class TestHealth:
    def test_health_ok(self):
        r = client.get("/health")
        assert r.status_code == 200
        data = r.json()
        assert data["status"] == "ok"
        assert data["service"] == settings.SERVICE_NAME
        assert data["storage"] == "memory"

    def test_ready_ok(self):
        r = client.get("/health/ready")
        assert r.status_code == 200

    def test_ready_storage_down(self):
        with patch.object(dependencies.get_directory(), "verify_connection",
                          side_effect=Exception("boom")):
            r = client.get("/health/ready")
        assert r.status_code == 503

    def test_metrics_exposed(self):
        _add_team()
        r = client.get("/metrics")
        assert r.status_code == 200
        assert "reviewer_requests_total" in r.text
        assert "reviewer_teams_created_total" in r.text

    def test_request_id_generated(self):
        r = client.get("/health")
        assert r.headers.get("X-Request-ID")

    def test_request_id_propagated(self):
        r = client.get("/health", headers={"X-Request-ID": "req-123"})
        assert r.headers["X-Request-ID"] == "req-123"


class TestNormalizePath:
    def test_known_segments_kept(self):
        assert normalize_path("/pullRequest/reassign") == "/pullRequest/reassign"

    def test_unknown_segments_collapsed(self):
        assert normalize_path("/team/xyz") == "/team/{param}"

    def test_root(self):
        assert normalize_path("/") == "/"


# ═══════════════════════════════════════════════════════════════════════════
# TEAMS
# ═══════════════════════════════════════════════════════════════════════════
class TestTeams:
    def test_add_team(self):
        r = _add_team("infra", "A", "B!")
        assert r.status_code == 201
        team = r.json()["team"]
        assert team["team_name"] == "infra"
        assert team["members"] == [_member("A"), _member("B", False)]

    def test_add_team_duplicate(self):
        _add_team()
        r = _add_team()
        assert r.status_code == 400
        assert _error_code(r) == "TEAM_EXISTS"

    def test_get_team(self):
        _add_team("infra", "C", "A")
        r = client.get("/team/get", params={"team_name": "infra"})
        assert r.status_code == 200
        assert [m["user_id"] for m in r.json()["team"]["members"]] == ["C", "A"]

    def test_get_team_missing(self):
        r = client.get("/team/get", params={"team_name": "nope"})
        assert r.status_code == 404
        assert _error_code(r) == "NOT_FOUND"

    def test_get_team_requires_name(self):
        assert client.get("/team/get").status_code == 422

    def test_add_team_validation(self):
        r = client.post("/team/add", json={"team_name": "", "members": []})
        assert r.status_code == 422


# ═══════════════════════════════════════════════════════════════════════════
# USERS
# ═══════════════════════════════════════════════════════════════════════════
class TestUsers:
    def test_set_is_active(self):
        _add_team()
        r = client.post("/users/setIsActive", json={"user_id": "B", "is_active": False})
        assert r.status_code == 200
        user = r.json()["user"]
        assert user["is_active"] is False
        assert user["team_name"] == "infra"

    def test_set_is_active_missing(self):
        r = client.post("/users/setIsActive", json={"user_id": "ghost", "is_active": True})
        assert r.status_code == 404
        assert _error_code(r) == "NOT_FOUND"

    def test_get_review(self):
        _add_team()
        _create_pr("pr1")
        r = client.get("/users/getReview", params={"user_id": "B"})
        assert r.status_code == 200
        data = r.json()
        assert data["user_id"] == "B"
        assert data["pull_requests"] == [{
            "pull_request_id": "pr1", "pull_request_name": "Add feature",
            "author_id": "A", "status": "OPEN",
        }]

    def test_get_review_unknown_user_is_empty(self):
        r = client.get("/users/getReview", params={"user_id": "ghost"})
        assert r.status_code == 200
        assert r.json()["pull_requests"] == []


# ═══════════════════════════════════════════════════════════════════════════
# PULL REQUESTS
# ═══════════════════════════════════════════════════════════════════════════
class TestCreatePullRequest:
    def test_create(self):
        _add_team()
        r = _create_pr()
        assert r.status_code == 201
        pr = r.json()["pr"]
        assert pr["assigned_reviewers"] == ["B", "C"]
        assert pr["status"] == "OPEN"
        assert pr["createdAt"]
        assert pr["mergedAt"] is None

    def test_create_unknown_author(self):
        r = _create_pr(author="ghost")
        assert r.status_code == 404
        assert _error_code(r) == "NOT_FOUND"

    def test_create_duplicate(self):
        _add_team()
        _create_pr()
        r = _create_pr(name="Other")
        assert r.status_code == 400
        assert _error_code(r) == "PR_EXISTS"

    def test_create_validation(self):
        r = client.post("/pullRequest/create", json={"pull_request_id": "pr1"})
        assert r.status_code == 422


class TestMergePullRequest:
    def test_merge_idempotent(self):
        _add_team()
        _create_pr()
        first = client.post("/pullRequest/merge", json={"pull_request_id": "pr1"})
        second = client.post("/pullRequest/merge", json={"pull_request_id": "pr1"})
        assert first.status_code == 200
        assert second.status_code == 200
        assert first.json()["pr"]["status"] == "MERGED"
        assert second.json()["pr"]["mergedAt"] == first.json()["pr"]["mergedAt"]

    def test_merge_missing(self):
        r = client.post("/pullRequest/merge", json={"pull_request_id": "nope"})
        assert r.status_code == 404


class TestReassign:
    def _reassign(self, old="B", pr_id="pr1"):
        return client.post("/pullRequest/reassign",
                           json={"pull_request_id": pr_id, "old_user_id": old})

    def test_reassign(self):
        _add_team("infra", "A", "B", "C", "D!", "E")
        _create_pr()
        r = self._reassign()
        assert r.status_code == 200
        data = r.json()
        assert data["replaced_by"] == "E"
        assert data["pr"]["assigned_reviewers"] == ["E", "C"]

    def test_no_candidate(self):
        _add_team("infra", "A", "B", "C")
        _create_pr()
        r = self._reassign()
        assert r.status_code == 409
        assert _error_code(r) == "NO_CANDIDATE"

    def test_merged(self):
        _add_team()
        _create_pr()
        client.post("/pullRequest/merge", json={"pull_request_id": "pr1"})
        r = self._reassign()
        assert r.status_code == 409
        assert _error_code(r) == "PR_MERGED"
        reviews = client.get("/users/getReview", params={"user_id": "B"}).json()
        assert [p["pull_request_id"] for p in reviews["pull_requests"]] == ["pr1"]

    def test_not_assigned(self):
        _add_team()
        _create_pr()
        r = self._reassign(old="D")
        assert r.status_code == 409
        assert _error_code(r) == "NOT_ASSIGNED"

    def test_missing_pr(self):
        r = self._reassign(pr_id="nope")
        assert r.status_code == 404
        assert _error_code(r) == "NOT_FOUND"


# ═══════════════════════════════════════════════════════════════════════════
# STATS & ERRORS
# ═══════════════════════════════════════════════════════════════════════════
class TestStats:
    def test_stats(self):
        _add_team()
        _create_pr()
        r = client.get("/stats")
        assert r.status_code == 200
        data = r.json()
        assert data["total_teams"] == 1
        assert data["total_users"] == 4
        assert data["open_pull_requests"] == 1
        assert {a["user_id"] for a in data["assignments"]} == {"B", "C"}

    def test_stats_branch_failure(self):
        with patch.object(dependencies.get_store(), "count_by_status",
                          side_effect=RuntimeError("db down")):
            r = client.get("/stats")
        assert r.status_code == 500
        assert _error_code(r) == "INTERNAL"
        assert "pull_requests" in r.json()["error"]["message"]


class TestInternalError:
    def test_unexpected_exception_is_masked(self):
        safe_client = TestClient(app, raise_server_exceptions=False)
        with patch.object(dependencies.get_team_service(), "get_team",
                          side_effect=RuntimeError("secret detail")):
            r = safe_client.get("/team/get", params={"team_name": "infra"})
        assert r.status_code == 500
        assert r.json() == {"error": {"code": "INTERNAL", "message": "internal error"}}


# ═══════════════════════════════════════════════════════════════════════════
# PACKAGING
# ═══════════════════════════════════════════════════════════════════════════
class TestPackaging:
    def _project(self):
        tomllib = pytest.importorskip("tomllib")
        with open(Path(__file__).parent / "pyproject.toml", "rb") as fh:
            return tomllib.load(fh)["project"]

    def test_no_readme_pointing_at_design_documents(self):
        assert "SPEC" not in self._project().get("readme", "")

    def test_coverage_plugin_in_test_extra(self):
        test_extra = self._project()["optional-dependencies"]["test"]
        assert any(dep.startswith("pytest-cov") for dep in test_extra)
