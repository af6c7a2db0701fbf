"""
Tests for the HTTP endpoints.
"""

from datetime import date
from types import SimpleNamespace

import pytest

from app.extensions import db
from app.models import Profile, Competition, SavedCompetition, CompetitionSubmission

from tests.conftest import GENERAL, DEMOGRAPHIC, fresh


class TestIndex:
    def test_ok(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.get_json() == {"status": "ok"}


class TestCompetitions:
    def test_listing(self, client, make_competition):
        make_competition(title="Live one", status="live")
        make_competition(title="Draft one", status="draft")

        resp = client.get("/api/competitions")

        assert resp.status_code == 200
        titles = [c["title"] for c in resp.get_json()["competitions"]]
        assert titles == ["Live one"]

    def test_status_filter(self, client, make_competition):
        make_competition(title="Done", status="completed")

        resp = client.get("/api/competitions?status=completed")

        assert [c["title"] for c in resp.get_json()["competitions"]] == ["Done"]

    def test_detail(self, client, make_competition):
        comp = make_competition(title="Finished", end_date=date(2001, 1, 1))

        resp = client.get(f"/api/competitions/{comp.id}")

        data = resp.get_json()
        assert resp.status_code == 200
        assert data["title"] == "Finished"
        assert data["end_date"] == "2001-01-01"
        assert data["is_finished"] is True

    def test_detail_404(self, client):
        assert client.get("/api/competitions/999").status_code == 404

    def test_draft_status_filter_rejected(self, client, make_competition):
        make_competition(title="Secret", status="draft")

        resp = client.get("/api/competitions?status=draft")

        assert resp.status_code == 400
        assert "Secret" not in resp.get_data(as_text=True)

    def test_unpublished_detail_is_hidden(self, client, make_competition):
        draft = make_competition(title="Secret", status="draft")
        cancelled = make_competition(title="Gone", status="cancelled")

        assert client.get(f"/api/competitions/{draft.id}").status_code == 404
        assert client.get(f"/api/competitions/{cancelled.id}").status_code == 404


class TestMemberAuth:
    def test_requires_session(self, client):
        assert client.get("/api/member/profile-level").status_code == 401
        assert client.get("/api/member/dashboard").status_code == 401
        assert client.patch("/api/member/profile", json={}).status_code == 401

    def test_unknown_profile_id(self, client):
        with client.session_transaction() as sess:
            sess["profile_id"] = 4242
        assert client.get("/api/member/profile-level").status_code == 401


class TestMemberProfileLevel:
    def test_new_member_is_rank_1(self, client, make_profile, login_member):
        login_member(make_profile())

        data = client.get("/api/member/profile-level").get_json()

        assert data["level"] == 1
        assert data["progress"] == 25
        assert data["badgeColor"] == "bg-gray-100 text-gray-800 border-gray-200"
        assert "General Profile" in data["incompleteSections"]
        assert data["warningMessage"]

    def test_verified_member_is_rank_4(self, client, make_profile, login_member):
        login_member(make_profile(verification_status="approved", **GENERAL, **DEMOGRAPHIC))

        data = client.get("/api/member/profile-level").get_json()

        assert data["level"] == 4
        assert data["progress"] == 100
        assert data["nextLevelRequirements"] == []
        assert data["progressBarColor"] == "bg-purple-500"


class TestMemberProfileUpdate:
    def test_filling_general_reaches_rank_2(self, client, make_profile, login_member):
        profile = make_profile()
        login_member(profile)

        resp = client.patch("/api/member/profile", json={
            "first_name": "Ada",
            "last_name": "Lovelace",
            "gender": "Female",
            "date_of_birth": "1990-12-10",
            "postcode": " 3000 ",
        })

        assert resp.status_code == 200
        assert resp.get_json()["level"] == 2
        stored = fresh(Profile, profile.id)
        assert stored.date_of_birth == date(1990, 12, 10)
        assert stored.postcode == "3000"

    def test_list_fields_drop_blank_entries(self, client, make_profile, login_member):
        profile = make_profile(**GENERAL)
        login_member(profile)

        resp = client.patch("/api/member/profile", json={"languages_spoken": ["English", "  ", ""]})

        assert resp.status_code == 200
        assert fresh(Profile, profile.id).languages_spoken == ["English"]

    def test_cannot_self_verify(self, client, make_profile, login_member):
        profile = make_profile(**GENERAL, **DEMOGRAPHIC)
        login_member(profile)

        resp = client.patch("/api/member/profile", json={"verification_status": "approved"})

        assert resp.status_code == 400
        assert fresh(Profile, profile.id).verification_status is None

    def test_bad_date(self, client, make_profile, login_member):
        login_member(make_profile())
        resp = client.patch("/api/member/profile", json={"date_of_birth": "not-a-date"})
        assert resp.status_code == 400

    def test_bad_type(self, client, make_profile, login_member):
        login_member(make_profile())
        resp = client.patch("/api/member/profile", json={"occupation": 12})
        assert resp.status_code == 400


class TestMemberDashboard:
    def test_counts(self, client, make_profile, make_competition, login_member):
        profile = make_profile()
        a = make_competition(title="A")
        b = make_competition(title="B")
        db.session.add_all([
            SavedCompetition(profile_id=profile.id, competition_id=a.id),
            CompetitionSubmission(profile_id=profile.id, competition_id=a.id, submission_title="one", status="submitted"),
            CompetitionSubmission(profile_id=profile.id, competition_id=b.id, submission_title="two", status="draft"),
        ])
        db.session.commit()
        login_member(profile)

        data = client.get("/api/member/dashboard").get_json()

        assert data["liked"] == 1
        assert data["joined"] == 2
        assert data["completed"] == 1
        assert data["profile_level"]["level"] == 1

    def test_like_and_unlike(self, client, make_profile, make_competition, login_member):
        profile = make_profile()
        comp = make_competition()
        login_member(profile)

        assert client.post(f"/api/member/saved/{comp.id}").status_code == 201
        assert client.post(f"/api/member/saved/{comp.id}").status_code == 200
        assert SavedCompetition.query.filter_by(profile_id=profile.id).count() == 1

        assert client.delete(f"/api/member/saved/{comp.id}").status_code == 200
        assert SavedCompetition.query.filter_by(profile_id=profile.id).count() == 0

    def test_like_unknown_competition(self, client, make_profile, login_member):
        login_member(make_profile())
        assert client.post("/api/member/saved/999").status_code == 404

    def test_like_lost_race_still_saved(self, client, make_profile, make_competition, login_member, monkeypatch):
        profile = make_profile()
        comp = make_competition()
        db.session.add(SavedCompetition(profile_id=profile.id, competition_id=comp.id))
        db.session.commit()
        login_member(profile)

        # The duplicate check runs before the other request's row lands
        class NotYetSaved:
            query = SimpleNamespace(filter_by=lambda **kw: SimpleNamespace(first=lambda: None))

            def __new__(cls, **kwargs):
                return SavedCompetition(**kwargs)

        monkeypatch.setattr("app.routes.member.SavedCompetition", NotYetSaved)

        resp = client.post(f"/api/member/saved/{comp.id}")

        assert resp.status_code == 200
        assert resp.get_json() == {"saved": True}
        assert SavedCompetition.query.filter_by(profile_id=profile.id).count() == 1


class TestAdminLogin:
    def test_valid(self, client):
        resp = client.post("/api/admin/login", json={"email": "second@example.com", "password": "test-admin-password"})
        assert resp.status_code == 200
        assert resp.get_json()["valid"] is True

    def test_wrong_password(self, client):
        resp = client.post("/api/admin/login", json={"email": "admin@example.com", "password": "nope"})
        assert resp.status_code == 401

    def test_unlisted_email(self, client):
        resp = client.post("/api/admin/login", json={"email": "member@example.com", "password": "test-admin-password"})
        assert resp.status_code == 401

    def test_admin_routes_need_login(self, client):
        assert client.get("/api/admin/competitions/expired").status_code == 403
        assert client.post("/api/admin/competitions/complete-expired").status_code == 403

    def test_logout(self, admin_client):
        admin_client.post("/api/admin/logout")
        assert admin_client.get("/api/admin/competitions/expired").status_code == 403

    def test_login_refused_without_configured_password(self, app, client):
        app.config["ADMIN_PASSWORD"] = None

        resp = client.post("/api/admin/login", json={"email": "admin@example.com", "password": ""})

        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Admin credentials not configured"
        assert client.get("/api/admin/competitions/expired").status_code == 403

    def test_no_default_password(self, monkeypatch):
        import importlib
        import app.config as config_module

        monkeypatch.delenv("ADMIN_PASSWORD", raising=False)
        reloaded = importlib.reload(config_module)
        try:
            assert reloaded.Config.ADMIN_PASSWORD is None
        finally:
            monkeypatch.undo()
            importlib.reload(config_module)


class TestAdminCompetitions:
    def test_expired_listing(self, admin_client, make_competition):
        make_competition(title="Old", end_date=date(2000, 1, 1))
        make_competition(title="New", end_date=date(2999, 1, 1))

        data = admin_client.get("/api/admin/competitions/expired").get_json()

        assert [c["title"] for c in data["competitions"]] == ["Old"]

    def test_complete_expired(self, admin_client, make_competition):
        old = make_competition(title="Old", end_date=date(2000, 1, 1))

        data = admin_client.post("/api/admin/competitions/complete-expired").get_json()

        assert data["success"] is True
        assert data["message"] == "Successfully updated 1 competitions to completed status"
        assert data["updatedCompetitions"][0]["id"] == old.id
        assert fresh(Competition, old.id).status == "completed"

    def test_manual_complete(self, admin_client, make_competition):
        comp = make_competition()

        resp = admin_client.post(f"/api/admin/competitions/{comp.id}/complete")

        assert resp.status_code == 200
        assert resp.get_json()["data"]["status"] == "completed"

    def test_manual_complete_unknown(self, admin_client):
        assert admin_client.post("/api/admin/competitions/999/complete").status_code == 404


class TestAdminVerification:
    def test_approval_unlocks_rank_4(self, admin_client, make_profile):
        profile = make_profile(**GENERAL, **DEMOGRAPHIC)

        resp = admin_client.post(f"/api/admin/profiles/{profile.id}/verification", json={"status": "approved"})

        assert resp.status_code == 200
        assert resp.get_json() == {"id": profile.id, "verification_status": "approved", "level": 4}

    def test_approval_alone_does_not_skip_ranks(self, admin_client, make_profile):
        profile = make_profile()

        resp = admin_client.post(f"/api/admin/profiles/{profile.id}/verification", json={"status": "approved"})

        assert resp.get_json()["level"] == 1

    def test_bad_status(self, admin_client, make_profile):
        profile = make_profile()
        resp = admin_client.post(f"/api/admin/profiles/{profile.id}/verification", json={"status": "maybe"})
        assert resp.status_code == 400

    def test_unknown_profile(self, admin_client):
        resp = admin_client.post("/api/admin/profiles/999/verification", json={"status": "approved"})
        assert resp.status_code == 404

    @pytest.fixture
    def sent(self, app, monkeypatch):
        app.config["RESEND_API_KEY"] = "re_test"
        outbox = []
        monkeypatch.setattr("resend.Emails.send", lambda params: outbox.append(params) or {"id": "email_1"})
        return outbox

    def test_rank_4_email_on_full_approval(self, admin_client, make_profile, sent):
        profile = make_profile(**GENERAL, **DEMOGRAPHIC)

        admin_client.post(f"/api/admin/profiles/{profile.id}/verification", json={"status": "approved"})

        assert len(sent) == 1
        assert sent[0]["to"] == [profile.email]
        assert "You've reached Rank 4" in sent[0]["html"]

    def test_partial_profile_email_lists_next_steps(self, admin_client, make_profile, sent):
        profile = make_profile()

        admin_client.post(f"/api/admin/profiles/{profile.id}/verification", json={"status": "approved"})

        html = sent[0]["html"]
        assert "Rank 4" not in html
        assert "currently at Rank 1" in html
        assert "<li>First Name</li>" in html

    def test_rank_2_email_escapes_requirements(self, admin_client, make_profile, sent):
        profile = make_profile(**GENERAL)

        admin_client.post(f"/api/admin/profiles/{profile.id}/verification", json={"status": "approved"})

        html = sent[0]["html"]
        assert "currently at Rank 2" in html
        assert "Demographic &amp; Lifestyle" in html
        assert "<li>Interests</li>" in html

    def test_rejection_email(self, admin_client, make_profile, sent):
        profile = make_profile(**GENERAL, **DEMOGRAPHIC)

        admin_client.post(f"/api/admin/profiles/{profile.id}/verification", json={"status": "rejected"})

        assert "couldn't verify" in sent[0]["html"]
        assert "Rank 4" not in sent[0]["html"]

    def test_no_email_when_status_unchanged(self, admin_client, make_profile, sent):
        profile = make_profile(verification_status="approved")

        admin_client.post(f"/api/admin/profiles/{profile.id}/verification", json={"status": "approved"})

        assert sent == []


class TestContact:
    PAYLOAD = {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "subject": "Hello",
        "message": "Question about prizes",
    }

    def test_missing_fields(self, client):
        resp = client.post("/api/contact", json={**self.PAYLOAD, "subject": "  "})
        assert resp.status_code == 400
        assert resp.get_json() == {"error": "All fields are required"}

    def test_dev_mode_logs(self, client, capsys):
        resp = client.post("/api/contact", json=self.PAYLOAD)

        assert resp.status_code == 200
        assert resp.get_json() == {"message": "Message sent successfully"}
        assert "Question about prizes" in capsys.readouterr().err

    def test_sends_via_resend(self, app, client, monkeypatch):
        sent = []
        monkeypatch.setattr("resend.Emails.send", lambda params: sent.append(params))
        app.config["RESEND_API_KEY"] = "re_test"

        resp = client.post("/api/contact", json=self.PAYLOAD)

        assert resp.status_code == 200
        assert sent[0]["to"] == ["inbox@example.com"]
        assert sent[0]["subject"] == "Contact Form: Hello"
        assert "From: Ada Lovelace" in sent[0]["text"]

    def test_send_failure(self, app, client, monkeypatch):
        def boom(params):
            raise RuntimeError("down")

        monkeypatch.setattr("resend.Emails.send", boom)
        app.config["RESEND_API_KEY"] = "re_test"

        resp = client.post("/api/contact", json=self.PAYLOAD)

        assert resp.status_code == 500
        assert resp.get_json() == {"error": "Failed to send message"}
