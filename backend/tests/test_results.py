"""Tests for tallying, reveal gating and the two results views."""
import pytest

from app.services.tally_service import reveal_allowed, reveal_threshold
from tests.conftest import (
    apply_test_setup, ballot_context, cast_test_ballot, create_test_group, error_of,
    issue_test_invites, reveal_group, submit,
)


def _status(client, group):
    resp = client.get(f"/api/groups/{group['code']}/status", params={"k": group["host_token"]})
    assert resp.status_code == 200, resp.text
    return resp.json()


def _vote_for(client, group, token, nominee_name):
    """Vote in the single configured category for the nominee with this name."""
    context = ballot_context(client, group, token)
    category = context["categories"][0]
    nominee = next(n for n in category["nominees"] if n["name"] == nominee_name)
    resp = submit(client, group, token, [{"category_id": category["id"], "nominee_id": nominee["id"]}])
    assert resp.status_code == 201, resp.text


class TestRevealThreshold:
    """ceil(max_members / 2) and the reveal predicate."""

    @pytest.mark.parametrize("max_members, threshold", [(1, 1), (2, 1), (3, 2), (4, 2), (5, 3), (10, 5)])
    def test_threshold(self, max_members, threshold):
        assert reveal_threshold(max_members) == threshold

    def test_five_members(self):
        assert reveal_allowed(None, 5, 2) is False
        assert reveal_allowed(None, 5, 3) is True

    def test_never_when_already_revealed(self):
        from datetime import datetime, timezone
        assert reveal_allowed(datetime.now(timezone.utc), 5, 5) is False

    def test_never_without_capacity(self):
        assert reveal_allowed(None, 0, 3) is False
        assert reveal_allowed(None, -1, 3) is False


class TestReveal:
    """POST /api/groups/{code}/reveal."""

    def test_not_ready(self, client):
        group = create_test_group(client, max_members=5)
        invites = issue_test_invites(client, group, 4)
        apply_test_setup(client, group, ["best_picture"])
        cast_test_ballot(client, group, invites[0]["token"])
        cast_test_ballot(client, group, invites[1]["token"])
        assert _status(client, group)["can_reveal"] is False

        resp = reveal_group(client, group)
        assert resp.status_code == 409
        assert error_of(resp) == "RevealNotReady"
        message = resp.json()["detail"]["message"]
        assert "3" in message and "2" in message

    def test_reveal_once_threshold_met(self, client):
        group = create_test_group(client, max_members=5)
        invites = issue_test_invites(client, group, 4)
        apply_test_setup(client, group, ["best_picture"])
        for invite in invites[:3]:
            cast_test_ballot(client, group, invite["token"])
        status = _status(client, group)
        assert status["counts"]["voted"] == 3
        assert status["can_reveal"] is True

        resp = reveal_group(client, group)
        assert resp.status_code == 200
        assert resp.json()["success"] is True
        assert resp.json()["reveal_at"] is not None

        status = _status(client, group)
        assert status["group"]["reveal_at"] is not None
        assert status["can_reveal"] is False

    def test_reveal_is_idempotent(self, client):
        group = create_test_group(client, max_members=2)
        apply_test_setup(client, group, ["best_picture"])
        cast_test_ballot(client, group, group["host_token"])
        first = reveal_group(client, group)
        second = reveal_group(client, group)
        assert first.status_code == second.status_code == 200
        assert first.json()["reveal_at"] == second.json()["reveal_at"]

    def test_requires_host(self, client):
        group = create_test_group(client, max_members=2)
        guest = issue_test_invites(client, group, 1)[0]
        resp = client.post(f"/api/groups/{group['code']}/reveal", params={"k": guest["token"]})
        assert resp.status_code == 401


class TestResults:
    """GET /api/groups/{code}/results and /public-results."""

    def _revealed_group(self, client):
        group = create_test_group(client, max_members=5)
        invites = issue_test_invites(client, group, 4)
        apply_test_setup(client, group, ["best_picture", "best_actor"])
        return group, invites

    def test_hidden_until_reveal(self, client):
        group, invites = self._revealed_group(client)
        cast_test_ballot(client, group, invites[0]["token"])
        resp = client.get(f"/api/groups/{group['code']}/results", params={"k": group["host_token"]})
        assert resp.status_code == 403
        assert error_of(resp) == "NotRevealedYet"
        resp = client.get(f"/api/groups/{group['code']}/public-results")
        assert resp.status_code == 403
        assert error_of(resp) == "NotRevealedYet"

    def test_host_results_require_host(self, client):
        group, _ = self._revealed_group(client)
        resp = client.get(f"/api/groups/{group['code']}/results", params={"k": "nope"})
        assert resp.status_code == 401

    def test_ranking(self, client):
        """3 votes, 1 vote, then zero-vote nominees in their original order."""
        group = create_test_group(client, max_members=5)
        invites = issue_test_invites(client, group, 4)
        apply_test_setup(client, group, ["best_picture"])
        _vote_for(client, group, group["host_token"], "Nominee C")
        _vote_for(client, group, invites[0]["token"], "Nominee C")
        _vote_for(client, group, invites[1]["token"], "Nominee A")
        _vote_for(client, group, invites[2]["token"], "Nominee C")
        assert reveal_group(client, group).status_code == 200

        resp = client.get(f"/api/groups/{group['code']}/results", params={"k": group["host_token"]})
        assert resp.status_code == 200
        data = resp.json()
        assert data["total_ballots"] == 4
        nominees = data["results"][0]["nominees"]
        assert [n["nominee_name"] for n in nominees] == [
            "Nominee C", "Nominee A", "Nominee B", "Nominee D", "Nominee E",
        ]
        assert [n["votes"] for n in nominees] == [3, 1, 0, 0, 0]

    def test_categories_in_sort_order(self, client):
        group, invites = self._revealed_group(client)
        for invite in invites[:3]:
            cast_test_ballot(client, group, invite["token"], pick=1)
        reveal_group(client, group)
        data = client.get(f"/api/groups/{group['code']}/results", params={"k": group["host_token"]}).json()
        assert [c["category_name"] for c in data["results"]] == ["Best Picture", "Best Actor"]
        for category in data["results"]:
            assert category["nominees"][0]["nominee_name"] == "Nominee B"
            assert category["nominees"][0]["votes"] == 3

    def test_public_results_list_voters_without_tokens(self, client):
        group, invites = self._revealed_group(client)
        client.patch(
            f"/api/groups/{group['code']}/invites/{invites[0]['id']}",
            params={"k": group["host_token"]},
            json={"display_name": "Carla"},
        )
        for invite in invites[:3]:
            cast_test_ballot(client, group, invite["token"])
        reveal_group(client, group)

        resp = client.get(f"/api/groups/{group['code']}/public-results")
        assert resp.status_code == 200
        data = resp.json()
        assert data["group"]["code"] == group["code"]
        assert len(data["results"]) == 2
        assert data["voters"][0] == {"display_name": "Host", "voted": False}
        assert {"display_name": "Carla", "voted": True} in data["voters"]
        assert sum(1 for v in data["voters"] if v["voted"]) == 3
        assert len(data["voters"]) == 5
        assert group["host_token"] not in resp.text
        assert all(invite["token"] not in resp.text for invite in invites)

    def test_tallies_scoped_to_group(self, client):
        group, invites = self._revealed_group(client)
        other, other_invites = self._revealed_group(client)
        for invite in invites[:3]:
            cast_test_ballot(client, group, invite["token"], pick=0)
        for invite in other_invites[:3]:
            cast_test_ballot(client, group=other, token=invite["token"], pick=4)
        reveal_group(client, group)
        data = client.get(f"/api/groups/{group['code']}/public-results").json()
        assert data["total_ballots"] == 3
        assert data["results"][0]["nominees"][0]["nominee_name"] == "Nominee A"
        assert data["results"][0]["nominees"][0]["votes"] == 3
