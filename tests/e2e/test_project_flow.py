"""End-to-end tests for project join endpoints."""

from intralink.domain.value import ProjectStatus
from tests.conftest import make_project, make_user


class TestProjectJoinFlow:
    """Join request lifecycle over HTTP."""

    def test_join_approve_and_list_members(self, store, seed, client_for):
        # Arrange
        lead, learner = make_user("Lead"), make_user("Lena")
        project = make_project(lead, max_team_size=3)
        seed(
            store.users.save(lead),
            store.users.save(learner),
            store.projects.save(project),
        )
        as_lead, as_learner = client_for(lead), client_for(learner)

        # Act
        response = as_learner.post(
            f"/projects/{project.id}/join-requests",
            json={"message": "I do CAD", "skills": ["CAD"]},
        )

        # Assert
        assert response.status_code == 201
        request_id = response.json()["request_id"]
        assert response.json()["payload"]["skills"] == ["CAD"]

        incoming = as_lead.get(
            "/requests/incoming", params={"kind": "project_join"}
        ).json()["requests"]
        assert [r["request_id"] for r in incoming] == [request_id]

        # The learner cannot approve their own request
        assert (
            as_learner.post(f"/projects/join-requests/{request_id}/approve").status_code
            == 403
        )

        approved = as_lead.post(f"/projects/join-requests/{request_id}/approve")
        assert approved.status_code == 200

        members = as_learner.get(f"/projects/{project.id}/members").json()["members"]
        assert [m["user"]["user_id"] for m in members] == [str(learner.id)]
        assert members[0]["skills"] == ["CAD"]

    def test_closed_project_conflicts(self, store, seed, client_for):
        lead, learner = make_user("Lead"), make_user("Lena")
        project = make_project(lead, status=ProjectStatus.IN_PROGRESS)
        seed(
            store.users.save(lead),
            store.users.save(learner),
            store.projects.save(project),
        )

        response = client_for(learner).post(
            f"/projects/{project.id}/join-requests", json={}
        )

        assert response.status_code == 409
        assert response.json()["detail"] == "project is not accepting join requests"

    def test_malformed_project_id_is_rejected(self, store, seed, client_for):
        learner = make_user("Lena")
        seed(store.users.save(learner))

        response = client_for(learner).post("/projects/not-a-uuid/join-requests", json={})

        assert response.status_code == 422
