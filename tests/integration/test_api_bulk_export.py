import csv
import io

from fastapi.testclient import TestClient
import pytest

from ideahub.domain.models import IdeaStatus
from tests.integration.api_support import ADMIN, EVALUATOR, SUBMITTER, auth_headers, build_test_app, seed_ideas


@pytest.mark.integration
def test_bulk_status_update_accepts_one_hundred_ids() -> None:
    app, repository = build_test_app()
    ids = seed_ideas(repository, 100)

    with TestClient(app) as client:
        response = client.post(
            "/api/evaluation-queue/bulk-status-update",
            json={"item_ids": ids, "status": "UNDER_REVIEW"},
            headers=auth_headers(EVALUATOR),
        )

    assert response.status_code == 200
    assert response.json() == {"updated": 100, "requested": 100}
    assert {row.status for row in repository.ideas.values()} == {IdeaStatus.UNDER_REVIEW}


@pytest.mark.integration
def test_bulk_status_update_rejects_one_hundred_one_ids_without_changes() -> None:
    app, repository = build_test_app()
    ids = seed_ideas(repository, 101)

    with TestClient(app) as client:
        response = client.post(
            "/api/evaluation-queue/bulk-status-update",
            json={"item_ids": ids, "status": "ACCEPTED"},
            headers=auth_headers(ADMIN),
        )

    assert response.status_code == 400
    assert response.json()["detail"] == "Bulk operations limited to 100 items maximum"
    assert repository.bulk_writes == []
    assert {row.status for row in repository.ideas.values()} == {IdeaStatus.SUBMITTED}


@pytest.mark.integration
def test_bulk_endpoints_require_reviewer_role() -> None:
    app, repository = build_test_app()
    ids = seed_ideas(repository, 2)

    with TestClient(app) as client:
        status_update = client.post(
            "/api/evaluation-queue/bulk-status-update",
            json={"item_ids": ids, "status": "ACCEPTED"},
            headers=auth_headers(SUBMITTER),
        )
        assign = client.post(
            "/api/evaluation-queue/bulk-assign",
            json={"item_ids": ids, "assignee_id": EVALUATOR[0]},
            headers=auth_headers(SUBMITTER),
        )

    assert status_update.status_code == 403
    assert assign.status_code == 403
    assert assign.json()["required_roles"] == ["evaluator", "admin"]
    assert repository.bulk_writes == []


@pytest.mark.integration
def test_bulk_assign_and_malformed_payloads() -> None:
    app, repository = build_test_app()
    ids = seed_ideas(repository, 3)

    with TestClient(app) as client:
        assigned = client.post(
            "/api/evaluation-queue/bulk-assign",
            json={"item_ids": ids, "assignee_id": EVALUATOR[0]},
            headers=auth_headers(ADMIN),
        )
        empty = client.post(
            "/api/evaluation-queue/bulk-assign",
            json={"item_ids": [], "assignee_id": EVALUATOR[0]},
            headers=auth_headers(ADMIN),
        )
        not_a_list = client.post(
            "/api/evaluation-queue/bulk-status-update",
            json={"item_ids": "everything", "status": "ACCEPTED"},
            headers=auth_headers(ADMIN),
        )

    assert assigned.json() == {"assigned": 3, "requested": 3}
    assert {repository.ideas[idea_id].assignee_id for idea_id in ids} == {EVALUATOR[0]}
    assert empty.status_code == 400
    assert empty.json()["detail"] == "Invalid item_ids. Must be a non-empty array"
    assert not_a_list.status_code == 400


@pytest.mark.integration
@pytest.mark.parametrize(("count", "expected_status", "expected_rows"), [(0, 200, 0), (100, 200, 100), (101, 400, None)])
def test_export_row_counts(count: int, expected_status: int, expected_rows: int | None) -> None:
    app, repository = build_test_app()
    ids = seed_ideas(repository, min(count, 100))
    if count > 100:
        ids = ids + [f"idea_unknown_{idx}" for idx in range(count - 100)]

    with TestClient(app) as client:
        response = client.get(
            "/api/evaluation-queue/export",
            params={"ids": ",".join(ids)},
            headers=auth_headers(ADMIN),
        )

    assert response.status_code == expected_status
    if expected_rows is None:
        assert response.json()["detail"] == "CSV export limited to 100 items maximum"
        return

    assert response.headers["content-type"].startswith("text/csv")
    assert response.headers["content-disposition"] == 'attachment; filename="ideas-export.csv"'
    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[0] == ["Submitter", "Title", "Category", "Date", "Status"]
    assert len(rows) - 1 == expected_rows


@pytest.mark.integration
def test_export_preserves_request_order() -> None:
    app, repository = build_test_app()
    ids = seed_ideas(repository, 3)

    with TestClient(app) as client:
        response = client.get(
            "/api/evaluation-queue/export",
            params={"ids": f"{ids[2]}, {ids[0]},,{ids[2]}"},
            headers=auth_headers(ADMIN),
        )

    rows = list(csv.DictReader(io.StringIO(response.text)))
    assert [row["Title"] for row in rows] == ["Seeded idea 2", "Seeded idea 0"]
    assert rows[0]["Submitter"] == "Seeder 2"


@pytest.mark.integration
def test_export_requires_ids_or_status_filter() -> None:
    app, repository = build_test_app()
    seed_ideas(repository, 2, status=IdeaStatus.ACCEPTED)
    seed_ideas(repository, 1)

    with TestClient(app) as client:
        missing = client.get("/api/evaluation-queue/export", headers=auth_headers(ADMIN))
        by_status = client.get(
            "/api/evaluation-queue/export",
            params={"status": "ACCEPTED"},
            headers=auth_headers(ADMIN),
        )
        denied = client.get("/api/evaluation-queue/export", params={"ids": "x"}, headers=auth_headers(SUBMITTER))

    assert missing.status_code == 400
    assert missing.json()["field"] == "ids"
    assert len(list(csv.DictReader(io.StringIO(by_status.text)))) == 2
    assert denied.status_code == 403


@pytest.mark.integration
def test_export_bound_counts_blank_segments() -> None:
    app, repository = build_test_app()
    ids = seed_ideas(repository, 100)

    with TestClient(app) as client:
        response = client.get(
            "/api/evaluation-queue/export",
            params={"ids": ",".join(ids) + ",,"},
            headers=auth_headers(ADMIN),
        )

    assert response.status_code == 400
    assert response.json()["detail"] == "CSV export limited to 100 items maximum"
