"""
Test suite for job posting endpoints.

Tests cover:
- Creation (single and bulk)
- Retrieval and 404 handling
- Listing: filters, sorting, pagination and the total count
- Update field restrictions
- Cascading deletion
"""

import pytest
from fastapi.testclient import TestClient
from jobboard.models.candidate import Candidate
from jobboard.models.job_posting import JobPosting
from main import create_app


def seed_postings(client, descriptions):
    response = client.post(
        "/jobpostings",
        params={"bulk": "on"},
        json=[{"description": d, "deadline": f"2026-0{i + 1}-15"} for i, d in enumerate(descriptions)],
    )
    assert response.status_code == 201


class TestJobPostingCreation:
    """Tests for job posting creation endpoint"""

    def test_create_and_read_back(self, client):
        response = client.post("/jobpostings", json={"description": "Data engineer", "deadline": "2026-11-30"})

        assert response.status_code == 201
        assert response.json() == {"message": "created"}

        response = client.get("/jobpostings/1")
        assert response.status_code == 200
        assert response.json() == {"id": 1, "description": "Data engineer", "deadline": "2026-11-30"}

    def test_create_ignores_unknown_fields_and_id(self, client):
        response = client.post("/jobpostings", json={"id": 42, "description": "Designer", "salary": 10})
        assert response.status_code == 201

        assert client.get("/jobpostings/42").status_code == 404
        data = client.get("/jobpostings/1").json()
        assert data["description"] == "Designer"
        assert data["deadline"] is None

    def test_create_with_short_description_is_server_error(self, client):
        response = client.post("/jobpostings", json={"description": "ab"})

        assert response.status_code == 500
        assert response.json() == {"message": "server error"}
        assert client.get("/jobpostings").json()["count"] == 0

    def test_create_with_unparsable_deadline_is_server_error(self, client):
        response = client.post("/jobpostings", json={"description": "Tester", "deadline": "someday"})
        assert response.status_code == 500
        assert response.json() == {"message": "server error"}

    def test_bulk_create(self, client):
        seed_postings(client, ["First job", "Second job", "Third job"])

        data = client.get("/jobpostings").json()
        assert data["count"] == 3
        assert [r["description"] for r in data["records"]] == ["First job", "Second job", "Third job"]

    def test_bulk_create_is_all_or_nothing(self, client):
        response = client.post(
            "/jobpostings",
            params={"bulk": "on"},
            json=[{"description": "Valid posting"}, {"description": "no"}],
        )

        assert response.status_code == 500
        assert client.get("/jobpostings").json()["count"] == 0

    def test_array_without_bulk_flag_is_server_error(self, client):
        response = client.post("/jobpostings", json=[{"description": "Valid posting"}])
        assert response.status_code == 500

    def test_bulk_flag_with_object_is_server_error(self, client):
        response = client.post("/jobpostings", params={"bulk": "on"}, json={"description": "Valid posting"})
        assert response.status_code == 500


class TestJobPostingRetrieval:
    """Tests for single-record endpoints"""

    @pytest.mark.parametrize("method", ["get", "put", "delete"])
    def test_unknown_id_is_not_found(self, client, method):
        kwargs = {"json": {"description": "Whatever"}} if method == "put" else {}
        response = getattr(client, method)("/jobpostings/999", **kwargs)

        assert response.status_code == 404
        assert response.json() == {"message": "not found"}


class TestJobPostingListing:
    """Tests for filtering, sorting and pagination"""

    def test_empty_list(self, client):
        response = client.get("/jobpostings")

        assert response.status_code == 200
        assert response.json() == {"records": [], "count": 0}

    def test_pagination_returns_requested_page(self, client):
        seed_postings(client, ["Job 1", "Job 2", "Job 3", "Job 4", "Job 5"])

        data = client.get("/jobpostings", params={"pageSize": 2, "page": 1}).json()

        assert [r["id"] for r in data["records"]] == [3, 4]
        assert data["count"] == 5

    def test_last_page_is_partial(self, client):
        seed_postings(client, ["Job 1", "Job 2", "Job 3", "Job 4", "Job 5"])

        data = client.get("/jobpostings", params={"pageSize": 2, "page": 2}).json()
        assert [r["id"] for r in data["records"]] == [5]

    def test_page_size_defaults_to_two(self, client):
        seed_postings(client, ["Job 1", "Job 2", "Job 3", "Job 4", "Job 5"])

        data = client.get("/jobpostings", params={"page": 0}).json()
        assert [r["id"] for r in data["records"]] == [1, 2]

        data = client.get("/jobpostings", params={"page": 1, "pageSize": "lots"}).json()
        assert [r["id"] for r in data["records"]] == [3, 4]

    def test_without_page_everything_is_returned(self, client):
        seed_postings(client, ["Job 1", "Job 2", "Job 3", "Job 4", "Job 5"])

        data = client.get("/jobpostings", params={"pageSize": 2}).json()
        assert len(data["records"]) == 5

    def test_description_filter_is_substring_match(self, client):
        seed_postings(client, ["Senior Python dev", "Java developer", "Python intern"])

        data = client.get("/jobpostings", params={"description": "Python"}).json()

        assert [r["description"] for r in data["records"]] == ["Senior Python dev", "Python intern"]
        # count is the unfiltered total
        assert data["count"] == 3

    def test_deadline_filter(self, client):
        seed_postings(client, ["Job 1", "Job 2", "Job 3"])

        data = client.get("/jobpostings", params={"deadline": "2026-02"}).json()
        assert [r["description"] for r in data["records"]] == ["Job 2"]

    def test_unknown_query_keys_are_not_filters(self, client):
        seed_postings(client, ["Job 1", "Job 2"])

        data = client.get("/jobpostings", params={"id": "1", "salary": "high"}).json()
        assert len(data["records"]) == 2

    def test_filters_and_pagination_combine(self, client):
        seed_postings(client, ["Python A", "Java B", "Python C", "Python D", "Go E"])

        data = client.get("/jobpostings", params={"description": "Python", "pageSize": 2, "page": 1}).json()

        assert [r["description"] for r in data["records"]] == ["Python D"]
        assert data["count"] == 5

    def test_sort_ascending_by_default(self, client):
        seed_postings(client, ["Charlie", "Alpha", "Bravo"])

        data = client.get("/jobpostings", params={"sortField": "description"}).json()
        assert [r["description"] for r in data["records"]] == ["Alpha", "Bravo", "Charlie"]

    def test_sort_descending(self, client):
        seed_postings(client, ["Charlie", "Alpha", "Bravo"])

        data = client.get("/jobpostings", params={"sortField": "description", "sortOrder": "-1"}).json()
        assert [r["description"] for r in data["records"]] == ["Charlie", "Bravo", "Alpha"]

    def test_other_sort_order_values_mean_ascending(self, client):
        seed_postings(client, ["Charlie", "Alpha", "Bravo"])

        data = client.get("/jobpostings", params={"sortField": "deadline", "sortOrder": "1"}).json()
        assert [r["description"] for r in data["records"]] == ["Charlie", "Alpha", "Bravo"]

    def test_sort_then_paginate(self, client):
        seed_postings(client, ["Job 1", "Job 2", "Job 3", "Job 4", "Job 5"])

        data = client.get(
            "/jobpostings", params={"sortField": "id", "sortOrder": "-1", "pageSize": 2, "page": 0}
        ).json()
        assert [r["id"] for r in data["records"]] == [5, 4]

    def test_unknown_sort_field_is_server_error(self, client):
        seed_postings(client, ["Job 1"])

        response = client.get("/jobpostings", params={"sortField": "id; DROP TABLE candidates"})

        assert response.status_code == 500
        assert response.json() == {"message": "server error"}


class TestJobPostingUpdate:
    """Tests for job posting updates"""

    def test_update_description_and_deadline(self, client):
        client.post("/jobpostings", json={"description": "Old text", "deadline": "2026-01-01"})

        response = client.put("/jobpostings/1", json={"description": "New text", "deadline": "2027-01-01"})

        assert response.status_code == 202
        assert response.json() == {"message": "accepted"}
        assert client.get("/jobpostings/1").json() == {
            "id": 1, "description": "New text", "deadline": "2027-01-01"
        }

    def test_partial_update_keeps_other_fields(self, client):
        client.post("/jobpostings", json={"description": "Old text", "deadline": "2026-01-01"})

        client.put("/jobpostings/1", json={"description": "New text"})

        assert client.get("/jobpostings/1").json()["deadline"] == "2026-01-01"

    def test_update_cannot_change_id(self, client):
        client.post("/jobpostings", json={"description": "Old text"})

        response = client.put("/jobpostings/1", json={"id": 7, "description": "New text"})

        assert response.status_code == 202
        assert client.get("/jobpostings/1").json()["description"] == "New text"
        assert client.get("/jobpostings/7").status_code == 404

    def test_invalid_update_is_server_error_and_not_applied(self, client):
        client.post("/jobpostings", json={"description": "Old text"})

        response = client.put("/jobpostings/1", json={"description": "x"})

        assert response.status_code == 500
        assert client.get("/jobpostings/1").json()["description"] == "Old text"


class TestJobPostingDeletion:
    """Tests for job posting deletion"""

    def test_delete(self, client):
        client.post("/jobpostings", json={"description": "Short lived"})

        response = client.delete("/jobpostings/1")

        assert response.status_code == 202
        assert response.json() == {"message": "accepted"}
        assert client.get("/jobpostings/1").status_code == 404

    def test_delete_removes_candidates(self, client, db_session, sample_candidate_data):
        client.post("/jobpostings", json={"description": "With applicants"})
        client.post("/jobpostings", json={"description": "Untouched"})
        for _ in range(3):
            assert client.post("/jobpostings/1/candidates", json=sample_candidate_data).status_code == 201
        client.post("/jobpostings/2/candidates", json=sample_candidate_data)

        response = client.delete("/jobpostings/1")

        assert response.status_code == 202
        assert db_session.query(Candidate).filter(Candidate.job_posting_id == 1).count() == 0
        assert db_session.query(Candidate).count() == 1
        assert db_session.query(JobPosting).count() == 1


class TestOutOfRangeInput:
    """Numbers too large for Python or the database still get the JSON error body"""

    def test_huge_page_size_falls_back_to_default(self, client):
        seed_postings(client, ["Job 1", "Job 2", "Job 3"])

        response = client.get("/jobpostings", params={"pageSize": "9" * 5000, "page": 0})

        assert response.status_code == 200
        assert [r["id"] for r in response.json()["records"]] == [1, 2]

    def test_huge_page_counts_as_absent(self, client):
        seed_postings(client, ["Job 1", "Job 2", "Job 3"])

        response = client.get("/jobpostings", params={"page": "9" * 5000})

        assert response.status_code == 200
        assert len(response.json()["records"]) == 3

    @pytest.mark.parametrize("method", ["get", "put", "delete"])
    def test_id_beyond_integer_column_is_server_error(self, client, method):
        kwargs = {"json": {"description": "Whatever"}} if method == "put" else {}
        response = getattr(client, method)("/jobpostings/999999999999999999999999999999", **kwargs)

        assert response.status_code == 500
        assert response.headers["content-type"] == "application/json"
        assert response.json() == {"message": "server error"}

    def test_unexpected_exception_is_json_server_error(self, store):
        app = create_app(store=store)

        @app.get("/explode")
        def explode():
            raise RuntimeError("boom")

        with TestClient(app, raise_server_exceptions=False) as test_client:
            response = test_client.get("/explode")

        assert response.status_code == 500
        assert response.json() == {"message": "server error"}
