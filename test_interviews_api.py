"""End-to-end tests for the interview endpoints over an in-memory database."""

import pytest

from conftest import auth_headers
from prepcoach.services.validation import parse_timestamp

PDF = ("resume.pdf", b"%PDF-1.4 sample resume", "application/pdf")


async def _create(client, headers, **form):
    data = {
        "role": "Backend Engineer",
        "difficulty": "hard",
        "duration_minutes": "30",
        "scheduled_at": "2026-03-01T10:00:00Z",
        "skills": "python,sql",
    }
    data.update(form)
    return await client.post(
        "/api/v1/interviews/create", data=data, files={"resume": PDF}, headers=headers
    )


@pytest.mark.asyncio
async def test_health(client):
    res = await client.get("/health")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_requires_bearer_token(client):
    res = await client.get("/api/v1/interviews/all")
    assert res.status_code == 401
    assert res.json()["success"] is False


@pytest.mark.asyncio
async def test_create_interview(client, headers, resume_storage):
    res = await _create(client, headers)

    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    interview = body["data"]
    assert interview["status"] == "scheduled"
    assert interview["difficulty"] == "hard"
    assert interview["skills"] == ["python", "sql"]
    assert interview["resume_url"].startswith("/uploads/user1_")
    assert len(list(resume_storage.upload_dir.iterdir())) == 1


@pytest.mark.asyncio
async def test_create_without_resume(client, headers):
    res = await client.post(
        "/api/v1/interviews/create",
        data={"role": "Backend Engineer", "difficulty": "easy", "duration_minutes": "30",
              "scheduled_at": "2026-03-01T10:00:00Z"},
        headers=headers,
    )
    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert body["code"] == "VALIDATION_ERROR"
    assert "resume file is required" in body["message"].lower()


@pytest.mark.asyncio
async def test_create_with_bad_duration(client, headers):
    res = await _create(client, headers, duration_minutes="half an hour")
    assert res.status_code == 400


@pytest.mark.asyncio
async def test_list_and_get_are_scoped_to_owner(client, headers):
    created = (await _create(client, headers)).json()["data"]

    mine = await client.get("/api/v1/interviews/all", headers=headers)
    assert [i["id"] for i in mine.json()["data"]] == [created["id"]]

    theirs = await client.get("/api/v1/interviews/all", headers=auth_headers("user2"))
    assert theirs.json()["data"] == []

    res = await client.get(f"/api/v1/interviews/{created['id']}", headers=auth_headers("user2"))
    assert res.status_code == 404
    assert res.json()["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_full_lifecycle(client, headers):
    interview_id = (await _create(client, headers)).json()["data"]["id"]

    started = await client.post(f"/api/v1/interviews/{interview_id}/start", headers=headers)
    assert started.status_code == 200
    data = started.json()["data"]
    assert data["interview"]["status"] == "in-progress"
    assert data["session_id"]
    assert len(data["session"]["conversation"]) == 1
    assert data["session"]["conversation"][0]["type"] == "greeting"
    assert data["warnings"] == []

    again = await client.post(f"/api/v1/interviews/{interview_id}/start", headers=headers)
    assert again.status_code == 409
    assert again.json()["code"] == "INVALID_STATE"

    session = await client.get(f"/api/v1/interviews/{interview_id}/session", headers=headers)
    assert session.status_code == 200
    assert session.json()["data"]["interview_id"] == interview_id

    early = await client.get(f"/api/v1/interviews/{interview_id}/results", headers=headers)
    assert early.status_code == 400
    assert "not yet completed" in early.json()["message"].lower()

    ended = await client.post(
        f"/api/v1/interviews/{interview_id}/end",
        json={
            "overall_score": 85,
            "technical_score": 80,
            "communication_score": 90,
            "problem_solving_score": 85,
            "feedback": {"summary": "Good", "strengths": ["X"], "improvements": ["Y"]},
            "transcript": [
                {"speaker": "ai", "message": "Design a URL shortener"},
                {"speaker": "user", "message": "I would start with a hash of the URL"},
            ],
            "question_evaluations": [
                {"question": "Design a URL shortener", "answer": "hash", "score": 75},
                {"question": "Scale it", "answer": "shard", "score": 60},
            ],
        },
        headers=headers,
    )
    assert ended.status_code == 200
    assert ended.json()["data"]["interview"]["status"] == "completed"
    assert len(ended.json()["data"]["session"]["conversation"]) == 3
    stamps = [
        parse_timestamp(turn["timestamp"])
        for turn in ended.json()["data"]["session"]["conversation"]
    ]
    assert all(a < b for a, b in zip(stamps, stamps[1:]))

    twice = await client.post(
        f"/api/v1/interviews/{interview_id}/end", json={"overall_score": 90}, headers=headers
    )
    assert twice.status_code == 409

    results = await client.get(f"/api/v1/interviews/{interview_id}/results", headers=headers)
    assert results.status_code == 200
    body = results.json()["data"]
    assert body["feedback"]["overall_score"] == 85
    assert body["feedback"]["summary"] == "Good"
    assert body["session"]["interview_id"] == interview_id
    assert body["session"]["session_status"] == "completed"

    metrics = await client.get(f"/api/v1/interviews/{interview_id}/metrics", headers=headers)
    assert metrics.status_code == 200
    m = metrics.json()["data"]
    assert m["total_questions"] == 2
    assert m["correct_answers"] == 1
    assert m["accuracy"] == 50
    assert m["average_score"] == 67.5
    assert m["weighted_score"] == 87.75
    assert m["grade"] == "A"


@pytest.mark.asyncio
async def test_end_rejects_out_of_range_score(client, headers):
    interview_id = (await _create(client, headers)).json()["data"]["id"]
    await client.post(f"/api/v1/interviews/{interview_id}/start", headers=headers)

    res = await client.post(
        f"/api/v1/interviews/{interview_id}/end", json={"overall_score": 140}, headers=headers
    )
    assert res.status_code == 400

    interview = await client.get(f"/api/v1/interviews/{interview_id}", headers=headers)
    assert interview.json()["data"]["status"] == "in-progress"


@pytest.mark.asyncio
async def test_end_scheduled_interview_fails(client, headers):
    interview_id = (await _create(client, headers)).json()["data"]["id"]
    res = await client.post(
        f"/api/v1/interviews/{interview_id}/end", json={"overall_score": 80}, headers=headers
    )
    assert res.status_code == 409


@pytest.mark.asyncio
async def test_metrics_before_completion(client, headers):
    interview_id = (await _create(client, headers)).json()["data"]["id"]
    res = await client.get(f"/api/v1/interviews/{interview_id}/metrics", headers=headers)
    assert res.status_code == 400


@pytest.mark.asyncio
async def test_delete_interview(client, headers, resume_storage):
    interview_id = (await _create(client, headers)).json()["data"]["id"]
    await client.post(f"/api/v1/interviews/{interview_id}/start", headers=headers)

    res = await client.delete(f"/api/v1/interviews/{interview_id}", headers=headers)
    assert res.status_code == 200
    assert res.json()["data"]["warnings"] == []
    assert list(resume_storage.upload_dir.iterdir()) == []

    gone = await client.get(f"/api/v1/interviews/{interview_id}", headers=headers)
    assert gone.status_code == 404
    session = await client.get(f"/api/v1/interviews/{interview_id}/session", headers=headers)
    assert session.status_code == 404

    again = await client.delete(f"/api/v1/interviews/{interview_id}", headers=headers)
    assert again.status_code == 404
