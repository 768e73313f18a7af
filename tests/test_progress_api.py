from utils.date_utils import today_str


def test_new_child_end_to_end(client, parent, kid_id):
    headers = parent["headers"]

    response = client.post(
        f"/api/progress/{kid_id}/update",
        json={"learningMinutes": 20, "completedItems": ["story-1"]},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json() == {"message": "Progress updated successfully", "learningMinutes": 20}

    progress = client.get(f"/api/progress/{kid_id}", headers=headers).json()["progress"]
    assert progress["date"] == today_str()
    assert progress["learningMinutes"] == 20
    assert [item["id"] for item in progress["completedItems"]] == ["story-1"]

    response = client.post(
        f"/api/progress/{kid_id}/quiz-results",
        json={"quizId": "quiz-1", "score": 4, "totalQuestions": 5},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json() == {
        "message": "Quiz results recorded successfully",
        "score": 80,
        "badgeEarned": "badge-2",
    }

    progress = client.get(f"/api/progress/{kid_id}", headers=headers).json()["progress"]
    quiz = progress["quizScores"]["quiz-1"]
    assert quiz["score"] == 4
    assert quiz["totalQuestions"] == 5
    assert quiz["percentage"] == 80
    assert progress["learningMinutes"] == 20
    assert "badge-2" in progress["badgesEarned"]
    assert "badge-1" in progress["badgesEarned"]


def test_progress_placeholder_for_day_without_activity(client, parent, kid_id):
    response = client.get(f"/api/progress/{kid_id}?date=2020-02-02", headers=parent["headers"])
    assert response.status_code == 200
    assert response.json()["progress"] == {
        "childId": kid_id,
        "date": "2020-02-02",
        "learningMinutes": 0,
        "completedItems": [],
        "quizScores": {},
        "streakCount": 0,
        "badgesEarned": [],
    }


def test_invalid_date_is_rejected(client, parent, kid_id):
    assert client.get(f"/api/progress/{kid_id}?date=2020-13-45", headers=parent["headers"]).status_code == 400
    assert client.get(f"/api/progress/{kid_id}?date=yesterday", headers=parent["headers"]).status_code == 400


def test_minutes_accumulate_across_updates(client, parent, kid_id):
    for minutes in (10, 15, 0):
        response = client.post(
            f"/api/progress/{kid_id}/update",
            json={"learningMinutes": minutes},
            headers=parent["headers"],
        )
    assert response.json()["learningMinutes"] == 25


def test_negative_minutes_rejected(client, parent, kid_id):
    response = client.post(
        f"/api/progress/{kid_id}/update",
        json={"learningMinutes": -5},
        headers=parent["headers"],
    )
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "learningMinutes"


def test_missing_minutes_rejected(client, parent, kid_id):
    response = client.post(
        f"/api/progress/{kid_id}/update",
        json={"completedItems": ["story-1"]},
        headers=parent["headers"],
    )
    assert response.status_code == 400


def test_score_above_total_rejected(client, parent, kid_id):
    response = client.post(
        f"/api/progress/{kid_id}/quiz-results",
        json={"quizId": "quiz-1", "score": 6, "totalQuestions": 5},
        headers=parent["headers"],
    )
    assert response.status_code == 400
    assert "errors" in response.json()


def test_zero_total_questions_rejected(client, parent, kid_id):
    response = client.post(
        f"/api/progress/{kid_id}/quiz-results",
        json={"quizId": "quiz-1", "score": 0, "totalQuestions": 0},
        headers=parent["headers"],
    )
    assert response.status_code == 400


def test_quiz_scores_in_update_are_validated(client, parent, kid_id):
    response = client.post(
        f"/api/progress/{kid_id}/update",
        json={"learningMinutes": 1, "quizScores": {"quiz-1": {"score": 9, "totalQuestions": 3}}},
        headers=parent["headers"],
    )
    assert response.status_code == 400


def test_requires_token(client, kid_id):
    assert client.get(f"/api/progress/{kid_id}").status_code == 401
    response = client.get(
        f"/api/progress/{kid_id}",
        headers={"Authorization": "Bearer not-a-token"},
    )
    assert response.status_code == 401


def test_other_parents_child_is_not_found(client, other_parent, kid_id):
    headers = other_parent["headers"]
    for response in (
        client.get(f"/api/progress/{kid_id}", headers=headers),
        client.post(f"/api/progress/{kid_id}/update", json={"learningMinutes": 5}, headers=headers),
        client.post(
            f"/api/progress/{kid_id}/quiz-results",
            json={"quizId": "quiz-1", "score": 1, "totalQuestions": 2},
            headers=headers,
        ),
        client.get(f"/api/progress/{kid_id}/streak", headers=headers),
        client.get(f"/api/progress/{kid_id}/badges", headers=headers),
    ):
        assert response.status_code == 404
        assert response.json()["detail"] == "Child not found or access denied"


def test_unknown_child_is_not_found(client, parent):
    response = client.get("/api/progress/no-such-kid", headers=parent["headers"])
    assert response.status_code == 404


def test_admin_can_record_for_any_child(client, admin, kid_id):
    response = client.post(
        f"/api/progress/{kid_id}/update",
        json={"learningMinutes": 7},
        headers=admin["headers"],
    )
    assert response.status_code == 200
    assert response.json()["learningMinutes"] == 7


def test_educator_cannot_reach_a_parents_child(client, educator, kid_id):
    response = client.get(f"/api/progress/{kid_id}", headers=educator["headers"])
    assert response.status_code == 404


def test_streak_endpoint(client, parent, kid_id):
    client.post(f"/api/progress/{kid_id}/update", json={"learningMinutes": 12}, headers=parent["headers"])
    response = client.get(f"/api/progress/{kid_id}/streak", headers=parent["headers"])
    assert response.status_code == 200
    assert response.json() == {
        "currentStreak": 1,
        "longestStreak": 1,
        "daysWithActivityInLast30": 1,
        "totalMinutesInLast30": 12,
    }


def test_child_badges_marks_todays_earned(client, parent, kid_id):
    client.post(
        f"/api/progress/{kid_id}/update",
        json={"learningMinutes": 60, "completedItems": [{"id": "story-7", "title": "The Fox"}]},
        headers=parent["headers"],
    )
    response = client.get(f"/api/progress/{kid_id}/badges", headers=parent["headers"])
    assert response.status_code == 200
    badges = {b["id"]: b for b in response.json()["badges"]}
    assert badges["badge-1"]["earned"] is True
    assert badges["badge-1"]["earnedDate"] == today_str()
    assert badges["badge-2"]["earned"] is False
    assert badges["badge-2"]["earnedDate"] is None
    assert badges["badge-3"]["earned"] is True


def test_completed_item_objects_keep_their_type(client, parent, kid_id):
    client.post(
        f"/api/progress/{kid_id}/update",
        json={"learningMinutes": 1, "completedItems": [{"id": "fox-tale", "type": "story"}, "fox-tale"]},
        headers=parent["headers"],
    )
    progress = client.get(f"/api/progress/{kid_id}", headers=parent["headers"]).json()["progress"]
    assert progress["completedItems"] == [
        {"id": "fox-tale", "type": "story"},
        {"id": "fox-tale", "type": "activity"},
    ]


def test_update_recomputes_client_supplied_quiz_percentage_and_date(client, parent, kid_id):
    response = client.post(
        f"/api/progress/{kid_id}/update",
        json={
            "learningMinutes": 3,
            "quizScores": {
                "quiz-1": {"score": 1, "totalQuestions": 3, "percentage": 100, "date": "not-a-date"},
            },
        },
        headers=parent["headers"],
    )
    assert response.status_code == 200

    progress = client.get(f"/api/progress/{kid_id}", headers=parent["headers"]).json()["progress"]
    quiz = progress["quizScores"]["quiz-1"]
    assert quiz["percentage"] == 33
    assert quiz["date"] == today_str()
