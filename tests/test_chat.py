"""Scripted assistant and rule-based recommendations."""

import pytest

from afyaconnect.services.chat import DEFAULT_REPLY, reply_to
from afyaconnect.services.recommendations import recommend


def test_chat_default_reply(client):
    resp = client.post("/api/chat", json={"message": "What is the meaning of life?"})
    assert resp.status_code == 200
    assert resp.json() == {"response": DEFAULT_REPLY}


def test_chat_keyword_reply(client):
    resp = client.post("/api/chat", json={"message": "How much does surgery cost?"})
    assert "price range" in resp.json()["response"]


def test_first_matching_rule_wins():
    assert reply_to("Emergency! Which hospital?") == reply_to("emergency")


@pytest.mark.parametrize("payload", [{"message": ""}, {"message": "   "}, {}])
def test_chat_requires_message(client, payload):
    resp = client.post("/api/chat", json=payload)
    assert resp.status_code == 400
    assert "message" in resp.json()["fields"]


def test_keywords_match_whole_words():
    # "hip" contains "hi" but must not trigger the greeting
    assert reply_to("my hip") == DEFAULT_REPLY


def test_recommendation_for_chest_pain(client):
    resp = client.post("/api/recommendations", json={"symptoms": "Chest pain when climbing stairs"})
    assert resp.status_code == 200
    body = resp.json()
    assert [r["id"] for r in body] == ["cardio-1"]
    assert body[0]["specialty"] == "Cardiology"
    assert body[0]["treatmentName"] == "Cardiac Evaluation & Treatment"


def test_all_matching_rules_in_table_order():
    ids = [r.id for r in recommend("blurry vision and knee pain")]
    assert ids == ["ortho-1", "ophth-1"]


def test_no_match_gives_general_assessment():
    result = recommend("feeling tired")
    assert [r.treatment_name for r in result] == ["General Health Assessment"]


def test_recommendations_require_symptoms(client):
    resp = client.post("/api/recommendations", json={"symptoms": "  "})
    assert resp.status_code == 400
