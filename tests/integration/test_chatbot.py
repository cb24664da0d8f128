from conftest import make_bike

from bikehub.services.chatbot import DEFAULT_RESPONSE, SUGGESTED_QUESTIONS
from bikehub.services.chatbot.responder import BOTH_BIKES_MISSING, ONE_BIKE_MISSING
from bikehub.services.chatbot.rules import CHATBOT_RULES


def _ask(client, message):
    response = client.post("/chatbot", json={"message": message})
    assert response.status_code == 200, response.text
    return response.json()["response"]


def test_comparison_reports_price_mileage_and_recommendation(client, catalog_seed):
    answer = _ask(client, "Compare Pulsar NS200 vs Apache RTR 160")

    assert answer.startswith("**Comparison: Pulsar NS200 vs Apache RTR 160**")
    assert "Apache RTR 160 is ₹20,000 cheaper than Pulsar NS200." in answer
    assert "Apache RTR 160 has better mileage (40 kmpl vs 35 kmpl)" in answer
    assert "Pulsar NS200 has more power (24.5 PS vs 16 PS)" in answer
    assert "Apache RTR 160 offers better value with higher mileage and lower price." in answer


def test_versus_form_needs_no_keyword(client, catalog_seed):
    answer = _ask(client, "pulsar versus apache")

    assert answer.startswith("**Comparison: Pulsar NS200 vs Apache RTR 160**")


def test_comparison_with_one_unknown_bike(client, catalog_seed):
    assert _ask(client, "Compare Pulsar NS200 vs Splendor Plus") == ONE_BIKE_MISSING


def test_comparison_with_two_unknown_bikes(client, catalog_seed):
    assert _ask(client, "Compare Splendor Plus vs Classic 350") == BOTH_BIKES_MISSING


def test_specification_lookup_lists_non_empty_fields(client, catalog_seed):
    answer = _ask(client, "Pulsar NS200 specs")

    assert answer.startswith("Here are the specifications for Pulsar NS200:")
    assert "**Engine:**" in answer
    assert "- Displacement: 199.5 cc" in answer
    assert "- Max Power: 24.5 PS" in answer
    assert "Cooling" not in answer
    assert "**Performance:**" in answer
    assert "- Mileage: 35 kmpl" in answer
    assert "- Top Speed: 136 km/h" in answer
    assert "**Dimensions:**" not in answer
    assert "**Price:** ₹200,000" in answer


def test_specification_lookup_suggests_similar_names(client, catalog_seed):
    answer = _ask(client, "Show me specs of Pulsar 220")

    assert answer == 'I couldn\'t find "pulsar 220". Did you mean: Pulsar NS200?'


def test_specification_lookup_keeps_trigger_word_inside_name(client, db):
    db.add_all(
        [
            make_bike("Dominar 400", "Bajaj", engine={"displacement": "373 cc"}),
            make_bike("Speed 400", "Triumph", engine={"displacement": "398 cc"}),
        ]
    )
    db.commit()

    answer = _ask(client, "Triumph Speed 400 specs")

    assert answer.startswith("Here are the specifications for Speed 400:")
    assert "- Displacement: 398 cc" in answer
    assert "Dominar" not in answer


def test_or_question_with_comparison_word_compares(client, catalog_seed):
    answer = _ask(client, "Pulsar or Apache, which is better?")

    assert answer.startswith("**Comparison: Pulsar NS200 vs Apache RTR 160**")


def test_bare_or_between_known_bikes_compares(client, catalog_seed):
    answer = _ask(client, "Pulsar NS200 or Apache RTR 160")

    assert answer.startswith("**Comparison: Pulsar NS200 vs Apache RTR 160**")


def test_best_mileage_is_ranked_numerically(client, catalog_seed):
    answer = _ask(client, "Which bike has the best mileage?")

    assert answer.startswith("For best mileage, I recommend: Apache RTR 160 (40 kmpl), Pulsar NS200 (35 kmpl).")


def test_affordable_recommendation_lists_cheapest_first(client, catalog_seed):
    answer = _ask(client, "Recommend affordable bikes")

    assert answer.startswith("Most affordable bikes: Apache RTR 160 (₹180,000), Pulsar NS200 (₹200,000).")


def test_keyword_rule_answers_booking_questions(client):
    booking_rule = next(rule for rule in CHATBOT_RULES if "booking" in rule.keywords)

    assert _ask(client, "How do I book a test ride?") in booking_rule.responses


def test_unmatched_message_gets_default_response(client):
    assert _ask(client, "Good morning") == DEFAULT_RESPONSE


def test_empty_message_is_rejected(client):
    for payload in ({}, {"message": ""}, {"message": "   "}):
        response = client.post("/chatbot", json=payload)
        assert response.status_code == 400
        assert response.json()["detail"] == "Message is required"


def test_suggestions_are_static(client):
    response = client.get("/chatbot/suggestions")

    assert response.status_code == 200
    assert response.json() == {"suggestions": list(SUGGESTED_QUESTIONS)}
