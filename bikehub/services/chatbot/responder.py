import logging
import random

from sqlalchemy.exc import SQLAlchemyError

from bikehub.core.config import settings
from bikehub.core.metrics import CHATBOT_RESPONSES
from bikehub.services.chatbot.catalog import BikeCatalog
from bikehub.services.chatbot.extraction import (
    extract_alternative_bike_names,
    extract_bike_name_candidates,
    extract_bike_names,
    parse_leading_number,
)
from bikehub.services.chatbot.formatting import (
    compare_bikes,
    format_bike_specs,
    format_mileage_ranking,
    format_power_ranking,
    format_price_ranking,
)
from bikehub.services.chatbot.rules import (
    DEFAULT_RESPONSE,
    MILEAGE_WORDS,
    PERFORMANCE_WORDS,
    PRICE_WORDS,
    RECOMMEND_WORDS,
    SPEC_QUERY_WORDS,
    contains_any,
    match_rule,
)

logger = logging.getLogger(__name__)

ONE_BIKE_MISSING = "I found one bike but couldn't find the other. Please check the bike names and try again."
BOTH_BIKES_MISSING = (
    "I couldn't find those bikes. Please check the bike names and try again. "
    "You can search for bikes on our bikes page."
)


def _answer_comparison(message: str, catalog: BikeCatalog) -> str | None:
    names = extract_bike_names(message)
    if names is None:
        return _answer_alternative(message, catalog)
    first = catalog.find_one(names[0])
    second = catalog.find_one(names[1])
    if first is not None and second is not None:
        return compare_bikes(first, second)
    if first is not None or second is not None:
        return ONE_BIKE_MISSING
    return BOTH_BIKES_MISSING


def _answer_alternative(message: str, catalog: BikeCatalog) -> str | None:
    # Plain "X or Y" is only a comparison when both names are real bikes.
    names = extract_alternative_bike_names(message)
    if names is None:
        return None
    first = catalog.find_one(names[0])
    second = catalog.find_one(names[1]) if first is not None else None
    if first is None or second is None:
        return None
    return compare_bikes(first, second)


def _answer_specification(message: str, lower_message: str, catalog: BikeCatalog) -> str | None:
    if not contains_any(lower_message, SPEC_QUERY_WORDS):
        return None
    names = extract_bike_name_candidates(message)
    if not names:
        return None

    for name in names:
        bike = catalog.find_one(name)
        if bike is not None:
            return format_bike_specs(bike)

    name = names[0]
    similar = catalog.find_many(name.split(" ")[0], limit=settings.chatbot_suggestion_limit)
    if similar:
        return f"I couldn't find \"{name}\". Did you mean: {', '.join(bike.name for bike in similar)}?"
    return (
        f"I couldn't find \"{name}\". Please check the bike name and try again. "
        "You can browse all bikes on our bikes page."
    )


def _mileage_sort_key(bike) -> float:
    mileage = parse_leading_number(bike.spec("performance", "mileage"))
    return mileage if mileage is not None else float("-inf")


def _answer_best_mileage(catalog: BikeCatalog) -> str | None:
    bikes = catalog.with_spec("performance", "mileage")
    ranked = sorted(bikes, key=_mileage_sort_key, reverse=True)[: settings.chatbot_result_limit]
    return format_mileage_ranking(ranked) if ranked else None


def _answer_cheapest(catalog: BikeCatalog) -> str | None:
    bikes = catalog.cheapest(limit=settings.chatbot_result_limit)
    return format_price_ranking(bikes) if bikes else None


def _answer_most_powerful(catalog: BikeCatalog) -> str | None:
    bikes = catalog.with_spec("engine", "maxPower")[: settings.chatbot_result_limit]
    return format_power_ranking(bikes) if bikes else None


def _attempt(source: str, answer, *args) -> str | None:
    try:
        return answer(*args)
    except SQLAlchemyError:
        logger.exception("chatbot_lookup_failed source=%s", source)
        return None


def find_response(message: str, catalog: BikeCatalog, rng: random.Random | None = None) -> str:
    """Answer a chat message, trying each rule in precedence order.

    Catalog failures are logged and treated as "no answer" so a later rule, or
    the default text, still produces a response.
    """
    lower_message = message.lower()

    response = _attempt("comparison", _answer_comparison, message, catalog)
    if response is not None:
        return _record("comparison", response)

    response = _attempt("specification", _answer_specification, message, lower_message, catalog)
    if response is not None:
        return _record("specification", response)

    if contains_any(lower_message, RECOMMEND_WORDS):
        if contains_any(lower_message, MILEAGE_WORDS):
            response = _attempt("best_mileage", _answer_best_mileage, catalog)
            if response is not None:
                return _record("best_mileage", response)
        if contains_any(lower_message, PRICE_WORDS):
            response = _attempt("cheapest", _answer_cheapest, catalog)
            if response is not None:
                return _record("cheapest", response)
        if contains_any(lower_message, PERFORMANCE_WORDS):
            response = _attempt("most_powerful", _answer_most_powerful, catalog)
            if response is not None:
                return _record("most_powerful", response)

    rule = match_rule(lower_message)
    if rule is not None:
        return _record("keyword", (rng or random).choice(rule.responses))

    return _record("default", DEFAULT_RESPONSE)


def _record(source: str, response: str) -> str:
    CHATBOT_RESPONSES.labels(source=source).inc()
    return response
