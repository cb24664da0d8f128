import re
from decimal import Decimal

from bikehub.db.models import Bike
from bikehub.services.chatbot.extraction import parse_leading_number

CURRENCY = "₹"

# (group, heading, ordered (field, label) pairs). Unlisted fields of a group follow the listed ones.
SPEC_SECTIONS: tuple[tuple[str, str, tuple[tuple[str, str], ...]], ...] = (
    (
        "engine",
        "Engine",
        (
            ("displacement", "Displacement"),
            ("maxPower", "Max Power"),
            ("maxTorque", "Max Torque"),
            ("cooling", "Cooling"),
            ("transmission", "Transmission"),
        ),
    ),
    (
        "performance",
        "Performance",
        (
            ("mileage", "Mileage"),
            ("topSpeed", "Top Speed"),
            ("fuelCapacity", "Fuel Capacity"),
        ),
    ),
    (
        "dimensions",
        "Dimensions",
        (
            ("kerbWeight", "Weight"),
            ("seatHeight", "Seat Height"),
            ("groundClearance", "Ground Clearance"),
            ("length", "Length"),
            ("width", "Width"),
            ("height", "Height"),
            ("wheelbase", "Wheelbase"),
        ),
    ),
)

CONSIDER_PRIORITIES = "Consider your priorities: budget, fuel efficiency, power, and features."


def format_price(value) -> str:
    amount = Decimal(str(value))
    if amount == amount.to_integral_value():
        return f"{int(amount):,}"
    return f"{amount:,.2f}"


def _label_for(field: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", " ", field).title()


def _has_value(value) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return True


def _section_lines(bike: Bike, group: str, fields: tuple[tuple[str, str], ...]) -> list[str]:
    values = (bike.specifications or {}).get(group) or {}
    if not isinstance(values, dict):
        return []
    known = dict(fields)
    ordered = [field for field, _ in fields] + [field for field in values if field not in known]
    return [
        f"- {known.get(field) or _label_for(field)}: {values[field]}"
        for field in ordered
        if _has_value(values.get(field))
    ]


def format_bike_specs(bike: Bike) -> str:
    parts = [f"Here are the specifications for {bike.name}:\n\n"]
    for group, heading, fields in SPEC_SECTIONS:
        lines = _section_lines(bike, group, fields)
        if lines:
            parts.append(f"**{heading}:**\n" + "\n".join(lines) + "\n\n")
    if bike.price:
        parts.append(f"**Price:** {CURRENCY}{format_price(bike.price)}\n")
    return "".join(parts)


def _both_numbers(first, second) -> tuple[float, float] | None:
    if not (_has_value(first) and _has_value(second)):
        return None
    first_number = parse_leading_number(first)
    second_number = parse_leading_number(second)
    if first_number is None or second_number is None:
        return None
    return first_number, second_number


def _price_line(first: Bike, second: Bike) -> str | None:
    if not (first.price and second.price):
        return None
    difference = Decimal(str(first.price)) - Decimal(str(second.price))
    if difference > 0:
        return f"💰 **Price:** {second.name} is {CURRENCY}{format_price(difference)} cheaper than {first.name}."
    if difference < 0:
        return f"💰 **Price:** {first.name} is {CURRENCY}{format_price(-difference)} cheaper than {second.name}."
    return f"💰 **Price:** Both bikes have the same price ({CURRENCY}{format_price(first.price)})."


def _mileage_line(first: Bike, second: Bike) -> str | None:
    first_mileage = first.spec("performance", "mileage")
    second_mileage = second.spec("performance", "mileage")
    numbers = _both_numbers(first_mileage, second_mileage)
    if numbers is None:
        return None
    if numbers[0] > numbers[1]:
        return f"⛽ **Mileage:** {first.name} has better mileage ({first_mileage} vs {second_mileage})."
    if numbers[1] > numbers[0]:
        return f"⛽ **Mileage:** {second.name} has better mileage ({second_mileage} vs {first_mileage})."
    return f"⛽ **Mileage:** Both have similar mileage ({first_mileage})."


def _power_line(first: Bike, second: Bike) -> str | None:
    first_power = first.spec("engine", "maxPower")
    second_power = second.spec("engine", "maxPower")
    numbers = _both_numbers(first_power, second_power)
    if numbers is None or numbers[0] == numbers[1]:
        return None
    if numbers[0] > numbers[1]:
        return f"⚡ **Power:** {first.name} has more power ({first_power} vs {second_power})."
    return f"⚡ **Power:** {second.name} has more power ({second_power} vs {first_power})."


def _weight_line(first: Bike, second: Bike) -> str | None:
    first_weight = first.spec("dimensions", "kerbWeight")
    second_weight = second.spec("dimensions", "kerbWeight")
    numbers = _both_numbers(first_weight, second_weight)
    if numbers is None or numbers[0] == numbers[1]:
        return None
    if numbers[0] < numbers[1]:
        return f"⚖️ **Weight:** {first.name} is lighter ({first_weight} vs {second_weight})."
    return f"⚖️ **Weight:** {second.name} is lighter ({second_weight} vs {first_weight})."


def _safety_line(first: Bike, second: Bike) -> str | None:
    first_abs = first.spec("brakes", "abs")
    second_abs = second.spec("brakes", "abs")
    if first_abs is None or second_abs is None:
        return None
    if first_abs and not second_abs:
        return f"🛡️ **Safety:** {first.name} has ABS, {second.name} doesn't."
    if second_abs and not first_abs:
        return f"🛡️ **Safety:** {second.name} has ABS, {first.name} doesn't."
    if first_abs and second_abs:
        return "🛡️ **Safety:** Both bikes have ABS."
    return None


def _cheaper(first: Bike, second: Bike) -> bool:
    if first.price is None or second.price is None:
        return False
    return Decimal(str(first.price)) < Decimal(str(second.price))


def _recommendation(first: Bike, second: Bike) -> str:
    numbers = _both_numbers(first.spec("performance", "mileage"), second.spec("performance", "mileage"))
    if numbers is None:
        return CONSIDER_PRIORITIES
    first_mileage, second_mileage = numbers
    if first_mileage > second_mileage and _cheaper(first, second):
        return f"{first.name} offers better value with higher mileage and lower price."
    if second_mileage > first_mileage and _cheaper(second, first):
        return f"{second.name} offers better value with higher mileage and lower price."
    if first_mileage > second_mileage:
        return f"If fuel efficiency is your priority, {first.name} is better."
    if second_mileage > first_mileage:
        return f"If fuel efficiency is your priority, {second.name} is better."
    return "Both bikes are similar. Choose based on your brand preference and budget."


def compare_bikes(first: Bike, second: Bike) -> str:
    lines = [
        line
        for line in (
            _price_line(first, second),
            _mileage_line(first, second),
            _power_line(first, second),
            _weight_line(first, second),
            _safety_line(first, second),
        )
        if line
    ]
    body = "".join(f"{line}\n" for line in lines)
    return (
        f"**Comparison: {first.name} vs {second.name}**\n\n"
        f"{body}\n💡 **Recommendation:** {_recommendation(first, second)}"
    )


def format_mileage_ranking(bikes: list[Bike]) -> str:
    names = ", ".join(f"{bike.name} ({bike.spec('performance', 'mileage') or 'N/A'})" for bike in bikes)
    return f"For best mileage, I recommend: {names}. Check their detail pages for complete specifications."


def format_price_ranking(bikes: list[Bike]) -> str:
    names = ", ".join(f"{bike.name} ({CURRENCY}{format_price(bike.price)})" for bike in bikes)
    return f"Most affordable bikes: {names}. Check their detail pages for more information."


def format_power_ranking(bikes: list[Bike]) -> str:
    names = ", ".join(f"{bike.name} ({bike.spec('engine', 'maxPower') or 'N/A'})" for bike in bikes)
    return f"For high performance, check out: {names}. Visit their detail pages for complete specifications."
