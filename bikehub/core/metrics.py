from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status_code"],
)

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "path"],
)

BOOKING_TRANSITIONS = Counter(
    "bikehub_booking_transitions_total",
    "Test-ride booking status transitions",
    ["status"],
)

CHATBOT_RESPONSES = Counter(
    "bikehub_chatbot_responses_total",
    "Chatbot responses by the rule that produced them",
    ["source"],
)


def render_metrics() -> tuple[bytes, str]:
    return generate_latest(), CONTENT_TYPE_LATEST
