from bikehub.services.chatbot.catalog import BikeCatalog, SqlBikeCatalog
from bikehub.services.chatbot.responder import find_response
from bikehub.services.chatbot.rules import DEFAULT_RESPONSE, SUGGESTED_QUESTIONS

__all__ = [
    "BikeCatalog",
    "DEFAULT_RESPONSE",
    "SUGGESTED_QUESTIONS",
    "SqlBikeCatalog",
    "find_response",
]
