from pydantic import BaseModel


class ChatbotRequest(BaseModel):
    message: str | None = None


class ChatbotResponse(BaseModel):
    response: str


class ChatbotSuggestionsResponse(BaseModel):
    suggestions: list[str]
