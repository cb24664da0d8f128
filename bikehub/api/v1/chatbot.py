from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from bikehub.core.exceptions import BadRequestError
from bikehub.db.session import get_db
from bikehub.schemas.chatbot import ChatbotRequest, ChatbotResponse, ChatbotSuggestionsResponse
from bikehub.services.chatbot import SUGGESTED_QUESTIONS, SqlBikeCatalog, find_response

router = APIRouter(prefix="/chatbot", tags=["chatbot"])


@router.post("", response_model=ChatbotResponse, status_code=status.HTTP_200_OK)
def chat(payload: ChatbotRequest, db: Session = Depends(get_db)) -> ChatbotResponse:
    if not payload.message or not payload.message.strip():
        raise BadRequestError("Message is required")
    return ChatbotResponse(response=find_response(payload.message, catalog=SqlBikeCatalog(db)))


@router.get("/suggestions", response_model=ChatbotSuggestionsResponse, status_code=status.HTTP_200_OK)
def suggestions() -> ChatbotSuggestionsResponse:
    return ChatbotSuggestionsResponse(suggestions=list(SUGGESTED_QUESTIONS))
