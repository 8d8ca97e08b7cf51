"""Scripted assistant and rule-based treatment suggestions."""

from fastapi import APIRouter, Request

from afyaconnect.api.middleware.rate_limiter import ASSISTANT_LIMIT, limiter
from afyaconnect.models.chat import (
    ChatRequest,
    ChatResponse,
    Recommendation,
    RecommendationRequest,
)
from afyaconnect.services import chat, recommendations

router = APIRouter()


@router.post("/chat", response_model=ChatResponse)
@limiter.limit(ASSISTANT_LIMIT)
async def chat_reply(request: Request, body: ChatRequest):
    return ChatResponse(response=chat.reply_to(body.message))


@router.post("/recommendations", response_model=list[Recommendation])
@limiter.limit(ASSISTANT_LIMIT)
async def recommend_treatments(request: Request, body: RecommendationRequest):
    return recommendations.recommend(body.symptoms)
