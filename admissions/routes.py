"""
Admissions API Routes

Exposes the chat engine, the program catalog and the grade-based
recommender via REST API. Every route requires a Firebase ID token.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from utils.auth_utils import firebase_user
from .logic import (
    ChatOrchestrator,
    InvalidChatInput,
    ProgramCatalog,
    ProgramExtractor,
    UpstreamFailure,
    WassceGrades,
    calculate_aggregate,
    recommend_programs,
)
from .logic.constants import CHAT_HISTORY_COLLECTION, FAQ_COLLECTION, RECOMMENDATION_COLLECTION
from .store import SqlChatStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["admissions"])


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_chat_orchestrator(request: Request) -> ChatOrchestrator:
    return request.app.state.chat_orchestrator


def get_catalog(request: Request) -> ProgramCatalog:
    return request.app.state.catalog


def get_program_extractor(request: Request) -> ProgramExtractor:
    return request.app.state.chat_orchestrator.extractor


def get_store(request: Request) -> SqlChatStore:
    return request.app.state.store


# =============================================================================
# REQUEST/RESPONSE SCHEMAS
# =============================================================================

class ChatRequest(BaseModel):
    """Request body for the chat endpoint. Both fields are required."""
    message: Optional[str] = Field(default=None, example="What is the cut-off for BSc Computer Science?")
    sender: Optional[str] = Field(default=None, example="user")


class FaqRequest(BaseModel):
    question: Optional[str] = None
    answer: Optional[str] = None


class AggregateRequest(BaseModel):
    grades: WassceGrades


class RecommendRequest(BaseModel):
    grades: WassceGrades
    gender: Optional[str] = Field(default=None, description="'male' or 'female'; selects gendered cut-offs")


# =============================================================================
# CHAT
# =============================================================================

@router.post("/chat", summary="Ask the admissions assistant")
def chat(
    request: ChatRequest,
    user: Dict[str, Any] = Depends(firebase_user),
    orchestrator: ChatOrchestrator = Depends(get_chat_orchestrator),
):
    """
    Answer an admissions question.

    **Request Body:**
    - `message`: The user's question
    - `sender`: Sender label supplied by the client

    **Response:**
    - `response`: Answer text (markdown)
    """
    if not request.message or not request.sender:
        raise HTTPException(status_code=400, detail="Message and sender are required")

    try:
        reply = orchestrator.handle_chat_message(request.message, request.sender, user_id=user["uid"])
    except InvalidChatInput as e:
        raise HTTPException(status_code=400, detail=str(e))

    if not reply.ok:
        return JSONResponse(
            status_code=reply.status_code,
            content={"response": reply.response, "error": "Failed to process message"},
        )
    return {"response": reply.response}


@router.get("/chat/history", summary="Caller's recent chat exchanges")
def chat_history(
    limit: int = Query(default=20, ge=1, le=100),
    user: Dict[str, Any] = Depends(firebase_user),
    store: SqlChatStore = Depends(get_store),
):
    try:
        return store.query(
            CHAT_HISTORY_COLLECTION,
            {"user_id": user["uid"]},
            order_by="timestamp",
            limit=limit,
        )
    except UpstreamFailure:
        raise HTTPException(status_code=500, detail="Failed to fetch chat history")


# =============================================================================
# FAQS
# =============================================================================

@router.get("/faqs", summary="Most frequent questions")
def list_faqs(
    user: Dict[str, Any] = Depends(firebase_user),
    store: SqlChatStore = Depends(get_store),
):
    try:
        return store.query(FAQ_COLLECTION, order_by="frequency", limit=10)
    except UpstreamFailure:
        raise HTTPException(status_code=500, detail="Failed to fetch FAQs")


@router.post("/faqs", status_code=201, summary="Create FAQ")
def create_faq(
    payload: FaqRequest,
    user: Dict[str, Any] = Depends(firebase_user),
    store: SqlChatStore = Depends(get_store),
):
    if not payload.question or not payload.answer:
        raise HTTPException(status_code=400, detail="Question and answer required")
    try:
        stored = store.append_record(FAQ_COLLECTION, {
            "question": payload.question,
            "answer": payload.answer,
            "frequency": 1,
        })
    except UpstreamFailure:
        raise HTTPException(status_code=500, detail="Failed to add FAQ")
    return {"id": stored["id"]}


@router.get("/faqs/{faq_id}", summary="Get one FAQ")
@router.get("/faq/{faq_id}", include_in_schema=False)
def get_faq(
    faq_id: int,
    user: Dict[str, Any] = Depends(firebase_user),
    store: SqlChatStore = Depends(get_store),
):
    try:
        faq = store.get(FAQ_COLLECTION, faq_id)
    except UpstreamFailure:
        raise HTTPException(status_code=500, detail="Failed to fetch FAQ")
    if faq is None:
        raise HTTPException(status_code=404, detail="FAQ not found")
    return faq


@router.put("/faqs/{faq_id}", summary="Update FAQ")
def update_faq(
    faq_id: int,
    payload: FaqRequest,
    user: Dict[str, Any] = Depends(firebase_user),
    store: SqlChatStore = Depends(get_store),
):
    """
    Change the question, the answer, or both.

    Fields left out of the body keep their stored value.
    """
    if not payload.question and not payload.answer:
        raise HTTPException(status_code=400, detail="Question or answer required")

    changes: Dict[str, Any] = {"timestamp": datetime.utcnow()}
    if payload.question:
        changes["question"] = payload.question
    if payload.answer:
        changes["answer"] = payload.answer

    try:
        updated = store.update(FAQ_COLLECTION, faq_id, changes)
    except UpstreamFailure:
        raise HTTPException(status_code=500, detail="Failed to update FAQ")
    if updated is None:
        raise HTTPException(status_code=404, detail="FAQ not found")
    return updated


@router.delete("/faqs/{faq_id}", summary="Delete FAQ")
def delete_faq(
    faq_id: int,
    user: Dict[str, Any] = Depends(firebase_user),
    store: SqlChatStore = Depends(get_store),
):
    try:
        deleted = store.delete(FAQ_COLLECTION, faq_id)
    except UpstreamFailure:
        raise HTTPException(status_code=500, detail="Failed to delete FAQ")
    if not deleted:
        raise HTTPException(status_code=404, detail="FAQ not found")
    return {"message": "FAQ deleted successfully"}


# =============================================================================
# PROGRAMS
# =============================================================================

@router.get("/programs", summary="List programs")
def list_programs(
    user: Dict[str, Any] = Depends(firebase_user),
    catalog: ProgramCatalog = Depends(get_catalog),
):
    return [program.model_dump() for program in catalog]


@router.get("/programs/search", summary="Search programs by name and/or college")
def search_programs(
    query: Optional[str] = None,
    college: Optional[str] = None,
    user: Dict[str, Any] = Depends(firebase_user),
    catalog: ProgramCatalog = Depends(get_catalog),
    extractor: ProgramExtractor = Depends(get_program_extractor),
):
    programs = list(catalog)
    if college:
        programs = catalog.by_college(college)
    if query:
        lowered = query.lower()
        ranked = [m.program for m in extractor.matcher.search(query, max_results=len(catalog))]
        names = [p.name for p in programs if lowered in p.name.lower()]
        names += [name for name in ranked if name not in names]
        allowed = {p.name for p in programs}
        programs = [catalog.get(name) for name in names if name in allowed]
    return [program.model_dump() for program in programs]


@router.get("/programs/by-name/{name}", summary="Get one program by name")
def get_program_by_name(
    name: str,
    user: Dict[str, Any] = Depends(firebase_user),
    extractor: ProgramExtractor = Depends(get_program_extractor),
):
    program = extractor.get_program(name) or extractor.get_program(extractor.extract_program_name(name))
    if program is None:
        raise HTTPException(status_code=404, detail="Program not found")
    return program.model_dump()


# =============================================================================
# AGGREGATE / RECOMMENDATIONS
# =============================================================================

@router.post("/calculate-aggregate", summary="WASSCE aggregate from grades")
def aggregate(
    payload: AggregateRequest,
    user: Dict[str, Any] = Depends(firebase_user),
):
    return {"aggregate": calculate_aggregate(payload.grades)}


@router.post("/recommend", summary="Recommend programs from grades")
def recommend(
    payload: RecommendRequest,
    user: Dict[str, Any] = Depends(firebase_user),
    catalog: ProgramCatalog = Depends(get_catalog),
    store: SqlChatStore = Depends(get_store),
):
    if payload.gender and payload.gender.lower() not in ("male", "female"):
        raise HTTPException(status_code=400, detail="Gender must be 'male' or 'female'")

    result = recommend_programs(catalog, payload.grades, gender=payload.gender)
    response_data = result.model_dump(mode="json")

    try:
        store.append_record(RECOMMENDATION_COLLECTION, {
            "user_id": user["uid"],
            "grades": payload.grades.model_dump(mode="json"),
            "aggregate": result.aggregate,
            "recommendations": response_data["recommendations"],
        })
    except UpstreamFailure:
        logger.exception(f"Failed to save recommendations for {user['uid']}")
        raise HTTPException(status_code=500, detail="Failed to save recommendations")

    return response_data


@router.get("/recommendations", summary="Caller's recent recommendations")
def list_recommendations(
    user: Dict[str, Any] = Depends(firebase_user),
    store: SqlChatStore = Depends(get_store),
) -> List[Dict[str, Any]]:
    try:
        return store.query(
            RECOMMENDATION_COLLECTION,
            {"user_id": user["uid"]},
            order_by="timestamp",
            limit=10,
        )
    except UpstreamFailure:
        raise HTTPException(status_code=500, detail="Failed to fetch recommendations")
