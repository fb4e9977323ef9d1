"""
Chat Orchestrator

The decision procedure that turns one chat message into one answer.

States, evaluated in order (first match wins):
1. Canned              -> fixed text (greetings, identity questions)
2. Career              -> program + career intent: LLM career prompt
3. Dataset             -> program + admission intent: deterministic template
4. Disambiguation      -> admission intent, no program, >= 2 suggestions
5. General admission   -> admission intent: strict LLM prompt
6. General fallback    -> fixed guidance text

Every answer passes through the guard rail exactly once and is persisted to
the chat history, and tallied in the FAQs, before the reply is returned. Failures from the LLM or the
store are caught once, here, and turned into a fixed apology.
"""

import logging
import re
from datetime import datetime
from typing import Any, Dict, Optional, Protocol, Tuple

from ..ai.prompt_builder import build_admission_prompt, build_career_prompt
from .catalog import ProgramCatalog
from .catalog_data import ADMISSION_DEADLINES
from .classifier import QueryClassifier, catalog_subject_words
from .constants import (
    ADMISSION_MAX_TOKENS,
    ADMISSION_TEMPERATURE,
    BACKGROUND_PATTERNS,
    BACKGROUND_TERMINATOR,
    CAREER_MAX_TOKENS,
    CAREER_TEMPERATURE,
    CHAT_HISTORY_COLLECTION,
    DISAMBIGUATION_INTRO,
    DISAMBIGUATION_OUTRO,
    ELIGIBILITY_KEYWORDS,
    ELIGIBILITY_STYLE_KEYWORDS,
    GENERAL_GUIDANCE_RESPONSE,
    SIMILAR_PROGRAM_KEYWORDS,
    UPSTREAM_FAILURE_RESPONSE,
    ChatPath,
)
from .contracts import ChatReply, ClassificationResult, Program
from .errors import InvalidChatInput
from .extractor import ProgramExtractor
from .guard_rail import DatasetGuardRail
from .matcher import FuzzyMatcher
from .responder import ResponseGenerator

logger = logging.getLogger(__name__)


class ChatCompletionClient(Protocol):
    def complete(self, system_prompt: str, user_prompt: str, temperature: float, max_tokens: int) -> str:
        ...


class RecordStore(Protocol):
    def append_record(self, collection: str, record: Dict[str, Any]) -> Any:
        ...

    def record_faq(self, question: str, answer: str) -> Any:
        ...


def _mentions(text: str, keywords) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in keywords)


class ChatOrchestrator:
    """
    Answers chat messages from the catalog, the LLM, or canned text.

    Stateless across requests: every collaborator is fixed at construction
    and nothing about a message outlives its call.
    """

    def __init__(
        self,
        catalog: ProgramCatalog,
        llm: ChatCompletionClient,
        store: Optional[RecordStore] = None,
        classifier: Optional[QueryClassifier] = None,
        extractor: Optional[ProgramExtractor] = None,
        responder: Optional[ResponseGenerator] = None,
        guard_rail: Optional[DatasetGuardRail] = None,
    ):
        matcher = FuzzyMatcher(catalog)
        self.catalog = catalog
        self.llm = llm
        self.store = store
        self.classifier = classifier or QueryClassifier(subject_words=catalog_subject_words(catalog.names))
        self.extractor = extractor or ProgramExtractor(catalog, matcher)
        self.responder = responder or ResponseGenerator(catalog)
        self.guard_rail = guard_rail or DatasetGuardRail(catalog, matcher)
        self._background_patterns = [re.compile(p, re.IGNORECASE) for p in BACKGROUND_PATTERNS]
        self._background_terminator = re.compile(BACKGROUND_TERMINATOR, re.IGNORECASE)

    # -------------------------------------------------------------------------
    # Classification
    # -------------------------------------------------------------------------

    def classify(self, message: str) -> ClassificationResult:
        canned = self.classifier.check_non_admission_query(message)
        if canned is not None:
            return ClassificationResult(is_non_admission_canned=True, canned_response=canned)

        program_name = self.extractor.extract_program_name(message)
        return ClassificationResult(
            is_career_academic=self.classifier.is_career_academic_query(message),
            is_admission_related=self.classifier.is_admission_query(message),
            extracted_program=self.extractor.get_program(program_name),
        )

    def detect_background(self, message: str) -> Optional[str]:
        """The SHS background a student describes, e.g. "I offered physics and chemistry"."""
        for pattern in self._background_patterns:
            match = pattern.search(message)
            if not match:
                continue
            background = self._background_terminator.split(match.group("background"), 1)[0]
            background = background.strip(" ,;:")
            if background:
                return background
        return None

    # -------------------------------------------------------------------------
    # Paths
    # -------------------------------------------------------------------------

    def _career_answer(self, message: str, program: Program) -> str:
        system_prompt, user_prompt = build_career_prompt(program, message)
        return self.llm.complete(
            system_prompt, user_prompt,
            temperature=CAREER_TEMPERATURE,
            max_tokens=CAREER_MAX_TOKENS,
        )

    def _dataset_answer(self, message: str, program: Program) -> str:
        response = self.responder.generate_dataset_response(message, program)

        if _mentions(message, SIMILAR_PROGRAM_KEYWORDS):
            similar = self.responder.find_similar_programs(
                program.numeric_cutoff, exclude_program=program.name
            )
            if similar:
                response += self.responder.format_similar_programs(similar)

        if _mentions(message, ELIGIBILITY_KEYWORDS):
            background = self.detect_background(message)
            if background:
                result = self.responder.check_eligibility_by_background(background, program)
                if result is not None:
                    response += self.responder.format_eligibility(program, background, result)

        return response

    def _disambiguation_answer(self, suggestions) -> str:
        lines = [DISAMBIGUATION_INTRO, ""]
        lines += [f"{i}. {name}" for i, name in enumerate(suggestions, start=1)]
        lines += ["", DISAMBIGUATION_OUTRO]
        return "\n".join(lines)

    def _general_admission_answer(self, message: str) -> str:
        system_prompt, user_prompt = build_admission_prompt(message, self.catalog, ADMISSION_DEADLINES)
        response = self.llm.complete(
            system_prompt, user_prompt,
            temperature=ADMISSION_TEMPERATURE,
            max_tokens=ADMISSION_MAX_TOKENS,
        )

        if _mentions(message, ELIGIBILITY_STYLE_KEYWORDS):
            mentioned = self.extractor.get_program(self.extractor.extract_program_name(response))
            response = self.responder.append_admission_requirements(response, mentioned)
        return response

    def _route(self, message: str, result: ClassificationResult) -> Tuple[str, ChatPath]:
        if result.is_non_admission_canned:
            return result.canned_response, ChatPath.CANNED

        program = result.extracted_program
        if program is not None and result.is_career_academic:
            return self._career_answer(message, program), ChatPath.CAREER

        if program is not None and result.is_admission_related:
            return self._dataset_answer(message, program), ChatPath.DATASET

        if result.is_admission_related:
            suggestions = self.extractor.suggest_program_matches(message)
            if len(suggestions) >= 2:
                return self._disambiguation_answer(suggestions), ChatPath.DISAMBIGUATION
            return self._general_admission_answer(message), ChatPath.GENERAL_ADMISSION

        return GENERAL_GUIDANCE_RESPONSE, ChatPath.GENERAL_FALLBACK

    def _persist(self, message: str, response: str, path: ChatPath, sender_id: str, user_id: Optional[str]) -> None:
        if self.store is None:
            return
        self.store.append_record(CHAT_HISTORY_COLLECTION, {
            "user_id": user_id,
            "sender": sender_id,
            "question": message,
            "answer": response,
            "path": path.value,
            "timestamp": datetime.utcnow(),
        })
        self.store.record_faq(message, response)

    # -------------------------------------------------------------------------
    # Entry point
    # -------------------------------------------------------------------------

    def handle_chat_message(self, message: str, sender_id: str, user_id: Optional[str] = None) -> ChatReply:
        """
        Answer one chat message.

        Args:
            message: Raw user text
            sender_id: Client-supplied sender label
            user_id: Authenticated user id, if any

        Returns:
            ChatReply with the answer, the path taken and an HTTP-style status

        Raises:
            InvalidChatInput: message is missing or blank
        """
        if message is None or not message.strip():
            raise InvalidChatInput("Message is required")

        try:
            result = self.classify(message)
            response, path = self._route(message, result)
            response = self.guard_rail.filter_non_knust_programs(response)
            self._persist(message, response, path, sender_id, user_id)
        except Exception:
            logger.exception(f"Failed to answer chat message from sender={sender_id}")
            return ChatReply(
                response=UPSTREAM_FAILURE_RESPONSE,
                path=ChatPath.UPSTREAM_FAILURE,
                status_code=500,
            )

        logger.info(f"Chat message from sender={sender_id} answered via {path.value}")
        return ChatReply(response=response, path=path)


def build_chat_orchestrator(
    llm: ChatCompletionClient,
    store: Optional[RecordStore] = None,
    catalog: Optional[ProgramCatalog] = None,
) -> ChatOrchestrator:
    """Orchestrator over the bundled KNUST catalog unless one is given."""
    return ChatOrchestrator(catalog or ProgramCatalog.from_defaults(), llm, store=store)
