"""
Interaction controller: the single state machine behind the assistant.

    Idle --submit_image--> Loading --> AwaitingClarification | ShowingResult | Error
    AwaitingClarification --submit_clarification--> Loading --> ShowingResult | Error
    Idle --submit_text--> Loading --> ShowingResult | Error
    any --request_meal_plan--> Loading --> ShowingPlan | Error
    any --reset--> Idle

Only one AI call is in flight at a time; submissions that arrive while one is
pending are ignored, not queued. Every failure below this layer ends in the
Error state, from which reset() is the way out.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from nutriscan.config import settings
from nutriscan.models.language import Language
from nutriscan.models.meal_plan import MealPlan, UserProfile
from nutriscan.models.nutrition import (
    AnalysisRequest,
    AnalysisResult,
    ImageInput,
    ImageOnly,
    ImageWithClarification,
    TextDescription,
)
from nutriscan.models.state import (
    AwaitingClarification,
    Error,
    Idle,
    Loading,
    ShowingPlan,
    ShowingResult,
    State,
    Task,
)
from nutriscan.services.ai_schemas import ANALYSIS_OUTPUT_SCHEMA, MEAL_PLAN_OUTPUT_SCHEMA
from nutriscan.services.errors import (
    InvalidImageError,
    MalformedResponse,
    MissingInputError,
    OracleError,
    ResponseContractError,
)
from nutriscan.services.image_service import ImageSource, load_image
from nutriscan.services.messages import get_message
from nutriscan.services.oracle_client import (
    ANALYSIS_SAMPLING,
    MEAL_PLAN_SAMPLING,
    InlineImagePart,
    OracleClient,
    TextPart,
)
from nutriscan.services.prompts import build_analysis_prompt_for, build_meal_plan_prompt
from nutriscan.services.response_normalizer import normalize_analysis, normalize_meal_plan

logger = logging.getLogger(__name__)

# States from which a new image or text analysis may start
ANALYSIS_ENTRY_STATES = (Idle, ShowingResult, ShowingPlan)


class InteractionController:
    """Owns the current UI state; nothing else mutates it."""

    def __init__(
        self,
        oracle_client: Optional[OracleClient] = None,
        language: Optional[Language] = None,
    ):
        self.oracle = oracle_client or OracleClient()
        self.language = Language(language or settings.default_language)
        self._state: State = Idle()
        self._in_flight = False
        # Bumped by reset() so a response arriving afterwards is discarded
        self._generation = 0

    @property
    def state(self) -> State:
        return self._state

    @property
    def busy(self) -> bool:
        return self._in_flight

    @property
    def pending_image(self) -> Optional[ImageInput]:
        if isinstance(self._state, AwaitingClarification):
            return self._state.pending_image
        return None

    # =========================================================================
    # USER ACTIONS
    # =========================================================================

    def reset(self) -> State:
        """Return to Idle, dropping any result, plan, error or retained image."""
        self._generation += 1
        self._state = Idle()
        return self._state

    async def submit_image(self, file: ImageSource) -> State:
        """Analyze a food photo; may end in AwaitingClarification."""
        if not self._accepts_analysis("submit_image"):
            return self._state

        self.reset()

        async def decode_and_analyze():
            image = load_image(file)
            return image, await self._analyze(ImageOnly(image=image))

        outcome = await self._run(Task.IMAGE_ANALYSIS, decode_and_analyze)
        if outcome is None:
            return self._state

        image, result = outcome
        if result.needs_clarification:
            logger.info("Image needs clarification: %s", result.clarification_question)
            self._state = AwaitingClarification(
                question=result.clarification_question, pending_image=image
            )
        else:
            self._state = ShowingResult(result=result)
        return self._state

    async def submit_clarification(self, text: str) -> State:
        """Answer the clarification question for the retained image."""
        if self._in_flight or isinstance(self._state, Loading):
            logger.info("Ignoring submit_clarification while a request is in flight")
            return self._state

        text = (text or "").strip()
        current = self._state
        if isinstance(current, AwaitingClarification) and not text:
            logger.info("Ignoring blank clarification")
            return self._state

        image = current.pending_image if isinstance(current, AwaitingClarification) else None
        if image is None:
            return self._fail(MissingInputError("No image is waiting for a clarification"))

        # Loading carries no image, so the retained bytes are released whatever happens next
        result = await self._run(
            Task.CLARIFICATION,
            lambda: self._analyze(ImageWithClarification(image=image, clarification=text)),
        )
        if result is not None:
            self._state = ShowingResult(result=result)
        return self._state

    async def submit_text(self, description: str) -> State:
        """Analyze a free-text food description."""
        if not self._accepts_analysis("submit_text"):
            return self._state

        description = (description or "").strip()
        if not description:
            logger.info("Ignoring blank text description")
            return self._state

        self.reset()
        result = await self._run(
            Task.TEXT_ANALYSIS, lambda: self._analyze(TextDescription(text=description))
        )
        if result is not None:
            self._state = ShowingResult(result=result)
        return self._state

    async def request_meal_plan(self, profile: UserProfile) -> State:
        """Generate a meal plan, discarding any analysis on screen."""
        if self._in_flight or isinstance(self._state, Loading):
            logger.info("Ignoring request_meal_plan while a request is in flight")
            return self._state

        self.reset()
        plan = await self._run(Task.MEAL_PLAN, lambda: self._plan(profile))
        if plan is not None:
            self._state = ShowingPlan(plan=plan)
        return self._state

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _accepts_analysis(self, action: str) -> bool:
        if self._in_flight or not isinstance(self._state, ANALYSIS_ENTRY_STATES):
            logger.info(
                "Ignoring %s in state %s", action, type(self._state).__name__
            )
            return False
        return True

    async def _run(self, task: Task, call: Callable[[], Awaitable]):
        """
        Run one AI round trip in the Loading state.

        Returns the call's value, or None when it failed (state is then Error)
        or when reset() happened while it was in flight (state left alone).
        A cancelled call returns the machine to Idle and re-raises.
        """
        generation = self._generation
        self._state = Loading(task=task)
        self._in_flight = True
        try:
            value = await call()
        except asyncio.CancelledError:
            # Not left in Loading with nothing in flight
            if generation == self._generation:
                logger.info("%s cancelled, returning to idle", task.value)
                self._state = Idle()
            raise
        except Exception as e:
            if generation != self._generation:
                logger.info("Discarding failed %s after reset: %s", task.value, e)
                return None
            self._fail(e)
            return None
        finally:
            self._in_flight = False

        if generation != self._generation:
            logger.info("Discarding %s response that arrived after reset", task.value)
            return None
        return value

    async def _analyze(self, request: AnalysisRequest) -> AnalysisResult:
        prompt = build_analysis_prompt_for(request, self.language)

        parts = []
        if isinstance(request, (ImageOnly, ImageWithClarification)):
            parts.append(
                InlineImagePart(data=request.image.data, media_type=request.image.media_type)
            )
        parts.append(TextPart(text=prompt))

        raw_text = await self.oracle.submit(parts, ANALYSIS_OUTPUT_SCHEMA, ANALYSIS_SAMPLING)
        return normalize_analysis(raw_text, request.mode)

    async def _plan(self, profile: UserProfile) -> MealPlan:
        prompt = build_meal_plan_prompt(profile, self.language)
        raw_text = await self.oracle.submit(
            [TextPart(text=prompt)], MEAL_PLAN_OUTPUT_SCHEMA, MEAL_PLAN_SAMPLING
        )
        return normalize_meal_plan(
            raw_text,
            goal=profile.goal,
            default_title=get_message(self.language, "default_plan_title"),
        )

    def _fail(self, error: Exception) -> State:
        message = self._format_error(error)
        if isinstance(error, (OracleError, MalformedResponse, ResponseContractError)):
            logger.error("Request failed: %s", error)
        elif isinstance(error, (MissingInputError, InvalidImageError)):
            logger.warning("Rejected input: %s", error)
        else:
            logger.exception("Unexpected error during request", exc_info=error)
        self._state = Error(message=message, error_kind=type(error).__name__)
        return self._state

    def _format_error(self, error: Exception) -> str:
        if isinstance(error, OracleError):
            return f"{get_message(self.language, 'analysis_error')}: {error}"
        if isinstance(error, MalformedResponse):
            return get_message(self.language, "unexpected_format")
        if isinstance(error, ResponseContractError):
            return get_message(self.language, "analysis_failed")
        if isinstance(error, MissingInputError):
            return get_message(self.language, "image_not_found")
        if isinstance(error, InvalidImageError):
            return get_message(self.language, "invalid_image")
        return get_message(self.language, "unexpected")
