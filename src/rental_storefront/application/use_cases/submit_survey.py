from __future__ import annotations

import logging
from dataclasses import dataclass

from rental_storefront.application import messages
from rental_storefront.application.errors import StorefrontError
from rental_storefront.application.ports.assistant_port import SurveyPort
from rental_storefront.application.services.session_store import SessionStore
from rental_storefront.domain.entities.assistant import SurveyAnswers

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SurveyResult:
    status: str  # "SUBMITTED" | "ERROR"
    message: str | None = None


class SubmitSurveyUseCase:
    def __init__(self, survey: SurveyPort, store: SessionStore) -> None:
        self.survey = survey
        self.store = store

    def execute(self, answers: SurveyAnswers, email: str | None = None) -> SurveyResult:
        try:
            self.survey.submit(answers, email or self.store.customer_email)
        except StorefrontError as exc:
            logger.warning("survey_failed error=%s", exc)
            return SurveyResult("ERROR", messages.describe_error(exc, messages.SURVEY_FAILED))
        return SurveyResult("SUBMITTED")
