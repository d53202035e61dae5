from __future__ import annotations

from rental_storefront.application import messages
from rental_storefront.application.errors import TransportError
from rental_storefront.application.services.session_store import SessionStore
from rental_storefront.application.use_cases.chat_with_assistant import ChatWithAssistantUseCase
from rental_storefront.application.use_cases.submit_survey import SubmitSurveyUseCase
from rental_storefront.domain.entities.assistant import SurveyAnswers
from rental_storefront.infrastructure.adapters.session.memory_store import InMemorySessionPersistence
from tests.unit._fakes import FixedClock


class _Chat:
    def __init__(self, error=None):
        self.error = error
        self.sent = []

    def send(self, message, history):
        self.sent.append((message, history))
        if self.error:
            raise self.error
        return f"echo {message}"


class _Survey:
    def __init__(self):
        self.submitted = []

    def submit(self, answers, email=None):
        self.submitted.append((answers, email))


def test_chat_sends_previous_turns():
    port = _Chat()
    uc = ChatWithAssistantUseCase(port)
    uc.execute("un")
    res = uc.execute("deux")
    assert res.reply == "echo deux"
    assert [m.content for m in port.sent[1][1]] == ["un", "echo un"]
    uc.reset()
    assert uc.history == []


def test_chat_failure_keeps_history():
    uc = ChatWithAssistantUseCase(_Chat(error=TransportError("down")))
    res = uc.execute("bonjour")
    assert (res.status, res.message) == ("ERROR", messages.CHAT_FAILED)
    assert uc.history == []


def test_survey_defaults_to_session_email():
    store = SessionStore(InMemorySessionPersistence({"customerEmail": "a@b.c", "codes": []}), clock=FixedClock())
    port = _Survey()
    res = SubmitSurveyUseCase(port, store).execute(SurveyAnswers(genres=("drama",)))
    assert res.status == "SUBMITTED"
    assert port.submitted[0][1] == "a@b.c"
