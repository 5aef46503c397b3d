"""
In-memory quiz slots.

Requests without a session id share one process-wide slot, so two players
interleaving "get question" and "check answer" grade against whichever question
was written last. Passing a session id gives a player a slot of their own.
Nothing here is locked or persisted.
"""
from dataclasses import dataclass
from typing import Dict, Optional


@dataclass
class QuizState:
    question: Optional[str] = None
    correct_answer: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return bool(self.correct_answer and self.correct_answer.strip())


class QuizStore:
    def __init__(self):
        self._slots: Dict[Optional[str], QuizState] = {}

    def open(self, question: Optional[str], correct_answer: Optional[str], session_id: Optional[str] = None) -> QuizState:
        """Store a new question, overwriting any unanswered one in the same slot."""
        state = QuizState(question=question, correct_answer=correct_answer)
        self._slots[session_id] = state
        return state

    def peek(self, session_id: Optional[str] = None) -> Optional[QuizState]:
        state = self._slots.get(session_id)
        return state if state and state.is_open else None

    def take(self, session_id: Optional[str] = None) -> Optional[QuizState]:
        """Return the open question (if any) and clear the slot."""
        state = self._slots.pop(session_id, None)
        return state if state and state.is_open else None

    def reset(self) -> None:
        self._slots.clear()


quiz_store = QuizStore()


def get_quiz_store() -> QuizStore:
    return quiz_store
