from typing import Optional, Tuple

from loguru import logger

from oncocare.schemas import CrisisCheckResponse

# Coarse, high-recall screen: plain substring containment on the lower-cased message.
# No tokenization, stemming or negation handling.
CRISIS_KEYWORDS: Tuple[str, ...] = (
    "end it all", "give up", "can't go on", "hopeless", "suicide",
    "kill myself", "want to die", "ending my life",
)

CRISIS_HELPLINE_MESSAGE = (
    "It sounds like you may need urgent support. Please reach out to a professional immediately. "
    "Here is a helpline: **988 Suicide & Crisis Lifeline**."
)

# Checked in order; the first match wins.
MINDCARE_INTENTS: Tuple[Tuple[str, str], ...] = (
    ("breathing exercise",
     "Let's begin a simple box breathing exercise. Inhale for 4 seconds, hold for 4, exhale for 4, "
     "and hold for 4. I'll guide you..."),
    ("relaxing sounds",
     "Finding a peaceful sound can be very calming. I recommend trying soft rain sounds or ambient "
     "forest noises. You can find many free options online."),
    ("positive reflection",
     "What is one small success or happy moment you experienced today? It doesn't have to be big, "
     "just something that brought a smile to your face."),
    ("sleep",
     "Getting good sleep is vital for mental health. Try to avoid screens an hour before bed and make "
     "sure your room is dark and cool."),
)


def find_crisis_keyword(text: str) -> Optional[str]:
    lower = (text or "").lower()
    for kw in CRISIS_KEYWORDS:
        if kw in lower:
            return kw
    return None


def check_crisis(text: str) -> CrisisCheckResponse:
    kw = find_crisis_keyword(text)
    if kw:
        # message body is never logged
        logger.info("Crisis keyword matched: '{}'", kw)
        return CrisisCheckResponse(isCrisis=True, message=CRISIS_HELPLINE_MESSAGE)
    return CrisisCheckResponse(isCrisis=False, message="")


def match_mindcare_intent(text: str) -> Optional[str]:
    """Canned reply for the first matching quick-intervention intent, else None."""
    lower = (text or "").lower()
    for phrase, reply in MINDCARE_INTENTS:
        if phrase in lower:
            return reply
    return None
