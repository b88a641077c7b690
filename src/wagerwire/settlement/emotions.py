"""Display-only emotion tokens for settled and in-progress bets."""

from __future__ import annotations

from wagerwire.settlement.types import EmotionToken, Outcome, OutcomeClass

PENDING_EMOTION = EmotionToken("🤔", "thinking", "Checking result...")

SETTLED_EMOTIONS: dict[OutcomeClass, EmotionToken] = {
    OutcomeClass.WIN: EmotionToken("🎉", "joy", "Celebrating win!"),
    OutcomeClass.HALF_WIN: EmotionToken("😊", "relief", "Half win - not bad!"),
    OutcomeClass.PUSH: EmotionToken("😐", "neutral", "Push - stake returned"),
    OutcomeClass.HALF_LOSS: EmotionToken("😕", "annoyed", "Half loss - could be worse"),
    OutcomeClass.LOSS: EmotionToken("😡", "anger", "Lost the bet!"),
}

HOPEFUL = EmotionToken("🤞", "hopeful", "Looking good!")
WORRIED = EmotionToken("😰", "worried", "Not looking good...")
TOO_CLOSE = EmotionToken("😐", "neutral", "Too close to call")

IN_PROGRESS_EMOTIONS: dict[OutcomeClass, EmotionToken] = {
    OutcomeClass.WIN: HOPEFUL,
    OutcomeClass.HALF_WIN: HOPEFUL,
    OutcomeClass.PUSH: TOO_CLOSE,
    OutcomeClass.HALF_LOSS: WORRIED,
    OutcomeClass.LOSS: WORRIED,
}


def _outcome_class(outcome: Outcome | OutcomeClass | None) -> OutcomeClass | None:
    if isinstance(outcome, Outcome):
        return outcome.outcome
    return outcome


def map_settled_emotion(outcome: Outcome | OutcomeClass | None) -> EmotionToken:
    """Reaction to a final result; ``None`` means still pending."""

    return SETTLED_EMOTIONS.get(_outcome_class(outcome), PENDING_EMOTION)


def map_in_progress_emotion(outcome: Outcome | OutcomeClass | None) -> EmotionToken:
    """Provisional reaction while the match is still being played."""

    return IN_PROGRESS_EMOTIONS.get(_outcome_class(outcome), TOO_CLOSE)
