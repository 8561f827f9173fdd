"""Interactive voting flow as a pure state machine.

The Discord layer feeds interaction events into :func:`advance` and
performs the effects it returns. Nothing here touches Discord or storage,
so every transition can be exercised with plain values.

    IDLE --VoteRequested--> LEVEL_SELECTION_OFFERED
         --LevelSelected--> SCORE_INPUT_REQUESTED (--LevelSelected--> itself)
         --ScoresSubmitted--> SCORES_SUBMITTED --complete()--> FINISHED
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from level_vote_bot.application.commands.cast_vote import CastVoteCommand
from level_vote_bot.application.services.access_policy import AccessPolicy, Caller
from level_vote_bot.application.services.choices import LevelChoice, level_choices
from level_vote_bot.domain.levels.entities import Level
from level_vote_bot.domain.levels.value_objects import LevelOutcome, ScoreCard
from level_vote_bot.domain.shared.exceptions import (
    InvalidOperationError,
    PermissionDeniedError,
    ScoreValidationError,
    WrongChannelError,
)


class VoteStage(Enum):
    IDLE = "idle"
    LEVEL_SELECTION_OFFERED = "level_selection_offered"
    SCORE_INPUT_REQUESTED = "score_input_requested"
    SCORES_SUBMITTED = "scores_submitted"
    FINISHED = "finished"


class VoteFlowState(BaseModel):
    model_config = ConfigDict(frozen=True)

    stage: VoteStage = VoteStage.IDLE
    user_id: int | None = None
    choices: tuple[LevelChoice, ...] = ()
    level_id: str | None = None
    outcome: LevelOutcome | None = None

    @classmethod
    def awaiting_scores(cls, user_id: int, level_id: str) -> VoteFlowState:
        """Rebuild the state a score modal was opened from.

        The modal only carries the level id, so the choice list is gone by
        the time scores arrive; the commit stage re-checks the store instead.
        """
        return cls(stage=VoteStage.SCORE_INPUT_REQUESTED, user_id=user_id, level_id=level_id)

    def choice_for(self, level_id: str) -> LevelChoice | None:
        return next((c for c in self.choices if c.level_id == level_id), None)


# Events


class VoteRequested(BaseModel):
    model_config = ConfigDict(frozen=True)

    caller: Caller
    levels: tuple[Level, ...]


class LevelSelected(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: int
    level_id: str


class ScoresSubmitted(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: int
    level_id: str
    song: str
    design: str
    vibe: str


VoteEvent = VoteRequested | LevelSelected | ScoresSubmitted


# Effects


class OfferLevels(BaseModel):
    model_config = ConfigDict(frozen=True)

    choices: tuple[LevelChoice, ...]


class RequestScores(BaseModel):
    model_config = ConfigDict(frozen=True)

    level_id: str
    level_name: str


class CommitVote(BaseModel):
    model_config = ConfigDict(frozen=True)

    command: CastVoteCommand


class Reject(BaseModel):
    model_config = ConfigDict(frozen=True)

    outcome: LevelOutcome
    channel_id: int | None = None

    @property
    def message(self) -> str:
        return self.outcome.get_message(channel_id=self.channel_id)


VoteEffect = OfferLevels | RequestScores | CommitVote | Reject


def _finish(state: VoteFlowState, outcome: LevelOutcome) -> VoteFlowState:
    return state.model_copy(update={"stage": VoteStage.FINISHED, "outcome": outcome})


def advance(
    state: VoteFlowState, event: VoteEvent, policy: AccessPolicy
) -> tuple[VoteFlowState, list[VoteEffect]]:
    """Apply one event and return the next state plus the effects to perform.

    Raises:
        InvalidOperationError: If the event is not valid in ``state.stage``.
    """
    match event:
        case VoteRequested(caller=caller, levels=levels) if state.stage is VoteStage.IDLE:
            try:
                policy.require_voter(caller)
            except PermissionDeniedError:
                outcome = LevelOutcome.PERMISSION_DENIED
                return _finish(state, outcome), [Reject(outcome=outcome)]
            except WrongChannelError as e:
                outcome = LevelOutcome.WRONG_CHANNEL
                return _finish(state, outcome), [
                    Reject(outcome=outcome, channel_id=e.expected_channel_id)
                ]

            if not levels:
                outcome = LevelOutcome.NO_LEVELS
                return _finish(state, outcome), [Reject(outcome=outcome)]

            choices = tuple(level_choices(levels))
            next_state = state.model_copy(
                update={
                    "stage": VoteStage.LEVEL_SELECTION_OFFERED,
                    "user_id": caller.user_id,
                    "choices": choices,
                }
            )
            return next_state, [OfferLevels(choices=choices)]

        # picking again after dismissing the modal re-offers it for the new level
        case LevelSelected(user_id=user_id, level_id=level_id) if state.stage in (
            VoteStage.LEVEL_SELECTION_OFFERED,
            VoteStage.SCORE_INPUT_REQUESTED,
        ):
            if user_id != state.user_id:
                return state, [Reject(outcome=LevelOutcome.PERMISSION_DENIED)]
            choice = state.choice_for(level_id)
            if choice is None:
                return state, [Reject(outcome=LevelOutcome.NOT_FOUND)]
            next_state = state.model_copy(
                update={"stage": VoteStage.SCORE_INPUT_REQUESTED, "level_id": level_id}
            )
            return next_state, [RequestScores(level_id=level_id, level_name=choice.label)]

        case ScoresSubmitted() if state.stage is VoteStage.SCORE_INPUT_REQUESTED:
            if event.user_id != state.user_id or event.level_id != state.level_id:
                return state, [Reject(outcome=LevelOutcome.PERMISSION_DENIED)]
            try:
                card = ScoreCard.parse(event.song, event.design, event.vibe)
            except ScoreValidationError:
                outcome = LevelOutcome.VALIDATION_ERROR
                return _finish(state, outcome), [Reject(outcome=outcome)]
            command = CastVoteCommand(user_id=event.user_id, level_id=event.level_id, scores=card)
            next_state = state.model_copy(update={"stage": VoteStage.SCORES_SUBMITTED})
            return next_state, [CommitVote(command=command)]

    raise InvalidOperationError(type(event).__name__, state.stage.value)


def complete(state: VoteFlowState, outcome: LevelOutcome) -> VoteFlowState:
    """Record the commit outcome and close the flow."""
    if state.stage is not VoteStage.SCORES_SUBMITTED:
        raise InvalidOperationError("complete", state.stage.value)
    return _finish(state, outcome)
