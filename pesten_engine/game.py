"""Turn state machine for Pesten.

``PestenGame`` owns the ``GameState`` and is the only code that mutates it.
Presentation layers call the intent methods (``request_play``,
``request_draw``, ``request_pass``) and subscribe to notifications through
``GameObserver``. AI seats are driven by the engine itself: whenever a
non-human seat's turn starts, one AI turn is handed to the scheduler.

The order of operations in ``play_card`` matters:

1. the card moves from hand to discard pile;
2. if the hand is now empty the game ends, and the card's effect is NOT
   applied;
3. otherwise the effect is applied (2/Joker force the next seat to draw,
   8 moves the pointer past the next seat, Ace reverses, 10 passes cards,
   King restarts the same seat's turn);
4. the turn advances, except after a King.
"""

from __future__ import annotations

import logging
import random
from collections import Counter
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Sequence

from pesten_engine.cards import UNIVERSE, Deck, create_deck
from pesten_engine.errors import (
    DeckExhaustedError,
    EmptyDeckError,
    InvalidMoveError,
    MoveRejection,
)
from pesten_engine.moves import Draw, Effect, Move, Pass, PlayCard
from pesten_engine.player import Player
from pesten_engine.rules import (
    INITIAL_HAND_SIZE,
    NUM_SEATS,
    card_effect,
    force_draw_count,
    is_valid_move,
    legal_play_indices,
    next_seat,
)
from pesten_engine.scheduler import QueueScheduler
from pesten_engine.state import Direction, GamePhase, GameSnapshot, GameState

if TYPE_CHECKING:
    from pesten_engine.cards import Card
    from pesten_engine.observer import GameObserver
    from pesten_engine.scheduler import ScheduledTurn, TurnScheduler
    from strategies.base import Strategy

logger = logging.getLogger(__name__)

DEFAULT_NAMES = ("You", "Player 1", "Player 2", "Player 3")


@dataclass(frozen=True, slots=True)
class MoveResult:
    """Outcome of an intent forwarded by a presentation layer."""

    ok: bool
    reason: MoveRejection | None = None
    card: Card | None = None
    message: str = ""


class PestenGame:
    """Four-seat Pesten game.

    Args:
        controllers: One entry per seat, a ``Strategy`` for AI seats or None
            for human seats. Defaults to a human at seat 0 and
            ``FirstLegalStrategy`` at seats 1-3.
        names: Display names per seat.
        seed: Seed for the game's random source (ignored if ``rng`` is given).
        rng: Random source for shuffles, card passing and the starting seat.
        scheduler: Where AI turns are deferred to. Defaults to a
            ``QueueScheduler`` the caller drains.
        ai_delay: Presentation delay passed along with each AI turn.
        observers: Initial notification subscribers.
    """

    def __init__(
        self,
        controllers: Sequence[Strategy | None] | None = None,
        names: Sequence[str] | None = None,
        seed: int | None = None,
        rng: random.Random | None = None,
        scheduler: TurnScheduler | None = None,
        ai_delay: float = 1.5,
        observers: Iterable[GameObserver] = (),
    ):
        if controllers is None:
            controllers = self._default_controllers()
        if len(controllers) != NUM_SEATS:
            raise ValueError(f"Expected {NUM_SEATS} controllers, got {len(controllers)}")
        if names is None:
            names = DEFAULT_NAMES
        if len(names) != NUM_SEATS:
            raise ValueError(f"Expected {NUM_SEATS} names, got {len(names)}")

        self._controllers: tuple[Strategy | None, ...] = tuple(controllers)
        self._rng = rng if rng is not None else random.Random(seed)
        self._scheduler = scheduler if scheduler is not None else QueueScheduler()
        self.ai_delay = ai_delay
        self._observers: list[GameObserver] = list(observers)
        self._pending_ai: ScheduledTurn | None = None
        self._generation = 0

        self.state = GameState(
            players=[Player(seat=i, name=name) for i, name in enumerate(names)],
        )

    @staticmethod
    def _default_controllers() -> list[Strategy | None]:
        from strategies.first_legal import FirstLegalStrategy

        return [None] + [FirstLegalStrategy() for _ in range(NUM_SEATS - 1)]

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def scheduler(self) -> TurnScheduler:
        return self._scheduler

    @property
    def controllers(self) -> tuple[Strategy | None, ...]:
        return self._controllers

    @property
    def current_player(self) -> int:
        return self.state.current_player

    @property
    def direction(self) -> Direction:
        return self.state.direction

    @property
    def top_card(self) -> Card | None:
        return self.state.top_card

    @property
    def is_game_over(self) -> bool:
        return self.state.game_over

    @property
    def winner(self) -> int | None:
        return self.state.winner

    @property
    def draw_pile_exhausted(self) -> bool:
        """Whether neither the deck nor a recycle can supply a card."""
        return len(self.state.deck) == 0 and len(self.state.discard_pile) < 2

    def is_human(self, seat: int) -> bool:
        return self._controllers[seat] is None

    def legal_plays(self, seat: int) -> list[int]:
        """Hand indices ``seat`` could legally play on the current top card."""
        top = self.state.top_card
        if top is None:
            return []
        return legal_play_indices(self.state.players[seat].hand, top)

    def snapshot(self) -> GameSnapshot:
        return self.state.snapshot()

    def check_invariants(self) -> None:
        self.state.check_invariants()

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def add_observer(self, observer: GameObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def remove_observer(self, observer: GameObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify(self, hook: str, *args) -> None:
        for observer in list(self._observers):
            try:
                getattr(observer, hook)(*args)
            except Exception:
                logger.exception(f"Observer {observer!r} failed in {hook}")

    def _notify_state_changed(self) -> None:
        if self._observers:
            self._notify("on_state_changed", self.state.snapshot())

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def new_game(
        self,
        deck: Sequence[Card] | None = None,
        starting_seat: int | None = None,
    ) -> GameSnapshot:
        """Deal a fresh game.

        Args:
            deck: Optional pre-ordered deck (top card last). Must contain the
                full card universe; it is used as-is, without shuffling.
            starting_seat: Seat that moves first. Random if None.

        Returns:
            Snapshot of the state after the deal.

        Raises:
            ValueError: If ``deck`` is not a permutation of the full deck or
                ``starting_seat`` is not a seat.
        """
        if deck is not None and Counter(deck) != UNIVERSE:
            raise ValueError("A pre-ordered deck must contain exactly the 54 Pesten cards")
        if starting_seat is not None and not 0 <= starting_seat < NUM_SEATS:
            raise ValueError(f"Starting seat must be in 0..{NUM_SEATS - 1}, got {starting_seat}")

        self._cancel_pending_ai()
        self._generation += 1

        state = self.state
        state.phase = GamePhase.DEALING
        state.winner = None
        state.direction = Direction.CLOCKWISE
        state.turn_number = 0
        state.discard_pile = []
        for player in state.players:
            player.clear_hand()

        if deck is None:
            state.deck = Deck(create_deck())
            state.deck.shuffle(self._rng)
        else:
            state.deck = Deck(deck)

        if starting_seat is None:
            starting_seat = self._rng.randrange(NUM_SEATS)
        state.current_player = starting_seat

        for _ in range(INITIAL_HAND_SIZE):
            for player in state.players:
                player.receive_card(state.deck.draw())
        state.discard_pile.append(state.deck.draw())

        logger.info(
            f"New game #{self._generation}: seat {starting_seat} starts, "
            f"top card {state.top_card}"
        )

        snapshot = state.snapshot()
        for seat, controller in enumerate(self._controllers):
            if controller is not None:
                controller.on_game_start(snapshot, seat)

        self._start_turn()
        return self.state.snapshot()

    def _start_turn(self) -> None:
        """Hand the turn to the current seat and notify."""
        state = self.state
        state.phase = GamePhase.AWAITING_MOVE
        state.turn_number += 1
        self._notify_state_changed()
        self._notify("on_turn_started", state.current_player)
        if not self.is_human(state.current_player):
            self._schedule_ai_turn(state.current_player)

    def _declare_winner(self, seat: int) -> None:
        state = self.state
        state.phase = GamePhase.GAME_OVER
        state.winner = seat
        self._cancel_pending_ai()
        logger.info(f"Game #{self._generation} over: seat {seat} ({state.players[seat].name}) wins")

        self._notify_state_changed()
        self._notify("on_game_over", seat)

        snapshot = state.snapshot()
        for controller in self._controllers:
            if controller is not None:
                controller.on_game_end(snapshot, seat)

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    def _require_turn(self, seat: int) -> None:
        state = self.state
        if state.phase == GamePhase.DEALING:
            raise InvalidMoveError(MoveRejection.NOT_STARTED, "No game in progress")
        if state.game_over:
            raise InvalidMoveError(MoveRejection.GAME_OVER, "The game is over")
        if seat != state.current_player:
            raise InvalidMoveError(
                MoveRejection.NOT_YOUR_TURN,
                f"Seat {seat} tried to act on seat {state.current_player}'s turn",
            )
        if state.phase != GamePhase.AWAITING_MOVE:
            raise InvalidMoveError(MoveRejection.NOT_YOUR_TURN, "A card effect is still resolving")

    def play_card(self, seat: int, hand_index: int) -> Card:
        """Play the card at ``hand_index`` from ``seat``'s hand.

        Returns:
            The card played.

        Raises:
            InvalidMoveError: Wrong turn, bad index or a card that does not
                fit on the top card. State is unchanged.
        """
        self._require_turn(seat)
        state = self.state
        player = state.players[seat]

        if not 0 <= hand_index < player.hand_size:
            raise InvalidMoveError(
                MoveRejection.OUT_OF_RANGE,
                f"Seat {seat} has {player.hand_size} cards, no index {hand_index}",
            )
        card = player.hand[hand_index]
        if not is_valid_move(state.top_card, card):
            raise InvalidMoveError(
                MoveRejection.INVALID_CARD, f"{card} cannot be played on {state.top_card}"
            )

        player.play_card(hand_index)
        state.discard_pile.append(card)
        effect = card_effect(card)
        logger.debug(f"Seat {seat} plays {card} ({effect.name}), {player.hand_size} cards left")

        self._notify("on_card_played", seat, card, effect)
        self._notify_state_changed()

        if player.has_won:
            self._declare_winner(seat)
            return card

        state.phase = GamePhase.RESOLVING_EFFECT
        match effect:
            case Effect.FORCE_DRAW:
                self._advance_pointer()
                self._force_draw(state.current_player, force_draw_count(card))
            case Effect.SKIP:
                self._advance_pointer()
            case Effect.REVERSE:
                state.direction = state.direction.reversed
                logger.debug(f"Direction is now {state.direction.name}")
            case Effect.PASS_CARDS:
                self._pass_cards()
            case Effect.PLAY_AGAIN:
                self._start_turn()
                return card

        self.advance_turn()
        return card

    def draw_card(self, seat: int) -> Card:
        """Draw one card for ``seat`` and end its turn.

        Returns:
            The card drawn.

        Raises:
            InvalidMoveError: Not ``seat``'s turn.
            DeckExhaustedError: Deck empty and the discard pile cannot refill
                it. State is unchanged.
        """
        self._require_turn(seat)
        card = self._draw_from_deck()
        self.state.players[seat].receive_card(card)
        logger.debug(f"Seat {seat} draws a card, {len(self.state.deck)} left in deck")
        self._notify_state_changed()
        self.advance_turn()
        return card

    def pass_turn(self, seat: int) -> None:
        """End ``seat``'s turn without a card. Only allowed when nothing can be drawn.

        Raises:
            InvalidMoveError: Not ``seat``'s turn, or cards are still available.
        """
        self._require_turn(seat)
        if not self.draw_pile_exhausted:
            raise InvalidMoveError(MoveRejection.CANNOT_PASS, "Cards can still be drawn")
        logger.warning(f"Seat {seat} passes: no cards left to draw")
        self.advance_turn()

    def request_play(self, seat: int, hand_index: int) -> MoveResult:
        try:
            card = self.play_card(seat, hand_index)
        except InvalidMoveError as e:
            return MoveResult(ok=False, reason=e.reason, message=e.message)
        return MoveResult(ok=True, card=card)

    def request_draw(self, seat: int) -> MoveResult:
        try:
            card = self.draw_card(seat)
        except InvalidMoveError as e:
            return MoveResult(ok=False, reason=e.reason, message=e.message)
        except DeckExhaustedError as e:
            return MoveResult(ok=False, reason=MoveRejection.DECK_EXHAUSTED, message=str(e))
        return MoveResult(ok=True, card=card)

    def request_pass(self, seat: int) -> MoveResult:
        try:
            self.pass_turn(seat)
        except InvalidMoveError as e:
            return MoveResult(ok=False, reason=e.reason, message=e.message)
        return MoveResult(ok=True)

    # ------------------------------------------------------------------
    # Turn advancement and effects
    # ------------------------------------------------------------------

    def advance_turn(self) -> None:
        """End the current seat's turn and start the next seat's."""
        state = self.state
        if state.game_over:
            return
        if state.current_player_state.has_won:
            self._declare_winner(state.current_player)
            return
        self._advance_pointer()
        self._start_turn()

    def _advance_pointer(self) -> None:
        self.state.current_player = next_seat(self.state.current_player, self.state.direction)

    def _draw_from_deck(self) -> Card:
        state = self.state
        if len(state.deck) == 0:
            self.recycle_deck()
        try:
            return state.deck.draw()
        except EmptyDeckError as e:
            raise DeckExhaustedError(
                f"No cards to draw: deck empty, {len(state.discard_pile)} card(s) on the discard pile"
            ) from e

    def _force_draw(self, seat: int, count: int) -> None:
        victim = self.state.players[seat]
        for drawn in range(count):
            try:
                card = self._draw_from_deck()
            except DeckExhaustedError:
                logger.warning(f"Deck exhausted: seat {seat} drew {drawn} of {count} penalty cards")
                break
            victim.receive_card(card)
        logger.debug(f"Seat {seat} forced to draw {count}, now holds {victim.hand_size}")
        self._notify_state_changed()

    def _pass_cards(self) -> None:
        """Every seat hands one random card to its neighbour in the current direction."""
        state = self.state
        passed = [player.remove_random_card(self._rng) for player in state.players]
        for seat, card in enumerate(passed):
            if card is not None:
                state.players[next_seat(seat, state.direction)].receive_card(card)
        logger.debug(f"Cards passed {state.direction.name.lower()}: {sum(c is not None for c in passed)}")
        self._notify_state_changed()

    def recycle_deck(self) -> bool:
        """Shuffle the discard pile, minus its top card, back into the deck.

        Returns:
            False if the discard pile has fewer than two cards (nothing to do).
        """
        state = self.state
        if len(state.discard_pile) < 2:
            logger.warning(f"Cannot recycle a discard pile of {len(state.discard_pile)} card(s)")
            return False
        top = state.discard_pile.pop()
        recycled = state.discard_pile
        state.discard_pile = [top]
        state.deck.add_cards(recycled)
        state.deck.shuffle(self._rng)
        logger.info(f"Recycled {len(recycled)} cards into the deck")
        return True

    # ------------------------------------------------------------------
    # AI turns
    # ------------------------------------------------------------------

    def _schedule_ai_turn(self, seat: int) -> None:
        self._cancel_pending_ai()
        generation = self._generation
        turn_number = self.state.turn_number
        self._pending_ai = self._scheduler.schedule(
            lambda: self._run_ai_turn(seat, generation, turn_number),
            self.ai_delay,
        )

    def _cancel_pending_ai(self) -> None:
        if self._pending_ai is not None:
            self._pending_ai.cancel()
            self._pending_ai = None

    def _run_ai_turn(self, seat: int, generation: int, turn_number: int) -> None:
        """Deferred AI turn. Does nothing if the game or the turn moved on."""
        state = self.state
        if generation != self._generation or state.game_over:
            return
        if (
            state.current_player != seat
            or state.turn_number != turn_number
            or state.phase != GamePhase.AWAITING_MOVE
        ):
            logger.debug(f"Dropping stale AI turn for seat {seat}")
            return
        self._pending_ai = None

        strategy = self._controllers[seat]
        if strategy is None:
            return

        hand = tuple(state.players[seat].hand)
        action = strategy.choose_action(hand, state.top_card)
        if not isinstance(action, Move):
            logger.error(f"Strategy {strategy.name} returned unknown action {action!r}")
            action = Draw()
        logger.info(f"AI turn: seat={seat}, strategy={strategy.name}, action={action.move_type.name} ({action})")

        match action:
            case PlayCard(index=index):
                try:
                    self.play_card(seat, index)
                    return
                except InvalidMoveError as e:
                    logger.error(f"Strategy {strategy.name} chose an illegal play for seat {seat}: {e}")
            case Pass():
                try:
                    self.pass_turn(seat)
                    return
                except InvalidMoveError as e:
                    logger.error(f"Strategy {strategy.name} passed illegally for seat {seat}: {e}")
            case Draw():
                pass

        try:
            self.draw_card(seat)
        except DeckExhaustedError:
            self.pass_turn(seat)
