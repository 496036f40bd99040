"""Pure game engine.

Every operation takes a :class:`SessionState` and returns a new one. Illegal
or out-of-status actions return the very same state object, so hosts can
detect "nothing happened" with an identity check.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple

from .grid import GameGrid
from .kicks import collides, drop_distance, resolve_rotation
from .pieces import ActivePiece, TetrominoType
from .randomizer import BagRandomizer, Queue, Randomizer, RngState, draw
from .rules import DEFAULT_RULES, ScoringRules


NO_COMBO = -1


class Status(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "gameover"


@dataclass(frozen=True)
class GameConfig:
    width: int = 10
    height: int = 22  # includes the hidden spawn rows
    visible_rows: int = 20
    spawn_x: int = 3
    spawn_y: int = 0
    queue_refill_threshold: int = 7
    preview_size: int = 5
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"board must be positive, got {self.width}x{self.height}")
        if not 0 < self.visible_rows <= self.height:
            raise ValueError(f"visible_rows must be in 1..{self.height}, got {self.visible_rows}")


@dataclass(frozen=True)
class RunStats:
    singles: int = 0
    doubles: int = 0
    triples: int = 0
    tetrises: int = 0
    combos: int = 0
    max_combo: int = 0

    def record_clear(self, rows: int, combo: int) -> "RunStats":
        return RunStats(
            singles=self.singles + (rows == 1),
            doubles=self.doubles + (rows == 2),
            triples=self.triples + (rows == 3),
            tetrises=self.tetrises + (rows == 4),
            combos=self.combos + (combo > 0),
            max_combo=max(self.max_combo, combo),
        )


@dataclass(frozen=True)
class SessionState:
    status: Status
    board: GameGrid
    current: ActivePiece
    queue: Queue
    hold: Optional[TetrominoType]
    can_hold: bool
    score: int
    level: int
    lines: int
    combo: int
    stats: RunStats
    lines_to_clear: Tuple[int, ...]
    drop_delay: int
    config: GameConfig = field(default_factory=GameConfig)
    rules: ScoringRules = DEFAULT_RULES
    randomizer: Randomizer = field(default_factory=BagRandomizer, compare=False, repr=False)
    rng_state: RngState = field(default=None, repr=False)

    @property
    def pending_clear(self) -> bool:
        return bool(self.lines_to_clear)

    @property
    def preview(self) -> Queue:
        return self.queue[: self.config.preview_size]


def spawn_piece(kind: TetrominoType, config: GameConfig) -> ActivePiece:
    return ActivePiece(kind, 0, config.spawn_x, config.spawn_y)


def _fresh_state(status: Status, config: GameConfig, randomizer: Optional[Randomizer],
                 rules: Optional[ScoringRules], rng_state: RngState = None) -> SessionState:
    randomizer = randomizer or BagRandomizer()
    rules = rules or DEFAULT_RULES
    if rng_state is None:
        rng_state = randomizer.seed_state(config.random_seed)
    kind, queue, rng_state = draw((), randomizer, rng_state, config.queue_refill_threshold)
    return SessionState(
        status=status,
        board=GameGrid(config.width, config.height),
        current=spawn_piece(kind, config),
        queue=queue,
        hold=None,
        can_hold=True,
        score=0,
        level=1,
        lines=0,
        combo=NO_COMBO,
        stats=RunStats(),
        lines_to_clear=(),
        drop_delay=rules.fall_interval(1),
        config=config,
        rules=rules,
        randomizer=randomizer,
        rng_state=rng_state,
    )


def initial_state(config: Optional[GameConfig] = None, randomizer: Optional[Randomizer] = None,
                  rules: Optional[ScoringRules] = None, rng_state: RngState = None) -> SessionState:
    """Idle snapshot shown before the first game starts."""
    return _fresh_state(Status.IDLE, config or GameConfig(), randomizer, rules, rng_state)


def start_new_game(config: Optional[GameConfig] = None, randomizer: Optional[Randomizer] = None,
                   rules: Optional[ScoringRules] = None, rng_state: RngState = None) -> SessionState:
    """Fresh playing session.

    ``rng_state`` continues an earlier entropy value; when omitted the
    randomizer is seeded from ``config.random_seed``.
    """
    return _fresh_state(Status.PLAYING, config or GameConfig(), randomizer, rules, rng_state)


def _accepts_input(state: SessionState) -> bool:
    # The active slot is stale while cleared rows wait to collapse.
    return state.status is Status.PLAYING and not state.lines_to_clear


def _next_piece(state: SessionState) -> Tuple[ActivePiece, Queue, RngState]:
    kind, queue, rng_state = draw(state.queue, state.randomizer, state.rng_state,
                                  state.config.queue_refill_threshold)
    return spawn_piece(kind, state.config), queue, rng_state


def _lock(state: SessionState, piece: ActivePiece, drop_bonus: int = 0) -> SessionState:
    rules = state.rules
    merged = state.board.merge(piece)
    rows = merged.full_rows()

    if rows:
        count = len(rows)
        combo = state.combo + 1
        level = rules.level(state.lines + count)
        return replace(
            state,
            board=merged.mark_rows(rows),
            current=piece,
            lines_to_clear=tuple(rows),
            combo=combo,
            stats=state.stats.record_clear(count, combo),
            score=state.score + rules.line_clear_score(count, combo, level, drop_bonus),
            lines=state.lines + count,
            level=level,
            drop_delay=rules.fall_interval(level),
            can_hold=True,
        )

    nxt, queue, rng_state = _next_piece(state)
    if collides(merged, nxt):
        return replace(
            state,
            board=merged,
            current=piece,
            score=state.score + drop_bonus,
            status=Status.GAME_OVER,
        )
    return replace(
        state,
        board=merged,
        current=nxt,
        queue=queue,
        rng_state=rng_state,
        score=state.score + drop_bonus,
        combo=NO_COMBO,
        can_hold=True,
    )


def tick(state: SessionState) -> SessionState:
    if not _accepts_input(state):
        return state
    piece = state.current
    if not collides(state.board, piece, (piece.x, piece.y + 1)):
        return replace(state, current=piece.moved(0, 1))
    return _lock(state, piece)


def move(state: SessionState, dx: int, dy: int) -> SessionState:
    if not _accepts_input(state):
        return state
    piece = state.current
    if collides(state.board, piece, (piece.x + dx, piece.y + dy)):
        return state
    return replace(state, current=piece.moved(dx, dy))


def rotate(state: SessionState, direction: int) -> SessionState:
    if direction not in (1, -1):
        raise ValueError(f"rotation direction must be 1 or -1, got {direction!r}")
    if not _accepts_input(state):
        return state
    kicked = resolve_rotation(state.board, state.current, direction)
    if kicked is None:
        return state
    x, y, rotation = kicked
    return replace(state, current=state.current.posed(x, y, rotation))


def hard_drop(state: SessionState) -> SessionState:
    if not _accepts_input(state):
        return state
    distance = drop_distance(state.board, state.current)
    landed = state.current.moved(0, distance)
    return _lock(state, landed, state.rules.hard_drop_bonus(distance))


def hold(state: SessionState) -> SessionState:
    if not _accepts_input(state) or not state.can_hold:
        return state
    queue, rng_state = state.queue, state.rng_state
    if state.hold is not None:
        nxt = spawn_piece(state.hold, state.config)
    else:
        nxt, queue, rng_state = _next_piece(state)
    if collides(state.board, nxt):
        return replace(state, status=Status.GAME_OVER)
    return replace(state, current=nxt, queue=queue, rng_state=rng_state,
                   hold=state.current.kind, can_hold=False)


def pause_toggle(state: SessionState) -> SessionState:
    if state.status is Status.PLAYING:
        return replace(state, status=Status.PAUSED)
    if state.status is Status.PAUSED:
        return replace(state, status=Status.PLAYING)
    return state


def resume(state: SessionState) -> SessionState:
    if state.status is not Status.PAUSED:
        return state
    return replace(state, status=Status.PLAYING)


def apply_pending_clear(state: SessionState) -> SessionState:
    if not state.lines_to_clear:
        return state
    cleared = state.board.collapse(state.lines_to_clear)
    nxt, queue, rng_state = _next_piece(state)
    if collides(cleared, nxt):
        return replace(state, board=cleared, lines_to_clear=(), status=Status.GAME_OVER)
    return replace(state, board=cleared, current=nxt, queue=queue, rng_state=rng_state,
                   lines_to_clear=())


def ghost_row(state: SessionState) -> int:
    """Row the active piece would land on if hard-dropped now."""
    return state.current.y + drop_distance(state.board, state.current)
