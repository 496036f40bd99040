from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

import pygame

from tetromino_rl.game import Action, GameConfig, TetrominoGame
from tetromino_rl.game.engine import Status
from tetromino_rl.persistence import HighScoreStore
from .renderer import Renderer


logger = logging.getLogger(__name__)

CLEAR_DELAY_MS = 210

KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_UP: Action.ROTATE_CW,
    pygame.K_x: Action.ROTATE_CW,
    pygame.K_z: Action.ROTATE_CCW,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_LSHIFT: Action.HOLD,
    pygame.K_RSHIFT: Action.HOLD,
    pygame.K_c: Action.HOLD,
}


def route_key(game: TetrominoGame, key: int) -> Optional[Action]:
    """Map a key press to a game call; returns the Action dispatched, if any.

    Idle and game-over only accept start/restart; paused only accepts P.
    """
    status = game.status
    if status in (Status.IDLE, Status.GAME_OVER):
        if key == pygame.K_SPACE:
            game.reset()
        return None
    if key == pygame.K_p:
        game.pause_toggle()
        return None
    if status is Status.PAUSED:
        return None
    action = KEY_TO_ACTION.get(key)
    if action is not None:
        game.dispatch(action)
    return action


def run(config: Optional[GameConfig] = None, effects: bool = True, store: Optional[HighScoreStore] = None) -> None:
    store = store or HighScoreStore()
    best = store.load()
    clear_delay = CLEAR_DELAY_MS if effects else 0

    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = TetrominoGame(config, auto_clear=False)
        renderer = Renderer(cell_size=28)
        screen = pygame.display.set_mode(renderer.window_size(game.state))
        pygame.display.set_caption("Tetromino - Human Play")

        last_fall = pygame.time.get_ticks()
        clear_started: Optional[int] = None

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                        continue
                    was_waiting = game.status is not Status.PLAYING
                    action = route_key(game, event.key)
                    if action == Action.SOFT_DROP or (was_waiting and game.status is Status.PLAYING):
                        last_fall = pygame.time.get_ticks()

            now = pygame.time.get_ticks()
            if game.state.pending_clear:
                if clear_started is None:
                    clear_started = now
                if now - clear_started >= clear_delay:
                    game.apply_pending_clear()
                    clear_started = None
                    last_fall = now
            elif game.status is Status.PLAYING and now - last_fall >= game.state.drop_delay:
                game.tick()
                last_fall = now

            if game.game_over and game.score > best:
                store.submit(game.score)
                best = game.score

            renderer.draw(screen, game.state, best)
            clock.tick(60)
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--no-effects", action="store_true", help="Collapse cleared rows without delay")
    p.add_argument("--highscore", type=str, default=None, help="Path of the high score file")
    return p


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = build_parser().parse_args()
    run(GameConfig(random_seed=args.seed), effects=not args.no_effects, store=HighScoreStore(args.highscore))


if __name__ == "__main__":  # pragma: no cover
    main()
