"""Game module for Tetromino RL.

Exports the pure engine and its supporting pieces:
- TetrominoType / ActivePiece: shape table and the falling piece
- BagRandomizer: 7-bag preview queue generator
- GameGrid: immutable playfield, row detection and collapse
- collides / resolve_rotation: collision and SRS wall kicks
- ScoringRules: score, level and gravity curves
- SessionState and the engine operations in ``engine``
- TetrominoGame: stateful host with an Action-based step()
"""

from .pieces import ActivePiece, TetrominoType
from .randomizer import BagRandomizer
from .grid import GameGrid
from .kicks import collides, resolve_rotation
from .rules import ScoringRules
from .engine import GameConfig, RunStats, SessionState, Status
from .core import Action, TetrominoGame

__all__ = [
    "ActivePiece",
    "TetrominoType",
    "BagRandomizer",
    "GameGrid",
    "collides",
    "resolve_rotation",
    "ScoringRules",
    "GameConfig",
    "RunStats",
    "SessionState",
    "Status",
    "Action",
    "TetrominoGame",
]
