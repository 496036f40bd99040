from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoringRules:
    # Indexed by rows cleared in one lock.
    line_clear_scores: tuple[int, int, int, int, int] = (0, 100, 300, 500, 800)
    combo_bonus_step: int = 50
    hard_drop_per_cell: int = 2
    lines_per_level: int = 10
    max_level: int = 20
    initial_interval: int = 1000
    interval_step: int = 70
    min_interval: int = 60

    def score_for_lines(self, lines: int) -> int:
        if lines <= 0:
            return 0
        if lines < len(self.line_clear_scores):
            return self.line_clear_scores[lines]
        # More than four rows cannot happen with tetrominoes; clamp to the top entry
        return self.line_clear_scores[-1]

    def combo_bonus(self, combo: int) -> int:
        return self.combo_bonus_step * combo if combo > 0 else 0

    def line_clear_score(self, lines: int, combo: int, level: int, drop_bonus: int = 0) -> int:
        """Score for a clearing lock: the combo bonus is added before the level multiplier."""
        return (self.score_for_lines(lines) + self.combo_bonus(combo)) * level + drop_bonus

    def hard_drop_bonus(self, distance: int) -> int:
        return self.hard_drop_per_cell * max(0, distance)

    def level(self, total_lines: int) -> int:
        return min(self.max_level, total_lines // self.lines_per_level + 1)

    def fall_interval(self, level: int) -> int:
        return max(self.min_interval, self.initial_interval - (level - 1) * self.interval_step)


DEFAULT_RULES = ScoringRules()


def level_for_lines(total_lines: int) -> int:
    return DEFAULT_RULES.level(total_lines)


def fall_interval(level: int) -> int:
    return DEFAULT_RULES.fall_interval(level)
