#!/usr/bin/env python3
import math
from typing import Optional, Sequence

from exprevolve.expr_eval import safe_evaluate
from exprevolve.symbol_codec import decode

# =========================
# Fitness evaluation
# =========================


def expression_value(bits: Sequence[bool]) -> Optional[float]:
    """
    Decode `bits` and evaluate the expression.
    Returns None if the decoded text does not parse or evaluate.
    """
    return safe_evaluate(decode(bits))


def fitness_for_value(value: Optional[float], target: float) -> float:
    """
    1 / (1 + |value - target|), in (0, 1] and exactly 1 on a perfect match.
    A failed evaluation or a nan anywhere scores 0.
    """
    if value is None or math.isnan(value):
        return 0.0
    diff = abs(value - target)
    if math.isnan(diff):
        # inf - inf
        return 0.0
    return 1.0 / (1.0 + diff)


def compute_fitness(bits: Sequence[bool], target: float) -> float:
    return fitness_for_value(expression_value(bits), target)


def population_fitness(population) -> float:
    return sum(c.fitness for c in population)
