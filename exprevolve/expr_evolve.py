#!/usr/bin/env python3
"""
expr_evolve.py

The search loop: roulette selection, one-point crossover and bit-flip
mutation over a population of Chromosomes, until some chromosome's
expression hits the target (within epsilon) or the generation budget runs
out.

No printing happens here. Callers that want progress pass `on_generation`,
which receives a GenerationStats once per generation before the solution
check.
"""

import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from exprevolve.config import CONFIG
from exprevolve.expr_fitness import population_fitness
from exprevolve.genetic_core import (
    Chromosome,
    best_of,
    random_population,
    roulette_select,
)


@dataclass
class GenerationStats:
    generation: int
    best_fitness: float
    mean_fitness: float
    best_expression: str
    population_size: int

    @classmethod
    def from_population(cls, generation: int, population: Sequence[Chromosome]) -> "GenerationStats":
        best = best_of(population)
        return cls(
            generation=generation,
            best_fitness=best.fitness,
            mean_fitness=population_fitness(population) / len(population),
            best_expression=best.decode(),
            population_size=len(population),
        )


def make_rng(seed=CONFIG["random_seed"]) -> random.Random:
    """Random source for a run; seed None means system entropy."""
    return random.Random(seed)


def ga_epoch(
    population: Sequence[Chromosome],
    target: float,
    rng,
    crossover_rate: float = CONFIG["crossover_rate"],
    mutation_rate: float = CONFIG["mutation_rate"],
) -> List[Chromosome]:
    """
    Breed one generation. Parents are drawn with replacement; children come
    in pairs, and the second child of the last pair is dropped when the
    population size is odd so the size stays fixed.
    """
    pop_size = len(population)
    total = population_fitness(population)
    new_pop: List[Chromosome] = []
    while len(new_pop) < pop_size:
        p1 = roulette_select(population, total, rng)
        p2 = roulette_select(population, total, rng)
        c1, c2 = p1.crossover(p2, target, rng, rate=crossover_rate)
        c1 = c1.mutate(target, rng, rate=mutation_rate)
        c2 = c2.mutate(target, rng, rate=mutation_rate)
        new_pop.append(c1)
        if len(new_pop) < pop_size:
            new_pop.append(c2)
    return new_pop


def ga(
    popsize: int,
    target: float,
    rng=None,
    max_generations: int = CONFIG["max_generations"],
    epsilon: float = CONFIG["epsilon"],
    crossover_rate: float = CONFIG["crossover_rate"],
    mutation_rate: float = CONFIG["mutation_rate"],
    on_generation: Optional[Callable[[GenerationStats], None]] = None,
) -> Tuple[int, Optional[Chromosome]]:
    """
    Search for an expression evaluating to `target`.

    Returns (generation index, chromosome) as soon as any chromosome is
    within `epsilon` of perfect fitness, or (max_generations, None) when
    the budget is exhausted.
    """
    if popsize < 1:
        raise ValueError(f"popsize must be at least 1, got {popsize}")
    if rng is None:
        rng = make_rng()

    pop = random_population(popsize, target, rng)

    for gen in range(max_generations):
        if on_generation is not None:
            on_generation(GenerationStats.from_population(gen, pop))
        for c in pop:
            if c.is_solution(epsilon):
                return gen, c
        pop = ga_epoch(pop, target, rng, crossover_rate, mutation_rate)

    return max_generations, None
