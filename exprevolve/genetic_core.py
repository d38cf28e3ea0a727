#!/usr/bin/env python3
"""
Chromosome representation and the GA operators that act on it.

Every randomized function takes the random source explicitly (`rng`); it
only needs `random()` and `randrange()`, so a seeded random.Random or a
scripted stand-in both work.
"""

from typing import Iterable, List, Optional, Sequence, Tuple

from exprevolve.config import CONFIG
from exprevolve.expr_fitness import compute_fitness, expression_value
from exprevolve.symbol_codec import bitstring, decode, encode

Bits = Tuple[bool, ...]


# =========================
# Chromosome
# =========================


class Chromosome:
    """
    A candidate expression as a bit string plus its fitness against the
    target it was built for. Immutable: operators return new chromosomes,
    and fitness is always recomputed from the bits.
    """

    __slots__ = ("_bits", "_fitness")

    def __init__(self, bits: Iterable[bool], target: float):
        self._bits: Bits = tuple(bool(b) for b in bits)
        self._fitness = compute_fitness(self._bits, target)

    @classmethod
    def random(
        cls,
        target: float,
        rng,
        min_quads: int = CONFIG["chromosome_min"],
        max_quads: int = CONFIG["chromosome_max"],
    ) -> "Chromosome":
        """4 * k random bits, k uniform in [min_quads, max_quads)."""
        size = rng.randrange(min_quads, max_quads) * 4
        return cls((rng.random() < 0.5 for _ in range(size)), target)

    @classmethod
    def from_expression(cls, text: str, target: float) -> "Chromosome":
        return cls(encode(text), target)

    @property
    def bits(self) -> Bits:
        return self._bits

    @property
    def fitness(self) -> float:
        return self._fitness

    def __len__(self):
        return len(self._bits)

    def __eq__(self, other):
        if not isinstance(other, Chromosome):
            return NotImplemented
        return self._bits == other._bits and self._fitness == other._fitness

    def __hash__(self):
        return hash((self._bits, self._fitness))

    def __repr__(self):
        return f"Chromosome({self.decode()!r}, fitness={self._fitness:.6g}, bits={len(self._bits)})"

    def __str__(self):
        return self.decode()

    def decode(self) -> str:
        """The (possibly malformed) expression these bits spell."""
        return decode(self._bits)

    def value(self) -> Optional[float]:
        """Value of the decoded expression, None if it doesn't evaluate."""
        return expression_value(self._bits)

    def bitstring(self) -> str:
        return bitstring(self._bits)

    def is_solution(self, epsilon: float = CONFIG["epsilon"]) -> bool:
        return abs(1.0 - self._fitness) <= epsilon

    def crossover(
        self,
        other: "Chromosome",
        target: float,
        rng,
        rate: float = CONFIG["crossover_rate"],
    ) -> Tuple["Chromosome", "Chromosome"]:
        """
        Single-point crossover with probability `rate`; otherwise copies of
        both parents. Parents may differ in length.
        """
        longest = max(len(self._bits), len(other._bits))
        if rng.random() >= rate or longest == 0:
            return Chromosome(self._bits, target), Chromosome(other._bits, target)

        cut = rng.randrange(longest)
        a, b = splice(self._bits, other._bits, cut)
        return Chromosome(a, target), Chromosome(b, target)

    def mutate(
        self,
        target: float,
        rng,
        rate: float = CONFIG["mutation_rate"],
    ) -> "Chromosome":
        """Flip each bit independently with probability `rate`."""
        return Chromosome((not bit if rng.random() < rate else bit for bit in self._bits), target)


def splice(a: Sequence[bool], b: Sequence[bool], cut: int) -> Tuple[Bits, Bits]:
    """
    Exchange tails at `cut`: (a[:cut] + b[cut:], b[:cut] + a[cut:]).
    Slices past either end are just empty, so lengths never exceed
    max(len(a), len(b)).
    """
    a, b = tuple(a), tuple(b)
    return a[:cut] + b[cut:], b[:cut] + a[cut:]


# =========================
# Population helpers
# =========================


def random_population(popsize: int, target: float, rng) -> List[Chromosome]:
    return [Chromosome.random(target, rng) for _ in range(popsize)]


def roulette_select(population: Sequence[Chromosome], total_fitness: float, rng) -> Chromosome:
    """
    Fitness-proportionate selection. With zero total fitness nobody is
    better than anybody else, so the first individual is returned without
    touching the random source.
    """
    if total_fitness == 0:
        return population[0]
    slice_ = rng.random() * total_fitness
    acc = 0.0
    for c in population:
        acc += c.fitness
        if acc >= slice_:
            return c
    # float rounding kept the running sum just below the draw
    return population[-1]


def best_of(population: Sequence[Chromosome]) -> Chromosome:
    return max(population, key=lambda c: c.fitness)
