#!/usr/bin/env python3

CONFIG = {
    # Randomness / reproducibility (None = fresh system entropy every run)
    "random_seed": None,

    # GA hyperparameters
    "pop_size": 500,
    "max_generations": 1000,
    "crossover_rate": 0.70,
    "mutation_rate": 0.01,

    # Chromosome length is 4 * k bits, k drawn from [chromosome_min, chromosome_max)
    "chromosome_min": 3,
    "chromosome_max": 101,

    # A chromosome is a solution when |1 - fitness| <= epsilon
    "epsilon": 1e-9,

    # Logging
    "progress_every": 10,      # print "Generation i of N" every this many gens
}
