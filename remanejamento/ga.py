import logging
import random
import time
from typing import Dict, List, Optional

import numpy as np

from .base import BaseStrategy, elapsed_ms
from .config import EngineConfig
from .initial_population import build_initial_population
from .model import AlgorithmResult, Conflict, Individual, ReferenceSnapshot
from .operators import copy_individual, mutate_score, single_point_crossover, tournament_selection

logger = logging.getLogger(__name__)


class GeneticSolver:
    def __init__(self, conflitos: List[Conflict], snapshot: ReferenceSnapshot, cfg: EngineConfig,
                 rng: random.Random):
        self.conflitos = conflitos
        self.snapshot = snapshot
        self.cfg = cfg
        self.rng = rng
        self.history: List[Dict] = []

    def _record(self, gen: int, population: List[Individual]) -> None:
        fitness = np.array([ind.fitness for ind in population], dtype=float)
        self.history.append({
            "gen": gen,
            "best_fitness": float(fitness.max()),
            "avg_fitness": float(fitness.mean()),
        })
        logger.debug("Geração %d: melhor=%.1f média=%.1f", gen, fitness.max(), fitness.mean())

    def next_generation(self, population: List[Individual]) -> List[Individual]:
        new_pop: List[Individual] = []
        # Elitismo (desligado por padrão)
        if self.cfg.elite_size:
            ranked = sorted(population, key=lambda x: x.fitness, reverse=True)
            new_pop.extend(copy_individual(ind) for ind in ranked[:self.cfg.elite_size])

        while len(new_pop) < self.cfg.population_size:
            p1 = tournament_selection(population, self.rng, self.cfg.tournament_size)
            p2 = tournament_selection(population, self.rng, self.cfg.tournament_size)
            child = single_point_crossover(p1, p2, self.cfg)
            if self.rng.random() < self.cfg.mutation_rate:
                child = mutate_score(child, self.rng, self.cfg)
            new_pop.append(child)
        return new_pop

    def evolve(self, population: List[Individual]) -> Individual:
        deadline = None
        if self.cfg.time_budget_s is not None:
            deadline = time.monotonic() + self.cfg.time_budget_s

        self._record(0, population)
        for gen in range(1, self.cfg.generations + 1):
            if deadline is not None and time.monotonic() >= deadline:
                logger.info("Tempo esgotado após %d gerações", gen - 1)
                break
            population = self.next_generation(population)
            self._record(gen, population)

        return max(population, key=lambda x: x.fitness)

    def run(self) -> Individual:
        population = build_initial_population(self.conflitos, self.snapshot, self.rng, self.cfg)
        return self.evolve(population)


class GeneticStrategy(BaseStrategy):
    """Busca genética sobre atribuições completas de substitutos.

    Inicializa → avalia → {seleção por torneio → cruzamento → mutação →
    avaliação} por ``generations`` gerações → devolve o melhor indivíduo da
    população final. A população vive só dentro de ``resolve``.
    """

    name = "Algoritmo Genético"

    def __init__(self, snapshot: ReferenceSnapshot, cfg: Optional[EngineConfig] = None):
        super().__init__(snapshot, cfg)
        self.history: List[Dict] = []

    def resolve(self, conflitos: List[Conflict]) -> AlgorithmResult:
        start = time.perf_counter()
        solver = GeneticSolver(self.pending(conflitos), self.snapshot, self.cfg, random.Random(self.cfg.seed))
        best = solver.run()
        self.history = solver.history
        return AlgorithmResult.from_solutions(best.solucoes, elapsed_ms(start), self.name, fitness=best.fitness)
