# remanejamento/initial_population.py
import random
from typing import List, Optional

from .config import EngineConfig
from .evaluation import evaluate
from .model import Conflict, Individual, ReferenceSnapshot, Solution


def random_score(rng: random.Random, cfg: EngineConfig) -> int:
    return rng.randint(cfg.min_random_score, cfg.max_random_score)


def random_solution_for_conflict(
    conflito: Conflict,
    snapshot: ReferenceSnapshot,
    rng: random.Random,
    cfg: EngineConfig,
) -> Optional[Solution]:
    # sem docente apto o conflito fica fora do indivíduo
    aptos = snapshot.qualified_teachers(conflito)
    if not aptos:
        return None
    prof = rng.choice(aptos)
    return Solution(
        conflito=conflito,
        novo_professor=prof,
        score=random_score(rng, cfg),
        justificativa=f"Solução genética: {prof.nome}",
    )


def build_random_individual(
    conflitos: List[Conflict],
    snapshot: ReferenceSnapshot,
    rng: random.Random,
    cfg: EngineConfig,
) -> Individual:
    solucoes: List[Solution] = []
    for conflito in conflitos:
        sol = random_solution_for_conflict(conflito, snapshot, rng, cfg)
        if sol is not None:
            solucoes.append(sol)
    ind = Individual(solucoes=solucoes)
    evaluate(ind, cfg)
    return ind


def build_initial_population(
    conflitos: List[Conflict],
    snapshot: ReferenceSnapshot,
    rng: random.Random,
    cfg: EngineConfig,
) -> List[Individual]:
    return [build_random_individual(conflitos, snapshot, rng, cfg) for _ in range(cfg.population_size)]
