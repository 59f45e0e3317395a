import dataclasses
import random
from typing import List

from .config import EngineConfig
from .evaluation import evaluate
from .initial_population import random_score
from .model import Individual


def tournament_selection(population: List[Individual], rng: random.Random, size: int) -> Individual:
    """Sorteia ``size`` indivíduos (com reposição) e devolve o mais apto."""
    best = rng.choice(population)
    for _ in range(1, size):
        cand = rng.choice(population)
        if cand.fitness > best.fitness:
            best = cand
    return best


def single_point_crossover(p1: Individual, p2: Individual, cfg: EngineConfig) -> Individual:
    """Primeira metade das soluções de p1 + segunda metade de p2, por posição."""
    cut = len(p1.solucoes) // 2
    child = Individual(solucoes=p1.solucoes[:cut] + p2.solucoes[cut:])
    evaluate(child, cfg)
    return child


def mutate_score(ind: Individual, rng: random.Random, cfg: EngineConfig) -> Individual:
    """Sorteia um novo score para uma solução; o docente não muda."""
    if not ind.solucoes:
        return ind
    idx = rng.randrange(len(ind.solucoes))
    solucoes = list(ind.solucoes)
    # cópia: as soluções são compartilhadas entre indivíduos
    solucoes[idx] = dataclasses.replace(solucoes[idx], score=random_score(rng, cfg))
    mutated = Individual(solucoes=solucoes)
    evaluate(mutated, cfg)
    return mutated


def copy_individual(ind: Individual) -> Individual:
    return Individual(solucoes=list(ind.solucoes), fitness=ind.fitness)
