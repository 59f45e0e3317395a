# remanejamento/evaluation.py
from dataclasses import dataclass
from typing import Dict, List

from .config import EngineConfig
from .model import Individual, Solution


@dataclass
class EvaluationResult:
    score_total: float
    penalty: int
    fitness: float


def overload_penalty(solucoes: List[Solution], cfg: EngineConfig) -> int:
    """Penaliza cada aula extra além do limite tolerado para um mesmo docente."""
    penalty = 0
    usados: Dict[int, int] = {}
    for sol in solucoes:
        if sol.novo_professor is None:
            continue
        count = usados.get(sol.novo_professor.id, 0)
        usados[sol.novo_professor.id] = count + 1
        if count > cfg.overload_threshold:
            penalty += cfg.overload_penalty
    return penalty


def evaluate(ind: Individual, cfg: EngineConfig) -> EvaluationResult:
    score_total = sum(sol.score for sol in ind.solucoes)
    penalty = overload_penalty(ind.solucoes, cfg)
    ind.fitness = score_total - penalty
    return EvaluationResult(score_total=score_total, penalty=penalty, fitness=ind.fitness)
