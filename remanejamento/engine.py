"""
Fachada do motor de remanejamento.

Constrói a estratégia pela fábrica, mede o tempo da execução e monta o
AlgorithmResult entregue ao chamador (painel, notificações, calendário).
"""
import dataclasses
import logging
import time
from typing import List, Optional

from .base import BaseStrategy, elapsed_ms
from .config import EngineConfig
from .factory import StrategyFactory
from .model import STATUS_EM_ANALISE, AlgorithmResult, Conflict, ReferenceSnapshot

logger = logging.getLogger(__name__)


class RescheduleEngine:
    def __init__(self, snapshot: ReferenceSnapshot, cfg: Optional[EngineConfig] = None):
        self.snapshot = snapshot
        self.cfg = cfg or EngineConfig()

    def build_strategy(self, key: Optional[str] = None) -> BaseStrategy:
        return StrategyFactory.get_strategy(key, self.snapshot, self.cfg)

    def run_strategy(self, strategy: BaseStrategy, conflitos: List[Conflict]) -> AlgorithmResult:
        start = time.perf_counter()
        raw = strategy.resolve(conflitos)
        result = AlgorithmResult.from_solutions(
            raw.solucoes, elapsed_ms(start), strategy.get_strategy_name(), fitness=raw.fitness
        )
        logger.info(
            "%s: %d pendentes, %d resolvidos, score=%s em %d ms",
            result.algoritmo_utilizado,
            len(BaseStrategy.pending(conflitos)),
            result.conflitos_resolvidos,
            result.score_total,
            result.tempo_execucao,
        )
        return result

    def run(self, conflitos: List[Conflict], strategy: Optional[str] = None) -> AlgorithmResult:
        return self.run_strategy(self.build_strategy(strategy), conflitos)


def classify_priority(prioridade: int) -> str:
    if prioridade >= 8:
        return "alta"
    if prioridade >= 5:
        return "media"
    return "baixa"


def mark_in_review(conflitos: List[Conflict], result: AlgorithmResult) -> List[Conflict]:
    """Devolve cópias dos conflitos; os pendentes com solução passam a "Em Análise"."""
    resolvidos = {sol.conflito.id for sol in result.solucoes}
    out: List[Conflict] = []
    for conflito in conflitos:
        if conflito.is_pending and conflito.id in resolvidos:
            out.append(dataclasses.replace(conflito, status=STATUS_EM_ANALISE))
        else:
            out.append(dataclasses.replace(conflito))
    return out
