import logging
import time
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from .config import EngineConfig
from .model import AlgorithmResult, Conflict, ReferenceSnapshot, Solution

logger = logging.getLogger(__name__)


def elapsed_ms(start: float) -> int:
    return int(round((time.perf_counter() - start) * 1000))


class BaseStrategy(ABC):
    """Contrato comum das estratégias de remanejamento.

    Cada estratégia fica presa ao snapshot de dados de referência recebido na
    construção e transforma os conflitos pendentes em soluções. Conflitos sem
    solução ficam fora da lista de soluções.
    """

    name: str = ""

    def __init__(self, snapshot: ReferenceSnapshot, cfg: Optional[EngineConfig] = None):
        self.snapshot = snapshot
        self.cfg = cfg or EngineConfig()

    def get_strategy_name(self) -> str:
        return self.name

    @staticmethod
    def pending(conflitos: List[Conflict]) -> List[Conflict]:
        return [c for c in conflitos if c.is_pending]

    @abstractmethod
    def resolve(self, conflitos: List[Conflict]) -> AlgorithmResult:
        pass


class SequentialStrategy(BaseStrategy):
    """Estratégia que ordena os pendentes e resolve um conflito por vez.

    O estado de uma execução (ex.: cargas acumuladas) nasce em
    ``new_run_state`` e é passado por todo o laço; nada sobrevive à chamada.
    """

    @abstractmethod
    def order(self, conflitos: List[Conflict]) -> List[Conflict]:
        pass

    @abstractmethod
    def resolve_one(self, conflito: Conflict, state: Any = None) -> Optional[Solution]:
        pass

    def new_run_state(self) -> Any:
        return None

    def record(self, solucao: Solution, state: Any) -> None:
        """Chamado após cada solução aceita, antes do próximo conflito."""

    def resolve(self, conflitos: List[Conflict]) -> AlgorithmResult:
        start = time.perf_counter()
        state = self.new_run_state()
        solucoes: List[Solution] = []
        for conflito in self.order(self.pending(conflitos)):
            sol = self.resolve_one(conflito, state)
            if sol is None:
                logger.debug("Conflito %s sem solução (%s)", conflito.id, self.name)
                continue
            solucoes.append(sol)
            self.record(sol, state)
        return AlgorithmResult.from_solutions(solucoes, elapsed_ms(start), self.name)
