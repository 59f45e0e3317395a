import math
from typing import Dict, List, Optional

from .base import SequentialStrategy
from .model import Conflict, Solution, Teacher


class LoadBalancingStrategy(SequentialStrategy):
    """Aloca o substituto apto de menor carga e acumula a carga atribuída.

    Os conflitos menos urgentes vão primeiro. A carga de cada docente é
    rastreada num mapa próprio da execução (id -> horas), semeado com
    ``carga_horaria``; os objetos Teacher do chamador nunca são alterados.
    Cada decisão precisa enxergar a carga já atualizada pela anterior,
    por isso o laço é estritamente sequencial.

    A carga só cresce (``load_increment >= 1``). Não há teto por padrão:
    o limite só vale quando ``max_teacher_load`` é configurado.
    """

    name = "Balanceamento de Carga"

    def order(self, conflitos: List[Conflict]) -> List[Conflict]:
        return sorted(conflitos, key=lambda c: c.prioridade)

    def new_run_state(self) -> Dict[int, int]:
        return {prof.id: prof.carga_horaria for prof in self.snapshot.professores}

    def candidates(self, conflito: Conflict, cargas: Dict[int, int]) -> List[Teacher]:
        aptos = self.snapshot.qualified_teachers(conflito)
        cap = self.cfg.max_teacher_load
        if cap is None:
            return aptos
        return [p for p in aptos if cargas.get(p.id, 0) + self.cfg.load_increment <= cap]

    def balance_score(self, carga: int, cargas: Dict[int, int]) -> int:
        carga_maxima = max(cargas.values(), default=0)
        percentual = carga / carga_maxima if carga_maxima > 0 else 0.0
        # arredonda meio para cima
        score = math.floor(self.cfg.load_score_base - percentual * self.cfg.load_score_span + 0.5)
        return max(score, self.cfg.load_score_floor)

    def resolve_one(self, conflito: Conflict, state: Optional[Dict[int, int]] = None) -> Optional[Solution]:
        cargas = state if state is not None else self.new_run_state()
        aptos = self.candidates(conflito, cargas)
        if not aptos:
            return Solution(
                conflito=conflito,
                score=self.cfg.cancelled_score,
                justificativa="Nenhum professor substituto disponível - aula cancelada",
            )

        prof = min(aptos, key=lambda p: cargas.get(p.id, 0))
        carga = cargas.get(prof.id, 0)
        return Solution(
            conflito=conflito,
            novo_professor=prof,
            score=self.balance_score(carga, cargas),
            justificativa=f"Professor com menor carga alocado: {prof.nome} ({carga}h)",
        )

    def record(self, solucao: Solution, state: Dict[int, int]) -> None:
        if solucao.novo_professor is not None:
            pid = solucao.novo_professor.id
            state[pid] = state.get(pid, 0) + self.cfg.load_increment
