from typing import List, Optional

from .base import SequentialStrategy
from .model import SALA_DISPONIVEL, Conflict, Room, Solution, Teacher, TimeSlot


class ResourceOptimizationStrategy(SequentialStrategy):
    """Professor substituto → sala alternativa → horário alternativo.

    A primeira regra com candidato vence; os conflitos mais urgentes são
    atendidos primeiro.
    """

    name = "Otimização de Recursos"

    def order(self, conflitos: List[Conflict]) -> List[Conflict]:
        return sorted(conflitos, key=lambda c: c.prioridade, reverse=True)

    def resolve_one(self, conflito: Conflict, state=None) -> Optional[Solution]:
        professores = self.snapshot.qualified_teachers(conflito)
        if professores:
            prof = self.best_teacher(professores)
            return Solution(
                conflito=conflito,
                novo_professor=prof,
                score=self.cfg.score_substitute_teacher,
                justificativa=f"Professor substituto encontrado: {prof.nome} (mesma disciplina)",
            )

        salas = [s for s in self.snapshot.salas if s.status == SALA_DISPONIVEL and s.nome != conflito.sala]
        if salas:
            sala = self.best_room(salas)
            return Solution(
                conflito=conflito,
                nova_sala=sala,
                score=self.cfg.score_alternative_room,
                justificativa=f"Sala alternativa encontrada: {sala.nome}",
            )

        if conflito.horario is not None:
            horarios = [
                h for h in self.snapshot.horarios
                if h.turno == conflito.horario.turno and h.id != conflito.horario.id
            ]
            if horarios:
                horario = self.best_slot(horarios)
                return Solution(
                    conflito=conflito,
                    novo_horario=horario,
                    score=self.cfg.score_alternative_slot,
                    justificativa=f"Horário alternativo encontrado: {horario.periodo}",
                )

        return None

    @staticmethod
    def best_teacher(professores: List[Teacher]) -> Teacher:
        # menor carga horária; empate fica com o primeiro
        return min(professores, key=lambda p: p.carga_horaria)

    @staticmethod
    def best_room(salas: List[Room]) -> Room:
        return max(salas, key=lambda s: len(s.recursos))

    @staticmethod
    def best_slot(horarios: List[TimeSlot]) -> TimeSlot:
        return horarios[0]
