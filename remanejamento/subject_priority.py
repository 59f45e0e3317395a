from typing import List, Optional

from .base import SequentialStrategy
from .model import Conflict, Solution, Teacher


class SubjectPriorityStrategy(SequentialStrategy):
    name = "Prioridade de Disciplinas"

    def subject_priority(self, disciplina: str) -> int:
        disc = self.snapshot.subject_by_name(disciplina)
        return disc.prioridade if disc is not None else self.cfg.default_subject_priority

    def order(self, conflitos: List[Conflict]) -> List[Conflict]:
        return sorted(conflitos, key=lambda c: self.subject_priority(c.disciplina), reverse=True)

    def find_specialist(self, conflito: Conflict) -> Optional[Teacher]:
        for prof in self.snapshot.qualified_teachers(conflito):
            if prof.is_specialist(conflito.disciplina):
                return prof
        return None

    def find_qualified(self, conflito: Conflict) -> Optional[Teacher]:
        aptos = self.snapshot.qualified_teachers(conflito)
        return aptos[0] if aptos else None

    def resolve_one(self, conflito: Conflict, state=None) -> Optional[Solution]:
        prioridade = self.subject_priority(conflito.disciplina)

        if prioridade >= self.cfg.critical_priority:
            prof = self.find_specialist(conflito)
            if prof is not None:
                return Solution(
                    conflito=conflito,
                    novo_professor=prof,
                    score=self.cfg.score_specialist,
                    justificativa=f"Professor especialista alocado para disciplina prioritária: {conflito.disciplina}",
                )

        if prioridade >= self.cfg.medium_priority:
            prof = self.find_qualified(conflito)
            if prof is not None:
                return Solution(
                    conflito=conflito,
                    novo_professor=prof,
                    score=self.cfg.score_qualified,
                    justificativa=f"Professor substituto para disciplina de média prioridade: {conflito.disciplina}",
                )

        # Sempre resolve: reagenda no mesmo lugar
        return Solution(
            conflito=conflito,
            score=self.cfg.score_rescheduled,
            justificativa=f"Aula reagendada - disciplina de baixa prioridade: {conflito.disciplina}",
        )
