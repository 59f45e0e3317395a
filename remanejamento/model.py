# remanejamento/model.py
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

STATUS_PENDENTE = "Pendente"
STATUS_EM_ANALISE = "Em Análise"
STATUS_RESOLVIDO = "Resolvido"

SALA_DISPONIVEL = "Disponível"
SALA_OCUPADA = "Ocupada"
SALA_MANUTENCAO = "Manutenção"


@dataclass(frozen=True)
class Teacher:
    id: int
    nome: str
    disciplinas: Tuple[str, ...]
    disponibilidade: Tuple[str, ...] = ()
    carga_horaria: int = 0          # horas já atribuídas
    preferencias: Optional[Dict[str, Tuple[str, ...]]] = None  # {"turnos": ..., "salas": ...}

    def teaches(self, disciplina: str) -> bool:
        return disciplina in self.disciplinas

    def is_specialist(self, disciplina: str) -> bool:
        return len(self.disciplinas) == 1 and self.teaches(disciplina)


@dataclass(frozen=True)
class Room:
    id: int
    nome: str
    capacidade: int
    tipo: str
    recursos: Tuple[str, ...] = ()
    status: str = SALA_DISPONIVEL


@dataclass(frozen=True)
class TimeSlot:
    id: int
    inicio: str     # "07:30"
    fim: str
    periodo: str    # "1º Período"
    turno: str      # "Manhã", "Tarde", "Noite"
    dia_semana: str


@dataclass(frozen=True)
class Subject:
    id: int
    nome: str
    carga_horaria: int
    area: str
    prioridade: int     # maior = mais crítica
    series: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ReferenceSnapshot:
    professores: Tuple[Teacher, ...] = ()
    salas: Tuple[Room, ...] = ()
    horarios: Tuple[TimeSlot, ...] = ()
    disciplinas: Tuple[Subject, ...] = ()

    def subject_by_name(self, nome: str) -> Optional[Subject]:
        for disc in self.disciplinas:
            if disc.nome == nome:
                return disc
        return None

    def qualified_teachers(self, conflito: "Conflict") -> List[Teacher]:
        """Docentes que lecionam a disciplina do conflito, exceto o ausente."""
        return [
            prof for prof in self.professores
            if prof.teaches(conflito.disciplina) and prof.nome != conflito.professor
        ]


@dataclass
class Conflict:
    id: int
    professor: str      # docente afetado
    turma: str
    disciplina: str
    motivo: str
    data: str
    status: str = STATUS_PENDENTE
    prioridade: int = 5  # urgência atribuída pelo chamador
    horario: Optional[TimeSlot] = None
    sala: str = ""

    @property
    def is_pending(self) -> bool:
        return self.status == STATUS_PENDENTE


@dataclass
class Solution:
    conflito: Conflict
    score: float
    justificativa: str
    novo_professor: Optional[Teacher] = None
    novo_horario: Optional[TimeSlot] = None
    nova_sala: Optional[Room] = None

    def __post_init__(self):
        remedies = [r for r in (self.novo_professor, self.novo_horario, self.nova_sala) if r is not None]
        if len(remedies) > 1:
            raise ValueError("Uma solução carrega no máximo um remanejamento")
        self.score = min(100, max(0, self.score))

    @property
    def kind(self) -> str:
        if self.novo_professor is not None:
            return "professor"
        if self.nova_sala is not None:
            return "sala"
        if self.novo_horario is not None:
            return "horario"
        return "nenhum"


@dataclass
class AlgorithmResult:
    solucoes: List[Solution]
    tempo_execucao: int     # ms
    score_total: float
    conflitos_resolvidos: int
    algoritmo_utilizado: str
    fitness: Optional[float] = None  # só no algoritmo genético

    @classmethod
    def from_solutions(cls, solucoes: List[Solution], tempo_execucao: int, algoritmo: str,
                       fitness: Optional[float] = None) -> "AlgorithmResult":
        return cls(
            solucoes=solucoes,
            tempo_execucao=tempo_execucao,
            score_total=sum(sol.score for sol in solucoes),
            conflitos_resolvidos=len(solucoes),
            algoritmo_utilizado=algoritmo,
            fitness=fitness,
        )


@dataclass
class Individual:
    # Um indivíduo = uma solução candidata por conflito resolvível
    solucoes: List[Solution] = field(default_factory=list)
    fitness: float = 0.0
