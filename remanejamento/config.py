"""
Configuração do motor de remanejamento.

Os parâmetros de cada estratégia (scores, limiares, constantes do algoritmo
genético) ficam num dataclass carregável de YAML, para que as execuções sejam
reproduzíveis e ajustáveis sem tocar no código.
"""
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


@dataclass
class EngineConfig:
    default_strategy: str = "otimizacao"
    log_level: str = "INFO"

    # Otimização de recursos
    score_substitute_teacher: int = 85
    score_alternative_room: int = 70
    score_alternative_slot: int = 60

    # Prioridade de disciplinas
    critical_priority: int = 8
    medium_priority: int = 5
    default_subject_priority: int = 5
    score_specialist: int = 95
    score_qualified: int = 75
    score_rescheduled: int = 50

    # Balanceamento de carga
    load_score_base: int = 90
    load_score_span: int = 40
    load_score_floor: int = 40
    cancelled_score: int = 30
    load_increment: int = 1
    max_teacher_load: Optional[int] = None

    # Algoritmo genético
    population_size: int = 20
    generations: int = 10
    mutation_rate: float = 0.1
    tournament_size: int = 3
    min_random_score: int = 50
    max_random_score: int = 99
    overload_threshold: int = 2     # aulas extras toleradas por docente
    overload_penalty: int = 20
    elite_size: int = 0
    seed: Optional[int] = None
    time_budget_s: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineConfig":
        merged = asdict(cls())
        for k, v in data.items():
            if k in merged:
                merged[k] = v
        return cls(**merged)

    def __post_init__(self):
        if self.population_size < 1:
            raise ValueError("population_size deve ser >= 1")
        if self.generations < 0:
            raise ValueError("generations deve ser >= 0")
        if not 0.0 <= self.mutation_rate <= 1.0:
            raise ValueError("mutation_rate deve estar em [0, 1]")
        if self.tournament_size < 1:
            raise ValueError("tournament_size deve ser >= 1")
        if self.min_random_score > self.max_random_score:
            raise ValueError("min_random_score maior que max_random_score")
        if self.elite_size < 0 or self.elite_size > self.population_size:
            raise ValueError("elite_size deve estar em [0, population_size]")
        if self.load_increment < 1:
            raise ValueError("load_increment deve ser >= 1")
        if self.max_teacher_load is not None and self.max_teacher_load < 0:
            raise ValueError("max_teacher_load deve ser >= 0")


def _load_yaml(path: Path) -> Any:
    if not path.exists():
        return {}
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}


def load_config(path: str = "config.yaml") -> EngineConfig:
    data = _load_yaml(Path(path))
    if not isinstance(data, dict):
        raise ValueError(f"{path} deve conter um objeto mapeamento")
    return EngineConfig.from_dict(data)
