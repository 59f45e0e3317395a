from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from .engine import classify_priority
from .model import AlgorithmResult, Solution

SOLUTION_COLUMNS = [
    "Conflito", "Professor", "Turma", "Disciplina", "Prioridade", "Classe",
    "Tipo", "Substituto", "Score", "Justificativa",
]


def _substitute(sol: Solution) -> str:
    if sol.novo_professor is not None:
        return sol.novo_professor.nome
    if sol.nova_sala is not None:
        return sol.nova_sala.nome
    if sol.novo_horario is not None:
        h = sol.novo_horario
        return f"{h.periodo} {h.dia_semana} {h.inicio}-{h.fim}"
    return ""


def result_to_dataframe(result: AlgorithmResult) -> pd.DataFrame:
    rows = []
    for sol in result.solucoes:
        c = sol.conflito
        rows.append({
            "Conflito": c.id,
            "Professor": c.professor,
            "Turma": c.turma,
            "Disciplina": c.disciplina,
            "Prioridade": c.prioridade,
            "Classe": classify_priority(c.prioridade),
            "Tipo": sol.kind,
            "Substituto": _substitute(sol),
            "Score": sol.score,
            "Justificativa": sol.justificativa,
        })
    return pd.DataFrame(rows, columns=SOLUTION_COLUMNS)


def export_outputs(result: AlgorithmResult, out_dir: Path, history: Optional[List[Dict]] = None) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)
    result_to_dataframe(result).to_csv(out_dir / "solutions.csv", index=False)
    metrics = {
        "algoritmo": result.algoritmo_utilizado,
        "conflitos_resolvidos": result.conflitos_resolvidos,
        "score_total": result.score_total,
        "fitness": result.fitness,
        "tempo_ms": result.tempo_execucao,
    }
    pd.DataFrame([metrics]).to_csv(out_dir / "metrics.csv", index=False)
    if history:
        pd.DataFrame(history).to_csv(out_dir / "history.csv", index=False)
