# remanejamento/data_loader.py
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import pandas as pd

from .model import (
    STATUS_PENDENTE,
    Conflict,
    ReferenceSnapshot,
    Room,
    Subject,
    Teacher,
    TimeSlot,
)

REQUIRED_COLUMNS: Dict[str, List[str]] = {
    "professores": ["id", "nome", "disciplinas", "carga_horaria"],
    "salas": ["id", "nome", "capacidade", "tipo", "recursos", "status"],
    "horarios": ["id", "inicio", "fim", "periodo", "turno", "dia_semana"],
    "disciplinas": ["id", "nome", "carga_horaria", "area", "prioridade"],
    "conflitos": ["id", "professor", "turma", "disciplina", "motivo", "data", "prioridade"],
}


@dataclass(frozen=True)
class DataBundle:
    professores: pd.DataFrame
    salas: pd.DataFrame
    horarios: pd.DataFrame
    disciplinas: pd.DataFrame
    conflitos: pd.DataFrame


def _read(data_dir: str, name: str) -> pd.DataFrame:
    df = pd.read_csv(f"{data_dir}/{name}.csv", dtype=str, keep_default_na=False)
    missing = [c for c in REQUIRED_COLUMNS[name] if c not in df.columns]
    if missing:
        raise ValueError(f"{name}.csv sem colunas obrigatórias: {', '.join(missing)}")
    return df


def load_data(data_dir: str) -> DataBundle:
    return DataBundle(
        professores=_read(data_dir, "professores"),
        salas=_read(data_dir, "salas"),
        horarios=_read(data_dir, "horarios"),
        disciplinas=_read(data_dir, "disciplinas"),
        conflitos=_read(data_dir, "conflitos"),
    )


def split_list(value) -> Tuple[str, ...]:
    """Colunas de lista vêm como "a;b;c"."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ()
    return tuple(part.strip() for part in str(value).split(";") if part.strip())


def _int(value, column: str) -> int:
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValueError(f"Valor inválido na coluna {column}: {value!r}") from None


def _teacher(row: pd.Series) -> Teacher:
    turnos = split_list(row.get("turnos_preferidos"))
    salas = split_list(row.get("salas_preferidas"))
    prefs = {"turnos": turnos, "salas": salas} if (turnos or salas) else None
    return Teacher(
        id=_int(row["id"], "id"),
        nome=str(row["nome"]).strip(),
        disciplinas=split_list(row["disciplinas"]),
        disponibilidade=split_list(row.get("disponibilidade")),
        carga_horaria=_int(row["carga_horaria"], "carga_horaria"),
        preferencias=prefs,
    )


def build_snapshot(bundle: DataBundle) -> ReferenceSnapshot:
    professores = tuple(_teacher(r) for _, r in bundle.professores.iterrows())
    salas = tuple(
        Room(
            id=_int(r["id"], "id"),
            nome=str(r["nome"]).strip(),
            capacidade=_int(r["capacidade"], "capacidade"),
            tipo=str(r["tipo"]).strip(),
            recursos=split_list(r["recursos"]),
            status=str(r["status"]).strip(),
        )
        for _, r in bundle.salas.iterrows()
    )
    horarios = tuple(
        TimeSlot(
            id=_int(r["id"], "id"),
            inicio=str(r["inicio"]).strip(),
            fim=str(r["fim"]).strip(),
            periodo=str(r["periodo"]).strip(),
            turno=str(r["turno"]).strip(),
            dia_semana=str(r["dia_semana"]).strip(),
        )
        for _, r in bundle.horarios.iterrows()
    )
    disciplinas = tuple(
        Subject(
            id=_int(r["id"], "id"),
            nome=str(r["nome"]).strip(),
            carga_horaria=_int(r["carga_horaria"], "carga_horaria"),
            area=str(r["area"]).strip(),
            prioridade=_int(r["prioridade"], "prioridade"),
            series=split_list(r.get("series")),
        )
        for _, r in bundle.disciplinas.iterrows()
    )
    return ReferenceSnapshot(professores=professores, salas=salas, horarios=horarios, disciplinas=disciplinas)


def build_conflicts(bundle: DataBundle, horarios: Tuple[TimeSlot, ...]) -> List[Conflict]:
    by_id = {h.id: h for h in horarios}
    conflitos: List[Conflict] = []
    for _, r in bundle.conflitos.iterrows():
        horario: Optional[TimeSlot] = None
        raw_slot = str(r.get("horario_id", "") or "").strip()
        if raw_slot:
            slot_id = _int(raw_slot, "horario_id")
            if slot_id not in by_id:
                raise ValueError(f"Conflito {r['id']}: horario_id {slot_id} desconhecido")
            horario = by_id[slot_id]
        conflitos.append(
            Conflict(
                id=_int(r["id"], "id"),
                professor=str(r["professor"]).strip(),
                turma=str(r["turma"]).strip(),
                disciplina=str(r["disciplina"]).strip(),
                motivo=str(r["motivo"]).strip(),
                data=str(r["data"]).strip(),
                status=str(r.get("status", "") or "").strip() or STATUS_PENDENTE,
                prioridade=_int(r["prioridade"], "prioridade"),
                horario=horario,
                sala=str(r.get("sala", "") or "").strip(),
            )
        )
    return conflitos
