import tempfile
import unittest
from pathlib import Path

import pandas as pd

from remanejamento.config import EngineConfig
from remanejamento.engine import RescheduleEngine, classify_priority, mark_in_review
from remanejamento.export import SOLUTION_COLUMNS, export_outputs, result_to_dataframe
from remanejamento.factory import StrategyFactory
from remanejamento.ga import GeneticStrategy
from remanejamento.load_balancing import LoadBalancingStrategy
from remanejamento.model import (
    STATUS_EM_ANALISE,
    STATUS_PENDENTE,
    STATUS_RESOLVIDO,
    Conflict,
    ReferenceSnapshot,
    Room,
    Teacher,
)
from remanejamento.resource_optimization import ResourceOptimizationStrategy
from remanejamento.subject_priority import SubjectPriorityStrategy
from run import main

DATA_DIR = Path(__file__).resolve().parent.parent / "data"

SNAPSHOT = ReferenceSnapshot(professores=(
    Teacher(1, "T1", ("Álgebra", "Biologia"), carga_horaria=12),
    Teacher(2, "T2", ("Biologia", "Cálculo"), carga_horaria=16),
))


def conflito(cid, disciplina, professor, prioridade, status=STATUS_PENDENTE):
    return Conflict(cid, professor, "1º Ano", disciplina, "Ausência", "2024-06-10",
                    status=status, prioridade=prioridade)


class FactoryTests(unittest.TestCase):
    def test_known_keys(self):
        expected = {
            "otimizacao": ResourceOptimizationStrategy,
            "prioridade": SubjectPriorityStrategy,
            "balanceamento": LoadBalancingStrategy,
            "genetico": GeneticStrategy,
        }
        for key, cls in expected.items():
            self.assertIsInstance(StrategyFactory.get_strategy(key, SNAPSHOT), cls)

    def test_keys_are_case_insensitive(self):
        self.assertIsInstance(StrategyFactory.get_strategy("  Genetico ", SNAPSHOT), GeneticStrategy)

    def test_unknown_key_falls_back_with_warning(self):
        with self.assertLogs("remanejamento.factory", level="WARNING") as logs:
            strategy = StrategyFactory.get_strategy("quantum", SNAPSHOT)
        self.assertIsInstance(strategy, ResourceOptimizationStrategy)
        self.assertIn("quantum", logs.output[0])

    def test_missing_key_uses_configured_default(self):
        strategy = StrategyFactory.get_strategy(None, SNAPSHOT, EngineConfig(default_strategy="balanceamento"))
        self.assertIsInstance(strategy, LoadBalancingStrategy)
        self.assertIsInstance(StrategyFactory.get_strategy("", SNAPSHOT), ResourceOptimizationStrategy)

    def test_register(self):
        class Dummy(SubjectPriorityStrategy):
            name = "Dummy"

        StrategyFactory.register("Dummy", Dummy)
        try:
            self.assertIsInstance(StrategyFactory.get_strategy("dummy", SNAPSHOT), Dummy)
        finally:
            del StrategyFactory.strategies["dummy"]

    def test_display_name(self):
        self.assertEqual(StrategyFactory.display_name("balanceamento"), "Balanceamento de Carga")
        self.assertEqual(StrategyFactory.display_name("xyz"), "Otimização de Recursos")


class EngineTests(unittest.TestCase):
    def setUp(self):
        self.conflitos = [
            conflito(1, "Álgebra", "Prof X", 5),
            conflito(2, "Biologia", "T1", 8),
            conflito(3, "Cálculo", "T2", 3),
        ]

    def test_default_strategy_scenario(self):
        res = RescheduleEngine(SNAPSHOT).run(self.conflitos)
        self.assertEqual(res.algoritmo_utilizado, "Otimização de Recursos")
        first = res.solucoes[0]
        self.assertEqual(first.conflito.prioridade, 8)
        self.assertEqual(first.novo_professor.nome, "T2")
        self.assertEqual(first.score, 85)
        # Cálculo só é ensinado pelo próprio ausente e não há salas/horários
        self.assertEqual([s.conflito.id for s in res.solucoes], [2, 1])
        self.assertEqual(res.conflitos_resolvidos, 2)
        self.assertEqual(res.score_total, 170)
        self.assertGreaterEqual(res.tempo_execucao, 0)

    def test_non_genetic_strategies_are_idempotent(self):
        engine = RescheduleEngine(SNAPSHOT)
        for key in ("otimizacao", "prioridade", "balanceamento"):
            a = engine.run(self.conflitos, key)
            b = engine.run(self.conflitos, key)
            self.assertEqual(a.solucoes, b.solucoes)
            self.assertEqual(a.score_total, b.score_total)
            self.assertEqual(a.conflitos_resolvidos, b.conflitos_resolvidos)

    def test_genetic_result_keeps_fitness(self):
        engine = RescheduleEngine(SNAPSHOT, EngineConfig(seed=1))
        res = engine.run(self.conflitos, "genetico")
        self.assertEqual(res.algoritmo_utilizado, "Algoritmo Genético")
        self.assertIsNotNone(res.fitness)
        self.assertEqual(res.score_total, sum(s.score for s in res.solucoes))

    def test_empty_reference_data_does_not_raise(self):
        engine = RescheduleEngine(ReferenceSnapshot())
        for key in ("otimizacao", "prioridade", "balanceamento", "genetico"):
            res = engine.run(self.conflitos, key)
            self.assertEqual(res.conflitos_resolvidos, len(res.solucoes))


class CallerHelperTests(unittest.TestCase):
    def test_classify_priority(self):
        self.assertEqual(classify_priority(9), "alta")
        self.assertEqual(classify_priority(8), "alta")
        self.assertEqual(classify_priority(5), "media")
        self.assertEqual(classify_priority(4), "baixa")

    def test_mark_in_review(self):
        conflitos = [
            conflito(1, "Álgebra", "Prof X", 5),
            conflito(2, "Cálculo", "T2", 3),
            conflito(3, "Biologia", "T1", 8, status=STATUS_RESOLVIDO),
        ]
        res = RescheduleEngine(SNAPSHOT).run(conflitos)
        updated = mark_in_review(conflitos, res)
        self.assertEqual([c.status for c in updated], [STATUS_EM_ANALISE, STATUS_PENDENTE, STATUS_RESOLVIDO])
        self.assertEqual(conflitos[0].status, STATUS_PENDENTE)


class ExportTests(unittest.TestCase):
    def test_result_to_dataframe(self):
        snap = ReferenceSnapshot(salas=(Room(1, "Laboratório", 25, "Laboratório", ("Projetor",)),))
        conflitos = [conflito(1, "Artes", "Prof X", 9)]
        res = RescheduleEngine(snap).run(conflitos)
        df = result_to_dataframe(res)
        self.assertEqual(list(df.columns), SOLUTION_COLUMNS)
        row = df.iloc[0]
        self.assertEqual(row["Tipo"], "sala")
        self.assertEqual(row["Substituto"], "Laboratório")
        self.assertEqual(row["Classe"], "alta")

    def test_export_outputs(self):
        strategy = GeneticStrategy(SNAPSHOT, EngineConfig(seed=3, generations=2))
        res = RescheduleEngine(SNAPSHOT).run_strategy(strategy, [conflito(1, "Álgebra", "Prof X", 5)])
        with tempfile.TemporaryDirectory() as tmp:
            out = Path(tmp) / "out"
            export_outputs(res, out, strategy.history)
            self.assertEqual(len(pd.read_csv(out / "solutions.csv")), 1)
            metrics = pd.read_csv(out / "metrics.csv")
            self.assertEqual(metrics.iloc[0]["conflitos_resolvidos"], 1)
            self.assertEqual(len(pd.read_csv(out / "history.csv")), 3)


class CliTests(unittest.TestCase):
    def test_run_on_sample_data(self):
        with tempfile.TemporaryDirectory() as tmp:
            res = main(["--config", str(Path(tmp) / "missing.yaml"), "--data_dir", str(DATA_DIR),
                        "--out_dir", tmp])
            self.assertTrue((Path(tmp) / "solutions.csv").exists())
            self.assertFalse((Path(tmp) / "history.csv").exists())
        self.assertEqual(res.conflitos_resolvidos, 4)
        self.assertEqual(res.score_total, 85 * 3 + 70)

    def test_run_genetic_on_sample_data(self):
        with tempfile.TemporaryDirectory() as tmp:
            res = main(["--config", str(Path(tmp) / "missing.yaml"), "--data_dir", str(DATA_DIR),
                        "--out_dir", tmp, "--strategy", "genetico"])
            self.assertTrue((Path(tmp) / "history.csv").exists())
        self.assertEqual(res.algoritmo_utilizado, "Algoritmo Genético")
        # Inglês só tem a docente ausente
        self.assertEqual(res.conflitos_resolvidos, 3)


if __name__ == "__main__":
    unittest.main()
