import argparse
from pathlib import Path

from remanejamento.config import load_config
from remanejamento.data_loader import build_conflicts, build_snapshot, load_data
from remanejamento.engine import RescheduleEngine, classify_priority, mark_in_review
from remanejamento.export import export_outputs
from remanejamento.factory import StrategyFactory
from remanejamento.ga import GeneticStrategy
from remanejamento.logs import setup_logging


def print_result(result, conflitos):
    print("\n" + "=" * 80)
    print(f"{result.algoritmo_utilizado} | resolvidos: {result.conflitos_resolvidos} | "
          f"score total: {result.score_total} | tempo: {result.tempo_execucao} ms")
    if result.fitness is not None:
        print(f"Fitness do melhor indivíduo: {result.fitness}")
    print("=" * 80)
    for sol in result.solucoes:
        c = sol.conflito
        print(f"[{classify_priority(c.prioridade):<5}] #{c.id:<3} {c.turma:<10} {c.disciplina:<12} "
              f"{sol.score:>5} | {sol.justificativa}")
    resolvidos = {sol.conflito.id for sol in result.solucoes}
    pendentes = [c for c in conflitos if c.is_pending and c.id not in resolvidos]
    for c in pendentes:
        print(f"[sem solução] #{c.id} {c.turma} {c.disciplina} - encaminhar para aprovação manual")
    print("=" * 80 + "\n")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Remanejamento de aulas a partir de conflitos pendentes")
    parser.add_argument("--config", default="config.yaml", help="Caminho do arquivo de configuração")
    parser.add_argument("--data_dir", default="data", help="Diretório com os CSV de entrada")
    parser.add_argument("--strategy", default=None, help=f"Uma de: {', '.join(StrategyFactory.strategies)}")
    parser.add_argument("--out_dir", default="outputs", help="Diretório de saída")
    args = parser.parse_args(argv)

    cfg = load_config(args.config)
    setup_logging(cfg.log_level)

    print("Carregando dados...")
    bundle = load_data(args.data_dir)
    snapshot = build_snapshot(bundle)
    conflitos = build_conflicts(bundle, snapshot.horarios)

    engine = RescheduleEngine(snapshot, cfg)
    strategy = engine.build_strategy(args.strategy)
    result = engine.run_strategy(strategy, conflitos)
    print_result(result, conflitos)

    history = strategy.history if isinstance(strategy, GeneticStrategy) else None
    export_outputs(result, Path(args.out_dir), history)

    em_analise = sum(1 for a, b in zip(conflitos, mark_in_review(conflitos, result)) if a.status != b.status)
    print(f"{em_analise} conflitos enviados para análise. Resultados em {args.out_dir}/")
    return result


if __name__ == "__main__":
    main()
