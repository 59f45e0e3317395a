import logging
from typing import Dict, Optional, Type

from .base import BaseStrategy
from .config import EngineConfig
from .ga import GeneticStrategy
from .load_balancing import LoadBalancingStrategy
from .model import ReferenceSnapshot
from .resource_optimization import ResourceOptimizationStrategy
from .subject_priority import SubjectPriorityStrategy

logger = logging.getLogger(__name__)

DEFAULT_STRATEGY = "otimizacao"


class StrategyFactory:
    strategies: Dict[str, Type[BaseStrategy]] = {
        "otimizacao": ResourceOptimizationStrategy,
        "prioridade": SubjectPriorityStrategy,
        "balanceamento": LoadBalancingStrategy,
        "genetico": GeneticStrategy,
    }

    @staticmethod
    def normalize(key: Optional[str]) -> str:
        return (key or "").strip().lower()

    @classmethod
    def resolve_key(cls, key: Optional[str], default: str = DEFAULT_STRATEGY) -> str:
        norm = cls.normalize(key)
        if not norm:
            return cls.normalize(default)
        if norm not in cls.strategies:
            logger.warning("Estratégia desconhecida %r; usando %r", key, default)
            return cls.normalize(default)
        return norm

    @classmethod
    def get_strategy(cls, key: Optional[str], snapshot: ReferenceSnapshot,
                     cfg: Optional[EngineConfig] = None) -> BaseStrategy:
        cfg = cfg or EngineConfig()
        default = cfg.default_strategy
        if cls.normalize(default) not in cls.strategies:
            logger.warning("Estratégia padrão %r inválida; usando %r", default, DEFAULT_STRATEGY)
            default = DEFAULT_STRATEGY
        return cls.strategies[cls.resolve_key(key, default)](snapshot, cfg)

    @classmethod
    def register(cls, key: str, strategy_class: Type[BaseStrategy]) -> None:
        cls.strategies[cls.normalize(key)] = strategy_class

    @classmethod
    def display_name(cls, key: Optional[str]) -> str:
        return cls.strategies[cls.resolve_key(key)].name
