"""
Core business logic services.

Layer-pure services that depend only on:
- src/core/entities/*
- src/core/interfaces/*
- src/core/exceptions.py

NO infrastructure imports. Store dependencies are injected via constructor.
"""

from src.core.services import analytics, exchange, filter_builder, validation
from src.core.services.stock_mutation import (
    MutationOutcome,
    MutationState,
    StockMutationService,
    clamp_remove_amount,
)

__all__ = [
    "analytics",
    "exchange",
    "filter_builder",
    "validation",
    "StockMutationService",
    "MutationOutcome",
    "MutationState",
    "clamp_remove_amount",
]
