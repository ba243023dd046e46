"""
Stock Mutation Service.

Performs bounded stock decrements as a small state machine:

    IDLE -> VALIDATING -> APPLYING -> CONFIRMING -> DONE

Any step may end in FAILED instead; nothing is written once VALIDATING fails.

The write is conditional on the quantity that was read. If another writer
changed the record in between, nothing is written and the machine goes back
to VALIDATING with a fresh read, up to a bounded number of attempts.

After a successful write the record is read back and the re-read value,
not the locally computed quantity, becomes the result. A concurrent write
by another actor that lands between our write and our read is therefore
reflected in what we return.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from src.config import get_logger
from src.core.entities.inventory import InventoryRecord
from src.core.exceptions import RecordNotFoundError, StoreError, WareFlowError
from src.core.interfaces.inventory_store import IInventoryStore
from src.core.services.validation import (
    FieldViolation,
    as_whole_number,
    quantity_violation,
    validate_quantity_like,
)

logger = get_logger(__name__)


class MutationState(str, Enum):
    """States of a single stock mutation."""

    IDLE = "idle"
    VALIDATING = "validating"
    APPLYING = "applying"
    CONFIRMING = "confirming"
    DONE = "done"
    FAILED = "failed"


@dataclass
class MutationOutcome:
    """Trace and result of one mutation."""

    record_id: str
    requested_amount: Any
    read_quantity: int | None = None
    applied_amount: int | None = None
    computed_quantity: int | None = None
    record: InventoryRecord | None = None  # confirmed post-write state
    error: WareFlowError | None = None
    state: MutationState = MutationState.IDLE
    history: list[MutationState] = field(default_factory=lambda: [MutationState.IDLE])

    @property
    def succeeded(self) -> bool:
        return self.state is MutationState.DONE

    @property
    def attempts(self) -> int:
        return self.history.count(MutationState.APPLYING)

    def enter(self, state: MutationState) -> None:
        self.state = state
        self.history.append(state)

    def confirmed_record(self) -> InventoryRecord:
        """The confirmed record; raises the failure if the mutation did not finish."""
        if self.error is not None:
            raise self.error
        if self.record is None:
            raise StoreError("remove stock", f"mutation ended in state '{self.state.value}'")
        return self.record


def clamp_remove_amount(amount: int, current_quantity: int) -> int:
    """Clamp a removal to [1, current_quantity] (1 when nothing is left)."""
    return max(1, min(amount, current_quantity))


def _check_quantity(field_name: str, value: Any) -> FieldViolation | None:
    violation = quantity_violation(value)
    if violation is None:
        return None
    return FieldViolation(field_name, violation, validate_quantity_like(value))


def _utcnow() -> datetime:
    return datetime.now(UTC)


MAX_WRITE_ATTEMPTS = 5


class StockMutationService:
    """Removes stock from a record and confirms the result against the store."""

    def __init__(
        self,
        store: IInventoryStore,
        clock: Callable[[], datetime] = _utcnow,
        max_attempts: int = MAX_WRITE_ATTEMPTS,
    ):
        self._store = store
        self._clock = clock
        self._max_attempts = max_attempts

    async def remove_stock(self, record_id: str, amount: Any) -> InventoryRecord:
        """
        Remove stock and return the confirmed record.

        Raises:
            ValidationError: amount or resulting quantity is invalid
            RecordNotFoundError: record does not exist (before or after the write)
            StorageError: the store rejected or could not serve a call
        """
        outcome = await self.run_removal(record_id, amount)
        return outcome.confirmed_record()

    async def run_removal(self, record_id: str, amount: Any) -> MutationOutcome:
        """Run the state machine and return its full trace."""
        outcome = MutationOutcome(record_id=record_id, requested_amount=amount)
        try:
            await self._validate_and_apply(outcome)
            await self._confirm(outcome)
        except WareFlowError as e:
            self._fail(outcome, e)
            return outcome

        outcome.enter(MutationState.DONE)
        logger.info(
            "stock_removed",
            record_id=record_id,
            removed=outcome.applied_amount,
            computed_qty=outcome.computed_quantity,
            confirmed_qty=outcome.record.quantity if outcome.record else None,
            attempts=outcome.attempts,
        )
        return outcome

    async def _validate_and_apply(self, outcome: MutationOutcome) -> None:
        for _ in range(self._max_attempts):
            await self._validate(outcome)
            if await self._apply(outcome):
                return
            logger.info(
                "stock_write_conflict",
                record_id=outcome.record_id,
                read_qty=outcome.read_quantity,
                attempt=outcome.attempts,
            )
        raise StoreError(
            "update",
            f"record changed by another writer on each of {self._max_attempts} attempts",
        )

    async def _validate(self, outcome: MutationOutcome) -> None:
        outcome.enter(MutationState.VALIDATING)

        amount_error = _check_quantity("remove_amount", outcome.requested_amount)
        if amount_error is not None:
            raise amount_error.as_error(outcome.requested_amount)

        current = await self._store.get_by_id(outcome.record_id)
        if current is None:
            raise RecordNotFoundError(outcome.record_id)

        applied = clamp_remove_amount(as_whole_number(outcome.requested_amount), current.quantity)
        new_quantity = max(0, current.quantity - applied)

        result_error = _check_quantity("quantity", new_quantity)
        if result_error is not None:
            raise result_error.as_error(new_quantity)

        outcome.read_quantity = current.quantity
        outcome.applied_amount = applied
        outcome.computed_quantity = new_quantity

    async def _apply(self, outcome: MutationOutcome) -> bool:
        outcome.enter(MutationState.APPLYING)
        return await self._store.update_by_id(
            outcome.record_id,
            {"quantity": outcome.computed_quantity, "updated_at": self._clock()},
            expected={"quantity": outcome.read_quantity},
        )

    async def _confirm(self, outcome: MutationOutcome) -> None:
        outcome.enter(MutationState.CONFIRMING)
        confirmed = await self._store.get_by_id(outcome.record_id)
        if confirmed is None:
            raise RecordNotFoundError(outcome.record_id)
        if confirmed.quantity != outcome.computed_quantity:
            logger.warning(
                "stock_confirm_diverged",
                record_id=outcome.record_id,
                computed_qty=outcome.computed_quantity,
                confirmed_qty=confirmed.quantity,
            )
        outcome.record = confirmed

    @staticmethod
    def _fail(outcome: MutationOutcome, error: WareFlowError) -> None:
        failed_in = outcome.state
        outcome.error = error
        outcome.enter(MutationState.FAILED)
        logger.warning(
            "stock_removal_failed",
            record_id=outcome.record_id,
            failed_in=failed_in.value,
            error_code=error.code,
            error=error.message,
        )
