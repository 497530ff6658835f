import sys
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

sys.path.append(str(Path(__file__).parents[1] / "src"))

from banktrade.api.deps import get_store
from banktrade.main import app
from banktrade.models.transaction import TransactionDraft, TransactionType
from banktrade.repositories.transaction import TransactionStore


class StepClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(seconds=1)
        return current


def _make_draft(
    description="Salary",
    amount="5000.00",
    type=TransactionType.INCOME,
    category="Salary",
) -> TransactionDraft:
    return TransactionDraft(
        description=description,
        amount=Decimal(amount) if isinstance(amount, str) else amount,
        type=type,
        category=category,
    )


@pytest.fixture
def make_draft():
    """Factory for drafts defaulting to the Salary income example."""
    return _make_draft


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def store(clock: StepClock) -> TransactionStore:
    """Fresh store per test."""
    return TransactionStore(clock=clock)


@pytest.fixture
async def client(store: TransactionStore):
    """Provide test client serving the per-test store."""
    app.dependency_overrides[get_store] = lambda: store

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
