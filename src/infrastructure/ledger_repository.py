"""SQLAlchemy-backed repository for ledger items."""

import uuid
from collections.abc import Hashable, Iterable
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from sqlalchemy import bindparam, text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.ledger_filter import (
    LedgerItemFilter,
    sort_ledger_items,
)
from src.application.ports.ledger_repository import LedgerItemRepositoryPort
from src.domain.errors import NotFoundError
from src.domain.models.kinds import KindRegistry
from src.domain.models.ledger import LedgerItem, LineItem, PartyDetails
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import (
    coerce_date,
    coerce_decimal,
    coerce_optional_decimal,
)

# Amounts are stored as decimal strings so they round-trip exactly.
CREATE_SCHEMA_SQL = (
    """
    CREATE TABLE IF NOT EXISTS parties (
        id INTEGER PRIMARY KEY,
        name TEXT NOT NULL,
        is_self BOOLEAN NOT NULL DEFAULT FALSE,
        contact_name TEXT,
        address TEXT,
        country_code TEXT,
        tax_number TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS ledger_items (
        id INTEGER PRIMARY KEY,
        kind TEXT NOT NULL,
        sender_id INTEGER,
        recipient_id INTEGER,
        identifier TEXT,
        description TEXT,
        issue_date DATE,
        due_date DATE,
        period_start DATE,
        period_end DATE,
        currency TEXT NOT NULL,
        total_amount TEXT,
        tax_amount TEXT,
        status TEXT NOT NULL,
        uuid TEXT
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS line_items (
        id INTEGER PRIMARY KEY,
        ledger_item_id INTEGER NOT NULL REFERENCES ledger_items (id),
        position INTEGER NOT NULL,
        description TEXT,
        net_amount TEXT NOT NULL,
        tax_amount TEXT NOT NULL,
        quantity TEXT
    )
    """,
)

LEDGER_ITEM_COLUMNS = (
    "id, kind, sender_id, recipient_id, identifier, description, "
    "issue_date, due_date, period_start, period_end, currency, "
    "total_amount, tax_amount, status, uuid"
)

SELECT_LINE_ITEMS_SQL = text(
    """
    SELECT id, ledger_item_id, position, description,
           net_amount, tax_amount, quantity
    FROM line_items
    WHERE ledger_item_id IN :ledger_item_ids
    ORDER BY ledger_item_id, position
    """
).bindparams(bindparam("ledger_item_ids", expanding=True))

SELECT_PARTIES_SQL = text(
    """
    SELECT id, name, is_self, contact_name, address, country_code, tax_number
    FROM parties
    WHERE id IN :party_ids
    """
).bindparams(bindparam("party_ids", expanding=True))

INSERT_PARTY_SQL = text(
    """
    INSERT INTO parties (
        id, name, is_self, contact_name, address, country_code, tax_number
    )
    VALUES (
        :id, :name, :is_self, :contact_name, :address, :country_code,
        :tax_number
    )
    """
)

INSERT_LEDGER_ITEM_SQL = text(
    f"""
    INSERT INTO ledger_items ({LEDGER_ITEM_COLUMNS})
    VALUES (
        :id, :kind, :sender_id, :recipient_id, :identifier, :description,
        :issue_date, :due_date, :period_start, :period_end, :currency,
        :total_amount, :tax_amount, :status, :uuid
    )
    """
)

UPDATE_LEDGER_ITEM_SQL = text(
    """
    UPDATE ledger_items
    SET kind = :kind,
        sender_id = :sender_id,
        recipient_id = :recipient_id,
        identifier = :identifier,
        description = :description,
        issue_date = :issue_date,
        due_date = :due_date,
        period_start = :period_start,
        period_end = :period_end,
        currency = :currency,
        total_amount = :total_amount,
        tax_amount = :tax_amount,
        status = :status,
        uuid = :uuid
    WHERE id = :id
    """
)

DELETE_LINE_ITEMS_SQL = text(
    "DELETE FROM line_items WHERE ledger_item_id = :ledger_item_id"
)

INSERT_LINE_ITEM_SQL = text(
    """
    INSERT INTO line_items (
        id, ledger_item_id, position, description,
        net_amount, tax_amount, quantity
    )
    VALUES (
        :id, :ledger_item_id, :position, :description,
        :net_amount, :tax_amount, :quantity
    )
    """
)


@dataclass
class _StoredLedgerRecord:
    """Ledger row plus its related rows, exposing the LedgerRecord API."""

    id: int
    kind: str
    sender_id: int | None
    recipient_id: int | None
    identifier: str | None
    description: str | None
    issue_date: date | None
    due_date: date | None
    period_start: date | None
    period_end: date | None
    currency: str
    total_amount: Decimal | None
    tax_amount: Decimal | None
    status: str
    uuid: str | None
    parties: dict = field(default_factory=dict, repr=False)
    lines: list[LineItem] = field(default_factory=list)

    def sender_details(self) -> PartyDetails | None:
        return self.parties.get(self.sender_id)

    def recipient_details(self) -> PartyDetails | None:
        return self.parties.get(self.recipient_id)

    def line_items(self) -> list[LineItem]:
        return self.lines


class SqlAlchemyLedgerItemRepository(LedgerItemRepositoryPort):
    """Repository backed by SQLAlchemy for ledger items and parties."""

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        registry: KindRegistry | None = None,
        logger=None,
    ) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
            registry: Registry resolving stored kind names.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._registry = registry or KindRegistry()
        self._logger = logger or get_app_logger()

    def create_schema(self) -> None:
        """Create the ledger tables when they do not exist."""
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            for statement in CREATE_SCHEMA_SQL:
                conn.execute(text(statement))

    def add_party(self, party: PartyDetails) -> None:
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            conn.execute(
                INSERT_PARTY_SQL,
                {
                    "id": party.id,
                    "name": party.name or str(party.id),
                    "is_self": bool(party.is_self),
                    "contact_name": party.contact_name,
                    "address": party.address,
                    "country_code": party.country_code,
                    "tax_number": party.tax_number,
                },
            )

    def find(self, ledger_item_id: Hashable) -> LedgerItem:
        query = text(
            f"SELECT {LEDGER_ITEM_COLUMNS} FROM ledger_items WHERE id = :id"
        )
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(query, {"id": ledger_item_id}).all()
            items = self._build_items(conn, rows)
        if not items:
            raise NotFoundError(f"Ledger item not found: {ledger_item_id}")
        return items[0]

    def filtered(
        self,
        criteria: LedgerItemFilter | None = None,
    ) -> list[LedgerItem]:
        resolved = criteria or LedgerItemFilter()
        query, params = self._build_filter_query(resolved)
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            rows = conn.execute(query, params).all()
            items = self._build_items(conn, rows)
        matches = [item for item in items if resolved.matches(item)]
        return sort_ledger_items(matches, resolved.sort_by)

    def save(self, item: LedgerItem) -> LedgerItem:
        item.recompute_totals()
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            exists = item.id is not None and conn.execute(
                text("SELECT 1 FROM ledger_items WHERE id = :id"),
                {"id": item.id},
            ).first()
            if item.id is None:
                item.id = self._next_id(conn, "ledger_items")
            if item.uuid is None:
                item.uuid = str(uuid.uuid4())
            params = self._ledger_item_params(item)
            if exists:
                conn.execute(UPDATE_LEDGER_ITEM_SQL, params)
            else:
                conn.execute(INSERT_LEDGER_ITEM_SQL, params)
            conn.execute(DELETE_LINE_ITEMS_SQL, {"ledger_item_id": item.id})
            next_line_id = self._next_id(conn, "line_items")
            for position, line_item in enumerate(item.line_items):
                line_item.id = next_line_id + position
                conn.execute(
                    INSERT_LINE_ITEM_SQL,
                    {
                        "id": line_item.id,
                        "ledger_item_id": item.id,
                        "position": position,
                        "description": line_item.description,
                        "net_amount": _to_db_decimal(line_item.net_amount),
                        "tax_amount": _to_db_decimal(line_item.tax_amount),
                        "quantity": _to_db_decimal(line_item.quantity),
                    },
                )
        self._logger.info(
            f"Saved ledger item {item.id} with {len(item.line_items)} line items"
        )
        return item

    def party_display_name(self, party_id: Hashable) -> str:
        names = self.party_display_names([party_id])
        if party_id not in names:
            raise NotFoundError(f"Party not found: {party_id}")
        return names[party_id]

    def party_display_names(
        self,
        party_ids: Iterable[Hashable],
    ) -> dict[Hashable, str]:
        requested = list(party_ids)
        if not requested:
            return {}
        engine = self._db_port.get_ledger_engine()
        with engine.connect() as conn:
            parties = self._fetch_parties(conn, requested)
        return {
            party_id: parties[party_id].name
            for party_id in requested
            if party_id in parties
        }

    def _build_items(self, conn, rows) -> list[LedgerItem]:
        if not rows:
            return []
        ids = [row.id for row in rows]
        lines: dict[int, list[LineItem]] = {item_id: [] for item_id in ids}
        for row in conn.execute(
            SELECT_LINE_ITEMS_SQL,
            {"ledger_item_ids": ids},
        ).all():
            lines[row.ledger_item_id].append(
                LineItem(
                    id=row.id,
                    description=row.description,
                    net_amount=coerce_decimal(row.net_amount),
                    tax_amount=coerce_decimal(row.tax_amount),
                    quantity=coerce_optional_decimal(row.quantity),
                )
            )
        party_ids = {
            party_id
            for row in rows
            for party_id in (row.sender_id, row.recipient_id)
            if party_id is not None
        }
        parties = self._fetch_parties(conn, list(party_ids))
        return [
            LedgerItem.from_record(
                _StoredLedgerRecord(
                    id=row.id,
                    kind=row.kind,
                    sender_id=row.sender_id,
                    recipient_id=row.recipient_id,
                    identifier=row.identifier,
                    description=row.description,
                    issue_date=coerce_date(row.issue_date),
                    due_date=coerce_date(row.due_date),
                    period_start=coerce_date(row.period_start),
                    period_end=coerce_date(row.period_end),
                    currency=row.currency,
                    total_amount=coerce_optional_decimal(row.total_amount),
                    tax_amount=coerce_optional_decimal(row.tax_amount),
                    status=row.status,
                    uuid=row.uuid,
                    parties=parties,
                    lines=lines[row.id],
                ),
                self._registry,
            )
            for row in rows
        ]

    @staticmethod
    def _fetch_parties(conn, party_ids: list) -> dict[Hashable, PartyDetails]:
        if not party_ids:
            return {}
        rows = conn.execute(SELECT_PARTIES_SQL, {"party_ids": party_ids}).all()
        return {
            row.id: PartyDetails(
                id=row.id,
                name=row.name,
                is_self=bool(row.is_self),
                contact_name=row.contact_name,
                address=row.address,
                country_code=row.country_code,
                tax_number=row.tax_number,
            )
            for row in rows
        }

    @staticmethod
    def _next_id(conn, table: str) -> int:
        result = conn.execute(
            text(f"SELECT COALESCE(MAX(id), 0) + 1 AS next_id FROM {table}")
        ).first()
        return int(result.next_id)

    @staticmethod
    def _ledger_item_params(item: LedgerItem) -> dict:
        return {
            "id": item.id,
            "kind": item.kind.name,
            "sender_id": item.sender_id,
            "recipient_id": item.recipient_id,
            "identifier": item.identifier,
            "description": item.description,
            "issue_date": _to_db_date(item.issue_date),
            "due_date": _to_db_date(item.due_date),
            "period_start": _to_db_date(item.period_start),
            "period_end": _to_db_date(item.period_end),
            "currency": item.currency,
            "total_amount": _to_db_decimal(item.total_amount),
            "tax_amount": _to_db_decimal(item.tax_amount),
            "status": item.status,
            "uuid": item.uuid,
        }

    @staticmethod
    def _build_filter_query(criteria: LedgerItemFilter):
        base_sql = f"SELECT {LEDGER_ITEM_COLUMNS} FROM ledger_items WHERE 1=1"
        params: dict = {}
        expanding = []
        if criteria.sent_by is not None:
            base_sql += " AND sender_id = :sent_by"
            params["sent_by"] = criteria.sent_by
        if criteria.received_by is not None:
            base_sql += " AND recipient_id = :received_by"
            params["received_by"] = criteria.received_by
        if criteria.sent_or_received_by is not None:
            base_sql += (
                " AND (sender_id = :sent_or_received_by"
                " OR recipient_id = :sent_or_received_by)"
            )
            params["sent_or_received_by"] = criteria.sent_or_received_by
        if criteria.involving is not None:
            base_sql += (
                " AND (sender_id = :involving OR recipient_id = :involving)"
            )
            params["involving"] = criteria.involving
        if criteria.statuses is not None:
            base_sql += " AND status IN :statuses"
            params["statuses"] = list(criteria.statuses)
            expanding.append(bindparam("statuses", expanding=True))
        if criteria.due_at is not None:
            base_sql += " AND (due_date IS NULL OR due_date <= :due_at)"
            params["due_at"] = _to_db_date(criteria.due_at)
        if criteria.currency is not None:
            base_sql += " AND currency = :currency"
            params["currency"] = criteria.currency
        if criteria.issue_date_from is not None:
            base_sql += " AND issue_date >= :issue_date_from"
            params["issue_date_from"] = _to_db_date(criteria.issue_date_from)
        if criteria.issue_date_before is not None:
            base_sql += " AND issue_date < :issue_date_before"
            params["issue_date_before"] = _to_db_date(criteria.issue_date_before)
        # Amounts are decimal text, so rows are ordered in Python.
        base_sql += " ORDER BY id"
        query = text(base_sql)
        if expanding:
            query = query.bindparams(*expanding)
        return query, params


def _to_db_decimal(value: Decimal | None) -> str | None:
    if value is None:
        return None
    return str(value)


def _to_db_date(value: date | None) -> str | None:
    if value is None:
        return None
    return value.isoformat()


__all__ = ["SqlAlchemyLedgerItemRepository", "CREATE_SCHEMA_SQL"]
