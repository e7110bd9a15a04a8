"""
Import reconciliation orchestrator.

Sequences header normalization, field coercion, catalog matching,
candidate collection and row merging for the two import sources:

    tabular:  idle → reading → normalizing → matching → merging → idle
    ai:       idle → reading → normalizing → matching
                   → awaiting_confirmation (only with new products)
                   → merging → idle

Sessions are immutable; every step returns a new ImportSession. The
operator's candidate selection travels as an explicit value.

Only confirm_candidates writes anywhere (the catalog). Everything else
is a pure transform of its inputs plus a catalog/unit read.
"""

from typing import Any, Callable, Iterable, Optional, Union
import structlog

from models.list_row import ListRow
from models.product import CatalogProduct, Unit
from models.reconciliation import (
    AiImportResult,
    ExtractedItem,
    ImportRecord,
    ImportSession,
    ImportSource,
    ImportState,
    MatchStrategy,
    PendingProductCandidate,
)
from exceptions import (
    CandidatePersistError,
    DatabaseError,
    EmptySourceError,
    InvalidImportStateError,
)
from parsers.header_normalizer import normalize_record
from parsers.field_coercer import (
    AI_UNKNOWN_NAME,
    TABULAR_UNKNOWN_NAME,
    coerce_code,
    coerce_expiry_date,
    coerce_name,
    coerce_price,
    coerce_qty,
    coerce_unit_label,
)
from services.candidate_service import CandidateCollector, generate_auto_code
from services.catalog_matcher import match_item
from services.row_merge import merge_rows as merge_grid_rows
from services.product_service import get_product_service
from services.unit_service import get_unit_service
from services.tag_list_service import get_tag_list_service

logger = structlog.get_logger(__name__)


# ===================
# STATE MACHINE
# ===================

ALLOWED_TRANSITIONS: dict[ImportState, frozenset[ImportState]] = {
    ImportState.IDLE: frozenset({ImportState.READING}),
    ImportState.READING: frozenset({ImportState.NORMALIZING, ImportState.IDLE}),
    ImportState.NORMALIZING: frozenset({ImportState.MATCHING}),
    ImportState.MATCHING: frozenset({ImportState.AWAITING_CONFIRMATION, ImportState.MERGING}),
    ImportState.AWAITING_CONFIRMATION: frozenset({ImportState.MERGING, ImportState.IDLE}),
    ImportState.MERGING: frozenset({ImportState.IDLE}),
}


def transition(session: ImportSession, target: ImportState, **updates: Any) -> ImportSession:
    """
    Move a session to `target`, returning a new session.

    Raises:
        InvalidImportStateError: If the move is not allowed from the
            current state, or a tabular import tries to wait for confirmation
    """
    allowed = target in ALLOWED_TRANSITIONS[session.state]
    if target == ImportState.AWAITING_CONFIRMATION and session.source != ImportSource.AI:
        allowed = False
    if not allowed:
        raise InvalidImportStateError(session.state.value, target.value)

    logger.debug(
        "import_state_changed",
        session_id=session.id,
        source=session.source.value,
        from_state=session.state.value,
        to_state=target.value
    )
    return session.model_copy(update={"state": target, **updates})


def _require_confirmation_state(session: ImportSession) -> None:
    if session.state != ImportState.AWAITING_CONFIRMATION:
        raise InvalidImportStateError(
            session.state.value,
            ImportState.AWAITING_CONFIRMATION.value
        )


def set_selection(session: ImportSession, selected_ids: Iterable[str]) -> ImportSession:
    """Replace the selection; ids that are not candidates are ignored."""
    _require_confirmation_state(session)
    candidate_ids = {c.id for c in session.candidates}
    return session.model_copy(update={
        "selected_ids": frozenset(i for i in selected_ids if i in candidate_ids)
    })


def toggle_candidate(session: ImportSession, candidate_id: str) -> ImportSession:
    """Flip one candidate in or out of the selection."""
    if candidate_id in session.selected_ids:
        return set_selection(session, session.selected_ids - {candidate_id})
    return set_selection(session, session.selected_ids | {candidate_id})


def discard(session: ImportSession) -> ImportSession:
    """Cancel a pending import; rows and candidates are dropped."""
    _require_confirmation_state(session)
    logger.info(
        "import_discarded",
        session_id=session.id,
        row_count=len(session.rows),
        candidate_count=len(session.candidates)
    )
    return transition(
        session,
        ImportState.IDLE,
        rows=[],
        candidates=[],
        selected_ids=frozenset(),
    )


# ===================
# PURE RECONCILIATION
# ===================

def reconcile_tabular_records(
    records: Iterable[ImportRecord],
    catalog: list[CatalogProduct],
    units: list[Unit],
) -> list[ListRow]:
    """
    Turn spreadsheet records into grid rows.

    Known codes (or exact names) pull the catalog's name and unit.
    Unknown items keep their own values; no catalog products are created.
    """
    rows = []
    for record in records:
        fields = normalize_record(record)

        match = match_item(
            code=coerce_code(fields["code"]),
            name=coerce_name(fields["name"]),
            unit_label=coerce_unit_label(fields["unit"]),
            catalog=catalog,
            units=units,
            strategy=MatchStrategy.TABULAR,
        )

        rows.append(ListRow(
            code=match.code,
            name=match.name or TABULAR_UNKNOWN_NAME,
            unit_id=match.unit_id,
            qty=coerce_qty(fields["qty"]),
            expiry_date=coerce_expiry_date(fields["expiry_date"]),
        ))
    return rows


def reconcile_extracted_items(
    items: Iterable[Union[ExtractedItem, dict]],
    catalog: list[CatalogProduct],
    units: list[Unit],
    code_factory: Callable[[], str] = generate_auto_code,
) -> tuple[list[ListRow], list[PendingProductCandidate]]:
    """
    Turn AI-extracted items into grid rows plus new-product candidates.

    Returns:
        (rows, candidates) - one row per item, one candidate per distinct
        unmatched name
    """
    collector = CandidateCollector(code_factory=code_factory)
    rows = []

    for raw in items:
        item = raw if isinstance(raw, ExtractedItem) else ExtractedItem.model_validate(raw)

        code = coerce_code(item.code)
        match = match_item(
            code=code,
            name=coerce_name(item.name, fallback=AI_UNKNOWN_NAME),
            unit_label=coerce_unit_label(item.unit),
            catalog=catalog,
            units=units,
            strategy=MatchStrategy.AI,
        )

        if not match.matched:
            collector.offer(
                code=code,
                name=match.name,
                unit_id=match.unit_id,
                price=coerce_price(item.price),
            )

        rows.append(ListRow(
            code=match.code,
            name=match.name,
            unit_id=match.unit_id,
            qty=coerce_qty(item.qty),
            expiry_date=coerce_expiry_date(item.expiry_date),
        ))

    return rows, collector.candidates


# ===================
# SERVICE
# ===================

class ReconciliationService:
    """
    Runs imports against the live catalog.

    Collaborators are injected so tests can pass in-memory stores; by
    default the Supabase-backed services are used.
    """

    def __init__(self, product_service=None, unit_service=None, tag_list_service=None):
        self.products = product_service or get_product_service()
        self.units = unit_service or get_unit_service()
        self.tag_lists = tag_list_service or get_tag_list_service()

    # ===================
    # TABULAR
    # ===================

    def run_tabular_import(
        self,
        records: list[ImportRecord],
        existing_rows: Optional[list[ListRow]] = None,
    ) -> list[ListRow]:
        """
        Import spreadsheet records straight into the grid.

        Args:
            records: Header-keyed records in sheet order
            existing_rows: Current grid (None for a fresh grid)

        Returns:
            Updated grid

        Raises:
            EmptySourceError: If there are no records
        """
        session = transition(ImportSession(source=ImportSource.TABULAR), ImportState.READING)
        logger.info("tabular_import_started", session_id=session.id, record_count=len(records))

        if not records:
            logger.warning("tabular_import_empty", session_id=session.id)
            raise EmptySourceError(ImportSource.TABULAR.value)

        session = transition(session, ImportState.NORMALIZING)
        session = transition(session, ImportState.MATCHING)
        rows = reconcile_tabular_records(records, self.products.get_all(), self.units.get_all())

        session = transition(session, ImportState.MERGING, rows=rows)
        grid = self.merge_rows(existing_rows or [], session.rows)
        session = transition(session, ImportState.IDLE)

        logger.info("tabular_import_completed", session_id=session.id, imported=len(rows))

        return grid

    # ===================
    # AI
    # ===================

    def run_ai_import(
        self,
        items: list[Union[ExtractedItem, dict]],
        existing_rows: Optional[list[ListRow]] = None,
        code_factory: Callable[[], str] = generate_auto_code,
    ) -> AiImportResult:
        """
        Reconcile AI-extracted items.

        Without new products the rows are merged at once and `grid` is
        set. Otherwise the returned session waits in
        awaiting_confirmation with every candidate selected.

        Raises:
            EmptySourceError: If there are no items
        """
        session = transition(ImportSession(source=ImportSource.AI), ImportState.READING)
        logger.info("ai_import_started", session_id=session.id, item_count=len(items))

        if not items:
            logger.warning("ai_import_empty", session_id=session.id)
            raise EmptySourceError(ImportSource.AI.value)

        session = transition(session, ImportState.NORMALIZING)
        session = transition(session, ImportState.MATCHING)
        rows, candidates = reconcile_extracted_items(
            items,
            self.products.get_all(),
            self.units.get_all(),
            code_factory=code_factory,
        )

        if candidates:
            session = transition(
                session,
                ImportState.AWAITING_CONFIRMATION,
                rows=rows,
                candidates=candidates,
                selected_ids=frozenset(c.id for c in candidates),
            )
            logger.info(
                "ai_import_awaiting_confirmation",
                session_id=session.id,
                row_count=len(rows),
                candidate_count=len(candidates)
            )
            return AiImportResult(rows=rows, candidates=candidates, session=session)

        session = transition(session, ImportState.MERGING, rows=rows)
        grid = self.merge_rows(existing_rows or [], session.rows)
        session = transition(session, ImportState.IDLE)

        logger.info("ai_import_completed", session_id=session.id, imported=len(rows))

        return AiImportResult(rows=rows, candidates=[], session=session, grid=grid)

    def confirm_candidates(
        self,
        session: ImportSession,
        selection: Optional[Iterable[str]] = None,
        persist: bool = True,
        existing_rows: Optional[list[ListRow]] = None,
        create_labels: bool = False,
    ) -> list[ListRow]:
        """
        Resume a pending AI import with the operator's decision.

        Selected candidates are saved to the catalog under their tentative
        ids (when `persist`), then all processed rows are merged, including
        rows whose candidate was rejected.

        Args:
            session: Session in awaiting_confirmation
            selection: Candidate ids to accept (None = session's selection)
            persist: Write accepted candidates to the catalog
            existing_rows: Current grid
            create_labels: Also create a price-label project for them

        Returns:
            Updated grid

        Raises:
            InvalidImportStateError: If the session is not awaiting confirmation
            CandidatePersistError: If the catalog write fails (nothing merged)
        """
        _require_confirmation_state(session)

        if selection is not None:
            session = set_selection(session, selection)
        accepted = session.selected_candidates

        logger.info(
            "confirming_candidates",
            session_id=session.id,
            accepted=len(accepted),
            rejected=len(session.candidates) - len(accepted),
            persist=persist
        )

        if persist and accepted:
            try:
                self.products.upsert_many(accepted)
            except DatabaseError as e:
                logger.error(
                    "candidate_persist_failed",
                    session_id=session.id,
                    error=e.message
                )
                raise CandidatePersistError([c.id for c in accepted], e.message) from e

            logger.info("candidates_persisted", session_id=session.id, count=len(accepted))

            if create_labels:
                self._create_labels(session, accepted)

        session = transition(session, ImportState.MERGING)
        grid = self.merge_rows(existing_rows or [], session.rows)
        session = transition(session, ImportState.IDLE)

        logger.info("ai_import_completed", session_id=session.id, imported=len(session.rows))

        return grid

    def _create_labels(self, session: ImportSession, products: list[PendingProductCandidate]) -> None:
        """Products are already saved, so a label failure only gets logged."""
        try:
            self.tag_lists.create_for_products(products, self.units.get_all())
        except DatabaseError as e:
            logger.error(
                "label_creation_failed",
                session_id=session.id,
                error=e.message
            )

    # ===================
    # MERGE
    # ===================

    @staticmethod
    def merge_rows(existing_rows: list[ListRow], incoming_rows: list[ListRow]) -> list[ListRow]:
        """See services.row_merge.merge_rows."""
        return merge_grid_rows(existing_rows, incoming_rows)


_reconciliation_service: Optional[ReconciliationService] = None


def get_reconciliation_service() -> ReconciliationService:
    """Get or create ReconciliationService instance."""
    global _reconciliation_service
    if _reconciliation_service is None:
        _reconciliation_service = ReconciliationService()
    return _reconciliation_service
