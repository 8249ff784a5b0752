#!/usr/bin/env python3
"""
Ledger Exporter

Top-level run functions. export_ledger() is pure and works on already
fetched data; run_export() adds fetching from a data source and writing the
artifact.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from ..actual.models import ActualData
from ..actual.sources import DataSource, fetch_actual_data
from ..core.dates import FinancialDate
from .balances import generate_balances
from .directives import LedgerStyle
from .mapper import NameMapper
from .output import OutputAccumulator
from .renderer import ExportContext, ExportStats, TransactionRenderer
from .resolver import EntityResolver

logger = logging.getLogger(__name__)


@dataclass
class ExportResult:
    """Outcome of an export run."""

    output: OutputAccumulator
    stats: ExportStats
    opened_accounts: frozenset[str]
    output_path: Path | None = None

    @property
    def text(self) -> str:
        return self.output.render()


def export_ledger(
    data: ActualData,
    mapper: NameMapper,
    style: LedgerStyle | None = None,
    today: FinancialDate | None = None,
) -> ExportResult:
    """
    Render fetched Actual data as Beancount text.

    Mappings are validated before any record is produced.

    Args:
        data: Fetched collections, transactions oldest first
        mapper: Name mapper built from the mapping file
        style: Currency and column layout
        today: Date for balance assertions (default: today)

    Returns:
        ExportResult with the rendered text and run statistics

    Raises:
        MappingError: If any account or category name is unmapped
    """
    mapper.validate(data)

    context = ExportContext.create(style)
    renderer = TransactionRenderer(EntityResolver(data, mapper), context)
    renderer.process_all(data.transactions)

    context.stats.balances = generate_balances(
        data.accounts, data.balances, mapper, context.output, context.style, today
    )

    stats = context.stats
    logger.info(
        f"Rendered {stats.total_rendered} transactions "
        f"({', '.join(f'{kind}: {count}' for kind, count in sorted(stats.rendered.items())) or 'none'}), "
        f"skipped {stats.total_skipped}, {stats.balances} balance assertions"
    )

    return ExportResult(
        output=context.output,
        stats=stats,
        opened_accounts=context.registry.opened,
    )


def run_export(
    source: DataSource,
    mapper: NameMapper,
    output_path: str | Path,
    style: LedgerStyle | None = None,
    today: FinancialDate | None = None,
) -> ExportResult:
    """
    Fetch, render and write in one go.

    The source is closed again even when fetching fails. Nothing is written
    unless rendering completed.
    """
    source.open()
    try:
        data = fetch_actual_data(source)
    finally:
        source.close()

    result = export_ledger(data, mapper, style, today)

    result.output_path = result.output.write(output_path)
    return result
