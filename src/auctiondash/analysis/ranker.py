"""Property ranking, portfolio summary and export.

This module orders registered properties for the dashboard table and
builds the portfolio-level figures shown above it. All ordering keys and
totals come from the calculator, never from stored derived columns.
"""

import csv
import io
from dataclasses import dataclass
from statistics import mean, median

from ..models.property import InvestmentMetrics, PropertyRecord
from .calculator import calculate_metrics, return_on_investment


@dataclass(frozen=True)
class PortfolioSummary:
    """Aggregate figures for the dashboard summary cards."""

    property_count: int
    active_count: int
    total_investment: float
    total_expected_sale: float
    expected_profit: float
    expected_profit_rate: float


class PropertyRanker:
    """Rank and summarize registered auction properties.

    Sorting is stable: records with equal keys keep their original
    relative order.

    Example:
        ranker = PropertyRanker()

        for record, metrics in ranker.rank_by_roi(records):
            print(f"{record.case_number}: {metrics.roi:.2f}%")

        summary = ranker.summarize(records)
        print(f"Expected profit: {summary.expected_profit:,.0f}")
    """

    # =========================================================================
    # Batch Analysis
    # =========================================================================

    def analyze_batch(
        self,
        records: list[PropertyRecord],
    ) -> list[tuple[PropertyRecord, InvestmentMetrics]]:
        """Pair each record with freshly computed metrics, in input order."""
        return [(record, calculate_metrics(record)) for record in records]

    # =========================================================================
    # Ranking Methods
    # =========================================================================

    def rank_by_roi(
        self,
        records: list[PropertyRecord],
    ) -> list[tuple[PropertyRecord, InvestmentMetrics]]:
        """Rank properties by computed ROI (highest first).

        Args:
            records: Properties to rank

        Returns:
            Sorted list of (PropertyRecord, InvestmentMetrics) tuples
        """
        analyzed = self.analyze_batch(records)
        return sorted(analyzed, key=lambda x: x[1].roi, reverse=True)

    def rank_by_created(
        self,
        records: list[PropertyRecord],
    ) -> list[tuple[PropertyRecord, InvestmentMetrics]]:
        """Rank properties by creation timestamp (newest first).

        Records without a timestamp go last, in their original order.
        """
        analyzed = self.analyze_batch(records)
        dated = [x for x in analyzed if x[0].created_at is not None]
        undated = [x for x in analyzed if x[0].created_at is None]
        dated = sorted(dated, key=lambda x: x[0].created_at.timestamp(), reverse=True)
        return dated + undated

    # =========================================================================
    # Summary & Reports
    # =========================================================================

    def summarize(self, records: list[PropertyRecord]) -> PortfolioSummary:
        """Compute the portfolio summary cards.

        Investment totals include acquisition tax, matching the per-row
        figures shown in the table.
        """
        analyzed = self.analyze_batch(records)

        total_investment = sum(m.total_investment_with_tax for _, m in analyzed)
        total_sale = sum(r.financials.expected_sale_price for r, _ in analyzed)
        expected_profit = total_sale - total_investment

        return PortfolioSummary(
            property_count=len(records),
            active_count=len([r for r in records if r.is_active]),
            total_investment=total_investment,
            total_expected_sale=total_sale,
            expected_profit=expected_profit,
            expected_profit_rate=return_on_investment(expected_profit, total_investment),
        )

    def generate_report(
        self,
        records: list[PropertyRecord],
        top_n: int = 5,
    ) -> str:
        """Generate a text summary report.

        Args:
            records: Properties to report on
            top_n: Number of top-ROI properties to highlight

        Returns:
            Formatted text report
        """
        if not records:
            return "No properties registered."

        analyzed = self.analyze_batch(records)
        summary = self.summarize(records)
        rois = [m.roi for _, m in analyzed]

        status_counts: dict[str, int] = {}
        for record, _ in analyzed:
            status_counts[record.status.value] = status_counts.get(record.status.value, 0) + 1

        top = sorted(analyzed, key=lambda x: x[1].roi, reverse=True)[:max(top_n, 0)]

        lines = [
            "=" * 60,
            "AUCTION PORTFOLIO REPORT",
            "=" * 60,
            "",
            f"Properties: {summary.property_count} ({summary.active_count} active)",
            "",
            "Status Breakdown:",
        ]

        for status, count in sorted(status_counts.items()):
            lines.append(f"  {status}: {count}")

        lines.extend([
            "",
            "Summary Statistics:",
            f"  Total Investment (incl. tax): {summary.total_investment:,.0f}",
            f"  Total Expected Sale: {summary.total_expected_sale:,.0f}",
            f"  Expected Profit: {summary.expected_profit:,.0f}",
            f"  Expected Profit Rate: {summary.expected_profit_rate:.2f}%",
            f"  Average ROI: {mean(rois):.2f}%",
            f"  Median ROI: {median(rois):.2f}%",
            "",
            "-" * 60,
            f"TOP {len(top)} BY ROI",
            "-" * 60,
            "",
        ])

        for i, (record, metrics) in enumerate(top, 1):
            lines.extend([
                f"{i}. {record.label} | {record.address[:40]}",
                f"   Investment: {metrics.total_investment_with_tax:,.0f} | "
                f"Net Profit: {metrics.net_profit:,.0f} | ROI: {metrics.roi:+.2f}%",
                "",
            ])

        lines.append("=" * 60)

        return "\n".join(lines)

    def generate_csv(self, records: list[PropertyRecord]) -> str:
        """Generate CSV export of properties with metrics, ordered by ROI."""
        headers = [
            "ID", "Case Number", "Address", "Status", "Purchase Price",
            "Remodeling", "Acquisition Tax", "Total Investment", "Expected Sale",
            "Net Profit", "ROI",
        ]

        buf = io.StringIO()
        writer = csv.writer(buf, lineterminator="\n")
        writer.writerow(headers)

        for record, metrics in self.rank_by_roi(records):
            writer.writerow([
                record.id,
                record.case_number,
                record.address,
                record.status.value,
                f"{record.purchase_price:.0f}",
                f"{metrics.total_remodeling_cost:.0f}",
                f"{metrics.acquisition_tax:.0f}",
                f"{metrics.total_investment_with_tax:.0f}",
                f"{record.expected_sale_price:.0f}",
                f"{metrics.net_profit:.0f}",
                f"{metrics.roi:.2f}",
            ])

        return buf.getvalue()
