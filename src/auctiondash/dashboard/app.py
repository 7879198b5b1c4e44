"""Streamlit dashboard for auctiondash.

Run with: streamlit run src/auctiondash/dashboard/app.py
"""

import asyncio
from datetime import date
from typing import Optional

import pandas as pd
import streamlit as st
from pydantic import ValidationError

from auctiondash.analysis import PropertyRanker, calculate_metrics
from auctiondash.analysis.statistics import (
    STATISTICS_FIELDS,
    aggregate_remodeling_costs,
    budget_comparison,
    category_shares,
)
from auctiondash.config import config
from auctiondash.models.property import (
    ACQUISITION_TAX_RATE_MAX,
    ACQUISITION_TAX_RATE_MIN,
    InvestmentMetrics,
    PropertyDraft,
    PropertyRecord,
    PropertyStatus,
)
from auctiondash.storage import StoreError, create_store, fetch_properties

STATUS_LABELS = {
    PropertyStatus.UPCOMING: "🟡 Upcoming",
    PropertyStatus.ONGOING: "🔵 Ongoing",
    PropertyStatus.COMPLETED: "🟢 Completed",
    PropertyStatus.CANCELLED: "🔴 Cancelled",
}

CATEGORY_LABELS = {
    "demolition": "Demolition",
    "carpentry": "Carpentry",
    "tile": "Tile",
    "labor": "Labor",
}

SORT_OPTIONS = {
    "Newest first": "created",
    "Highest ROI": "roi",
}


def format_currency(value: float) -> str:
    """Format number as whole-won currency."""
    return f"₩{value:,.0f}"


def format_percent(value: Optional[float]) -> str:
    """Format signed percentage."""
    if value is None:
        return "N/A"
    return f"{value:+.2f}%"


def format_date(value: Optional[date]) -> str:
    return value.isoformat() if value else "-"


def create_property_dataframe(
    results: list[tuple[PropertyRecord, InvestmentMetrics]]
) -> pd.DataFrame:
    """Convert ranked records to a DataFrame for display."""
    data = []
    for record, metrics in results:
        data.append({
            "Case": record.case_number,
            "Address": record.address[:40],
            "Appraisal": format_currency(record.appraisal_price),
            "Minimum": format_currency(record.minimum_price),
            "Purchase": format_currency(record.purchase_price),
            "Remodeling": format_currency(metrics.total_remodeling_cost),
            "Investment": format_currency(metrics.total_investment_with_tax),
            "Expected Sale": format_currency(record.expected_sale_price),
            "ROI": format_percent(metrics.roi),
            "Status": STATUS_LABELS[record.status],
            "Auction Date": format_date(record.auction_date),
        })
    return pd.DataFrame(data)


def category_total_lines(totals: dict[str, float]) -> list[str]:
    """Markdown lines for the category totals panel, grand total last."""
    shares = category_shares(totals)
    lines = [
        f"**{CATEGORY_LABELS[label]}:** {format_currency(value)} ({shares.get(label, 0.0):.1f}%)"
        for label, value in totals.items()
    ]
    lines.append(f"**Total:** {format_currency(sum(totals.values()))}")
    return lines


def load_records(refresh: bool = True, **kwargs) -> list[PropertyRecord]:
    """Load records from the configured store, reporting failures."""
    try:
        return asyncio.run(fetch_properties(create_store(), refresh=refresh, **kwargs))
    except StoreError as e:
        st.error(f"Failed to load properties: {e.message}")
        return []


def show_metrics_preview(metrics: InvestmentMetrics) -> None:
    """Live calculation panel on the registration form."""
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("Total Remodeling", format_currency(metrics.total_remodeling_cost))
        st.metric("Total Investment", format_currency(metrics.total_investment))
    with col2:
        st.metric("Acquisition Tax", format_currency(metrics.acquisition_tax))
        st.metric("Investment incl. Tax", format_currency(metrics.total_investment_with_tax))
    with col3:
        st.metric("Net Profit", format_currency(metrics.net_profit))
        st.metric(
            "ROI",
            format_percent(metrics.roi),
            delta="profit" if metrics.is_profitable else "loss",
            delta_color="normal" if metrics.is_profitable else "inverse",
        )


def show_dashboard() -> None:
    """Summary cards and the property table."""
    st.header("📋 Auction Dashboard")

    records = load_records()
    if not records:
        st.info("No properties registered yet. Use **Register** in the sidebar.")
        return

    ranker = PropertyRanker()
    summary = ranker.summarize(records)

    metric_cols = st.columns(3)
    with metric_cols[0]:
        st.metric("Total Investment", format_currency(summary.total_investment))
    with metric_cols[1]:
        st.metric("Active Properties", f"{summary.active_count}/{summary.property_count}")
    with metric_cols[2]:
        st.metric(
            "Expected Profit",
            format_currency(summary.expected_profit),
            delta=format_percent(summary.expected_profit_rate),
        )

    st.divider()

    sort_label = st.radio("Sort by", list(SORT_OPTIONS.keys()), horizontal=True)
    if SORT_OPTIONS[sort_label] == "roi":
        ranked = ranker.rank_by_roi(records)
    else:
        ranked = ranker.rank_by_created(records)

    df = create_property_dataframe(ranked)
    st.dataframe(
        df,
        width="stretch",
        hide_index=True,
    )

    st.download_button(
        "⬇️ Export CSV",
        data=ranker.generate_csv(records),
        file_name="properties.csv",
        mime="text/csv",
    )


def show_register_form() -> None:
    """Registration form with live metric preview."""
    st.header("🏠 Register Auction Property")

    st.subheader("Basic Information")
    col1, col2 = st.columns(2)
    with col1:
        case_number = st.text_input("Case Number", placeholder="e.g. 2024타경12345")
        appraisal_price = st.number_input("Appraisal Price (₩)", min_value=0, step=1_000_000)
        purchase_price = st.number_input("Purchase Price (₩)", min_value=0, step=1_000_000)
    with col2:
        address = st.text_input("Address", placeholder="e.g. 123 Teheran-ro, Gangnam-gu, Seoul")
        minimum_price = st.number_input("Minimum Price (₩)", min_value=0, step=1_000_000)
        expected_sale_price = st.number_input("Expected Sale Price (₩)", min_value=0, step=1_000_000)

    st.subheader("Remodeling Budget")
    cost_cols = st.columns(4)
    with cost_cols[0]:
        demolition_cost = st.number_input("Demolition (₩)", min_value=0, step=100_000)
    with cost_cols[1]:
        carpentry_cost = st.number_input("Carpentry (₩)", min_value=0, step=100_000)
    with cost_cols[2]:
        tile_cost = st.number_input("Tile (₩)", min_value=0, step=100_000)
    with cost_cols[3]:
        labor_cost = st.number_input("Labor (₩)", min_value=0, step=100_000)

    st.subheader("Schedule & Tax")
    sched_cols = st.columns(4)
    with sched_cols[0]:
        auction_date = st.date_input("Auction Date", value=None)
    with sched_cols[1]:
        vacate_date = st.date_input("Vacate Date", value=None)
    with sched_cols[2]:
        construction_start_date = st.date_input("Construction Start", value=None)
    with sched_cols[3]:
        acquisition_tax_rate = st.number_input(
            "Acquisition Tax Rate (%)",
            min_value=ACQUISITION_TAX_RATE_MIN,
            max_value=ACQUISITION_TAX_RATE_MAX,
            value=config.default_acquisition_tax_rate,
            step=0.1,
        )

    notes = st.text_area("Notes")

    fields = {
        "case_number": case_number,
        "address": address,
        "appraisal_price": appraisal_price,
        "minimum_price": minimum_price,
        "purchase_price": purchase_price,
        "demolition_cost": demolition_cost,
        "carpentry_cost": carpentry_cost,
        "tile_cost": tile_cost,
        "labor_cost": labor_cost,
        "acquisition_tax_rate": acquisition_tax_rate,
        "expected_sale_price": expected_sale_price,
    }

    st.divider()
    st.subheader("📈 Profitability Preview")
    show_metrics_preview(calculate_metrics(fields))

    if st.button("💾 Save Property", type="primary", width="stretch"):
        try:
            draft = PropertyDraft(
                **fields,
                auction_date=auction_date,
                vacate_date=vacate_date,
                construction_start_date=construction_start_date,
                notes=notes or None,
            )
        except ValidationError as e:
            st.warning(f"Please check the form: {e.error_count()} invalid field(s)")
            return

        try:
            asyncio.run(create_store().insert(draft))
        except StoreError as e:
            st.error(f"Failed to save property: {e.message}")
            return

        st.success(f"Saved {draft.case_number}")


def show_statistics() -> None:
    """Remodeling cost breakdown and planned-vs-recorded comparison."""
    st.header("📊 Remodeling Cost Statistics")

    records = load_records(
        refresh=False,
        fields=STATISTICS_FIELDS,
        order_by=None,
    )

    col1, col2 = st.columns(2)
    totals = aggregate_remodeling_costs(records)

    with col1:
        st.subheader("Cost by Category")
        if not totals:
            st.info("No data.")
        else:
            chart_df = pd.DataFrame(
                {"Total": list(totals.values())},
                index=[CATEGORY_LABELS[label] for label in totals],
            )
            st.bar_chart(chart_df)

    with col2:
        st.subheader("Category Totals")
        if not totals:
            st.info("No data.")
        else:
            for line in category_total_lines(totals):
                st.write(line)

    st.divider()
    st.subheader("Planned Budget vs Recorded Total")
    comparison = budget_comparison(records)
    if not comparison:
        st.info("Nothing to compare yet.")
    else:
        comparison_df = pd.DataFrame(
            {
                "Planned": [row.planned for row in comparison],
                "Recorded": [row.recorded for row in comparison],
            },
            index=[row.label for row in comparison],
        )
        st.bar_chart(comparison_df, stack=False)


PAGES = {
    "📋 Dashboard": show_dashboard,
    "🏠 Register": show_register_form,
    "📊 Statistics": show_statistics,
}


def main():
    """Main dashboard application."""
    st.set_page_config(
        page_title="auctiondash",
        page_icon="🏠",
        layout="wide",
        initial_sidebar_state="expanded",
    )

    with st.sidebar:
        st.title("🏠 auctiondash")
        st.caption("Auction & renovation tracker")
        page = st.radio("Navigate", list(PAGES.keys()))

    PAGES[page]()


if __name__ == "__main__":
    main()
