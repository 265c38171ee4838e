"""Summary view component - renders KPI cards, category chart and transaction table."""
from __future__ import annotations
from typing import List
import streamlit as st
import pandas as pd
import plotly.graph_objects as go

from core.logger import get_logger
from core.utils import format_money
from models.schema import CategorySummary, Transaction, TransactionSummary

log = get_logger("ui/components/summary_view")

TABLE_COLUMNS = ["Date", "Description", "Category", "Amount", "Notes", "Source"]


def render(summary: TransactionSummary, transactions: List[Transaction]) -> None:
    """
    Render the dashboard for one scope.

    Args:
        summary: Aggregates computed from `transactions`
        transactions: The scoped transaction list, in batch order
    """
    st.subheader("📈 Overview")
    _render_kpi_cards(summary)

    st.divider()

    chart_col, table_col = st.columns([2, 3])
    with chart_col:
        st.subheader("🍩 Spending by Category")
        _render_category_chart(summary.categoryData)
        _render_category_legend(summary.categoryData)
    with table_col:
        st.subheader("📋 Transactions")
        _render_transaction_table(transactions)


def _render_kpi_cards(summary: TransactionSummary) -> None:
    """Render KPI metric cards."""
    col1, col2, col3, col4 = st.columns(4)

    with col1:
        st.metric(
            label="Transactions",
            value=f"{summary.count:,}",
            help="Entries extracted in this view",
        )

    with col2:
        st.metric(
            label="Total Income",
            value=format_money(summary.income),
            help="Sum of positive amounts",
        )

    with col3:
        st.metric(
            label="Total Expenses",
            value=format_money(summary.expenses),
            help="Sum of negative amounts, as a magnitude",
        )

    with col4:
        st.metric(
            label="Net Balance",
            value=format_money(summary.net),
            delta=f"{(summary.net / summary.income * 100) if summary.income > 0 else 0:.1f}%",
            help="Income minus expenses",
        )


def category_figure(categories: List[CategorySummary]) -> go.Figure:
    """Donut chart of expense share per category, colors taken from the summary."""
    fig = go.Figure(
        go.Pie(
            labels=[c.name for c in categories],
            values=[c.value for c in categories],
            marker=dict(colors=[c.color for c in categories]),
            hole=0.65,
            sort=False,
            direction="clockwise",
            textinfo="none",
            hovertemplate="%{label}<br>%{value:$,.2f} (%{percent})<extra></extra>",
        )
    )
    fig.update_layout(
        showlegend=False,
        height=320,
        margin=dict(t=10, b=10, l=10, r=10),
    )
    return fig


def _render_category_chart(categories: List[CategorySummary]) -> None:
    if not categories:
        st.info("No expenses in this view.")
        return
    st.plotly_chart(category_figure(categories), use_container_width=True)


def _render_category_legend(categories: List[CategorySummary]) -> None:
    for c in categories:
        col1, col2 = st.columns([3, 2])
        with col1:
            st.markdown(
                f"<span style='color:{c.color}'>●</span> {c.name}",
                unsafe_allow_html=True,
            )
        with col2:
            st.markdown(
                f"<div style='text-align: right;'>{c.percentage:.1f}% · {format_money(c.value)}</div>",
                unsafe_allow_html=True,
            )


def transactions_frame(transactions: List[Transaction]) -> pd.DataFrame:
    """Table rows in batch order with display column names."""
    df = pd.DataFrame(
        [
            {
                "Date": t.date,
                "Description": t.description,
                "Category": t.category,
                "Amount": t.amount,
                "Notes": t.notes,
                "Source": t.sourceFile,
            }
            for t in transactions
        ],
        columns=TABLE_COLUMNS,
    )
    return df


def _render_transaction_table(transactions: List[Transaction]) -> None:
    if not transactions:
        st.info("No transactions in this view.")
        return

    st.dataframe(
        transactions_frame(transactions),
        use_container_width=True,
        hide_index=True,
        column_config={
            "Amount": st.column_config.NumberColumn("Amount", format="%.2f"),
        },
    )
