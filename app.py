"""Streamlit front-end for the device billing reconciliation pipeline."""
from __future__ import annotations

from datetime import date
from typing import Sequence
import logging

import pandas as pd
import streamlit as st

from billing_recon import (
    BillingReconciliationContext,
    ExcelCostRepository,
    ExcelPlatformRepository,
    InvalidWorkbook,
    ProcessingOptions,
    ReconcileBillingUseCase,
)
from billing_recon.config import SETTINGS
from billing_recon.domain.models import ConsolidatedRecord
from billing_recon.domain.results import summarize, top_accounts
from billing_recon.presentation.billing_report import (
    device_rows,
    recent_deactivation_rows,
    render_workbook,
    summary_rows,
)

logger = logging.getLogger(__name__)

st.set_page_config(page_title="Device Billing Reconciliation", layout="wide")
st.title("Device Billing Reconciliation")


def run_reconciliation(platform_bytes: bytes, cost_bytes: bytes, options: ProcessingOptions) -> Sequence[ConsolidatedRecord]:
    context = BillingReconciliationContext(
        platform_repository=ExcelPlatformRepository(platform_bytes, label="platform workbook"),
        cost_repository=ExcelCostRepository(cost_bytes, label="cost workbook"),
    )
    return ReconcileBillingUseCase(context).execute(options)


if "view" not in st.session_state:
    st.session_state["view"] = "upload"
if "result" not in st.session_state:
    st.session_state["result"] = None
if "error" not in st.session_state:
    st.session_state["error"] = None


if st.session_state["view"] == "upload":
    if st.session_state["error"]:
        st.error(st.session_state["error"])

    col1, col2 = st.columns(2)
    with col1:
        platform_file = st.file_uploader("Upload platforms file", type=["xls", "xlsx"])
    with col2:
        cost_file = st.file_uploader("Upload costs file", type=["xls", "xlsx"])

    col3, col4 = st.columns(2)
    with col3:
        reference_date = st.date_input("Billing cutoff date", value=date.today())
    with col4:
        grace_days = st.number_input(
            "Grace period (days)",
            min_value=0,
            value=SETTINGS.default_grace_period_days,
            step=1,
        )

    run_btn = st.button("Run Reconciliation", disabled=not (platform_file and cost_file))
    if run_btn and platform_file and cost_file:
        options = ProcessingOptions(reference_date=reference_date, grace_period_days=int(grace_days))
        with st.spinner("Reconciling..."):
            try:
                records = run_reconciliation(platform_file.read(), cost_file.read(), options)
            except InvalidWorkbook:
                logger.exception("Reconciliation failed")
                st.session_state["error"] = SETTINGS.error_message
                st.rerun()
        st.session_state["result"] = {
            "records": records,
            "report": render_workbook(records),
        }
        st.session_state["error"] = None
        st.session_state["view"] = "results"
        st.rerun()
else:
    back_clicked = st.button("← New analysis", key="back_to_upload")
    if back_clicked:
        st.session_state["view"] = "upload"
        st.session_state["result"] = None
        st.rerun()

    result = st.session_state.get("result")
    if not result:
        st.info("No results available. Upload both files and run the reconciliation first.")
    else:
        records: Sequence[ConsolidatedRecord] = result["records"]
        summary = summarize(records)

        st.subheader("Summary")
        cols = st.columns(4)
        cols[0].metric("Estimated billing", f"{summary.total_estimated_billing:,.2f}")
        cols[1].metric(
            "Billable devices",
            summary.total_active_devices,
            help=f"Includes {summary.total_recently_deactivated} recent deactivations",
        )
        cols[2].metric("Clients", summary.total_clients)
        cols[3].metric("Clients with discrepancies", summary.clients_with_discrepancy)

        st.download_button(
            "Download billing report",
            data=result["report"],
            file_name=SETTINGS.report_file_name,
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )

        chart = pd.DataFrame(
            [{"account": name[:15], "total": float(total)} for name, total in top_accounts(records, SETTINGS.top_accounts_limit)]
        )
        if not chart.empty:
            st.bar_chart(chart, x="account", y="total")

        tabs = st.tabs(["Accounts", "Recent deactivations", "All devices"])
        with tabs[0]:
            st.dataframe(pd.DataFrame(summary_rows(records)))
        with tabs[1]:
            st.dataframe(pd.DataFrame(recent_deactivation_rows(records)))
        with tabs[2]:
            st.dataframe(pd.DataFrame(device_rows(records)))
