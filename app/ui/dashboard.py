from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict, List

import streamlit as st

# --- Path bootstrap (keep stable imports no matter how streamlit is launched)
REPO_ROOT = Path(__file__).resolve().parents[2]
SRC = REPO_ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from jobquest.config import get_settings  # noqa: E402
from jobquest.core.models import STATUSES  # noqa: E402
from jobquest.dashboard.aggregation import (  # noqa: E402
    ALL_STATUSES,
    STATUS_COLORS,
    parse_created_at,
)
from jobquest.dashboard.client import ApiError, JobsApiClient  # noqa: E402
from jobquest.dashboard.flows import DashboardController, FlowStatus  # noqa: E402

DEFAULT_API = get_settings().api_url
TABLE_HEADERS = ["Company", "Role", "Location", "Status", "Created At", "Actions"]


def _inject_css() -> None:
    st.markdown(
        """
<style>
.block-container { padding-top: 1.2rem; }
.pill {
  display:inline-block; padding: 0.22rem 0.6rem; border-radius: 999px;
  font-size: 0.82rem; margin: 0 0.35rem 0.35rem 0;
  border: 1px solid rgba(255,255,255,0.12); background: rgba(255,255,255,0.03);
}
.dot { display:inline-block; width: 8px; height: 8px; border-radius: 999px; margin-right: 6px; }
</style>
        """,
        unsafe_allow_html=True,
    )


# ----------------------------
# Session state
# ----------------------------
def _controller(api: str) -> DashboardController:
    ctrl = st.session_state.get("controller")
    if ctrl is None or ctrl.client.base_url != api:
        ctrl = DashboardController(client=JobsApiClient(api))
        st.session_state["controller"] = ctrl
        with st.spinner("Loading applications..."):
            ctrl.load()
    st.session_state.setdefault("form_rev", 0)
    st.session_state.setdefault("pending_delete", None)
    return ctrl


# ----------------------------
# Charts
# ----------------------------
def _pie_spec(rows: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "data": {"values": rows},
        "mark": {"type": "arc", "outerRadius": 90, "tooltip": True},
        "encoding": {
            "theta": {"field": "value", "type": "quantitative"},
            "color": {
                "field": "name",
                "type": "nominal",
                "scale": {"domain": list(STATUSES), "range": [STATUS_COLORS[s] for s in STATUSES]},
                "legend": {"title": None},
            },
        },
    }


def _bar_spec(rows: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "data": {"values": rows},
        "mark": {"type": "bar", "color": STATUS_COLORS["Applied"], "tooltip": True},
        "encoding": {
            # rows arrive in chronological order; keep it
            "x": {"field": "month", "type": "ordinal", "sort": None, "title": None},
            "y": {"field": "count", "type": "quantitative", "axis": {"tickMinStep": 1}, "title": None},
        },
    }


def _render_overview(ctrl: DashboardController) -> None:
    counts = ctrl.status_counts()
    st.subheader("Overview")
    st.caption("Quick summary of your applications.")
    st.metric("Total applications", len(ctrl.jobs))
    pills = "".join(
        f'<span class="pill"><span class="dot" style="background:{STATUS_COLORS[s]}"></span>'
        f"<strong>{s}:</strong> {counts[s]}</span>"
        for s in STATUSES
    )
    st.markdown(pills, unsafe_allow_html=True)


def _render_charts(ctrl: DashboardController) -> None:
    st.subheader("Dashboard")
    st.caption("Visual view of your job search.")
    c1, c2 = st.columns([1, 1.2])
    with c1:
        st.markdown("**By Status**")
        st.vega_lite_chart(spec=_pie_spec(ctrl.status_chart_data()), use_container_width=True)
    with c2:
        st.markdown("**Applications per Month**")
        monthly = ctrl.monthly_counts()
        if not monthly:
            st.caption("Add a few applications to see this chart.")
        else:
            st.vega_lite_chart(spec=_bar_spec(monthly), use_container_width=True)


# ----------------------------
# Form + table
# ----------------------------
def _render_form(ctrl: DashboardController) -> None:
    st.subheader("Add New Application")
    rev = st.session_state["form_rev"]
    with st.form(f"add_job_{rev}"):
        c1, c2 = st.columns(2)
        company = c1.text_input("Company *", value=ctrl.draft["company"], placeholder="e.g. Google")
        role = c2.text_input("Role *", value=ctrl.draft["role"], placeholder="e.g. SDE Intern")
        location = c1.text_input("Location", value=ctrl.draft["location"], placeholder="e.g. Remote / Noida")
        status = c2.selectbox("Status", STATUSES, index=STATUSES.index(ctrl.draft["status"]))
        submitted = st.form_submit_button("Add Application", type="primary")

    if submitted:
        ctrl.draft = {"company": company, "role": role, "location": location, "status": status}
        with st.spinner("Saving..."):
            result = ctrl.submit()
        if result.status is FlowStatus.SUCCESS:
            # new form key -> widgets come back empty
            st.session_state["form_rev"] = rev + 1
            st.rerun()


def _format_created(value: Any) -> str:
    dt = parse_created_at(value)
    if dt is None:
        return str(value or "-")
    return dt.astimezone().strftime("%Y-%m-%d %H:%M")


def _render_delete_confirm(ctrl: DashboardController) -> None:
    pending = st.session_state.get("pending_delete")
    if not pending:
        return
    job = next((j for j in ctrl.jobs if j.get("id") == pending), None)
    label = f"{job.get('company')} / {job.get('role')}" if job else pending
    st.warning(f"Delete this application? ({label})")
    c1, c2 = st.columns(2)
    if c1.button("Yes, delete", type="primary", use_container_width=True):
        st.session_state["pending_delete"] = None
        with st.spinner("Deleting..."):
            ctrl.delete(pending, confirmed=True)
        st.rerun()
    if c2.button("Cancel", use_container_width=True):
        st.session_state["pending_delete"] = None
        st.rerun()


def _render_table(ctrl: DashboardController) -> None:
    head, pick = st.columns([3, 1])
    head.subheader("My Applications")
    options = [ALL_STATUSES, *STATUSES]
    ctrl.filter_status = pick.selectbox(
        "Filter",
        options,
        index=options.index(ctrl.filter_status),
        format_func=lambda s: "All statuses" if s == ALL_STATUSES else s,
        label_visibility="collapsed",
    )

    _render_delete_confirm(ctrl)

    rows = ctrl.visible_jobs()
    if not rows:
        st.caption("No applications yet for this filter.")
        return

    widths = [2, 2, 2, 1.2, 1.8, 1]
    for col, header in zip(st.columns(widths), TABLE_HEADERS):
        col.caption(header)
    for job in rows:
        cols = st.columns(widths)
        cols[0].write(job.get("company"))
        cols[1].write(job.get("role"))
        cols[2].write(job.get("location") or "-")
        cols[3].write(job.get("status"))
        cols[4].caption(_format_created(job.get("createdAt")))
        if cols[5].button("Delete", key=f"del_{job.get('id')}"):
            st.session_state["pending_delete"] = job.get("id")
            st.rerun()


# ----------------------------
# UI
# ----------------------------
def main() -> None:
    st.set_page_config(page_title="JobQuest", layout="wide")
    _inject_css()
    st.title("JobQuest – Job Application Tracker")
    st.caption("Track all your job and internship applications in one place.")

    api = st.sidebar.text_input("API Base URL", value=DEFAULT_API).rstrip("/")

    st.sidebar.divider()
    st.sidebar.subheader("Backend")
    try:
        h = JobsApiClient(api).health()
        st.sidebar.success(f"🟢 API Online ({h.get('jobs', 0)} stored)")
    except ApiError as e:
        st.sidebar.error("🔴 API Offline")
        st.sidebar.caption(str(e))

    ctrl = _controller(api)

    if st.sidebar.button("🔄 Refresh", use_container_width=True):
        with st.spinner("Loading applications..."):
            ctrl.load()

    # filled last so messages set by the form or the table on this run still show
    banner = st.empty()

    left, right = st.columns(2)
    with left:
        _render_overview(ctrl)
    with right:
        _render_charts(ctrl)

    st.divider()
    _render_form(ctrl)
    st.divider()
    _render_table(ctrl)

    if ctrl.error:
        banner.error(ctrl.error)


if __name__ == "__main__":
    main()
