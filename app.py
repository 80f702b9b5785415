import os
import html
import logging
import streamlit as st

# Must be first Streamlit call
st.set_page_config(page_title="NIRF Rank Predictor", layout="wide")

logging.basicConfig(
    level=os.environ.get("RANK_ENGINE_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# ----------------------------
# Imports (engine)
# ----------------------------
from rank_engine.api import ProfileValidationError, parse_profile
from rank_engine.explain import explain_contributions
from rank_engine.metrics import CATEGORIES, DEFAULT_PROFILE, LABELS, METRICS
from rank_engine.pdf_report import build_pdf_report
from rank_engine.playbook import EMPTY_MESSAGE, classify_recommendation
from rank_engine.predictor import compute, simulate_improvement
from rank_engine.scoring import ENGINE_VERSION, RULESET_VERSION

logger = logging.getLogger("rank_engine.app")

# ----------------------------
# Session state
# ----------------------------
if "last_profile" not in st.session_state:
    st.session_state.last_profile = None
if "last_result" not in st.session_state:
    st.session_state.last_result = None

if "institution_name" not in st.session_state:
    st.session_state["institution_name"] = ""
if "category" not in st.session_state:
    st.session_state["category"] = CATEGORIES[0]
for _k in METRICS:
    if f"metric_{_k}" not in st.session_state:
        st.session_state[f"metric_{_k}"] = float(DEFAULT_PROFILE[_k])

# ----------------------------
# UI styling
# ----------------------------
st.markdown(
    """
<style>
.block-container { padding-top: 1.1rem; padding-bottom: 2rem; }
h1, h2, h3 { letter-spacing: -0.02em; }

.exec-card {
  padding: 1rem 1rem;
  border-radius: 16px;
  border: 1px solid rgba(0,0,0,0.08);
  background: rgba(255,255,255,0.75);
}
.exec-title { font-weight: 800; font-size: 1.1rem; margin-bottom: 0.25rem; }
.exec-sub { color: rgba(0,0,0,0.70); margin-bottom: 0.65rem; }
</style>
""",
    unsafe_allow_html=True,
)

# ----------------------------
# Helpers
# ----------------------------
def badge(text: str, tone: str = "neutral"):
    tones = {
        "neutral": ("#111827", "#E5E7EB"),
        "good": ("#065F46", "#D1FAE5"),
        "warn": ("#92400E", "#FEF3C7"),
        "bad": ("#7F1D1D", "#FEE2E2"),
        "info": ("#1E3A8A", "#DBEAFE"),
    }
    fg, bg = tones.get(tone, tones["neutral"])
    st.markdown(
        f"""
        <span style="
            display:inline-block;
            padding:0.25rem 0.55rem;
            border-radius:999px;
            font-size:0.80rem;
            font-weight:600;
            color:{fg};
            background:{bg};
            border:1px solid rgba(0,0,0,0.06);
        ">{text}</span>
        """,
        unsafe_allow_html=True,
    )


def section_title(title: str, subtitle: str = ""):
    st.markdown(f"### {title}")
    if subtitle:
        st.caption(subtitle)


def load_sample_profile():
    st.session_state["institution_name"] = "Sample Institute of Technology"
    st.session_state["category"] = "Engineering"
    for k in METRICS:
        st.session_state[f"metric_{k}"] = float(DEFAULT_PROFILE[k])
    st.session_state.last_profile = None
    st.session_state.last_result = None
    st.rerun()


def render_header(profile, result):
    name = html.escape(profile.institution_name or "Your institution")
    st.markdown(
        f"""
<div class="exec-card">
  <div class="exec-title">{name} ({profile.category})</div>
  <div class="exec-sub">Estimated rank range: <b>{result.rank_range_min} – {result.rank_range_max}</b></div>
  <div>Estimated Overall Score: <b>{result.predicted_score:.2f}</b> / 100</div>
</div>
""",
        unsafe_allow_html=True,
    )


def render_metric_performance(profile):
    import pandas as pd

    st.subheader("Metric Performance")
    values = profile.values()
    df = pd.DataFrame({"Metric": list(METRICS), "Value": [values[k] for k in METRICS]}).set_index("Metric")
    _ = st.bar_chart(df)
    weak = [k for k in METRICS if values[k] < 40]
    if weak:
        st.caption(f"Below 40: {', '.join(weak)}")
    st.caption("Benchmarks are calculated relative to historical NIRF percentiles.")


def render_impact_analysis(result):
    import pandas as pd

    st.subheader("Impact Analysis")
    st.caption("How much each metric pushed the score up or down relative to its historical average.")
    rows = sorted(result.shap_values.items(), key=lambda kv: kv[1], reverse=True)
    df = pd.DataFrame(
        [{"Metric": k, "Impact": round(v, 2)} for k, v in rows]
    ).set_index("Metric")
    _ = st.bar_chart(df, horizontal=True)

    exp = explain_contributions(result.shap_values)
    c1, c2 = st.columns(2)
    with c1:
        st.markdown("**Strongest drivers**")
        for item in exp.get("top_positive_contributors", []):
            st.write(f"- {item.get('metric')}: +{item.get('weighted')}")
        if not exp.get("top_positive_contributors"):
            st.caption("No metric is above its baseline.")
    with c2:
        st.markdown("**Biggest drags**")
        for item in exp.get("top_negative_contributors", []):
            st.write(f"- {item.get('metric')}: {item.get('weighted')}")
        if not exp.get("top_negative_contributors"):
            st.caption("No metric is below its baseline.")
    st.caption(f"Baseline score (all metrics at historical midpoint): {exp.get('baseline_score')}")


def render_recommendations(recommendations: list):
    st.subheader("Recommendations")
    if not recommendations:
        st.write(EMPTY_MESSAGE)
        return

    for i, rec in enumerate(recommendations):
        kind = classify_recommendation(rec)
        if kind == "roi":
            st.success(f"**Predicted Highest ROI**\n\n{rec}")
        elif kind == "focus":
            st.info(f"**Strategic Focus**\n\n{rec}")
        else:
            st.warning(f"**Observation {i + 1}**\n\n{rec}")


def render_what_if(profile):
    section_title("What-if", "Re-score the profile with one metric raised.")
    c1, c2 = st.columns(2)
    with c1:
        metric = st.selectbox("Metric", list(METRICS), format_func=lambda k: LABELS[k], key="whatif_metric")
    with c2:
        delta = st.number_input("Increase by", min_value=0.0, max_value=100.0, value=10.0, step=1.0, key="whatif_delta")

    sim = simulate_improvement(profile, metric, delta)
    m1, m2 = st.columns(2)
    m1.metric("Score", f"{sim['score_after']:.2f}", f"{sim['score_gain']:+.2f}")
    m2.metric(
        "Estimated rank",
        sim["rank_after"],
        sim["rank_after"] - sim["rank_before"],
        delta_color="inverse",
    )


# ----------------------------
# Pages
# ----------------------------
def page_about():
    st.subheader("What this is")
    st.write(
        """
The predictor estimates an overall score and a rank band from five NIRF
parameter scores (0–100):
- Weighted composite score
- Rank range within a reference population of 1000 institutions
- Per-metric impact against historical baselines
- Recommendations derived from that impact

It is a deterministic heuristic. It does not learn from data and does not
store anything you enter.
        """
    )
    st.subheader("Parameters")
    for k in METRICS:
        st.write(f"- {LABELS[k]}")


def page_home():
    head_l, head_r = st.columns([0.74, 0.26], vertical_alignment="center")
    with head_l:
        st.title("NIRF Rank Predictor")
        st.caption("Score, rank range and improvement areas from your institution's parameter scores.")
    with head_r:
        badge(f"Engine {ENGINE_VERSION}", "info")
        st.write("")
        badge(f"Ruleset {RULESET_VERSION}", "info")

    if st.button("🎯 Load sample profile"):
        load_sample_profile()

    st.divider()

    with st.form("profile_form", clear_on_submit=False, border=True):
        section_title("Basic profile")
        c1, c2 = st.columns(2)
        with c1:
            st.text_input("Institution name", key="institution_name", placeholder="e.g. Graphic Era Global University")
        with c2:
            st.selectbox("Institutional category", CATEGORIES, key="category")

        section_title("Metric assessment (0–100)")
        cols = st.columns(len(METRICS))
        for col, k in zip(cols, METRICS):
            with col:
                st.number_input(LABELS[k], min_value=0.0, max_value=100.0, step=1.0, key=f"metric_{k}")

        submitted = st.form_submit_button("Generate Rank Prediction Report", use_container_width=True)

    if submitted:
        payload = {k: st.session_state.get(f"metric_{k}") for k in METRICS}
        payload["institution_name"] = st.session_state.get("institution_name", "")
        payload["category"] = st.session_state.get("category")
        try:
            profile = parse_profile(payload)
        except ProfileValidationError as e:
            for msg in e.errors:
                st.error(msg)
            return
        st.session_state.last_profile = profile
        st.session_state.last_result = compute(profile)
        logger.info("report generated for %r", profile.institution_name or "unnamed")

    profile = st.session_state.last_profile
    result = st.session_state.last_result
    if profile is None or result is None:
        st.info("Fill in the profile and generate a report.")
        return

    st.divider()
    render_header(profile, result)
    st.write("")

    left, right = st.columns([0.6, 0.4], gap="large")
    with left:
        render_metric_performance(profile)
        render_impact_analysis(result)
    with right:
        render_recommendations(result.recommendations)

    st.divider()
    render_what_if(profile)

    st.divider()
    st.download_button(
        "Download PDF report",
        data=build_pdf_report(profile, result),
        file_name="NIRF_Rank_Prediction.pdf",
        mime="application/pdf",
        key="dl_report",
    )


# ----------------------------
# Main app shell
# ----------------------------
page = st.sidebar.radio("Navigate", ["Home", "About"], key="nav")

if page == "About":
    page_about()
else:
    page_home()
