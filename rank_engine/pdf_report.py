from io import BytesIO
from datetime import datetime, timezone

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import cm
from reportlab.pdfgen import canvas

from .explain import explain_contributions
from .metrics import LABELS, METRICS
from .playbook import EMPTY_MESSAGE
from .predictor import Profile, ScoreResult
from .scoring import ENGINE_VERSION, RULESET_VERSION

def safe_text(x: str) -> str:
    return (x or "").replace("\n", " ").strip()

def build_pdf_report(profile: Profile, result: ScoreResult) -> bytes:
    """Render a prediction report in memory and return the PDF bytes."""
    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    width, height = A4

    y = height - 2 * cm

    def ensure_room():
        nonlocal y
        if y < 3 * cm:
            c.showPage()
            y = height - 2 * cm
            c.setFont("Helvetica", 11)

    def heading(title):
        nonlocal y
        y -= 0.3 * cm
        ensure_room()
        c.setFont("Helvetica-Bold", 12)
        c.drawString(2 * cm, y, title)
        y -= 0.8 * cm
        c.setFont("Helvetica", 11)

    def line(text):
        nonlocal y
        for chunk in split_text(text, 95):
            c.drawString(2 * cm, y, chunk)
            y -= 0.55 * cm
            ensure_room()

    # Header
    c.setFont("Helvetica-Bold", 18)
    c.drawString(2 * cm, y, "NIRF Rank Prediction Report")
    y -= 1.0 * cm

    c.setFont("Helvetica", 10)
    generated = datetime.now(timezone.utc).replace(microsecond=0).isoformat()
    c.drawString(2 * cm, y, f"Generated: {generated}")
    y -= 1.2 * cm

    heading("Institution")
    line(f"Name: {safe_text(profile.institution_name) or 'N/A'}")
    line(f"Category: {safe_text(profile.category)}")
    line(f"Engine Version: {ENGINE_VERSION} | Ruleset Version: {RULESET_VERSION}")

    heading("Estimate")
    line(f"Estimated Overall Score: {result.predicted_score:.2f} / 100")
    line(f"Rank Range: {result.rank_range_min} - {result.rank_range_max}")

    heading("Metric Assessment")
    values = profile.values()
    for k in METRICS:
        line(f"- {LABELS[k]}: {values[k]:g}")

    heading("Impact Analysis (contribution vs. historical baseline)")
    for k in METRICS:
        v = result.shap_values[k]
        sign = "+" if v >= 0 else ""
        line(f"- {k}: {sign}{v:.2f} pts")

    exp = explain_contributions(result.shap_values)
    line(f"Baseline score (every metric at its historical midpoint): {exp['baseline_score']}")

    heading("Recommendations")
    if result.recommendations:
        for rec in result.recommendations:
            line(f"- {safe_text(rec)}")
    else:
        line(EMPTY_MESSAGE)

    c.showPage()
    c.save()
    return buf.getvalue()

def split_text(text: str, max_len: int):
    words = text.split()
    if not words:
        return []
    lines = []
    line = ""
    for w in words:
        if len(line) + len(w) + 1 <= max_len:
            line = (line + " " + w).strip()
        else:
            lines.append(line)
            line = w
    if line:
        lines.append(line)
    return lines
