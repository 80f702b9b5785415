"""
Tests for the in-memory PDF report.
"""

from dataclasses import replace

from rank_engine.pdf_report import build_pdf_report, split_text
from rank_engine.predictor import Profile, compute


def test_report_is_pdf():
    profile = Profile(TLR=60, RPC=40, GO=70, OI=55, PR=20, institution_name="Example University")
    data = build_pdf_report(profile, compute(profile))
    assert data.startswith(b"%PDF")
    assert len(data) > 500


def test_report_without_recommendations_or_name():
    profile = Profile(TLR=100, RPC=100, GO=100, OI=100, PR=100)
    result = replace(compute(profile), recommendations=[])
    assert build_pdf_report(profile, result).startswith(b"%PDF")


def test_split_text():
    assert split_text("", 10) == []
    assert split_text("aaa bbb ccc", 7) == ["aaa bbb", "ccc"]


def test_report_with_devanagari_name():
    profile = Profile(TLR=72, RPC=55, GO=81, OI=60, PR=44,
                      institution_name="भारतीय प्रौद्योगिकी संस्थान", category="Engineering")
    assert build_pdf_report(profile, compute(profile)).startswith(b"%PDF")
