"""
Tests for the request/response boundary.
"""

import json
import logging

import pytest

from rank_engine.api import ProfileValidationError, parse_profile, predict, predict_json

PAYLOAD = {"TLR": 60, "RPC": 40, "GO": 70, "OI": 55, "PR": 20}


class TestPredict:

    def test_response_fields(self):
        out = predict(PAYLOAD)
        assert out["predicted_score"] == pytest.approx(53.5)
        assert out["rank_range_min"] == 487
        assert out["rank_range_max"] == 619
        assert list(out["shap_values"]) == ["TLR", "RPC", "GO", "OI", "PR"]
        assert len(out["recommendations"]) <= 5

    def test_response_is_json_serializable(self):
        out = predict(PAYLOAD)
        assert json.loads(json.dumps(out)) == out

    def test_labels_are_optional(self):
        out = predict(dict(PAYLOAD, institution_name="  Example University ", category="Engineering"))
        assert out == predict(PAYLOAD)

    def test_out_of_range_values_are_accepted(self, caplog):
        with caplog.at_level(logging.WARNING, logger="rank_engine.api"):
            out = predict(dict(PAYLOAD, PR=140))
        assert 0.0 <= out["predicted_score"] <= 100.0
        assert any("outside [0, 100]" in r.message for r in caplog.records)

    def test_extra_fields_are_ignored(self):
        assert predict(dict(PAYLOAD, foo="bar")) == predict(PAYLOAD)


class TestParseProfile:

    def test_strips_name_and_keeps_category(self):
        p = parse_profile(dict(PAYLOAD, institution_name=" X ", category="Medical"))
        assert p.institution_name == "X"
        assert p.category == "Medical"
        assert p.TLR == 60.0

    def test_default_category(self):
        assert parse_profile(PAYLOAD).category == "University"

    def test_missing_field(self):
        payload = dict(PAYLOAD)
        del payload["GO"]
        with pytest.raises(ProfileValidationError) as exc:
            parse_profile(payload)
        assert exc.value.errors == ["Missing field 'GO'."]

    def test_collects_every_error(self):
        with pytest.raises(ProfileValidationError) as exc:
            parse_profile({"TLR": "60", "RPC": None, "GO": 1, "OI": 1})
        assert len(exc.value.errors) == 3
        assert "TLR" in exc.value.errors[0]
        assert "RPC" in exc.value.errors[1]
        assert exc.value.errors[2] == "Missing field 'PR'."

    @pytest.mark.parametrize("bad", ["50", True, None, float("nan"), float("inf"), [50]])
    def test_non_numeric(self, bad):
        with pytest.raises(ProfileValidationError):
            parse_profile(dict(PAYLOAD, OI=bad))

    def test_huge_integer_is_rejected(self):
        with pytest.raises(ProfileValidationError) as exc:
            parse_profile(dict(PAYLOAD, TLR=10 ** 400))
        assert exc.value.errors == ["Field 'TLR' is too large to score."]

    def test_unknown_category(self):
        with pytest.raises(ProfileValidationError, match="Unknown category"):
            parse_profile(dict(PAYLOAD, category="Law School"))

    def test_name_must_be_string(self):
        with pytest.raises(ProfileValidationError):
            parse_profile(dict(PAYLOAD, institution_name=42))

    @pytest.mark.parametrize("body", [None, [], "TLR=60", 5])
    def test_not_an_object(self, body):
        with pytest.raises(ProfileValidationError):
            parse_profile(body)

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            parse_profile({})


class TestPredictJson:

    def test_round_trip(self):
        out = json.loads(predict_json(json.dumps(PAYLOAD)))
        assert out["rank_range_min"] == 487

    def test_huge_integer_literal(self):
        body = json.dumps(dict(PAYLOAD, RPC=0)).replace('"RPC": 0', '"RPC": 1' + "0" * 400)
        with pytest.raises(ProfileValidationError, match="RPC"):
            predict_json(body)

    def test_integer_literal_past_digit_limit(self):
        body = json.dumps(dict(PAYLOAD, GO=0)).replace('"GO": 0', '"GO": 1' + "0" * 5000)
        with pytest.raises(ProfileValidationError):
            predict_json(body)

    def test_malformed_json(self):
        with pytest.raises(ProfileValidationError, match="Malformed JSON"):
            predict_json("{TLR: 60")
