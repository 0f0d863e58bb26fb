"""Tests for the deterministic fallback result."""

from backend.app.models import FraudRisk, ValidationResult
from backend.app.validation.mock import MOCK_SUGGESTIONS, build_mock_result


def test_mock_result_has_one_validation_per_file() -> None:
    """Test mock result length matches uploaded file count."""
    for count in range(1, 6):
        names = [f"doc{i}.pdf" for i in range(count)]
        result = build_mock_result("8480995", names)
        assert len(result.ai_validation_result.validations) == count


def test_mock_result_labels_by_position() -> None:
    """Test file 0 is warning/medium, file 1 needs review/high, rest valid/low."""
    names = ["license.jpg", "passport.png", "bill.pdf", "lease.pdf"]

    validations = build_mock_result("8480995", names).ai_validation_result.validations

    assert validations[0].status == "warning"
    assert validations[0].fraud_risk == FraudRisk.medium
    assert validations[1].status == "needs review"
    assert validations[1].fraud_risk == FraudRisk.high
    for doc in validations[2:]:
        assert doc.status == "valid"
        assert doc.fraud_risk == FraudRisk.low


def test_mock_result_references_file_names() -> None:
    """Test each canned reason and fraud note names its file."""
    names = ["license.jpg", "passport.png", "bill.pdf"]

    validations = build_mock_result("8480995", names).ai_validation_result.validations

    for i, (doc, name) in enumerate(zip(validations, names)):
        assert doc.index == i
        assert doc.file_name == name
        assert name in doc.reason
        assert name in doc.fraud_notes


def test_mock_result_single_file() -> None:
    """Test a single upload only produces the warning entry."""
    result = build_mock_result("1", ["only.png"])

    validations = result.ai_validation_result.validations
    assert len(validations) == 1
    assert validations[0].fraud_risk == FraudRisk.medium
    assert result.ai_validation_result.summary == "Validated 1 document for family 1."


def test_mock_result_fixed_fields() -> None:
    """Test suggestions, summary and unclassified files."""
    result = build_mock_result("8480995", ["a.png", "b.png", "c.png"])

    assert result.unclassified_files == []
    assert result.ai_validation_result.suggestions == MOCK_SUGGESTIONS
    assert any("(" in s for s in result.ai_validation_result.suggestions)
    assert "3 documents" in result.ai_validation_result.summary
    assert "8480995" in result.ai_validation_result.storyline


def test_mock_result_is_deterministic() -> None:
    """Test same inputs give identical output."""
    names = ["license.jpg", "passport.png"]

    first = build_mock_result("8480995", names).to_wire()
    second = build_mock_result("8480995", names).to_wire()

    assert first == second


def test_mock_result_round_trips_through_contract() -> None:
    """Test the serialized mock satisfies the shared contract."""
    wire = build_mock_result("8480995", ["license.jpg"]).to_wire()

    assert ValidationResult.model_validate(wire).to_wire() == wire
