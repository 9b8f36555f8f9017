from __future__ import annotations

import pytest

from bks_quote.models import FormAnswers
from bks_quote.validation import AnswersError, check_answers, validate_answers


def _answers(**kw) -> FormAnswers:
    base = dict(
        material="Skiffer",
        area=40,
        preparation="Området kräver lätt nivellering",
        usage="Gångyta",
        grout="Ögreshämande fogsand",
    )
    base.update(kw)
    return FormAnswers(**base)


def test_valid_answers_pass(marksten_driveway):
    assert validate_answers(marksten_driveway) == []
    assert check_answers(marksten_driveway) is marksten_driveway


@pytest.mark.parametrize("area, fragment", [(5, "Minsta"), (501, "Största")])
def test_area_limits(area, fragment):
    (msg,) = validate_answers(_answers(area=area))
    assert fragment in msg


def test_curb_needs_length_and_material():
    errors = validate_answers(_answers(curb_needed="Ja", curb_length=10))
    assert errors == ["Kantsten längd och material krävs när kantsten behövs"]


def test_curb_length_limits():
    errors = validate_answers(_answers(curb_needed="Ja", curb_length=250, curb_material="Betongkantsten"))
    assert len(errors) == 1
    assert "lpm" in errors[0]


def test_check_answers_raises_with_all_messages():
    with pytest.raises(AnswersError) as exc:
        check_answers(_answers(area=2, curb_needed="Ja"))
    assert len(exc.value.errors) == 2


def test_model_rejects_unknown_choice():
    with pytest.raises(ValueError):
        _answers(material="Trä")
