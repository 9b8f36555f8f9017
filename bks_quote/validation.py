from __future__ import annotations

from decimal import Decimal
from typing import List

from .models import FormAnswers

AREA_MIN = Decimal(10)
AREA_MAX = Decimal(500)
CURB_LENGTH_MIN = Decimal(1)
CURB_LENGTH_MAX = Decimal(200)


class AnswersError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


def validate_answers(answers: FormAnswers) -> List[str]:
    """Apply the form's own limits. Returns a list of messages, empty when valid."""
    errors: List[str] = []
    if answers.area < AREA_MIN:
        errors.append(f"Minsta område är {AREA_MIN}m²")
    elif answers.area > AREA_MAX:
        errors.append(f"Största område är {AREA_MAX}m²")

    if answers.wants_curb:
        if answers.curb_length is None or answers.curb_material is None:
            errors.append("Kantsten längd och material krävs när kantsten behövs")
        if answers.curb_length is not None and not (CURB_LENGTH_MIN <= answers.curb_length <= CURB_LENGTH_MAX):
            errors.append(f"Kantsten längd måste vara mellan {CURB_LENGTH_MIN} och {CURB_LENGTH_MAX} lpm")
    return errors


def check_answers(answers: FormAnswers) -> FormAnswers:
    errors = validate_answers(answers)
    if errors:
        raise AnswersError(errors)
    return answers
