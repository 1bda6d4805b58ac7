# letter_wizard/validation/dates.py
"""
Date relationship validation.

Reasons only about values already present: missing or unparseable dates are
reported elsewhere (required/format sweeps) and the rule is skipped here.
"""

import calendar
import logging
from collections.abc import Collection, Iterable, Mapping
from datetime import date
from typing import Any

from letter_wizard.models.results import ValidationError
from letter_wizard.models.rules import DateRelation, DateRelationshipRule
from letter_wizard.models.values import parse_date, parse_number

logger = logging.getLogger(__name__)


def months_before(reference: date, months: int) -> date:
    """Same calendar day `months` earlier, clamped to the month's last day."""
    total = reference.year * 12 + (reference.month - 1) - months
    year, month = divmod(total, 12)
    month += 1
    day = min(reference.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


class DateRelationshipValidator:
    """Evaluates DateRelationshipRules against form values."""

    def validate(
        self,
        rules: Iterable[DateRelationshipRule],
        form_state: Mapping[str, Any],
        dirty_fields: Collection[str] | None = None,
        today: date | None = None,
    ) -> list[ValidationError]:
        """
        Check every applicable rule and collect violations.

        Args:
            rules: Rules to evaluate, in order
            form_state: Current field values
            dirty_fields: Fields touched by the user; a rule runs only when all
                its participants are touched. None treats every field as touched.
            today: Reference date for today-based relations

        Returns:
            Blocking errors keyed to each rule's subject field
        """
        reference = today or date.today()
        errors: list[ValidationError] = []

        for rule in rules:
            if rule.applies_when is not None and not rule.applies_when(form_state):
                continue
            if dirty_fields is not None and not all(
                name in dirty_fields for name in rule.participants
            ):
                continue

            subject = parse_date(form_state.get(rule.subject_field))
            if subject is None:
                continue

            if rule.relation.uses_reference_date:
                related = reference
            else:
                related = parse_date(form_state.get(rule.related_field))
                if related is None:
                    continue

            if self._violates(rule, subject, related, form_state):
                logger.debug(
                    f"Date rule failed: {rule.subject_field} {rule.relation.value} "
                    f"{rule.related_field or 'today'}"
                )
                errors.append(ValidationError(field=rule.subject_field, message=rule.message))

        return errors

    def _violates(
        self,
        rule: DateRelationshipRule,
        subject: date,
        related: date,
        form_state: Mapping[str, Any],
    ) -> bool:
        relation = rule.relation

        if relation in (DateRelation.NOT_AFTER, DateRelation.NOT_IN_FUTURE):
            return subject > related
        if relation == DateRelation.NOT_BEFORE:
            return subject < related
        if relation == DateRelation.MUST_BE_AFTER:
            gap = (subject - related).days
            if gap <= 0:
                return True
            minimum = self._minimum_gap(rule, form_state)
            return minimum is not None and gap < minimum
        if relation == DateRelation.WITHIN_DAYS:
            return abs((subject - related).days) > (rule.days or 0)
        if relation == DateRelation.NOT_OLDER_THAN_MONTHS:
            return subject < months_before(related, rule.days or 0)

        raise ValueError(f"Unsupported date relation: {relation}")

    def _minimum_gap(
        self, rule: DateRelationshipRule, form_state: Mapping[str, Any]
    ) -> float | None:
        """Form-supplied minimum gap wins over the rule default."""
        if rule.min_days_field:
            override = parse_number(form_state.get(rule.min_days_field))
            if override is not None:
                return override
        return rule.min_days
