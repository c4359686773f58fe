"""Exclusion rules — Admin-configured negations appended to free-text queries.

Each rule is one line of the form ``<field> <operator> <value>``::

    status = draft            ->  AND -status : draft
    embargo > {{today}}       ->  AND -embargo GT "2026-10-18T00:00:00+00:00"
    rank & 3                  ->  AND -rank LT 3

Operator symbols map to MarkLogic search grammar: ``=`` to ``:``, ``>`` to
``GT`` and ``&`` to ``LT``. Any other symbol is passed through as written.

Values may be ``{{name}}`` placeholders. Only ``today`` is known; an unknown
placeholder stops rule processing for the rest of the query.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from datetime import UTC, datetime

from pydantic import BaseModel

logger = logging.getLogger(__name__)

_RULE_RE = re.compile(r"^\s*(\w+)\s+(\S+)\s+(.+?)\s*$")
_PLACEHOLDER_RE = re.compile(r"^\{\{(\w+)\}\}")

OPERATORS: dict[str, str] = {
    "=": ":",
    ">": "GT",
    "&": "LT",
}

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ExclusionClause(BaseModel):
    """A resolved rule, ready to be negated and appended."""

    model_config = {"frozen": True}

    field: str
    operator: str
    value: str

    def render(self) -> str:
        return f" AND -{self.field} {self.operator} {self.value}"


class UnresolvedPlaceholder(BaseModel):
    """A rule whose ``{{name}}`` placeholder has no known expansion."""

    model_config = {"frozen": True}

    name: str


def _resolve_placeholder(name: str, now: Clock) -> str | None:
    if name == "today":
        current = now()
        if current.tzinfo is not None:
            current = current.astimezone(UTC)
        return f'"{current.date().isoformat()}T00:00:00+00:00"'
    return None


def resolve_rule(line: str, now: Clock | None = None) -> ExclusionClause | UnresolvedPlaceholder | None:
    """Parse one rule line into a clause.

    Args:
        line: A single ``<field> <operator> <value>`` rule.
        now: Clock used to expand ``{{today}}``. Defaults to the current UTC time.

    Returns:
        The resolved clause, an ``UnresolvedPlaceholder`` when the value is an
        unknown placeholder, or None when the line is not a rule at all.
    """
    match = _RULE_RE.match(line)
    if not match:
        return None

    field, symbol, value = match.groups()

    placeholder = _PLACEHOLDER_RE.match(value)
    if placeholder:
        name = placeholder.group(1)
        expanded = _resolve_placeholder(name, now or _utcnow)
        if expanded is None:
            return UnresolvedPlaceholder(name=name)
        value = expanded

    return ExclusionClause(field=field, operator=OPERATORS.get(symbol, symbol), value=value)


def parse_rules(text: str | None) -> list[str]:
    """Split newline-delimited rule text into non-blank lines."""
    if not text:
        return []
    return [line for line in text.splitlines() if line.strip()]


def apply_exclusions(query_text: str, rules: Iterable[str], now: Clock | None = None) -> str:
    """Append a negated clause to ``query_text`` for every rule, in order.

    Lines that are not rules are skipped. The first unresolved placeholder
    ends processing; clauses appended before it are kept.
    """
    for line in rules:
        resolved = resolve_rule(line, now=now)
        if resolved is None:
            continue
        if isinstance(resolved, UnresolvedPlaceholder):
            logger.debug(
                "Unknown placeholder {{%s}} in exclusion rule %r, skipping remaining rules",
                resolved.name,
                line,
            )
            break
        query_text += resolved.render()
    return query_text
