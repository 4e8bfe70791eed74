"""
Cron Expression Parsing
=======================

Converts the text of a string literal into a CronExpression.

Format
------
Six whitespace-separated fields with an optional seventh:

    second minute hour day_of_month month day_of_week [year]

| Field        | Range |
|--------------|-------|
| second       | 0-59  |
| minute       | 0-59  |
| hour         | 0-23  |
| day_of_month | 1-31  |
| month        | 1-12  |
| day_of_week  | 1-7   |

Each field is a comma-separated list of terms:

    *        any value
    n        one value
    a-b      inclusive range
    */n      every n-th value of the field's range
    a-b/n    every n-th value of a-b

The year field is accepted for compatibility but always compiles to any.

Example:
    >>> str(parse_cron_expression("0 */15 8-18 * * 1-5"))
    '0 0,15,30,45 8,9,10,11,12,13,14,15,16,17,18 * * 1,2,3,4,5 *'
"""

from ross_dsl.config.cron import CronExpression, CronField


# (name, lowest, highest) of the six compiled fields
FIELDS = (
    ("second", 0, 59),
    ("minute", 0, 59),
    ("hour", 0, 23),
    ("day_month", 1, 31),
    ("month", 1, 12),
    ("day_week", 1, 7),
)


def parse_cron_expression(text: str) -> CronExpression:
    """
    Parse cron text.

    Raises:
        ValueError: If a field is missing, malformed or out of range
    """
    parts = text.split()
    if len(parts) not in (len(FIELDS), len(FIELDS) + 1):
        raise ValueError(f"expected 6 or 7 cron fields, found {len(parts)}")

    fields = {
        name: _parse_field(part, name, lowest, highest)
        for part, (name, lowest, highest) in zip(parts, FIELDS)
    }
    return CronExpression(**fields)


def _parse_field(text: str, name: str, lowest: int, highest: int) -> CronField:
    if text == "*":
        return CronField.any()

    values: set[int] = set()
    for term in text.split(","):
        values.update(_parse_term(term, name, lowest, highest))
    return CronField.including(values)


def _parse_term(term: str, name: str, lowest: int, highest: int) -> range:
    step = 1
    if "/" in term:
        term, step_text = term.split("/", 1)
        step = _parse_number(step_text, name)
        if step == 0:
            raise ValueError(f"cron {name} step must not be zero")

    if term == "*":
        start, end = lowest, highest
    elif "-" in term:
        start_text, end_text = term.split("-", 1)
        start = _parse_number(start_text, name)
        end = _parse_number(end_text, name)
    else:
        start = end = _parse_number(term, name)

    if start < lowest or end > highest or start > end:
        raise ValueError(f"cron {name} out of range {lowest}-{highest}: {term}")
    return range(start, end + 1, step)


def _parse_number(text: str, name: str) -> int:
    if not (text.isascii() and text.isdigit()):
        raise ValueError(f"invalid cron {name}: {text!r}")
    return int(text)
