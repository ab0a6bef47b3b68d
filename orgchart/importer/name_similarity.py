"""
OrgChart Interchange - Name Similarity
======================================
String normalization and fuzzy scoring used to line up spreadsheet team,
group and manager names with the org tree.
"""

import re
from typing import Optional, Set

# Keep letters, digits, whitespace, '&' and '-'
_STRIP_CHARS = re.compile(r'[^a-z0-9\s&-]')
_WHITESPACE = re.compile(r'\s+')
_TOKEN_SPLIT = re.compile(r'[\s&-]+')

# Leading honorific, followed by a period and/or whitespace
HONORIFIC_PATTERN = re.compile(r'^(?:mrs|mr|ms|miss|dr)(?:\.\s*|\s+)', re.IGNORECASE)


def normalize_name(value: Optional[str]) -> str:
    """
    Normalize a team/group name for comparison.

    Examples:
        >>> normalize_name("  Platform  Eng. (EMEA) ")
        'platform eng emea'
        >>> normalize_name("Tax & Control")
        'tax & control'
    """
    if not value:
        return ''
    value = _STRIP_CHARS.sub('', value.lower())
    return _WHITESPACE.sub(' ', value).strip()


def tokenize(normalized: str) -> Set[str]:
    return {t for t in _TOKEN_SPLIT.split(normalized) if t}


def similarity_score(a: Optional[str], b: Optional[str]) -> float:
    """
    Similarity between two names, from 0.0 to 1.0.

    1.0 for an exact normalized match; 0.7-1.0 when one contains the other
    (scaled by length ratio); otherwise Jaccard overlap of the tokens.

    Examples:
        >>> similarity_score("Core Services", "core  services")
        1.0
        >>> round(similarity_score("Platform", "Platform Engineering"), 3)
        0.82
        >>> similarity_score("Payments API", "Payments Web")
        0.3333333333333333
    """
    na = normalize_name(a)
    nb = normalize_name(b)

    if na == nb:
        return 1.0

    # An empty name carries no signal
    if not na or not nb:
        return 0.0

    if na in nb or nb in na:
        shorter, longer = (na, nb) if len(na) < len(nb) else (nb, na)
        return 0.7 + 0.3 * (len(shorter) / len(longer))

    tokens_a = tokenize(na)
    tokens_b = tokenize(nb)
    if not tokens_a or not tokens_b:
        return 0.0

    return len(tokens_a & tokens_b) / len(tokens_a | tokens_b)


def strip_honorific(name: Optional[str]) -> str:
    """
    Remove a leading Mr/Ms/Mrs/Miss/Dr and collapse whitespace.

    Examples:
        >>> strip_honorific("MR.  John   Smith")
        'John Smith'
        >>> strip_honorific("Mrinal Sen")
        'Mrinal Sen'
    """
    if not name:
        return ''
    name = HONORIFIC_PATTERN.sub('', name.strip())
    return _WHITESPACE.sub(' ', name).strip()


def names_match(csv_name: Optional[str], app_name: Optional[str]) -> bool:
    """
    Heuristic check that two person names refer to the same person.

    Matches on equality or containment after honorific stripping, or on an
    identical surname (more than 2 characters) plus the same first initial,
    so "Mr. J. Smith" matches "John Smith".
    """
    if not app_name or not csv_name:
        return False

    a = strip_honorific(csv_name).lower()
    b = strip_honorific(app_name).lower()
    if not a or not b:
        return False

    if a == b:
        return True

    # Middle name / initial variations
    if a in b or b in a:
        return True

    a_tokens = a.split(' ')
    b_tokens = b.split(' ')
    a_last, b_last = a_tokens[-1], b_tokens[-1]
    if len(a_last) > 2 and a_last == b_last:
        return a_tokens[0][0] == b_tokens[0][0]

    return False
