"""Match command: test subjects against a wildcard pattern."""

import logging
from argparse import Namespace

from propkit.exceptions import InvalidPatternError
from propkit.filters.substring import SubstringFilter


logger = logging.getLogger(__name__)


def match_subjects(args: Namespace) -> int:
    """Print 'match' or 'no match' per subject; 0 only if every subject matched."""
    try:
        substring_filter = SubstringFilter(args.pattern)
    except InvalidPatternError as e:
        logger.error(str(e))
        return 2

    if substring_filter.compiled.is_literal:
        logger.warning(
            f"Pattern {args.pattern!r} has no wildcard; it matches subjects that "
            "start and end with it"
        )

    all_matched = True
    for subject in args.subjects:
        matched = substring_filter.matches(subject)
        all_matched = all_matched and matched
        print(f"{'match' if matched else 'no match'}\t{subject}")

    return 0 if all_matched else 1
