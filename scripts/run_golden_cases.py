#!/usr/bin/env python3
"""
Mind Compare — Golden Case Runner

Runs the reference profile pairs through the narrative engine and prints the
section-by-section template selection for each, so corpus or rule changes can
be reviewed by diffing the output.

Usage:
    python scripts/run_golden_cases.py                  # all cases, text table
    python scripts/run_golden_cases.py --case identical # one case
    python scripts/run_golden_cases.py --json           # machine-readable
    python scripts/run_golden_cases.py --share-text     # include share text
    python scripts/run_golden_cases.py --audit          # corpus audit only
"""

import argparse
import json
import sys

sys.path.insert(0, ".")

from app.narrative.golden_cases import GOLDEN_CASES, get_golden_case  # noqa: E402
from app.narrative.repository import get_template_repository  # noqa: E402
from app.narrative.share_text import build_share_text  # noqa: E402
from app.services.compare_service import CompareService  # noqa: E402


def run_case(service, case, share_text=False):
    bundle = service.compare(case.score_map_a(), case.score_map_b(), "A", "B")
    result = {
        "case": case.name,
        "description": case.description,
        "dominant": bundle.dominant_dimension.value,
        "tied": bundle.dominant_tied,
        "similarity": bundle.similarity_label.value,
        "risk": bundle.risk_label.value,
        "low_confidence": bundle.low_confidence,
        "very_low_confidence": bundle.very_low_confidence,
        "traces": [t.to_dict() for t in bundle.traces],
    }
    if share_text:
        result["share_text"] = build_share_text(bundle)
    return result


def print_case(result):
    print(f"\n== {result['case']}: {result['description']}")
    print(
        f"   dominant={result['dominant']} tied={result['tied']} "
        f"similarity={result['similarity']} risk={result['risk']} "
        f"low_conf={result['low_confidence']} very_low_conf={result['very_low_confidence']}"
    )
    for trace in result["traces"]:
        print(
            f"   {trace['section']:<20} {trace['dimension'] or '-':<15} "
            f"{trace['template_id'] or '(none)':<34} {trace['tier'] or '-'}"
        )
    if "share_text" in result:
        print()
        print(result["share_text"])


def main():
    parser = argparse.ArgumentParser(description="Run narrative golden cases")
    parser.add_argument("--case", help="Run a single case by name")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    parser.add_argument("--share-text", action="store_true", help="Include the share text")
    parser.add_argument("--audit", action="store_true", help="Only run the corpus audit")
    args = parser.parse_args()

    repository = get_template_repository()

    if args.audit:
        defects = repository.audit()
        print(json.dumps([d.to_dict() for d in defects], indent=2, ensure_ascii=False))
        sys.exit(1 if defects else 0)

    try:
        cases = [get_golden_case(args.case)] if args.case else list(GOLDEN_CASES)
    except KeyError as exc:
        print(f"ERROR: {exc.args[0]}")
        print(f"Available: {', '.join(c.name for c in GOLDEN_CASES)}")
        sys.exit(2)

    service = CompareService(repository=repository)
    results = [run_case(service, case, share_text=args.share_text) for case in cases]

    if args.json:
        print(json.dumps(results, indent=2, ensure_ascii=False))
    else:
        for result in results:
            print_case(result)


if __name__ == "__main__":
    main()
