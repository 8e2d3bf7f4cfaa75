#!/usr/bin/env python3
"""
Places of Interest Validation Script

Loads campaign files and checks every PoI forest against the hierarchy
invariants (membership, no orphans, strict type ordering, no cycles).
Writes a markdown report and exits non-zero when any campaign is broken.

Usage:
    python run_atlas_validation.py [campaign.json ...]

With no arguments, every campaign in the harness campaigns directory
(`campaigns_dir` in .poi_atlas_config.json) is checked.
"""

import json
import sys
from pathlib import Path

# Ensure repo root is on path
_REPO_ROOT = Path(__file__).resolve().parent
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from poi_atlas import PoiType, find_invariant_violations
from streamlit_harness.campaign_store import CampaignRecord
from streamlit_harness.config import load_config

REPORT_NAME = "POI_VALIDATION_REPORT.md"
# Overrides the report location (default: inside the campaigns directory)
REPORT_PATH = None


def collect_campaign_files(args, campaigns_dir):
    if args:
        return [Path(a) for a in args]
    if not campaigns_dir.exists():
        return []
    return sorted(campaigns_dir.glob("*/campaign_*.json"))


def validate_campaign_file(path):
    """Return (record, violations) for one campaign file."""
    record = CampaignRecord.from_dict(json.loads(path.read_text()))
    return record, find_invariant_violations(record.places)


def main(args=None):
    args = sys.argv[1:] if args is None else args

    print("Places of Interest Validation")
    print("=" * 60)
    print()

    campaigns_dir = Path(load_config()["campaigns_dir"])
    files = collect_campaign_files(args, campaigns_dir)
    if not files:
        print("No campaign files found.")
        return 0

    results = []
    for path in files:
        try:
            record, violations = validate_campaign_file(path)
        except (OSError, ValueError, KeyError) as e:
            print(f"✗ {path}: could not load ({e})")
            results.append((path, None, [f"could not load: {e}"]))
            continue

        status = "✓" if not violations else "✗"
        print(f"{status} {record.name}: {len(record.places)} places, {len(violations)} problems")
        for problem in violations:
            print(f"   - {problem}")
        results.append((path, record, violations))

    print()
    report_path = REPORT_PATH or campaigns_dir / REPORT_NAME
    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(render_report(results))
    print(f"✓ Report saved to {report_path}")

    broken = sum(1 for _, _, violations in results if violations)
    return 1 if broken else 0


def render_report(results):
    """Markdown report of per-campaign place counts and problems."""
    lines = []
    lines.append("# Places of Interest Validation Report")
    lines.append("")
    lines.append("| Campaign | Places | Roots | " + " | ".join(p.value.title() for p in PoiType) + " | Problems |")
    lines.append("|" + "---|" * (len(PoiType) + 4))

    for path, record, violations in results:
        if record is None:
            lines.append(f"| {path.name} | - | - | " + " | ".join("-" for _ in PoiType) + f" | {len(violations)} |")
            continue
        counts = {p: 0 for p in PoiType}
        for node in record.places.points.values():
            counts[node.place] += 1
        cells = " | ".join(str(counts[p]) for p in PoiType)
        lines.append(
            f"| {record.name} | {len(record.places)} | {len(record.places.roots)} | {cells} | {len(violations)} |"
        )

    lines.append("")
    for path, record, violations in results:
        if not violations:
            continue
        title = record.name if record else path.name
        lines.append(f"## {title}")
        lines.append("")
        for problem in violations:
            lines.append(f"- {problem}")
        lines.append("")

    return "\n".join(lines)


if __name__ == "__main__":
    sys.exit(main())
