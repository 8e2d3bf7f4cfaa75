"""File-backed campaign store for the Streamlit harness.

Version History:
- v0.1: Campaign records with places of interest and an audit ledger

Stands in for the campaign backend: each campaign is one JSON file in a
subdirectory of CAMPAIGNS_DIR. FileCreateRequest plays the part of the
server's create endpoint, assigning ids and persisting new places before
the in-memory forest is touched.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from poi_atlas import PoiForest, PoiType

logger = logging.getLogger(__name__)

CAMPAIGNS_DIR = Path("campaigns")


def normalize_campaign_name_to_dir(name: str) -> str:
    """Normalize campaign name to a directory name.

    Removes special characters, replaces spaces/hyphens with underscores.
    """
    dir_name = re.sub(r'[^\w\s-]', '', name)
    dir_name = re.sub(r'[-\s]+', '_', dir_name)
    return dir_name.strip('_')


@dataclass
class CampaignRecord:
    """Campaign metadata plus its places of interest."""

    campaign_id: str
    name: str
    created: str
    description: str = ""
    plot: str = ""
    places: PoiForest = field(default_factory=PoiForest)
    ledger: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "campaign_id": self.campaign_id,
            "name": self.name,
            "created": self.created,
            "description": self.description,
            "plot": self.plot,
            "places_of_interest": self.places.to_dict(),
            "ledger": list(self.ledger),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "CampaignRecord":
        """Deserialize from dictionary."""
        return CampaignRecord(
            campaign_id=data["campaign_id"],
            name=data["name"],
            created=data["created"],
            description=data.get("description", ""),
            plot=data.get("plot", ""),
            places=PoiForest.from_dict(data.get("places_of_interest")),
            ledger=data.get("ledger", []),
        )

    @staticmethod
    def new(name: str) -> "CampaignRecord":
        """Create an empty campaign with a timestamped id."""
        now = datetime.now()
        return CampaignRecord(
            campaign_id=f"campaign_{now.strftime('%Y%m%d_%H%M%S')}",
            name=name,
            created=now.isoformat(),
        )

    def get_path(self) -> Path:
        """Filesystem path for this campaign."""
        campaign_dir = CAMPAIGNS_DIR / normalize_campaign_name_to_dir(self.name)
        return campaign_dir / f"{self.campaign_id}.json"

    def save(self) -> None:
        """Write the campaign to disk."""
        self.write_payload(self.to_dict())

    def write_payload(self, payload: Dict[str, Any]) -> None:
        path = self.get_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2))

    @staticmethod
    def load(campaign_id: str) -> Optional["CampaignRecord"]:
        """Load a campaign by id, searching campaign subdirectories."""
        if not CAMPAIGNS_DIR.exists():
            return None
        for subdir in CAMPAIGNS_DIR.iterdir():
            if subdir.is_dir():
                path = subdir / f"{campaign_id}.json"
                if path.exists():
                    return CampaignRecord.from_dict(json.loads(path.read_text()))
        return None

    @staticmethod
    def list_all() -> List["CampaignRecord"]:
        """List all campaigns, newest first. Unreadable files are skipped."""
        campaigns = []
        if not CAMPAIGNS_DIR.exists():
            return campaigns
        for subdir in CAMPAIGNS_DIR.iterdir():
            if subdir.is_dir():
                for json_file in subdir.glob("campaign_*.json"):
                    try:
                        campaigns.append(CampaignRecord.from_dict(json.loads(json_file.read_text())))
                    except (ValueError, KeyError) as e:
                        logger.warning("Skipping unreadable campaign file %s: %s", json_file, e)
        return sorted(campaigns, key=lambda c: c.created, reverse=True)


def update_campaign_notes(record: CampaignRecord, description: str, plot: str) -> bool:
    """Store edited description/plot; returns False when nothing changed."""
    description = description.strip()
    plot = plot.strip()
    changed = [name for name, old, new in (
        ("description", record.description, description),
        ("plot", record.plot, plot),
    ) if old != new]
    if not changed:
        return False

    record.description = description
    record.plot = plot
    record.ledger.append({
        "entry_type": "admin_action",
        "timestamp": datetime.now().isoformat(),
        "action": "notes_updated",
        "details": {"fields": changed},
    })
    record.save()
    return True


class FileCreateRequest:
    """Create endpoint backed by the campaign file.

    Assigns the next free id and writes the new place (and the updated
    parent or root list) to disk. The record's in-memory forest is left
    alone; the caller inserts the node once this returns.
    """

    def __init__(self, record: CampaignRecord):
        self.record = record

    def __call__(self, name: str, place: PoiType, parent: Optional[int], description: str) -> int:
        forest = self.record.places
        if parent is not None and parent not in forest:
            raise ValueError(f"Unknown parent place {parent}")

        poi_id = forest.next_id()
        payload = self.record.to_dict()
        places = payload["places_of_interest"]
        places["points"][str(poi_id)] = {
            "id": poi_id,
            "name": name,
            "place": PoiType(place).value,
            "description": description,
            "parent": parent,
            "children": [],
        }
        if parent is None:
            places["roots"].append(poi_id)
        else:
            places["points"][str(parent)]["children"].append(poi_id)

        audit_entry = {
            "entry_type": "admin_action",
            "timestamp": datetime.now().isoformat(),
            "action": "poi_added",
            "details": {
                "poi_id": poi_id,
                "name": name,
                "place": PoiType(place).value,
                "parent": parent,
            },
        }
        payload["ledger"].append(audit_entry)

        self.record.write_payload(payload)
        self.record.ledger.append(audit_entry)
        logger.debug("Persisted place %s to %s", poi_id, self.record.get_path())
        return poi_id
