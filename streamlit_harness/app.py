from __future__ import annotations

# Ensure repo root is on sys.path when running via `streamlit run`.
import sys
from pathlib import Path as _Path
_REPO_ROOT = _Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import streamlit as st

from poi_atlas.labels import LABELS, get_translator
import streamlit_harness.campaign_store as store
from streamlit_harness.campaign_store import CampaignRecord, update_campaign_notes
from streamlit_harness.config import load_config, save_config
from streamlit_harness.poi_ui import render_poi_page

logger = logging.getLogger(__name__)


def apply_config(config: Dict[str, Any]) -> None:
    """Push configuration into module state and logging."""
    logging.basicConfig(
        level=getattr(logging, str(config["log_level"]).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    store.CAMPAIGNS_DIR = Path(config["campaigns_dir"])


def render_campaign_selector() -> Optional[CampaignRecord]:
    """Sidebar campaign picker with a new-campaign form."""
    st.sidebar.title("🎲 Campaigns")

    with st.sidebar.form("new_campaign_form", clear_on_submit=True):
        campaign_name = st.text_input("Campaign Name", placeholder="e.g., City of Fog")
        if st.form_submit_button("➕ New Campaign") and campaign_name.strip():
            record = CampaignRecord.new(campaign_name.strip())
            record.save()
            st.session_state.current_campaign_id = record.campaign_id
            logger.info("Created campaign %s (%s)", record.name, record.campaign_id)

    campaigns = CampaignRecord.list_all()
    if not campaigns:
        st.sidebar.caption("No campaigns yet")
        return None

    ids = [c.campaign_id for c in campaigns]
    names = {c.campaign_id: c.name for c in campaigns}
    current = st.session_state.get("current_campaign_id")
    selected = st.sidebar.radio(
        "Open campaign",
        options=ids,
        index=ids.index(current) if current in ids else 0,
        format_func=lambda cid: names[cid],
    )
    if selected != current:
        # PoI selections belong to the previous campaign
        st.session_state.poi_reset = True
    st.session_state.current_campaign_id = selected
    return CampaignRecord.load(selected)


def render_campaign_notes(record: CampaignRecord) -> None:
    """Campaign description and plot, editable in place."""
    with st.expander("📜 Description & Plot", expanded=not (record.description or record.plot)):
        with st.form(f"campaign_notes_{record.campaign_id}"):
            description = st.text_area("Description", value=record.description, height=100)
            plot = st.text_area("Plot", value=record.plot, height=100)
            if st.form_submit_button("💾 Save"):
                update_campaign_notes(record, description, plot)
                st.success("✓ Saved")


def main() -> None:
    config = load_config()
    apply_config(config)

    st.set_page_config(page_title="POI Atlas", layout="wide")

    locales = sorted(LABELS)
    locale = st.sidebar.selectbox(
        "Language",
        options=locales,
        index=locales.index(config["locale"]) if config["locale"] in locales else 0,
    )
    if locale != config["locale"]:
        config["locale"] = locale
        save_config(config)
    translate = get_translator(locale)

    record = render_campaign_selector()
    if record is None:
        st.title("POI Atlas")
        st.info("Create a campaign to start mapping its places of interest.")
        return

    st.title(record.name)
    render_campaign_notes(record)
    render_poi_page(record, translate)


if __name__ == "__main__":
    main()
