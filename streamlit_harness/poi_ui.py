"""Places of Interest page for the Streamlit harness.

Version History:
- v0.1: PoI tree and creation form

Renders a campaign's PoI forest and a creation form whose parent and
type selectors are rebuilt from the option builders on every rerun, so
picking one narrows the other. Streamlit selectboxes cannot disable
individual entries, so illegal entries stay listed with a marker and are
rejected on submit.
"""

from typing import Dict, List, Optional

import streamlit as st

from poi_atlas import (
    NAME_MAX_LENGTH,
    DraftValidationError,
    PoiDraft,
    PoiError,
    PoiForest,
    build_parent_options,
    build_type_options,
    create_poi,
)
from poi_atlas.labels import Translator, place_label_key
from poi_atlas.options import ParentOption, TypeOption
from streamlit_harness.campaign_store import CampaignRecord, FileCreateRequest


def option_caption(option, translate: Translator) -> str:
    """Selectbox caption for a parent or type option."""
    if option.disabled:
        return f"{option.label} ({translate('placesOfInterest.notAllowed')})"
    return option.label


def tree_lines(forest: PoiForest, translate: Translator) -> List[str]:
    """Indented markdown bullet per place, depth-first."""
    lines = []
    for depth, node in forest.walk():
        kind = translate(place_label_key(node.place.value))
        lines.append(f"{'  ' * depth}- **{node.name}** · {kind}")
    return lines


def init_poi_session() -> None:
    """Initialize PoI form session state."""
    if "poi_parent" not in st.session_state:
        st.session_state.poi_parent = None
    if "poi_place" not in st.session_state:
        st.session_state.poi_place = ""
    if "poi_errors" not in st.session_state:
        st.session_state.poi_errors = {}


def reset_poi_form() -> None:
    st.session_state.poi_parent = None
    st.session_state.poi_place = ""
    st.session_state.poi_name = ""
    st.session_state.poi_description = ""
    st.session_state.poi_errors = {}


def drop_stale_parent(forest: PoiForest) -> None:
    """Forget a selected parent that is not a place of this forest."""
    parent = st.session_state.get("poi_parent")
    if parent is not None and forest.find(parent) is None:
        st.session_state.poi_parent = None


def render_poi_tree(record: CampaignRecord, translate: Translator) -> None:
    """Show the campaign's places, roots in creation order."""
    st.subheader("🗺️ Places of Interest")
    if not record.places.roots:
        st.caption("No places yet")
        return
    st.markdown("\n".join(tree_lines(record.places, translate)))


def render_create_form(record: CampaignRecord, translate: Translator) -> None:
    """Creation form: name, type, parent and description."""
    init_poi_session()
    forest = record.places
    drop_stale_parent(forest)
    errors: Dict[str, str] = st.session_state.poi_errors

    st.subheader(translate("placesOfInterest.createLocation"))

    name = st.text_input("Name", max_chars=NAME_MAX_LENGTH, key="poi_name")
    if "text" in errors:
        st.error(errors["text"])

    type_options: List[TypeOption] = build_type_options(forest, st.session_state.poi_parent, translate)
    type_captions = {o.place.value: option_caption(o, translate) for o in type_options}
    st.selectbox(
        "Type",
        options=[""] + list(type_captions),
        format_func=lambda v: type_captions.get(v, "—"),
        key="poi_place",
    )
    if "place" in errors:
        st.error(errors["place"])

    parent_options: List[ParentOption] = build_parent_options(forest, st.session_state.poi_place, translate)
    parent_captions: Dict[Optional[int], str] = {o.poi_id: option_caption(o, translate) for o in parent_options}
    st.selectbox(
        "Parent",
        options=list(parent_captions),
        format_func=lambda v: parent_captions[v],
        key="poi_parent",
    )
    if "parent" in errors:
        st.error(errors["parent"])

    description = st.text_area("Description", height=80, key="poi_description")

    col_save, col_cancel = st.columns(2)
    with col_save:
        if st.button(translate("placesOfInterest.create"), key="poi_create", type="primary"):
            st.session_state.poi_errors = {}
            parent = st.session_state.poi_parent
            draft = PoiDraft(
                text=name,
                place=st.session_state.poi_place,
                parent="" if parent is None else str(parent),
            )
            try:
                node = create_poi(forest, draft, FileCreateRequest(record), description.strip(), translate)
            except DraftValidationError as e:
                st.session_state.poi_errors = e.errors
                st.rerun()
            except PoiError as e:
                st.session_state.poi_errors = {"submit": str(e)}
                st.rerun()
            else:
                st.session_state.poi_reset = True
                st.success(f"✓ Added {node.name}")
                st.rerun()
    with col_cancel:
        if st.button("Cancel", key="poi_cancel"):
            st.session_state.poi_reset = True
            st.rerun()

    if "submit" in errors:
        st.error(errors["submit"])


def render_poi_page(record: CampaignRecord, translate: Translator) -> None:
    """PoI tree beside the creation form."""
    if st.session_state.pop("poi_reset", False):
        reset_poi_form()

    col_tree, col_form = st.columns([3, 2])
    with col_tree:
        render_poi_tree(record, translate)
    with col_form:
        render_create_form(record, translate)
