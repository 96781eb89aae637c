"""Streamlit UI for the LRU Cache Visualizer."""

from __future__ import annotations

import html
import logging
import os
import sys
import streamlit as st

# Ensure project root is on sys.path when run from arbitrary CWD
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from lru_visualizer.modules.config import load_config
from lru_visualizer.modules.session import CacheSession, InvalidInput
from lru_visualizer.modules.slots import build_slots, usage_label


config = load_config()
logging.basicConfig(level=config.log_level)

KIND_COLORS = {
    "hit": "#16a34a",
    "miss": "#dc2626",
    "info": "#4b5563",
}

if "session" not in st.session_state:
    st.session_state.session = CacheSession(config)
    st.session_state.highlight = None
session: CacheSession = st.session_state.session


def _reset() -> None:
    session.reset(int(st.session_state.capacity))
    st.session_state.highlight = None


st.set_page_config(page_title="LRU Cache Visualizer", layout="wide")
st.title("LRU Cache Visualizer")

with st.sidebar:
    st.number_input(
        "Cache size",
        min_value=config.min_capacity,
        max_value=config.max_capacity,
        value=session.cache.capacity,
        step=1,
        key="capacity",
        on_change=_reset,
    )
    st.button("Reset cache", on_click=_reset)

with st.form("operation", clear_on_submit=True):
    cols = st.columns([1, 2, 2])
    operation = cols[0].selectbox("Operation", ["get", "put"])
    key = cols[1].text_input("Key")
    value = cols[2].text_input("Value (put only)")
    submitted = st.form_submit_button("Execute")

if submitted:
    try:
        result = session.execute(operation, key, value)
        st.session_state.highlight = result.highlight
    except InvalidInput as exc:
        st.error(str(exc))

cache = session.cache
snapshot = list(cache.snapshot())
slots = build_slots(snapshot, cache.capacity)

slot_cols = st.columns(len(slots))
for col, slot in zip(slot_cols, slots):
    with col:
        if not slot.occupied:
            st.markdown(f"**{slot.index}**  \n_Empty_  \n---")
            continue
        badges = []
        if slot.is_lru:
            badges.append("LRU")
        if slot.is_mru:
            badges.append("MRU")
        border = "#f59e0b" if st.session_state.highlight == slot.index - 1 else "#d1d5db"
        st.markdown(
            f"<div style='border:2px solid {border};border-radius:6px;padding:6px'>"
            f"<b>{slot.index}</b> {' '.join(badges)}<br>"
            f"<code>{html.escape(str(slot.key))}</code><br>{html.escape(str(slot.value))}</div>",
            unsafe_allow_html=True,
        )

m1, m2, m3 = st.columns(3)
m1.metric("Hits", cache.hits)
m2.metric("Misses", cache.misses)
m3.metric("Usage", usage_label(len(cache), cache.capacity))

st.subheader("Operation log")
for entry in session.log:
    color = KIND_COLORS.get(entry.kind, "#4b5563")
    st.markdown(
        f"<span style='color:{color}'>{entry.number}. {html.escape(entry.message)}</span>",
        unsafe_allow_html=True,
    )
