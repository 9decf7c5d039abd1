# Run from project root: streamlit run app/ui.py
# UI talks to the backend API (POST /api/ai). Each question is a fresh backend conversation.

import os
import sys
from pathlib import Path

# Ensure project root is on path (Streamlit may run with cwd != project root)
_root_from_file = Path(__file__).resolve().parent.parent
_cwd = os.getcwd()
for _root in (_root_from_file, _cwd):
    _root = str(_root)
    if _root not in sys.path:
        sys.path.insert(0, _root)

import streamlit as st
import requests

from app.core.config import API_BASE, DEFAULT_LANGUAGE
from app.services.copilot_client import MODEL_MODES

st.title("Copilot AI Proxy")

# Backend reachability
try:
    r = requests.get(f"{API_BASE}/health", timeout=5)
    if not r.ok:
        st.caption(f"Backend responded with {r.status_code}.")
except requests.RequestException:
    st.caption("Backend not reachable. Start the API first.")

with st.sidebar:
    st.subheader("Settings")
    persona = st.text_input("Persona (customModel)", key="persona", placeholder="e.g. a patient maths teacher")
    language = st.text_input("Answer language", value=DEFAULT_LANGUAGE, key="language")
    model = st.selectbox("Model", list(MODEL_MODES), key="model")
    if st.button("Clear chat", key="clear_chat"):
        st.session_state.messages = []
        st.rerun()

if "messages" not in st.session_state:
    st.session_state.messages = []

# Show previous messages (local display only)
for msg in st.session_state.messages:
    with st.chat_message(msg["role"]):
        st.markdown(msg["content"])
        for c in msg.get("citations", []):
            st.caption(f"• [{c.get('title') or c.get('url')}]({c.get('url')})")

# If we just submitted a query, show "Thinking..." while waiting for the response
if st.session_state.get("pending_query"):
    prompt = st.session_state.pending_query
    payload = {"query": prompt, "model": model, "language": language}
    if persona.strip():
        payload["customModel"] = persona
    citations: list[dict] = []
    with st.chat_message("assistant"):
        placeholder = st.empty()
        placeholder.caption("Thinking...")
        try:
            r = requests.post(f"{API_BASE}/api/ai", json=payload, timeout=180)
            data = r.json()
            if r.ok and data.get("success"):
                answer = data.get("response") or "No answer."
                citations = data.get("citations") or []
                placeholder.markdown(answer)
                meta = data.get("metadata") or {}
                st.caption(f"{meta.get('modelUsed', model)} · {meta.get('executionTime', '')}")
            else:
                answer = f"Error: {data.get('message') or data.get('error') or r.status_code}"
                placeholder.error(answer)
        except (requests.RequestException, ValueError) as e:
            answer = f"Connection failed: {e}"
            placeholder.error(answer)
        st.session_state.messages.append({"role": "assistant", "content": answer, "citations": citations})
    del st.session_state["pending_query"]
    st.rerun()

# New message from user: show it immediately, then rerun so "Thinking..." appears
if prompt := st.chat_input("Ask anything"):
    st.session_state.messages.append({"role": "user", "content": prompt})
    st.session_state.pending_query = prompt
    st.rerun()
