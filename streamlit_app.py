"""Streamlit web application for searching transcripts and picking clips."""

import streamlit as st
import sys
from pathlib import Path
import json
import html

# Add the project root to the path so we can import txt2clip modules
try:
    project_root = Path(__file__).parent.resolve()
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))
except Exception:
    # If path setup fails, continue anyway
    pass

from txt2clip.config import Config
from txt2clip.library import list_transcripts, load_transcripts
from txt2clip.models import Block, HiddenRun
from txt2clip.session import TranscriptSession
from txt2clip.writers.json_writer import clip_to_dict
from txt2clip.writers.srt_writer import format_clip_srt
from txt2clip.writers.txt_writer import format_hidden_run


# Page configuration
st.set_page_config(
    page_title="Transcript Search & Clip",
    page_icon="✂️",
    layout="wide",
    initial_sidebar_state="expanded"
)


def load_streamlit_secrets():
    """Load secrets from Streamlit Cloud into Config."""
    try:
        if not hasattr(st, 'secrets'):
            return
        if not st.secrets:
            return
        if 'WATCH_DIRECTORIES' in st.secrets:
            Config.set_watch_directories(st.secrets['WATCH_DIRECTORIES'])
        if 'OUT_DIR' in st.secrets:
            Config.OUT_DIR = Path(st.secrets['OUT_DIR']).resolve()
        if 'MIN_QUERY_LENGTH' in st.secrets:
            Config.MIN_QUERY_LENGTH = int(st.secrets['MIN_QUERY_LENGTH'])
    except (AttributeError, TypeError, KeyError, ValueError, FileNotFoundError):
        # Fall back to .env values
        pass

load_streamlit_secrets()

st.markdown("""
    <style>
    .main-header {
        font-size: 2.2rem;
        font-weight: bold;
        text-align: center;
        margin-bottom: 1.5rem;
    }
    .block-time {
        font-family: monospace;
        color: #555555;
        font-size: 0.85em;
    }
    .block-text {
        font-family: monospace;
        white-space: pre-wrap;
    }
    .in-clip {
        border-left: 4px solid #2563eb;
        padding-left: 0.5rem;
        background-color: rgba(37, 99, 235, 0.08);
    }
    </style>
""", unsafe_allow_html=True)

# Initialize session state
if 'session' not in st.session_state:
    st.session_state.session = None
if 'last_query' not in st.session_state:
    st.session_state.last_query = ""
if 'last_restrict' not in st.session_state:
    st.session_state.last_restrict = ""


def load_session() -> TranscriptSession:
    """Scan the watch directories and build a fresh session, keeping the clip."""
    previous = st.session_state.session
    clip = previous.clip if previous is not None else None
    with st.spinner("Scanning watch directories..."):
        records = list_transcripts()
        texts = load_transcripts(records)
    session = TranscriptSession(texts, clip=clip)
    st.session_state.session = session
    st.session_state.last_query = ""
    st.session_state.last_restrict = ""
    return session


def render_block(session: TranscriptSession, name: str, block: Block, key: str) -> None:
    """One transcript block with its clip actions."""
    highlighted = session.clip.highlight(block, name).highlighted
    css_class = "block-text in-clip" if highlighted else "block-text"

    text_col, actions_col = st.columns([5, 2])
    with text_col:
        if block.is_timed:
            st.markdown(
                f'<div class="block-time">{block.first_line} · {block.start_time} --> {block.end_time}</div>',
                unsafe_allow_html=True
            )
        st.markdown(f'<div class="{css_class}">{block.last_line} · {html.escape(block.text)}</div>', unsafe_allow_html=True)

    if not block.is_timed:
        return

    # Same rules as the clip menu: no zero-length or inverted ranges
    same_owner = session.clip.owner == name
    with actions_col:
        start_col, end_col, clip_col = st.columns(3)
        if start_col.button("Start", key=f"start_{key}",
                            disabled=same_owner and not session.clip.can_set_start(block.start_time)):
            session.set_start(name, block.start_time)
            st.rerun()
        if end_col.button("End", key=f"end_{key}",
                          disabled=same_owner and not session.clip.can_set_end(block.end_time)):
            session.set_end(name, block.end_time)
            st.rerun()
        if clip_col.button("Clip", key=f"clip_{key}"):
            session.clip_block(name, block)
            st.rerun()


def render_transcript(session: TranscriptSession, name: str) -> None:
    items = session.view(name)
    if items is None:
        st.caption(f'No matches found for "{session.query}" in this transcript.')
        return

    if session.window(name) is not None:
        if st.button("Show whole transcript", key=f"all_{name}"):
            session.expand_all(name)
            st.rerun()

    for index, item in enumerate(items):
        key = f"{name}_{index}"
        if isinstance(item, HiddenRun):
            if st.button(format_hidden_run(item), key=f"more_{key}"):
                session.expand_run(name, item)
                st.rerun()
        else:
            render_block(session, name, item.block, key)


def render_clip_sidebar(session: TranscriptSession) -> None:
    clip = session.clip
    st.subheader("✂️ Clip")
    if clip.owner is None:
        st.info("No clip selected. Use Start / End on a block.")
        return

    st.caption(f"**Transcript:** {clip.owner}")
    st.write(f"Start: `{clip.start or '-'}`")
    st.write(f"End: `{clip.end or '-'}`")
    if clip.label:
        st.caption(clip.label)

    if clip.is_complete:
        st.success(f"✓ Clip ready ({(clip.end.millis - clip.start.millis) / 1000:.1f}s)")
        blocks = session.blocks(clip.owner)
        st.download_button(
            "📥 Download JSON",
            data=json.dumps(clip_to_dict(clip, blocks), indent=2, ensure_ascii=False),
            file_name="clip.json",
            mime="application/json",
            use_container_width=True
        )
        st.download_button(
            "📥 Download SRT",
            data=format_clip_srt(clip, blocks),
            file_name="clip.srt",
            mime="text/plain",
            use_container_width=True
        )
    else:
        st.warning("⚠ Set both a start and an end to finish the clip")

    if st.button("Clear clip", use_container_width=True):
        session.clear_clip()
        st.rerun()


def main():
    """Main Streamlit application."""
    st.markdown('<div class="main-header">✂️ Transcript Search & Clip</div>', unsafe_allow_html=True)

    try:
        Config.validate()
    except ValueError as e:
        st.error(f"✗ Configuration Error: {str(e)}")
        st.info("Set WATCH_DIRECTORIES in your .env file or Streamlit secrets.")
        return

    session = st.session_state.session or load_session()

    with st.sidebar:
        st.header("⚙️ Library")
        st.success(f"✓ {len(session.texts)} transcripts loaded")
        if st.button("🔄 Rescan", use_container_width=True):
            session = load_session()
        st.divider()
        render_clip_sidebar(session)

    query = st.text_input("Search transcripts", value=st.session_state.last_query,
                          placeholder=f"Type at least {Config.MIN_QUERY_LENGTH} characters")
    restrict = st.text_input("Only files containing (comma-separated)", value="")

    if query != st.session_state.last_query or restrict != st.session_state.last_restrict:
        st.session_state.last_query = query
        st.session_state.last_restrict = restrict
        if not query.strip():
            session.search(None)
        elif len(query.strip()) >= Config.MIN_QUERY_LENGTH:
            session.search(query, restrict=restrict.split(","))

    names = session.visible_transcripts()
    if session.query:
        st.caption(f'{len(names)} transcripts match "{session.query}"')
    if not names:
        st.info("Nothing to show")
        return

    for name in names:
        # Keep transcripts with matches open so the results are visible
        with st.expander(name, expanded=session.query is not None or session.clip.owner == name):
            render_transcript(session, name)


if __name__ == "__main__":
    main()
