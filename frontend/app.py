import datetime
import time
from concurrent.futures import ThreadPoolExecutor

import streamlit as st
from PIL import UnidentifiedImageError

from config.settings import settings
from frontend.backend_client import call_generate
from frontend.session import HeadshotSession, Phase, StatusTicker

ACCEPTED_TYPES = ["png", "jpg", "jpeg", "webp"]
POLL_INTERVAL = 0.25  # seconds between loading-message redraws


# ==========================
# Config
# ==========================
st.set_page_config(
    page_title="AI Headshot Generator",
    page_icon="📸",
    layout="centered",
)

st.title("AI Headshot Generator")
st.caption(
    "Transform any photo into a stunning, professional headshot. "
    "Upload an image and let our AI do the rest."
)

# ==========================
# State
# ==========================
def new_session() -> HeadshotSession:
    return HeadshotSession(ticker=StatusTicker(interval=settings.STATUS_INTERVAL))


if "session" not in st.session_state:
    st.session_state["session"] = new_session()
if "widget_epoch" not in st.session_state:
    # bumped to reset the uploader / text area widgets
    st.session_state["widget_epoch"] = 0

session: HeadshotSession = st.session_state["session"]


def reset_widgets() -> None:
    st.session_state["widget_epoch"] += 1


def on_clear_image() -> None:
    session.clear_image()
    reset_widgets()


def on_start_over() -> None:
    # Streamlit has no session-end hook; a discarded session is torn down here
    session.start_over()
    session.close()
    st.session_state["session"] = new_session()
    reset_widgets()


def sync_upload(uploaded) -> None:
    """Forward uploader changes (pick, drop, remove) into the session."""
    current = session.source
    if uploaded is None:
        if current is not None and session.phase in (Phase.IMAGE_SELECTED, Phase.FAILED):
            session.clear_image()
        return
    if current is not None and current.file_id == uploaded.file_id:
        return
    session.select_image(
        uploaded.getvalue(),
        uploaded.type,
        name=uploaded.name,
        file_id=uploaded.file_id,
    )


def render_loading(placeholder, message: str) -> None:
    with placeholder.container():
        st.subheader(message)
        st.write("Please wait, this can take a minute.")


@st.cache_resource
def get_executor() -> ThreadPoolExecutor:
    return ThreadPoolExecutor(max_workers=4, thread_name_prefix="headshot")


def start_generation() -> None:
    # the future outlives script reruns so an interrupted run can resume waiting
    st.session_state["generation"] = get_executor().submit(session.generate, call_generate)


def wait_for_generation(placeholder) -> None:
    """Redraw the rotating loading message until the worker finishes."""
    future = st.session_state["generation"]
    while not future.done():
        render_loading(placeholder, session.status_message)
        time.sleep(POLL_INTERVAL)
    del st.session_state["generation"]
    placeholder.empty()
    future.result()


def render_result() -> None:
    st.subheader("Your Headshot is Ready!")
    data, mime_type = session.download()
    st.image(data, caption="Generated headshot", width="stretch")

    col1, col2 = st.columns(2)
    with col1:
        st.download_button(
            "⬇️ Download",
            data=data,
            file_name=settings.DOWNLOAD_FILENAME,
            mime=mime_type,
            width="stretch",
        )
    with col2:
        st.button("🔄 Start Over", on_click=on_start_over, width="stretch")


def render_preview(source) -> None:
    # any image/* upload is accepted, decodable or not
    try:
        st.image(source.preview, caption="Source photo", width="stretch")
    except (UnidentifiedImageError, OSError) as e:
        print(f"[Frontend] No preview for {source.name!r}: {e}")
        st.warning(f"Preview not available for {source.name}.")


def render_form() -> bool:
    epoch = st.session_state["widget_epoch"]

    uploaded = st.file_uploader(
        "Drag & drop an image or click to upload",
        type=ACCEPTED_TYPES,
        help="PNG, JPG, or WEBP",
        key=f"upload_{epoch}",
    )
    sync_upload(uploaded)

    if session.source is not None:
        col1, col2, col3 = st.columns([1, 2, 1])
        with col2:
            render_preview(session.source)
            st.button("✖ Remove image", on_click=on_clear_image, width="stretch")

    instructions = st.text_area(
        "Optional instructions",
        value=session.instructions,
        placeholder="e.g., Wear a black suit, change background to a blurred office...",
        height=100,
        key=f"instructions_{epoch}",
    )
    session.set_instructions(instructions)

    if session.error:
        st.error(session.error)

    return st.button(
        "Generate Headshot",
        type="primary",
        disabled=not session.can_generate,
        width="stretch",
    )


# ==========================
# Page
# ==========================
body = st.empty()

if "generation" in st.session_state:
    wait_for_generation(body)
    st.rerun()
elif session.phase is Phase.SUCCEEDED:
    with body.container():
        render_result()
else:
    with body.container():
        clicked = render_form()
    if clicked:
        start_generation()
        st.rerun()

st.markdown("---")
st.caption(f"Powered by Gemini. © {datetime.date.today().year}")
