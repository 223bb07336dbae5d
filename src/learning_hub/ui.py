"""
ui.py – Shared Streamlit plumbing for the app and its pages
===========================================================
Every Streamlit script reruns top-to-bottom on each interaction, so the
AuthManager is created once per browser session and kept in
st.session_state.  Restoring from the session store happens at that moment;
a SessionFormatError is kept in state so the page can show it and offer
to clear the stored record.

Also home to the small HTML helpers (cards, badges, progress bars) the
dashboards share, and the sidebar navigation.
"""

from __future__ import annotations

import html as _html
import logging
from typing import Optional

import streamlit as st

from learning_hub.analytics import clamp_progress, initials, progress_band
from learning_hub.auth import AuthManager, View, available_views, resolve_view
from learning_hub.config import Settings, configure_logging, get_settings
from learning_hub.mock_data import USERS
from learning_hub.session_store import SessionFormatError, SessionStore

logger = logging.getLogger(__name__)

# ─── Theme constants ──────────────────────────────────────────────────────────
CARD_BG = "#FFFFFF"
BLUE    = "#2563EB"
TEAL    = "#0D9488"
GREEN   = "#16A34A"
YELLOW  = "#CA8A04"
RED     = "#DC2626"
PURPLE  = "#7C3AED"
GREY    = "#6B7280"

BAND_COLOUR = {"green": GREEN, "blue": BLUE, "yellow": YELLOW, "red": RED}

VIEW_PAGES = {
    View.LEARNER: "streamlit_app.py",
    View.MANAGER: "pages/2_Manager_Dashboard.py",
    View.ADMIN:   "pages/1_Admin_Dashboard.py",
}


_PAGE_CSS = """
<style>
  [data-testid="stAppViewContainer"] { background: #F8FAFC; }
  [data-testid="stSidebarNav"]       { display: none; }
  h1, h2, h3, h4                     { color: #111827 !important; }
  .stButton > button                 { border-radius: 6px !important; font-weight: 600 !important; }
  [data-testid="stSidebar"] {
    background: linear-gradient(180deg, #1E3A8A 0%, #2563EB 100%) !important;
  }
  [data-testid="stSidebar"] .stMarkdown p,
  [data-testid="stSidebar"] .stMarkdown div,
  [data-testid="stSidebar"] a,
  [data-testid="stSidebar"] a:visited { color: rgba(255,255,255,0.9) !important; }
  [data-testid="stSidebar"] hr        { border-color: rgba(255,255,255,0.2) !important; }
</style>
"""


def apply_theme() -> None:
    # the built-in page list is hidden; render_sidebar shows only the role's pages
    st.markdown(_PAGE_CSS, unsafe_allow_html=True)


# ─── Session bootstrap ────────────────────────────────────────────────────────

def get_settings_cached() -> Settings:
    if "settings" not in st.session_state:
        settings = get_settings()
        configure_logging(settings)
        st.session_state["settings"] = settings
    return st.session_state["settings"]


def get_auth_manager() -> AuthManager:
    """Return this browser session's AuthManager, restoring once on first use."""
    if "auth" not in st.session_state:
        settings = get_settings_cached()
        store = SessionStore(settings.session.db_path, settings.session.session_key)
        auth = AuthManager(USERS, store)
        try:
            auth.restore()
        except SessionFormatError as exc:
            st.session_state["restore_error"] = str(exc)
        st.session_state["auth"] = auth
    return st.session_state["auth"]


def show_restore_error(auth: AuthManager) -> None:
    """Render the corrupt-session notice and stop the script while it is pending."""
    error = st.session_state.get("restore_error")
    if not error:
        return
    st.error(f"Your saved session could not be read: {error}")
    if st.button("Clear stored session and sign in again", type="primary"):
        auth.logout()
        st.session_state.pop("restore_error", None)
        st.rerun()
    st.stop()


def require_view(auth: AuthManager, view: View) -> None:
    """Send the browser elsewhere unless the signed-in role may open *view*."""
    allowed = resolve_view(auth.user, view)
    if allowed == view:
        return
    logger.info("View %s refused for %s; redirecting to %s",
                view.value, auth.user.username if auth.user else "anonymous", allowed.value)
    st.switch_page(VIEW_PAGES.get(allowed, "streamlit_app.py"))


def sign_out(auth: AuthManager) -> None:
    auth.logout()
    for key in list(st.session_state.keys()):
        if key not in ("auth", "settings"):
            del st.session_state[key]


def render_sidebar(auth: AuthManager, current: View) -> None:
    """User card, portal links for the role, and sign-out."""
    user = auth.user
    if user is None:
        return
    with st.sidebar:
        st.markdown(
            f"""
            <div style="display:flex;align-items:center;gap:10px;margin-bottom:8px;">
              {avatar(user.full_name, BLUE)}
              <div>
                <div style="font-weight:600;">{_html.escape(user.full_name)}</div>
                <div style="color:{GREY};font-size:0.78rem;">
                  {user.role.value.title()} · {_html.escape(user.department)}
                </div>
              </div>
            </div>
            """,
            unsafe_allow_html=True,
        )
        st.markdown("---")
        for view in available_views(user):
            marker = "▸ " if view == current else ""
            st.page_link(VIEW_PAGES[view], label=f"{marker}{view.label}")
        st.markdown("---")
        if st.button("Sign out", use_container_width=True):
            sign_out(auth)
            st.switch_page("streamlit_app.py")


# ─── HTML helpers ─────────────────────────────────────────────────────────────

def card(label: str, value: str, color: str = BLUE, caption: str = "") -> str:
    cap = f'<div style="color:{GREY};font-size:0.75rem;">{_html.escape(caption)}</div>' if caption else ""
    return f"""
    <div style="background:{CARD_BG};border-left:4px solid {color};border-radius:6px;
                padding:10px 16px;margin-bottom:8px;border:1px solid #E5E7EB;">
      <div style="color:{GREY};font-size:0.7rem;font-weight:600;text-transform:uppercase;
                  letter-spacing:.06em;margin-bottom:3px;">{_html.escape(label)}</div>
      <div style="color:#111827;font-size:1.2rem;font-weight:700;">{_html.escape(value)}</div>
      {cap}
    </div>"""


def badge(text: str, color: str) -> str:
    return (
        f'<span style="background:{color}15;color:{color};border:1px solid {color}40;'
        f'border-radius:12px;padding:1px 10px;font-size:0.78rem;font-weight:600;">'
        f'{_html.escape(text)}</span>'
    )


def avatar(full_name: str, color: str = TEAL) -> str:
    return (
        f'<div style="width:36px;height:36px;border-radius:50%;background:{color};color:#fff;'
        f'display:flex;align-items:center;justify-content:center;font-weight:700;'
        f'font-size:0.85rem;">{_html.escape(initials(full_name))}</div>'
    )


def progress_bar(progress: float, color: Optional[str] = None, show_pct: bool = True) -> str:
    """Horizontal bar; width clamped to 0–100, colour from the progress band by default."""
    width = clamp_progress(progress)
    fill = color or BAND_COLOUR[progress_band(progress)]
    pct = (
        f'<span style="min-width:3rem;text-align:right;font-size:0.8rem;color:{GREY};">'
        f'{round(progress)}%</span>'
    ) if show_pct else ""
    return (
        '<div style="display:flex;align-items:center;gap:10px;">'
        '<div style="flex:1;background:#E5E7EB;border-radius:999px;height:8px;overflow:hidden;">'
        f'<div style="width:{width}%;background:{fill};height:8px;border-radius:999px;"></div>'
        f'</div>{pct}</div>'
    )


def stage_strip(stages) -> str:
    """Numbered journey strip from analytics.learning_stages()."""
    colour = {"completed": GREEN, "current": BLUE, "pending": "#D1D5DB"}
    cells = []
    for idx, stage in enumerate(stages, start=1):
        cells.append(
            f'<div style="text-align:center;min-width:90px;">'
            f'<div style="margin:0 auto;width:30px;height:30px;border-radius:50%;'
            f'background:{colour[stage.status]};color:#fff;line-height:30px;font-weight:700;">{idx}</div>'
            f'<div style="font-size:0.75rem;color:{GREY};margin-top:4px;">{stage.title}</div></div>'
        )
    return '<div style="display:flex;gap:12px;align-items:flex-start;">' + "".join(cells) + "</div>"
