"""Navbar view: login/logout controls reflecting the session."""

from dataclasses import dataclass

from anon_feedback.auth.schemas import SessionSnapshot

BRAND = "Anonymous Feedback"
LOGIN_PATH = "/sign-in"
LOGOUT_PATH = "/logout"


@dataclass(frozen=True)
class NavbarView:
    brand: str
    signed_in: bool
    greeting: str | None
    action_label: str
    action_href: str


def build_navbar(snapshot: SessionSnapshot) -> NavbarView:
    """Branch on session presence; the greeting prefers username over email."""
    if snapshot.session is not None:
        return NavbarView(
            brand=BRAND,
            signed_in=True,
            greeting=f"Welcome, {snapshot.session.user.display_name}",
            action_label="Logout",
            action_href=LOGOUT_PATH,
        )

    return NavbarView(
        brand=BRAND,
        signed_in=False,
        greeting=None,
        action_label="Login",
        action_href=LOGIN_PATH,
    )
