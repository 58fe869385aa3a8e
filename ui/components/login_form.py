from __future__ import annotations

import streamlit as st

from .base_component import BaseComponent
from ui.services import AuthService


class LoginForm(BaseComponent):
    """Username/password form shown until the session is authenticated."""

    def __init__(self, state, auth_service: AuthService) -> None:
        super().__init__(state)
        self.auth_service = auth_service

    def render(self) -> None:
        st.header("Sign in")
        st.caption("Use your CRM account to continue.")
        with st.form("login_form"):
            username = st.text_input("Username")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("Sign in", type="primary")
        if submitted:
            ok, msg = self.auth_service.login(username, password)
            if ok:
                self.state.reset()
                self.state.notify(msg, "success")
                st.rerun()
            else:
                st.error(msg)


def render_login_form(state, auth_service: AuthService) -> None:
    LoginForm(state, auth_service).render()
