# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import Depends, FastAPI, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from devauth.auth.gate import LOGIN_URL, logout
from devauth.auth.session import Session, cookie_session_store
from devauth.auth.users import UserDirectory
from devauth.infra.directory_factory import get_user_directory
from devauth.permissions import current_session_optional, require_session
from devauth.services.login import login_user
from devauth.services.registration import REDIRECT_DELAY_MS, register_user

logger = logging.getLogger(__name__)

HOME_URL = "/home"

app = FastAPI()

BASE_DIR = Path(__file__).resolve().parent
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))


def user_directory() -> UserDirectory:
    """Dependency hook; tests override it with an in-memory directory."""
    return get_user_directory()


def _render(request: Request, template_name: str, ctx: dict):
    base_ctx = {"current_session": getattr(request.state, "session", None)}
    return templates.TemplateResponse(request, template_name, {**base_ctx, **(ctx or {})})


# ------------------ Routes ------------------


@app.get("/")
def root():
    return RedirectResponse(url=LOGIN_URL, status_code=303)


@app.get("/login", response_class=HTMLResponse)
def login_get(request: Request):
    if current_session_optional(request):
        return RedirectResponse(url=HOME_URL, status_code=303)
    return _render(request, "login.html", {"email": "", "error": ""})


@app.post("/login")
async def login_post(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    directory: UserDirectory = Depends(user_directory),
):
    resp = RedirectResponse(url=HOME_URL, status_code=303)
    result = await login_user(directory, cookie_session_store(request, resp), email=email, password=password)
    if not result.ok:
        return _render(request, "login.html", {"email": email, "error": result.message})
    return resp


@app.get("/register", response_class=HTMLResponse)
def register_get(request: Request):
    return _render(request, "register.html", {"full_name": "", "email": "", "error": "", "ok": ""})


@app.post("/register", response_class=HTMLResponse)
async def register_post(
    request: Request,
    full_name: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
    confirm_password: str = Form(""),
    directory: UserDirectory = Depends(user_directory),
):
    result = await register_user(
        directory,
        full_name=full_name,
        email=email,
        password=password,
        confirm_password=confirm_password,
    )
    if not result.ok:
        return _render(
            request,
            "register.html",
            {"full_name": full_name, "email": email, "error": result.message, "ok": ""},
        )
    return _render(
        request,
        "register.html",
        {
            "full_name": "",
            "email": "",
            "error": "",
            "ok": "Account created, Redirecting to login…",
            "redirect_to": LOGIN_URL,
            "redirect_delay": REDIRECT_DELAY_MS / 1000,
        },
    )


@app.get(HOME_URL, response_class=HTMLResponse)
def home(request: Request, session: Session = Depends(require_session)):
    request.state.session = session
    return _render(request, "home.html", {"session": session})


@app.post("/logout")
def logout_post(request: Request):
    resp = RedirectResponse(url=LOGIN_URL, status_code=303)
    logout(cookie_session_store(request, resp))
    return resp
