import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from ..database import get_db
from ..dependencies import get_task_service
from ..errors import ForbiddenError, NotFoundError
from ..models import User
from ..service import TaskService
from ..views import TaskListView
from .auth import (
    EmailTakenError,
    TOKEN_COOKIE,
    authenticate_user,
    create_access_token,
    get_optional_user,
    register_user,
    set_token_cookie,
)

logger = logging.getLogger(__name__)

router = APIRouter()

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[1] / "templates"))


def _render(request: Request, name: str, context: dict, status_code: int = 200):
    return templates.TemplateResponse(request, name, context, status_code=status_code)


def _login_redirect() -> RedirectResponse:
    return RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)


def _signed_in(user: User) -> RedirectResponse:
    response = RedirectResponse("/tasks", status_code=status.HTTP_303_SEE_OTHER)
    set_token_cookie(response, create_access_token(data={"sub": user.email}))
    return response


def _render_tasks(request: Request, user: User, view: TaskListView, status_code: int = 200):
    return _render(request, "tasks/index.html", {"user": user, **view.context()}, status_code)


def _render_task_error(request: Request, user: User, exc: Exception):
    if isinstance(exc, ForbiddenError):
        status_code, message = status.HTTP_403_FORBIDDEN, "Forbidden"
    else:
        status_code, message = status.HTTP_404_NOT_FOUND, "Task not found"
    return _render(request, "error.html", {"user": user, "message": message}, status_code)


@router.get("/")
def home(request: Request, current_user: Optional[User] = Depends(get_optional_user)):
    if current_user:
        return RedirectResponse("/tasks", status_code=status.HTTP_302_FOUND)
    return _render(request, "welcome.html", {"user": None})


@router.get("/login")
def login_form(request: Request):
    return _render(request, "login.html", {"user": None, "email": "", "error": None})


@router.post("/login")
def login(
    request: Request,
    email: str = Form(""),
    password: str = Form(""),
    db: Session = Depends(get_db),
):
    user = authenticate_user(db, email, password)
    if not user:
        logger.info("Failed sign-in for %s", email)
        return _render(
            request,
            "login.html",
            {"user": None, "email": email, "error": "Incorrect email or password"},
            status.HTTP_401_UNAUTHORIZED,
        )
    return _signed_in(user)


@router.get("/register")
def register_form(request: Request):
    return _render(request, "register.html", {"user": None, "name": "", "email": "", "error": None})


@router.post("/register")
def register(
    request: Request,
    name: str = Form(""),
    email: str = Form(""),
    password: str = Form(""),
    db: Session = Depends(get_db),
):
    error = None
    if not email.strip() or not password:
        error = "Email and password are required"
    else:
        try:
            user = register_user(db, email.strip(), password, name.strip())
        except EmailTakenError:
            error = "Email already registered"

    if error:
        return _render(
            request,
            "register.html",
            {"user": None, "name": name, "email": email, "error": error},
            status.HTTP_400_BAD_REQUEST,
        )
    return _signed_in(user)


@router.post("/logout")
def logout():
    response = RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(key=TOKEN_COOKIE)
    return response


@router.get("/tasks")
def tasks_index(
    request: Request,
    edit: Optional[int] = None,
    current_user: Optional[User] = Depends(get_optional_user),
    service: TaskService = Depends(get_task_service),
):
    if not current_user:
        return _login_redirect()

    view = TaskListView(service, current_user.id).load()
    if edit is not None:
        view.begin_edit(edit)
    return _render_tasks(request, current_user, view)


@router.post("/tasks")
def tasks_store(
    request: Request,
    description: str = Form(""),
    current_user: Optional[User] = Depends(get_optional_user),
    service: TaskService = Depends(get_task_service),
):
    if not current_user:
        return _login_redirect()

    view = TaskListView(service, current_user.id)
    if not view.submit_new_task(description):
        view.load()
        return _render_tasks(request, current_user, view, 422)
    return _render_tasks(request, current_user, view)


@router.post("/tasks/{task_id}")
def tasks_update(
    request: Request,
    task_id: int,
    description: str = Form(""),
    current_user: Optional[User] = Depends(get_optional_user),
    service: TaskService = Depends(get_task_service),
):
    if not current_user:
        return _login_redirect()

    view = TaskListView(service, current_user.id)
    try:
        saved = view.submit_edit(task_id, description)
    except (NotFoundError, ForbiddenError) as exc:
        return _render_task_error(request, current_user, exc)
    if not saved:
        view.load()
        return _render_tasks(request, current_user, view, 422)
    return _render_tasks(request, current_user, view)


@router.post("/tasks/{task_id}/toggle")
def tasks_toggle(
    request: Request,
    task_id: int,
    completed: bool = Form(...),
    current_user: Optional[User] = Depends(get_optional_user),
    service: TaskService = Depends(get_task_service),
):
    if not current_user:
        return _login_redirect()

    view = TaskListView(service, current_user.id)
    try:
        view.set_completed(task_id, completed)
    except (NotFoundError, ForbiddenError) as exc:
        return _render_task_error(request, current_user, exc)
    return _render_tasks(request, current_user, view)


@router.post("/tasks/{task_id}/delete")
def tasks_destroy(
    request: Request,
    task_id: int,
    current_user: Optional[User] = Depends(get_optional_user),
    service: TaskService = Depends(get_task_service),
):
    if not current_user:
        return _login_redirect()

    view = TaskListView(service, current_user.id)
    try:
        view.delete(task_id)
    except (NotFoundError, ForbiddenError) as exc:
        return _render_task_error(request, current_user, exc)
    return _render_tasks(request, current_user, view)
