# db.py

#============================================================#
#                         Pulseboard                         #
#============================================================#
# Version     : V1.0.0                                       #
#------------------------------------------------------------#
# Purpose     : Team task dashboard: tasks, members,         #
#               departments and KPIs (SQLite/Postgres        #
#               powered, Supabase-compatible)                #
#============================================================#

from __future__ import annotations

import logging
import uuid
from contextlib import contextmanager
from datetime import date, datetime
from pathlib import Path
from typing import Dict, List, Optional

from sqlalchemy import (
    JSON, Column, Date, DateTime, Float, ForeignKey, Integer, String, create_engine
)
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker

from config import get_setting
from models import Department, Priority, Status, Task, TeamMember
from models.team_member import default_avatar
from utils.dates import parse_date, parse_datetime

logger = logging.getLogger(__name__)


class DataProviderError(Exception):
    """Raised when the backing store cannot serve or persist a record."""


class RecordNotFound(DataProviderError):
    pass


# ---- Engine / Session ----
DATABASE_URL = get_setting("DATABASE_URL")

engine = create_engine(DATABASE_URL, pool_pre_ping=True)
SessionLocal = sessionmaker(autoflush=False, bind=engine, expire_on_commit=False)
Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"
    id = Column(Integer, primary_key=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class DepartmentRow(Base):
    __tablename__ = "departments"
    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    name = Column(String, nullable=False)
    color = Column(String, nullable=False)


class MemberRow(Base):
    __tablename__ = "team_members"
    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    role = Column(String, nullable=False)
    avatar = Column(String, nullable=True)


class TaskRow(Base):
    __tablename__ = "tasks"
    id = Column(String(36), primary_key=True, default=_new_id)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    project_id = Column(String, nullable=False, default="")
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    # No FK on these two: deleting a member/department leaves the task in place.
    assigned_to = Column(String(36), nullable=True)
    department_id = Column(String(36), nullable=True)
    priority = Column(String, nullable=False, default=Priority.MEDIUM.value)
    status = Column(String, nullable=False, default=Status.PENDING.value)
    estimated_hours = Column(Float, nullable=False, default=0.0)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    completed_date = Column(Date, nullable=True)
    custom_fields = Column(JSON, nullable=True)
    image_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


def init_db():
    Base.metadata.create_all(engine)


def configure(url: str) -> None:
    """Point the module at another database (tests, migrations)."""
    global DATABASE_URL, engine, SessionLocal
    engine.dispose()
    DATABASE_URL = url
    engine = create_engine(url, pool_pre_ping=True)
    SessionLocal = sessionmaker(autoflush=False, bind=engine, expire_on_commit=False)


@contextmanager
def _session(action: str):
    with SessionLocal() as s:
        try:
            yield s
        except SQLAlchemyError as e:
            s.rollback()
            logger.exception("Database error while trying to %s", action)
            raise DataProviderError(f"Could not {action}") from e


# ---- row -> record ----
def _to_task(r: TaskRow) -> Task:
    return Task(
        id=r.id,
        project_id=r.project_id or "",
        title=r.title,
        description=r.description,
        assigned_to=r.assigned_to,
        department_id=r.department_id,
        created_by=str(r.user_id) if r.user_id is not None else None,
        priority=Priority.parse(r.priority),
        status=Status.parse(r.status),
        estimated_hours=float(r.estimated_hours or 0),
        start_date=parse_date(r.start_date),
        end_date=parse_date(r.end_date),
        completed_date=parse_date(r.completed_date),
        image_url=r.image_url,
        custom_fields=dict(r.custom_fields or {}),
        created_at=parse_datetime(r.created_at),
        updated_at=parse_datetime(r.updated_at),
    )


def _to_member(r: MemberRow) -> TeamMember:
    return TeamMember(id=r.id, name=r.name, email=r.email, role=r.role, avatar=r.avatar)


def _to_department(r: DepartmentRow) -> Department:
    return Department(id=r.id, name=r.name, color=r.color)


# ---- users ----
def _get_or_create_user(session, email: str, name: Optional[str] = None) -> User:
    user = session.query(User).filter(User.email == email.strip().lower()).one_or_none()
    if not user:
        user = User(email=email.strip().lower(), name=name)
        session.add(user)
        session.commit()
    return user


def login(email: str, name: Optional[str] = None) -> Dict:
    with _session("sign in") as s:
        user = _get_or_create_user(s, email, name)
        return {"id": user.id, "email": user.email, "name": user.name}


# ---- tasks ----
_TASK_FIELDS = (
    "project_id", "title", "description", "assigned_to", "department_id",
    "priority", "status", "estimated_hours", "start_date", "end_date",
    "completed_date", "custom_fields", "image_url",
)


def _validate_task_fields(fields: Dict) -> Dict:
    clean = {}
    for key, value in fields.items():
        if key not in _TASK_FIELDS:
            raise ValueError(f"Unknown task field: {key}")
        if key == "title":
            if not value or not str(value).strip():
                raise ValueError("Task title is required")
            value = str(value).strip()
        elif key == "estimated_hours":
            value = float(value or 0)
            if value < 0:
                raise ValueError("Estimated hours cannot be negative")
        elif key == "priority":
            value = Priority.parse(value).value
        elif key == "status":
            value = Status.parse(value).value
        elif key == "project_id":
            value = str(value or "").strip()
        elif key in ("start_date", "end_date", "completed_date"):
            value = parse_date(value)
        elif key in ("assigned_to", "department_id", "description", "image_url"):
            value = value or None
        clean[key] = value
    return clean


def _keep_completed_date(t: TaskRow, explicit: bool) -> None:
    """completed_date exists only while the task is Completed."""
    if t.status == Status.COMPLETED.value:
        if t.completed_date is None and not explicit:
            t.completed_date = date.today()
    else:
        t.completed_date = None


def list_tasks(owner_id: int) -> List[Task]:
    """Newest first, as plain records to avoid detached lazy loads."""
    with _session("load tasks") as s:
        rows = (
            s.query(TaskRow)
            .filter(TaskRow.user_id == owner_id)
            .order_by(TaskRow.created_at.desc())
            .all()
        )
        return [_to_task(r) for r in rows]


def create_task(owner_id: int, title: str, **fields) -> Task:
    fields.setdefault("status", Status.PENDING)
    values = _validate_task_fields({"title": title, **fields})
    with _session("save task") as s:
        values["custom_fields"] = dict(values.get("custom_fields") or {})
        t = TaskRow(user_id=owner_id, **values)
        _keep_completed_date(t, explicit="completed_date" in values)
        s.add(t)
        s.commit()
        logger.info("Task %s created: %s", t.id, t.title)
        return _to_task(t)


def update_task(task_id: str, **changes) -> Task:
    values = _validate_task_fields(changes)
    with _session("update task") as s:
        t = s.get(TaskRow, task_id)
        if not t:
            raise RecordNotFound(f"Task {task_id} not found")
        for key, value in values.items():
            setattr(t, key, value)
        _keep_completed_date(t, explicit="completed_date" in values)
        t.updated_at = datetime.utcnow()
        s.commit()
        logger.info("Task %s updated (%s)", t.id, ", ".join(sorted(values)) or "no changes")
        return _to_task(t)


def delete_task(task_id: str) -> bool:
    with _session("delete task") as s:
        t = s.get(TaskRow, task_id)
        if not t:
            return False
        s.delete(t)
        s.commit()
        logger.info("Task %s deleted", task_id)
        return True


def save_task_image(owner_id: int, filename: str, data: bytes) -> str:
    """Store an attachment under the upload dir and return its reference."""
    ext = Path(filename).suffix.lower() or ".bin"
    target = Path(get_setting("PULSEBOARD_UPLOAD_DIR")) / "task-images" / str(owner_id) / f"{uuid.uuid4().hex}{ext}"
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)
    except OSError as e:
        logger.exception("Could not store attachment %s", filename)
        raise DataProviderError(f"Could not store {filename}") from e
    logger.info("Stored attachment %s (%d bytes)", target, len(data))
    return target.as_posix()


# ---- members ----
def list_members(owner_id: int) -> List[TeamMember]:
    with _session("load members") as s:
        rows = (
            s.query(MemberRow)
            .filter(MemberRow.user_id == owner_id)
            .order_by(MemberRow.name)
            .all()
        )
        return [_to_member(r) for r in rows]


def create_member(owner_id: int, name: str, email: str, role: str,
                  avatar: Optional[str] = None) -> TeamMember:
    if not name or not name.strip():
        raise ValueError("Member name is required")
    with _session("save member") as s:
        m = MemberRow(user_id=owner_id, name=name.strip(), email=(email or "").strip().lower(),
                      role=(role or "").strip(), avatar=avatar or default_avatar(name.strip()))
        s.add(m)
        s.commit()
        logger.info("Member %s added: %s", m.id, m.name)
        return _to_member(m)


def delete_member(member_id: str) -> bool:
    with _session("delete member") as s:
        m = s.get(MemberRow, member_id)
        if not m:
            return False
        s.delete(m)
        s.commit()
        logger.info("Member %s removed", member_id)
        return True


# ---- departments ----
def list_departments(owner_id: int) -> List[Department]:
    with _session("load departments") as s:
        rows = (
            s.query(DepartmentRow)
            .filter(DepartmentRow.user_id == owner_id)
            .order_by(DepartmentRow.name)
            .all()
        )
        return [_to_department(r) for r in rows]


def create_department(owner_id: int, name: str, color: str) -> Department:
    if not name or not name.strip():
        raise ValueError("Department name is required")
    with _session("save department") as s:
        d = DepartmentRow(user_id=owner_id, name=name.strip(), color=color)
        s.add(d)
        s.commit()
        logger.info("Department %s created: %s", d.id, d.name)
        return _to_department(d)


def delete_department(department_id: str) -> bool:
    with _session("delete department") as s:
        d = s.get(DepartmentRow, department_id)
        if not d:
            return False
        s.delete(d)
        s.commit()
        logger.info("Department %s removed", department_id)
        return True
