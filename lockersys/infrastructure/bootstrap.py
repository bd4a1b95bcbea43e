from __future__ import annotations

import logging
from decimal import Decimal
from pathlib import Path
from typing import Any

import yaml
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from lockersys.core.entities.client import ClientStatus
from lockersys.core.entities.locker import LockerSize, LockerStatus
from lockersys.core.entities.user import User
from lockersys.core.use_cases.common import new_id
from lockersys.infrastructure.config import Settings
from lockersys.infrastructure.database import Database
from lockersys.infrastructure.models.models import ClientModel, LocationModel, LockerModel
from lockersys.infrastructure.repositories.user_repository_impl import UserRepositoryImpl
from lockersys.infrastructure.security import BcryptPasswordHasher
from lockersys.infrastructure.unit_of_work import SqlAlchemyUnitOfWork

logger = logging.getLogger(__name__)


def ensure_admin(db: Session, settings: Settings) -> bool:
    """
    Create the default admin user if it does not exist yet.
    Returns True when a user was created.
    """
    users = UserRepositoryImpl(db)
    email = settings.admin_email.strip().lower()
    if users.get_by_email(email) is not None:
        return False

    with SqlAlchemyUnitOfWork(db):
        users.add(
            User(
                id=new_id(),
                name=settings.admin_name,
                email=email,
                password_hash=BcryptPasswordHasher().hash(settings.admin_password),
            )
        )
    logger.info("Default admin user created: %s", email)
    return True


def load_seed_file(path: Path) -> dict[str, list[dict[str, Any]]]:
    with path.open("r", encoding="utf-8") as f:
        doc = yaml.safe_load(f) or {}
    if not isinstance(doc, dict):
        raise ValueError(f"Seed file {path} must contain a mapping")
    return doc


def seed_sample_data(db: Session, path: Path) -> dict[str, int]:
    """
    Insert the sample clients, lockers and locations from `path` into tables that are still empty.
    """
    doc = load_seed_file(path)
    added = {"clients": 0, "lockers": 0, "locations": 0}

    with SqlAlchemyUnitOfWork(db):
        if not db.scalar(select(func.count(ClientModel.id))):
            for record in doc.get("clients") or []:
                db.add(
                    ClientModel(
                        id=new_id(),
                        name=record["name"],
                        email=record["email"].lower(),
                        phone=record.get("phone"),
                        document=record["document"],
                        address=record.get("address"),
                        status=ClientStatus(record.get("status", "active")),
                    )
                )
                added["clients"] += 1

        if not db.scalar(select(func.count(LockerModel.id))):
            for record in doc.get("lockers") or []:
                db.add(
                    LockerModel(
                        id=new_id(),
                        number=str(record["number"]),
                        location=record["location"],
                        size=LockerSize(record["size"]),
                        status=LockerStatus(record.get("status", "available")),
                        monthly_price=Decimal(str(record["monthly_price"])),
                    )
                )
                added["lockers"] += 1

        if not db.scalar(select(func.count(LocationModel.id))):
            for record in doc.get("locations") or []:
                db.add(LocationModel(id=new_id(), name=record["name"], description=record.get("description")))
                added["locations"] += 1

    logger.info("Sample data added: %(clients)d clients, %(lockers)d lockers, %(locations)d locations", added)
    return added


def initialize_database(database: Database, settings: Settings) -> None:
    """
    Startup bootstrap: check connectivity, create tables, ensure the admin
    user and optionally seed sample data. Any failure propagates so the
    process does not start against a broken store.
    """
    database.ping()
    logger.info("Database connected: %s", database.engine.url.render_as_string(hide_password=True))

    database.create_schema()

    db = database.session_factory()
    try:
        ensure_admin(db, settings)
        if settings.seed_sample_data:
            seed_sample_data(db, settings.seed_data_path)
    finally:
        db.close()
