"""
Bootstrap script for creating a realm and its resource client in the role store.

Idempotent: skips if resources already exist.
Run via: python -m remotefed.cli.bootstrap

Reads configuration from environment variables:
  REMOTEFED_BOOTSTRAP_REALM      - Realm name (required)
  REMOTEFED_BOOTSTRAP_CLIENT_ID  - Resource client id (optional; created if set)
  REMOTEFED_BOOTSTRAP_ROLES      - Comma-separated realm roles to pre-create (optional)
  DATABASE_URL                   - SQLAlchemy URL (falls back to REMOTEFED_DATABASE_URL)
"""

import logging
import os
import sys

from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session

from remotefed.config import settings
from remotefed.db.models import Base
from remotefed.db.store import SqlRoleStore

# Use stdlib logging — structlog isn't configured yet during bootstrap
logger = logging.getLogger("remotefed.bootstrap")


def bootstrap() -> None:
    realm_name = os.environ.get("REMOTEFED_BOOTSTRAP_REALM", "").strip()
    client_id = os.environ.get("REMOTEFED_BOOTSTRAP_CLIENT_ID", "").strip()
    role_names = [
        r.strip() for r in os.environ.get("REMOTEFED_BOOTSTRAP_ROLES", "").split(",") if r.strip()
    ]
    database_url = os.environ.get("DATABASE_URL", "").strip() or settings.database_url

    if not realm_name:
        logger.error("REMOTEFED_BOOTSTRAP_REALM is required")
        sys.exit(1)

    engine = create_engine(database_url, echo=False)

    with engine.begin() as conn:
        # Verify connection
        conn.execute(text("SELECT 1"))
        logger.info("Connected to database")
        Base.metadata.create_all(conn)

    with Session(engine, expire_on_commit=False) as session:
        with session.begin():
            store = SqlRoleStore(session)

            realm = store.find_realm(realm_name)
            if realm:
                logger.info("Realm %s already exists, skipping realm creation", realm_name)
            else:
                realm = store.create_realm(realm_name)
                logger.info("Created realm: %s", realm_name)

            if client_id:
                if realm.get_client_by_client_id(client_id):
                    logger.info("Client %s already exists, skipping", client_id)
                else:
                    realm.add_client(client_id)
                    logger.info("Created client: %s (realm: %s)", client_id, realm_name)

            for role_name in role_names:
                if realm.get_role(role_name):
                    logger.info("Realm role %s already exists, skipping", role_name)
                else:
                    realm.add_role(role_name)
                    logger.info("Created realm role: %s", role_name)

    engine.dispose()
    logger.info("Bootstrap complete")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    bootstrap()


if __name__ == "__main__":
    main()
