"""Main SessionManager class."""

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from subsentinel.db.init import init_db
from subsentinel.modules.recon.errors import PersistenceError

from .db_models import Scan
from .scan_mixin import ScanMixin
from .subdomain_mixin import SubdomainMixin


class SessionManager(ScanMixin, SubdomainMixin):
    """SQLite-backed scan store."""

    def __init__(self, db_path: Path):
        self.db_path = db_path
        init_db(self.db_path)
        self.engine = create_engine(f"sqlite:///{db_path}", echo=False)
        session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)
        self.session = session_factory()

    def close(self) -> None:
        self.session.close()
        self.engine.dispose()

    def _commit(self) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise PersistenceError(str(exc)) from exc

    def _require_scan(self, scan_id: int | str) -> Scan:
        scan = self.get_scan(scan_id)
        if scan is None:
            raise PersistenceError(f"Scan {scan_id} not found")
        return scan
