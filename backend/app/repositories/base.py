from sqlalchemy.orm import Session


class SqlRepository:
    """Shares one session per request; the owning service decides when to commit."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def flush(self) -> None:
        self.session.flush()

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    def refresh(self, instance) -> None:
        self.session.refresh(instance)
