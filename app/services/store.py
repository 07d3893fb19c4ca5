"""
Document Store
Generic persistence for jobs, clients, users and notifications.

Records go in and come out as plain dicts (documents). Relationship fields
hold related ids; ``depth=1`` replaces them with the related documents.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Type

from sqlalchemy import Engine
from sqlmodel import Session, SQLModel, select

from app.errors import NotFoundError
from app.models import Client, Job, Notification, User, utcnow
from app.util.ids import new_id

logger = logging.getLogger(__name__)

Document = Dict[str, Any]

COLLECTIONS: Dict[str, Type[SQLModel]] = {
    "jobs": Job,
    "clients": Client,
    "users": User,
    "notifications": Notification,
}

ID_PREFIXES: Dict[str, str] = {
    "jobs": "job_",
    "clients": "cli_",
    "users": "usr_",
    "notifications": "ntf_",
}

# collection -> {field: related collection}
RELATIONS: Dict[str, Dict[str, str]] = {
    "jobs": {"client": "clients", "tech": "users"},
    "notifications": {"user": "users", "related_job": "jobs"},
}

READ_ONLY_FIELDS = ("id", "created_at", "updated_at")


class DocumentStore:
    """find / find_by_id / create / update over SQLModel tables"""

    def __init__(self, engine: Engine):
        self.engine = engine

    def create_schema(self):
        """Create all database tables"""
        SQLModel.metadata.create_all(self.engine)

    # ------------------------------------------------------------------
    def _model(self, collection: str) -> Type[SQLModel]:
        try:
            return COLLECTIONS[collection]
        except KeyError:
            raise ValueError(f"Unknown collection: {collection}") from None

    def _check_fields(self, model: Type[SQLModel], data: Mapping[str, Any]) -> None:
        unknown = [key for key in data if key not in model.model_fields]
        if unknown:
            raise ValueError(f"Unknown fields for {model.__tablename__}: {', '.join(sorted(unknown))}")

    def _expand(self, session: Session, collection: str, doc: Document) -> Document:
        for field, related in RELATIONS.get(collection, {}).items():
            related_id = doc.get(field)
            if related_id is None:
                continue
            record = session.get(self._model(related), related_id)
            doc[field] = record.model_dump() if record else related_id
        return doc

    def _to_doc(self, session: Session, collection: str, record: SQLModel, depth: int) -> Document:
        doc = record.model_dump()
        if depth > 0:
            doc = self._expand(session, collection, doc)
        return doc

    # ------------------------------------------------------------------
    def find(
        self,
        collection: str,
        where: Optional[Mapping[str, Any]] = None,
        depth: int = 0,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Document]:
        """
        Find documents matching ``where``.

        Each ``where`` entry is an equality test, or a membership test when the
        value is a list, tuple or set.
        """
        model = self._model(collection)
        where = where or {}
        self._check_fields(model, where)

        statement = select(model)
        for field, value in where.items():
            column = getattr(model, field)
            if isinstance(value, (list, tuple, set, frozenset)):
                statement = statement.where(column.in_(list(value)))
            elif value is None:
                statement = statement.where(column.is_(None))
            else:
                statement = statement.where(column == value)
        if order_by:
            column = getattr(model, order_by)
            statement = statement.order_by(column.desc() if descending else column)
        if limit is not None:
            statement = statement.limit(limit)

        with Session(self.engine) as session:
            records = session.exec(statement).all()
            return [self._to_doc(session, collection, r, depth) for r in records]

    def find_by_id(self, collection: str, id: str, depth: int = 0) -> Optional[Document]:
        model = self._model(collection)
        with Session(self.engine) as session:
            record = session.get(model, id)
            if record is None:
                return None
            return self._to_doc(session, collection, record, depth)

    def create(self, collection: str, data: Mapping[str, Any]) -> Document:
        model = self._model(collection)
        payload = dict(data)
        self._check_fields(model, payload)
        payload.setdefault("id", new_id(ID_PREFIXES.get(collection, "")))

        with Session(self.engine) as session:
            record = model.model_validate(payload)
            session.add(record)
            session.commit()
            session.refresh(record)
            logger.debug("Created %s/%s", collection, record.id)
            return record.model_dump()

    def update(self, collection: str, id: str, data: Mapping[str, Any]) -> Document:
        """
        Apply a partial update in one transaction.

        Either every field in ``data`` is written or none is.
        """
        model = self._model(collection)
        self._check_fields(model, data)

        with Session(self.engine) as session:
            record = session.get(model, id)
            if record is None:
                raise NotFoundError(f"{collection} record {id} not found")
            for field, value in data.items():
                if field in READ_ONLY_FIELDS:
                    continue
                setattr(record, field, value)
            record.updated_at = utcnow()
            session.add(record)
            session.commit()
            session.refresh(record)
            return record.model_dump()
