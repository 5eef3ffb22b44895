"""
Noteful Backend: Document Store Adapter
=======================================

What:  A per-collection facade with Mongo-style queries over async SQLAlchemy.
How:   Filters and updates are plain dicts using a small Mongo operator subset,
       compiled into SQLAlchemy clauses against the collection's model.
Who:   Services build one Collection per model per request, on the request's
       session, so every call in a request shares one transaction.

Operations:
    find(filter, sort)                  → list of documents
    find_one(filter, sort)              → document or None
    find_by_id(id)                      → document or None
    count(filter)                       → int
    create(fields)                      → new document
    find_by_id_and_update(id, update)   → updated document or None
    find_by_id_and_remove(id)           → removed document or None
    update_many(filter, update)         → number of documents modified

Filter language:
    {"name": "x"}                       equality (None → IS NULL)
    {"name": {"$ne": "x"}}              $eq / $ne / $in / $nin
    {"title": {"$regex": "gaga", "$options": "i"}}
    {"$or": [{...}, {...}]}             any sub-filter ($and likewise)
    {"tags": tag_id}                    array membership (relationship field)
    {"tags": {"$in": [id, ...]}}        membership of any of the ids

Update language:
    {"name": "x"}                       shorthand for {"$set": {"name": "x"}}
    {"$set": {"folder_id": None}}       assign fields (arrays take id lists)
    {"$pull": {"tags": tag_id}}         remove ids from an array field

Errors:
    A unique-constraint violation raises DuplicateKeyError (code 11000).
    Anything else the database raises propagates unchanged.
"""

import logging
from typing import Any, Dict, Generic, Iterable, List, Mapping, Optional, Type, TypeVar

from sqlalchemy import and_, asc, desc, func, or_, select, true
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import RelationshipProperty
from sqlalchemy.sql.elements import ColumnElement

from noteful.database import Base, utcnow
from noteful.identifiers import is_valid_id, new_id, normalize_id

logger = logging.getLogger(__name__)

DocT = TypeVar("DocT", bound=Base)

# Fields the store owns; callers cannot assign them
_PROTECTED_FIELDS = {"id", "created_at", "updated_at"}


class DuplicateKeyError(Exception):
    """
    A write collided with a unique index.

    Carries the same numeric code MongoDB uses for this condition so callers
    can test `err.code == DuplicateKeyError.code`.
    """

    code = 11000

    def __init__(self, collection: str, detail: str = ""):
        self.collection = collection
        self.detail = detail
        super().__init__(f"E{self.code} duplicate key error collection: {collection} {detail}".strip())


def _is_unique_violation(exc: IntegrityError) -> bool:
    """Recognize unique violations from both PostgreSQL and SQLite."""
    orig = exc.orig
    if getattr(orig, "sqlstate", None) == "23505" or getattr(orig, "pgcode", None) == "23505":
        return True
    text = str(orig)
    return "UNIQUE constraint failed" in text or "duplicate key value" in text


class Collection(Generic[DocT]):
    """
    Mongo-style access to one model's table.

    Array fields are the model's many-to-many relationships (e.g. Note.tags);
    in filters and updates they are addressed by the related documents' ids.
    """

    def __init__(self, session: AsyncSession, model: Type[DocT]):
        self.session = session
        self.model = model
        self.name = model.__tablename__
        mapper = model.__mapper__
        self._columns = {attr.key for attr in mapper.column_attrs}
        self._arrays: Dict[str, RelationshipProperty] = {
            rel.key: rel for rel in mapper.relationships if rel.secondary is not None
        }

    # ══════════════════════════════════════════════════════════════════════
    # Reads
    # ══════════════════════════════════════════════════════════════════════

    async def find(
        self,
        filter: Optional[Mapping[str, Any]] = None,
        sort: Optional[Mapping[str, Any]] = None,
    ) -> List[DocT]:
        stmt = select(self.model).where(*self._compile(filter or {}))
        stmt = stmt.order_by(*self._order_by(sort or {}))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_one(
        self,
        filter: Optional[Mapping[str, Any]] = None,
        sort: Optional[Mapping[str, Any]] = None,
    ) -> Optional[DocT]:
        stmt = select(self.model).where(*self._compile(filter or {}))
        stmt = stmt.order_by(*self._order_by(sort or {})).limit(1)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def find_by_id(self, doc_id: str) -> Optional[DocT]:
        """Malformed ids match nothing; callers that must 400 check first."""
        if not is_valid_id(doc_id):
            return None
        return await self.session.get(self.model, normalize_id(doc_id))

    async def count(self, filter: Optional[Mapping[str, Any]] = None) -> int:
        stmt = select(func.count()).select_from(self.model).where(*self._compile(filter or {}))
        result = await self.session.execute(stmt)
        return result.scalar_one()

    # ══════════════════════════════════════════════════════════════════════
    # Writes
    # ══════════════════════════════════════════════════════════════════════

    async def create(self, fields: Mapping[str, Any]) -> DocT:
        now = utcnow()
        doc = self.model(id=new_id(), created_at=now, updated_at=now)
        await self._set(doc, fields)
        self.session.add(doc)
        await self._flush()
        logger.debug("Inserted %s/%s", self.name, doc.id)
        return doc

    async def find_by_id_and_update(self, doc_id: str, update: Mapping[str, Any]) -> Optional[DocT]:
        """Apply `update` and return the document as it is afterwards."""
        doc = await self.find_by_id(doc_id)
        if doc is None:
            return None
        await self._apply(doc, update)
        await self._flush()
        return doc

    async def find_by_id_and_remove(self, doc_id: str) -> Optional[DocT]:
        doc = await self.find_by_id(doc_id)
        if doc is None:
            return None
        await self.session.delete(doc)
        await self._flush()
        logger.debug("Removed %s/%s", self.name, doc.id)
        return doc

    async def update_many(self, filter: Mapping[str, Any], update: Mapping[str, Any]) -> int:
        docs = await self.find(filter)
        for doc in docs:
            await self._apply(doc, update)
        if docs:
            await self._flush()
        return len(docs)

    # ══════════════════════════════════════════════════════════════════════
    # Update application
    # ══════════════════════════════════════════════════════════════════════

    async def _apply(self, doc: DocT, update: Mapping[str, Any]) -> None:
        operators = {key for key in update if key.startswith("$")}
        if operators and len(operators) != len(update):
            raise ValueError("Cannot mix update operators with plain fields")
        if not operators:
            update = {"$set": update}

        for op, fields in update.items():
            if op == "$set":
                await self._set(doc, fields)
            elif op == "$pull":
                self._pull(doc, fields)
            else:
                raise ValueError(f"Unsupported update operator {op!r}")
        doc.updated_at = utcnow()

    async def _set(self, doc: DocT, fields: Mapping[str, Any]) -> None:
        for key, value in fields.items():
            if key in _PROTECTED_FIELDS:
                raise ValueError(f"Field {key!r} is managed by the store")
            if key in self._arrays:
                setattr(doc, key, await self._resolve(self._arrays[key], value or []))
            elif key in self._columns:
                setattr(doc, key, value)
            else:
                raise ValueError(f"Unknown field {key!r} on {self.name}")

    def _pull(self, doc: DocT, fields: Mapping[str, Any]) -> None:
        for key, value in fields.items():
            if key not in self._arrays:
                raise ValueError(f"$pull needs an array field, got {key!r}")
            if isinstance(value, Mapping):
                ids = {normalize_id(v) for v in value.get("$in", [])}
            else:
                ids = {normalize_id(value)}
            collection = getattr(doc, key)
            for item in [item for item in collection if item.id in ids]:
                collection.remove(item)

    async def _resolve(self, rel: RelationshipProperty, ids: Iterable[str]) -> List[Any]:
        """Load the related documents for a list of ids, keeping input order."""
        wanted = [normalize_id(i) for i in ids if is_valid_id(i)]
        if not wanted:
            return []
        target = rel.mapper.class_
        result = await self.session.execute(select(target).where(target.id.in_(wanted)))
        found = {item.id: item for item in result.scalars().all()}
        ordered = []
        for doc_id in dict.fromkeys(wanted):
            if doc_id in found:
                ordered.append(found[doc_id])
        return ordered

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except IntegrityError as exc:
            if _is_unique_violation(exc):
                raise DuplicateKeyError(self.name, str(exc.orig)) from exc
            raise

    # ══════════════════════════════════════════════════════════════════════
    # Filter compilation
    # ══════════════════════════════════════════════════════════════════════

    def _compile(self, filter: Mapping[str, Any]) -> List[ColumnElement]:
        clauses: List[ColumnElement] = []
        for key, value in filter.items():
            if key == "$or":
                clauses.append(or_(*[self._all(sub) for sub in value]))
            elif key == "$and":
                clauses.append(and_(*[self._all(sub) for sub in value]))
            elif key in self._arrays:
                clauses.append(self._array_clause(key, value))
            else:
                clauses.append(self._field_clause(key, value))
        return clauses

    def _all(self, filter: Mapping[str, Any]) -> ColumnElement:
        clauses = self._compile(filter)
        return and_(*clauses) if clauses else true()

    def _column(self, key: str):
        if key not in self._columns:
            raise ValueError(f"Unknown field {key!r} on {self.name}")
        return getattr(self.model, key)

    def _field_clause(self, key: str, value: Any) -> ColumnElement:
        column = self._column(key)
        if not isinstance(value, Mapping):
            return column.is_(None) if value is None else column == value

        clauses = []
        for op, operand in value.items():
            if op == "$eq":
                clauses.append(column.is_(None) if operand is None else column == operand)
            elif op == "$ne":
                clauses.append(column.is_not(None) if operand is None else column != operand)
            elif op == "$in":
                clauses.append(column.in_(list(operand)))
            elif op == "$nin":
                clauses.append(column.not_in(list(operand)))
            elif op == "$regex":
                clauses.append(self._regex(column, operand, value.get("$options", "")))
            elif op == "$options":
                continue
            else:
                raise ValueError(f"Unsupported query operator {op!r}")
        return and_(*clauses)

    @staticmethod
    def _regex(column, pattern: str, options: str) -> ColumnElement:
        # Only case-insensitivity is portable; it is embedded as (?i), which
        # both PostgreSQL AREs and Python's re (SQLite REGEXP) understand
        unknown = set(options) - {"i"}
        if unknown:
            raise ValueError(f"Unsupported $regex options: {''.join(sorted(unknown))}")
        if "i" in options:
            pattern = "(?i)" + pattern
        return column.regexp_match(pattern)

    def _array_clause(self, key: str, value: Any) -> ColumnElement:
        relationship_attr = getattr(self.model, key)
        target = self._arrays[key].mapper.class_

        if not isinstance(value, Mapping):
            return relationship_attr.any(target.id == normalize_id(str(value)))

        clauses = []
        for op, operand in value.items():
            ids = [normalize_id(str(v)) for v in (operand if op in ("$in", "$nin") else [operand])]
            if op in ("$eq", "$in"):
                clauses.append(relationship_attr.any(target.id.in_(ids)))
            elif op in ("$ne", "$nin"):
                clauses.append(~relationship_attr.any(target.id.in_(ids)))
            else:
                raise ValueError(f"Unsupported array operator {op!r}")
        return and_(*clauses)

    def _order_by(self, sort: Mapping[str, Any]) -> List[ColumnElement]:
        order = []
        for key, direction in sort.items():
            column = self._column(key)
            descending = direction in (-1, "desc", "descending")
            order.append(desc(column) if descending else asc(column))
        return order
