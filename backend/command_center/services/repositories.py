"""
Data access layer.

One repository per entity, bound to the request's AsyncSession. Reads go
through read_soft() and never raise; writes go through write_hard() and
raise DataServiceError (see services/outcome.py).
"""
import logging
from datetime import datetime
from typing import Any, Dict, Generic, Iterable, List, Optional, Tuple, Type, TypeVar
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from command_center.models.employer import Employer
from command_center.models.job_posting import JobPosting
from command_center.models.match import Match, MatchStatus
from command_center.models.organizer import Organizer, OrganizerRole
from command_center.models.student import Student, StudentStatus
from command_center.services.outcome import (
    DataServiceError,
    Outcome,
    RecordNotFoundError,
    read_soft,
    write_hard,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")

DEFAULT_LIST_LIMIT = 50


class EntityRepository(Generic[ModelT]):
    """
    Common get/list/create/update/delete for one table.

    Subclasses set `model`, the entity names used in log and error
    messages, and override `_base_query` when rows need related data.
    """

    model: Type[ModelT]
    entity_name: str = "record"
    plural_name: str = "records"
    email_duplicate_message: str = "A record with this email address already exists."

    def __init__(self, session: AsyncSession):
        self.session = session

    def _base_query(self):
        return select(self.model)

    def _ordering(self):
        return self.model.created_at.desc()

    async def _validate_references(self, data: Dict[str, Any]) -> None:
        """Hook for foreign-key checks before a write."""
        return None

    def _validate_row(self, row: ModelT) -> None:
        """Hook for checks on the merged row before an update is committed."""
        return None

    async def _fetch(self, record_id: UUID) -> ModelT:
        """Load one row (fresh from the database) or raise RecordNotFoundError."""
        result = await self.session.execute(
            self._base_query()
            .where(self.model.id == record_id)
            .execution_options(populate_existing=True)
        )
        row = result.scalar_one_or_none()
        if row is None:
            raise RecordNotFoundError(f"{self.entity_name.capitalize()} {record_id} not found")
        return row

    # ------------------------------------------------------------
    # Reads (fail-soft)
    # ------------------------------------------------------------

    async def list_recent_outcome(self, limit: int = DEFAULT_LIST_LIMIT) -> Outcome[List[ModelT]]:
        async def query():
            result = await self.session.execute(
                self._base_query().order_by(self._ordering()).limit(limit)
            )
            return list(result.scalars().all())

        return await read_soft(self.session, f"fetching {self.plural_name}", query, [])

    async def list_recent(self, limit: int = DEFAULT_LIST_LIMIT) -> List[ModelT]:
        """Newest rows first, at most `limit`. Empty list when the query fails."""
        return (await self.list_recent_outcome(limit)).value

    async def list_by_status_outcome(self, status: Any) -> Outcome[List[ModelT]]:
        async def query():
            result = await self.session.execute(
                self._base_query()
                .where(self.model.status == status)
                .order_by(self._ordering())
            )
            return list(result.scalars().all())

        return await read_soft(self.session, f"fetching {self.plural_name} by status", query, [])

    async def list_by_status(self, status: Any) -> List[ModelT]:
        return (await self.list_by_status_outcome(status)).value

    async def get(self, record_id: UUID) -> Optional[ModelT]:
        """Row by id, or None when missing or when the query fails."""
        async def query():
            result = await self.session.execute(
                self._base_query().where(self.model.id == record_id)
            )
            return result.scalar_one_or_none()

        return (await read_soft(self.session, f"fetching {self.entity_name} {record_id}", query, None)).value

    # ------------------------------------------------------------
    # Writes (fail-hard)
    # ------------------------------------------------------------

    async def _write(self, label: str, operation) -> Any:
        outcome = await write_hard(
            self.session,
            label,
            operation,
            entity=self.entity_name,
            email_duplicate_message=self.email_duplicate_message,
        )
        return outcome.unwrap()

    async def create(self, data: Dict[str, Any]) -> ModelT:
        """Insert one row and return it as stored."""
        async def operation():
            await self._validate_references(data)
            row = self.model(**data)
            self.session.add(row)
            await self.session.commit()
            logger.info(f"Created {self.entity_name} {row.id}")
            return await self._fetch(row.id)

        return await self._write(f"create {self.entity_name}", operation)

    async def update(self, record_id: UUID, data: Dict[str, Any]) -> ModelT:
        """Apply `data` to the row matched by id and return the updated row."""
        async def operation():
            row = await self._fetch(record_id)
            await self._validate_references(data)
            for field, value in data.items():
                setattr(row, field, value)
            self._validate_row(row)
            if hasattr(self.model, "last_activity"):
                row.last_activity = datetime.utcnow()
            await self.session.commit()
            logger.info(f"Updated {self.entity_name} {record_id}: {sorted(data)}")
            return await self._fetch(record_id)

        return await self._write(f"update {self.entity_name}", operation)

    async def update_status(self, record_id: UUID, status: Any) -> ModelT:
        return await self.update(record_id, {"status": status})

    async def delete(self, record_id: UUID) -> None:
        async def operation():
            row = await self._fetch(record_id)
            await self.session.delete(row)
            await self.session.commit()
            logger.info(f"Deleted {self.entity_name} {record_id}")

        await self._write(f"delete {self.entity_name}", operation)


class StudentRepository(EntityRepository[Student]):
    model = Student
    entity_name = "student"
    plural_name = "students"
    email_duplicate_message = (
        "A student with this email address already exists. Please use a different email address."
    )

    async def bulk_update_status(self, ids: Iterable[UUID], status: StudentStatus) -> int:
        """Set one status on many students. Returns the number of rows changed."""
        ids = list(ids)

        async def operation():
            now = datetime.utcnow()
            result = await self.session.execute(
                update(Student)
                .where(Student.id.in_(ids))
                .values(status=status, updated_at=now, last_activity=now)
                .execution_options(synchronize_session=False)
            )
            await self.session.commit()
            logger.info(f"Bulk updated {result.rowcount} students to {status.value}")
            return result.rowcount

        return await self._write("bulk update student status", operation)


class EmployerRepository(EntityRepository[Employer]):
    model = Employer
    entity_name = "employer"
    plural_name = "employers"
    email_duplicate_message = (
        "An employer with this email address already exists. Please use a different email address."
    )


class JobPostingRepository(EntityRepository[JobPosting]):
    model = JobPosting
    entity_name = "job posting"
    plural_name = "job postings"

    def _base_query(self):
        return select(JobPosting).options(selectinload(JobPosting.employer))

    async def _validate_references(self, data: Dict[str, Any]) -> None:
        employer_id = data.get("employer_id")
        if employer_id is None:
            return
        if await self.session.get(Employer, employer_id) is None:
            raise DataServiceError("Invalid reference data. Please check your input and try again.")

    def _validate_row(self, row: JobPosting) -> None:
        if row.salary_min is not None and row.salary_max is not None and row.salary_min > row.salary_max:
            raise DataServiceError("Minimum salary cannot be greater than maximum salary.")


class MatchRepository(EntityRepository[Match]):
    model = Match
    entity_name = "match"
    plural_name = "matches"

    def _base_query(self):
        return select(Match).options(
            selectinload(Match.student),
            selectinload(Match.employer),
            selectinload(Match.job_posting),
        )

    def _ordering(self):
        return Match.match_score.desc()

    async def upsert_many(self, candidates: List[Tuple[UUID, UUID, Optional[UUID], float]]) -> List[Match]:
        """
        Insert or refresh (student, employer, job) matches in one transaction.

        Existing matches keep their status; only score and activity change.
        """
        async def operation():
            now = datetime.utcnow()
            touched_ids = []
            for student_id, employer_id, job_posting_id, score in candidates:
                result = await self.session.execute(
                    select(Match).where(
                        Match.student_id == student_id,
                        Match.employer_id == employer_id,
                        Match.job_posting_id == job_posting_id,
                    )
                )
                match = result.scalar_one_or_none()
                if match is None:
                    match = Match(
                        student_id=student_id,
                        employer_id=employer_id,
                        job_posting_id=job_posting_id,
                        match_score=score,
                        status=MatchStatus.SUGGESTED,
                    )
                    self.session.add(match)
                    await self.session.flush()
                else:
                    match.match_score = score
                    match.last_activity = now
                touched_ids.append(match.id)

            await self.session.commit()
            if not touched_ids:
                return []
            result = await self.session.execute(
                self._base_query()
                .where(Match.id.in_(touched_ids))
                .order_by(self._ordering())
                .execution_options(populate_existing=True)
            )
            return list(result.scalars().all())

        return await self._write("upsert matches", operation)


class OrganizerRepository(EntityRepository[Organizer]):
    model = Organizer
    entity_name = "organizer"
    plural_name = "organizers"
    email_duplicate_message = "An organizer with this email address already exists."

    async def get_active_by_auth_user(self, auth_user_id: UUID) -> Optional[Organizer]:
        """Active organizer linked to an auth identity, or None (also on query failure)."""
        async def query():
            result = await self.session.execute(
                select(Organizer).where(
                    Organizer.auth_user_id == auth_user_id,
                    Organizer.is_active.is_(True),
                )
            )
            return result.scalar_one_or_none()

        return (await read_soft(self.session, f"looking up organizer for {auth_user_id}", query, None)).value

    async def get_by_email(self, email: str) -> Optional[Organizer]:
        async def query():
            result = await self.session.execute(select(Organizer).where(Organizer.email == email))
            return result.scalar_one_or_none()

        return (await read_soft(self.session, f"looking up organizer {email}", query, None)).value

    async def update_role(self, organizer_id: UUID, role: OrganizerRole) -> Organizer:
        return await self.update(organizer_id, {"role": role})

    async def deactivate(self, organizer_id: UUID) -> Organizer:
        return await self.update(organizer_id, {"is_active": False})

    async def touch_last_login(self, organizer_id: UUID) -> None:
        """Record a sign-in. Failures are logged, never raised."""
        async def operation():
            row = await self._fetch(organizer_id)
            row.last_login = datetime.utcnow()
            await self.session.commit()

        outcome = await write_hard(self.session, "update last login", operation, entity=self.entity_name)
        if outcome.is_failed:
            logger.warning(f"Could not record last login for organizer {organizer_id}: {outcome.error}")
