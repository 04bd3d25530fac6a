"""Postgres-backed download lead repository adapter."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.ports.download_lead_repository import DownloadLeadRepository
from app.domain.entities.download_lead import DownloadLead
from app.domain.value_objects.resource_ref import ResourceKind, ResourceRef
from app.infrastructure.db import get_db_session
from app.infrastructure.logging.logger import logger

from .models import DownloadLeadModel


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite returns naive datetimes
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class PostgresDownloadLeadRepository(DownloadLeadRepository):
    """Postgres implementation of download lead repository."""

    def _model_to_entity(self, model: DownloadLeadModel) -> DownloadLead:
        """
        Convert DownloadLeadModel to DownloadLead entity.

        Args:
            model: SQLAlchemy model instance

        Returns:
            DownloadLead entity
        """
        if model.tool_id is not None:
            resource = ResourceRef(ResourceKind.TOOL, model.tool_id)
        else:
            resource = ResourceRef(ResourceKind.ARTICLE, model.article_id)

        return DownloadLead(
            id=model.id,
            name=model.name,
            email=model.email,
            phone=model.phone,
            company=model.company,
            resource=resource,
            otp_code=model.otp_code,
            otp_expires_at=_as_utc(model.otp_expires_at),
            verified=bool(model.verified),
            downloaded_at=_as_utc(model.downloaded_at),
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )

    def _apply_to_model(self, lead: DownloadLead, model: DownloadLeadModel) -> None:
        """
        Copy mutable lead state onto an existing row. Id, email, resource and
        created_at of the row are kept.

        Args:
            lead: Lead entity
            model: Existing model instance
        """
        model.name = lead.name
        model.phone = lead.phone
        model.company = lead.company
        model.otp_code = lead.otp_code
        model.otp_expires_at = lead.otp_expires_at
        model.verified = lead.verified
        if model.downloaded_at is None:
            model.downloaded_at = lead.downloaded_at
        model.updated_at = lead.updated_at or datetime.now(timezone.utc)

    def _entity_to_model(self, lead: DownloadLead) -> DownloadLeadModel:
        """
        Build a new row for a lead.

        Args:
            lead: Lead entity

        Returns:
            DownloadLeadModel instance
        """
        now = datetime.now(timezone.utc)
        return DownloadLeadModel(
            id=lead.id,
            name=lead.name,
            email=lead.email,
            phone=lead.phone,
            company=lead.company,
            tool_id=lead.resource.tool_id,
            article_id=lead.resource.article_id,
            otp_code=lead.otp_code,
            otp_expires_at=lead.otp_expires_at,
            verified=lead.verified,
            downloaded_at=lead.downloaded_at,
            created_at=lead.created_at or now,
            updated_at=lead.updated_at or now,
        )

    def _pair_query(self, db: Session, email: str, resource: ResourceRef):
        query = db.query(DownloadLeadModel).filter(DownloadLeadModel.email == email)
        if resource.kind is ResourceKind.TOOL:
            return query.filter(DownloadLeadModel.tool_id == resource.resource_id)
        return query.filter(DownloadLeadModel.article_id == resource.resource_id)

    async def get(self, lead_id: str) -> Optional[DownloadLead]:
        """
        Get a lead by id.

        Args:
            lead_id: Lead identifier

        Returns:
            Lead entity, or None if not found
        """
        db: Session = get_db_session()
        try:
            model = db.query(DownloadLeadModel).filter(DownloadLeadModel.id == lead_id).first()
            if model is None:
                return None
            return self._model_to_entity(model)
        except SQLAlchemyError as e:
            logger.error(f"Database error while getting download lead {lead_id}: {str(e)}")
            raise
        finally:
            db.close()

    async def find_by_email_and_resource(
        self, email: str, resource: ResourceRef
    ) -> Optional[DownloadLead]:
        """
        Get the lead for an (email, resource) pair.

        Args:
            email: Normalized email address
            resource: Requested resource

        Returns:
            Lead entity, or None
        """
        db: Session = get_db_session()
        try:
            model = self._pair_query(db, email, resource).first()
            if model is None:
                return None
            return self._model_to_entity(model)
        except SQLAlchemyError as e:
            logger.error(f"Database error while finding download lead for {resource}: {str(e)}")
            raise
        finally:
            db.close()

    async def find_latest_verified_by_email(self, email: str) -> Optional[DownloadLead]:
        """
        Get the most recently created verified lead for an email.

        Args:
            email: Normalized email address

        Returns:
            Lead entity, or None
        """
        db: Session = get_db_session()
        try:
            model = (
                db.query(DownloadLeadModel)
                .filter(DownloadLeadModel.email == email, DownloadLeadModel.verified.is_(True))
                .order_by(DownloadLeadModel.created_at.desc())
                .first()
            )
            if model is None:
                return None
            return self._model_to_entity(model)
        except SQLAlchemyError as e:
            logger.error(f"Database error while looking up verified leads: {str(e)}")
            raise
        finally:
            db.close()

    async def save(self, lead: DownloadLead) -> DownloadLead:
        """
        Save a lead (upsert by id).

        A new lead that collides with an existing (email, resource) row is
        applied to that row instead, so only the latest OTP cycle survives.

        Args:
            lead: Lead entity to save

        Returns:
            The persisted lead
        """
        db: Session = get_db_session()
        try:
            model = db.query(DownloadLeadModel).filter(DownloadLeadModel.id == lead.id).first()
            if model:
                self._apply_to_model(lead, model)
            else:
                model = self._entity_to_model(lead)
                db.add(model)
            db.commit()
            return self._model_to_entity(model)
        except IntegrityError as e:
            db.rollback()
            return self._merge_into_pair(db, lead, e)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while saving download lead {lead.id}: {str(e)}")
            raise
        finally:
            db.close()

    def _merge_into_pair(
        self, db: Session, lead: DownloadLead, error: IntegrityError
    ) -> DownloadLead:
        """
        Apply a lead that lost an insert race onto the winning row.

        Args:
            db: Open session (rolled back)
            lead: Lead entity whose insert failed
            error: Integrity error raised by the insert

        Returns:
            The persisted lead

        Raises:
            IntegrityError: If no row holds the lead's pair (e.g. a missing
                tool or article row)
        """
        try:
            model = self._pair_query(db, lead.email, lead.resource).first()
            if model is None:
                logger.error(
                    f"Database error while saving download lead {lead.id}: {str(error)}"
                )
                raise error
            logger.warning(
                f"Concurrent download lead insert for {lead.resource}; merged into {model.id}"
            )
            self._apply_to_model(lead, model)
            db.commit()
            return self._model_to_entity(model)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while merging download lead {lead.id}: {str(e)}")
            raise

    async def count(self, verified: Optional[bool] = None) -> int:
        """
        Count leads.

        Args:
            verified: Only count leads with this verified flag

        Returns:
            Number of leads
        """
        db: Session = get_db_session()
        try:
            query = db.query(DownloadLeadModel)
            if verified is not None:
                query = query.filter(DownloadLeadModel.verified.is_(verified))
            return query.count()
        except SQLAlchemyError as e:
            logger.error(f"Database error while counting download leads: {str(e)}")
            raise
        finally:
            db.close()

    async def delete(self, lead_id: str) -> bool:
        """
        Delete a lead.

        Args:
            lead_id: Lead identifier

        Returns:
            True if a lead was deleted
        """
        db: Session = get_db_session()
        try:
            deleted = (
                db.query(DownloadLeadModel).filter(DownloadLeadModel.id == lead_id).delete()
            )
            db.commit()
            return deleted > 0
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while deleting download lead {lead_id}: {str(e)}")
            raise
        finally:
            db.close()

    async def list(
        self,
        resource_kind: Optional[ResourceKind] = None,
        resource_id: Optional[str] = None,
        verified: Optional[bool] = None,
    ) -> list[DownloadLead]:
        """
        List leads, newest first.

        Args:
            resource_kind: Only leads for this kind of resource
            resource_id: Only leads for this resource id
            verified: Only leads with this verified flag

        Returns:
            Matching leads
        """
        db: Session = get_db_session()
        try:
            query = db.query(DownloadLeadModel)
            if resource_kind is ResourceKind.TOOL:
                query = query.filter(DownloadLeadModel.tool_id.isnot(None))
            elif resource_kind is ResourceKind.ARTICLE:
                query = query.filter(DownloadLeadModel.article_id.isnot(None))
            if resource_id is not None:
                query = query.filter(
                    (DownloadLeadModel.tool_id == resource_id)
                    | (DownloadLeadModel.article_id == resource_id)
                )
            if verified is not None:
                query = query.filter(DownloadLeadModel.verified.is_(verified))
            models = query.order_by(DownloadLeadModel.created_at.desc()).all()
            return [self._model_to_entity(model) for model in models]
        except SQLAlchemyError as e:
            logger.error(f"Database error while listing download leads: {str(e)}")
            raise
        finally:
            db.close()
