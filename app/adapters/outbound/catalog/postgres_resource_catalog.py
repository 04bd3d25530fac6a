"""Postgres-backed resource catalog adapter."""

from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.dtos.resource import DownloadableResource
from app.application.ports.resource_catalog import ResourceCatalog
from app.domain.value_objects.resource_ref import ResourceKind, ResourceRef
from app.infrastructure.db import get_db_session
from app.infrastructure.logging.logger import logger

from .models import ArticleModel, ToolModel


class PostgresResourceCatalog(ResourceCatalog):
    """Reads tools and articles from the admin console tables."""

    def _model_for(self, ref: ResourceRef):
        return ToolModel if ref.kind is ResourceKind.TOOL else ArticleModel

    def _model_to_dto(self, ref: ResourceRef, model) -> DownloadableResource:
        """
        Convert a tool or article row to a resource DTO.

        Args:
            ref: Resource reference the row was loaded for
            model: ToolModel or ArticleModel instance

        Returns:
            Resource DTO
        """
        if ref.kind is ResourceKind.TOOL:
            name, file_path = model.name, model.download_url
        else:
            name, file_path = model.title, model.file_path
        return DownloadableResource(
            resource_kind=ref.kind,
            resource_id=model.id,
            name=name,
            file_path=file_path,
            is_active=bool(model.is_active),
            download_count=model.download_count or 0,
        )

    async def get(self, ref: ResourceRef) -> Optional[DownloadableResource]:
        """
        Look up a tool or article by id.

        Args:
            ref: Resource reference

        Returns:
            Resource DTO, or None if not found
        """
        db: Session = get_db_session()
        try:
            model_cls = self._model_for(ref)
            model = db.query(model_cls).filter(model_cls.id == ref.resource_id).first()
            if model is None:
                return None
            return self._model_to_dto(ref, model)
        except SQLAlchemyError as e:
            logger.error(f"Database error while getting resource {ref}: {str(e)}")
            raise
        finally:
            db.close()

    async def record_download(self, ref: ResourceRef) -> None:
        """
        Increment the download counter in the database.

        Args:
            ref: Resource reference
        """
        db: Session = get_db_session()
        try:
            model_cls = self._model_for(ref)
            db.query(model_cls).filter(model_cls.id == ref.resource_id).update(
                {model_cls.download_count: model_cls.download_count + 1},
                synchronize_session=False,
            )
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error while recording download for {ref}: {str(e)}")
            raise
        finally:
            db.close()
