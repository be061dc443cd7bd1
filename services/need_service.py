"""
services/need_service.py
------------------------
Application-facing operations on needs.
Wraps the NeedRepository and turns domain errors into
display-ready results for whichever handler sits on top.
"""

from typing import Optional

from models.need import Need, NeedImage
from repositories.exceptions import InfrastructureError, NotFoundError, ValidationError
from repositories.need_repo import NeedRepository
from utils.logger import get_logger

logger = get_logger(__name__)


class NeedService:
    """
    Handles the use cases around an organization's needs.

    Every method returns a dict:
        - {"success": True, ...payload} when the operation went through.
        - {"success": False, "message": str} when the input was rejected
          or a referenced row does not exist.

    Database failures are logged and re-raised.
    """

    def __init__(self, repo: Optional[NeedRepository] = None):
        self.repo = repo if repo is not None else NeedRepository()

    def get_need(self, need_id: int) -> dict:
        """
        Fetch a need with everything embedded.

        A missing need gets its own message; a need whose category or
        organization row is gone reports that lookup instead.
        """
        try:
            need = self.repo.get(need_id)
        except NotFoundError as e:
            if e.entity == "need":
                return {"success": False, "message": f"Necessidade #{need_id} não encontrada."}
            logger.warning(f"Need #{need_id} references a missing {e.entity}: {e.message}")
            return {"success": False, "message": e.message}
        except InfrastructureError as e:
            logger.error(f"Failed to load need #{need_id}: {e.message}")
            raise
        return {"success": True, "need": need}

    def create_need(self, need: Need) -> dict:
        """Create a need; the result carries the stored Need with its new id."""
        return self._write(self.repo.create, need, "criada")

    def update_need(self, need: Need) -> dict:
        return self._write(self.repo.update, need, "atualizada")

    def list_organization_needs(self, organization_id: int,
                                order_by: str = "", order: str = "") -> dict:
        """
        List the needs of an organization.

        Args:
            organization_id: Owning organization.
            order_by: Optional sort column ('id', 'updated_at'; others mean creation time).
            order: Optional direction, 'asc' or 'desc'.
        """
        try:
            needs = self.repo.get_organization_needs(organization_id, order_by, order)
        except (ValidationError, NotFoundError) as e:
            logger.warning(f"Rejected listing for organization {organization_id}: {e.message}")
            return {"success": False, "message": e.message}
        except InfrastructureError as e:
            logger.error(f"Failed to list needs of organization {organization_id}: {e.message}")
            raise
        return {"success": True, "needs": needs}

    def add_image(self, need_id: int, url: str, name: Optional[str] = None) -> dict:
        try:
            image = self.repo.create_image(NeedImage(need_id=need_id, url=url, name=name))
        except InfrastructureError as e:
            logger.error(f"Failed to add image to need #{need_id}: {e.message}")
            raise
        return {"success": True, "image": image, "message": f"Imagem #{image.id} adicionada."}

    def remove_image(self, need_id: int, image_id: int) -> dict:
        """Remove an image; removing one that is not there still succeeds."""
        try:
            deleted = self.repo.delete_image(image_id, need_id)
        except InfrastructureError as e:
            logger.error(f"Failed to remove image #{image_id} of need #{need_id}: {e.message}")
            raise
        if deleted:
            return {"success": True, "message": f"Imagem #{image_id} removida."}
        return {"success": True, "message": f"Imagem #{image_id} já não existia."}

    # ── HELPERS ───────────────────────────────────────────

    def _write(self, operation, need: Need, verb: str) -> dict:
        try:
            saved = operation(need)
        except (ValidationError, NotFoundError) as e:
            logger.warning(f"Rejected need '{need.title}': {e.message}")
            return {"success": False, "message": e.message}
        except InfrastructureError as e:
            logger.error(f"Failed to save need '{need.title}': {e.message}")
            raise
        return {"success": True, "need": saved, "message": f"Necessidade #{saved.id} {verb}."}
