"""Assignment of meal plans to users."""

import logging

from admin_console.errors import MutationError, StoreError, ValidationError
from admin_console.services.store import USER_MEAL_PLANS, RemoteStore

logger = logging.getLogger(__name__)


class AssignmentService:
    """Creates, replaces and removes the single active plan of a user."""

    def __init__(self, store: RemoteStore):
        self.store = store

    async def assign(self, user_id: str, plan_id: str) -> None:
        """Make plan_id the user's active plan.

        The write is an upsert keyed on user_id, so an existing assignment is
        overwritten rather than duplicated.
        """
        self._require_keys(user_id, plan_id)
        try:
            await self.store.upsert(
                USER_MEAL_PLANS,
                {"user_id": user_id, "plan_id": plan_id},
                on_conflict="user_id",
            )
        except StoreError as e:
            logger.warning(f"Assigning plan {plan_id} to user {user_id} failed: {e.message}")
            raise MutationError.from_store_error(e) from e
        logger.info(f"Assigned plan {plan_id} to user {user_id}")

    async def revoke(self, user_id: str, plan_id: str) -> int:
        """Remove the assignment matching both keys. Removing nothing is not an error."""
        self._require_keys(user_id, plan_id)
        try:
            removed = await self.store.delete(
                USER_MEAL_PLANS, {"user_id": user_id, "plan_id": plan_id}
            )
        except StoreError as e:
            logger.warning(f"Revoking plan {plan_id} from user {user_id} failed: {e.message}")
            raise MutationError.from_store_error(e) from e
        logger.info(f"Revoked plan {plan_id} from user {user_id} ({removed} row(s))")
        return removed

    @staticmethod
    def _require_keys(user_id: str, plan_id: str) -> None:
        errors = {}
        if not user_id:
            errors["user_id"] = "is required"
        if not plan_id:
            errors["plan_id"] = "is required"
        if errors:
            raise ValidationError(errors)
