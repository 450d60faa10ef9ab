"""Local cache of the signed-in user's profile."""
from typing import Optional

from pydantic import BaseModel, ConfigDict

from foodcart.cart import CartLedger
from foodcart.errors import PersistenceError
from foodcart.logging import get_logger, sanitize_id_for_logging
from foodcart.storage import KeyValueStore, StorageKeys

logger = get_logger(__name__)


class UserProfile(BaseModel):
    """Profile supplied by the identity provider."""
    model_config = ConfigDict(extra="ignore")

    uid: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    photo_url: Optional[str] = None
    is_local_only: bool = False


class SessionCache:
    """
    Keeps basic profile fields in the store so the app can show the user
    before the identity provider has answered.
    """

    def __init__(self, store: KeyValueStore):
        self._store = store

    async def remember(self, profile: UserProfile) -> None:
        await self._store.set(StorageKeys.USER_NAME, profile.name)
        await self._store.set(StorageKeys.USER_EMAIL, profile.email)
        await self._store.set(StorageKeys.USER_PHONE, profile.phone)
        if profile.photo_url:
            await self._store.set(StorageKeys.USER_PHOTO_URL, profile.photo_url)
        await self._store.set(StorageKeys.IS_LOGGED_IN, True)

    async def forget(self) -> None:
        for key in StorageKeys.SESSION_KEYS:
            await self._store.remove(key)

    async def cached_profile(self) -> Optional[UserProfile]:
        """Profile rebuilt from the store, marked local-only."""
        if await self._store.get(StorageKeys.IS_LOGGED_IN) is not True:
            return None

        email = await self._store.get(StorageKeys.USER_EMAIL)
        if not email:
            return None

        return UserProfile(
            email=email,
            name=await self._store.get(StorageKeys.USER_NAME),
            phone=await self._store.get(StorageKeys.USER_PHONE),
            photo_url=await self._store.get(StorageKeys.USER_PHOTO_URL),
            is_local_only=True,
        )

    async def on_identity_change(self, profile: Optional[UserProfile], ledger: CartLedger) -> None:
        """
        React to the identity provider's session change.

        Signing out forgets the cached profile and empties the cart.
        """
        if profile is not None:
            logger.info(f"Signed in: {sanitize_id_for_logging(profile.uid)}")
            await self.remember(profile)
            return

        logger.info("Signed out, clearing session cache and cart")
        await self.forget()
        try:
            await ledger.clear()
        except PersistenceError:
            logger.warning("Cart cleared in memory but not persisted after sign-out")
